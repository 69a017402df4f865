import logging
import os
from dotenv import load_dotenv

from compliance.rules import get_ruleset
from compliance.types import ComplianceRules

load_dotenv()

COMPLIANCE_RULESET = os.getenv("COMPLIANCE_RULESET", "FR_CHR")
OVERNIGHT_CUTOFF_HOUR = os.getenv("OVERNIGHT_CUTOFF_HOUR")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))

_logging_configured = False


def setup_logging():
    global _logging_configured
    if _logging_configured:
        return

    logger = logging.getLogger()
    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        console = logging.StreamHandler()
        console.setLevel(LOG_LEVEL.upper())
        console.setFormatter(logging.Formatter('%(name)-12s: %(levelname)-8s %(message)s'))
        logger.addHandler(console)

    _logging_configured = True


def get_active_rules() -> ComplianceRules:
    """Resolve the configured rule table, applying the overnight cutoff override."""
    try:
        rules = get_ruleset(COMPLIANCE_RULESET)
    except KeyError as e:
        raise RuntimeError(
            f"Invalid COMPLIANCE_RULESET '{COMPLIANCE_RULESET}'. Please set it in your .env file."
        ) from e

    return apply_env_overrides(rules)


def apply_env_overrides(rules: ComplianceRules) -> ComplianceRules:
    if OVERNIGHT_CUTOFF_HOUR:
        cutoff = int(OVERNIGHT_CUTOFF_HOUR)
        if not 0 <= cutoff <= 23:
            raise RuntimeError(f"OVERNIGHT_CUTOFF_HOUR must be between 0 and 23, got {cutoff}")
        rules = rules.with_overrides(overnight_cutoff_hour=cutoff)

    return rules
