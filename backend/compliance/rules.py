"""Named, versioned rule tables."""

from .types import ComplianceRules

DEFAULT_RULESET = "FR_CHR"

FR_CHR_RULES = ComplianceRules(jurisdiction=DEFAULT_RULESET, version="2024.1")

RULESETS: dict[str, ComplianceRules] = {
    DEFAULT_RULESET: FR_CHR_RULES,
}


class UnknownRulesetError(KeyError):
    """Raised when a ruleset name is not registered."""


def get_ruleset(name: str | None = None) -> ComplianceRules:
    """
    Look up a rule table by name.

    Args:
        name: Registered ruleset name (case-insensitive), or None for the default

    Raises:
        UnknownRulesetError: If no ruleset is registered under that name
    """
    key = (name or DEFAULT_RULESET).upper()
    try:
        return RULESETS[key]
    except KeyError:
        raise UnknownRulesetError(
            f"Unknown ruleset: {name}. Available: {', '.join(sorted(RULESETS))}"
        ) from None


def register_ruleset(name: str, rules: ComplianceRules) -> None:
    """Register (or replace) a rule table under a name."""
    RULESETS[name.upper()] = rules
