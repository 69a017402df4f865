import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from compliance import (
    ComplianceEngine,
    ComplianceContext,
    InvalidWeekStartError,
    LoggingViolationSink,
    UnknownRulesetError,
    ViolationSeverity,
    get_ruleset,
)
from config import CORS_ORIGINS, apply_env_overrides, get_active_rules, setup_logging
from schemas import (
    ComplianceRulesSchema,
    ValidateScheduleRequest,
    ValidateScheduleResponse,
)
from utils.time import utc_now

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    rules = get_active_rules()
    logger.info(f"Compliance ruleset {rules.jurisdiction} v{rules.version} loaded")
    yield


app = FastAPI(title="laborCompliance", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def resolve_rules(ruleset: str | None):
    if ruleset is None:
        return get_active_rules()
    try:
        return apply_env_overrides(get_ruleset(ruleset))
    except UnknownRulesetError as e:
        raise HTTPException(status_code=404, detail=str(e.args[0]))


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/compliance/rules", response_model=ComplianceRulesSchema)
async def get_rules() -> ComplianceRulesSchema:
    return ComplianceRulesSchema(**get_active_rules().to_dict())


@app.get("/compliance/rules/{name}", response_model=ComplianceRulesSchema)
async def get_named_rules(name: str) -> ComplianceRulesSchema:
    return ComplianceRulesSchema(**resolve_rules(name).to_dict())


@app.post("/compliance/validate", response_model=ValidateScheduleResponse)
async def validate_schedule(
    request: ValidateScheduleRequest,
    severity: ViolationSeverity | None = None,
) -> ValidateScheduleResponse:
    """
    Validate one week of shifts against the labor law rule table.

    The optional severity query parameter filters the flat violation list;
    per-employee analyses always carry every violation.
    """
    rules = resolve_rules(request.ruleset)
    context = ComplianceContext(
        rules=rules,
        employees=[e.to_domain() for e in request.employees],
        shifts=[s.to_domain() for s in request.shifts],
        week_start=request.week_start_date,
    )

    try:
        result = ComplianceEngine(rules=rules, sink=LoggingViolationSink()).validate(context)
    except InvalidWeekStartError as e:
        raise HTTPException(status_code=400, detail=str(e))

    payload = result.to_dict()
    if severity is not None:
        payload["violations"] = [
            v.to_dict() for v in result.get_violations_by_severity(severity)
        ]

    return ValidateScheduleResponse(generated_at=utc_now().isoformat(), **payload)
