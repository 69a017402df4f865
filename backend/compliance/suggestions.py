"""Generic remediation tips keyed by violation type."""

from .types import ComplianceRules, LaborLawViolation, ViolationType


def _tips(rules: ComplianceRules) -> dict[ViolationType, str]:
    # Insertion order is the order tips are returned in.
    return {
        ViolationType.CONTRACT_PERIOD: (
            "Conseil contrat : Ne planifier des services qu'entre les dates de début et de fin du contrat"
        ),
        ViolationType.DAILY_REST: (
            f"Conseil repos quotidien : Respecter {rules.min_daily_rest_hours:g}h de repos entre la fin "
            "d'une journée de travail et le début de la suivante"
        ),
        ViolationType.COUPURE_VIOLATION: (
            f"Conseil coupures : Les pauses entre services doivent durer au moins "
            f"{rules.min_coupure_minutes}min selon la convention CHR"
        ),
        ViolationType.WEEKLY_REST: (
            f"Conseil repos hebdomadaire : Planifier {rules.min_weekly_rest_hours:g}h de repos consécutives, "
            "idéalement du samedi soir au lundi matin"
        ),
        ViolationType.MAX_DAILY_HOURS: (
            f"Conseil heures quotidiennes : Limiter à {rules.max_daily_hours:g}h/jour "
            "ou demander une dérogation préfectorale"
        ),
        ViolationType.MAX_WEEKLY_HOURS: (
            f"Conseil heures hebdomadaires : Respecter {rules.max_weekly_hours:g}h maximum "
            "ou étaler sur plusieurs semaines"
        ),
        ViolationType.CONSECUTIVE_DAYS: (
            f"Conseil jours consécutifs : Ne pas dépasser {rules.max_consecutive_working_days} "
            "jours de travail d'affilée"
        ),
    }


def generate_suggestions(violations: list[LaborLawViolation], rules: ComplianceRules) -> list[str]:
    """One tip per violation type present, never one per violation."""
    present = {v.type for v in violations}
    return [tip for vtype, tip in _tips(rules).items() if vtype in present]
