"""Viability assessment - deterministic checks against UK civil procedure rules"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from claims_gateway.domain.models import (
    AssessmentResult,
    CheckResult,
    ClaimRecord,
    SolvencyStatus,
)
from claims_gateway.domain.rules import DEFAULT_RULES, LegalRules
from claims_gateway.utils.date_utils import add_years

DISSOLVED_MESSAGE = (
    "Defendant company is Dissolved. It no longer exists as a legal entity, so it is "
    "legally impossible to pursue or recover this debt from it."
)
INSOLVENT_MESSAGE = (
    "Warning: Defendant is Insolvent. A claim is still possible, but recovery is "
    "highly unlikely even if you win judgment."
)
SOLVENT_MESSAGE = "Defendant appears to be an active entity."

RECOMMEND_VIABLE = "Claim appears legally viable for the Small Claims Track."
RECOMMEND_TOO_OLD = "Do not proceed. The claim is too old."
RECOMMEND_DISSOLVED = "Do not proceed. The defendant no longer exists."
RECOMMEND_INSOLVENT = "Proceed only with caution. The defendant is unlikely to be able to pay."
RECOMMEND_OVER_LIMIT = "Proceed with caution. Seek legal advice as this exceeds small claims limits."


def _format_gbp(amount: Decimal) -> str:
    return f"£{amount:,.2f}"


def check_limitation(claim: ClaimRecord, today: date, rules: LegalRules = DEFAULT_RULES) -> CheckResult:
    """
    Limitation Act 1980: contract debts become unenforceable six years after
    the cause of action, i.e. after payment fell due.
    """
    start = claim.invoice.payment_due(rules.default_payment_terms_days)
    years = rules.limitation_period_years

    if start is None:
        return CheckResult(
            passed=True,
            message=(
                f"Limitation period could not be verified: no invoice or due date recorded. "
                f"Confirm the debt fell due less than {years} years ago."
            ),
        )

    expires = add_years(start, years)
    if today < expires:
        return CheckResult(
            passed=True,
            message=f"Within the {years}-year statutory limitation period (Limitation Act 1980).",
        )
    return CheckResult(
        passed=False,
        message=(
            f"Claim is statute-barred (older than {years} years from the due date, expired "
            f"{expires.isoformat()}). You likely cannot recover this debt."
        ),
    )


def check_value(claim_value: Decimal, rules: LegalRules = DEFAULT_RULES) -> CheckResult:
    """CPR Part 27: small claims track ceiling"""
    limit = _format_gbp(rules.small_claims_limit)
    value = _format_gbp(claim_value)

    if claim_value <= rules.small_claims_limit:
        return CheckResult(
            passed=True,
            message=f"Claim value ({value}) is within the Small Claims Track limit ({limit}).",
        )
    return CheckResult(
        passed=False,
        message=(
            f"Claim value ({value}) exceeds {limit}. This requires Fast Track or Multi-Track "
            f"(higher legal risk/costs)."
        ),
    )


def check_solvency(claim: ClaimRecord) -> CheckResult:
    """Recorded defendant status; dissolved and insolvent are different failures"""
    status = claim.defendant.solvency_status

    if status == SolvencyStatus.DISSOLVED:
        return CheckResult(passed=False, message=DISSOLVED_MESSAGE)
    if status == SolvencyStatus.INSOLVENT:
        return CheckResult(passed=False, message=INSOLVENT_MESSAGE)
    return CheckResult(passed=True, message=SOLVENT_MESSAGE)


def _recommendation(
    limitation: CheckResult,
    value: CheckResult,
    solvency: CheckResult,
    claim: ClaimRecord,
) -> str:
    if limitation.passed and value.passed and solvency.passed:
        return RECOMMEND_VIABLE
    if not limitation.passed:
        return RECOMMEND_TOO_OLD
    if not solvency.passed:
        if claim.defendant.solvency_status == SolvencyStatus.DISSOLVED:
            return RECOMMEND_DISSOLVED
        return RECOMMEND_INSOLVENT
    return RECOMMEND_OVER_LIMIT


def assess_claim_viability(
    claim: ClaimRecord,
    today: date,
    total_interest: Decimal,
    compensation: Decimal,
    strength_score: Optional[int] = None,
    strength_analysis: Optional[str] = None,
    weaknesses: Optional[List[str]] = None,
    rules: LegalRules = DEFAULT_RULES,
) -> AssessmentResult:
    """
    Run the limitation, value and solvency checks.

    Interest and compensation are the latest calculator figures for this
    claim. A failed check is advisory: it is reported, never raised. Strength
    fields come from an external reviewer and are passed through untouched.
    """
    claim_value = claim.invoice.total_amount + total_interest + compensation

    limitation_check = check_limitation(claim, today, rules)
    value_check = check_value(claim_value, rules)
    solvency_check = check_solvency(claim)

    is_viable = limitation_check.passed and value_check.passed and solvency_check.passed

    return AssessmentResult(
        is_viable=is_viable,
        limitation_check=limitation_check,
        value_check=value_check,
        solvency_check=solvency_check,
        recommendation=_recommendation(limitation_check, value_check, solvency_check, claim),
        strength_score=strength_score,
        strength_analysis=strength_analysis,
        weaknesses=list(weaknesses or []),
    )
