"""Monetary rules - statutory interest, fixed compensation and court fees"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from claims_gateway.domain.models import (
    ClaimFinancials,
    ClaimRecord,
    InterestResult,
    InvoiceFacts,
    PartyType,
)
from claims_gateway.domain.rules import DEFAULT_RULES, LegalRules
from claims_gateway.utils.date_utils import days_between

PENNY = Decimal("0.01")
DAILY_RATE_PRECISION = Decimal("0.0001")
ZERO = Decimal("0")


def _money(value: Decimal) -> Decimal:
    return value.quantize(PENNY, rounding=ROUND_HALF_UP)


def is_b2b(claimant_type: PartyType, defendant_type: PartyType) -> bool:
    """Both sides trading: the Late Payment Act regime applies"""
    return claimant_type == PartyType.BUSINESS and defendant_type == PartyType.BUSINESS


def interest_act(b2b: bool) -> str:
    """Statute the interest claim is made under"""
    if b2b:
        return "the Late Payment of Commercial Debts (Interest) Act 1998"
    return "section 69 of the County Courts Act 1984"


def annual_interest_rate(b2b: bool, rules: LegalRules = DEFAULT_RULES) -> Decimal:
    """Annual rate in percent"""
    return rules.commercial_interest_rate if b2b else rules.non_commercial_interest_rate


def payment_due_date(invoice: InvoiceFacts, rules: LegalRules = DEFAULT_RULES) -> Optional[date]:
    """
    Date payment fell due.

    Explicit due date wins; otherwise issue date plus the default terms.
    None when neither date is known.
    """
    return invoice.payment_due(rules.default_payment_terms_days)


def calculate_interest(
    invoice: InvoiceFacts,
    claimant_type: PartyType,
    defendant_type: PartyType,
    today: date,
    rules: LegalRules = DEFAULT_RULES,
) -> InterestResult:
    """
    Simple statutory interest from the payment due date to today.

    Requirements:
    - Days overdue never negative (not yet due = 0)
    - B2B: base rate + 8%; otherwise the fixed s.69 rate
    - Daily rate held at 4 dp; total derived from it and shown at 2 dp

    Example:
        £10,000 B2B, 90 days overdue
        10000 * 12.75% / 365 = 3.4932 per day
        3.4932 * 90 = 314.39
    """
    b2b = is_b2b(claimant_type, defendant_type)
    rate = annual_interest_rate(b2b, rules)
    due = payment_due_date(invoice, rules)

    if due is None or not invoice.total_amount:
        return InterestResult(days_overdue=0, daily_rate=ZERO, total_interest=ZERO, annual_rate=rate)

    days_overdue = days_between(today, due) if today > due else 0

    daily_rate = (invoice.total_amount * rate / Decimal(100) / Decimal(rules.daily_interest_divisor)).quantize(
        DAILY_RATE_PRECISION, rounding=ROUND_HALF_UP
    )
    total_interest = _money(daily_rate * days_overdue)

    return InterestResult(
        days_overdue=days_overdue,
        daily_rate=daily_rate,
        total_interest=total_interest,
        annual_rate=rate,
    )


def calculate_compensation(
    amount: Decimal,
    claimant_type: PartyType,
    defendant_type: PartyType,
    rules: LegalRules = DEFAULT_RULES,
) -> Decimal:
    """
    Fixed debt-recovery costs under the Late Payment Act.

    Only B2B debts qualify; anything involving an individual is always zero.
    Tiers: under £1,000 -> £40, under £10,000 -> £70, otherwise £100.
    """
    if not is_b2b(claimant_type, defendant_type):
        return ZERO

    for upper_bound, compensation in rules.compensation_bands:
        if amount < upper_bound:
            return compensation
    return rules.compensation_top_tier


def calculate_court_fee(claim_value: Decimal, rules: LegalRules = DEFAULT_RULES) -> Decimal:
    """
    Money claim issue fee for the given claim value.

    Fee bands (Civil Proceedings Fees Order 2021):
    - up to £10,000: fixed fee per band
    - £10,000.01 - £200,000: 5% of the claim value
    - over £200,000: flat maximum fee (£10,000)

    The value passed in must be the full claim value including interest and
    compensation; see calculate_financials.
    """
    if claim_value <= 0:
        return ZERO

    for upper_bound, fee in rules.court_fee_bands:
        if claim_value <= upper_bound:
            return fee

    if claim_value <= rules.court_fee_cap_threshold:
        return min(_money(claim_value * rules.court_fee_percentage), rules.court_fee_cap)

    return rules.court_fee_cap


def total_claim_value(principal: Decimal, interest: Decimal, compensation: Decimal) -> Decimal:
    """Debt claimed, excluding the court fee"""
    return principal + interest + compensation


def grand_total(principal: Decimal, interest: Decimal, compensation: Decimal, court_fee: Decimal) -> Decimal:
    """Debt claimed plus the court fee"""
    return total_claim_value(principal, interest, compensation) + court_fee


def calculate_financials(
    claim: ClaimRecord,
    today: date,
    rules: LegalRules = DEFAULT_RULES,
) -> ClaimFinancials:
    """
    Main entry point: recompute every monetary figure for a claim.

    Call whenever amount, dates or party types change; nothing is cached.
    """
    principal = claim.invoice.total_amount
    interest = calculate_interest(
        claim.invoice,
        claim.claimant.type,
        claim.defendant.type,
        today,
        rules,
    )
    compensation = calculate_compensation(principal, claim.claimant.type, claim.defendant.type, rules)

    claim_value = total_claim_value(principal, interest.total_interest, compensation)
    court_fee = calculate_court_fee(claim_value, rules)

    return ClaimFinancials(
        principal=principal,
        interest=interest,
        compensation=compensation,
        court_fee=court_fee,
        total_claim_value=claim_value,
        grand_total=grand_total(principal, interest.total_interest, compensation, court_fee),
    )
