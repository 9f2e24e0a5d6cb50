"""Jurisdiction constants for England & Wales debt recovery.

Every threshold the engine branches on lives here so that a change in the
fees order or the Bank of England base rate is a configuration change, not a
code change. Override by constructing a new ``LegalRules`` (see
``Settings.legal_rules``) and passing it to the engine functions.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

# Bank of England base rate (as of Jan 2025)
BOE_BASE_RATE = Decimal("4.75")

# Late Payment of Commercial Debts (Interest) Act 1998: base rate + 8%
STATUTORY_INTEREST_ADDITION = Decimal("8.0")

# County Courts Act 1984 s.69
NON_COMMERCIAL_INTEREST_RATE = Decimal("8.0")

DAILY_INTEREST_DIVISOR = 365
DEFAULT_PAYMENT_TERMS_DAYS = 30

# Limitation Act 1980 s.5
LIMITATION_PERIOD_YEARS = 6

# CPR Part 27
SMALL_CLAIMS_LIMIT = Decimal("10000")

# Fixed recovery costs: (exclusive upper bound, amount); top tier applies above
COMPENSATION_BANDS: Tuple[Tuple[Decimal, Decimal], ...] = (
    (Decimal("1000"), Decimal("40")),
    (Decimal("10000"), Decimal("70")),
)
COMPENSATION_TOP_TIER = Decimal("100")

# Civil Proceedings Fees Order 2021: (inclusive upper bound, fixed fee)
COURT_FEE_BANDS: Tuple[Tuple[Decimal, Decimal], ...] = (
    (Decimal("300"), Decimal("35")),
    (Decimal("500"), Decimal("50")),
    (Decimal("1000"), Decimal("70")),
    (Decimal("1500"), Decimal("80")),
    (Decimal("3000"), Decimal("115")),
    (Decimal("5000"), Decimal("205")),
    (Decimal("10000"), Decimal("455")),
)
COURT_FEE_PERCENTAGE = Decimal("0.05")
COURT_FEE_CAP = Decimal("10000")
COURT_FEE_CAP_THRESHOLD = Decimal("200000")


@dataclass(frozen=True)
class LegalRules:
    """Statutory constants consumed by the calculator, assessor and workflow"""

    boe_base_rate: Decimal = BOE_BASE_RATE
    statutory_interest_addition: Decimal = STATUTORY_INTEREST_ADDITION
    non_commercial_interest_rate: Decimal = NON_COMMERCIAL_INTEREST_RATE
    daily_interest_divisor: int = DAILY_INTEREST_DIVISOR
    default_payment_terms_days: int = DEFAULT_PAYMENT_TERMS_DAYS

    limitation_period_years: int = LIMITATION_PERIOD_YEARS
    small_claims_limit: Decimal = SMALL_CLAIMS_LIMIT

    compensation_bands: Tuple[Tuple[Decimal, Decimal], ...] = COMPENSATION_BANDS
    compensation_top_tier: Decimal = COMPENSATION_TOP_TIER

    court_fee_bands: Tuple[Tuple[Decimal, Decimal], ...] = COURT_FEE_BANDS
    court_fee_percentage: Decimal = COURT_FEE_PERCENTAGE
    court_fee_cap: Decimal = COURT_FEE_CAP
    court_fee_cap_threshold: Decimal = COURT_FEE_CAP_THRESHOLD

    # Escalation ladder, in days after the payment due date
    reminder_after_days: int = 7
    final_demand_after_days: int = 14
    lba_after_days: int = 30

    # Response windows, in days after the relevant letter
    reminder_response_days: int = 7
    final_demand_response_days: int = 14
    lba_protocol_period_days: int = 30

    # Warn when the next action is due within this many days
    escalation_warning_days: int = 3

    @property
    def commercial_interest_rate(self) -> Decimal:
        """Annual percentage under the Late Payment Act (base + 8%)"""
        return self.boe_base_rate + self.statutory_interest_addition


DEFAULT_RULES = LegalRules()
