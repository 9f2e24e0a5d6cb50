"""Domain models - pure Python dataclasses representing a debt claim"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple

from claims_gateway.utils.date_utils import add_days


class PartyType(str, Enum):
    INDIVIDUAL = "Individual"
    BUSINESS = "Business"  # Ltd, PLC, Sole Trader


class SolvencyStatus(str, Enum):
    ACTIVE = "Active"
    INSOLVENT = "Insolvent"
    DISSOLVED = "Dissolved"
    UNKNOWN = "Unknown"


class ClaimStatus(str, Enum):
    DRAFT = "draft"
    REVIEW = "review"
    SENT = "sent"
    PAID = "paid"


class TimelineEventType(str, Enum):
    """Closed set of event tags, attached when the event is recorded"""

    CONTRACT = "contract"
    SERVICE_DELIVERED = "service_delivered"
    INVOICE = "invoice"
    PAYMENT_DUE = "payment_due"
    PART_PAYMENT = "part_payment"
    PAYMENT_RECEIVED = "payment_received"
    REMINDER = "reminder"
    FINAL_DEMAND = "final_demand"
    LBA_SENT = "lba_sent"
    ACKNOWLEDGMENT = "acknowledgment"
    COURT_CLAIM = "court_claim"
    JUDGMENT = "judgment"
    ENFORCEMENT = "enforcement"
    ABANDONED = "abandoned"
    COMMUNICATION = "communication"


class ClaimStage(str, Enum):
    """Procedural stages, least to most advanced, then the terminal ones"""

    DRAFT = "Draft"
    OVERDUE = "Overdue"
    REMINDER_SENT = "Reminder Sent"
    FINAL_DEMAND = "Final Demand"
    LBA_SENT = "LBA Sent"
    COURT_CLAIM = "Court Claim"
    JUDGMENT = "Judgment"
    ENFORCEMENT = "Enforcement"
    SETTLED = "Settled"
    ABANDONED = "Abandoned"


@dataclass(frozen=True)
class Party:
    """Claimant or defendant"""

    type: PartyType
    name: str
    address: str = ""
    city: str = ""
    county: str = ""
    postcode: str = ""
    phone: Optional[str] = None
    email: Optional[str] = None
    company_number: Optional[str] = None  # Companies House, business only
    solvency_status: Optional[SolvencyStatus] = None

    @property
    def is_business(self) -> bool:
        return self.type == PartyType.BUSINESS


@dataclass(frozen=True)
class InvoiceFacts:
    """Invoice the debt arises from"""

    invoice_number: str
    total_amount: Decimal
    date_issued: Optional[date] = None
    due_date: Optional[date] = None
    currency: str = "GBP"
    description: str = ""

    def payment_due(self, default_terms_days: int) -> Optional[date]:
        """Explicit due date, else issue date plus default terms, else None"""
        if self.due_date is not None:
            return self.due_date
        if self.date_issued is not None:
            return add_days(self.date_issued, default_terms_days)
        return None


@dataclass(frozen=True)
class TimelineEvent:
    """Immutable dated occurrence in the claim history"""

    date: date
    description: str
    type: TimelineEventType


@dataclass(frozen=True)
class ClaimRecord:
    """Snapshot of a claim; engine operations never mutate it"""

    id: str
    claimant: Party
    defendant: Party
    invoice: InvoiceFacts
    timeline: Tuple[TimelineEvent, ...] = ()
    status: ClaimStatus = ClaimStatus.DRAFT


@dataclass(frozen=True)
class InterestResult:
    """Statutory interest accrued on the principal"""

    days_overdue: int
    daily_rate: Decimal  # 4 dp
    total_interest: Decimal  # 2 dp
    annual_rate: Decimal = Decimal("0")  # percent


@dataclass(frozen=True)
class ClaimFinancials:
    """Everything the calculator derives for a claim"""

    principal: Decimal
    interest: InterestResult
    compensation: Decimal
    court_fee: Decimal
    total_claim_value: Decimal  # principal + interest + compensation
    grand_total: Decimal  # total_claim_value + court_fee


@dataclass(frozen=True)
class CheckResult:
    passed: bool
    message: str


@dataclass
class AssessmentResult:
    """Output of the viability assessment"""

    is_viable: bool
    limitation_check: CheckResult
    value_check: CheckResult
    solvency_check: CheckResult
    recommendation: str
    # Informational only, never gate the checks above
    strength_score: Optional[int] = None
    strength_analysis: Optional[str] = None
    weaknesses: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class StageHistoryEntry:
    stage: ClaimStage
    entered_at: date
    notes: Optional[str] = None


@dataclass
class WorkflowState:
    """Output of the stage classifier"""

    current_stage: ClaimStage
    next_action: str
    next_action_due: Optional[date]
    days_until_escalation: Optional[int]
    auto_escalate: bool
    escalation_warning: Optional[str]
    stage_history: List[StageHistoryEntry]
    urgency: str = "low"  # critical | high | medium | low
