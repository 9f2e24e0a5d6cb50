"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from claims_gateway.domain.models import (
    ClaimRecord,
    ClaimStage,
    ClaimStatus,
    InvoiceFacts,
    Party,
    PartyType,
    SolvencyStatus,
    TimelineEvent,
    TimelineEventType,
)
from claims_gateway.domain.timeline import normalize_event_type
from claims_gateway.domain.workflow import WorkflowAction


class DomainSchema(BaseModel):
    """Schemas built straight from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


class PartySchema(DomainSchema):
    """Claimant or defendant"""

    type: PartyType
    name: str = Field(..., min_length=1)
    address: str = ""
    city: str = ""
    county: str = ""
    postcode: str = ""
    phone: Optional[str] = None
    email: Optional[str] = None
    company_number: Optional[str] = None
    solvency_status: Optional[SolvencyStatus] = None

    def to_domain(self) -> Party:
        return Party(**self.model_dump())


class InvoiceSchema(DomainSchema):
    """Invoice the claim is based on"""

    invoice_number: str = ""
    total_amount: Decimal = Field(..., ge=0, description="Principal in pounds")
    date_issued: Optional[date] = None
    due_date: Optional[date] = None
    currency: str = "GBP"
    description: str = ""

    def to_domain(self) -> InvoiceFacts:
        return InvoiceFacts(**self.model_dump())


class TimelineEventSchema(DomainSchema):
    """Dated event; type accepts common synonyms (e.g. "chaser", "ccj")"""

    date: date
    description: str = ""
    type: TimelineEventType

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, TimelineEventType):
            return normalize_event_type(value)
        return value

    def to_domain(self) -> TimelineEvent:
        return TimelineEvent(date=self.date, description=self.description, type=self.type)


class ClaimSchema(DomainSchema):
    """Snapshot of a claim"""

    id: str = Field(..., min_length=1)
    status: ClaimStatus = ClaimStatus.DRAFT
    claimant: PartySchema
    defendant: PartySchema
    invoice: InvoiceSchema
    timeline: List[TimelineEventSchema] = []

    def to_domain(self) -> ClaimRecord:
        return ClaimRecord(
            id=self.id,
            status=self.status,
            claimant=self.claimant.to_domain(),
            defendant=self.defendant.to_domain(),
            invoice=self.invoice.to_domain(),
            timeline=tuple(event.to_domain() for event in self.timeline),
        )


class ClaimRequest(BaseModel):
    """Request body for the /v1/claims endpoints"""

    claim: ClaimSchema
    as_of: Optional[date] = Field(None, description="Evaluate as of this date instead of today")


class AssessmentRequest(ClaimRequest):
    """Claim plus optional externally-sourced strength review"""

    strength_score: Optional[int] = Field(None, ge=0, le=100)
    strength_analysis: Optional[str] = None
    weaknesses: List[str] = []


class ActionRequest(ClaimRequest):
    """Record a step taken on the claim"""

    action: WorkflowAction


class InterestSchema(DomainSchema):
    days_overdue: int
    daily_rate: Decimal
    total_interest: Decimal
    annual_rate: Decimal


class FinancialsResponse(DomainSchema):
    """Response for POST /v1/claims/financials"""

    principal: Decimal
    interest: InterestSchema
    compensation: Decimal
    court_fee: Decimal
    total_claim_value: Decimal
    grand_total: Decimal
    interest_act: str = ""


class CheckSchema(DomainSchema):
    passed: bool
    message: str


class AssessmentResponse(DomainSchema):
    """Response for POST /v1/claims/assessment"""

    is_viable: bool
    limitation_check: CheckSchema
    value_check: CheckSchema
    solvency_check: CheckSchema
    recommendation: str
    strength_score: Optional[int] = None
    strength_analysis: Optional[str] = None
    weaknesses: List[str] = []


class StageHistorySchema(DomainSchema):
    stage: ClaimStage
    entered_at: date
    notes: Optional[str] = None


class WorkflowResponse(DomainSchema):
    """Response for POST /v1/claims/workflow"""

    current_stage: ClaimStage
    next_action: str
    next_action_due: Optional[date] = None
    days_until_escalation: Optional[int] = None
    auto_escalate: bool
    escalation_warning: Optional[str] = None
    stage_history: List[StageHistorySchema]
    urgency: str


class EvaluationResponse(BaseModel):
    """Response for POST /v1/claims/evaluate"""

    claim_id: str
    as_of: date
    financials: FinancialsResponse
    assessment: AssessmentResponse
    workflow: WorkflowResponse


class ActionResponse(BaseModel):
    """Response for POST /v1/claims/actions"""

    claim: ClaimSchema
    workflow: WorkflowResponse


class RawTimelineRequest(BaseModel):
    """Loosely-keyed events from an import or extraction source"""

    events: List[Dict[str, Any]]


class TimelineSummarySchema(BaseModel):
    total_events: int
    has_contract: bool
    has_invoice: bool
    has_lba: bool
    last_event_date: Optional[date] = None
    last_event_type: Optional[TimelineEventType] = None


class TimelineValidationSchema(BaseModel):
    is_complete: bool
    missing_events: List[str]
    warnings: List[str]


class TimelineResponse(BaseModel):
    """Response for POST /v1/timeline/normalize"""

    events: List[TimelineEventSchema]
    summary: TimelineSummarySchema
    validation: TimelineValidationSchema
