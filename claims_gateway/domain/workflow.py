"""Workflow engine - procedural stage, next action and escalation for a claim

Stages follow the Pre-Action Protocol escalation ladder for debt claims in
England & Wales:

    Draft -> Overdue -> Reminder Sent -> Final Demand -> LBA Sent
          -> Court Claim -> Judgment -> Enforcement

Settled and Abandoned are terminal. State is never stored: every call
re-derives it from the timeline, the claim status and the supplied date.
"""

from dataclasses import replace
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple

from claims_gateway.domain.calculator import calculate_interest, payment_due_date
from claims_gateway.domain.deadlines import defence_deadline, enforcement_date
from claims_gateway.domain.models import (
    ClaimRecord,
    ClaimStage,
    ClaimStatus,
    InterestResult,
    StageHistoryEntry,
    TimelineEvent,
    TimelineEventType as T,
    WorkflowState,
)
from claims_gateway.domain.rules import DEFAULT_RULES, LegalRules
from claims_gateway.domain.timeline import latest_event_date
from claims_gateway.utils.date_utils import add_days, signed_days_until

PAYMENT_EVENTS = (T.PAYMENT_RECEIVED, T.PART_PAYMENT)

# Most advanced first; first match wins
STAGE_PRECEDENCE: Tuple[Tuple[ClaimStage, T], ...] = (
    (ClaimStage.ENFORCEMENT, T.ENFORCEMENT),
    (ClaimStage.JUDGMENT, T.JUDGMENT),
    (ClaimStage.COURT_CLAIM, T.COURT_CLAIM),
    (ClaimStage.LBA_SENT, T.LBA_SENT),
    (ClaimStage.FINAL_DEMAND, T.FINAL_DEMAND),
    (ClaimStage.REMINDER_SENT, T.REMINDER),
)

EVENT_STAGES: Dict[T, ClaimStage] = {
    T.CONTRACT: ClaimStage.DRAFT,
    T.SERVICE_DELIVERED: ClaimStage.DRAFT,
    T.INVOICE: ClaimStage.DRAFT,
    T.PAYMENT_DUE: ClaimStage.OVERDUE,
    T.REMINDER: ClaimStage.REMINDER_SENT,
    T.FINAL_DEMAND: ClaimStage.FINAL_DEMAND,
    T.LBA_SENT: ClaimStage.LBA_SENT,
    T.COURT_CLAIM: ClaimStage.COURT_CLAIM,
    T.JUDGMENT: ClaimStage.JUDGMENT,
    T.ENFORCEMENT: ClaimStage.ENFORCEMENT,
    T.ABANDONED: ClaimStage.ABANDONED,
}


class WorkflowAction(str, Enum):
    """Steps a user can record against a claim"""

    REMINDER_SENT = "reminder_sent"
    DEMAND_SENT = "demand_sent"
    LBA_SENT = "lba_sent"
    CLAIM_FILED = "claim_filed"
    JUDGMENT_OBTAINED = "judgment_obtained"
    ENFORCEMENT_STARTED = "enforcement_started"
    SETTLED = "settled"
    ABANDONED = "abandoned"


ACTION_EVENTS: Dict[WorkflowAction, Tuple[T, str]] = {
    WorkflowAction.REMINDER_SENT: (T.REMINDER, "Payment reminder sent"),
    WorkflowAction.DEMAND_SENT: (T.FINAL_DEMAND, "Final demand sent"),
    WorkflowAction.LBA_SENT: (T.LBA_SENT, "Letter Before Action sent"),
    WorkflowAction.CLAIM_FILED: (T.COURT_CLAIM, "Court claim filed (N1)"),
    WorkflowAction.JUDGMENT_OBTAINED: (T.JUDGMENT, "Judgment obtained"),
    WorkflowAction.ENFORCEMENT_STARTED: (T.ENFORCEMENT, "Enforcement started"),
    WorkflowAction.SETTLED: (T.PAYMENT_RECEIVED, "Debt settled/paid"),
    WorkflowAction.ABANDONED: (T.ABANDONED, "Claim abandoned"),
}


def _has_event(claim: ClaimRecord, *types: T) -> bool:
    return any(event.type in types for event in claim.timeline)


def determine_stage(claim: ClaimRecord, days_overdue: int) -> ClaimStage:
    """
    Most advanced stage the timeline supports.

    Settled needs both a payment event and the paid status; a payment
    event alone (e.g. a part payment) does not close the claim.
    """
    if claim.status == ClaimStatus.PAID and _has_event(claim, *PAYMENT_EVENTS):
        return ClaimStage.SETTLED

    if _has_event(claim, T.ABANDONED):
        return ClaimStage.ABANDONED

    for stage, event_type in STAGE_PRECEDENCE:
        if _has_event(claim, event_type):
            return stage

    if days_overdue > 0:
        return ClaimStage.OVERDUE

    return ClaimStage.DRAFT


def get_next_action(
    stage: ClaimStage,
    claim: ClaimRecord,
    days_overdue: int,
    today: date,
    rules: LegalRules = DEFAULT_RULES,
) -> str:
    """Recommended next step, refined by how long the debt has been overdue"""
    if stage == ClaimStage.DRAFT:
        return "Complete claim details and send to debtor"

    if stage == ClaimStage.OVERDUE:
        if days_overdue < rules.reminder_after_days:
            return f"Wait {rules.reminder_after_days} days, then send friendly reminder"
        if days_overdue < rules.final_demand_after_days:
            return "Send friendly payment reminder"
        if days_overdue < rules.lba_after_days:
            return "Send formal demand letter"
        return "Send Letter Before Action (Pre-Action Protocol)"

    if stage == ClaimStage.REMINDER_SENT:
        if days_overdue < rules.final_demand_after_days:
            return f"Wait for response (allow {rules.reminder_response_days} days)"
        if days_overdue < rules.lba_after_days:
            return "Send formal demand letter"
        return "Send Letter Before Action"

    if stage == ClaimStage.FINAL_DEMAND:
        if days_overdue < rules.lba_after_days:
            return f"Wait for response (allow {rules.final_demand_response_days} days from demand)"
        return "Send Letter Before Action (Pre-Action Protocol required)"

    if stage == ClaimStage.LBA_SENT:
        lba_date = latest_event_date(claim.timeline, T.LBA_SENT)
        if lba_date is not None:
            days_since_lba = (today - lba_date).days
            if days_since_lba < rules.lba_protocol_period_days:
                remaining = rules.lba_protocol_period_days - days_since_lba
                return f"Wait for Pre-Action Protocol period ({remaining} days remaining)"
        return "File court claim (N1 form)"

    if stage == ClaimStage.COURT_CLAIM:
        return "Await court response or apply for default judgment"

    if stage == ClaimStage.JUDGMENT:
        return "Request enforcement options (bailiff/attachment of earnings)"

    if stage == ClaimStage.ENFORCEMENT:
        return "Monitor enforcement progress"

    if stage == ClaimStage.SETTLED:
        return "Claim complete"

    return "No further action"


def get_next_action_due(
    stage: ClaimStage,
    claim: ClaimRecord,
    days_overdue: int,
    rules: LegalRules = DEFAULT_RULES,
) -> Optional[date]:
    """
    When the next step falls due.

    Pre-letter stages run from the payment due date; later stages run from
    the most recent event of the matching type. None when the anchor date
    is unknown or the next step is user-driven.
    """
    if stage == ClaimStage.OVERDUE:
        due = payment_due_date(claim.invoice, rules)
        if due is None:
            return None
        for offset in (rules.reminder_after_days, rules.final_demand_after_days, rules.lba_after_days):
            if days_overdue < offset:
                return add_days(due, offset)
        return None

    if stage == ClaimStage.REMINDER_SENT:
        sent = latest_event_date(claim.timeline, T.REMINDER)
        return add_days(sent, rules.reminder_response_days) if sent else None

    if stage == ClaimStage.FINAL_DEMAND:
        sent = latest_event_date(claim.timeline, T.FINAL_DEMAND)
        return add_days(sent, rules.final_demand_response_days) if sent else None

    if stage == ClaimStage.LBA_SENT:
        sent = latest_event_date(claim.timeline, T.LBA_SENT)
        return add_days(sent, rules.lba_protocol_period_days) if sent else None

    if stage == ClaimStage.COURT_CLAIM:
        filed = latest_event_date(claim.timeline, T.COURT_CLAIM)
        acknowledged = latest_event_date(claim.timeline, T.ACKNOWLEDGMENT)
        if filed is None:
            return None
        if acknowledged is not None and acknowledged < filed:
            acknowledged = None
        return defence_deadline(filed, acknowledged)

    if stage == ClaimStage.JUDGMENT:
        obtained = latest_event_date(claim.timeline, T.JUDGMENT)
        return enforcement_date(obtained) if obtained else None

    return None


def get_escalation_warning(next_action: str, signed_days: int, warning_days: int = 3) -> Optional[str]:
    """Warning text; None when the next step is more than a few days away"""
    if signed_days < 0:
        overdue = abs(signed_days)
        unit = "day" if overdue == 1 else "days"
        return (
            f"OVERDUE: {next_action} was due {overdue} {unit} ago. "
            f"Take action now to avoid further delays."
        )
    if signed_days == 0:
        return f"URGENT: {next_action} is due TODAY."
    if signed_days <= warning_days:
        unit = "day" if signed_days == 1 else "days"
        return f"UPCOMING: {next_action} due in {signed_days} {unit}."
    return None


def get_urgency_level(stage: ClaimStage, auto_escalate: bool, signed_days: Optional[int]) -> str:
    """critical | high | medium | low, for sorting a claims list"""
    if auto_escalate and signed_days is not None:
        return "critical" if signed_days <= 0 else "high"

    if stage in (ClaimStage.COURT_CLAIM, ClaimStage.JUDGMENT, ClaimStage.ENFORCEMENT):
        return "high"
    if stage in (ClaimStage.LBA_SENT, ClaimStage.FINAL_DEMAND):
        return "medium"
    return "low"


def build_stage_history(claim: ClaimRecord, current_stage: ClaimStage, today: date) -> List[StageHistoryEntry]:
    """Stages reconstructed from the timeline, oldest first"""
    stages = dict(EVENT_STAGES)
    if claim.status == ClaimStatus.PAID:
        stages[T.PAYMENT_RECEIVED] = ClaimStage.SETTLED

    history = [
        StageHistoryEntry(stage=stages[event.type], entered_at=event.date, notes=event.description)
        for event in claim.timeline
        if event.type in stages
    ]

    if not any(entry.stage == current_stage for entry in history):
        history.append(StageHistoryEntry(stage=current_stage, entered_at=today, notes="Current stage"))

    return sorted(history, key=lambda entry: entry.entered_at)


def calculate_workflow_state(
    claim: ClaimRecord,
    today: date,
    interest: Optional[InterestResult] = None,
    rules: LegalRules = DEFAULT_RULES,
) -> WorkflowState:
    """
    Main entry point: derive the full workflow state for a claim.

    Pass the calculator's latest InterestResult when already computed;
    otherwise it is recomputed for the given date.
    """
    if interest is None:
        interest = calculate_interest(claim.invoice, claim.claimant.type, claim.defendant.type, today, rules)
    days_overdue = interest.days_overdue

    stage = determine_stage(claim, days_overdue)
    next_action = get_next_action(stage, claim, days_overdue, today, rules)
    next_action_due = get_next_action_due(stage, claim, days_overdue, rules)

    # Signed value drives the flag; only the reported figure is floored
    signed_days = signed_days_until(today, next_action_due) if next_action_due else None
    days_until_escalation = max(0, signed_days) if signed_days is not None else None
    auto_escalate = signed_days is not None and signed_days <= rules.escalation_warning_days
    escalation_warning = (
        get_escalation_warning(next_action, signed_days, rules.escalation_warning_days) if auto_escalate else None
    )

    return WorkflowState(
        current_stage=stage,
        next_action=next_action,
        next_action_due=next_action_due,
        days_until_escalation=days_until_escalation,
        auto_escalate=auto_escalate,
        escalation_warning=escalation_warning,
        stage_history=build_stage_history(claim, stage, today),
        urgency=get_urgency_level(stage, auto_escalate, signed_days),
    )


def record_action(claim: ClaimRecord, action: WorkflowAction, today: date) -> ClaimRecord:
    """
    Return a new snapshot with the action appended to its timeline.

    The caller's record is left untouched. Recording a settlement also sets
    the paid status so the claim reaches Settled.
    """
    event_type, description = ACTION_EVENTS[action]
    event = TimelineEvent(date=today, description=description, type=event_type)
    status = ClaimStatus.PAID if action == WorkflowAction.SETTLED else claim.status

    return replace(claim, timeline=claim.timeline + (event,), status=status)
