"""Unit tests for the workflow engine"""

import pytest
from datetime import date
from claims_gateway.domain.calculator import calculate_interest
from claims_gateway.domain.models import ClaimStage, ClaimStatus, TimelineEventType as T
from claims_gateway.domain.workflow import (
    WorkflowAction,
    build_stage_history,
    calculate_workflow_state,
    determine_stage,
    get_escalation_warning,
    get_urgency_level,
    record_action,
)

TODAY = date(2025, 6, 1)


def test_draft_before_due_date(make_claim):
    claim = make_claim(due_date=date(2025, 7, 1), status=ClaimStatus.DRAFT)
    state = calculate_workflow_state(claim, TODAY)

    assert state.current_stage == ClaimStage.DRAFT
    assert state.next_action == "Complete claim details and send to debtor"
    assert state.next_action_due is None
    assert state.days_until_escalation is None
    assert state.auto_escalate is False
    assert state.escalation_warning is None
    assert state.urgency == "low"


def test_overdue_without_letters(make_claim):
    state = calculate_workflow_state(make_claim(), TODAY)

    assert state.current_stage == ClaimStage.OVERDUE
    assert state.next_action == "Send Letter Before Action (Pre-Action Protocol)"


@pytest.mark.parametrize(
    "today,action,due",
    [
        (date(2025, 3, 8), "Wait 7 days, then send friendly reminder", date(2025, 3, 10)),
        (date(2025, 3, 13), "Send friendly payment reminder", date(2025, 3, 17)),
        (date(2025, 3, 20), "Send formal demand letter", date(2025, 4, 2)),
    ],
)
def test_overdue_ladder(make_claim, today, action, due):
    state = calculate_workflow_state(make_claim(), today)

    assert state.current_stage == ClaimStage.OVERDUE
    assert state.next_action == action
    assert state.next_action_due == due


def test_upcoming_warning_within_three_days(make_claim):
    state = calculate_workflow_state(make_claim(), date(2025, 3, 8))

    assert state.days_until_escalation == 2
    assert state.auto_escalate is True
    assert state.escalation_warning == "UPCOMING: Wait 7 days, then send friendly reminder due in 2 days."
    assert state.urgency == "high"


def test_lba_takes_precedence_over_reminder(make_claim):
    claim = make_claim(events=[(date(2025, 3, 10), T.REMINDER), (date(2025, 5, 20), T.LBA_SENT)])
    state = calculate_workflow_state(claim, TODAY)

    assert state.current_stage == ClaimStage.LBA_SENT
    assert state.next_action == "Wait for Pre-Action Protocol period (18 days remaining)"
    assert state.next_action_due == date(2025, 6, 19)
    assert state.days_until_escalation == 18
    assert state.auto_escalate is False
    assert state.urgency == "medium"


def test_event_order_does_not_change_stage(make_claim):
    claim = make_claim(events=[(date(2025, 5, 20), T.LBA_SENT), (date(2025, 3, 10), T.REMINDER)])
    assert determine_stage(claim, 90) == ClaimStage.LBA_SENT


def test_overdue_next_action_is_flagged(make_claim):
    claim = make_claim(events=[(date(2025, 4, 1), T.LBA_SENT)])
    state = calculate_workflow_state(claim, TODAY)

    assert state.next_action == "File court claim (N1 form)"
    assert state.next_action_due == date(2025, 5, 1)
    # Reported figure is floored; the flag still fires
    assert state.days_until_escalation == 0
    assert state.auto_escalate is True
    assert state.escalation_warning == (
        "OVERDUE: File court claim (N1 form) was due 31 days ago. Take action now to avoid further delays."
    )
    assert state.urgency == "critical"


def test_due_today_is_urgent(make_claim):
    claim = make_claim(events=[(date(2025, 5, 25), T.REMINDER)])
    state = calculate_workflow_state(claim, TODAY)

    assert state.current_stage == ClaimStage.REMINDER_SENT
    assert state.next_action == "Send Letter Before Action"
    assert state.next_action_due == TODAY
    assert state.escalation_warning == "URGENT: Send Letter Before Action is due TODAY."
    assert state.urgency == "critical"


def test_next_action_due_uses_latest_event(make_claim):
    claim = make_claim(events=[(date(2025, 3, 10), T.REMINDER), (date(2025, 5, 28), T.REMINDER)])
    assert calculate_workflow_state(claim, TODAY).next_action_due == date(2025, 6, 4)


def test_settled_needs_paid_status(make_claim):
    events = [(date(2025, 5, 1), T.REMINDER), (date(2025, 5, 20), T.PAYMENT_RECEIVED)]

    assert determine_stage(make_claim(events=events, status=ClaimStatus.PAID), 90) == ClaimStage.SETTLED
    assert determine_stage(make_claim(events=events, status=ClaimStatus.SENT), 90) == ClaimStage.REMINDER_SENT
    assert determine_stage(make_claim(status=ClaimStatus.PAID), 90) == ClaimStage.OVERDUE


def test_part_payment_alone_does_not_settle(make_claim):
    claim = make_claim(events=[(date(2025, 5, 20), T.PART_PAYMENT)])
    assert determine_stage(claim, 90) == ClaimStage.OVERDUE


def test_settled_claim_state(make_claim):
    claim = make_claim(events=[(date(2025, 5, 20), T.PAYMENT_RECEIVED)], status=ClaimStatus.PAID)
    state = calculate_workflow_state(claim, TODAY)

    assert state.current_stage == ClaimStage.SETTLED
    assert state.next_action == "Claim complete"
    assert state.next_action_due is None
    assert state.auto_escalate is False


def test_abandoned_overrides_procedural_stages(make_claim):
    claim = make_claim(events=[(date(2025, 4, 1), T.LBA_SENT), (date(2025, 5, 1), T.ABANDONED)])
    state = calculate_workflow_state(claim, TODAY)

    assert state.current_stage == ClaimStage.ABANDONED
    assert state.next_action == "No further action"
    assert state.auto_escalate is False


def test_court_claim_defence_deadline(make_claim):
    filed = make_claim(events=[(date(2025, 5, 10), T.COURT_CLAIM)])
    state = calculate_workflow_state(filed, TODAY)

    assert state.current_stage == ClaimStage.COURT_CLAIM
    assert state.next_action == "Await court response or apply for default judgment"
    assert state.next_action_due == date(2025, 6, 7)
    assert state.auto_escalate is False
    assert state.urgency == "high"

    acknowledged = make_claim(events=[(date(2025, 5, 10), T.COURT_CLAIM), (date(2025, 5, 20), T.ACKNOWLEDGMENT)])
    assert calculate_workflow_state(acknowledged, TODAY).next_action_due == date(2025, 6, 3)


def test_acknowledgment_before_filing_is_ignored(make_claim):
    claim = make_claim(events=[(date(2025, 4, 1), T.ACKNOWLEDGMENT), (date(2025, 5, 10), T.COURT_CLAIM)])
    assert calculate_workflow_state(claim, TODAY).next_action_due == date(2025, 6, 7)


def test_judgment_and_enforcement(make_claim):
    judgment = calculate_workflow_state(make_claim(events=[(date(2025, 5, 25), T.JUDGMENT)]), TODAY)
    assert judgment.current_stage == ClaimStage.JUDGMENT
    assert judgment.next_action == "Request enforcement options (bailiff/attachment of earnings)"
    assert judgment.next_action_due == date(2025, 6, 8)

    enforcement = calculate_workflow_state(
        make_claim(events=[(date(2025, 5, 25), T.JUDGMENT), (date(2025, 5, 30), T.ENFORCEMENT)]), TODAY
    )
    assert enforcement.current_stage == ClaimStage.ENFORCEMENT
    assert enforcement.next_action == "Monitor enforcement progress"
    assert enforcement.next_action_due is None
    assert enforcement.urgency == "high"


def test_supplied_interest_drives_days_overdue(make_claim):
    claim = make_claim()
    interest = calculate_interest(claim.invoice, claim.claimant.type, claim.defendant.type, date(2025, 3, 8))

    # Days overdue come from the supplied result, not from today
    state = calculate_workflow_state(claim, TODAY, interest=interest)
    assert state.next_action == "Wait 7 days, then send friendly reminder"


def test_stage_history_from_timeline(make_claim):
    claim = make_claim(
        events=[
            (date(2025, 4, 1), T.LBA_SENT),
            (date(2025, 2, 1), T.INVOICE),
            (date(2025, 3, 15), T.COMMUNICATION),
            (date(2025, 3, 10), T.REMINDER),
        ]
    )
    history = build_stage_history(claim, ClaimStage.LBA_SENT, TODAY)

    assert [h.stage for h in history] == [ClaimStage.DRAFT, ClaimStage.REMINDER_SENT, ClaimStage.LBA_SENT]
    assert [h.entered_at for h in history] == [date(2025, 2, 1), date(2025, 3, 10), date(2025, 4, 1)]


def test_stage_history_appends_current_stage(make_claim):
    history = build_stage_history(make_claim(), ClaimStage.OVERDUE, TODAY)

    assert len(history) == 1
    assert history[0].stage == ClaimStage.OVERDUE
    assert history[0].entered_at == TODAY
    assert history[0].notes == "Current stage"


def test_stage_history_sorted_after_current_stage_added(make_claim):
    claim = make_claim(events=[(date(2025, 7, 1), T.INVOICE)])
    history = build_stage_history(claim, ClaimStage.OVERDUE, TODAY)

    assert [h.stage for h in history] == [ClaimStage.OVERDUE, ClaimStage.DRAFT]


def test_stage_history_settled_on_payment_date(make_claim):
    claim = make_claim(
        events=[(date(2025, 4, 1), T.LBA_SENT), (date(2025, 5, 20), T.PAYMENT_RECEIVED)],
        status=ClaimStatus.PAID,
    )
    history = calculate_workflow_state(claim, TODAY).stage_history

    assert [h.stage for h in history] == [ClaimStage.LBA_SENT, ClaimStage.SETTLED]
    assert history[-1].entered_at == date(2025, 5, 20)


@pytest.mark.parametrize(
    "days,expected",
    [
        (-1, "OVERDUE: Send reminder was due 1 day ago. Take action now to avoid further delays."),
        (-5, "OVERDUE: Send reminder was due 5 days ago. Take action now to avoid further delays."),
        (0, "URGENT: Send reminder is due TODAY."),
        (1, "UPCOMING: Send reminder due in 1 day."),
        (3, "UPCOMING: Send reminder due in 3 days."),
        (4, None),
    ],
)
def test_escalation_warning_text(days, expected):
    assert get_escalation_warning("Send reminder", days) == expected


@pytest.mark.parametrize(
    "stage,auto_escalate,days,expected",
    [
        (ClaimStage.OVERDUE, True, -2, "critical"),
        (ClaimStage.OVERDUE, True, 0, "critical"),
        (ClaimStage.OVERDUE, True, 2, "high"),
        (ClaimStage.JUDGMENT, False, 10, "high"),
        (ClaimStage.LBA_SENT, False, 10, "medium"),
        (ClaimStage.FINAL_DEMAND, False, None, "medium"),
        (ClaimStage.REMINDER_SENT, False, 10, "low"),
        (ClaimStage.SETTLED, False, None, "low"),
    ],
)
def test_urgency_level(stage, auto_escalate, days, expected):
    assert get_urgency_level(stage, auto_escalate, days) == expected


def test_record_action_returns_new_snapshot(make_claim):
    claim = make_claim()
    updated = record_action(claim, WorkflowAction.LBA_SENT, TODAY)

    assert claim.timeline == ()
    assert len(updated.timeline) == 1
    assert updated.timeline[0].type == T.LBA_SENT
    assert updated.timeline[0].date == TODAY
    assert updated.status == claim.status
    assert calculate_workflow_state(updated, TODAY).current_stage == ClaimStage.LBA_SENT


def test_record_settlement_sets_paid(make_claim):
    updated = record_action(make_claim(), WorkflowAction.SETTLED, TODAY)

    assert updated.status == ClaimStatus.PAID
    assert determine_stage(updated, 90) == ClaimStage.SETTLED
