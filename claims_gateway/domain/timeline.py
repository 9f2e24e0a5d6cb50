"""Timeline normalisation - map upstream event data onto the closed tag set"""

from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

from claims_gateway.domain.models import TimelineEvent, TimelineEventType as T
from claims_gateway.utils.date_utils import parse_date

# Variations seen from extraction and import sources
TYPE_SYNONYMS: Dict[str, T] = {
    # Contract
    "contract": T.CONTRACT,
    "agreement": T.CONTRACT,
    "signed": T.CONTRACT,
    "contract_signed": T.CONTRACT,
    "agreement_signed": T.CONTRACT,
    "terms_agreed": T.CONTRACT,
    # Service delivery
    "service_delivered": T.SERVICE_DELIVERED,
    "services_delivered": T.SERVICE_DELIVERED,
    "delivered": T.SERVICE_DELIVERED,
    "delivery": T.SERVICE_DELIVERED,
    "goods_delivered": T.SERVICE_DELIVERED,
    "work_completed": T.SERVICE_DELIVERED,
    "completed": T.SERVICE_DELIVERED,
    # Invoice
    "invoice": T.INVOICE,
    "invoiced": T.INVOICE,
    "invoice_sent": T.INVOICE,
    "invoice_issued": T.INVOICE,
    "billed": T.INVOICE,
    # Payment due
    "payment_due": T.PAYMENT_DUE,
    "due_date": T.PAYMENT_DUE,
    "due": T.PAYMENT_DUE,
    "payment_deadline": T.PAYMENT_DUE,
    # Part payment
    "part_payment": T.PART_PAYMENT,
    "partial_payment": T.PART_PAYMENT,
    "part_paid": T.PART_PAYMENT,
    # Payment in full
    "payment_received": T.PAYMENT_RECEIVED,
    "paid": T.PAYMENT_RECEIVED,
    "payment": T.PAYMENT_RECEIVED,
    "settled": T.PAYMENT_RECEIVED,
    # Reminders
    "reminder": T.REMINDER,
    "chaser": T.REMINDER,
    "chase": T.REMINDER,
    "chased": T.REMINDER,
    "follow_up": T.REMINDER,
    "followup": T.REMINDER,
    "reminder_sent": T.REMINDER,
    "payment_reminder": T.REMINDER,
    "first_reminder": T.REMINDER,
    "second_reminder": T.REMINDER,
    # Final demand
    "final_demand": T.FINAL_DEMAND,
    "final_notice": T.FINAL_DEMAND,
    "demand_letter": T.FINAL_DEMAND,
    "formal_demand": T.FINAL_DEMAND,
    "demand_sent": T.FINAL_DEMAND,
    "7_day_notice": T.FINAL_DEMAND,
    "14_day_notice": T.FINAL_DEMAND,
    # Letter Before Action
    "lba_sent": T.LBA_SENT,
    "lba": T.LBA_SENT,
    "letter_before_action": T.LBA_SENT,
    "letter_before_claim": T.LBA_SENT,
    "pre_action_letter": T.LBA_SENT,
    # Defendant response
    "acknowledgment": T.ACKNOWLEDGMENT,
    "acknowledgement": T.ACKNOWLEDGMENT,
    "acknowledged": T.ACKNOWLEDGMENT,
    "response_received": T.ACKNOWLEDGMENT,
    # Court
    "court_claim": T.COURT_CLAIM,
    "claim_filed": T.COURT_CLAIM,
    "n1": T.COURT_CLAIM,
    "n1_filed": T.COURT_CLAIM,
    "judgment": T.JUDGMENT,
    "judgement": T.JUDGMENT,
    "judgment_obtained": T.JUDGMENT,
    "ccj": T.JUDGMENT,
    "default_judgment": T.JUDGMENT,
    "enforcement": T.ENFORCEMENT,
    "bailiff": T.ENFORCEMENT,
    "warrant_of_control": T.ENFORCEMENT,
    "attachment_of_earnings": T.ENFORCEMENT,
    # Terminal
    "abandoned": T.ABANDONED,
    "written_off": T.ABANDONED,
    # Anything else worth keeping
    "communication": T.COMMUNICATION,
    "email": T.COMMUNICATION,
    "phone": T.COMMUNICATION,
    "call": T.COMMUNICATION,
    "meeting": T.COMMUNICATION,
    "letter": T.COMMUNICATION,
    "correspondence": T.COMMUNICATION,
}


def normalize_event_type(raw_type: Any) -> T:
    """Canonical tag for a raw type string; unknown or non-string values become communication"""
    if not raw_type or not isinstance(raw_type, str):
        return T.COMMUNICATION

    key = raw_type.strip().lower().replace("-", "_").replace(" ", "_")
    return TYPE_SYNONYMS.get(key, T.COMMUNICATION)


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def normalize_event(raw: Mapping[str, Any]) -> Optional[TimelineEvent]:
    """Build an event from loosely-keyed upstream data; None if undatable"""
    event_date = parse_date(_first(raw, "date", "when"))
    if event_date is None:
        return None

    description = str(_first(raw, "description", "what", "event") or "").strip()
    raw_type = _first(raw, "type", "event_type", "eventType")

    return TimelineEvent(
        date=event_date,
        description=description,
        type=normalize_event_type(raw_type),
    )


def sort_events(events: Iterable[TimelineEvent]) -> List[TimelineEvent]:
    """Chronological; stable for events sharing a date"""
    return sorted(events, key=lambda e: e.date)


def deduplicate_events(events: Iterable[TimelineEvent]) -> List[TimelineEvent]:
    """One event per (date, type), keeping the most descriptive"""
    seen: Dict[tuple, TimelineEvent] = {}
    for event in events:
        key = (event.date, event.type)
        existing = seen.get(key)
        if existing is None or len(event.description) > len(existing.description):
            seen[key] = event
    return list(seen.values())


def normalize_timeline(raw_events: Iterable[Mapping[str, Any]]) -> List[TimelineEvent]:
    """Normalise, de-duplicate and sort raw events"""
    events = [e for e in (normalize_event(raw) for raw in raw_events) if e is not None]
    return sort_events(deduplicate_events(events))


def merge_timelines(existing: Iterable[TimelineEvent], incoming: Iterable[TimelineEvent]) -> List[TimelineEvent]:
    return sort_events(deduplicate_events([*existing, *incoming]))


def summarize_timeline(events: Iterable[TimelineEvent]) -> Dict[str, Any]:
    ordered = sort_events(events)
    types = {e.type for e in ordered}
    last = ordered[-1] if ordered else None

    return {
        "total_events": len(ordered),
        "has_contract": T.CONTRACT in types,
        "has_invoice": T.INVOICE in types,
        "has_lba": T.LBA_SENT in types,
        "last_event_date": last.date if last else None,
        "last_event_type": last.type if last else None,
    }


def validate_timeline(events: Iterable[TimelineEvent]) -> Dict[str, Any]:
    """
    Completeness check for a debt claim timeline.

    Missing invoice makes the timeline incomplete; the rest only weaken
    the claim and are reported as warnings.
    """
    types = {e.type for e in events}
    missing_events: List[str] = []
    warnings: List[str] = []

    if T.INVOICE not in types:
        missing_events.append("Invoice date")

    if T.PAYMENT_DUE not in types:
        warnings.append("No explicit payment due date found - will infer from invoice terms")
    if T.CONTRACT not in types:
        warnings.append("Contract date not specified - may weaken claim if disputed")
    if T.SERVICE_DELIVERED not in types:
        warnings.append("Service delivery date not specified - recommended for stronger claim")

    return {
        "is_complete": not missing_events,
        "missing_events": missing_events,
        "warnings": warnings,
    }


def latest_event_date(events: Iterable[TimelineEvent], *types: T) -> Optional[date]:
    """Most recent date among events carrying any of the given tags"""
    dates = [e.date for e in events if e.type in types]
    return max(dates) if dates else None
