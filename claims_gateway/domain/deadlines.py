"""Procedural deadlines under the Pre-Action Protocol and the CPR"""

from datetime import date
from typing import Optional

from claims_gateway.domain.models import PartyType
from claims_gateway.utils.date_utils import add_days

LBA_RESPONSE_DAYS_CONSUMER = 30
LBA_RESPONSE_DAYS_BUSINESS = 14
ACKNOWLEDGMENT_DAYS = 14  # CPR 10.3
DEFENCE_DAYS_AFTER_ACKNOWLEDGMENT = 14  # CPR 15.4
DEFENCE_DAYS_WITHOUT_ACKNOWLEDGMENT = 28
ENFORCEMENT_WAIT_DAYS = 14


def lba_response_period_days(defendant_type: PartyType) -> int:
    """
    Minimum time the debtor gets to answer a Letter Before Action.

    Pre-Action Protocol for Debt Claims: 30 days for an individual,
    14 days is accepted practice between businesses.
    """
    if defendant_type == PartyType.INDIVIDUAL:
        return LBA_RESPONSE_DAYS_CONSUMER
    return LBA_RESPONSE_DAYS_BUSINESS


def lba_expiry_date(lba_date: date, defendant_type: PartyType) -> date:
    return add_days(lba_date, lba_response_period_days(defendant_type))


def has_lba_expired(lba_date: date, defendant_type: PartyType, today: date) -> bool:
    return today > lba_expiry_date(lba_date, defendant_type)


def acknowledgment_deadline(service_date: date) -> date:
    """CPR Part 10 - defendant has 14 days from service to acknowledge"""
    return add_days(service_date, ACKNOWLEDGMENT_DAYS)


def defence_deadline(service_date: date, acknowledged_on: Optional[date] = None) -> date:
    """
    CPR Part 15 - defence due 14 days after acknowledgment, or 28 days
    from service when the defendant has not acknowledged.
    """
    if acknowledged_on is not None:
        return add_days(acknowledged_on, DEFENCE_DAYS_AFTER_ACKNOWLEDGMENT)
    return add_days(service_date, DEFENCE_DAYS_WITHOUT_ACKNOWLEDGMENT)


def can_apply_for_default_judgment(deadline: date, today: date) -> bool:
    """CPR Part 12 - available once the defence deadline has passed"""
    return today > deadline


def enforcement_date(judgment_date: date) -> date:
    """Earliest sensible enforcement date after judgment"""
    return add_days(judgment_date, ENFORCEMENT_WAIT_DAYS)
