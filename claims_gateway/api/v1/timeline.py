"""POST /v1/timeline/normalize - clean up imported or extracted events"""

from fastapi import APIRouter

from claims_gateway.api.v1.schemas import (
    RawTimelineRequest,
    TimelineEventSchema,
    TimelineResponse,
    TimelineSummarySchema,
    TimelineValidationSchema,
)
from claims_gateway.domain.timeline import normalize_timeline, summarize_timeline, validate_timeline

router = APIRouter()


@router.post("/timeline/normalize", response_model=TimelineResponse)
def normalize(body: RawTimelineRequest):
    """
    Map raw events onto the typed event set.

    Undatable events are dropped, duplicates (same date and type) collapsed,
    and the result sorted oldest first.
    """
    events = normalize_timeline(body.events)

    return TimelineResponse(
        events=[TimelineEventSchema.model_validate(e) for e in events],
        summary=TimelineSummarySchema(**summarize_timeline(events)),
        validation=TimelineValidationSchema(**validate_timeline(events)),
    )
