"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from claims_gateway.api.main import create_app
from claims_gateway.api.dependencies import get_today
from claims_gateway.domain.models import (
    ClaimRecord,
    ClaimStatus,
    InvoiceFacts,
    Party,
    PartyType,
    SolvencyStatus,
    TimelineEvent,
    TimelineEventType,
)


# Pinned clock for every test that goes through the API
TODAY = date(2025, 6, 1)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a pinned clock"""
    app = create_app()
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def business_claimant() -> Party:
    return Party(
        type=PartyType.BUSINESS,
        name="Northwind Consulting Ltd",
        address="1 High Street",
        city="Leeds",
        postcode="LS1 1AA",
        company_number="12345678",
        solvency_status=SolvencyStatus.ACTIVE,
    )


@pytest.fixture
def business_defendant() -> Party:
    return Party(
        type=PartyType.BUSINESS,
        name="Acme Services Ltd",
        address="12 Industrial Estate",
        city="Birmingham",
        postcode="B1 1AA",
        company_number="01234567",
        solvency_status=SolvencyStatus.ACTIVE,
    )


@pytest.fixture
def individual_defendant() -> Party:
    return Party(type=PartyType.INDIVIDUAL, name="Jane Smith", city="Bristol", postcode="BS1 4DJ")


@pytest.fixture
def make_claim(business_claimant: Party, business_defendant: Party):
    """
    Factory for claim snapshots.

    Defaults to a £10,000 B2B invoice due 90 days before TODAY.
    """

    def _make(
        amount: str = "10000",
        due_date: date | None = date(2025, 3, 3),
        date_issued: date | None = date(2025, 2, 1),
        events: list[tuple[date, TimelineEventType]] | None = None,
        defendant: Party | None = None,
        claimant: Party | None = None,
        status: ClaimStatus = ClaimStatus.SENT,
    ) -> ClaimRecord:
        timeline = tuple(
            TimelineEvent(date=d, description=t.value.replace("_", " ").title(), type=t)
            for d, t in (events or [])
        )
        return ClaimRecord(
            id="claim-001",
            claimant=claimant or business_claimant,
            defendant=defendant or business_defendant,
            invoice=InvoiceFacts(
                invoice_number="INV-1001",
                total_amount=Decimal(amount),
                date_issued=date_issued,
                due_date=due_date,
            ),
            timeline=timeline,
            status=status,
        )

    return _make


@pytest.fixture
def claim_payload() -> dict:
    """JSON body for a £10,000 B2B claim due 90 days before TODAY"""
    return {
        "id": "claim-001",
        "status": "sent",
        "claimant": {
            "type": "Business",
            "name": "Northwind Consulting Ltd",
            "company_number": "12345678",
            "solvency_status": "Active",
        },
        "defendant": {
            "type": "Business",
            "name": "Acme Services Ltd",
            "company_number": "01234567",
            "solvency_status": "Active",
        },
        "invoice": {
            "invoice_number": "INV-1001",
            "total_amount": "10000.00",
            "date_issued": "2025-02-01",
            "due_date": "2025-03-03",
        },
        "timeline": [
            {"date": "2025-02-01", "description": "Invoice issued", "type": "invoice"},
        ],
    }
