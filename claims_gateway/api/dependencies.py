"""Dependency injection for FastAPI endpoints"""

from datetime import date

from fastapi import Request

from claims_gateway.config import settings
from claims_gateway.domain.rules import LegalRules
from claims_gateway.infrastructure.clients.companies_house import CompaniesHouseClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Current date for the engine; override in tests to pin the clock"""
    return date.today()


def get_legal_rules() -> LegalRules:
    """Jurisdiction constants with environment overrides"""
    return settings.legal_rules()


def get_companies_house_client() -> CompaniesHouseClient:
    """Provide Companies House API client instance"""
    return CompaniesHouseClient()
