"""Companies House HTTP client for defendant solvency lookups"""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from claims_gateway.config import settings
from claims_gateway.domain.exceptions import CompaniesHouseAPIError, InvalidCompanyDataError
from claims_gateway.domain.models import Party, PartyType, SolvencyStatus
from claims_gateway.infrastructure.observability.metrics import registry_failure_counter, registry_latency_histogram

logger = logging.getLogger(__name__)

COMPANY_STATUS_MAP: Dict[str, SolvencyStatus] = {
    "active": SolvencyStatus.ACTIVE,
    "open": SolvencyStatus.ACTIVE,
    "voluntary-arrangement": SolvencyStatus.ACTIVE,  # CVA companies are still trading
    "dissolved": SolvencyStatus.DISSOLVED,
    "converted-closed": SolvencyStatus.DISSOLVED,
    "closed": SolvencyStatus.DISSOLVED,
    "liquidation": SolvencyStatus.INSOLVENT,
    "receivership": SolvencyStatus.INSOLVENT,
    "administration": SolvencyStatus.INSOLVENT,
    "insolvency-proceedings": SolvencyStatus.INSOLVENT,
}

RETRYABLE_STATUS = {429, 500, 502, 503, 504}


def map_company_status(status: Optional[str]) -> SolvencyStatus:
    """Registry company_status -> solvency status used by the assessor"""
    if not status:
        return SolvencyStatus.UNKNOWN
    return COMPANY_STATUS_MAP.get(status.lower(), SolvencyStatus.UNKNOWN)


def parse_company(data: Dict[str, Any]) -> Party:
    """Build a business Party from a company profile or search item"""
    try:
        address = data.get("registered_office_address") or data.get("address") or {}
        lines = [address.get(k) for k in ("premises", "address_line_1", "address_line_2")]

        return Party(
            type=PartyType.BUSINESS,
            name=data.get("company_name") or data["title"],
            address=", ".join(line for line in lines if line),
            city=address.get("locality", ""),
            county=address.get("region", ""),
            postcode=address.get("postal_code", ""),
            company_number=data["company_number"],
            solvency_status=map_company_status(data.get("company_status")),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise InvalidCompanyDataError(f"Invalid company data from registry: {e}") from e


class CompaniesHouseClient:
    """Client for the UK Companies House public data API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.companies_house_api_base
        self.api_key = api_key if api_key is not None else settings.companies_house_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = settings.registry_max_retries
        self.backoff_base = settings.registry_backoff_base
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        # API key is the basic-auth username with an empty password
        return httpx.AsyncClient(
            base_url=self.base_url,
            auth=(self.api_key, ""),
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _get(self, client: httpx.AsyncClient, path: str, params: Dict[str, Any] | None = None) -> httpx.Response:
        """
        GET with exponential backoff.

        Retry strategy:
        - Backoff: base, 2*base, 4*base ...
        - Retries on 429/5xx and network failures
        - 404 is returned to the caller; other 4xx fail immediately
        """
        attempt = 0
        while True:
            try:
                with registry_latency_histogram.time():
                    response = await client.get(path, params=params)
                if response.status_code in RETRYABLE_STATUS:
                    response.raise_for_status()
                return response

            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                attempt += 1
                registry_failure_counter.inc()

                if attempt >= self.max_retries:
                    raise CompaniesHouseAPIError(f"Companies House unavailable after {attempt} attempts: {e}") from e

                backoff = self.backoff_base * (2 ** (attempt - 1))
                logger.warning(
                    "Companies House request failed, retrying",
                    extra={"path": path, "attempt": attempt, "backoff_seconds": backoff},
                )
                await asyncio.sleep(backoff)

    @staticmethod
    def _raise_for_error(response: httpx.Response) -> None:
        if response.status_code == 401:
            raise CompaniesHouseAPIError("Companies House API: invalid API key")
        if response.is_error:
            raise CompaniesHouseAPIError(f"Companies House API error: {response.status_code}")

    async def get_company(self, company_number: str) -> Optional[Party]:
        """
        Fetch a company profile by registration number.

        Returns None when the company does not exist.

        Raises:
            CompaniesHouseAPIError: On auth failure or persistent unavailability
            InvalidCompanyDataError: On a malformed profile
        """
        async with self._client() as client:
            response = await self._get(client, f"/company/{company_number}")
            if response.status_code == 404:
                return None
            self._raise_for_error(response)
            return parse_company(response.json())

    async def search_company(self, query: str) -> Optional[Party]:
        """
        Search by name or number and return the best match.

        The full profile is preferred; the search item is used when the
        profile cannot be fetched.
        """
        async with self._client() as client:
            response = await self._get(client, "/search/companies", params={"q": query, "items_per_page": 5})
            self._raise_for_error(response)

            items = response.json().get("items") or []
            if not items:
                return None
            first = items[0]
            company_number = first.get("company_number")
            if not company_number:
                return parse_company(first)

            try:
                profile = await self._get(client, f"/company/{company_number}")
            except CompaniesHouseAPIError as e:
                logger.warning(
                    "Company profile unavailable, using search result",
                    extra={"company_number": company_number, "error": str(e)},
                )
                return parse_company(first)

            if profile.is_success:
                return parse_company(profile.json())

            logger.warning(
                "Company profile unavailable, using search result",
                extra={"company_number": company_number, "status": profile.status_code},
            )
            return parse_company(first)
