"""GET /v1/companies/search - defendant lookup on Companies House"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from claims_gateway.api.dependencies import get_companies_house_client, get_request_id
from claims_gateway.api.v1.schemas import PartySchema
from claims_gateway.domain.exceptions import CompaniesHouseAPIError, InvalidCompanyDataError
from claims_gateway.infrastructure.clients.companies_house import CompaniesHouseClient

router = APIRouter()


@router.get("/companies/search", response_model=PartySchema)
async def search_company(
    request: Request,
    q: str = Query(..., min_length=1, description="Company name or number"),
    client: CompaniesHouseClient = Depends(get_companies_house_client),
):
    """
    Find a company and its solvency status.

    Returns:
        Business party pre-filled with registered address and solvency
    """
    request_id = get_request_id(request)

    try:
        party = await client.search_company(q)

    except CompaniesHouseAPIError as e:
        logging.error(f"Companies House error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Companies House unavailable")

    except InvalidCompanyDataError as e:
        logging.error(f"Invalid company data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail="Invalid response from Companies House")

    if party is None:
        raise HTTPException(status_code=404, detail="Company not found")

    return PartySchema.model_validate(party)
