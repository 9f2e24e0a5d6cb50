from fastapi import FastAPI, HTTPException, Query

app = FastAPI(title="Mock Companies House", version="1.0.0")

COMPANIES = {
    "01234567": {
        "company_name": "ACME SERVICES LTD",
        "company_number": "01234567",
        "company_status": "active",
        "registered_office_address": {
            "premises": "12",
            "address_line_1": "Industrial Estate",
            "locality": "Birmingham",
            "region": "West Midlands",
            "postal_code": "B1 1AA",
        },
    },
    "09876543": {
        "company_name": "QUANTUM DYNAMICS LTD",
        "company_number": "09876543",
        "company_status": "active",
        "registered_office_address": {
            "premises": "Unit 4",
            "address_line_1": "Innovation Park",
            "locality": "Cambridge",
            "region": "Cambridgeshire",
            "postal_code": "CB4 0WS",
        },
    },
    "07654321": {
        "company_name": "NORTHERN FREIGHT LTD",
        "company_number": "07654321",
        "company_status": "dissolved",
        "registered_office_address": {
            "address_line_1": "1 Dock Road",
            "locality": "Liverpool",
            "postal_code": "L3 4AA",
        },
    },
    "11223344": {
        "company_name": "BUILDRIGHT CONSTRUCTION PLC",
        "company_number": "11223344",
        "company_status": "liquidation",
        "registered_office_address": {
            "address_line_1": "32 London Bridge Street",
            "locality": "London",
            "region": "Greater London",
            "postal_code": "SE1 9SG",
        },
    },
}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/search/companies")
def search(q: str = Query(...), items_per_page: int = 5):
    term = q.strip().lower()
    items = [
        {
            "title": c["company_name"],
            "company_number": c["company_number"],
            "company_status": c["company_status"],
            "address": c["registered_office_address"],
        }
        for c in COMPANIES.values()
        if term in c["company_name"].lower() or term == c["company_number"]
    ]
    return {"items": items[:items_per_page], "total_results": len(items)}


@app.get("/company/{company_number}")
def profile(company_number: str):
    company = COMPANIES.get(company_number)
    if company is None:
        raise HTTPException(status_code=404, detail="company-profile-not-found")
    return company
