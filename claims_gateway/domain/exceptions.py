"""Domain-specific exceptions

The claim engine itself never raises: missing or bad facts degrade to zero
or None results and failed viability checks are advisory. These cover the
infrastructure around it.
"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class CompaniesHouseAPIError(DomainException):
    """Companies House API returned an error or is unavailable"""

    pass


class InvalidCompanyDataError(DomainException):
    """Company profile from the registry is malformed"""

    pass
