"""Configuration management using Pydantic Settings"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict

from claims_gateway.domain.rules import (
    BOE_BASE_RATE,
    COURT_FEE_CAP,
    DEFAULT_PAYMENT_TERMS_DAYS,
    LIMITATION_PERIOD_YEARS,
    NON_COMMERCIAL_INTEREST_RATE,
    SMALL_CLAIMS_LIMIT,
    STATUTORY_INTEREST_ADDITION,
    LegalRules,
)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Jurisdiction constants (England & Wales)
    boe_base_rate: Decimal = BOE_BASE_RATE
    statutory_interest_addition: Decimal = STATUTORY_INTEREST_ADDITION
    non_commercial_interest_rate: Decimal = NON_COMMERCIAL_INTEREST_RATE
    default_payment_terms_days: int = DEFAULT_PAYMENT_TERMS_DAYS
    limitation_period_years: int = LIMITATION_PERIOD_YEARS
    small_claims_limit: Decimal = SMALL_CLAIMS_LIMIT
    court_fee_cap: Decimal = COURT_FEE_CAP

    # External Services
    companies_house_api_base: str = "https://api.company-information.service.gov.uk"
    companies_house_api_key: str = ""

    # Service
    service_name: str = "claims-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0
    registry_max_retries: int = 3
    registry_backoff_base: float = 0.5  # Exponential backoff base in seconds

    def legal_rules(self) -> LegalRules:
        """Engine rule set with any environment overrides applied"""
        return LegalRules(
            boe_base_rate=self.boe_base_rate,
            statutory_interest_addition=self.statutory_interest_addition,
            non_commercial_interest_rate=self.non_commercial_interest_rate,
            default_payment_terms_days=self.default_payment_terms_days,
            limitation_period_years=self.limitation_period_years,
            small_claims_limit=self.small_claims_limit,
            court_fee_cap=self.court_fee_cap,
        )


settings = Settings()
