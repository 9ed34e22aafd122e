from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    API_V1_STR: str = "/api/v1"

    BILLING_CREDITOR_IBAN: str = ""
    BILLING_CREDITOR_NAME: str = ""
    BILLING_CREDITOR_STREET: str = ""
    BILLING_CREDITOR_HOUSE_NUMBER: str = ""
    BILLING_CREDITOR_POSTAL_CODE: str = ""
    BILLING_CREDITOR_CITY: str = ""
    BILLING_CREDITOR_COUNTRY: str = "CH"

    BILLING_DEFAULT_CURRENCY: str = "CHF"
    BILLING_LABEL_LANGUAGE: str = "de"

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
