# flighter/config.py
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App
    APP_ENV: Literal["dev", "prod", "staging"] = "dev"
    TZ: str = "UTC"

    # Amadeus (empty credentials are reported by the search endpoints)
    AMADEUS_CLIENT_ID: str = ""
    AMADEUS_CLIENT_SECRET: str = ""
    AMADEUS_ENV: str = "test"  # or "production"

    # Search defaults
    DEFAULT_MAX_RESULTS: int = 20
    DEFAULT_ADULTS: int = 1
    DEFAULT_DEPARTURE_OFFSET_DAYS: int = 7
    SEARCH_TIMEOUT_SECONDS: float = 12.0
    # Per-read limit on provider calls; two reads plus the retry backoff fit the budget above
    PROVIDER_READ_TIMEOUT_SECONDS: float = 5.0

    # Amadeus offers carry no rating, every reshaped flight gets this one
    DEFAULT_FLIGHT_RATING: float = 4.0

    # Circuit breaker around the provider
    BREAKER_FAILURE_THRESHOLD: int = 5
    BREAKER_RECOVERY_SECONDS: int = 60

    # read .env and ignore any extra keys
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def has_amadeus_credentials(self) -> bool:
        return bool(self.AMADEUS_CLIENT_ID and self.AMADEUS_CLIENT_SECRET)

settings = Settings()
