"""Environment-driven application settings.

Every setting can be overridden with an ``ORDERPAY_``-prefixed environment
variable (``ORDERPAY_PAYMENT_SERVICE_URL``, ``ORDERPAY_LOG_LEVEL``, ...) or a
``.env`` file in the working directory.

Persistence is configured per domain in ``src/domain.toml``; PROTEAN_ENV
picks the overlay. When ``payment_service_url`` is unset the ordering
context talks to the payments context in process.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ORDERPAY_", env_file=".env", extra="ignore")

    env: str = "development"

    # Remote payments service
    payment_service_url: str | None = None
    payment_process_timeout: float = 10.0
    payment_cancel_timeout: float = 5.0

    # Payments context: the fake authorizer approves amounts below this
    decline_threshold: float = 10000.0

    # Logging
    log_level: str | None = None
    log_dir: str | None = "logs"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()
