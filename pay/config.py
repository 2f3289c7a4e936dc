"""Library configuration using pydantic-settings."""

import warnings

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pay settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Pay"  # tags customers created on the processor
    environment: str = "development"  # development, staging, production

    # Subscriptions
    default_subscription_name: str = "default"
    default_plan_name: str = "default"

    # Processors
    enabled_processors: list[str] = ["stripe"]

    # Stripe
    stripe_secret_key: str = ""

    @model_validator(mode="after")
    def _validate_stripe_keys(self) -> "Settings":
        """Reject a missing Stripe key in production and warn in development."""
        if "stripe" in self.enabled_processors and not self.stripe_secret_key:
            if self.environment == "production":
                raise ValueError(
                    "STRIPE_SECRET_KEY must be set when the stripe processor is enabled in production."
                )
            warnings.warn(
                "STRIPE_SECRET_KEY is not set — Stripe calls will fail until it is configured.",
                UserWarning,
                stacklevel=1,
            )
        return self


settings = Settings()
