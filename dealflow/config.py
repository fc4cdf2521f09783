from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|staging|prod
    DEALFLOW_DB_URL: str = "sqlite+aiosqlite:///./dealflow.db"

    # --- Minimal B2B Auth (API key) ---
    # Send: X-API-Key: <key>
    API_KEY: str | None = None

    # --- Scoring ---
    # Placeholder until a market-data feed backs the market timing factor.
    MARKET_TIMING_SCORE: float = 80.0

    # --- Outbound webhook (deal analysis events) ---
    WEBHOOK_URL: str | None = None
    WEBHOOK_SECRET: str | None = None
    WEBHOOK_TIMEOUT_S: int = 20

    # --- Third-party integrations (checked by validate_environment) ---
    SUPABASE_URL: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    STRIPE_SECRET_KEY: str | None = None
    STRIPE_PUBLISHABLE_KEY: str | None = None
    STRIPE_WEBHOOK_SECRET: str | None = None

    TELNYX_API_KEY: str | None = None
    TELNYX_SMS_FROM_NUMBER: str | None = None

    DOCUSIGN_INTEGRATION_KEY: str | None = None
    DOCUSIGN_USER_ID: str | None = None
    DOCUSIGN_ACCOUNT_ID: str | None = None

    ZAPIER_WEBHOOK_URL: str | None = None

    SITE_URL: str | None = None


# STRIPE_WEBHOOK_SECRET is optional.
REQUIRED_INTEGRATION_VARS: tuple[str, ...] = (
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "SUPABASE_SERVICE_ROLE_KEY",
    "STRIPE_SECRET_KEY",
    "STRIPE_PUBLISHABLE_KEY",
    "TELNYX_API_KEY",
    "TELNYX_SMS_FROM_NUMBER",
    "DOCUSIGN_INTEGRATION_KEY",
    "DOCUSIGN_USER_ID",
    "DOCUSIGN_ACCOUNT_ID",
    "ZAPIER_WEBHOOK_URL",
    "SITE_URL",
)

_URL_VARS = ("SUPABASE_URL", "ZAPIER_WEBHOOK_URL", "SITE_URL", "WEBHOOK_URL")


def validate_environment(settings: Settings) -> list[str]:
    """
    Returns a list of human-readable problems with the integration config.
    Empty list => everything the outer collaborators need is present.
    """
    errors: list[str] = []
    for name in REQUIRED_INTEGRATION_VARS:
        v = getattr(settings, name)
        if not v or not str(v).strip():
            errors.append(f"missing {name}")

    for name in _URL_VARS:
        v = getattr(settings, name)
        if v and not str(v).startswith(("http://", "https://")):
            errors.append(f"invalid url in {name}")

    phone = settings.TELNYX_SMS_FROM_NUMBER
    if phone and not (phone.startswith("+") and phone[1:].isdigit()):
        errors.append("TELNYX_SMS_FROM_NUMBER must be E.164 (+15551234567)")

    key = settings.STRIPE_SECRET_KEY
    if key and not key.startswith(("sk_test_", "sk_live_")):
        errors.append("STRIPE_SECRET_KEY has unexpected prefix")

    return errors
