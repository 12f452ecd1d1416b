"""Application configuration.

Values come from environment variables, optionally seeded from a `.env`
file in the working directory. Every setting has a default so the app runs
with no configuration at all; the email gateway is simply disabled until its
three settings are present.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from core.models.invoice import validate_gst_rate


class BusinessDetails(BaseModel):
    """Seller details printed on every invoice and used in share templates."""

    name: str = "Aakash Furniture"
    address: str = "Shop No. 2, Near SBI Bank, Kolar Road, Bhopal (M.P) - 462042"
    phone1: str = "+91 91110 92001"
    phone2: str = "+91 99775 18856"
    email: str = "aakashfurniture@gmail.com"
    gstin: str = "23ALVPL7961R2ZW"
    jurisdiction: str = "Bhopal"
    bank_name: str = "INDIAN BANK"
    bank_account: str = "CA 7184276999"
    bank_ifsc: str = "IDIB000K735"


class AppConfig(BaseModel):
    """Runtime settings for storage, numbering, export and sharing."""

    # Storage
    storage_url: str = Field(
        default="file://./data/invoices.json",
        description="file://<path> for a local JSON store, redis:// for Valkey",
    )
    storage_key: str = Field(
        default="aakash_furniture_invoices",
        description="Key of the slot holding the serialized invoice list",
        min_length=1,
    )

    # Invoice defaults
    invoice_prefix: str = Field(
        default="AF",
        description="Prefix of human-facing invoice numbers",
        min_length=1,
        max_length=8,
    )
    default_gst_rate: float = Field(
        default=18,
        description="GST rate given to newly added items",
    )

    # Export / sharing
    outbox_dir: str = Field(
        default="./outbox",
        description="Where downloaded PDFs are written",
    )
    email_gateway_url: str | None = None
    email_gateway_api_key: str | None = None
    email_gateway_hmac_secret: str | None = None

    # Logging
    log_level: str = Field(default="INFO")

    business: BusinessDetails = Field(default_factory=BusinessDetails)

    @field_validator("default_gst_rate")
    @classmethod
    def default_gst_rate_allowed(cls, v: float) -> float:
        return validate_gst_rate(v)

    @field_validator("log_level")
    @classmethod
    def log_level_known(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def email_gateway_enabled(self) -> bool:
        """Whether all three gateway credentials are set."""
        return bool(
            self.email_gateway_url
            and self.email_gateway_api_key
            and self.email_gateway_hmac_secret
        )


# Environment variable -> AppConfig field
_ENV_FIELDS = {
    "INVOICE_STORAGE_URL": "storage_url",
    "INVOICE_STORAGE_KEY": "storage_key",
    "INVOICE_PREFIX": "invoice_prefix",
    "DEFAULT_GST_RATE": "default_gst_rate",
    "INVOICE_OUTBOX_DIR": "outbox_dir",
    "EMAIL_GATEWAY_URL": "email_gateway_url",
    "EMAIL_GATEWAY_API_KEY": "email_gateway_api_key",
    "EMAIL_GATEWAY_HMAC_SECRET": "email_gateway_hmac_secret",
    "LOG_LEVEL": "log_level",
}


def load_config(env_file: str | None = ".env") -> AppConfig:
    """
    Build AppConfig from the environment.

    Args:
        env_file: Optional dotenv file loaded first (existing env vars win).
            Pass None to skip it.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value.
    """
    if env_file:
        load_dotenv(env_file, override=False)

    values = {}
    for env_name, field_name in _ENV_FIELDS.items():
        raw = os.getenv(env_name)
        if raw is not None and raw != "":
            values[field_name] = raw

    return AppConfig(**values)
