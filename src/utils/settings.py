"""
Runtime settings for the counter Lambda.

Values come from environment variables set by the CDK stack; the defaults
suit local runs and tests.
"""

from dataclasses import dataclass
import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AppSettings:
    """Application settings resolved once per warm Lambda."""

    environment: str = "dev"
    aws_region: str = "ap-south-1"

    # Storage
    applicants_table: str = "bus-pass-applicants"
    tickets_table: str = "bus-pass-tickets"
    attachments_bucket: str = ""
    store_timeout_seconds: float = 5.0
    store_max_retries: int = 3

    # Pass issuance
    pass_id_prefix: str = "TSRTC"
    pass_id_max_attempts: int = 5
    qr_timeout_seconds: float = 5.0

    # Booking
    strict_payment_types: bool = True

    # Lookup cache for immutable applicant records
    lookup_cache_ttl_seconds: int = 300
    lookup_cache_max_size: int = 500

    @classmethod
    def from_environment(cls) -> "AppSettings":
        """Load settings from environment variables."""
        defaults = cls()
        return cls(
            environment=os.environ.get("ENVIRONMENT", defaults.environment),
            aws_region=os.environ.get("AWS_REGION", defaults.aws_region),
            applicants_table=os.environ.get("APPLICANTS_TABLE", defaults.applicants_table),
            tickets_table=os.environ.get("TICKETS_TABLE", defaults.tickets_table),
            attachments_bucket=os.environ.get("ATTACHMENTS_BUCKET", defaults.attachments_bucket),
            store_timeout_seconds=float(
                os.environ.get("STORE_TIMEOUT_SECONDS", defaults.store_timeout_seconds)
            ),
            store_max_retries=int(os.environ.get("STORE_MAX_RETRIES", defaults.store_max_retries)),
            pass_id_prefix=os.environ.get("PASS_ID_PREFIX", defaults.pass_id_prefix),
            pass_id_max_attempts=int(
                os.environ.get("PASS_ID_MAX_ATTEMPTS", defaults.pass_id_max_attempts)
            ),
            qr_timeout_seconds=float(
                os.environ.get("QR_TIMEOUT_SECONDS", defaults.qr_timeout_seconds)
            ),
            strict_payment_types=_env_bool("STRICT_PAYMENT_TYPES", defaults.strict_payment_types),
            lookup_cache_ttl_seconds=int(
                os.environ.get("LOOKUP_CACHE_TTL_SECONDS", defaults.lookup_cache_ttl_seconds)
            ),
            lookup_cache_max_size=int(
                os.environ.get("LOOKUP_CACHE_MAX_SIZE", defaults.lookup_cache_max_size)
            ),
        )
