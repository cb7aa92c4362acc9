"""
Environment-specific configuration settings.

Cost-optimized defaults for development/testing.
"""

from dataclasses import dataclass
import os


@dataclass
class Settings:
    """Deployment settings with cost-optimized defaults."""

    # Environment
    environment: str = "dev"
    aws_region: str = "ap-south-1"

    # Pass issuance
    pass_id_prefix: str = "TSRTC"
    pass_id_max_attempts: int = 5
    strict_payment_types: bool = True

    # Lambda Configuration
    lambda_memory_mb: int = 512
    lambda_timeout_seconds: int = 30
    store_timeout_seconds: int = 5

    # Lookup cache for immutable applicant records
    lookup_cache_ttl_seconds: int = 300

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")
        region = os.environ.get("AWS_REGION", cls.aws_region)
        prefix = os.environ.get("PASS_ID_PREFIX", cls.pass_id_prefix)
        strict = os.environ.get("STRICT_PAYMENT_TYPES", "true").lower() == "true"

        # Production overrides
        if env == "prod":
            return cls(
                environment="prod",
                aws_region=region,
                pass_id_prefix=prefix,
                strict_payment_types=strict,
                lambda_memory_mb=1024,
                lambda_timeout_seconds=60,
                lookup_cache_ttl_seconds=900,
            )

        return cls(
            environment=env,
            aws_region=region,
            pass_id_prefix=prefix,
            strict_payment_types=strict,
        )
