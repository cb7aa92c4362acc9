"""Health check handler reporting store readiness."""

import os
from datetime import datetime, timezone

from handlers import dependencies
from utils.error_handling import StoreUnavailableError, json_response
from utils.logging_config import get_logger

logger = get_logger(__name__)


def lambda_handler(event, context):
    """Return 200 when both tables answer, 503 otherwise."""
    try:
        dependencies.get_store().ping()
        store_status, status_code = "ok", 200
    except StoreUnavailableError as exc:
        logger.warning("Store not ready", extra={"error": str(exc)})
        store_status, status_code = "unavailable", 503

    return json_response(
        status_code,
        {
            "status": "ok" if status_code == 200 else "degraded",
            "store": store_status,
            "environment": os.environ.get("ENVIRONMENT", "dev"),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
