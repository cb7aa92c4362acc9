"""
DynamoDB store client shared by the applicant and ticket repositories.

The store is built explicitly, connected once per warm Lambda and injected
into the repositories; nothing here is a module-level global.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

import boto3
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from utils.error_handling import StoreUnavailableError
from utils.logging_config import get_logger

logger = get_logger(__name__)

# Error codes DynamoDB returns for conditions that go away on their own.
TRANSIENT_ERROR_CODES = frozenset(
    {
        "InternalServerError",
        "ProvisionedThroughputExceededException",
        "RequestLimitExceeded",
        "ServiceUnavailable",
        "ThrottlingException",
        "TransactionInProgressException",
    }
)

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def to_attribute_map(item: Dict[str, Any]) -> Dict[str, Any]:
    """Serialize a plain dict into DynamoDB wire format, dropping None values."""
    return {
        key: _serializer.serialize(_to_dynamo_value(value))
        for key, value in item.items()
        if value is not None
    }


def from_attribute_map(item: Dict[str, Any]) -> Dict[str, Any]:
    """Deserialize a DynamoDB wire-format item into a plain dict."""
    return {key: _deserializer.deserialize(value) for key, value in item.items()}


def _to_dynamo_value(value: Any) -> Any:
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamo_value(v) for k, v in value.items() if v is not None}
    return value


def error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


class DynamoDbStore:
    """Owns the boto3 DynamoDB client for both tables and their lifecycle."""

    def __init__(
        self,
        applicants_table: str,
        tickets_table: str,
        *,
        region: Optional[str] = None,
        timeout_seconds: float = 5.0,
        max_attempts: int = 3,
        endpoint_url: Optional[str] = None,
    ):
        self.applicants_table_name = applicants_table
        self.tickets_table_name = tickets_table
        self.region = region
        self.endpoint_url = endpoint_url
        self.config = Config(
            connect_timeout=timeout_seconds,
            read_timeout=timeout_seconds,
            retries={"max_attempts": max_attempts, "mode": "standard"},
        )
        self.client = None

    @property
    def is_ready(self) -> bool:
        return self.client is not None

    def connect(self, verify: bool = False) -> "DynamoDbStore":
        """Create the client; with ``verify`` also check both tables exist."""
        if self.is_ready:
            return self
        kwargs = {"region_name": self.region, "config": self.config}
        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url
        self.client = boto3.client("dynamodb", **kwargs)
        if verify:
            try:
                self.ping()
            except StoreUnavailableError:
                self.close()
                raise
        logger.info(
            "Store connected",
            extra={
                "applicants_table": self.applicants_table_name,
                "tickets_table": self.tickets_table_name,
            },
        )
        return self

    def ping(self) -> None:
        """Describe both tables; raises StoreUnavailableError when unreachable."""
        client = self.ensure_ready()
        with self.translate_errors("describe tables"):
            for table in (self.applicants_table_name, self.tickets_table_name):
                client.describe_table(TableName=table)

    def ensure_ready(self):
        """Gate every operation on an open connection."""
        if not self.is_ready:
            raise StoreUnavailableError("Store is not connected")
        return self.client

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
        self.client = None
        logger.info("Store disconnected")

    def translate_errors(self, operation: str) -> "_ErrorTranslator":
        """Context manager mapping transient botocore failures to StoreUnavailableError."""
        return _ErrorTranslator(operation)


class _ErrorTranslator:
    """Turns throttling, timeouts and connection errors into StoreUnavailableError.

    Non-transient ClientErrors (condition failures, validation) pass through
    untouched so repositories can interpret them.
    """

    def __init__(self, operation: str):
        self.operation = operation

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc is None:
            return False
        if isinstance(exc, ClientError):
            code = error_code(exc)
            if code in TRANSIENT_ERROR_CODES or code == "ResourceNotFoundException":
                raise StoreUnavailableError(f"{self.operation} failed: {code}") from exc
            return False
        if isinstance(exc, BotoCoreError):
            raise StoreUnavailableError(f"{self.operation} failed: {exc}") from exc
        return False
