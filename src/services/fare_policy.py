"""Payment-type parsing and fare computation for bookings."""

from decimal import Decimal, DecimalException, InvalidOperation
from typing import Any

from boto3.dynamodb.types import DYNAMODB_CONTEXT

from models.ticket import PaymentType
from utils.error_handling import InvalidAmountError, ValidationError

ZERO = Decimal("0")


def parse_payment_type(raw: Any, strict: bool = True) -> PaymentType:
    """
    Map a submitted payment type onto FREE or PAID.

    Strict mode accepts only the two names (any case) and rejects the rest.
    Permissive mode treats anything that is not PAID as FREE.
    """
    normalized = str(raw).strip().upper() if raw is not None else ""
    if normalized == PaymentType.PAID.value:
        return PaymentType.PAID
    if normalized == PaymentType.FREE.value or not strict:
        return PaymentType.FREE
    raise ValidationError(f"Unknown payment type: {raw}")


def to_amount(raw: Any) -> Decimal:
    """Coerce a submitted amount to a finite Decimal or raise InvalidAmountError."""
    if raw is None or isinstance(raw, bool):
        raise InvalidAmountError()
    if isinstance(raw, float):
        raw = repr(raw)
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmountError() from exc
    if not value.is_finite():
        raise InvalidAmountError()
    return value


def ensure_storable(value: Decimal) -> Decimal:
    """Reject amounts DynamoDB cannot hold exactly (38 digits, exponent -130..125)."""
    try:
        DYNAMODB_CONTEXT.create_decimal(value)
    except DecimalException as exc:
        raise InvalidAmountError("Amount is out of range") from exc
    return value


def compute_fare(payment_type: PaymentType, amount: Any = None) -> Decimal:
    """Paid journeys charge the supplied amount (never below zero); free ones charge 0."""
    if payment_type is PaymentType.PAID:
        return ensure_storable(max(ZERO, to_amount(amount)))
    return ZERO
