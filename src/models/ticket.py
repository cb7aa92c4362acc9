"""Ticket models."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class PaymentType(str, Enum):
    """How a journey is paid for."""

    FREE = "FREE"
    PAID = "PAID"


class BookingRequest(BaseModel):
    """Inbound booking payload, kept raw so the service can validate it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    applicant_ref: Optional[str] = Field(default=None, alias="applicantId")
    source: Optional[str] = None
    destination: Optional[str] = None
    payment_type: Optional[str] = None
    amount: Optional[Any] = None


class TicketRecord(BaseModel):
    """One booked journey. Never mutated after creation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ticket_id: str
    applicant_ref: str = Field(alias="applicantId")
    source: str
    destination: str
    payment_type: PaymentType
    amount: Decimal = Field(ge=0)
    booked_at: datetime

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal):
        """Emit whole fares as ints and the rest as floats."""
        if amount == amount.to_integral_value():
            return int(amount)
        return float(amount)
