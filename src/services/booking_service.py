"""Ticket booking against resolved applicants."""

from datetime import datetime, timezone
from functools import partial
from typing import Callable, List
import uuid

from models.ticket import BookingRequest, TicketRecord
from repositories.ticket_repo import TicketRepository
from services.fare_policy import compute_fare, parse_payment_type
from utils.error_handling import UnresolvableApplicantError
from utils.logging_config import get_logger
from utils.retry import call_with_retry
from utils.validators import ensure_all_present, is_record_ref

logger = get_logger(__name__)

REQUIRED_FIELDS = ("applicant_ref", "source", "destination", "payment_type")


class BookingService:
    """
    Creates ticket records.

    There is no idempotency key: booking the same journey twice yields two
    tickets, as a counter may hand out two physical tickets.
    """

    def __init__(
        self,
        tickets: TicketRepository,
        *,
        strict_payment_types: bool = True,
        store_retries: int = 3,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ):
        self.tickets = tickets
        self.strict_payment_types = strict_payment_types
        self.store_retries = store_retries
        self.clock = clock
        self.id_factory = id_factory

    def book_ticket(self, request: BookingRequest) -> TicketRecord:
        ensure_all_present(request.model_dump(), REQUIRED_FIELDS)
        payment_type = parse_payment_type(request.payment_type, self.strict_payment_types)
        amount = compute_fare(payment_type, request.amount)

        # Malformed refs can never match a stored applicant.
        if not is_record_ref(request.applicant_ref):
            raise UnresolvableApplicantError()

        ticket = TicketRecord(
            ticket_id=self.id_factory(),
            applicant_ref=request.applicant_ref,
            source=request.source,
            destination=request.destination,
            payment_type=payment_type,
            amount=amount,
            booked_at=self.clock(),
        )
        call_with_retry(
            partial(self.tickets.create, ticket),
            attempts=self.store_retries,
            label="insert ticket",
        )
        logger.info(
            "Ticket booked",
            extra={
                "ticket_id": ticket.ticket_id,
                "record_ref": ticket.applicant_ref,
                "payment_type": payment_type.value,
            },
        )
        return ticket

    def list_tickets(self, applicant_ref: str) -> List[TicketRecord]:
        if not is_record_ref(applicant_ref):
            raise UnresolvableApplicantError()
        return call_with_retry(
            partial(self.tickets.list_for_applicant, applicant_ref),
            attempts=self.store_retries,
            label="list tickets",
        )
