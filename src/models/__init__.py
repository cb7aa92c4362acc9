"""Pydantic models for applicants, tickets and API payloads."""

from models.applicant import (  # noqa: F401
    COUNTER_DELIVERY,
    FREE_SCHEME,
    AgeBreakdown,
    ApplicantInput,
    ApplicantRecord,
    Attachments,
    InlineFile,
    InlineFiles,
    PassIssueResult,
)
from models.ticket import BookingRequest, PaymentType, TicketRecord  # noqa: F401
