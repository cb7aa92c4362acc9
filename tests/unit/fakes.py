"""In-memory stand-ins for the DynamoDB repositories and the QR encoder."""

from datetime import datetime, timedelta, timezone
from itertools import count

from repositories.applicant_repo import PassIdTakenError
from utils.error_handling import (
    DuplicateIdentifierError,
    StoreUnavailableError,
    UnresolvableApplicantError,
)


class InMemoryApplicantRepository:
    """Enforces pass-id uniqueness the way the claim item does in DynamoDB."""

    def __init__(self):
        self.records = {}
        self.claims = {}
        self.insert_calls = 0
        self.read_calls = 0
        self.fail_next_inserts = 0

    def insert(self, record):
        self.insert_calls += 1
        if self.fail_next_inserts:
            self.fail_next_inserts -= 1
            raise StoreUnavailableError("throttled")
        if record.pass_id in self.claims:
            raise PassIdTakenError(record.pass_id)
        if record.record_ref in self.records:
            raise DuplicateIdentifierError("Record reference already in use")
        self.claims[record.pass_id] = record.record_ref
        self.records[record.record_ref] = record

    def get(self, record_ref):
        self.read_calls += 1
        return self.records.get(record_ref)

    def find_by_pass_id(self, pass_id):
        self.read_calls += 1
        record_ref = self.claims.get(pass_id)
        return self.records.get(record_ref) if record_ref else None

    def find_ref_by_phone(self, phone):
        self.read_calls += 1
        for field in ("phone", "whatsapp", "number"):
            for record in self.records.values():
                if getattr(record, field) == phone:
                    return record.record_ref
        return None


class InMemoryTicketRepository:
    """Rejects tickets whose applicant is not in the applicant fake."""

    def __init__(self, applicants: InMemoryApplicantRepository):
        self.applicants = applicants
        self.tickets = []

    def create(self, ticket):
        if ticket.applicant_ref not in self.applicants.records:
            raise UnresolvableApplicantError()
        self.tickets.append(ticket)

    def list_for_applicant(self, applicant_ref):
        matches = [t for t in self.tickets if t.applicant_ref == applicant_ref]
        return sorted(matches, key=lambda t: t.booked_at, reverse=True)


class StubEncoder:
    """Reversible stand-in for QrCodeService."""

    PREFIX = "stub-qr:"

    def encode(self, data):
        return f"{self.PREFIX}{data}"

    @classmethod
    def decode(cls, artifact):
        return artifact[len(cls.PREFIX):]


class SequenceGenerator:
    """Returns the given pass ids in order."""

    def __init__(self, *pass_ids):
        self._ids = iter(pass_ids)

    def generate(self):
        return next(self._ids)


class TickingClock:
    """Clock that advances one second per call."""

    def __init__(self, start=datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)):
        self._ticks = count()
        self.start = start

    def __call__(self):
        return self.start + timedelta(seconds=next(self._ticks))
