"""
Applicant resolution by phone, record reference or pass id.

Not finding an applicant is a normal outcome and comes back as ``None``.
"""

from functools import partial
from typing import Optional

from models.applicant import ApplicantRecord
from repositories.applicant_repo import ApplicantRepository
from utils.cache_service import RecordCache
from utils.error_handling import InvalidReferenceError
from utils.logging_config import get_logger
from utils.retry import call_with_retry
from utils.validators import ensure_present, is_record_ref

logger = get_logger(__name__)


class LookupService:
    """Maps external identifiers to stored applicants."""

    def __init__(
        self,
        applicants: ApplicantRepository,
        cache: Optional[RecordCache] = None,
        store_retries: int = 3,
    ):
        self.applicants = applicants
        self.cache = cache
        self.store_retries = store_retries

    def _call(self, operation, label: str):
        return call_with_retry(operation, attempts=self.store_retries, label=label)

    def _cached(self, key: str, loader):
        if self.cache is None:
            return loader()
        return self.cache.get_or_load(key, loader)

    def resolve_by_phone(self, phone: str) -> Optional[str]:
        """Record ref of the applicant whose phone, whatsapp or number equals ``phone``."""
        ensure_present(phone, "phone")
        record_ref = self._call(
            partial(self.applicants.find_ref_by_phone, phone), "resolve by phone"
        )
        logger.info("Phone lookup", extra={"found": record_ref is not None})
        return record_ref

    def resolve_by_record_ref(self, record_ref: str) -> Optional[ApplicantRecord]:
        if not is_record_ref(record_ref):
            raise InvalidReferenceError()
        return self._cached(
            f"ref:{record_ref}",
            lambda: self._call(partial(self.applicants.get, record_ref), "resolve by ref"),
        )

    def resolve_by_pass_id(self, pass_id: str) -> Optional[ApplicantRecord]:
        """Exact match on the pass id decoded from a scanned QR code."""
        ensure_present(pass_id, "passId")
        applicant = self._cached(
            f"pass:{pass_id}",
            lambda: self._call(
                partial(self.applicants.find_by_pass_id, pass_id), "resolve by pass id"
            ),
        )
        if applicant is None:
            logger.info("Pass id not found", extra={"pass_id": pass_id})
        return applicant
