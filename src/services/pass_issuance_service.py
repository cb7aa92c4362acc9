"""
Pass issuance.

Reconciles the phone fields, draws a pass id, renders its QR code and
stores the applicant. A pass id collision reported by the store triggers a
fresh draw, up to ``max_attempts``.
"""

from datetime import datetime, timezone
from functools import partial
from typing import Callable, Optional, Tuple
import uuid

from models.applicant import (
    AgeBreakdown,
    ApplicantInput,
    ApplicantRecord,
    Attachments,
    PassIssueResult,
)
from repositories.applicant_repo import ApplicantRepository, PassIdTakenError
from services.pass_id_generator import PassIdGenerator
from services.qr_service import QrCodeService
from utils.error_handling import DuplicateIdentifierError
from utils.logging_config import get_logger
from utils.retry import call_with_retry
from utils.validators import ensure_present, first_present

logger = get_logger(__name__)


def reconcile_phones(
    phone: Optional[str], whatsapp: Optional[str], number: Optional[str]
) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """
    Resolve ``phone`` as the first of phone/whatsapp/number that is set, then
    back-fill whatsapp and number with it when they were left empty.
    """
    resolved = first_present(phone, whatsapp, number)
    return resolved, first_present(whatsapp, resolved), first_present(number, resolved)


def new_record_ref() -> str:
    return uuid.uuid4().hex


class PassIssuanceService:
    """Issues passes and persists applicants."""

    def __init__(
        self,
        applicants: ApplicantRepository,
        encoder: QrCodeService,
        id_generator: PassIdGenerator,
        *,
        max_attempts: int = 5,
        store_retries: int = 3,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        ref_factory: Callable[[], str] = new_record_ref,
    ):
        self.applicants = applicants
        self.encoder = encoder
        self.id_generator = id_generator
        self.max_attempts = max_attempts
        self.store_retries = store_retries
        self.clock = clock
        self.ref_factory = ref_factory

    def issue(
        self, applicant: ApplicantInput, attachments: Optional[Attachments] = None
    ) -> PassIssueResult:
        phone, whatsapp, number = reconcile_phones(
            applicant.phone, applicant.whatsapp, applicant.number
        )
        ensure_present(applicant.name, "name")
        ensure_present(phone, "phone")

        files = attachments or Attachments(
            photo=applicant.photo or "", aadhar_file=applicant.aadhar_file or ""
        )

        for attempt in range(1, self.max_attempts + 1):
            pass_id = self.id_generator.generate()
            qr_code = call_with_retry(
                partial(self.encoder.encode, pass_id),
                attempts=self.store_retries,
                label="encode qr",
            )
            record = ApplicantRecord(
                record_ref=self.ref_factory(),
                pass_id=pass_id,
                qr_code=qr_code,
                name=applicant.name,
                father_name=applicant.father_name,
                dob=applicant.dob,
                gender=applicant.gender,
                age=AgeBreakdown(
                    years=applicant.age_years,
                    months=applicant.age_months,
                    days=applicant.age_days,
                ),
                aadhar=applicant.aadhar,
                phone=phone,
                whatsapp=whatsapp,
                number=number,
                email=applicant.email,
                photo=files.photo,
                aadhar_file=files.aadhar_file,
                address=applicant.address,
                district=applicant.district,
                mandal=applicant.mandal,
                village=applicant.village,
                pincode=applicant.pincode,
                city=applicant.city,
                pass_type=applicant.pass_type,
                counter=applicant.counter,
                created_at=self.clock(),
            )
            try:
                call_with_retry(
                    partial(self.applicants.insert, record),
                    attempts=self.store_retries,
                    label="insert applicant",
                )
            except PassIdTakenError:
                logger.warning(
                    "Pass id collision, drawing again",
                    extra={"pass_id": pass_id, "attempt": attempt},
                )
                continue

            logger.info(
                "Pass issued",
                extra={"pass_id": pass_id, "record_ref": record.record_ref, "attempt": attempt},
            )
            return PassIssueResult(
                pass_id=pass_id, qr_code=qr_code, record_ref=record.record_ref
            )

        logger.error("Pass id attempts exhausted", extra={"attempts": self.max_attempts})
        raise DuplicateIdentifierError()
