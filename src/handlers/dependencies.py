"""
Lazy wiring of store, repositories and services for the counter Lambda.

Everything is built on first use and reused across warm invocations. Tests
swap the getters (or call ``reset``) instead of touching AWS.
"""

from typing import Optional

from utils.logging_config import get_logger
from utils.settings import AppSettings

logger = get_logger(__name__)

_settings: Optional[AppSettings] = None
_store = None
_issuance_service = None
_lookup_service = None
_booking_service = None
_attachment_repository = None


def get_settings() -> AppSettings:
    global _settings
    if _settings is None:
        _settings = AppSettings.from_environment()
    return _settings


def get_store():
    """Connected DynamoDbStore shared by every repository."""
    global _store
    if _store is None:
        from repositories.dynamodb_repo import DynamoDbStore

        settings = get_settings()
        _store = DynamoDbStore(
            settings.applicants_table,
            settings.tickets_table,
            region=settings.aws_region,
            timeout_seconds=settings.store_timeout_seconds,
            max_attempts=settings.store_max_retries,
        ).connect()
    return _store


def get_issuance_service():
    global _issuance_service
    if _issuance_service is None:
        from repositories.applicant_repo import ApplicantRepository
        from services.pass_id_generator import PassIdGenerator
        from services.pass_issuance_service import PassIssuanceService
        from services.qr_service import QrCodeService

        settings = get_settings()
        _issuance_service = PassIssuanceService(
            ApplicantRepository(get_store()),
            QrCodeService(timeout_seconds=settings.qr_timeout_seconds),
            PassIdGenerator(prefix=settings.pass_id_prefix),
            max_attempts=settings.pass_id_max_attempts,
            store_retries=settings.store_max_retries,
        )
    return _issuance_service


def get_lookup_service():
    global _lookup_service
    if _lookup_service is None:
        from repositories.applicant_repo import ApplicantRepository
        from services.lookup_service import LookupService
        from utils.cache_service import RecordCache

        settings = get_settings()
        _lookup_service = LookupService(
            ApplicantRepository(get_store()),
            cache=RecordCache(
                max_size=settings.lookup_cache_max_size,
                ttl_seconds=settings.lookup_cache_ttl_seconds,
            ),
            store_retries=settings.store_max_retries,
        )
    return _lookup_service


def get_booking_service():
    global _booking_service
    if _booking_service is None:
        from repositories.ticket_repo import TicketRepository
        from services.booking_service import BookingService

        settings = get_settings()
        _booking_service = BookingService(
            TicketRepository(get_store()),
            strict_payment_types=settings.strict_payment_types,
            store_retries=settings.store_max_retries,
        )
    return _booking_service


def get_attachment_repository():
    global _attachment_repository
    if _attachment_repository is None:
        from repositories.s3_repo import AttachmentRepository

        _attachment_repository = AttachmentRepository(get_settings().attachments_bucket)
    return _attachment_repository


def reset() -> None:
    """Close the store and drop every cached object."""
    global _settings, _store, _issuance_service, _lookup_service
    global _booking_service, _attachment_repository
    if _store is not None:
        _store.close()
        logger.info("Dependencies reset")
    _settings = None
    _store = None
    _issuance_service = None
    _lookup_service = None
    _booking_service = None
    _attachment_repository = None
