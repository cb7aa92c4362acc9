"""
Handler for POST /apply.

Stores a new applicant and returns the issued pass id with its QR code.
Attachments arrive either as already-stored path strings (``photo``,
``aadharFile``) or inline under ``files`` as base64 content, which is
uploaded first.
"""

import base64
import binascii
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from handlers import dependencies
from models.applicant import ApplicantInput, Attachments, InlineFiles
from utils.error_handling import AppError, ValidationError, json_response, to_response
from utils.events import json_body
from utils.logging_config import get_logger

logger = get_logger(__name__)

ATTACHMENT_FIELDS = {"photo": "photo", "aadharFile": "aadhar_file"}


def _store_inline_files(payload: Dict[str, Any], applicant: ApplicantInput) -> Attachments:
    attachments = Attachments(
        photo=applicant.photo or "", aadhar_file=applicant.aadhar_file or ""
    )
    files = InlineFiles.model_validate(payload.get("files") or {})
    for field, attr in ATTACHMENT_FIELDS.items():
        upload = getattr(files, attr)
        if upload is None:
            continue
        filename = upload.filename or field
        try:
            content = base64.b64decode(upload.content, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError(f"{field} content must be base64") from exc
        path = dependencies.get_attachment_repository().save(filename, content)
        setattr(attachments, attr, path)
    return attachments


def lambda_handler(event, context):
    """Issue a pass for the submitted applicant."""
    try:
        payload = json_body(event)
        applicant = ApplicantInput.model_validate(payload)
        attachments = _store_inline_files(payload, applicant)
        result = dependencies.get_issuance_service().issue(applicant, attachments)
    except AppError as exc:
        logger.info("Application rejected", extra={"error": str(exc)})
        return to_response(exc)
    except PydanticValidationError as exc:
        return json_response(422, {"success": False, "msg": "Invalid application", "error": str(exc)})
    except Exception as exc:
        logger.exception("Application failed")
        return json_response(500, {"success": False, "error": str(exc)})

    return json_response(
        200,
        {
            "success": True,
            "message": "Application stored",
            "id": result.record_ref,
            "passId": result.pass_id,
            "qrCode": result.qr_code,
        },
    )
