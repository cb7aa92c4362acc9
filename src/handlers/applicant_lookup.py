"""
Handlers for applicant resolution.

GET /verify/{phone}          -> {"success": true, "id": ...} or {"success": false}
GET /applicant/{id}          -> {"success": true, "applicant": {...}} or {"success": false}
GET /getApplicant/{passId}   -> applicant JSON, 404 when the pass id is unknown
"""

import json

from handlers import dependencies
from utils.error_handling import AppError, json_response, to_response
from utils.events import path_param
from utils.logging_config import get_logger

logger = get_logger(__name__)


def _applicant_json(applicant) -> dict:
    return json.loads(applicant.model_dump_json(by_alias=True))


def verify_handler(event, context):
    """Resolve a phone number to a record reference."""
    phone = path_param(event, "phone", "/verify/")
    try:
        record_ref = dependencies.get_lookup_service().resolve_by_phone(phone)
    except AppError as exc:
        return to_response(exc)
    except Exception:
        logger.exception("Phone verification failed")
        return json_response(500, {"success": False})

    if record_ref is None:
        return json_response(200, {"success": False})
    return json_response(200, {"success": True, "id": record_ref})


def record_handler(event, context):
    """Fetch an applicant by record reference."""
    record_ref = path_param(event, "id", "/applicant/")
    try:
        applicant = dependencies.get_lookup_service().resolve_by_record_ref(record_ref)
    except AppError as exc:
        return to_response(exc)
    except Exception:
        logger.exception("Applicant fetch failed")
        return json_response(500, {"success": False})

    if applicant is None:
        return json_response(200, {"success": False})
    return json_response(200, {"success": True, "applicant": _applicant_json(applicant)})


def pass_handler(event, context):
    """Fetch an applicant by the pass id read from its QR code."""
    pass_id = path_param(event, "passId", "/getApplicant/")
    try:
        applicant = dependencies.get_lookup_service().resolve_by_pass_id(pass_id)
    except AppError as exc:
        return to_response(exc)
    except Exception:
        logger.exception("Pass lookup failed")
        return json_response(500, {"success": False})

    if applicant is None:
        return json_response(404, {"success": False})
    return json_response(200, _applicant_json(applicant))
