"""Handlers for POST /bookTicket and GET /tickets/applicant/{id}."""

import json

from pydantic import ValidationError as PydanticValidationError

from handlers import dependencies
from models.ticket import BookingRequest
from utils.error_handling import AppError, json_response, to_response
from utils.events import json_body, path_param
from utils.logging_config import get_logger

logger = get_logger(__name__)


def lambda_handler(event, context):
    """Book one ticket against an applicant."""
    try:
        request = BookingRequest.model_validate(json_body(event))
        ticket = dependencies.get_booking_service().book_ticket(request)
    except AppError as exc:
        logger.info("Booking rejected", extra={"error": str(exc), "status": exc.status_code})
        return to_response(exc)
    except PydanticValidationError as exc:
        return json_response(422, {"success": False, "msg": "Invalid booking", "error": str(exc)})
    except Exception as exc:
        logger.exception("Booking failed")
        return json_response(500, {"success": False, "error": str(exc)})

    return json_response(
        200,
        {"success": True, "ticket": json.loads(ticket.model_dump_json(by_alias=True))},
    )


def list_handler(event, context):
    """List an applicant's tickets, newest first."""
    applicant_ref = path_param(event, "id", "/tickets/applicant/")
    try:
        tickets = dependencies.get_booking_service().list_tickets(applicant_ref)
    except AppError as exc:
        return to_response(exc)
    except Exception:
        logger.exception("Ticket listing failed")
        return json_response(500, {"success": False})

    return json_response(
        200,
        {
            "success": True,
            "tickets": [json.loads(t.model_dump_json(by_alias=True)) for t in tickets],
        },
    )
