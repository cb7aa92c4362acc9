"""
Single entrypoint Lambda that routes HTTP API requests to thin handler modules.

Why one Lambda?
- The store connection and lookup cache stay warm across routes.
- Simpler to deploy while still keeping code organized by delegating to modules.
"""

from typing import Callable, Tuple

from . import applicant_lookup, apply, booking, health_check
from utils.error_handling import json_response


def lambda_handler(event, context):
    """
    Entry point invoked by API Gateway HTTP API.

    The event contains the HTTP method and path; we route it to the correct
    handler by prefix so path parameters need no parsing here.
    """
    method = event.get("requestContext", {}).get("http", {}).get("method", "")
    path = event.get("requestContext", {}).get("http", {}).get("path", "")
    route_key = f"{method.upper()} {path}"

    route_table: Tuple[Tuple[str, Callable], ...] = (
        ("GET /health", health_check.lambda_handler),
        ("POST /apply", apply.lambda_handler),
        ("GET /verify/", applicant_lookup.verify_handler),
        ("GET /applicant/", applicant_lookup.record_handler),
        ("GET /getApplicant/", applicant_lookup.pass_handler),
        ("POST /bookTicket", booking.lambda_handler),
        ("GET /tickets/applicant/", booking.list_handler),
    )

    for prefix, handler in route_table:
        if route_key.startswith(prefix):
            return handler(event, context)

    return json_response(404, {"message": "Route not found", "route": route_key})
