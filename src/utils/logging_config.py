"""Structured logger setup shared by the counter Lambda."""

import logging
import os

from pythonjsonlogger import jsonlogger


def get_logger(name: str) -> logging.Logger:
    """
    Configure a JSON logger once and reuse it.

    Level comes from LOG_LEVEL (default INFO). Callers pass identifiers such
    as pass_id or record_ref through ``extra``; phone numbers stay out of logs.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter(
        "%(levelname)s %(name)s %(message)s %(asctime)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())
    logger.propagate = False
    return logger
