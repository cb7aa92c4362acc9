"""
QR code rendering for issued passes.

The pass id is rendered once at issuance into a PNG and stored on the
applicant record as a ``data:`` URL the counter can print directly.
"""

import base64
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from io import BytesIO

import qrcode
from qrcode import constants

from utils.error_handling import EncodingUnavailableError
from utils.logging_config import get_logger

logger = get_logger(__name__)

DATA_URL_PREFIX = "data:image/png;base64,"


def png_from_data_url(data_url: str) -> bytes:
    """Inverse of the data URL wrapping done by ``QrCodeService.encode``."""
    if not data_url.startswith(DATA_URL_PREFIX):
        raise ValueError("Not a PNG data URL")
    return base64.b64decode(data_url[len(DATA_URL_PREFIX):])


class QrCodeService:
    """Encode strings as QR code PNG data URLs."""

    def __init__(
        self,
        timeout_seconds: float = 5.0,
        box_size: int = 10,
        border: int = 4,
        error_correction: int = constants.ERROR_CORRECT_M,
    ):
        self.timeout_seconds = timeout_seconds
        self.box_size = box_size
        self.border = border
        self.error_correction = error_correction

    def build(self, data: str) -> qrcode.QRCode:
        qr = qrcode.QRCode(
            version=None,
            error_correction=self.error_correction,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(data)
        qr.make(fit=True)
        return qr

    def render_png(self, data: str) -> bytes:
        image = self.build(data).make_image(fill_color="black", back_color="white")
        buffer = BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    def encode(self, data: str) -> str:
        """
        Render ``data`` within the timeout and return a PNG data URL.

        Each call gets its own worker thread; a render that overruns is
        abandoned, not interrupted.
        """
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="qr")
        future = executor.submit(self.render_png, data)
        try:
            png = future.result(timeout=self.timeout_seconds)
        except FutureTimeoutError as exc:
            logger.warning("QR rendering timed out", extra={"timeout": self.timeout_seconds})
            raise EncodingUnavailableError() from exc
        finally:
            executor.shutdown(wait=False)
        return DATA_URL_PREFIX + base64.b64encode(png).decode("ascii")
