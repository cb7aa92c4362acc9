"""
QR artifact tests.

The PNG is read back with Pillow and its module grid compared with the grid
qrcode builds for the pass id, so the stored artifact provably carries that
exact string.
"""

import time
from io import BytesIO

import pytest
from PIL import Image

from services.qr_service import DATA_URL_PREFIX, QrCodeService, png_from_data_url
from utils.error_handling import EncodingUnavailableError, StoreUnavailableError


def _read_modules(png: bytes, box_size: int):
    image = Image.open(BytesIO(png)).convert("L")
    width, height = image.size
    assert width == height and width % box_size == 0
    size = width // box_size
    half = box_size // 2
    return [
        [image.getpixel((col * box_size + half, row * box_size + half)) < 128 for col in range(size)]
        for row in range(size)
    ]


def test_encode_returns_png_data_url():
    artifact = QrCodeService().encode("TSRTC-48213907")
    assert artifact.startswith(DATA_URL_PREFIX)
    assert png_from_data_url(artifact).startswith(b"\x89PNG")


def test_artifact_grid_matches_pass_id():
    service = QrCodeService()
    png = png_from_data_url(service.encode("TSRTC-48213907"))

    modules = _read_modules(png, service.box_size)

    assert modules == service.build("TSRTC-48213907").get_matrix()
    assert modules != service.build("TSRTC-48213908").get_matrix()


def test_same_pass_id_renders_identically():
    service = QrCodeService()
    assert service.encode("TSRTC-10000000") == service.encode("TSRTC-10000000")


def test_png_from_data_url_rejects_other_schemes():
    with pytest.raises(ValueError):
        png_from_data_url("data:image/svg+xml;base64,AAAA")


def test_slow_render_times_out(monkeypatch):
    service = QrCodeService(timeout_seconds=0.05)
    monkeypatch.setattr(service, "render_png", lambda data: time.sleep(0.5) or b"")

    with pytest.raises(EncodingUnavailableError) as exc_info:
        service.encode("TSRTC-48213907")

    assert isinstance(exc_info.value, StoreUnavailableError)
    assert exc_info.value.retryable is True


def test_hung_renders_do_not_block_later_ones(monkeypatch):
    service = QrCodeService(timeout_seconds=0.05)
    real_render = service.render_png
    hung = []

    def render(data):
        if len(hung) < 2:
            hung.append(data)
            time.sleep(0.5)
            return b""
        return real_render(data)

    monkeypatch.setattr(service, "render_png", render)

    for _ in range(2):
        with pytest.raises(EncodingUnavailableError):
            service.encode("TSRTC-48213907")

    service.timeout_seconds = 0.3
    assert service.encode("TSRTC-48213907").startswith(DATA_URL_PREFIX)
