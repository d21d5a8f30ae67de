"""Shared fixtures: in-memory sample images and a test client wired to a fresh service."""
import io
import struct
import zlib

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from converter.conversion.service import ConversionService, get_conversion_service
from converter.main import app

PIL_FORMATS = {"webp": "WEBP", "avif": "AVIF", "jpg": "JPEG", "jpeg": "JPEG", "png": "PNG"}
MIME_TYPES = {"webp": "image/webp", "avif": "image/avif", "jpg": "image/jpeg", "jpeg": "image/jpeg", "png": "image/png"}


def sample_image(fmt: str = "png", size: tuple[int, int] = (64, 48)) -> bytes:
    """Noisy RGB image encoded as fmt, so lossy encoders have something to work on."""
    w, h = size
    noise = Image.effect_noise((w, h), 64)
    gradient = Image.linear_gradient("L").resize((w, h))
    img = Image.merge("RGB", (noise, gradient, noise.transpose(Image.Transpose.FLIP_LEFT_RIGHT)))
    buffer = io.BytesIO()
    img.save(buffer, format=PIL_FORMATS[fmt])
    return buffer.getvalue()


def header_only_png(width: int, height: int) -> bytes:
    """PNG signature plus an IHDR chunk declaring width x height, no pixel data."""
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    chunk = struct.pack(">I", len(ihdr)) + b"IHDR" + ihdr + struct.pack(">I", zlib.crc32(b"IHDR" + ihdr))
    return b"\x89PNG\r\n\x1a\n" + chunk


@pytest.fixture
def png_bytes() -> bytes:
    return sample_image("png")


@pytest.fixture
def service():
    svc = ConversionService(max_workers=4)
    yield svc
    svc.shutdown()


@pytest.fixture
def client(service):
    app.dependency_overrides[get_conversion_service] = lambda: service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
