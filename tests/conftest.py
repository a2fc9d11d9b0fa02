"""Shared test fixtures: JPEG/TIFF payloads generated with Pillow at test time."""

from collections.abc import Callable
from io import BytesIO

import pytest
from PIL import Image


def build_jpeg(exif: Image.Exif | None = None, size: tuple[int, int] = (8, 8)) -> bytes:
    buf = BytesIO()
    img = Image.new("RGB", size, color=(200, 30, 30))
    if exif is None:
        img.save(buf, "JPEG")
    else:
        img.save(buf, "JPEG", exif=exif.tobytes())
    return buf.getvalue()


def build_exif(**tags: object) -> Image.Exif:
    """Exif block from tag ids given as keyword names like t274=1."""
    exif = Image.Exif()
    for name, value in tags.items():
        exif[int(name.lstrip("t"))] = value
    return exif


@pytest.fixture
def make_jpeg() -> Callable[..., bytes]:
    return build_jpeg


@pytest.fixture
def jpeg_with_orientation() -> bytes:
    return build_jpeg(build_exif(t274=1))


@pytest.fixture
def jpeg_without_exif() -> bytes:
    return build_jpeg()


@pytest.fixture
def make_exif() -> Callable[..., Image.Exif]:
    return build_exif
