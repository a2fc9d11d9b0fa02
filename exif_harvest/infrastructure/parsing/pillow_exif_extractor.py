"""EXIF extractor built on Pillow's TIFF/EXIF decoder.

Absence is the common case (no EXIF, or a header longer than the fetched
prefix), so nothing here raises: every failure is logged at DEBUG and
reported as None.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from PIL import ExifTags, Image, TiffImagePlugin

from exif_harvest.application.ports.metadata_extractor_port import MetadataExtractorPort
from exif_harvest.domain.errors import ExtractionError
from exif_harvest.domain.services.header_locator import locate_exif_block
from exif_harvest.domain.types import Metadata

logger = logging.getLogger(__name__)

# Offsets to sub-IFDs; decoded into their own groups instead.
_POINTER_TAGS = frozenset(
    {int(ExifTags.IFD.Exif), int(ExifTags.IFD.GPSInfo), int(ExifTags.IFD.Interop)}
)
_MAKER_NOTE = int(ExifTags.Base.MakerNote)


class PillowExifExtractor(MetadataExtractorPort):
    """Decode EXIF from a JPEG or bare-TIFF prefix into grouped, JSON-safe fields.

    Groups: image (IFD0), thumbnail (IFD1), exif, gps, interoperability.
    """

    def extract(self, data: bytes) -> Metadata | None:
        try:
            block = locate_exif_block(data)
        except ExtractionError as ex:
            logger.debug("No metadata (%s): %s", type(ex).__name__, ex)
            return None

        if block is None:
            logger.debug("No metadata: no EXIF header in %d-byte prefix", len(data))
            return None

        try:
            metadata = self._decode(block)
        except Exception as ex:  # noqa: BLE001
            logger.debug("No metadata: EXIF decode failed: %s: %s", type(ex).__name__, ex)
            return None

        if not any(metadata.values()):
            logger.debug("No metadata: EXIF header carries no tags")
            return None
        return metadata

    def _decode(self, block: bytes) -> Metadata:
        exif = Image.Exif()
        exif.load(block)

        exif_ifd = exif.get_ifd(ExifTags.IFD.Exif)
        # Pillow looks the Interop pointer up unguarded inside the Exif IFD
        interop = exif.get_ifd(ExifTags.IFD.Interop) if ExifTags.IFD.Interop in exif_ifd else {}

        return {
            "image": _named(exif, ExifTags.TAGS, skip=_POINTER_TAGS),
            "thumbnail": _named(exif.get_ifd(ExifTags.IFD.IFD1), ExifTags.TAGS),
            "exif": _named(exif_ifd, ExifTags.TAGS, skip=_POINTER_TAGS | {_MAKER_NOTE}),
            "gps": _named(exif.get_ifd(ExifTags.IFD.GPSInfo), ExifTags.GPSTAGS),
            "interoperability": _named(interop, ExifTags.TAGS),
        }


def _named(
    ifd: Mapping[int, Any], names: Mapping[int, str], skip: frozenset[int] = frozenset()
) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for tag, value in ifd.items():
        if tag in skip:
            continue
        out[names.get(tag, f"0x{tag:04x}")] = normalize_value(value)
    return out


def normalize_value(value: Any) -> Any:
    """Convert a decoded TIFF value into a JSON-stable equivalent."""
    if isinstance(value, TiffImagePlugin.IFDRational):
        if value.denominator == 0:
            return None
        return float(value)
    if isinstance(value, bytes):
        stripped = value.rstrip(b"\x00")
        try:
            text = stripped.decode("ascii")
        except UnicodeDecodeError:
            return value.hex()
        return text if text.isprintable() else value.hex()
    if isinstance(value, str):
        return value.rstrip("\x00")
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, (tuple, list)):
        return [normalize_value(v) for v in value]
    if isinstance(value, Mapping):
        return {str(k): normalize_value(v) for k, v in value.items()}
    return str(value)
