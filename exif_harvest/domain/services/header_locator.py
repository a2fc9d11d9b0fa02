"""Locate the embedded EXIF block inside a leading byte prefix.

Pure byte scanning, no decoding: the TIFF structure itself is left to the
infrastructure extractor.
"""

from __future__ import annotations

from exif_harvest.domain.errors import MalformedHeaderError, TruncatedHeaderError

# ---------- Signatures ----------

JPEG_SOI = b"\xff\xd8"
EXIF_SIGNATURE = b"Exif\x00\x00"
TIFF_SIGNATURES = (b"II*\x00", b"MM\x00*")

_MARKER_APP1 = 0xE1
_MARKER_SOS = 0xDA
_MARKER_EOI = 0xD9
# Markers without a length field (TEM, RST0..RST7)
_STANDALONE = {0x01, *range(0xD0, 0xD8)}


def is_jpeg(data: bytes) -> bool:
    return data[:2] == JPEG_SOI


def is_tiff(data: bytes) -> bool:
    return data[:4] in TIFF_SIGNATURES


def find_jpeg_exif_segment(data: bytes) -> bytes | None:
    """Walk JPEG marker segments and return the APP1 Exif payload.

    Returns the payload including the ``Exif\\0\\0`` signature, or None if the
    marker stream reaches SOS/EOI (or the end of the prefix) without one.

    Raises:
        MalformedHeaderError: data is not JPEG or the marker stream is broken
        TruncatedHeaderError: a segment is cut off by the end of the prefix
    """
    if not is_jpeg(data):
        raise MalformedHeaderError("missing JPEG SOI marker")

    pos = 2
    size = len(data)
    while pos < size:
        if data[pos] != 0xFF:
            raise MalformedHeaderError(f"expected marker at offset {pos}")
        if pos + 1 >= size:
            raise TruncatedHeaderError(f"marker cut at offset {pos}")

        marker = data[pos + 1]
        if marker == 0xFF:  # fill byte
            pos += 1
            continue
        if marker in (_MARKER_SOS, _MARKER_EOI):
            return None
        if marker in _STANDALONE:
            pos += 2
            continue

        if pos + 4 > size:
            raise TruncatedHeaderError(f"segment length cut at offset {pos}")
        length = int.from_bytes(data[pos + 2 : pos + 4], "big")
        if length < 2:
            raise MalformedHeaderError(f"invalid segment length {length} at offset {pos}")

        end = pos + 2 + length
        payload_start = pos + 4
        if marker == _MARKER_APP1 and data[payload_start : payload_start + 6] == EXIF_SIGNATURE:
            if end > size:
                raise TruncatedHeaderError(
                    f"Exif segment needs {end} bytes, prefix has {size}"
                )
            return data[payload_start:end]
        pos = end

    return None


def locate_exif_block(data: bytes) -> bytes | None:
    """Return the raw EXIF/TIFF block for a JPEG or bare TIFF prefix, else None."""
    if not data:
        return None
    if is_tiff(data):
        return data
    if is_jpeg(data):
        return find_jpeg_exif_segment(data)
    return None
