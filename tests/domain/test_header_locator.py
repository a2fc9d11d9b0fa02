"""Tests for the pure JPEG/TIFF header locator."""

import pytest

from exif_harvest.domain.errors import MalformedHeaderError, TruncatedHeaderError
from exif_harvest.domain.services.header_locator import (
    EXIF_SIGNATURE,
    find_jpeg_exif_segment,
    is_jpeg,
    is_tiff,
    locate_exif_block,
)


def _segment(marker: int, payload: bytes) -> bytes:
    return bytes([0xFF, marker]) + (len(payload) + 2).to_bytes(2, "big") + payload


def _jpeg(*segments: bytes) -> bytes:
    return b"\xff\xd8" + b"".join(segments) + b"\xff\xda\x00\x02" + b"\x00" * 16


TIFF_LE = b"II*\x00\x08\x00\x00\x00\x00\x00"


def test_signature_detection():
    assert is_jpeg(b"\xff\xd8\xff\xe0")
    assert not is_jpeg(b"\x89PNG")
    assert is_tiff(b"II*\x00rest")
    assert is_tiff(b"MM\x00*rest")
    assert not is_tiff(b"\xff\xd8\xff\xe0")


def test_finds_exif_after_app0():
    exif_payload = EXIF_SIGNATURE + TIFF_LE
    data = _jpeg(_segment(0xE0, b"JFIF\x00\x01\x01"), _segment(0xE1, exif_payload))

    assert find_jpeg_exif_segment(data) == exif_payload


def test_skips_non_exif_app1():
    xmp = _segment(0xE1, b"http://ns.adobe.com/xap/1.0/\x00<x/>")
    exif_payload = EXIF_SIGNATURE + TIFF_LE
    data = _jpeg(xmp, _segment(0xE1, exif_payload))

    assert find_jpeg_exif_segment(data) == exif_payload


def test_fill_bytes_between_markers_are_skipped():
    exif_payload = EXIF_SIGNATURE + TIFF_LE
    data = b"\xff\xd8\xff\xff" + _segment(0xE1, exif_payload)

    assert find_jpeg_exif_segment(data) == exif_payload


def test_stops_at_start_of_scan():
    data = _jpeg(_segment(0xE0, b"JFIF\x00\x01\x01"), _segment(0xDB, b"\x00" * 65))
    assert find_jpeg_exif_segment(data) is None


def test_truncated_exif_segment_raises():
    exif_payload = EXIF_SIGNATURE + TIFF_LE + b"\x00" * 100
    data = _jpeg(_segment(0xE1, exif_payload))[:40]

    with pytest.raises(TruncatedHeaderError):
        find_jpeg_exif_segment(data)


def test_truncated_length_field_raises():
    with pytest.raises(TruncatedHeaderError):
        find_jpeg_exif_segment(b"\xff\xd8\xff\xe1\x00")


def test_broken_marker_stream_raises():
    with pytest.raises(MalformedHeaderError):
        find_jpeg_exif_segment(b"\xff\xd8\x00\x01\x02\x03")


def test_invalid_segment_length_raises():
    with pytest.raises(MalformedHeaderError):
        find_jpeg_exif_segment(b"\xff\xd8\xff\xe1\x00\x01Exif")


def test_missing_soi_raises():
    with pytest.raises(MalformedHeaderError):
        find_jpeg_exif_segment(b"GIF89a")


def test_locate_returns_none_for_empty_and_unknown():
    assert locate_exif_block(b"") is None
    assert locate_exif_block(b"\x89PNG\r\n\x1a\n") is None


def test_locate_returns_whole_buffer_for_tiff():
    assert locate_exif_block(TIFF_LE) == TIFF_LE


def test_locate_on_pillow_jpeg(jpeg_with_orientation, jpeg_without_exif):
    block = locate_exif_block(jpeg_with_orientation)
    assert block is not None
    assert block.startswith(EXIF_SIGNATURE)
    assert locate_exif_block(jpeg_without_exif) is None
