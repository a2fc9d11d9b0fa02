import pytest

from exif_harvest.domain.models import (
    ExtractedItem,
    FetchResult,
    ObjectRef,
    StoredRecord,
    VerificationResult,
)
from exif_harvest.domain.types import Result


def test_object_ref_is_frozen():
    ref = ObjectRef(key="a.jpg")
    with pytest.raises(AttributeError):
        ref.key = "b.jpg"  # type: ignore[misc]


def test_fetch_result_holds_prefix():
    fr = FetchResult(key="a.jpg", data=b"\xff\xd8")
    assert fr.key == "a.jpg"
    assert fr.data == b"\xff\xd8"


def test_extracted_item_absent_metadata():
    assert ExtractedItem(key="a.jpg", metadata={"image": {"Orientation": 1}}).has_metadata
    assert not ExtractedItem(key="b.jpg", metadata=None).has_metadata


def test_stored_record_equality():
    assert StoredRecord("a.jpg", None) == StoredRecord("a.jpg", None)
    assert StoredRecord("a.jpg", {"x": 1}) != StoredRecord("a.jpg", None)


def test_verification_result_matches():
    ok = VerificationResult(key="a", expected={"x": 1}, actual={"x": 1}, found=True)
    differs = VerificationResult(key="a", expected={"x": 1}, actual={"x": 2}, found=True)
    missing = VerificationResult(key="a", expected=None, actual=None, found=False)

    assert ok.matches
    assert not differs.matches
    assert not missing.matches


def test_result_success_and_failure():
    r_ok: Result[int, Exception] = Result.success(3)
    r_err: Result[int, Exception] = Result.failure(ValueError("x"))

    assert r_ok.ok and r_ok.value == 3 and r_ok.error is None
    assert not r_err.ok and r_err.value is None
    assert isinstance(r_err.error, ValueError)
