# exif_harvest/domain/models.py
# Domain models must be pure (no I/O, no external libs)
from __future__ import annotations

from dataclasses import dataclass

from exif_harvest.domain.types import Metadata


@dataclass(frozen=True)
class ObjectRef:
    """One object in the bucket, as produced by enumeration."""

    key: str


@dataclass(frozen=True)
class FetchResult:
    """
    Leading prefix of an object's content.

    - key:   object key the bytes belong to
    - data:  at most `range_bytes` bytes from offset 0

    Owned by the fetch stage; dropped once extraction is done.
    """

    key: str
    data: bytes


@dataclass(frozen=True)
class ExtractedItem:
    """Key plus decoded metadata. `metadata is None` means nothing could be extracted."""

    key: str
    metadata: Metadata | None

    @property
    def has_metadata(self) -> bool:
        return self.metadata is not None


@dataclass(frozen=True)
class StoredRecord:
    """A written (key, metadata) pair; carries the original value, not the serialized text."""

    key: str
    metadata: Metadata | None


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of reading one stored key back."""

    key: str
    expected: Metadata | None
    actual: object
    found: bool

    @property
    def matches(self) -> bool:
        return self.found and self.actual == self.expected
