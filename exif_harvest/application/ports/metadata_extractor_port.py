from typing import Protocol, runtime_checkable

from exif_harvest.domain.types import Metadata


@runtime_checkable
class MetadataExtractorPort(Protocol):
    def extract(self, data: bytes) -> Metadata | None: ...
