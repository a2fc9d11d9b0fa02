"""Object store port for bucket listing and byte-range reads."""

from typing import Protocol, runtime_checkable

from exif_harvest.domain.errors import DomainError
from exif_harvest.domain.types import Result


@runtime_checkable
class ObjectStorePort(Protocol):
    """Port for read-only object storage operations."""

    async def list_keys(self) -> Result[list[str], DomainError]:
        """List object keys in the configured bucket (one result set, no pagination)."""
        ...

    async def get_range(self, key: str, offset: int, length: int) -> Result[bytes, DomainError]:
        """Read `length` bytes of object `key` starting at `offset`."""
        ...
