"""Metadata store port for key-value persistence."""

from typing import Any, Protocol, runtime_checkable

from exif_harvest.domain.errors import DomainError
from exif_harvest.domain.types import Result


@runtime_checkable
class MetadataStorePort(Protocol):
    """Port for the key-value store that holds extracted metadata.

    Implementations share one connection (or pool) across all calls and must
    tolerate as many concurrent calls as the store fan-out allows.
    """

    async def connect(self) -> Result[None, DomainError]:
        """Establish the shared connection; no-op when already connected."""
        ...

    async def put(self, key: str, value: Any) -> Result[str, DomainError]:
        """Serialize `value` (unless already text) and write it under `key`."""
        ...

    async def get(self, key: str) -> Result[Any, DomainError]:
        """Read and deserialize the value stored under `key`."""
        ...

    async def close(self) -> None:
        """Release the connection; no-op when never connected."""
        ...
