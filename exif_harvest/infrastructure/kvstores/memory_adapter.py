"""In-process metadata store (dict-backed) for local runs and tests."""

from typing import Any

from exif_harvest.application.ports.metadata_store_port import MetadataStorePort
from exif_harvest.domain.errors import DomainError, MetadataNotFoundError
from exif_harvest.domain.types import Result
from exif_harvest.infrastructure.kvstores.codec import decode_value, encode_value


class InMemoryMetadataStore(MetadataStorePort):
    """Same contract as the Redis adapter; values are kept as encoded text."""

    def __init__(self) -> None:
        self._data: dict[str, str] | None = None

    async def connect(self) -> Result[None, DomainError]:
        if self._data is None:
            self._data = {}
        return Result.success(None)

    async def put(self, key: str, value: Any) -> Result[str, DomainError]:
        await self.connect()
        assert self._data is not None
        self._data[key] = encode_value(value)
        return Result.success(key)

    async def get(self, key: str) -> Result[Any, DomainError]:
        await self.connect()
        assert self._data is not None
        if key not in self._data:
            return Result.failure(MetadataNotFoundError(f"no value for key {key!r}"))
        return Result.success(decode_value(self._data[key]))

    def raw(self, key: str) -> str | None:
        """Encoded text stored under key (None if absent)."""
        return (self._data or {}).get(key)

    def keys(self) -> list[str]:
        return list(self._data or {})

    async def close(self) -> None:
        # Data survives close so results can be inspected after a run.
        return None
