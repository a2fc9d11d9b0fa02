"""Redis metadata store adapter.

Why: One shared asyncio client over a bounded connection pool; safe for as
     many concurrent calls as the pool holds (sized to the store fan-out).
"""

from dataclasses import dataclass
from importlib import import_module
from typing import Any

from exif_harvest.application.ports.metadata_store_port import MetadataStorePort
from exif_harvest.domain.errors import DomainError, MetadataNotFoundError, MetadataStoreError
from exif_harvest.domain.types import Result
from exif_harvest.infrastructure.kvstores.codec import decode_value, encode_value


@dataclass
class RedisConfig:
    """Configuration for Redis connection."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: str | None = None
    max_connections: int = 10


class RedisMetadataStoreAdapter(MetadataStorePort):
    """Redis (redis.asyncio) adapter for the metadata store.

    The client is created lazily on first use; the pool opens sockets on
    demand, so connection errors surface from the first put/get.
    """

    def __init__(self, cfg: RedisConfig) -> None:
        """Initialize Redis metadata store adapter.

        Args:
            cfg: RedisConfig with connection parameters
        """
        self._cfg = cfg
        self._client: Any | None = None

    def _init_client(self, cfg: RedisConfig) -> Any:
        """Initialize asyncio Redis client with lazy import.

        Args:
            cfg: RedisConfig with connection parameters

        Returns:
            redis.asyncio.Redis instance

        Raises:
            MetadataStoreError: If redis-py not available or init fails
        """
        try:
            redis = import_module("redis.asyncio")
            return redis.Redis(
                host=cfg.host,
                port=cfg.port,
                db=cfg.db,
                password=cfg.password,
                max_connections=cfg.max_connections,
                decode_responses=True,
            )
        except Exception as ex:
            raise MetadataStoreError(f"Redis init failed: {ex}") from ex

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> Result[None, DomainError]:
        """Create the shared client; a second call is a no-op."""
        if self._client is not None:
            return Result.success(None)
        try:
            self._client = self._init_client(self._cfg)
        except MetadataStoreError as ex:
            return Result.failure(ex)
        return Result.success(None)

    async def put(self, key: str, value: Any) -> Result[str, DomainError]:
        """Write value under key.

        Args:
            key: Object key used as Redis key
            value: Text, or any JSON-serializable value

        Returns:
            Result with the key or MetadataStoreError
        """
        r_conn = await self.connect()
        if not r_conn.ok:
            assert r_conn.error is not None
            return Result.failure(r_conn.error)

        try:
            await self._client.set(key, encode_value(value))
            return Result.success(key)
        except Exception as ex:
            return Result.failure(MetadataStoreError(f"put {key!r} failed: {ex}"))

    async def get(self, key: str) -> Result[Any, DomainError]:
        """Read and decode the value under key.

        Returns:
            Result with the decoded value, MetadataNotFoundError if the key
            does not exist, or MetadataStoreError
        """
        r_conn = await self.connect()
        if not r_conn.ok:
            assert r_conn.error is not None
            return Result.failure(r_conn.error)

        try:
            raw = await self._client.get(key)
        except Exception as ex:
            return Result.failure(MetadataStoreError(f"get {key!r} failed: {ex}"))

        if raw is None:
            return Result.failure(MetadataNotFoundError(f"no value for key {key!r}"))
        return Result.success(decode_value(raw))

    async def close(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.aclose()
