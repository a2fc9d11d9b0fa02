"""MinIO (S3-compatible) object store adapter for listing and range reads.

Why: Works against AWS S3 and self-hosted MinIO with one client; only the
     leading byte range of each object is ever downloaded.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from importlib import import_module
from itertools import islice
from typing import Any, TypeVar

from exif_harvest.application.ports.object_store_port import ObjectStorePort
from exif_harvest.domain.errors import DomainError, EnumerationError, ObjectFetchError
from exif_harvest.domain.types import Result

T = TypeVar("T")


@dataclass
class MinioConfig:
    """Configuration for MinIO client."""

    endpoint: str
    bucket_name: str
    access_key: str = ""
    secret_key: str = ""
    secure: bool = True
    region: str | None = None
    prefix: str = ""
    max_keys: int = 1000  # one S3 ListObjectsV2 page


class MinioObjectStoreAdapter(ObjectStorePort):
    """Read-only MinIO adapter.

    The minio client is blocking; every call runs in the event loop's
    default executor so the harvest coroutines stay responsive.
    """

    def __init__(self, cfg: MinioConfig, client: Any | None = None) -> None:
        """Initialize MinIO object store adapter.

        Args:
            cfg: MinioConfig with connection parameters
            client: Pre-built client (tests); built from cfg when omitted

        Raises:
            EnumerationError: If MinIO initialization fails
        """
        self._cfg = cfg
        self._client = client if client is not None else self._init_client(cfg)

    def _init_client(self, cfg: MinioConfig) -> Any:
        """Initialize MinIO client with lazy import.

        Without explicit keys, credentials come from the AWS/MinIO
        environment, the AWS config files, or the instance role.
        """
        try:
            minio = import_module("minio")
            kwargs: dict[str, Any] = {
                "endpoint": cfg.endpoint,
                "secure": cfg.secure,
                "region": cfg.region,
            }
            if cfg.access_key and cfg.secret_key:
                kwargs["access_key"] = cfg.access_key
                kwargs["secret_key"] = cfg.secret_key
            else:
                providers = import_module("minio.credentials.providers")
                kwargs["credentials"] = providers.ChainedProvider(
                    [
                        providers.EnvAWSProvider(),
                        providers.EnvMinioProvider(),
                        providers.AWSConfigProvider(),
                        providers.IamAwsProvider(),
                    ]
                )
            return minio.Minio(**kwargs)
        except Exception as ex:
            raise EnumerationError(f"MinIO init failed: {ex}") from ex

    async def _call(self, fn: Callable[[], T]) -> T:
        return await asyncio.get_running_loop().run_in_executor(None, fn)

    async def list_keys(self) -> Result[list[str], DomainError]:
        """List object keys under the configured prefix.

        Returns:
            Result with at most `max_keys` keys (directory placeholders
            skipped) or EnumerationError
        """
        try:
            objects = await self._call(self._list_objects)
        except Exception as ex:
            return Result.failure(EnumerationError(f"list_keys failed: {ex}"))

        keys = [
            obj.object_name
            for obj in objects
            if getattr(obj, "object_name", None) and not getattr(obj, "is_dir", False)
        ]
        return Result.success(keys)

    def _list_objects(self) -> list[Any]:
        objects = self._client.list_objects(
            bucket_name=self._cfg.bucket_name,
            prefix=self._cfg.prefix or None,
            recursive=True,
        )
        return list(islice(objects, self._cfg.max_keys))

    async def get_range(self, key: str, offset: int, length: int) -> Result[bytes, DomainError]:
        """Read a byte range of one object.

        Args:
            key: Object key (path in bucket)
            offset: First byte to read
            length: Number of bytes to read

        Returns:
            Result with the bytes or ObjectFetchError
        """
        try:
            data = await self._call(lambda: self._read_range(key, offset, length))
            return Result.success(data)
        except Exception as ex:
            return Result.failure(ObjectFetchError(f"get_range {key!r} failed: {ex}"))

    def _read_range(self, key: str, offset: int, length: int) -> bytes:
        response = self._client.get_object(
            bucket_name=self._cfg.bucket_name,
            object_name=key,
            offset=offset,
            length=length,
        )
        try:
            return response.read()
        finally:
            response.close()
            response.release_conn()
