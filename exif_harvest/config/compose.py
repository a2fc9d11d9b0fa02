"""Dependency injection container with environment-driven wiring.

Why: Single place that picks adapters from settings; all other layers stay
     free of configuration and client construction.
"""

from typing import TYPE_CHECKING

from exif_harvest.application.ports import (
    MetadataExtractorPort,
    MetadataStorePort,
    ObjectStorePort,
)
from exif_harvest.config.settings import AppSettings
from exif_harvest.domain.errors import DomainError
from exif_harvest.domain.types import Result

if TYPE_CHECKING:
    from exif_harvest.application.services.object_fetcher import ObjectFetcher
    from exif_harvest.application.use_cases.harvest_metadata import HarvestMetadata
    from exif_harvest.application.use_cases.verify_stored_metadata import (
        VerifyStoredMetadata,
    )


class Container:
    """Dependency injection container for application components.

    Responsibilities:
    1. Read settings from environment (via AppSettings)
    2. Choose adapters based on settings (objectstore_backend, metadatastore_backend)
    3. Inject dependencies into use cases

    Adapters are built once and cached, so the harvest and the verification
    pass share the same metadata store connection.
    """

    def __init__(self, settings: AppSettings | None = None) -> None:
        """Initialize container with settings.

        Args:
            settings: Application settings (default: load from environment)
        """
        self.settings = settings or AppSettings()
        self._object_store: ObjectStorePort | None = None
        self._metadata_store: MetadataStorePort | None = None
        self._extractor: MetadataExtractorPort | None = None

    # ===== Adapters =====

    def get_object_store(self) -> ObjectStorePort:
        """Get or create object store adapter based on settings."""
        if self._object_store is None:
            self._object_store = self._build_object_store()
        return self._object_store

    def get_metadata_store(self) -> MetadataStorePort:
        """Get or create metadata store adapter based on settings."""
        if self._metadata_store is None:
            self._metadata_store = self._build_metadata_store()
        return self._metadata_store

    def get_extractor(self) -> MetadataExtractorPort:
        """Get or create the EXIF extractor."""
        if self._extractor is None:
            from exif_harvest.infrastructure.parsing.pillow_exif_extractor import (
                PillowExifExtractor,
            )

            self._extractor = PillowExifExtractor()
        return self._extractor

    # ===== Use Cases =====

    def get_fetcher(self) -> "ObjectFetcher":
        from exif_harvest.application.services.object_fetcher import ObjectFetcher

        return ObjectFetcher(self.get_object_store(), range_bytes=self.settings.range_bytes)

    def get_harvest_use_case(self) -> "HarvestMetadata":
        """Build harvest use case with all dependencies."""
        from exif_harvest.application.dtos import HarvestOptions
        from exif_harvest.application.use_cases.harvest_metadata import HarvestMetadata

        return HarvestMetadata(
            objects=self.get_object_store(),
            fetcher=self.get_fetcher(),
            extractor=self.get_extractor(),
            store=self.get_metadata_store(),
            options=HarvestOptions(
                fetch_concurrency=self.settings.fetch_concurrency,
                store_concurrency=self.settings.store_concurrency,
            ),
        )

    def get_verify_use_case(self) -> "VerifyStoredMetadata":
        """Build the optional read-back verification use case."""
        from exif_harvest.application.use_cases.verify_stored_metadata import (
            VerifyStoredMetadata,
        )

        return VerifyStoredMetadata(
            store=self.get_metadata_store(),
            concurrency=self.settings.store_concurrency,
        )

    async def aclose(self) -> None:
        """Close the metadata store connection if one was built."""
        if self._metadata_store is not None:
            await self._metadata_store.close()

    # ===== Private Builder Methods =====

    def _build_object_store(self) -> ObjectStorePort:
        """Build object store adapter based on settings.objectstore_backend.

        Supports: s3 | minio | fake
        """
        backend = self.settings.objectstore_backend

        if backend in ("s3", "minio"):
            # MinIO client is S3-compatible
            return self._build_minio_object_store()
        else:
            # Fallback to fake adapter (testing, local dev)
            return self._build_fake_object_store()

    def _build_minio_object_store(self) -> ObjectStorePort:
        from exif_harvest.infrastructure.objectstores.minio_adapter import (
            MinioConfig,
            MinioObjectStoreAdapter,
        )

        cfg = MinioConfig(
            endpoint=self.settings.objectstore_endpoint,
            bucket_name=self.settings.bucket,
            access_key=self.settings.objectstore_access_key,
            secret_key=self.settings.objectstore_secret_key,
            secure=self.settings.objectstore_secure,
            region=self.settings.objectstore_region or None,
            prefix=self.settings.list_prefix,
            max_keys=self.settings.list_max_keys,
        )
        return MinioObjectStoreAdapter(cfg)

    def _build_fake_object_store(self) -> ObjectStorePort:
        """Build fake object store (empty bucket) for testing/local dev."""

        class FakeObjectStore:
            async def list_keys(self) -> Result[list[str], DomainError]:
                return Result.success([])

            async def get_range(
                self, key: str, offset: int, length: int
            ) -> Result[bytes, DomainError]:
                return Result.success(b"")

        return FakeObjectStore()

    def _build_metadata_store(self) -> MetadataStorePort:
        """Build metadata store adapter based on settings.metadatastore_backend.

        Supports: redis | memory
        """
        if self.settings.metadatastore_backend == "redis":
            from exif_harvest.infrastructure.kvstores.redis_adapter import (
                RedisConfig,
                RedisMetadataStoreAdapter,
            )

            cfg = RedisConfig(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=self.settings.redis_password or None,
                max_connections=self.settings.store_concurrency,
            )
            return RedisMetadataStoreAdapter(cfg)

        from exif_harvest.infrastructure.kvstores.memory_adapter import InMemoryMetadataStore

        return InMemoryMetadataStore()


# ===== Convenience Functions =====


def build_container(settings: AppSettings | None = None) -> Container:
    """Build dependency injection container with settings.

    Example:
        container = build_container()
        result = await container.get_harvest_use_case().run()
    """
    return Container(settings)
