"""Harvest embedded metadata from a bucket into the metadata store.

Why: Two independently bounded stages (object store fetch, key-value write),
     strictly Result-based; a single unreadable object never fails the batch.
"""

import asyncio
import logging

from exif_harvest.application.dtos import HarvestOptions
from exif_harvest.application.ports.metadata_extractor_port import MetadataExtractorPort
from exif_harvest.application.ports.metadata_store_port import MetadataStorePort
from exif_harvest.application.ports.object_store_port import ObjectStorePort
from exif_harvest.application.services.object_fetcher import ObjectFetcher
from exif_harvest.domain.errors import (
    DomainError,
    EnumerationError,
    MetadataStoreError,
    ValidationError,
)
from exif_harvest.domain.models import ExtractedItem, ObjectRef, StoredRecord
from exif_harvest.domain.types import Result

logger = logging.getLogger(__name__)


class _RunState:
    """Per-run semaphores and the first store failure."""

    def __init__(self, options: HarvestOptions) -> None:
        self.fetch_slots = asyncio.Semaphore(options.fetch_concurrency)
        self.store_slots = asyncio.Semaphore(options.store_concurrency)
        self.store_failure: DomainError | None = None


class HarvestMetadata:
    """List -> (fetch, extract) -> store pipeline over one bucket.

    Each object passes through a fetch slot and then a store slot. The two
    pools are sized independently; there is no barrier between objects, so a
    write can start as soon as its own extraction is done.
    """

    def __init__(
        self,
        objects: ObjectStorePort,
        fetcher: ObjectFetcher,
        extractor: MetadataExtractorPort,
        store: MetadataStorePort,
        options: HarvestOptions | None = None,
    ) -> None:
        """Initialize with object store, fetcher, extractor, and metadata store."""
        options = options or HarvestOptions()
        if options.fetch_concurrency < 1:
            raise ValidationError(
                f"fetch_concurrency must be >= 1, got {options.fetch_concurrency}"
            )
        if options.store_concurrency < 1:
            raise ValidationError(
                f"store_concurrency must be >= 1, got {options.store_concurrency}"
            )
        self.objects = objects
        self.fetcher = fetcher
        self.extractor = extractor
        self.store = store
        self.options = options

    async def run(self) -> Result[list[StoredRecord], DomainError]:
        """Run the full harvest.

        Returns:
            Result with the stored records (enumeration order, original metadata
            values), or the fatal error: EnumerationError if the bucket could not
            be listed, MetadataStoreError if a write failed.
        """
        r_refs = await self._list_objects()
        if not r_refs.ok:
            assert r_refs.error is not None
            return Result.failure(r_refs.error)

        refs = r_refs.value or []
        if not refs:
            logger.info("Bucket listing returned no objects, nothing to do")
            return Result.success([])

        state = _RunState(self.options)
        records = await asyncio.gather(
            *(self._process(index, ref, state) for index, ref in enumerate(refs))
        )

        if state.store_failure is not None:
            written = sum(1 for rec in records if rec is not None)
            logger.error(
                "Store stage aborted after %d of %d writes: %s",
                written,
                len(refs),
                state.store_failure,
            )
            return Result.failure(state.store_failure)

        stored = [rec for rec in records if rec is not None]
        absent = sum(1 for rec in stored if rec.metadata is None)
        logger.info("Stored metadata for %d objects (%d without metadata)", len(stored), absent)
        return Result.success(stored)

    async def _process(self, index: int, ref: ObjectRef, state: _RunState) -> StoredRecord | None:
        async with state.fetch_slots:
            item = await self._get_and_extract(index, ref)
        async with state.store_slots:
            # First failure is fatal: writes not yet started are skipped.
            if state.store_failure is not None:
                return None
            return await self._store_item(item, state)

    # ===== Enumeration =====

    async def _list_objects(self) -> Result[list[ObjectRef], DomainError]:
        r = await self.objects.list_keys()
        if not r.ok:
            err = r.error
            if not isinstance(err, EnumerationError):
                err = EnumerationError(f"listing failed: {err}")
            logger.error("Bucket enumeration failed: %s", err)
            return Result.failure(err)

        keys = r.value if isinstance(r.value, list) else []
        refs = [ObjectRef(key=k) for k in keys if isinstance(k, str) and k]
        if len(refs) != len(keys):
            logger.debug("Dropped %d malformed listing entries", len(keys) - len(refs))
        return Result.success(refs)

    # ===== Fetch + extract =====

    async def _get_and_extract(self, index: int, ref: ObjectRef) -> ExtractedItem:
        """Fetch one prefix and decode it; every failure becomes absent metadata."""
        logger.info("fetching and processing: %d %s", index, ref.key)
        try:
            r = await self.fetcher.fetch(ref.key)
            if not r.ok:
                logger.warning("Fetch failed for %s, storing without metadata: %s", ref.key, r.error)
                return ExtractedItem(key=ref.key, metadata=None)

            assert r.value is not None
            metadata = self.extractor.extract(r.value.data)
        except Exception as ex:  # noqa: BLE001
            logger.warning(
                "Processing failed for %s, storing without metadata: %s: %s",
                ref.key,
                type(ex).__name__,
                ex,
            )
            return ExtractedItem(key=ref.key, metadata=None)

        return ExtractedItem(key=ref.key, metadata=metadata)

    # ===== Store =====

    async def _store_item(self, item: ExtractedItem, state: _RunState) -> StoredRecord | None:
        r = await self.store.put(item.key, item.metadata)
        if not r.ok:
            err = r.error
            if not isinstance(err, MetadataStoreError):
                err = MetadataStoreError(f"put {item.key!r} failed: {err}")
            if state.store_failure is None:
                state.store_failure = err
            return None
        return StoredRecord(key=item.key, metadata=item.metadata)
