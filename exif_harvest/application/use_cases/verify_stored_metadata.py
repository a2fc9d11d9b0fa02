"""Optional debug pass: read every stored key back and compare.

Off by default; not part of the harvest contract.
"""

import asyncio
import logging

from exif_harvest.application.dtos import DEFAULT_STORE_CONCURRENCY
from exif_harvest.application.ports.metadata_store_port import MetadataStorePort
from exif_harvest.domain.errors import DomainError, MetadataNotFoundError, ValidationError
from exif_harvest.domain.models import StoredRecord, VerificationResult
from exif_harvest.domain.types import Result

logger = logging.getLogger(__name__)


class VerifyStoredMetadata:
    """Reads stored records back through the metadata store."""

    def __init__(
        self, store: MetadataStorePort, concurrency: int = DEFAULT_STORE_CONCURRENCY
    ) -> None:
        if concurrency < 1:
            raise ValidationError(f"concurrency must be >= 1, got {concurrency}")
        self.store = store
        self.concurrency = concurrency

    async def run(
        self, records: list[StoredRecord]
    ) -> Result[list[VerificationResult], DomainError]:
        """Verify each record; a missing key is reported, any other read error is fatal."""
        sem = asyncio.Semaphore(self.concurrency)

        async def bounded(rec: StoredRecord) -> Result[VerificationResult, DomainError]:
            async with sem:
                return await self._verify(rec)

        results = await asyncio.gather(*(bounded(rec) for rec in records))

        verified: list[VerificationResult] = []
        for r in results:
            if not r.ok:
                assert r.error is not None
                return Result.failure(r.error)
            assert r.value is not None
            verified.append(r.value)

        mismatched = [v.key for v in verified if not v.matches]
        if mismatched:
            logger.warning("Verification mismatch for %d keys: %s", len(mismatched), mismatched)
        else:
            logger.info("Verified %d stored keys", len(verified))
        return Result.success(verified)

    async def _verify(self, rec: StoredRecord) -> Result[VerificationResult, DomainError]:
        r = await self.store.get(rec.key)
        if not r.ok:
            if isinstance(r.error, MetadataNotFoundError):
                logger.warning("No stored value for key: %s", rec.key)
                return Result.success(
                    VerificationResult(key=rec.key, expected=rec.metadata, actual=None, found=False)
                )
            assert r.error is not None
            return Result.failure(r.error)

        logger.info("Stored value for key: %s :: %s", rec.key, r.value)
        return Result.success(
            VerificationResult(key=rec.key, expected=rec.metadata, actual=r.value, found=True)
        )
