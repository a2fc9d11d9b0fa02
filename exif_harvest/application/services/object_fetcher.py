"""Bounded-prefix object fetcher.

Why: Metadata headers sit at the start of the encoded content, so only the
     leading range is read; bandwidth per item stays fixed regardless of
     object size.
"""

from exif_harvest.application.ports.object_store_port import ObjectStorePort
from exif_harvest.domain.errors import DomainError, ObjectFetchError, ValidationError
from exif_harvest.domain.models import FetchResult
from exif_harvest.domain.types import Result

DEFAULT_RANGE_BYTES = 4096


class ObjectFetcher:
    """Fetches the first `range_bytes` bytes of an object."""

    def __init__(self, objects: ObjectStorePort, range_bytes: int = DEFAULT_RANGE_BYTES) -> None:
        if range_bytes < 1:
            raise ValidationError(f"range_bytes must be >= 1, got {range_bytes}")
        self.objects = objects
        self.range_bytes = range_bytes

    async def fetch(self, key: str) -> Result[FetchResult, DomainError]:
        """Fetch the leading prefix of `key`.

        Returns:
            Result with FetchResult, or ObjectFetchError on failure
        """
        r = await self.objects.get_range(key, 0, self.range_bytes)
        if not r.ok:
            err = r.error
            if not isinstance(err, ObjectFetchError):
                err = ObjectFetchError(f"fetch {key!r} failed: {err}")
            return Result.failure(err)

        # Stores may ignore the range and send more; never hand more than the prefix on.
        data = (r.value or b"")[: self.range_bytes]
        return Result.success(FetchResult(key=key, data=data))
