"""Application DTOs for the harvest run.

Why: Clean input contracts; concurrency caps fixed at construction time.
"""

from dataclasses import dataclass

DEFAULT_FETCH_CONCURRENCY = 4
DEFAULT_STORE_CONCURRENCY = 10


@dataclass(frozen=True)
class HarvestOptions:
    """Per-stage concurrency caps.

    fetch_concurrency bounds in-flight fetch+extract units (object store),
    store_concurrency bounds in-flight writes (key-value store). Kept apart
    because the two backends have different latency profiles.
    """

    fetch_concurrency: int = DEFAULT_FETCH_CONCURRENCY
    store_concurrency: int = DEFAULT_STORE_CONCURRENCY
