"""Application settings with environment-driven configuration.

Why: Single place that reads the environment; every other layer receives
     settings via dependency injection. Values are fixed for a whole run.
"""

import os
from dataclasses import dataclass, field


def _env_first(*names: str, default: str = "") -> str:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from environment variables.

    This is the ONLY place where environment variables are read.
    """

    # ===== Harvest Configuration =====
    bucket: str = field(default_factory=lambda: os.getenv("HARVEST_BUCKET", "photos"))
    list_prefix: str = field(default_factory=lambda: os.getenv("HARVEST_PREFIX", ""))
    list_max_keys: int = field(
        default_factory=lambda: int(os.getenv("HARVEST_LIST_MAX_KEYS", "1000"))
    )
    # Single enumeration result set; S3 returns at most 1000 keys per listing call

    range_bytes: int = field(default_factory=lambda: int(os.getenv("HARVEST_RANGE_BYTES", "4096")))
    # Leading bytes fetched per object; EXIF headers larger than this are reported as absent

    fetch_concurrency: int = field(
        default_factory=lambda: int(os.getenv("HARVEST_FETCH_CONCURRENCY", "4"))
    )
    store_concurrency: int = field(
        default_factory=lambda: int(os.getenv("HARVEST_STORE_CONCURRENCY", "10"))
    )
    # Also sizes the Redis connection pool

    verify_after_run: bool = field(
        default_factory=lambda: os.getenv("HARVEST_VERIFY_AFTER_RUN", "false").lower() == "true"
    )

    # ===== Object Store Configuration =====
    objectstore_backend: str = field(
        default_factory=lambda: os.getenv("OBJECTSTORE_BACKEND", "s3").lower()
    )
    # Supported: "s3" | "minio" | "fake" (empty bucket, for testing)

    objectstore_endpoint: str = field(
        default_factory=lambda: os.getenv("OBJECTSTORE_ENDPOINT", "s3.amazonaws.com")
    )
    objectstore_access_key: str = field(
        default_factory=lambda: _env_first("AWS_ACCESS_KEY", "AWS_ACCESS_KEY_ID")
    )
    objectstore_secret_key: str = field(
        default_factory=lambda: _env_first("AWS_SECRET_KEY", "AWS_SECRET_ACCESS_KEY")
    )
    objectstore_region: str = field(default_factory=lambda: os.getenv("AWS_REGION", "us-west-2"))
    objectstore_secure: bool = field(
        default_factory=lambda: os.getenv("OBJECTSTORE_SECURE", "true").lower() == "true"
    )

    # ===== Metadata Store Configuration =====
    metadatastore_backend: str = field(
        default_factory=lambda: os.getenv("METADATASTORE_BACKEND", "redis").lower()
    )
    # Supported: "redis" | "memory" (for testing)

    redis_host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    redis_port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    redis_db: int = field(default_factory=lambda: int(os.getenv("REDIS_DB", "0")))
    redis_password: str = field(default_factory=lambda: os.getenv("REDIS_PASSWORD", ""))

    # ===== Logging Configuration =====
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))
    # Empty string = console only
