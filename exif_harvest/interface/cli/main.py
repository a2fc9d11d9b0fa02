"""CLI entry point: harvest EXIF metadata from a bucket into the metadata store."""

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path

from exif_harvest.config.compose import Container, build_container
from exif_harvest.config.logging import setup_logging
from exif_harvest.config.settings import AppSettings
from exif_harvest.domain.errors import DomainError
from exif_harvest.domain.models import StoredRecord
from exif_harvest.domain.types import Result

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser("exif-harvest")
    ap.add_argument("--bucket", help="Bucket to scan (default: HARVEST_BUCKET)")
    ap.add_argument("--prefix", help="Only list keys under this prefix")
    ap.add_argument("--range-bytes", type=int, help="Leading bytes fetched per object")
    ap.add_argument("--fetch-concurrency", type=int, help="Concurrent fetch+extract units")
    ap.add_argument("--store-concurrency", type=int, help="Concurrent metadata store writes")
    ap.add_argument(
        "--verify",
        action="store_true",
        default=None,
        help="Read every stored key back after the run (debug)",
    )
    ap.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    ap.add_argument("--log-file", help="Also write JSON log lines to this file")
    return ap.parse_args(argv)


def apply_overrides(settings: AppSettings, args: argparse.Namespace) -> AppSettings:
    """Return settings with every flag that was given on the command line applied."""
    overrides = {
        "bucket": args.bucket,
        "list_prefix": args.prefix,
        "range_bytes": args.range_bytes,
        "fetch_concurrency": args.fetch_concurrency,
        "store_concurrency": args.store_concurrency,
        "verify_after_run": args.verify,
        "log_level": args.log_level.upper() if args.log_level else None,
        "log_file": args.log_file,
    }
    return dataclasses.replace(settings, **{k: v for k, v in overrides.items() if v is not None})


async def run_harvest(container: Container) -> Result[list[StoredRecord], DomainError]:
    """Run the harvest (and the optional verification pass), then close the store."""
    try:
        try:
            use_case = container.get_harvest_use_case()
        except DomainError as ex:
            return Result.failure(ex)

        result = await use_case.run()
        if result.ok and container.settings.verify_after_run:
            assert result.value is not None
            r_verify = await container.get_verify_use_case().run(result.value)
            if not r_verify.ok:
                assert r_verify.error is not None
                return Result.failure(r_verify.error)
        return result
    finally:
        await container.aclose()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = apply_overrides(AppSettings(), args)
    setup_logging(
        log_level=settings.log_level,
        log_file_path=Path(settings.log_file) if settings.log_file else None,
    )

    container = build_container(settings)
    logger.info("Harvesting bucket %s", settings.bucket)
    result = asyncio.run(run_harvest(container))

    if result.ok and result.value is not None:
        print(f"All done, {len(result.value)} total photos stored.")
    elif result.error is not None:
        err = result.error
        print(f"[ERROR] {type(err).__name__}: {err}")
        sys.exit(1)


if __name__ == "__main__":
    main()
