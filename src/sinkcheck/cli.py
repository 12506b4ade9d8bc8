"""
sinkcheck CLI

Implements 2 CLI verbs with Operations facade integration:
- validate: Validate a sink connector configuration file
- formats: Show which format classes may be used with each compression type
"""
from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer

from .cli_context import CLIContext
from .operations import ConfigurationInvalid, Operations, OpsConfig, run_and_exit
from .operations.printers import print_formats, print_outcome, print_outcome_json
from .rules import CompressionPolicy
from .storage.base import BucketStore

app = typer.Typer(name="sinkcheck", help="Sink connector configuration validator")


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _create_fake_store() -> Optional[BucketStore]:
    """
    Create FakeBucketStore for testing.

    Existing buckets are read from SINKCHECK_FAKE_BUCKETS (comma-separated).

    Returns:
        FakeBucketStore instance, or None if unavailable
    """
    try:
        from tests.storage.fakes.fake_bucket_store import FakeBucketStore
    except ImportError:
        typer.echo("Warning: FakeBucketStore not available, using real store", err=True)
        return None

    buckets = [b.strip() for b in os.getenv("SINKCHECK_FAKE_BUCKETS", "").split(",") if b.strip()]
    return FakeBucketStore(buckets=buckets)


@app.command()
def validate(
    config_file: Path = typer.Argument(..., help="Connector configuration (.properties, .json, .yaml)"),
    skip_bucket_check: bool = typer.Option(False, "--skip-bucket-check", help="Do not query storage for the bucket"),
    safe_format: Optional[List[str]] = typer.Option(None, "--safe-format", help="Compression-safe format class (repeatable, replaces the default set)"),
    report_access_errors: bool = typer.Option(False, "--report-access-errors", help="Report storage failures as bucket-name violations instead of failing"),
    output: OutputFormat = typer.Option(OutputFormat.TEXT, "--output", help="Output format"),
    store: Optional[str] = typer.Option(None, "--store", envvar="SINKCHECK_STORE", hidden=True, help="Store override for testing"),
    verbose: bool = typer.Option(False, "--verbose", help="Show all fields and debug logging"),
) -> None:
    """Validate a sink connector configuration file."""

    def _validate() -> None:
        _configure_logging(verbose)
        config = OpsConfig(
            check_bucket=not skip_bucket_check,
            report_access_errors=report_access_errors,
            safe_formats=frozenset(safe_format or ()),
            verbose=verbose,
        )
        context = CLIContext.from_env()

        bucket_store = None
        if config.check_bucket:
            if store == "fake":
                bucket_store = _create_fake_store()
            if bucket_store is None:
                bucket_store = context.store

        ops = Operations(config=config, settings=context.settings, store=bucket_store)
        snapshot, outcome = ops.validate_file(config_file)

        if output is OutputFormat.JSON:
            print_outcome_json(outcome, snapshot)
        else:
            print_outcome(outcome, snapshot, verbose=verbose)

        if not outcome.is_valid:
            raise ConfigurationInvalid(outcome)

    run_and_exit(_validate)


@app.command()
def formats(
    safe_format: Optional[List[str]] = typer.Option(None, "--safe-format", help="Compression-safe format class (repeatable)"),
) -> None:
    """Show format classes allowed with each compression type."""

    def _formats() -> None:
        if safe_format:
            policy = CompressionPolicy.of(safe_format)
        else:
            policy = CompressionPolicy(safe_formats=CLIContext.from_env().settings.safe_formats)
        print_formats(policy)

    run_and_exit(_formats)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
