"""
Operations Facade - Application service layer.

Provides a clean interface between CLI and validation APIs, centralizing
command orchestration, configuration, and policy decisions while keeping
CLI commands thin and testable.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional, Tuple, Union

from ..loader import load_snapshot
from ..models import ConfigurationSnapshot, ValidationOutcome
from ..rules import CompressionPolicy
from ..settings import Settings
from ..storage.base import BucketStore
from ..validator import SinkConfigValidator


class ConfigurationInvalid(Exception):
    """Validation completed and found violations."""

    def __init__(self, outcome: ValidationOutcome):
        super().__init__(
            f"{outcome.violation_count} violation(s) on: {', '.join(outcome.invalid_fields)}"
        )
        self.outcome = outcome


@dataclass(frozen=True)
class OpsConfig:
    """
    Configuration for Operations facade.

    Centralizes per-invocation policy so CLI commands stay declarative.
    """
    check_bucket: bool = True             # Query storage for bucket existence
    report_access_errors: bool = False    # Record storage failures instead of raising
    safe_formats: FrozenSet[str] = field(default_factory=frozenset)  # Overrides settings when non-empty
    verbose: bool = False                 # Show detailed output


class Operations:
    """
    Application service facade for CLI operations.

    Stateless except for injected config, settings and store. Exceptions
    bubble up for central exit-code mapping.
    """

    def __init__(self, config: OpsConfig, settings: Optional[Settings] = None,
                 store: Optional[BucketStore] = None):
        """
        Initialize Operations facade.

        Args:
            config: Configuration settings
            settings: Optional settings (if None, loaded from environment)
            store: Bucket store (if None and bucket checks are enabled, built from settings)
        """
        self.cfg = config

        if settings is None:
            from ..settings import create_settings_from_env
            settings = create_settings_from_env()
        self.settings = settings

        if store is None and config.check_bucket:
            from ..storage.object_store import bucket_store_for
            store = bucket_store_for(settings)
        self.store = store

    @property
    def policy(self) -> CompressionPolicy:
        return CompressionPolicy(safe_formats=self.cfg.safe_formats or self.settings.safe_formats)

    def validate(self, snapshot: ConfigurationSnapshot) -> ValidationOutcome:
        """Validate an already-built snapshot."""
        validator = SinkConfigValidator(
            policy=self.policy,
            store=self.store,
            on_access_error="report" if self.cfg.report_access_errors else "raise",
        )
        return validator.validate(snapshot, check_bucket=self.cfg.check_bucket)

    def validate_file(self, path: Union[str, Path]) -> Tuple[ConfigurationSnapshot, ValidationOutcome]:
        """
        Load a configuration file and validate it.

        Args:
            path: Connector configuration file

        Returns:
            The parsed snapshot and its validation outcome

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError / pydantic.ValidationError: If the configuration cannot be parsed
            StorageError: If the bucket check fails and access errors are not reported
        """
        snapshot = load_snapshot(path)
        return snapshot, self.validate(snapshot)
