"""
Sink configuration validator.

Combines the compatibility rule engine with the bucket check and merges both
into one outcome. Every check runs; nothing short-circuits apart from the
rule engine's own compression-disabled escape.
"""
from __future__ import annotations

import logging
from typing import Optional

from .bucket import AccessErrorMode, check_bucket_in
from .models import ConfigurationSnapshot, ValidationOutcome
from .rules import DEFAULT_POLICY, CompressionPolicy, evaluate
from .storage.base import BucketStore

__all__ = ["SinkConfigValidator", "validate"]

logger = logging.getLogger(__name__)


class SinkConfigValidator:
    """
    Validates sink configuration snapshots.

    Holds only immutable policy and an injected store, so one instance can
    serve many validations. Bucket existence is re-checked on every call.
    """

    def __init__(
        self,
        policy: CompressionPolicy = DEFAULT_POLICY,
        store: Optional[BucketStore] = None,
        on_access_error: AccessErrorMode = "raise",
    ):
        """
        Args:
            policy: Compression-safe format set
            store: Bucket existence capability (required for bucket checks)
            on_access_error: How storage failures surface; see check_bucket_in
        """
        if on_access_error not in ("raise", "report"):
            raise ValueError(f"on_access_error must be 'raise' or 'report', got {on_access_error!r}")
        self.policy = policy
        self.store = store
        self.on_access_error = on_access_error

    def validate(self, snapshot: ConfigurationSnapshot, check_bucket: bool = True) -> ValidationOutcome:
        """
        Validate a snapshot.

        Args:
            snapshot: Resolved configuration
            check_bucket: Whether to query the store for the bucket

        Returns:
            Merged outcome of compatibility and bucket checks

        Raises:
            ValueError: If check_bucket is requested without a store
            StorageError: If the store fails and on_access_error is "raise"
        """
        if check_bucket and self.store is None:
            raise ValueError("Bucket check requested but no bucket store configured")

        outcome = evaluate(snapshot, self.policy)
        if check_bucket:
            outcome = outcome.merge(check_bucket_in(self.store, snapshot.bucket_name, self.on_access_error))

        if outcome.is_valid:
            logger.debug("Configuration is valid")
        else:
            logger.debug(f"Configuration has {outcome.violation_count} violations on {', '.join(outcome.invalid_fields)}")
        return outcome


def validate(
    snapshot: ConfigurationSnapshot,
    store: BucketStore,
    policy: CompressionPolicy = DEFAULT_POLICY,
) -> ValidationOutcome:
    """Validate a snapshot against a store with default error handling."""
    return SinkConfigValidator(policy=policy, store=store).validate(snapshot)
