"""
Storage interfaces for sinkcheck.

The validator only needs to know whether a bucket exists. This protocol is
the boundary between validation and storage implementations, enabling
dependency injection of fakes in tests and of any client in host code.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = ["BucketStore"]


@runtime_checkable
class BucketStore(Protocol):
    """Protocol for bucket existence checks."""

    def bucket_exists(self, name: str) -> bool:
        """
        Check whether a bucket (or container) exists.

        Args:
            name: Bucket name

        Returns:
            True if the bucket exists, False if the service reports it missing

        Raises:
            StorageAuthError: If credentials are missing or rejected
            StorageAccessError: If the service could not be reached or answered with an error
        """
        ...
