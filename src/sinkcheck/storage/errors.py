"""
Storage error classes.

Separates "the storage service could not be asked" from "the bucket does not
exist". A bucket that is reported missing is a validation result, never an
exception; these errors cover the cases where no answer was obtained.
"""
from __future__ import annotations


class StorageError(Exception):
    """
    Base class for storage access failures.

    Adapters map SDK-specific exceptions onto this hierarchy so callers can
    handle failures uniformly across providers.
    """

    def __init__(self, message: str, bucket: str | None = None):
        super().__init__(message)
        self.bucket = bucket


class StorageAuthError(StorageError):
    """
    Authentication or authorization error.

    Raised when:
    - HTTP 401 / 403 from the storage service
    - SDK credential failures (missing or rejected credentials)
    """
    pass


class StorageAccessError(StorageError):
    """
    Storage service unreachable or returned an unexpected error.

    Raised when:
    - Network errors, DNS failures, timeouts
    - Throttling or 5xx responses
    - Any other SDK error that is not a definitive "not found"
    """
    pass


__all__ = ["StorageError", "StorageAuthError", "StorageAccessError"]
