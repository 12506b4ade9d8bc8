"""
Bucket reachability check.

Runs independently of the compatibility rules, including when compression is
disabled.
"""
from __future__ import annotations

import logging
from typing import Literal

from .fields import BUCKET_NAME
from .models import ValidationOutcome
from .storage.base import BucketStore
from .storage.errors import StorageError

__all__ = [
    "BUCKET_NOT_EXISTS_ERROR_MESSAGE",
    "BUCKET_ACCESS_ERROR_MESSAGE",
    "AccessErrorMode",
    "check_bucket",
    "check_bucket_in",
]

logger = logging.getLogger(__name__)

BUCKET_NOT_EXISTS_ERROR_MESSAGE = "The bucket does not exist or you do not have access to it."
BUCKET_ACCESS_ERROR_MESSAGE = "Unable to verify bucket '{bucket_name}': {reason}"

AccessErrorMode = Literal["raise", "report"]


def check_bucket(bucket_exists: bool, bucket_name: str) -> ValidationOutcome:
    """Turn an existence fact into an outcome with at most one bucket-name violation."""
    outcome = ValidationOutcome()
    if not bucket_exists:
        logger.info(f"Bucket {bucket_name!r} does not exist")
        outcome.add(BUCKET_NAME, BUCKET_NOT_EXISTS_ERROR_MESSAGE)
    return outcome


def check_bucket_in(
    store: BucketStore,
    bucket_name: str,
    on_access_error: AccessErrorMode = "raise",
) -> ValidationOutcome:
    """
    Ask the store whether the bucket exists and report the result.

    A missing bucket is a violation. A failure to obtain an answer is not the
    same thing: by default it propagates, and with ``on_access_error="report"``
    it is recorded on ``bucket-name`` with a message distinct from the
    missing-bucket one.

    Args:
        store: Storage capability
        bucket_name: Bucket to check
        on_access_error: "raise" to propagate StorageError, "report" to record it

    Returns:
        Outcome with zero or one bucket-name message

    Raises:
        StorageError: If the store fails and on_access_error is "raise"
    """
    try:
        exists = store.bucket_exists(bucket_name)
    except StorageError as e:
        if on_access_error != "report":
            raise
        logger.warning(f"Bucket check for {bucket_name!r} failed; reporting as violation: {e}")
        outcome = ValidationOutcome()
        outcome.add(BUCKET_NAME, BUCKET_ACCESS_ERROR_MESSAGE.format(bucket_name=bucket_name, reason=e))
        return outcome

    logger.debug(f"Bucket {bucket_name!r} exists: {exists}")
    return check_bucket(exists, bucket_name)
