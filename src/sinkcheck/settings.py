"""
Settings and configuration for sinkcheck.

Centralizes storage-client configuration and provides validation with
fail-fast behavior. Loads settings from environment variables at adapter
construction time.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import FrozenSet, Optional

from .rules import DEFAULT_SAFE_FORMATS

__all__ = ["Settings", "create_settings_from_env", "STORAGE_BACKENDS"]

STORAGE_BACKENDS = ("s3", "az")


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for sinkcheck storage adapters.

    Storage Settings:
        storage_backend: Which adapter checks bucket existence ("s3" or "az")
        storage_timeout_s: Connect/read timeout for the existence call

    S3 Settings:
        s3_region: AWS region
        s3_endpoint: Custom endpoint (for MinIO/LocalStack/private endpoints)
        s3_access_key: Access key id (falls back to the default credential chain)
        s3_secret_key: Secret access key

    Azure Settings:
        az_connection_string: Azure storage connection string
        az_account: Azure storage account name
        az_key: Azure storage account key
        az_blob_endpoint: Custom Azure blob endpoint (for Azurite/private endpoints)

    Policy Settings:
        safe_formats: Format identifiers allowed with compression enabled
    """
    storage_backend: str = "s3"
    storage_timeout_s: float = 30.0

    # S3 settings
    s3_region: Optional[str] = None
    s3_endpoint: Optional[str] = None
    s3_access_key: Optional[str] = None
    s3_secret_key: Optional[str] = None

    # Azure settings
    az_connection_string: Optional[str] = None
    az_account: Optional[str] = None
    az_key: Optional[str] = None
    az_blob_endpoint: Optional[str] = None

    safe_formats: FrozenSet[str] = DEFAULT_SAFE_FORMATS

    def __post_init__(self):
        """Validate settings on construction."""
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unsupported storage_backend: {self.storage_backend}. Expected one of {', '.join(STORAGE_BACKENDS)}"
            )

        if self.storage_timeout_s <= 0:
            raise ValueError(f"storage_timeout_s must be positive, got {self.storage_timeout_s}")

        endpoint_pattern = r"^https?://[a-zA-Z0-9.-]+(?::[0-9]+)?(?:/.*)?$"
        for name in ("s3_endpoint", "az_blob_endpoint"):
            value = getattr(self, name)
            if value and not re.match(endpoint_pattern, value):
                raise ValueError(f"Invalid {name} format: {value}")

        # S3 credentials are all-or-nothing; neither means default credential chain
        if bool(self.s3_access_key) != bool(self.s3_secret_key):
            raise ValueError("s3_access_key and s3_secret_key must be specified together")

        has_conn_str = bool(self.az_connection_string)
        has_account_key = bool(self.az_account and self.az_key)
        if has_conn_str and has_account_key:
            raise ValueError("Specify either az_connection_string OR (az_account + az_key), not both")
        if self.az_account and not self.az_key:
            raise ValueError("az_account specified but az_key is missing")
        if self.az_key and not self.az_account:
            raise ValueError("az_key specified but az_account is missing")

        if not self.safe_formats:
            raise ValueError("safe_formats must name at least one format")


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - SINKCHECK_STORAGE_BACKEND (default: s3)
        - SINKCHECK_STORAGE_TIMEOUT (default: 30.0)
        - SINKCHECK_SAFE_FORMATS (comma-separated, default: json,bytearray)

        S3:
        - AWS_REGION (optional)
        - SINKCHECK_S3_ENDPOINT (optional)
        - AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY (optional, together)

        Azure:
        - AZURE_STORAGE_CONNECTION_STRING (optional)
        - AZURE_STORAGE_ACCOUNT / AZURE_STORAGE_KEY (optional, together)
        - SINKCHECK_AZURE_BLOB_ENDPOINT (optional)

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If configuration is invalid

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    def get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        return float(value) if value else default

    safe_formats_raw = os.getenv("SINKCHECK_SAFE_FORMATS")
    if safe_formats_raw is not None:
        safe_formats = frozenset(f.strip() for f in safe_formats_raw.split(",") if f.strip())
    else:
        safe_formats = DEFAULT_SAFE_FORMATS

    return Settings(
        storage_backend=os.getenv("SINKCHECK_STORAGE_BACKEND", "s3").strip().lower(),
        storage_timeout_s=get_float("SINKCHECK_STORAGE_TIMEOUT", 30.0),
        s3_region=os.getenv("AWS_REGION"),
        s3_endpoint=os.getenv("SINKCHECK_S3_ENDPOINT"),
        s3_access_key=os.getenv("AWS_ACCESS_KEY_ID"),
        s3_secret_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        az_connection_string=os.getenv("AZURE_STORAGE_CONNECTION_STRING"),
        az_account=os.getenv("AZURE_STORAGE_ACCOUNT"),
        az_key=os.getenv("AZURE_STORAGE_KEY"),
        az_blob_endpoint=os.getenv("SINKCHECK_AZURE_BLOB_ENDPOINT"),
        safe_formats=safe_formats,
    )
