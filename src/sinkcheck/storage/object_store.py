"""
Object store adapters for bucket existence checks.

Implements the BucketStore protocol for S3 (boto3) and Azure Blob Storage
(azure-storage-blob). SDKs are imported lazily so that only the backend in
use needs to be installed. Neither adapter retries: a single existence call
is made per check, and failures are mapped onto the storage error taxonomy.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Optional

from ..settings import Settings
from .base import BucketStore
from .errors import StorageAccessError, StorageAuthError

__all__ = ["S3BucketAdapter", "AzureBucketAdapter", "bucket_store_for"]

logger = logging.getLogger(__name__)

_S3_NOT_FOUND_CODES = {"404", "NoSuchBucket", "NotFound"}
_S3_AUTH_CODES = {"401", "403", "AccessDenied", "Forbidden", "InvalidAccessKeyId", "SignatureDoesNotMatch"}


class S3BucketAdapter(BucketStore):
    """
    BucketStore adapter for Amazon S3 and S3-compatible services.

    Uses ``head_bucket`` so no object listing permission is needed. Supports
    custom endpoints for MinIO/LocalStack. A pre-built client may be injected.
    """

    def __init__(self, *, settings: Settings, client: Optional[Any] = None) -> None:
        self._settings = settings
        self._client = client

        if settings.s3_endpoint:
            logger.debug(f"S3 adapter using custom endpoint: {settings.s3_endpoint}")
        if settings.s3_access_key:
            logger.debug("S3 adapter using static access key credentials")
        else:
            logger.debug("S3 adapter using default credential chain")

    def _get_client(self):
        """Create the boto3 client on first use."""
        if self._client is not None:
            return self._client

        try:
            import boto3
            from botocore.config import Config
        except ImportError:
            raise ImportError("boto3 package required for S3 bucket checks")

        config = Config(
            connect_timeout=self._settings.storage_timeout_s,
            read_timeout=self._settings.storage_timeout_s,
            retries={"mode": "standard", "max_attempts": 1},
        )
        self._client = boto3.client(
            "s3",
            region_name=self._settings.s3_region,
            endpoint_url=self._settings.s3_endpoint,
            aws_access_key_id=self._settings.s3_access_key,
            aws_secret_access_key=self._settings.s3_secret_key,
            config=config,
        )
        return self._client

    def bucket_exists(self, name: str) -> bool:
        """
        Check bucket existence with a HEAD request.

        Args:
            name: S3 bucket name

        Returns:
            True if the bucket exists, False on 404/NoSuchBucket

        Raises:
            StorageAuthError: On 401/403 or missing credentials
            StorageAccessError: On any other S3 or transport error
        """
        try:
            from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError
        except ImportError:
            raise ImportError("boto3 package required for S3 bucket checks")

        client = self._get_client()

        try:
            client.head_bucket(Bucket=name)
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            if code in _S3_NOT_FOUND_CODES or status == 404:
                return False
            if code in _S3_AUTH_CODES or status in (401, 403):
                raise StorageAuthError(f"Access denied checking S3 bucket {name}: {code or status}", bucket=name) from e
            raise StorageAccessError(f"S3 head_bucket error for {name}: {e}", bucket=name) from e
        except NoCredentialsError as e:
            raise StorageAuthError(f"No S3 credentials available to check bucket {name}", bucket=name) from e
        except BotoCoreError as e:
            raise StorageAccessError(f"S3 request failed for {name}: {e}", bucket=name) from e

        return True


class AzureBucketAdapter(BucketStore):
    """
    BucketStore adapter for Azure Blob Storage; buckets are containers.

    Uses connection string or account+key authentication, with optional
    custom endpoint for Azurite and private Azure clouds. A pre-built
    ``BlobServiceClient`` may be injected.
    """

    def __init__(self, *, settings: Settings, service_client: Optional[Any] = None) -> None:
        """
        Initialize Azure adapter with settings.

        Args:
            settings: Settings containing Azure authentication and configuration
            service_client: Optional pre-built BlobServiceClient

        Raises:
            ValueError: If Azure authentication is not properly configured
        """
        self._settings = settings
        self._service_client = service_client
        if service_client is None:
            self._validate_azure_auth()

        if settings.az_connection_string:
            logger.debug("Azure adapter using connection string auth")
        elif settings.az_account:
            logger.debug(f"Azure adapter using account+key auth for {settings.az_account}")
        if settings.az_blob_endpoint:
            logger.debug(f"Azure adapter custom endpoint: {settings.az_blob_endpoint}")

    def _validate_azure_auth(self) -> None:
        has_conn_str = bool(self._settings.az_connection_string)
        has_account_key = bool(self._settings.az_account and self._settings.az_key)

        if not has_conn_str and not has_account_key:
            raise ValueError("Azure authentication not configured: need AZURE_STORAGE_CONNECTION_STRING or (AZURE_STORAGE_ACCOUNT + AZURE_STORAGE_KEY)")

    def _get_service_client(self):
        """
        Get the Azure blob service client, creating it on first use.

        Connection patterns:

        1. Connection string: ``BlobServiceClient.from_connection_string()``
        2. Connection string + custom endpoint: account name and key are taken
           from the connection string, endpoint becomes ``{endpoint}/{account}``
        3. Account+key: ``https://{account}.blob.core.windows.net``
        4. Account+key + custom endpoint: ``{endpoint}/{account}``

        Retries are disabled; the check makes exactly one request.
        """
        if self._service_client is not None:
            return self._service_client

        try:
            from azure.storage.blob import BlobServiceClient
        except ImportError:
            raise ImportError("azure-storage-blob package required for Azure bucket checks")

        client_kwargs = {
            "connection_timeout": self._settings.storage_timeout_s,
            "read_timeout": self._settings.storage_timeout_s,
            "retry_total": 0,
        }
        endpoint = self._settings.az_blob_endpoint.rstrip("/") if self._settings.az_blob_endpoint else None

        if self._settings.az_connection_string:
            conn_str = self._settings.az_connection_string
            account_match = re.search(r"AccountName=([^;]+)", conn_str)
            if endpoint and account_match:
                key_match = re.search(r"AccountKey=([^;]+)", conn_str)
                account_name = account_match.group(1)
                credential = (
                    {"account_name": account_name, "account_key": key_match.group(1)}
                    if key_match else None
                )
                self._service_client = BlobServiceClient(
                    account_url=f"{endpoint}/{account_name}",
                    credential=credential,
                    **client_kwargs,
                )
            else:
                self._service_client = BlobServiceClient.from_connection_string(conn_str, **client_kwargs)
        else:
            account = self._settings.az_account
            account_url = f"{endpoint}/{account}" if endpoint else f"https://{account}.blob.core.windows.net"
            self._service_client = BlobServiceClient(
                account_url=account_url,
                credential=self._settings.az_key,
                **client_kwargs,
            )

        return self._service_client

    def bucket_exists(self, name: str) -> bool:
        """
        Check container existence.

        Args:
            name: Container name

        Returns:
            True if the container exists, False otherwise

        Raises:
            StorageAuthError: On authentication failure or HTTP 401/403
            StorageAccessError: On any other Azure error
        """
        try:
            from azure.core.exceptions import AzureError, ClientAuthenticationError, HttpResponseError
        except ImportError:
            raise ImportError("azure-storage-blob package required for Azure bucket checks")

        container_client = self._get_service_client().get_container_client(name)

        try:
            return bool(container_client.exists())
        except ClientAuthenticationError as e:
            raise StorageAuthError(f"Azure authentication failed checking container {name}: {e}", bucket=name) from e
        except HttpResponseError as e:
            if e.status_code in (401, 403):
                raise StorageAuthError(f"Access denied checking container {name}: {e.status_code}", bucket=name) from e
            raise StorageAccessError(f"Azure container check error for {name}: {e}", bucket=name) from e
        except AzureError as e:
            raise StorageAccessError(f"Azure request failed for {name}: {e}", bucket=name) from e


def bucket_store_for(settings: Settings) -> BucketStore:
    """
    Create the bucket store adapter selected by ``settings.storage_backend``.

    Args:
        settings: Settings for adapter configuration

    Returns:
        BucketStore adapter

    Raises:
        ValueError: For an unsupported backend or incomplete Azure auth
    """
    if settings.storage_backend == "s3":
        return S3BucketAdapter(settings=settings)
    elif settings.storage_backend == "az":
        return AzureBucketAdapter(settings=settings)
    else:
        # Settings validation already rejects other values
        raise ValueError(f"Unsupported storage backend: {settings.storage_backend}")
