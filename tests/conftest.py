"""Root pytest configuration for sinkcheck tests."""
import pytest

from sinkcheck.models import ConfigurationSnapshot
from sinkcheck.settings import Settings
from .storage.fakes.fake_bucket_store import FakeBucketStore

TEST_BUCKET = "sink-test-bucket"

_ENV_VARS = (
    "SINKCHECK_STORAGE_BACKEND",
    "SINKCHECK_STORAGE_TIMEOUT",
    "SINKCHECK_SAFE_FORMATS",
    "SINKCHECK_S3_ENDPOINT",
    "SINKCHECK_AZURE_BLOB_ENDPOINT",
    "SINKCHECK_STORE",
    "SINKCHECK_FAKE_BUCKETS",
    "AWS_REGION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AZURE_STORAGE_CONNECTION_STRING",
    "AZURE_STORAGE_ACCOUNT",
    "AZURE_STORAGE_KEY",
)


# Isolate tests from the developer's environment
@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Clear every environment variable sinkcheck reads."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    """Standard test settings."""
    return Settings(storage_backend="s3", s3_region="us-west-2")


@pytest.fixture
def bucket_store():
    """Fake store that knows the standard test bucket."""
    return FakeBucketStore(buckets=[TEST_BUCKET])


@pytest.fixture
def make_snapshot():
    """Build snapshots with valid defaults, overriding selected fields."""
    def _make(**overrides) -> ConfigurationSnapshot:
        values = {
            "data_format": "json",
            "store_keys": False,
            "keys_format": "json",
            "store_headers": False,
            "headers_format": "json",
            "compression_type": "gzip",
            "bucket_name": TEST_BUCKET,
        }
        values.update(overrides)
        return ConfigurationSnapshot(**values)
    return _make
