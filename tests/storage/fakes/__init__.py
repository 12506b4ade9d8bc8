# Fake implementations for testing

from .fake_bucket_store import FakeBucketStore

__all__ = ["FakeBucketStore"]
