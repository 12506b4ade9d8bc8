from .base import BucketStore
from .errors import StorageAccessError, StorageAuthError, StorageError

__all__ = ["BucketStore", "StorageError", "StorageAuthError", "StorageAccessError"]
