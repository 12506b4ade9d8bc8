"""
sinkcheck - compatibility validation for object-storage sink connector configuration.
"""
from .bucket import BUCKET_NOT_EXISTS_ERROR_MESSAGE, check_bucket, check_bucket_in
from .models import CompressionType, ConfigurationSnapshot, Role, ValidationOutcome
from .rules import (
    DEFAULT_POLICY,
    FORMAT_CONFIG_ERROR_MESSAGE,
    CompressionPolicy,
    evaluate,
    format_config_error,
)
from .validator import SinkConfigValidator, validate

__all__ = [
    "BUCKET_NOT_EXISTS_ERROR_MESSAGE",
    "FORMAT_CONFIG_ERROR_MESSAGE",
    "DEFAULT_POLICY",
    "CompressionPolicy",
    "CompressionType",
    "ConfigurationSnapshot",
    "Role",
    "SinkConfigValidator",
    "ValidationOutcome",
    "check_bucket",
    "check_bucket_in",
    "evaluate",
    "format_config_error",
    "validate",
]
