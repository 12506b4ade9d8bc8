"""
Data models for sink configuration validation.

The snapshot is a pydantic model so that raw connector properties (strings
for everything, native or stable key names) can be coerced into typed,
immutable values before any rule runs. The outcome is a plain container of
per-field messages.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .fields import (
    ALL_FIELDS,
    BUCKET_NAME,
    COMPRESSION_TYPE,
    DATA_FORMAT_CLASS,
    FORMAT_CLASS_ALIASES,
    HEADERS_FORMAT_CLASS,
    KEYS_FORMAT_CLASS,
    NATIVE_FORMAT_KEYS,
    PROPERTY_ALIASES,
    STORE_HEADERS,
    STORE_KEYS,
)

# Fields whose values compare case-insensitively
_CASE_INSENSITIVE_FIELDS = (STORE_KEYS, STORE_HEADERS, COMPRESSION_TYPE)


def _comparable(name: str, value: Any) -> str:
    """Normalize a raw value so equivalent spellings of it compare equal."""
    text = str(value).strip()
    if name in _CASE_INSENSITIVE_FIELDS:
        return text.lower()
    return text

__all__ = ["CompressionType", "Role", "ConfigurationSnapshot", "ValidationOutcome"]


class CompressionType(str, Enum):
    """Output compression codecs understood by the rule engine."""
    NONE = "none"
    GZIP = "gzip"


class Role(str, Enum):
    """Value stream a format check concerns."""
    DATA = "data"
    KEYS = "keys"
    HEADERS = "headers"


class ConfigurationSnapshot(BaseModel):
    """
    Resolved sink configuration, immutable for the duration of a validation.

    Fields are addressable by attribute name (``data_format``) or by the
    stable field name (``data-format-class``). Format identifiers are opaque
    tokens; only their literal value matters to the rule engine.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    data_format: str = Field(..., alias=DATA_FORMAT_CLASS, min_length=1, description="Format used for record values")
    store_keys: bool = Field(default=False, alias=STORE_KEYS, description="Persist record keys")
    keys_format: str = Field(default="avro", alias=KEYS_FORMAT_CLASS, min_length=1, description="Format used for record keys")
    store_headers: bool = Field(default=False, alias=STORE_HEADERS, description="Persist record headers")
    headers_format: str = Field(default="avro", alias=HEADERS_FORMAT_CLASS, min_length=1, description="Format used for record headers")
    compression_type: CompressionType = Field(default=CompressionType.NONE, alias=COMPRESSION_TYPE, description="Output compression codec")
    bucket_name: str = Field(..., alias=BUCKET_NAME, min_length=1, description="Target bucket")

    @field_validator("compression_type", mode="before")
    @classmethod
    def normalize_compression_type(cls, v: Any) -> Any:
        """Accept codec names regardless of case and surrounding whitespace."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> ConfigurationSnapshot:
        """
        Build a snapshot from a raw connector property map.

        Accepts stable field names and native connector property keys
        (``format.class``, ``s3.bucket.name``, ...). Keys that name neither
        are ignored, since a connector configuration carries many settings
        unrelated to format compatibility. Values under the native format
        keys may be the connector's format class names
        (``io.confluent.connect.s3.format.json.JsonFormat``); known ones are
        translated to their format identifier, others pass through as-is.

        Args:
            properties: Raw key-value configuration

        Returns:
            Validated snapshot

        Raises:
            ValueError: If a field and its native alias disagree
            pydantic.ValidationError: If a value cannot be coerced or a required field is missing
        """
        resolved: Dict[str, Any] = {}
        sources: Dict[str, str] = {}

        for key, value in properties.items():
            name = PROPERTY_ALIASES.get(key, key)
            if name not in ALL_FIELDS:
                continue
            if key in NATIVE_FORMAT_KEYS and isinstance(value, str):
                value = FORMAT_CLASS_ALIASES.get(value.strip(), value)
            if name in resolved and _comparable(name, resolved[name]) != _comparable(name, value):
                raise ValueError(
                    f"Conflicting values for {name}: {sources[name]}={resolved[name]!r}, {key}={value!r}"
                )
            resolved[name] = value
            sources[name] = key

        return cls.model_validate(resolved)

    def to_properties(self) -> Dict[str, str]:
        """Render the snapshot back to stable field names with string values."""
        return {
            DATA_FORMAT_CLASS: self.data_format,
            STORE_KEYS: str(self.store_keys).lower(),
            KEYS_FORMAT_CLASS: self.keys_format,
            STORE_HEADERS: str(self.store_headers).lower(),
            HEADERS_FORMAT_CLASS: self.headers_format,
            COMPRESSION_TYPE: self.compression_type.value,
            BUCKET_NAME: self.bucket_name,
        }


@dataclass
class ValidationOutcome:
    """
    Per-field violation messages.

    Invariants:
    - message order within a field is detection order
    - messages are never deduplicated; independent rules may each add one
    - a field that is absent, or present with an empty list, is valid
    """
    errors: Dict[str, List[str]] = field(default_factory=dict)

    def add(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)

    def messages_for(self, field_name: str) -> List[str]:
        return list(self.errors.get(field_name, []))

    def merge(self, other: ValidationOutcome) -> ValidationOutcome:
        """Return a new outcome with ``other``'s messages appended per field."""
        merged = ValidationOutcome()
        for source in (self, other):
            for field_name, messages in source.errors.items():
                for message in messages:
                    merged.add(field_name, message)
        return merged

    @property
    def is_valid(self) -> bool:
        return not any(self.errors.values())

    @property
    def invalid_fields(self) -> List[str]:
        return [name for name, messages in self.errors.items() if messages]

    @property
    def violation_count(self) -> int:
        return sum(len(messages) for messages in self.errors.values())

    def to_dict(self, include_valid: bool = False) -> Dict[str, List[str]]:
        """
        Export as field name -> messages.

        Args:
            include_valid: Also emit every known field with an empty list

        Returns:
            Plain dict suitable for JSON output
        """
        result: Dict[str, List[str]] = {}
        if include_valid:
            for name in ALL_FIELDS:
                result[name] = []
        for name, messages in self.errors.items():
            if messages or include_valid:
                result[name] = list(messages)
        return result
