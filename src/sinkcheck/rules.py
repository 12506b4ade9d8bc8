"""
Compression compatibility rules.

Block compression is only safe for formats whose output stays readable when
the object is compressed as a whole. Every other format, including custom
identifiers the engine knows nothing about, is rejected when compression is
enabled. The engine performs no I/O and holds no state, so it can be called
concurrently with distinct snapshots.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Tuple

from .fields import (
    COMPRESSION_TYPE,
    DATA_FORMAT_CLASS,
    HEADERS_FORMAT_CLASS,
    KEYS_FORMAT_CLASS,
    STORE_HEADERS,
    STORE_KEYS,
)
from .models import CompressionType, ConfigurationSnapshot, Role, ValidationOutcome

__all__ = [
    "FORMAT_CONFIG_ERROR_MESSAGE",
    "DEFAULT_SAFE_FORMATS",
    "CompressionPolicy",
    "DEFAULT_POLICY",
    "format_config_error",
    "evaluate",
]

logger = logging.getLogger(__name__)

FORMAT_CONFIG_ERROR_MESSAGE = (
    "Compression type '{compression_type}' is not supported for {role} format class "
    "'{format_identifier}'. Supported format classes for compressed output: {supported}."
)

DEFAULT_SAFE_FORMATS: FrozenSet[str] = frozenset({"json", "bytearray"})


@dataclass(frozen=True)
class CompressionPolicy:
    """
    Set of format identifiers that may be written with compression enabled.

    Membership is literal string equality; there is no notion of an unknown
    format being assumed safe.
    """
    safe_formats: FrozenSet[str] = DEFAULT_SAFE_FORMATS

    def __post_init__(self):
        if not self.safe_formats:
            raise ValueError("CompressionPolicy requires at least one compression-safe format")
        # Accept any iterable of names from callers
        object.__setattr__(self, "safe_formats", frozenset(self.safe_formats))

    @classmethod
    def of(cls, formats: Iterable[str]) -> CompressionPolicy:
        return cls(safe_formats=frozenset(f.strip() for f in formats if f.strip()))

    def is_compression_safe(self, format_identifier: str) -> bool:
        return format_identifier in self.safe_formats

    @property
    def supported(self) -> str:
        return ", ".join(sorted(self.safe_formats))


DEFAULT_POLICY = CompressionPolicy()


def format_config_error(
    compression_type: CompressionType | str,
    role: Role | str,
    format_identifier: str,
    policy: CompressionPolicy = DEFAULT_POLICY,
) -> str:
    """Render the compatibility violation message for one role."""
    return FORMAT_CONFIG_ERROR_MESSAGE.format(
        compression_type=CompressionType(compression_type).value,
        role=Role(role).value,
        format_identifier=format_identifier,
        supported=policy.supported,
    )


def _role_checks(snapshot: ConfigurationSnapshot) -> Tuple[Tuple[Role, bool, str, Tuple[str, ...]], ...]:
    # (role, enabled, format, fields to flag besides compression-type)
    return (
        (Role.DATA, True, snapshot.data_format, (DATA_FORMAT_CLASS,)),
        (Role.KEYS, snapshot.store_keys, snapshot.keys_format, (STORE_KEYS, KEYS_FORMAT_CLASS)),
        (Role.HEADERS, snapshot.store_headers, snapshot.headers_format, (STORE_HEADERS, HEADERS_FORMAT_CLASS)),
    )


def evaluate(
    snapshot: ConfigurationSnapshot,
    policy: CompressionPolicy = DEFAULT_POLICY,
) -> ValidationOutcome:
    """
    Evaluate format/compression compatibility for a snapshot.

    With compression disabled nothing is checked. Otherwise the data, keys
    and headers checks run independently; keys and headers are only checked
    when they are persisted. Each failing role flags its own fields and adds
    its own message to ``compression-type``.

    Args:
        snapshot: Resolved configuration
        policy: Compression-safe format set

    Returns:
        Outcome holding compatibility violations only (no bucket check)
    """
    outcome = ValidationOutcome()

    if snapshot.compression_type is CompressionType.NONE:
        logger.debug("Compression disabled; skipping format compatibility checks")
        return outcome

    for role, enabled, format_identifier, role_fields in _role_checks(snapshot):
        if not enabled:
            logger.debug(f"{role.value} not persisted; skipping {role.value} format check")
            continue
        if policy.is_compression_safe(format_identifier):
            continue

        message = format_config_error(snapshot.compression_type, role, format_identifier, policy)
        logger.debug(f"Incompatible {role.value} format {format_identifier!r} for {snapshot.compression_type.value}")
        for field_name in role_fields:
            outcome.add(field_name, message)
        outcome.add(COMPRESSION_TYPE, message)

    return outcome
