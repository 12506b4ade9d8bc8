"""
Tests for the compression compatibility rule engine.

Covers the compression-disabled escape, the data/keys/headers checks, their
independence, and the message template. The matrix test walks every
combination of the formats a sink is commonly configured with, plus one
custom identifier.
"""
from __future__ import annotations

import itertools

import pytest

from sinkcheck.fields import (
    COMPRESSION_TYPE,
    DATA_FORMAT_CLASS,
    HEADERS_FORMAT_CLASS,
    KEYS_FORMAT_CLASS,
    STORE_HEADERS,
    STORE_KEYS,
)
from sinkcheck.models import CompressionType, ConfigurationSnapshot, Role
from sinkcheck.rules import (
    DEFAULT_POLICY,
    DEFAULT_SAFE_FORMATS,
    FORMAT_CONFIG_ERROR_MESSAGE,
    CompressionPolicy,
    evaluate,
    format_config_error,
)

CUSTOM_FORMAT = "com.example.connect.CustomFormat"
DATA_FORMATS = ["avro", "parquet", "json", "bytearray", CUSTOM_FORMAT]
ROLE_FORMATS = ["avro", "parquet", "json", "bytearray"]
SAFE = {"json", "bytearray"}

MATRIX = list(itertools.product(
    DATA_FORMATS, [True, False], ROLE_FORMATS, [True, False], ROLE_FORMATS, ["none", "gzip"]
))


def _snapshot(data, store_keys, keys, store_headers, headers, compression) -> ConfigurationSnapshot:
    return ConfigurationSnapshot(
        data_format=data,
        store_keys=store_keys,
        keys_format=keys,
        store_headers=store_headers,
        headers_format=headers,
        compression_type=compression,
        bucket_name="bucket",
    )


class TestMessageTemplate:
    """Test compatibility message rendering."""

    def test_template_parameters(self):
        """Test that the message names compression, role and format."""
        message = format_config_error("gzip", "keys", "avro")
        assert message == (
            "Compression type 'gzip' is not supported for keys format class 'avro'. "
            "Supported format classes for compressed output: bytearray, json."
        )

    def test_same_template_for_every_role(self):
        """Test that all roles share one template."""
        for role in Role:
            expected = FORMAT_CONFIG_ERROR_MESSAGE.format(
                compression_type="gzip",
                role=role.value,
                format_identifier="parquet",
                supported="bytearray, json",
            )
            assert format_config_error(CompressionType.GZIP, role, "parquet") == expected

    def test_supported_list_follows_policy(self):
        """Test that the supported list reflects an injected policy."""
        policy = CompressionPolicy.of(["csv", "json"])
        message = format_config_error("gzip", "data", "avro", policy)
        assert message.endswith("Supported format classes for compressed output: csv, json.")

    def test_unknown_role_rejected(self):
        """Test that roles outside data/keys/headers are rejected."""
        with pytest.raises(ValueError):
            format_config_error("gzip", "values", "avro")


class TestCompressionPolicy:
    """Test CompressionPolicy construction and membership."""

    def test_default_safe_set(self):
        """Test the reference safe set is exactly json and bytearray."""
        assert DEFAULT_POLICY.safe_formats == frozenset({"json", "bytearray"})
        assert DEFAULT_SAFE_FORMATS == frozenset({"json", "bytearray"})

    def test_membership_is_literal(self):
        """Test that only exact identifiers are compression-safe."""
        assert DEFAULT_POLICY.is_compression_safe("json")
        assert DEFAULT_POLICY.is_compression_safe("bytearray")
        assert not DEFAULT_POLICY.is_compression_safe("JSON")
        assert not DEFAULT_POLICY.is_compression_safe("io.confluent.connect.s3.format.json.JsonFormat")
        assert not DEFAULT_POLICY.is_compression_safe(CUSTOM_FORMAT)

    def test_empty_policy_rejected(self):
        """Test that a policy must allow at least one format."""
        with pytest.raises(ValueError, match="at least one"):
            CompressionPolicy(safe_formats=frozenset())
        with pytest.raises(ValueError, match="at least one"):
            CompressionPolicy.of(["", "  "])

    def test_policy_accepts_iterables(self):
        """Test that non-frozenset iterables are normalized."""
        policy = CompressionPolicy(safe_formats={"csv"})
        assert isinstance(policy.safe_formats, frozenset)
        assert policy.is_compression_safe("csv")


class TestCompressionDisabled:
    """Test the compression-disabled escape."""

    @pytest.mark.parametrize("case", [c for c in MATRIX if c[5] == "none"])
    def test_no_violations_without_compression(self, case):
        """Test that no format or flag combination is flagged without compression."""
        outcome = evaluate(_snapshot(*case))
        assert outcome.is_valid
        assert outcome.errors == {}

    def test_scenario_d(self, make_snapshot):
        """Test unsafe data and keys formats are accepted when compression is none."""
        snapshot = make_snapshot(compression_type="none", data_format="avro", store_keys=True, keys_format="avro")
        assert evaluate(snapshot).is_valid


class TestDataCheck:
    """Test the data format check under gzip."""

    def test_scenario_a(self, make_snapshot):
        """Test json data with keys and headers disabled is valid."""
        assert evaluate(make_snapshot(data_format="json")).is_valid

    @pytest.mark.parametrize("data_format", ["json", "bytearray"])
    def test_safe_data_formats(self, make_snapshot, data_format):
        """Test that safe data formats produce no data violation."""
        outcome = evaluate(make_snapshot(data_format=data_format, keys_format="avro", headers_format="avro"))
        assert outcome.is_valid

    @pytest.mark.parametrize("data_format", ["avro", "parquet", CUSTOM_FORMAT])
    def test_scenario_b(self, make_snapshot, data_format):
        """Test that unsafe data formats flag data-format-class and compression-type only."""
        outcome = evaluate(make_snapshot(data_format=data_format))
        message = format_config_error("gzip", "data", data_format)

        assert outcome.messages_for(DATA_FORMAT_CLASS) == [message]
        assert outcome.messages_for(COMPRESSION_TYPE) == [message]
        assert set(outcome.invalid_fields) == {DATA_FORMAT_CLASS, COMPRESSION_TYPE}


class TestKeysAndHeadersChecks:
    """Test gating and field attribution of the keys and headers checks."""

    def test_scenario_c(self, make_snapshot):
        """Test unsafe keys format flags store-keys, keys-format-class and compression-type."""
        outcome = evaluate(make_snapshot(data_format="json", store_keys=True, keys_format="avro"))
        message = format_config_error("gzip", "keys", "avro")

        assert outcome.messages_for(STORE_KEYS) == [message]
        assert outcome.messages_for(KEYS_FORMAT_CLASS) == [message]
        assert outcome.messages_for(COMPRESSION_TYPE) == [message]
        assert outcome.messages_for(DATA_FORMAT_CLASS) == []

    @pytest.mark.parametrize("keys_format", ROLE_FORMATS + [CUSTOM_FORMAT])
    def test_keys_ignored_when_not_stored(self, make_snapshot, keys_format):
        """Test that keys format is irrelevant when keys are not persisted."""
        outcome = evaluate(make_snapshot(store_keys=False, keys_format=keys_format))
        assert outcome.is_valid

    def test_headers_symmetric_to_keys(self, make_snapshot):
        """Test unsafe headers format flags the headers fields."""
        outcome = evaluate(make_snapshot(store_headers=True, headers_format="parquet"))
        message = format_config_error("gzip", "headers", "parquet")

        assert outcome.messages_for(STORE_HEADERS) == [message]
        assert outcome.messages_for(HEADERS_FORMAT_CLASS) == [message]
        assert outcome.messages_for(COMPRESSION_TYPE) == [message]
        assert outcome.messages_for(STORE_KEYS) == []

    @pytest.mark.parametrize("headers_format", ROLE_FORMATS + [CUSTOM_FORMAT])
    def test_headers_ignored_when_not_stored(self, make_snapshot, headers_format):
        """Test that headers format is irrelevant when headers are not persisted."""
        outcome = evaluate(make_snapshot(store_headers=False, headers_format=headers_format))
        assert outcome.is_valid


class TestAdditivity:
    """Test that independent checks accumulate."""

    def test_all_roles_fail_together(self, make_snapshot):
        """Test that every failing role contributes its messages in detection order."""
        snapshot = make_snapshot(
            data_format="avro",
            store_keys=True,
            keys_format="parquet",
            store_headers=True,
            headers_format=CUSTOM_FORMAT,
        )
        outcome = evaluate(snapshot)

        data_msg = format_config_error("gzip", "data", "avro")
        keys_msg = format_config_error("gzip", "keys", "parquet")
        headers_msg = format_config_error("gzip", "headers", CUSTOM_FORMAT)

        assert outcome.messages_for(COMPRESSION_TYPE) == [data_msg, keys_msg, headers_msg]
        assert outcome.messages_for(DATA_FORMAT_CLASS) == [data_msg]
        assert outcome.messages_for(STORE_KEYS) == [keys_msg]
        assert outcome.messages_for(HEADERS_FORMAT_CLASS) == [headers_msg]
        assert outcome.violation_count == 8

    def test_same_format_in_two_roles_keeps_both_messages(self, make_snapshot):
        """Test that compression-type keeps one message per failing role."""
        outcome = evaluate(make_snapshot(data_format="avro", store_keys=True, keys_format="avro"))
        assert len(outcome.messages_for(COMPRESSION_TYPE)) == 2
        assert set(outcome.invalid_fields) == {DATA_FORMAT_CLASS, STORE_KEYS, KEYS_FORMAT_CLASS, COMPRESSION_TYPE}


class TestInjectedPolicy:
    """Test evaluation under a non-default policy."""

    def test_extended_policy_accepts_new_format(self, make_snapshot):
        """Test that adding a format to the policy makes it compression-safe."""
        policy = CompressionPolicy.of(["json", "bytearray", "csv"])
        assert evaluate(make_snapshot(data_format="csv"), policy).is_valid
        assert not evaluate(make_snapshot(data_format="csv")).is_valid

    def test_restricted_policy_rejects_default_format(self, make_snapshot):
        """Test that removing a format from the policy makes it unsafe."""
        policy = CompressionPolicy.of(["bytearray"])
        outcome = evaluate(make_snapshot(data_format="json"), policy)
        assert outcome.messages_for(DATA_FORMAT_CLASS) == [format_config_error("gzip", "data", "json", policy)]


class TestNativeFormatClasses:
    """Test evaluation of snapshots built from connector format class names."""

    @pytest.mark.parametrize("class_name", [
        "io.confluent.connect.s3.format.json.JsonFormat",
        "io.confluent.connect.s3.format.bytearray.ByteArrayFormat",
    ])
    def test_safe_classes_pass_with_gzip(self, class_name):
        snapshot = ConfigurationSnapshot.from_properties({
            "format.class": class_name,
            "store.kafka.keys": "true",
            "keys.format.class": class_name,
            "s3.compression.type": "gzip",
            "s3.bucket.name": "b",
        })
        assert evaluate(snapshot).is_valid

    def test_unsafe_class_reported_by_identifier(self):
        snapshot = ConfigurationSnapshot.from_properties({
            "format.class": "io.confluent.connect.s3.format.parquet.ParquetFormat",
            "s3.compression.type": "gzip",
            "s3.bucket.name": "b",
        })
        outcome = evaluate(snapshot)
        assert outcome.messages_for(DATA_FORMAT_CLASS) == [format_config_error("gzip", "data", "parquet")]


class TestMatrix:
    """Test every configuration combination against the expected violations."""

    @pytest.mark.parametrize("case", MATRIX)
    def test_expected_violations(self, case):
        """Test that exactly the expected fields carry exactly the expected messages."""
        data, store_keys, keys, store_headers, headers, compression = case
        outcome = evaluate(_snapshot(*case))

        expected = {}
        if compression == "gzip":
            failing = []
            if data not in SAFE:
                failing.append(("data", data, [DATA_FORMAT_CLASS]))
            if store_keys and keys not in SAFE:
                failing.append(("keys", keys, [STORE_KEYS, KEYS_FORMAT_CLASS]))
            if store_headers and headers not in SAFE:
                failing.append(("headers", headers, [STORE_HEADERS, HEADERS_FORMAT_CLASS]))
            for role, fmt, fields in failing:
                message = format_config_error(compression, role, fmt)
                for name in fields + [COMPRESSION_TYPE]:
                    expected.setdefault(name, []).append(message)

        assert outcome.to_dict() == expected
