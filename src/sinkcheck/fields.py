"""
Stable field names used as keys for both configuration input and
validation output.

Native connector property keys are accepted as aliases when a snapshot is
built from a raw property map.
"""
from __future__ import annotations

from typing import Dict

__all__ = [
    "DATA_FORMAT_CLASS",
    "STORE_KEYS",
    "KEYS_FORMAT_CLASS",
    "STORE_HEADERS",
    "HEADERS_FORMAT_CLASS",
    "COMPRESSION_TYPE",
    "BUCKET_NAME",
    "ALL_FIELDS",
    "PROPERTY_ALIASES",
    "NATIVE_FORMAT_KEYS",
    "FORMAT_CLASS_ALIASES",
]

DATA_FORMAT_CLASS = "data-format-class"
STORE_KEYS = "store-keys"
KEYS_FORMAT_CLASS = "keys-format-class"
STORE_HEADERS = "store-headers"
HEADERS_FORMAT_CLASS = "headers-format-class"
COMPRESSION_TYPE = "compression-type"
BUCKET_NAME = "bucket-name"

# Report order
ALL_FIELDS = (
    DATA_FORMAT_CLASS,
    STORE_KEYS,
    KEYS_FORMAT_CLASS,
    STORE_HEADERS,
    HEADERS_FORMAT_CLASS,
    COMPRESSION_TYPE,
    BUCKET_NAME,
)

# Connector property key -> stable field name
PROPERTY_ALIASES: Dict[str, str] = {
    "format.class": DATA_FORMAT_CLASS,
    "store.kafka.keys": STORE_KEYS,
    "keys.format.class": KEYS_FORMAT_CLASS,
    "store.kafka.headers": STORE_HEADERS,
    "headers.format.class": HEADERS_FORMAT_CLASS,
    "s3.compression.type": COMPRESSION_TYPE,
    "s3.bucket.name": BUCKET_NAME,
}

# Native keys whose values name a connector format class
NATIVE_FORMAT_KEYS = frozenset({"format.class", "keys.format.class", "headers.format.class"})

# Connector format class -> format identifier
FORMAT_CLASS_ALIASES: Dict[str, str] = {
    "io.confluent.connect.s3.format.avro.AvroFormat": "avro",
    "io.confluent.connect.s3.format.json.JsonFormat": "json",
    "io.confluent.connect.s3.format.bytearray.ByteArrayFormat": "bytearray",
    "io.confluent.connect.s3.format.parquet.ParquetFormat": "parquet",
}
