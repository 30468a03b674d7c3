"""Packet codec for tempestwx.

This module provides decoding and encoding between the hub's JSON packets and
the typed record models, driven by per-model schema tables.
"""

from __future__ import annotations

from .decoder import decode, decode_payload
from .encoder import encode, encode_payload
from .schema import FieldSchema, RecordSchema, schema_for

__all__ = [
    "encode",
    "encode_payload",
    "decode",
    "decode_payload",
    "RecordSchema",
    "FieldSchema",
    "schema_for",
]
