"""JSON packet encoder.

This module provides the encode() function that converts a record back to the
hub's wire format: a JSON object with the ``type`` tag first, positional
payloads as ordered arrays, and absent nullable slots written as ``null``.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from ..exceptions import EncodeError
from ..models.base import BaseRecord, PositionalRecord
from ..registry import RECORD_REGISTRY
from .decoder import DISCRIMINATOR
from .schema import FieldSchema, schema_for


def encode(record: BaseRecord, indent: Optional[int] = None) -> str:
    """Encode a record to canonical packet text.

    Args:
        record: Record to encode
        indent: Pretty-print with this indent; compact separators when None

    Returns:
        JSON text that decode() maps back to an equal record

    Raises:
        EncodeError: If ``record`` is not a registered record, or holds a
            non-finite float

    Examples:
        ```python
        from tempestwx import RapidWind, RapidWindOb, decode, encode

        rec = RapidWind(
            serial_number="SK-00008453",
            hub_sn="HB-00000001",
            ob=RapidWindOb(epoch=1493322445, wind_speed=2.3, wind_direction=128),
        )
        text = encode(rec)
        # {"type":"rapid_wind","serial_number":"SK-00008453",...,"ob":[1493322445,2.3,128]}
        assert decode(text) == rec
        ```
    """
    payload = encode_payload(record)
    separators = (",", ":") if indent is None else None
    try:
        return json.dumps(payload, indent=indent, separators=separators, allow_nan=False)
    except ValueError as e:
        raise EncodeError(f"Cannot encode {type(record).__name__}: {e}") from e


def encode_payload(record: BaseRecord) -> dict[str, Any]:
    """Convert a record to a JSON-ready dict (``type`` key first).

    Args:
        record: Record to convert

    Returns:
        Mapping of wire field names to JSON-compatible values

    Raises:
        EncodeError: If ``record`` is not a registered record
    """
    if not isinstance(record, BaseRecord):
        raise EncodeError(f"Expected a record, got {type(record).__name__}")

    tag = type(record).record_type
    if RECORD_REGISTRY.get(tag) is not type(record):
        raise EncodeError(f"{type(record).__name__} is not registered under {tag!r}")

    payload: dict[str, Any] = {DISCRIMINATOR: tag}
    for field_schema in schema_for(type(record)).fields:
        payload[field_schema.name] = _encode_field(field_schema, getattr(record, field_schema.name))
    return payload


def _encode_field(field_schema: FieldSchema, value: Any) -> Any:
    """Encode a single field value."""
    if value is None:
        return None

    if field_schema.kind == "positional":
        return _encode_positional(value)

    if field_schema.kind == "batch":
        return [_encode_positional(item) for item in value]

    if field_schema.kind == "sequence":
        return list(value)

    return value


def _encode_positional(value: PositionalRecord) -> list[Any]:
    """Serialize a positional payload into its ordered slot array."""
    return [getattr(value, slot.name) for slot in schema_for(type(value)).fields]
