"""JSON packet decoder.

This module provides the decode() function that converts one packet, as received
from the hub or the cloud API, into a typed record. Decoding is all-or-nothing:
either every field is checked against the variant's schema and a record is
returned, or a DecodeError subclass describing the first problem is raised.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Union

from pydantic import ValidationError

from ..exceptions import (
    ArityMismatch,
    DecodeError,
    MalformedInput,
    MissingDiscriminator,
    MissingField,
    TypeMismatch,
)
from ..models.base import BaseRecord, PositionalRecord
from ..registry import lookup_record
from .schema import FieldSchema, schema_for

logger = logging.getLogger(__name__)

DISCRIMINATOR = "type"


def decode(data: Union[str, bytes, bytearray]) -> BaseRecord:
    """Decode a JSON packet to a record.

    Args:
        data: Packet text, or UTF-8 bytes as read from a datagram

    Returns:
        One of the eight record models, selected by the packet's ``type`` field

    Raises:
        MalformedInput: If the packet is not a UTF-8 JSON object
        MissingDiscriminator: If ``type`` is absent or not a string
        UnknownVariant: If ``type`` names no known record kind
        MissingField: If a required field is absent
        TypeMismatch: If a field or slot has the wrong type or width
        ArityMismatch: If a positional array has the wrong length

    Examples:
        ```python
        from tempestwx import RainStartEvent, decode

        rec = decode(
            '{"serial_number":"SK-00008453","type":"evt_precip",'
            '"hub_sn":"HB-00000001","evt":[1493322445]}'
        )
        assert isinstance(rec, RainStartEvent)
        print(rec.evt.epoch)
        ```
    """
    try:
        return decode_payload(_parse(data))
    except DecodeError as e:
        logger.debug("Rejected packet: %s", e)
        raise


def decode_payload(payload: Any) -> BaseRecord:
    """Decode an already-parsed JSON object to a record.

    Use this for packets embedded in a larger document, such as the
    observation list of a cloud REST response.

    Args:
        payload: Parsed JSON value (expected to be a dict)

    Returns:
        Decoded record

    Raises:
        DecodeError: Same conditions as decode()
    """
    if not isinstance(payload, dict):
        raise MalformedInput(f"Packet must be a JSON object, got {_json_type(payload)}")

    if DISCRIMINATOR not in payload:
        raise MissingDiscriminator(f"Packet has no {DISCRIMINATOR!r} field")
    tag = payload[DISCRIMINATOR]
    if not isinstance(tag, str):
        raise MissingDiscriminator(
            f"Packet {DISCRIMINATOR!r} field must be a string, got {_json_type(tag)}"
        )

    record_class = lookup_record(tag)

    try:
        field_values = _decode_object(record_class, payload)
        record = record_class(**field_values)
    except ValidationError as e:
        raise DecodeError(f"Failed to construct {record_class.__name__}: {e}") from e

    logger.debug("Decoded %s packet from %s", tag, field_values.get("serial_number"))
    return record


def _parse(data: Union[str, bytes, bytearray]) -> Any:
    """Parse packet text as strict JSON."""
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInput(f"Packet is not valid UTF-8: {e}") from e

    try:
        return json.loads(data, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise MalformedInput(f"Packet is not valid JSON: {e}") from e


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _decode_object(record_class: type[BaseRecord], payload: dict[str, Any]) -> dict[str, Any]:
    """Decode the named fields of a packet; unknown keys are ignored."""
    field_values: dict[str, Any] = {}
    for field_schema in schema_for(record_class).fields:
        if field_schema.name not in payload:
            raise MissingField(field_schema.name)
        field_values[field_schema.name] = _decode_field(
            field_schema, payload[field_schema.name], field_schema.name
        )
    return field_values


def _decode_field(field_schema: FieldSchema, value: Any, path: str) -> Any:
    """Decode a single field value.

    Args:
        field_schema: Schema information for the field
        value: Raw JSON value
        path: Location of the value, used in error messages

    Returns:
        Decoded field value
    """
    if field_schema.kind == "scalar":
        return _decode_scalar(field_schema, value, path)

    if value is None and field_schema.nullable:
        return None

    if field_schema.kind == "positional":
        return _decode_positional(field_schema.python_type, value, path)

    items = _require_array(field_schema, value, path)

    # Batched observations: an empty batch is valid
    if field_schema.kind == "batch":
        return tuple(
            _decode_positional(field_schema.python_type, item, f"{path}[{index}]")
            for index, item in enumerate(items)
        )

    # Opaque integer sequence: element type only, no per-element meaning
    decoded = []
    for index, item in enumerate(items):
        if not _is_integer(item):
            raise TypeMismatch(f"{path}[{index}]", "integer", _json_type(item))
        decoded.append(item)
    return tuple(decoded)


def _decode_positional(
    model_class: type[PositionalRecord], value: Any, path: str
) -> PositionalRecord:
    """Decode a fixed-length positional array slot by slot."""
    schema = schema_for(model_class)
    if not isinstance(value, (list, tuple)):
        raise TypeMismatch(path, f"array of {schema.arity} slots", _json_type(value))
    if len(value) != schema.arity:
        raise ArityMismatch(path, schema.arity, len(value))

    slot_values = {
        slot.name: _decode_scalar(slot, item, f"{path}.{slot.name}")
        for slot, item in zip(schema.fields, value)
    }
    return model_class(**slot_values)


def _decode_scalar(field_schema: FieldSchema, value: Any, path: str) -> Any:
    """Check and coerce a scalar against its declared type and bounds."""
    if value is None:
        if field_schema.nullable:
            return None
        raise TypeMismatch(path, field_schema.expected, "null")

    python_type = field_schema.python_type

    if python_type is str:
        if not isinstance(value, str):
            raise TypeMismatch(path, field_schema.expected, _json_type(value))
        return value

    if python_type is int:
        if not _is_integer(value):
            raise TypeMismatch(path, field_schema.expected, _json_type(value))
        if not field_schema.contains(value):
            raise TypeMismatch(path, field_schema.expected, f"integer {value}")
        return value

    if python_type is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeMismatch(path, field_schema.expected, _json_type(value))
        try:
            number = float(value)
        except OverflowError:
            raise TypeMismatch(path, "finite number", f"integer {value}") from None
        if not math.isfinite(number):
            raise TypeMismatch(path, "finite number", repr(number))
        return number

    raise DecodeError(f"Field {path}: unsupported type {python_type}")


def _require_array(field_schema: FieldSchema, value: Any, path: str) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        raise TypeMismatch(path, field_schema.expected, _json_type(value))
    return list(value)


def _is_integer(value: Any) -> bool:
    # bool is an int subclass but true/false are not numbers on the wire
    return isinstance(value, int) and not isinstance(value, bool)


def _json_type(value: Any) -> str:
    """Name the JSON type of a parsed value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
