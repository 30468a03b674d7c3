"""tempestwx: WeatherFlow Tempest Packet Codec

A Python library for decoding the JSON packets a WeatherFlow Tempest hub
broadcasts on the local network (the cloud REST API returns the same format)
into typed, immutable records, and for encoding records back to packets.

Key Features:
- Pydantic-based record modeling for all eight packet types
- Schema-driven decoding of positional observation arrays
- Distinct exception per rejection reason (malformed, unknown type, arity, ...)
- Round-trip safe encoding

Quick Start:
    >>> from tempestwx import RainStartEvent, decode, encode
    >>>
    >>> rec = decode(
    ...     '{"serial_number":"SK-00008453","type":"evt_precip",'
    ...     '"hub_sn":"HB-00000001","evt":[1493322445]}'
    ... )
    >>> isinstance(rec, RainStartEvent)
    True
    >>> rec.evt.epoch
    1493322445
    >>> decode(encode(rec)) == rec
    True

Reference: https://weatherflow.github.io/Tempest/api/udp/v171/
"""

from __future__ import annotations

from .codec import decode, decode_payload, encode, encode_payload
from .exceptions import (
    ArityMismatch,
    DecodeError,
    EncodeError,
    MalformedInput,
    MissingDiscriminator,
    MissingField,
    SchemaError,
    TempestError,
    TypeMismatch,
    UnknownVariant,
)
from .models import (
    AirObs,
    AirObservation,
    BaseRecord,
    DeviceStatus,
    HubStatus,
    LightningStrikeEvent,
    LightningStrikeEvt,
    PositionalRecord,
    PrecipitationType,
    RadioStats,
    RadioStatus,
    RainStartEvent,
    RainStartEvt,
    RapidWind,
    RapidWindOb,
    Record,
    SensorStatus,
    SkyObs,
    SkyObservation,
    TempestObs,
    TempestObservation,
)
from .registry import RECORD_REGISTRY, lookup_record

__version__ = "0.1.0"

__all__ = [
    # Core API
    "decode",
    "decode_payload",
    "encode",
    "encode_payload",
    "lookup_record",
    "RECORD_REGISTRY",
    # Records
    "Record",
    "BaseRecord",
    "PositionalRecord",
    "RainStartEvent",
    "LightningStrikeEvent",
    "RapidWind",
    "AirObservation",
    "SkyObservation",
    "TempestObservation",
    "DeviceStatus",
    "HubStatus",
    "RainStartEvt",
    "LightningStrikeEvt",
    "RapidWindOb",
    "AirObs",
    "SkyObs",
    "TempestObs",
    "RadioStats",
    # Code tables
    "PrecipitationType",
    "RadioStatus",
    "SensorStatus",
    # Exceptions
    "TempestError",
    "SchemaError",
    "EncodeError",
    "DecodeError",
    "MalformedInput",
    "MissingDiscriminator",
    "UnknownVariant",
    "MissingField",
    "TypeMismatch",
    "ArityMismatch",
    # Version
    "__version__",
]
