"""Pydantic record modeling for tempestwx.

This module provides the record base classes, the eight packet models and
their positional payloads, and the bounded integer aliases that carry the
vendor's field widths.
"""

from __future__ import annotations

from .base import BaseRecord, ObservationRecord, PositionalRecord
from .enums import PrecipitationType, RadioStatus, SensorStatus
from .fields import BoundedInt, Epoch, Int32, UInt8, UInt16, UInt32, UInt64
from .records import (
    AirObs,
    AirObservation,
    DeviceStatus,
    HubStatus,
    LightningStrikeEvent,
    LightningStrikeEvt,
    RadioStats,
    RainStartEvent,
    RainStartEvt,
    RapidWind,
    RapidWindOb,
    Record,
    SkyObs,
    SkyObservation,
    TempestObs,
    TempestObservation,
)

__all__ = [
    "BaseRecord",
    "PositionalRecord",
    "ObservationRecord",
    # Packets
    "Record",
    "RainStartEvent",
    "LightningStrikeEvent",
    "RapidWind",
    "AirObservation",
    "SkyObservation",
    "TempestObservation",
    "DeviceStatus",
    "HubStatus",
    # Positional payloads
    "RainStartEvt",
    "LightningStrikeEvt",
    "RapidWindOb",
    "AirObs",
    "SkyObs",
    "TempestObs",
    "RadioStats",
    # Field helpers
    "BoundedInt",
    "Epoch",
    "Int32",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    # Code tables
    "PrecipitationType",
    "RadioStatus",
    "SensorStatus",
]
