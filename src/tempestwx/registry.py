"""Discriminator table for tempestwx.

Maps each packet ``type`` string to its record model. The table is closed:
packets with any other ``type`` are rejected with UnknownVariant rather than
being passed through as an opaque record.
"""

from __future__ import annotations

from .exceptions import SchemaError, UnknownVariant
from .models.base import BaseRecord
from .models.records import (
    AirObservation,
    DeviceStatus,
    HubStatus,
    LightningStrikeEvent,
    RainStartEvent,
    RapidWind,
    SkyObservation,
    TempestObservation,
)

# Global registry: discriminator string -> record class
RECORD_REGISTRY: dict[str, type[BaseRecord]] = {}


def register_record(record_class: type[BaseRecord]) -> type[BaseRecord]:
    """Register a record class under its ``record_type`` tag.

    Args:
        record_class: BaseRecord subclass with a ``record_type`` class attribute

    Returns:
        The class itself, so this can be used as a decorator

    Raises:
        SchemaError: If the class has no tag or the tag belongs to another class
    """
    tag = getattr(record_class, "record_type", None)
    if not isinstance(tag, str) or not tag:
        raise SchemaError(
            f"{record_class.__name__} has no record_type attribute. Cannot register for decode."
        )

    existing = RECORD_REGISTRY.get(tag)
    if existing is not None and existing is not record_class:
        raise SchemaError(
            f"Record type {tag!r} already registered to {existing.__name__}. "
            f"Cannot register {record_class.__name__} with the same tag."
        )

    RECORD_REGISTRY[tag] = record_class
    return record_class


def lookup_record(tag: str) -> type[BaseRecord]:
    """Return the record class for a discriminator string.

    Raises:
        UnknownVariant: If no record class is registered under ``tag``
    """
    record_class = RECORD_REGISTRY.get(tag)
    if record_class is None:
        raise UnknownVariant(tag)
    return record_class


for _record_class in (
    RainStartEvent,
    LightningStrikeEvent,
    RapidWind,
    AirObservation,
    SkyObservation,
    TempestObservation,
    DeviceStatus,
    HubStatus,
):
    register_record(_record_class)
