"""Vendor code tables for integer fields.

The wire fields stay plain integers so unknown codes round-trip untouched;
these enums back the convenience views on the record models.
"""

from __future__ import annotations

import enum
from typing import Optional, TypeVar

E = TypeVar("E", bound=enum.IntEnum)


class PrecipitationType(enum.IntEnum):
    """Precipitation type reported in sky and Tempest observations."""

    NONE = 0
    RAIN = 1
    HAIL = 2
    RAIN_HAIL = 3


class RadioStatus(enum.IntEnum):
    """Hub radio state from ``radio_stats`` slot 3."""

    OFF = 0
    ON = 1
    ACTIVE = 3
    BLE_CONNECTED = 7


class SensorStatus(enum.IntFlag):
    """Failure bits of ``device_status.sensor_status``. Zero means all sensors OK."""

    OK = 0
    LIGHTNING_FAILED = 0x001
    LIGHTNING_NOISE = 0x002
    LIGHTNING_DISTURBER = 0x004
    PRESSURE_FAILED = 0x008
    TEMPERATURE_FAILED = 0x010
    HUMIDITY_FAILED = 0x020
    WIND_FAILED = 0x040
    PRECIPITATION_FAILED = 0x080
    LIGHT_UV_FAILED = 0x100
    POWER_BOOSTER_DEPLETED = 0x8000
    POWER_BOOSTER_SHORE_POWER = 0x10000


def lookup_code(enum_type: type[E], value: int) -> Optional[E]:
    """Return the enum member for ``value``, or None for codes not in the table."""
    try:
        return enum_type(value)
    except ValueError:
        return None
