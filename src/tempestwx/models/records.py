"""Record models for the hub's UDP packets.

Field order on every ``PositionalRecord`` subclass is the slot order on the wire;
do not reorder fields. Sample packets are shown on each class.

Reference: https://weatherflow.github.io/Tempest/api/udp/v171/
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional, Union

from pydantic import Field

from .base import BaseRecord, ObservationRecord, PositionalRecord, utc_datetime
from .enums import PrecipitationType, RadioStatus, SensorStatus, lookup_code
from .fields import Epoch, Int32, UInt8, UInt16, UInt32

# ============================================================================
# Positional payloads
# ============================================================================


class RainStartEvt(ObservationRecord):
    """Rain start event payload ``[epoch]``."""


class LightningStrikeEvt(ObservationRecord):
    """Lightning strike payload ``[epoch, distance, energy]``."""

    distance: UInt16 = Field(description="Strike distance, km")
    energy: UInt16 = Field(description="Strike energy, unitless")


class RapidWindOb(ObservationRecord):
    """Rapid wind sample ``[epoch, wind_speed, wind_direction]``."""

    wind_speed: float = Field(description="Wind speed, m/s")
    wind_direction: UInt32 = Field(description="Wind direction, degrees")


class AirObs(ObservationRecord):
    """One AIR module observation (8 slots)."""

    station_pressure: float = Field(description="Station pressure, MB")
    air_temperature: float = Field(description="Air temperature, C")
    relative_humidity: UInt32 = Field(description="Relative humidity, %")
    lightning_strike_count: UInt32
    lightning_strike_avg_distance: UInt32 = Field(description="Average strike distance, km")
    battery: float = Field(description="Battery, volts")
    report_interval: UInt32 = Field(description="Report interval, minutes")


class SkyObs(ObservationRecord):
    """One SKY module observation (14 slots, ``rain_day`` may be null)."""

    illuminance: UInt32 = Field(description="Illuminance, lux")
    uv: UInt32 = Field(description="UV index")
    rain_minute: float = Field(description="Rain accumulated over the previous minute, mm")
    wind_lull_min3: float = Field(description="Wind lull (minimum 3 second sample), m/s")
    wind_avg: float = Field(description="Wind average over report interval, m/s")
    wind_gust_max3: float = Field(description="Wind gust (maximum 3 second sample), m/s")
    wind_direction: UInt32 = Field(description="Wind direction, degrees")
    battery: float = Field(description="Battery, volts")
    report_interval: UInt32 = Field(description="Report interval, minutes")
    solar_radiation: UInt32 = Field(description="Solar radiation, W/m^2")
    rain_day: Optional[UInt32] = Field(description="Local day rain accumulation, mm")
    precipitation_type: UInt8
    wind_sample_interval: UInt32 = Field(description="Wind sample interval, seconds")

    @property
    def precipitation(self) -> Optional[PrecipitationType]:
        return lookup_code(PrecipitationType, self.precipitation_type)


class TempestObs(ObservationRecord):
    """One Tempest (ST) observation (18 slots)."""

    wind_lull_min3: float = Field(description="Wind lull (minimum 3 second sample), m/s")
    wind_avg: float = Field(description="Wind average over report interval, m/s")
    wind_gust_max3: float = Field(description="Wind gust (maximum 3 second sample), m/s")
    wind_direction: UInt32 = Field(description="Wind direction, degrees")
    wind_sample_interval: UInt32 = Field(description="Wind sample interval, seconds")
    station_pressure: float = Field(description="Station pressure, MB")
    air_temperature: float = Field(description="Air temperature, C")
    relative_humidity: float = Field(description="Relative humidity, %")
    illuminance: UInt32 = Field(description="Illuminance, lux")
    uv: float = Field(description="UV index")
    solar_radiation: UInt32 = Field(description="Solar radiation, W/m^2")
    rain_minute: float = Field(description="Rain accumulated over the previous minute, mm")
    precipitation_type: UInt8
    lightning_strike_dist: UInt32 = Field(description="Lightning strike average distance, km")
    lightning_strike_count: UInt32
    battery: float = Field(description="Battery, volts")
    report_interval: UInt32 = Field(description="Report interval, minutes")

    @property
    def precipitation(self) -> Optional[PrecipitationType]:
        return lookup_code(PrecipitationType, self.precipitation_type)


class RadioStats(PositionalRecord):
    """Hub radio statistics ``[version, reboots, i2c_errors, radio_status, network_id]``."""

    version: UInt32
    reboots: UInt32 = Field(description="Reboot count")
    i2c_errors: UInt32 = Field(description="I2C bus error count")
    radio_status: UInt8
    network_id: UInt32 = Field(description="Radio network ID")

    @property
    def status(self) -> Optional[RadioStatus]:
        return lookup_code(RadioStatus, self.radio_status)


# ============================================================================
# Packets
# ============================================================================


class RainStartEvent(BaseRecord):
    """Rain start event.

    ``{"serial_number":"SK-00008453","type":"evt_precip","hub_sn":"HB-00000001",
    "evt":[1493322445]}``
    """

    record_type: ClassVar[str] = "evt_precip"

    serial_number: str
    hub_sn: str
    evt: RainStartEvt


class LightningStrikeEvent(BaseRecord):
    """Lightning strike event.

    ``{"serial_number":"AR-00004049","type":"evt_strike","hub_sn":"HB-00000001",
    "evt":[1493322445,27,3848]}``
    """

    record_type: ClassVar[str] = "evt_strike"

    serial_number: str
    hub_sn: str
    evt: LightningStrikeEvt


class RapidWind(BaseRecord):
    """Rapid wind sample, sent every few seconds.

    ``{"serial_number":"SK-00008453","type":"rapid_wind","hub_sn":"HB-00000001",
    "ob":[1493322445,2.3,128]}``
    """

    record_type: ClassVar[str] = "rapid_wind"

    serial_number: str
    hub_sn: str
    ob: RapidWindOb


class AirObservation(BaseRecord):
    """Batched AIR module observations."""

    record_type: ClassVar[str] = "obs_air"

    serial_number: str
    hub_sn: str
    obs: tuple[AirObs, ...]
    firmware_revision: UInt8


class SkyObservation(BaseRecord):
    """Batched SKY module observations."""

    record_type: ClassVar[str] = "obs_sky"

    serial_number: str
    hub_sn: str
    obs: tuple[SkyObs, ...]
    firmware_revision: UInt8


class TempestObservation(BaseRecord):
    """Batched Tempest (ST) observations."""

    record_type: ClassVar[str] = "obs_st"

    serial_number: str
    hub_sn: str
    obs: tuple[TempestObs, ...]
    firmware_revision: UInt32


class DeviceStatus(BaseRecord):
    """Sensor module status, sent once a minute."""

    record_type: ClassVar[str] = "device_status"

    serial_number: str
    hub_sn: str
    timestamp: Epoch
    uptime: UInt32 = Field(description="Uptime, seconds")
    voltage: float = Field(description="Battery, volts")
    firmware_revision: UInt32
    rssi: Int32 = Field(description="Device signal strength, dB")
    hub_rssi: Int32 = Field(description="Hub signal strength as seen by the device, dB")
    sensor_status: UInt32
    debug: UInt32

    @property
    def observed_at(self) -> Optional[datetime]:
        return utc_datetime(self.timestamp)

    @property
    def sensor_flags(self) -> SensorStatus:
        """Decoded ``sensor_status`` bits; unknown bits are kept in the flag value."""
        return SensorStatus(self.sensor_status)


class HubStatus(BaseRecord):
    """Hub status. Describes the hub itself, so there is no ``hub_sn``.

    The hub reports ``firmware_revision`` as text, unlike the sensor modules.
    ``fs`` and ``mqtt_stats`` are vendor-internal counters kept as raw integers.
    """

    record_type: ClassVar[str] = "hub_status"

    serial_number: str
    firmware_revision: str
    uptime: UInt32 = Field(description="Uptime, seconds")
    rssi: Int32 = Field(description="Wi-Fi signal strength, dB")
    timestamp: Epoch
    reset_flags: str
    seq: UInt32
    fs: tuple[int, ...]
    radio_stats: RadioStats
    mqtt_stats: tuple[int, ...]

    @property
    def observed_at(self) -> Optional[datetime]:
        return utc_datetime(self.timestamp)

    @property
    def reset_flag_list(self) -> list[str]:
        """``reset_flags`` split into codes, e.g. ``["BOR", "PIN", "POR"]``."""
        return [flag for flag in self.reset_flags.split(",") if flag]


Record = Union[
    RainStartEvent,
    LightningStrikeEvent,
    RapidWind,
    AirObservation,
    SkyObservation,
    TempestObservation,
    DeviceStatus,
    HubStatus,
]
