"""Unit tests for packet decoding/encoding."""

from __future__ import annotations

import json

import pytest

from tempestwx import (
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
    SkyObs,
    SkyObservation,
    TempestObs,
    TempestObservation,
    decode,
    decode_payload,
    encode,
    encode_payload,
)

EXPECTED = {
    "evt_precip": RainStartEvent(
        serial_number="SK-00008453",
        hub_sn="HB-00000001",
        evt=RainStartEvt(epoch=1493322445),
    ),
    "evt_strike": LightningStrikeEvent(
        serial_number="AR-00004049",
        hub_sn="HB-00000001",
        evt=LightningStrikeEvt(epoch=1493322445, distance=27, energy=3848),
    ),
    "rapid_wind": RapidWind(
        serial_number="SK-00008453",
        hub_sn="HB-00000001",
        ob=RapidWindOb(epoch=1493322445, wind_speed=2.3, wind_direction=128),
    ),
    "obs_air": AirObservation(
        serial_number="AR-00004049",
        hub_sn="HB-00000001",
        obs=(
            AirObs(
                epoch=1493164835,
                station_pressure=835.0,
                air_temperature=10.0,
                relative_humidity=45,
                lightning_strike_count=0,
                lightning_strike_avg_distance=0,
                battery=3.46,
                report_interval=1,
            ),
        ),
        firmware_revision=17,
    ),
    "obs_sky": SkyObservation(
        serial_number="SK-00008453",
        hub_sn="HB-00000001",
        obs=(
            SkyObs(
                epoch=1493321340,
                illuminance=9000,
                uv=10,
                rain_minute=0.0,
                wind_lull_min3=2.6,
                wind_avg=4.6,
                wind_gust_max3=7.4,
                wind_direction=187,
                battery=3.12,
                report_interval=1,
                solar_radiation=130,
                rain_day=None,
                precipitation_type=0,
                wind_sample_interval=3,
            ),
        ),
        firmware_revision=29,
    ),
    "obs_st": TempestObservation(
        serial_number="AR-00000512",
        hub_sn="HB-00013030",
        obs=(
            TempestObs(
                epoch=1588948614,
                wind_lull_min3=0.18,
                wind_avg=0.22,
                wind_gust_max3=0.27,
                wind_direction=144,
                wind_sample_interval=6,
                station_pressure=1017.57,
                air_temperature=22.37,
                relative_humidity=50.26,
                illuminance=328,
                uv=0.03,
                solar_radiation=3,
                rain_minute=0.0,
                precipitation_type=0,
                lightning_strike_dist=0,
                lightning_strike_count=0,
                battery=2.410,
                report_interval=1,
            ),
        ),
        firmware_revision=129,
    ),
    "device_status": DeviceStatus(
        serial_number="AR-00004049",
        hub_sn="HB-00000001",
        timestamp=1510855923,
        uptime=2189,
        voltage=3.50,
        firmware_revision=17,
        rssi=-17,
        hub_rssi=-87,
        sensor_status=0,
        debug=0,
    ),
    "hub_status": HubStatus(
        serial_number="HB-00000001",
        firmware_revision="35",
        uptime=1670133,
        rssi=-62,
        timestamp=1495724691,
        reset_flags="BOR,PIN,POR",
        seq=48,
        fs=(1, 0, 15675411, 524288),
        radio_stats=RadioStats(version=2, reboots=1, i2c_errors=0, radio_status=3, network_id=2839),
        mqtt_stats=(1, 0),
    ),
}


class TestDecode:
    """Test decoding of captured packets."""

    @pytest.mark.parametrize("tag", sorted(EXPECTED))
    def test_sample_packet(self, sample_packets: dict[str, str], tag: str) -> None:
        """Each captured packet decodes to exactly the expected record."""
        record = decode(sample_packets[tag])

        assert type(record) is type(EXPECTED[tag])
        assert record == EXPECTED[tag]
        assert record.record_type == tag

    def test_rain_start_epoch(self, sample_packets: dict[str, str]) -> None:
        record = decode(sample_packets["evt_precip"])

        assert isinstance(record, RainStartEvent)
        assert record.evt.epoch == 1493322445

    def test_bytes_input(self, sample_packets: dict[str, str]) -> None:
        """Datagram bytes decode the same as text."""
        raw = sample_packets["rapid_wind"].encode("utf-8")

        assert decode(raw) == EXPECTED["rapid_wind"]
        assert decode(bytearray(raw)) == EXPECTED["rapid_wind"]

    def test_float_slots_accept_integers(self) -> None:
        record = decode(
            '{"serial_number":"SK-1","type":"rapid_wind","hub_sn":"HB-1","ob":[1,3,90]}'
        )

        assert record.ob.wind_speed == 3.0
        assert isinstance(record.ob.wind_speed, float)

    def test_unknown_keys_ignored(self, sky_packet: dict) -> None:
        sky_packet["extra"] = {"anything": [1, 2]}

        record = decode_payload(sky_packet)

        assert record == EXPECTED["obs_sky"]

    def test_sky_rain_day_value(self, sky_packet: dict) -> None:
        sky_packet["obs"][0][11] = 42

        record = decode_payload(sky_packet)

        assert record.obs[0].rain_day == 42

    def test_sky_rain_day_null(self, sky_packet: dict) -> None:
        record = decode_payload(sky_packet)

        assert record.obs[0].rain_day is None

    @pytest.mark.parametrize("tag", ["obs_air", "obs_sky", "obs_st"])
    def test_empty_batch(self, sample_packets: dict[str, str], tag: str) -> None:
        """An empty observation batch is valid and yields zero observations."""
        payload = json.loads(sample_packets[tag])
        payload["obs"] = []

        record = decode(json.dumps(payload))

        assert record.obs == ()

    def test_multiple_observations(self, sky_packet: dict) -> None:
        second = list(sky_packet["obs"][0])
        second[0] = 1493321400
        second[11] = 5
        sky_packet["obs"].append(second)

        record = decode_payload(sky_packet)

        assert [obs.epoch for obs in record.obs] == [1493321340, 1493321400]
        assert [obs.rain_day for obs in record.obs] == [None, 5]

    def test_hub_firmware_is_text(self, sample_packets: dict[str, str]) -> None:
        record = decode(sample_packets["hub_status"])

        assert record.firmware_revision == "35"

    def test_integer_width_boundaries(self) -> None:
        """Largest u16 and most negative i32 values decode."""
        strike = decode(
            '{"serial_number":"AR-1","type":"evt_strike","hub_sn":"HB-1",'
            '"evt":[18446744073709551615,65535,65535]}'
        )
        assert strike.evt.epoch == 2**64 - 1
        assert strike.evt.energy == 65535

        payload = json.loads(
            '{"serial_number":"AR-1","type":"device_status","hub_sn":"HB-1",'
            '"timestamp":0,"uptime":0,"voltage":0,"firmware_revision":0,'
            '"rssi":-2147483648,"hub_rssi":2147483647,"sensor_status":0,"debug":0}'
        )
        status = decode_payload(payload)
        assert status.rssi == -(2**31)
        assert status.hub_rssi == 2**31 - 1


class TestEncode:
    """Test encoding back to packet text."""

    @pytest.mark.parametrize("tag", sorted(EXPECTED))
    def test_roundtrip(self, tag: str) -> None:
        record = EXPECTED[tag]

        assert decode(encode(record)) == record

    @pytest.mark.parametrize("tag", sorted(EXPECTED))
    def test_type_field_first(self, tag: str) -> None:
        payload = encode_payload(EXPECTED[tag])

        assert next(iter(payload)) == "type"
        assert payload["type"] == tag

    def test_nullable_slot_written_as_null(self) -> None:
        text = encode(EXPECTED["obs_sky"])

        assert json.loads(text)["obs"] == [
            [1493321340, 9000, 10, 0.0, 2.6, 4.6, 7.4, 187, 3.12, 1, 130, None, 0, 3]
        ]
        assert ",null," in text

    def test_positional_layout(self) -> None:
        payload = json.loads(encode(EXPECTED["hub_status"]))

        assert payload["radio_stats"] == [2, 1, 0, 3, 2839]
        assert payload["fs"] == [1, 0, 15675411, 524288]
        assert payload["mqtt_stats"] == [1, 0]
        assert "hub_sn" not in payload

    def test_compact_by_default(self) -> None:
        text = encode(EXPECTED["evt_precip"])

        assert text == (
            '{"type":"evt_precip","serial_number":"SK-00008453",'
            '"hub_sn":"HB-00000001","evt":[1493322445]}'
        )

    def test_indent(self) -> None:
        text = encode(EXPECTED["evt_precip"], indent=2)

        assert "\n" in text
        assert json.loads(text) == json.loads(encode(EXPECTED["evt_precip"]))

    def test_encode_is_deterministic(self) -> None:
        assert encode(EXPECTED["obs_st"]) == encode(EXPECTED["obs_st"])
