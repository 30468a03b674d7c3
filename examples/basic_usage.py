#!/usr/bin/env python3
"""Basic usage example for tempestwx.

This example demonstrates:
1. Decoding packets into typed records
2. Reading positional observation slots by name
3. Handling rejected packets
4. Encoding a record back to packet text
"""

from __future__ import annotations

from tempestwx import (
    DecodeError,
    HubStatus,
    SkyObservation,
    decode,
    encode,
)

SKY_PACKET = """
{
    "serial_number": "SK-00008453",
    "type": "obs_sky",
    "hub_sn": "HB-00000001",
    "obs": [[1493321340,9000,10,0.0,2.6,4.6,7.4,187,3.12,1,130,null,0,3]],
    "firmware_revision": 29
}
"""

HUB_PACKET = (
    '{"serial_number":"HB-00000001","type":"hub_status","firmware_revision":"35",'
    '"uptime":1670133,"rssi":-62,"timestamp":1495724691,"reset_flags":"BOR,PIN,POR",'
    '"seq":48,"fs":[1,0,15675411,524288],"radio_stats":[2,1,0,3,2839],"mqtt_stats":[1,0]}'
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("tempestwx Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Decoding a SKY observation...")
    sky = decode(SKY_PACKET)
    assert isinstance(sky, SkyObservation)
    for obs in sky.obs:
        print(f"   Time: {obs.observed_at.isoformat()}")
        print(f"   Wind: {obs.wind_avg} m/s from {obs.wind_direction} deg")
        print(f"   Rain today: {'not reported' if obs.rain_day is None else obs.rain_day}")
        print(f"   Precipitation: {obs.precipitation.name if obs.precipitation else 'unknown'}")
    print()

    print("2. Decoding a hub status...")
    hub = decode(HUB_PACKET)
    assert isinstance(hub, HubStatus)
    print(f"   Hub {hub.serial_number} firmware {hub.firmware_revision}")
    print(f"   Radio: {hub.radio_stats.status}, reset flags: {hub.reset_flag_list}")
    print()

    print("3. Rejected packets raise a specific error...")
    for bad in ('{"type": "evt_unknown"}', '{"type": "rapid_wind"}', "{oops"):
        try:
            decode(bad)
        except DecodeError as e:
            print(f"   {type(e).__name__}: {e}")
    print()

    print("4. Encoding back to packet text...")
    text = encode(sky)
    print(f"   {text}")
    print(f"   Round-trip equal: {decode(text) == sky}")


if __name__ == "__main__":
    main()
