"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

# One captured packet per record type, as broadcast by a hub
SAMPLE_PACKETS = {
    "evt_precip": """
        {
            "serial_number": "SK-00008453",
            "type":"evt_precip",
            "hub_sn": "HB-00000001",
            "evt":[1493322445]
        }""",
    "evt_strike": """
        {
            "serial_number": "AR-00004049",
            "type":"evt_strike",
            "hub_sn": "HB-00000001",
            "evt":[1493322445,27,3848]
        }""",
    "rapid_wind": """
        {
            "serial_number": "SK-00008453",
            "type": "rapid_wind",
            "hub_sn": "HB-00000001",
            "ob":[1493322445,2.3,128]
        }""",
    "obs_air": """
        {
            "serial_number": "AR-00004049",
            "type":"obs_air",
            "hub_sn": "HB-00000001",
            "obs":[
                [1493164835,835.0,10.0,45,0,0,3.46,1]
            ],
            "firmware_revision": 17
        }""",
    "obs_sky": """
        {
            "serial_number": "SK-00008453",
            "type":"obs_sky",
            "hub_sn": "HB-00000001",
            "obs":[
                [1493321340,9000,10,0.0,2.6,4.6,7.4,187,3.12,1,130,null,0,3]
            ],
            "firmware_revision": 29
        }""",
    "obs_st": """
        {
            "serial_number": "AR-00000512",
            "type":"obs_st",
            "hub_sn": "HB-00013030",
            "obs":[
                [1588948614,0.18,0.22,0.27,144,6,1017.57,22.37,50.26,328,0.03,3,0.00000,0,0,0,2.410,1]
            ],
            "firmware_revision": 129
        }""",
    "device_status": """
        {
            "serial_number": "AR-00004049",
            "type": "device_status",
            "hub_sn": "HB-00000001",
            "timestamp": 1510855923,
            "uptime": 2189,
            "voltage": 3.50,
            "firmware_revision": 17,
            "rssi": -17,
            "hub_rssi": -87,
            "sensor_status": 0,
            "debug": 0
        }""",
    "hub_status": """
        {
            "serial_number":"HB-00000001",
            "type":"hub_status",
            "firmware_revision":"35",
            "uptime":1670133,
            "rssi":-62,
            "timestamp":1495724691,
            "reset_flags": "BOR,PIN,POR",
            "seq": 48,
            "fs": [1, 0, 15675411, 524288],
            "radio_stats": [2, 1, 0, 3, 2839],
            "mqtt_stats": [1, 0]
        }""",
}


@pytest.fixture
def sample_packets() -> dict[str, str]:
    """Captured packet text keyed by record type."""
    return dict(SAMPLE_PACKETS)


@pytest.fixture
def sky_packet() -> dict:
    """Parsed obs_sky packet, for tests that tweak individual fields."""
    return {
        "serial_number": "SK-00008453",
        "type": "obs_sky",
        "hub_sn": "HB-00000001",
        "obs": [[1493321340, 9000, 10, 0.0, 2.6, 4.6, 7.4, 187, 3.12, 1, 130, None, 0, 3]],
        "firmware_revision": 29,
    }
