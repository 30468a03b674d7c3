#!/usr/bin/env python3
"""Print the next ten packets a hub broadcasts on the local network.

Run on a machine on the same subnet as the hub:

    python examples/udp_monitor.py
"""

from __future__ import annotations

import logging

from tempestwx import BaseRecord, DecodeError, RapidWind
from tempestwx.listener import ListenerConfig, UdpListener


def on_record(record: BaseRecord) -> None:
    if isinstance(record, RapidWind):
        print(f"wind {record.ob.wind_speed:5.2f} m/s @ {record.ob.wind_direction:3d} deg")
    else:
        print(f"{record.record_type:<14} from {record.serial_number}")


def on_error(error: DecodeError, data: bytes) -> None:
    print(f"rejected {len(data)} bytes: {error}")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    listener = UdpListener(ListenerConfig(), on_record, on_error)
    listener.run(max_packets=10)


if __name__ == "__main__":
    main()
