"""UDP listener that feeds hub datagrams to the packet codec.

Each datagram carries exactly one JSON packet. The listener decodes it and hands
the record to a callback; packets that fail to decode are reported and skipped,
so one bad datagram never stops the loop.
"""

from __future__ import annotations

import logging
import socket
import threading
from typing import Callable, Optional

from ..codec import decode
from ..exceptions import DecodeError
from ..models.base import BaseRecord
from .config import ListenerConfig

logger = logging.getLogger(__name__)

RecordCallback = Callable[[BaseRecord], None]
ErrorCallback = Callable[[DecodeError, bytes], None]


class UdpListener:
    """Receive hub packets on a UDP port and decode them.

    Use run() to block in the current thread, or start()/stop() to listen on a
    background daemon thread. Callbacks run on the listening thread.

    Attributes:
        config: Listener configuration
        packets: Datagrams received so far
        errors: Datagrams rejected by the decoder so far

    Examples:
        ```python
        from tempestwx import RapidWind
        from tempestwx.listener import ListenerConfig, UdpListener

        def on_record(record):
            if isinstance(record, RapidWind):
                print(record.ob.wind_speed)

        listener = UdpListener(ListenerConfig(), on_record)
        listener.start()
        ...
        listener.stop()
        ```
    """

    def __init__(
        self,
        config: Optional[ListenerConfig] = None,
        on_record: Optional[RecordCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self.config = config if config is not None else ListenerConfig()
        self.on_record = on_record
        self.on_error = on_error
        self.packets = 0
        self.errors = 0
        self._stop = threading.Event()
        self._ready = threading.Event()
        self._sock: Optional[socket.socket] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def address(self) -> Optional[tuple[str, int]]:
        """Bound (host, port), or None before the socket is open."""
        if self._sock is None:
            return None
        return self._sock.getsockname()[:2]

    def wait_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the socket is bound; returns False on timeout."""
        return self._ready.wait(timeout)

    def start(self) -> None:
        """Start the listener thread if it is not already running."""
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, name="UdpListener", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the listener thread and close the socket."""
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=self.config.poll_interval + 1.0)
        self._thread = None

    def run(self, max_packets: Optional[int] = None) -> int:
        """Receive and decode datagrams until stopped.

        Args:
            max_packets: Return after this many datagrams; None runs until stop()

        Returns:
            Number of datagrams received in this call
        """
        received = 0
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.config.host, self.config.port))
            # Timeout lets the loop check the stop event when no data comes
            sock.settimeout(self.config.poll_interval)
            self._sock = sock
            self._ready.set()
            logger.info("Listening for hub packets on %s:%s", *self.address)

            try:
                while not self._stop.is_set():
                    if max_packets is not None and received >= max_packets:
                        break
                    try:
                        data, source = sock.recvfrom(self.config.buffer_size)
                    except socket.timeout:
                        continue
                    received += 1
                    self.handle_datagram(data, source)
            finally:
                self._sock = None
                self._ready.clear()
        return received

    def handle_datagram(self, data: bytes, source: tuple[str, int]) -> Optional[BaseRecord]:
        """Decode one datagram and dispatch it to the callbacks.

        Args:
            data: Raw datagram payload
            source: Sender (host, port)

        Returns:
            The decoded record, or None if the datagram was rejected
        """
        self.packets += 1
        try:
            record = decode(data)
        except DecodeError as e:
            self.errors += 1
            if self.on_error is not None:
                self.on_error(e, data)
            else:
                logger.warning("Dropped %s-byte packet from %s: %s", len(data), source[0], e)
            return None

        if self.on_record is not None:
            self.on_record(record)
        return record
