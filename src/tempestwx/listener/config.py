"""Configuration for the UDP packet listener."""

from __future__ import annotations

from dataclasses import dataclass

# Port the hub broadcasts its packets on
DEFAULT_PORT = 50222


@dataclass
class ListenerConfig:
    """Configuration for :class:`tempestwx.listener.UdpListener`.

    Attributes:
        host: Address to bind (default ``"0.0.0.0"``, all interfaces). The hub
            broadcasts, so binding a single interface address can miss packets.
        port: UDP port (default 50222, the hub's broadcast port)
        buffer_size: Receive buffer per datagram in bytes (default 1024).
            Hub status packets run to roughly 350 bytes; larger observation
            batches from the cloud API are not sent over UDP.
        poll_interval: Socket timeout in seconds (default 0.5). Bounds how
            long stop() waits for the receive loop to notice.

    Examples:
        ```python
        from tempestwx.listener import ListenerConfig, UdpListener

        config = ListenerConfig(port=50222, buffer_size=2048)
        listener = UdpListener(config, on_record=print)
        listener.run(max_packets=10)
        ```
    """

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    buffer_size: int = 1024
    poll_interval: float = 0.5

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port must be 0-65535, got {self.port}")

        if self.buffer_size <= 0:
            raise ValueError(f"buffer_size must be > 0, got {self.buffer_size}")

        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be > 0, got {self.poll_interval}")
