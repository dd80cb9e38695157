"""Log lines to the console and to a UDP multicast group."""

from __future__ import annotations

import socket
import time
from collections.abc import Callable

_MAX_PACKET = 99
_MIN_GAP = 0.005


class UDPLogger:
    """Prefix messages with a name, print them and send them as multicast datagrams."""

    def __init__(
        self,
        interface_addr: str,
        multicast_addr: str,
        port: int,
        name: str = "Log",
        sock: socket.socket | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.interface_addr = interface_addr
        self.multicast_addr = multicast_addr
        self.port = port
        self.name = name
        self._clock = clock
        self._last_send: float | None = None
        if sock is None:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
            sock.setsockopt(
                socket.IPPROTO_IP,
                socket.IP_MULTICAST_IF,
                socket.inet_aton(interface_addr),
            )
        self._sock = sock

    def log(self, message: str) -> str:
        """Send ``message`` and return the line as printed."""
        if self._last_send is not None and self._clock() < self._last_send + _MIN_GAP:
            time.sleep(_MIN_GAP)
        line = f"{self.name}: {message}"
        print(line)
        payload = line.encode("utf-8")[:_MAX_PACKET]
        self._sock.sendto(payload, (self.multicast_addr, self.port))
        self._last_send = self._clock()
        return line

    def log_color(self, color: int) -> str:
        """Log the red, green and blue parts of a 24-bit color."""
        red = color >> 16 & 0xFF
        green = color >> 8 & 0xFF
        blue = color & 0xFF
        return self.log(f"{red}, {green}, {blue}")

    def close(self) -> None:
        """Close the underlying socket."""
        self._sock.close()

    def __enter__(self) -> UDPLogger:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()