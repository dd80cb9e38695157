"""Minimal SNTP client with calendar date and European summer time handling."""

from __future__ import annotations

import socket
import time
from collections.abc import Callable

SEVENTY_YEARS = 2208988800
NTP_PACKET_SIZE = 48
NTP_PORT = 123
DEFAULT_LOCAL_PORT = 1337
DEFAULT_SERVER = "pool.ntp.org"

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

_RESPONSE_TIMEOUT = 1.0
_MAX_JUMP = 100000

_MONTH_START = (0, 1, 32, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335)
_MONTH_END = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 365)


class NTPError(Exception):
    """Base class for NTP failures."""


class NTPTimeoutError(NTPError):
    """No answer arrived from the time server in time."""


class NTPInvalidTimeError(NTPError):
    """The server sent a timestamp before 1970."""


class NTPTimeJumpError(NTPError):
    """The time differs too much from the previous answer; try again."""


def build_request() -> bytes:
    """The 48-byte SNTP client request."""
    packet = bytearray(NTP_PACKET_SIZE)
    packet[0] = 0b11100011  # LI, version, mode
    packet[1] = 0  # stratum
    packet[2] = 6  # polling interval
    packet[3] = 0xEC  # peer clock precision
    packet[12:16] = bytes((49, 0x4E, 49, 52))
    return bytes(packet)


def parse_transmit_seconds(packet: bytes) -> int:
    """Seconds since 1900 from the transmit timestamp of a response."""
    if len(packet) < 44:
        raise NTPError(f"response too short: {len(packet)} bytes")
    return int.from_bytes(packet[40:44], "big")


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule."""
    if year % 4:
        return False
    if year % 100:
        return True
    return year % 400 == 0


class NTPClient:
    """Keeps time from an NTP server and derives date, weekday and summer time."""

    def __init__(
        self,
        server: str = DEFAULT_SERVER,
        utc_offset: int = 0,
        dst_change: bool = True,
        sock: socket.socket | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.server = server
        self.utc_offset = utc_offset  # minutes
        self.dst_change = dst_change
        self.port = DEFAULT_LOCAL_PORT
        self.summertime = False
        self._sock = sock
        self._clock = clock
        self._last_update = clock()
        self._secs_since_1900 = 0
        self._last_secs_since_1900 = 0
        self.current_epoch = 0
        self.date_year = 0
        self.date_month = 0
        self.date_day = 0
        self.day_of_week = 0

    def _socket(self) -> socket.socket:
        if self._sock is None:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            sock.bind(("", self.port))
            self._sock = sock
        return self._sock

    def setup(self) -> None:
        """Open the socket, fetch the time once and compute the date."""
        self._socket()
        self.update()
        self.calc_date()

    def update(self) -> None:
        """Ask the server for the time and apply the answer."""
        sock = self._socket()
        sock.setblocking(False)
        try:
            while True:
                sock.recvfrom(NTP_PACKET_SIZE)
        except (BlockingIOError, InterruptedError):
            pass

        sock.settimeout(_RESPONSE_TIMEOUT)
        sock.sendto(build_request(), (self.server, NTP_PORT))
        started = self._clock()
        try:
            packet, _ = sock.recvfrom(NTP_PACKET_SIZE)
        except TimeoutError:
            raise NTPTimeoutError(f"no answer from {self.server}") from None
        elapsed_ms = (self._clock() - started) * 1000
        self.apply_response(packet, elapsed_ms)

    def apply_response(self, packet: bytes, elapsed_ms: float) -> None:
        """Take the time from a response that took ``elapsed_ms`` to arrive."""
        secs = parse_transmit_seconds(packet)
        if secs < SEVENTY_YEARS:
            raise NTPInvalidTimeError(f"timestamp before 1970: {secs}")
        last = self._last_secs_since_1900
        self._last_secs_since_1900 = secs
        if last != 0 and not 0 <= secs - last < _MAX_JUMP:
            raise NTPTimeJumpError(f"time jumped from {last} to {secs}")
        self._last_update = self._clock() - elapsed_ms / 1000
        self._secs_since_1900 = secs
        self.current_epoch = secs - SEVENTY_YEARS

    def close(self) -> None:
        """Close the socket."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> NTPClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def secs_since_1900(self) -> int:
        """Local seconds since 1 Jan 1900, including offset and summer time."""
        return (
            self.utc_offset * SECONDS_PER_MINUTE
            + int(self.summertime) * SECONDS_PER_HOUR
            + self._secs_since_1900
            + int(self._clock() - self._last_update)
        )

    def epoch_time(self) -> int:
        """Local seconds since 1 Jan 1970."""
        return self.secs_since_1900() - SEVENTY_YEARS

    def hours24(self) -> int:
        return self.epoch_time() % SECONDS_PER_DAY // SECONDS_PER_HOUR

    def hours12(self) -> int:
        hours = self.hours24()
        return hours - 12 if hours >= 12 else hours

    def minutes(self) -> int:
        return self.epoch_time() % SECONDS_PER_HOUR // SECONDS_PER_MINUTE

    def seconds(self) -> int:
        return self.epoch_time() % SECONDS_PER_MINUTE

    def formatted_time(self) -> str:
        """Time as ``hh:mm:ss``."""
        raw = self.epoch_time()
        hours = raw % SECONDS_PER_DAY // SECONDS_PER_HOUR
        minutes = raw % SECONDS_PER_HOUR // SECONDS_PER_MINUTE
        seconds = raw % SECONDS_PER_MINUTE
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    def formatted_date(self) -> str:
        """Date as ``dd.mm.yyyy``, recomputed from the current time."""
        self.calc_date()
        return f"{self.date_day:02d}.{self.date_month:02d}.{self.date_year:02d}"

    def calc_date(self) -> None:
        """Compute year, month, day, weekday and the summer time flag."""
        days1900 = self.secs_since_1900() // SECONDS_PER_DAY
        self.date_year = self.year()

        leap_days = sum(1 for y in range(1900, self.date_year) if is_leap_year(y)) - 1
        days_in_month = [0, 31, 29 if is_leap_year(self.date_year) else 28,
                         31, 30, 31, 30, 31, 31, 30, 31, 30, 31]

        day_of_year = days1900 - (self.date_year - 1900) * 365 - leap_days
        self.date_month = self.month_of(day_of_year)
        self.date_day = day_of_year - sum(days_in_month[: self.date_month])

        # 1 Jan 1900 was a Monday; Monday = 1 ... Sunday = 7
        self.day_of_week = days1900 % 7 + 1

        self.update_dst()

    def year(self) -> int:
        """Current year."""
        remaining = self.secs_since_1900() // SECONDS_PER_DAY
        result = 1900
        while True:
            length = 366 if is_leap_year(result) else 365
            if remaining < length:
                return result
            remaining -= length
            result += 1

    def month_of(self, day_of_year: int) -> int:
        """Month (1-12) of a 1-based day of the current year, 0 if out of range."""
        leap = is_leap_year(self.year())
        for month in range(1, 13):
            start = _MONTH_START[month] + (1 if leap and month >= 3 else 0)
            end = _MONTH_END[month] + (1 if leap and month >= 2 else 0)
            if start <= day_of_year <= end:
                return month
        return 0

    def update_dst(self) -> bool:
        """Set summer time by the last-Sunday-of-March/October rule; return whether it is active."""
        if not self.dst_change:
            return False

        month = self.date_month
        remaining = 31 - self.date_day  # March and October both have 31 days
        weekday = self.day_of_week

        if month in (3, 10):
            if remaining < 7:
                if weekday == 7:
                    changed = True
                else:
                    changed = remaining + weekday < 7
            else:
                changed = False
            active = changed if month == 3 else not changed
        elif 3 < month < 10:
            active = True
        elif month < 3 or month > 10:
            active = False
        else:
            return False

        self.summertime = active
        return active