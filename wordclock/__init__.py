"""LED matrix word clock: colours and frame buffer, NTP time, UDP logging, Base64 and games."""

__version__ = "0.1.0"