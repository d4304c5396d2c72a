"""Parameter buffers, timers, hardware commands, NTP time and a fire monitor for Blynk-style devices."""

__version__ = "0.1.0"