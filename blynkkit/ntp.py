"""Minimal SNTP client returning the current Unix time."""

from __future__ import annotations

import logging
import socket
import time

logger = logging.getLogger(__name__)

NTP_PACKET_SIZE = 48
NTP_SERVER = "time.nist.gov"
NTP_PORT = 123
SEVENTY_YEARS = 2208988800
_TIMESTAMP_OFFSET = 40


def build_request() -> bytes:
    """The 48-byte client request: version, mode, polling interval and reference id."""
    packet = bytearray(NTP_PACKET_SIZE)
    packet[0] = 0b11100011  # leap indicator, version, mode
    packet[1] = 0  # stratum
    packet[2] = 6  # polling interval
    packet[3] = 0xEC  # peer clock precision
    packet[12:16] = bytes((49, 0x4E, 49, 52))
    return bytes(packet)


def parse_response(packet: bytes) -> int:
    """Extract the transmit timestamp of a reply as Unix seconds (32-bit, wrapping)."""
    data = bytes(packet)
    if len(data) < _TIMESTAMP_OFFSET + 4:
        raise ValueError("NTP packet too short")
    since_1900 = int.from_bytes(data[_TIMESTAMP_OFFSET:_TIMESTAMP_OFFSET + 4], "big")
    return (since_1900 - SEVENTY_YEARS) & 0xFFFFFFFF


def fetch_time(
    server: str = NTP_SERVER,
    port: int = NTP_PORT,
    attempts: int = 10,
    timeout: float = 1.0,
) -> int:
    """Ask ``server`` for the time, retrying up to ``attempts`` times.

    Raises TimeoutError when no reply arrives.
    """
    if attempts <= 0:
        raise ValueError("attempts must be positive")
    infos = socket.getaddrinfo(server, port, socket.AF_UNSPEC, socket.SOCK_DGRAM)
    if not infos:
        raise OSError(f"cannot resolve {server}")
    family, socktype, proto, _name, address = infos[0]
    request = build_request()

    with socket.socket(family, socktype, proto) as sock:
        for _ in range(attempts):
            sock.sendto(request, address)
            deadline = time.monotonic() + timeout
            while True:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                sock.settimeout(remaining)
                try:
                    data, _sender = sock.recvfrom(NTP_PACKET_SIZE)
                except (TimeoutError, socket.timeout):
                    break
                if len(data) < _TIMESTAMP_OFFSET + 4:
                    continue
                epoch = parse_response(data)
                logger.info("Unix time = %d", epoch)
                return epoch
            logger.info("Retry NTP")
    logger.warning("NTP failed")
    raise TimeoutError("NTP failed")