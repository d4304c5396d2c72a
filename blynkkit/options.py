"""Command-line options for a client: auth token, server and port."""

from __future__ import annotations

import getopt
import sys
from dataclasses import dataclass
from typing import Sequence

from blynkkit.param import ParamValue

DEFAULT_SERVER = "blynk.cloud"
DEFAULT_PORT = 80


@dataclass(frozen=True)
class Options:
    token: str
    server: str
    port: int


def _usage(server: str, port: int) -> str:
    return (
        "Usage: blynk [options]\n"
        "\n"
        "Options:\n"
        "  -t auth, --token=auth    Your auth token\n"
        f"  -s addr, --server=addr   Server name (default: {server})\n"
        f"  -p num,  --port=num      Server port (default: {port})\n"
        "\n"
    )


def parse_options(
    argv: Sequence[str] | None = None,
    default_server: str = DEFAULT_SERVER,
    default_port: int = DEFAULT_PORT,
) -> Options:
    """Parse ``-t/--token``, ``-s/--server`` and ``-p/--port``.

    Prints usage and exits with status 1 on a bad option or a missing token.
    """
    if argv is None:
        argv = sys.argv[1:]
    usage = _usage(default_server, default_port)

    try:
        parsed, _rest = getopt.gnu_getopt(list(argv), "t:s:p:", ["token=", "server=", "port="])
    except getopt.GetoptError:
        print(usage, end="")
        raise SystemExit(1) from None

    token: str | None = None
    server = default_server
    port = default_port
    for option, value in parsed:
        if option in ("-t", "--token"):
            token = value
        elif option in ("-s", "--server"):
            server = value
        elif option in ("-p", "--port"):
            port = ParamValue(value).as_int() & 0xFFFF

    if token is None:
        print(usage, end="")
        raise SystemExit(1)
    return Options(token=token, server=server, port=port)