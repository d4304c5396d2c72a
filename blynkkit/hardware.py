"""Handling of hardware commands received from the server."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping, Protocol

from blynkkit.param import Param, ParamValue

logger = logging.getLogger(__name__)

CMD_RESPONSE = 0
CMD_INTERNAL = 17
CMD_HARDWARE = 20
ILLEGAL_COMMAND = 2

HIGH = 1
LOW = 0

_REPLY_CAPACITY = 16


class PinMode(Enum):
    INPUT = "in"
    OUTPUT = "out"
    INPUT_PULLUP = "pu"
    INPUT_PULLDOWN = "pd"


_MODE_NAMES = {
    "in": PinMode.INPUT,
    "out": PinMode.OUTPUT,
    "pwm": PinMode.OUTPUT,
    "pu": PinMode.INPUT_PULLUP,
    "pd": PinMode.INPUT_PULLDOWN,
}


@dataclass(frozen=True)
class Reply:
    """A message to send back: a command, its id and either a payload or a status."""

    command: int
    msg_id: int = 0
    payload: bytes = b""
    status: int | None = None


class Backend(Protocol):
    def pin_mode(self, pin: int, mode: PinMode) -> None: ...
    def digital_read(self, pin: int) -> int: ...
    def digital_write(self, pin: int, value: int) -> None: ...
    def analog_read(self, pin: int) -> int: ...
    def analog_write(self, pin: int, value: int) -> None: ...


def info_profile(values: Mapping[str, object], template_id: str | None = None) -> bytes:
    """Payload of the device information message: key/value pairs joined by NUL."""
    param = Param()
    for key, value in values.items():
        param.add_key(key, value)
    if template_id:
        param.add_key("tmpl", template_id)
    return param.to_bytes()[:-1] if len(param) else b""


def _without_terminator(param: Param) -> bytes:
    data = param.to_bytes()
    return data[:-1] if data.endswith(b"\0") else data


def _rest_after(payload: bytes, fields: int) -> bytes:
    pos = 0
    for _ in range(fields):
        nul = payload.find(b"\0", pos)
        if nul < 0:
            return b""
        pos = nul + 1
    return payload[pos:]


class CommandProcessor:
    """Applies ``pm``/``dr``/``dw``/``ar``/``aw`` to ``backend`` and routes ``vr``/``vw``.

    With no backend the built-in pin commands are rejected as illegal.
    """

    def __init__(
        self,
        backend: Backend | None,
        send: Callable[[Reply], None],
        read_handler: Callable[[int], None] | None = None,
        write_handler: Callable[[int, Param], None] | None = None,
    ) -> None:
        self.backend = backend
        self.send = send
        self.read_handler = read_handler
        self.write_handler = write_handler
        self.msg_id_override = 0

    def _decode_pin(self, item: ParamValue) -> int:
        text = item.as_str() or ""
        analog_pin = getattr(self.backend, "analog_pin", None)
        if text.startswith("A") and analog_pin is not None:
            return int(analog_pin(ParamValue(text[1:]).as_int())) & 0xFF
        return item.as_int() & 0xFF

    def _reply_read(self, tag: str, pin: int, value: int) -> None:
        reply = Param(capacity=_REPLY_CAPACITY)
        reply.add(tag)
        reply.add(pin)
        reply.add(int(value))
        self.send(Reply(CMD_HARDWARE, 0, _without_terminator(reply)))

    def process(self, payload: bytes) -> None:
        data = bytes(payload)
        items = list(Param(data))
        if not items:
            return
        cmd = ((items[0].as_str() or "") + "\0\0")[:2]
        if len(items) < 2:
            return
        pin = self._decode_pin(items[1])
        backend = self.backend

        if backend is not None and cmd == "pm":
            rest = items[1:]
            for pos in range(0, len(rest), 2):
                mode_pin = self._decode_pin(rest[pos])
                name = rest[pos + 1].as_str() if pos + 1 < len(rest) else None
                mode = _MODE_NAMES.get(name or "")
                if mode is None:
                    logger.debug("Invalid pin %s mode %s", mode_pin, name)
                else:
                    backend.pin_mode(mode_pin, mode)
        elif backend is not None and cmd == "dr":
            self._reply_read("dw", pin, backend.digital_read(pin))
        elif backend is not None and cmd == "dw":
            if len(items) < 3:
                return
            backend.pin_mode(pin, PinMode.OUTPUT)
            backend.digital_write(pin, HIGH if items[2].as_int() else LOW)
        elif backend is not None and cmd == "ar":
            self._reply_read("aw", pin, backend.analog_read(pin))
        elif backend is not None and cmd == "aw":
            if len(items) < 3:
                return
            backend.pin_mode(pin, PinMode.OUTPUT)
            backend.analog_write(pin, items[2].as_int())
        elif cmd == "vr":
            if self.read_handler is not None:
                self.read_handler(pin)
        elif cmd == "vw":
            if self.write_handler is not None:
                self.write_handler(pin, Param(_rest_after(data, 2)))
        else:
            logger.warning("Invalid HW cmd: %s", items[0].as_str())
            self.send(Reply(CMD_RESPONSE, self.msg_id_override, b"", ILLEGAL_COMMAND))