# blynkkit

Building blocks for small connected devices that talk to a Blynk-style
cloud: the null-separated parameter format used on the wire, a slot-based
software timer, a handler for hardware pin commands, an SNTP client,
command-line option parsing, and a ready-made fire and climate monitor.

The package uses only the standard library.

## Modules

| Module | What it gives you |
| --- | --- |
| `blynkkit.param` | `Param` and `ParamValue`: build and read null-separated parameter buffers with an optional capacity |
| `blynkkit.utility` | `math_map`, `clamp`, `clamp_map`, `MovingAverage`, `average_sample`, `rssi_to_quality`, `quality_to_rssi`, `crc32`, `str_match` |
| `blynkkit.debug` | `format_dump`, `format_log`, `format_ip` for readable log lines |
| `blynkkit.timer` | `SimpleTimer`: a fixed number of timer slots driven by a millisecond clock |
| `blynkkit.options` | `parse_options` and `Options` for `-t/--token`, `-s/--server` and `-p/--port` |
| `blynkkit.hardware` | `CommandProcessor`, `PinMode`, `Reply` and `info_profile` for hardware commands |
| `blynkkit.ntp` | `build_request`, `parse_response`, `fetch_time` |
| `blynkkit.monitor` | `FireMonitor`, `Reading` and `display_lines` |

## Parameter buffers

A parameter buffer is a run of values, each ended by a zero byte. Numbers
are written as text (floats with seven decimals), and a value that would
exceed the capacity is left out. `get(key)` looks a key up among the values
at even positions and returns the value that follows it.

```python
from blynkkit.param import Param

param = Param(b"", 64)
param.add_key("label", "Kitchen")
param.add_multi("vw", 4, 21.5)

param.get("label").as_str()    # "Kitchen"
param[3].as_int()              # 4
param.to_bytes()               # b"label\0Kitchen\0vw\x004\x0021.5000000\0"
```

`ParamValue.as_int()` and `as_float()` read a leading number and give 0 when
there is none; a missing value is reported by `ParamValue.is_valid`.

## Utilities

```python
from blynkkit.utility import clamp, crc32, str_match, rssi_to_quality

crc32(b"123456789", 0)           # 0xCBF43926
str_match("te?t*", "test.txt")   # True
rssi_to_quality(-75)             # 50
clamp(150, 0, 100)               # 100
```

`blynkkit.debug.format_dump` renders bytes with printable characters as they
are and the others as bracketed hex, e.g. `format_dump(">> ", b"ab\x00\x01c")`
gives `">> ab[00|01]c"`.

## Timers

`SimpleTimer` holds a fixed number of slots. Call `run()` often: every timer
whose interval has passed fires once, and a timer with a limited number of
runs frees its slot after its last run. `setup_timer` raises `RuntimeError`
when every slot is taken.

```python
import time
from blynkkit.timer import SimpleTimer

def tick():
    print("tick")

timer = SimpleTimer(16, lambda: int(time.monotonic() * 1000))
timer_id = timer.setup_timer(1000, tick, 3)   # run three times, then free the slot

timer.run()
timer.disable(timer_id)
timer.enable(timer_id)
timer.delete_timer(timer_id)
```

## Command-line options

```python
from blynkkit.options import parse_options

options = parse_options(["--token", "token"], "example.com", 80)
options.server   # "example.com"
```

A bad option or a missing token prints the usage text and raises
`SystemExit(1)`.

## Hardware commands

`CommandProcessor.process(payload)` takes the body of a hardware message.
`pm`, `dr`, `dw`, `ar` and `aw` are applied to a backend object with
`pin_mode`, `digital_read`, `digital_write`, `analog_read` and
`analog_write` methods; read commands answer through `send` with a `Reply`.
`vr` and `vw` go to the read and write handlers. Anything else is answered
with an illegal-command `Reply`.

```python
from blynkkit.hardware import CommandProcessor

replies = []
processor = CommandProcessor(backend, replies.append)
processor.process(b"dr\x0013")
```

## Network time

```python
from blynkkit.ntp import fetch_time

unix_time = fetch_time("pool.ntp.org", 123, 3, 1.0)
```

`fetch_time` sends the request from `build_request()` and decodes the reply
with `parse_response()`; it raises `TimeoutError` if no answer arrives.

## Fire monitor

`FireMonitor` reads a temperature, humidity and flame sensor, shows the
values on a two-line display, sounds the buzzer while a flame is seen, and
sends the readings (virtual pins 0, 1 and 4) and a `fire_alert` event to the
cloud. You supply the sensor (`read_temperature`, `read_humidity`,
`flame_detected`), the display (`write(row, text)`, `clear()`), the buzzer
(a callable taking a bool) and the cloud (`virtual_write`, `log_event`).
`display_lines` gives the two lines of text for a `Reading`.

```python
import threading
from blynkkit.monitor import FireMonitor

monitor = FireMonitor(sensor, display, buzzer, cloud)
stop = threading.Event()
monitor.run(stop)   # blocks until stop is set
```

## What the package does not do

There is no network connection to a cloud server, no protocol session or
login, and no `blynk` command: the cloud object given to `FireMonitor` and
the `send` callable given to `CommandProcessor` must be provided by you.
Device provisioning (Wi-Fi setup, a stored configuration) and status-LED
handling are not included either.