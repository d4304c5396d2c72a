"""Fire and climate monitor: sensors, a two-line display, a buzzer and the cloud."""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

PIN_TEMPERATURE = 0
PIN_HUMIDITY = 1
PIN_FIRE = 4
FIRE_EVENT = "fire_alert"
FIRE_EVENT_DESCRIPTION = "Có Cháy"
READY_MESSAGE = "System Ready!"


class Sensor(Protocol):
    def read_temperature(self) -> float: ...
    def read_humidity(self) -> float: ...
    def flame_detected(self) -> bool: ...


class Display(Protocol):
    def write(self, row: int, text: str) -> None: ...
    def clear(self) -> None: ...


class Cloud(Protocol):
    def virtual_write(self, pin: int, value: object) -> None: ...
    def log_event(self, name: str, description: str) -> None: ...


@dataclass(frozen=True)
class Reading:
    """One set of sensor values."""

    temperature: float = 0.0
    humidity: float = 0.0
    fire: bool = False


def display_lines(reading: Reading) -> tuple[str, str]:
    """The two display rows for a reading."""
    t = f"{reading.temperature:.1f}"
    h = f"{reading.humidity:.1f}"
    if reading.fire:
        return "FIRE ALERT!", f"T:{t}C H:{h}%"
    return f"Temp:     {t}C", f"Humidity: {h}%"


class FireMonitor:
    """Reads sensors, updates the display and buzzer, and reports to the cloud."""

    def __init__(
        self,
        sensor: Sensor,
        display: Display,
        buzzer: Callable[[bool], None],
        cloud: Cloud,
    ) -> None:
        self.sensor = sensor
        self.display = display
        self.buzzer = buzzer
        self.cloud = cloud
        self.read_period = 1.0
        self.display_period = 0.5
        self.cloud_period = 1.0
        self.ready_delay = 2.0
        self._lock = threading.Lock()
        self._reading = Reading()

    @property
    def reading(self) -> Reading:
        with self._lock:
            return self._reading

    def read_sensors(self) -> Reading:
        """Take a new reading; a failed climate read is stored as zeros."""
        temperature = float(self.sensor.read_temperature())
        humidity = float(self.sensor.read_humidity())
        fire = bool(self.sensor.flame_detected())
        if math.isnan(temperature) or math.isnan(humidity):
            logger.error("Sensor read error")
            temperature = 0.0
            humidity = 0.0
        reading = Reading(temperature, humidity, fire)
        with self._lock:
            self._reading = reading
        return reading

    def refresh_display(self) -> tuple[str, str]:
        """Show the latest reading and sound the buzzer while fire is detected."""
        reading = self.reading
        top, bottom = display_lines(reading)
        self.display.write(0, top)
        self.display.write(1, bottom)
        self.buzzer(reading.fire)
        return top, bottom

    def push_cloud(self) -> None:
        """Send the latest reading and raise an event while fire is detected."""
        reading = self.reading
        self.cloud.virtual_write(PIN_TEMPERATURE, reading.temperature)
        self.cloud.virtual_write(PIN_HUMIDITY, reading.humidity)
        self.cloud.virtual_write(PIN_FIRE, int(reading.fire))
        if reading.fire:
            self.cloud.log_event(FIRE_EVENT, FIRE_EVENT_DESCRIPTION)

    def _loop(self, task: Callable[[], object], period: float, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            try:
                task()
            except Exception:
                logger.exception("Task %s failed", getattr(task, "__name__", task))
            stop_event.wait(period)

    def run(self, stop_event: threading.Event) -> None:
        """Run the three periodic tasks until ``stop_event`` is set."""
        self.display.clear()
        self.display.write(0, READY_MESSAGE)
        stop_event.wait(self.ready_delay)
        self.display.clear()
        if stop_event.is_set():
            return

        tasks = (
            (self.read_sensors, self.read_period),
            (self.refresh_display, self.display_period),
            (self.push_cloud, self.cloud_period),
        )
        threads = [
            threading.Thread(target=self._loop, args=(task, period, stop_event), daemon=True)
            for task, period in tasks
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()