"""Data models for devices, tariffs and schedules."""

from dataclasses import dataclass, field
from enum import Enum


class DeviceMode(Enum):
    """Scheduling policy, resolved once when a device is parsed."""

    DAY = "day"
    NIGHT = "night"
    ALWAYS_ON = "always_on"
    BOUNDED = "bounded"


@dataclass(frozen=True)
class DayConfig:
    """Boundaries of the day and night dayparts, in hours."""

    day_start: int = 7
    day_end: int = 21
    night_start: int = 21
    night_end: int = 7
    duration: int = 24


@dataclass
class TariffPeriod:
    """A span of hours sharing one price. Wraps midnight when start > end."""

    start: int
    end: int
    value: float


@dataclass
class HourlyRate:
    """Price for a single hour of the day."""

    hour: int
    value: float


@dataclass(frozen=True)
class Device:
    """A household device with a fixed daily run."""

    id: str
    power: float  # watts
    duration: int  # hours
    policy: DeviceMode
    mode: str | None = None
    name: str | None = None


@dataclass
class DeviceResult:
    """A feasible run window for one device."""

    id: str
    hours: list[int] = field(default_factory=list)
    consumed_energy: float = 0


@dataclass
class ScheduleInput:
    """Parsed input document."""

    max_power: float
    rates: list[TariffPeriod]
    devices: list[Device]


@dataclass
class ScheduleOutput:
    """Schedule and energy cost for one run."""

    schedule: dict[int, list[str]] = field(default_factory=dict)
    total_energy: float = 0
    devices: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Render as the output document."""
        return {
            "schedule": {str(hour): list(self.schedule[hour]) for hour in sorted(self.schedule)},
            "consumedEnergy": {
                "value": self.total_energy,
                "devices": dict(self.devices),
            },
        }
