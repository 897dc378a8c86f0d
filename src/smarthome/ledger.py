"""Shared power state and schedule accumulation for a single run."""

import logging

from .models import Device, DeviceResult, ScheduleOutput

_LOGGER = logging.getLogger(__name__)


class PowerLedger:
    """Devices committed to each hour of the day and their power draw.

    The ledger only grows: hours and devices are added, never removed.
    """

    def __init__(self):
        self.active: dict[int, list[str]] = {}
        self.power: dict[str, float] = {}

    def register(self, device: Device) -> None:
        """Record the power draw of a device about to be scheduled."""
        self.power[device.id] = device.power

    def devices_at(self, hour: int) -> list[str]:
        return self.active.get(hour, [])

    def total_power_at(self, hour: int, candidate_power: float) -> float:
        """Total draw at an hour if a device drawing candidate_power joined it."""
        total = candidate_power
        for device_id in self.devices_at(hour):
            total += self.power[device_id]
        return total


class ScheduleAccumulator:
    """Commits chosen windows into the ledger and running cost totals."""

    def __init__(self, ledger: PowerLedger | None = None):
        self.ledger = ledger or PowerLedger()
        self.total_energy = 0
        self.devices: dict[str, float] = {}

    def commit(self, result: DeviceResult) -> None:
        for hour in result.hours:
            self.ledger.active.setdefault(hour, []).append(result.id)

        self.devices[result.id] = result.consumed_energy
        self.total_energy += result.consumed_energy
        _LOGGER.debug(
            "Committed %s to hours %s (cost %.4f, total %.4f)",
            result.id, result.hours, result.consumed_energy, self.total_energy,
        )

    def snapshot(self) -> ScheduleOutput:
        """Copy of the schedule built so far."""
        return ScheduleOutput(
            schedule={hour: list(ids) for hour, ids in self.ledger.active.items()},
            total_energy=self.total_energy,
            devices=dict(self.devices),
        )
