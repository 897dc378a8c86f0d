"""Cheapest-window scheduling of devices under a shared power ceiling.

Devices are scheduled greedily in input order. Each one gets the cheapest
contiguous window of its duration inside its allowed daypart, given the
power already claimed by earlier devices. Committed devices are never
moved again.
"""

import logging

from .ledger import PowerLedger, ScheduleAccumulator
from .models import (
    DayConfig,
    Device,
    DeviceMode,
    DeviceResult,
    HourlyRate,
    ScheduleInput,
    ScheduleOutput,
)
from .tariffs import expand_rates

_LOGGER = logging.getLogger(__name__)


def resolve_policy(mode: str | None, duration: int, day: DayConfig | None = None) -> DeviceMode:
    """Pick the scheduling policy for a device's mode string and duration."""
    day = day or DayConfig()
    if mode == "day":
        return DeviceMode.DAY
    if mode == "night":
        return DeviceMode.NIGHT
    if duration != day.duration:
        return DeviceMode.BOUNDED
    return DeviceMode.ALWAYS_ON


# ---------------------------------------------------------------------------
# Window evaluation
# ---------------------------------------------------------------------------

def evaluate_window(
    device: Device,
    window: list[HourlyRate],
    ledger: PowerLedger,
    max_power: float,
) -> DeviceResult | None:
    """Cost of running a device over a window of hourly rates.

    Returns None if the power ceiling would be exceeded at any hour of the
    window. Cost is kWh drawn each hour times that hour's price.
    """
    result = DeviceResult(id=device.id)
    for rate in window:
        if ledger.total_power_at(rate.hour, device.power) > max_power:
            return None
        result.hours.append(rate.hour)
        result.consumed_energy += device.power / 1000 * rate.value
    return result


# ---------------------------------------------------------------------------
# Window search
# ---------------------------------------------------------------------------

def find_best_window(
    device: Device,
    rates: list[HourlyRate],
    ledger: PowerLedger,
    max_power: float,
    start: int,
    end: int,
    best: DeviceResult | None = None,
) -> DeviceResult | None:
    """Find the cheapest feasible window starting in [start, end).

    Start offsets are positions in the rate sequence. A window is only tried
    while offset + duration < end, so a window ending exactly at end is
    never considered. A candidate replaces the running best only when it is
    strictly cheaper; the earliest of equally cheap windows wins. Pass the
    result of a previous call as best to search several ranges in turn.
    """
    offset = start
    while offset + device.duration < end:
        candidate = evaluate_window(
            device, rates[offset:offset + device.duration], ledger, max_power
        )
        if candidate is None:
            _LOGGER.debug("%s: window at offset %d exceeds power limit", device.id, offset)
        elif best is None or candidate.consumed_energy < best.consumed_energy:
            best = candidate
        offset += 1
    return best


def schedule_device(
    device: Device,
    rates: list[HourlyRate],
    ledger: PowerLedger,
    max_power: float,
    day: DayConfig | None = None,
) -> DeviceResult | None:
    """Choose a window for one device according to its policy."""
    day = day or DayConfig()

    if device.policy is DeviceMode.DAY:
        return find_best_window(device, rates, ledger, max_power, day.day_start, day.day_end)

    if device.policy is DeviceMode.NIGHT:
        # Night spans midnight: search up to the end of the day, then the early hours
        best = find_best_window(device, rates, ledger, max_power, day.night_start, day.duration)
        return find_best_window(device, rates, ledger, max_power, 0, day.night_end, best)

    if device.policy is DeviceMode.BOUNDED:
        return find_best_window(device, rates, ledger, max_power, 0, day.duration)

    # Always on: the whole day is the only window
    return evaluate_window(device, rates, ledger, max_power)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_schedule(data: ScheduleInput, day: DayConfig | None = None) -> ScheduleOutput:
    """Schedule every device in input order and total up the energy cost.

    Earlier devices get first claim on the available power. Devices with no
    feasible window are left out of the result.
    """
    day = day or DayConfig()
    rates = expand_rates(data.rates, day)
    accumulator = ScheduleAccumulator(PowerLedger())

    for device in data.devices:
        accumulator.ledger.register(device)
        result = schedule_device(device, rates, accumulator.ledger, data.max_power, day)
        if result is None:
            _LOGGER.debug("%s: no feasible window (%s, %dh)", device.id, device.policy.value, device.duration)
            continue
        accumulator.commit(result)

    output = accumulator.snapshot()
    _LOGGER.info(
        "Scheduled %d of %d devices, total cost %.4f",
        len(output.devices), len(data.devices), output.total_energy,
    )
    return output
