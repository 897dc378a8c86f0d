"""Tariff parsing and hourly rate expansion."""

import logging

from .models import DayConfig, HourlyRate, TariffPeriod

_LOGGER = logging.getLogger(__name__)


def parse_rates(raw_rates: list[dict]) -> list[TariffPeriod]:
    """Build tariff periods from input document entries."""
    return [
        TariffPeriod(start=int(r["from"]), end=int(r["to"]), value=float(r["value"]))
        for r in raw_rates
    ]


def expand_rates(periods: list[TariffPeriod], day: DayConfig | None = None) -> list[HourlyRate]:
    """Expand tariff periods into a per-hour price sequence.

    A period that ends in the current day covers [start, end). One that wraps
    past midnight covers [start, day length) today, and its [0, end) "morning"
    hours are collected separately and placed before the main sequence.

    The morning buffer is cumulative and is prepended again after every
    period, so overlapping or repeated periods produce duplicate entries.
    Nothing is deduplicated: the scheduler slices this sequence by position.
    """
    day = day or DayConfig()
    rates: list[HourlyRate] = []
    morning: list[HourlyRate] = []

    for period in periods:
        # Until the end of the period, or the end of the day for wrapping periods
        until = period.end if period.start < period.end else day.duration
        for hour in range(period.start, until):
            rates.append(HourlyRate(hour=hour, value=period.value))

        if period.start > period.end:
            for hour in range(0, period.end):
                morning.append(HourlyRate(hour=hour, value=period.value))

        rates = morning + rates

    _LOGGER.debug("Expanded %d tariff periods into %d hourly rates", len(periods), len(rates))
    return rates


def rate_for_hour(rates: list[HourlyRate], hour: int) -> float:
    """Get the price of the first entry covering an hour."""
    for rate in rates:
        if rate.hour == hour:
            return rate.value
    raise ValueError(f"No rate found for hour {hour}")
