"""Reading input documents and writing schedule output.

Input is JSON; YAML is accepted for files with a .yaml or .yml suffix.
Output is always tab-indented JSON.
"""

import json
from pathlib import Path

import yaml

from .models import DayConfig, Device, ScheduleInput, ScheduleOutput
from .scheduler import resolve_policy
from .tariffs import parse_rates

YAML_SUFFIXES = {".yaml", ".yml"}


class SmarthomeError(Exception):
    """Base exception for smarthome input and output errors."""
    pass


class InputNotFoundError(SmarthomeError):
    """The input document is missing or unreadable."""
    pass


class InvalidInputError(SmarthomeError):
    """The input document could not be parsed."""
    pass


class OutputWriteError(SmarthomeError):
    """The output document could not be written."""
    pass


def parse_device(raw: dict, day: DayConfig | None = None) -> Device:
    """Build a device from an input document entry."""
    duration = int(raw["duration"])
    mode = raw.get("mode")
    return Device(
        id=str(raw["id"]),
        power=float(raw["power"]),
        duration=duration,
        policy=resolve_policy(mode, duration, day),
        mode=mode,
        name=raw.get("name"),
    )


def parse_input(data: dict, day: DayConfig | None = None) -> ScheduleInput:
    """Build schedule input from a decoded document."""
    try:
        return ScheduleInput(
            max_power=float(data["maxPower"]),
            rates=parse_rates(data["rates"]),
            devices=[parse_device(d, day) for d in data["devices"]],
        )
    except KeyError as e:
        raise InvalidInputError(f"missing field {e}")
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"invalid value: {e}")


def load_input(path: Path, day: DayConfig | None = None) -> ScheduleInput:
    """Read and parse an input document."""
    is_yaml = Path(path).suffix.lower() in YAML_SUFFIXES
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError:
        raise InvalidInputError("invalid yaml" if is_yaml else "invalid json")
    except OSError as e:
        raise InputNotFoundError(f"cannot read '{path}': {e.strerror or e}")

    try:
        data = yaml.safe_load(text) if is_yaml else json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError):
        raise InvalidInputError("invalid yaml" if is_yaml else "invalid json")

    if not isinstance(data, dict):
        raise InvalidInputError("expected a mapping at the top level")

    return parse_input(data, day)


def save_output(output: ScheduleOutput, path: Path) -> Path:
    """Write the schedule document. Returns the path written."""
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(json.dumps(output.to_dict(), indent="\t"))
    except OSError:
        raise OutputWriteError(f"failed to create a file '{path}'")
    return path
