"""Configuration loading: YAML file, then environment overrides."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .documents import SmarthomeError
from .models import DayConfig

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "smarthome.yaml"
DEFAULT_INPUT_PATH = Path("data") / "input.json"
DEFAULT_OUTPUT_PATH = Path("data") / "output.json"


class ConfigError(SmarthomeError):
    """The configuration file could not be used."""
    pass


@dataclass
class Settings:
    """Settings for a scheduling run."""

    day: DayConfig = field(default_factory=DayConfig)
    input_path: Path = DEFAULT_INPUT_PATH
    output_path: Path = DEFAULT_OUTPUT_PATH


def load_config(config_path: Path | None = None) -> Settings:
    """Load settings from YAML config, with SMARTHOME_INPUT/SMARTHOME_OUTPUT overrides.

    Without an explicit path the default config file is used if present,
    otherwise the built-in defaults.
    """
    load_dotenv()

    data = {}
    path = config_path or DEFAULT_CONFIG_PATH
    if config_path is not None or path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, UnicodeDecodeError):
            raise ConfigError(f"invalid config file '{path}'")

    if not isinstance(data, dict):
        raise ConfigError(f"expected a mapping in config file '{path}'")

    try:
        day = DayConfig(**(data.get("day") or {}))
    except TypeError as e:
        raise ConfigError(f"invalid day settings in '{path}': {e}")
    paths = data.get("paths") or {}

    input_path = os.environ.get("SMARTHOME_INPUT") or paths.get("input") or DEFAULT_INPUT_PATH
    output_path = os.environ.get("SMARTHOME_OUTPUT") or paths.get("output") or DEFAULT_OUTPUT_PATH

    return Settings(day=day, input_path=Path(input_path), output_path=Path(output_path))
