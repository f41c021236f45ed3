"""Configuration management for activity-ratings."""

import os
import re
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from .aggregate import DEFAULT_RATING_SIZE, STRATEGIES, STRATEGY_PERFORMANCE
from .archive import DEFAULT_TAR_LINK

STRATEGY_BOTH = "both"
STRATEGY_CHOICES = STRATEGIES + (STRATEGY_BOTH,)


@dataclass
class Config:
    """Main configuration object."""

    tar_link: str = DEFAULT_TAR_LINK
    archive: str | None = None
    data_dir: str | None = None
    strategy: str = STRATEGY_PERFORMANCE
    size: int = DEFAULT_RATING_SIZE
    output: str | None = None

    def validate(self) -> None:
        """Check field values.

        Raises:
            ValueError: If a value is out of range
        """
        if self.strategy not in STRATEGY_CHOICES:
            raise ValueError(
                f"Invalid strategy: {self.strategy} (expected one of {', '.join(STRATEGY_CHOICES)})"
            )
        if not isinstance(self.size, int) or isinstance(self.size, bool) or self.size < 0:
            raise ValueError(f"Invalid size: {self.size}")
        if self.archive and self.data_dir:
            raise ValueError("Configuration may specify 'archive' or 'data_dir', not both")


def _expand_env_vars(value: str) -> str:
    """Expand environment variable references in a string.

    Supports ${VAR_NAME} syntax. Returns the original string if the
    environment variable is not set.

    Args:
        value: String potentially containing ${VAR_NAME} references

    Returns:
        String with environment variables expanded
    """
    if not isinstance(value, str):
        return value

    pattern = re.compile(r"\$\{([^}]+)\}")

    def replacer(match):
        var_name = match.group(1)
        return os.environ.get(var_name, match.group(0))

    return pattern.sub(replacer, value)


def load_config(config_path: str | Path) -> Config:
    """Load and parse configuration from a YAML file.

    Args:
        config_path: Path to the configuration file

    Returns:
        Parsed configuration object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        raw_config = {}

    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a mapping")

    known = {field.name for field in fields(Config)}
    unknown = sorted(set(raw_config) - known)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

    values = {key: _expand_env_vars(value) for key, value in raw_config.items()}
    size = values.get("size")
    if isinstance(size, str):
        try:
            values["size"] = int(size)
        except ValueError:
            raise ValueError(f"Invalid size: {size}") from None

    config = Config(**values)
    config.validate()
    return config
