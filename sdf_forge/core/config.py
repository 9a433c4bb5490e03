"""
Configuration - default generation settings loaded from YAML

Settings file layout (all keys optional):

    spread: 16
    threshold: 250
    output: sdf.png
    workers: 1
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, asdict, fields
import logging

from ..errors import ConfigError
from .bitmap import DEFAULT_THRESHOLD
from .exporter import DEFAULT_OUTPUT
from .sdf import DEFAULT_SPREAD

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / '.sdf-forge' / 'config.yaml'


@dataclass
class SdfConfig:
    """Settings for one SDF generation run"""

    spread: int = DEFAULT_SPREAD
    threshold: int = DEFAULT_THRESHOLD
    output: str = DEFAULT_OUTPUT
    workers: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SdfConfig':
        """Create config from dictionary, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        values = {k: v for k, v in data.items() if k in known}
        _check_types(values)
        return cls(**values)

    def merged(self, **overrides) -> 'SdfConfig':
        """Copy with every non-None override applied"""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        _check_types(data)
        return SdfConfig(**data)


_FIELD_TYPES = {
    "spread": int,
    "threshold": int,
    "output": str,
    "workers": int,
}


def _check_types(values: Dict[str, Any]) -> None:
    for key, value in values.items():
        expected = _FIELD_TYPES[key]
        if isinstance(value, bool) or not isinstance(value, expected):
            raise ConfigError(
                f"Config key '{key}' must be {expected.__name__}, got {value!r}"
            )
        if expected is str and not value:
            raise ConfigError(f"Config key '{key}' must not be empty")


def load_config(path: Optional[str | Path] = None) -> SdfConfig:
    """
    Load settings from a YAML file.

    Args:
        path: Config file. When omitted, ~/.sdf-forge/config.yaml is read
              if it exists, otherwise defaults are returned.

    Raises:
        ConfigError: explicit path missing, unreadable or not a mapping
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            return SdfConfig()
    path = Path(path)

    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    logger.debug("Loaded config from %s", path)
    return SdfConfig.from_dict(data)


def save_config(config: SdfConfig, path: str | Path = DEFAULT_CONFIG_PATH) -> Path:
    """Write settings to a YAML file"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    return path
