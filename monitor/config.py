"""
Monitor Options

Construction-time options for NetworkMonitor, optionally read from a YAML
file. Every field is optional: None (or 0 / empty) means "use the default".

Example config/monitor.yaml:

    timeout_ms: 2000
    check_interval_sec: 10
    lan_interface: wlan0
    wan_servers:
      - {host: 1.1.1.1, port: 443}
      - [8.8.8.8, 53]
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from config.settings import MONITOR_CONFIG_FILE

logger = logging.getLogger(__name__)


@dataclass
class MonitorOptions:
    """
    Caller overrides merged over the defaults at construction.

    Attributes:
        timeout_ms: Connect deadline per WAN attempt
        check_interval_sec: Pause between cycles
        proxy_url: Stored and reported only
        wan_test_host: Replaces the primary WAN host (with wan_test_port)
        wan_test_port: Replaces the primary WAN port (with wan_test_host)
        wan_servers: Full candidate list, replaces the defaults
        lan_interface: Interface to watch (empty = auto-detect)
    """

    timeout_ms: Optional[int] = None
    check_interval_sec: Optional[int] = None
    proxy_url: Optional[str] = None
    wan_test_host: Optional[str] = None
    wan_test_port: Optional[int] = None
    wan_servers: Optional[list] = None
    lan_interface: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MonitorOptions":
        """
        Build options from a plain mapping, ignoring unknown keys.

        Raises:
            ValueError: If data is not a mapping
        """
        if not isinstance(data, dict):
            raise ValueError(f"Monitor options must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown monitor options: {', '.join(unknown)}")

        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_yaml(cls, path: Union[str, Path, None] = None) -> "MonitorOptions":
        """
        Load options from a YAML file.

        A missing file gives default options. An unreadable or malformed
        file is logged as a warning and also gives default options.

        Args:
            path: YAML file (None = MONITOR_CONFIG_FILE)

        Returns:
            MonitorOptions
        """
        config_path = Path(path or MONITOR_CONFIG_FILE)

        if not config_path.exists():
            logger.info(f"Config file not found at {config_path}. Using defaults.")
            return cls()

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
            options = cls.from_dict(data)
        except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
            logger.warning(
                f"Failed to load monitor options from {config_path}: {e}. "
                f"Using defaults."
            )
            return cls()

        logger.info(f"Loaded monitor options from {config_path}")
        return options

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Write the non-default options to a YAML file"""
        config_path = Path(path)
        config_path.parent.mkdir(parents=True, exist_ok=True)
        data = {key: value for key, value in asdict(self).items() if value is not None}
        with open(config_path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
        logger.info(f"Monitor options saved to {config_path}")


def load_options(path: Union[str, Path, None] = None) -> MonitorOptions:
    """Shortcut for MonitorOptions.from_yaml()"""
    return MonitorOptions.from_yaml(path)
