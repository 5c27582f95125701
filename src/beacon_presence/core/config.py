"""
Detector configuration.

Configuration is a versioned dict (the shape a host UI edits and stores),
materialized into a frozen DetectorConfig for the runtime.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional
import logging

from beacon_presence.core.store import ROOM_STATUSES_KEY

logger = logging.getLogger(__name__)

CURRENT_CONFIG_VERSION = 1

# Hard platform limit on concurrently monitored regions
DEFAULT_MAX_REGIONS = 20


@dataclass(frozen=True)
class DetectorConfig:
    """Runtime configuration for the beacon detector.

    Attributes:
        max_regions: Maximum rooms scanned at once.
        status_key: Name of the persisted status map entry.
        notify_on_enter: Debug notifications for enter transitions.
        notify_on_exit: Debug notifications for exit transitions.
        notify_with_sound: Debug notifications play a sound.
    """

    max_regions: int = DEFAULT_MAX_REGIONS
    status_key: str = ROOM_STATUSES_KEY
    notify_on_enter: bool = True
    notify_on_exit: bool = True
    notify_with_sound: bool = True

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> "DetectorConfig":
        """
        Build a DetectorConfig from a config dict.

        The dict is migrated first. Unknown keys are dropped with a warning.

        Args:
            config: Config dict (None = defaults)

        Returns:
            DetectorConfig instance

        Raises:
            ValueError: If max_regions is not a positive integer
        """
        config = migrate_config(dict(config or {}))
        known = {f.name for f in fields(cls)}

        values = {}
        for key, value in config.items():
            if key == "version":
                continue
            if key not in known:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            values[key] = value

        max_regions = values.get("max_regions", DEFAULT_MAX_REGIONS)
        if isinstance(max_regions, bool) or not isinstance(max_regions, int) or max_regions < 1:
            raise ValueError(f"max_regions must be a positive integer, got {max_regions!r}")

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a versioned config dict."""
        data: Dict[str, Any] = {"version": CURRENT_CONFIG_VERSION}
        for f in fields(self):
            data[f.name] = getattr(self, f.name)
        return data


def default_config() -> Dict[str, Any]:
    """
    Get the default configuration.

    Returns:
        Default configuration dict
    """
    return DetectorConfig().to_dict()


def config_schema() -> Dict[str, Any]:
    """
    Get JSON-schema-like definition for UI configuration.

    Returns:
        Schema dict that UIs can use to render configuration forms
    """
    return {
        "type": "object",
        "properties": {
            "version": {"type": "integer", "default": CURRENT_CONFIG_VERSION},
            "max_regions": {
                "type": "integer",
                "minimum": 1,
                "default": DEFAULT_MAX_REGIONS,
                "description": "Maximum rooms monitored at once",
            },
            "status_key": {"type": "string", "default": ROOM_STATUSES_KEY},
            "notify_on_enter": {"type": "boolean", "default": True, "title": "Notify on Enter"},
            "notify_on_exit": {"type": "boolean", "default": True, "title": "Notify on Exit"},
            "notify_with_sound": {
                "type": "boolean",
                "default": True,
                "title": "Notify with Sound",
            },
        },
    }


def migrate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Migrate configuration to the current version.

    Args:
        config: Configuration dict (potentially older version)

    Returns:
        Migrated configuration dict
    """
    version = config.get("version", CURRENT_CONFIG_VERSION)
    if version == CURRENT_CONFIG_VERSION:
        return config

    # No migrations yet (v1 is first version)
    logger.warning(f"Unknown config version {version}, treating as v{CURRENT_CONFIG_VERSION}")
    config["version"] = CURRENT_CONFIG_VERSION
    return config
