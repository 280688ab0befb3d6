"""
System configuration

Recognized option lists (categories, storage locations, teams) and default
settings. A SystemConfig is loaded once when the app is created and passed to
the managers and codecs that need it.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path

from teamstock.buisness.validation.normalizers import clean_optional_str
from teamstock.logger import get_logger

logger = get_logger("teamstock.config")


DEFAULT_CATEGORIES = (
    'Electronics',
    'Mechanical',
    'Software',
    'Testing Equipment',
    'Materials',
    'Tools',
    'Safety Equipment',
    'Documentation',
    'Consumables',
    'Fasteners',
    'Recovery',
    'General',
)

DEFAULT_LOCATIONS = (
    'Store A',
    'Store B',
    'Store C',
    'Warehouse',
    'Lab Storage',
    'Office',
    'External Storage',
    'Workshop',
    'Clean Room',
    'Archive',
)

DEFAULT_TEAMS = ('Avionics', 'Telemetry', 'Parachute', 'Recovery')

OPTION_KINDS = ('categories', 'locations', 'teams')


@dataclass(frozen=True)
class DefaultSettings:
    currency: str = 'KSh'
    reorder_point_multiplier: float = 0.2
    min_stock_multiplier: float = 0.1
    default_location: str = 'Store A'
    default_category: str = 'General'
    default_team: str = 'Avionics'
    low_stock_threshold: int = 10
    critical_stock_threshold: int = 0
    max_notifications_display: int = 5
    work_week_hours: float = 40

    def __post_init__(self):
        hours = self.work_week_hours
        if isinstance(hours, bool) or not isinstance(hours, (int, float)) or hours <= 0:
            raise ValueError(f"work_week_hours must be a positive number, got {hours!r}")

    @classmethod
    def from_dict(cls, data: dict | None) -> "DefaultSettings":
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown default settings: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class SystemConfig:
    categories: tuple = DEFAULT_CATEGORIES
    locations: tuple = DEFAULT_LOCATIONS
    teams: tuple = DEFAULT_TEAMS
    default_settings: DefaultSettings = field(default_factory=DefaultSettings)

    def __post_init__(self):
        if not self.teams:
            raise ValueError("At least one team must be configured")
        if self.default_settings.default_team not in self.teams:
            raise ValueError(
                f"Default team '{self.default_settings.default_team}' is not one of the configured teams"
            )

    @classmethod
    def from_dict(cls, data: dict) -> "SystemConfig":
        return cls(
            categories=tuple(data.get('categories', DEFAULT_CATEGORIES)),
            locations=tuple(data.get('locations', DEFAULT_LOCATIONS)),
            teams=tuple(data.get('teams', DEFAULT_TEAMS)),
            default_settings=DefaultSettings.from_dict(data.get('default_settings')),
        )

    def to_dict(self) -> dict:
        return {
            'categories': list(self.categories),
            'locations': list(self.locations),
            'teams': list(self.teams),
            'default_settings': asdict(self.default_settings),
        }

    def with_option(self, kind: str, value: str) -> "SystemConfig":
        """Return a copy with ``value`` appended to the ``kind`` option list"""
        current = self._options(kind)
        value = clean_optional_str(value)
        if not value:
            raise ValueError(f"Cannot add an empty value to {kind}")
        if value in current:
            return self
        return replace(self, **{kind: current + (value,)})

    def without_option(self, kind: str, value: str) -> "SystemConfig":
        """Return a copy with ``value`` removed from the ``kind`` option list"""
        current = self._options(kind)
        if value not in current:
            return self
        return replace(self, **{kind: tuple(v for v in current if v != value)})

    def _options(self, kind: str) -> tuple:
        if kind not in OPTION_KINDS:
            raise ValueError(f"Unknown option list '{kind}'")
        return getattr(self, kind)


def load_system_config(path: str | os.PathLike | None = None) -> SystemConfig:
    """
    Load the system configuration.

    Args:
        path: JSON file with any of categories/locations/teams/default_settings.
            Falls back to SYSTEM_CONFIG_PATH, then to built-in defaults.

    Returns:
        SystemConfig
    """
    path = path or os.environ.get('SYSTEM_CONFIG_PATH')
    if not path:
        logger.debug("No system config file given, using defaults")
        return SystemConfig()

    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"System config file not found: {config_file}")

    with config_file.open(encoding='utf-8') as fh:
        data = json.load(fh)

    config = SystemConfig.from_dict(data)
    logger.info(f"Loaded system config from {config_file}")
    return config
