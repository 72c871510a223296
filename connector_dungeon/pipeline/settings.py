"""
Generator settings and their JSON persistence.

Defaults match the stock connector walk: 10 rooms, up to 2 branches per
connector, rooms at least 8 units apart inside a 40x40 area.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Fields read as floats; every other numeric field must be an integer
_FLOAT_FIELDS = frozenset({'min_room_distance', 'room_probability', 'area_width', 'area_depth'})


class SettingsError(ValueError):
    """Raised when settings violate the generator's contract."""


@dataclass
class GeneratorSettings:
    # Connector walk
    room_count: int = 10            # Target rooms, start room included
    max_branch: int = 2             # Branches attempted per base connector
    min_room_distance: float = 8.0  # Between room origins
    room_probability: float = 0.5   # Room-vs-corridor coin flip
    max_iterations: int = 10000     # Base connectors consumed before giving up

    # Area centred on the origin (X = width, Y = depth)
    area_width: float = 40.0
    area_depth: float = 40.0

    # Room-graph planning
    point_count: int = 12

    # Seeding for reproducible generation
    seed: Optional[int] = None  # None = random seed, reported back in the result

    def validate(self) -> 'GeneratorSettings':
        """Check field ranges. Returns self for chaining.

        Raises:
            SettingsError: On the first invalid field
        """
        if self.room_count < 0:
            raise SettingsError(f"room_count must be >= 0, got {self.room_count}")
        if self.max_branch < 1:
            raise SettingsError(f"max_branch must be >= 1, got {self.max_branch}")
        if self.max_iterations < 1:
            raise SettingsError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if self.min_room_distance < 0:
            raise SettingsError(
                f"min_room_distance must be >= 0, got {self.min_room_distance}"
            )
        if not 0.0 <= self.room_probability <= 1.0:
            raise SettingsError(
                f"room_probability must be within [0, 1], got {self.room_probability}"
            )
        if self.area_width <= 0 or self.area_depth <= 0:
            raise SettingsError(
                f"area extents must be positive, got {self.area_width}x{self.area_depth}"
            )
        if self.point_count < 0:
            raise SettingsError(f"point_count must be >= 0, got {self.point_count}")
        return self

    @property
    def area_diagonal(self) -> float:
        return (self.area_width ** 2 + self.area_depth ** 2) ** 0.5

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeneratorSettings':
        """Create settings from a dictionary, ignoring unknown keys.

        Raises:
            SettingsError: If a known key holds a value of the wrong type
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown settings keys: %s", ", ".join(unknown))

        values = {k: v for k, v in data.items() if k in known}
        for name, value in list(values.items()):
            if name == 'seed' and value is None:
                continue
            is_float = name in _FLOAT_FIELDS
            expected = (int, float) if is_float else int
            if isinstance(value, bool) or not isinstance(value, expected):
                kind = "a number" if is_float else "an integer"
                raise SettingsError(
                    f"{name} must be {kind}, got {type(value).__name__} {value!r}"
                )
            if is_float:
                values[name] = float(value)
        return cls(**values)


def save_settings(settings: GeneratorSettings, file_path: Path) -> Path:
    """
    Save settings as JSON.

    Args:
        settings: Settings to save
        file_path: Destination file

    Returns:
        Path to the saved file

    Raises:
        IOError: If the file cannot be written
    """
    file_path = Path(file_path)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)
    return file_path


def load_settings(file_path: Path) -> Optional[GeneratorSettings]:
    """
    Load settings from a JSON file.

    Args:
        file_path: Path to the JSON settings file

    Returns:
        GeneratorSettings if found and readable, None otherwise
    """
    file_path = Path(file_path)
    if not file_path.exists():
        return None

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return GeneratorSettings.from_dict(data)
    except (json.JSONDecodeError, AttributeError, KeyError, TypeError):
        logger.warning("Could not read settings from %s", file_path)
        return None
