# =============================================================================
# Sensor Projection - Options Loading
# =============================================================================
# Builds ConverterOptions from plain dictionaries or YAML files.
#
# Example file:
#   sensor_placement: top-left
#   sensor_coordinate_from_center: [-1.2, 0.8]
#   projection_area_size: [2.4, 1.6]
#   bunch_eps: 0.05
# =============================================================================

import yaml
from dataclasses import fields
from typing import Any, Dict

from .types import ConverterOptions, SensorPlacement

REQUIRED_KEYS = ('sensor_placement', 'sensor_coordinate_from_center', 'projection_area_size')


def options_from_dict(data: Dict[str, Any]) -> ConverterOptions:
    """
    Create converter options from a dictionary.

    Omitted optional keys take the defaults from config.py.

    Args:
        data: Option values keyed by ConverterOptions field name

    Returns:
        ConverterOptions

    Raises:
        ValueError: On missing required keys, unknown keys or bad values
    """
    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ValueError(f"Missing converter options: {', '.join(missing)}")

    known = {f.name for f in fields(ConverterOptions)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown converter options: {', '.join(unknown)}")

    for key in ('sensor_coordinate_from_center', 'projection_area_size'):
        value = data[key]
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise ValueError(f"{key} must have two values, got {value!r}")
        if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value):
            raise ValueError(f"{key} values must be numbers, got {value!r}")

    try:
        placement = SensorPlacement(data['sensor_placement'])
    except ValueError:
        choices = ', '.join(p.value for p in SensorPlacement)
        raise ValueError(f"Unknown sensor placement: {data['sensor_placement']!r} "
                         f"(expected one of: {choices})")

    return ConverterOptions(**{**data, 'sensor_placement': placement})


def load_options(config_file: str) -> ConverterOptions:
    """Load converter options from a YAML file."""
    with open(config_file, 'r') as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Options file {config_file} must contain a mapping")

    # Options may sit at the top level or under a 'converter' section
    return options_from_dict(data.get('converter', data))
