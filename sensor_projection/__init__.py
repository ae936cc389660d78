# =============================================================================
# Sensor Projection Package
# =============================================================================
# Converts range-sensor sweeps into points on a projection surface.
#
# Responsibilities:
# - Polar to Cartesian conversion with sensor mount alignment
# - Normalization against the projection area
# - Streaming bunching of nearby detections into object centroids
# - Sweep simulation for testing and demos
#
# Usage:
#   from sensor_projection import CoordinateConverter
#   converter = CoordinateConverter.create('top-left', (-1.2, 0.8), (2.4, 1.6))
#   centroids = converter.process_sweep(distances)
# =============================================================================

# Types
from .types import (
    SensorPlacement,
    DataPlace,
    BunchStatus,
    BunchResult,
    ConverterOptions
)

# Core components
from .transforms import (
    rotation_matrix_2d,
    sensor_axis_rotation_matrix,
    polar_to_local,
    convert_sample,
    normalize,
    in_projection_area
)
from .bunching import BunchClusterer
from .converter import CoordinateConverter, data_place_for
from .simulator import SweepSimulator
from .settings import options_from_dict, load_options

__all__ = [
    # Types
    'SensorPlacement',
    'DataPlace',
    'BunchStatus',
    'BunchResult',
    'ConverterOptions',

    # Transforms
    'rotation_matrix_2d',
    'sensor_axis_rotation_matrix',
    'polar_to_local',
    'convert_sample',
    'normalize',
    'in_projection_area',

    # Components
    'BunchClusterer',
    'CoordinateConverter',
    'data_place_for',
    'SweepSimulator',

    # Options
    'options_from_dict',
    'load_options',
]

__version__ = '1.0.0'
