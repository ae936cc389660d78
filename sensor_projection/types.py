# =============================================================================
# Sensor Projection - Types and Data Structures
# =============================================================================
# Common data structures for coordinate conversion and bunching.
# =============================================================================

import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple
from enum import Enum

from .config import (
    DEFAULT_NORMALIZE,
    DEFAULT_BUNCH,
    DEFAULT_BUNCH_EPS,
    DEFAULT_BUNCH_PRECISION_COUNT
)


# =============================================================================
# Enumerations
# =============================================================================

class SensorPlacement(Enum):
    """Corner of the projection area the sensor is mounted on."""
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    TOP_RIGHT = "top-right"
    TOP_LEFT = "top-left"

    @property
    def angle(self) -> float:
        """Rotation from sensor axes to global axes (radians)."""
        return _PLACEMENT_ANGLES[self]


_PLACEMENT_ANGLES = {
    SensorPlacement.BOTTOM_LEFT: 0.0,
    SensorPlacement.BOTTOM_RIGHT: np.pi / 2,
    SensorPlacement.TOP_RIGHT: np.pi,
    SensorPlacement.TOP_LEFT: np.pi * (3 / 2),
}


class DataPlace(Enum):
    """Position of a sample within its sweep."""
    FIRST = "first"
    MIDDLE = "middle"
    LAST = "last"


class BunchStatus(Enum):
    """Outcome of feeding one point to the clusterer."""
    ACCUMULATING = "ACCUMULATING"
    EMITTED = "EMITTED"
    DISCARDED = "DISCARDED"


# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class ConverterOptions:
    """
    Immutable configuration of a CoordinateConverter.

    Distances are in meters. The projection area is centered on the
    global origin.
    """
    sensor_placement: SensorPlacement
    sensor_coordinate_from_center: Tuple[float, float]
    projection_area_size: Tuple[float, float]
    normalize: bool = DEFAULT_NORMALIZE
    bunch: bool = DEFAULT_BUNCH
    bunch_eps: float = DEFAULT_BUNCH_EPS
    bunch_precision_count: int = DEFAULT_BUNCH_PRECISION_COUNT

    def __post_init__(self):
        # Accept plain tags such as 'top-left'
        if not isinstance(self.sensor_placement, SensorPlacement):
            object.__setattr__(self, 'sensor_placement',
                               SensorPlacement(self.sensor_placement))
        object.__setattr__(self, 'sensor_coordinate_from_center',
                           tuple(float(v) for v in self.sensor_coordinate_from_center))
        object.__setattr__(self, 'projection_area_size',
                           tuple(float(v) for v in self.projection_area_size))


# =============================================================================
# Bunching Result
# =============================================================================

@dataclass(frozen=True)
class BunchResult:
    """
    Result of one clustering step.

    ACCUMULATING and DISCARDED both carry no point; only EMITTED carries
    the centroid of the flushed run.
    """
    status: BunchStatus
    point: Optional[np.ndarray] = None
    num_points: int = 0             # Points in the flushed run (0 if none)

    @property
    def emitted(self) -> bool:
        return self.status is BunchStatus.EMITTED


# Shared result for steps that close no run (nothing to report yet)
NO_RESULT_ACCUMULATING = BunchResult(BunchStatus.ACCUMULATING)
