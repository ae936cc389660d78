# =============================================================================
# Sensor Projection - Coordinate Converter
# =============================================================================
# Converts raw range-sensor sweeps into projection-area points.
# =============================================================================

import logging
import numpy as np
from typing import List, Optional, Sequence

from .types import ConverterOptions, DataPlace, BunchResult, SensorPlacement
from .transforms import (
    sensor_axis_rotation_matrix,
    convert_sample,
    normalize,
    in_projection_area
)
from .bunching import BunchClusterer

from .config import (
    DEFAULT_NORMALIZE,
    DEFAULT_BUNCH,
    DEFAULT_BUNCH_EPS,
    DEFAULT_BUNCH_PRECISION_COUNT
)

logger = logging.getLogger(__name__)


def data_place_for(data_index: int, datas_length: int) -> DataPlace:
    """Position of a sample within a sweep of `datas_length` samples."""
    if data_index == 0:
        return DataPlace.FIRST
    if data_index == datas_length - 1:
        return DataPlace.LAST
    return DataPlace.MIDDLE


class CoordinateConverter:
    """
    Converts range-sensor samples into points on the projection area.

    Pipeline:
    1. Polar sample (mm) to sensor-frame Cartesian (m)
    2. Rotate sensor axes onto the projection axes
    3. Offset by the sensor position from the projection center
    4. Optionally normalize to [-1, 1] and bunch nearby points

    Each instance owns its bunching state, so one converter must be used
    per sensor stream.
    """

    def __init__(self, options: Optional[ConverterOptions] = None, **kwargs):
        """
        Initialize the converter.

        Args:
            options: Converter configuration. Keyword arguments matching the
                ConverterOptions fields may be given instead.
        """
        if options is None:
            options = ConverterOptions(**kwargs)
        elif kwargs:
            raise TypeError("Pass either options or keyword arguments, not both")

        self.options = options
        self.sensor_axis_rotation = sensor_axis_rotation_matrix(options.sensor_placement)
        self.sensor_coordinate = np.array(options.sensor_coordinate_from_center, dtype=float)
        self.clusterer = BunchClusterer(
            options.projection_area_size,
            eps=options.bunch_eps,
            precision_count=options.bunch_precision_count
        )

        logger.debug(f"CoordinateConverter created: placement={options.sensor_placement.value}, "
                     f"sensor={options.sensor_coordinate_from_center}, "
                     f"area={options.projection_area_size}")

    @classmethod
    def create(cls,
               sensor_placement: SensorPlacement,
               sensor_coordinate_from_center: Sequence[float],
               projection_area_size: Sequence[float],
               normalize: bool = DEFAULT_NORMALIZE,
               bunch: bool = DEFAULT_BUNCH,
               bunch_eps: float = DEFAULT_BUNCH_EPS,
               bunch_precision_count: int = DEFAULT_BUNCH_PRECISION_COUNT) -> 'CoordinateConverter':
        """Build a converter from individual settings."""
        return cls(ConverterOptions(
            sensor_placement=sensor_placement,
            sensor_coordinate_from_center=tuple(sensor_coordinate_from_center),
            projection_area_size=tuple(projection_area_size),
            normalize=normalize,
            bunch=bunch,
            bunch_eps=bunch_eps,
            bunch_precision_count=bunch_precision_count
        ))

    @property
    def is_normalize(self) -> bool:
        return self.options.normalize

    @property
    def is_bunch(self) -> bool:
        return self.options.bunch

    def convert(self, distance: float, data_index: int, datas_length: int) -> np.ndarray:
        """
        Convert one distance sample to global coordinates.

        Args:
            distance: Distance (millimeters)
            data_index: Index of the sample in the sweep
            datas_length: Number of samples in the sweep (>= 2)

        Returns:
            Position [x, y] in global frame (meters)
        """
        return convert_sample(distance, data_index, datas_length,
                              self.sensor_axis_rotation, self.sensor_coordinate)

    def normalize(self, point: np.ndarray) -> np.ndarray:
        """Normalize a global point to the projection area (-1 ~ 1)."""
        return normalize(point, self.options.projection_area_size)

    def in_projection_area(self, norm_point: np.ndarray) -> bool:
        return in_projection_area(norm_point)

    def bunch_result(self, point: np.ndarray,
                     data_place: DataPlace = DataPlace.MIDDLE) -> BunchResult:
        """Feed one point to the clusterer and return the detailed outcome."""
        return self.clusterer.push(point, data_place)

    def bunch(self, point: np.ndarray,
              data_place: DataPlace = DataPlace.MIDDLE) -> Optional[np.ndarray]:
        """
        Group nearby detections of one object.

        Args:
            point: Position [x, y] in global frame (meters)
            data_place: Position of the sample within its sweep

        Returns:
            Centroid of the closed run, or None
        """
        return self.bunch_result(point, data_place).point

    def reset(self):
        """Reset the bunching state."""
        self.clusterer.reset()

    def process_sweep(self, distances: Sequence[float]) -> List[np.ndarray]:
        """
        Full pipeline for one sweep: convert, bunch and normalize.

        With bunching enabled the output holds one centroid per detected
        object; otherwise every converted point on the projection area.

        Args:
            distances: Distances of one sweep in index order (millimeters)

        Returns:
            List of points, normalized if the converter normalizes
        """
        datas_length = len(distances)
        points = []

        for data_index, distance in enumerate(distances):
            point = self.convert(distance, data_index, datas_length)

            if self.is_bunch:
                centroid = self.bunch(point, data_place_for(data_index, datas_length))
                if centroid is not None:
                    points.append(centroid)
            elif self.in_projection_area(self.normalize(point)):
                points.append(point)

        if self.is_normalize:
            points = [self.normalize(p) for p in points]

        return points
