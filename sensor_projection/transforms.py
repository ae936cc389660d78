# =============================================================================
# Sensor Projection - Coordinate Transforms
# =============================================================================
# Pure utilities for converting sensor samples into the projection frame
# and normalizing them against the projection area.
# =============================================================================

import numpy as np

from .types import SensorPlacement
from .config import SENSOR_FOV_DEG, MM_PER_METER

SENSOR_FOV = np.deg2rad(SENSOR_FOV_DEG)


def rotation_matrix_2d(theta: float) -> np.ndarray:
    """
    Creates a 2D rotation matrix.

    Args:
        theta: Rotation angle in radians

    Returns:
        2x2 rotation matrix
    """
    c, s = np.cos(theta), np.sin(theta)
    return np.array([[c, -s], [s, c]])


def sensor_axis_rotation_matrix(placement: SensorPlacement) -> np.ndarray:
    """Rotation aligning the sensor axes with the projection axes."""
    return rotation_matrix_2d(SensorPlacement(placement).angle)


def polar_to_local(distance: float, data_index: int, datas_length: int,
                   fov: float = SENSOR_FOV) -> np.ndarray:
    """
    Convert one sample of a sweep to Cartesian coordinates in sensor frame.

    The sweep is spread evenly over the field of view, so the first sample
    lies on the sensor x axis and the last one at `fov`.

    Args:
        distance: Measured distance (millimeters)
        data_index: Index of the sample in the sweep
        datas_length: Number of samples in the sweep (>= 2)
        fov: Field of view (radians)

    Returns:
        Position [x, y] in sensor frame (meters)
    """
    meter = distance / MM_PER_METER
    angle = (data_index / (datas_length - 1)) * fov
    return np.array([meter * np.cos(angle), meter * np.sin(angle)])


def convert_sample(distance: float, data_index: int, datas_length: int,
                   rotation: np.ndarray,
                   sensor_coordinate: np.ndarray) -> np.ndarray:
    """
    Convert one sample of a sweep to the global projection frame.

    Args:
        distance: Measured distance (millimeters)
        data_index: Index of the sample in the sweep
        datas_length: Number of samples in the sweep (>= 2)
        rotation: Sensor axis rotation matrix
        sensor_coordinate: Sensor position from the projection center (meters)

    Returns:
        Position [x, y] in global frame (meters)
    """
    local = polar_to_local(distance, data_index, datas_length)
    return np.asarray(sensor_coordinate, dtype=float) + rotation @ local


def normalize(point: np.ndarray, projection_area_size) -> np.ndarray:
    """
    Scale a global point by the projection half extents.

    Points on the projection area map into [-1, 1] on both axes.
    """
    half_size = np.asarray(projection_area_size, dtype=float) / 2
    return np.asarray(point, dtype=float) / half_size


def in_projection_area(norm_point: np.ndarray) -> bool:
    """True if a normalized point lies on the projection area (edges included)."""
    return bool(-1 <= norm_point[0] <= 1 and -1 <= norm_point[1] <= 1)
