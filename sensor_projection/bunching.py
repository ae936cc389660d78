# =============================================================================
# Sensor Projection - Streaming Bunching
# =============================================================================
# Consolidates consecutive nearby detections of one sweep into a single
# centroid per physical object.
# =============================================================================

import logging
import numpy as np
from typing import List, Optional

from .types import DataPlace, BunchResult, BunchStatus, NO_RESULT_ACCUMULATING
from .transforms import normalize, in_projection_area

from .config import (
    DEFAULT_BUNCH_EPS,
    DEFAULT_BUNCH_PRECISION_COUNT
)

logger = logging.getLogger(__name__)


class BunchClusterer:
    """
    Streaming clusterer fed one point at a time, in sweep order.

    A run of points is closed when:
    1. A point falls outside the projection area
    2. A middle point jumps more than `eps` on either axis
    3. The last sample of the sweep arrives

    A closed run is reported as its centroid if it holds at least
    `precision_count` points, and dropped otherwise. A first sample always
    starts a new run, dropping whatever was left from the previous sweep.

    Not thread-safe: use one instance per sensor stream.
    """

    def __init__(self,
                 projection_area_size,
                 eps: float = DEFAULT_BUNCH_EPS,
                 precision_count: int = DEFAULT_BUNCH_PRECISION_COUNT):
        """
        Initialize the clusterer.

        Args:
            projection_area_size: Projection area (width, height) in meters
            eps: Maximum per-axis gap between consecutive points (meters)
            precision_count: Minimum run length to report a centroid
        """
        self.projection_area_size = tuple(projection_area_size)
        self.eps = eps
        self.precision_count = precision_count

        self._buffer: List[np.ndarray] = []
        self._prev_point: Optional[np.ndarray] = None

    @property
    def buffer(self) -> List[np.ndarray]:
        """Points accepted since the last flush (copy)."""
        return list(self._buffer)

    @property
    def prev_point(self) -> Optional[np.ndarray]:
        """Last point processed, or None before the first call."""
        return self._prev_point

    def reset(self):
        """Forget the current run and the last processed point."""
        self._buffer.clear()
        self._prev_point = None

    def push(self, point: np.ndarray,
             data_place: DataPlace = DataPlace.MIDDLE) -> BunchResult:
        """
        Feed one point of the sweep.

        Args:
            point: Position [x, y] in global frame (meters)
            data_place: Position of the sample within its sweep

        Returns:
            BunchResult of this step
        """
        point = np.array(point, dtype=float)
        data_place = DataPlace(data_place)

        if not in_projection_area(normalize(point, self.projection_area_size)):
            # Off the surface: close the current run, never buffer the point
            self._prev_point = point
            if self._buffer:
                return self._flush()
            return NO_RESULT_ACCUMULATING

        if data_place is DataPlace.FIRST:
            self._buffer.clear()
            self._buffer.append(point)
            self._prev_point = point
            return NO_RESULT_ACCUMULATING

        if data_place is DataPlace.MIDDLE:
            result = NO_RESULT_ACCUMULATING
            if self._buffer and self._is_gap(point):
                result = self._flush()
            self._buffer.append(point)
            self._prev_point = point
            return result

        # Last sample: the point itself is not part of the run
        if self._buffer:
            return self._flush()
        return NO_RESULT_ACCUMULATING

    def _is_gap(self, point: np.ndarray) -> bool:
        if self._prev_point is None:
            return False
        dx, dy = np.abs(self._prev_point - point)
        return self.eps < dx or self.eps < dy

    def _flush(self) -> BunchResult:
        """Close the current run and clear the buffer."""
        num_points = len(self._buffer)

        if num_points >= self.precision_count:
            centroid = np.mean(self._buffer, axis=0)
            result = BunchResult(BunchStatus.EMITTED, centroid, num_points)
            logger.debug(f"Bunch emitted: center=({centroid[0]:.3f}, {centroid[1]:.3f}) "
                         f"points={num_points}")
        else:
            result = BunchResult(BunchStatus.DISCARDED, None, num_points)
            logger.debug(f"Bunch discarded: points={num_points} "
                         f"(precision_count={self.precision_count})")

        self._buffer.clear()
        return result
