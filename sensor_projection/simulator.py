# =============================================================================
# Sensor Projection - Sweep Simulator
# =============================================================================
# Emulates a corner-mounted range sensor looking across the projection area.
# =============================================================================

import numpy as np
from typing import List, Optional

from .types import ConverterOptions
from .transforms import sensor_axis_rotation_matrix, SENSOR_FOV

from .config import (
    MM_PER_METER,
    SIM_NUM_SAMPLES,
    SIM_MAX_RANGE_MM,
    SIM_NOISE_STD_MM,
    SIM_OBJECT_RADIUS_RANGE,
    SIM_OBJECT_MIN_DISTANCE
)


class SweepSimulator:
    """
    Range sensor simulator producing one sweep of distances per scan.
    Objects are circles on the projection surface.
    """

    def __init__(self, options: ConverterOptions,
                 num_samples: int = SIM_NUM_SAMPLES,
                 max_range_mm: float = SIM_MAX_RANGE_MM,
                 noise_std_mm: float = SIM_NOISE_STD_MM,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize the simulator.

        Args:
            options: Converter options describing the sensor mount
            num_samples: Number of samples per sweep
            max_range_mm: Distance reported for rays hitting nothing
            noise_std_mm: Noise standard deviation (millimeters)
            rng: Random generator (a fresh one if omitted)
        """
        self.options = options
        self.num_samples = num_samples
        self.max_range_mm = max_range_mm
        self.noise_std_mm = noise_std_mm
        self.rng = rng if rng is not None else np.random.default_rng()

        self.sensor_pos = np.array(options.sensor_coordinate_from_center, dtype=float)
        rotation = sensor_axis_rotation_matrix(options.sensor_placement)
        angles = np.linspace(0.0, SENSOR_FOV, num_samples)
        local_dirs = np.stack([np.cos(angles), np.sin(angles)], axis=1)
        self.ray_dirs = local_dirs @ rotation.T

    def scan(self, objects: List[dict]) -> np.ndarray:
        """
        Perform one sweep.

        Args:
            objects: List of objects with 'center' (meters) and 'radius'

        Returns:
            Distances in sweep order (millimeters)
        """
        max_range = self.max_range_mm / MM_PER_METER
        ranges = np.full(self.num_samples, max_range)

        for ray_idx, ray_dir in enumerate(self.ray_dirs):
            min_dist = max_range

            for obj in objects:
                relpos = np.asarray(obj['center'], dtype=float) - self.sensor_pos
                radius = obj.get('radius', 0.05)
                proj = np.dot(relpos, ray_dir)

                if proj > 0:
                    closest = proj * ray_dir
                    dist_to_center = np.linalg.norm(relpos - closest)
                    if dist_to_center <= radius:
                        dist = proj - np.sqrt(radius**2 - dist_to_center**2)
                        if 0 < dist < min_dist:
                            min_dist = dist
            ranges[ray_idx] = min_dist

        ranges = ranges * MM_PER_METER
        if self.noise_std_mm > 0:
            ranges += self.rng.normal(0, self.noise_std_mm, ranges.shape)
        return np.clip(ranges, 0.0, self.max_range_mm)

    def random_objects(self, num_objects: int,
                       radius_range=SIM_OBJECT_RADIUS_RANGE,
                       min_dist: float = SIM_OBJECT_MIN_DISTANCE) -> List[dict]:
        """
        Place random non-overlapping objects on the projection area.

        Args:
            num_objects: Number of objects to generate
            radius_range: Radius range (min, max) in meters
            min_dist: Minimum distance between object centers

        Returns:
            List of object dictionaries
        """
        half_w, half_h = np.asarray(self.options.projection_area_size) / 2
        objects = []
        for _ in range(num_objects):
            for attempt in range(100):
                r = self.rng.uniform(radius_range[0], radius_range[1])
                x = self.rng.uniform(-half_w + r, half_w - r)
                y = self.rng.uniform(-half_h + r, half_h - r)
                center = np.array([x, y])

                if all(np.linalg.norm(center - obj['center']) >= min_dist for obj in objects):
                    objects.append({'center': center, 'radius': r})
                    break
        return objects
