# =============================================================================
# SIMULATION - Sweep Conversion Viewer
# =============================================================================
# Runs simulated sensor sweeps through the coordinate converter:
# - SweepSimulator: objects on the projection area, raw distances
# - CoordinateConverter: conversion, normalization, bunching
# - Visualization of raw points and bunched centroids
# =============================================================================

import sys
import logging
import argparse
from typing import Optional
import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation
from matplotlib.patches import Circle, Rectangle
from matplotlib.widgets import Button

from sensor_projection import (
    CoordinateConverter,
    ConverterOptions,
    SensorPlacement,
    SweepSimulator,
    data_place_for,
    load_options
)
from sensor_projection.logger import setup_logger
from sensor_projection.config import (
    DEFAULT_BUNCH_EPS,
    DEFAULT_BUNCH_PRECISION_COUNT,
    SIM_NUM_SAMPLES,
    SIM_NOISE_STD_MM
)

logger = logging.getLogger('simulation')

# Corner of the projection area for each placement, as (sign x, sign y)
PLACEMENT_CORNERS = {
    SensorPlacement.BOTTOM_LEFT: (-1, -1),
    SensorPlacement.BOTTOM_RIGHT: (1, -1),
    SensorPlacement.TOP_RIGHT: (1, 1),
    SensorPlacement.TOP_LEFT: (-1, 1),
}


def corner_of(placement: SensorPlacement, projection_area_size) -> tuple:
    """Sensor position for a mount exactly on the projection area corner."""
    sx, sy = PLACEMENT_CORNERS[SensorPlacement(placement)]
    return (sx * projection_area_size[0] / 2, sy * projection_area_size[1] / 2)


# =============================================================================
# Simulation Controller
# =============================================================================
class SimulationController:
    """Couples the sweep simulator and the converter."""

    def __init__(self, options: ConverterOptions, num_objects: int = 3,
                 num_samples: int = SIM_NUM_SAMPLES,
                 noise_std_mm: float = SIM_NOISE_STD_MM,
                 seed: Optional[int] = None):
        self.options = options
        self.num_objects = num_objects
        self.rng = np.random.default_rng(seed)

        self.converter = CoordinateConverter(options)
        self.simulator = SweepSimulator(options, num_samples=num_samples,
                                        noise_std_mm=noise_std_mm, rng=self.rng)
        self.objects = []
        self.reset_objects()

    def reset_objects(self):
        self.objects = self.simulator.random_objects(self.num_objects)
        self.converter.reset()
        logger.info(f"Placed {len(self.objects)} objects")
        for obj in self.objects:
            logger.debug(f"  object center=({obj['center'][0]:.3f}, {obj['center'][1]:.3f}) "
                         f"radius={obj['radius']:.3f}")

    def step(self, frame: int) -> dict:
        """
        Run one sweep.

        Returns:
            Dict with 'raw_points' and 'detections' in meters (for drawing),
            'output' as the converter options deliver it (normalized or
            meters) and 'objects'
        """
        converter = self.converter
        distances = self.simulator.scan(self.objects)
        datas_length = len(distances)

        raw_points = np.array([
            converter.convert(d, i, datas_length) for i, d in enumerate(distances)
        ])

        # Centroids when bunching, otherwise every point on the projection area
        detections = []
        for i, point in enumerate(raw_points):
            if converter.is_bunch:
                centroid = converter.bunch(point, data_place_for(i, datas_length))
                if centroid is not None:
                    detections.append(centroid)
            elif converter.in_projection_area(converter.normalize(point)):
                detections.append(point)

        if converter.is_normalize:
            output = [converter.normalize(p) for p in detections]
        else:
            output = list(detections)

        if frame == 0 or logger.isEnabledFor(logging.DEBUG):
            kind = 'centroid' if converter.is_bunch else 'point'
            unit = 'normalized' if converter.is_normalize else 'm'
            logger.info(f"Sweep {frame}: {len(detections)} {kind}s")
            for p in output:
                logger.debug(f"  {kind}=({p[0]:.3f}, {p[1]:.3f}) {unit}")

        return {
            'raw_points': raw_points,
            'detections': np.array(detections).reshape(-1, 2),
            'output': np.array(output).reshape(-1, 2),
            'objects': self.objects,
        }


# =============================================================================
# Visualization
# =============================================================================
class SimulationVisualizer:
    """
    Simulation visualization with matplotlib.
    """

    def __init__(self, controller: SimulationController):
        self.controller = controller
        w, h = controller.options.projection_area_size

        self.fig, self.ax = plt.subplots(figsize=(10, 8))
        self.fig.subplots_adjust(bottom=0.12)
        self.limits = (max(w, h) / 2) * 1.3

        ax_btn = plt.axes([0.40, 0.02, 0.20, 0.05])
        self.btn = Button(ax_btn, 'New objects', color='lightblue')
        self.btn.on_clicked(lambda e: self.controller.reset_objects())

    def animate(self, frame: int):
        """Animation function."""
        data = self.controller.step(frame)
        options = self.controller.options
        w, h = options.projection_area_size

        ax = self.ax
        ax.clear()
        ax.add_patch(Rectangle((-w / 2, -h / 2), w, h, fill=False,
                               edgecolor='black', linewidth=1.5))
        for obj in data['objects']:
            ax.add_patch(Circle(obj['center'], obj['radius'],
                                color='gray', alpha=0.4))

        raw = data['raw_points']
        ax.plot(raw[:, 0], raw[:, 1], '.', color='tab:blue', markersize=2,
                label='Raw points')
        detections = data['detections']
        if len(detections):
            label = 'Centroids' if options.bunch else 'Detections'
            ax.plot(detections[:, 0], detections[:, 1], 'x', color='tab:red',
                    markersize=10, markeredgewidth=2, label=label)

        sensor = options.sensor_coordinate_from_center
        ax.plot(sensor[0], sensor[1], 's', color='tab:green', label='Sensor')

        ax.set_xlim(-self.limits, self.limits)
        ax.set_ylim(-self.limits, self.limits)
        ax.set_aspect('equal')
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right', fontsize=8)
        ax.set_title(f"Sweep {frame} | placement={options.sensor_placement.value} | "
                     f"eps={options.bunch_eps} m | precision={options.bunch_precision_count} | "
                     f"detections={len(detections)}")

    def run(self, steps: int):
        """Starts the animation."""
        ani = animation.FuncAnimation(
            self.fig, self.animate,
            frames=steps,
            interval=100, repeat=True
        )
        plt.show()
        return ani


# =============================================================================
# Argument Parser
# =============================================================================
def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='simulation.py',
        description="""
  SENSOR PROJECTION SIMULATION

  Simulates a 90 degree range sensor mounted on a corner of a projection
  area, converts each sweep to projection coordinates and bunches nearby
  detections into one centroid per object.

  PLACEMENTS (--placement):

    bottom-left   - sensor axes aligned with the projection axes
    bottom-right  - sensor axes rotated by 90 degrees
    top-right     - sensor axes rotated by 180 degrees
    top-left      - sensor axes rotated by 270 degrees
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES:
  python simulation.py                                  # Bottom-left sensor, 3 objects
  python simulation.py --placement top-right --objects 5
  python simulation.py --config converter.yaml          # Options from YAML
  python simulation.py --no-plot --steps 10 --log-level DEBUG
"""
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        metavar='FILE',
        help='YAML file with converter options (overrides geometry arguments)'
    )

    parser.add_argument(
        '--placement',
        type=str,
        choices=[p.value for p in SensorPlacement],
        default=SensorPlacement.BOTTOM_LEFT.value,
        metavar='CORNER',
        help='Sensor placement: bottom-left, bottom-right, top-right, top-left (default: bottom-left)'
    )

    parser.add_argument(
        '--area',
        type=float,
        nargs=2,
        default=(2.4, 1.6),
        metavar=('W', 'H'),
        help='Projection area size in meters (default: 2.4 1.6)'
    )

    parser.add_argument(
        '--sensor',
        type=float,
        nargs=2,
        default=None,
        metavar=('X', 'Y'),
        help='Sensor position from the projection center in meters (default: placement corner)'
    )

    parser.add_argument(
        '--eps',
        type=float,
        default=DEFAULT_BUNCH_EPS,
        metavar='M',
        help=f'Bunching epsilon in meters (default: {DEFAULT_BUNCH_EPS})'
    )

    parser.add_argument(
        '--precision',
        type=int,
        default=DEFAULT_BUNCH_PRECISION_COUNT,
        metavar='N',
        help=f'Minimum points per bunch (default: {DEFAULT_BUNCH_PRECISION_COUNT})'
    )

    parser.add_argument(
        '--objects',
        type=int,
        default=3,
        metavar='N',
        help='Number of simulated objects (default: 3)'
    )

    parser.add_argument(
        '--samples',
        type=int,
        default=SIM_NUM_SAMPLES,
        metavar='N',
        help=f'Samples per sweep (default: {SIM_NUM_SAMPLES})'
    )

    parser.add_argument(
        '--noise',
        type=float,
        default=SIM_NOISE_STD_MM,
        metavar='MM',
        help=f'Distance noise standard deviation in mm (default: {SIM_NOISE_STD_MM})'
    )

    parser.add_argument(
        '--steps',
        type=int,
        default=200,
        metavar='N',
        help='Number of sweeps (default: 200)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed'
    )

    parser.add_argument(
        '--no-plot',
        action='store_true',
        help='Run without the matplotlib window'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='INFO',
        help='Logging level (default: INFO)'
    )

    return parser.parse_args(argv)


def build_options(args) -> ConverterOptions:
    """Converter options from a YAML file or from the command line."""
    if args.config:
        return load_options(args.config)

    placement = SensorPlacement(args.placement)
    sensor = tuple(args.sensor) if args.sensor else corner_of(placement, args.area)
    return ConverterOptions(
        sensor_placement=placement,
        sensor_coordinate_from_center=sensor,
        projection_area_size=tuple(args.area),
        bunch_eps=args.eps,
        bunch_precision_count=args.precision
    )


# =============================================================================
# Main Entry Point
# =============================================================================
def main(argv=None) -> int:
    args = parse_arguments(argv)
    level = getattr(logging, args.log_level)
    setup_logger('simulation', level)
    setup_logger('sensor_projection', level)

    try:
        options = build_options(args)
    except (OSError, ValueError) as e:
        logger.error(f"Invalid converter options: {e}")
        return 1

    logger.info(f"Placement: {options.sensor_placement.value}, "
                f"sensor: {options.sensor_coordinate_from_center}, "
                f"area: {options.projection_area_size}")

    controller = SimulationController(
        options,
        num_objects=args.objects,
        num_samples=args.samples,
        noise_std_mm=args.noise,
        seed=args.seed
    )

    if args.no_plot:
        for frame in range(args.steps):
            controller.step(frame)
        return 0

    visualizer = SimulationVisualizer(controller)
    visualizer.run(args.steps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
