# =============================================================================
# Sensor Projection - Configuration
# =============================================================================
# All configurable parameters for coordinate conversion and bunching.
# =============================================================================

# =============================================================================
# SENSOR CONFIGURATION
# =============================================================================
# Angular span covered by one sweep (degrees).
# The sensor sits in a corner of the projection area, so a quarter turn
# is enough to cover the whole surface.
SENSOR_FOV_DEG = 90.0

# Raw distances arrive in millimeters
MM_PER_METER = 1000.0

# =============================================================================
# CONVERTER DEFAULTS
# =============================================================================
# Whether downstream consumers normalize points to the projection area
DEFAULT_NORMALIZE = True

# Whether downstream consumers bunch nearby detections
DEFAULT_BUNCH = True

# =============================================================================
# BUNCHING CONFIGURATION
# =============================================================================
# Epsilon: maximum per-axis gap to consider two consecutive points part of
# the same object (meters)
#
# Typical values:
#   - 0.02m: Very tight, a slanted edge may split into several objects
#   - 0.05m: Standard value for hands and feet on a floor projection
#   - 0.15m: Loose, neighbouring objects may merge
DEFAULT_BUNCH_EPS = 0.05

# Minimum number of buffered points required to report a centroid.
# Runs shorter than this are dropped as noise.
DEFAULT_BUNCH_PRECISION_COUNT = 3

# =============================================================================
# SWEEP SIMULATOR CONFIGURATION
# =============================================================================
# Number of samples per sweep
SIM_NUM_SAMPLES = 181

# Distance reported when a ray hits nothing (millimeters)
SIM_MAX_RANGE_MM = 5600.0

# Gaussian noise standard deviation (millimeters)
SIM_NOISE_STD_MM = 3.0

# Random object radius range (min, max) in meters
SIM_OBJECT_RADIUS_RANGE = (0.04, 0.12)

# Minimum distance between random objects (meters)
SIM_OBJECT_MIN_DISTANCE = 0.4
