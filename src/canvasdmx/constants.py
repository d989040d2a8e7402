"""
Central constants for canvasdmx
"""

# DMX constants
DMX_CHANNELS_PER_UNIVERSE = 512
DMX_FIRST_CHANNEL = 1
DMX_MAX_VALUE = 255

# Channel pattern constants
DEFAULT_CHANNEL_PATTERN = 'rgb'
COLOR_CHANNEL_MARKERS = ('r', 'g', 'b')
DEFAULT_START_CHANNEL = 0

# Canvas constants
DEFAULT_CANVAS_WIDTH = 1024
DEFAULT_CANVAS_HEIGHT = 768

# Color correction constants
DEFAULT_RESPONSE = 1.0
DEFAULT_TEMPERATURE = 0.0
TEMPERATURE_MIN = -1.0
TEMPERATURE_MAX = 1.0
MIN_CURVE_LENGTH = 2

# Polygon fill constants
DEFAULT_LED_SPACING = 8.0
DEFAULT_ROW_SPACING = 8.0
DEFAULT_FILL_MARGIN = 1.0
ROTATION_EPSILON = 0.001  # Below this (radians) fill points are not rotated
ROW_LAYOUT_ROTATION_EPSILON = 0.0001

# Logging constants
DEFAULT_LOG_DIR = 'logs'
DEFAULT_MAX_LOG_FILES = 10
LOG_FILE_PREFIX = 'canvasdmx'
MAPPING_TRACE_LIMIT = 5  # First N set_led calls of a map are traced at DEBUG
