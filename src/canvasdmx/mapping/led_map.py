"""
LED Map

Authoritative table of LED index -> canvas pixel offset (x + width * y),
with None marking unmapped LEDs. Mapping helpers populate it from the
PointGenerator layouts and return how many LEDs they assigned.
"""

from typing import Iterable, List, Optional, Tuple

from ..constants import MAPPING_TRACE_LIMIT
from ..core.logger import get_logger, log_mapping_result
from ..exceptions import InvalidArgumentError
from ..utils import clamp, round_half_up
from .fill_config import PolygonFillConfig, RowLayoutConfig
from .point_generator import PointGenerator

logger = get_logger(__name__)


class LedMap:
    """Ordered LED -> pixel offset table for one canvas"""

    def __init__(self, width: int, height: int):
        """
        Args:
            width: Host surface width in pixels
            height: Host surface height in pixels
        """
        self._check_size(width, height)
        self.surface_width = int(width)
        self.surface_height = int(height)
        self._canvas_override: Optional[Tuple[int, int]] = None
        self._offsets: List[Optional[int]] = []
        self._assignments = 0

    # ------------------------------------------------------------------
    # Canvas size
    # ------------------------------------------------------------------

    @staticmethod
    def _check_size(width: int, height: int):
        if width < 1 or height < 1:
            raise InvalidArgumentError(f"Canvas size must be at least 1x1, got {width}x{height}")

    @property
    def canvas_width(self) -> int:
        if self._canvas_override is not None:
            return self._canvas_override[0]
        return self.surface_width

    @property
    def canvas_height(self) -> int:
        if self._canvas_override is not None:
            return self._canvas_override[1]
        return self.surface_height

    def set_canvas_size(self, width: int, height: int):
        """
        Map against an off-screen buffer of a different size.

        Existing offsets are not rescaled; only later set_led calls and
        position decoding use the new size.
        """
        self._check_size(width, height)
        if self._offsets and any(o is not None for o in self._offsets):
            logger.debug(f"Canvas size changed to {width}x{height} with LEDs already mapped")
        self._canvas_override = (int(width), int(height))

    def reset_canvas_size(self):
        """Go back to the host surface size."""
        self._canvas_override = None

    # ------------------------------------------------------------------
    # Table access
    # ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        """Length of the backing table (mapped or not)."""
        return len(self._offsets)

    @property
    def offsets(self) -> Tuple[Optional[int], ...]:
        return tuple(self._offsets)

    def __len__(self) -> int:
        return self.mapped_count()

    def set_led(self, index: int, x, y):
        """
        Map one LED to canvas (x, y). Coordinates are clamped into the canvas.

        Raises:
            InvalidArgumentError: index < 0
        """
        if index < 0:
            raise InvalidArgumentError(f"LED index must be >= 0, got {index}")

        if index >= len(self._offsets):
            self._offsets.extend([None] * (index + 1 - len(self._offsets)))

        w = self.canvas_width
        h = self.canvas_height
        px = clamp(round_half_up(x), 0, w - 1)
        py = clamp(round_half_up(y), 0, h - 1)

        offset = px + w * py
        self._offsets[index] = offset

        if self._assignments < MAPPING_TRACE_LIMIT:
            logger.debug(f"set_led({index}, {px}, {py}) -> pixel[{offset}]")
        self._assignments += 1

    def get(self, index: int) -> Optional[int]:
        """Pixel offset of an LED, or None when unmapped or out of range."""
        if index < 0 or index >= len(self._offsets):
            return None
        return self._offsets[index]

    def clear(self):
        """Mark every LED unmapped without shrinking the table."""
        self._offsets = [None] * len(self._offsets)

    def mapped_count(self) -> int:
        """Highest mapped index + 1 (gaps count toward the total)."""
        for i in range(len(self._offsets) - 1, -1, -1):
            if self._offsets[i] is not None:
                return i + 1
        return 0

    def position(self, index: int) -> Optional[Tuple[int, int]]:
        """Decode an LED's offset into canvas (x, y) using the current width."""
        offset = self.get(index)
        if offset is None:
            return None
        w = self.canvas_width
        return offset % w, offset // w

    def positions(self) -> List[Optional[Tuple[int, int]]]:
        """Positions of every table entry; None for unmapped LEDs."""
        return [self.position(i) for i in range(len(self._offsets))]

    # ------------------------------------------------------------------
    # Mapping helpers
    # ------------------------------------------------------------------

    def _assign(self, shape: str, start_index: int, points: Iterable[Tuple[int, int]]) -> int:
        if start_index < 0:
            raise InvalidArgumentError(f"LED index must be >= 0, got {start_index}")
        count = 0
        for x, y in points:
            self.set_led(start_index + count, x, y)
            count += 1
        log_mapping_result(logger, shape, start_index, count)
        return count

    def load_points(self, points, start_index: int = 0) -> int:
        """
        Map LEDs from a list of (x, y) pairs or {'x', 'y'} dicts.

        A dict with an 'id' (as written by export_points) lands at
        start_index + id, so gaps in an export survive a reload. Other
        points take start_index + their position in the list.

        Returns:
            Number of LEDs assigned
        """
        if start_index < 0:
            raise InvalidArgumentError(f"LED index must be >= 0, got {start_index}")
        count = 0
        for position, point in enumerate(points):
            if isinstance(point, dict):
                offset = point.get('id', position)
                x, y = point['x'], point['y']
            else:
                offset = position
                x, y = point[0], point[1]
            self.set_led(start_index + offset, x, y)
            count += 1
        log_mapping_result(logger, 'points', start_index, count)
        return count

    def map_led_strip(self, index: int, count: int, x: float, y: float,
                      spacing: float, angle: float, reversed: bool = False) -> int:
        return self._assign('strip', index,
                            PointGenerator.strip(count, x, y, spacing, angle, reversed))

    def map_led_ring(self, index: int, count: int, x: float, y: float,
                     radius: float, angle: float) -> int:
        return self._assign('ring', index, PointGenerator.ring(count, x, y, radius, angle))

    def map_led_grid(self, index: int, strip_length: int, num_strips: int, x: float, y: float,
                     led_spacing: float, strip_spacing: float, angle: float,
                     zigzag: bool = False, flip: bool = False) -> int:
        return self._assign('grid', index, PointGenerator.grid(
            strip_length, num_strips, x, y, led_spacing, strip_spacing, angle, zigzag, flip
        ))

    def map_square_corners(self, index: int, x: float, y: float, size: float,
                           rotation_degrees: float) -> int:
        return self._assign('square_corners', index,
                            PointGenerator.square_corners(x, y, size, rotation_degrees))

    def map_polygon(self, start_index: int, vertices,
                    config: PolygonFillConfig = PolygonFillConfig()) -> int:
        """
        Scanline-fill a polygon (see PointGenerator.polygon_fill).

        Returns:
            Number of LEDs mapped; the next free index is start_index + count
        """
        return self._assign('polygon', start_index,
                            PointGenerator.polygon_fill(vertices, config))

    def map_row_layout(self, start_index: int, vertices, config: RowLayoutConfig) -> int:
        """Fill a polygon with fixed counts per row (see PointGenerator.row_layout_fill)."""
        return self._assign('row_layout', start_index,
                            PointGenerator.row_layout_fill(vertices, config))

    # Alias for projects that think of it as "setting" a row layout
    set_row_layout = map_row_layout
