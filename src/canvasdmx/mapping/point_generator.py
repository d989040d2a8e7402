"""
Point Generation Engine

Computes ordered LED coordinates for common fixture layouts (strips, rings,
grids, square corners) and for arbitrary polygons filled by scanline.

Every generator returns canvas coordinates as integer (x, y) tuples in LED
order. Nothing here clamps to a canvas; LedMap does that on assignment.
Degenerate input yields an empty list instead of raising.
"""

import math
from typing import Iterator, List, Sequence, Tuple

from ..constants import ROTATION_EPSILON, ROW_LAYOUT_ROTATION_EPSILON
from ..core.logger import get_logger
from ..exceptions import InvalidArgumentError
from ..utils import rotate_point, round_half_up
from .fill_config import PolygonFillConfig, RowLayoutConfig

logger = get_logger(__name__)

Point = Tuple[int, int]


class PointGenerator:
    """Generate LED coordinates from layout parameters"""

    @staticmethod
    def point(x: float, y: float) -> List[Point]:
        """Single LED at (x, y)."""
        return [(round_half_up(x), round_half_up(y))]

    @staticmethod
    def strip(count: int, x: float, y: float, spacing: float, angle: float,
              reversed: bool = False) -> List[Point]:
        """
        Linear strip centered on (x, y).

        Args:
            count: Number of LEDs
            x, y: Strip center
            spacing: Distance between LEDs (pixels)
            angle: Strip direction in radians
            reversed: Wire from the far end (positions unchanged, order flipped)
        """
        if count <= 0:
            return []

        s = math.sin(angle)
        c = math.cos(angle)
        points = []
        for i in range(count):
            offset = (i - (count - 1) / 2.0) * spacing
            points.append((round_half_up(x + offset * c), round_half_up(y + offset * s)))

        if reversed:
            points.reverse()
        return points

    @staticmethod
    def ring(count: int, x: float, y: float, radius: float, angle: float) -> List[Point]:
        """
        Ring of LEDs around (x, y), LED i at angle + i * 2pi / count.

        Positions are center - radius * (cos, sin), which walks clockwise on a
        Y-down canvas. Field wiring depends on this convention.
        """
        if count <= 0:
            return []

        points = []
        for i in range(count):
            a = angle + i * 2.0 * math.pi / count
            points.append((round_half_up(x - radius * math.cos(a)),
                           round_half_up(y - radius * math.sin(a))))
        return points

    @staticmethod
    def grid(strip_length: int, num_strips: int, x: float, y: float,
             led_spacing: float, strip_spacing: float, angle: float,
             zigzag: bool = False, flip: bool = False) -> List[Point]:
        """
        Parallel strips centered on (x, y), strip i holding LEDs
        [i * strip_length, (i + 1) * strip_length).

        Args:
            strip_length: LEDs per strip
            num_strips: Number of strips
            led_spacing: Distance between LEDs along a strip
            strip_spacing: Distance between strips
            angle: Strip direction in radians (strips stack along angle + pi/2)
            zigzag: Reverse every odd strip
            flip: Swap which strips zigzag reverses
        """
        if strip_length <= 0 or num_strips <= 0:
            return []

        s = math.sin(angle + math.pi / 2)
        c = math.cos(angle + math.pi / 2)
        points = []
        for i in range(num_strips):
            rev = zigzag and ((i % 2 == 1) != flip)
            o = (i - (num_strips - 1) / 2.0) * strip_spacing
            points.extend(PointGenerator.strip(
                strip_length, x + o * c, y + o * s, led_spacing, angle, rev
            ))
        return points

    @staticmethod
    def square_corners(x: float, y: float, size: float, rotation_degrees: float) -> List[Point]:
        """Four corners of a square (TL, TR, BR, BL before rotation) centered on (x, y)."""
        half = size / 2.0
        a = math.radians(rotation_degrees)
        cos_a = math.cos(a)
        sin_a = math.sin(a)
        x_off = (-half, half, half, -half)
        y_off = (-half, -half, half, half)

        points = []
        for dx, dy in zip(x_off, y_off):
            rx = x + dx * cos_a - dy * sin_a
            ry = y + dx * sin_a + dy * cos_a
            points.append((round_half_up(rx), round_half_up(ry)))
        return points

    # ------------------------------------------------------------------
    # Polygon fills
    # ------------------------------------------------------------------

    @staticmethod
    def polygon_fill(vertices, config: PolygonFillConfig = PolygonFillConfig()) -> List[Point]:
        """
        Fill an arbitrary polygon with LEDs using scanlines.

        Scanlines run from the edge given by config.start_corner at
        row_spacing steps (both bounds inclusive). Each entry/exit pair of
        edge crossings is a segment, filled at led_spacing or with exactly
        leds_per_row LEDs. An odd trailing crossing is ignored.

        Args:
            vertices: >= 3 (x, y) pairs or objects with .x/.y, implicitly closed
            config: Fill configuration

        Returns:
            LED positions in wiring order
        """
        xs, ys = PointGenerator._split_vertices(vertices)
        if len(xs) < 3:
            logger.warning("polygon_fill: need at least 3 vertices")
            return []
        if config.row_spacing <= 0:
            raise InvalidArgumentError(f"row_spacing must be > 0, got {config.row_spacing}")
        if not config.fixed_count and config.led_spacing <= 0:
            raise InvalidArgumentError(f"led_spacing must be > 0, got {config.led_spacing}")

        min_x, max_x, min_y, max_y = PointGenerator._bounds(xs, ys)
        min_x += config.margin
        max_x -= config.margin
        min_y += config.margin
        max_y -= config.margin

        # Rotation pivot is the fill region, not the polygon
        center_x = (min_x + max_x) / 2.0
        center_y = (min_y + max_y) / 2.0

        if config.horizontal:
            along, across = xs, ys
            if config.start_corner.starts_top:
                scan_start, scan_end, step = min_y, max_y, config.row_spacing
            else:
                scan_start, scan_end, step = max_y, min_y, -config.row_spacing
        else:
            along, across = ys, xs
            if config.start_corner.starts_left:
                scan_start, scan_end, step = min_x, max_x, config.row_spacing
            else:
                scan_start, scan_end, step = max_x, min_x, -config.row_spacing

        reverse_first = config.start_corner.reverses_segments(config.horizontal)
        points: List[Point] = []

        for row_index, scan in enumerate(PointGenerator._scan_values(scan_start, scan_end, step)):
            crossings = PointGenerator._crossings(along, across, scan)
            if len(crossings) < 2:
                continue

            reverse = reverse_first
            if config.serpentine and row_index % 2 == 1:
                reverse = not reverse

            for i in range(0, len(crossings) - 1, 2):
                seg_start = crossings[i] + config.margin
                seg_end = crossings[i + 1] - config.margin

                if config.fixed_count:
                    if seg_end < seg_start:
                        continue
                    positions = PointGenerator._even_positions(seg_start, seg_end, config.leds_per_row)
                else:
                    positions = PointGenerator._stepped_positions(seg_start, seg_end, config.led_spacing)

                segment = [
                    PointGenerator._place(pos, scan, config.horizontal,
                                          center_x, center_y, config.angle)
                    for pos in positions
                ]
                if reverse:
                    segment.reverse()
                points.extend(segment)

        return points

    @staticmethod
    def row_layout_fill(vertices, config: RowLayoutConfig) -> List[Point]:
        """
        Fill an arbitrary polygon with a fixed LED count per scanline.

        With a non-zero angle_deg the polygon is rotated into row-aligned
        space, rows are laid out there, and each LED is rotated back about
        the polygon's bounding-box center, so the result is in canvas space.

        Rows are evenly spread across the (margin-shrunk) bounding box when
        row_spacing <= 0, else stepped by row_spacing from the start edge.
        Each row's count is spread over all of its segments combined.

        Args:
            vertices: >= 3 (x, y) pairs or objects with .x/.y
            config: Row layout configuration

        Returns:
            LED positions in wiring order
        """
        xs, ys = PointGenerator._split_vertices(vertices)
        if len(xs) < 3:
            logger.warning("row_layout_fill: need at least 3 vertices")
            return []
        if config.row_count == 0:
            logger.warning("row_layout_fill: leds_per_row must be provided")
            return []

        min_x, max_x, min_y, max_y = PointGenerator._bounds(xs, ys)
        center_x = (min_x + max_x) / 2.0
        center_y = (min_y + max_y) / 2.0
        angle = math.radians(config.angle_deg)

        if abs(angle) > ROW_LAYOUT_ROTATION_EPSILON:
            rotated = [rotate_point(vx, vy, center_x, center_y, -angle)
                       for vx, vy in zip(xs, ys)]
            xs = [p[0] for p in rotated]
            ys = [p[1] for p in rotated]
            min_x, max_x, min_y, max_y = PointGenerator._bounds(xs, ys)

        min_x += config.margin
        max_x -= config.margin
        min_y += config.margin
        max_y -= config.margin

        if config.horizontal:
            along, across = xs, ys
            forward = config.start_corner.starts_top
            low, high = min_y, max_y
        else:
            along, across = ys, xs
            forward = config.start_corner.starts_left
            low, high = min_x, max_x

        row_count = config.row_count
        reverse_first = config.start_corner.reverses_segments(config.horizontal)
        points: List[Point] = []

        for row_index, leds_in_row in enumerate(config.leds_per_row):
            if config.row_spacing > 0:
                offset = config.row_spacing * row_index
                scan = low + offset if forward else high - offset
            elif row_count == 1:
                scan = (low + high) * 0.5
            else:
                t = row_index / float(row_count - 1)
                scan = low + (high - low) * t if forward else high - (high - low) * t

            crossings = PointGenerator._crossings(along, across, scan)
            if len(crossings) < 2 or leds_in_row <= 0:
                continue

            row = PointGenerator._distribute_across_segments(
                crossings, leds_in_row, scan, config.horizontal,
                center_x, center_y, angle, config.margin
            )

            reverse = reverse_first
            if config.serpentine and row_index % 2 == 1:
                reverse = not reverse
            if reverse:
                row.reverse()
            points.extend(row)

        return points

    @staticmethod
    def point_in_polygon(px: float, py: float, vertices) -> bool:
        """Even-odd test; useful to check that fill points landed inside."""
        xs, ys = PointGenerator._split_vertices(vertices)
        inside = False
        n = len(xs)
        j = n - 1
        for i in range(n):
            if (ys[i] > py) != (ys[j] > py):
                x_cross = (xs[j] - xs[i]) * (py - ys[i]) / (ys[j] - ys[i]) + xs[i]
                if px < x_cross:
                    inside = not inside
            j = i
        return inside

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _split_vertices(vertices) -> Tuple[List[float], List[float]]:
        """Accept (x, y) pairs or point-like objects; return x and y lists."""
        if vertices is None:
            return [], []

        xs: List[float] = []
        ys: List[float] = []
        for i, vertex in enumerate(vertices):
            if hasattr(vertex, 'x') and hasattr(vertex, 'y'):
                vx, vy = vertex.x, vertex.y
            else:
                try:
                    vx, vy = vertex[0], vertex[1]
                except (TypeError, IndexError, KeyError):
                    raise InvalidArgumentError(f"Invalid vertex at index {i}: {vertex!r}")
            try:
                xs.append(float(vx))
                ys.append(float(vy))
            except (TypeError, ValueError):
                raise InvalidArgumentError(f"Invalid vertex at index {i}: {vertex!r}")
        return xs, ys

    @staticmethod
    def _bounds(xs: Sequence[float], ys: Sequence[float]) -> Tuple[float, float, float, float]:
        return min(xs), max(xs), min(ys), max(ys)

    @staticmethod
    def _scan_values(start: float, end: float, step: float) -> Iterator[float]:
        """start, start + step, ... while within end (inclusive)."""
        k = 0
        while True:
            value = start + step * k
            if (step > 0 and value > end) or (step < 0 and value < end):
                return
            yield value
            k += 1

    @staticmethod
    def _crossings(along: Sequence[float], across: Sequence[float], scan: float) -> List[float]:
        """
        Sorted crossings of the line across == scan with every polygon edge.

        An edge crosses when one endpoint is <= scan and the other > scan,
        so shared vertices are counted once.
        """
        crossings = []
        n = len(across)
        for i in range(n):
            j = (i + 1) % n
            a1 = across[i]
            a2 = across[j]
            if (a1 <= scan < a2) or (a2 <= scan < a1):
                t = (scan - a1) / (a2 - a1)
                crossings.append(along[i] + t * (along[j] - along[i]))
        crossings.sort()
        return crossings

    @staticmethod
    def _stepped_positions(start: float, end: float, spacing: float) -> List[float]:
        positions = []
        k = 0
        while start + spacing * k <= end:
            positions.append(start + spacing * k)
            k += 1
        return positions

    @staticmethod
    def _even_positions(start: float, end: float, count: int) -> List[float]:
        """count positions from start to end inclusive; a single LED sits mid-segment."""
        if count == 1:
            return [(start + end) * 0.5]
        step = (end - start) / (count - 1)
        return [start + step * k for k in range(count)]

    @staticmethod
    def _distribute_across_segments(crossings: List[float], count: int, scan: float,
                                    horizontal: bool, center_x: float, center_y: float,
                                    angle: float, margin: float) -> List[Point]:
        """Spread count LEDs along the concatenated length of all segments of one scanline."""
        segments = []
        total = 0.0
        for i in range(0, len(crossings) - 1, 2):
            start = crossings[i] + margin
            end = crossings[i + 1] - margin
            if end <= start:
                continue
            segments.append((start, end))
            total += end - start

        if count <= 0 or not segments or total <= 0.0:
            return []

        result = []
        for k in range(count):
            t = 0.5 if count == 1 else k / float(count - 1)
            remaining = t * total
            pos = segments[-1][1]
            for seg_start, seg_end in segments:
                seg_len = seg_end - seg_start
                if remaining <= seg_len:
                    pos = seg_start + remaining
                    break
                remaining -= seg_len
            result.append(PointGenerator._place(pos, scan, horizontal, center_x, center_y, angle,
                                                ROW_LAYOUT_ROTATION_EPSILON))
        return result

    @staticmethod
    def _rotate_if(x: float, y: float, cx: float, cy: float, angle: float,
                   epsilon: float = ROTATION_EPSILON) -> Tuple[float, float]:
        if abs(angle) < epsilon:
            return x, y
        return rotate_point(x, y, cx, cy, angle)

    @staticmethod
    def _place(along: float, scan: float, horizontal: bool,
               center_x: float, center_y: float, angle: float,
               epsilon: float = ROTATION_EPSILON) -> Point:
        """Turn a scanline coordinate pair into a rounded, rotated canvas point."""
        x, y = (along, scan) if horizontal else (scan, along)
        rx, ry = PointGenerator._rotate_if(x, y, center_x, center_y, angle, epsilon)
        return round_half_up(rx), round_half_up(ry)
