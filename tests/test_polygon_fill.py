"""
Test scanline polygon fills (spacing-driven, fixed count, row layout)
"""
import math

import pytest

from canvasdmx.exceptions import InvalidArgumentError
from canvasdmx.mapping.fill_config import PolygonFillConfig, RowLayoutConfig, StartCorner
from canvasdmx.mapping.point_generator import PointGenerator


SQUARE = [(0, 0), (40, 0), (40, 40), (0, 40)]
GRID_STEPS = [1, 9, 17, 25, 33]


class TestPolygonFill:
    """Spacing-driven scanline fill of a 40x40 square (margin 1, spacing 8)"""

    @pytest.fixture
    def points(self):
        return PointGenerator.polygon_fill(SQUARE, PolygonFillConfig())

    def test_led_count(self, points):
        assert len(points) == 25

    def test_first_row_left_to_right(self, points):
        assert points[:5] == [(x, 1) for x in GRID_STEPS]

    def test_serpentine_second_row(self, points):
        assert points[5:10] == [(x, 9) for x in reversed(GRID_STEPS)]

    def test_without_serpentine(self):
        points = PointGenerator.polygon_fill(SQUARE, PolygonFillConfig(serpentine=False))
        assert points[5:10] == [(x, 9) for x in GRID_STEPS]

    def test_deterministic(self):
        triangle = [(0, 0), (100, 0), (50, 80)]
        config = PolygonFillConfig(led_spacing=6, row_spacing=5)
        first = PointGenerator.polygon_fill(triangle, config)
        assert len(first) > 0
        for _ in range(3):
            assert PointGenerator.polygon_fill(triangle, config) == first

    def test_points_inside_polygon(self):
        triangle = [(0, 0), (100, 0), (50, 80)]
        for x, y in PointGenerator.polygon_fill(triangle, PolygonFillConfig(led_spacing=6, row_spacing=5)):
            assert PointGenerator.point_in_polygon(x, y, triangle)

    def test_top_right_start(self):
        points = PointGenerator.polygon_fill(SQUARE, PolygonFillConfig(start_corner=StartCorner.TOP_RIGHT))
        assert points[:5] == [(x, 1) for x in reversed(GRID_STEPS)]
        assert points[5:10] == [(x, 9) for x in GRID_STEPS]

    def test_bottom_left_start(self):
        points = PointGenerator.polygon_fill(SQUARE, PolygonFillConfig(start_corner=StartCorner.BOTTOM_LEFT))
        assert points[0] == (1, 39)
        assert points[5] == (33, 31)

    def test_vertical_columns(self):
        points = PointGenerator.polygon_fill(SQUARE, PolygonFillConfig(horizontal=False))
        assert len(points) == 25
        assert points[:5] == [(1, y) for y in GRID_STEPS]
        assert points[5:10] == [(9, y) for y in reversed(GRID_STEPS)]

    def test_vertical_bottom_start_reverses_columns(self):
        config = PolygonFillConfig(horizontal=False, start_corner=StartCorner.BOTTOM_LEFT)
        points = PointGenerator.polygon_fill(SQUARE, config)
        assert points[:5] == [(1, y) for y in reversed(GRID_STEPS)]

    def test_fixed_count_per_row(self):
        points = PointGenerator.polygon_fill(SQUARE, PolygonFillConfig(leds_per_row=3))
        assert len(points) == 15
        assert points[:3] == [(1, 1), (20, 1), (39, 1)]

    def test_single_led_per_row_is_centered(self):
        points = PointGenerator.polygon_fill(SQUARE, PolygonFillConfig(leds_per_row=1))
        assert points == [(20, y) for y in GRID_STEPS]

    def test_rotation_about_fill_center(self):
        points = PointGenerator.polygon_fill(SQUARE, PolygonFillConfig(angle=math.pi / 2))
        assert len(points) == 25
        assert points[0] == (39, 1)

    def test_tiny_angle_ignored(self):
        assert (PointGenerator.polygon_fill(SQUARE, PolygonFillConfig(angle=0.0005))
                == PointGenerator.polygon_fill(SQUARE, PolygonFillConfig()))

    def test_concave_polygon_multiple_segments(self):
        # U shape: two arms joined at the bottom
        u_shape = [(0, 0), (10, 0), (10, 20), (30, 20), (30, 0), (40, 0), (40, 40), (0, 40)]
        config = PolygonFillConfig(margin=0, led_spacing=5, row_spacing=10, serpentine=False)
        points = PointGenerator.polygon_fill(u_shape, config)
        first_row = [p for p in points if p[1] == 0]
        # Scanline y=0 crosses both arms: 0..10 and 30..40
        assert first_row == [(0, 0), (5, 0), (10, 0), (30, 0), (35, 0), (40, 0)]

    def test_degenerate_inputs_return_empty(self):
        assert PointGenerator.polygon_fill([(0, 0), (10, 10)]) == []
        assert PointGenerator.polygon_fill([]) == []
        assert PointGenerator.polygon_fill(None) == []
        # Margin eats the whole polygon
        assert PointGenerator.polygon_fill(SQUARE, PolygonFillConfig(margin=30)) == []

    def test_invalid_spacing_raises(self):
        with pytest.raises(InvalidArgumentError):
            PointGenerator.polygon_fill(SQUARE, PolygonFillConfig(row_spacing=0))
        with pytest.raises(InvalidArgumentError):
            PointGenerator.polygon_fill(SQUARE, PolygonFillConfig(led_spacing=0))

    def test_fixed_count_skips_segments_narrower_than_margin(self):
        # 1px wide: margin 1 on each side leaves nothing to fill
        sliver = [(0, 0), (1, 0), (1, 40), (0, 40)]
        assert PointGenerator.polygon_fill(sliver, PolygonFillConfig(leds_per_row=3)) == []

    def test_fixed_count_ignores_led_spacing(self):
        points = PointGenerator.polygon_fill(SQUARE, PolygonFillConfig(led_spacing=0, leds_per_row=2))
        assert len(points) == 10


class TestRowLayoutFill:
    """Fixed LED count per row"""

    def test_even_rows(self):
        points = PointGenerator.row_layout_fill(SQUARE, RowLayoutConfig(leds_per_row=(3, 2, 1)))
        assert points == [(1, 1), (20, 1), (39, 1),
                          (39, 20), (1, 20),
                          (20, 39)]

    def test_zero_count_row_still_counts_for_serpentine(self):
        points = PointGenerator.row_layout_fill(SQUARE, RowLayoutConfig(leds_per_row=(3, 0, 3)))
        assert points == [(1, 1), (20, 1), (39, 1),
                          (1, 39), (20, 39), (39, 39)]

    def test_stepped_rows(self):
        config = RowLayoutConfig(leds_per_row=(1, 1, 1), row_spacing=10)
        assert PointGenerator.row_layout_fill(SQUARE, config) == [(20, 1), (20, 11), (20, 21)]

    def test_single_row_mid_box(self):
        config = RowLayoutConfig(leds_per_row=(2,))
        assert PointGenerator.row_layout_fill(SQUARE, config) == [(1, 20), (39, 20)]

    def test_bottom_start(self):
        config = RowLayoutConfig(leds_per_row=(1, 1), row_spacing=10, start_corner=StartCorner.BOTTOM_LEFT)
        assert PointGenerator.row_layout_fill(SQUARE, config) == [(20, 39), (20, 29)]

    def test_rotated_rows_come_back_to_canvas_space(self):
        config = RowLayoutConfig(leds_per_row=(3,), row_spacing=1, angle_deg=90)
        assert PointGenerator.row_layout_fill(SQUARE, config) == [(39, 1), (39, 20), (39, 39)]

    def test_count_spread_across_segments(self):
        u_shape = [(0, 0), (10, 0), (10, 20), (30, 20), (30, 0), (40, 0), (40, 40), (0, 40)]
        config = RowLayoutConfig(leds_per_row=(3,), row_spacing=1, margin=0)
        # Row y=0 has segments 0..10 and 30..40 (20 px total): t=0, 0.5, 1
        assert PointGenerator.row_layout_fill(u_shape, config) == [(0, 0), (10, 0), (40, 0)]

    def test_degenerate_inputs_return_empty(self):
        assert PointGenerator.row_layout_fill(SQUARE, RowLayoutConfig()) == []
        assert PointGenerator.row_layout_fill([(0, 0), (1, 1)], RowLayoutConfig(leds_per_row=(3,))) == []


class TestFillConfig:

    def test_negative_margin_rejected(self):
        with pytest.raises(InvalidArgumentError):
            PolygonFillConfig(margin=-1)
        with pytest.raises(InvalidArgumentError):
            RowLayoutConfig(leds_per_row=(1,), margin=-0.5)

    def test_negative_row_count_rejected(self):
        with pytest.raises(InvalidArgumentError):
            RowLayoutConfig(leds_per_row=(3, -1))

    def test_row_counts_coerced_to_tuple(self):
        config = RowLayoutConfig(leds_per_row=[4, 5])
        assert config.leds_per_row == (4, 5)
        assert config.total_leds == 9

    def test_dict_round_trip(self):
        config = PolygonFillConfig(start_corner=StartCorner.BOTTOM_RIGHT, leds_per_row=4, angle=0.5)
        assert PolygonFillConfig.from_dict(config.to_dict()) == config
        rows = RowLayoutConfig(leds_per_row=(1, 2), angle_deg=15)
        assert RowLayoutConfig.from_dict(rows.to_dict()) == rows

    def test_start_corner_from_int(self):
        assert PolygonFillConfig(start_corner=2).start_corner is StartCorner.BOTTOM_RIGHT
