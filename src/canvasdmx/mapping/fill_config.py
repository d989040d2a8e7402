"""
Polygon Fill Configuration Models

Immutable value objects consumed by one polygon mapping call:
- StartCorner: Corner where LED 0 of the fill sits
- PolygonFillConfig: Spacing-driven (or fixed count per segment) scanline fill
- RowLayoutConfig: Fixed LED count per scanline
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Sequence, Tuple

from ..constants import DEFAULT_FILL_MARGIN, DEFAULT_LED_SPACING, DEFAULT_ROW_SPACING
from ..exceptions import InvalidArgumentError


class StartCorner(IntEnum):
    """Starting corner of a fill (wiring entry point)"""
    TOP_LEFT = 0
    TOP_RIGHT = 1
    BOTTOM_RIGHT = 2
    BOTTOM_LEFT = 3

    @property
    def starts_top(self) -> bool:
        return self in (StartCorner.TOP_LEFT, StartCorner.TOP_RIGHT)

    @property
    def starts_left(self) -> bool:
        return self in (StartCorner.TOP_LEFT, StartCorner.BOTTOM_LEFT)

    def reverses_segments(self, horizontal: bool) -> bool:
        """True if the first scanline runs right-to-left (rows) or bottom-to-top (columns)."""
        if horizontal:
            return self in (StartCorner.TOP_RIGHT, StartCorner.BOTTOM_RIGHT)
        return self in (StartCorner.BOTTOM_RIGHT, StartCorner.BOTTOM_LEFT)


@dataclass(frozen=True)
class PolygonFillConfig:
    """Scanline fill with fixed LED spacing, or a fixed LED count per segment"""

    start_corner: StartCorner = StartCorner.TOP_LEFT
    serpentine: bool = True             # Alternate scanline direction
    horizontal: bool = True             # True = rows, False = columns
    led_spacing: float = DEFAULT_LED_SPACING   # Along a scanline (pixels)
    row_spacing: float = DEFAULT_ROW_SPACING   # Between scanlines (pixels)
    leds_per_row: int = -1              # > 0 forces an exact count per segment
    angle: float = 0.0                  # Radians, rotates the fill pattern about its center
    margin: float = DEFAULT_FILL_MARGIN  # Inset from polygon edges (pixels)

    def __post_init__(self):
        object.__setattr__(self, 'start_corner', StartCorner(self.start_corner))
        if self.margin < 0:
            raise InvalidArgumentError(f"margin must be >= 0, got {self.margin}")

    @property
    def fixed_count(self) -> bool:
        return self.leds_per_row > 0

    def to_dict(self) -> dict:
        return {
            'startCorner': int(self.start_corner),
            'serpentine': self.serpentine,
            'horizontal': self.horizontal,
            'ledSpacing': self.led_spacing,
            'rowSpacing': self.row_spacing,
            'ledsPerRow': self.leds_per_row,
            'angle': self.angle,
            'margin': self.margin,
        }

    @staticmethod
    def from_dict(data: dict) -> 'PolygonFillConfig':
        return PolygonFillConfig(
            start_corner=StartCorner(data.get('startCorner', 0)),
            serpentine=data.get('serpentine', True),
            horizontal=data.get('horizontal', True),
            led_spacing=data.get('ledSpacing', DEFAULT_LED_SPACING),
            row_spacing=data.get('rowSpacing', DEFAULT_ROW_SPACING),
            leds_per_row=data.get('ledsPerRow', -1),
            angle=data.get('angle', 0.0),
            margin=data.get('margin', DEFAULT_FILL_MARGIN),
        )


@dataclass(frozen=True)
class RowLayoutConfig:
    """Scanline fill with an explicit LED count for every row/column"""

    leds_per_row: Tuple[int, ...] = field(default_factory=tuple)
    start_corner: StartCorner = StartCorner.TOP_LEFT
    serpentine: bool = True
    horizontal: bool = True
    row_spacing: float = 0.0            # <= 0 spreads rows evenly over the bounding box
    angle_deg: float = 0.0              # Row direction in degrees (0 = left-to-right)
    margin: float = DEFAULT_FILL_MARGIN

    def __post_init__(self):
        counts: Sequence[int] = self.leds_per_row or ()
        object.__setattr__(self, 'leds_per_row', tuple(int(c) for c in counts))
        object.__setattr__(self, 'start_corner', StartCorner(self.start_corner))
        if any(c < 0 for c in self.leds_per_row):
            raise InvalidArgumentError("leds_per_row entries must be >= 0")
        if self.margin < 0:
            raise InvalidArgumentError(f"margin must be >= 0, got {self.margin}")

    @property
    def row_count(self) -> int:
        return len(self.leds_per_row)

    @property
    def total_leds(self) -> int:
        """Upper bound on LEDs placed (rows without crossings place none)."""
        return sum(self.leds_per_row)

    def to_dict(self) -> dict:
        return {
            'ledsPerRow': list(self.leds_per_row),
            'startCorner': int(self.start_corner),
            'serpentine': self.serpentine,
            'horizontal': self.horizontal,
            'rowSpacing': self.row_spacing,
            'angleDeg': self.angle_deg,
            'margin': self.margin,
        }

    @staticmethod
    def from_dict(data: dict) -> 'RowLayoutConfig':
        return RowLayoutConfig(
            leds_per_row=tuple(data.get('ledsPerRow', ())),
            start_corner=StartCorner(data.get('startCorner', 0)),
            serpentine=data.get('serpentine', True),
            horizontal=data.get('horizontal', True),
            row_spacing=data.get('rowSpacing', 0.0),
            angle_deg=data.get('angleDeg', 0.0),
            margin=data.get('margin', DEFAULT_FILL_MARGIN),
        )
