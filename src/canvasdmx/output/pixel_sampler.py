"""
Pixel Sampler

Reads the canvas pixel under every mapped LED and runs it through color
correction. Problems with individual LEDs (unmapped, offset outside the
pixel buffer) are reported as SamplingFault records and the LED comes out
black; a frame is never aborted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np

from ..color.color_correction import ColorCorrectionState, ColorCorrector
from ..core.logger import DebugCategories, get_logger
from ..exceptions import InvalidArgumentError
from ..mapping.led_map import LedMap

logger = get_logger(__name__)


class FaultKind(Enum):
    UNMAPPED = "unmapped"
    OUT_OF_BOUNDS = "out_of_bounds"
    NO_LEDS_MAPPED = "no_leds_mapped"


@dataclass
class SamplingFault:
    """One LED that could not be sampled"""
    kind: FaultKind
    led_index: Optional[int] = None
    offset: Optional[int] = None
    x: Optional[int] = None
    y: Optional[int] = None


@dataclass
class SampleResult:
    """Corrected colors for LEDs 0..M-1 plus any faults hit along the way"""
    colors: np.ndarray
    diagnostics: List[SamplingFault] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.colors)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def _to_rgb(pixels) -> np.ndarray:
    """
    Normalize a pixel buffer to an (N, 3) int array.

    Accepts packed 0xAARRGGBB ints (flat), (N, 3|4) channel arrays or
    (H, W, 3|4) frames (row-major).
    """
    arr = np.asarray(pixels)

    if arr.ndim == 1:
        packed = arr.astype(np.int64) & 0xFFFFFFFF
        rgb = np.empty((packed.shape[0], 3), dtype=np.int64)
        rgb[:, 0] = (packed >> 16) & 0xFF
        rgb[:, 1] = (packed >> 8) & 0xFF
        rgb[:, 2] = packed & 0xFF
        return rgb

    if arr.ndim == 3:
        arr = arr.reshape(-1, arr.shape[2])

    if arr.ndim != 2 or arr.shape[1] not in (3, 4):
        raise InvalidArgumentError(f"Unsupported pixel buffer shape {np.shape(pixels)}")

    return np.clip(arr[:, :3].astype(np.int64), 0, 255)


class PixelSampler:
    """Samples a pixel buffer at LedMap offsets"""

    def __init__(self, state: Optional[ColorCorrectionState] = None):
        self.state = state if state is not None else ColorCorrectionState()

    def sample(self, led_map: LedMap, pixels, canvas_width: Optional[int] = None,
               state: Optional[ColorCorrectionState] = None) -> SampleResult:
        """
        Sample and correct one frame.

        Args:
            led_map: LED -> pixel offset table
            pixels: Pixel buffer (see _to_rgb)
            canvas_width: Width used to decode faulty offsets into (x, y);
                defaults to the frame width for (H, W, C) input, else the map's width;
                a width of 0 also falls back to the map
            state: Correction to apply (defaults to the sampler's own state)

        Returns:
            SampleResult with an (M, 3) uint8 array, M = led_map.mapped_count()
        """
        state = state if state is not None else self.state

        led_count = led_map.mapped_count()
        if led_count == 0:
            if DebugCategories.is_enabled(DebugCategories.SAMPLING):
                logger.debug("No LEDs mapped, nothing to sample")
            return SampleResult(
                colors=np.zeros((0, 3), dtype=np.uint8),
                diagnostics=[SamplingFault(FaultKind.NO_LEDS_MAPPED)],
            )

        if canvas_width is None:
            frame_shape = np.shape(pixels)
            canvas_width = frame_shape[1] if len(frame_shape) == 3 else led_map.canvas_width
        if canvas_width <= 0:
            # zero-width frame
            canvas_width = led_map.canvas_width

        rgb = _to_rgb(pixels)
        pixel_count = rgb.shape[0]

        offsets = np.array(
            [-1 if o is None else o for o in led_map.offsets[:led_count]], dtype=np.int64
        )
        unmapped = offsets < 0
        out_of_bounds = ~unmapped & (offsets >= pixel_count)
        valid = ~unmapped & ~out_of_bounds

        colors = np.zeros((led_count, 3), dtype=np.uint8)
        if valid.any():
            colors[valid] = ColorCorrector.apply(rgb[offsets[valid]], state)

        diagnostics = []
        for index in np.flatnonzero(unmapped):
            diagnostics.append(SamplingFault(FaultKind.UNMAPPED, led_index=int(index)))
        for index in np.flatnonzero(out_of_bounds):
            offset = int(offsets[index])
            diagnostics.append(SamplingFault(
                FaultKind.OUT_OF_BOUNDS, led_index=int(index), offset=offset,
                x=offset % canvas_width, y=offset // canvas_width,
            ))
        diagnostics.sort(key=lambda f: f.led_index)

        oob_count = int(out_of_bounds.sum())
        if oob_count:
            first = int(np.flatnonzero(out_of_bounds)[0])
            logger.warning(
                f"{oob_count} LED(s) outside the pixel buffer ({pixel_count} pixels), "
                f"first is LED {first} at offset {int(offsets[first])}"
            )

        if DebugCategories.is_enabled(DebugCategories.SAMPLING):
            logger.debug(f"Sampled {led_count} LEDs, {len(diagnostics)} fault(s)")

        return SampleResult(colors=colors, diagnostics=diagnostics)
