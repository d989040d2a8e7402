"""
Output Manager - canvas frame to DMX in one call
"""
import time
from typing import Any, Dict, List, Optional

import numpy as np

from .channel_pattern import ChannelLayout, ChannelPatternCompiler
from .pixel_sampler import PixelSampler, SampleResult, SamplingFault
from .sender import DmxSender
from ..color.color_correction import ColorCorrectionState
from ..constants import (
    DEFAULT_CHANNEL_PATTERN, DEFAULT_START_CHANNEL, DMX_CHANNELS_PER_UNIVERSE,
)
from ..core.config import ConfigValidator
from ..core.logger import DebugCategories, get_logger, log_performance
from ..exceptions import ConfigError
from ..mapping.led_map import LedMap

logger = get_logger(__name__)


class OutputManager:
    """
    Ties an LedMap, a ColorCorrectionState and a ChannelLayout together.

    Not thread-safe: one manager per render pipeline.
    """

    def __init__(self, led_map: LedMap, state: Optional[ColorCorrectionState] = None,
                 layout: Optional[ChannelLayout] = None,
                 frame_length: int = DMX_CHANNELS_PER_UNIVERSE):
        self.led_map = led_map
        self.state = state if state is not None else ColorCorrectionState()
        self.layout = layout if layout is not None else ChannelLayout(DEFAULT_CHANNEL_PATTERN,
                                                                     DEFAULT_START_CHANNEL)
        self.frame_length = frame_length
        self.sampler = PixelSampler(self.state)
        self.compiler = ChannelPatternCompiler()

        self.last_frame: Optional[np.ndarray] = None  # For DMX monitor
        self.last_diagnostics: List[SamplingFault] = []
        self.frame_count = 0

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'OutputManager':
        """
        Build a manager from a config dict (see core.config.CONFIG_SCHEMA).

        Raises:
            ConfigError: config failed validation
        """
        is_valid, errors = ConfigValidator().validate(config)
        if not is_valid:
            raise ConfigError(errors)

        canvas = config["canvas"]
        output = config["output"]
        led_map = LedMap(canvas["width"], canvas["height"])
        state = ColorCorrectionState.from_dict(config.get("correction", {}))
        layout = ChannelLayout(
            output["channel_pattern"],
            output.get("start_channel", DEFAULT_START_CHANNEL),
            output.get("default_values", {}),
        )
        manager = cls(led_map, state, layout,
                      frame_length=output.get("frame_length", DMX_CHANNELS_PER_UNIVERSE))
        logger.info(
            f"Output manager ready: canvas {canvas['width']}x{canvas['height']}, "
            f"pattern '{layout.pattern}' from channel {layout.start_channel}"
        )
        return manager

    def set_layout(self, layout: ChannelLayout):
        """Swap the channel layout; takes effect on the next frame."""
        self.layout = layout
        logger.debug(f"Channel layout set: '{layout.pattern}' from channel {layout.start_channel}")

    def led_colors(self, pixels) -> SampleResult:
        """Sample and correct the color of every mapped LED."""
        result = self.sampler.sample(self.led_map, pixels, state=self.state)
        self.last_diagnostics = result.diagnostics
        return result

    def send_to_dmx(self, sender: DmxSender, pixels) -> int:
        """
        Sample a frame and stream it into a sender.

        Returns:
            Number of (channel, value) pairs sent
        """
        start = time.perf_counter()
        result = self.led_colors(pixels)
        sent = self.compiler.emit(result.colors, self.layout, sender)
        self.frame_count += 1
        self._log_render_time("send_to_dmx", start)
        return sent

    def build_dmx_frame(self, pixels, frame_length: Optional[int] = None) -> np.ndarray:
        """
        Sample a frame and compile it into a DMX buffer (kept as last_frame).

        Args:
            pixels: Canvas pixel buffer
            frame_length: Buffer length (defaults to the configured frame_length)
        """
        start = time.perf_counter()
        result = self.led_colors(pixels)
        length = frame_length if frame_length is not None else self.frame_length
        frame = self.compiler.build_frame(result.colors, self.layout, length)
        self.last_frame = frame
        self.frame_count += 1
        self._log_render_time("build_dmx_frame", start)
        return frame

    def get_stats(self) -> Dict[str, Any]:
        """Snapshot for status displays."""
        led_count = self.led_map.mapped_count()
        return {
            "leds": led_count,
            "channels": self.layout.channel_count(led_count),
            "universes": self.layout.universe_count(led_count),
            "frames": self.frame_count,
            "faults": len(self.last_diagnostics),
        }

    def _log_render_time(self, operation: str, start: float):
        if DebugCategories.is_enabled(DebugCategories.PERFORMANCE):
            log_performance(logger, operation, (time.perf_counter() - start) * 1000)
