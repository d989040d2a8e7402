"""
Channel Pattern Compiler

Expands a per-fixture pattern such as "drgbsc" into output channels:
'r', 'g' and 'b' carry the LED color, every other character carries a
fixed default value (dimmer, strobe, ...). LED i starts at channel
start_channel + i * len(pattern).

Two outputs share the same value rules:
- emit(): ordered (channel, value) pairs pushed into a DmxSender
- build_frame(): fixed-length uint8 buffer, channel N stored at index N - 1
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..constants import (
    COLOR_CHANNEL_MARKERS, DEFAULT_START_CHANNEL,
    DMX_CHANNELS_PER_UNIVERSE, DMX_MAX_VALUE,
)
from ..core.logger import get_logger, log_dmx_output
from ..exceptions import InvalidArgumentError
from .sender import DmxSender

logger = get_logger(__name__)


def _to_byte(value) -> int:
    return min(max(int(value), 0), DMX_MAX_VALUE)


@dataclass(frozen=True)
class ChannelLayout:
    """Immutable channel layout shared by every LED of an output"""

    pattern: str
    start_channel: int = DEFAULT_START_CHANNEL
    defaults: Mapping[str, int] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if not isinstance(self.pattern, str) or not self.pattern:
            raise InvalidArgumentError("Channel pattern must be a non-empty string")
        if self.start_channel < 0:
            raise InvalidArgumentError(f"start_channel must be >= 0, got {self.start_channel}")

        values = {}
        for char, value in dict(self.defaults or {}).items():
            if not isinstance(char, str) or len(char) != 1:
                raise InvalidArgumentError(f"Default value key must be a single character, got {char!r}")
            values[char] = _to_byte(value)
        object.__setattr__(self, 'start_channel', int(self.start_channel))
        object.__setattr__(self, 'defaults', MappingProxyType(values))

    def __reduce__(self):
        # mappingproxy cannot be pickled; rebuild from a plain dict
        return (ChannelLayout, (self.pattern, self.start_channel, dict(self.defaults)))

    @property
    def channels_per_led(self) -> int:
        return len(self.pattern)

    def with_default(self, char: str, value: int) -> 'ChannelLayout':
        """Copy of this layout with one default value added or replaced."""
        values = dict(self.defaults)
        values[char] = value
        return ChannelLayout(self.pattern, self.start_channel, values)

    def first_channel(self, led_index: int) -> int:
        return self.start_channel + led_index * self.channels_per_led

    def channel_count(self, led_count: int) -> int:
        return max(led_count, 0) * self.channels_per_led

    def universe_count(self, led_count: int, universe_size: int = DMX_CHANNELS_PER_UNIVERSE) -> int:
        """
        Universes needed to hold led_count LEDs (1-based channels).

        Only counts; splitting a stream across universes is up to the host.
        """
        if universe_size <= 0:
            raise InvalidArgumentError(f"universe_size must be > 0, got {universe_size}")
        total = self.channel_count(led_count)
        if total == 0:
            return 0
        last_channel = self.start_channel + total - 1
        if last_channel < 1:
            return 0
        return math.ceil(last_channel / universe_size)

    def to_dict(self) -> dict:
        return {
            'channel_pattern': self.pattern,
            'start_channel': self.start_channel,
            'default_values': dict(self.defaults),
        }


class ChannelPatternCompiler:
    """Turns corrected LED colors into channel values for a ChannelLayout"""

    @staticmethod
    def resolve_values(color: Sequence[int], layout: ChannelLayout) -> Tuple[int, ...]:
        """Values for one LED, one per pattern character, clamped to 0..255."""
        values = []
        for char in layout.pattern:
            if char in COLOR_CHANNEL_MARKERS:
                values.append(_to_byte(color[COLOR_CHANNEL_MARKERS.index(char)]))
            else:
                values.append(layout.defaults.get(char, 0))
        return tuple(values)

    @staticmethod
    def iter_channels(colors, layout: ChannelLayout) -> Iterator[Tuple[int, int]]:
        """Yield (channel, value) pairs in strictly ascending channel order."""
        channel = layout.start_channel
        for color in colors:
            for value in ChannelPatternCompiler.resolve_values(color, layout):
                yield channel, value
                channel += 1

    @staticmethod
    def emit(colors, layout: ChannelLayout, sender: Optional[DmxSender]) -> int:
        """
        Push every channel of every LED into a sender.

        Returns:
            Number of (channel, value) pairs sent
        """
        if sender is None:
            logger.warning("No DMX sender set, skipping output")
            return 0
        if colors is None or len(colors) == 0:
            logger.warning("No LED colors to send")
            return 0

        sent = 0
        first_values = []
        for channel, value in ChannelPatternCompiler.iter_channels(colors, layout):
            sender.send(channel, value)
            if sent < 6:
                first_values.append(value)
            sent += 1

        log_dmx_output(logger, layout.start_channel, sent, first_values)
        return sent

    @staticmethod
    def build_frame(colors, layout: ChannelLayout,
                    frame_length: int = DMX_CHANNELS_PER_UNIVERSE) -> np.ndarray:
        """
        Compile colors into a zero-filled frame.

        Channel N lands at index N - 1; anything outside the frame is dropped,
        so partial-universe views are fine.

        Raises:
            InvalidArgumentError: frame_length <= 0
        """
        if frame_length <= 0:
            raise InvalidArgumentError(f"Frame length must be > 0, got {frame_length}")

        frame = np.zeros(frame_length, dtype=np.uint8)
        if colors is None or len(colors) == 0:
            return frame

        rgb = np.asarray(colors, dtype=np.int64).reshape(len(colors), -1)
        led_count = rgb.shape[0]
        width = layout.channels_per_led

        # One column per pattern character
        values = np.empty((led_count, width), dtype=np.int64)
        for j, char in enumerate(layout.pattern):
            if char in COLOR_CHANNEL_MARKERS:
                values[:, j] = rgb[:, COLOR_CHANNEL_MARKERS.index(char)]
            else:
                values[:, j] = layout.defaults.get(char, 0)

        index = layout.start_channel - 1 + np.arange(led_count * width)
        inside = (index >= 0) & (index < frame_length)
        frame[index[inside]] = np.clip(values.ravel()[inside], 0, DMX_MAX_VALUE)

        log_dmx_output(logger, layout.start_channel, int(inside.sum()), frame[index[inside]][:6])
        return frame

    @staticmethod
    def flatten_to_dmx(frame) -> bytes:
        """Frame as raw bytes for a transport."""
        return np.asarray(frame, dtype=np.uint8).tobytes()
