"""
DMX sender capability and stock sinks

The core never talks to hardware. Emitting a frame means calling
send(channel, value) on whatever the host hands in: a USB-serial driver,
an Art-Net encoder, or one of the sinks below.
"""

from typing import Callable, List, Protocol, Tuple, runtime_checkable

import numpy as np

from ..constants import DMX_CHANNELS_PER_UNIVERSE, DMX_MAX_VALUE
from ..exceptions import InvalidArgumentError


@runtime_checkable
class DmxSender(Protocol):
    """Anything that accepts one (channel, value) pair at a time."""

    def send(self, channel: int, value: int) -> None:
        ...


class NullSender:
    """Discards everything (dry runs, benchmarks)."""

    def send(self, channel: int, value: int) -> None:
        pass


class CallbackSender:
    """Adapts a plain two-argument callable to DmxSender."""

    def __init__(self, fn: Callable[[int, int], None]):
        self._fn = fn

    def send(self, channel: int, value: int) -> None:
        self._fn(channel, value)


class RecordingSender:
    """Keeps every pair it receives, in order."""

    def __init__(self):
        self.pairs: List[Tuple[int, int]] = []

    def send(self, channel: int, value: int) -> None:
        self.pairs.append((channel, value))

    def clear(self):
        self.pairs.clear()

    def to_frame(self, length: int = DMX_CHANNELS_PER_UNIVERSE) -> np.ndarray:
        """
        Replay recorded pairs into a zeroed frame (channel 1 -> index 0).

        Channels outside 1..length are dropped; later pairs overwrite
        earlier ones on the same channel.
        """
        if length <= 0:
            raise InvalidArgumentError(f"Frame length must be > 0, got {length}")
        frame = np.zeros(length, dtype=np.uint8)
        for channel, value in self.pairs:
            index = channel - 1
            if 0 <= index < length:
                frame[index] = min(max(int(value), 0), DMX_MAX_VALUE)
        return frame
