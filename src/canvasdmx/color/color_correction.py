"""
Color Correction

Holds the photometric correction parameters (response exponent, white
temperature, optional custom curve) and applies them to sampled colors.
The numpy path is the only implementation; single-color correction is a
one-row call into it.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from ..constants import (
    DEFAULT_RESPONSE, DEFAULT_TEMPERATURE, DMX_MAX_VALUE,
    MIN_CURVE_LENGTH, TEMPERATURE_MAX, TEMPERATURE_MIN,
)
from ..core.logger import get_logger
from ..exceptions import InvalidArgumentError
from ..utils import clamp

logger = get_logger(__name__)


class ColorCorrectionState:
    """
    Correction parameters shared by a pipeline.

    Either the response exponent or the custom curve is active, never both:
    set_response() drops the curve, set_custom_curve(None) falls back to the
    exponent.
    """

    def __init__(self, response: float = DEFAULT_RESPONSE,
                 temperature: float = DEFAULT_TEMPERATURE,
                 custom_curve: Optional[Sequence[float]] = None):
        self._response = float(response)
        self._temperature = clamp(float(temperature), TEMPERATURE_MIN, TEMPERATURE_MAX)
        self._curve: Optional[Tuple[float, ...]] = None
        if custom_curve is not None:
            self.set_custom_curve(custom_curve)

    @property
    def response(self) -> float:
        return self._response

    @property
    def temperature(self) -> float:
        return self._temperature

    @property
    def custom_curve(self) -> Optional[Tuple[float, ...]]:
        return self._curve

    @property
    def uses_custom_curve(self) -> bool:
        return self._curve is not None

    def set_response(self, response: float):
        """Power-law exponent (1.0 = linear). Clears any custom curve."""
        self._response = float(response)
        self._curve = None

    def set_custom_curve(self, curve: Optional[Sequence[float]]):
        """
        Activate a lookup curve, or pass None to return to the exponent.

        Raises:
            InvalidArgumentError: curve has fewer than 2 entries
        """
        if curve is None:
            self._curve = None
            return
        values = tuple(float(v) for v in curve)
        if len(values) < MIN_CURVE_LENGTH:
            raise InvalidArgumentError(
                f"Custom curve needs at least {MIN_CURVE_LENGTH} values, got {len(values)}"
            )
        self._curve = values

    def set_temperature(self, temperature: float):
        """Negative = warmer, positive = cooler. Clamped to [-1, 1]."""
        self._temperature = clamp(float(temperature), TEMPERATURE_MIN, TEMPERATURE_MAX)

    def copy(self) -> 'ColorCorrectionState':
        return ColorCorrectionState(self._response, self._temperature, self._curve)

    def to_dict(self) -> dict:
        return {
            'response': self._response,
            'temperature': self._temperature,
            'custom_curve': list(self._curve) if self._curve is not None else None,
        }

    @staticmethod
    def from_dict(data: dict) -> 'ColorCorrectionState':
        return ColorCorrectionState(
            response=data.get('response', DEFAULT_RESPONSE),
            temperature=data.get('temperature', DEFAULT_TEMPERATURE),
            custom_curve=data.get('custom_curve'),
        )

    def __eq__(self, other):
        if not isinstance(other, ColorCorrectionState):
            return NotImplemented
        return (self._response == other._response
                and self._temperature == other._temperature
                and self._curve == other._curve)

    def __repr__(self):
        if self._curve is not None:
            mode = f"curve[{len(self._curve)}]"
        else:
            mode = f"response={self._response}"
        return f"ColorCorrectionState({mode}, temperature={self._temperature})"


class ColorCorrector:
    """Applies a ColorCorrectionState to 8-bit colors"""

    @staticmethod
    def apply(pixels, state: ColorCorrectionState) -> np.ndarray:
        """
        Correct a batch of colors.

        Args:
            pixels: (N, 3) RGB or (N, 4) RGBA values in 0..255
            state: Correction parameters

        Returns:
            np.ndarray: uint8 array with the same shape, alpha untouched
        """
        arr = np.asarray(pixels, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] not in (3, 4):
            raise InvalidArgumentError(f"Expected (N, 3) or (N, 4) colors, got shape {arr.shape}")

        rgb = arr[:, :3] / DMX_MAX_VALUE

        # Asymmetric shift: cooler pulls red harder, warmer pulls blue harder
        t = state.temperature
        if t > 0:
            rgb[:, 0] -= t * 0.2
            rgb[:, 2] += t * 0.1
        elif t < 0:
            rgb[:, 0] += t * 0.1
            rgb[:, 2] -= t * 0.2

        np.clip(rgb, 0.0, 1.0, out=rgb)

        curve = state.custom_curve
        if curve is not None:
            lut = np.asarray(curve, dtype=np.float64)
            index = np.floor(rgb * (len(lut) - 1) + 0.5).astype(np.intp)
            rgb = lut[index]
        else:
            rgb = np.power(rgb, state.response)

        np.clip(rgb, 0.0, 1.0, out=rgb)
        scaled = np.clip(np.floor(rgb * DMX_MAX_VALUE + 0.5), 0, DMX_MAX_VALUE)

        out = np.empty(arr.shape, dtype=np.uint8)
        out[:, :3] = scaled
        if arr.shape[1] == 4:
            out[:, 3] = np.clip(arr[:, 3], 0, DMX_MAX_VALUE)
        return out

    @staticmethod
    def correct(color: Sequence[int], state: ColorCorrectionState) -> Tuple[int, ...]:
        """Correct one (r, g, b) or (r, g, b, a) color."""
        return tuple(int(v) for v in ColorCorrector.apply([color], state)[0])
