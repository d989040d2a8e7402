"""
Settings Codec

Line-oriented text form of a ColorCorrectionState:

    <response exponent>
    <temperature>
    <curve value 0>
    <curve value 1>
    ...

No curve lines means the exponent is active. Floats are written with repr()
so that decode(encode(state)) restores the exact same values. The codec
works on strings and host-supplied text streams; it never opens files.
"""

import math
from typing import List, Optional, TextIO

from .color_correction import ColorCorrectionState
from ..constants import MIN_CURVE_LENGTH
from ..core.logger import DebugCategories, get_logger
from ..exceptions import SettingsParseError

logger = get_logger(__name__)


def encode(state: ColorCorrectionState) -> str:
    """Serialize a state to settings text (newline terminated)."""
    lines = [repr(float(state.response)), repr(float(state.temperature))]
    if state.custom_curve is not None:
        lines.extend(repr(float(v)) for v in state.custom_curve)
    return '\n'.join(lines) + '\n'


def _parse_value(line: str, line_number: int) -> float:
    stripped = line.strip()
    if not stripped:
        raise SettingsParseError("Blank line in settings", line_number, line)
    try:
        value = float(stripped)
    except ValueError:
        raise SettingsParseError(f"Not a number: {stripped!r}", line_number, line) from None
    if not math.isfinite(value):
        raise SettingsParseError(f"Value must be finite: {stripped!r}", line_number, line)
    return value


def decode(text: str, base: Optional[ColorCorrectionState] = None) -> ColorCorrectionState:
    """
    Parse settings text into a new state.

    The whole text is parsed before anything is built, so a failure never
    yields a half-applied state.

    Args:
        text: Settings text
        base: State supplying values for lines that are absent (temperature)

    Returns:
        ColorCorrectionState: New state; base is not modified

    Raises:
        SettingsParseError: Empty text, malformed or non-finite values,
            blank interior lines, or a curve with a single value
    """
    lines: List[str] = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()

    if not lines:
        raise SettingsParseError("Settings text is empty")

    values = [_parse_value(line, number) for number, line in enumerate(lines, start=1)]

    curve = values[2:]
    if curve and len(curve) < MIN_CURVE_LENGTH:
        raise SettingsParseError(
            f"Custom curve needs at least {MIN_CURVE_LENGTH} values, got {len(curve)}",
            line_number=3, line=lines[2],
        )

    state = base.copy() if base is not None else ColorCorrectionState()
    state.set_response(values[0])
    if len(values) > 1:
        state.set_temperature(values[1])
    state.set_custom_curve(curve or None)

    if DebugCategories.is_enabled(DebugCategories.SETTINGS):
        logger.debug(f"Decoded settings: {state!r}")
    return state


def apply_settings(text: str, state: ColorCorrectionState) -> ColorCorrectionState:
    """
    Decode text and copy the result into an existing state.

    On SettingsParseError the state is left untouched.

    Returns:
        The same state object, updated
    """
    decoded = decode(text, base=state)
    state.set_temperature(decoded.temperature)
    state.set_response(decoded.response)
    state.set_custom_curve(decoded.custom_curve)
    return state


def dump(state: ColorCorrectionState, fp: TextIO):
    """Write settings text to an open text stream."""
    fp.write(encode(state))


def load(fp: TextIO, base: Optional[ColorCorrectionState] = None) -> ColorCorrectionState:
    """Read settings text from an open text stream."""
    return decode(fp.read(), base=base)
