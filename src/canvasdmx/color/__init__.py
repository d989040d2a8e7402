"""
Color correction and its settings text format
"""
from . import settings_codec
from .color_correction import ColorCorrectionState, ColorCorrector

__all__ = ['ColorCorrectionState', 'ColorCorrector', 'settings_codec']
