"""
LED mapping: coordinate generators and the LED -> pixel table
"""
from .fill_config import PolygonFillConfig, RowLayoutConfig, StartCorner
from .led_map import LedMap
from .point_generator import PointGenerator

__all__ = ['LedMap', 'PointGenerator', 'PolygonFillConfig', 'RowLayoutConfig', 'StartCorner']
