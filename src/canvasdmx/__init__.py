"""
canvasdmx - canvas pixels to DMX channels
"""
# Lazy imports keep `import canvasdmx` cheap (numpy/jsonschema load on first use)
__version__ = '1.0.0'

__all__ = ['LedMap', 'PointGenerator', 'StartCorner', 'PolygonFillConfig', 'RowLayoutConfig',
           'ColorCorrectionState', 'ColorCorrector', 'settings_codec',
           'PixelSampler', 'SampleResult', 'SamplingFault', 'FaultKind',
           'ChannelLayout', 'ChannelPatternCompiler', 'DmxSender', 'NullSender',
           'CallbackSender', 'RecordingSender', 'OutputManager',
           'ConfigValidator', 'validate_points_json', 'validate_points_file', 'export_points',
           'CanvasDmxError', 'InvalidArgumentError', 'SettingsParseError', 'ConfigError',
           'get_logger', 'setup_logging']

_EXPORTS = {
    'LedMap': '.mapping.led_map',
    'PointGenerator': '.mapping.point_generator',
    'StartCorner': '.mapping.fill_config',
    'PolygonFillConfig': '.mapping.fill_config',
    'RowLayoutConfig': '.mapping.fill_config',
    'ColorCorrectionState': '.color.color_correction',
    'ColorCorrector': '.color.color_correction',
    'PixelSampler': '.output.pixel_sampler',
    'SampleResult': '.output.pixel_sampler',
    'SamplingFault': '.output.pixel_sampler',
    'FaultKind': '.output.pixel_sampler',
    'ChannelLayout': '.output.channel_pattern',
    'ChannelPatternCompiler': '.output.channel_pattern',
    'DmxSender': '.output.sender',
    'NullSender': '.output.sender',
    'CallbackSender': '.output.sender',
    'RecordingSender': '.output.sender',
    'OutputManager': '.output.output_manager',
    'ConfigValidator': '.core.config',
    'validate_points_json': '.core.validator',
    'validate_points_file': '.core.validator',
    'export_points': '.core.validator',
    'CanvasDmxError': '.exceptions',
    'InvalidArgumentError': '.exceptions',
    'SettingsParseError': '.exceptions',
    'ConfigError': '.exceptions',
    'get_logger': '.core.logger',
    'setup_logging': '.core.logger',
}


def __getattr__(name):
    if name == 'settings_codec':
        from .color import settings_codec
        return settings_codec
    if name in _EXPORTS:
        from importlib import import_module
        return getattr(import_module(_EXPORTS[name], __name__), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
