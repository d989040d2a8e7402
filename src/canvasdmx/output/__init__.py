"""
Sampling, channel compilation and DMX senders
"""
from .channel_pattern import ChannelLayout, ChannelPatternCompiler
from .output_manager import OutputManager
from .pixel_sampler import FaultKind, PixelSampler, SampleResult, SamplingFault
from .sender import CallbackSender, DmxSender, NullSender, RecordingSender

__all__ = ['ChannelLayout', 'ChannelPatternCompiler', 'OutputManager',
           'FaultKind', 'PixelSampler', 'SampleResult', 'SamplingFault',
           'CallbackSender', 'DmxSender', 'NullSender', 'RecordingSender']
