"""
Test channel layouts and the channel pattern compiler
"""
import copy
import pickle

import numpy as np
import pytest

from canvasdmx.exceptions import InvalidArgumentError
from canvasdmx.output.channel_pattern import ChannelLayout, ChannelPatternCompiler
from canvasdmx.output.sender import RecordingSender


class TestChannelLayout:

    def test_empty_pattern_rejected(self):
        with pytest.raises(InvalidArgumentError):
            ChannelLayout("")

    def test_negative_start_rejected(self):
        with pytest.raises(InvalidArgumentError):
            ChannelLayout("rgb", -1)

    def test_default_keys_single_character(self):
        with pytest.raises(InvalidArgumentError):
            ChannelLayout("drgb", 1, {"dim": 255})

    def test_default_values_clamped(self):
        layout = ChannelLayout("drgbs", 1, {"d": 300, "s": -5})
        assert dict(layout.defaults) == {"d": 255, "s": 0}

    def test_defaults_read_only(self):
        layout = ChannelLayout("drgb", 1, {"d": 255})
        with pytest.raises(TypeError):
            layout.defaults["d"] = 0

    def test_with_default_returns_new_layout(self):
        layout = ChannelLayout("drgb", 1)
        dimmed = layout.with_default("d", 128)
        assert dimmed.defaults["d"] == 128
        assert "d" not in layout.defaults

    def test_equality_and_hash(self):
        a = ChannelLayout("drgb", 1, {"d": 255})
        b = ChannelLayout("drgb", 1, {"d": 255})
        assert a == b
        assert hash(a) == hash(b)

    def test_copy_and_pickle(self):
        layout = ChannelLayout("drgb", 1, {"d": 200})
        for clone in (copy.copy(layout), copy.deepcopy(layout),
                      pickle.loads(pickle.dumps(layout))):
            assert clone == layout
            assert dict(clone.defaults) == {"d": 200}
            with pytest.raises(TypeError):
                clone.defaults["d"] = 0

    def test_channel_counting(self):
        layout = ChannelLayout("rgb", 1)
        assert layout.channels_per_led == 3
        assert layout.first_channel(2) == 7
        assert layout.channel_count(170) == 510
        assert layout.universe_count(170) == 1
        assert layout.universe_count(171) == 2
        assert layout.universe_count(0) == 0


class TestChannelPatternCompiler:
    """emit() and build_frame() share the same values"""

    @pytest.fixture
    def layout(self):
        return ChannelLayout("drgb", 1, {"d": 255})

    def test_emit_single_led(self, layout):
        sender = RecordingSender()
        assert ChannelPatternCompiler.emit([(10, 20, 30)], layout, sender) == 4
        assert sender.pairs == [(1, 255), (2, 10), (3, 20), (4, 30)]

    def test_frame_drops_channels_past_end(self, layout):
        frame = ChannelPatternCompiler.build_frame([(10, 20, 30)], layout, 3)
        assert frame.tolist() == [255, 10, 20]
        assert frame.dtype == np.uint8

    def test_channels_strictly_ascending(self, layout):
        colors = np.array([[1, 2, 3], [4, 5, 6], [7, 8, 9]], dtype=np.uint8)
        channels = [c for c, _ in ChannelPatternCompiler.iter_channels(colors, layout)]
        assert channels == list(range(1, 13))

    def test_emit_matches_frame(self, layout):
        colors = [(1, 2, 3), (4, 5, 6)]
        sender = RecordingSender()
        ChannelPatternCompiler.emit(colors, layout, sender)
        assert np.array_equal(sender.to_frame(), ChannelPatternCompiler.build_frame(colors, layout))

    def test_out_of_range_colors_clamped_the_same_way(self):
        layout = ChannelLayout("rgb", 1)
        colors = [(300, -5, 10)]
        sender = RecordingSender()
        ChannelPatternCompiler.emit(colors, layout, sender)
        assert sender.pairs == [(1, 255), (2, 0), (3, 10)]
        assert ChannelPatternCompiler.build_frame(colors, layout, 3).tolist() == [255, 0, 10]
        assert ChannelPatternCompiler.resolve_values(colors[0], layout) == (255, 0, 10)

    def test_unknown_character_defaults_to_zero(self):
        layout = ChannelLayout("rxg", 1)
        assert ChannelPatternCompiler.resolve_values((9, 8, 7), layout) == (9, 0, 8)

    def test_start_channel_zero_drops_first_value(self):
        frame = ChannelPatternCompiler.build_frame([(1, 2, 3)], ChannelLayout("rgb", 0), 4)
        assert frame.tolist() == [2, 3, 0, 0]

    def test_full_universe_frame(self):
        frame = ChannelPatternCompiler.build_frame([(1, 2, 3), (4, 5, 6)], ChannelLayout("rgb", 1))
        assert len(frame) == 512
        assert frame[:7].tolist() == [1, 2, 3, 4, 5, 6, 0]
        assert not frame[6:].any()

    def test_frame_beyond_universe(self):
        # LED 0 lands on channels 511..513; only 511 and 512 fit
        frame = ChannelPatternCompiler.build_frame([(7, 8, 9)], ChannelLayout("rgb", 511))
        assert frame[-2:].tolist() == [7, 8]

    def test_empty_colors(self, layout):
        assert not ChannelPatternCompiler.build_frame([], layout, 8).any()
        assert ChannelPatternCompiler.emit([], layout, RecordingSender()) == 0

    def test_no_sender(self, layout):
        assert ChannelPatternCompiler.emit([(1, 2, 3)], layout, None) == 0

    def test_invalid_frame_length(self, layout):
        with pytest.raises(InvalidArgumentError):
            ChannelPatternCompiler.build_frame([(1, 2, 3)], layout, 0)

    def test_flatten_to_dmx(self, layout):
        frame = ChannelPatternCompiler.build_frame([(10, 20, 30)], layout, 4)
        assert ChannelPatternCompiler.flatten_to_dmx(frame) == bytes([255, 10, 20, 30])
