"""
Test the end-to-end output manager
"""
import numpy as np
import pytest

from canvasdmx.color.color_correction import ColorCorrectionState
from canvasdmx.core.config import get_default_config
from canvasdmx.exceptions import ConfigError
from canvasdmx.mapping.led_map import LedMap
from canvasdmx.output.channel_pattern import ChannelLayout
from canvasdmx.output.output_manager import OutputManager
from canvasdmx.output.pixel_sampler import FaultKind
from canvasdmx.output.sender import RecordingSender


class TestOutputManager:

    @pytest.fixture
    def manager(self):
        led_map = LedMap(4, 2)
        led_map.set_led(0, 1, 0)
        led_map.set_led(1, 3, 1)
        return OutputManager(led_map, layout=ChannelLayout("drgb", 1, {"d": 255}))

    @pytest.fixture
    def frame(self):
        frame = np.zeros((2, 4, 3), dtype=np.uint8)
        frame[0, 1] = [10, 20, 30]
        frame[1, 3] = [40, 50, 60]
        return frame

    def test_build_dmx_frame(self, manager, frame):
        dmx = manager.build_dmx_frame(frame)
        assert len(dmx) == 512
        assert dmx[:9].tolist() == [255, 10, 20, 30, 255, 40, 50, 60, 0]
        assert manager.last_frame is dmx
        assert manager.frame_count == 1

    def test_custom_frame_length(self, manager, frame):
        assert manager.build_dmx_frame(frame, frame_length=5).tolist() == [255, 10, 20, 30, 255]

    def test_send_to_dmx(self, manager, frame):
        sender = RecordingSender()
        assert manager.send_to_dmx(sender, frame) == 8
        assert sender.pairs[:4] == [(1, 255), (2, 10), (3, 20), (4, 30)]
        assert manager.frame_count == 1

    def test_led_colors_uses_state(self, manager, frame):
        manager.state.set_custom_curve([0.0, 1.0])
        result = manager.led_colors(frame)
        assert result.colors.tolist() == [[0, 0, 0], [0, 0, 0]]

    def test_diagnostics_kept(self, manager):
        manager.build_dmx_frame(np.zeros((4, 3), dtype=np.uint8))
        assert [f.kind for f in manager.last_diagnostics] == [FaultKind.OUT_OF_BOUNDS]
        assert manager.get_stats()["faults"] == 1

    def test_set_layout(self, manager, frame):
        manager.set_layout(ChannelLayout("bgr", 1))
        assert manager.build_dmx_frame(frame, frame_length=3).tolist() == [30, 20, 10]

    def test_stats(self, manager):
        stats = manager.get_stats()
        assert stats["leds"] == 2
        assert stats["channels"] == 8
        assert stats["universes"] == 1


class TestFromConfig:

    def test_default_config(self):
        manager = OutputManager.from_config(get_default_config())
        assert manager.led_map.canvas_width == 1024
        assert manager.layout.pattern == "rgb"
        assert manager.frame_length == 512
        assert manager.state == ColorCorrectionState()

    def test_full_config(self):
        config = get_default_config()
        config["output"].update({"channel_pattern": "drgbs", "start_channel": 10,
                                 "default_values": {"d": 200, "s": 5}, "frame_length": 64})
        config["correction"] = {"response": 2.0, "temperature": -0.5, "custom_curve": [0.0, 0.5, 1.0]}
        manager = OutputManager.from_config(config)
        assert manager.layout == ChannelLayout("drgbs", 10, {"d": 200, "s": 5})
        assert manager.state.custom_curve == (0.0, 0.5, 1.0)
        assert manager.frame_length == 64

    def test_invalid_config_raises(self):
        config = get_default_config()
        config["output"]["default_values"] = {"r": 10}
        with pytest.raises(ConfigError) as exc_info:
            OutputManager.from_config(config)
        assert any("color channel" in e for e in exc_info.value.errors)
