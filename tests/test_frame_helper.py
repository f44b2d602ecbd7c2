"""Tests for the frame helper status-code surface."""

from __future__ import annotations

import numpy as np
import pytest

from app.frame_helper import FrameHelper
from capture import pack_color, pack_depth
from colorize import DepthColorMap
from contracts import INVALID_DEPTH, FrameStatus, RawFrameBuffer, Resolution
from track import OpticalFlowTracker, TemporalDeltaTracker

RES = Resolution.RES_80x60


@pytest.fixture
def helper() -> FrameHelper:
    return FrameHelper(depth_resolution=RES, color_resolution=RES)


def depth_frame(value: int) -> np.ndarray:
    return np.full((60, 80), value, dtype=np.uint16)


class TestNoData:
    def test_color_before_first_frame(self, helper):
        out = np.full((60, 80, 4), 3, dtype=np.uint8)

        assert helper.get_color_data(out) is FrameStatus.NO_DATA
        assert np.all(out == 3)

    def test_depth_before_first_frame(self, helper):
        out = np.full((60, 80), 3, dtype=np.uint16)

        assert helper.get_depth_data(out) is FrameStatus.NO_DATA
        assert np.all(out == 3)

    def test_delta_path_reports_no_data_without_count(self, helper):
        tracker = TemporalDeltaTracker()
        out = np.full((60, 80, 4), 3, dtype=np.uint8)

        result = helper.get_depth_delta_as_rgba(out, tracker)

        assert result.status is FrameStatus.NO_DATA
        assert result.anomaly_count is None
        assert tracker.state.frames_seen == 0
        assert np.all(out == 3)

    def test_zero_pitch_after_frames(self, helper):
        helper.update_depth_frame(pack_depth(depth_frame(10), RES))
        helper.update_depth_frame(RawFrameBuffer(data=b"", pitch=0, resolution=RES))

        assert helper.get_depth_data(helper.allocate_depth_matrix()) is FrameStatus.NO_DATA

    def test_tracking_reports_no_data(self, helper):
        result = helper.track_depth_features(OpticalFlowTracker())

        assert result.status is FrameStatus.NO_DATA
        assert result.num_points == 0


class TestConversions:
    def test_color_round_trip_with_pitch(self, helper):
        image = np.random.default_rng(0).integers(0, 256, size=(60, 80, 4), dtype=np.uint8)
        helper.update_color_frame(pack_color(image, RES, padding=8))
        out = helper.allocate_color_matrix()

        assert helper.get_color_data(out) is FrameStatus.SUCCESS
        np.testing.assert_array_equal(out, image)

    def test_depth_as_rgba(self, helper):
        depth = depth_frame(1000 << 3)
        depth[0, :] = INVALID_DEPTH
        helper.update_depth_frame(pack_depth(depth, RES, padding=4))
        out = helper.allocate_depth_rgba_matrix()

        assert helper.get_depth_data_as_rgba(out) is FrameStatus.SUCCESS
        assert np.all(out[0] == 0)
        assert np.all(out[1:, :, 3] == 1)

    def test_wrong_output_is_invalid_argument(self, helper):
        helper.update_depth_frame(pack_depth(depth_frame(5), RES))

        assert helper.get_depth_data(np.zeros((80, 60), dtype=np.uint16)) is FrameStatus.INVALID_ARGUMENT
        assert helper.get_depth_data_as_rgba(np.zeros((60, 80, 3), dtype=np.uint8)) is FrameStatus.INVALID_ARGUMENT

    def test_delta_path_rejects_output_without_consuming_frame(self, helper):
        tracker = TemporalDeltaTracker()
        helper.update_depth_frame(pack_depth(depth_frame(5), RES))

        result = helper.get_depth_delta_as_rgba(np.zeros((60, 80, 3), dtype=np.uint8), tracker)

        assert result.status is FrameStatus.INVALID_ARGUMENT
        assert result.anomaly_count is None
        assert tracker.state.frames_seen == 0

    def test_delta_path_returns_count(self, helper):
        colormap = DepthColorMap.from_function(lambda v: (255, 255, 255) if v == 0 else (0, 0, 0))
        tracker = TemporalDeltaTracker(colormap=colormap)
        out = helper.allocate_depth_rgba_matrix()

        results = []
        for value in (0, 0, 0, 40, 40, 40):
            helper.update_depth_frame(pack_depth(depth_frame(value), RES, padding=2))
            results.append(helper.get_depth_delta_as_rgba(out, tracker))

        assert all(r.ok for r in results)
        assert results[-1].anomaly_count == 60 * 80
        assert results[-1].warmed_up

    def test_track_depth_features(self, helper):
        depth = np.zeros((60, 80), dtype=np.uint16)
        depth[20:40, 30:50] = 200 << 8
        helper.update_depth_frame(pack_depth(depth, RES))

        result = helper.track_depth_features(OpticalFlowTracker())

        assert result.ok
        assert 1 <= result.num_points <= 20


class TestVerifySize:
    @pytest.mark.parametrize("resolution", list(Resolution))
    def test_matches(self, helper, resolution):
        width, height = resolution.size

        assert helper.verify_size(np.zeros((height, width)), resolution) is FrameStatus.SUCCESS
        assert helper.verify_size(np.zeros((width, height)), resolution) is FrameStatus.INVALID_ARGUMENT
