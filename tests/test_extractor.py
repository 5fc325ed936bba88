"""Tests for the pixel-space palm span extractor."""

import math

import pytest

from tests.helpers import make_landmarks
from palmsizer.errors import InsufficientLandmarks
from palmsizer.extractor import extract_frame_distances, landmark_distance_px
from palmsizer.types import HandLandmark


def _lm(x, y):
    return HandLandmark(idx=0, x=x, y=y, z=0.0, x_px=0, y_px=0)


class TestLandmarkDistance:
    @pytest.mark.parametrize(
        "p1, p2, size",
        [
            ((0.1, 0.2), (0.7, 0.9), (640, 480)),
            ((0.33, 0.81), (0.05, 0.12), (1280, 720)),
            ((0.5, 0.5), (0.5, 0.5), (1920, 1080)),
            ((0.0, 1.0), (1.0, 0.0), (320, 240)),
        ],
    )
    def test_matches_per_axis_formula_exactly(self, p1, p2, size):
        (x1, y1), (x2, y2), (w, h) = p1, p2, size
        expected = math.sqrt(((x2 - x1) * w) ** 2 + ((y2 - y1) * h) ** 2)
        assert landmark_distance_px(_lm(x1, y1), _lm(x2, y2), w, h) == expected

    def test_y_axis_uses_frame_height(self):
        # Purely vertical span: width must not leak into the result.
        d = landmark_distance_px(_lm(0.5, 0.3), _lm(0.5, 0.5), 640, 480)
        assert d == pytest.approx(96.0)

    def test_accepts_any_object_with_xy(self):
        class Raw:
            def __init__(self, x, y):
                self.x = x
                self.y = y

        assert landmark_distance_px(Raw(0.0, 0.0), Raw(0.5, 0.0), 200, 100) == pytest.approx(100.0)


class TestExtractFrameDistances:
    def test_golden_spans(self, golden_landmarks):
        m = extract_frame_distances(golden_landmarks, 640, 480)
        assert m.palm_width_px == pytest.approx(128.0)
        assert m.palm_length_px == pytest.approx(96.0)

    def test_eighteen_landmarks_is_enough(self):
        m = extract_frame_distances(make_landmarks({5: (0.1, 0.5), 17: (0.2, 0.5)}, count=18), 100, 100)
        assert m.palm_width_px == pytest.approx(10.0)

    @pytest.mark.parametrize("count", [0, 1, 17])
    def test_too_few_landmarks(self, count):
        with pytest.raises(InsufficientLandmarks) as exc_info:
            extract_frame_distances(make_landmarks(count=count), 640, 480)
        assert exc_info.value.count == count
        assert exc_info.value.required == 18

    def test_none_landmarks(self):
        with pytest.raises(InsufficientLandmarks):
            extract_frame_distances(None, 640, 480)

    @pytest.mark.parametrize("size", [(0, 480), (640, 0), (-1, 10)])
    def test_rejects_bad_frame_size(self, golden_landmarks, size):
        with pytest.raises(ValueError):
            extract_frame_distances(golden_landmarks, *size)
