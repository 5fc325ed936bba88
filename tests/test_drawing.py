import numpy as np

from tests.helpers import GOLDEN_POINTS
from palmsizer.detector import landmarks_from_normalized
from palmsizer.drawing import draw_hand, draw_palm_spans, draw_reference_box, draw_summary
from palmsizer.pipeline import HandSizeEstimator
from palmsizer.types import ReferenceBox


class _Raw:
    def __init__(self, x, y):
        self.x = x
        self.y = y


def _golden_hand(w=640, h=480):
    pts = [_Raw(*GOLDEN_POINTS.get(i, (0.5, 0.5))) for i in range(21)]
    return landmarks_from_normalized(pts, w, h)


def test_overlay_draws_in_place():
    frame = np.zeros((480, 640, 3), dtype=np.uint8)
    landmarks = _golden_hand()
    box = ReferenceBox(width=300, height=189, x=20, y=20)
    result = HandSizeEstimator().process_frame(landmarks, box, 640, 480)

    out = draw_hand(frame, landmarks)
    out = draw_palm_spans(out, landmarks, result.calibrated)
    out = draw_reference_box(out, box, result.calibration.pixels_per_mm)
    out = draw_summary(out, result.summary)

    assert out is frame
    assert frame.any()


def test_palm_spans_skip_short_landmark_sets():
    frame = np.zeros((100, 100, 3), dtype=np.uint8)
    draw_palm_spans(frame, _golden_hand(100, 100)[:10])
    assert not frame.any()
