from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import cv2
import numpy as np

from .display import format_summary
from .types import (
    PALM_LENGTH_PAIR,
    PALM_WIDTH_PAIR,
    AggregateSummary,
    CalibratedMeasurement,
    HandLandmark,
    ReferenceBox,
)
from .utils import format_optional, midpoint


HAND_CONNECTIONS: List[Tuple[int, int]] = [
    # thumb
    (0, 1),
    (1, 2),
    (2, 3),
    (3, 4),
    # index
    (0, 5),
    (5, 6),
    (6, 7),
    (7, 8),
    # middle
    (5, 9),
    (9, 10),
    (10, 11),
    (11, 12),
    # ring
    (9, 13),
    (13, 14),
    (14, 15),
    (15, 16),
    # pinky
    (13, 17),
    (17, 18),
    (18, 19),
    (19, 20),
    # palm base
    (0, 17),
]


def draw_bbox(frame, bbox_px: Tuple[int, int, int, int], color=(0, 255, 0), thickness=2):
    x0, y0, x1, y1 = bbox_px
    cv2.rectangle(frame, (x0, y0), (x1, y1), color, thickness)
    return frame


def draw_text(frame, text: str, org: Tuple[int, int], color=(255, 255, 255), scale=0.6, thickness=2):
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), thickness + 2, cv2.LINE_AA)
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)
    return frame


def draw_polyline(frame, points: Iterable[Tuple[int, int]], color=(255, 255, 0), thickness=2, closed=False):
    pts = np.array([(int(x), int(y)) for x, y in points], dtype=np.int32)
    if pts.shape[0] < 2:
        return frame
    cv2.polylines(frame, [pts], closed, color, thickness)
    return frame


def draw_hand(frame, landmarks: Sequence[HandLandmark]):
    """Skeleton lines in lime, joints in red."""
    n = len(landmarks)
    for a, b in HAND_CONNECTIONS:
        if a < n and b < n:
            p0 = (landmarks[a].x_px, landmarks[a].y_px)
            p1 = (landmarks[b].x_px, landmarks[b].y_px)
            cv2.line(frame, p0, p1, (0, 255, 0), 2, cv2.LINE_AA)
    for lm in landmarks:
        cv2.circle(frame, (lm.x_px, lm.y_px), 3, (0, 0, 255), -1, lineType=cv2.LINE_AA)
    return frame


def draw_palm_spans(frame, landmarks: Sequence[HandLandmark], calibrated: Optional[CalibratedMeasurement] = None):
    """Highlight the 5-17 and 0-9 spans, labelled with this frame's mm values when available."""
    if len(landmarks) <= max(PALM_WIDTH_PAIR + PALM_LENGTH_PAIR):
        return frame

    width_mm = calibrated.palm_width_mm if calibrated is not None else None
    length_mm = calibrated.palm_length_mm if calibrated is not None else None
    spans = [
        (PALM_WIDTH_PAIR, (255, 0, 255), width_mm),
        (PALM_LENGTH_PAIR, (255, 128, 0), length_mm),
    ]
    for (a, b), color, value_mm in spans:
        p0 = (landmarks[a].x_px, landmarks[a].y_px)
        p1 = (landmarks[b].x_px, landmarks[b].y_px)
        draw_polyline(frame, [p0, p1], color=color, thickness=3)
        mx, my = midpoint(p0, p1)
        draw_text(frame, f"{format_optional(value_mm, 1)} mm", (mx + 6, my - 6), color=color, scale=0.5, thickness=1)
    return frame


def draw_reference_box(frame, box: ReferenceBox, pixels_per_mm: Optional[float] = None):
    draw_bbox(frame, box.bbox_px, color=(0, 255, 0), thickness=3)
    x0, y0, _, _ = box.bbox_px
    label = "card"
    if pixels_per_mm is not None:
        label = f"card {pixels_per_mm:.3f} px/mm"
    draw_text(frame, label, (x0, max(0, y0 - 8)), color=(0, 255, 0), scale=0.5, thickness=1)
    return frame


def draw_summary(frame, summary: AggregateSummary, origin: Tuple[int, int] = (12, 28)):
    x, y = origin
    for i, line in enumerate(format_summary(summary)):
        draw_text(frame, line, (x, y + i * 26))
    return frame
