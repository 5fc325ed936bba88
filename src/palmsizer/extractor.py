"""Pixel-space palm spans from normalized hand landmarks."""

from __future__ import annotations

import logging

from .errors import InsufficientLandmarks
from .types import MIN_LANDMARKS, PALM_LENGTH_PAIR, PALM_WIDTH_PAIR, FrameMeasurement, LandmarkSet
from .utils import euclidean

logger = logging.getLogger(__name__)


def landmark_distance_px(a, b, frame_width: float, frame_height: float) -> float:
    """
    Euclidean distance between two normalized landmarks, in pixels.

    x is scaled by the frame width and y by the frame height. (An early version
    of this computation scaled one y term by the width; that was a bug.)
    """

    dx = (float(b.x) - float(a.x)) * frame_width
    dy = (float(b.y) - float(a.y)) * frame_height
    return euclidean(dx, dy)


def extract_frame_distances(landmarks: LandmarkSet, frame_width: int, frame_height: int) -> FrameMeasurement:
    """
    Compute the palm width (5-17) and palm length (0-9) spans for one frame.

    Raises `InsufficientLandmarks` when fewer than 18 landmarks are present.
    """

    if frame_width <= 0 or frame_height <= 0:
        raise ValueError(f"Frame size must be positive, got {frame_width}x{frame_height}")

    count = len(landmarks) if landmarks is not None else 0
    if count < MIN_LANDMARKS:
        raise InsufficientLandmarks(count, MIN_LANDMARKS)

    a, b = PALM_WIDTH_PAIR
    palm_width_px = landmark_distance_px(landmarks[a], landmarks[b], frame_width, frame_height)
    a, b = PALM_LENGTH_PAIR
    palm_length_px = landmark_distance_px(landmarks[a], landmarks[b], frame_width, frame_height)

    logger.debug("palm spans: width=%.2fpx length=%.2fpx", palm_width_px, palm_length_px)
    return FrameMeasurement(palm_width_px=palm_width_px, palm_length_px=palm_length_px)
