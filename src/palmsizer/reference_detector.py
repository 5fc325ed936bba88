from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np

from .types import ReferenceBox

logger = logging.getLogger(__name__)


class ReferenceObjectDetector:
    """
    Finds the reference card as the largest four-cornered contour in a BGR frame.

    Only the best candidate is returned; its axis-aligned bounding box becomes
    the frame's `ReferenceBox`.
    """

    def __init__(
        self,
        canny_low: int = 75,
        canny_high: int = 200,
        approx_epsilon: float = 0.02,
        min_area_frac: float = 0.01,
    ) -> None:
        if not (0.0 <= min_area_frac < 1.0):
            raise ValueError(f"min_area_frac must be in [0, 1), got {min_area_frac}")
        self.canny_low = canny_low
        self.canny_high = canny_high
        self.approx_epsilon = approx_epsilon
        self.min_area_frac = min_area_frac

    def find_quad(self, frame_bgr) -> Optional[np.ndarray]:
        h, w = frame_bgr.shape[:2]
        min_area = self.min_area_frac * (w * h)

        gray = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2GRAY)
        blur = cv2.GaussianBlur(gray, (5, 5), 0)
        edges = cv2.Canny(blur, self.canny_low, self.canny_high)
        contours, _ = cv2.findContours(edges, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)

        best = None
        best_area = 0.0
        for cnt in contours:
            peri = cv2.arcLength(cnt, True)
            approx = cv2.approxPolyDP(cnt, self.approx_epsilon * peri, True)
            if len(approx) != 4:
                continue
            area = cv2.contourArea(cnt)
            if area < min_area or area <= best_area:
                continue
            best_area = area
            best = approx
        return best

    def detect(self, frame_bgr) -> Optional[ReferenceBox]:
        quad = self.find_quad(frame_bgr)
        if quad is None:
            return None
        x, y, bw, bh = cv2.boundingRect(quad)
        logger.debug("reference box at (%d, %d) size %dx%d", x, y, bw, bh)
        return ReferenceBox(width=float(bw), height=float(bh), x=float(x), y=float(y))
