from __future__ import annotations

import argparse
import logging
import os
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from palmsizer.detector import HandLandmarkDetector  # noqa: E402
from palmsizer.display import format_history_table, format_summary  # noqa: E402
from palmsizer.drawing import draw_hand, draw_palm_spans, draw_reference_box, draw_summary  # noqa: E402
from palmsizer.pipeline import HandSizeEstimator  # noqa: E402
from palmsizer.reference_detector import ReferenceObjectDetector  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Measure a hand in a still image with a credit card for scale.")
    ap.add_argument("--image", required=True, help="Path to input image")
    ap.add_argument("--out", required=True, help="Path to output image (annotated)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    frame = cv2.imread(args.image)
    if frame is None:
        raise RuntimeError(f"Could not read image: {args.image}")
    h, w = frame.shape[:2]

    with HandLandmarkDetector(static_image_mode=True) as detector:
        landmarks = detector.detect(frame)
    box = ReferenceObjectDetector().detect(frame)

    estimator = HandSizeEstimator()
    result = estimator.process_frame(landmarks, box, w, h)

    if landmarks:
        draw_hand(frame, landmarks)
        draw_palm_spans(frame, landmarks, result.calibrated)
    if box is not None:
        draw_reference_box(frame, box, result.calibration.pixels_per_mm if result.calibration else None)
    draw_summary(frame, result.summary)

    ok = cv2.imwrite(args.out, frame)
    if not ok:
        raise RuntimeError(f"Could not write output image: {args.out}")

    print(f"hand: {'yes' if landmarks else 'no'} ({len(landmarks)} landmarks) | card: {'yes' if box else 'no'}")
    for line in format_summary(result.summary):
        print(line)
    print(format_history_table(result.history))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
