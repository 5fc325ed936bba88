from __future__ import annotations

import argparse
import logging
import os
import platform
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from palmsizer.config import MeasurementConfig  # noqa: E402
from palmsizer.detector import HandLandmarkDetector  # noqa: E402
from palmsizer.display import LoggingSink, format_history_table  # noqa: E402
from palmsizer.drawing import draw_hand, draw_palm_spans, draw_reference_box, draw_summary, draw_text  # noqa: E402
from palmsizer.pipeline import HandSizeEstimator  # noqa: E402
from palmsizer.reference_detector import ReferenceObjectDetector  # noqa: E402


def build_config(args: argparse.Namespace) -> MeasurementConfig:
    return MeasurementConfig(
        reference_compensation=args.card_factor,
        palm_width_compensation=args.palm_width_factor,
        palm_length_compensation=args.palm_length_factor,
        max_history=args.max_history,
    )


def main() -> int:
    ap = argparse.ArgumentParser(description="Estimate palm width/length against a credit card held next to the hand.")
    ap.add_argument("--camera", type=int, default=0, help="Camera index (default: 0)")
    ap.add_argument("--width", type=int, default=1280, help="Capture width (best effort)")
    ap.add_argument("--height", type=int, default=720, help="Capture height (best effort)")
    ap.add_argument("--card-factor", type=float, default=0.90, help="Scale applied to the detected card box")
    ap.add_argument("--palm-width-factor", type=float, default=1.30, help="Compensation for the 5-17 span")
    ap.add_argument("--palm-length-factor", type=float, default=1.00, help="Compensation for the 0-9 span")
    ap.add_argument("--max-history", type=int, default=None, help="Average over the last N records only")
    ap.add_argument(
        "--no-mirror",
        action="store_true",
        help="Disable horizontal mirroring (default is mirrored/selfie mode)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if platform.system() == "Darwin":
        cap = cv2.VideoCapture(args.camera, cv2.CAP_AVFOUNDATION)
    else:
        cap = cv2.VideoCapture(args.camera)
    if not cap.isOpened():
        raise RuntimeError(
            f"Could not open camera index {args.camera}. "
            "On macOS: System Settings -> Privacy & Security -> Camera -> allow your terminal."
        )

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, args.width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, args.height)

    estimator = HandSizeEstimator(config=build_config(args), sinks=[LoggingSink()])
    card_detector = ReferenceObjectDetector()

    with HandLandmarkDetector() as hand_detector:
        while True:
            ok, frame = cap.read()
            if not ok:
                break

            if not args.no_mirror:
                frame = cv2.flip(frame, 1)
            h, w = frame.shape[:2]

            landmarks = hand_detector.detect(frame)
            box = card_detector.detect(frame)
            result = estimator.process_frame(landmarks, box, w, h)

            if landmarks:
                draw_hand(frame, landmarks)
                draw_palm_spans(frame, landmarks, result.calibrated)
            if box is not None:
                ppmm = result.calibration.pixels_per_mm if result.calibration is not None else None
                draw_reference_box(frame, box, ppmm)
            draw_summary(frame, result.summary)
            draw_text(
                frame,
                f"records: {len(result.history)} | h: history  r: reset  q: quit",
                (12, h - 14),
                scale=0.5,
                thickness=1,
            )

            cv2.imshow("palmsizer - hand measurement", frame)
            key = cv2.waitKey(1) & 0xFF
            if key in (ord("q"), 27):
                break
            if key == ord("h"):
                print(format_history_table(result.history))
            elif key == ord("r"):
                estimator.reset()

    cap.release()
    cv2.destroyAllWindows()
    print(format_history_table(estimator.history.newest_first()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
