from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import cv2

from .model_assets import DEFAULT_MODEL_PATH, ensure_hand_landmarker_task
from .types import HandLandmark
from .utils import to_pixel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _SolutionsBackend:
    hands: object


@dataclass(frozen=True)
class _TasksBackend:
    mp: object
    landmarker: object


def _try_create_solutions_backend(
    static_image_mode: bool,
    model_complexity: int,
    min_detection_confidence: float,
    min_tracking_confidence: float,
) -> Optional[_SolutionsBackend]:
    import mediapipe as mp  # type: ignore

    if not hasattr(mp, "solutions"):
        return None
    hands = mp.solutions.hands.Hands(
        static_image_mode=static_image_mode,
        max_num_hands=1,
        model_complexity=model_complexity,
        min_detection_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _SolutionsBackend(hands=hands)


def _try_create_tasks_backend(
    model_path: str,
    static_image_mode: bool,
    min_detection_confidence: float,
    min_tracking_confidence: float,
) -> _TasksBackend:
    """MediaPipe Tasks HandLandmarker, for builds that ship without `mp.solutions`."""

    import mediapipe as mp  # type: ignore
    from mediapipe.tasks.python import BaseOptions  # type: ignore
    from mediapipe.tasks.python.vision import HandLandmarker, HandLandmarkerOptions, RunningMode  # type: ignore

    model_path = ensure_hand_landmarker_task(model_path)

    options = HandLandmarkerOptions(
        base_options=BaseOptions(model_asset_path=model_path),
        running_mode=RunningMode.IMAGE if static_image_mode else RunningMode.VIDEO,
        num_hands=1,
        min_hand_detection_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _TasksBackend(mp=mp, landmarker=HandLandmarker.create_from_options(options))


def landmarks_from_normalized(points: Iterable, w: int, h: int) -> List[HandLandmark]:
    """Wrap raw normalized landmarks (objects with .x/.y[/.z]) as `HandLandmark`s."""
    out: List[HandLandmark] = []
    for idx, lm in enumerate(points):
        x = float(lm.x)
        y = float(lm.y)
        x_px, y_px = to_pixel(x, y, w, h)
        out.append(HandLandmark(idx=idx, x=x, y=y, z=float(getattr(lm, "z", 0.0)), x_px=x_px, y_px=y_px))
    return out


class HandLandmarkDetector:
    """
    Single-hand landmark source backed by MediaPipe Hands.

    Input frames are expected as **BGR** images (OpenCV default). `detect()`
    returns the 21 landmarks of the first detected hand, or an empty list.
    """

    def __init__(
        self,
        static_image_mode: bool = False,
        model_complexity: int = 1,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
        tasks_model_path: str = DEFAULT_MODEL_PATH,
    ) -> None:
        self._static_image_mode = static_image_mode
        self._solutions = _try_create_solutions_backend(
            static_image_mode=static_image_mode,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )
        self._tasks: Optional[_TasksBackend] = None
        self._tasks_timestamp_ms = 0

        if self._solutions is None:
            try:
                self._tasks = _try_create_tasks_backend(
                    model_path=tasks_model_path,
                    static_image_mode=static_image_mode,
                    min_detection_confidence=min_detection_confidence,
                    min_tracking_confidence=min_tracking_confidence,
                )
            except (ImportError, AttributeError) as e:
                raise RuntimeError(
                    "Could not initialize MediaPipe Hands.\n"
                    "Your installed `mediapipe` package exposes neither `mp.solutions` nor the Tasks\n"
                    "HandLandmarker API. Reinstall a current `mediapipe` release."
                ) from e
            logger.info("Hand detector using MediaPipe Tasks backend (%s)", tasks_model_path)
        else:
            logger.info("Hand detector using MediaPipe Solutions backend")

    def close(self) -> None:
        if self._solutions is not None:
            self._solutions.hands.close()
        if self._tasks is not None:
            self._tasks.landmarker.close()
        logger.info("Hand detector closed")

    def __enter__(self) -> "HandLandmarkDetector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def detect(self, frame_bgr) -> List[HandLandmark]:
        h, w = frame_bgr.shape[:2]
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        if self._solutions is not None:
            results = self._solutions.hands.process(frame_rgb)
            if not results.multi_hand_landmarks:
                return []
            return landmarks_from_normalized(results.multi_hand_landmarks[0].landmark, w, h)

        if self._tasks is None:
            return []

        mp = self._tasks.mp
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)
        if self._static_image_mode:
            result = self._tasks.landmarker.detect(mp_image)
        else:
            # VIDEO mode requires monotonically increasing timestamps.
            self._tasks_timestamp_ms += 33
            result = self._tasks.landmarker.detect_for_video(mp_image, self._tasks_timestamp_ms)

        hand_landmarks_list = getattr(result, "hand_landmarks", None) or []
        if not hand_landmarks_list:
            return []
        return landmarks_from_normalized(hand_landmarks_list[0], w, h)
