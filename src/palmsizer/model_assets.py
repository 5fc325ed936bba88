from __future__ import annotations

import logging
import os
import ssl
import urllib.request

import certifi

logger = logging.getLogger(__name__)


HAND_LANDMARKER_TASK_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"
)

DEFAULT_MODEL_PATH = os.path.join("models", "hand_landmarker.task")


def ensure_hand_landmarker_task(
    model_path: str = DEFAULT_MODEL_PATH, *, url: str = HAND_LANDMARKER_TASK_URL, timeout_s: int = 30
) -> str:
    """
    Ensure `hand_landmarker.task` exists at `model_path`, downloading it if missing.

    Only needed by the MediaPipe Tasks backend.
    """

    if os.path.exists(model_path) and os.path.getsize(model_path) > 0:
        return model_path

    os.makedirs(os.path.dirname(model_path) or ".", exist_ok=True)
    tmp_path = model_path + ".part"

    # certifi avoids CERTIFICATE_VERIFY_FAILED on Python builds without a system CA store.
    ctx = ssl.create_default_context(cafile=certifi.where())
    logger.info("Downloading hand landmarker model to %s", model_path)
    try:
        with urllib.request.urlopen(url, context=ctx, timeout=timeout_s) as r, open(tmp_path, "wb") as f:
            f.write(r.read())
        os.replace(tmp_path, model_path)
    except OSError as e:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise RuntimeError(
            "Missing MediaPipe Tasks model file and auto-download failed.\n\n"
            f"Expected model at: {model_path}\n"
            f"URL: {url}\n\n"
            "Download it manually:\n"
            f'  mkdir -p "{os.path.dirname(model_path) or "."}"\n'
            f'  curl -L -o "{model_path}" "{url}"\n'
        ) from e

    return model_path
