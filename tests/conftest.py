from typing import List

import pytest

from palmsizer.types import HandLandmark
from tests.helpers import GOLDEN_POINTS, FakeClock, make_landmarks


@pytest.fixture
def golden_landmarks() -> List[HandLandmark]:
    return make_landmarks(GOLDEN_POINTS)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
