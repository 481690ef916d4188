"""
Synthetic hand samples and fake collaborators shared by the tests.
"""
from typing import List, Optional, Sequence

import numpy as np

from handscreen.errors import CameraError
from handscreen.types import Hand, Sample, hand_from_points


def make_hand(wrist_x: float = 0.5, wrist_y: float = 0.5, offset: float = 0.0,
              points: int = 21) -> Hand:
    """
    Create a hand whose landmarks fan out from the wrist.

    Every landmark (wrist included) is shifted by `offset` on x and y.
    """
    return hand_from_points([
        (wrist_x + offset + 0.01 * i, wrist_y + offset - 0.015 * i, -0.001 * i)
        for i in range(points)
    ])


def make_sample(timestamp_ms: int, hand: Optional[Hand] = None, labels=("Right",)) -> Sample:
    if hand is None:
        return Sample(timestamp_ms=timestamp_ms, landmark_sets=(), labels=frozenset())
    return Sample(timestamp_ms=timestamp_ms, landmark_sets=(hand,), labels=frozenset(labels))


def identical_samples(n: int, wrist_y: float = 0.5, spacing_ms: int = 33) -> List[Sample]:
    hand = make_hand(wrist_y=wrist_y)
    return [make_sample(1_000 + i * spacing_ms, hand) for i in range(n)]


def moving_samples(n: int, step: float, spacing_ms: int = 33) -> List[Sample]:
    """Each frame shifts the whole hand by `step` along x and y."""
    return [make_sample(1_000 + i * spacing_ms, make_hand(offset=i * step)) for i in range(n)]


class FakeClock:
    """Manually advanced clock in seconds."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCamera:
    """Camera that yields blank frames and counts releases."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.open_count = 0
        self.release_count = 0
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def open(self) -> None:
        self.open_count += 1
        if self.fail:
            raise CameraError("Failed to access webcam. Please grant permission.")
        self._active = True

    def read(self):
        if not self._active:
            return None
        return np.zeros((48, 64, 3), dtype=np.uint8)

    def release(self) -> None:
        self.release_count += 1
        self._active = False


class FakeLandmarkSource:
    """Detector that replays a script of hands, one entry per call, then repeats the last."""

    def __init__(self, script: Sequence[Optional[Hand]] = (), ready: bool = True,
                 error_after: Optional[int] = None):
        self.script = list(script) or [make_hand()]
        self.ready = ready
        self.error_after = error_after
        self.calls = 0
        self.timestamps: List[int] = []
        self.closed = False

    @property
    def is_ready(self) -> bool:
        return self.ready

    async def initialize(self) -> bool:
        return self.ready

    def detect(self, frame, timestamp_ms):
        if self.error_after is not None and self.calls >= self.error_after:
            raise RuntimeError("detector crashed")
        hand = self.script[min(self.calls, len(self.script) - 1)]
        self.calls += 1
        self.timestamps.append(timestamp_ms)
        if hand is None:
            return [], []
        return [hand], ["Right"]

    def close(self) -> None:
        self.closed = True
        self.ready = False
