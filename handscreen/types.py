"""
Type definitions for hand pattern screening.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np


@dataclass(frozen=True)
class Landmark:
    """One tracked hand point in normalized frame coordinates."""
    x: float
    y: float
    z: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}


# 21 landmarks in MediaPipe order, index 0 is the wrist
Hand = Tuple[Landmark, ...]


@dataclass(frozen=True)
class Sample:
    """Landmarks captured from one video frame with at least one hand."""
    timestamp_ms: int  # wall-clock capture time
    landmark_sets: Tuple[Hand, ...]
    labels: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def primary_hand(self) -> Optional[Hand]:
        """First detected hand, or None when the frame held no hand."""
        return self.landmark_sets[0] if self.landmark_sets else None

    def to_dict(self) -> Dict[str, Any]:
        """JSON form stored with a finished session."""
        return {
            "timestamp": self.timestamp_ms,
            "landmarks": [[lm.to_dict() for lm in hand] for hand in self.landmark_sets],
            "gestures": sorted(self.labels),
        }


@dataclass(frozen=True)
class IndicatorSet:
    """Five 0-100 proxy signals derived from a buffer snapshot."""
    movement_speed: float
    gesture_variety: float
    hand_positioning: float
    repetitive_motions: float
    energy_level: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "movement_speed": self.movement_speed,
            "gesture_variety": self.gesture_variety,
            "hand_positioning": self.hand_positioning,
            "repetitive_motions": self.repetitive_motions,
            "energy_level": self.energy_level,
        }


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of analysing one session."""
    score: int
    indicators: IndicatorSet
    confidence: float


class SessionState(Enum):
    IDLE = "idle"
    CAPTURING = "capturing"
    ANALYZING = "analyzing"
    COMPLETED = "completed"


@dataclass(frozen=True)
class SessionRecord:
    """Row written to the remote store once per completed session."""
    depression_score: int
    detected_patterns: List[Dict[str, Any]]
    remedy_suggestions: List[str]
    session_duration: int  # seconds

    def to_row(self) -> Dict[str, Any]:
        return {
            "depression_score": self.depression_score,
            "detected_patterns": self.detected_patterns,
            "remedy_suggestions": self.remedy_suggestions,
            "session_duration": self.session_duration,
        }


@runtime_checkable
class LandmarkSourceProto(Protocol):
    """Per-frame hand landmark detector."""

    @property
    def is_ready(self) -> bool:
        ...

    async def initialize(self) -> bool:
        """Load the detector. Returns the resulting ready flag."""
        ...

    def detect(self, frame: np.ndarray, timestamp_ms: int) -> Tuple[List[Hand], List[str]]:
        """Return the hands found in the frame and one category label per hand."""
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class CameraProto(Protocol):
    """Video frame provider that holds a hardware resource while open."""

    @property
    def is_active(self) -> bool:
        ...

    def open(self) -> None:
        """Acquire the camera. Raises CameraError on failure."""
        ...

    def read(self) -> Optional[np.ndarray]:
        ...

    def release(self) -> None:
        ...


@runtime_checkable
class SessionRecorderProto(Protocol):
    """Remote sink for completed sessions."""

    async def save(self, record: SessionRecord) -> None:
        """Persist one session. Raises StorageError on failure."""
        ...


def hand_from_points(points: Sequence[Tuple[float, float, float]]) -> Hand:
    """Build a Hand from (x, y, z) tuples."""
    return tuple(Landmark(float(x), float(y), float(z)) for x, y, z in points)
