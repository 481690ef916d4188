"""
Heuristic indicators and scoring over a snapshot of hand landmark samples.

Every indicator is an independent pure function of the whole snapshot and
maps to 0-100, where higher means a stronger depression-style signal
(slower, less varied, lower-held, more repetitive, less energetic hands).
"""
import math
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .types import DetectionResult, IndicatorSet, Sample

MIN_SAMPLES = 10
FULL_CONFIDENCE_SAMPLES = 50
MIN_ELAPSED_S = 0.001
REPETITION_WINDOW = 5
FINGERPRINT_POINTS = 5
DEFAULT_WRIST_Y = 0.5

WEIGHTS = {
    "movement_speed": 0.25,
    "gesture_variety": 0.20,
    "hand_positioning": 0.15,
    "repetitive_motions": 0.20,
    "energy_level": 0.20,
}

_EMPTY = IndicatorSet(
    movement_speed=0.0,
    gesture_variety=0.0,
    hand_positioning=0.0,
    repetitive_motions=0.0,
    energy_level=0.0,
)


def clamp01to100(value: float) -> float:
    """Clamp to [0, 100]; NaN maps to 0."""
    if math.isnan(value):
        return 0.0
    return max(0.0, min(100.0, float(value)))


def _primary_array(sample: Sample) -> Optional[np.ndarray]:
    hand = sample.primary_hand
    if not hand:
        return None
    return np.array([[lm.x, lm.y, lm.z] for lm in hand], dtype=float)


def _primary_arrays(patterns: Sequence[Sample]) -> List[Optional[np.ndarray]]:
    return [_primary_array(p) for p in patterns]


def _array_distance(a: np.ndarray, b: np.ndarray) -> float:
    n = min(len(a), len(b))
    if n == 0:
        return 0.0
    with np.errstate(over='ignore', invalid='ignore'):
        return float(np.linalg.norm(a[:n] - b[:n], axis=1).mean())


def landmark_distance(sample_a: Sample, sample_b: Sample) -> float:
    """
    Mean per-point Euclidean distance between two samples' primary hands.

    Only the first min(len_a, len_b) points are compared. Returns 0.0 when
    either sample has no hand.
    """
    a = _primary_array(sample_a)
    b = _primary_array(sample_b)
    if a is None or b is None:
        return 0.0
    return _array_distance(a, b)


def pattern_similarity(sample_a: Sample, sample_b: Sample) -> float:
    """Similarity in [0, 1]; identical hands give 1, missing hands give 0."""
    return _similarity(_primary_array(sample_a), _primary_array(sample_b))


def _similarity(a: Optional[np.ndarray], b: Optional[np.ndarray]) -> float:
    if a is None or b is None:
        return 0.0
    return max(0.0, 1.0 - _array_distance(a, b) / 2.0)


def _consecutive_pairs(patterns: Sequence[Sample]) -> List[Tuple[Sample, Sample, float]]:
    """(previous, current, distance) for each consecutive pair with hands."""
    arrays = _primary_arrays(patterns)
    pairs = []
    for i in range(1, len(patterns)):
        prev, curr = arrays[i - 1], arrays[i]
        if prev is not None and curr is not None:
            pairs.append((patterns[i - 1], patterns[i], _array_distance(prev, curr)))
    return pairs


def calculate_movement_speed(patterns: Sequence[Sample]) -> float:
    """Slower movement gives a higher indicator."""
    pairs = _consecutive_pairs(patterns)
    total_speed = 0.0
    for prev, curr, distance in pairs:
        elapsed_s = (curr.timestamp_ms - prev.timestamp_ms) / 1000.0
        total_speed += distance / max(elapsed_s, MIN_ELAPSED_S)
    
    avg_speed = total_speed / len(pairs) if pairs else 0.0
    return clamp01to100((1 - avg_speed / 10) * 100)


def _grid(value: float) -> float:
    # round half up on a 0.1 grid
    with np.errstate(over='ignore', invalid='ignore'):
        return float(np.floor(value * 10 + 0.5))


def hand_fingerprint(sample: Sample) -> Optional[Tuple[Tuple[float, float], ...]]:
    """Coarse position key of the first five landmarks of the primary hand."""
    hand = sample.primary_hand
    if not hand:
        return None
    return tuple((_grid(lm.x), _grid(lm.y)) for lm in hand[:FINGERPRINT_POINTS])


def calculate_gesture_variety(patterns: Sequence[Sample]) -> float:
    """Fewer distinct hand positions gives a higher indicator."""
    if not patterns:
        return 0.0
    unique_positions = {fp for fp in map(hand_fingerprint, patterns) if fp is not None}
    variety = len(unique_positions) / len(patterns)
    return clamp01to100((1 - variety) * 100)


def calculate_hand_positioning(patterns: Sequence[Sample]) -> float:
    """Hands held lower in the frame (larger wrist y) give a higher indicator."""
    wrist_ys = [p.primary_hand[0].y for p in patterns if p.primary_hand]
    average_y = sum(wrist_ys) / len(wrist_ys) if wrist_ys else DEFAULT_WRIST_Y
    return clamp01to100((average_y - 0.3) * 200)


def calculate_repetitive_motions(patterns: Sequence[Sample]) -> float:
    """
    Mean pairwise similarity inside a sliding window of five samples.

    Windows cover patterns[i-5:i] for i in [5, N). The sum of window
    averages is divided by (N - 5), or by 1 when that is zero.
    """
    arrays = _primary_arrays(patterns)
    repetition_score = 0.0
    
    for i in range(REPETITION_WINDOW, len(patterns)):
        recent = arrays[i - REPETITION_WINDOW:i]
        similarities = [_similarity(a, b) for a, b in combinations(recent, 2)]
        repetition_score += sum(similarities) / (len(similarities) or 1)
    
    windows = (len(patterns) - REPETITION_WINDOW) or 1
    return clamp01to100(repetition_score / windows * 100)


def calculate_energy_level(patterns: Sequence[Sample]) -> float:
    """Less frame-to-frame movement gives a higher indicator."""
    pairs = _consecutive_pairs(patterns)
    total_energy = sum(distance for _, _, distance in pairs)
    avg_energy = total_energy / len(pairs) if pairs else 0.0
    return clamp01to100((1 - avg_energy / 5) * 100)


def calculate_score(indicators: IndicatorSet) -> int:
    """Weighted sum of the indicators, clamped and rounded half up."""
    score = (
        indicators.movement_speed * WEIGHTS["movement_speed"]
        + indicators.gesture_variety * WEIGHTS["gesture_variety"]
        + indicators.hand_positioning * WEIGHTS["hand_positioning"]
        + indicators.repetitive_motions * WEIGHTS["repetitive_motions"]
        + indicators.energy_level * WEIGHTS["energy_level"]
    )
    return int(math.floor(clamp01to100(score) + 0.5))


def calculate_confidence(sample_count: int, full_confidence_samples: int = FULL_CONFIDENCE_SAMPLES) -> float:
    """Evidence volume only: 0 with no samples, 100 at full_confidence_samples."""
    return min(max(sample_count, 0) / full_confidence_samples, 1.0) * 100


def analyze_hand_patterns(patterns: Sequence[Sample],
                          min_samples: int = MIN_SAMPLES,
                          full_confidence_samples: int = FULL_CONFIDENCE_SAMPLES) -> DetectionResult:
    """
    Compute indicators, score and confidence for a buffer snapshot.

    Snapshots shorter than min_samples yield an all-zero result.
    """
    if len(patterns) < min_samples:
        return DetectionResult(score=0, indicators=_EMPTY, confidence=0.0)
    
    indicators = IndicatorSet(
        movement_speed=calculate_movement_speed(patterns),
        gesture_variety=calculate_gesture_variety(patterns),
        hand_positioning=calculate_hand_positioning(patterns),
        repetitive_motions=calculate_repetitive_motions(patterns),
        energy_level=calculate_energy_level(patterns),
    )
    
    return DetectionResult(
        score=calculate_score(indicators),
        indicators=indicators,
        confidence=calculate_confidence(len(patterns), full_confidence_samples),
    )
