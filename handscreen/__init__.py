"""
Hand Pattern Screening

Reads webcam frames, detects hand landmarks using MediaPipe, accumulates a
short history of hand positions and scores it with movement heuristics.
Results are informational only and are not medical advice.
"""

__version__ = "0.1.0"

from .types import Landmark, Hand, Sample, IndicatorSet, DetectionResult, SessionState, SessionRecord
from .config import load_config, load_secrets, Cfg
from .buffer import PatternBuffer
from .analysis import analyze_hand_patterns, calculate_score, calculate_confidence
from .remedies import get_remedy_suggestions, risk_band
from .recorder_mock import MemorySessionRecorder
from .session import DetectionSession

__all__ = [
    "Landmark",
    "Hand",
    "Sample",
    "IndicatorSet",
    "DetectionResult",
    "SessionState",
    "SessionRecord",
    "load_config",
    "load_secrets",
    "Cfg",
    "PatternBuffer",
    "analyze_hand_patterns",
    "calculate_score",
    "calculate_confidence",
    "get_remedy_suggestions",
    "risk_band",
    "MemorySessionRecorder",
    "DetectionSession",
]
