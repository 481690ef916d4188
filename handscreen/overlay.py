"""
OpenCV rendering of the live preview and the results panel.
"""
import textwrap
from typing import List, Optional, Tuple

import cv2
import numpy as np

from .config import Cfg
from .landmarks import draw_landmarks
from .remedies import risk_band
from .session import DetectionSession
from .types import DetectionResult, SessionState

PANEL_WIDTH = 480
WHITE = (255, 255, 255)
GREY = (170, 170, 170)
GREEN = (0, 200, 0)
RED = (0, 0, 255)
YELLOW = (0, 220, 255)
BLUE = (255, 160, 0)

INDICATOR_LABELS = [
    ("movement_speed", "Movement Speed"),
    ("gesture_variety", "Gesture Variety"),
    ("hand_positioning", "Hand Positioning"),
    ("repetitive_motions", "Repetitive Motions"),
    ("energy_level", "Energy Level"),
]


def _put(image: np.ndarray, text: str, org: Tuple[int, int], scale: float = 0.5,
         color=WHITE, thickness: int = 1) -> None:
    cv2.putText(image, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)


def _status_color(session: DetectionSession):
    text = session.status_text()
    if text.startswith("Analyzing"):
        return YELLOW
    if text.startswith("Detecting"):
        return GREEN
    if text.startswith("Analysis"):
        return BLUE
    return GREY


def _preview(session: DetectionSession, cfg: Cfg) -> np.ndarray:
    width, height = cfg.camera.width, cfg.camera.height
    if session.is_capturing and session.latest_frame is not None:
        frame = session.latest_frame.copy()
        if cfg.display.show_landmarks and session.latest_hands:
            frame = draw_landmarks(frame, session.latest_hands)
        if cfg.display.mirror:
            frame = cv2.flip(frame, 1)
        if frame.shape[1] != width or frame.shape[0] != height:
            frame = cv2.resize(frame, (width, height))
        return frame
    
    frame = np.full((height, width, 3), 40, dtype=np.uint8)
    _put(frame, "Camera inactive", (width // 2 - 90, height // 2), 0.7, GREY, 2)
    return frame


def _draw_bar(image: np.ndarray, x: int, y: int, width: int, value: float) -> None:
    cv2.rectangle(image, (x, y), (x + width, y + 8), (90, 90, 90), -1)
    filled = int(width * max(0.0, min(100.0, value)) / 100)
    if filled > 0:
        cv2.rectangle(image, (x, y), (x + filled, y + 8), BLUE, -1)


def _draw_result(panel: np.ndarray, result: DetectionResult, remedies: List[str], y: int) -> int:
    band = risk_band(result.score)
    _put(panel, "Detection Results", (15, y), 0.7, WHITE, 2)
    _put(panel, f"{result.score}%", (PANEL_WIDTH - 130, y + 5), 1.1, band.color, 2)
    y += 30
    _put(panel, band.label, (PANEL_WIDTH - 200, y), 0.5, band.color, 1)
    _put(panel, f"Confidence: {result.confidence:.0f}%", (15, y), 0.5, GREY)
    y += 25
    
    indicators = result.indicators.to_dict()
    for key, label in INDICATOR_LABELS:
        value = indicators[key]
        _put(panel, f"{label}: {value:.0f}%", (15, y), 0.45)
        _draw_bar(panel, 230, y - 9, PANEL_WIDTH - 250, value)
        y += 20
    
    y += 10
    _put(panel, "Recommended Actions", (15, y), 0.6, WHITE, 2)
    y += 22
    for i, suggestion in enumerate(remedies, start=1):
        for j, line in enumerate(textwrap.wrap(suggestion, 58)):
            prefix = f"{i}. " if j == 0 else "   "
            _put(panel, prefix + line, (15, y), 0.42)
            y += 17
    return y


def render(session: DetectionSession, cfg: Cfg) -> np.ndarray:
    """Compose the preview and the side panel into one BGR image."""
    preview = _preview(session, cfg)
    height = preview.shape[0]
    panel = np.full((max(height, 640), PANEL_WIDTH, 3), 25, dtype=np.uint8)
    
    y = 30
    _put(panel, session.status_text(), (15, y), 0.6, _status_color(session), 2)
    y += 30
    
    if session.error:
        cv2.rectangle(panel, (8, y - 18), (PANEL_WIDTH - 8, y + 8), (30, 30, 120), -1)
        _put(panel, textwrap.shorten(session.error, 62), (15, y), 0.45, WHITE)
        y += 30
    
    notification: Optional[str] = session.notification
    if notification:
        _put(panel, notification, (15, y), 0.5, GREEN)
        y += 30
    
    if session.state == SessionState.ANALYZING:
        _put(panel, "Analyzing patterns...", (15, y), 0.6)
        y += 30
    elif session.result is not None:
        y = _draw_result(panel, session.result, session.remedies, y)
    elif session.is_capturing:
        for line in ("Perform natural hand gestures and movements",
                     "Try various signs and expressions",
                     "Continue for at least 15-20 seconds"):
            _put(panel, "- " + line, (15, y), 0.45, GREY)
            y += 20
    
    keys = "[space] stop & analyze  [q] quit" if session.is_capturing else "[s] start detection  [q] quit"
    if not session.is_capturing and not session.source.is_ready:
        keys += "  (loading hand tracking...)"
    _put(panel, keys, (15, panel.shape[0] - 15), 0.45, GREY)
    
    if panel.shape[0] > height:
        pad = np.full((panel.shape[0] - height, preview.shape[1], 3), 25, dtype=np.uint8)
        preview = np.vstack([preview, pad])
    _put(preview, "For informational purposes only. Not medical advice.",
         (10, preview.shape[0] - 15), 0.45, GREY)
    return np.hstack([preview, panel])
