"""
Hand landmark detection using the MediaPipe Tasks HandLandmarker.
"""
import asyncio
import logging
import threading
from pathlib import Path
from typing import Optional, List, Tuple

import cv2
import mediapipe as mp
import numpy as np
import requests
from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import vision as mp_vision

from .config import MediaPipeConfig
from .errors import LandmarkSourceError
from .types import Hand, Landmark

logger = logging.getLogger(__name__)

HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),  # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),  # Index
    (5, 9), (9, 10), (10, 11), (11, 12),  # Middle
    (9, 13), (13, 14), (14, 15), (15, 16),  # Ring
    (13, 17), (17, 18), (18, 19), (19, 20),  # Pinky
    (0, 17),
]


def ensure_model(model_path: str, model_url: str) -> Path:
    """
    Download the hand landmarker model if not present.
    
    Args:
        model_path: Local path of the .task file
        model_url: Where to fetch it from
        
    Returns:
        Path to the model file
    """
    path = Path(model_path)
    if path.exists():
        return path
    
    logger.info(f"📥 Downloading hand landmarker model to {path}...")
    path.parent.mkdir(parents=True, exist_ok=True)
    partial = path.with_suffix(path.suffix + ".part")
    try:
        with requests.get(model_url, stream=True, timeout=30) as response:
            response.raise_for_status()
            with open(partial, 'wb') as f:
                for chunk in response.iter_content(chunk_size=1 << 16):
                    f.write(chunk)
        partial.replace(path)
    except (requests.RequestException, OSError) as e:
        partial.unlink(missing_ok=True)
        raise LandmarkSourceError(f"Failed to download hand landmarker model: {e}") from e
    
    logger.info("✅ Model downloaded")
    return path


class HandsTracker:
    """Hand landmark tracker using MediaPipe HandLandmarker in VIDEO mode."""
    
    def __init__(self, cfg: MediaPipeConfig):
        """
        Initialize the hands tracker. The model is loaded by initialize().
        
        Args:
            cfg: MediaPipe settings (model location, hand count, confidences)
        """
        self.cfg = cfg
        self.landmarker = None
        self._ready = False
        self._closed = False
        self._lock = threading.Lock()
        self._last_timestamp_ms = -1
    
    @property
    def is_ready(self) -> bool:
        return self._ready
    
    def _create_landmarker(self):
        model_path = ensure_model(self.cfg.model_path, self.cfg.model_url)
        options = mp_vision.HandLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(model_path)),
            running_mode=mp_vision.RunningMode.VIDEO,
            num_hands=self.cfg.max_num_hands,
            min_hand_detection_confidence=self.cfg.min_detection_confidence,
            min_hand_presence_confidence=self.cfg.min_presence_confidence,
            min_tracking_confidence=self.cfg.min_tracking_confidence
        )
        return mp_vision.HandLandmarker.create_from_options(options)
    
    def _load(self) -> None:
        landmarker = self._create_landmarker()
        with self._lock:
            # close() may have run while the model was loading
            if self._closed:
                landmarker.close()
                raise LandmarkSourceError("Hand tracking was closed during initialization")
            self.landmarker = landmarker
    
    async def initialize(self) -> bool:
        """
        Load the model off the event loop.
        
        Failures are logged and leave the tracker not ready.
        """
        self._closed = False
        try:
            await asyncio.to_thread(self._load)
        except Exception as e:
            logger.error(f"❌ Failed to initialize hand tracking: {e}")
            self._ready = False
            return False
        
        if self._closed:
            return False
        self._ready = True
        logger.info("✅ Hand tracking initialized")
        return True
    
    def detect(self, frame_bgr: np.ndarray, timestamp_ms: int) -> Tuple[List[Hand], List[str]]:
        """
        Process a frame and return hand landmarks.
        
        Args:
            frame_bgr: Input frame in BGR format
            timestamp_ms: Monotonic frame time in milliseconds
            
        Returns:
            (hands, labels): one 21-point Hand and one handedness label per
            detected hand, first hand first. Both empty when nothing is found.
        """
        if self.landmarker is None:
            raise LandmarkSourceError("Hand tracking is not initialized")
        
        # VIDEO mode rejects non-increasing timestamps
        timestamp_ms = max(int(timestamp_ms), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = timestamp_ms
        
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)
        results = self.landmarker.detect_for_video(mp_image, timestamp_ms)
        
        hands: List[Hand] = []
        labels: List[str] = []
        for i, hand_landmarks in enumerate(results.hand_landmarks or []):
            hands.append(tuple(Landmark(float(lm.x), float(lm.y), float(lm.z)) for lm in hand_landmarks))
            if results.handedness and i < len(results.handedness) and results.handedness[i]:
                labels.append(results.handedness[i][0].category_name)
        
        return hands, labels
    
    def close(self) -> None:
        """Release the landmarker, including one still loading in initialize()."""
        with self._lock:
            self._closed = True
            if self.landmarker is not None:
                self.landmarker.close()
                self.landmarker = None
        self._ready = False


def draw_landmarks(frame: np.ndarray, hands: List[Hand]) -> np.ndarray:
    """
    Draw hand landmarks on the frame.
    
    Args:
        frame: Input frame
        hands: Hands with coordinates in [0..1] range
        
    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]
    
    for hand in hands:
        points = [(int(lm.x * width), int(lm.y * height)) for lm in hand]
        for a, b in HAND_CONNECTIONS:
            if a < len(points) and b < len(points):
                cv2.line(frame, points[a], points[b], (255, 255, 255), 1)
        for i, (px, py) in enumerate(points):
            # Wrist drawn larger
            cv2.circle(frame, (px, py), 5 if i == 0 else 3, (0, 255, 0), -1)
    
    return frame
