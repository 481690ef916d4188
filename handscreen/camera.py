"""
Webcam acquisition with OpenCV.
"""
import logging
from typing import Optional

import cv2
import numpy as np

from .config import CameraConfig
from .errors import CameraError

logger = logging.getLogger(__name__)

CAMERA_ERROR_MESSAGE = "Failed to access webcam. Please grant permission."


class Webcam:
    """OpenCV capture device that is held only between open() and release()."""
    
    def __init__(self, cfg: CameraConfig):
        self.cfg = cfg
        self.cap: Optional[cv2.VideoCapture] = None
    
    @property
    def is_active(self) -> bool:
        return self.cap is not None
    
    def open(self) -> None:
        """Acquire the camera at the configured resolution."""
        if self.cap is not None:
            return
        
        cap = cv2.VideoCapture(self.cfg.index)
        if not cap.isOpened():
            cap.release()
            logger.error(f"❌ Webcam error: failed to open camera {self.cfg.index}")
            raise CameraError(CAMERA_ERROR_MESSAGE)
        
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.cfg.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.cfg.height)
        cap.set(cv2.CAP_PROP_FPS, self.cfg.fps)
        self.cap = cap
        logger.info(f"📷 Camera {self.cfg.index} opened at {self.cfg.width}x{self.cfg.height}")
    
    def read(self) -> Optional[np.ndarray]:
        """Next frame, or None when the camera is closed or the read failed."""
        if self.cap is None:
            return None
        ret, frame = self.cap.read()
        if not ret:
            logger.warning("Failed to read frame from camera")
            return None
        return frame
    
    def release(self) -> None:
        """Stop the capture device. Safe to call repeatedly."""
        if self.cap is not None:
            self.cap.release()
            self.cap = None
            logger.info("📷 Camera released")
