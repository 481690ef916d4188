"""
Detection session: owns the pattern buffer and the capture loop.

Lifecycle: IDLE -> CAPTURING -> ANALYZING -> COMPLETED, and back to
CAPTURING on the next start(). Samples are only appended while capturing,
and analysis only runs after the capture task has finished.
"""
import asyncio
import contextlib
import logging
import math
import time
from typing import Callable, List, Optional

import numpy as np

from .analysis import analyze_hand_patterns
from .buffer import PatternBuffer
from .config import Cfg
from .errors import CameraError
from .remedies import get_remedy_suggestions
from .types import (
    CameraProto,
    DetectionResult,
    Hand,
    LandmarkSourceProto,
    Sample,
    SessionRecord,
    SessionRecorderProto,
    SessionState,
)

logger = logging.getLogger(__name__)

SAVED_MESSAGE = "Session saved successfully"
TRACKING_ERROR_MESSAGE = "Hand tracking stopped unexpectedly. Press stop to analyze what was captured."


class DetectionSession:
    """
    Controller for one capture-then-analyze cycle.
    """
    
    def __init__(self, camera: CameraProto, source: LandmarkSourceProto,
                 recorder: SessionRecorderProto, cfg: Cfg,
                 clock: Callable[[], float] = time.time,
                 monotonic: Callable[[], float] = time.monotonic):
        """
        Args:
            camera: Frame provider, opened on start and released on stop
            source: Hand landmark detector
            recorder: Sink for finished sessions
            cfg: Application configuration
            clock: Wall clock in seconds, used for sample timestamps
            monotonic: Monotonic clock in seconds, passed to the detector
        """
        self.camera = camera
        self.source = source
        self.recorder = recorder
        self.cfg = cfg
        self._clock = clock
        self._monotonic = monotonic
        
        self.state = SessionState.IDLE
        self.buffer = PatternBuffer(cfg.analysis.buffer_size)
        self.result: Optional[DetectionResult] = None
        self.remedies: List[str] = []
        self.error: Optional[str] = None
        self.latest_frame: Optional[np.ndarray] = None
        self.latest_hands: List[Hand] = []
        
        self._started_at: Optional[float] = None
        self._notification: Optional[str] = None
        self._notification_until = 0.0
        self._stop_event: Optional[asyncio.Event] = None
        self._capture_task: Optional[asyncio.Task] = None
        self._save_task: Optional[asyncio.Task] = None
    
    @property
    def is_capturing(self) -> bool:
        return self.state == SessionState.CAPTURING
    
    @property
    def notification(self) -> Optional[str]:
        """Transient message; cleared once its display time has passed."""
        if self._notification is not None and self._clock() >= self._notification_until:
            self._notification = None
        return self._notification
    
    def dismiss_error(self) -> None:
        self.error = None
    
    def status_text(self) -> str:
        if self.state == SessionState.ANALYZING:
            return "Analyzing..."
        if self.state == SessionState.CAPTURING:
            return f"Detecting - {len(self.buffer)} patterns captured"
        if self.result is not None:
            return "Analysis Complete"
        return "Ready to Start"
    
    async def start(self) -> bool:
        """
        Open the camera, clear previous results and begin capturing.
        
        Returns:
            True if capture started. False when the tracker is not ready,
            a session is already running, or the camera failed (see error).
        """
        if self.state in (SessionState.CAPTURING, SessionState.ANALYZING):
            return False
        if not self.source.is_ready:
            logger.warning("⚠️ Hand tracking not ready, cannot start detection")
            return False
        
        try:
            self.camera.open()
        except CameraError as e:
            self.error = str(e)
            return False
        
        self.error = None
        self.buffer.reset()
        self.result = None
        self.remedies = []
        self._notification = None
        self.latest_hands = []
        self._started_at = self._clock()
        
        self._stop_event = asyncio.Event()
        self.state = SessionState.CAPTURING
        self._capture_task = asyncio.create_task(self._capture_loop(self._stop_event))
        logger.info("▶️ Detection started")
        return True
    
    def process_frame(self, frame: np.ndarray) -> List[Hand]:
        """Run detection on one frame and record a sample if a hand was found."""
        hands, labels = self.source.detect(frame, int(self._monotonic() * 1000))
        self.latest_frame = frame
        self.latest_hands = list(hands)
        
        if hands:
            self.buffer.append(Sample(
                timestamp_ms=int(self._clock() * 1000),
                landmark_sets=tuple(hands),
                labels=frozenset(labels)
            ))
        return self.latest_hands
    
    async def _capture_loop(self, stop_event: asyncio.Event) -> None:
        interval = 1.0 / max(self.cfg.camera.fps, 1)
        try:
            while not stop_event.is_set():
                try:
                    frame = self.camera.read()
                    if frame is not None:
                        self.process_frame(frame)
                except Exception:
                    logger.exception("❌ Hand detection failed")
                    self.error = TRACKING_ERROR_MESSAGE
                    self.latest_frame = None
                    self.latest_hands = []
                    break
                await asyncio.sleep(interval)
        finally:
            self.camera.release()
    
    async def _stop_capture(self) -> None:
        """Signal, cancel and await the capture task. The camera is released by the task."""
        if self._stop_event is not None:
            self._stop_event.set()
        task, self._capture_task = self._capture_task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self.camera.release()
    
    async def stop(self) -> Optional[DetectionResult]:
        """
        End capture, analyze the buffer and hand the session to the recorder.
        
        The save runs in the background; its outcome never changes the result.
        
        Returns:
            The detection result, or None if no session was capturing
        """
        if self.state != SessionState.CAPTURING:
            return None
        
        self.state = SessionState.ANALYZING
        await self._stop_capture()
        
        snapshot = self.buffer.snapshot()
        result = analyze_hand_patterns(
            snapshot,
            min_samples=self.cfg.analysis.min_samples,
            full_confidence_samples=self.cfg.analysis.full_confidence_samples
        )
        self.result = result
        self.remedies = get_remedy_suggestions(result.score)
        self.state = SessionState.COMPLETED
        logger.info(f"📊 Analysis complete: score={result.score}, confidence={result.confidence:.0f}%, "
                    f"samples={len(snapshot)}")
        
        record = SessionRecord(
            depression_score=result.score,
            detected_patterns=[s.to_dict() for s in self.buffer.tail(self.cfg.analysis.persisted_samples)],
            remedy_suggestions=list(self.remedies),
            session_duration=self._elapsed_seconds()
        )
        self._save_task = asyncio.create_task(self._save(record))
        return result
    
    def _elapsed_seconds(self) -> int:
        if self._started_at is None:
            return 0
        return max(0, int(math.floor(self._clock() - self._started_at)))
    
    async def _save(self, record: SessionRecord) -> None:
        try:
            await self.recorder.save(record)
        except Exception:
            logger.exception("❌ Failed to save session")
            return
        self._notification = SAVED_MESSAGE
        self._notification_until = self._clock() + self.cfg.storage.notification_seconds
    
    async def wait_for_save(self, timeout: Optional[float] = None) -> None:
        """Wait for a pending background save, if any."""
        task = self._save_task
        if task is not None and not task.done():
            await asyncio.wait({task}, timeout=timeout)
    
    async def close(self, save_timeout: float = 5.0) -> None:
        """Tear down: stop capturing, let a pending save finish, release the detector."""
        await self._stop_capture()
        if self.state == SessionState.CAPTURING:
            self.state = SessionState.IDLE
        await self.wait_for_save(save_timeout)
        self.source.close()
