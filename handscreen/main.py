"""
Main application for hand pattern screening.
"""
import asyncio
import logging
from typing import Optional

import cv2

from .camera import Webcam
from .config import load_config, load_secrets
from .landmarks import HandsTracker
from .overlay import render
from .session import DetectionSession
from .storage import SupabaseSessionRecorder

logger = logging.getLogger(__name__)

KEY_NONE = 0xFF


class HandScreenApp:
    """Main application class: one window, one detection session at a time."""
    
    def __init__(self, config_path: Optional[str] = None):
        """Initialize the application. Missing store secrets raise ConfigError."""
        self.config = load_config(config_path)
        secrets = load_secrets()
        
        self.recorder = SupabaseSessionRecorder(secrets, table=self.config.storage.table)
        self.tracker = HandsTracker(self.config.mediapipe)
        self.camera = Webcam(self.config.camera)
        self.session = DetectionSession(self.camera, self.tracker, self.recorder, self.config)
    
    async def handle_key(self, key: int) -> bool:
        """
        Apply one key press. Returns False when the app should quit.
        """
        if key == ord('q'):
            return False
        
        if key == ord('s') and not self.session.is_capturing:
            await self.session.start()
        elif key == ord(' ') and self.session.is_capturing:
            await self.session.stop()
        elif key != KEY_NONE and self.session.error:
            self.session.dismiss_error()
        return True
    
    async def run(self):
        """Run the main application loop."""
        print(f"Starting {self.config.display.window_name}")
        print("🎯 Hand Pattern Analysis:")
        print("  - 's' = Start detection")
        print("  - SPACE = Stop & analyze")
        print("Press 'q' to quit")
        
        init_task = asyncio.create_task(self.tracker.initialize())
        frame_delay = 1.0 / max(self.config.camera.fps, 1)
        
        try:
            while True:
                cv2.imshow(self.config.display.window_name, render(self.session, self.config))
                
                key = cv2.waitKey(1) & 0xFF
                if not await self.handle_key(key):
                    break
                
                # Yield to the capture and save tasks
                await asyncio.sleep(frame_delay)
        finally:
            if not init_task.done():
                init_task.cancel()
            await asyncio.gather(init_task, return_exceptions=True)
            await self.session.close()
            cv2.destroyAllWindows()


async def run_app(config_path: Optional[str] = None):
    app = HandScreenApp(config_path)
    logging.getLogger().setLevel(app.config.logging.level)
    await app.run()


def main(config_path: Optional[str] = None):
    """Entry point for the application."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    
    try:
        asyncio.run(run_app(config_path))
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")


if __name__ == "__main__":
    main()
