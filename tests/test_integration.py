"""
Integration test to verify all components can be imported and work together.
"""
import asyncio
import unittest
import sys
from pathlib import Path
from unittest.mock import patch

import numpy as np

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from handscreen.config import StorageSecrets, load_config
from handscreen.recorder_mock import MemorySessionRecorder
from handscreen.session import DetectionSession
from handscreen.types import SessionState
from tests.helpers import FakeCamera, FakeClock, FakeLandmarkSource, make_hand


class TestOverlay(unittest.IsolatedAsyncioTestCase):
    """Render every session state without a display."""
    
    async def asyncSetUp(self):
        from handscreen.overlay import PANEL_WIDTH, render
        self.render = render
        self.panel_width = PANEL_WIDTH
        self.cfg = load_config()
        self.cfg.camera.fps = 1000
        self.session = DetectionSession(FakeCamera(), FakeLandmarkSource(), MemorySessionRecorder(),
                                        self.cfg, clock=FakeClock())
    
    async def asyncTearDown(self):
        await self.session.close()
    
    def assert_canvas(self, canvas: np.ndarray):
        self.assertEqual(canvas.dtype, np.uint8)
        self.assertEqual(canvas.shape[1], self.cfg.camera.width + self.panel_width)
        self.assertGreaterEqual(canvas.shape[0], self.cfg.camera.height)
    
    async def test_idle(self):
        self.assert_canvas(self.render(self.session, self.cfg))
    
    async def test_capturing_and_completed(self):
        await self.session.start()
        while len(self.session.buffer) < 12:
            await asyncio.sleep(0.002)
        self.assert_canvas(self.render(self.session, self.cfg))
        
        await self.session.stop()
        await self.session.wait_for_save()
        self.assert_canvas(self.render(self.session, self.cfg))
    
    async def test_error_message(self):
        self.session.error = "Failed to access webcam. Please grant permission."
        self.assert_canvas(self.render(self.session, self.cfg))


class TestAppKeys(unittest.IsolatedAsyncioTestCase):
    """Key handling of the main window, with fakes in place of hardware and network."""
    
    async def asyncSetUp(self):
        secrets = StorageSecrets(url='https://example.supabase.co', anon_key='anon')
        with patch('handscreen.main.load_secrets', return_value=secrets), \
                patch('handscreen.main.SupabaseSessionRecorder', return_value=MemorySessionRecorder()):
            from handscreen.main import HandScreenApp
            self.app = HandScreenApp()
        
        self.app.config.camera.fps = 1000
        self.camera = FakeCamera()
        self.recorder = MemorySessionRecorder()
        self.app.session = DetectionSession(self.camera, FakeLandmarkSource([make_hand()]),
                                            self.recorder, self.app.config)
    
    async def asyncTearDown(self):
        await self.app.session.close()
    
    async def test_start_stop_quit(self):
        self.assertTrue(await self.app.handle_key(ord('s')))
        self.assertEqual(self.app.session.state, SessionState.CAPTURING)
        
        self.assertTrue(await self.app.handle_key(ord(' ')))
        self.assertEqual(self.app.session.state, SessionState.COMPLETED)
        await self.app.session.wait_for_save()
        self.assertEqual(self.recorder.save_count, 1)
        
        self.assertFalse(await self.app.handle_key(ord('q')))
    
    async def test_any_key_dismisses_error(self):
        self.camera.fail = True
        await self.app.handle_key(ord('s'))
        self.assertIsNotNone(self.app.session.error)
        
        await self.app.handle_key(ord('x'))
        self.assertIsNone(self.app.session.error)
    
    async def test_no_key_keeps_error(self):
        self.app.session.error = "Failed to access webcam. Please grant permission."
        await self.app.handle_key(0xFF)
        self.assertIsNotNone(self.app.session.error)


if __name__ == '__main__':
    unittest.main()
