"""
Test cases for configuration loading and required secrets.
"""
import os
import tempfile
import unittest
import sys
from pathlib import Path
from unittest.mock import patch

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from handscreen.config import load_config, load_secrets
from handscreen.errors import ConfigError


class TestLoadConfig(unittest.TestCase):
    
    def test_default_config(self):
        cfg = load_config()
        self.assertEqual((cfg.camera.width, cfg.camera.height), (640, 480))
        self.assertEqual(cfg.mediapipe.max_num_hands, 2)
        self.assertEqual(cfg.analysis.buffer_size, 100)
        self.assertEqual(cfg.analysis.min_samples, 10)
        self.assertEqual(cfg.analysis.full_confidence_samples, 50)
        self.assertEqual(cfg.analysis.persisted_samples, 20)
        self.assertEqual(cfg.storage.table, 'detection_sessions')
        self.assertEqual(cfg.storage.notification_seconds, 3.0)
        self.assertEqual(cfg.logging.level, 'INFO')
    
    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config('/nonexistent/config.yaml')
    
    def test_incomplete_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'config.yaml')
            with open(path, 'w') as f:
                f.write("camera:\n  index: 0\n")
            with self.assertRaises(ConfigError):
                load_config(path)


@patch('handscreen.config.load_dotenv')
class TestLoadSecrets(unittest.TestCase):
    
    def test_present(self, _load_dotenv):
        env = {'SUPABASE_URL': 'https://example.supabase.co', 'SUPABASE_ANON_KEY': 'anon'}
        with patch.dict(os.environ, env, clear=True):
            secrets = load_secrets()
        self.assertEqual(secrets.url, 'https://example.supabase.co')
        self.assertEqual(secrets.anon_key, 'anon')
    
    def test_quoted_values_are_stripped(self, _load_dotenv):
        env = {'SUPABASE_URL': "'https://example.supabase.co'", 'SUPABASE_ANON_KEY': '"anon"'}
        with patch.dict(os.environ, env, clear=True):
            secrets = load_secrets()
        self.assertEqual(secrets.url, 'https://example.supabase.co')
        self.assertEqual(secrets.anon_key, 'anon')
    
    def test_legacy_names(self, _load_dotenv):
        env = {'VITE_SUPABASE_URL': 'https://legacy.supabase.co', 'VITE_SUPABASE_ANON_KEY': 'key'}
        with patch.dict(os.environ, env, clear=True):
            secrets = load_secrets()
        self.assertEqual(secrets.url, 'https://legacy.supabase.co')
    
    def test_missing_key_is_fatal(self, _load_dotenv):
        with patch.dict(os.environ, {'SUPABASE_URL': 'https://example.supabase.co'}, clear=True):
            with self.assertRaises(ConfigError):
                load_secrets()
    
    def test_missing_url_is_fatal(self, _load_dotenv):
        with patch.dict(os.environ, {'SUPABASE_ANON_KEY': 'anon'}, clear=True):
            with self.assertRaises(ConfigError):
                load_secrets()
    
    def test_env_file_searched_from_working_directory(self, load_dotenv):
        env = {'SUPABASE_URL': 'https://example.supabase.co', 'SUPABASE_ANON_KEY': 'anon'}
        with patch('handscreen.config.find_dotenv', return_value='/work/.env') as find_dotenv, \
                patch.dict(os.environ, env, clear=True):
            load_secrets()
        find_dotenv.assert_called_once_with(usecwd=True)
        load_dotenv.assert_called_once_with('/work/.env')
    
    def test_explicit_env_file(self, load_dotenv):
        env = {'SUPABASE_URL': 'https://example.supabase.co', 'SUPABASE_ANON_KEY': 'anon'}
        with patch.dict(os.environ, env, clear=True):
            load_secrets('custom.env')
        load_dotenv.assert_called_once_with('custom.env')


if __name__ == '__main__':
    unittest.main()
