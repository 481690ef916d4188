"""
Configuration management for hand pattern screening.
"""
import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int


@dataclass
class MediaPipeConfig:
    """MediaPipe HandLandmarker configuration settings."""
    model_path: str
    model_url: str
    max_num_hands: int
    min_detection_confidence: float
    min_presence_confidence: float
    min_tracking_confidence: float


@dataclass
class AnalysisConfig:
    """Pattern buffer and scoring configuration."""
    buffer_size: int
    min_samples: int
    full_confidence_samples: int
    persisted_samples: int


@dataclass
class StorageConfig:
    """Remote session store configuration."""
    table: str
    notification_seconds: float


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    window_name: str
    show_landmarks: bool
    mirror: bool


@dataclass
class LoggingConfig:
    level: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    analysis: AnalysisConfig
    storage: StorageConfig
    display: DisplayConfig
    logging: LoggingConfig


@dataclass
class StorageSecrets:
    """Connection secrets for the remote store."""
    url: str
    anon_key: str


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.
    
    Args:
        path: Path to config file. If None, uses config.default.yaml
        
    Returns:
        Configuration object with all settings
    """
    if path is None:
        # Use default config file in project root
        project_root = Path(__file__).parent.parent
        path = project_root / "config.default.yaml"
    
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    
    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)
    
    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    try:
        camera_data = data['camera']
        camera = CameraConfig(
            index=int(camera_data['index']),
            width=int(camera_data['width']),
            height=int(camera_data['height']),
            fps=int(camera_data['fps'])
        )
        
        mp_data = data['mediapipe']
        mediapipe = MediaPipeConfig(
            model_path=str(mp_data['model_path']),
            model_url=str(mp_data['model_url']),
            max_num_hands=int(mp_data['max_num_hands']),
            min_detection_confidence=float(mp_data['min_detection_confidence']),
            min_presence_confidence=float(mp_data['min_presence_confidence']),
            min_tracking_confidence=float(mp_data['min_tracking_confidence'])
        )
        
        analysis_data = data['analysis']
        analysis = AnalysisConfig(
            buffer_size=int(analysis_data['buffer_size']),
            min_samples=int(analysis_data['min_samples']),
            full_confidence_samples=int(analysis_data['full_confidence_samples']),
            persisted_samples=int(analysis_data['persisted_samples'])
        )
        
        storage_data = data['storage']
        storage = StorageConfig(
            table=str(storage_data['table']),
            notification_seconds=float(storage_data['notification_seconds'])
        )
        
        display_data = data['display']
        display = DisplayConfig(
            window_name=display_data['window_name'],
            show_landmarks=bool(display_data['show_landmarks']),
            mirror=bool(display_data['mirror'])
        )
        
        logging_config = LoggingConfig(level=str(data.get('logging', {}).get('level', 'INFO')).upper())
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
    
    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        analysis=analysis,
        storage=storage,
        display=display,
        logging=logging_config
    )


def _first_env(*names: str) -> str:
    for name in names:
        value = os.getenv(name, "").strip().strip("'\"")
        if value:
            return value
    return ""


def load_secrets(env_file: Optional[str] = None) -> StorageSecrets:
    """
    Read the store URL and access key from the environment.

    A .env file is loaded first when present. Missing secrets are fatal.
    """
    load_dotenv(env_file if env_file is not None else find_dotenv(usecwd=True))
    url = _first_env("SUPABASE_URL", "VITE_SUPABASE_URL")
    key = _first_env("SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY")
    
    if not url or not key:
        raise ConfigError(
            "Missing Supabase environment variables. Please set SUPABASE_URL and SUPABASE_ANON_KEY"
        )
    
    return StorageSecrets(url=url, anon_key=key)
