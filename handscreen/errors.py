"""
Exception hierarchy for hand pattern screening.
"""


class HandScreenError(Exception):
    """Base class for all application errors."""


class ConfigError(HandScreenError):
    """Required configuration or secrets are missing or malformed."""


class CameraError(HandScreenError):
    """The webcam could not be acquired. The message is shown to the user."""


class LandmarkSourceError(HandScreenError):
    """The hand landmark model could not be loaded."""


class StorageError(HandScreenError):
    """A session could not be written to the remote store."""
