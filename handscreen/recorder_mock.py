"""
In-memory session recorder for offline runs and tests.
"""
import logging
from typing import List

from .errors import StorageError
from .types import SessionRecord

logger = logging.getLogger(__name__)


class MemorySessionRecorder:
    """Keeps saved sessions in a list instead of sending them anywhere."""
    
    def __init__(self, fail: bool = False):
        """
        Args:
            fail: Raise StorageError on every save, to exercise error paths
        """
        self.fail = fail
        self.records: List[SessionRecord] = []
        self.save_count = 0
    
    async def save(self, record: SessionRecord) -> None:
        self.save_count += 1
        if self.fail:
            raise StorageError(f"Simulated storage failure (call #{self.save_count})")
        self.records.append(record)
        logger.info(f"[MemorySessionRecorder] Saved session score={record.depression_score} (call #{self.save_count})")
    
    def reset(self) -> None:
        """Forget saved sessions."""
        self.records.clear()
        self.save_count = 0
