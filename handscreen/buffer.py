"""
Bounded, time-ordered buffer of hand landmark samples.
"""
from collections import deque
from typing import Deque, Tuple

from .types import Sample

DEFAULT_CAPACITY = 100


class PatternBuffer:
    """
    FIFO ring of the most recent samples.

    Appending beyond capacity evicts the oldest sample. Only the capture
    loop writes; analysis reads a snapshot once capture has stopped.
    """
    
    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._samples: Deque[Sample] = deque(maxlen=capacity)
    
    def append(self, sample: Sample) -> None:
        self._samples.append(sample)
    
    def reset(self) -> None:
        self._samples.clear()
    
    def snapshot(self) -> Tuple[Sample, ...]:
        """Current contents, oldest first."""
        return tuple(self._samples)
    
    def tail(self, n: int) -> Tuple[Sample, ...]:
        """The last n samples, oldest first."""
        if n <= 0:
            return ()
        return tuple(self._samples)[-n:]
    
    def __len__(self) -> int:
        return len(self._samples)
