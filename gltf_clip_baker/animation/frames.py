"""
Sample times of a clip.
"""

from dataclasses import dataclass
from typing import Tuple

from ..core.types import BakeConfigurationError


@dataclass(frozen=True)
class FrameGrid:
    """`count` times relative to the clip start, spaced `1 / samples_per_second` apart"""
    count: int
    times: Tuple[float, ...]
    samples_per_second: float
    name: str = ""

    @classmethod
    def build(cls, frame_count: int, samples_per_second: float, name: str = "") -> "FrameGrid":
        if frame_count < 1:
            raise BakeConfigurationError(f"frame count must be >= 1, got {frame_count}")
        if samples_per_second <= 0:
            raise BakeConfigurationError(f"samples per second must be > 0, got {samples_per_second}")

        times = tuple(index / samples_per_second for index in range(frame_count))
        return cls(frame_count, times, float(samples_per_second), name)

    @property
    def duration(self) -> float:
        return self.times[-1]
