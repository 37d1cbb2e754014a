"""
Sample buffer of one animated property and its conversion to a glTF channel.
"""

from enum import Enum
from typing import Hashable, List, Optional, Sequence, Tuple

from ..core.types import AnimationChannel, ChannelPath, NodeRole
from .frames import FrameGrid


class ChannelOutcome(Enum):
    DROPPED = "dropped"
    SINGLE_KEYFRAME = "single_keyframe"
    FULL_TRACK = "full_track"


class ChannelBuffer:
    """Append-only buffer holding `dimension` floats per sampled frame.

    `append` must be called exactly once per frame of the grid, in frame
    order, before `finalize`.
    """

    def __init__(
        self,
        frames: FrameGrid,
        target_node_id: Hashable,
        target_role: NodeRole,
        path: ChannelPath,
        dimension: int,
    ):
        assert dimension > 0, "channel dimension must be positive"
        self.frames = frames
        self.target_node_id = target_node_id
        self.target_role = target_role
        self.path = path
        self.dimension = dimension
        self.values: List[float] = []

    @property
    def sampled_frame_count(self) -> int:
        return len(self.values) // self.dimension

    def append(self, values: Sequence[float]) -> None:
        assert len(values) == self.dimension, (
            f"expected {self.dimension} components for {self.path.value}, got {len(values)}"
        )
        assert self.sampled_frame_count < self.frames.count, "more samples than frames"
        self.values.extend(float(v) for v in values)

    def append_quaternion(self, values: Sequence[float]) -> None:
        # Sign flips between consecutive frames are left to the runtime.
        assert self.dimension == 4, "quaternion samples need a 4 component channel"
        self.append(values)

    def frame_values(self, frame_index: int) -> List[float]:
        offset = frame_index * self.dimension
        return self.values[offset:offset + self.dimension]

    def is_constant(self, base_values: Sequence[float], threshold: float) -> bool:
        """True when every sample is within `threshold` of `base_values`, per component"""
        dimension = self.dimension
        for offset in range(0, len(self.values), dimension):
            for index in range(dimension):
                if not abs(base_values[index] - self.values[offset + index]) < threshold:
                    return False
        return True

    def simplify_track(self, detect_step_sample_count: int) -> Tuple[Sequence[float], List[float]]:
        """Hook for step detection and curve simplification.

        Returns the full track unchanged whatever the sample count.
        """
        return self.frames.times, list(self.values)

    def finalize(
        self,
        name: str,
        base_values: Sequence[float],
        constant_threshold: float,
        force_sampling: bool = False,
        force_channel: bool = False,
        detect_step_sample_count: int = 1,
    ) -> Tuple[ChannelOutcome, Optional[AnimationChannel]]:
        """Turn the samples into a channel, or drop them when they never leave the rest value"""
        assert self.sampled_frame_count == self.frames.count, (
            f"finalize called after {self.sampled_frame_count} of {self.frames.count} frames"
        )
        assert len(base_values) == self.dimension, (
            f"expected {self.dimension} base values for {self.path.value}, got {len(base_values)}"
        )

        is_constant = self.is_constant(base_values, constant_threshold)

        if is_constant and not force_sampling and not force_channel:
            return ChannelOutcome.DROPPED, None

        if is_constant and not force_sampling:
            channel = self._make_channel(name, (0.0,), self.frame_values(0), "STEP")
            return ChannelOutcome.SINGLE_KEYFRAME, channel

        if detect_step_sample_count <= 1:
            times, values = self.frames.times, list(self.values)
        else:
            times, values = self.simplify_track(detect_step_sample_count)
        return ChannelOutcome.FULL_TRACK, self._make_channel(name, times, values, "LINEAR")

    def _make_channel(self, name, times, values, interpolation) -> AnimationChannel:
        return AnimationChannel(
            name=name,
            target_node_id=self.target_node_id,
            target_role=self.target_role,
            path=self.path,
            times=times,
            values=values,
            dimension=self.dimension,
            interpolation=interpolation,
        )
