"""
Type definitions and data structures for the glTF Clip Baker addon.
"""

from typing import Hashable, List, Optional, Sequence
from dataclasses import dataclass, field
from enum import Enum

from .constants import (
    DEFAULT_TRANSLATION_THRESHOLD,
    DEFAULT_ROTATION_THRESHOLD,
    DEFAULT_SCALING_THRESHOLD,
    DEFAULT_WEIGHTS_THRESHOLD,
    DEFAULT_STEP_DETECT_SAMPLE_COUNT,
    DEFAULT_FRAMES_PER_SECOND,
)


class BakeConfigurationError(ValueError):
    """Raised for invalid bake settings, before any frame is sampled."""


class TransformKind(Enum):
    """How a node's authored transform is split over one or two glTF nodes."""
    SIMPLE = "simple"
    COMPLEX_JOINT = "complex_joint"
    COMPLEX_TRANSFORM = "complex_transform"


class NodeRole(Enum):
    """Which of the two synthetic glTF nodes a channel animates."""
    PRIMARY = "primary"
    SECONDARY = "secondary"


class ChannelPath(Enum):
    """glTF animation target paths."""
    TRANSLATION = "translation"
    ROTATION = "rotation"
    SCALE = "scale"
    WEIGHTS = "weights"


@dataclass
class ExportableNode:
    """A scene node the host offers for export."""
    node_id: Hashable
    name: str
    transform_kind: TransformKind = TransformKind.SIMPLE
    morph_target_count: int = 0
    animatable: bool = True
    # node_id of the exported parent; local transforms are relative to it
    parent_id: Optional[Hashable] = None


@dataclass
class AnimClipArg:
    """One clip to bake: a time range of the scene sampled at a fixed rate."""
    name: str
    start_time: float
    frame_count: int
    frames_per_second: float = DEFAULT_FRAMES_PER_SECOND

    @classmethod
    def from_range(cls, name: str, start_time: float, end_time: float,
                   frames_per_second: float = DEFAULT_FRAMES_PER_SECOND) -> "AnimClipArg":
        """Clip covering [start_time, end_time] inclusive."""
        frame_count = int(round((end_time - start_time) * frames_per_second)) + 1
        return cls(name, start_time, frame_count, frames_per_second)


@dataclass
class BakeArguments:
    """Settings shared by every clip of one export."""
    constant_translation_threshold: float = DEFAULT_TRANSLATION_THRESHOLD
    constant_rotation_threshold: float = DEFAULT_ROTATION_THRESHOLD
    constant_scaling_threshold: float = DEFAULT_SCALING_THRESHOLD
    constant_weights_threshold: float = DEFAULT_WEIGHTS_THRESHOLD
    scale_factor: float = 1.0
    force_animation_sampling: bool = False
    force_animation_channels: bool = False
    disable_name_assignment: bool = False
    step_detect_sample_count: int = DEFAULT_STEP_DETECT_SAMPLE_COUNT
    redraw_viewport: bool = False
    clips: List[AnimClipArg] = field(default_factory=list)

    def make_name(self, name: str) -> str:
        return "" if self.disable_name_assignment else name

    def validate(self) -> None:
        thresholds = {
            "constant_translation_threshold": self.constant_translation_threshold,
            "constant_rotation_threshold": self.constant_rotation_threshold,
            "constant_scaling_threshold": self.constant_scaling_threshold,
            "constant_weights_threshold": self.constant_weights_threshold,
        }
        for key, value in thresholds.items():
            if value < 0:
                raise BakeConfigurationError(f"{key} must be >= 0, got {value}")
        if self.scale_factor == 0:
            raise BakeConfigurationError("scale_factor must not be 0")

        names = set()
        for clip in self.clips:
            if clip.name in names:
                raise BakeConfigurationError(f"duplicate clip name '{clip.name}'")
            names.add(clip.name)


@dataclass
class AnimationChannel:
    """One baked glTF channel with its keyframes.

    `values` is flat: `len(times) * dimension` floats.
    """
    name: str
    target_node_id: Hashable
    target_role: NodeRole
    path: ChannelPath
    times: Sequence[float]
    values: List[float]
    dimension: int
    interpolation: str = "LINEAR"

    @property
    def keyframe_count(self) -> int:
        return len(self.times)


@dataclass
class AnimationClip:
    """Output of a bake, handed to the document writer."""
    name: str
    frames_name: str = ""
    channels: List[AnimationChannel] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def channels_for(self, node_id: Hashable) -> List[AnimationChannel]:
        return [channel for channel in self.channels if channel.target_node_id == node_id]

    def find_channel(self, node_id: Hashable, role: NodeRole, path: ChannelPath) -> Optional[AnimationChannel]:
        for channel in self.channels:
            if channel.target_node_id == node_id and channel.target_role == role and channel.path == path:
                return channel
        return None
