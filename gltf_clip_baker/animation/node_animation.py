"""
Sampling of one scene node into glTF channels.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..core.constants import MAX_NON_ORTHOGONALITY, MAX_INVALID_TRANSFORM_TIMES
from ..core.transform import SampledTransformState
from ..core.types import (
    AnimationClip,
    BakeArguments,
    ChannelPath,
    ExportableNode,
    NodeRole,
    TransformKind,
)
from ..core.utils import format_times, log_warning
from .channel import ChannelBuffer, ChannelOutcome
from .frames import FrameGrid
from .transform_cache import TransformCache, rest_transform_state


@dataclass(frozen=True)
class ChannelLayout:
    """Which TRS component of which synthetic node feeds a channel.

    `threshold` names the BakeArguments field used for constant detection;
    None marks a placeholder channel, which is never considered constant.
    """
    tag: str
    role: NodeRole
    path: ChannelPath
    threshold: Optional[str]


PRIMARY = NodeRole.PRIMARY
SECONDARY = NodeRole.SECONDARY

CHANNEL_LAYOUTS: Dict[TransformKind, Tuple[ChannelLayout, ...]] = {
    TransformKind.SIMPLE: (
        ChannelLayout("T", PRIMARY, ChannelPath.TRANSLATION, "constant_translation_threshold"),
        ChannelLayout("R", PRIMARY, ChannelPath.ROTATION, "constant_rotation_threshold"),
        ChannelLayout("S", PRIMARY, ChannelPath.SCALE, "constant_scaling_threshold"),
    ),
    TransformKind.COMPLEX_JOINT: (
        ChannelLayout("T", SECONDARY, ChannelPath.TRANSLATION, "constant_translation_threshold"),
        ChannelLayout("R", PRIMARY, ChannelPath.ROTATION, "constant_rotation_threshold"),
        ChannelLayout("S", PRIMARY, ChannelPath.SCALE, "constant_scaling_threshold"),
        ChannelLayout("C", SECONDARY, ChannelPath.SCALE, "constant_scaling_threshold"),
    ),
    TransformKind.COMPLEX_TRANSFORM: (
        ChannelLayout("T", SECONDARY, ChannelPath.TRANSLATION, "constant_translation_threshold"),
        ChannelLayout("R", SECONDARY, ChannelPath.ROTATION, "constant_rotation_threshold"),
        ChannelLayout("S", SECONDARY, ChannelPath.SCALE, "constant_scaling_threshold"),
        ChannelLayout("C", PRIMARY, ChannelPath.TRANSLATION, "constant_scaling_threshold"),
    ),
}

# Added with force_animation_channels so every glTF node gets full TRS coverage
PLACEHOLDER_LAYOUTS: Dict[TransformKind, Tuple[ChannelLayout, ...]] = {
    TransformKind.SIMPLE: (),
    TransformKind.COMPLEX_JOINT: (
        ChannelLayout("DT", PRIMARY, ChannelPath.TRANSLATION, None),
        ChannelLayout("DR", SECONDARY, ChannelPath.ROTATION, None),
    ),
    TransformKind.COMPLEX_TRANSFORM: (
        ChannelLayout("DS", PRIMARY, ChannelPath.SCALE, None),
        ChannelLayout("DR", PRIMARY, ChannelPath.ROTATION, None),
    ),
}

WEIGHTS_LAYOUT = ChannelLayout("W", PRIMARY, ChannelPath.WEIGHTS, "constant_weights_threshold")

COMPONENT_SIZES = {
    ChannelPath.TRANSLATION: 3,
    ChannelPath.ROTATION: 4,
    ChannelPath.SCALE: 3,
}


def get_channel_layouts(kind: TransformKind, force_animation_channels: bool) -> Tuple[ChannelLayout, ...]:
    layouts = CHANNEL_LAYOUTS[kind]
    if force_animation_channels:
        layouts = layouts + PLACEHOLDER_LAYOUTS[kind]
    return layouts


def get_trs_component(state: SampledTransformState, role: NodeRole, path: ChannelPath):
    trs = state.primary_trs if role == NodeRole.PRIMARY else state.secondary_trs
    return getattr(trs, path.value)


class NodeAnimationSampler:
    """Collects the samples of one node over a clip and exports them as channels"""

    def __init__(self, node: ExportableNode, frames: FrameGrid, scene, arguments: BakeArguments):
        self.node = node
        self.frames = frames
        self.scene = scene
        self.arguments = arguments
        self.scale_factor = arguments.scale_factor

        self.channels: List[Tuple[ChannelLayout, ChannelBuffer]] = []
        for layout in get_channel_layouts(node.transform_kind, arguments.force_animation_channels):
            buffer = ChannelBuffer(frames, node.node_id, layout.role, layout.path, COMPONENT_SIZES[layout.path])
            self.channels.append((layout, buffer))

        self.weights: Optional[ChannelBuffer] = None
        if node.morph_target_count > 0:
            self.weights = ChannelBuffer(
                frames, node.node_id, WEIGHTS_LAYOUT.role, ChannelPath.WEIGHTS, node.morph_target_count
            )

        # First offending sample times, capped; the worst deviation is tracked over those
        self.invalid_transform_times: List[float] = []
        self.max_non_orthogonality = 0.0
        self.outcomes: Dict[str, ChannelOutcome] = {}

    @property
    def buffer_count(self) -> int:
        return len(self.channels) + (1 if self.weights else 0)

    def buffer(self, tag: str) -> Optional[ChannelBuffer]:
        if tag == WEIGHTS_LAYOUT.tag:
            return self.weights
        for layout, buffer in self.channels:
            if layout.tag == tag:
                return buffer
        return None

    def sample_at(self, absolute_time: float, frame_index: int, cache: TransformCache) -> None:
        state = cache.get_transform(self.node, self.scale_factor)

        if (state.max_non_orthogonality > MAX_NON_ORTHOGONALITY
                and len(self.invalid_transform_times) < MAX_INVALID_TRANSFORM_TIMES):
            self.max_non_orthogonality = max(self.max_non_orthogonality, state.max_non_orthogonality)
            self.invalid_transform_times.append(absolute_time)

        for layout, buffer in self.channels:
            assert buffer.sampled_frame_count == frame_index, "frames must be sampled once each, in order"
            values = get_trs_component(state, layout.role, layout.path)
            if layout.path == ChannelPath.ROTATION:
                buffer.append_quaternion(values)
            else:
                buffer.append(values)

        if self.weights:
            weights = self.scene.get_current_morph_weights(self.node.node_id)
            assert len(weights) == self.node.morph_target_count, (
                f"node '{self.node.name}' reported {len(weights)} weights, expected {self.node.morph_target_count}"
            )
            self.weights.append(weights)

    def rest_state(self) -> SampledTransformState:
        return rest_transform_state(self.scene, self.node, self.scale_factor)

    def warn_invalid_transforms(self, clip: AnimationClip) -> None:
        if not self.invalid_transform_times:
            return

        # TODO: decompose sheared matrices with an SVD instead of dropping the shear
        message = (
            f"node '{self.node.name}' has animated transforms that are not representable by glTF! "
            f"Skewing is not supported, use 3 nodes to simulate this. "
            f"Largest deviation = {self.max_non_orthogonality * 100:.2f}%. "
            f"The first invalid transforms were found at times: {format_times(self.invalid_transform_times)}"
        )
        log_warning(message)
        clip.warnings.append(message)

    def channel_name(self, clip: AnimationClip, tag: str) -> str:
        return self.arguments.make_name(f"{self.node.name}/anim/{clip.name}/{tag}")

    def export_to(self, clip: AnimationClip) -> Dict[str, ChannelOutcome]:
        """Finalize every buffer against the rest pose and add the surviving channels to `clip`"""
        self.warn_invalid_transforms(clip)

        arguments = self.arguments
        rest = self.rest_state()

        for layout, buffer in self.channels:
            threshold = getattr(arguments, layout.threshold) if layout.threshold else 0.0
            base_values = get_trs_component(rest, layout.role, layout.path)
            self._finish(clip, layout.tag, buffer, base_values, threshold)

        if self.weights:
            rest_weights = self.scene.get_rest_morph_weights(self.node.node_id)
            assert len(rest_weights) == self.node.morph_target_count, (
                f"node '{self.node.name}' reported {len(rest_weights)} rest weights, "
                f"expected {self.node.morph_target_count}"
            )
            self._finish(clip, WEIGHTS_LAYOUT.tag, self.weights, rest_weights, arguments.constant_weights_threshold)

        return self.outcomes

    def _finish(self, clip, tag, buffer, base_values, threshold):
        arguments = self.arguments
        outcome, channel = buffer.finalize(
            self.channel_name(clip, tag),
            base_values,
            threshold,
            force_sampling=arguments.force_animation_sampling,
            force_channel=arguments.force_animation_channels,
            detect_step_sample_count=arguments.step_detect_sample_count,
        )
        self.outcomes[tag] = outcome
        if channel is not None:
            clip.channels.append(channel)
