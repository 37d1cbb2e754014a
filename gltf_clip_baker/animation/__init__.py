"""
Animation module for the glTF Clip Baker addon.

This module handles frame sampling, channel synthesis and the glTF layout of
baked clips.
"""

from .frames import FrameGrid
from .transform_cache import TransformCache, rest_transform_state
from .channel import ChannelBuffer, ChannelOutcome
from .node_animation import (
    CHANNEL_LAYOUTS,
    PLACEHOLDER_LAYOUTS,
    ChannelLayout,
    NodeAnimationSampler,
    get_channel_layouts,
)
from .clip import ClipBaker, bake_clip, bake_clips
from .gltf import GltfNodeLayout, clip_to_gltf, layout_nodes, write_gltf_animation

__all__ = [
    # Sampling
    "FrameGrid",
    "TransformCache",
    "rest_transform_state",
    "ChannelBuffer",
    "ChannelOutcome",
    "CHANNEL_LAYOUTS",
    "PLACEHOLDER_LAYOUTS",
    "ChannelLayout",
    "NodeAnimationSampler",
    "get_channel_layouts",
    # Clips
    "ClipBaker",
    "bake_clip",
    "bake_clips",
    # glTF
    "GltfNodeLayout",
    "layout_nodes",
    "clip_to_gltf",
    "write_gltf_animation",
]
