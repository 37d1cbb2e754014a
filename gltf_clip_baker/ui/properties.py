"""
Scene properties and property registration for the addon.
"""

import bpy
from bpy.props import (
    BoolProperty,
    FloatProperty,
    IntProperty,
    StringProperty,
)
from bpy.types import PropertyGroup
from ..core.constants import (
    DEFAULT_TRANSLATION_THRESHOLD,
    DEFAULT_ROTATION_THRESHOLD,
    DEFAULT_SCALING_THRESHOLD,
    DEFAULT_WEIGHTS_THRESHOLD,
    DEFAULT_STEP_DETECT_SAMPLE_COUNT,
)
from ..core.types import AnimClipArg, BakeArguments
from ..scene.blender_scene import get_scene_fps


class GltfClipBakerSettings(PropertyGroup):
    clip_name: StringProperty(
        name="Clip Name",
        description="Name of the baked animation clip",
        default="clip",
    )

    constant_translation_threshold: FloatProperty(
        name="Translation Threshold",
        description="Translation channels that never move further than this from the rest pose are dropped",
        default=DEFAULT_TRANSLATION_THRESHOLD,
        min=0.0,
        precision=6,
    )

    constant_rotation_threshold: FloatProperty(
        name="Rotation Threshold",
        description="Quaternion component tolerance for dropping rotation channels",
        default=DEFAULT_ROTATION_THRESHOLD,
        min=0.0,
        precision=6,
    )

    constant_scaling_threshold: FloatProperty(
        name="Scale Threshold",
        description="Tolerance for dropping scale and corrector channels",
        default=DEFAULT_SCALING_THRESHOLD,
        min=0.0,
        precision=6,
    )

    constant_weights_threshold: FloatProperty(
        name="Weights Threshold",
        description="Tolerance for dropping shape key weight channels",
        default=DEFAULT_WEIGHTS_THRESHOLD,
        min=0.0,
        precision=6,
    )

    scale_factor: FloatProperty(
        name="Scale Factor",
        description="Multiplier applied to every baked translation (unit conversion)",
        default=1.0,
    )

    force_animation_sampling: BoolProperty(
        name="Force Sampling",
        description="Write every frame even for channels that never change",
        default=False,
    )

    force_animation_channels: BoolProperty(
        name="Force Channels",
        description="Write a channel for every property, a single key when it never changes",
        default=False,
    )

    disable_name_assignment: BoolProperty(
        name="No Channel Names",
        description="Leave baked channels and accessors unnamed",
        default=False,
    )

    step_detect_sample_count: IntProperty(
        name="Step Detect Samples",
        description="Samples used to detect step curves (1 disables detection)",
        default=DEFAULT_STEP_DETECT_SAMPLE_COUNT,
        min=1,
    )

    redraw_viewport: BoolProperty(
        name="Redraw Viewport",
        description="Redraw the viewport at every baked frame",
        default=False,
    )

    only_animated: BoolProperty(
        name="Only Animated Objects",
        description="Skip objects without animation data, constraints or parents",
        default=True,
    )


def arguments_from_settings(settings, scene) -> BakeArguments:
    """Bake arguments for one clip spanning the scene frame range"""
    fps = get_scene_fps(scene)
    clip = AnimClipArg.from_range(
        settings.clip_name,
        scene.frame_start / fps,
        scene.frame_end / fps,
        fps,
    )
    return BakeArguments(
        constant_translation_threshold=settings.constant_translation_threshold,
        constant_rotation_threshold=settings.constant_rotation_threshold,
        constant_scaling_threshold=settings.constant_scaling_threshold,
        constant_weights_threshold=settings.constant_weights_threshold,
        scale_factor=settings.scale_factor,
        force_animation_sampling=settings.force_animation_sampling,
        force_animation_channels=settings.force_animation_channels,
        disable_name_assignment=settings.disable_name_assignment,
        step_detect_sample_count=settings.step_detect_sample_count,
        redraw_viewport=settings.redraw_viewport,
        clips=[clip],
    )


def register_properties():
    bpy.utils.register_class(GltfClipBakerSettings)
    bpy.types.Scene.gltf_clip_baker_settings = bpy.props.PointerProperty(
        type=GltfClipBakerSettings,
        name="glTF Clip Baker Settings",
    )


def unregister_properties():
    if hasattr(bpy.types.Scene, "gltf_clip_baker_settings"):
        del bpy.types.Scene.gltf_clip_baker_settings
    bpy.utils.unregister_class(GltfClipBakerSettings)
