"""
Bake operator: samples the scene frame range into a glTF animation file.
"""

import bpy
from bpy.types import Operator
from bpy_extras.io_utils import ExportHelper
from bpy.props import StringProperty
from ..animation.clip import bake_clips
from ..animation.gltf import layout_nodes, write_gltf_animation
from ..core.types import BakeConfigurationError
from ..scene.blender_scene import BlenderScene
from ..ui.properties import arguments_from_settings


class OBJECT_OT_GltfClipBake(Operator, ExportHelper):
    bl_label = "Bake glTF Clip"
    bl_idname = "object.gltf_clip_bake"
    bl_description = "Sample the scene frame range and write the baked channels as a glTF animation"

    # ExportHelper mixin class uses this
    filename_ext = ".gltf"

    filter_glob: StringProperty(
        default="*.gltf",
        options={'HIDDEN'},
        maxlen=255,  # Max internal buffer length, longer would be clamped.
    )

    @classmethod
    def poll(cls, context):
        return getattr(context.scene, "gltf_clip_baker_settings", None) is not None

    def execute(self, context):
        settings = context.scene.gltf_clip_baker_settings

        try:
            arguments = arguments_from_settings(settings, context.scene)
            arguments.validate()
        except BakeConfigurationError as e:
            self.report({"ERROR"}, f"Invalid bake settings: {e}")
            return {"CANCELLED"}

        scene = BlenderScene(context.scene, only_animated=settings.only_animated)
        layout = layout_nodes(scene, arguments.scale_factor)

        try:
            clips = bake_clips(arguments, scene)
        except BakeConfigurationError as e:
            self.report({"ERROR"}, f"Invalid clip: {e}")
            return {"CANCELLED"}
        finally:
            scene.restore_time()

        clip = clips[0]
        write_gltf_animation(self.filepath, clip, layout)

        for warning in clip.warnings:
            self.report({"WARNING"}, warning)

        self.report(
            {"INFO"},
            f"Baked clip '{clip.name}' to {self.filepath} ({len(clip.channels)} channels, "
            f"{arguments.clips[0].frame_count} frames at {arguments.clips[0].frames_per_second:g} FPS).",
        )
        return {"FINISHED"}
