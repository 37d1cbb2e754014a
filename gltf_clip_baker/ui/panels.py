"""
UI panels for the glTF Clip Baker addon.
"""

import bpy


class OBJECT_PT_GltfClipBaker(bpy.types.Panel):
    bl_label = "glTF Clip Baker"
    bl_idname = "OBJECT_PT_GltfClipBaker"
    bl_category = "glTF Bake"  # Create a dedicated tab
    bl_space_type = "VIEW_3D"
    bl_region_type = "UI"

    @classmethod
    def poll(cls, context):
        return getattr(context.scene, "gltf_clip_baker_settings", None) is not None

    def draw(self, context):
        layout = self.layout
        scene = context.scene
        settings = scene.gltf_clip_baker_settings

        clip_box = layout.box()
        clip_box.label(text="Clip", icon='ACTION')
        clip_box.prop(settings, "clip_name")
        row = clip_box.row(align=True)
        row.prop(scene, "frame_start", text="Start")
        row.prop(scene, "frame_end", text="End")
        clip_box.prop(settings, "only_animated")

        channel_box = layout.box()
        channel_box.label(text="Channels", icon='GRAPH')
        channel_box.prop(settings, "constant_translation_threshold")
        channel_box.prop(settings, "constant_rotation_threshold")
        channel_box.prop(settings, "constant_scaling_threshold")
        channel_box.prop(settings, "constant_weights_threshold")
        channel_box.prop(settings, "scale_factor")
        row = channel_box.row(align=True)
        row.prop(settings, "force_animation_sampling", toggle=True)
        row.prop(settings, "force_animation_channels", toggle=True)
        channel_box.prop(settings, "disable_name_assignment")
        channel_box.prop(settings, "redraw_viewport")

        row = layout.row()
        row.scale_y = 1.5
        row.operator("object.gltf_clip_bake", text="Bake Clip (.gltf)", icon='EXPORT')
