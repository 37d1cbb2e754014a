"""
glTF Clip Baker Blender Addon

Bakes node transforms and shape key weights of the scene into glTF animation
channels, dropping channels that never leave their rest pose.
"""

# Define bl_info directly to avoid import issues
bl_info = {
    "name": "glTF Clip Baker",
    "description": "Bake scene animation into glTF translation/rotation/scale/weights channels.",
    "author": "glTF Clip Baker contributors",
    "version": (1, 0, 0),
    "blender": (2, 80, 0),
    "location": "View3D > Sidebar > glTF Bake",
    "category": "Import-Export",
}


def file_export_extend(self, context):
    """Add export option to the file menu"""
    from . import operators
    self.layout.operator(operators.OBJECT_OT_GltfClipBake.bl_idname,
                         text="Baked glTF Clip (.gltf)")


def _classes():
    from . import operators, ui
    return (
        operators.OBJECT_OT_GltfClipBake,
        ui.OBJECT_PT_GltfClipBaker,
    )


def register():
    """Register the addon"""
    import bpy
    from . import ui

    # Robust register: if already registered, unregister then re-register
    for cls in _classes():
        try:
            bpy.utils.register_class(cls)
        except ValueError:
            bpy.utils.unregister_class(cls)
            bpy.utils.register_class(cls)

    if hasattr(bpy.types.Scene, "gltf_clip_baker_settings"):
        ui.unregister_properties()
    ui.register_properties()

    # remove if already appended to avoid duplicates
    bpy.types.TOPBAR_MT_file_export.remove(file_export_extend)
    bpy.types.TOPBAR_MT_file_export.append(file_export_extend)


def unregister():
    """Unregister the addon"""
    import bpy
    from . import ui

    bpy.types.TOPBAR_MT_file_export.remove(file_export_extend)

    if hasattr(bpy.types.Scene, "gltf_clip_baker_settings"):
        ui.unregister_properties()

    for cls in reversed(_classes()):
        bpy.utils.unregister_class(cls)


if __name__ == "__main__":
    register()
