"""
UI module for the glTF Clip Baker addon.

This module contains the UI panel and the scene settings.
"""

from .panels import (
    OBJECT_PT_GltfClipBaker,
)
from .properties import (
    GltfClipBakerSettings,
    arguments_from_settings,
    register_properties,
    unregister_properties,
)

__all__ = [
    # Panels
    "OBJECT_PT_GltfClipBaker",
    # Properties
    "GltfClipBakerSettings",
    "arguments_from_settings",
    "register_properties",
    "unregister_properties",
]
