"""
Operators module for the glTF Clip Baker addon.

This module contains the Blender operators (actions) for the addon.
"""

from .bake_ops import (
    OBJECT_OT_GltfClipBake,
)

__all__ = [
    # Bake operators
    "OBJECT_OT_GltfClipBake",
]
