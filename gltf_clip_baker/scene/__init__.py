"""
Scene module for the glTF Clip Baker addon.

Host scenes the baker samples from. `BlenderScene` lives in
`scene.blender_scene` and is imported on demand since it needs `bpy`.
"""

from .base import SceneAdapter
from .memory import InMemoryScene, MemoryNode, constant

__all__ = [
    "SceneAdapter",
    "InMemoryScene",
    "MemoryNode",
    "constant",
]
