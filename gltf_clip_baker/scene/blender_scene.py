"""
Blender host scene: objects become nodes, shape keys become morph targets.
"""

import math
from typing import Dict, Hashable, List, Optional, Sequence

import bpy
from mathutils import Matrix

from ..core.types import ExportableNode, TransformKind
from .base import SceneAdapter


def get_scene_fps(scene=None):
    """Get the current scene FPS"""
    scene = scene or bpy.context.scene
    return scene.render.fps / scene.render.fps_base


def get_shape_key_blocks(obj) -> List:
    """Shape keys of a mesh object, without the basis key"""
    data = getattr(obj, "data", None)
    shape_keys = getattr(data, "shape_keys", None)
    if obj.type != "MESH" or not shape_keys:
        return []
    return list(shape_keys.key_blocks)[1:]


def is_animatable(obj) -> bool:
    """Objects with nothing that can change over time are skipped"""
    if obj.animation_data or obj.constraints or obj.parent:
        return True
    shape_keys = getattr(getattr(obj, "data", None), "shape_keys", None)
    return bool(shape_keys and shape_keys.animation_data)


def get_exported_parent(obj, objects) -> Optional[Hashable]:
    """Name of the parent object when it is exported too; otherwise the object is a root"""
    parent = obj.parent
    if parent is not None and parent.name in objects:
        return parent.name
    return None


class BlenderScene(SceneAdapter):
    """Wraps a `bpy.types.Scene`.

    The rest pose is the state of the scene when the adapter is created.
    """

    def __init__(self, scene=None, objects: Optional[Sequence] = None, only_animated: bool = False):
        self.scene = scene or bpy.context.scene
        self.fps = get_scene_fps(self.scene)
        self.original_frame = self.scene.frame_current
        self.only_animated = only_animated

        if objects is None:
            objects = [obj for obj in self.scene.objects if obj.type in {"MESH", "EMPTY", "ARMATURE", "CAMERA", "LIGHT"}]
        self.objects: Dict[Hashable, object] = {obj.name: obj for obj in objects}

        self.rest_matrices: Dict[Hashable, Matrix] = {}
        self.rest_weights: Dict[Hashable, List[float]] = {}
        for name, obj in self.objects.items():
            self.rest_matrices[name] = obj.matrix_local.copy()
            self.rest_weights[name] = [block.value for block in get_shape_key_blocks(obj)]

    def exportable_nodes(self) -> List[ExportableNode]:
        nodes = []
        for name, obj in self.objects.items():
            nodes.append(ExportableNode(
                node_id=name,
                name=name,
                transform_kind=TransformKind.SIMPLE,
                morph_target_count=len(get_shape_key_blocks(obj)),
                animatable=is_animatable(obj) if self.only_animated else True,
                parent_id=get_exported_parent(obj, self.objects),
            ))
        return nodes

    def advance_time_to(self, seconds: float, redraw: bool = False) -> None:
        frame_float = seconds * self.fps
        frame = math.floor(frame_float)
        # frame_set() re-evaluates the depsgraph
        self.scene.frame_set(frame, subframe=frame_float - frame)
        if redraw:
            bpy.ops.wm.redraw_timer(type="DRAW_WIN_SWAP", iterations=1)

    def restore_time(self) -> None:
        self.scene.frame_set(self.original_frame)

    def get_local_transform_matrix(self, node_id: Hashable) -> Matrix:
        return self.objects[node_id].matrix_local.copy()

    def get_rest_local_transform_matrix(self, node_id: Hashable) -> Matrix:
        return self.rest_matrices[node_id]

    def get_current_morph_weights(self, node_id: Hashable) -> Sequence[float]:
        return [block.value for block in get_shape_key_blocks(self.objects[node_id])]

    def get_rest_morph_weights(self, node_id: Hashable) -> Sequence[float]:
        return self.rest_weights[node_id]
