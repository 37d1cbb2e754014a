"""
glTF 2.0 layout of a baked clip.

Produces a self-contained document: the node hierarchy in its rest pose, one
scene, and the `animations`, `accessors`, `bufferViews` and `buffers` entries
for the clip, with all keyframe data packed little-endian float32 into a
single base64 data URI buffer.
"""

import base64
import json
import struct
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Mapping, Sequence, Tuple

from ..core.constants import GLTF_FLOAT, version
from ..core.transform import TRS
from ..core.types import AnimationChannel, AnimationClip, ChannelPath, NodeRole, TransformKind
from .transform_cache import rest_transform_state


ACCESSOR_TYPES = {1: "SCALAR", 3: "VEC3", 4: "VEC4"}

NodeKey = Tuple[Hashable, NodeRole]


@dataclass
class GltfBuffer:
    data: bytearray = field(default_factory=bytearray)
    buffer_views: List[dict] = field(default_factory=list)
    accessors: List[dict] = field(default_factory=list)

    def add_floats(self, values: Sequence[float]) -> int:
        # 4-byte alignment holds trivially for float data
        blob = struct.pack(f"<{len(values)}f", *values)
        self.buffer_views.append({
            "buffer": 0,
            "byteOffset": len(self.data),
            "byteLength": len(blob),
        })
        self.data.extend(blob)
        return len(self.buffer_views) - 1

    def add_accessor(self, values: Sequence[float], type_: str, count: int, name: str = "", min_max: bool = False) -> int:
        acc = {
            "bufferView": self.add_floats(values),
            "componentType": GLTF_FLOAT,
            "count": count,
            "type": type_,
        }
        if name:
            acc["name"] = name
        if min_max:
            acc["min"] = [min(values)]
            acc["max"] = [max(values)]
        self.accessors.append(acc)
        return len(self.accessors) - 1

    def to_uri(self) -> str:
        return "data:application/octet-stream;base64," + base64.b64encode(bytes(self.data)).decode("ascii")


@dataclass
class GltfNodeLayout:
    """glTF nodes of the exported scene nodes.

    `indices` maps `(node_id, NodeRole)` to a position in `nodes`. Complex
    nodes get a secondary node whose only child is the primary node; the
    primary node parents the children of the scene node.
    """
    nodes: List[dict] = field(default_factory=list)
    indices: Dict[NodeKey, int] = field(default_factory=dict)
    roots: List[int] = field(default_factory=list)

    def add_node(self, name: str, trs: TRS) -> int:
        self.nodes.append({
            "name": name,
            "translation": list(trs.translation),
            "rotation": list(trs.rotation),
            "scale": list(trs.scale),
        })
        return len(self.nodes) - 1

    def add_child(self, parent: int, child: int) -> None:
        self.nodes[parent].setdefault("children", []).append(child)


def layout_nodes(scene, scale_factor: float = 1.0) -> GltfNodeLayout:
    """Build the glTF node hierarchy of every exportable node of `scene` at rest"""
    layout = GltfNodeLayout()
    exported = scene.exportable_nodes()

    # glTF node that takes the place of each scene node under its parent
    outer: Dict[Hashable, int] = {}
    for node in exported:
        rest = rest_transform_state(scene, node, scale_factor)
        primary = layout.add_node(node.name, rest.primary_trs)
        layout.indices[(node.node_id, NodeRole.PRIMARY)] = primary
        outer[node.node_id] = primary

        if node.transform_kind != TransformKind.SIMPLE:
            secondary = layout.add_node(f"{node.name}/{NodeRole.SECONDARY.value}", rest.secondary_trs)
            layout.add_child(secondary, primary)
            layout.indices[(node.node_id, NodeRole.SECONDARY)] = secondary
            outer[node.node_id] = secondary

    for node in exported:
        if node.parent_id is None:
            layout.roots.append(outer[node.node_id])
            continue
        parent = layout.indices.get((node.parent_id, NodeRole.PRIMARY))
        if parent is None:
            raise KeyError(f"parent '{node.parent_id}' of node '{node.name}' is not exported")
        layout.add_child(parent, outer[node.node_id])

    return layout


def resolve_node_index(node_indices: Mapping[NodeKey, int], channel: AnimationChannel) -> int:
    key = (channel.target_node_id, channel.target_role)
    if key in node_indices:
        return node_indices[key]
    raise KeyError(f"no glTF node for {channel.target_role.value} node of '{channel.target_node_id}'")


def clip_to_gltf(clip: AnimationClip, layout: GltfNodeLayout) -> Dict[str, Any]:
    """Lay out `clip` over the nodes of `layout` as a glTF document.

    Top-level arrays that would be empty are left out.
    """
    buf = GltfBuffer()
    time_accessors: Dict[Tuple[float, ...], int] = {}

    samplers = []
    channels = []
    for channel in clip.channels:
        times = tuple(channel.times)
        input_acc = time_accessors.get(times)
        if input_acc is None:
            name = clip.frames_name if len(times) > 1 else ""
            input_acc = buf.add_accessor(times, "SCALAR", len(times), name=name, min_max=True)
            time_accessors[times] = input_acc

        if channel.path == ChannelPath.WEIGHTS:
            type_, count = "SCALAR", len(channel.values)
        else:
            type_, count = ACCESSOR_TYPES[channel.dimension], len(times)
        output_acc = buf.add_accessor(channel.values, type_, count, name=channel.name)

        samplers.append({
            "input": input_acc,
            "output": output_acc,
            "interpolation": channel.interpolation,
        })
        entry = {
            "sampler": len(samplers) - 1,
            "target": {
                "node": resolve_node_index(layout.indices, channel),
                "path": channel.path.value,
            },
        }
        if channel.name:
            entry["extras"] = {"name": channel.name}
        channels.append(entry)

    scene = {"nodes": list(layout.roots)} if layout.roots else {}
    document = {
        "asset": {"version": "2.0", "generator": f"glTF Clip Baker {version}"},
        "scene": 0,
        "scenes": [scene],
    }
    if layout.nodes:
        document["nodes"] = layout.nodes
    if channels:
        document["animations"] = [{"name": clip.name, "samplers": samplers, "channels": channels}]
        document["accessors"] = buf.accessors
        document["bufferViews"] = buf.buffer_views
        document["buffers"] = [{"byteLength": len(buf.data), "uri": buf.to_uri()}]
    return document


def write_gltf_animation(filepath: str, clip: AnimationClip, layout: GltfNodeLayout) -> Dict[str, Any]:
    document = clip_to_gltf(clip, layout)
    with open(filepath, "w", encoding="utf-8") as file:
        json.dump(document, file, indent=2)
    return document
