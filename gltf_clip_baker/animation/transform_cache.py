"""
Per-frame memoization of decomposed node transforms.
"""

from typing import Dict, Hashable

from ..core.transform import SampledTransformState, decompose_transform
from ..core.types import ExportableNode, TransformKind


class TransformCache:
    """Decomposed transforms of the scene at its current time.

    Create one per frame: entries are never invalidated, so a cache that
    outlives a time change would hand out stale transforms.
    """

    def __init__(self, scene):
        self.scene = scene
        self._states: Dict[Hashable, SampledTransformState] = {}

    def __len__(self):
        return len(self._states)

    def __contains__(self, node_id):
        return node_id in self._states

    def get_transform(self, node: ExportableNode, scale_factor: float = 1.0) -> SampledTransformState:
        state = self._states.get(node.node_id)
        if state is None:
            corrective = None
            if node.transform_kind != TransformKind.SIMPLE:
                corrective = self.scene.get_corrective_matrix(node.node_id)
            state = decompose_transform(
                node.transform_kind,
                self.scene.get_local_transform_matrix(node.node_id),
                corrective,
                scale_factor,
            )
            self._states[node.node_id] = state
        return state


def rest_transform_state(scene, node: ExportableNode, scale_factor: float = 1.0) -> SampledTransformState:
    """Decomposed rest pose of `node`, split the same way as its animated samples"""
    corrective = None
    if node.transform_kind != TransformKind.SIMPLE:
        corrective = scene.get_rest_corrective_matrix(node.node_id)
    return decompose_transform(
        node.transform_kind,
        scene.get_rest_local_transform_matrix(node.node_id),
        corrective,
        scale_factor,
    )
