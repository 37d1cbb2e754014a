"""
Contract between the baker and the host scene.

The host owns the node hierarchy and its evaluation. The baker only moves the
host's time cursor forward and reads back local transforms and morph weights.
"""

from typing import Hashable, List, Sequence

from mathutils import Matrix

from ..core.types import ExportableNode


class SceneAdapter:
    """Base class for host scenes. Subclasses implement every query."""

    def exportable_nodes(self) -> List[ExportableNode]:
        raise NotImplementedError

    def advance_time_to(self, seconds: float, redraw: bool = False) -> None:
        """Move the scene's time cursor and re-evaluate every node"""
        raise NotImplementedError

    def get_local_transform_matrix(self, node_id: Hashable) -> Matrix:
        raise NotImplementedError

    def get_corrective_matrix(self, node_id: Hashable) -> Matrix:
        """Scale compensation (joints) or pivot offset (complex transforms)"""
        return Matrix.Identity(4)

    def get_rest_local_transform_matrix(self, node_id: Hashable) -> Matrix:
        raise NotImplementedError

    def get_rest_corrective_matrix(self, node_id: Hashable) -> Matrix:
        return Matrix.Identity(4)

    def get_current_morph_weights(self, node_id: Hashable) -> Sequence[float]:
        return []

    def get_rest_morph_weights(self, node_id: Hashable) -> Sequence[float]:
        return []
