"""
Scene driven by plain Python callables of time.

Useful for scripted pipelines and for exercising the baker without a host
application.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, List, Optional, Sequence

from mathutils import Matrix

from ..core.types import ExportableNode, TransformKind
from ..core.utils import to_matrix
from .base import SceneAdapter


MatrixFn = Callable[[float], Matrix]
WeightsFn = Callable[[float], Sequence[float]]


@dataclass
class MemoryNode:
    node: ExportableNode
    local: MatrixFn
    corrective: Optional[MatrixFn] = None
    weights: Optional[WeightsFn] = None
    rest_weights: Optional[Sequence[float]] = None


def constant(value) -> Callable[[float], object]:
    """Callable returning the same value at every time"""
    return lambda _time: value


@dataclass
class InMemoryScene(SceneAdapter):
    """Nodes are functions of the scene time.

    The rest pose is the node evaluated at `rest_time` (defaults to 0).
    """
    rest_time: float = 0.0
    current_time: float = 0.0
    nodes: Dict[Hashable, MemoryNode] = field(default_factory=dict)
    time_history: List[float] = field(default_factory=list)

    def add_node(
        self,
        name: str,
        local,
        kind: TransformKind = TransformKind.SIMPLE,
        corrective=None,
        weights: Optional[WeightsFn] = None,
        rest_weights: Optional[Sequence[float]] = None,
        morph_target_count: Optional[int] = None,
        animatable: bool = True,
        node_id: Optional[Hashable] = None,
        parent: Optional[Hashable] = None,
    ) -> ExportableNode:
        """Register a node. `local` and `corrective` may be matrices or callables of time.

        `parent` is the node_id of the node `local` is relative to.
        """
        if node_id is None:
            node_id = name
        if node_id in self.nodes:
            raise ValueError(f"node '{node_id}' already exists")

        if not callable(local):
            local = constant(to_matrix(local))
        if corrective is not None and not callable(corrective):
            corrective = constant(to_matrix(corrective))

        if morph_target_count is None:
            morph_target_count = len(weights(self.rest_time)) if weights else 0

        node = ExportableNode(
            node_id=node_id,
            name=name,
            transform_kind=kind,
            morph_target_count=morph_target_count,
            animatable=animatable,
            parent_id=parent,
        )
        self.nodes[node_id] = MemoryNode(
            node=node,
            local=local,
            corrective=corrective,
            weights=weights,
            rest_weights=rest_weights,
        )
        return node

    def exportable_nodes(self) -> List[ExportableNode]:
        return [entry.node for entry in self.nodes.values()]

    def advance_time_to(self, seconds: float, redraw: bool = False) -> None:
        self.current_time = seconds
        self.time_history.append(seconds)

    def get_local_transform_matrix(self, node_id: Hashable) -> Matrix:
        return to_matrix(self.nodes[node_id].local(self.current_time))

    def get_corrective_matrix(self, node_id: Hashable) -> Matrix:
        entry = self.nodes[node_id]
        if entry.corrective is None:
            return Matrix.Identity(4)
        return to_matrix(entry.corrective(self.current_time))

    def get_rest_local_transform_matrix(self, node_id: Hashable) -> Matrix:
        return to_matrix(self.nodes[node_id].local(self.rest_time))

    def get_rest_corrective_matrix(self, node_id: Hashable) -> Matrix:
        entry = self.nodes[node_id]
        if entry.corrective is None:
            return Matrix.Identity(4)
        return to_matrix(entry.corrective(self.rest_time))

    def get_current_morph_weights(self, node_id: Hashable) -> Sequence[float]:
        entry = self.nodes[node_id]
        if entry.weights is None:
            return []
        return list(entry.weights(self.current_time))

    def get_rest_morph_weights(self, node_id: Hashable) -> Sequence[float]:
        entry = self.nodes[node_id]
        if entry.rest_weights is not None:
            return list(entry.rest_weights)
        if entry.weights is None:
            return []
        return list(entry.weights(self.rest_time))
