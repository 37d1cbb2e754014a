"""
Decomposition of authored local transforms into glTF TRS triples.

A node either maps onto one glTF node (SIMPLE) or is split over a secondary
(outer) and a primary (inner) glTF node so that `secondary @ primary`
reproduces the authored local matrix:

- COMPLEX_JOINT: the corrective matrix is the joint's scale compensation.
  The secondary node holds the local translation and that corrective scale,
  the primary node holds rotation and scale.
- COMPLEX_TRANSFORM: the corrective matrix is the pivot offset (translation
  only). It becomes the primary node; the secondary node holds the rest.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from mathutils import Matrix, Quaternion

from .types import TransformKind


Vec3 = Tuple[float, float, float]
Quat = Tuple[float, float, float, float]


@dataclass(frozen=True)
class TRS:
    """Translation, rotation (x, y, z, w as in glTF) and scale."""
    translation: Vec3 = (0.0, 0.0, 0.0)
    rotation: Quat = (0.0, 0.0, 0.0, 1.0)
    scale: Vec3 = (1.0, 1.0, 1.0)

    def to_matrix(self, scale_factor: float = 1.0) -> Matrix:
        """Compose back to a 4x4 matrix, undoing the translation scale factor"""
        x, y, z, w = self.rotation
        loc = Matrix.Translation([c / scale_factor for c in self.translation])
        rot = Quaternion((w, x, y, z)).to_matrix().to_4x4()
        scale = Matrix.Diagonal(self.scale).to_4x4()
        return loc @ rot @ scale


IDENTITY_TRS = TRS()


@dataclass(frozen=True)
class SampledTransformState:
    """Decomposed transform of one node at one instant."""
    primary_trs: TRS
    secondary_trs: TRS = IDENTITY_TRS
    max_non_orthogonality: float = 0.0

    def to_matrix(self, scale_factor: float = 1.0) -> Matrix:
        return self.secondary_trs.to_matrix(scale_factor) @ self.primary_trs.to_matrix(scale_factor)


def non_orthogonality(mat: Matrix) -> float:
    """Largest absolute cosine between two axes of the rotation-scale block.

    0 means the block is a rotation times a scale; anything else is shear.
    Degenerate (zero length) axes are ignored.
    """
    block = mat.to_3x3()
    axes = []
    for index in range(3):
        axis = block.col[index].copy()
        if axis.length > 1e-12:
            axes.append(axis.normalized())

    deviation = 0.0
    for i in range(len(axes)):
        for j in range(i + 1, len(axes)):
            deviation = max(deviation, abs(axes[i].dot(axes[j])))
    return deviation


def trs_from_matrix(mat: Matrix, scale_factor: float = 1.0) -> TRS:
    loc, rot, scale = mat.decompose()
    return TRS(
        translation=(loc.x * scale_factor, loc.y * scale_factor, loc.z * scale_factor),
        rotation=(rot.x, rot.y, rot.z, rot.w),
        scale=(scale.x, scale.y, scale.z),
    )


def decompose_transform(
    kind: TransformKind,
    local_matrix: Matrix,
    corrective_matrix: Optional[Matrix] = None,
    scale_factor: float = 1.0,
) -> SampledTransformState:
    """Split a local matrix into primary and secondary TRS according to `kind`"""
    if corrective_matrix is None:
        corrective_matrix = Matrix.Identity(4)

    if kind == TransformKind.SIMPLE:
        primary = local_matrix
        secondary = None
    elif kind == TransformKind.COMPLEX_JOINT:
        secondary = Matrix.Translation(local_matrix.to_translation()) @ corrective_matrix
        primary = secondary.inverted() @ local_matrix
    elif kind == TransformKind.COMPLEX_TRANSFORM:
        primary = corrective_matrix
        secondary = local_matrix @ corrective_matrix.inverted()
    else:
        raise AssertionError(f"unknown transform kind {kind!r}")

    deviation = non_orthogonality(primary)
    if secondary is None:
        return SampledTransformState(
            primary_trs=trs_from_matrix(primary, scale_factor),
            max_non_orthogonality=deviation,
        )

    deviation = max(deviation, non_orthogonality(secondary))
    return SampledTransformState(
        primary_trs=trs_from_matrix(primary, scale_factor),
        secondary_trs=trs_from_matrix(secondary, scale_factor),
        max_non_orthogonality=deviation,
    )
