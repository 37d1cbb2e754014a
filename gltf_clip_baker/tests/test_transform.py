import math
import unittest

import mathutils
from mathutils import Matrix

from ..core import utils
from ..core.transform import (
    IDENTITY_TRS,
    TRS,
    decompose_transform,
    non_orthogonality,
    trs_from_matrix,
)
from ..core.types import TransformKind


def sheared(amount):
    """Unit axes where Y leans towards X so that cos(X, Y) == amount"""
    return Matrix((
        (1.0, amount, 0.0, 0.0),
        (0.0, math.sqrt(1.0 - amount * amount), 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    ))


def sample_local():
    return (
        Matrix.Translation((1.0, -2.0, 3.5))
        @ Matrix.Rotation(math.radians(30.0), 4, "Z")
        @ Matrix.Rotation(math.radians(-45.0), 4, "X")
        @ Matrix.Diagonal((2.0, 0.5, 1.5)).to_4x4()
    )


class TestTRS(unittest.TestCase):
    def assertMatrixAlmostEqual(self, a, b, places=5):
        for row in range(4):
            for col in range(4):
                self.assertAlmostEqual(a[row][col], b[row][col], places=places)

    def test_identity(self):
        self.assertEqual(IDENTITY_TRS.translation, (0.0, 0.0, 0.0))
        self.assertEqual(IDENTITY_TRS.rotation, (0.0, 0.0, 0.0, 1.0))
        self.assertEqual(IDENTITY_TRS.scale, (1.0, 1.0, 1.0))
        self.assertMatrixAlmostEqual(IDENTITY_TRS.to_matrix(), Matrix.Identity(4))

    def test_rotation_is_stored_xyzw(self):
        trs = trs_from_matrix(Matrix.Rotation(math.radians(90.0), 4, "Z"))
        x, y, z, w = trs.rotation
        self.assertAlmostEqual(x, 0.0, places=6)
        self.assertAlmostEqual(y, 0.0, places=6)
        self.assertAlmostEqual(abs(z), math.sqrt(0.5), places=6)
        self.assertAlmostEqual(abs(w), math.sqrt(0.5), places=6)

    def test_translation_is_scaled(self):
        trs = trs_from_matrix(Matrix.Translation((1.0, 2.0, 3.0)), scale_factor=0.01)
        for actual, expected in zip(trs.translation, (0.01, 0.02, 0.03)):
            self.assertAlmostEqual(actual, expected, places=6)

    def test_round_trip_with_scale_factor(self):
        mat = sample_local()
        trs = trs_from_matrix(mat, scale_factor=100.0)
        self.assertMatrixAlmostEqual(trs.to_matrix(scale_factor=100.0), mat, places=4)

    def test_explicit_trs_to_matrix(self):
        trs = TRS(translation=(1.0, 0.0, 0.0), scale=(2.0, 2.0, 2.0))
        expected = Matrix.Translation((1.0, 0.0, 0.0)) @ Matrix.Diagonal((2.0, 2.0, 2.0)).to_4x4()
        self.assertMatrixAlmostEqual(trs.to_matrix(), expected)


class TestNonOrthogonality(unittest.TestCase):
    def test_rotation_scale_is_orthogonal(self):
        self.assertLess(non_orthogonality(sample_local()), 1e-5)

    def test_identity_is_orthogonal(self):
        self.assertEqual(non_orthogonality(Matrix.Identity(4)), 0.0)

    def test_shear_is_measured_as_axis_cosine(self):
        self.assertAlmostEqual(non_orthogonality(sheared(0.05)), 0.05, places=6)

    def test_shear_survives_rotation(self):
        mat = Matrix.Rotation(math.radians(70.0), 4, "Y") @ sheared(0.2)
        self.assertAlmostEqual(non_orthogonality(mat), 0.2, places=5)

    def test_degenerate_axis_is_ignored(self):
        mat = Matrix.Diagonal((1.0, 0.0, 1.0)).to_4x4()
        self.assertEqual(non_orthogonality(mat), 0.0)


class TestDecomposeTransform(unittest.TestCase):
    def assertMatrixAlmostEqual(self, a, b, places=4):
        for row in range(4):
            for col in range(4):
                self.assertAlmostEqual(a[row][col], b[row][col], places=places)

    def test_simple_uses_primary_only(self):
        mat = sample_local()
        state = decompose_transform(TransformKind.SIMPLE, mat)
        self.assertEqual(state.secondary_trs, IDENTITY_TRS)
        self.assertMatrixAlmostEqual(state.primary_trs.to_matrix(), mat)
        self.assertLess(state.max_non_orthogonality, 1e-5)

    def test_simple_round_trip(self):
        mat = sample_local()
        state = decompose_transform(TransformKind.SIMPLE, mat)
        self.assertMatrixAlmostEqual(state.to_matrix(), mat)

    def test_complex_joint_round_trip(self):
        mat = sample_local()
        corrective = Matrix.Diagonal((0.5, 0.5, 0.5)).to_4x4()
        state = decompose_transform(TransformKind.COMPLEX_JOINT, mat, corrective)
        self.assertMatrixAlmostEqual(state.to_matrix(), mat)

    def test_complex_joint_split(self):
        mat = sample_local()
        corrective = Matrix.Diagonal((0.5, 0.5, 0.5)).to_4x4()
        state = decompose_transform(TransformKind.COMPLEX_JOINT, mat, corrective)

        # translation and corrective scale live on the secondary node
        for actual, expected in zip(state.secondary_trs.translation, (1.0, -2.0, 3.5)):
            self.assertAlmostEqual(actual, expected, places=5)
        for actual in state.secondary_trs.scale:
            self.assertAlmostEqual(actual, 0.5, places=5)
        for actual in state.primary_trs.translation:
            self.assertAlmostEqual(actual, 0.0, places=5)
        for actual, expected in zip(state.primary_trs.scale, (4.0, 1.0, 3.0)):
            self.assertAlmostEqual(actual, expected, places=4)

    def test_complex_transform_round_trip(self):
        mat = sample_local()
        pivot = Matrix.Translation((-0.25, 0.75, 2.0))
        state = decompose_transform(TransformKind.COMPLEX_TRANSFORM, mat, pivot)
        self.assertMatrixAlmostEqual(state.to_matrix(), mat)

    def test_complex_transform_split(self):
        mat = sample_local()
        pivot = Matrix.Translation((-0.25, 0.75, 2.0))
        state = decompose_transform(TransformKind.COMPLEX_TRANSFORM, mat, pivot)

        # primary node carries only the pivot offset
        for actual, expected in zip(state.primary_trs.translation, (-0.25, 0.75, 2.0)):
            self.assertAlmostEqual(actual, expected, places=5)
        self.assertEqual(state.primary_trs.scale, (1.0, 1.0, 1.0))
        for actual, expected in zip(state.secondary_trs.scale, (2.0, 0.5, 1.5)):
            self.assertAlmostEqual(actual, expected, places=4)

    def test_missing_corrective_means_identity(self):
        mat = sample_local()
        state = decompose_transform(TransformKind.COMPLEX_JOINT, mat)
        self.assertMatrixAlmostEqual(state.to_matrix(), mat)
        for actual in state.secondary_trs.scale:
            self.assertAlmostEqual(actual, 1.0, places=5)

    def test_shear_is_reported_not_fatal(self):
        mat = Matrix.Translation((0.0, 1.0, 0.0)) @ sheared(0.05)
        state = decompose_transform(TransformKind.COMPLEX_JOINT, mat)
        self.assertAlmostEqual(state.max_non_orthogonality, 0.05, places=6)
        for actual, expected in zip(state.secondary_trs.translation, (0.0, 1.0, 0.0)):
            self.assertAlmostEqual(actual, expected, places=6)

    def test_states_compare_by_value(self):
        mat = sample_local()
        first = decompose_transform(TransformKind.SIMPLE, mat)
        second = decompose_transform(TransformKind.SIMPLE, mat.copy())
        self.assertEqual(first, second)


class TestToMatrix(unittest.TestCase):
    def test_matrix_passthrough(self):
        mat = mathutils.Matrix.Translation((1.0, 2.0, 3.0))
        self.assertEqual(utils.to_matrix(mat), mat)

    def test_list_of_rows(self):
        rows = [
            [1.0, 0.0, 0.0, 5.0],
            [0.0, 1.0, 0.0, 6.0],
            [0.0, 0.0, 1.0, 7.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
        self.assertEqual(utils.to_matrix(rows), mathutils.Matrix.Translation((5.0, 6.0, 7.0)))

    def test_flattened_row_major(self):
        flat = [float(i) for i in range(16)]
        expected = mathutils.Matrix([
            [0.0, 1.0, 2.0, 3.0],
            [4.0, 5.0, 6.0, 7.0],
            [8.0, 9.0, 10.0, 11.0],
            [12.0, 13.0, 14.0, 15.0],
        ])
        self.assertEqual(utils.to_matrix(flat), expected)

    def test_invalid_input_is_identity(self):
        identity = mathutils.Matrix.Identity(4)
        self.assertEqual(utils.to_matrix([]), identity)
        self.assertEqual(utils.to_matrix([1, 2, 3]), identity)
        self.assertEqual(utils.to_matrix(None), identity)
        self.assertEqual(utils.to_matrix("invalid"), identity)


if __name__ == "__main__":
    unittest.main()
