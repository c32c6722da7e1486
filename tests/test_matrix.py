"""Tests for 3x3 matrix application."""

import numpy as np
import pytest

from acesmod.color.matrix import apply_matrix_3x3, apply_matrix_array, invert_matrix_3x3
from acesmod.config.spaces import AP0_TO_AP1, IDENTITY_3X3, SRGB_TO_AP1


class TestApplyMatrix:
    """Test scalar matrix application."""

    def test_identity(self):
        """Test that the identity matrix leaves the triple unchanged."""
        assert apply_matrix_3x3((0.2, -0.4, 3.0), IDENTITY_3X3) == (0.2, -0.4, 3.0)

    def test_row_major(self):
        """Test that out[i] = sum_j M[i][j] * rgb[j]."""
        m = ((1, 2, 3), (4, 5, 6), (7, 8, 9))

        assert apply_matrix_3x3((1.0, 0.0, 0.0), m) == (1.0, 4.0, 7.0)
        assert apply_matrix_3x3((1.0, 1.0, 1.0), m) == (6.0, 15.0, 24.0)

    def test_flat_and_nested_agree(self):
        """Test that a flat 9-element matrix equals its nested form."""
        flat = [v for row in AP0_TO_AP1 for v in row]

        rgb = (0.3, 0.6, 0.9)
        assert apply_matrix_3x3(rgb, flat) == apply_matrix_3x3(rgb, AP0_TO_AP1)

    def test_numpy_matrix(self):
        """Test that ndarray matrices are accepted."""
        m = np.array(SRGB_TO_AP1)

        assert apply_matrix_3x3((0.1, 0.2, 0.3), m) == pytest.approx(
            apply_matrix_3x3((0.1, 0.2, 0.3), SRGB_TO_AP1)
        )

    def test_linearity(self):
        """Test M(a + b) == M(a) + M(b) for arbitrary triples."""
        rng = np.random.default_rng(1)
        for _ in range(50):
            a = rng.uniform(-10, 10, 3)
            b = rng.uniform(-10, 10, 3)
            lhs = apply_matrix_3x3(a + b, AP0_TO_AP1)
            rhs = np.add(apply_matrix_3x3(a, AP0_TO_AP1), apply_matrix_3x3(b, AP0_TO_AP1))
            np.testing.assert_allclose(lhs, rhs, rtol=1e-12, atol=1e-12)

    def test_bad_matrix(self):
        """Test that malformed matrices are rejected."""
        with pytest.raises(ValueError):
            apply_matrix_3x3((1.0, 1.0, 1.0), [1.0, 2.0, 3.0, 4.0])


class TestApplyMatrixArray:
    """Test batched matrix application."""

    def test_matches_scalar(self):
        """Test that the kernel agrees with the scalar path."""
        rng = np.random.default_rng(2)
        rgb = rng.uniform(-1, 2, size=(64, 3))

        expected = np.array([apply_matrix_3x3(row, SRGB_TO_AP1) for row in rgb])
        np.testing.assert_allclose(apply_matrix_array(rgb, SRGB_TO_AP1), expected, atol=1e-12)

    def test_returns_new_array(self):
        """Test that the input is not modified."""
        rgb = np.ones((4, 3))
        out = apply_matrix_array(rgb, AP0_TO_AP1)

        assert out is not rgb
        np.testing.assert_array_equal(rgb, np.ones((4, 3)))


class TestInvertMatrix:
    """Test matrix inversion."""

    def test_inverse_round_trip(self):
        """Test that M^-1 undoes M."""
        inv = invert_matrix_3x3(SRGB_TO_AP1)
        rgb = (0.18, 0.5, 0.9)

        assert apply_matrix_3x3(apply_matrix_3x3(rgb, SRGB_TO_AP1), inv) == pytest.approx(rgb)

    def test_singular(self):
        """Test that a singular matrix raises."""
        with pytest.raises(np.linalg.LinAlgError):
            invert_matrix_3x3(((1, 2, 3), (2, 4, 6), (0, 0, 1)))
