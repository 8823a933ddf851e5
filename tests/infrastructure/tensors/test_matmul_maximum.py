from unittest import TestCase
import unittest
import numpy as np

from tapegrad import Constant, Variable, ShapeMismatchError


def _var(values) -> Variable:
    return Variable.declare(np.asarray(values, dtype=np.float32))


class TestMatmul(TestCase):
    def test_forward_matches_numpy(self):
        rng = np.random.default_rng(0)
        a_np = rng.standard_normal((3, 4)).astype(np.float32)
        b_np = rng.standard_normal((4, 2)).astype(np.float32)

        y = _var(a_np) @ _var(b_np)

        self.assertEqual(y.shape, (3, 2))
        np.testing.assert_allclose(y.data, a_np @ b_np, rtol=1e-5, atol=1e-6)

    def test_backward_grads_match_closed_form(self):
        """
        For y = A @ B seeded with ones:
        dA = ones @ B^T
        dB = A^T @ ones
        """
        rng = np.random.default_rng(1)
        A_np = rng.standard_normal((3, 4)).astype(np.float32)
        B_np = rng.standard_normal((4, 2)).astype(np.float32)
        A, B = _var(A_np), _var(B_np)

        (A @ B).backward()

        grad_out = np.ones((3, 2), dtype=np.float32)
        np.testing.assert_allclose(A.grad().data, grad_out @ B_np.T, rtol=1e-5, atol=1e-6)
        np.testing.assert_allclose(B.grad().data, A_np.T @ grad_out, rtol=1e-5, atol=1e-6)

    def test_batched_matmul(self):
        rng = np.random.default_rng(2)
        A_np = rng.standard_normal((5, 2, 3)).astype(np.float32)
        B_np = rng.standard_normal((5, 3, 4)).astype(np.float32)
        A, B = _var(A_np), _var(B_np)

        y = A @ B
        self.assertEqual(y.shape, (5, 2, 4))
        y.backward()

        grad_out = np.ones((5, 2, 4), dtype=np.float32)
        np.testing.assert_allclose(
            A.grad().data, grad_out @ np.swapaxes(B_np, -1, -2), rtol=1e-5, atol=1e-5
        )
        np.testing.assert_allclose(
            B.grad().data, np.swapaxes(A_np, -1, -2) @ grad_out, rtol=1e-5, atol=1e-5
        )

    def test_constant_matrix_operand(self):
        W = Constant(np.eye(2, dtype=np.float32) * 3.0)
        x = _var([[1.0, 2.0]])
        (x @ W).backward()
        np.testing.assert_allclose(x.grad().data, [[3.0, 3.0]])

    def test_shape_errors(self):
        with self.assertRaises(ShapeMismatchError):
            _ = _var(np.ones((3, 4))) @ _var(np.ones((5, 2)))
        with self.assertRaises(ShapeMismatchError):
            _ = _var(np.ones(3)) @ _var(np.ones(3))
        with self.assertRaises(ShapeMismatchError):
            _ = _var(np.ones((2, 2, 3))) @ _var(np.ones((3, 2)))


class TestMaximum(TestCase):
    def test_forward(self):
        out = _var([1.0, 5.0, 3.0]).maximum(_var([2.0, 4.0, 3.0]))
        np.testing.assert_allclose(out.data, [2.0, 5.0, 3.0])

    def test_gradient_routes_to_larger_operand_and_ties_to_first(self):
        a, b = _var([1.0, 5.0, 3.0]), _var([2.0, 4.0, 3.0])
        a.maximum(b).backward()
        np.testing.assert_allclose(a.grad().data, [0.0, 1.0, 1.0])
        np.testing.assert_allclose(b.grad().data, [1.0, 0.0, 0.0])

    def test_maximum_with_scalar_acts_as_relu(self):
        x = _var([-1.0, 0.5, 2.0])
        y = x.maximum(0.0)
        np.testing.assert_allclose(y.data, [0.0, 0.5, 2.0])
        y.backward()
        np.testing.assert_allclose(x.grad().data, [0.0, 1.0, 1.0])


if __name__ == "__main__":
    unittest.main()
