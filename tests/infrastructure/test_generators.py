from unittest import TestCase
import unittest
import numpy as np

import tapegrad as tg
from tapegrad import Constant, Variable, ShapeMismatchError


class TestGenerators(TestCase):
    def _assert_fresh_variable(self, v, shape):
        self.assertIsInstance(v, Variable)
        self.assertEqual(v.shape, shape)
        self.assertEqual(v.dtype, np.float32)
        self.assertEqual(len(v.tape), 1)
        self.assertTrue(v.node.is_declaration)

    def test_variable_and_constant(self):
        self._assert_fresh_variable(tg.variable([[1, 2], [3, 4]]), (2, 2))
        c = tg.constant([1.0, 2.0])
        self.assertIsInstance(c, Constant)
        self.assertEqual(c.dtype, np.float32)

    def test_fill(self):
        v = tg.fill((2, 3), 2.0)
        self._assert_fresh_variable(v, (2, 3))
        np.testing.assert_array_equal(v.data, np.full((2, 3), 2.0))

    def test_fill_accepts_int_shape(self):
        self._assert_fresh_variable(tg.fill(4, 0.5), (4,))

    def test_eye(self):
        v = tg.eye((3, 4), 2.0)
        self._assert_fresh_variable(v, (3, 4))
        np.testing.assert_array_equal(v.data, np.eye(3, 4) * 2.0)

    def test_eye_repeats_over_leading_axes(self):
        v = tg.eye((2, 3, 3))
        self._assert_fresh_variable(v, (2, 3, 3))
        for i in range(2):
            np.testing.assert_array_equal(v.data[i], np.eye(3))

    def test_eye_needs_two_dimensions(self):
        with self.assertRaises(ShapeMismatchError):
            tg.eye((3,))

    def test_randu_in_unit_interval(self):
        v = tg.randu((4, 5))
        self._assert_fresh_variable(v, (4, 5))
        self.assertTrue(np.all(v.data >= 0.0))
        self.assertTrue(np.all(v.data < 1.0))

    def test_randn_shape(self):
        self._assert_fresh_variable(tg.randn((3, 2)), (3, 2))

    def test_random_generators_are_reproducible_with_rng(self):
        a = tg.randn((3,), rng=np.random.default_rng(42))
        b = tg.randn((3,), rng=np.random.default_rng(42))
        np.testing.assert_array_equal(a.data, b.data)
        c = tg.randu((3,), rng=np.random.default_rng(7))
        d = tg.randu((3,), rng=np.random.default_rng(7))
        np.testing.assert_array_equal(c.data, d.data)

    def test_custom_uses_row_major_order(self):
        v = tg.custom([1, 2, 3, 4, 5, 6], (2, 3))
        self._assert_fresh_variable(v, (2, 3))
        np.testing.assert_array_equal(v.data, [[1, 2, 3], [4, 5, 6]])

    def test_custom_rejects_wrong_count(self):
        with self.assertRaises(ShapeMismatchError):
            tg.custom([1.0, 2.0, 3.0], (2, 2))

    def test_generated_values_are_independent_roots(self):
        a, b = tg.fill(2, 1.0), tg.fill(2, 1.0)
        self.assertNotEqual(a.node.id, b.node.id)
        (a * b).backward()
        np.testing.assert_array_equal(a.grad().data, [1.0, 1.0])


if __name__ == "__main__":
    unittest.main()
