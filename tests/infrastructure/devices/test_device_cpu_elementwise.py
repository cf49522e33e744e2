import unittest

import numpy as np

from salp.domain._errors import ShapeMismatchError
from salp.infrastructure.devices._device_cpu import DeviceCPU
from salp.infrastructure.tensor._tensor import Tensor


class TestDeviceCPUMap(unittest.TestCase):
    def setUp(self) -> None:
        self.device = DeviceCPU(np.float64)

    def test_map_out_of_place_leaves_source(self):
        t = Tensor((2, 2), [1.0, -2.0, 3.0, -4.0])
        out = self.device.map(t, lambda x: x * 10)

        self.assertIsNot(out, t)
        self.assertEqual(out.shape, t.shape)
        np.testing.assert_array_equal(out.data, [10.0, -20.0, 30.0, -40.0])
        np.testing.assert_array_equal(t.data, [1.0, -2.0, 3.0, -4.0])

    def test_map_in_place_returns_same_handle(self):
        t = Tensor((3,), [1.0, 2.0, 3.0])
        out = self.device.map_in_place(t, lambda x: x + 1)

        self.assertIs(out, t)
        np.testing.assert_array_equal(t.data, [2.0, 3.0, 4.0])

    def test_identity_map(self):
        t = Tensor((2, 3), np.arange(6, dtype=np.float64))

        out = self.device.map(t, lambda x: x)
        self.assertIsNot(out, t)
        self.assertTrue(self.device.equal(out, t))

        same = self.device.map_in_place(t, lambda x: x)
        self.assertIs(same, t)
        np.testing.assert_array_equal(t.data, np.arange(6, dtype=np.float64))

    def test_map_visits_every_index_once(self):
        t = Tensor((5,), [0.0] * 5)
        calls = []

        def f(x):
            calls.append(x)
            return x + 1

        self.device.map_in_place(t, f)
        self.assertEqual(len(calls), 5)
        np.testing.assert_array_equal(t.data, np.ones(5))

    def test_map_rejects_other_dtype(self):
        t = Tensor((2,), [1, 2], dtype=np.int32)
        with self.assertRaises(TypeError):
            self.device.map(t, lambda x: x)


class TestDeviceCPUZip(unittest.TestCase):
    def setUp(self) -> None:
        self.device = DeviceCPU(np.float64)

    def test_zip_out_of_place_leaves_both_operands(self):
        a = Tensor((3,), [1.0, 2.0, 3.0])
        b = Tensor((3,), [4.0, 5.0, 6.0])

        out = self.device.zip(a, b, lambda x, y: x * y + 1)

        np.testing.assert_array_equal(out.data, [5.0, 11.0, 19.0])
        np.testing.assert_array_equal(a.data, [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(b.data, [4.0, 5.0, 6.0])

    def test_zip_in_place_mutates_first_operand_only(self):
        a = Tensor((3,), [1.0, 2.0, 3.0])
        b = Tensor((3,), [4.0, 5.0, 6.0])

        out = self.device.zip_in_place(a, b, lambda x, y: y - x)

        self.assertIs(out, a)
        np.testing.assert_array_equal(a.data, [3.0, 3.0, 3.0])
        np.testing.assert_array_equal(b.data, [4.0, 5.0, 6.0])

    def test_zip_in_place_with_itself(self):
        a = Tensor((3,), [1.0, 2.0, 3.0])
        self.device.zip_in_place(a, a, lambda x, y: x + y)
        np.testing.assert_array_equal(a.data, [2.0, 4.0, 6.0])

    def test_zip_length_mismatch_raises(self):
        a = Tensor((2,), [1.0, 2.0])
        b = Tensor((3,), [1.0, 2.0, 3.0])

        with self.assertRaises(ShapeMismatchError) as cm:
            self.device.zip(a, b, lambda x, y: x + y)
        self.assertEqual(cm.exception.expected, 2)
        self.assertEqual(cm.exception.actual, 3)

    def test_zip_same_length_different_shape_raises(self):
        a = Tensor((2, 3))
        b = Tensor((3, 2))
        with self.assertRaises(ShapeMismatchError) as cm:
            self.device.zip(a, b, lambda x, y: x + y)
        self.assertEqual(cm.exception.shape, (2, 3))
        self.assertEqual(cm.exception.actual_shape, (3, 2))

    def test_zip_in_place_mismatch_does_not_mutate(self):
        a = Tensor((2,), [1.0, 2.0])
        b = Tensor((3,), [1.0, 2.0, 3.0])
        calls = []

        def f(x, y):
            calls.append((x, y))
            return x + y

        with self.assertRaises(ShapeMismatchError):
            self.device.zip_in_place(a, b, f)
        self.assertEqual(calls, [])
        np.testing.assert_array_equal(a.data, [1.0, 2.0])


class TestDeviceCPUArithmetic(unittest.TestCase):
    def setUp(self) -> None:
        self.device = DeviceCPU(np.float64)

    def test_add_scenario(self):
        a = Tensor((2,), [1.0, 2.0])
        b = Tensor((2,), [10.0, 20.0])

        out = self.device.add(a, b)

        self.assertEqual(out.shape, (2,))
        np.testing.assert_array_equal(out.data, [11.0, 22.0])
        np.testing.assert_array_equal(a.data, [1.0, 2.0])
        np.testing.assert_array_equal(b.data, [10.0, 20.0])

    def test_binary_ops_match_numpy(self):
        rng = np.random.default_rng(0)
        x = rng.standard_normal(12)
        y = rng.standard_normal(12) + 3.0
        cases = {
            "add": np.add,
            "subtract": np.subtract,
            "multiply": np.multiply,
            "divide": np.divide,
        }
        for name, ref in cases.items():
            with self.subTest(op=name):
                a = Tensor((3, 4), x)
                b = Tensor((3, 4), y)

                out = getattr(self.device, name)(a, b)
                np.testing.assert_allclose(out.data, ref(x, y))
                np.testing.assert_array_equal(a.data, x)

                same = getattr(self.device, f"{name}_in_place")(a, b)
                self.assertIs(same, a)
                np.testing.assert_allclose(a.data, ref(x, y))
                np.testing.assert_array_equal(b.data, y)

    def test_negate_and_abs(self):
        t = Tensor((4,), [1.0, -2.0, 0.0, -3.5])

        np.testing.assert_array_equal(self.device.negate(t).data, [-1.0, 2.0, 0.0, 3.5])
        np.testing.assert_array_equal(self.device.abs(t).data, [1.0, 2.0, 0.0, 3.5])
        np.testing.assert_array_equal(t.data, [1.0, -2.0, 0.0, -3.5])

        self.assertIs(self.device.abs_in_place(t), t)
        np.testing.assert_array_equal(t.data, [1.0, 2.0, 0.0, 3.5])
        self.assertIs(self.device.negate_in_place(t), t)
        np.testing.assert_array_equal(t.data, [-1.0, -2.0, 0.0, -3.5])

    def test_abs_of_int8_minimum_raises(self):
        device = DeviceCPU(np.int8, parallel_threshold=1000)
        t = Tensor((2,), [-128, 5], dtype=np.int8)
        with self.assertRaises(OverflowError):
            device.abs(t)
        np.testing.assert_array_equal(t.data, [-128, 5])

    def test_integer_division_truncates(self):
        device = DeviceCPU(np.int32)
        a = Tensor((4,), [7, -7, 9, 1], dtype=np.int32)
        b = Tensor((4,), [2, 2, -4, 3], dtype=np.int32)

        out = device.divide(a, b)
        self.assertEqual(out.dtype, np.int32)
        np.testing.assert_array_equal(out.data, [3, -3, -2, 0])

    def test_integer_division_by_zero_raises(self):
        device = DeviceCPU(np.int64)
        a = Tensor((2,), [1, 2], dtype=np.int64)
        b = Tensor((2,), [1, 0], dtype=np.int64)
        with self.assertRaises(ZeroDivisionError):
            device.divide(a, b)

    def test_float32_results_stay_float32(self):
        device = DeviceCPU(np.float32)
        a = device.create_tensor((2,), [0.5, 1.5])
        b = device.create_tensor((2,), [2.0, 2.0])

        out = device.multiply(a, b)
        self.assertEqual(out.dtype, np.float32)
        np.testing.assert_array_equal(out.data, np.array([1.0, 3.0], dtype=np.float32))


if __name__ == "__main__":
    unittest.main()
