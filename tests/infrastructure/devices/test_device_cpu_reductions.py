import math
import unittest

import numpy as np

from salp.domain._errors import ShapeInvalidError
from salp.infrastructure.devices._device_cpu import DeviceCPU
from salp.infrastructure.tensor._tensor import Tensor


class TestDeviceCPUReductions(unittest.TestCase):
    def test_sum_and_mean_float(self):
        device = DeviceCPU(np.float64)
        t = Tensor((4,), [1, 2, 3, 4])

        self.assertEqual(device.sum(t), 10.0)
        self.assertEqual(device.mean(t), 2.5)

    def test_sum_and_mean_integer(self):
        device = DeviceCPU(np.int32)
        t = Tensor((4,), [1, 2, 3, 4], dtype=np.int32)

        total = device.sum(t)
        self.assertEqual(total, 10)
        self.assertIsInstance(total, np.int32)
        self.assertEqual(device.mean(t), 2)

    def test_integer_mean_truncates_toward_zero(self):
        device = DeviceCPU(np.int64)
        t = Tensor((2,), [-3, -4], dtype=np.int64)
        self.assertEqual(device.mean(t), -3)

    def test_max_and_min(self):
        device = DeviceCPU(np.float32)
        t = Tensor((2, 2), [3.0, -1.5, 8.25, 0.0], dtype=np.float32)

        self.assertEqual(device.max(t), np.float32(8.25))
        self.assertEqual(device.min(t), np.float32(-1.5))
        self.assertIsInstance(device.max(t), np.float32)

    def test_reductions_match_numpy(self):
        device = DeviceCPU(np.float64)
        x = np.random.default_rng(1).standard_normal((5, 7))
        t = Tensor(x.shape, x)

        self.assertTrue(math.isclose(device.sum(t), x.sum()))
        self.assertTrue(math.isclose(device.mean(t), x.mean()))
        self.assertEqual(device.max(t), x.max())
        self.assertEqual(device.min(t), x.min())

    def test_reductions_do_not_mutate(self):
        device = DeviceCPU(np.float64)
        t = Tensor((3,), [3.0, 1.0, 2.0])
        device.sum(t)
        device.mean(t)
        device.max(t)
        device.min(t)
        np.testing.assert_array_equal(t.data, [3.0, 1.0, 2.0])


class TestDeviceCPUEqual(unittest.TestCase):
    def setUp(self) -> None:
        self.device = DeviceCPU(np.float64)

    def test_reflexive(self):
        t = Tensor((2, 2), [1.0, 2.0, 3.0, 4.0])
        self.assertTrue(self.device.equal(t, t))

    def test_equal_contents(self):
        a = Tensor((2, 2), [1.0, 2.0, 3.0, 4.0])
        b = Tensor((2, 2), [1.0, 2.0, 3.0, 4.0])
        self.assertTrue(self.device.equal(a, b))
        self.assertTrue(self.device.equal(b, a))

    def test_different_data(self):
        a = Tensor((3,), [1.0, 2.0, 3.0])
        b = Tensor((3,), [1.0, 2.0, 3.5])
        self.assertFalse(self.device.equal(a, b))
        self.assertFalse(self.device.equal(b, a))

    def test_same_data_different_shape(self):
        a = Tensor((2, 3), np.arange(6.0))
        b = Tensor((3, 2), np.arange(6.0))
        self.assertFalse(self.device.equal(a, b))
        self.assertFalse(self.device.equal(b, a))

    def test_different_length(self):
        a = Tensor((2,), [1.0, 2.0])
        b = Tensor((3,), [1.0, 2.0, 3.0])
        self.assertFalse(self.device.equal(a, b))

    def test_nan_at_same_index_is_equal(self):
        a = Tensor((2,), [float("nan"), 1.0])
        b = Tensor((2,), [float("nan"), 1.0])
        self.assertTrue(self.device.equal(a, b))

    def test_clone_is_equal(self):
        t = Tensor((2, 3), np.arange(6.0))
        self.assertTrue(self.device.equal(t, t.clone()))

    def test_integer_tensors(self):
        device = DeviceCPU(np.int16)
        a = device.create_tensor((3,), [1, 2, 3])
        b = device.create_tensor((3,), [1, 2, 3])
        self.assertTrue(device.equal(a, b))


class TestDeviceCPUCreateTensor(unittest.TestCase):
    def test_create_tensor_zero_filled(self):
        device = DeviceCPU(np.int64)
        t = device.create_tensor((2, 3))

        self.assertIsInstance(t, Tensor)
        self.assertEqual(t.shape, (2, 3))
        self.assertEqual(t.strides, (3, 1))
        self.assertEqual(t.dtype, np.int64)
        np.testing.assert_array_equal(t.data, np.zeros(6, dtype=np.int64))

    def test_create_tensor_invalid_shape(self):
        with self.assertRaises(ShapeInvalidError):
            DeviceCPU().create_tensor((3, 0))


if __name__ == "__main__":
    unittest.main()
