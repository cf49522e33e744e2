import unittest

import numpy as np

from salp.infrastructure.types._element_type import ElementType


class TestElementTypeResolution(unittest.TestCase):
    def test_accepts_integer_and_floating_dtypes(self):
        for dt in (np.int8, np.int32, np.int64, np.uint8, np.float16, np.float32, "float64"):
            with self.subTest(dtype=dt):
                et = ElementType.of(dt)
                self.assertEqual(et.dtype, np.dtype(dt))

    def test_rejects_non_numeric_dtypes(self):
        for dt in (np.bool_, np.complex128, object, "U3", "datetime64[s]"):
            with self.subTest(dtype=dt):
                with self.assertRaises(TypeError):
                    ElementType.of(dt)

    def test_of_is_idempotent(self):
        et = ElementType.of(np.float32)
        self.assertIs(ElementType.of(et), et)

    def test_zero_and_one(self):
        et = ElementType.of(np.int16)
        self.assertEqual(et.zero, 0)
        self.assertEqual(et.one, 1)
        self.assertIsInstance(et.zero, np.int16)


class TestElementTypeArithmetic(unittest.TestCase):
    def test_results_keep_dtype(self):
        et = ElementType.of(np.float32)
        x, y = np.float32(1.5), np.float32(2.0)
        for op in (et.add, et.sub, et.mul, et.div):
            with self.subTest(op=op.__name__):
                self.assertIsInstance(op(x, y), np.float32)
        self.assertEqual(et.neg(x), np.float32(-1.5))
        self.assertEqual(et.abs(np.float32(-2.5)), np.float32(2.5))

    def test_float_division_is_true_division(self):
        et = ElementType.of(np.float64)
        self.assertEqual(et.div(10.0, 4.0), 2.5)

    def test_integer_division_truncates_toward_zero(self):
        et = ElementType.of(np.int32)
        self.assertEqual(et.div(7, 2), 3)
        self.assertEqual(et.div(-7, 2), -3)
        self.assertEqual(et.div(7, -2), -3)
        self.assertEqual(et.div(-7, -2), 3)

    def test_integer_division_by_zero_raises(self):
        et = ElementType.of(np.int64)
        with self.assertRaises(ZeroDivisionError):
            et.div(1, 0)

    def test_from_count(self):
        self.assertEqual(ElementType.of(np.float32).from_count(4), np.float32(4.0))
        self.assertEqual(ElementType.of(np.int64).from_count(10000), 10000)
        with self.assertRaises(OverflowError):
            ElementType.of(np.int8).from_count(300)

    def test_from_count_requires_exact_float(self):
        et = ElementType.of(np.float16)
        self.assertEqual(et.from_count(2048), np.float16(2048.0))
        for n in (2049, 70000):
            with self.subTest(count=n):
                with self.assertRaises(OverflowError):
                    et.from_count(n)

    def test_abs_of_signed_minimum_overflows(self):
        et = ElementType.of(np.int8)
        self.assertEqual(et.abs(np.int8(-127)), 127)
        with self.assertRaises(OverflowError):
            et.abs(np.int8(-128))

    def test_abs_unsigned_and_nan(self):
        self.assertEqual(ElementType.of(np.uint8).abs(np.uint8(200)), 200)
        self.assertTrue(np.isnan(ElementType.of(np.float64).abs(np.nan)))


if __name__ == "__main__":
    unittest.main()
