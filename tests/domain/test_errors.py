import unittest

from salp.domain._errors import (
    BackendUnsupportedError,
    ShapeInvalidError,
    ShapeMismatchError,
)


class TestErrors(unittest.TestCase):
    def test_shape_invalid_is_value_error_and_keeps_fields(self):
        err = ShapeInvalidError([2, 0], "all dimensions must be greater than zero")
        self.assertIsInstance(err, ValueError)
        self.assertEqual(err.shape, (2, 0))
        self.assertIn("greater than zero", str(err))

    def test_shape_mismatch_reports_actual_expected_and_shape(self):
        err = ShapeMismatchError(5, 6, (2, 3))
        self.assertIsInstance(err, ValueError)
        self.assertEqual(err.actual, 5)
        self.assertEqual(err.expected, 6)
        self.assertEqual(err.shape, (2, 3))
        self.assertIsNone(err.actual_shape)

        msg = str(err)
        self.assertIn("(5)", msg)
        self.assertIn("2 x 3 = 6", msg)

    def test_shape_mismatch_between_two_shapes(self):
        err = ShapeMismatchError(3, 2, (2,), actual_shape=(3,))
        self.assertEqual(err.actual_shape, (3,))
        self.assertIn("do not match", str(err))

    def test_backend_unsupported_is_runtime_error(self):
        err = BackendUnsupportedError("device_data", "cpu")
        self.assertIsInstance(err, RuntimeError)
        self.assertEqual(err.op, "device_data")
        self.assertEqual(err.device, "cpu")
        self.assertIn("device_data", str(err))


if __name__ == "__main__":
    unittest.main()
