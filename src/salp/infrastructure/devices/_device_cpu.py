"""
CPU execution device.

`DeviceCPU` is a stateless execution engine over host-resident tensors of a
single element type. It implements:

- element-wise primitives: `map` / `map_in_place`, `zip` / `zip_in_place`
- arithmetic conveniences built on them: add, subtract, multiply, divide
  (binary, via zip) and negate, abs (unary, via map), each with an in-place
  twin
- reductions over the whole buffer: sum, mean, max, min
- structural equality and tensor construction

Each element-wise family has one private core routine parametrized by
``is_in_place``: out-of-place calls clone the first operand and write into
the clone, in-place calls write into the first operand and return the same
handle. Operands are validated (dtype, storage kind, and for zip the shape)
before the first element is written.

Execution strategy
------------------
Buffers whose length is at or above the parallel threshold are processed by
`parallel_for` over disjoint index chunks on a thread pool; shorter buffers
run sequentially on the caller's thread. The result is identical either way,
because index ``i`` of the output depends only on index ``i`` of the
operands. No locking is performed: callers must not issue concurrent calls
that mutate the same tensor.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

import numpy as np

from ...domain._errors import BackendUnsupportedError, ShapeMismatchError
from ...domain.device._device_protocol import IDevice
from ..config import SalpConfig, load_config
from ..tensor._memory import TensorMemoryCpu
from ..tensor._tensor import Tensor
from ..types._element_type import ElementType
from ._parallel import parallel_for

logger = logging.getLogger(__name__)


class DeviceCPU(IDevice):
    """
    Host execution engine for one element type.

    Parameters
    ----------
    dtype : Any, optional
        Element dtype of every tensor this device operates on. Defaults to
        ``np.float64``.
    parallel_threshold : Optional[int], optional
        Buffer length at or above which element-wise operations run in
        parallel. Defaults to the loaded configuration (10000).
    max_workers : Optional[int], optional
        Maximum worker threads for parallel execution. Defaults to the loaded
        configuration.
    config : Optional[SalpConfig], optional
        Base configuration. Defaults to `load_config()` (environment).

    Raises
    ------
    TypeError
        If `dtype` is not an integer or real floating type.
    ValueError
        If `parallel_threshold` or `max_workers` is not a positive integer.
    """

    def __init__(
        self,
        dtype: Any = np.float64,
        *,
        parallel_threshold: Optional[int] = None,
        max_workers: Optional[int] = None,
        config: Optional[SalpConfig] = None,
    ) -> None:
        self._element_type = ElementType.of(dtype)
        if config is None:
            # Environment is read only for settings not given explicitly.
            self._config = load_config(
                parallel_threshold=parallel_threshold, max_workers=max_workers
            )
        else:
            self._config = SalpConfig(
                parallel_threshold=(
                    config.parallel_threshold
                    if parallel_threshold is None
                    else parallel_threshold
                ),
                max_workers=(
                    config.max_workers if max_workers is None else max_workers
                ),
            )

    @property
    def dtype(self) -> np.dtype:
        return self._element_type.dtype

    @property
    def element_type(self) -> ElementType:
        return self._element_type

    @property
    def parallel_threshold(self) -> int:
        return self._config.parallel_threshold

    @property
    def max_workers(self) -> int:
        return self._config.max_workers

    def __repr__(self) -> str:
        return (
            f"DeviceCPU(dtype={self.dtype.name}, "
            f"parallel_threshold={self.parallel_threshold}, "
            f"max_workers={self.max_workers})"
        )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def _check_operand(self, t: Tensor, op: str) -> None:
        if not t.device.is_host():
            raise BackendUnsupportedError(op, str(t.device))
        if t.dtype != self.dtype:
            raise TypeError(
                f"{op}: tensor dtype {t.dtype} does not match device dtype "
                f"{self.dtype}."
            )

    def _check_same_shape(self, a: Tensor, b: Tensor) -> None:
        if a.length != b.length or a.shape != b.shape:
            raise ShapeMismatchError(
                b.length, a.length, a.shape, actual_shape=b.shape
            )

    def _run(self, length: int, body: Callable[[int, int], None]) -> None:
        parallel_for(
            length,
            body,
            threshold=self._config.parallel_threshold,
            max_workers=self._config.max_workers,
        )

    # ------------------------------------------------------------------
    # Element-wise primitives
    # ------------------------------------------------------------------
    def map(self, a: Tensor, func: Callable[[Any], Any]) -> Tensor:
        """
        Apply `func` to every element and return a new tensor.

        `a` is left unchanged.
        """
        return self._map(False, a, func)

    def map_in_place(self, a: Tensor, func: Callable[[Any], Any]) -> Tensor:
        """
        Apply `func` to every element of `a` in place and return `a`.
        """
        return self._map(True, a, func)

    def _map(
        self, is_in_place: bool, a: Tensor, func: Callable[[Any], Any]
    ) -> Tensor:
        self._check_operand(a, "map")

        result = a if is_in_place else a.clone()
        out = result.memory.host_data

        def body(start: int, stop: int) -> None:
            for i in range(start, stop):
                out[i] = func(out[i])

        self._run(result.length, body)
        return result

    def zip(
        self, a: Tensor, b: Tensor, func: Callable[[Any, Any], Any]
    ) -> Tensor:
        """
        Combine `a` and `b` element-wise with `func` into a new tensor.

        Both operands are left unchanged.

        Raises
        ------
        ShapeMismatchError
            If `a` and `b` differ in shape or length.
        """
        return self._zip(False, a, b, func)

    def zip_in_place(
        self, a: Tensor, b: Tensor, func: Callable[[Any, Any], Any]
    ) -> Tensor:
        """
        Combine `a` and `b` element-wise with `func`, writing into `a`.

        `b` is read-only. Returns `a`.

        Raises
        ------
        ShapeMismatchError
            If `a` and `b` differ in shape or length. `a` is not modified.
        """
        return self._zip(True, a, b, func)

    def _zip(
        self,
        is_in_place: bool,
        a: Tensor,
        b: Tensor,
        func: Callable[[Any, Any], Any],
    ) -> Tensor:
        self._check_operand(a, "zip")
        self._check_operand(b, "zip")
        self._check_same_shape(a, b)

        result = a if is_in_place else a.clone()
        out = result.memory.host_data
        rhs = b.memory.host_data

        def body(start: int, stop: int) -> None:
            for i in range(start, stop):
                out[i] = func(out[i], rhs[i])

        self._run(result.length, body)
        return result

    # ------------------------------------------------------------------
    # Element by element
    # ------------------------------------------------------------------
    def add(self, a: Tensor, b: Tensor) -> Tensor:
        """Element-wise ``a + b`` into a new tensor."""
        return self.zip(a, b, self._element_type.add)

    def add_in_place(self, a: Tensor, b: Tensor) -> Tensor:
        """Element-wise ``a += b``. Returns `a`."""
        return self.zip_in_place(a, b, self._element_type.add)

    def subtract(self, a: Tensor, b: Tensor) -> Tensor:
        """Element-wise ``a - b`` into a new tensor."""
        return self.zip(a, b, self._element_type.sub)

    def subtract_in_place(self, a: Tensor, b: Tensor) -> Tensor:
        """Element-wise ``a -= b``. Returns `a`."""
        return self.zip_in_place(a, b, self._element_type.sub)

    def multiply(self, a: Tensor, b: Tensor) -> Tensor:
        """Element-wise ``a * b`` into a new tensor."""
        return self.zip(a, b, self._element_type.mul)

    def multiply_in_place(self, a: Tensor, b: Tensor) -> Tensor:
        """Element-wise ``a *= b``. Returns `a`."""
        return self.zip_in_place(a, b, self._element_type.mul)

    def divide(self, a: Tensor, b: Tensor) -> Tensor:
        """
        Element-wise ``a / b``.

        Integer tensors truncate toward zero and raise `ZeroDivisionError`
        on a zero divisor; floating tensors follow IEEE 754.
        """
        return self.zip(a, b, self._element_type.div)

    def divide_in_place(self, a: Tensor, b: Tensor) -> Tensor:
        """
        Element-wise ``a /= b``. Returns `a`.

        Same division semantics as `divide`. A zero integer divisor raises
        and may leave `a` partially updated.
        """
        return self.zip_in_place(a, b, self._element_type.div)

    # ------------------------------------------------------------------
    # Unary operations
    # ------------------------------------------------------------------
    def negate(self, a: Tensor) -> Tensor:
        """Element-wise ``-a`` into a new tensor."""
        return self.map(a, self._element_type.neg)

    def negate_in_place(self, a: Tensor) -> Tensor:
        """Negate every element of `a` in place. Returns `a`."""
        return self.map_in_place(a, self._element_type.neg)

    def abs(self, a: Tensor) -> Tensor:
        """
        Element-wise absolute value into a new tensor.

        Raises
        ------
        OverflowError
            For a signed integer tensor holding the dtype minimum, whose
            magnitude is not representable.
        """
        return self.map(a, self._element_type.abs)

    def abs_in_place(self, a: Tensor) -> Tensor:
        """Absolute value of every element of `a` in place. Returns `a`."""
        return self.map_in_place(a, self._element_type.abs)

    # ------------------------------------------------------------------
    # Reductions
    # ------------------------------------------------------------------
    def sum(self, a: Tensor) -> Any:
        """
        Sum of all elements, as a scalar of the device dtype.
        """
        self._check_operand(a, "sum")
        return self._element_type.cast(a.memory.host_data.sum(dtype=self.dtype))

    def mean(self, a: Tensor) -> Any:
        """
        Arithmetic mean of all elements: ``sum / length``.

        The element count is converted exactly into the device dtype and the
        division uses the dtype's semantics, so integer tensors truncate
        (``mean([1, 2, 3, 4]) == 2``).
        """
        total = self.sum(a)
        return self._element_type.div(
            total, self._element_type.from_count(a.length)
        )

    def max(self, a: Tensor) -> Any:
        """
        Largest element, as a scalar of the device dtype.

        For floating tensors a NaN anywhere makes the result NaN.
        """
        self._check_operand(a, "max")
        return self._element_type.cast(a.memory.host_data.max())

    def min(self, a: Tensor) -> Any:
        """Smallest element, as a scalar of the device dtype."""
        self._check_operand(a, "min")
        return self._element_type.cast(a.memory.host_data.min())

    # ------------------------------------------------------------------
    # Equal
    # ------------------------------------------------------------------
    def equal(self, a: Tensor, b: Tensor) -> bool:
        """
        Return True if `a` and `b` have identical shapes and elements.

        Strides are not compared; they are derived from the shape. NaNs at
        the same index are treated as equal elements.
        """
        if a is b:
            return True

        self._check_operand(a, "equal")
        self._check_operand(b, "equal")

        if a.length != b.length:
            return False
        if a.shape != b.shape:
            return False
        return bool(
            np.array_equal(
                a.memory.host_data,
                b.memory.host_data,
                equal_nan=not self._element_type.is_integer,
            )
        )

    # ------------------------------------------------------------------
    # Creating tensors
    # ------------------------------------------------------------------
    def create_tensor(
        self, shape: Sequence[int], data: Optional[Any] = None
    ) -> Tensor:
        """
        Create a host tensor of this device's dtype.

        Parameters
        ----------
        shape : Sequence[int]
            Tensor shape.
        data : Optional[Any], optional
            Row-major data. When omitted the tensor is zero-filled.
        """
        if data is None:
            memory = TensorMemoryCpu.create(shape, self.dtype)
        else:
            memory = TensorMemoryCpu.from_data(shape, data, self.dtype)
        return Tensor.from_memory(memory)
