"""
Numeric element types.

`ElementType` binds the element capability set required by tensors and
devices to a concrete NumPy dtype:

    {zero, one, add, sub, mul, div, neg, abs, total order, fixed-size copyable}

Only integer (signed/unsigned) and real floating dtypes qualify. Booleans,
complex numbers (no total order), and object/string/datetime dtypes are
rejected once, when the element type is resolved, and never re-checked per
element.

Division follows fixed-width numeric semantics: floating types use true
division, integer types truncate toward zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

# Kinds with fixed-size, bit-copyable, totally ordered numeric values.
_NUMERIC_KINDS = ("i", "u", "f")


@dataclass(frozen=True)
class ElementType:
    """
    Capability set for one numeric dtype.

    Parameters
    ----------
    dtype : np.dtype
        The resolved NumPy dtype. Use `ElementType.of(...)` to construct from
        any dtype-like value with validation.
    """

    dtype: np.dtype

    @classmethod
    def of(cls, dtype: Any) -> "ElementType":
        """
        Resolve and validate an element type.

        Parameters
        ----------
        dtype : Any
            Anything accepted by `np.dtype(...)` (e.g., ``np.float32``,
            ``"int64"``), or an existing `ElementType`.

        Returns
        -------
        ElementType
            The validated element type.

        Raises
        ------
        TypeError
            If the dtype is not an integer or real floating type.
        """
        if isinstance(dtype, ElementType):
            return dtype
        try:
            dt = np.dtype(dtype)
        except TypeError as e:
            raise TypeError(f"Unsupported element type: {dtype!r}") from e
        if dt.kind not in _NUMERIC_KINDS:
            raise TypeError(
                f"Unsupported element type: {dt}. Expected an integer or "
                f"real floating dtype."
            )
        return cls(dt)

    @property
    def name(self) -> str:
        return self.dtype.name

    @property
    def is_integer(self) -> bool:
        return self.dtype.kind in ("i", "u")

    @property
    def itemsize(self) -> int:
        return self.dtype.itemsize

    def cast(self, value: Any) -> Any:
        """Convert `value` to a scalar of this element type."""
        return self.dtype.type(value)

    @property
    def zero(self) -> Any:
        return self.cast(0)

    @property
    def one(self) -> Any:
        return self.cast(1)

    def add(self, x: Any, y: Any) -> Any:
        return self.cast(x + y)

    def sub(self, x: Any, y: Any) -> Any:
        return self.cast(x - y)

    def mul(self, x: Any, y: Any) -> Any:
        return self.cast(x * y)

    def div(self, x: Any, y: Any) -> Any:
        """
        Divide two elements using this type's division semantics.

        Raises
        ------
        ZeroDivisionError
            For integer types when `y` is zero. Floating division by zero
            follows IEEE 754 (inf/nan).
        """
        if not self.is_integer:
            return self.cast(x / y)

        xi, yi = int(x), int(y)
        if yi == 0:
            raise ZeroDivisionError("integer division by zero")
        q = abs(xi) // abs(yi)
        return self.cast(q if (xi >= 0) == (yi >= 0) else -q)

    def neg(self, x: Any) -> Any:
        return self.cast(-x)

    def abs(self, x: Any) -> Any:
        """
        Absolute value of one element.

        Raises
        ------
        OverflowError
            If `x` is the minimum of a signed integer type (e.g. ``-128`` for
            int8), whose magnitude does not fit the type.
        """
        r = self.cast(np.abs(x))
        if r < 0:
            raise OverflowError(
                f"Absolute value of {x} is not representable as {self.name}."
            )
        return r

    def from_count(self, n: int) -> Any:
        """
        Convert an element count into this element type exactly.

        Raises
        ------
        OverflowError
            If `n` is outside an integer type's range, or a floating type
            cannot hold it exactly (e.g. counts above 2048 that float16
            rounds, or above 65504 where it overflows to inf).
        """
        n = int(n)
        if self.is_integer:
            info = np.iinfo(self.dtype)
            if not info.min <= n <= info.max:
                raise OverflowError(
                    f"Element count {n} is not representable as {self.name}."
                )
            return self.cast(n)

        v = self.cast(n)
        if not np.isfinite(v) or int(v) != n:
            raise OverflowError(
                f"Element count {n} is not exactly representable as {self.name}."
            )
        return v

    def __str__(self) -> str:
        return self.name
