"""
Shape- and backend-related exceptions for Salp.

This module defines the error taxonomy used across the tensor data model and
the execution devices. Every error is raised synchronously, before any tensor
buffer is written, so callers never observe a partially-mutated result.

- `ShapeInvalidError`: a shape is empty, contains a non-integer entry, or has
  a dimension <= 0. Raised at tensor/memory construction, never later.
- `ShapeMismatchError`: supplied data length does not match a shape's
  product, or two operands of a binary operation disagree in shape/length.
- `BackendUnsupportedError`: an accelerator-resident accessor or device was
  requested before any accelerator backend exists.
"""

from __future__ import annotations

from typing import Optional, Sequence


def _fmt(shape: Optional[Sequence[int]]) -> str:
    if shape is None:
        return "?"
    return " x ".join(str(int(d)) for d in shape)


class ShapeInvalidError(ValueError):
    """
    Raised when a tensor shape violates the shape invariants.

    Attributes
    ----------
    shape : tuple
        The offending shape, as supplied by the caller.
    reason : str
        Short human-readable description of the violated invariant.
    """

    def __init__(self, shape: Sequence[object], reason: str) -> None:
        """
        Initialize the ShapeInvalidError.

        Parameters
        ----------
        shape : Sequence[object]
            The rejected shape.
        reason : str
            Why the shape was rejected.
        """
        super().__init__(f"Invalid shape {tuple(shape)!r}: {reason}.")
        self.shape = tuple(shape)
        self.reason = reason


class ShapeMismatchError(ValueError):
    """
    Raised when observed and expected element counts (or shapes) disagree.

    The error keeps both the observed and expected values so that callers can
    report precise diagnostics.

    Attributes
    ----------
    actual : int
        The observed length (data length, or the length of the second operand).
    expected : int
        The expected length (shape product, or the length of the first operand).
    shape : Optional[tuple[int, ...]]
        The expected shape, when known.
    actual_shape : Optional[tuple[int, ...]]
        The observed shape, when the mismatch involves two tensors.
    """

    def __init__(
        self,
        actual: int,
        expected: int,
        shape: Optional[Sequence[int]] = None,
        *,
        actual_shape: Optional[Sequence[int]] = None,
    ) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        actual : int
            Observed element count.
        expected : int
            Expected element count.
        shape : Optional[Sequence[int]], optional
            Expected shape used to derive `expected`.
        actual_shape : Optional[Sequence[int]], optional
            Observed shape, for binary-operation mismatches.
        """
        self.actual = int(actual)
        self.expected = int(expected)
        self.shape = None if shape is None else tuple(int(d) for d in shape)
        self.actual_shape = (
            None if actual_shape is None else tuple(int(d) for d in actual_shape)
        )

        if self.actual_shape is not None:
            msg = (
                f"Tensor shapes do not match: {_fmt(self.shape)} "
                f"(length {self.expected}) vs {_fmt(self.actual_shape)} "
                f"(length {self.actual})."
            )
        else:
            msg = (
                f"Data length ({self.actual}) does not match shape product "
                f"({self.expected}); expected data length: "
                f"{_fmt(self.shape)} = {self.expected}."
            )
        super().__init__(msg)


class BackendUnsupportedError(RuntimeError):
    """
    Raised when an accelerator-resident resource is requested but no
    accelerator backend is implemented.

    Calling code can rely on this error to feature-detect accelerator
    support instead of silently receiving host data.

    Attributes
    ----------
    op : str
        The accessor or operation that was attempted (e.g., "device_data").
    device : str
        String representation of the device on which it was attempted.
    """

    def __init__(self, op: str, device: str) -> None:
        """
        Initialize the BackendUnsupportedError.

        Parameters
        ----------
        op : str
            The unsupported accessor or operation name.
        device : str
            The device identifier (e.g., "cpu", "accelerator:0").
        """
        super().__init__(f"{op} is not supported for device '{device}'.")
        self.op = op
        self.device = device
