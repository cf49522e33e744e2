"""
Concrete Tensor handle (NumPy host backend).

A `Tensor` is a thin handle that exclusively owns one `TensorMemoryCpu`.
Its structure (shape, strides, length, dtype) is fixed at construction; the
buffer contents change only through in-place device operations. Accessors
return read views: `data` is a read-only NumPy view of the flat buffer, so
external code cannot replace or write through it.

Design notes
------------
- Tensors are created zero-filled from a shape, or from a shape plus
  row-major data whose length must equal the shape's product.
- `clone()` deep-copies the underlying memory; the copy shares no mutable
  state with the source.
- The convenience math methods (`map`, `zip`, `add`, ...) are out-of-place
  and delegate to the execution device resolved for the tensor's storage
  kind and dtype. They exist for ergonomic call sites; devices remain the
  primary API and the only path to in-place mutation.
- Equality is explicit (`IDevice.equal`). `__eq__` is not overridden, so
  tensors compare and hash by identity.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

import numpy as np

from ...domain._tensor import ITensor
from ...domain.device._device import Device
from ..types._element_type import ElementType
from ._memory import TensorMemoryCpu
from ._shape import format_shape


class Tensor(ITensor):
    """
    Concrete tensor handle.

    Parameters
    ----------
    shape : Sequence[int]
        Tensor shape; every dimension must be a positive integer.
    data : Optional[Any], optional
        Row-major element data (any sequence or array-like). When omitted the
        tensor is zero-filled. The data is copied into an owned buffer.
    dtype : Any, optional
        Element dtype. Defaults to ``np.float64``.

    Raises
    ------
    ShapeInvalidError
        If the shape is empty, or contains a non-integer or non-positive
        dimension.
    ShapeMismatchError
        If ``len(data) != product(shape)``.
    TypeError
        If `dtype` is not an integer or real floating type.
    """

    def __init__(
        self,
        shape: Sequence[int],
        data: Optional[Any] = None,
        *,
        dtype: Any = np.float64,
    ) -> None:
        if data is None:
            self._memory = TensorMemoryCpu.create(shape, dtype)
        else:
            self._memory = TensorMemoryCpu.from_data(shape, data, dtype)

    @classmethod
    def from_memory(cls, memory: TensorMemoryCpu) -> "Tensor":
        """
        Wrap an existing memory without copying.

        The returned tensor takes exclusive ownership of `memory`; callers
        must not hand the same memory to another live tensor.
        """
        obj = cls.__new__(cls)  # bypass __init__
        obj._memory = memory
        return obj

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def memory(self) -> TensorMemoryCpu:
        return self._memory

    @property
    def shape(self) -> tuple[int, ...]:
        return self._memory.host_shape

    @property
    def strides(self) -> tuple[int, ...]:
        return self._memory.host_strides

    @property
    def length(self) -> int:
        return self._memory.host_length

    @property
    def dtype(self) -> np.dtype:
        return self._memory.dtype

    @property
    def element_type(self) -> ElementType:
        return self._memory.element_type

    @property
    def device(self) -> Device:
        return self._memory.device

    @property
    def data(self) -> np.ndarray:
        """
        Read-only view of the flat, row-major buffer.

        Returns
        -------
        np.ndarray
            A non-writeable 1-D view. It reflects later in-place device
            operations on this tensor; use `copy_data()` for a snapshot.
        """
        view = self._memory.host_data.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return self.length

    # ------------------------------------------------------------------
    # Copies
    # ------------------------------------------------------------------
    def clone(self) -> "Tensor":
        """Return a fully independent copy of this tensor."""
        return Tensor.from_memory(self._memory.clone())

    def copy_shape(self) -> list[int]:
        """Return the shape as a new list the caller may mutate."""
        return list(self.shape)

    def copy_data(self) -> np.ndarray:
        return self._memory.host_data.copy()

    def to_numpy(self) -> np.ndarray:
        """
        Return a copy of the data reshaped to the tensor's shape.
        """
        return self._memory.host_data.reshape(self.shape).copy()

    # ------------------------------------------------------------------
    # Convenience math (out-of-place, device-backed)
    # ------------------------------------------------------------------
    def _execution_device(self):
        from ..devices._registry import get_device

        return get_device(self.device, self.dtype)

    def map(self, func: Callable[[Any], Any]) -> "Tensor":
        return self._execution_device().map(self, func)

    def zip(self, other: "Tensor", func: Callable[[Any, Any], Any]) -> "Tensor":
        return self._execution_device().zip(self, other, func)

    def add(self, other: "Tensor") -> "Tensor":
        return self._execution_device().add(self, other)

    def sub(self, other: "Tensor") -> "Tensor":
        return self._execution_device().subtract(self, other)

    def mul(self, other: "Tensor") -> "Tensor":
        return self._execution_device().multiply(self, other)

    def div(self, other: "Tensor") -> "Tensor":
        return self._execution_device().divide(self, other)

    def negate(self) -> "Tensor":
        return self._execution_device().negate(self)

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return f"Tensor<{self.dtype.name}>[{format_shape(self.shape)}]"

    def __repr__(self) -> str:
        return (
            f"Tensor(shape={self.shape}, dtype={self.dtype.name}, "
            f"device={self.device})"
        )
