"""
Tensor and tensor-memory interface definitions.

This module defines the domain-level contracts for tensor storage and tensor
handles using structural typing, so that different concrete backends (host
NumPy buffers now, accelerator buffers later) can satisfy the same interface.

Contract summary
----------------
- A tensor memory owns exactly one flat buffer, one shape and one strides
  tuple. Strides are derived from the shape (row-major) and never set
  independently.
- `host_*` accessors are always available on host memory.
- `device_*` accessors are reserved for an accelerator-resident mirror. Until
  a backend exists they raise `BackendUnsupportedError`; they never fall back
  to host data.
- A tensor handle exclusively owns one tensor memory. Its structure (shape,
  strides, length) never changes after construction; only buffer contents may
  change, and only through in-place device operations.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from typing_extensions import Self

from .device._device_protocol import DeviceLike
from .types._buffer import FlatBufferLike


@runtime_checkable
class ITensorMemory(Protocol):
    """
    Storage owned by a single tensor.

    Notes
    -----
    `clone()` always deep-copies the buffer, shape and strides. There is no
    copy-on-write and no buffer reference counting.
    """

    @property
    def host_shape(self) -> tuple[int, ...]:
        """Shape of the host-resident tensor."""
        ...

    @property
    def host_data(self) -> FlatBufferLike:
        """Mutable flat host buffer (row-major)."""
        ...

    @property
    def host_length(self) -> int:
        """Number of elements in the host buffer."""
        ...

    @property
    def host_strides(self) -> tuple[int, ...]:
        """Row-major strides of the host-resident tensor."""
        ...

    @property
    def device_shape(self) -> int:
        """Opaque accelerator handle for the shape (reserved)."""
        ...

    @property
    def device_data(self) -> int:
        """Opaque accelerator handle for the data (reserved)."""
        ...

    @property
    def device_length(self) -> int:
        """Opaque accelerator handle for the length (reserved)."""
        ...

    @property
    def device_strides(self) -> int:
        """Opaque accelerator handle for the strides (reserved)."""
        ...

    @property
    def dtype(self) -> Any:
        """Element dtype of the buffer."""
        ...

    @property
    def device(self) -> DeviceLike:
        """Descriptor of the storage kind backing this memory."""
        ...

    def clone(self) -> Self:
        """Return an independently-owned deep copy."""
        ...


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor handle interface.

    An `ITensor` wraps exactly one `ITensorMemory` and exposes read views of
    its structure and contents.
    """

    @property
    def memory(self) -> ITensorMemory:
        """The owned tensor memory."""
        ...

    @property
    def shape(self) -> tuple[int, ...]:
        """Shape of the tensor."""
        ...

    @property
    def strides(self) -> tuple[int, ...]:
        """Row-major strides of the tensor."""
        ...

    @property
    def length(self) -> int:
        """Total number of elements (product of the shape)."""
        ...

    @property
    def data(self) -> FlatBufferLike:
        """Read-only view of the flat buffer."""
        ...

    @property
    def dtype(self) -> Any:
        """Element dtype."""
        ...

    @property
    def device(self) -> DeviceLike:
        """Storage-kind descriptor."""
        ...

    def clone(self) -> "ITensor":
        """Return a fully independent copy of this tensor."""
        ...

    def copy_shape(self) -> list[int]:
        """Return the shape as a new, caller-owned mutable list."""
        ...

    def copy_data(self) -> Sequence[Any]:
        """Return an independent copy of the flat data."""
        ...
