"""
Storage variants backing tensor memory.

Tensor storage is modelled as a tagged variant:

- `HostStorage`: a flat, row-major NumPy buffer plus the shape and strides
  describing it. Always populated for CPU tensor memory.
- `AcceleratorStorage`: opaque handles into an accelerator's memory space
  (shape, data, length, strides). No backend allocates these yet; the type
  exists so an accelerator backend can be added without touching the host
  path.

Each variant reports the `Device` descriptor of the memory space it lives in,
so a memory's location is always derived from its storage tag.

Ownership
---------
A storage instance is owned by exactly one tensor memory. There is no
sharing, no reference counting and no copy-on-write: `HostStorage.copy()`
always produces an independent buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from ...domain.device._device import Device


@dataclass(frozen=True)
class HostStorage:
    """
    Host-resident storage for one tensor.

    Attributes
    ----------
    data : np.ndarray
        One-dimensional, C-contiguous buffer of ``length`` elements. The
        array object is fixed for the lifetime of the storage; its contents
        may be mutated by in-place device operations.
    shape : tuple[int, ...]
        Validated tensor shape.
    strides : tuple[int, ...]
        Row-major strides in elements, derived from `shape`.
    """

    data: np.ndarray
    shape: tuple[int, ...]
    strides: tuple[int, ...]

    @property
    def length(self) -> int:
        return int(self.data.size)

    @property
    def device(self) -> Device:
        """Host storage always lives in host memory."""
        return Device.host()

    def copy(self) -> "HostStorage":
        """
        Return a storage with independently-owned copies of all fields.

        Shape and strides are immutable tuples; they are rebuilt anyway so the
        copy shares no objects with the source.
        """
        return HostStorage(
            data=self.data.copy(order="C"),
            shape=tuple(self.shape),
            strides=tuple(self.strides),
        )


@dataclass(frozen=True)
class AcceleratorStorage:
    """
    Accelerator-resident storage handles (reserved).

    All handles are opaque integers (device pointers) owned by a future
    accelerator backend.
    """

    device_index: int
    shape_ptr: int
    data_ptr: int
    length_ptr: int
    strides_ptr: int
    dtype: Optional[np.dtype] = None

    def __post_init__(self) -> None:
        # Rejects negative or non-int ordinals up front.
        Device.accelerator(self.device_index)

    @property
    def device(self) -> Device:
        """Descriptor of the accelerator that owns these handles."""
        return Device.accelerator(self.device_index)


Storage = Union[HostStorage, AcceleratorStorage]
