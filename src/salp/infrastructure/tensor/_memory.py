"""
Tensor memory implementations.

`TensorMemoryBase` defines the accessor surface shared by every storage kind:
host accessors (`host_shape`, `host_data`, `host_length`, `host_strides`)
and reserved accelerator accessors (`device_shape`, `device_data`,
`device_length`, `device_strides`).

`TensorMemoryCpu` is the only concrete memory today. It owns a single
`HostStorage`; its accelerator accessors raise `BackendUnsupportedError`
so calling code can feature-detect accelerator support instead of silently
receiving host data.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Any, Iterable, Optional, Sequence

import numpy as np

from ...domain._errors import BackendUnsupportedError, ShapeMismatchError
from ...domain._tensor import ITensorMemory
from ...domain.device._device import Device
from ..types._element_type import ElementType
from ._shape import compute_length, compute_strides, validate_shape
from ._storage import AcceleratorStorage, HostStorage, Storage

logger = logging.getLogger(__name__)


def _count_elements(data: Any) -> int:
    """Count the scalar leaves of possibly ragged nested data."""
    if isinstance(data, np.ndarray):
        return int(data.size)
    if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
        return 1
    return sum(_count_elements(x) for x in data)


def _convert_exact(src: np.ndarray, et: ElementType) -> np.ndarray:
    """
    Copy `src` into a new C-contiguous buffer of `et`, refusing lossy input.

    Integer element types accept only integral, finite values within the
    dtype's range. Floating element types accept any integer, boolean or
    floating data.

    Raises
    ------
    TypeError
        If `src` is not numeric or a value cannot be represented exactly.
    """
    kind = src.dtype.kind
    if kind not in ("b", "i", "u", "f"):
        raise TypeError(f"Tensor data must be numeric, got dtype {src.dtype}.")

    if et.is_integer:
        if kind == "f" and not (
            np.all(np.isfinite(src)) and np.all(src == np.trunc(src))
        ):
            raise TypeError(
                f"Data holds non-integral values; refusing to truncate into "
                f"{et.name}."
            )
        info = np.iinfo(et.dtype)
        lo, hi = src.min().item(), src.max().item()
        if lo < info.min or hi > info.max:
            raise TypeError(
                f"Data range [{lo}, {hi}] does not fit {et.name} "
                f"[{info.min}, {info.max}]."
            )

    return np.array(src, dtype=et.dtype, copy=True, order="C")


class TensorMemoryBase(ITensorMemory, ABC):
    """
    Abstract base for tensor memory.

    Subclasses own exactly one storage and expose it through the host and/or
    accelerator accessors. Accelerator accessors default to raising
    `BackendUnsupportedError`.
    """

    # ------------------------------------------------------------------
    # Host
    # ------------------------------------------------------------------
    @property
    @abstractmethod
    def host_shape(self) -> tuple[int, ...]: ...

    @property
    @abstractmethod
    def host_data(self) -> np.ndarray: ...

    @property
    @abstractmethod
    def host_length(self) -> int: ...

    @property
    @abstractmethod
    def host_strides(self) -> tuple[int, ...]: ...

    # ------------------------------------------------------------------
    # Accelerator (reserved)
    # ------------------------------------------------------------------
    @property
    def accelerator_storage(self) -> Optional[AcceleratorStorage]:
        return None

    @property
    def has_accelerator_storage(self) -> bool:
        return self.accelerator_storage is not None

    def _accelerator_or_raise(self, op: str) -> AcceleratorStorage:
        acc = self.accelerator_storage
        if acc is None:
            raise BackendUnsupportedError(op, str(self.device))
        return acc

    @property
    def device_shape(self) -> int:
        return self._accelerator_or_raise("device_shape").shape_ptr

    @property
    def device_data(self) -> int:
        return self._accelerator_or_raise("device_data").data_ptr

    @property
    def device_length(self) -> int:
        return self._accelerator_or_raise("device_length").length_ptr

    @property
    def device_strides(self) -> int:
        return self._accelerator_or_raise("device_strides").strides_ptr

    # ------------------------------------------------------------------
    # Common
    # ------------------------------------------------------------------
    @property
    @abstractmethod
    def storage(self) -> Storage: ...

    @property
    @abstractmethod
    def element_type(self) -> ElementType: ...

    @property
    def dtype(self) -> np.dtype:
        return self.element_type.dtype

    @property
    def device(self) -> Device:
        """Descriptor of the memory space holding the storage."""
        return self.storage.device

    @abstractmethod
    def clone(self) -> "TensorMemoryBase": ...


class TensorMemoryCpu(TensorMemoryBase):
    """
    Host-resident tensor memory backed by a flat NumPy buffer.

    Parameters
    ----------
    storage : HostStorage
        The storage to own. Callers must not retain other references to its
        buffer; prefer the `create` / `from_data` factories.
    element_type : ElementType
        Element type of the buffer. Must match ``storage.data.dtype``.

    Notes
    -----
    The buffer is always one-dimensional and C-contiguous, with exactly
    ``product(shape)`` elements in row-major order.
    """

    def __init__(self, storage: HostStorage, element_type: ElementType) -> None:
        if storage.data.dtype != element_type.dtype:
            raise TypeError(
                f"Storage dtype {storage.data.dtype} does not match element "
                f"type {element_type}."
            )
        self._storage = storage
        self._element_type = element_type

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def create(
        cls, shape: Sequence[int], dtype: Any = np.float64
    ) -> "TensorMemoryCpu":
        """
        Allocate zero-initialized memory for `shape`.

        Raises
        ------
        ShapeInvalidError
            If the shape is empty or any dimension is <= 0.
        TypeError
            If `dtype` is not a supported numeric type.
        """
        et = ElementType.of(dtype)
        dims = validate_shape(shape)
        data = np.zeros(compute_length(dims), dtype=et.dtype)
        return cls(HostStorage(data, dims, compute_strides(dims)), et)

    @classmethod
    def from_data(
        cls, shape: Sequence[int], data: Any, dtype: Any = np.float64
    ) -> "TensorMemoryCpu":
        """
        Build memory for `shape` from externally supplied row-major data.

        The data is copied into a newly owned buffer, so later changes to the
        caller's sequence never affect the tensor (and vice versa).

        Parameters
        ----------
        shape : Sequence[int]
            Target shape.
        data : Any
            A flat row-major sequence of ``product(shape)`` numbers, or an
            array-like whose shape is exactly `shape`.
        dtype : Any, optional
            Element dtype. Defaults to ``np.float64``.

        Raises
        ------
        ShapeInvalidError
            If the shape is empty or any dimension is <= 0.
        ShapeMismatchError
            If the number of supplied elements differs from ``product(shape)``,
            if multi-dimensional data does not have exactly `shape`, or if
            nested data is ragged.
        TypeError
            If `data` is a scalar, is not numeric, or holds values the element
            type cannot represent exactly (e.g., ``1.5`` or ``300`` for
            ``uint8``).
        """
        et = ElementType.of(dtype)
        dims = validate_shape(shape)
        expected = compute_length(dims)

        try:
            src = np.asarray(data)
        except ValueError:
            # Ragged nesting: numpy cannot form a rectangular array.
            raise ShapeMismatchError(_count_elements(data), expected, dims) from None

        if src.ndim == 0:
            raise TypeError(
                f"Tensor data must be a sequence, got scalar {data!r}."
            )
        if src.ndim == 1:
            if src.size != expected:
                raise ShapeMismatchError(int(src.size), expected, dims)
        elif src.shape != dims:
            raise ShapeMismatchError(
                int(src.size), expected, dims, actual_shape=src.shape
            )

        buf = _convert_exact(src, et).reshape(-1)
        return cls(HostStorage(buf, dims, compute_strides(dims)), et)

    # ------------------------------------------------------------------
    # Host
    # ------------------------------------------------------------------
    @property
    def host_shape(self) -> tuple[int, ...]:
        return self._storage.shape

    @property
    def host_data(self) -> np.ndarray:
        return self._storage.data

    @property
    def host_length(self) -> int:
        return self._storage.length

    @property
    def host_strides(self) -> tuple[int, ...]:
        return self._storage.strides

    # ------------------------------------------------------------------
    # Common
    # ------------------------------------------------------------------
    @property
    def storage(self) -> HostStorage:
        return self._storage

    @property
    def element_type(self) -> ElementType:
        return self._element_type

    def clone(self) -> "TensorMemoryCpu":
        """
        Return a deep copy with independently-owned shape, strides and data.
        """
        logger.debug(
            "Cloning %s memory %s (%d elements)",
            self._element_type,
            self._storage.shape,
            self._storage.length,
        )
        return TensorMemoryCpu(self._storage.copy(), self._element_type)

    def __repr__(self) -> str:
        return (
            f"TensorMemoryCpu(shape={self.host_shape}, "
            f"strides={self.host_strides}, dtype={self.dtype})"
        )
