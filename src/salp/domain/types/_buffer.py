"""
Domain-level structural typing for flat element buffers.

:class:`FlatBufferLike` describes the one-dimensional, contiguous element
buffer owned by a tensor memory, without importing NumPy into the domain
layer. ``numpy.ndarray`` satisfies it; a future accelerator backend may
provide its own host-side staging buffer that does too.
"""

from __future__ import annotations

from typing import Any, Iterator, Protocol, Tuple, runtime_checkable


@runtime_checkable
class FlatBufferLike(Protocol):
    """
    Structural interface for a flat, indexable element buffer.

    Notes
    -----
    - Only the subset used by tensors and devices is modelled: element
      access, length, dtype, and copying.
    - Element reads and writes at distinct indices must not interfere with
      each other; parallel element-wise execution relies on this.
    """

    @property
    def shape(self) -> Tuple[int, ...]:
        """
        Shape of the buffer; always a 1-tuple ``(length,)`` for tensor data.
        """
        ...

    @property
    def size(self) -> int:
        """Total number of elements."""
        ...

    @property
    def dtype(self) -> Any:
        """Backend-defined element type descriptor (e.g., ``numpy.dtype``)."""
        ...

    def copy(self) -> FlatBufferLike:
        """Return an independent copy of the buffer."""
        ...

    def __len__(self) -> int: ...

    def __getitem__(self, index: Any) -> Any: ...

    def __setitem__(self, index: Any, value: Any) -> None: ...

    def __iter__(self) -> Iterator[Any]: ...
