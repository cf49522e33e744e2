"""
Device contracts for Salp.

Two duck-typed protocols live here:

- `DeviceLike` describes a storage-kind *descriptor* (e.g., `Device.host()`)
  without coupling callers to the concrete `Device` class.
- `IDevice` describes an *execution engine* that performs element-wise and
  reduction operations over tensors of one element type.

Execution engines are stateless: they never retain anything across calls and
never share buffers between tensors. Every operation validates its operands
before writing the first element.
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Optional,
    Protocol,
    Sequence,
    runtime_checkable,
)

if TYPE_CHECKING:
    from .._tensor import ITensor


@runtime_checkable
class DeviceLike(Protocol):
    """
    Duck-typed storage-location descriptor.

    Any object that provides these members can be used as a device descriptor
    regardless of its concrete class identity.
    """

    kind: object
    index: Optional[int]

    def is_host(self) -> bool: ...
    def is_accelerator(self) -> bool: ...
    def __str__(self) -> str: ...


@runtime_checkable
class IDevice(Protocol):
    """
    Execution-engine contract.

    Out-of-place operations return a new tensor and leave every operand
    unchanged. In-place operations (``*_in_place``) mutate and return their
    first operand; any second operand is read-only.

    Notes
    -----
    Element-wise primitives (`map`, `zip`) require that index ``i`` of the
    result depends only on index ``i`` of the operands. Implementations may
    therefore partition the index range across workers without locking.
    """

    @property
    def dtype(self) -> Any:
        """Element dtype this device operates on."""
        ...

    def map(self, a: "ITensor", func: Callable[[Any], Any]) -> "ITensor": ...

    def map_in_place(
        self, a: "ITensor", func: Callable[[Any], Any]
    ) -> "ITensor": ...

    def zip(
        self, a: "ITensor", b: "ITensor", func: Callable[[Any, Any], Any]
    ) -> "ITensor": ...

    def zip_in_place(
        self, a: "ITensor", b: "ITensor", func: Callable[[Any, Any], Any]
    ) -> "ITensor": ...

    def add(self, a: "ITensor", b: "ITensor") -> "ITensor": ...
    def add_in_place(self, a: "ITensor", b: "ITensor") -> "ITensor": ...
    def subtract(self, a: "ITensor", b: "ITensor") -> "ITensor": ...
    def subtract_in_place(self, a: "ITensor", b: "ITensor") -> "ITensor": ...
    def multiply(self, a: "ITensor", b: "ITensor") -> "ITensor": ...
    def multiply_in_place(self, a: "ITensor", b: "ITensor") -> "ITensor": ...
    def divide(self, a: "ITensor", b: "ITensor") -> "ITensor": ...
    def divide_in_place(self, a: "ITensor", b: "ITensor") -> "ITensor": ...

    def negate(self, a: "ITensor") -> "ITensor": ...
    def negate_in_place(self, a: "ITensor") -> "ITensor": ...
    def abs(self, a: "ITensor") -> "ITensor": ...
    def abs_in_place(self, a: "ITensor") -> "ITensor": ...

    def sum(self, a: "ITensor") -> Any: ...
    def mean(self, a: "ITensor") -> Any: ...
    def max(self, a: "ITensor") -> Any: ...
    def min(self, a: "ITensor") -> Any: ...

    def equal(self, a: "ITensor", b: "ITensor") -> bool: ...

    def create_tensor(self, shape: Sequence[int]) -> "ITensor": ...
