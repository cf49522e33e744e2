"""
Backend-agnostic contracts: tensor/memory protocols, device descriptors and
the error taxonomy.
"""

from ._errors import BackendUnsupportedError, ShapeInvalidError, ShapeMismatchError
from ._tensor import ITensor, ITensorMemory
from .device import Device, DeviceLike, StorageKind, IDevice
from .types import FlatBufferLike

__all__ = [
    BackendUnsupportedError.__name__,
    ShapeInvalidError.__name__,
    ShapeMismatchError.__name__,
    ITensor.__name__,
    ITensorMemory.__name__,
    Device.__name__,
    DeviceLike.__name__,
    StorageKind.__name__,
    IDevice.__name__,
    FlatBufferLike.__name__,
]
