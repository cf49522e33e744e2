"""
Salp: a minimal N-dimensional numeric tensor library.

Tensors store homogeneous numeric data in a flat, row-major NumPy buffer
together with a shape and derived strides. Execution devices perform
element-wise and reduction operations over those buffers; the CPU device
switches to fork-join execution for large tensors.
"""

from .domain import (
    BackendUnsupportedError,
    Device,
    DeviceLike,
    StorageKind,
    IDevice,
    ITensor,
    ITensorMemory,
    ShapeInvalidError,
    ShapeMismatchError,
)
from .infrastructure.config import SalpConfig, load_config
from .infrastructure.devices import DeviceCPU, get_device
from .infrastructure.logging import setup_logging
from .infrastructure.tensor import (
    AcceleratorStorage,
    HostStorage,
    Tensor,
    TensorMemoryCpu,
    compute_length,
    compute_strides,
)
from .infrastructure.types import ElementType

__version__ = "0.1.0"

__all__ = [
    "BackendUnsupportedError",
    "Device",
    "DeviceLike",
    "StorageKind",
    "IDevice",
    "ITensor",
    "ITensorMemory",
    "ShapeInvalidError",
    "ShapeMismatchError",
    "SalpConfig",
    "load_config",
    "DeviceCPU",
    "get_device",
    "setup_logging",
    "AcceleratorStorage",
    "HostStorage",
    "Tensor",
    "TensorMemoryCpu",
    "compute_length",
    "compute_strides",
    "ElementType",
]
