from ._memory import TensorMemoryBase, TensorMemoryCpu
from ._shape import compute_length, compute_strides, format_shape, validate_shape
from ._storage import AcceleratorStorage, HostStorage, Storage
from ._tensor import Tensor

__all__ = [
    TensorMemoryBase.__name__,
    TensorMemoryCpu.__name__,
    compute_length.__name__,
    compute_strides.__name__,
    format_shape.__name__,
    validate_shape.__name__,
    AcceleratorStorage.__name__,
    HostStorage.__name__,
    "Storage",
    Tensor.__name__,
]
