from ._device_cpu import DeviceCPU
from ._parallel import chunk_ranges, parallel_for
from ._registry import get_device

__all__ = [
    DeviceCPU.__name__,
    chunk_ranges.__name__,
    parallel_for.__name__,
    get_device.__name__,
]
