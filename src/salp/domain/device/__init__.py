from ._device import Device, StorageKind
from ._device_protocol import DeviceLike, IDevice

__all__ = [
    Device.__name__,
    StorageKind.__name__,
    DeviceLike.__name__,
    IDevice.__name__,
]
