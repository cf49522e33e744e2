"""
Execution-device resolution.

`get_device` maps a storage-kind descriptor and an element dtype to an
execution engine. Only host ("cpu") execution is implemented; accelerator
descriptors raise `BackendUnsupportedError`, which is the supported way to
feature-detect accelerator availability.
"""

from __future__ import annotations

from typing import Any, Union

import numpy as np

from ...domain._errors import BackendUnsupportedError
from ...domain.device._device import Device
from ...domain.device._device_protocol import DeviceLike, IDevice
from ._device_cpu import DeviceCPU


def get_device(
    device: Union[str, DeviceLike] = "cpu", dtype: Any = np.float64
) -> IDevice:
    """
    Resolve an execution device.

    Parameters
    ----------
    device : Union[str, DeviceLike], optional
        A device string ("cpu", "accelerator:<index>") or descriptor.
        Defaults to "cpu".
    dtype : Any, optional
        Element dtype the returned device operates on. Defaults to
        ``np.float64``.

    Returns
    -------
    IDevice
        A fresh execution engine. Engines are stateless, so a new instance is
        equivalent to any other with the same settings.

    Raises
    ------
    BackendUnsupportedError
        If `device` names an accelerator.
    ValueError
        If `device` is an invalid device string.
    """
    if isinstance(device, str):
        device = Device.parse(device)

    if device.is_host():
        return DeviceCPU(dtype)

    raise BackendUnsupportedError("get_device", str(device))
