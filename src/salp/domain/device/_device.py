"""
Storage-location descriptors.

A `Device` names the memory space a tensor's storage lives in. It mirrors the
storage variant one-to-one: host storage maps to the single host location,
accelerator storage maps to an accelerator location identified by the same
``device_index`` the storage carries. A descriptor neither allocates memory
nor executes operations; execution engines (see `IDevice`) are resolved from
it by the infrastructure-layer device registry.

Text form
---------
``"cpu"`` names host memory and ``"accelerator:<index>"`` names accelerator
``index``. `Device.parse` accepts exactly these forms and `str(device)`
produces them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

_HOST_TEXT = "cpu"


class StorageKind(Enum):
    """
    Where a storage variant keeps its buffer.

    Attributes
    ----------
    HOST : StorageKind
        Normal addressable memory. Always available.
    ACCELERATOR : StorageKind
        A separate accelerator memory space. Reserved; no backend allocates it
        yet.
    """

    HOST = "cpu"
    ACCELERATOR = "accelerator"


@dataclass(frozen=True)
class Device:
    """
    Storage-location descriptor.

    Parameters
    ----------
    kind : StorageKind
        Storage kind this descriptor names.
    index : Optional[int]
        Accelerator ordinal. Must be ``None`` for host storage and a
        non-negative integer for accelerator storage.

    Raises
    ------
    ValueError
        If `index` does not fit `kind`.

    Notes
    -----
    Prefer the `host`, `accelerator` and `parse` constructors. Descriptors are
    immutable and hashable, so they can key caches of execution engines.
    """

    kind: StorageKind
    index: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is StorageKind.HOST:
            if self.index is not None:
                raise ValueError(
                    f"Host storage takes no device index (got {self.index!r})."
                )
            return

        if (
            isinstance(self.index, bool)
            or not isinstance(self.index, int)
            or self.index < 0
        ):
            raise ValueError(
                f"Accelerator device index must be a non-negative int, "
                f"got {self.index!r}."
            )

    @classmethod
    def host(cls) -> "Device":
        """Return the descriptor for host memory."""
        return cls(StorageKind.HOST)

    @classmethod
    def accelerator(cls, index: int) -> "Device":
        """Return the descriptor for accelerator `index`."""
        return cls(StorageKind.ACCELERATOR, index)

    @classmethod
    def parse(cls, value: Union[str, "Device"]) -> "Device":
        """
        Build a descriptor from its text form.

        Parameters
        ----------
        value : Union[str, Device]
            ``"cpu"``, ``"accelerator:<index>"``, or an existing descriptor
            (returned unchanged).

        Returns
        -------
        Device
            The parsed descriptor.

        Raises
        ------
        ValueError
            If `value` is not one of the accepted forms.
        """
        if isinstance(value, Device):
            return value

        text = str(value).strip()
        if text == _HOST_TEXT:
            return cls.host()

        prefix, sep, ordinal = text.partition(":")
        if prefix == StorageKind.ACCELERATOR.value and sep and ordinal.isdigit():
            return cls.accelerator(int(ordinal))

        raise ValueError(
            f"Invalid device {value!r}. Expected 'cpu' or 'accelerator:<index>'."
        )

    def is_host(self) -> bool:
        """Return True if this descriptor names host memory."""
        return self.kind is StorageKind.HOST

    def is_accelerator(self) -> bool:
        """Return True if this descriptor names accelerator memory."""
        return self.kind is StorageKind.ACCELERATOR

    def __str__(self) -> str:
        if self.kind is StorageKind.HOST:
            return _HOST_TEXT
        return f"{self.kind.value}:{self.index}"
