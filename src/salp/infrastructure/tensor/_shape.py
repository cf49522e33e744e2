"""
Shape and stride math.

Pure helpers shared by tensor memory, tensors and devices:

- `validate_shape`: normalize a shape to ``tuple[int, ...]`` and enforce that
  it is non-empty with every dimension > 0.
- `compute_length`: product of dimensions (0 for the degenerate empty shape).
- `compute_strides`: row-major strides; the last stride is always 1.
- `format_shape`: ``"2x3"`` rendering for diagnostics.
"""

from __future__ import annotations

import numbers
from typing import Sequence

from ...domain._errors import ShapeInvalidError


def validate_shape(shape: Sequence[int]) -> tuple[int, ...]:
    """
    Validate and normalize a tensor shape.

    Parameters
    ----------
    shape : Sequence[int]
        Candidate shape.

    Returns
    -------
    tuple[int, ...]
        The shape as a tuple of Python ints.

    Raises
    ------
    ShapeInvalidError
        If the shape is not a sequence, is empty, contains a non-integer
        entry, or contains a dimension <= 0.
    """
    try:
        dims = tuple(shape)
    except TypeError:
        raise ShapeInvalidError(
            (shape,), "shape must be a sequence of integers"
        ) from None

    if len(dims) == 0:
        raise ShapeInvalidError(dims, "shape must have at least one dimension")

    out = []
    for d in dims:
        # bool is an Integral subclass but never a meaningful dimension
        if isinstance(d, bool) or not isinstance(d, numbers.Integral):
            raise ShapeInvalidError(dims, f"dimension {d!r} is not an integer")
        if d <= 0:
            raise ShapeInvalidError(dims, "all dimensions must be greater than zero")
        out.append(int(d))
    return tuple(out)


def compute_length(shape: Sequence[int]) -> int:
    """
    Return the number of elements described by `shape`.

    An empty shape yields 0. This is a degenerate, non-error case; shapes
    that reach tensor construction are never empty.
    """
    if len(shape) == 0:
        return 0
    n = 1
    for d in shape:
        n *= int(d)
    return n


def compute_strides(shape: Sequence[int]) -> tuple[int, ...]:
    """
    Compute row-major strides for a validated shape.

    Parameters
    ----------
    shape : Sequence[int]
        A validated shape (non-empty, all dimensions > 0).

    Returns
    -------
    tuple[int, ...]
        Strides in elements, e.g. ``(3, 1)`` for shape ``(2, 3)``.

    Raises
    ------
    ShapeInvalidError
        If `shape` is empty.
    """
    dims = len(shape)
    if dims == 0:
        raise ShapeInvalidError((), "strides are undefined for an empty shape")

    strides = [0] * dims
    # Last dimension is contiguous.
    strides[-1] = 1
    for i in range(dims - 2, -1, -1):
        strides[i] = strides[i + 1] * int(shape[i + 1])
    return tuple(strides)


def format_shape(shape: Sequence[int], sep: str = "x") -> str:
    return sep.join(str(int(d)) for d in shape)
