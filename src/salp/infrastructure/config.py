"""
Runtime configuration for the execution devices.

Settings are read from environment variables when a device is constructed
without explicit overrides:

- ``SALP_PARALLEL_THRESHOLD``: element count at or above which element-wise
  operations are distributed across worker threads (default 10000).
- ``SALP_MAX_WORKERS``: upper bound on worker threads for parallel execution
  (default ``min(32, os.cpu_count() + 4)``, the `ThreadPoolExecutor` default).

The threshold is a performance heuristic only; results are identical on
either side of it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Mapping, Optional

MIN_LENGTH_FOR_PARALLELISM = 10000

ENV_PARALLEL_THRESHOLD = "SALP_PARALLEL_THRESHOLD"
ENV_MAX_WORKERS = "SALP_MAX_WORKERS"


def _default_max_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


@dataclass(frozen=True)
class SalpConfig:
    """
    Execution settings shared by CPU devices.

    Attributes
    ----------
    parallel_threshold : int
        Minimum buffer length for fork-join execution. Must be >= 1.
    max_workers : int
        Maximum number of worker threads. Must be >= 1.
    """

    parallel_threshold: int = MIN_LENGTH_FOR_PARALLELISM
    max_workers: int = field(default_factory=_default_max_workers)

    def __post_init__(self) -> None:
        _check_positive("parallel_threshold", self.parallel_threshold)
        _check_positive("max_workers", self.max_workers)


def _check_positive(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


def _read_int(env: Mapping[str, str], key: str) -> Optional[int]:
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def load_config(
    env: Optional[Mapping[str, str]] = None,
    *,
    parallel_threshold: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> SalpConfig:
    """
    Build a `SalpConfig` from environment variables.

    Parameters
    ----------
    env : Optional[Mapping[str, str]], optional
        Mapping to read from. Defaults to ``os.environ``.
    parallel_threshold : Optional[int], optional
        Explicit threshold. When given, ``SALP_PARALLEL_THRESHOLD`` is not
        read at all.
    max_workers : Optional[int], optional
        Explicit worker bound. When given, ``SALP_MAX_WORKERS`` is not read at
        all.

    Returns
    -------
    SalpConfig
        Configuration with unset variables left at their defaults.

    Raises
    ------
    ValueError
        If a variable that is read, or an explicit value, is non-integer or
        non-positive.
    """
    env = os.environ if env is None else env

    if parallel_threshold is None:
        parallel_threshold = _read_int(env, ENV_PARALLEL_THRESHOLD)
    if max_workers is None:
        max_workers = _read_int(env, ENV_MAX_WORKERS)

    kwargs = {}
    if parallel_threshold is not None:
        kwargs["parallel_threshold"] = parallel_threshold
    if max_workers is not None:
        kwargs["max_workers"] = max_workers
    return SalpConfig(**kwargs)
