# scripts/bench_elementwise_sequential_vs_parallel.py
"""
Microbench: element-wise device ops, sequential vs fork-join (CPU).

What it measures
----------------
- Per-op latency of map/zip based device ops on two CPU devices that differ
  only in their parallel threshold: one always sequential, one always
  fork-join.
- Uses warmup iterations (not recorded), then repeats with median/p95.
- Verifies once per op that both strategies produce identical buffers.

Notes
-----
- Includes Python call overhead per element; the numbers describe the
  library as used, not NumPy's vectorized kernels.

Example
-------
python scripts/bench_elementwise_sequential_vs_parallel.py --shape 200 100 \
    --dtype float64 --workers 8 --warmup 2 --repeats 10
"""

from __future__ import annotations

import argparse
import logging
import math
import statistics
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

import numpy as np

import os
import sys

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from salp import DeviceCPU, Tensor, setup_logging  # noqa: E402

logger = logging.getLogger("bench_elementwise")


# ----------------------------
# Stats helpers
# ----------------------------
def _median(xs: Sequence[float]) -> float:
    return statistics.median(xs) if xs else float("nan")


def _p95(xs: Sequence[float]) -> float:
    if not xs:
        return float("nan")
    ys = sorted(xs)
    k = int(math.ceil(0.95 * len(ys))) - 1
    k = max(0, min(k, len(ys) - 1))
    return ys[k]


def _fmt_ms(sec: float) -> str:
    return f"{sec * 1e3:10.3f} ms"


@dataclass
class OpResult:
    name: str
    seq_med: float
    seq_p95: float
    par_med: float
    par_p95: float


# ----------------------------
# Bench core
# ----------------------------
def _time_op(fn: Callable[[], object], *, warmup: int, repeats: int) -> List[float]:
    for _ in range(warmup):
        fn()

    times: List[float] = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        fn()
        times.append(time.perf_counter() - t0)
    return times


def _build_ops(device: DeviceCPU, a: Tensor, b: Tensor) -> Dict[str, Callable[[], Tensor]]:
    return {
        "add": lambda: device.add(a, b),
        "sub": lambda: device.subtract(a, b),
        "mul": lambda: device.multiply(a, b),
        "div": lambda: device.divide(a, b),
        "neg": lambda: device.negate(a),
        "abs": lambda: device.abs(a),
        "map": lambda: device.map(a, lambda x: x * x + 1),
    }


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--shape",
        nargs="+",
        type=int,
        default=[200, 100],
        help="Tensor shape, e.g. --shape 200 100",
    )
    ap.add_argument("--dtype", choices=["float32", "float64", "int32", "int64"], default="float64")
    ap.add_argument("--workers", type=int, default=4)
    ap.add_argument("--warmup", type=int, default=2)
    ap.add_argument("--repeats", type=int, default=10)
    ap.add_argument(
        "--ops",
        nargs="*",
        default=["add", "sub", "mul", "div", "neg", "abs", "map"],
    )
    ap.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    args = ap.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    shape = tuple(int(x) for x in args.shape)
    dtype = np.dtype(args.dtype)

    sequential = DeviceCPU(dtype, parallel_threshold=2**62, max_workers=args.workers)
    parallel = DeviceCPU(dtype, parallel_threshold=1, max_workers=args.workers)

    rng = np.random.default_rng(0)
    if dtype.kind == "f":
        a_np = rng.standard_normal(size=shape).astype(dtype)
        b_np = (rng.standard_normal(size=shape) + 4.0).astype(dtype)
    else:
        a_np = rng.integers(-1000, 1000, size=shape).astype(dtype)
        b_np = rng.integers(1, 100, size=shape).astype(dtype)

    a = Tensor(shape, a_np, dtype=dtype)
    b = Tensor(shape, b_np, dtype=dtype)

    seq_ops = _build_ops(sequential, a, b)
    par_ops = _build_ops(parallel, a, b)

    selected = [op for op in args.ops if op in seq_ops]
    if not selected:
        raise SystemExit("No valid ops selected. Try --ops add sub mul div neg abs map")

    logger.info(
        "Element-wise bench | shape=%s dtype=%s workers=%d warmup=%d repeats=%d",
        shape,
        dtype,
        args.workers,
        args.warmup,
        args.repeats,
    )

    results: List[OpResult] = []
    for name in selected:
        if not sequential.equal(seq_ops[name](), par_ops[name]()):
            raise AssertionError(f"[sanity] {name}: strategies disagree")

        seq_times = _time_op(seq_ops[name], warmup=args.warmup, repeats=args.repeats)
        par_times = _time_op(par_ops[name], warmup=args.warmup, repeats=args.repeats)
        results.append(
            OpResult(
                name=name,
                seq_med=_median(seq_times),
                seq_p95=_p95(seq_times),
                par_med=_median(par_times),
                par_p95=_p95(par_times),
            )
        )

    print("\nResults (median / p95):")
    print("-" * 80)
    print(
        f"{'op':8s} | {'seq_med':>13s} {'seq_p95':>13s} | "
        f"{'par_med':>13s} {'par_p95':>13s} | {'speedup':>8s}"
    )
    print("-" * 80)
    for r in results:
        speedup = r.seq_med / r.par_med if r.par_med > 0 else float("nan")
        print(
            f"{r.name:8s} | {_fmt_ms(r.seq_med)} {_fmt_ms(r.seq_p95)} | "
            f"{_fmt_ms(r.par_med)} {_fmt_ms(r.par_p95)} | {speedup:8.2f}x"
        )


if __name__ == "__main__":
    main()
