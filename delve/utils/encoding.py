"""Run-length encoding for per-cell grid layers sent over the API."""

from __future__ import annotations

from typing import Iterable


def run_length_encode(values: Iterable[int]) -> list[int]:
    """Encode *values* as ``[value, count, value, count, ...]``."""
    rle: list[int] = []
    cur_val: int | None = None
    cur_count = 0
    for raw in values:
        v = int(raw)
        if v == cur_val:
            cur_count += 1
            continue
        if cur_val is not None:
            rle.append(cur_val)
            rle.append(cur_count)
        cur_val = v
        cur_count = 1
    if cur_val is not None:
        rle.append(cur_val)
        rle.append(cur_count)
    return rle


def run_length_decode(rle: list[int]) -> list[int]:
    """Expand a ``[value, count, ...]`` list back into one value per cell."""
    if len(rle) % 2:
        raise ValueError("Run-length list must contain value/count pairs")
    out: list[int] = []
    for i in range(0, len(rle), 2):
        out.extend([rle[i]] * rle[i + 1])
    return out
