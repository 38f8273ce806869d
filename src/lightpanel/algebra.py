from __future__ import annotations

from typing import Iterable, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .errors import (
    InconsistentSystemError,
    OutOfRangeIndexError,
    TooManyFreeVariablesError,
)
from .panel import light_index
from .tracing import EliminationTracer

# candidate assignments evaluated per vectorised step
_CHUNK = 1 << 12


class Reduction(NamedTuple):
    """Read-only RREF of an augmented matrix [A|b] and its pivot map."""

    matrix: np.ndarray
    pivots: list[Optional[int]]
    n_vars: int


def build_augmented(
    buttons: Sequence[Iterable[int]], target: Sequence[bool] | np.ndarray
) -> np.ndarray:
    """Return the augmented matrix [A|b] over GF(2).

    Column j encodes the lights toggled by button j, the last column is the
    target pattern.
    """
    m = len(target)
    n = len(buttons)
    M = np.zeros((m, n + 1), dtype=np.uint8)

    for j, lights in enumerate(buttons):
        for i in lights:
            i = light_index(i)
            if not 0 <= i < m:
                raise OutOfRangeIndexError(j, i, m)
            M[i, j] = 1
    M[:, n] = np.asarray(target, dtype=bool).astype(np.uint8)
    return M


def gf2_rref_inplace(
    M: np.ndarray, n_vars: int, tracer: EliminationTracer | None = None
) -> list[Optional[int]]:
    """Reduce M to RREF over GF(2) in place; return the pivot column of each row.

    Only the first n_vars columns are eligible as pivots. Rows without a pivot
    map to None and end up below every pivot row.
    """
    m = M.shape[0]
    pivots: list[Optional[int]] = [None] * m

    row = 0
    for col in range(n_vars):
        # topmost row at or below the current pivot row
        candidates = np.flatnonzero(M[row:, col])
        if candidates.size == 0:
            if tracer is not None:
                tracer.on_free(col)
            continue
        pivot = row + int(candidates[0])
        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
            if tracer is not None:
                tracer.on_swap(row, pivot)
        pivots[row] = col
        if tracer is not None:
            tracer.on_pivot(row, col)
        # eliminate ALL other rows (Gauss-Jordan)
        for r in np.flatnonzero(M[:, col]):
            if r != row:
                M[r, :] ^= M[row, :]
                if tracer is not None:
                    tracer.on_xor(int(r), row, col)
        row += 1
    return pivots


def gf2_rref(
    M: np.ndarray, n_vars: int, tracer: EliminationTracer | None = None
) -> Reduction:
    """Reduce a private copy of M and hand it back read-only."""
    R = (M % 2).astype(np.uint8, copy=True)
    pivots = gf2_rref_inplace(R, n_vars, tracer)
    R.setflags(write=False)
    return Reduction(R, pivots, n_vars)


def check_consistent(reduction: Reduction) -> None:
    """Raise InconsistentSystemError on a 0...0 | 1 row."""
    R, pivots, n = reduction
    for r, pc in enumerate(pivots):
        if pc is None and R[r, n]:
            raise InconsistentSystemError(r)


def free_columns(reduction: Reduction) -> list[int]:
    pivcols = {pc for pc in reduction.pivots if pc is not None}
    return [j for j in range(reduction.n_vars) if j not in pivcols]


def min_weight_solution(
    reduction: Reduction, max_free: Optional[int] = None
) -> np.ndarray:
    """Return the minimum-Hamming-weight solution of a consistent reduction.

    Enumerates every assignment of the free variables (2**k candidates) and
    back-substitutes the pivot variables straight from the RREF rows. Ties
    keep the first candidate in mask order.
    """
    R, pivots, n = reduction
    frees = free_columns(reduction)
    k = len(frees)
    if max_free is not None and k > max_free:
        raise TooManyFreeVariablesError(k, max_free)

    rows = [r for r, pc in enumerate(pivots) if pc is not None]
    pivcols = [pivots[r] for r in rows]
    R_b = R[rows, n].astype(np.int64)
    R_free = R[np.ix_(rows, frees)].astype(np.int64)

    best: np.ndarray | None = None
    best_w = n + 1
    bit = np.arange(k)
    total = 1 << k
    for start in range(0, total, _CHUNK):
        # row i of X is mask start + i; bit b of the mask is free column b
        masks = np.arange(start, min(start + _CHUNK, total), dtype=np.int64)
        X = (masks[:, None] >> bit) & 1
        P = (R_b + X @ R_free.T) % 2
        weights = X.sum(axis=1) + P.sum(axis=1)
        i = int(np.argmin(weights))
        if weights[i] < best_w:
            best = np.zeros((n,), dtype=np.uint8)
            best[frees] = X[i]
            best[pivcols] = P[i]
            best_w = int(weights[i])
    assert best is not None
    return best


def gf2_min_weight_solution(
    buttons: Sequence[Iterable[int]],
    target: Sequence[bool] | np.ndarray,
    max_free: Optional[int] = None,
    tracer: EliminationTracer | None = None,
) -> Tuple[np.ndarray, int]:
    """Return (minimum-weight press vector, number of free variables)."""
    M = build_augmented(buttons, target)
    reduction = gf2_rref(M, len(buttons), tracer)
    check_consistent(reduction)
    solution = min_weight_solution(reduction, max_free)
    return solution, len(free_columns(reduction))
