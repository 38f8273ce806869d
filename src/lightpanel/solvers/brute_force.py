from __future__ import annotations

from typing import Optional

import numpy as np

from ..errors import InconsistentSystemError, TooManyButtonsError
from ..panel import Machine
from .base import Solution, Solver


def all_solutions(machine: Machine) -> list[np.ndarray]:
    """Every press vector reproducing the target, in mask order (2**buttons scan)."""
    n = machine.n_buttons
    target = machine.target_bits()
    found = []
    for mask in range(1 << n):
        presses = np.array([(mask >> j) & 1 for j in range(n)], dtype=np.uint8)
        if np.array_equal(machine.press(presses), target):
            found.append(presses)
    return found


class BruteForce(Solver):
    """
    Try every subset of buttons and keep the lightest one.
    Only usable for small machines; serves as a reference for GF2MinWeight.
    """

    def __init__(self, max_buttons: Optional[int] = 16):
        self.max_buttons = max_buttons

    def solve(self, machine: Machine) -> Solution:
        n = machine.n_buttons
        if self.max_buttons is not None and n > self.max_buttons:
            raise TooManyButtonsError(n, self.max_buttons)

        candidates = all_solutions(machine)
        if not candidates:
            raise InconsistentSystemError()
        return Solution(min(candidates, key=lambda x: int(x.sum())))
