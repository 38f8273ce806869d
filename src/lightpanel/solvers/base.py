from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

import numpy as np

from ..panel import Machine


@dataclass(frozen=True, eq=False)
class Solution:
    bits: np.ndarray
    n_free: Optional[int] = None
    pressed: tuple[int, ...] = field(init=False)

    def __post_init__(self):
        object.__setattr__(
            self, "pressed", tuple(int(j) for j in np.flatnonzero(self.bits))
        )

    @property
    def presses(self) -> int:
        return len(self.pressed)


class Solver(Protocol):
    def solve(self, machine: Machine) -> Solution: ...
