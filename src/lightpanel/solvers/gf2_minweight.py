from __future__ import annotations

import logging
from typing import Optional

from ..algebra import gf2_min_weight_solution
from ..config import SolverConfig
from ..panel import Machine
from ..tracing import EliminationTracer, LoggingTracer
from .base import Solution, Solver

logger = logging.getLogger(__name__)


class GF2MinWeight(Solver):
    """Solve A x = b over GF(2) and keep the lightest solution."""

    def __init__(
        self,
        config: SolverConfig | None = None,
        tracer: Optional[EliminationTracer] = None,
    ):
        self.config = config or SolverConfig()
        if tracer is None and self.config.trace:
            tracer = LoggingTracer()
        self.tracer = tracer

    def solve(self, machine: Machine) -> Solution:
        bits, n_free = gf2_min_weight_solution(
            machine.buttons,
            machine.target,
            max_free=self.config.max_free_variables,
            tracer=self.tracer,
        )
        solution = Solution(bits, n_free)
        logger.debug(
            "%r: %d presses, %d free variables",
            machine,
            solution.presses,
            n_free,
        )
        return solution


def min_presses(machine: Machine, config: SolverConfig | None = None) -> int:
    return GF2MinWeight(config).solve(machine).presses
