from __future__ import annotations

import logging
import multiprocessing as mp
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .config import SolverConfig
from .errors import SolverError
from .panel import Machine
from .solvers.base import Solution
from .solvers.gf2_minweight import GF2MinWeight
from .tracing import LoggingTracer, RecordingTracer, replay

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Outcome:
    """Result of one machine: exactly one of solution / error is set."""

    index: int
    machine: Machine
    solution: Optional[Solution] = None
    error: Optional[SolverError] = None
    # elimination events, recorded only when config.trace is set
    trace: tuple = ()

    @property
    def ok(self) -> bool:
        return self.error is None


def solve_one(
    index: int, machine: Machine, config: SolverConfig | None = None
) -> Outcome:
    """Solve one machine; with config.trace the events travel back in the Outcome.

    Worker processes have no logging configuration of their own, so tracing
    is recorded here and logged by the parent in log_traces().
    """
    config = config or SolverConfig()
    tracer = RecordingTracer() if config.trace else None
    try:
        solution = GF2MinWeight(config, tracer=tracer).solve(machine)
    except SolverError as e:
        return Outcome(index, machine, error=e, trace=_events(tracer))
    return Outcome(index, machine, solution=solution, trace=_events(tracer))


def _events(tracer: RecordingTracer | None) -> tuple:
    return tuple(tracer.events) if tracer is not None else ()


def log_traces(outcomes: Iterable[Outcome]) -> None:
    for outcome in outcomes:
        if outcome.trace:
            logger.debug("elimination trace for machine %d", outcome.index)
            replay(outcome.trace, LoggingTracer())


def _run_batch(job) -> list[Outcome]:
    """Solve one slice of machines inside a worker process."""
    lo = job["idx_lo"]
    return [
        solve_one(lo + offset, machine, job["config"])
        for offset, machine in enumerate(job["machines"])
    ]


def make_batches(machines: Sequence[Machine], config: SolverConfig):
    n = len(machines)
    for lo in range(0, n, config.batch_size):
        yield {
            "idx_lo": lo,
            "machines": list(machines[lo : lo + config.batch_size]),
            "config": config,
        }


def run_pool(jobs, workers: int, max_inflight: int | None = None) -> list[Outcome]:
    """Run batch jobs in worker processes; completion order is irrelevant."""
    ctx = mp.get_context("spawn")
    if max_inflight is None:
        max_inflight = workers * 3

    inflight = set()
    outcomes: list[Outcome] = []
    with ProcessPoolExecutor(max_workers=workers, mp_context=ctx) as ex:
        jobs_iter = iter(jobs)
        for j in jobs_iter:
            inflight.add(ex.submit(_run_batch, j))
            if len(inflight) >= max_inflight:
                break

        while inflight:
            for fut in as_completed(inflight):
                inflight.remove(fut)
                rows = fut.result()
                outcomes.extend(rows)
                logger.debug(
                    "batch %d..%d done (%d machines so far)",
                    rows[0].index if rows else -1,
                    rows[-1].index if rows else -1,
                    len(outcomes),
                )
                # keep the number of in-flight batches bounded
                j = next(jobs_iter, None)
                if j is not None:
                    inflight.add(ex.submit(_run_batch, j))
                break  # re-enter as_completed with updated set

    outcomes.sort(key=lambda o: o.index)
    return outcomes


def solve_all(
    machines: Iterable[Machine], config: SolverConfig | None = None
) -> list[Outcome]:
    """Solve each machine independently, returning outcomes in input order."""
    config = config or SolverConfig()
    machines = list(machines)
    if config.workers <= 1 or len(machines) <= config.batch_size:
        outcomes = [solve_one(i, m, config) for i, m in enumerate(machines)]
    else:
        logger.info(
            "solving %d machines with %d workers", len(machines), config.workers
        )
        outcomes = run_pool(make_batches(machines, config), config.workers)
    if config.trace:
        log_traces(outcomes)
    return outcomes


def total_min_presses(outcomes: Iterable[Outcome], on_error: str = "raise") -> int:
    """Sum the minimum press counts.

    on_error="raise" re-raises the first failure; "skip" leaves failed machines
    out of the sum.
    """
    if on_error not in ("raise", "skip"):
        raise ValueError(f"Unknown on_error policy: {on_error!r}")
    total = 0
    skipped = 0
    for outcome in outcomes:
        if outcome.error is not None:
            if on_error == "raise":
                raise outcome.error
            logger.warning(
                "skipping machine %d (%r): %s",
                outcome.index,
                outcome.machine,
                outcome.error,
            )
            skipped += 1
            continue
        assert outcome.solution is not None
        total += outcome.solution.presses
    if skipped:
        logger.info("%d machine(s) left out of the total", skipped)
    return total
