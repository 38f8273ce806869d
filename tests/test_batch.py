import logging
import pickle

import pytest

from lightpanel.batch import Outcome, solve_all, solve_one, total_min_presses
from lightpanel.config import SolverConfig
from lightpanel.errors import (
    InconsistentSystemError,
    OutOfRangeIndexError,
    TooManyButtonsError,
    TooManyFreeVariablesError,
)
from lightpanel.panel import Machine


def test_example_total(example_machines):
    outcomes = solve_all(example_machines)
    assert [o.index for o in outcomes] == [0, 1, 2]
    assert all(o.ok for o in outcomes)
    assert [o.solution.presses for o in outcomes] == [2, 3, 2]
    assert total_min_presses(outcomes) == 7


def test_failure_is_an_outcome_not_a_number():
    outcome = solve_one(5, Machine([True, False], [[1]]))
    assert not outcome.ok
    assert outcome.solution is None
    assert isinstance(outcome.error, InconsistentSystemError)
    assert outcome.index == 5


def test_bad_wiring_is_an_outcome():
    outcome = solve_one(0, Machine([True], [[0, 3]]))
    assert isinstance(outcome.error, OutOfRangeIndexError)


def test_raise_policy(example_machines):
    machines = example_machines + [Machine([True, False], [[1]])]
    outcomes = solve_all(machines)
    with pytest.raises(InconsistentSystemError):
        total_min_presses(outcomes, on_error="raise")


def test_skip_policy(example_machines, caplog):
    machines = [Machine([True, False], [[1]])] + example_machines
    outcomes = solve_all(machines)
    assert total_min_presses(outcomes, on_error="skip") == 7
    assert "skipping machine 0" in caplog.text


def test_unknown_policy(example_machines):
    with pytest.raises(ValueError):
        total_min_presses(solve_all(example_machines), on_error="ignore")


def test_parallel_matches_sequential(example_machines):
    machines = example_machines * 3 + [Machine([True], [[0]] * 3)]
    sequential = solve_all(machines)
    parallel = solve_all(machines, SolverConfig(workers=2, batch_size=2))

    assert [o.index for o in parallel] == list(range(len(machines)))
    assert [o.solution.presses for o in parallel] == [
        o.solution.presses for o in sequential
    ]
    assert total_min_presses(parallel) == total_min_presses(sequential) == 22


def test_parallel_keeps_errors():
    machines = [Machine([True], [[0]])] * 3 + [Machine([True, True], [[0]])]
    outcomes = solve_all(machines, SolverConfig(workers=2, batch_size=1))
    assert [o.ok for o in outcomes] == [True, True, True, False]
    assert isinstance(outcomes[3].error, InconsistentSystemError)
    assert total_min_presses(outcomes, on_error="skip") == 3


@pytest.mark.parametrize(
    "error",
    [
        OutOfRangeIndexError(2, 9, 4),
        InconsistentSystemError(3),
        InconsistentSystemError(),
        TooManyFreeVariablesError(30, 24),
        TooManyButtonsError(20, 16),
    ],
)
def test_errors_survive_pickling(error):
    clone = pickle.loads(pickle.dumps(error))
    assert type(clone) is type(error)
    assert str(clone) == str(error)
    assert clone.__dict__ == error.__dict__


def test_outcome_ok_flag(first_machine):
    assert not Outcome(0, first_machine, error=InconsistentSystemError()).ok


def _pivot_lines(caplog):
    return [r for r in caplog.records if r.getMessage().startswith("pivot:")]


def test_trace_reaches_parent_log_from_workers(example_machines, caplog):
    caplog.set_level(logging.DEBUG, logger="lightpanel")
    outcomes = solve_all(
        example_machines, SolverConfig(workers=2, batch_size=1, trace=True)
    )
    parallel = len(_pivot_lines(caplog))
    assert outcomes[0].trace[:2] == (("swap", 0, 3), ("pivot", 0, 0))
    assert "elimination trace for machine 2" in caplog.text

    caplog.clear()
    solve_all(example_machines, SolverConfig(trace=True))
    sequential = len(_pivot_lines(caplog))
    assert parallel == sequential > 0


def test_no_trace_by_default(example_machines, caplog):
    caplog.set_level(logging.DEBUG, logger="lightpanel")
    outcomes = solve_all(example_machines)
    assert all(o.trace == () for o in outcomes)
    assert not _pivot_lines(caplog)


def test_failed_machine_keeps_its_trace():
    outcome = solve_one(
        0, Machine([True, False], [[1]]), SolverConfig(trace=True)
    )
    assert isinstance(outcome.error, InconsistentSystemError)
    assert outcome.trace == (("swap", 0, 1), ("pivot", 0, 0))
