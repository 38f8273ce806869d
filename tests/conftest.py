import pytest

from cases import EXAMPLE_MACHINES
from lightpanel.panel import Machine


@pytest.fixture
def first_machine():
    target, buttons, _ = EXAMPLE_MACHINES[0]
    return Machine(target, buttons)


@pytest.fixture
def example_machines():
    return [Machine(t, b) for t, b, _ in EXAMPLE_MACHINES]
