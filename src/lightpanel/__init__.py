from lightpanel.batch import Outcome, solve_all, total_min_presses
from lightpanel.config import SolverConfig, load_config
from lightpanel.errors import (
    ConfigError,
    InconsistentSystemError,
    OutOfRangeIndexError,
    SolverError,
    TooManyButtonsError,
    TooManyFreeVariablesError,
)
from lightpanel.panel import Machine
from lightpanel.solvers import BruteForce, GF2MinWeight, Solution, min_presses
