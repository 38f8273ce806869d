from lightpanel.solvers.base import Solution, Solver
from lightpanel.solvers.brute_force import BruteForce, all_solutions
from lightpanel.solvers.gf2_minweight import GF2MinWeight, min_presses
