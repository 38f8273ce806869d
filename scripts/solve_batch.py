import argparse
import logging
import multiprocessing as mp
import os
import sys
import time
from dataclasses import replace
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from lightpanel.batch import solve_all, total_min_presses  # noqa: E402
from lightpanel.config import load_config  # noqa: E402
from lightpanel.errors import SolverError  # noqa: E402

# Limit threads per worker
os.environ["OMP_NUM_THREADS"] = "1"
os.environ["OPENBLAS_NUM_THREADS"] = "1"
os.environ["MKL_NUM_THREADS"] = "1"

logger = logging.getLogger("solve_batch")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(
        description="Sum the minimum button presses over a batch of machines."
    )
    ap.add_argument(
        "--config",
        default=str(ROOT / "configs" / "example.yaml"),
    )
    ap.add_argument(
        "--workers", type=int, default=None, help="Override solver.workers"
    )
    ap.add_argument(
        "--on-error",
        choices=("raise", "skip"),
        default=None,
        help="Override solver.on_error",
    )
    ap.add_argument(
        "--trace",
        action="store_true",
        help="Log every elimination step (implies --log-level DEBUG)",
    )
    ap.add_argument(
        "--log-level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
    )
    args = ap.parse_args(argv)

    logging.basicConfig(
        level="DEBUG" if args.trace else args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config, machines = load_config(args.config)
    except (OSError, SolverError) as e:
        logger.error("could not load %s: %s", args.config, e)
        return 2

    overrides = {}
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.on_error is not None:
        overrides["on_error"] = args.on_error
    if args.trace:
        overrides["trace"] = True
    try:
        config = replace(config, **overrides)
    except SolverError as e:
        logger.error("%s", e)
        return 2

    start_time = time.time()
    outcomes = solve_all(machines, config)
    try:
        total = total_min_presses(outcomes, on_error=config.on_error)
    except SolverError as e:
        logger.error("batch aborted: %s", e)
        return 1
    elapsed = time.time() - start_time

    logger.info("%d machines in %.3fs", len(machines), elapsed)
    print(total)
    return 0


if __name__ == "__main__":
    mp.freeze_support()
    sys.exit(main())
