from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .errors import ConfigError
from .panel import Machine

ON_ERROR_POLICIES = ("raise", "skip")


@dataclass(frozen=True)
class SolverConfig:
    # None disables the bound; 2**24 candidates is still tractable
    max_free_variables: Optional[int] = 24
    workers: int = 1
    batch_size: int = 64
    on_error: str = "raise"
    trace: bool = False

    def __post_init__(self):
        if self.max_free_variables is not None and self.max_free_variables < 0:
            raise ConfigError(
                f"max_free_variables must be >= 0, got {self.max_free_variables}"
            )
        if self.workers < 1:
            raise ConfigError(f"workers must be >= 1, got {self.workers}")
        if self.batch_size < 1:
            raise ConfigError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.on_error not in ON_ERROR_POLICIES:
            raise ConfigError(
                f"on_error must be one of {ON_ERROR_POLICIES}, got {self.on_error!r}"
            )

    @classmethod
    def from_dict(cls, cfg: dict | None) -> "SolverConfig":
        cfg = dict(cfg or {})
        known = {f.name for f in fields(cls)}
        unknown = set(cfg) - known
        if unknown:
            raise ConfigError(f"Unknown solver settings: {sorted(unknown)}")
        return cls(**cfg)


def parse_machines(cfg_machines) -> list[Machine]:
    """Build machines from YAML entries {target: [...], buttons: [[...], ...]}."""
    if cfg_machines is None:
        return []
    if not isinstance(cfg_machines, list):
        raise ConfigError("machines must be a list")
    parsed = []
    for k, item in enumerate(cfg_machines):
        if not isinstance(item, dict) or "target" not in item:
            raise ConfigError(f"Invalid machine spec #{k}: {item}")
        target = item["target"]
        buttons = item.get("buttons") or []
        if not isinstance(target, list) or not isinstance(buttons, list):
            raise ConfigError(f"Invalid machine spec #{k}: {item}")
        if any(x not in (0, 1) for x in target):
            raise ConfigError(f"Machine #{k}: target entries must be 0/1")
        if not all(
            isinstance(b, list)
            and all(isinstance(i, int) and not isinstance(i, bool) for i in b)
            for b in buttons
        ):
            raise ConfigError(
                f"Machine #{k}: each button must be a list of light indices"
            )
        parsed.append(Machine(target, buttons))
    return parsed


def load_config(path: str | Path) -> tuple[SolverConfig, list[Machine]]:
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    return SolverConfig.from_dict(cfg.get("solver")), parse_machines(
        cfg.get("machines")
    )
