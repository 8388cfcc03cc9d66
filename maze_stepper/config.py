from dataclasses import dataclass
from typing import Optional

from maze_stepper.algo.solvers import Algorithm
from maze_stepper.core.errors import InvalidDimensions

# ==========================================
# DEFAULTS
# Grid size and animation speed used when nothing else is given.
# ==========================================
DEFAULT_COLS = 25
DEFAULT_ROWS = 25
MIN_SPEED = 1
MAX_SPEED = 10
DEFAULT_SPEED = 5


@dataclass
class SessionConfig:
    cols: int = DEFAULT_COLS
    rows: int = DEFAULT_ROWS
    seed: Optional[int] = None
    speed: int = DEFAULT_SPEED
    algorithm: Algorithm = Algorithm.BREADTH_FIRST

    def __post_init__(self):
        self.algorithm = Algorithm(self.algorithm)

    def validate(self):
        if self.cols <= 0 or self.rows <= 0:
            raise InvalidDimensions(self.cols, self.rows)
        if not MIN_SPEED <= self.speed <= MAX_SPEED:
            raise ValueError(f"Speed must be between {MIN_SPEED} and {MAX_SPEED}, got {self.speed}")
        return self

    @classmethod
    def from_args(cls, args) -> "SessionConfig":
        return cls(
            cols=getattr(args, "cols", DEFAULT_COLS),
            rows=getattr(args, "rows", DEFAULT_ROWS),
            seed=getattr(args, "seed", None),
            speed=getattr(args, "speed", DEFAULT_SPEED),
            algorithm=getattr(args, "algo", Algorithm.BREADTH_FIRST.value),
        ).validate()
