import logging
import random
from enum import Enum
from typing import List, Optional, Tuple, Union

from maze_stepper.core.errors import MazeNotGenerated, SessionBusy
from maze_stepper.core.grid import Cell, Grid
from maze_stepper.algo.base import Stepper, StepResult
from maze_stepper.algo.dfs import RecursiveBacktracker
from maze_stepper.algo.reconstruct import PathReconstructor
from maze_stepper.algo.solvers import Algorithm, PathSearcher

logger = logging.getLogger(__name__)

CellRef = Union[Cell, Tuple[int, int]]


class Phase(Enum):
    IDLE = "idle"
    GENERATING = "generating"
    GENERATED = "generated"
    SEARCHING = "searching"
    SOLVED = "solved"
    NO_PATH = "no_path"


class MazeSession:
    """
    Owns one grid, one random source and whichever stepper is active.

    Generation and search never run at the same time: starting either
    while the other is still running raises SessionBusy. Search is only
    allowed on a fully generated grid.
    """

    def __init__(self, cols: int, rows: int, seed: int = None, rng: random.Random = None):
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.grid = Grid(cols, rows)
        self.generator: Optional[RecursiveBacktracker] = None
        self.searcher: Optional[PathSearcher] = None
        self.active: Optional[Stepper] = None
        self.phase = Phase.IDLE
        self._settled = Phase.IDLE
        self._path: List[Cell] = []

    @property
    def is_busy(self) -> bool:
        return self.active is not None

    @property
    def path(self) -> List[Cell]:
        return list(self._path)

    def _resolve(self, ref: Optional[CellRef], default: Tuple[int, int]) -> Cell:
        if ref is None:
            ref = default
        if isinstance(ref, Cell):
            return self.grid.check_owned(ref)
        col, row = ref
        return self.grid.cell(self.grid.get_index(col, row))

    def _ensure_idle(self):
        if self.is_busy:
            raise SessionBusy(f"Cannot start a new run while {self.phase.value}")

    def reset(self, cols: int = None, rows: int = None):
        """Discards the grid and both steppers. Pass cols/rows to resize."""
        cols = self.grid.cols if cols is None else cols
        rows = self.grid.rows if rows is None else rows
        self.grid = Grid(cols, rows)
        self.generator = None
        self.searcher = None
        self.active = None
        self.phase = self._settled = Phase.IDLE
        self._path = []
        logger.debug("Session reset to %dx%d", cols, rows)

    def start_generation(self, entry: CellRef = None):
        self._ensure_idle()
        entry_cell = self._resolve(entry, (0, 0))
        self.searcher = None
        self._path = []
        self.generator = RecursiveBacktracker(self.grid, seed=self.seed, rng=self.rng)
        self.generator.start(entry_cell)
        self.active = self.generator
        self.phase = Phase.GENERATING
        self._settled = Phase.IDLE

    def start_search(self, algorithm: Algorithm = Algorithm.BREADTH_FIRST,
                     start: CellRef = None, goal: CellRef = None):
        self._ensure_idle()
        if self.generator is None or self.generator.running:
            raise MazeNotGenerated("Generate a maze before searching it")
        start_cell = self._resolve(start, (0, 0))
        goal_cell = self._resolve(goal, (self.grid.cols - 1, self.grid.rows - 1))
        self._path = []
        self.searcher = PathSearcher(self.grid)
        self.searcher.start(start_cell, goal_cell, algorithm)
        self.active = self.searcher
        self.phase = Phase.SEARCHING
        self._settled = Phase.GENERATED

    def step(self) -> Optional[StepResult]:
        """Advances the active stepper once. Returns None when nothing is running."""
        if self.active is None:
            return None
        result = self.active.step()
        if result is StepResult.DONE:
            self.phase = self._settled = Phase.GENERATED
            self.active = None
        elif result is StepResult.FOUND:
            self._path = PathReconstructor.reconstruct(self.searcher)
            self.phase = self._settled = Phase.SOLVED
            self.active = None
        elif result is StepResult.NO_PATH:
            self.phase = self._settled = Phase.NO_PATH
            self.active = None
        return result

    def run_active(self) -> Optional[StepResult]:
        result = None
        while self.active is not None:
            result = self.step()
        return result

    def cancel(self):
        """Stops the active run between steps; the grid stays as it is."""
        if self.active is None:
            return
        logger.debug("Cancelled while %s", self.phase.value)
        if self.active is self.generator:
            # A half-carved grid is not a maze, so search stays locked out
            self.generator = None
        self.active = None
        self.phase = self._settled
