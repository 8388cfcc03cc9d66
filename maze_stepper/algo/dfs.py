import logging
import random
from enum import Enum
from typing import List, Optional

from maze_stepper.core.grid import Cell, Grid
from maze_stepper.algo.base import Stepper, StepResult

logger = logging.getLogger(__name__)


class GeneratorStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class RecursiveBacktracker(Stepper):
    """
    Randomized depth-first carver, advanced one move per step().

    Each step either carves into a random unvisited neighbor of the head,
    backtracks one cell, or reports DONE once the stack is empty. The
    result is a spanning tree over every cell of the grid.
    """

    def __init__(self, grid: Grid, seed: int = None, rng: random.Random = None):
        super().__init__(grid)
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.current: Optional[Cell] = None
        self.stack: List[Cell] = []
        self.status = GeneratorStatus.IDLE
        self.carved_count = 0

    @property
    def running(self) -> bool:
        return self.status is GeneratorStatus.RUNNING

    def start(self, entry: Cell = None):
        if entry is None:
            entry = self.grid.cell_at(0, 0)
        self.grid.check_owned(entry)
        self.grid.reset_generation_state()
        self.current = entry
        self.current.visited = True
        self.stack = []
        self.step_count = 0
        self.carved_count = 0
        self.status = GeneratorStatus.RUNNING
        logger.debug("Generation started at %s on %dx%d grid", entry.pos, self.grid.cols, self.grid.rows)

    def unvisited_neighbors(self, cell: Cell) -> List[Cell]:
        return [n for n, _ in self.grid.get_neighbors(cell) if not n.visited]

    def step(self) -> StepResult:
        if self.status is GeneratorStatus.IDLE:
            raise RuntimeError("step() called before start()")
        if self.status is GeneratorStatus.DONE:
            return StepResult.DONE

        self.step_count += 1
        neighbors = self.unvisited_neighbors(self.current)

        if neighbors:
            nxt = neighbors[self.rng.randrange(len(neighbors))]
            nxt.visited = True
            self.stack.append(self.current)
            self.grid.remove_wall_between(self.current, nxt)
            self.carved_count += 1
            self.current = nxt
            return StepResult.CONTINUE

        if self.stack:
            # Backtrack
            self.current = self.stack.pop()
            return StepResult.CONTINUE

        self.status = GeneratorStatus.DONE
        logger.debug("Generation done: %d passages carved in %d steps", self.carved_count, self.step_count)
        return StepResult.DONE
