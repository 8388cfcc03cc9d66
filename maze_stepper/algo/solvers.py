import logging
from collections import deque
from enum import Enum
from typing import Dict, List, Optional, Set

from maze_stepper.core.grid import Cell, Grid
from maze_stepper.algo.base import Stepper, StepResult

logger = logging.getLogger(__name__)


class Algorithm(Enum):
    BREADTH_FIRST = "bfs"
    A_STAR = "astar"


class SearchStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FOUND = "found"
    EXHAUSTED = "exhausted"


def heuristic(a: Cell, b: Cell) -> int:
    """Manhattan distance, admissible for unit-cost orthogonal moves."""
    return abs(a.col - b.col) + abs(a.row - b.row)


class PathSearcher(Stepper):
    """
    Breadth-first search and A* behind one step() protocol.

    One step expands one node. The searcher only touches the search fields
    of the cells (closed, g, h, f) and its own predecessor map, keyed by
    cell index.
    """

    def __init__(self, grid: Grid):
        super().__init__(grid)
        self.algorithm = Algorithm.BREADTH_FIRST
        self.start_cell: Optional[Cell] = None
        self.goal: Optional[Cell] = None
        self.current: Optional[Cell] = None
        self.came_from: Dict[int, int] = {}
        self.status = SearchStatus.IDLE
        self.expanded_count = 0
        self.discovered_count = 0
        self._queue = deque()
        self._open: List[Cell] = []
        self._open_members: Set[int] = set()

    @property
    def running(self) -> bool:
        return self.status is SearchStatus.RUNNING

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    def start(self, start: Cell, goal: Cell, algorithm: Algorithm = Algorithm.BREADTH_FIRST):
        self.grid.check_owned(start)
        self.grid.check_owned(goal)
        self.grid.reset_search_state()
        self.algorithm = Algorithm(algorithm)
        self.start_cell = start
        self.goal = goal
        self.current = None
        self.came_from = {}
        self.step_count = 0
        self.expanded_count = 0
        self.discovered_count = 1
        self._queue = deque()
        self._open = []
        self._open_members = set()

        if self.algorithm is Algorithm.BREADTH_FIRST:
            # Closed on discovery, so no neighbor can re-enqueue the start
            start.closed = True
            self._queue.append(start)
        else:
            start.g = 0
            start.h = heuristic(start, goal)
            start.f = start.g + start.h
            self._open.append(start)
            self._open_members.add(start.index)

        self.status = SearchStatus.RUNNING
        logger.debug("%s search started: %s -> %s", self.algorithm.name, start.pos, goal.pos)

    def open_cells(self) -> List[Cell]:
        """Snapshot of the frontier, in expansion order for BFS, scan order for A*."""
        if self.algorithm is Algorithm.BREADTH_FIRST:
            return list(self._queue)
        return list(self._open)

    def _open_size(self) -> int:
        if self.algorithm is Algorithm.BREADTH_FIRST:
            return len(self._queue)
        return len(self._open)

    def _pop_next(self) -> Cell:
        if self.algorithm is Algorithm.BREADTH_FIRST:
            current = self._queue.popleft()
        else:
            # Linear scan, first minimum wins
            best = 0
            for i in range(1, len(self._open)):
                if self._open[i].f < self._open[best].f:
                    best = i
            current = self._open.pop(best)
            self._open_members.discard(current.index)
        current.closed = True
        return current

    def _discover(self, current: Cell, neighbor: Cell):
        if self.algorithm is Algorithm.BREADTH_FIRST:
            if neighbor.closed:
                return
            neighbor.closed = True
            self.came_from[neighbor.index] = current.index
            self._queue.append(neighbor)
        else:
            # No re-relaxation of nodes already in open; harmless at unit cost
            if neighbor.closed or neighbor.index in self._open_members:
                return
            self.came_from[neighbor.index] = current.index
            neighbor.g = current.g + 1
            neighbor.h = heuristic(neighbor, self.goal)
            neighbor.f = neighbor.g + neighbor.h
            self._open.append(neighbor)
            self._open_members.add(neighbor.index)
        self.discovered_count += 1

    def step(self) -> StepResult:
        if self.status is SearchStatus.IDLE:
            raise RuntimeError("step() called before start()")
        if self.status is SearchStatus.FOUND:
            return StepResult.FOUND
        if self.status is SearchStatus.EXHAUSTED:
            return StepResult.NO_PATH

        if self._open_size() == 0:
            self.status = SearchStatus.EXHAUSTED
            logger.debug("Search exhausted after %d expansions", self.expanded_count)
            return StepResult.NO_PATH

        self.step_count += 1
        current = self._pop_next()
        self.current = current
        self.expanded_count += 1

        if current is self.goal:
            self.status = SearchStatus.FOUND
            logger.debug("Goal %s found after %d expansions", current.pos, self.expanded_count)
            return StepResult.FOUND

        for neighbor in self.grid.get_open_neighbors(current):
            self._discover(current, neighbor)

        return StepResult.CONTINUE
