from typing import Dict, List

from maze_stepper.core.errors import DisconnectedGoal
from maze_stepper.core.grid import Cell, Grid
from maze_stepper.algo.solvers import PathSearcher


def reconstruct_path(came_from: Dict[int, int], goal: Cell, grid: Grid, start: Cell) -> List[Cell]:
    """
    Walks predecessors back from 'goal' to the first cell without one and
    returns the route in start -> goal order.

    The walk must end at 'start', otherwise the goal was never reached and
    DisconnectedGoal is raised.
    """
    path = [goal]
    idx = goal.index
    # A predecessor map is a forest, so the walk is bounded by the cell count
    while idx in came_from:
        idx = came_from[idx]
        path.append(grid.cell(idx))
        if len(path) > len(grid):
            raise DisconnectedGoal("Predecessor map contains a cycle")

    if path[-1] is not start:
        raise DisconnectedGoal(f"Goal {goal.pos} was not reached from {start.pos}")

    path.reverse()
    return path


class PathReconstructor:
    @staticmethod
    def reconstruct(searcher: PathSearcher) -> List[Cell]:
        if not searcher.found:
            raise DisconnectedGoal(
                f"Cannot reconstruct a path from a search in state {searcher.status.value}"
            )
        return reconstruct_path(searcher.came_from, searcher.goal, searcher.grid, start=searcher.start_cell)
