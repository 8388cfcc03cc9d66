from typing import Iterable, List, Optional

from maze_stepper.core.grid import Cell, Grid


def render_text(grid: Grid, path: Iterable[Cell] = None, highlight: Cell = None,
                start: Cell = None, goal: Cell = None) -> str:
    """
    ASCII picture of the grid, three characters per cell:

        +---+---+
        | S   . |
        +---+   +
        | G   . |
        +---+---+

    Marks, by priority: @ highlight, S start, G goal, . path.
    """
    on_path = {c.index for c in path} if path else set()

    def mark(cell: Cell) -> str:
        if highlight is not None and cell is highlight:
            return "@"
        if start is not None and cell is start:
            return "S"
        if goal is not None and cell is goal:
            return "G"
        if cell.index in on_path:
            return "."
        return " "

    lines: List[str] = []
    for row in range(grid.rows):
        top = "+"
        body = ""
        for col in range(grid.cols):
            cell = grid.cell_at(col, row)
            top += ("---" if cell.walls[Cell.TOP] else "   ") + "+"
            body += ("|" if cell.walls[Cell.LEFT] else " ") + f" {mark(cell)} "
        last = grid.cell_at(grid.cols - 1, row)
        body += "|" if last.walls[Cell.RIGHT] else " "
        lines.append(top)
        lines.append(body)

    bottom = "+"
    for col in range(grid.cols):
        cell = grid.cell_at(col, grid.rows - 1)
        bottom += ("---" if cell.walls[Cell.BOTTOM] else "   ") + "+"
    lines.append(bottom)
    return "\n".join(lines)


def render_session(session, show_head: bool = True) -> str:
    """Renders a MazeSession with its start/goal and current path or head."""
    grid = session.grid
    highlight: Optional[Cell] = None
    start = goal = None

    if session.active is not None and show_head:
        highlight = session.active.current
    if session.searcher is not None:
        start = session.searcher.start_cell
        goal = session.searcher.goal
    return render_text(grid, path=session.path, highlight=highlight, start=start, goal=goal)
