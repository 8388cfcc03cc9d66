from collections import deque
from typing import Dict, List, Tuple

from maze_stepper.core.grid import Cell, Grid


def count_open_passages(grid: Grid) -> int:
    """Number of removed wall pairs, counting each shared wall once."""
    count = 0
    for cell in grid:
        # Only look right and down so every pair is seen once
        for direction in (Cell.RIGHT, Cell.BOTTOM):
            neighbor = grid.cell_at(cell.col + Grid.DX[direction], cell.row + Grid.DY[direction])
            if neighbor is not None and not cell.walls[direction]:
                count += 1
    return count


def check_wall_symmetry(grid: Grid) -> List[Tuple[Cell, Cell]]:
    """Returns every adjacent pair whose shared wall disagrees between the two sides."""
    broken = []
    for cell in grid:
        for direction in (Cell.RIGHT, Cell.BOTTOM):
            neighbor = grid.cell_at(cell.col + Grid.DX[direction], cell.row + Grid.DY[direction])
            if neighbor is None:
                continue
            if cell.walls[direction] != neighbor.walls[Grid.OPPOSITE[direction]]:
                broken.append((cell, neighbor))
    return broken


def count_reachable(grid: Grid, origin: Cell = None) -> int:
    if origin is None:
        origin = grid.cell_at(0, 0)
    seen = {origin.index}
    queue = deque([origin])
    while queue:
        cell = queue.popleft()
        for neighbor in grid.get_open_neighbors(cell):
            if neighbor.index not in seen:
                seen.add(neighbor.index)
                queue.append(neighbor)
    return len(seen)


def is_perfect_maze(grid: Grid) -> bool:
    """
    A connected graph on N nodes with N - 1 edges is a tree, so a symmetric
    grid with cells - 1 passages that reaches every cell is a perfect maze.
    """
    if check_wall_symmetry(grid):
        return False
    if count_open_passages(grid) != len(grid) - 1:
        return False
    return count_reachable(grid) == len(grid)


def calculate_stats(grid: Grid) -> Dict[str, float]:
    dead_ends = 0
    corridors = 0
    junctions = 0

    for cell in grid:
        exits = sum(1 for _ in grid.get_open_neighbors(cell))
        if exits == 1:
            dead_ends += 1
        elif exits == 2:
            corridors += 1
        elif exits >= 3:
            junctions += 1

    total = len(grid)
    return {
        "cells": total,
        "passages": count_open_passages(grid),
        "dead_ends": dead_ends,
        "corridors": corridors,
        "junctions": junctions,
        "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0,
    }
