import unittest
import sys
import os

# Add project root to path so we can import maze_stepper
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.core.grid import Cell, Grid
from maze_stepper.core.errors import ForeignCell, InvalidDimensions, OutOfBoundsAccess


class TestGrid(unittest.TestCase):
    def test_initialization(self):
        w, h = 10, 7
        grid = Grid(w, h)
        self.assertEqual(len(grid), w * h, f"Grid initialization size mismatch. Expected {w*h}, got {len(grid)}")
        for cell in grid:
            self.assertEqual(cell.walls, [True, True, True, True])
            self.assertFalse(cell.visited)
            self.assertFalse(cell.closed)
            self.assertEqual((cell.g, cell.h, cell.f), (0, 0, 0))

    def test_row_major_order(self):
        grid = Grid.create(3, 2)
        self.assertEqual([c.pos for c in grid], [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)])
        for i, cell in enumerate(grid):
            self.assertEqual(cell.index, i)

    def test_invalid_dimensions(self):
        for cols, rows in [(0, 5), (5, 0), (-1, 3), (3, -2)]:
            with self.assertRaises(InvalidDimensions):
                Grid(cols, rows)
        # Also a ValueError for callers that don't know our hierarchy
        with self.assertRaises(ValueError):
            Grid.create(0, 0)

    def test_bool_dimensions_rejected(self):
        for cols, rows in [(True, True), (True, 3), (3, False)]:
            with self.assertRaises(InvalidDimensions):
                Grid(cols, rows)

    def test_owns(self):
        grid = Grid(3, 3)
        other = Grid(3, 3)
        cell = grid.cell_at(1, 2)
        self.assertTrue(grid.owns(cell))
        self.assertIs(grid.check_owned(cell), cell)
        self.assertFalse(other.owns(cell))
        with self.assertRaises(ForeignCell):
            other.check_owned(cell)
        # Same index, larger grid
        self.assertFalse(Grid(4, 4).owns(Grid(2, 1).cell_at(1, 0)))

    def test_coordinates(self):
        grid = Grid(5, 5)
        self.assertEqual(grid.get_index(2, 2), 12)  # 2 * 5 + 2

        with self.assertRaises(OutOfBoundsAccess):
            grid.get_index(-1, 0)
        with self.assertRaises(IndexError):
            grid.get_index(0, 5)

    def test_cell_at_out_of_bounds_is_none(self):
        grid = Grid(4, 3)
        self.assertIsNone(grid.cell_at(4, 0))
        self.assertIsNone(grid.cell_at(0, 3))
        self.assertIsNone(grid.cell_at(-1, -1))
        cell = grid.cell_at(3, 2)
        self.assertEqual(cell.pos, (3, 2))
        self.assertIs(grid.cell(cell.index), cell)

    def test_remove_wall_between(self):
        grid = Grid(2, 2)
        a = grid.cell_at(0, 0)
        b = grid.cell_at(1, 0)
        grid.remove_wall_between(a, b)

        self.assertFalse(a.walls[Cell.RIGHT])
        self.assertFalse(b.walls[Cell.LEFT])
        self.assertFalse(grid.has_wall_between(b, a))
        # Others remain
        self.assertTrue(a.walls[Cell.TOP])
        self.assertTrue(b.walls[Cell.RIGHT])

        c = grid.cell_at(0, 1)
        grid.remove_wall_between(c, a)
        self.assertFalse(c.walls[Cell.TOP])
        self.assertFalse(a.walls[Cell.BOTTOM])

    def test_remove_wall_rejects_non_adjacent(self):
        grid = Grid(3, 3)
        a = grid.cell_at(0, 0)
        for other in (grid.cell_at(1, 1), grid.cell_at(2, 0), a):
            with self.assertRaises(ValueError):
                grid.remove_wall_between(a, other)
        self.assertEqual(a.walls, [True, True, True, True])

    def test_neighbors(self):
        grid = Grid(3, 3)
        center = grid.cell_at(1, 1)
        neighbors = list(grid.get_neighbors(center))
        self.assertEqual([n.pos for n, _ in neighbors], [(1, 0), (2, 1), (1, 2), (0, 1)])

        corner = list(grid.get_neighbors(grid.cell_at(0, 0)))
        self.assertEqual(len(corner), 2)
        self.assertIn((grid.cell_at(1, 0), Cell.RIGHT), corner)
        self.assertIn((grid.cell_at(0, 1), Cell.BOTTOM), corner)

    def test_open_neighbors(self):
        grid = Grid(3, 3)
        center = grid.cell_at(1, 1)
        self.assertEqual(list(grid.get_open_neighbors(center)), [])
        grid.remove_wall_between(center, grid.cell_at(0, 1))
        grid.remove_wall_between(center, grid.cell_at(1, 0))
        self.assertEqual([n.pos for n in grid.get_open_neighbors(center)], [(1, 0), (0, 1)])

    def test_border_walls_never_open_to_void(self):
        grid = Grid(2, 1)
        cell = grid.cell_at(0, 0)
        cell.walls[Cell.TOP] = False
        self.assertEqual(list(grid.get_open_neighbors(cell)), [])

    def test_reset_contract(self):
        grid = Grid(2, 2)
        a, b = grid.cell_at(0, 0), grid.cell_at(1, 0)
        grid.remove_wall_between(a, b)
        a.visited = True
        a.closed = True
        a.g, a.h, a.f = 1, 2, 3

        grid.reset_search_state()
        self.assertFalse(a.closed)
        self.assertEqual((a.g, a.h, a.f), (0, 0, 0))
        self.assertTrue(a.visited)
        self.assertFalse(a.walls[Cell.RIGHT])

        grid.reset_generation_state()
        self.assertFalse(a.visited)
        self.assertTrue(a.walls[Cell.RIGHT])
        self.assertTrue(b.walls[Cell.LEFT])


if __name__ == '__main__':
    unittest.main()
