from typing import Iterator, List, Optional, Tuple

from maze_stepper.core.errors import ForeignCell, InvalidDimensions, OutOfBoundsAccess


class Cell:
    # Wall indices, in the order neighbors are scanned
    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3

    __slots__ = ('col', 'row', 'index', 'walls', 'visited', 'closed', 'g', 'h', 'f')

    def __init__(self, col: int, row: int, index: int):
        self.col = col
        self.row = row
        self.index = index
        self.walls = [True, True, True, True]
        self.visited = False
        self.closed = False
        self.g = 0
        self.h = 0
        self.f = 0

    @property
    def pos(self) -> Tuple[int, int]:
        return (self.col, self.row)

    def reset_search(self):
        self.closed = False
        self.g = 0
        self.h = 0
        self.f = 0

    def __repr__(self):
        return f"Cell({self.col}, {self.row})"


class Grid:
    # Direction Helpers, indexed by wall
    DX = {Cell.TOP: 0, Cell.RIGHT: 1, Cell.BOTTOM: 0, Cell.LEFT: -1}
    DY = {Cell.TOP: -1, Cell.RIGHT: 0, Cell.BOTTOM: 1, Cell.LEFT: 0}
    OPPOSITE = {Cell.TOP: Cell.BOTTOM, Cell.BOTTOM: Cell.TOP, Cell.RIGHT: Cell.LEFT, Cell.LEFT: Cell.RIGHT}
    DIRECTIONS = (Cell.TOP, Cell.RIGHT, Cell.BOTTOM, Cell.LEFT)

    __slots__ = ('cols', 'rows', 'cells')

    def __init__(self, cols: int, rows: int):
        for n in (cols, rows):
            if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
                raise InvalidDimensions(cols, rows)
        self.cols = cols
        self.rows = rows
        # Row-major arena: index = row * cols + col
        self.cells: List[Cell] = [
            Cell(col, row, row * cols + col)
            for row in range(rows)
            for col in range(cols)
        ]

    @classmethod
    def create(cls, cols: int, rows: int) -> "Grid":
        return cls(cols, rows)

    @property
    def width(self) -> int:
        return self.cols

    @property
    def height(self) -> int:
        return self.rows

    def __len__(self):
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def get_index(self, col: int, row: int) -> int:
        if self.in_bounds(col, row):
            return row * self.cols + col
        raise OutOfBoundsAccess(col, row)

    def cell(self, index: int) -> Cell:
        if not 0 <= index < len(self.cells):
            raise OutOfBoundsAccess(index % self.cols, index // self.cols)
        return self.cells[index]

    def cell_at(self, col: int, row: int) -> Optional[Cell]:
        if self.in_bounds(col, row):
            return self.cells[row * self.cols + col]
        return None

    def owns(self, cell: Cell) -> bool:
        return 0 <= cell.index < len(self.cells) and self.cells[cell.index] is cell

    def check_owned(self, cell: Cell) -> Cell:
        if not self.owns(cell):
            raise ForeignCell(f"{cell!r} does not belong to this {self.cols}x{self.rows} grid")
        return cell

    @staticmethod
    def direction_between(a: Cell, b: Cell) -> int:
        """
        Returns the wall index on 'a' that faces 'b'.
        Raises ValueError unless the two cells are orthogonally adjacent.
        """
        dx = b.col - a.col
        dy = b.row - a.row
        if dx == 0 and dy == -1:
            return Cell.TOP
        if dx == 1 and dy == 0:
            return Cell.RIGHT
        if dx == 0 and dy == 1:
            return Cell.BOTTOM
        if dx == -1 and dy == 0:
            return Cell.LEFT
        raise ValueError(f"{a!r} and {b!r} are not adjacent")

    def remove_wall_between(self, a: Cell, b: Cell):
        """
        Removes the wall on 'a' facing 'b' and the OPPOSITE wall on 'b'.
        Both cells are left untouched if they are not adjacent.
        """
        direction = self.direction_between(a, b)
        a.walls[direction] = False
        b.walls[self.OPPOSITE[direction]] = False

    def has_wall_between(self, a: Cell, b: Cell) -> bool:
        return a.walls[self.direction_between(a, b)]

    def get_neighbors(self, cell: Cell) -> Iterator[Tuple[Cell, int]]:
        """
        Yields (neighbor, direction_to_neighbor) for in-grid neighbors,
        top, right, bottom, left. Does NOT check walls.
        """
        for direction in self.DIRECTIONS:
            neighbor = self.cell_at(cell.col + self.DX[direction], cell.row + self.DY[direction])
            if neighbor is not None:
                yield (neighbor, direction)

    def get_open_neighbors(self, cell: Cell) -> Iterator[Cell]:
        """
        Yields neighbors that are NOT blocked by a wall.
        """
        for neighbor, direction in self.get_neighbors(cell):
            if not cell.walls[direction]:
                yield neighbor

    def reset_search_state(self):
        for cell in self.cells:
            cell.reset_search()

    def reset_generation_state(self):
        for cell in self.cells:
            cell.walls = [True, True, True, True]
            cell.visited = False
            cell.reset_search()
