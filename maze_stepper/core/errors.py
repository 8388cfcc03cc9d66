class MazeError(Exception):
    """Base class for every error raised by maze_stepper."""


class InvalidDimensions(MazeError, ValueError):
    def __init__(self, cols, rows):
        super().__init__(f"Grid dimensions must be positive integers, got {cols}x{rows}")
        self.cols = cols
        self.rows = rows


class OutOfBoundsAccess(MazeError, IndexError):
    def __init__(self, col, row):
        super().__init__(f"Coordinate ({col}, {row}) out of bounds")
        self.col = col
        self.row = row


class DisconnectedGoal(MazeError):
    """Reconstruction was asked for a goal the search never reached."""


class SessionBusy(MazeError, RuntimeError):
    """A stepper is still running on the session's grid."""


class MazeNotGenerated(MazeError, RuntimeError):
    """Search requested before generation completed."""


class ForeignCell(MazeError, ValueError):
    """A cell that is not part of the grid it was handed to, e.g. one kept across a reset."""
