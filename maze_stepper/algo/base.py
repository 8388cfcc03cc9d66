from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator

from maze_stepper.core.grid import Grid


class StepResult(Enum):
    CONTINUE = "continue"
    DONE = "done"
    FOUND = "found"
    NO_PATH = "no_path"

    @property
    def terminal(self) -> bool:
        return self is not StepResult.CONTINUE


class Stepper(ABC):
    def __init__(self, grid: Grid):
        self.grid = grid
        self.step_count = 0

    @property
    @abstractmethod
    def running(self) -> bool:
        pass

    @abstractmethod
    def step(self) -> StepResult:
        """
        Performs exactly one unit of work and reports the outcome.
        Grid modifications happen in-place on self.grid.
        """
        pass

    def run(self) -> Iterator[StepResult]:
        """Yields every step result up to and including the terminal one."""
        while True:
            result = self.step()
            yield result
            if result.terminal:
                return

    def run_all(self) -> StepResult:
        """Helper to run the stepper to completion."""
        result = StepResult.CONTINUE
        for result in self.run():
            pass
        return result
