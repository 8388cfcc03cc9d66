import logging
import random
from typing import Callable, Optional

from maze_stepper.config import DEFAULT_SPEED, MAX_SPEED, MIN_SPEED
from maze_stepper.core.session import MazeSession, Phase

logger = logging.getLogger(__name__)

RenderCallback = Callable[[MazeSession], None]


def steps_per_tick(speed: int, phase: Phase) -> int:
    """
    Slider 1-10.
    1-7: one step per tick
    8-10: several steps per tick, search faster than generation
    """
    if speed > 7:
        factor = 3 if phase is Phase.SEARCHING else 2
        return (speed - 6) * factor
    return 1


def skip_probability(speed: int) -> float:
    """Chance of doing no work on a tick; only the slow speeds 1-3 skip."""
    if speed < 4:
        return max(0.0, 1.0 - speed * 0.3)
    return 0.0


class AnimationDriver:
    """
    Paces a session: each tick runs a batch of steps on the active stepper
    and hands the session to the render callback. Never reads the clock;
    the caller decides how often tick() runs.
    """

    def __init__(self, session: MazeSession, speed: int = DEFAULT_SPEED,
                 render: Optional[RenderCallback] = None, rng: random.Random = None):
        self.session = session
        self.speed = speed
        self.render = render
        # Separate from the session's source so pacing never changes the maze
        self.rng = rng if rng is not None else random.Random()
        self.tick_count = 0
        self.steps_taken = 0

    @property
    def speed(self) -> int:
        return self._speed

    @speed.setter
    def speed(self, value: int):
        if not MIN_SPEED <= value <= MAX_SPEED:
            raise ValueError(f"Speed must be between {MIN_SPEED} and {MAX_SPEED}, got {value}")
        self._speed = value

    def tick(self) -> bool:
        """Runs one batch, renders, and reports whether work remains."""
        self.tick_count += 1
        session = self.session

        if session.is_busy and self.rng.random() >= skip_probability(self.speed):
            for _ in range(steps_per_tick(self.speed, session.phase)):
                session.step()
                self.steps_taken += 1
                if not session.is_busy:
                    break

        if self.render is not None:
            self.render(session)
        return session.is_busy

    def run(self, max_ticks: int = None) -> int:
        """Ticks until the active stepper finishes or max_ticks is reached."""
        ticks = 0
        while self.session.is_busy:
            if max_ticks is not None and ticks >= max_ticks:
                logger.debug("Stopped after %d ticks with %s still running", ticks, self.session.phase.value)
                break
            self.tick()
            ticks += 1
        return ticks
