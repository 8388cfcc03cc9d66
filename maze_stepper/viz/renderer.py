import logging

import pygame

from maze_stepper.core.errors import MazeError
from maze_stepper.core.grid import Cell
from maze_stepper.core.session import MazeSession, Phase
from maze_stepper.viz.driver import AnimationDriver
from maze_stepper.algo.solvers import Algorithm

logger = logging.getLogger(__name__)


class Renderer:
    COLOR_BG = (11, 14, 20)
    COLOR_WALL = (45, 56, 69)
    COLOR_VISITED_GEN = (22, 14, 40)
    COLOR_HEAD_GEN = (112, 0, 255)      # Purple
    COLOR_VISITED_SOLVE = (12, 38, 46)
    COLOR_HEAD_SOLVE = (0, 240, 255)    # Cyan
    COLOR_PATH = (57, 255, 20)          # Neon Green
    COLOR_START = (0, 240, 255)
    COLOR_END = (255, 0, 85)

    def __init__(self, session: MazeSession, driver: AnimationDriver = None, width=720, height=720):
        self.session = session
        self.driver = driver if driver is not None else AnimationDriver(session)
        self.screen_width = width
        self.screen_height = height

        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0

        # Path cells revealed so far, one more per frame
        self.path_shown = 0

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    def fit_to_screen(self):
        """Auto-adjust cell size and offset to fit the entire grid on screen with padding."""
        grid = self.session.grid
        padding = 32
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = min(available_w / grid.cols, available_h / grid.rows)

        self.offset_x = (self.screen_width - grid.cols * self.cell_size) / 2
        self.offset_y = (self.screen_height - grid.rows * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        grid = self.session.grid
        pygame.display.set_caption(f"Maze Stepper - {grid.cols}x{grid.rows}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    self.running = False
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS) and self.driver.speed < 10:
                    self.driver.speed += 1
                elif event.key == pygame.K_MINUS and self.driver.speed > 1:
                    self.driver.speed -= 1
                else:
                    self.handle_key(event.key)

    def handle_key(self, key) -> bool:
        """
        Session controls: G generate, B solve with BFS, A solve with A*,
        C cancel the active run, R reset. Returns whether the key was bound.
        """
        session = self.session
        actions = {
            pygame.K_g: session.start_generation,
            pygame.K_b: lambda: session.start_search(Algorithm.BREADTH_FIRST),
            pygame.K_a: lambda: session.start_search(Algorithm.A_STAR),
            pygame.K_c: session.cancel,
            pygame.K_r: self.reset,
        }
        action = actions.get(key)
        if action is None:
            return False
        self.attempt(action)
        return True

    def attempt(self, action):
        """Runs a session action, reporting refused ones instead of crashing the window."""
        try:
            action()
        except MazeError as e:
            logger.warning(str(e))
            return False
        self.path_shown = 0
        return True

    def reset(self):
        self.session.reset()
        self.fit_to_screen()

    @property
    def path_animating(self) -> bool:
        return self.path_shown < len(self.session.path)

    def advance_path(self):
        if self.path_animating:
            self.path_shown += 1

    def cell_rect(self, cell: Cell, padding: int = 0):
        px = int(cell.col * self.cell_size + self.offset_x)
        py = int(cell.row * self.cell_size + self.offset_y)
        size = int(self.cell_size)
        return (px + padding, py + padding, size - padding * 2, size - padding * 2)

    def cell_center(self, cell: Cell):
        return (int((cell.col + 0.5) * self.cell_size + self.offset_x),
                int((cell.row + 0.5) * self.cell_size + self.offset_y))

    def draw_grid(self):
        session = self.session
        self.surface.fill(self.COLOR_BG)
        searching = session.searcher is not None

        # 1. Backgrounds
        for cell in session.grid:
            if searching and cell.closed:
                pygame.draw.rect(self.surface, self.COLOR_VISITED_SOLVE, self.cell_rect(cell))
            elif session.phase is Phase.GENERATING and cell.visited:
                pygame.draw.rect(self.surface, self.COLOR_VISITED_GEN, self.cell_rect(cell))

        # 2. Walls
        for cell in session.grid:
            x, y, size, _ = self.cell_rect(cell)
            if cell.walls[Cell.TOP]:
                pygame.draw.line(self.surface, self.COLOR_WALL, (x, y), (x + size, y), 2)
            if cell.walls[Cell.RIGHT]:
                pygame.draw.line(self.surface, self.COLOR_WALL, (x + size, y), (x + size, y + size), 2)
            if cell.walls[Cell.BOTTOM]:
                pygame.draw.line(self.surface, self.COLOR_WALL, (x, y + size), (x + size, y + size), 2)
            if cell.walls[Cell.LEFT]:
                pygame.draw.line(self.surface, self.COLOR_WALL, (x, y), (x, y + size), 2)

        # 3. Start / End
        if session.phase is not Phase.GENERATING:
            grid = session.grid
            start = session.searcher.start_cell if searching else grid.cell_at(0, 0)
            end = session.searcher.goal if searching else grid.cell_at(grid.cols - 1, grid.rows - 1)
            pygame.draw.rect(self.surface, self.COLOR_START, self.cell_rect(start, 2))
            pygame.draw.rect(self.surface, self.COLOR_END, self.cell_rect(end, 2))

        # 4. Active head
        if session.active is not None and session.active.current is not None:
            color = self.COLOR_HEAD_GEN if session.phase is Phase.GENERATING else self.COLOR_HEAD_SOLVE
            pygame.draw.rect(self.surface, color, self.cell_rect(session.active.current, 2))

        # 5. Path, center to center
        path = session.path[:self.path_shown]
        width = max(1, int(self.cell_size / 4))
        for prev, cell in zip(path, path[1:]):
            pygame.draw.line(self.surface, self.COLOR_PATH, self.cell_center(prev), self.cell_center(cell), width)
        if path and not self.path_animating:
            pygame.draw.circle(self.surface, self.COLOR_PATH, self.cell_center(path[-1]), max(1, int(self.cell_size / 4)))

    def draw_hud(self):
        session = self.session
        steps = session.active.step_count if session.active is not None else 0
        info = [
            f"Status: {session.phase.value}",
            f"Speed: {self.driver.speed}",
            f"Steps: {steps}",
        ]
        if session.path:
            info.append(f"Path Length: {len(session.path)}")

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def render(self, session: MazeSession):
        self.advance_path()
        self.draw_grid()
        self.draw_hud()
        pygame.display.flip()

    def run_loop(self, pending=(), close_when_done: bool = False):
        """
        'pending' holds callables that start the next run (e.g. a search
        after generation); each is invoked once the session goes idle.
        """
        pending = list(pending)
        self.driver.render = self.render
        while self.running:
            self.handle_input()
            busy = self.driver.tick()
            if not busy and not self.path_animating:
                if pending:
                    self.attempt(pending.pop(0))
                elif close_when_done:
                    self.running = False
            self.clock.tick(60)
        pygame.quit()
