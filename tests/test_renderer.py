import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.core.session import MazeSession, Phase
from maze_stepper.viz.driver import AnimationDriver


class TestRenderer(unittest.TestCase):
    """Draws frames on SDL's dummy video driver."""

    def setUp(self):
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        try:
            import pygame
            from maze_stepper.viz.renderer import Renderer
        except ImportError as e:
            self.skipTest(f"pygame unavailable: {e}")

        self.pygame = pygame
        self.session = MazeSession(6, 6, seed=5)
        self.driver = AnimationDriver(self.session, speed=10)
        self.renderer = Renderer(self.session, driver=self.driver, width=200, height=200)
        try:
            self.renderer.init_window()
        except pygame.error as e:
            self.skipTest(f"No display available: {e}")
        self.driver.render = self.renderer.render

    def tearDown(self):
        self.pygame.quit()

    def test_headless_frames(self):
        self.session.start_generation()
        self.renderer.run_loop(pending=[self.session.start_search], close_when_done=True)
        self.assertTrue(self.session.path)
        self.assertEqual(self.session.path[-1].pos, (5, 5))
        self.assertEqual(self.renderer.path_shown, len(self.session.path))

    def test_keys_drive_the_session(self):
        pg = self.pygame
        self.assertTrue(self.renderer.handle_key(pg.K_g))
        self.assertIs(self.session.phase, Phase.GENERATING)

        # Refused while generating, window keeps going
        self.assertTrue(self.renderer.handle_key(pg.K_a))
        self.assertIs(self.session.phase, Phase.GENERATING)

        self.driver.run()
        self.renderer.handle_key(pg.K_a)
        self.assertIs(self.session.phase, Phase.SEARCHING)
        self.renderer.handle_key(pg.K_c)
        self.assertIs(self.session.phase, Phase.GENERATED)

        self.renderer.handle_key(pg.K_b)
        self.driver.run()
        self.assertIs(self.session.phase, Phase.SOLVED)

        self.renderer.handle_key(pg.K_r)
        self.assertIs(self.session.phase, Phase.IDLE)
        self.assertIsNone(self.session.generator)
        self.assertFalse(self.renderer.handle_key(pg.K_z))

    def test_path_revealed_one_cell_per_frame(self):
        self.session.start_generation()
        self.session.run_active()
        self.session.start_search()
        self.session.run_active()
        length = len(self.session.path)
        self.assertGreater(length, 2)

        self.renderer.render(self.session)
        self.assertEqual(self.renderer.path_shown, 1)
        self.assertTrue(self.renderer.path_animating)
        for _ in range(length + 3):
            self.renderer.render(self.session)
        self.assertEqual(self.renderer.path_shown, length)
        self.assertFalse(self.renderer.path_animating)


if __name__ == '__main__':
    unittest.main()
