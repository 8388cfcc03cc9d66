import argparse
import logging
import sys

from maze_stepper.config import DEFAULT_COLS, DEFAULT_ROWS, DEFAULT_SPEED, SessionConfig
from maze_stepper.core.errors import MazeError
from maze_stepper.algo.solvers import Algorithm

logger = logging.getLogger("maze_stepper")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Stepper: step-by-step maze generation and path search")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_common(sub):
        sub.add_argument("--cols", type=int, default=DEFAULT_COLS, help="Maze Width")
        sub.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Maze Height")
        sub.add_argument("--seed", type=int, default=None, help="Random Seed")

    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    add_common(gen_parser)
    gen_parser.add_argument("--visual", action="store_true", help="Animate in a pygame window")
    gen_parser.add_argument("--speed", type=int, default=DEFAULT_SPEED, help="Animation speed (1-10)")

    solve_parser = subparsers.add_parser("solve", help="Generate a maze and search it")
    add_common(solve_parser)
    solve_parser.add_argument("--algo", type=str, default="bfs", choices=[a.value for a in Algorithm], help="Search algorithm")
    solve_parser.add_argument("--visual", action="store_true", help="Animate in a pygame window")
    solve_parser.add_argument("--speed", type=int, default=DEFAULT_SPEED, help="Animation speed (1-10)")

    cmp_parser = subparsers.add_parser("compare", help="Run every search algorithm on one maze")
    add_common(cmp_parser)

    return parser


def run_visual(session, config: SessionConfig, search: bool):
    from maze_stepper.viz.driver import AnimationDriver
    from maze_stepper.viz.renderer import Renderer

    logger.info("Visual mode enabled - Opening window...")
    driver = AnimationDriver(session, speed=config.speed)
    renderer = Renderer(session, driver=driver)
    session.start_generation()
    pending = [lambda: session.start_search(config.algorithm)] if search else []
    renderer.init_window()
    renderer.run_loop(pending=pending)


def cmd_generate(config: SessionConfig, visual: bool):
    from maze_stepper.core.analysis import calculate_stats
    from maze_stepper.core.session import MazeSession
    from maze_stepper.viz.text import render_text

    logger.info(f"Generating {config.cols}x{config.rows} maze (seed={config.seed})...")
    session = MazeSession(config.cols, config.rows, seed=config.seed)
    if visual:
        run_visual(session, config, search=False)
        return
    session.start_generation()
    session.run_active()
    print(render_text(session.grid))
    logger.info(f"Stats: {calculate_stats(session.grid)}")


def cmd_solve(config: SessionConfig, visual: bool):
    from maze_stepper.core.session import MazeSession, Phase
    from maze_stepper.viz.text import render_session

    session = MazeSession(config.cols, config.rows, seed=config.seed)
    if visual:
        run_visual(session, config, search=True)
        return

    session.start_generation()
    session.run_active()
    logger.info(f"Solving with {config.algorithm.name} from (0, 0) to ({config.cols - 1}, {config.rows - 1})...")
    session.start_search(config.algorithm)
    session.run_active()

    print(render_session(session))
    if session.phase is Phase.SOLVED:
        print(f"Done. Path Length: {len(session.path)}  Expanded: {session.searcher.expanded_count}")
    else:
        print("No Path Found")


def cmd_compare(config: SessionConfig):
    from maze_stepper.core.session import MazeSession

    session = MazeSession(config.cols, config.rows, seed=config.seed)
    session.start_generation()
    session.run_active()

    print(f"\n{'ALGORITHM':<15} | {'PATH LEN':<10} | {'EXPANDED':<10} | {'DISCOVERED':<10}")
    print("-" * 54)
    for algorithm in Algorithm:
        session.start_search(algorithm)
        session.run_active()
        searcher = session.searcher
        print(f"{algorithm.name:<15} | {len(session.path):<10} | {searcher.expanded_count:<10} | {searcher.discovered_count:<10}")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    try:
        config = SessionConfig.from_args(args)
        if args.command == "generate":
            cmd_generate(config, args.visual)
        elif args.command == "solve":
            cmd_solve(config, args.visual)
        elif args.command == "compare":
            cmd_compare(config)
    except (MazeError, ValueError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
