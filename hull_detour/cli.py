"""
hull-detour - командная строка.

Решает сценарии из файла, рисует маршрут или открывает окно просмотра.
"""

import argparse
import logging
import sys

from .config import RouterConfig
from .errors import GeometryError
from .geometry import GeometryUtils
from .polygon import ConvexPolygon
from .scenario import ScenarioSolver

logger = logging.getLogger(__name__)


def run_solve(args, config: RouterConfig) -> int:
    solver = ScenarioSolver(config)
    try:
        solver.solve_file(args.input, args.output)
    except OSError as e:
        logger.error("Cannot process scenario: %s", e)
        return 1
    return 0


def run_plot(args, config: RouterConfig) -> int:
    from .visualize import SceneVisualizer

    solver = ScenarioSolver(config)
    try:
        polygon = ConvexPolygon(GeometryUtils.parse_points(args.polygon.replace(",", " ")))
        start = solver.parse_point(args.start) if args.start else None
        goal = solver.parse_point(args.goal) if args.goal else None
        path = polygon.find_shortest_path(start, goal) if start and goal else None
    except GeometryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if path is not None:
        print(solver.format_path(path))
    SceneVisualizer(config).plot(polygon, start, goal, path, save_path=args.save)
    return 0


def run_gui(args, config: RouterConfig) -> int:
    from PyQt5.QtWidgets import QApplication
    from .gui.main_window import MainWindow

    app = QApplication(sys.argv[:1])
    window = MainWindow(config)
    window.show()
    return app.exec_()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hull-detour",
        description="Shortest path around a convex polygon obstacle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Answer every query of a scenario file
  hull-detour solve data/input.txt data/output.txt

  # Plot a single route
  hull-detour plot --polygon "0 0, 2 0, 2 2, 0 2" --start "-1 1" --goal "3 1"
        """,
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve = subparsers.add_parser("solve", help="Solve a scenario file")
    solve.add_argument("input", nargs="?", default=None, help="Scenario file (default: data/input.txt)")
    solve.add_argument("output", nargs="?", default=None, help="Answer file (default: data/output.txt)")

    plot = subparsers.add_parser("plot", help="Plot polygon and route")
    plot.add_argument("--polygon", required=True, help='Vertices, e.g. "0 0, 2 0, 2 2, 0 2"')
    plot.add_argument("--start", help='Start point "x y"')
    plot.add_argument("--goal", help='Goal point "x y"')
    plot.add_argument("--save", help="Save the figure instead of showing it")

    subparsers.add_parser("gui", help="Open the interactive viewer")
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = RouterConfig()
    if args.log_level:
        config.log_level = args.log_level.upper()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {"solve": run_solve, "plot": run_plot, "gui": run_gui}
    return commands[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
