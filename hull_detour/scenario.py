import logging
from collections.abc import Iterable
from pathlib import Path

from .config import RouterConfig
from .errors import GeometryError, ScenarioFormatError
from .geometry import GeometryUtils, Point
from .polygon import ConvexPolygon

logger = logging.getLogger(__name__)


class ScenarioResult:
    def __init__(self, polygon: ConvexPolygon | None, lines: list[str]):
        self.polygon = polygon
        self.lines = lines


class ScenarioSolver:
    """Построчная обработка сценария: вершины многоугольника, затем запросы пути.

    Вершины читаются по одной на строку, пока не повторится первая точка.
    Каждая следующая строка - пара точек "x1 y1 x2 y2", ответ на неё - строка
    "Case #n: ..." с путём или текстом ошибки.
    """

    def __init__(self, config: RouterConfig | None = None):
        self.config = config or RouterConfig()

    def format_path(self, path: list[Point]) -> str:
        return self.config.path_separator.join(GeometryUtils.format_point(p) for p in path)

    def parse_point(self, line: str) -> Point:
        points = GeometryUtils.parse_points(line)
        if len(points) != 1:
            raise ScenarioFormatError(f"Expected exactly one point, got {len(points)}.")
        return points[0]

    def parse_query(self, line: str) -> tuple[Point, Point]:
        points = GeometryUtils.parse_points(line)
        if len(points) != 2:
            raise ScenarioFormatError(f"A query must contain exactly two points, got {len(points)}.")
        return points[0], points[1]

    def solve_lines(self, lines: Iterable[str]) -> ScenarioResult:
        output: list[str] = []
        points: list[Point] = []
        polygon: ConvexPolygon | None = None
        case_number = 1

        for raw in lines:
            line = raw.strip()
            if not line:
                continue

            if polygon is None:
                try:
                    point = self.parse_point(line)
                    if points and point == points[0]:
                        polygon = ConvexPolygon(points)
                        logger.info("Polygon closed with %d vertices", len(points))
                    else:
                        points.append(point)
                except GeometryError as e:
                    # Без многоугольника запросы обработать нельзя
                    logger.warning("Polygon rejected: %s", e)
                    output.append(str(e))
                    return ScenarioResult(None, output)
                continue

            message = self.config.case_prefix.format(number=case_number)
            case_number += 1
            try:
                p1, p2 = self.parse_query(line)
                message += self.format_path(polygon.find_shortest_path(p1, p2))
            except GeometryError as e:
                logger.warning("Query %r failed: %s", line, e)
                message += str(e)
            output.append(message)

        if polygon is None:
            output.append(self.config.unclosed_ring_message)
        return ScenarioResult(polygon, output)

    def solve_file(self, input_path: str | None = None, output_path: str | None = None) -> ScenarioResult:
        input_path = input_path or self.config.input_path
        output_path = output_path or self.config.output_path

        with open(input_path, "r", encoding="utf-8") as f:
            result = self.solve_lines(f)

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            for line in result.lines:
                f.write(line + "\n")
        logger.info("Wrote %d lines to %s", len(result.lines), output_path)
        return result
