import math

import numpy as np

from .errors import DegenerateLineError, ScenarioFormatError

Point = tuple[float, float]


class Line:
    """Прямая a*x + b*y + c = 0, проходящая через две различные точки"""

    def __init__(self, p1: Point, p2: Point):
        if p1 == p2:
            raise DegenerateLineError()
        self.a = p1[1] - p2[1]
        self.b = p2[0] - p1[0]
        self.c = p1[0] * p2[1] - p2[0] * p1[1]

    def __repr__(self) -> str:
        return f"Line(a={self.a}, b={self.b}, c={self.c})"


class GeometryUtils:
    """Функции для работы с геометрией"""

    @staticmethod
    def sub(a: Point, b: Point) -> Point:
        return (a[0] - b[0], a[1] - b[1])

    @staticmethod
    def dot(a: Point, b: Point) -> float:
        return a[0] * b[0] + a[1] * b[1]

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        """Евклидово расстояние между точками."""
        return math.hypot(p1[0] - p2[0], p1[1] - p2[1])

    @staticmethod
    def cross_product(a1: Point, a2: Point, b1: Point, b2: Point) -> float:
        """Векторное произведение (a2 - a1) x (b2 - b1).

        Положительное значение - поворот против часовой стрелки.
        """
        return (a2[0] - a1[0]) * (b2[1] - b1[1]) - (a2[1] - a1[1]) * (b2[0] - b1[0])

    @staticmethod
    def line_relation(p: Point, line: Line) -> float:
        """Значение уравнения прямой в точке; знак задаёт полуплоскость, ноль - точка на прямой."""
        return line.a * p[0] + line.b * p[1] + line.c

    @staticmethod
    def point_to_segment_distance(p: Point, a: Point, b: Point) -> float:
        ap = GeometryUtils.sub(p, a)
        ab = GeometryUtils.sub(b, a)
        ab2 = GeometryUtils.dot(ab, ab)
        if ab2 == 0:
            return math.hypot(ap[0], ap[1])
        t = max(0.0, min(1.0, GeometryUtils.dot(ap, ab) / ab2))
        proj = (a[0] + ab[0] * t, a[1] + ab[1] * t)
        return GeometryUtils.distance(p, proj)

    @staticmethod
    def path_length(points: list[Point]) -> float:
        """Длина ломаной"""
        if len(points) < 2:
            return 0.0
        xy = np.array(points, dtype=float)
        seg = np.hypot(*np.diff(xy, axis=0).T)
        return float(seg.sum())

    @staticmethod
    def parse_points(line: str) -> list[Point]:
        """Разбирает строку вида "x1 y1 x2 y2 ..." в список точек."""
        tokens = line.split()
        if not tokens or len(tokens) % 2:
            raise ScenarioFormatError(f"Expected an even number of coordinates, got {len(tokens)}: {line.strip()!r}")
        try:
            numbers = [float(t) for t in tokens]
        except ValueError:
            raise ScenarioFormatError(f"Invalid coordinate in line: {line.strip()!r}") from None
        if not all(math.isfinite(v) for v in numbers):
            raise ScenarioFormatError(f"Non-finite coordinate in line: {line.strip()!r}")
        return [(numbers[i], numbers[i + 1]) for i in range(0, len(numbers), 2)]

    @staticmethod
    def format_point(p: Point) -> str:
        return f"{GeometryUtils.format_number(p[0])} {GeometryUtils.format_number(p[1])}"

    @staticmethod
    def format_number(v: float) -> str:
        # Целые значения печатаются без дробной части: 2.0 -> "2"
        if math.isfinite(v) and float(v).is_integer():
            return str(int(v))
        return repr(float(v))
