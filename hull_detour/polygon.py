import logging
import math
from collections.abc import Iterable

import numpy as np

from .errors import NonFiniteCoordinateError, NotAPolygonError, NotConvexError, PointInsidePolygonError
from .geometry import GeometryUtils, Line, Point

logger = logging.getLogger(__name__)


class PointClassification:
    def __init__(self, is_interior: bool, closest_index: int):
        self.is_interior = is_interior
        self.closest_index = closest_index


class DirectPathCheck:
    def __init__(self, is_possible: bool, closest_vertex_index: int | None = None):
        self.is_possible = is_possible
        self.closest_vertex_index = closest_vertex_index


class DetourPath:
    def __init__(self, start_index: int, finish_index: int, distance: float):
        self.start_index = start_index
        self.finish_index = finish_index
        self.distance = distance


class ConvexPolygon:
    """Выпуклый многоугольник-препятствие и поиск кратчайшего пути в обход него.

    Вершины хранятся в порядке, заданном вызывающим кодом. Обход "по часовой"
    означает возрастание индекса вершины, "против часовой" - убывание,
    независимо от фактической ориентации кольца.
    """

    def __init__(self, points: Iterable[Point]):
        points = [(float(p[0]), float(p[1])) for p in points]
        if not all(math.isfinite(x) and math.isfinite(y) for x, y in points):
            raise NonFiniteCoordinateError("Polygon vertices must have finite coordinates.")
        # Явное замыкание кольца (последняя точка равна первой) отбрасывается
        if len(points) > 3 and points[-1] == points[0]:
            points = points[:-1]

        if not self.is_polygon(points):
            raise NotAPolygonError()
        n = len(points)
        for i in range(n):
            if points[i] == points[(i + 1) % n]:
                raise NotAPolygonError(f"Consecutive vertices {i} and {(i + 1) % n} coincide.")
        if not self.is_convex(points):
            raise NotConvexError()
        if self._first_turn(points, 0) == 0:
            raise NotAPolygonError("The points are collinear and do not enclose an area.")

        self._vertices = tuple(points)
        self._xy = np.array(points, dtype=float)
        self._edges = tuple(Line(points[i], points[(i + 1) % n]) for i in range(n))
        self._is_positive = self._first_turn(points, 0) > 0
        logger.debug("Built convex polygon with %d vertices (%s)", n, "ccw" if self._is_positive else "cw")

    @property
    def vertices(self) -> tuple[Point, ...]:
        return self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    def __repr__(self) -> str:
        return f"ConvexPolygon({list(self._vertices)!r})"

    def edges(self) -> Iterable[tuple[Point, Point]]:
        n = len(self._vertices)
        for i in range(n):
            yield self._vertices[i], self._vertices[(i + 1) % n]

    def area(self) -> float:
        # Формула шнурования
        x, y = self._xy[:, 0], self._xy[:, 1]
        return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)) / 2.0)

    def perimeter(self) -> float:
        return GeometryUtils.path_length(list(self._vertices) + [self._vertices[0]])

    @staticmethod
    def is_polygon(points: list[Point]) -> bool:
        return len(points) > 2

    @staticmethod
    def is_convex(points: list[Point]) -> bool:
        """Один проход по тройкам соседних вершин: знак поворота не должен меняться.

        Нулевые (коллинеарные) повороты знак не меняют. Сумма углов поворота
        должна составлять ровно один оборот, иначе кольцо - звезда вроде пентаграммы.
        """
        n = len(points)
        sign = 0
        total_turn = 0.0
        has_reversal = False
        for i in range(n):
            a, b, c = points[i], points[(i + 1) % n], points[(i + 2) % n]
            product = GeometryUtils.cross_product(a, b, b, c)
            turn_dot = GeometryUtils.dot(GeometryUtils.sub(b, a), GeometryUtils.sub(c, b))
            if product > 0:
                if sign < 0:
                    return False
                sign = 1
            elif product < 0:
                if sign > 0:
                    return False
                sign = -1
            else:
                has_reversal = has_reversal or turn_dot < 0
                continue
            total_turn += math.atan2(product, turn_dot)

        # Все вершины на одной прямой - отдельная ошибка конструктора
        if sign == 0:
            return True
        if has_reversal:
            return False
        return round(abs(total_turn) / (2 * math.pi)) == 1

    @staticmethod
    def _first_turn(points: list[Point] | tuple[Point, ...], start: int) -> int:
        """Знак первого ненулевого поворота при обходе по часовой от вершины start."""
        n = len(points)
        for offset in range(n):
            i = (start + offset) % n
            product = GeometryUtils.cross_product(
                points[i], points[(i + 1) % n], points[(i + 1) % n], points[(i + 2) % n]
            )
            if product > 0:
                return 1
            if product < 0:
                return -1
        return 0

    def get_vertex_index(self, current_index: int, offset: int, clockwise: bool) -> int:
        n = len(self._vertices)
        if clockwise:
            return (current_index + offset) % n
        return (current_index - offset) % n

    def classify(self, point: Point) -> PointClassification:
        """Лежит ли точка строго внутри многоугольника; индекс ближайшей вершины.

        Сначала проверяется угол при ближайшей вершине: весь многоугольник лежит
        внутри этого угла, поэтому точка вне угла - внешняя. Точка внутри угла
        дополнительно проверяется по всем рёбрам. Точки границы внутренними не считаются.
        """
        pts = self._vertices
        distances = np.hypot(self._xy[:, 0] - point[0], self._xy[:, 1] - point[1])
        closest = int(np.argmin(distances))
        prev_point = pts[self.get_vertex_index(closest, 1, False)]
        next_point = pts[self.get_vertex_index(closest, 1, True)]

        line1 = Line(pts[closest], prev_point)
        line2 = Line(pts[closest], next_point)
        opposite1 = GeometryUtils.line_relation(next_point, line1)
        opposite2 = GeometryUtils.line_relation(prev_point, line2)

        if opposite1 != 0 and opposite2 != 0:
            b1 = GeometryUtils.line_relation(point, line1) * opposite1
            b2 = GeometryUtils.line_relation(point, line2) * opposite2
            if not (b1 > 0 and b2 > 0):
                return PointClassification(False, closest)

        return PointClassification(self._inside_all_edges(point), closest)

    def _inside_all_edges(self, point: Point) -> bool:
        if self._is_positive:
            return all(GeometryUtils.line_relation(point, edge) > 0 for edge in self._edges)
        return all(GeometryUtils.line_relation(point, edge) < 0 for edge in self._edges)

    @staticmethod
    def _walk_sense(is_positive_sign: bool, clockwise: bool) -> float:
        return 1.0 if is_positive_sign == clockwise else -1.0

    def _faces(self, point: Point, index: int, is_positive_sign: bool, clockwise: bool) -> bool:
        """Точка лежит снаружи ребра (index, следующая вершина) или на его прямой."""
        pts = self._vertices
        next_index = self.get_vertex_index(index, 1, clockwise)
        product = GeometryUtils.cross_product(point, pts[index], pts[index], pts[next_index])
        return self._walk_sense(is_positive_sign, clockwise) * product <= 0

    def _start_index(self, point: Point, closest_index: int) -> int:
        """Вершина на цепочке рёбер, обращённых к точке.

        Обычно это ближайшая вершина. У плоских многоугольников ближайшая вершина
        может прятаться за ближним ребром - тогда берётся ближний конец ближайшего ребра.
        """
        is_positive = self._first_turn(self._vertices, closest_index) > 0
        if self._faces(point, closest_index, is_positive, True) or self._faces(point, closest_index, is_positive, False):
            return closest_index

        pts = self._vertices
        n = len(pts)
        edge_index = min(
            range(n),
            key=lambda i: GeometryUtils.point_to_segment_distance(point, pts[i], pts[(i + 1) % n]),
        )
        a, b = edge_index, (edge_index + 1) % n
        start = a if GeometryUtils.distance(point, pts[a]) <= GeometryUtils.distance(point, pts[b]) else b
        logger.debug("Closest vertex %d is hidden from %s, starting from vertex %d", closest_index, point, start)
        return start

    def is_direct_path_possible(
        self,
        p1: Point,
        p2: Point,
        initial_closest_index: int,
        is_positive_sign: bool,
        clockwise: bool,
    ) -> DirectPathCheck:
        """Проверяет, обходит ли отрезок p1-p2 многоугольник с одной стороны.

        От начальной вершины идём в заданном направлении, пока рёбра обращены к p1.
        Вершина, на которой обход остановился, - опорная (касательная из p1).
        Отрезок допустим, если p2 лежит по внешнюю сторону касательной p1 -> опорная
        вершина, либо снаружи одного из пройденных рёбер (p2 перед препятствием).
        """
        pts = self._vertices
        sense = self._walk_sense(is_positive_sign, clockwise)

        closest_index = initial_closest_index
        walked = []
        for _ in range(len(pts)):
            if not self._faces(p1, closest_index, is_positive_sign, clockwise):
                break
            walked.append(closest_index)
            closest_index = self.get_vertex_index(closest_index, 1, clockwise)
        else:
            raise NotAPolygonError("Every edge faces the point; the polygon has no area.")

        product = GeometryUtils.cross_product(p1, pts[closest_index], pts[closest_index], p2)
        if sense * product <= 0:
            return DirectPathCheck(True)

        if any(self._faces(p2, i, is_positive_sign, clockwise) for i in walked):
            return DirectPathCheck(True)

        return DirectPathCheck(False, closest_index)

    def find_path(
        self,
        p1: Point,
        p2: Point,
        closest_index: int,
        is_positive_sign: bool,
        clockwise: bool,
    ) -> DetourPath:
        """Обход вдоль границы от опорной вершины до вершины, с которой видна p2."""
        pts = self._vertices
        current_index = closest_index
        distance = GeometryUtils.distance(p1, pts[closest_index])

        for _ in range(len(pts)):
            if self._faces(p2, current_index, is_positive_sign, clockwise):
                break
            next_index = self.get_vertex_index(current_index, 1, clockwise)
            distance += GeometryUtils.distance(pts[current_index], pts[next_index])
            current_index = next_index
        else:
            raise NotAPolygonError("No edge faces the point; the polygon has no area.")

        distance += GeometryUtils.distance(pts[current_index], p2)
        return DetourPath(closest_index, current_index, distance)

    def find_shortest_path(self, p1: Point, p2: Point) -> list[Point]:
        """Кратчайший путь от p1 до p2, не пересекающий внутренность многоугольника."""
        p1 = (float(p1[0]), float(p1[1]))
        p2 = (float(p2[0]), float(p2[1]))
        for ordinal, p in (("first", p1), ("second", p2)):
            if not (math.isfinite(p[0]) and math.isfinite(p[1])):
                raise NonFiniteCoordinateError(f"The {ordinal} point has non-finite coordinates.")

        check_p1 = self.classify(p1)
        if check_p1.is_interior:
            raise PointInsidePolygonError(1)
        if self.classify(p2).is_interior:
            raise PointInsidePolygonError(2)

        pts = self._vertices
        initial_closest_index = self._start_index(p1, check_p1.closest_index)
        is_positive_sign = self._first_turn(pts, initial_closest_index) > 0

        clockwise_check = self.is_direct_path_possible(p1, p2, initial_closest_index, is_positive_sign, True)
        if clockwise_check.is_possible:
            logger.debug("Direct segment %s -> %s is clear (clockwise side)", p1, p2)
            return [p1, p2]

        counter_clockwise_check = self.is_direct_path_possible(p1, p2, initial_closest_index, is_positive_sign, False)
        if counter_clockwise_check.is_possible:
            logger.debug("Direct segment %s -> %s is clear (counter-clockwise side)", p1, p2)
            return [p1, p2]

        clockwise_path = self.find_path(p1, p2, clockwise_check.closest_vertex_index, is_positive_sign, True)
        counter_clockwise_path = self.find_path(
            p1, p2, counter_clockwise_check.closest_vertex_index, is_positive_sign, False
        )

        is_clockwise_shorter = not (counter_clockwise_path.distance < clockwise_path.distance)
        chosen = clockwise_path if is_clockwise_shorter else counter_clockwise_path
        logger.debug(
            "Detour lengths: clockwise=%.6f counter-clockwise=%.6f, chosen %s",
            clockwise_path.distance,
            counter_clockwise_path.distance,
            "clockwise" if is_clockwise_shorter else "counter-clockwise",
        )

        result = [p1]
        i = chosen.start_index
        while i != chosen.finish_index:
            result.append(pts[i])
            i = self.get_vertex_index(i, 1, is_clockwise_shorter)
        result.append(pts[chosen.finish_index])
        result.append(p2)
        return result
