"""Исключения геометрического ядра и сценариев."""


class GeometryError(Exception):
    """Базовая ошибка построения многоугольника и поиска пути."""

    pass


class NotAPolygonError(GeometryError):
    """Точек меньше трёх или они не ограничивают площадь."""

    def __init__(self, message: str = "A polygon must have at least three points."):
        super().__init__(message)


class NotConvexError(GeometryError):
    """Знак поворота меняется вдоль кольца вершин."""

    def __init__(self, message: str = "The points do not form a convex polygon."):
        super().__init__(message)


class DegenerateLineError(GeometryError):
    """Прямая задана двумя совпадающими точками."""

    def __init__(self, message: str = "Line must be defined by a pair of distinct points."):
        super().__init__(message)


class PointInsidePolygonError(GeometryError):
    """Одна из точек запроса лежит строго внутри многоугольника."""

    def __init__(self, which: int):
        self.which = which
        ordinal = "first" if which == 1 else "second"
        super().__init__(f"The {ordinal} point is inside the polygon.")


class ScenarioFormatError(GeometryError, ValueError):
    """Строка входного файла не разбирается в координаты."""

    pass


class NonFiniteCoordinateError(GeometryError, ValueError):
    """Координата вершины или точки запроса равна nan или бесконечности."""

    def __init__(self, message: str = "Coordinates must be finite numbers."):
        super().__init__(message)
