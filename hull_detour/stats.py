from .geometry import GeometryUtils, Point
from .polygon import ConvexPolygon


class PathQualityMetrics:
    """Метрики качества пути"""
    def __init__(self):
        self.path_length = 0.0
        self.straight_line_distance = 0.0
        self.path_efficiency = 0.0  # straight_line / path_length
        self.hull_vertices = 0
        self.is_detour = False

    def compute(self, path: list[Point]):
        """Вычисляет метрики качества пути"""
        self.path_length = GeometryUtils.path_length(path)
        self.straight_line_distance = GeometryUtils.distance(path[0], path[-1]) if path else 0.0
        if self.path_length > 0:
            self.path_efficiency = self.straight_line_distance / self.path_length
        else:
            # Совпадающие концы - путь нулевой длины и идеален
            self.path_efficiency = 1.0
        self.hull_vertices = max(0, len(path) - 2)
        self.is_detour = len(path) > 2


class PolygonStatistics:
    """Статистика многоугольника-препятствия"""
    def __init__(self):
        self.num_vertices = 0
        self.area = 0.0
        self.perimeter = 0.0

    def compute(self, polygon: ConvexPolygon):
        self.num_vertices = len(polygon)
        self.area = polygon.area()
        self.perimeter = polygon.perimeter()


class RouteStatistics:
    """Статистика построения маршрута"""

    def __init__(self, time_ms: float = 0.0, path_quality=None, polygon_stats=None):
        self.time_ms = time_ms
        self.path_quality = path_quality or PathQualityMetrics()
        self.polygon_stats = polygon_stats or PolygonStatistics()

    @staticmethod
    def collect(polygon: ConvexPolygon, path: list[Point], time_ms: float = 0.0) -> "RouteStatistics":
        path_quality = PathQualityMetrics()
        path_quality.compute(path)
        polygon_stats = PolygonStatistics()
        polygon_stats.compute(polygon)
        return RouteStatistics(time_ms=time_ms, path_quality=path_quality, polygon_stats=polygon_stats)

    def to_dict(self):
        """Преобразует статистику в словарь для сохранения"""
        return {
            "path_length": self.path_quality.path_length,
            "path_straight_distance": self.path_quality.straight_line_distance,
            "path_efficiency": self.path_quality.path_efficiency,
            "path_hull_vertices": self.path_quality.hull_vertices,
            "path_is_detour": self.path_quality.is_detour,
            "time_ms": self.time_ms,
            "polygon_num_vertices": self.polygon_stats.num_vertices,
            "polygon_area": self.polygon_stats.area,
            "polygon_perimeter": self.polygon_stats.perimeter,
        }

    def get_summary_text(self):
        """Возвращает текстовое резюме статистики для вывода в окне"""
        return RouteStatistics._format_text(self.to_dict())

    @staticmethod
    def _format_text(d: dict):
        """Форматирует текст статистики из словаря"""
        lines = [
            "СТАТИСТИКА МАРШРУТА\n",
            "Качество пути",
            f"  - Длина пути: {d.get('path_length', 0):.3f}",
            f"  - Прямая дистанция: {d.get('path_straight_distance', 0):.3f}",
            f"  - Эффективность пути: {d.get('path_efficiency', 0):.2%}",
            f"  - Обход по границе: {'да' if d.get('path_is_detour') else 'нет'}",
            f"  - Вершин на пути: {d.get('path_hull_vertices', 0)}",
            "",
            "Производительность",
            f"  - Время построения: {d.get('time_ms', 0):.3f} мс",
            "",
            "Многоугольник",
            f"  - Вершин: {d.get('polygon_num_vertices', 0)}",
            f"  - Площадь: {d.get('polygon_area', 0):.3f}",
            f"  - Периметр: {d.get('polygon_perimeter', 0):.3f}",
        ]
        return "\n".join(lines)
