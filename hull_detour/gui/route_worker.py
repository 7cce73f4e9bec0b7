import time
from PyQt5.QtCore import QThread, pyqtSignal

from ..geometry import Point
from ..polygon import ConvexPolygon
from ..errors import GeometryError
from ..stats import RouteStatistics


class RouteWorker(QThread):
    finished = pyqtSignal(object, object)  # path, RouteStatistics
    failed = pyqtSignal(str)
    status_update = pyqtSignal(str)

    def __init__(self, polygon: ConvexPolygon, start: Point, goal: Point):
        super().__init__()
        self.polygon = polygon
        self.start_point = start
        self.goal_point = goal

    def run(self):
        self.status_update.emit("Построение пути...")
        try:
            t0 = time.perf_counter()
            path = self.polygon.find_shortest_path(self.start_point, self.goal_point)
            dt_ms = (time.perf_counter() - t0) * 1000.0
        except GeometryError as e:
            self.status_update.emit(f"Ошибка: {e}")
            self.failed.emit(str(e))
            return

        stats = RouteStatistics.collect(self.polygon, path, time_ms=dt_ms)
        self.status_update.emit("Готово")
        self.finished.emit(path, stats)
