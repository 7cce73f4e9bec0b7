from typing import Optional, List
from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton,
    QStatusBar, QLabel, QMessageBox
)
from PyQt5.QtCore import pyqtSlot

from ..config import RouterConfig
from ..geometry import Point
from ..polygon import ConvexPolygon
from ..stats import RouteStatistics
from .dialogs import PolygonDialog, QueryDialog, StatisticsDialog
from .route_worker import RouteWorker
from .plot_canvas import PlotCanvas


class MainWindow(QMainWindow):
    def __init__(self, config: Optional[RouterConfig] = None):
        super().__init__()
        self.config = config or RouterConfig()
        self.polygon: Optional[ConvexPolygon] = None
        self.start_point: Optional[Point] = None
        self.goal_point: Optional[Point] = None
        self.path: Optional[List[Point]] = None
        self.stats: Optional[RouteStatistics] = None
        self.worker: Optional[RouteWorker] = None

        self.setWindowTitle("Кратчайший путь в обход выпуклого многоугольника")
        self.setMinimumSize(900, 700)
        self.setup_ui()

    def setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)

        layout = QVBoxLayout()
        central.setLayout(layout)

        # Строка состояния
        self.status_bar = QStatusBar()
        self.status_label = QLabel("Готово")
        self.status_bar.addWidget(self.status_label)
        self.setStatusBar(self.status_bar)

        # Холст для построения графиков
        self.canvas = PlotCanvas(self, margin=self.config.plot_margin)
        layout.addWidget(self.canvas)

        # Нижняя панель
        bottom_panel = QHBoxLayout()
        bottom_panel.setContentsMargins(10, 10, 10, 10)

        self.polygon_btn = QPushButton("Многоугольник")
        self.polygon_btn.setMinimumHeight(40)
        self.polygon_btn.clicked.connect(self.edit_polygon)

        self.points_btn = QPushButton("Точки")
        self.points_btn.setMinimumHeight(40)
        self.points_btn.clicked.connect(self.edit_points)
        self.points_btn.setEnabled(False)

        self.run_btn = QPushButton("Построить путь")
        self.run_btn.setMinimumHeight(40)
        self.run_btn.clicked.connect(self.run_router)
        self.run_btn.setEnabled(False)

        self.stats_btn = QPushButton("Статистика")
        self.stats_btn.setMinimumHeight(40)
        self.stats_btn.clicked.connect(self.show_statistics)
        self.stats_btn.setEnabled(False)

        bottom_panel.addWidget(self.polygon_btn)
        bottom_panel.addWidget(self.points_btn)
        bottom_panel.addWidget(self.run_btn)
        bottom_panel.addWidget(self.stats_btn)
        bottom_panel.addStretch()

        layout.addLayout(bottom_panel)

    def _reset_route(self):
        self.path = None
        self.stats = None
        self.stats_btn.setEnabled(False)

    @pyqtSlot()
    def edit_polygon(self):
        dialog = PolygonDialog(self.polygon, self)
        if dialog.exec_():
            polygon = dialog.get_polygon()
            if polygon is None:
                QMessageBox.warning(self, "Ошибка", dialog.error or "Неверные координаты вершин")
                return
            self.polygon = polygon
            self._reset_route()
            self.canvas.plot_scene(self.polygon, self.start_point, self.goal_point, None)
            self.points_btn.setEnabled(True)
            self.run_btn.setEnabled(self.start_point is not None)
            self.status_label.setText(f"Многоугольник задан: {len(polygon)} вершин")

    @pyqtSlot()
    def edit_points(self):
        dialog = QueryDialog(self.start_point, self.goal_point, self)
        if dialog.exec_():
            points = dialog.get_points()
            if points is None:
                QMessageBox.warning(self, "Ошибка", "Неверные значения координат")
                return
            self.start_point, self.goal_point = points
            self._reset_route()
            self.canvas.plot_scene(self.polygon, self.start_point, self.goal_point, None)
            self.run_btn.setEnabled(True)
            self.status_label.setText("Точки заданы. Готово к построению пути")

    @pyqtSlot()
    def run_router(self):
        if self.polygon is None or self.start_point is None:
            QMessageBox.warning(self, "Предупреждение", "Сначала задайте многоугольник и точки!")
            return

        if self.worker and self.worker.isRunning():
            QMessageBox.information(self, "Информация", "Путь уже строится")
            return

        self.run_btn.setEnabled(False)
        self.worker = RouteWorker(self.polygon, self.start_point, self.goal_point)
        self.worker.status_update.connect(self.status_label.setText)
        self.worker.finished.connect(self.on_route_finished)
        self.worker.failed.connect(self.on_route_failed)
        self.worker.start()

    @pyqtSlot(object, object)
    def on_route_finished(self, path, stats):
        self.run_btn.setEnabled(True)
        self.path = path
        self.stats = stats
        self.stats_btn.setEnabled(True)
        self.canvas.plot_scene(self.polygon, self.start_point, self.goal_point, self.path)
        self.status_label.setText(f"Путь построен, длина {stats.path_quality.path_length:.3f}")

    @pyqtSlot(str)
    def on_route_failed(self, message):
        self.run_btn.setEnabled(True)
        QMessageBox.critical(self, "Ошибка", message)

    @pyqtSlot()
    def show_statistics(self):
        if self.stats is None:
            QMessageBox.warning(self, "Предупреждение", "Статистика недоступна")
            return

        dialog = StatisticsDialog(self.stats, self)
        dialog.exec_()
