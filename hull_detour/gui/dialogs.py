from typing import Optional
from PyQt5.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit,
    QPushButton, QFormLayout, QTextEdit, QFileDialog
)
from PyQt5.QtGui import QFont

from ..errors import GeometryError
from ..geometry import GeometryUtils, Point
from ..polygon import ConvexPolygon
from ..stats import RouteStatistics


class PolygonDialog(QDialog):
    DEFAULT_VERTICES = "0 0\n2 0\n2 2\n0 2"

    def __init__(self, current: Optional[ConvexPolygon] = None, parent=None):
        super().__init__(parent)
        self.current = current
        self.error: Optional[str] = None
        self.setWindowTitle("Многоугольник")
        self.setMinimumWidth(350)
        self.setup_ui()

    def setup_ui(self):
        layout = QVBoxLayout()

        layout.addWidget(QLabel("Вершины по одной в строке (x y):"))
        self.vertices_edit = QTextEdit()
        if self.current is not None:
            self.vertices_edit.setPlainText("\n".join(GeometryUtils.format_point(v) for v in self.current.vertices))
        else:
            self.vertices_edit.setPlainText(self.DEFAULT_VERTICES)
        layout.addWidget(self.vertices_edit)

        buttons = QHBoxLayout()
        self.ok_btn = QPushButton("Применить")
        self.ok_btn.clicked.connect(self.accept)
        buttons.addWidget(self.ok_btn)
        layout.addLayout(buttons)

        self.setLayout(layout)

    def get_polygon(self) -> Optional[ConvexPolygon]:
        try:
            points = GeometryUtils.parse_points(" ".join(self.vertices_edit.toPlainText().split()))
            return ConvexPolygon(points)
        except GeometryError as e:
            self.error = str(e)
            return None


class QueryDialog(QDialog):
    def __init__(self, start: Optional[Point] = None, goal: Optional[Point] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Начальная и конечная точки")
        self.setMinimumWidth(400)
        self.start_point = start or (-1.0, 1.0)
        self.goal_point = goal or (3.0, 1.0)
        self.setup_ui()

    def _point_row(self, point: Point) -> tuple[QHBoxLayout, QLineEdit, QLineEdit]:
        row = QHBoxLayout()
        x_edit = QLineEdit(GeometryUtils.format_number(point[0]))
        y_edit = QLineEdit(GeometryUtils.format_number(point[1]))
        row.addWidget(x_edit)
        row.addWidget(QLabel(" , "))
        row.addWidget(y_edit)
        return row, x_edit, y_edit

    def setup_ui(self):
        layout = QVBoxLayout()
        form = QFormLayout()

        start_layout, self.start_x_edit, self.start_y_edit = self._point_row(self.start_point)
        form.addRow("Начальная точка (x, y):", start_layout)
        goal_layout, self.goal_x_edit, self.goal_y_edit = self._point_row(self.goal_point)
        form.addRow("Конечная точка (x, y):", goal_layout)
        layout.addLayout(form)

        buttons = QHBoxLayout()
        self.ok_btn = QPushButton("Применить")
        self.ok_btn.clicked.connect(self.accept)
        buttons.addWidget(self.ok_btn)
        layout.addLayout(buttons)

        self.setLayout(layout)

    def get_points(self) -> Optional[tuple[Point, Point]]:
        try:
            start = (float(self.start_x_edit.text()), float(self.start_y_edit.text()))
            goal = (float(self.goal_x_edit.text()), float(self.goal_y_edit.text()))
            return start, goal
        except ValueError:
            return None


class StatisticsDialog(QDialog):
    def __init__(self, stats: RouteStatistics, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Статистика")
        self.setMinimumWidth(400)
        self.setMinimumHeight(400)
        self.stats = stats
        self.setup_ui()

    def setup_ui(self):
        layout = QVBoxLayout()

        info = QTextEdit()
        info.setReadOnly(True)
        info.setFont(QFont("Segoe UI", 9))
        info.setPlainText(self.stats.get_summary_text())
        layout.addWidget(info)

        buttons = QHBoxLayout()
        self.save_btn = QPushButton("Сохранить")
        self.close_btn = QPushButton("Закрыть")
        self.save_btn.clicked.connect(self.save_report)
        self.close_btn.clicked.connect(self.accept)
        buttons.addWidget(self.save_btn)
        buttons.addWidget(self.close_btn)
        layout.addLayout(buttons)

        self.setLayout(layout)

    def save_report(self):
        import csv
        filename, _ = QFileDialog.getSaveFileName(
            self, "Сохранить отчёт", "", "CSV Files (*.csv);;All Files (*)"
        )
        if filename:
            data_to_save = self.stats.to_dict()
            with open(filename, "w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=list(data_to_save.keys()))
                writer.writeheader()
                writer.writerow(data_to_save)
            self.accept()
