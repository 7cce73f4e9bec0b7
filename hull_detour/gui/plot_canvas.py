from typing import Optional, List
from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from ..geometry import Point
from ..polygon import ConvexPolygon
from ..visualize import draw_scene


class PlotCanvas(FigureCanvas):
    """Холст для отображения многоугольника и маршрута"""

    LABELS = {"obstacle": "Препятствие", "path": "Кратчайший путь", "start": "Старт", "goal": "Цель"}

    def __init__(self, parent=None, margin: float = 1.0):
        self.fig = Figure(figsize=(8, 8))
        super().__init__(self.fig)
        self.setParent(parent)
        self.margin = margin
        self.ax = self.fig.add_subplot(111)
        self.clear()
        self.fig.tight_layout()

    def clear(self):
        """Очищает холст"""
        self.ax.clear()
        self.ax.set_aspect("equal", adjustable="box")
        self.ax.grid(True, linestyle=":", linewidth=0.5, alpha=0.6, color="gray")
        self.ax.set_xlabel("X")
        self.ax.set_ylabel("Y")

    def plot_scene(
        self,
        polygon: ConvexPolygon,
        start: Optional[Point],
        goal: Optional[Point],
        path: Optional[List[Point]],
    ):
        """Отрисовывает многоугольник, концевые точки и путь"""
        self.clear()
        draw_scene(self.ax, polygon, start, goal, path, self.LABELS, self.margin)
        self.draw()
