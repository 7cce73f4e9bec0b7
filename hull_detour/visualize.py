import matplotlib.pyplot as plt

from .config import RouterConfig
from .geometry import Point
from .polygon import ConvexPolygon


def scene_bounds(polygon: ConvexPolygon, points: list[Point], margin: float) -> tuple[float, float, float, float]:
    """Границы сцены: многоугольник и точки с отступом"""
    xs = [v[0] for v in polygon.vertices] + [p[0] for p in points]
    ys = [v[1] for v in polygon.vertices] + [p[1] for p in points]
    return min(xs) - margin, max(xs) + margin, min(ys) - margin, max(ys) + margin


def draw_scene(ax, polygon: ConvexPolygon, start: Point | None, goal: Point | None, path: list[Point] | None, labels: dict, margin: float):
    """Рисует многоугольник, путь и концевые точки на осях matplotlib"""
    xs = [v[0] for v in polygon.vertices] + [polygon.vertices[0][0]]
    ys = [v[1] for v in polygon.vertices] + [polygon.vertices[0][1]]
    ax.fill(xs, ys, color="#c0c0c0", alpha=0.5, label=labels["obstacle"])
    ax.plot(xs, ys, "-", color="#808080", linewidth=1.0)

    if path is not None and len(path) > 1:
        px = [p[0] for p in path]
        py = [p[1] for p in path]
        ax.plot(px, py, "-", color="k", linewidth=3.2, label=labels["path"], zorder=10)
        if len(path) > 2:
            ax.scatter(px[1:-1], py[1:-1], c="k", marker="s", s=20, zorder=11)

    endpoints = [p for p in (start, goal) if p is not None]
    if start is not None:
        ax.scatter([start[0]], [start[1]], c="g", marker="o", s=60, edgecolors="darkgreen", linewidths=1.2, label=labels["start"], zorder=12)
    if goal is not None:
        ax.scatter([goal[0]], [goal[1]], c="r", marker="o", s=60, edgecolors="darkred", linewidths=1.2, label=labels["goal"], zorder=12)

    x_min, x_max, y_min, y_max = scene_bounds(polygon, endpoints, margin)
    ax.set_xlim(x_min, x_max)
    ax.set_ylim(y_min, y_max)

    handles, labels_list = ax.get_legend_handles_labels()
    if handles:
        ax.legend(handles, labels_list, loc="lower right", fontsize=9, framealpha=0.9)


class SceneVisualizer:
    """Визуализатор многоугольника и маршрута"""

    LABELS = {"obstacle": "Obstacle", "path": "Shortest path", "start": "Start", "goal": "Goal"}

    def __init__(self, config: RouterConfig | None = None):
        self.config = config or RouterConfig()

    def plot(self, polygon: ConvexPolygon, start: Point | None = None, goal: Point | None = None, path: list[Point] | None = None, save_path: str | None = None):
        """Строит график сцены"""
        size = self.config.figure_size
        fig, ax = plt.subplots(figsize=(size, size))

        ax.set_aspect("equal", adjustable="box")
        ax.grid(True, linestyle=":", linewidth=0.5, alpha=0.6)
        draw_scene(ax, polygon, start, goal, path, self.LABELS, self.config.plot_margin)

        if save_path:
            fig.savefig(save_path, dpi=self.config.dpi, bbox_inches="tight")
            plt.close(fig)
        else:
            plt.show()
        return fig
