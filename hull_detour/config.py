class RouterConfig:
    def __init__(
        self,
        # Ввод/вывод сценария
        input_path: str = "data/input.txt",
        output_path: str = "data/output.txt",
        path_separator: str = " -> ",
        case_prefix: str = "Case #{number}: ",
        unclosed_ring_message: str = "The polygon ring is not closed.",
        # Отрисовка
        plot_margin: float = 1.0,  # отступ вокруг многоугольника и точек
        figure_size: float = 8.0,
        dpi: int = 150,
        output_dir: str = "outputs",
        # Журналирование
        log_level: str = "WARNING",
    ):
        self.input_path = input_path
        self.output_path = output_path
        self.path_separator = path_separator
        self.case_prefix = case_prefix
        self.unclosed_ring_message = unclosed_ring_message
        self.plot_margin = plot_margin
        self.figure_size = figure_size
        self.dpi = dpi
        self.output_dir = output_dir
        self.log_level = log_level
