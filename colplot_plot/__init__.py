from colplot_plot.api import cm_to_px, figure, figure_cm
from colplot_plot.errors import PlotDataError
from colplot_plot.figure import Axes, Figure, FigureStyle, LegendEntry

__all__ = [
    "Axes",
    "Figure",
    "FigureStyle",
    "LegendEntry",
    "PlotDataError",
    "cm_to_px",
    "figure",
    "figure_cm",
]
