from __future__ import annotations

from colplot_plot.figure import Figure, FigureStyle


CM_PER_INCH = 2.54
DEFAULT_DPI = 96.0
DEFAULT_ASPECT_RATIO = 4.0 / 3.0


def figure(
    width: int | None = None,
    height: int | None = None,
    *,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    style: FigureStyle | None = None,
) -> Figure:
    if aspect_ratio <= 0:
        raise ValueError("aspect_ratio must be > 0")
    if width is None and height is None:
        width, height = 640, max(1, int(round(640 / aspect_ratio)))
    elif width is None and height is not None:
        if height <= 0:
            raise ValueError("height must be > 0")
        width = max(1, int(round(height * aspect_ratio)))
    elif width is not None and height is None:
        if width <= 0:
            raise ValueError("width must be > 0")
        height = max(1, int(round(width / aspect_ratio)))
    assert width is not None and height is not None
    return Figure(width=width, height=height, style=style or FigureStyle())


def cm_to_px(length_cm: float, dpi: float = DEFAULT_DPI) -> int:
    if length_cm <= 0:
        raise ValueError("length must be > 0")
    if dpi <= 0:
        raise ValueError("dpi must be > 0")
    return max(1, int(round(length_cm / CM_PER_INCH * dpi)))


def figure_cm(
    x_length_cm: float,
    y_length_cm: float,
    *,
    dpi: float = DEFAULT_DPI,
    style: FigureStyle | None = None,
) -> Figure:
    """Size a figure from physical lengths, e.g. 10 x 10 cm at 96 dpi is 378 x 378 px."""
    return figure(cm_to_px(x_length_cm, dpi), cm_to_px(y_length_cm, dpi), style=style)
