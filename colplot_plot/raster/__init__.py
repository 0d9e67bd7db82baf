from .canvas import blend_points, draw_hline, draw_vline, fill_rect, new_canvas, save_png, stroke_rect, to_image
from .draw_lines import draw_polyline
from .draw_markers import draw_markers
from .draw_text import draw_text, text_size

__all__ = [
    "blend_points",
    "draw_hline",
    "draw_markers",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "fill_rect",
    "new_canvas",
    "save_png",
    "stroke_rect",
    "text_size",
    "to_image",
]
