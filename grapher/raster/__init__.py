from .canvas import draw_hline, draw_pixel, draw_vline, fill_canvas, is_rgba_canvas, new_canvas
from .draw_lines import clip_segment, draw_polyline, draw_segment
from .draw_markers import fill_circle
from .draw_text import draw_text, text_size

__all__ = [
    "clip_segment",
    "draw_hline",
    "draw_pixel",
    "draw_polyline",
    "draw_segment",
    "draw_text",
    "draw_vline",
    "fill_canvas",
    "fill_circle",
    "is_rgba_canvas",
    "new_canvas",
    "text_size",
]
