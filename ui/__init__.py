"""UI: density view, ASCII renderer and control panel."""

from ui.grid_view import draw_density, cell_at
from ui.panel import ParamPanel
from ui.colors import density_to_rgb
from ui.ascii_view import draw_ascii, render_to_string

__all__ = ["draw_density", "cell_at", "ParamPanel", "density_to_rgb", "draw_ascii", "render_to_string"]
