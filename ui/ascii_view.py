"""Text rendering of the density field, one character per interior cell, as a string or into the grid view."""

import math

import pygame

from fluid.grid import Grid

CHARS = " .:-=+*#%@"
MAX_DENSITY = 2.0  # density at or above this maps to the last character


def density_to_char(density: float, max_density: float = MAX_DENSITY) -> str:
    if not math.isfinite(density):
        return CHARS[-1] if density > 0 else CHARS[0]
    normalized = max(0.0, min(density, max_density)) / max_density
    return CHARS[int(math.floor(normalized * (len(CHARS) - 1)))]


def render_to_string(grid: Grid, max_density: float = MAX_DENSITY) -> str:
    """Rows y = 1..height, columns x = 1..width; every row ends with a newline."""
    rows = []
    for row in grid.interior(grid.density):
        rows.append("".join(density_to_char(float(d), max_density) for d in row))
    return "".join(r + "\n" for r in rows)


def draw_ascii(
    surface: pygame.Surface,
    rect: pygame.Rect,
    grid: Grid,
    font: pygame.font.Font,
    color: tuple[int, int, int],
    max_density: float = MAX_DENSITY,
) -> None:
    """Blit render_to_string(grid) into rect, one text line per grid row, stretched to fill the rect."""
    lines = render_to_string(grid, max_density).splitlines()
    line_h = font.get_linesize()
    text_w = max(1, max(font.size(line)[0] for line in lines))
    text = pygame.Surface((text_w, max(1, line_h * len(lines))))
    for i, line in enumerate(lines):
        text.blit(font.render(line, True, color), (0, i * line_h))
    surface.blit(pygame.transform.scale(text, (rect.width, rect.height)), rect.topleft)
