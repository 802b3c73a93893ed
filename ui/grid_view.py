"""Left panel: interior density field with thin grey border; also maps mouse pixels to grid cells."""

import pygame
import numpy as np

from fluid.grid import Grid
from fluid.presets import FluidParameters
from ui.colors import density_to_rgb

BORDER_COLOR = (80, 80, 80)
BORDER_PX = 1


def _bilinear_upsample(arr: np.ndarray, scale: int) -> np.ndarray:
    """(rows, cols) -> (rows*scale, cols*scale); sample k lies at k / scale in cell units."""
    if scale <= 1:
        return arr
    rows, cols = arr.shape

    def axis(n: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        pos = np.minimum(np.arange(n * scale) / scale, n - 1)
        lo = pos.astype(np.intp)
        return lo, np.minimum(lo + 1, n - 1), pos - lo

    r0, r1, fr = axis(rows)
    c0, c1, fc = axis(cols)
    # interpolate along columns first, then blend the two rows
    top = arr[r0][:, c0] * (1 - fc) + arr[r0][:, c1] * fc
    bottom = arr[r1][:, c0] * (1 - fc) + arr[r1][:, c1] * fc
    out = top * (1 - fr[:, np.newaxis]) + bottom * fr[:, np.newaxis]
    return out.astype(arr.dtype)


def _rgb_to_surface(rgb: np.ndarray) -> pygame.Surface:
    H, W = rgb.shape[0], rgb.shape[1]
    # pygame: size (width, height); rgb is (H, W, 3) row-major
    data = np.ascontiguousarray(rgb).tobytes()
    try:
        return pygame.image.frombytes(data, (W, H), "RGB")
    except AttributeError:
        return pygame.image.fromstring(data, (W, H), "RGB")


def cell_at(rect: pygame.Rect, grid: Grid, pos: tuple[int, int]) -> tuple[int, int] | None:
    """Interior grid cell (1-based x, y) under a pixel, or None outside rect."""
    if not rect.collidepoint(pos):
        return None
    x = 1 + (pos[0] - rect.x) * grid.width // max(1, rect.width)
    y = 1 + (pos[1] - rect.y) * grid.height // max(1, rect.height)
    return min(x, grid.width), min(y, grid.height)


def draw_density(
    surface: pygame.Surface,
    grid_rect: pygame.Rect,
    grid: Grid,
    fluid: FluidParameters,
    render_scale: int = 1,
    max_density: float | None = None,
) -> None:
    """Draw the interior density into grid_rect. render_scale 2+ = bilinear upsample before coloring,
    then smooth-scale to the rect; 1 = one block per cell."""
    density = grid.interior(grid.density)
    scale = max(1, min(4, render_scale))
    if scale == 1:
        img = _rgb_to_surface(density_to_rgb(density, fluid.color, max_density))
        surface.blit(pygame.transform.scale(img, (grid_rect.width, grid_rect.height)), grid_rect.topleft)
    else:
        hr = _bilinear_upsample(density.astype(np.float64), scale)
        img = _rgb_to_surface(density_to_rgb(hr, fluid.color, max_density))
        surface.blit(pygame.transform.smoothscale(img, (grid_rect.width, grid_rect.height)), grid_rect.topleft)
    pygame.draw.rect(surface, BORDER_COLOR, grid_rect, BORDER_PX)
