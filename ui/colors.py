"""
Display-only mapping from density to RGB. Intensity runs black -> fluid color -> white,
so thin density reads as the fluid's tint and saturated density glows.
With no max_density, intensity is normalized to the current field maximum so small amounts stay visible.
"""

import numpy as np

# Position of the pure fluid color on the 0-1 ramp; above it blends toward white.
COLOR_STOP = 0.7
_RAMP_T = np.array([0.0, COLOR_STOP, 1.0], dtype=np.float64)


def _ramp(t: np.ndarray, stops: np.ndarray) -> np.ndarray:
    """Piecewise-linear RGB along _RAMP_T, one np.interp per channel. t (n,), returns (n, 3)."""
    return np.stack([np.interp(t, _RAMP_T, stops[:, c]) for c in range(3)], axis=-1)


def fluid_stops(color: tuple[int, int, int]) -> np.ndarray:
    """Black, fluid color, white as 0-1 RGB stops."""
    c = np.asarray(color, dtype=np.float64) / 255.0
    return np.array([[0.0, 0.0, 0.0], c, [1.0, 1.0, 1.0]], dtype=np.float64)


def density_intensity(density: np.ndarray, max_density: float | None = None) -> np.ndarray:
    """0-1 intensity. Negative density (numerical undershoot) shows as empty."""
    d = np.asarray(density, dtype=np.float64)
    if max_density is None:
        max_density = float(np.max(d)) if d.size else 0.0
    if max_density <= 1e-12:
        return np.zeros_like(d)
    return np.clip(d / max_density, 0.0, 1.0)


def density_to_rgb(
    density: np.ndarray,
    color: tuple[int, int, int],
    max_density: float | None = None,
) -> np.ndarray:
    """(rows, cols) density -> (rows, cols, 3) uint8 RGB tinted by the fluid color."""
    rows, cols = density.shape
    t = density_intensity(density, max_density)
    rgb = _ramp(t.reshape(-1), fluid_stops(color)).reshape(rows, cols, 3)
    return (np.clip(rgb, 0, 1) * 255).astype(np.uint8)
