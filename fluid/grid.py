"""Padded 2D lattice of fluid fields. Interior is (width, height); one halo cell on every side."""

import logging
import numbers

import numpy as np

from fluid.constants import DEFAULT_NX, DEFAULT_NY

logger = logging.getLogger(__name__)

FIELDS = ("u", "v", "density", "u_prev", "v_prev", "dens_prev")


class Grid:
    """Six flat float32 fields of length (width+2)*(height+2). Arrays are mutated in place, never rebound."""

    __slots__ = ("width", "height", "size", "u", "v", "density", "u_prev", "v_prev", "dens_prev")

    def __init__(self, width: int = DEFAULT_NX, height: int = DEFAULT_NY) -> None:
        if (
            not isinstance(width, numbers.Integral)
            or not isinstance(height, numbers.Integral)
            or isinstance(width, bool)
            or isinstance(height, bool)
        ):
            raise ValueError(f"grid dimensions must be integers, got {width!r} x {height!r}")
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width} x {height}")
        self.width = int(width)
        self.height = int(height)
        self.size = (self.width + 2) * (self.height + 2)
        self.u = np.zeros(self.size, dtype=np.float32)
        self.v = np.zeros(self.size, dtype=np.float32)
        self.density = np.zeros(self.size, dtype=np.float32)
        self.u_prev = np.zeros(self.size, dtype=np.float32)
        self.v_prev = np.zeros(self.size, dtype=np.float32)
        self.dens_prev = np.zeros(self.size, dtype=np.float32)
        logger.debug("allocated grid %dx%d (%d cells per field)", self.width, self.height, self.size)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.width, self.height)

    def IX(self, x: int, y: int) -> int:
        """Linear offset of (x, y). Coordinates are clamped into the halo, so this never fails."""
        x = max(0, min(int(x), self.width + 1))
        y = max(0, min(int(y), self.height + 1))
        return x + y * (self.width + 2)

    def add_density(self, x: int, y: int, amount: float) -> None:
        self.density[self.IX(x, y)] += amount

    def add_velocity(self, x: int, y: int, dx: float, dy: float) -> None:
        i = self.IX(x, y)
        self.u[i] += dx
        self.v[i] += dy

    def clear(self) -> None:
        """Zero all six fields without reallocating."""
        for name in FIELDS:
            getattr(self, name).fill(0.0)
        logger.debug("cleared grid %dx%d", self.width, self.height)

    def view(self, field: np.ndarray) -> np.ndarray:
        """(height+2, width+2) view sharing memory with a flat field; index as [y, x]."""
        return field.reshape(self.height + 2, self.width + 2)

    def interior(self, field: np.ndarray) -> np.ndarray:
        """(height, width) view of the cells inside the halo."""
        return self.view(field)[1:-1, 1:-1]

    def get_cell(self, x: int, y: int) -> tuple[float, float, float]:
        """(density, u, v) at the clamped cell."""
        i = self.IX(x, y)
        return float(self.density[i]), float(self.u[i]), float(self.v[i])

    def total_density(self) -> float:
        return float(np.sum(self.density, dtype=np.float64))
