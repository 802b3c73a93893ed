"""
Per-tick Navier-Stokes update on a Grid (stable-fluids scheme).
Velocity: buoyancy, vorticity confinement, diffuse, project, advect, project.
Density: diffuse, advect, decay. Every pass reads and writes the Grid's six fields in place.

Flat fields are reshaped to (height+2, width+2) views, indexed [y, x]. Spacing is normalized
by max(width, height) in both projection and advection.
"""

import numpy as np

from fluid.constants import BND_SCALAR, BND_U, BND_V, CURL_EPSILON, ITERATIONS, VORTICITY_STRENGTH
from fluid.grid import Grid
from fluid.presets import FluidParameters


def wavefronts(width: int, height: int) -> list[tuple[np.ndarray, ...]]:
    """
    Interior cells grouped by x + y, ascending. Each entry is (cells, left, right, up, down)
    as flat indices. No two cells in one group are neighbors, so updating a group at once
    equals visiting it cell by cell in row-major order.
    """
    stride = width + 2
    xs, ys = np.meshgrid(np.arange(1, width + 1), np.arange(1, height + 1))
    xs, ys = xs.ravel(), ys.ravel()
    keys = xs + ys
    flat = (xs + ys * stride).astype(np.intp)
    fronts = []
    for k in range(2, width + height + 1):
        cells = flat[keys == k]
        fronts.append((cells, cells - 1, cells + 1, cells - stride, cells + stride))
    return fronts


def set_bnd(b: int, x: np.ndarray, width: int, height: int) -> None:
    """Mirror interior into the halo. BND_U flips sign on left/right walls, BND_V on top/bottom."""
    N, M = width, height
    X = x.reshape(M + 2, N + 2)
    X[1 : M + 1, 0] = -X[1 : M + 1, 1] if b == BND_U else X[1 : M + 1, 1]
    X[1 : M + 1, N + 1] = -X[1 : M + 1, N] if b == BND_U else X[1 : M + 1, N]
    X[0, 1 : N + 1] = -X[1, 1 : N + 1] if b == BND_V else X[1, 1 : N + 1]
    X[M + 1, 1 : N + 1] = -X[M, 1 : N + 1] if b == BND_V else X[M, 1 : N + 1]
    # Corners after edges: mean of the two orthogonal edge neighbors.
    X[0, 0] = 0.5 * (X[0, 1] + X[1, 0])
    X[M + 1, 0] = 0.5 * (X[M + 1, 1] + X[M, 0])
    X[0, N + 1] = 0.5 * (X[0, N] + X[1, N + 1])
    X[M + 1, N + 1] = 0.5 * (X[M + 1, N] + X[M, N + 1])


def lin_solve(
    b: int,
    x: np.ndarray,
    x0: np.ndarray,
    a: float,
    c: float,
    width: int,
    height: int,
    fronts: list[tuple[np.ndarray, ...]],
    iterations: int = ITERATIONS,
) -> None:
    """Gauss-Seidel: x = (x0 + a * sum(4 neighbors)) / c, in place, boundaries once per sweep."""
    for _ in range(iterations):
        for cells, left, right, up, down in fronts:
            x[cells] = (x0[cells] + a * (x[right] + x[left] + x[down] + x[up])) / c
        set_bnd(b, x, width, height)


def diffuse(
    b: int,
    x: np.ndarray,
    x0: np.ndarray,
    diff: float,
    dt: float,
    width: int,
    height: int,
    fronts: list[tuple[np.ndarray, ...]],
    iterations: int = ITERATIONS,
) -> None:
    a = dt * diff * width * height
    lin_solve(b, x, x0, a, 1 + 4 * a, width, height, fronts, iterations)


def project(
    velx: np.ndarray,
    vely: np.ndarray,
    p: np.ndarray,
    div: np.ndarray,
    width: int,
    height: int,
    fronts: list[tuple[np.ndarray, ...]],
    iterations: int = ITERATIONS,
) -> None:
    """Remove divergence from (velx, vely). p and div are scratch and are overwritten."""
    h = 1.0 / max(width, height)
    shape = (height + 2, width + 2)
    U, V = velx.reshape(shape), vely.reshape(shape)
    P, D = p.reshape(shape), div.reshape(shape)

    D[1:-1, 1:-1] = -0.5 * h * (U[1:-1, 2:] - U[1:-1, :-2] + V[2:, 1:-1] - V[:-2, 1:-1])
    P[1:-1, 1:-1] = 0.0
    set_bnd(BND_SCALAR, div, width, height)
    set_bnd(BND_SCALAR, p, width, height)
    lin_solve(BND_SCALAR, p, div, 1, 4, width, height, fronts, iterations)

    U[1:-1, 1:-1] -= 0.5 * (P[1:-1, 2:] - P[1:-1, :-2]) / h
    V[1:-1, 1:-1] -= 0.5 * (P[2:, 1:-1] - P[:-2, 1:-1]) / h
    set_bnd(BND_U, velx, width, height)
    set_bnd(BND_V, vely, width, height)


def advect(
    b: int,
    d: np.ndarray,
    d0: np.ndarray,
    velx: np.ndarray,
    vely: np.ndarray,
    dt: float,
    width: int,
    height: int,
) -> None:
    """Semi-Lagrangian: backtrack each interior cell through (velx, vely), bilinear sample of d0."""
    N, M = width, height
    shape = (M + 2, N + 2)
    D, D0 = d.reshape(shape), d0.reshape(shape)
    U, V = velx.reshape(shape), vely.reshape(shape)
    dt0 = dt * max(N, M)

    I = np.arange(1, N + 1, dtype=np.float64)[np.newaxis, :]
    J = np.arange(1, M + 1, dtype=np.float64)[:, np.newaxis]
    x = np.clip(I - dt0 * U[1:-1, 1:-1].astype(np.float64), 0.5, N + 0.5)
    y = np.clip(J - dt0 * V[1:-1, 1:-1].astype(np.float64), 0.5, M + 0.5)
    i0 = np.floor(x).astype(np.intp)
    j0 = np.floor(y).astype(np.intp)
    i1 = i0 + 1
    j1 = j0 + 1
    s1 = x - i0
    s0 = 1.0 - s1
    t1 = y - j0
    t0 = 1.0 - t1

    D[1:-1, 1:-1] = s0 * (t0 * D0[j0, i0] + t1 * D0[j1, i0]) + s1 * (t0 * D0[j0, i1] + t1 * D0[j1, i1])
    set_bnd(b, d, width, height)


def add_buoyancy(grid: Grid, dt: float, buoyancy: float) -> None:
    """v -= density * buoyancy * dt where density > 0 (y grows downward, so positive buoyancy rises)."""
    mask = grid.density > 0
    grid.v[mask] -= grid.density[mask] * buoyancy * dt


def add_vorticity_confinement(grid: Grid, dt: float, strength: float) -> None:
    """Push velocity perpendicular to grad|curl| so small swirls survive advection and diffusion."""
    U, V = grid.view(grid.u), grid.view(grid.v)
    curl = np.zeros_like(U)
    curl[1:-1, 1:-1] = (V[1:-1, 2:] - V[1:-1, :-2]) * 0.5 - (U[2:, 1:-1] - U[:-2, 1:-1]) * 0.5

    mag = np.abs(curl)
    dcx = (mag[1:-1, 2:] - mag[1:-1, :-2]) * 0.5
    dcy = (mag[2:, 1:-1] - mag[:-2, 1:-1]) * 0.5
    length = np.sqrt(dcx * dcx + dcy * dcy) + CURL_EPSILON
    nx = dcx / length
    ny = dcy / length

    force = strength * curl[1:-1, 1:-1]
    U[1:-1, 1:-1] += ny * force * dt
    V[1:-1, 1:-1] += -nx * force * dt


def decay(grid: Grid, rate: float) -> None:
    # Per call, not per unit time: dt is deliberately not applied.
    grid.density *= 1 - rate


class FluidSolver:
    """Holds the grid and tunables; all simulation state lives in the grid."""

    def __init__(
        self,
        grid: Grid,
        vorticity_strength: float = VORTICITY_STRENGTH,
        iterations: int = ITERATIONS,
    ) -> None:
        self.grid = grid
        self.vorticity_strength = vorticity_strength
        self.iterations = iterations
        self._fronts = wavefronts(grid.width, grid.height)

    def step(self, dt: float, fluid: FluidParameters) -> None:
        """One tick. Stage order matters; see module docstring."""
        g = self.grid
        w, h = g.width, g.height
        fronts, it = self._fronts, self.iterations

        # Velocity
        add_buoyancy(g, dt, fluid.buoyancy)
        if self.vorticity_strength:
            add_vorticity_confinement(g, dt, self.vorticity_strength)
        diffuse(BND_U, g.u_prev, g.u, fluid.viscosity, dt, w, h, fronts, it)
        diffuse(BND_V, g.v_prev, g.v, fluid.viscosity, dt, w, h, fronts, it)
        project(g.u_prev, g.v_prev, g.u, g.v, w, h, fronts, it)
        advect(BND_U, g.u, g.u_prev, g.u_prev, g.v_prev, dt, w, h)
        advect(BND_V, g.v, g.v_prev, g.u_prev, g.v_prev, dt, w, h)
        project(g.u, g.v, g.u_prev, g.v_prev, w, h, fronts, it)

        # Density
        diffuse(BND_SCALAR, g.dens_prev, g.density, fluid.diffusion, dt, w, h, fronts, it)
        advect(BND_SCALAR, g.density, g.dens_prev, g.u, g.v, dt, w, h)
        decay(g, fluid.decay)
