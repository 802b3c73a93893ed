"""Fluid: padded grid, stable-fluids solver, presets and commands."""

from fluid.grid import Grid
from fluid.solver import FluidSolver
from fluid.presets import FluidParameters, PRESETS, WATER, SMOKE, FIRE, get_preset
from fluid.commands import AddSource, Clear, SwitchFluid, Quit, Simulation
from fluid.constants import DEFAULT_NX, DEFAULT_NY, DEFAULT_DT, ITERATIONS, VORTICITY_STRENGTH

__all__ = [
    "Grid", "FluidSolver", "FluidParameters", "PRESETS", "WATER", "SMOKE", "FIRE", "get_preset",
    "AddSource", "Clear", "SwitchFluid", "Quit", "Simulation",
    "DEFAULT_NX", "DEFAULT_NY", "DEFAULT_DT", "ITERATIONS", "VORTICITY_STRENGTH",
]
