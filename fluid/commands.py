"""Discrete user commands and the driver that applies them to a grid between ticks."""

import logging
import random
from typing import NamedTuple, Union

from fluid.grid import Grid
from fluid.presets import PRESETS, FluidParameters
from fluid.solver import FluidSolver

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_AMOUNT = 100.0
DEFAULT_IMPULSE = 5.0  # velocity impulse per source, each axis uniform in [-impulse/2, impulse/2)


class AddSource(NamedTuple):
    x: int
    y: int


class Clear(NamedTuple):
    pass


class SwitchFluid(NamedTuple):
    index: int


class Quit(NamedTuple):
    pass


Command = Union[AddSource, Clear, SwitchFluid, Quit]


class Simulation:
    """Grid + solver + active preset. Commands must be applied between ticks, never during step()."""

    def __init__(
        self,
        grid: Grid,
        solver: FluidSolver | None = None,
        presets: tuple[FluidParameters, ...] = PRESETS,
        source_amount: float = DEFAULT_SOURCE_AMOUNT,
        impulse: float = DEFAULT_IMPULSE,
        rng: random.Random | None = None,
    ) -> None:
        self.grid = grid
        self.solver = solver if solver is not None else FluidSolver(grid)
        self.presets = presets
        self.fluid_index = 0
        self.source_amount = source_amount
        self.impulse = impulse
        self.rng = rng if rng is not None else random.Random()
        self.tick_count = 0
        self.running = True

    @property
    def fluid(self) -> FluidParameters:
        return self.presets[self.fluid_index]

    def apply(self, command: Command) -> None:
        if isinstance(command, AddSource):
            self.grid.add_density(command.x, command.y, self.source_amount)
            dx = (self.rng.random() - 0.5) * self.impulse
            dy = (self.rng.random() - 0.5) * self.impulse
            self.grid.add_velocity(command.x, command.y, dx, dy)
        elif isinstance(command, Clear):
            self.grid.clear()
        elif isinstance(command, SwitchFluid):
            if not 0 <= command.index < len(self.presets):
                raise IndexError(f"no fluid preset at index {command.index}")
            self.fluid_index = command.index
            logger.debug("switched fluid to %s", self.fluid.name)
        elif isinstance(command, Quit):
            self.running = False
        else:
            raise TypeError(f"unknown command {command!r}")

    def tick(self, dt: float) -> None:
        self.solver.step(dt, self.fluid)
        self.tick_count += 1
