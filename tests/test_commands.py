import random

import numpy as np
import pytest

from fluid.commands import AddSource, Clear, Quit, Simulation, SwitchFluid
from fluid.grid import Grid
from fluid.presets import FIRE, SMOKE, WATER


@pytest.fixture
def sim():
    return Simulation(Grid(10, 10), rng=random.Random(0))


def test_starts_with_first_preset(sim):
    assert sim.fluid is WATER
    assert sim.running
    assert sim.tick_count == 0


def test_add_source_injects_density_and_impulse(sim):
    sim.apply(AddSource(4, 6))
    density, u, v = sim.grid.get_cell(4, 6)
    assert density == 100.0
    assert -2.5 <= u <= 2.5
    assert -2.5 <= v <= 2.5


def test_add_source_outside_grid_is_clamped(sim):
    sim.apply(AddSource(-10, 500))
    assert sim.grid.density[sim.grid.IX(0, 11)] == 100.0


def test_switch_fluid_keeps_grid(sim):
    sim.apply(AddSource(5, 5))
    before = sim.grid.density.copy()
    sim.apply(SwitchFluid(2))
    assert sim.fluid is FIRE
    np.testing.assert_array_equal(sim.grid.density, before)


def test_switch_fluid_out_of_range_keeps_selection(sim):
    sim.apply(SwitchFluid(1))
    with pytest.raises(IndexError):
        sim.apply(SwitchFluid(3))
    assert sim.fluid is SMOKE


def test_clear_zeroes_grid(sim):
    sim.apply(AddSource(5, 5))
    sim.tick(0.1)
    sim.apply(Clear())
    assert sim.grid.total_density() == 0.0
    assert not sim.grid.u.any()


def test_quit_stops(sim):
    sim.apply(Quit())
    assert not sim.running


def test_tick_steps_with_active_fluid(sim):
    sim.apply(AddSource(5, 5))
    total = sim.grid.total_density()
    sim.tick(0.1)
    sim.tick(0.1)
    assert sim.tick_count == 2
    assert sim.grid.total_density() != total


def test_unknown_command(sim):
    with pytest.raises(TypeError):
        sim.apply("spill")
