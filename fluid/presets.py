"""Fluid presets. Name and color are for display only; the solver reads the four coefficients."""

from typing import NamedTuple


class FluidParameters(NamedTuple):
    name: str
    viscosity: float
    diffusion: float
    decay: float  # fraction of density lost per step
    color: tuple[int, int, int]
    buoyancy: float  # > 0 rises, < 0 sinks


WATER = FluidParameters(
    name="Water",
    viscosity=0.00005,
    diffusion=0.00002,
    decay=0.0005,
    color=(40, 110, 255),
    buoyancy=-0.05,
)

SMOKE = FluidParameters(
    name="Smoke",
    viscosity=0.00001,
    diffusion=0.0002,
    decay=0.008,
    color=(170, 170, 170),
    buoyancy=1.2,
)

FIRE = FluidParameters(
    name="Fire",
    viscosity=0.00002,
    diffusion=0.0001,
    decay=0.02,
    color=(255, 70, 20),
    buoyancy=3.0,
)

PRESETS = (WATER, SMOKE, FIRE)


def get_preset(index: int) -> FluidParameters:
    """Preset by position in PRESETS. Negative or too-large indices raise IndexError."""
    if not 0 <= index < len(PRESETS):
        raise IndexError(f"no fluid preset at index {index} (have {len(PRESETS)})")
    return PRESETS[index]
