"""Solver constants. Boundary tags select how set_bnd mirrors a field into the halo."""

# Field kinds for boundary handling: scalar copies, velocity components flip sign at their walls.
BND_SCALAR = 0
BND_U = 1
BND_V = 2

# Gauss-Seidel sweeps per linear solve (diffusion and pressure). 20 is faster, 40 is steadier.
ITERATIONS = 40
# Vorticity confinement force scale; 0 disables the stage.
VORTICITY_STRENGTH = 0.3
# Added to |grad |curl|| before normalizing.
CURL_EPSILON = 1e-5

DEFAULT_NX, DEFAULT_NY = 80, 40
DEFAULT_DT = 0.1
