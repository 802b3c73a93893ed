"""
App shell: display and main loop. Simulation is tick-driven from elapsed time and
tick_rate (independent of frame rate). Pygame events become fluid commands, which are
applied between ticks; the density field is drawn every frame, in color or as ASCII text.
Settings chosen in the session are saved on quit.
"""

import logging

import pygame

from fluid import FluidParameters, FluidSolver, Grid, PRESETS
from fluid.commands import AddSource, Clear, Command, Quit, Simulation, SwitchFluid
from ui.ascii_view import draw_ascii
from ui.grid_view import cell_at, draw_density
from ui.panel import ParamPanel
import config

logger = logging.getLogger(__name__)

TITLE = "Fluid"
PANEL_WIDTH = 320
BACKGROUND = (0, 0, 0)
ASCII_FONT_SIZE = 14

KEY_COMMANDS = {
    pygame.K_c: Clear(),
    pygame.K_1: SwitchFluid(0),
    pygame.K_2: SwitchFluid(1),
    pygame.K_3: SwitchFluid(2),
    pygame.K_q: Quit(),
    pygame.K_ESCAPE: Quit(),
}


def translate_event(event: pygame.event.Event, grid_rect: pygame.Rect, grid: Grid) -> Command | None:
    """Map one pygame event to a command, or None if it is not a simulation command."""
    if event.type == pygame.QUIT:
        return Quit()
    if event.type == pygame.KEYDOWN:
        return KEY_COMMANDS.get(event.key)
    dragging = event.type == pygame.MOUSEMOTION and event.buttons[0]
    pressed = event.type == pygame.MOUSEBUTTONDOWN and event.button == 1
    if dragging or pressed:
        cell = cell_at(grid_rect, grid, event.pos)
        if cell is not None:
            return AddSource(*cell)
    return None


def handle_view_key(event: pygame.event.Event, panel: ParamPanel) -> bool:
    """Space pauses, A toggles the ASCII view. True if the key was used."""
    if event.type != pygame.KEYDOWN:
        return False
    if event.key == pygame.K_SPACE:
        panel.toggle_pause()
        return True
    if event.key == pygame.K_a:
        panel.toggle_view()
        return True
    return False


def draw_grid(
    surface: pygame.Surface,
    grid_rect: pygame.Rect,
    grid: Grid,
    fluid: FluidParameters,
    params: dict,
    ascii_font: pygame.font.Font,
) -> None:
    if params["view_mode"] == "ascii":
        draw_ascii(surface, grid_rect, grid, ascii_font, fluid.color)
    else:
        draw_density(surface, grid_rect, grid, fluid, render_scale=params["render_scale"])


def session_settings(cfg: dict, fluid_index: int, params: dict) -> dict:
    """cfg with the fluid and panel choices of this session, ready for config.save_config."""
    out = dict(cfg)
    out["fluid_index"] = fluid_index
    for key in ("tick_rate", "render_scale", "view_mode"):
        out[key] = params[key]
    return out


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    cfg = config.load_config()
    nx, ny = cfg["world"]["nx"], cfg["world"]["ny"]
    cell_px = cfg["cell_px"]
    dt = cfg["dt"]

    grid = Grid(nx, ny)
    solver = FluidSolver(grid, vorticity_strength=cfg["vorticity_strength"], iterations=cfg["iterations"])
    sim = Simulation(grid, solver, PRESETS, source_amount=cfg["source_amount"], impulse=cfg["impulse"])
    fluid_index = cfg["fluid_index"]
    if 0 <= fluid_index < len(PRESETS):
        sim.apply(SwitchFluid(fluid_index))
    else:
        logger.warning("fluid_index %s out of range; using %s", fluid_index, sim.fluid.name)

    grid_w, grid_h = nx * cell_px, ny * cell_px
    width, height = grid_w + PANEL_WIDTH, max(grid_h, 320)

    pygame.init()
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()
    ascii_font = pygame.font.SysFont("monospace", ASCII_FONT_SIZE)

    grid_rect = pygame.Rect(0, 0, grid_w, grid_h)
    panel_rect = pygame.Rect(grid_w, 0, PANEL_WIDTH, height)
    pending: list[Command] = []
    panel = ParamPanel(
        panel_rect,
        {"tick_rate": cfg["tick_rate"], "render_scale": cfg["render_scale"], "view_mode": cfg["view_mode"]},
        PRESETS,
        on_command=pending.append,
    )
    logger.info("grid %dx%d, dt %.3f, fluid %s", nx, ny, dt, sim.fluid.name)

    tick_accum = 0.0
    while sim.running:
        dt_ms = clock.tick(60)
        dt_s = dt_ms / 1000.0

        for event in pygame.event.get():
            if panel.handle_event(event):
                continue
            if handle_view_key(event, panel):
                continue
            command = translate_event(event, grid_rect, grid)
            if command is not None:
                pending.append(command)

        # Commands land between ticks, never inside a step
        for command in pending:
            sim.apply(command)
        pending.clear()
        if not sim.running:
            break

        params = panel.get_params()
        if not params["paused"]:
            tick_rate = max(1, min(60, params["tick_rate"]))
            tick_accum += dt_s * tick_rate
            # Cap ticks per frame so we never freeze when tick rate exceeds what we can do
            max_ticks_per_frame = max(4, tick_rate // 10)
            num_ticks = min(int(tick_accum), max_ticks_per_frame)
            tick_accum -= num_ticks
            tick_accum = min(tick_accum, max_ticks_per_frame)  # prevent unbounded backlog
            for _ in range(num_ticks):
                sim.tick(dt)

        screen.fill(BACKGROUND)
        draw_grid(screen, grid_rect, grid, sim.fluid, params, ascii_font)
        panel.draw(screen, sim.fluid_index, tick_count=sim.tick_count, total_density=grid.total_density())
        pygame.display.flip()

    logger.info("stopped after %d ticks", sim.tick_count)
    try:
        config.save_config(session_settings(cfg, sim.fluid_index, panel.get_params()))
    except OSError as exc:
        logger.warning("could not save settings (%s)", exc)
    pygame.quit()


if __name__ == "__main__":
    run()
