import pygame
import pytest

import app
from app import draw_grid, handle_view_key, session_settings, translate_event
from fluid import PRESETS, WATER
from fluid.commands import AddSource, Clear, Quit, SwitchFluid
from fluid.grid import Grid
from ui import ascii_view
from ui.grid_view import cell_at
from ui.panel import ParamPanel

RECT = pygame.Rect(0, 0, 100, 50)


@pytest.fixture
def panel():
    return ParamPanel(pygame.Rect(100, 0, 320, 400), {}, PRESETS, on_command=lambda c: None)


def test_cell_at_maps_pixels_to_interior():
    grid = Grid(10, 5)
    assert cell_at(RECT, grid, (0, 0)) == (1, 1)
    assert cell_at(RECT, grid, (99, 49)) == (10, 5)
    assert cell_at(RECT, grid, (55, 25)) == (6, 3)
    assert cell_at(RECT, grid, (150, 10)) is None


def test_keys_become_commands():
    grid = Grid(10, 5)
    key = lambda k: pygame.event.Event(pygame.KEYDOWN, key=k)
    assert type(translate_event(key(pygame.K_c), RECT, grid)) is Clear
    assert translate_event(key(pygame.K_2), RECT, grid) == SwitchFluid(1)
    assert type(translate_event(key(pygame.K_q), RECT, grid)) is Quit
    assert translate_event(key(pygame.K_x), RECT, grid) is None
    assert type(translate_event(pygame.event.Event(pygame.QUIT), RECT, grid)) is Quit


def test_mouse_adds_source():
    grid = Grid(10, 5)
    press = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(55, 25), button=1)
    drag = pygame.event.Event(pygame.MOUSEMOTION, pos=(5, 5), rel=(1, 0), buttons=(1, 0, 0))
    hover = pygame.event.Event(pygame.MOUSEMOTION, pos=(5, 5), rel=(1, 0), buttons=(0, 0, 0))
    assert translate_event(press, RECT, grid) == AddSource(6, 3)
    assert translate_event(drag, RECT, grid) == AddSource(1, 1)
    assert translate_event(hover, RECT, grid) is None


def test_a_key_toggles_ascii_view(panel):
    key = lambda k: pygame.event.Event(pygame.KEYDOWN, key=k)
    assert panel.get_params()["view_mode"] == "color"
    assert handle_view_key(key(pygame.K_a), panel)
    assert panel.get_params()["view_mode"] == "ascii"
    assert handle_view_key(key(pygame.K_a), panel)
    assert panel.get_params()["view_mode"] == "color"


def test_space_pauses_and_other_keys_pass_through(panel):
    assert handle_view_key(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE), panel)
    assert panel.get_params()["paused"]
    assert not handle_view_key(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_c), panel)
    assert not handle_view_key(pygame.event.Event(pygame.QUIT), panel)


def test_ascii_view_draws_rendered_text(panel, monkeypatch):
    pygame.font.init()
    rendered = []
    real = ascii_view.render_to_string

    def spy(grid, *args):
        text = real(grid, *args)
        rendered.append(text)
        return text

    monkeypatch.setattr(ascii_view, "render_to_string", spy)
    grid = Grid(10, 5)
    grid.density[:] = 5.0
    surface = pygame.Surface(RECT.size)
    panel.toggle_view()
    draw_grid(surface, RECT, grid, WATER, panel.get_params(), pygame.font.Font(None, 14))
    assert len(rendered) == 1
    assert rendered[0].splitlines() == ["@" * 10] * 5
    assert pygame.surfarray.array3d(surface).any()


def test_color_view_uses_density_image(panel, monkeypatch):
    calls = []
    monkeypatch.setattr(app, "draw_ascii", lambda *a: calls.append("ascii"))
    monkeypatch.setattr(app, "draw_density", lambda *a, **kw: calls.append("color"))
    grid = Grid(10, 5)
    surface = pygame.Surface(RECT.size)
    draw_grid(surface, RECT, grid, WATER, panel.get_params(), None)
    panel.toggle_view()
    draw_grid(surface, RECT, grid, WATER, panel.get_params(), None)
    assert calls == ["color", "ascii"]


def test_session_settings_carry_choices():
    cfg = {"world": {"nx": 80, "ny": 40}, "tick_rate": 30, "fluid_index": 0, "dt": 0.1}
    params = {"tick_rate": 12, "render_scale": 3, "view_mode": "ascii", "paused": True}
    out = session_settings(cfg, 2, params)
    assert out["fluid_index"] == 2
    assert out["tick_rate"] == 12
    assert out["render_scale"] == 3
    assert out["view_mode"] == "ascii"
    assert "paused" not in out
    assert cfg["fluid_index"] == 0
