import pygame

from fluid import PRESETS
from fluid.commands import SwitchFluid
from ui.panel import VIEW_MODES, ParamPanel


def make_panel(initial=None, commands=None):
    sink = commands.append if commands is not None else (lambda c: None)
    return ParamPanel(pygame.Rect(0, 0, 320, 400), initial or {}, PRESETS, on_command=sink)


def click(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=1)


def test_initial_params():
    panel = make_panel({"tick_rate": 12, "view_mode": "ascii"})
    assert panel.get_params() == {"tick_rate": 12, "render_scale": 1, "paused": False, "view_mode": "ascii"}


def test_unknown_view_mode_falls_back():
    assert make_panel({"view_mode": "rainbow"}).get_params()["view_mode"] == VIEW_MODES[0]


def test_toggle_view_cycles():
    panel = make_panel()
    seen = []
    for _ in range(len(VIEW_MODES) + 1):
        seen.append(panel.get_params()["view_mode"])
        panel.toggle_view()
    assert seen == list(VIEW_MODES) + [VIEW_MODES[0]]


def test_buttons_toggle_view_and_switch_fluid():
    commands = []
    panel = make_panel(commands=commands)
    panel._button_rects["view"] = pygame.Rect(10, 10, 50, 20)
    panel._button_rects["fluid_2"] = pygame.Rect(10, 40, 50, 20)
    assert panel.handle_event(click((20, 15)))
    assert panel.get_params()["view_mode"] == "ascii"
    assert panel.handle_event(click((20, 45)))
    assert commands == [SwitchFluid(2)]
    assert not panel.handle_event(click((300, 300)))


def test_slider_drag_maps_track_to_range():
    panel = make_panel()
    track = pygame.Rect(0, 100, 208, 12)
    panel._slider_rects["tick_rate"] = (track, 1, 60)
    assert panel.handle_event(click((0, 105)))
    assert panel.get_params()["tick_rate"] == 1
    move = pygame.event.Event(pygame.MOUSEMOTION, pos=(500, 105), rel=(1, 0), buttons=(1, 0, 0))
    assert panel.handle_event(move)
    assert panel.get_params()["tick_rate"] == 60
    assert panel.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(500, 105), button=1))
    assert not panel.handle_event(move)
