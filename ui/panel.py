"""Right panel: fluid preset buttons, pause/clear/view toggle, tick rate and render scale sliders, status lines."""

import pygame
from typing import Callable

from fluid.commands import Clear, Command, SwitchFluid
from fluid.presets import FluidParameters

FONT_SIZE = 16
LABEL_COLOR = (200, 200, 200)
DIM_COLOR = (140, 140, 140)
SLIDER_COLOR = (100, 100, 100)
KNOB_COLOR = (180, 180, 180)
SLIDER_H = 12
KNOB_W = 8
BUTTON_COLOR = (60, 60, 60)
BUTTON_HOVER = (80, 80, 80)

VIEW_MODES = ("color", "ascii")
VIEW_MODE_LABELS = {"color": "Color", "ascii": "ASCII"}

HELP_LINES = (
    "Drag on the grid to add fluid",
    "1/2/3 switch fluid, C clear",
    "A toggle ASCII view",
    "Space pause, Q quit",
)


class ParamPanel:
    """State: params dict (tick_rate, render_scale, paused, view_mode). Preset and clear clicks become commands."""

    def __init__(
        self,
        rect: pygame.Rect,
        initial: dict,
        presets: tuple[FluidParameters, ...],
        on_command: Callable[[Command], None],
    ) -> None:
        self.rect = rect
        self.params = {
            "tick_rate": initial.get("tick_rate", 30),
            "render_scale": initial.get("render_scale", 1),
            "paused": initial.get("paused", False),
            "view_mode": initial.get("view_mode", VIEW_MODES[0]),
        }
        if self.params["view_mode"] not in VIEW_MODES:
            self.params["view_mode"] = VIEW_MODES[0]
        self.presets = presets
        self.on_command = on_command
        self._font = None
        self._slider_rects: dict = {}
        self._button_rects: dict = {}
        self._dragging: str | None = None

    def _ensure_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, FONT_SIZE)
        return self._font

    def get_params(self) -> dict:
        return self.params.copy()

    def toggle_pause(self) -> None:
        self.params["paused"] = not self.params["paused"]

    def toggle_view(self) -> None:
        """Cycle the grid view between color and ASCII."""
        i = VIEW_MODES.index(self.params["view_mode"])
        self.params["view_mode"] = VIEW_MODES[(i + 1) % len(VIEW_MODES)]

    def draw(
        self,
        surface: pygame.Surface,
        fluid_index: int,
        tick_count: int = 0,
        total_density: float = 0.0,
    ) -> None:
        font = self._ensure_font()
        x, y = self.rect.x + 8, self.rect.y + 6
        line_h = 18
        gap = 4
        self._slider_rects.clear()
        self._button_rects.clear()
        mouse = pygame.mouse.get_pos()

        slider_w = self.rect.width - 16 - 44  # leave 44px for value text
        btn_h = 26

        fluid = self.presets[fluid_index]
        for text in (f"Tick: {tick_count}", f"Fluid: {fluid.name}", f"Total density: {total_density:.1f}"):
            surface.blit(font.render(text, True, LABEL_COLOR), (x, y))
            y += line_h
        y += gap

        # One button per preset, tinted with its display color when active
        label = font.render("Fluid", True, LABEL_COLOR)
        surface.blit(label, (x, y))
        y += line_h
        bx = x
        for i, preset in enumerate(self.presets):
            w = font.size(preset.name)[0] + 16
            r = pygame.Rect(bx, y, w, btn_h)
            if i == fluid_index:
                color = preset.color
            else:
                color = BUTTON_HOVER if r.collidepoint(mouse) else BUTTON_COLOR
            pygame.draw.rect(surface, color, r)
            surface.blit(font.render(preset.name, True, LABEL_COLOR), (r.x + 8, r.y + 6))
            self._button_rects[f"fluid_{i}"] = r
            bx = r.right + 6
        y += btn_h + gap * 2

        # Pause / Resume, Clear and the view toggle in one row
        pause_text = "Resume" if self.params["paused"] else "Pause"
        view_text = "View: " + VIEW_MODE_LABELS[self.params["view_mode"]]
        bx = x
        for key, text, w in (("pause", pause_text, 70), ("clear", "Clear", 60), ("view", view_text, 90)):
            r = pygame.Rect(bx, y, w, btn_h)
            pygame.draw.rect(surface, BUTTON_HOVER if r.collidepoint(mouse) else BUTTON_COLOR, r)
            surface.blit(font.render(text, True, LABEL_COLOR), (r.x + 6, r.y + 6))
            self._button_rects[key] = r
            bx = r.right + 4
        y += btn_h + gap * 2

        y = self._slider(surface, font, x, y, slider_w, "tick_rate", "Tick rate (1-60)", 1, 60)
        y = self._slider(surface, font, x, y, slider_w, "render_scale", "Render scale", 1, 4)
        y += gap * 2

        for text in HELP_LINES:
            surface.blit(font.render(text, True, DIM_COLOR), (x, y))
            y += line_h

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True if event was consumed."""
        if event.type == pygame.MOUSEBUTTONDOWN:
            for key, (slider_rect, lo, hi) in self._slider_rects.items():
                if slider_rect.collidepoint(event.pos):
                    self._dragging = key
                    self._set_slider_value(key, event.pos, slider_rect, lo, hi)
                    return True
            for key, btn_rect in self._button_rects.items():
                if btn_rect.collidepoint(event.pos):
                    if key == "pause":
                        self.toggle_pause()
                    elif key == "clear":
                        self.on_command(Clear())
                    elif key == "view":
                        self.toggle_view()
                    elif key.startswith("fluid_"):
                        self.on_command(SwitchFluid(int(key[len("fluid_"):])))
                    return True
            return False
        if event.type == pygame.MOUSEBUTTONUP:
            consumed = self._dragging is not None
            self._dragging = None
            return consumed
        if event.type == pygame.MOUSEMOTION and self._dragging is not None:
            sr, lo, hi = self._slider_rects[self._dragging]
            self._set_slider_value(self._dragging, event.pos, sr, lo, hi)
            return True
        return False

    def _set_slider_value(self, key: str, pos: tuple[int, int], slider_rect: pygame.Rect, lo: int, hi: int) -> None:
        t = (pos[0] - slider_rect.x - KNOB_W // 2) / max(1, slider_rect.width - KNOB_W)
        self.params[key] = lo + round(max(0.0, min(1.0, t)) * (hi - lo))

    def _slider(
        self, surface: pygame.Surface, font: pygame.font.Font, x: int, y: int, w: int,
        key: str, label: str, lo: int, hi: int,
    ) -> int:
        """Label, track, knob and value text for params[key]; returns the y below it."""
        surface.blit(font.render(label, True, LABEL_COLOR), (x, y))
        y += 18
        track = pygame.Rect(x, y, w, SLIDER_H)
        pygame.draw.rect(surface, SLIDER_COLOR, track)
        value = self.params[key]
        knob_x = x + int((value - lo) / max(1, hi - lo) * (w - KNOB_W))
        pygame.draw.rect(surface, KNOB_COLOR, (knob_x, y, KNOB_W, SLIDER_H))
        surface.blit(font.render(str(value), True, LABEL_COLOR), (track.right + 4, y))
        self._slider_rects[key] = (track, lo, hi)
        return y + SLIDER_H + 4
