from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import pygame

from .assets import Color, get_text_surface


@dataclass(frozen=True)
class ButtonVisualStyle:
    base_color: Color
    text_color: tuple[int, int, int]
    radius: int
    border_color: Color | None = None
    border_width: int = 0


class Button:
    """Rectangular button; the style may follow the current theme."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        callback: Callable[[], None],
        text_getter: Callable[[], str] | None = None,
        *,
        style: ButtonVisualStyle | None = None,
        style_getter: Callable[[], ButtonVisualStyle] | None = None,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self._text = text
        self._callback = callback
        self._text_getter = text_getter
        self._style = style
        self._style_getter = style_getter

    def get_text(self) -> str:
        if self._text_getter is not None:
            return self._text_getter()
        return self._text

    def get_style(self) -> ButtonVisualStyle:
        if self._style_getter is not None:
            return self._style_getter()
        if self._style is None:
            raise ValueError("Button style must be provided")
        return self._style

    def contains(self, position: tuple[int, int]) -> bool:
        return self.rect.collidepoint(position)

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        style = self.get_style()
        button_surface = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(
            button_surface,
            style.base_color,
            button_surface.get_rect(),
            border_radius=style.radius,
        )
        if style.border_color is not None and style.border_width > 0:
            pygame.draw.rect(
                button_surface,
                style.border_color,
                button_surface.get_rect(),
                style.border_width,
                border_radius=style.radius,
            )
        surface.blit(button_surface, self.rect.topleft)
        text_surf = get_text_surface(font, self.get_text(), style.text_color)
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self._callback()
                return True
        return False


class Slider:
    """Horizontal slider snapping to ``step``; reports changes via ``on_change``."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        minimum: float,
        maximum: float,
        step: float,
        value_getter: Callable[[], float],
        on_change: Callable[[float], None],
        *,
        track_color: tuple[int, int, int],
        fill_color: tuple[int, int, int],
        knob_color: tuple[int, int, int],
    ) -> None:
        if maximum <= minimum:
            raise ValueError("Slider maximum must exceed minimum")
        self.rect = pygame.Rect(rect)
        self.minimum = minimum
        self.maximum = maximum
        self.step = step
        self._value_getter = value_getter
        self._on_change = on_change
        self._track_color = track_color
        self._fill_color = fill_color
        self._knob_color = knob_color
        self._dragging = False
        self._last_reported: float | None = None

    @property
    def value(self) -> float:
        return self._value_getter()

    def contains(self, position: tuple[int, int]) -> bool:
        return self.rect.inflate(0, 8).collidepoint(position)

    def value_at(self, x: float) -> float:
        fraction = (x - self.rect.left) / max(1, self.rect.width)
        fraction = max(0.0, min(1.0, fraction))
        raw = self.minimum + fraction * (self.maximum - self.minimum)
        snapped = round((raw - self.minimum) / self.step) * self.step + self.minimum
        return round(min(self.maximum, max(self.minimum, snapped)), 6)

    def _report(self, x: float) -> None:
        value = self.value_at(x)
        if value != self._last_reported:
            self._last_reported = value
            self._on_change(value)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.contains(event.pos):
                self._dragging = True
                self._last_reported = None
                self._report(event.pos[0])
                return True
        elif event.type == pygame.MOUSEMOTION and self._dragging:
            self._report(event.pos[0])
            return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and self._dragging:
            self._dragging = False
            return True
        return False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        track = pygame.Rect(self.rect.left, self.rect.centery - 2, self.rect.width, 4)
        pygame.draw.rect(surface, self._track_color, track, border_radius=2)
        fraction = (self.value - self.minimum) / (self.maximum - self.minimum)
        knob_x = self.rect.left + int(fraction * self.rect.width)
        filled = pygame.Rect(track.left, track.top, knob_x - track.left, track.height)
        pygame.draw.rect(surface, self._fill_color, filled, border_radius=2)
        pygame.draw.circle(surface, self._knob_color, (knob_x, self.rect.centery), 7)


class SpeedPanel:
    """Titled panel with one labelled slider per satellite."""

    def __init__(
        self,
        topleft: tuple[int, int],
        rows: Sequence[tuple[str, Slider]],
        *,
        title: str,
        background_color: Color,
        text_color: tuple[int, int, int],
        radius: int,
        padding: tuple[int, int] = (15, 15),
        label_width: int = 100,
        value_width: int = 40,
        row_height: int = 28,
    ) -> None:
        self.title = title
        self.rows = list(rows)
        self._background_color = background_color
        self._text_color = text_color
        self._radius = radius
        self._padding = padding
        self._label_width = label_width
        self._row_height = row_height
        slider_width = max((slider.rect.width for _, slider in self.rows), default=0)
        width = padding[0] * 2 + label_width + slider_width + 10 + value_width
        height = padding[1] * 2 + row_height * (len(self.rows) + 1)
        self.rect = pygame.Rect(topleft, (width, height))
        self.layout()

    def layout(self) -> None:
        x = self.rect.left + self._padding[0] + self._label_width
        for index, (_, slider) in enumerate(self.rows):
            y = self.rect.top + self._padding[1] + self._row_height * (index + 1)
            slider.rect.topleft = (x, y + (self._row_height - slider.rect.height) // 2)

    def move_to(self, topleft: tuple[int, int]) -> None:
        self.rect.topleft = topleft
        self.layout()

    def contains(self, position: tuple[int, int]) -> bool:
        return self.rect.collidepoint(position)

    def handle_event(self, event: pygame.event.Event) -> bool:
        handled = False
        for _, slider in self.rows:
            handled = slider.handle_event(event) or handled
        if event.type == pygame.MOUSEBUTTONDOWN and self.contains(event.pos):
            return True
        return handled

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        panel_surface = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(
            panel_surface,
            self._background_color,
            panel_surface.get_rect(),
            border_radius=self._radius,
        )
        surface.blit(panel_surface, self.rect.topleft)
        left = self.rect.left + self._padding[0]
        top = self.rect.top + self._padding[1]
        surface.blit(get_text_surface(font, self.title, self._text_color), (left, top))
        for index, (name, slider) in enumerate(self.rows):
            row_center = top + self._row_height * (index + 1) + self._row_height // 2
            label = get_text_surface(font, f"{name}: ", self._text_color)
            surface.blit(label, label.get_rect(midleft=(left, row_center)))
            slider.draw(surface, font)
            value = get_text_surface(font, f"{slider.value:g}", self._text_color)
            surface.blit(value, value.get_rect(midleft=(slider.rect.right + 10, row_center)))
