"""Countdown Window -- a CountdownView rendered by pygame.

Exercises tick-loop and tick-countdown. The window is the render sink and its
show/hide/minimize events are the host lifecycle: minimizing the window
pauses the countdown, restoring it starts a fresh one.

Controls:
  Space   Start / cancel
  V       Simulate hide / show
  F       Cycle time format
  T       Toggle "Time left: %s" template
  +/-     Adjust duration by 10s
  Esc     Quit
"""
from __future__ import annotations

import logging
import sys

import pygame

from tick_loop import Loop
from tick_countdown import CountdownConfig, CountdownView, Finish, TimeFormat

WIDTH, HEIGHT = 560, 240
FPS = 60
TITLE = "tick-countdown window"

BG_COLOR = (20, 20, 30)
TEXT_COLOR = (230, 230, 240)
TEXT_DIM = (120, 120, 140)
DONE_COLOR = (255, 120, 90)
STATUS_BG = (35, 35, 50)
STATUS_H = 36

FORMATS = list(TimeFormat)
TEMPLATE = "Time left: %s"

VISIBLE_EVENTS = (pygame.WINDOWSHOWN, pygame.WINDOWRESTORED, pygame.WINDOWMAXIMIZED)
HIDDEN_EVENTS = (pygame.WINDOWHIDDEN, pygame.WINDOWMINIMIZED)


class Label:
    """Render sink: remembers the text, drawn once per frame."""

    def __init__(self) -> None:
        self.text = ""

    def set_display_text(self, text: str) -> None:
        self.text = text


class AppState:
    def __init__(self) -> None:
        self.loop = Loop()
        self.label = Label()
        self.duration = 30_000
        self.format_index = FORMATS.index(TimeFormat.MIN_SEC)
        self.finished = False
        self.simulated_hidden = False

        self.view = CountdownView(self.loop, self.label, CountdownConfig(
            time_in_future=self.duration,
            time_format=FORMATS[self.format_index],
            auto_display_text=True,
        ))
        self.view.add_countdown_callback(self._on_event)
        self.label.text = self.view.format_remaining(self.duration)

    def _on_event(self, view: CountdownView, event) -> None:
        if isinstance(event, Finish):
            self.finished = True

    def toggle_start(self) -> None:
        if self.view.is_started:
            self.view.cancel()
            return
        self.finished = False
        self.view.set_time_in_future(self.duration)
        self.label.text = self.view.format_remaining(self.duration)
        self.view.start()

    def toggle_simulated_visibility(self) -> None:
        self.simulated_hidden = not self.simulated_hidden
        self.view.on_visibility_changed(not self.simulated_hidden)

    def cycle_format(self) -> None:
        self.format_index = (self.format_index + 1) % len(FORMATS)
        self.view.set_time_format(FORMATS[self.format_index])

    def toggle_template(self) -> None:
        self.view.set_format(None if self.view.template else TEMPLATE)

    def adjust_duration(self, delta: int) -> None:
        self.duration = min(max(self.duration + delta, 10_000), 3_600_000)
        if not self.view.is_started:
            self.label.text = self.view.format_remaining(self.duration)


def draw(surface: pygame.Surface, big: pygame.font.Font, small: pygame.font.Font, state: AppState) -> None:
    surface.fill(BG_COLOR)

    color = DONE_COLOR if state.finished else TEXT_COLOR
    label = big.render(state.label.text, True, color)
    surface.blit(label, (WIDTH // 2 - label.get_width() // 2, 60))

    view = state.view
    info = (
        f"started={view.is_started}  visible={view.is_visible}  "
        f"running={view.is_running}  format={view.time_format.value}"
    )
    surface.blit(small.render(info, True, TEXT_DIM), (12, 150))

    y = HEIGHT - STATUS_H
    pygame.draw.rect(surface, STATUS_BG, (0, y, WIDTH, STATUS_H))
    keys = "[Space] Start/Cancel  [V] Hide/Show  [F] Format  [T] Template  [+/-] Dur  [Esc] Quit"
    hint = small.render(keys, True, TEXT_DIM)
    surface.blit(hint, (8, y + STATUS_H // 2 - hint.get_height() // 2))


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()
    big = pygame.font.SysFont("monospace", 48, bold=True)
    small = pygame.font.SysFont("monospace", 12)

    state = AppState()
    state.view.on_attached()
    state.view.on_visibility_changed(True)

    running = True
    while running:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type in VISIBLE_EVENTS:
                state.view.on_visibility_changed(not state.simulated_hidden)
            elif event.type in HIDDEN_EVENTS:
                state.view.on_visibility_changed(False)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    state.toggle_start()
                elif event.key == pygame.K_v:
                    state.toggle_simulated_visibility()
                elif event.key == pygame.K_f:
                    state.cycle_format()
                elif event.key == pygame.K_t:
                    state.toggle_template()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    state.adjust_duration(10_000)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    state.adjust_duration(-10_000)

        # Fire whatever countdown timers are due this frame.
        state.loop.step()

        draw(screen, big, small, state)
        pygame.display.flip()

    state.view.on_detached()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
