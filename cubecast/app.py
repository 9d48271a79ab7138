"""The game's entry point: a window showing the ray-cast view, run with pygame."""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .render import KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_UP, Scene  # noqa: E402
from .window import Display, Event, EventType, Window  # noqa: E402
from .world import RES_X, RES_Y, make_test_world  # noqa: E402

TITLE = "cub3D"

KEY_ESCAPE = 0xFF1B
KEY_RETURN = 0xFF0D
KEY_BACKSPACE = 0xFF08
KEY_TAB = 0xFF09

_SPECIAL_KEYS = {
    pygame.K_LEFT: KEY_LEFT,
    pygame.K_UP: KEY_UP,
    pygame.K_RIGHT: KEY_RIGHT,
    pygame.K_DOWN: KEY_DOWN,
    pygame.K_ESCAPE: KEY_ESCAPE,
    pygame.K_RETURN: KEY_RETURN,
    pygame.K_BACKSPACE: KEY_BACKSPACE,
    pygame.K_TAB: KEY_TAB,
}


def translate_key(key: int) -> int:
    """Turn a pygame key code into an X keysym; unknown keys give 0."""
    if key in _SPECIAL_KEYS:
        return _SPECIAL_KEYS[key]
    if 0x20 <= key < 0x7F:
        return key
    return 0


class PygameEvents:
    """Event source that shows a display's window with pygame and reads its input."""

    def __init__(self, display: Display) -> None:
        self.display = display
        self._screen: pygame.Surface | None = None

    def __call__(self) -> list[Event]:
        if not self.display.windows:
            return []
        window = self.display.windows[-1]
        self._present(window)
        events = (self._translate(window, raw) for raw in pygame.event.get())
        return [event for event in events if event is not None]

    def _present(self, window: Window) -> None:
        size = (window.width, window.height)
        if self._screen is None or self._screen.get_size() != size:
            pygame.init()
            self._screen = pygame.display.set_mode(size)
            pygame.display.set_caption(window.title)
        frame = pygame.image.frombuffer(window.image.to_rgb_bytes(), size, "RGB")
        self._screen.blit(frame, (0, 0))
        pygame.display.flip()

    @staticmethod
    def _translate(window: Window, raw: pygame.event.Event) -> Event | None:
        if raw.type == pygame.QUIT:
            return Event(EventType.CLIENT_MESSAGE, window, close_request=True)
        if raw.type == pygame.KEYDOWN:
            return Event(EventType.KEY_PRESS, window, keysym=translate_key(raw.key))
        if raw.type == pygame.KEYUP:
            return Event(EventType.KEY_RELEASE, window, keysym=translate_key(raw.key))
        if raw.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            kind = EventType.BUTTON_PRESS if raw.type == pygame.MOUSEBUTTONDOWN else EventType.BUTTON_RELEASE
            x, y = raw.pos
            return Event(kind, window, button=raw.button, x=x, y=y)
        if raw.type == pygame.MOUSEMOTION:
            x, y = raw.pos
            return Event(EventType.MOTION_NOTIFY, window, x=x, y=y)
        if raw.type == pygame.VIDEOEXPOSE:
            return Event(EventType.EXPOSE, window)
        return None


def build(res_x: int = RES_X, res_y: int = RES_Y) -> tuple[Display, Window, Scene]:
    """Open the game window on a new display with its hooks installed."""
    display = Display()
    window = display.new_window(res_x, res_y, TITLE)
    scene = Scene(make_test_world(), res_x, res_y)

    def on_key(keysym: int, _param: object) -> int:
        scene.on_key(keysym)
        return 1

    def on_close(_param: object) -> None:
        display.loop_end()

    def update(_param: object) -> int:
        if scene.update():
            window.put_image(scene.image, 0, 0)
        return 0

    window.key_hook(on_key, None)
    window.hook(EventType.DESTROY_NOTIFY, on_close, None)
    display.loop_hook(update, None)
    return display, window, scene


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game until its window is closed."""
    parser = argparse.ArgumentParser(prog="cubecast", description="Ray-cast maze viewer.")
    parser.parse_args(argv)
    display, _window, _scene = build()
    display.event_source = PygameEvents(display)
    try:
        display.loop()
    finally:
        pygame.quit()
    return 0