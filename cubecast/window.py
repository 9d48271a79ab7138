"""Windows, hooks and the event loop that drives them.

Events come from an event source (any callable returning the pending
events) and from :meth:`Display.post`. Each window keeps a framebuffer
image that drawing operations write into.
"""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional

from .image import Image

EventSource = Callable[[], Iterable["Event"]]
Hook = Callable[..., Any]

_IDLE_SECONDS = 0.001


class EventType(IntEnum):
    """X11 event numbers."""

    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    ENTER_NOTIFY = 7
    LEAVE_NOTIFY = 8
    FOCUS_IN = 9
    FOCUS_OUT = 10
    KEYMAP_NOTIFY = 11
    EXPOSE = 12
    GRAPHICS_EXPOSE = 13
    NO_EXPOSE = 14
    VISIBILITY_NOTIFY = 15
    CREATE_NOTIFY = 16
    DESTROY_NOTIFY = 17
    UNMAP_NOTIFY = 18
    MAP_NOTIFY = 19
    MAP_REQUEST = 20
    REPARENT_NOTIFY = 21
    CONFIGURE_NOTIFY = 22
    CONFIGURE_REQUEST = 23
    GRAVITY_NOTIFY = 24
    RESIZE_REQUEST = 25
    CIRCULATE_NOTIFY = 26
    CIRCULATE_REQUEST = 27
    PROPERTY_NOTIFY = 28
    SELECTION_CLEAR = 29
    SELECTION_REQUEST = 30
    SELECTION_NOTIFY = 31
    COLORMAP_NOTIFY = 32
    CLIENT_MESSAGE = 33
    MAPPING_NOTIFY = 34
    GENERIC_EVENT = 35


KEY_PRESS_MASK = 1 << 0
KEY_RELEASE_MASK = 1 << 1
BUTTON_PRESS_MASK = 1 << 2
BUTTON_RELEASE_MASK = 1 << 3
ENTER_WINDOW_MASK = 1 << 4
LEAVE_WINDOW_MASK = 1 << 5
POINTER_MOTION_MASK = 1 << 6
KEYMAP_STATE_MASK = 1 << 14
EXPOSURE_MASK = 1 << 15
VISIBILITY_CHANGE_MASK = 1 << 16
STRUCTURE_NOTIFY_MASK = 1 << 17
RESIZE_REDIRECT_MASK = 1 << 18
SUBSTRUCTURE_REDIRECT_MASK = 1 << 20
FOCUS_CHANGE_MASK = 1 << 21
PROPERTY_CHANGE_MASK = 1 << 22
COLORMAP_CHANGE_MASK = 1 << 23

_EVENT_MASKS: dict[EventType, int] = {
    EventType.KEY_PRESS: KEY_PRESS_MASK,
    EventType.KEY_RELEASE: KEY_RELEASE_MASK,
    EventType.BUTTON_PRESS: BUTTON_PRESS_MASK,
    EventType.BUTTON_RELEASE: BUTTON_RELEASE_MASK,
    EventType.MOTION_NOTIFY: POINTER_MOTION_MASK,
    EventType.ENTER_NOTIFY: ENTER_WINDOW_MASK,
    EventType.LEAVE_NOTIFY: LEAVE_WINDOW_MASK,
    EventType.FOCUS_IN: FOCUS_CHANGE_MASK,
    EventType.FOCUS_OUT: FOCUS_CHANGE_MASK,
    EventType.KEYMAP_NOTIFY: KEYMAP_STATE_MASK,
    EventType.EXPOSE: EXPOSURE_MASK,
    EventType.VISIBILITY_NOTIFY: VISIBILITY_CHANGE_MASK,
    EventType.DESTROY_NOTIFY: STRUCTURE_NOTIFY_MASK,
    EventType.UNMAP_NOTIFY: STRUCTURE_NOTIFY_MASK,
    EventType.MAP_NOTIFY: STRUCTURE_NOTIFY_MASK,
    EventType.REPARENT_NOTIFY: STRUCTURE_NOTIFY_MASK,
    EventType.CONFIGURE_NOTIFY: STRUCTURE_NOTIFY_MASK,
    EventType.GRAVITY_NOTIFY: STRUCTURE_NOTIFY_MASK,
    EventType.CIRCULATE_NOTIFY: STRUCTURE_NOTIFY_MASK,
    EventType.RESIZE_REQUEST: RESIZE_REDIRECT_MASK,
    EventType.MAP_REQUEST: SUBSTRUCTURE_REDIRECT_MASK,
    EventType.CONFIGURE_REQUEST: SUBSTRUCTURE_REDIRECT_MASK,
    EventType.CIRCULATE_REQUEST: SUBSTRUCTURE_REDIRECT_MASK,
    EventType.PROPERTY_NOTIFY: PROPERTY_CHANGE_MASK,
    EventType.COLORMAP_NOTIFY: COLORMAP_CHANGE_MASK,
}


@dataclass(frozen=True, eq=False)
class Event:
    """One input or window event addressed to a window."""

    type: EventType
    window: Optional["Window"] = None
    keysym: int = 0
    button: int = 0
    x: int = 0
    y: int = 0
    count: int = 0
    close_request: bool = False


class Window:
    """A window with a framebuffer and a table of event hooks."""

    def __init__(self, width: int, height: int, title: str) -> None:
        self.width = width
        self.height = height
        self.title = title
        self.image = Image(width, height)
        self._hooks: dict[EventType, tuple[Hook, Any, int]] = {}

    def __repr__(self) -> str:
        return f"Window({self.width}, {self.height}, {self.title!r})"

    def hook(self, event_type: int, func: Hook | None, param: Any = None) -> None:
        """Call ``func`` for events of ``event_type``; None removes the hook."""
        kind = EventType(event_type)
        if func is None:
            self._hooks.pop(kind, None)
            return
        self._hooks[kind] = (func, param, _EVENT_MASKS.get(kind, 0))

    def key_hook(self, func: Hook | None, param: Any = None) -> None:
        """Call ``func(keysym, param)`` when a key is released."""
        self.hook(EventType.KEY_RELEASE, func, param)

    def mouse_hook(self, func: Hook | None, param: Any = None) -> None:
        """Call ``func(button, x, y, param)`` when a mouse button is pressed."""
        self.hook(EventType.BUTTON_PRESS, func, param)

    def expose_hook(self, func: Hook | None, param: Any = None) -> None:
        """Call ``func(param)`` when the window needs repainting."""
        self.hook(EventType.EXPOSE, func, param)

    def event_mask(self) -> int:
        """Return the union of the event masks the hooks need."""
        mask = 0
        for _func, _param, hook_mask in self._hooks.values():
            mask |= hook_mask
        return mask

    def dispatch(self, event: Event) -> Any:
        """Call the hook for ``event`` with the arguments its type carries.

        Returns the hook's result, or None when no hook is installed.
        """
        entry = self._hooks.get(event.type)
        if entry is None:
            return None
        func, param, _mask = entry
        kind = event.type
        if kind in (EventType.KEY_PRESS, EventType.KEY_RELEASE):
            return func(event.keysym, param)
        if kind in (EventType.BUTTON_PRESS, EventType.BUTTON_RELEASE):
            return func(event.button, event.x, event.y, param)
        if kind is EventType.MOTION_NOTIFY:
            return func(event.x, event.y, param)
        if kind is EventType.EXPOSE:
            return func(param) if event.count == 0 else None
        return func(param)

    def _hook_for(self, kind: EventType) -> tuple[Hook, Any] | None:
        entry = self._hooks.get(kind)
        return None if entry is None else entry[:2]

    def pixel_put(self, x: int, y: int, color: int) -> None:
        """Set one pixel of the window; points outside it are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.image.put_pixel(x, y, color)

    def put_image(self, image: Image, x: int, y: int) -> None:
        """Copy ``image`` into the window with its top-left corner at (x, y)."""
        self.image.blit(image, x, y)

    def clear(self) -> None:
        """Paint the whole window with its black background."""
        self.image.clear(0)


class Display:
    """The connection that owns windows and runs the event loop."""

    def __init__(self, event_source: EventSource | None = None) -> None:
        self.event_source = event_source
        self.windows: list[Window] = []
        self._queue: deque[Event] = deque()
        self._loop_hook: tuple[Hook, Any] | None = None
        self._ended = False

    def new_window(self, width: int, height: int, title: str) -> Window:
        """Open a window; its first expose event is queued for the loop."""
        window = Window(width, height, title)
        self.windows.insert(0, window)
        self._queue.append(Event(EventType.EXPOSE, window))
        return window

    def destroy_window(self, window: Window) -> None:
        """Close ``window``; raises ValueError if it is not open here."""
        for index, candidate in enumerate(self.windows):
            if candidate is window:
                del self.windows[index]
                return
        raise ValueError(f"{window!r} is not open on this display")

    def loop_hook(self, func: Hook | None, param: Any = None) -> None:
        """Call ``func(param)`` after each batch of events; None removes it."""
        self._loop_hook = None if func is None else (func, param)

    def post(self, event: Event) -> None:
        """Queue an event for the loop."""
        self._queue.append(event)

    def loop(self) -> None:
        """Deliver events and run the loop hook until no window is left.

        The loop also stops after :meth:`loop_end`, or when it has neither a
        loop hook nor an event source and every queued event is handled.
        """
        while self.windows and not self._ended:
            waiting = self._loop_hook is None
            while not self._ended:
                event = self._next_event(waiting)
                if event is None:
                    break
                self._deliver(event)
            if self._loop_hook is not None:
                func, param = self._loop_hook
                func(param)
            elif not self._queue and self.event_source is None:
                return

    def loop_end(self) -> None:
        """Make the running loop stop."""
        self._ended = True

    def _poll(self) -> None:
        if self.event_source is not None:
            self._queue.extend(self.event_source())

    def _next_event(self, wait: bool) -> Event | None:
        if not self._queue:
            self._poll()
        while wait and not self._queue and self.event_source is not None:
            time.sleep(_IDLE_SECONDS)
            self._poll()
        return self._queue.popleft() if self._queue else None

    def _deliver(self, event: Event) -> None:
        window = next((w for w in self.windows if w is event.window), None)
        if window is None:
            return
        if event.type is EventType.CLIENT_MESSAGE and event.close_request:
            close = window._hook_for(EventType.DESTROY_NOTIFY)
            if close is not None:
                func, param = close
                func(param)
        window.dispatch(event)