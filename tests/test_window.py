import pytest

from cubecast.image import Image
from cubecast.window import (
    BUTTON_PRESS_MASK,
    EXPOSURE_MASK,
    KEY_RELEASE_MASK,
    POINTER_MOTION_MASK,
    Display,
    Event,
    EventType,
    Window,
)

ESCAPE = 0xFF1B


def test_hooks_build_event_mask():
    window = Window(242, 242, "Title1")
    window.expose_hook(lambda p: None, None)
    window.mouse_hook(lambda b, x, y, p: None, None)
    window.key_hook(lambda k, p: None, None)
    assert window.event_mask() == EXPOSURE_MASK | BUTTON_PRESS_MASK | KEY_RELEASE_MASK


def test_motion_hook_mask_and_removal():
    window = Window(242, 242, "Title3")
    window.hook(EventType.MOTION_NOTIFY, lambda x, y, p: None, 0)
    assert window.event_mask() == POINTER_MOTION_MASK
    window.hook(EventType.MOTION_NOTIFY, None, 0)
    assert window.event_mask() == 0


def test_hook_rejects_unknown_event_number():
    window = Window(10, 10, "w")
    with pytest.raises(ValueError):
        window.hook(99, lambda p: None, None)


def test_dispatch_passes_event_arguments():
    window = Window(242, 242, "Title1")
    seen = []
    window.key_hook(lambda key, p: seen.append(("key", key, p)) or 7, "k")
    window.mouse_hook(lambda b, x, y, p: seen.append(("mouse", b, x, y, p)), "m")
    window.hook(EventType.MOTION_NOTIFY, lambda x, y, p: seen.append(("move", x, y, p)), "v")
    result = window.dispatch(Event(EventType.KEY_RELEASE, window, keysym=ESCAPE))
    window.dispatch(Event(EventType.BUTTON_PRESS, window, button=1, x=20, y=30))
    window.dispatch(Event(EventType.MOTION_NOTIFY, window, x=5, y=6))
    assert result == 7
    assert seen == [("key", ESCAPE, "k"), ("mouse", 1, 20, 30, "m"), ("move", 5, 6, "v")]


def test_expose_only_fires_on_last_of_series():
    window = Window(10, 10, "w")
    calls = []
    window.expose_hook(calls.append, "param")
    window.dispatch(Event(EventType.EXPOSE, window, count=2))
    window.dispatch(Event(EventType.EXPOSE, window, count=0))
    assert calls == ["param"]


def test_dispatch_without_hook_returns_none():
    window = Window(10, 10, "w")
    assert window.dispatch(Event(EventType.KEY_PRESS, window, keysym=ESCAPE)) is None


def test_new_window_queues_first_expose():
    display = Display()
    window = display.new_window(242, 242, "Title1")
    exposed = []
    window.expose_hook(exposed.append, "win1")
    display.loop()
    assert exposed == ["win1"]


def test_windows_listed_newest_first():
    display = Display()
    win1 = display.new_window(300, 300, "win1")
    win2 = display.new_window(600, 600, "win2")
    assert display.windows == [win2, win1]


def test_mouse_hook_replaces_window():
    display = Display()
    state = {"win1": display.new_window(300, 300, "win1")}
    win2 = display.new_window(600, 600, "win2")
    clicks = []

    def gere_mouse(button, x, y, param):
        clicks.append(button)
        display.destroy_window(state["win1"])
        state["win1"] = display.new_window(123, 45, "new win")
        state["win1"].mouse_hook(gere_mouse, None)

    old = state["win1"]
    old.mouse_hook(gere_mouse, None)
    win2.mouse_hook(gere_mouse, None)
    display.post(Event(EventType.BUTTON_PRESS, old, button=1, x=3, y=4))
    display.loop()
    assert clicks == [1]
    assert old not in display.windows
    assert len(display.windows) == 2
    new = state["win1"]
    assert (new.width, new.height, new.title) == (123, 45, "new win")
    assert new.event_mask() == BUTTON_PRESS_MASK


def test_escape_in_third_window_destroys_it():
    display = Display()
    win1 = display.new_window(242, 242, "Title1")
    win2 = display.new_window(242, 242, "Title2")
    win3 = display.new_window(242, 242, "Title3")

    def key_win3(key, param):
        if key == ESCAPE:
            display.destroy_window(win3)

    win3.key_hook(key_win3, None)
    display.post(Event(EventType.KEY_RELEASE, win3, keysym=ESCAPE))
    display.loop()
    assert display.windows == [win2, win1]


def test_loop_stops_when_last_window_destroyed():
    display = Display()
    window = display.new_window(10, 10, "w")
    calls = []

    def tick(param):
        calls.append(param)
        if len(calls) == 3:
            display.destroy_window(window)

    display.loop_hook(tick, "p")
    display.loop()
    assert calls == ["p", "p", "p"]
    assert display.windows == []


def test_loop_end_from_loop_hook():
    display = Display()
    window = display.new_window(10, 10, "w")
    calls = []

    def tick(param):
        calls.append(param)
        display.loop_end()

    display.loop_hook(tick, None)
    display.loop()
    assert calls == [None]
    assert display.windows == [window]


def test_close_request_runs_destroy_notify_hook():
    display = Display()
    window = display.new_window(10, 10, "w")
    closed = []

    def on_close(param):
        closed.append(param)
        display.loop_end()

    window.hook(EventType.DESTROY_NOTIFY, on_close, "bye")
    display.post(Event(EventType.CLIENT_MESSAGE, window, close_request=True))
    display.loop()
    assert closed == ["bye"]
    assert display.windows == [window]


def test_events_for_unknown_window_are_ignored():
    display = Display()
    window = display.new_window(10, 10, "w")
    stranger = Window(10, 10, "other")
    seen = []
    stranger.key_hook(lambda k, p: seen.append(k), None)
    window.key_hook(lambda k, p: seen.append(("mine", k)), None)
    display.post(Event(EventType.KEY_RELEASE, stranger, keysym=1))
    display.post(Event(EventType.KEY_RELEASE, window, keysym=2))
    display.loop()
    assert seen == [("mine", 2)]


def test_event_source_is_polled():
    display = Display()
    window = display.new_window(10, 10, "w")
    batches = [[Event(EventType.KEY_RELEASE, window, keysym=ESCAPE),
                Event(EventType.CLIENT_MESSAGE, window, close_request=True)]]
    keys = []
    window.key_hook(lambda k, p: keys.append(k), None)
    window.hook(EventType.DESTROY_NOTIFY, lambda p: display.loop_end(), None)
    display.event_source = lambda: batches.pop() if batches else []
    display.loop()
    assert keys == [ESCAPE]
    assert batches == []


def test_destroy_unknown_window_raises():
    display = Display()
    with pytest.raises(ValueError):
        display.destroy_window(Window(5, 5, "ghost"))


def test_pixel_put_clips_and_clear_resets():
    window = Window(4, 3, "w")
    window.pixel_put(1, 2, 0xFF99FF)
    window.pixel_put(10, 10, 0xFF99FF)
    window.pixel_put(-1, 0, 0xFF99FF)
    assert window.image.get_pixel(1, 2) == 0xFF99FF
    assert sum(1 for b in window.image.data if b) == 3
    window.clear()
    assert not any(window.image.data)


def test_put_image_copies_pixels():
    window = Window(242, 242, "Title1")
    image = Image(42, 42)
    image.put_pixel(0, 0, 0x00FFFF)
    image.put_pixel(41, 41, 0x112233)
    window.put_image(image, 20, 20)
    assert window.image.get_pixel(20, 20) == 0x00FFFF
    assert window.image.get_pixel(61, 61) == 0x112233
    assert window.image.get_pixel(19, 19) == 0