# cubecast

A small first-person ray-casting renderer on a grid map, together with the
minimal toolkit it draws with: in-memory images with a fixed pixel layout,
XPM image loading, X11 colour names, and a window/event layer with hooks.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the demo

```
cubecast
```

This opens a 1000×1000 window titled `cub3D` (shown with pygame) with the
scene seen from a player standing at (10.5, 10.5) in a walled 50×50 test
map. Walls are shaded flat by the face they were hit on: north, south, east
and west each have their own colour, with a sky-blue ceiling and a brown
floor. The view is redrawn only after a key was handled.

Keys act when they are released:

- the arrow keys move the player by 0.3 cells,
- `a` and `d` turn the camera,
- closing the window ends the program.

## Using it as a library

The pieces can be used without opening a window.

```python
from cubecast.world import make_test_world
from cubecast.raycast import cast_ray, wall_face
from cubecast.image import Image
from cubecast.render import capture_scene

world = make_test_world()
ray = cast_ray(world, 0.0)
print(ray.side, ray.hit, ray.length, wall_face(world, ray))

frame = Image(1000, 1000, 32, False)
capture_scene(world, frame, 1000, 1000)
rgb = frame.to_rgb_bytes()
```

- `cubecast.world`: `World`, `Point`, `cell_size`, `minimap_size`,
  `make_test_map`, `make_test_world`.
- `cubecast.raycast`: grid ray casting (`cast_ray`, which raises
  `IndexError` if a ray leaves the map without meeting a wall), the hit
  record `RayHit` (`side`, `hit`, `length`), `Side`, `WallFace`,
  `wall_face` and `fish_eye_correction`.
- `cubecast.render`: camera helpers (`camera_direction`,
  `left_camera_limit`, `ray_angle`), `wall_color`, `draw_column`,
  `capture_scene`, the minimap drawing functions (`draw_map`, `draw_grid`,
  `draw_line`), `handle_key` and the `Scene` that redraws only when
  something changed.
- `cubecast.image`: `Image` with `put_pixel`, `get_pixel`,
  `set_pixel_bytes`, `clear`, `blit` and `to_rgb_bytes`, plus
  `channel_shifts` and `good_color` for colour depths below 24 bits.
- `cubecast.xpm`: `xpm_to_image` and `xpm_file_to_image`, raising
  `XpmError` on malformed input; also the helpers `split_words`,
  `find_outside_quotes`, `strip_comments`, `quoted_lines` and `parse_xpm`.
- `cubecast.colors`: `lookup_color` and `text_to_rgb` for X11 colour names
  and `#rrggbb` values.
- `cubecast.window`: `Display`, `Window`, `Event` and `EventType`, with
  key, mouse, expose, generic and loop hooks and an event loop that ends
  when no window is left or `loop_end` is called.
- `cubecast.app`: `build` (the display, window and scene wired together),
  `PygameEvents`, `translate_key` and `main`.

## What it does not do

- There is no map file reader: the game always runs on the built-in test
  map from `make_test_world`.
- Walls are drawn in flat colours; XPM images can be loaded but are not used
  as wall textures.
- The minimap can be drawn into an image with `draw_map`, but the running
  game does not show it.
- There is no collision: the arrow keys move the player through walls.