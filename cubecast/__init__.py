"""Grid ray-casting renderer with a small image, XPM and window toolkit."""

__version__ = "0.1.0"
__all__ = ["app", "colors", "image", "raycast", "render", "window", "world", "xpm"]