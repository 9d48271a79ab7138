"""Off-screen pixel buffers and colour conversion for non-TrueColor depths."""

from __future__ import annotations

_SUPPORTED_BPP = (8, 16, 24, 32)


def channel_shifts(red_mask: int, green_mask: int, blue_mask: int) -> tuple[int, ...]:
    """Return (shift, width) for red, green and blue from the visual's masks.

    The result is a flat 6-tuple: red shift, red width, green shift,
    green width, blue shift, blue width.
    """
    result: list[int] = []
    for mask in (red_mask, green_mask, blue_mask):
        if mask <= 0:
            raise ValueError(f"channel mask must be a positive bit mask, got {mask!r}")
        shift = 0
        while not mask & 1:
            mask >>= 1
            shift += 1
        width = 0
        while mask & 1:
            mask >>= 1
            width += 1
        result.extend((shift, width))
    return tuple(result)


def good_color(color: int, depth: int, shifts: tuple[int, ...]) -> int:
    """Convert a 0xRRGGBB colour to a pixel value for a display of ``depth`` bits.

    Depths of 24 bits and more take the colour unchanged; shallower depths
    pack each channel according to ``shifts`` (see :func:`channel_shifts`).
    """
    if depth >= 24:
        return color
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    red_shift, red_width, green_shift, green_width, blue_shift, blue_width = shifts
    return (
        ((red >> (16 - red_width)) << red_shift)
        + ((green >> (16 - green_width)) << green_shift)
        + ((blue >> (16 - blue_width)) << blue_shift)
    )


class Image:
    """A ZPixmap-style image: rows of packed pixels padded to 32 bits."""

    def __init__(
        self,
        width: int,
        height: int,
        bits_per_pixel: int = 32,
        big_endian: bool = False,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        if bits_per_pixel not in _SUPPORTED_BPP:
            raise ValueError(f"unsupported bits per pixel: {bits_per_pixel}")
        self.width = width
        self.height = height
        self.bits_per_pixel = bits_per_pixel
        self.big_endian = big_endian
        self.size_line = ((width * bits_per_pixel + 31) // 32) * 4
        self.data = bytearray(self.size_line * height)

    @property
    def bytes_per_pixel(self) -> int:
        return self.bits_per_pixel // 8

    @property
    def _order(self) -> str:
        return "big" if self.big_endian else "little"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.size_line + x * self.bytes_per_pixel

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at (x, y); raises IndexError outside the image."""
        self.set_pixel_bytes(x, y, color)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel value stored at (x, y)."""
        offset = self._offset(x, y)
        chunk = self.data[offset : offset + self.bytes_per_pixel]
        return int.from_bytes(chunk, self._order)

    def set_pixel_bytes(self, x: int, y: int, color: int) -> None:
        """Write the low bytes of ``color`` at (x, y) in the image's byte order.

        Negative values are taken as their two's-complement bit pattern.
        """
        offset = self._offset(x, y)
        opp = self.bytes_per_pixel
        value = color & ((1 << (8 * opp)) - 1)
        self.data[offset : offset + opp] = value.to_bytes(opp, self._order)

    def clear(self, color: int = 0) -> None:
        """Fill every pixel with ``color``."""
        opp = self.bytes_per_pixel
        pixel = (color & ((1 << (8 * opp)) - 1)).to_bytes(opp, self._order)
        row = pixel * self.width
        row += bytes(self.size_line - len(row))
        self.data[:] = row * self.height

    def blit(self, other: Image, x: int, y: int) -> None:
        """Copy ``other`` onto this image with its top-left corner at (x, y).

        Parts falling outside this image are clipped away.
        """
        if other.bits_per_pixel != self.bits_per_pixel or other.big_endian != self.big_endian:
            raise ValueError("images must share pixel format to be copied")
        opp = self.bytes_per_pixel
        left = max(0, x)
        right = min(self.width, x + other.width)
        if left >= right:
            return
        top = max(0, y)
        bottom = min(self.height, y + other.height)
        span = (right - left) * opp
        for dest_y in range(top, bottom):
            src_start = (dest_y - y) * other.size_line + (left - x) * opp
            dest_start = dest_y * self.size_line + left * opp
            self.data[dest_start : dest_start + span] = other.data[src_start : src_start + span]

    def to_rgb_bytes(self) -> bytes:
        """Return the image as packed 8-bit RGB triples, row by row."""
        out = bytearray(self.width * self.height * 3)
        if self.bits_per_pixel == 32:
            packed = self.data
            red, green, blue = (1, 2, 3) if self.big_endian else (2, 1, 0)
            out[0::3] = packed[red::4]
            out[1::3] = packed[green::4]
            out[2::3] = packed[blue::4]
            return bytes(out)
        position = 0
        for y in range(self.height):
            for x in range(self.width):
                value = self.get_pixel(x, y) & 0xFFFFFF
                out[position : position + 3] = value.to_bytes(3, "big")
                position += 3
        return bytes(out)