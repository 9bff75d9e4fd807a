"""8-bit RGBA colour with saturating arithmetic.

Colours are stored as four unsigned 8-bit channels. Addition saturates at
255 per channel instead of wrapping, both on the host (Color) and inside
Taichi kernels (saturating_add on rgba vectors).

Example:
    >>> Color(250, 0, 0, 0) + Color(10, 0, 0, 0)
    Color(r=255, g=0, b=0, a=0)
"""

from dataclasses import dataclass

import taichi as ti

# Kernel-side colour: one i32 per channel, values kept in [0, 255]
rgba = ti.types.vector(4, ti.i32)

CHANNEL_MAX = 255


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels.

    Attributes:
        r: Red channel in [0, 255].
        g: Green channel in [0, 255].
        b: Blue channel in [0, 255].
        a: Alpha channel in [0, 255].
    """

    r: int
    g: int
    b: int
    a: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Color channel {name} must be an int, got {value!r}")
            if value < 0 or value > CHANNEL_MAX:
                raise ValueError(f"Color channel {name} = {value} is outside [0, 255]")

    @classmethod
    def black(cls) -> "Color":
        """Opaque black, returned when the reflection budget runs out."""
        return cls(0, 0, 0, CHANNEL_MAX)

    def __add__(self, other: "Color") -> "Color":
        """Channel-wise addition clamped at 255."""
        if not isinstance(other, Color):
            return NotImplemented
        return Color(
            min(self.r + other.r, CHANNEL_MAX),
            min(self.g + other.g, CHANNEL_MAX),
            min(self.b + other.b, CHANNEL_MAX),
            min(self.a + other.a, CHANNEL_MAX),
        )

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return the channels as an (r, g, b, a) tuple."""
        return (self.r, self.g, self.b, self.a)


@ti.func
def saturating_add(a: rgba, b: rgba) -> rgba:
    """Add two kernel colours channel-wise, clamping at 255."""
    return ti.min(a + b, CHANNEL_MAX)


@ti.func
def unit_to_channel(value: ti.f64) -> ti.i32:
    """Convert a [0, 1] intensity to an 8-bit channel.

    Truncates value * 255 toward zero; out-of-range inputs saturate to 0 or
    255.
    """
    return ti.cast(ti.min(ti.max(value * 255.0, 0.0), 255.0), ti.i32)
