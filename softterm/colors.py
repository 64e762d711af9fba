"""Terminal colours and the pixel arithmetic used when rendering them."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]

RESET_FOREGROUND: RGB = (215, 215, 215)
RESET_BACKGROUND: RGB = (24, 24, 24)
_DIM_FACTOR = 77  # roughly 255 * 0.3


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be in 0..=255, got {value}")


class Color(Enum):
    """The named terminal colours, plus the terminal's default (``RESET``)."""

    RESET = "reset"
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    GRAY = "gray"
    DARK_GRAY = "dark_gray"
    LIGHT_RED = "light_red"
    LIGHT_GREEN = "light_green"
    LIGHT_BLUE = "light_blue"
    LIGHT_YELLOW = "light_yellow"
    LIGHT_MAGENTA = "light_magenta"
    LIGHT_CYAN = "light_cyan"
    WHITE = "white"


@dataclass(frozen=True)
class Rgb:
    """A true-colour value."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        _check_byte("r", self.r)
        _check_byte("g", self.g)
        _check_byte("b", self.b)


@dataclass(frozen=True)
class Indexed:
    """A colour from the 256-entry palette."""

    index: int

    def __post_init__(self) -> None:
        _check_byte("index", self.index)


AnyColor = Union[Color, Rgb, Indexed]

_NAMED: dict[Color, RGB] = {
    Color.BLACK: (0, 0, 0),
    Color.RED: (139, 0, 0),
    Color.GREEN: (0, 100, 0),
    Color.YELLOW: (255, 215, 0),
    Color.BLUE: (0, 0, 139),
    Color.MAGENTA: (99, 9, 99),
    Color.CYAN: (0, 0, 255),
    Color.GRAY: (128, 128, 128),
    Color.DARK_GRAY: (64, 64, 64),
    Color.LIGHT_RED: (255, 0, 0),
    Color.LIGHT_GREEN: (0, 255, 0),
    Color.LIGHT_BLUE: (173, 216, 230),
    Color.LIGHT_YELLOW: (255, 255, 224),
    Color.LIGHT_MAGENTA: (139, 0, 139),
    Color.LIGHT_CYAN: (224, 255, 255),
    Color.WHITE: (255, 255, 255),
}


def to_rgb(color: AnyColor, is_fg: bool) -> RGB:
    """Convert a terminal colour to an RGB triple.

    ``is_fg`` selects which default is used for ``Color.RESET``.
    """
    if isinstance(color, Rgb):
        return (color.r, color.g, color.b)
    if isinstance(color, Indexed):
        i = color.index
        return ((i * i) & 0xFF, (i + i) & 0xFF, i)
    if color is Color.RESET:
        return RESET_FOREGROUND if is_fg else RESET_BACKGROUND
    try:
        return _NAMED[color]
    except KeyError:
        raise TypeError(f"not a colour: {color!r}") from None


def _round_half_away(value: float) -> int:
    return min(255, max(0, math.floor(value + 0.5)))


def blend_rgba(fg: RGBA, bg: RGBA) -> RGB:
    """Composite ``fg`` over ``bg`` (both RGBA) and return the resulting RGB."""
    fg_a = fg[3] / 255.0
    bg_a = bg[3] / 255.0
    out_a = fg_a + bg_a * (1.0 - fg_a)
    if out_a == 0.0:
        return (0, 0, 0)
    weight_bg = bg_a * (1.0 - fg_a)
    r, g, b = (
        _round_half_away((f * fg_a + c * weight_bg) / out_a)
        for f, c in zip(fg[:3], bg[:3])
    )
    return (r, g, b)


def dim_rgb(color: RGB) -> RGB:
    """Darken a colour to about 30% of its brightness."""
    r, g, b = ((c * _DIM_FACTOR + 127) // 255 for c in color)
    return (r, g, b)