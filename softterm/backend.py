"""A software rendering backend that draws a terminal cell grid into an RGB pixmap."""

from __future__ import annotations

import io
import math
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Callable, Dict, Iterable, Optional, Set, Tuple

from PIL import Image, ImageDraw, ImageFont

from softterm.buffer import Buffer, Cell, Modifier, Rect, Size
from softterm.colors import RGB, blend_rgba, dim_rgb, to_rgb
from softterm.pixmap import RgbPixmap

Font = ImageFont.FreeTypeFont
FontLoader = Callable[[float], Font]

_MAX_CELLS = 0xFFFF
_ITALIC_SHEAR = 0.25
_WIDTH_SPACING = 0.9  # reduce horizontal spacing by 10%
_HEIGHT_SPACING = 0.85  # reduce vertical spacing by 15%


@dataclass(frozen=True)
class WindowSize:
    """The terminal size in cells and in pixels."""

    columns_rows: Size
    pixels: Size


@dataclass(frozen=True)
class _Glyph:
    left: int
    top: int
    width: int
    height: int
    alpha: bytes


def add_strikeout(text: str) -> str:
    """Follow every character with a combining long stroke overlay."""
    return "".join(c + "\u0336" for c in text)


def add_underline(text: str) -> str:
    """Follow every character with a combining low line."""
    return "".join(c + "\u0332" for c in text)


@lru_cache(maxsize=1024)
def _blend_table(fg: RGB, bg: RGB) -> Tuple[RGB, ...]:
    """Precomputed blend of ``fg`` over ``bg`` for every coverage value."""
    return tuple(blend_rgba((*fg, a), (*bg, 255)) for a in range(256))


def _check_cells(name: str, value: int) -> None:
    if not 0 <= value <= _MAX_CELLS:
        raise ValueError(f"{name} must be in 0..={_MAX_CELLS}, got {value}")


def _measure_cell(font: Font) -> Tuple[int, int]:
    """Size of the full block glyph, falling back to font metrics."""
    left, top, right, bottom = font.getbbox("█")
    width, height = right - left, bottom - top
    if width <= 0 or height <= 0:
        ascent, descent = font.getmetrics()
        width = round(font.getlength("M"))
        height = ascent + descent
    return width, height


class SoftBackend:
    """Renders a terminal cell buffer into an in-memory RGB pixmap."""

    def __init__(
        self,
        width: int,
        height: int,
        font_size: float,
        load_font: FontLoader,
        scale_factor: float = 1.0,
    ) -> None:
        _check_cells("width", width)
        _check_cells("height", height)
        if scale_factor <= 0:
            raise ValueError("scale factor must be positive")
        self._load_font = load_font
        self.scale_factor = float(scale_factor)
        self.buffer = Buffer(Rect(0, 0, width, height))
        self.cursor = False
        self.pos: Tuple[int, int] = (0, 0)
        self.blink_counter = 0
        self.blinking_fast = False
        self.blinking_slow = False
        self._always_redraw: Set[Tuple[int, int]] = set()
        self._glyphs: Dict[Tuple[str, bool, bool], Optional[_Glyph]] = {}
        self._apply_font_size(font_size)
        self.rgb_pixmap = self._new_pixmap(width, height)
        self.clear()

    @classmethod
    def with_font(
        cls,
        width: int,
        height: int,
        font_size: float,
        font_data: bytes,
        scale_factor: float = 1.0,
    ) -> "SoftBackend":
        """Create a backend that renders with the TrueType/OpenType font in ``font_data``."""
        data = bytes(font_data)

        def load(size: float) -> Font:
            return ImageFont.truetype(io.BytesIO(data), size)

        return cls(width, height, font_size, load, scale_factor)

    @classmethod
    def with_default_font(
        cls,
        width: int,
        height: int,
        font_size: float,
        scale_factor: float = 1.0,
    ) -> "SoftBackend":
        """Create a backend that renders with the imaging library's bundled font."""

        def load(size: float) -> Font:
            font = ImageFont.load_default(size=size)
            if not isinstance(font, ImageFont.FreeTypeFont):
                raise RuntimeError("a scalable default font is not available")
            return font

        return cls(width, height, font_size, load, scale_factor)

    # -- pixmap access -------------------------------------------------

    def pixmap_data(self) -> bytes:
        """The raw RGB bytes of the rendered image."""
        return self.rgb_pixmap.data()

    def pixmap_rgba(self) -> bytes:
        """The rendered image as RGBA bytes."""
        return self.rgb_pixmap.to_rgba()

    def pixmap_width(self) -> int:
        """Width of the rendered image in pixels."""
        return self.rgb_pixmap.width()

    def pixmap_height(self) -> int:
        """Height of the rendered image in pixels."""
        return self.rgb_pixmap.height()

    @property
    def always_redraw(self) -> frozenset:
        """Cells that are redrawn on every draw because they blink."""
        return frozenset(self._always_redraw)

    # -- geometry ------------------------------------------------------

    @property
    def _physical_char_width(self) -> int:
        return int(self.char_width * self.scale_factor)

    @property
    def _physical_char_height(self) -> int:
        return int(self.char_height * self.scale_factor)

    def _new_pixmap(self, width: int, height: int) -> RgbPixmap:
        return RgbPixmap(
            self._physical_char_width * width, self._physical_char_height * height
        )

    def _apply_font_size(self, font_size: float) -> None:
        if font_size <= 0:
            raise ValueError(f"font size must be positive, got {font_size}")
        self._font = self._load_font(font_size * self.scale_factor)
        self._glyphs.clear()
        glyph_width, glyph_height = _measure_cell(self._font)
        self.char_width = int(glyph_width * _WIDTH_SPACING)
        self.char_height = int(glyph_height * _HEIGHT_SPACING)

    def set_font_size(self, font_size: float) -> None:
        """Change the font size, recreating the pixmap and redrawing everything."""
        self._apply_font_size(font_size)
        area = self.buffer.area
        self.rgb_pixmap = self._new_pixmap(area.width, area.height)
        self.redraw()

    def resize(self, width: int, height: int) -> None:
        """Resize the terminal to ``width`` x ``height`` cells and redraw."""
        _check_cells("width", width)
        _check_cells("height", height)
        self.buffer.resize(Rect(0, 0, width, height))
        self.rgb_pixmap = self._new_pixmap(width, height)
        self.redraw()

    # -- rendering -----------------------------------------------------

    def redraw(self) -> None:
        """Redraw every cell into the pixmap."""
        self._always_redraw = set()
        area = self.buffer.area
        positions = [(x, y) for x in range(area.width) for y in range(area.height)]
        for x, y in positions:
            self._draw_cell_background(x, y)
        for x, y in positions:
            self._draw_cell_text(x, y)

    def _update_blinking(self) -> None:
        self.blink_counter = (self.blink_counter + 1) % 200
        self.blinking_fast = self.blink_counter % 100 <= 5
        self.blinking_slow = 20 <= self.blink_counter <= 25

    def _draw_cell_background(self, x: int, y: int) -> None:
        cw, ch = self._physical_char_width, self._physical_char_height
        begin_x, begin_y = x * cw, y * ch
        pw, ph = self.rgb_pixmap.width(), self.rgb_pixmap.height()
        if begin_x >= pw or begin_y >= ph:
            return
        cell = self.buffer[(x, y)]
        if Modifier.REVERSED in cell.modifier:
            color = to_rgb(cell.fg, True)
        else:
            color = to_rgb(cell.bg, False)
        if Modifier.DIM in cell.modifier:
            color = dim_rgb(color)
        put = self.rgb_pixmap.put_pixel
        for py in range(begin_y, min(begin_y + ch, ph)):
            for px in range(begin_x, min(begin_x + cw, pw)):
                put(px, py, color)

    def _glyph(self, text: str, bold: bool, italic: bool) -> Optional[_Glyph]:
        key = (text, bold, italic)
        if key in self._glyphs:
            return self._glyphs[key]
        stroke = 1 if bold else 0
        left, top, right, bottom = self._font.getbbox(text, stroke_width=stroke)
        width, height = right - left, bottom - top
        glyph: Optional[_Glyph] = None
        if width > 0 and height > 0:
            image = Image.new("L", (width, height), 0)
            ImageDraw.Draw(image).text(
                (-left, -top),
                text,
                font=self._font,
                fill=255,
                stroke_width=stroke,
                stroke_fill=255,
            )
            if italic:
                extra = math.ceil(_ITALIC_SHEAR * height)
                image = image.transform(
                    (width + extra, height),
                    Image.Transform.AFFINE,
                    (1, _ITALIC_SHEAR, -_ITALIC_SHEAR * height, 0, 1, 0),
                    resample=Image.Resampling.BILINEAR,
                )
            glyph = _Glyph(left, top, image.width, image.height, image.tobytes())
        self._glyphs[key] = glyph
        return glyph

    def _draw_cell_text(self, x: int, y: int) -> None:
        begin_x = x * self._physical_char_width
        begin_y = y * self._physical_char_height
        cell = self.buffer[(x, y)]
        modifier = cell.modifier

        fg = cell.bg if Modifier.HIDDEN in modifier else cell.fg
        if Modifier.REVERSED in modifier:
            fg_color, bg_color = to_rgb(cell.bg, False), to_rgb(fg, True)
        else:
            fg_color, bg_color = to_rgb(fg, True), to_rgb(cell.bg, False)
        if Modifier.DIM in modifier:
            fg_color = dim_rgb(fg_color)

        text = cell.symbol
        if Modifier.CROSSED_OUT in modifier:
            text = add_strikeout(text)
        if Modifier.UNDERLINED in modifier:
            text = add_underline(text)

        if Modifier.SLOW_BLINK in modifier:
            self._always_redraw.add((x, y))
            if self.blinking_slow:
                fg_color = bg_color
        if Modifier.RAPID_BLINK in modifier:
            self._always_redraw.add((x, y))
            if self.blinking_fast:
                fg_color = bg_color

        glyph = self._glyph(text, Modifier.BOLD in modifier, Modifier.ITALIC in modifier)
        if glyph is None:
            return
        table = _blend_table(fg_color, bg_color)
        pw, ph = self.rgb_pixmap.width(), self.rgb_pixmap.height()
        put = self.rgb_pixmap.put_pixel
        for oy in range(glyph.height):
            ry = glyph.top + oy
            py = begin_y + ry
            if ry < 0 or py >= ph:
                continue
            row = oy * glyph.width
            for ox in range(glyph.width):
                rx = glyph.left + ox
                px = begin_x + rx
                if rx >= 0 and px < pw:
                    put(px, py, table[glyph.alpha[row + ox]])

    # -- backend interface ---------------------------------------------

    def draw(self, content: Iterable[Tuple[int, int, Cell]]) -> None:
        """Store the given cells and render them, together with blinking cells."""
        self._update_blinking()
        to_update = []
        for x, y, cell in content:
            self.buffer[(x, y)] = replace(cell)
            to_update.append((x, y))
        to_update.extend(self._always_redraw)
        for x, y in to_update:
            self._draw_cell_background(x, y)
        for x, y in to_update:
            self._draw_cell_text(x, y)

    def hide_cursor(self) -> None:
        """Mark the cursor hidden."""
        self.cursor = False

    def show_cursor(self) -> None:
        """Mark the cursor visible."""
        self.cursor = True

    def get_cursor_position(self) -> Tuple[int, int]:
        """The cursor position as (x, y)."""
        return self.pos

    def set_cursor_position(self, position: Tuple[int, int]) -> None:
        """Move the cursor to (x, y)."""
        x, y = position
        self.pos = (x, y)

    def clear(self) -> None:
        """Empty every cell and paint the pixmap with the default background."""
        self.buffer.reset()
        self.rgb_pixmap.fill(to_rgb(Cell().bg, False))

    def size(self) -> Size:
        """The terminal size in cells."""
        return self.buffer.area.size()

    def window_size(self) -> WindowSize:
        """The terminal size in cells and the pixmap size in pixels."""
        return WindowSize(
            columns_rows=self.buffer.area.size(),
            pixels=Size(self.pixmap_width(), self.pixmap_height()),
        )

    def flush(self) -> None:
        """Nothing is buffered, so there is nothing to flush."""