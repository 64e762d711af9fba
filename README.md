# softterm

`softterm` renders a grid of terminal cells into an in-memory RGB image.
You keep a buffer of cells (symbol, foreground and background colour,
and text modifiers such as bold, italic, underlined, crossed out,
reversed, dim, hidden and blinking), and the backend rasterises them with
a font into a flat pixmap. That pixmap can then be handed to anything
that shows pixels: a game engine texture, a GUI image widget, or an image
file written with Pillow.

## Installation

```
pip install softterm
```

Pillow (10.1 or later) is the only runtime dependency.

## Quick start

```python
from softterm.backend import SoftBackend
from softterm.buffer import Cell, Modifier
from softterm.colors import Rgb

# 40 columns by 12 rows, 16 px font, no high-DPI scaling
backend = SoftBackend.with_default_font(40, 12, 16, 1.0)

cells = [
    (x, 0, Cell(symbol=ch, fg=Rgb(255, 255, 255), bg=Rgb(0, 0, 139), modifier=Modifier.BOLD))
    for x, ch in enumerate("Hello")
]
backend.draw(cells)

width, height = backend.pixmap_width(), backend.pixmap_height()
rgb = backend.pixmap_data()    # flat RGB bytes, 3 per pixel
rgba = backend.pixmap_rgba()   # flat RGBA bytes, alpha always 255
```

To save the result:

```python
from PIL import Image

Image.frombytes("RGB", (width, height), rgb).save("frame.png")
```

## Fonts

`SoftBackend.with_default_font(width, height, font_size, scale_factor)`
uses Pillow's bundled scalable font; it raises `RuntimeError` if the
installed Pillow cannot provide one.

`SoftBackend.with_font(width, height, font_size, font_data, scale_factor)`
takes the bytes of a TrueType or OpenType font:

```python
with open("MyMono.ttf", "rb") as fh:
    backend = SoftBackend.with_font(80, 24, 16, fh.read(), 1.0)
```

The constructor itself, `SoftBackend(width, height, font_size, load_font,
scale_factor=1.0)`, accepts any callable that takes a pixel size and
returns a Pillow `FreeTypeFont`.

The cell size is taken from the full block glyph `█` (falling back to the
font's metrics), reduced to 90 % of its width and 85 % of its height.
Bold text is drawn with a one-pixel stroke and italic text is sheared.

Width and height must be between 0 and 65535 cells, and the font size and
scale factor must be positive; otherwise `ValueError` is raised.

## High-DPI output

The scale factor keeps the cell grid the same but draws every cell at a
higher pixel resolution: with `2.0` the pixmap is twice as wide and twice
as tall.

## The backend

`softterm.backend.SoftBackend` offers the operations a terminal UI
library expects from a backend:

- `draw(content)` takes an iterable of `(x, y, cell)` updates, stores
  copies of them in the buffer and repaints only those cells, plus any
  blinking cells.
- `clear()` resets every cell and fills the pixmap with the default
  background colour.
- `resize(width, height)` changes the grid size and redraws everything.
- `set_font_size(font_size)` reloads and re-measures the font, rebuilds
  the pixmap and redraws everything; it is meant to be called rarely.
- `redraw()` repaints the whole pixmap from the buffer.
- `size()` returns the grid size as a `Size`; `window_size()` returns a
  `WindowSize` holding the grid size (`columns_rows`) and the pixmap size
  (`pixels`).
- `show_cursor()`, `hide_cursor()`, `get_cursor_position()`,
  `set_cursor_position(position)` and `flush()` complete the set.

Its `buffer` attribute holds the current cells and `rgb_pixmap` the
rendered image. `always_redraw` lists the cells that blink.

Each `draw` call advances a blink counter. Rapid-blink text is hidden on
6 draws out of every 100, slow-blink text on 6 draws out of every 200.

## Cells and buffers

`softterm.buffer` provides:

- `Cell(symbol, fg, bg, modifier)` with `reset()`.
- `Modifier`, a flag set: `BOLD`, `DIM`, `ITALIC`, `UNDERLINED`,
  `SLOW_BLINK`, `RAPID_BLINK`, `REVERSED`, `HIDDEN`, `CROSSED_OUT`.
- `Rect(x, y, width, height)` with `area` and `size()`, and `Size(width, height)`.
- `Buffer(area)`, indexed by `(x, y)` (an `IndexError` outside the area),
  with `cell(x, y)` returning `None` outside the area, iteration over
  `(x, y, cell)`, `reset()` and `resize(area)`.

## Colours

`softterm.colors` holds the named palette `Color` (including `RESET`),
`Rgb(r, g, b)` and `Indexed(n)` colours (components outside 0–255 raise
`ValueError`), and the helpers:

- `to_rgb(color, is_fg)` resolves any colour to an `(r, g, b)` triple;
  `Color.RESET` is `RESET_FOREGROUND` (light grey) as a foreground and
  `RESET_BACKGROUND` (near black) as a background.
- `blend_rgba(fg, bg)` composites one RGBA colour over another and returns RGB.
- `dim_rgb(color)` darkens a colour to about 30 % brightness.

Underlining and crossing out are drawn by following each character with a
combining mark; `softterm.backend.add_underline` and `add_strikeout` do
this on their own.

## The pixmap

`softterm.pixmap.RgbPixmap` is the image the backend draws into. It can be
used on its own:

```python
from softterm.pixmap import RgbPixmap

pm = RgbPixmap(4, 2)
pm.fill((24, 24, 24))
pm.put_pixel(1, 1, (255, 0, 0))
assert pm.get_pixel(1, 1) == (255, 0, 0)
```

Coordinates outside the pixmap raise `IndexError`. `width()`, `height()`,
`data()` and `to_rgba()` give its size and contents.

## What it does not do

`softterm` is only the rendering end. It has no widgets, layout or frame
diffing, so the caller decides which cells to pass to `draw`. The cursor
is tracked but never drawn, and glyphs are drawn as single-colour
coverage, so colour emoji are not shown in colour. It opens no window and
reads no keyboard input.

## Running the tests

```
pip install softterm[test]
pytest
```