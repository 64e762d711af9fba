import pytest

from softterm.backend import SoftBackend, WindowSize, add_strikeout, add_underline
from softterm.buffer import Cell, Modifier, Size
from softterm.colors import RESET_BACKGROUND, RESET_FOREGROUND, Rgb, dim_rgb

RED = Rgb(255, 0, 0)
BLACK = Rgb(0, 0, 0)
WHITE = Rgb(255, 255, 255)


@pytest.fixture
def backend():
    return SoftBackend.with_default_font(4, 2, 16)


def cell_pixels(backend, cx, cy):
    cw = int(backend.char_width * backend.scale_factor)
    ch = int(backend.char_height * backend.scale_factor)
    return {
        backend.rgb_pixmap.get_pixel(px, py)
        for py in range(cy * ch, (cy + 1) * ch)
        for px in range(cx * cw, (cx + 1) * cw)
    }


def test_add_strikeout():
    assert add_strikeout("ab") == "a\u0336b\u0336"
    assert add_strikeout("") == ""


def test_add_underline():
    assert add_underline("xy") == "x\u0332y\u0332"


def test_pixmap_dimensions_follow_cell_size(backend):
    assert backend.char_width > 0 and backend.char_height > 0
    assert backend.pixmap_width() == backend.char_width * 4
    assert backend.pixmap_height() == backend.char_height * 2
    assert len(backend.pixmap_data()) == 3 * backend.pixmap_width() * backend.pixmap_height()


def test_new_backend_is_cleared(backend):
    pixels = set(zip(*[iter(backend.pixmap_data())] * 3))
    assert pixels == {RESET_BACKGROUND}


def test_rgba_has_full_alpha(backend):
    rgba = backend.pixmap_rgba()
    assert len(rgba) == 4 * backend.pixmap_width() * backend.pixmap_height()
    assert set(rgba[3::4]) == {255}


def test_draw_background(backend):
    backend.draw([(1, 0, Cell(" ", bg=RED))])
    assert cell_pixels(backend, 1, 0) == {(255, 0, 0)}
    assert cell_pixels(backend, 0, 1) == {RESET_BACKGROUND}
    assert backend.buffer[(1, 0)].bg == RED


def test_draw_copies_cell(backend):
    cell = Cell("x", bg=RED)
    backend.draw([(0, 0, cell)])
    cell.symbol = "y"
    assert backend.buffer[(0, 0)].symbol == "x"


def test_reversed_background_uses_foreground(backend):
    backend.draw([(0, 0, Cell(" ", modifier=Modifier.REVERSED))])
    assert cell_pixels(backend, 0, 0) == {RESET_FOREGROUND}


def test_dim_background(backend):
    backend.draw([(0, 0, Cell(" ", bg=RED, modifier=Modifier.DIM))])
    assert cell_pixels(backend, 0, 0) == {dim_rgb((255, 0, 0))}


def test_visible_text_draws_foreground(backend):
    backend.draw([(0, 0, Cell("M", fg=WHITE, bg=BLACK))])
    assert max(backend.pixmap_data()) == 255


def test_hidden_text_is_invisible(backend):
    backend.draw([(0, 0, Cell("M", fg=WHITE, bg=BLACK, modifier=Modifier.HIDDEN))])
    assert cell_pixels(backend, 0, 0) == {(0, 0, 0)}


def test_styled_text_renders(backend):
    style = Modifier.BOLD | Modifier.ITALIC | Modifier.UNDERLINED | Modifier.CROSSED_OUT
    backend.draw([(0, 0, Cell("M", fg=WHITE, bg=BLACK, modifier=style))])
    assert max(backend.pixmap_data()) == 255


def test_blinking_cells_are_tracked(backend):
    backend.draw([(2, 1, Cell("M", modifier=Modifier.SLOW_BLINK))])
    assert (2, 1) in backend.always_redraw
    backend.redraw()
    assert backend.always_redraw == frozenset({(2, 1)})


def test_blink_counters(backend):
    for _ in range(20):
        backend.draw([])
    assert backend.blink_counter == 20
    assert backend.blinking_slow
    assert not backend.blinking_fast
    for _ in range(80):
        backend.draw([])
    assert backend.blink_counter == 100
    assert backend.blinking_fast
    assert not backend.blinking_slow


def test_slow_blink_hides_text_while_blinking(backend):
    for _ in range(19):
        backend.draw([])
    backend.draw([(0, 0, Cell("M", fg=WHITE, bg=BLACK, modifier=Modifier.SLOW_BLINK))])
    assert backend.blinking_slow
    assert cell_pixels(backend, 0, 0) == {(0, 0, 0)}


def test_clear_resets_buffer_and_pixmap(backend):
    backend.draw([(0, 0, Cell("M", fg=WHITE, bg=RED))])
    backend.clear()
    assert backend.buffer[(0, 0)] == Cell()
    assert set(zip(*[iter(backend.pixmap_data())] * 3)) == {RESET_BACKGROUND}


def test_cursor(backend):
    assert backend.get_cursor_position() == (0, 0)
    backend.set_cursor_position((3, 1))
    assert backend.get_cursor_position() == (3, 1)
    backend.show_cursor()
    assert backend.cursor is True
    backend.hide_cursor()
    assert backend.cursor is False


def test_size_and_window_size(backend):
    assert backend.size() == Size(4, 2)
    assert backend.window_size() == WindowSize(
        Size(4, 2), Size(backend.pixmap_width(), backend.pixmap_height())
    )


def test_resize(backend):
    backend.resize(6, 3)
    assert backend.size() == Size(6, 3)
    assert backend.pixmap_width() == backend.char_width * 6
    assert backend.pixmap_height() == backend.char_height * 3
    assert backend.buffer[(5, 2)] == Cell()


def test_set_font_size_grows_pixmap(backend):
    before = (backend.pixmap_width(), backend.pixmap_height())
    backend.set_font_size(32)
    assert backend.pixmap_width() > before[0]
    assert backend.pixmap_height() > before[1]
    assert backend.pixmap_width() == backend.char_width * 4


def test_scale_factor_scales_pixmap():
    scaled = SoftBackend.with_default_font(3, 2, 16, 2.0)
    assert scaled.scale_factor == 2.0
    assert scaled.pixmap_width() == int(scaled.char_width * 2.0) * 3
    assert scaled.pixmap_height() == int(scaled.char_height * 2.0) * 2


def test_invalid_font_size():
    with pytest.raises(ValueError):
        SoftBackend.with_default_font(2, 2, 0)


def test_invalid_dimensions():
    with pytest.raises(ValueError):
        SoftBackend.with_default_font(-1, 2, 16)


def test_draw_outside_area(backend):
    with pytest.raises(IndexError):
        backend.draw([(4, 0, Cell("x"))])


def test_with_font_rejects_garbage():
    with pytest.raises(OSError):
        SoftBackend.with_font(2, 2, 16, b"not a font")


def test_flush_leaves_image_alone(backend):
    backend.draw([(0, 0, Cell(" ", bg=RED))])
    before = backend.pixmap_data()
    backend.flush()
    assert backend.pixmap_data() == before