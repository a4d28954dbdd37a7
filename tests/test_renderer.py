"""Pixel-level tests for the renderer on an offscreen ImageSurface."""

from flipbook.core.tool_controller import ToolMode
from flipbook.models.stroke import Stroke


def red_at(surface, x, y):
    return surface.image.pixelColor(x, y).red()


def horizontal_stroke(y=10):
    return Stroke.from_points([(10, y), (100, y)], "#000000", 3)


def test_background_is_filled(session, renderer, surface):
    renderer.redraw(session)
    assert surface.image.pixelColor(5, 5).name() == "#ffffff"
    assert surface.image.pixelColor(5, 5).alpha() == 255


def test_stroke_is_drawn(session, renderer, surface):
    session.timeline.append(horizontal_stroke())
    renderer.redraw(session)
    assert surface.image.pixelColor(50, 10).name() == "#000000"
    assert red_at(surface, 50, 30) == 255


def test_single_point_stroke_draws_nothing(session, renderer, surface):
    session.timeline.append(Stroke.from_points([(50, 50)], "#000000", 20))
    renderer.redraw(session)
    assert surface.image.pixelColor(50, 50).name() == "#ffffff"


def test_later_strokes_paint_over_earlier(session, renderer, surface):
    session.timeline.append(horizontal_stroke())
    session.timeline.append(Stroke.from_points([(50, 0), (50, 40)], "#ff0000", 6))
    renderer.redraw(session)
    assert surface.image.pixelColor(50, 10).name() == "#ff0000"


def test_area_eraser_stroke_covers_ink(session, renderer, surface):
    session.timeline.append(horizontal_stroke())
    session.timeline.append(Stroke.from_points([(40, 10), (60, 10)], "#FFFFFF", 20))
    renderer.redraw(session)
    assert red_at(surface, 50, 10) == 255


class TestOnionSkin:
    def test_previous_frame_is_faded(self, session, renderer, surface):
        session.timeline.append(horizontal_stroke())
        session.insert_frame()
        renderer.redraw(session)
        assert 190 <= red_at(surface, 50, 10) <= 215

    def test_disabled_onion_skin(self, session, renderer, surface):
        session.timeline.append(horizontal_stroke())
        session.insert_frame()
        session.toggle_onion_skin()
        renderer.redraw(session)
        assert red_at(surface, 50, 10) == 255

    def test_no_onion_skin_on_first_frame(self, session, renderer, surface):
        session.insert_frame()
        session.timeline.append(horizontal_stroke())
        session.prev_frame()
        renderer.redraw(session)
        assert red_at(surface, 50, 10) == 255


class TestSelection:
    def test_selected_stroke_is_wider(self, session, renderer, surface):
        stroke = horizontal_stroke()
        session.timeline.append(stroke)
        renderer.redraw(session)
        assert red_at(surface, 50, 12) == 255

        session.tools.set_mode(ToolMode.MOVE)
        session.select(stroke)
        renderer.redraw(session)
        assert red_at(surface, 50, 12) < 60

    def test_mode_switch_removes_highlight(self, session, renderer, surface):
        stroke = horizontal_stroke()
        session.timeline.append(stroke)
        session.tools.set_mode(ToolMode.MOVE)
        session.select(stroke)

        session.tools.set_mode(ToolMode.DRAW)
        renderer.redraw(session)
        assert session.selected_stroke is None
        assert red_at(surface, 50, 12) == 255

    def test_no_highlight_while_playing(self, session, renderer, surface):
        stroke = horizontal_stroke()
        session.timeline.append(stroke)
        session.select(stroke)
        session.set_playing(True)
        renderer.redraw(session)
        assert red_at(surface, 50, 12) == 255


def test_render_strokes_ignores_selection_and_onion(session, renderer, surface):
    session.timeline.append(horizontal_stroke())
    session.insert_frame()
    renderer.render_strokes(session.timeline.strokes)
    assert red_at(surface, 50, 10) == 255


def test_png_export(session, renderer, surface):
    renderer.redraw(session)
    assert surface.to_png_bytes().startswith(b"\x89PNG")
    assert surface.to_data_url().startswith("data:image/png;base64,")
