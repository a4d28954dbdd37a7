"""Tests for the stroke store and frame timeline."""

import pytest

from flipbook.models.stroke import Stroke, clone_strokes
from flipbook.models.timeline import Timeline


def make_stroke(x=0):
    return Stroke.from_points([(x, 0), (x + 10, 10)])


def test_new_timeline_has_one_empty_frame():
    timeline = Timeline()
    assert len(timeline) == 1
    assert timeline.current_index == 0
    assert timeline.strokes == []
    assert timeline.previous_strokes is None


def test_append_and_remove():
    timeline = Timeline()
    a, b = make_stroke(0), make_stroke(20)
    timeline.append(a)
    timeline.append(b)
    assert timeline.strokes == [a, b]

    assert timeline.remove_at(0) is a
    assert timeline.strokes == [b]


@pytest.mark.parametrize("index", [-1, 1, 5])
def test_remove_out_of_range_is_noop(index):
    timeline = Timeline()
    stroke = make_stroke()
    timeline.append(stroke)
    assert timeline.remove_at(index) is None
    assert timeline.strokes == [stroke]


def test_replace_all_installs_list():
    timeline = Timeline()
    timeline.append(make_stroke())
    replacement = [make_stroke(50)]
    timeline.replace_all(replacement)
    assert timeline.strokes is replacement


def test_insert_after_current_moves_to_new_frame():
    timeline = Timeline()
    timeline.append(make_stroke())
    timeline.insert_after_current()
    assert len(timeline) == 2
    assert timeline.current_index == 1
    assert timeline.strokes == []
    assert len(timeline.previous_strokes) == 1


def test_insert_in_middle_keeps_following_frames():
    timeline = Timeline([[make_stroke(0)], [make_stroke(1)]])
    timeline.insert_after_current()
    assert timeline.current_index == 1
    assert timeline.frame_at(1) == []
    assert timeline.frame_at(2)[0].points[0].x == 1


def test_duplicate_is_deep_copy():
    timeline = Timeline()
    timeline.append(make_stroke())
    timeline.duplicate_current()

    assert timeline.current_index == 1
    copy, original = timeline.strokes[0], timeline.frame_at(0)[0]
    assert copy == original
    assert copy is not original

    copy.points[0].x = 99
    copy.color = "#ff0000"
    assert original.points[0].x == 0
    assert original.color == "#000000"


def test_prev_next_are_clamped():
    timeline = Timeline()
    timeline.insert_after_current()
    timeline.insert_after_current()
    assert timeline.current_index == 2

    assert timeline.next() is False
    assert timeline.current_index == 2
    assert timeline.is_last()

    assert timeline.prev() is True
    assert timeline.prev() is True
    assert timeline.prev() is False
    assert timeline.current_index == 0
    assert timeline.is_first()


def test_advance_wrapping_cycles():
    timeline = Timeline([[], [], []])
    seen = [timeline.advance_wrapping() for _ in range(4)]
    assert seen == [1, 2, 0, 1]


def test_single_frame_wraps_to_itself():
    timeline = Timeline()
    assert timeline.advance_wrapping() == 0


def test_current_index_setter_rejects_out_of_range():
    timeline = Timeline([[], []])
    timeline.current_index = 1
    assert timeline.current_index == 1
    with pytest.raises(IndexError):
        timeline.current_index = 2


def test_clone_strokes_shares_nothing():
    strokes = [make_stroke(0), make_stroke(5)]
    cloned = clone_strokes(strokes)
    assert cloned == strokes
    assert all(c is not s for c, s in zip(cloned, strokes))
    assert all(c.points[0] is not s.points[0] for c, s in zip(cloned, strokes))
