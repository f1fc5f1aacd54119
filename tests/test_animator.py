"""Tests for TilemapAnimator."""

import dataclasses

import pytest

from conftest import GREEN, RED, make_tilemap, make_tileset
from tilemap2gif.animation import FramePlan, TilemapAnimator
from tilemap2gif.constants import MIN_FRAME_DELAY


def test_static_map_is_a_single_frame(resolved, static_tileset):
    animator = TilemapAnimator(make_tilemap([1, 2, 3, 4]), [resolved(static_tileset)], frame_delay=250)

    animation = animator.generate()

    assert not animator.is_animated
    assert animator.plan() == [FramePlan(0, 250)]
    assert len(animation.frames) == 1
    assert animation.delays == [250]


def test_one_frame_per_visual_change(resolved, animated_tileset):
    animator = TilemapAnimator(make_tilemap([1, 2, 3, 0]), [resolved(animated_tileset)])

    animation = animator.generate()

    assert animator.is_animated
    assert animation.delays == [100, 200]
    assert animation.frames[0].getpixel((0, 0)) == RED
    assert animation.frames[1].getpixel((0, 0)) == GREEN
    assert animation.total_duration == 300


def test_loop_spans_the_global_period(resolved):
    tileset = make_tileset({0: ((0, 100), (1, 200)), 2: ((2, 150), (3, 300))})
    animator = TilemapAnimator(make_tilemap([1, 3, 0, 0]), [resolved(tileset)])

    plans = animator.plan()

    assert [plan.start_ms for plan in plans] == [0, 100, 150, 300, 400, 450, 600, 700]
    assert sum(plan.delay_ms for plan in plans) == 900


def test_unplaced_animation_still_loops_over_period(resolved, animated_tileset):
    animator = TilemapAnimator(make_tilemap([2, 3, 4, 0]), [resolved(animated_tileset)])

    assert animator.plan() == [FramePlan(0, 300)]


def test_short_intervals_use_minimum_delay(resolved):
    tileset = make_tileset({0: ((0, 3), (1, 97))})
    animator = TilemapAnimator(make_tilemap([1, 0, 0, 0]), [resolved(tileset)])

    assert [plan.delay_ms for plan in animator.plan()] == [MIN_FRAME_DELAY, 97]


def test_parallel_rendering_matches_sequential(resolved):
    tileset = make_tileset({0: ((0, 100), (1, 200)), 2: ((2, 150), (3, 300))})
    tilemap = make_tilemap([1, 3, 2, 4])

    sequential = TilemapAnimator(tilemap, [resolved(tileset)]).generate()
    parallel = TilemapAnimator(tilemap, [resolved(tileset)], workers=3).generate()

    assert parallel.delays == sequential.delays
    assert [f.tobytes() for f in parallel.frames] == [f.tobytes() for f in sequential.frames]


def test_hidden_layers_are_not_drawn_by_default(resolved, static_tileset):
    tilemap = make_tilemap([1, 1, 1, 1], [2, 0, 0, 0])
    hidden_top = dataclasses.replace(tilemap.layers[1], visible=False)
    tilemap = dataclasses.replace(tilemap, layers=(tilemap.layers[0], hidden_top))

    frame = TilemapAnimator(tilemap, [resolved(static_tileset)]).generate().frames[0]

    assert frame.getpixel((0, 0)) == RED


def test_close_releases_frames(resolved, animated_tileset):
    animation = TilemapAnimator(make_tilemap([1, 0, 0, 0]), [resolved(animated_tileset)]).generate()

    animation.close()

    with pytest.raises(ValueError):
        animation.frames[0].getpixel((0, 0))


@pytest.mark.parametrize("kwargs", [{"frame_delay": 0}, {"workers": 0}])
def test_invalid_settings(resolved, static_tileset, kwargs):
    with pytest.raises(ValueError):
        TilemapAnimator(make_tilemap([0, 0, 0, 0]), [resolved(static_tileset)], **kwargs)
