from datetime import timedelta

import pytest

from shardgame.activities import (
    CurrentActivity,
    Timer,
    TimerMode,
    progress_current_activity,
)
from shardgame.world import World


def test_once_timer_finishes_once():
    timer = Timer(timedelta(seconds=1))
    assert not timer.tick(0.5).finished
    timer.tick(0.5)
    assert timer.finished and timer.just_finished
    timer.tick(0.5)
    assert timer.finished and not timer.just_finished
    assert timer.elapsed == timer.duration


def test_repeating_timer_wraps():
    timer = Timer(timedelta(seconds=1), TimerMode.REPEATING)
    timer.tick(timedelta(seconds=2.5))
    assert timer.times_finished_this_tick == 2
    assert timer.elapsed == timedelta(seconds=0.5)
    timer.tick(0.1)
    assert not timer.just_finished


def test_reset_clears_state():
    timer = Timer(1)
    timer.tick(2)
    timer.reset()
    assert not timer.finished
    assert timer.elapsed == timedelta(0)


def test_negative_delta_rejected():
    with pytest.raises(ValueError):
        Timer(1).tick(-1)


def test_activity_kinds():
    assert CurrentActivity.idle().is_idle()
    assert not CurrentActivity.melee(Timer(1)).is_idle()


def test_progress_returns_to_idle():
    world = World()
    entity = world.insert(world.spawn(), CurrentActivity.melee(Timer(timedelta(seconds=1))))
    progress_current_activity(world, 0.5)
    assert not world.get(entity, CurrentActivity).is_idle()
    progress_current_activity(world, 0.5)
    assert world.get(entity, CurrentActivity).is_idle()


def test_progress_leaves_idle_alone():
    world = World()
    entity = world.insert(world.spawn(), CurrentActivity.idle())
    progress_current_activity(world, 10)
    assert world.get(entity, CurrentActivity).is_idle()