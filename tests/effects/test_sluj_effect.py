"""
Tests for the slüj effect.
"""

import pytest

from piosi.core.constants import EffectKind
from piosi.effects import SlujEffect, apply_effect, sluj_damage, sluj_interval, tick_unit


@pytest.fixture
def target(make_enemy):
    return make_enemy(name="Target", hp=100)


@pytest.mark.parametrize(
    "level, interval, damage",
    [(1, 4, 2), (2, 3, 4), (3, 2, 6), (4, 1, 8), (5, 1, 10), (9, 1, 18)],
)
def test_interval_and_damage(level, interval, damage):
    assert sluj_interval(level) == interval
    assert sluj_damage(level) == damage


def test_level_one_bites_every_fourth_tick(target, messages):
    effect = SlujEffect(level=1, remaining_duration=8)
    damage = [effect.tick(target, messages) for _ in range(8)]
    assert damage == [0, 0, 0, 2, 0, 0, 0, 2]
    assert target.hp == 96
    assert effect.tick_counter == 8
    assert effect.expired


def test_level_five_bites_every_tick(target, messages):
    effect = SlujEffect(level=5, remaining_duration=3)
    damage = [effect.tick(target, messages) for _ in range(3)]
    assert damage == [10, 10, 10]
    assert target.hp == 70
    assert messages[0] == "Target takes 10 slüj damage due to its slüj effect!"


def test_duration_runs_down_without_damage(target, messages):
    effect = SlujEffect(level=1, remaining_duration=2)
    effect.tick(target, messages)
    assert effect.remaining_duration == 1
    assert target.hp == 100


def test_expiry_is_logged_and_removes_effect(target, messages):
    apply_effect(target, SlujEffect(level=2, remaining_duration=3))
    for _ in range(3):
        tick_unit(target, messages)
    assert EffectKind.SLUJ not in target.status_effects
    assert target.hp == 96
    assert messages[-1] == "Target's slüj effect wears off."
