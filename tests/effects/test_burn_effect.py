"""
Tests for the burn effect.
"""

import pytest
from pydantic import ValidationError

from piosi.core.constants import EffectKind
from piosi.effects import BurnEffect, apply_effect, tick_unit


@pytest.fixture
def target(make_enemy):
    return make_enemy(name="Target", hp=50)


@pytest.mark.parametrize("duration", [1, 3, 5])
def test_burn_ticks_exactly_its_duration(target, messages, duration):
    apply_effect(target, BurnEffect(damage_per_tick=3, remaining_duration=duration))
    for _ in range(duration + 3):
        tick_unit(target, messages)
    assert target.hp == 50 - 3 * duration
    assert EffectKind.BURN not in target.status_effects
    assert len(messages) == duration


def test_burn_message(target, messages):
    apply_effect(target, BurnEffect(damage_per_tick=2, remaining_duration=2))
    assert tick_unit(target, messages) == EffectKind.BURN
    assert messages == ["Target is burned and takes 2 damage!"]


def test_burn_is_removed_on_the_tick_it_expires(target, messages):
    apply_effect(target, BurnEffect(damage_per_tick=1, remaining_duration=1))
    tick_unit(target, messages)
    assert target.hp == 49
    assert target.status_effects == {}


def test_burn_keeps_ticking_a_unit_at_zero_hp(target, messages):
    target.hp = 2
    effect = BurnEffect(damage_per_tick=2, remaining_duration=3)
    effect.tick(target, messages)
    assert target.hp == 0
    effect.tick(target, messages)
    assert target.hp == -2
    assert effect.remaining_duration == 1


def test_burn_rejects_negative_damage():
    with pytest.raises(ValidationError):
        BurnEffect(damage_per_tick=-1, remaining_duration=2)


def test_reapplying_refreshes(target, messages):
    assert not apply_effect(target, BurnEffect(damage_per_tick=1, remaining_duration=1))
    assert apply_effect(target, BurnEffect(damage_per_tick=4, remaining_duration=2), messages)
    assert target.status_effects[EffectKind.BURN].damage_per_tick == 4
    assert messages == ["Burn refreshed on Target."]


def test_cannot_afflict_defeated_unit(target):
    target.hp = 0
    assert not apply_effect(target, BurnEffect(damage_per_tick=1, remaining_duration=1))
    assert target.status_effects == {}
