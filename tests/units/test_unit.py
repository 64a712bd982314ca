"""
Tests for the Unit model.
"""

import pytest
from pydantic import ValidationError

from piosi.core.constants import StatKind, UnitKind
from piosi.units.unit import Unit


def test_max_hp_defaults_to_hp():
    unit = Unit(name="Knight", symbol="K", hp=18)
    assert unit.max_hp == 18
    assert unit.kind == UnitKind.HERO
    assert unit.is_hero


def test_negative_stats_are_rejected():
    with pytest.raises(ValidationError):
        Unit(name="Broken", symbol="B", hp=5, agility=-1)


def test_damage_and_restore():
    unit = Unit(name="Knight", symbol="K", hp=10)
    assert unit.take_damage(12) == -2
    assert unit.is_dead()
    unit.restore()
    assert unit.hp == 10
    assert unit.is_alive()


def test_sparse_stats():
    unit = Unit(name="Cleric", symbol="C", hp=12, stats={"heal": 4})
    assert unit.stat(StatKind.HEAL) == 4
    assert unit.stat(StatKind.YEET) == 0
    assert unit.has_stat(StatKind.HEAL)
    assert not unit.has_stat(StatKind.YEET)
    unit.add_stat(StatKind.GHIS, 2)
    assert unit.stat(StatKind.GHIS) == 2


def test_unknown_stat_is_rejected():
    with pytest.raises(ValidationError):
        Unit(name="Odd", symbol="O", hp=1, stats={"telekinesis": 1})


def test_distance_is_manhattan():
    a = Unit(name="A", symbol="A", hp=1, x=1, y=1)
    b = Unit(name="B", symbol="B", hp=1, x=4, y=-1)
    assert a.distance_to(b) == 5


def test_identical_units_are_still_distinct_objects():
    a = Unit(name="Twin", symbol="T", hp=5)
    b = Unit(name="Twin", symbol="T", hp=5)
    assert a == b
    assert a is not b


def test_derived_max_hp_is_not_marked_as_set():
    derived = Unit(name="Derived", symbol="D", hp=18)
    explicit = Unit(name="Explicit", symbol="E", hp=18, max_hp=30)
    assert "max_hp" not in derived.model_fields_set
    assert "max_hp" in explicit.model_fields_set
