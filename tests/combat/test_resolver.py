"""
Tests for line-of-fire attack resolution.
"""

import pytest

from piosi.combat.battlefield import Battlefield
from piosi.combat.resolver import find_unit_at, resolve_line_attack
from piosi.core.constants import AttackOutcomeKind, UnitKind
from piosi.units.unit import Unit


@pytest.fixture
def field():
    field = Battlefield(6, 6)
    field.build_wall_row()
    return field


def test_hits_first_enemy_in_line(field, make_hero, make_enemy, messages):
    hero = make_hero(x=0, y=0, attack=4, range=3)
    near = make_enemy(name="Near", x=2, y=0, hp=10)
    far = make_enemy(name="Far", x=3, y=0, hp=10)
    for unit in (hero, near, far):
        field.place(unit)
    outcome = resolve_line_attack(hero, 1, 0, field, [far, near], messages)
    assert outcome.kind == AttackOutcomeKind.HIT_ENEMY
    assert outcome.target is near
    assert near.hp == 6
    assert far.hp == 10
    assert messages[-1] == "Hero attacks Near for 4 damage! (HP left: 6)"


def test_out_of_range_is_a_miss(field, make_hero, make_enemy, messages):
    hero = make_hero(x=0, y=0, attack=4, range=1)
    enemy = make_enemy(x=2, y=0)
    field.place(hero)
    field.place(enemy)
    outcome = resolve_line_attack(hero, 1, 0, field, [enemy], messages)
    assert outcome.kind == AttackOutcomeKind.MISS
    assert enemy.hp == 10
    assert messages == ["Hero attacks, but there's nothing in range."]


def test_wall_hit_reports_damage(field, make_hero, messages):
    hero = make_hero(x=1, y=4, attack=7, range=1)
    field.place(hero)
    outcome = resolve_line_attack(hero, 0, 1, field, [], messages)
    assert outcome.kind == AttackOutcomeKind.HIT_WALL
    assert outcome.damage == 7


def test_solid_block_stops_the_shot(field, make_hero, make_enemy, messages):
    hero = make_hero(x=0, y=1, range=4)
    enemy = make_enemy(x=3, y=1)
    field.place(hero)
    field.place_solid(1, 1)
    field.place(enemy)
    outcome = resolve_line_attack(hero, 1, 0, field, [enemy], messages)
    assert outcome.kind == AttackOutcomeKind.MISS


def test_defeated_enemy_is_cleared(field, make_hero, make_enemy, messages):
    hero = make_hero(x=0, y=0, attack=10)
    enemy = make_enemy(x=1, y=0, hp=5)
    field.place(hero)
    field.place(enemy)
    outcome = resolve_line_attack(hero, 1, 0, field, [enemy], messages)
    assert outcome.defeated
    assert field.is_empty(1, 0)
    assert messages[-1] == "Enemy is defeated!"


def test_yeet_pushes_surviving_enemy(field, make_hero, make_enemy, messages):
    hero = make_hero(x=0, y=0, attack=2, yeet=2)
    enemy = make_enemy(x=1, y=0, hp=20)
    field.place(hero)
    field.place(enemy)
    outcome = resolve_line_attack(hero, 1, 0, field, [enemy], messages)
    assert outcome.knockback is not None
    assert outcome.knockback.cells_moved == 2
    assert enemy.position == (3, 0)
    assert enemy.hp == 18


def test_find_unit_at_ignores_dead_units(make_enemy):
    dead = make_enemy(x=1, y=1, hp=0)
    alive = make_enemy(name="Alive", x=1, y=1)
    assert find_unit_at([dead, alive], 1, 1) is alive
    assert find_unit_at([dead], 1, 1) is None


def test_yeet_does_not_move_static_walls(field, make_hero, messages):
    hero = make_hero(x=0, y=0, attack=2, yeet=2)
    block = Unit(name="Stone", symbol="█", kind=UnitKind.WALL, x=1, y=0, hp=50)
    field.place(hero)
    field.place(block)
    outcome = resolve_line_attack(hero, 1, 0, field, [block], messages)
    assert outcome.kind == AttackOutcomeKind.HIT_ENEMY
    assert outcome.knockback is None
    assert block.position == (1, 0)
    assert block.hp == 48
