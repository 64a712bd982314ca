"""
Tests for enemy movement and melee.
"""

import pytest

from piosi.combat.battlefield import Battlefield
from piosi.combat.enemy_ai import attack_adjacent, find_closest_hero, move_enemy


@pytest.fixture
def field():
    return Battlefield(6, 6)


def test_closest_hero_ties_go_to_party_order(make_hero, make_enemy):
    enemy = make_enemy(x=2, y=2)
    first = make_hero(name="First", x=0, y=2)
    second = make_hero(name="Second", x=4, y=2)
    assert find_closest_hero(enemy, [first, second]) is first
    assert find_closest_hero(enemy, [second, first]) is second


def test_closest_hero_skips_dead(make_hero, make_enemy):
    enemy = make_enemy(x=2, y=2)
    dead = make_hero(name="Dead", x=2, y=3, hp=0)
    alive = make_hero(name="Alive", x=5, y=5)
    assert find_closest_hero(enemy, [dead, alive]) is alive
    assert find_closest_hero(enemy, [dead]) is None


def test_moves_along_larger_delta(field, make_hero, make_enemy):
    hero = make_hero(x=0, y=1)
    enemy = make_enemy(x=4, y=3)
    field.place(hero)
    field.place(enemy)
    assert move_enemy(enemy, [hero], field)
    assert enemy.position == (3, 3)
    assert field.get(3, 3) == enemy.symbol
    assert field.is_empty(4, 3)


def test_blocked_step_tries_perpendicular_axis(field, make_hero, make_enemy):
    hero = make_hero(x=0, y=1)
    enemy = make_enemy(x=2, y=2)
    field.place(hero)
    field.place(enemy)
    field.place_solid(1, 2)
    assert move_enemy(enemy, [hero], field)
    assert enemy.position == (2, 1)


def test_fully_blocked_enemy_stays(field, make_hero, make_enemy):
    hero = make_hero(x=0, y=0)
    enemy = make_enemy(x=2, y=0)
    field.place(hero)
    field.place(enemy)
    field.place_solid(1, 0)
    assert not move_enemy(enemy, [hero], field)
    assert enemy.position == (2, 0)


def test_no_hero_no_move(field, make_enemy):
    enemy = make_enemy(x=2, y=2)
    field.place(enemy)
    assert not move_enemy(enemy, [], field)


def test_attacks_every_adjacent_hero(field, make_hero, make_enemy, messages):
    enemy = make_enemy(x=1, y=1, attack=3)
    above = make_hero(name="Above", symbol="A", x=1, y=0)
    right = make_hero(name="Right", symbol="R", x=2, y=1)
    far = make_hero(name="Far", symbol="F", x=4, y=4)
    for unit in (enemy, above, right, far):
        field.place(unit)
    defeated = attack_adjacent(enemy, [right, above, far], field, messages)
    assert defeated == []
    assert above.hp == 7
    assert right.hp == 7
    assert far.hp == 10
    assert messages == [
        "Enemy attacks Above for 3 damage! (Hero HP: 7)",
        "Enemy attacks Right for 3 damage! (Hero HP: 7)",
    ]


def test_defeated_hero_is_cleared(field, make_hero, make_enemy, messages):
    enemy = make_enemy(x=1, y=1, attack=10)
    hero = make_hero(x=1, y=2, hp=4)
    field.place(enemy)
    field.place(hero)
    defeated = attack_adjacent(enemy, [hero], field, messages)
    assert defeated == [hero]
    assert field.is_empty(1, 2)
    assert messages[-1] == "Hero is defeated!"
