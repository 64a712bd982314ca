"""
Tests for the battle engine turn flow.
"""

import pytest

from piosi.combat.engine import BattleEngine, EngineSettings
from piosi.core.constants import AttackOutcomeKind, EffectKind, PickupKind, TurnPhase
from piosi.core.scheduler import ManualScheduler
from piosi.effects import BurnEffect, apply_effect
from piosi.units.pickup import Pickup


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def callbacks():
    return {"level_complete": 0, "game_over": 0}


def build(party, enemies, scheduler, messages, callbacks, rows=5, cols=5, wall_hp=10, **kwargs):
    def level_complete():
        callbacks["level_complete"] += 1

    def game_over():
        callbacks["game_over"] += 1

    return BattleEngine(
        party,
        enemies,
        rows,
        cols,
        wall_hp,
        log=messages,
        on_level_complete=level_complete,
        on_game_over=game_over,
        scheduler=scheduler,
        **kwargs,
    )


def test_initial_state(make_hero, scheduler, messages, callbacks):
    knight = make_hero(name="Knight", symbol="K", agility=3)
    archer = make_hero(name="Archer", symbol="A", agility=2)
    engine = build([knight, archer], [], scheduler, messages, callbacks)
    assert engine.current_unit is knight
    assert engine.move_points == 3
    assert engine.phase == TurnPhase.PARTY_TURN
    assert knight.position == (0, 0)
    assert archer.position == (1, 0)
    assert engine.battlefield.get(1, 0) == "A"
    assert all(engine.battlefield.is_wall(x, 4) for x in range(5))


def test_dead_heroes_are_left_out(make_hero, scheduler, messages, callbacks):
    fallen = make_hero(name="Fallen", hp=0)
    alive = make_hero(name="Alive", symbol="L")
    engine = build([fallen, alive], [], scheduler, messages, callbacks)
    assert engine.party == [alive]


def test_empty_party_is_game_over(scheduler, messages, callbacks):
    engine = build([], [], scheduler, messages, callbacks)
    assert engine.phase == TurnPhase.GAME_OVER
    assert not engine.move_unit(1, 0)
    assert engine.attack_in_direction(1, 0) is None


def test_scenario_wall_collapse_freezes_engine(make_hero, make_enemy, scheduler, messages, callbacks):
    """A hero with 4 attack breaks a 4 HP wall and the engine stops reacting."""
    hero = make_hero(attack=4, range=1, agility=2)
    enemy = make_enemy(x=4, y=0)
    engine = build([hero], [enemy], scheduler, messages, callbacks, rows=2, cols=5, wall_hp=4)

    outcome = engine.attack_in_direction(0, 1)
    assert outcome.kind == AttackOutcomeKind.HIT_WALL
    assert engine.wall_hp == 0
    assert engine.transitioning_level
    assert engine.phase == TurnPhase.TRANSITIONING
    assert "The Wall Collapses!" in messages

    before = engine.snapshot()
    assert not engine.move_unit(1, 0)
    assert engine.attack_in_direction(1, 0) is None
    assert not engine.enter_attack_mode()
    engine.next_turn()
    engine.enemy_turn()
    assert engine.snapshot() == before
    assert enemy.position == (4, 0)

    assert EngineSettings().collapse_delay == 1.5
    scheduler.advance(1.0)
    assert callbacks["level_complete"] == 0
    scheduler.advance(1.0)
    assert callbacks["level_complete"] == 1


def test_scenario_moves_roll_into_enemy_turn(make_hero, scheduler, messages, callbacks):
    """Two moves spend the agility, the enemies play, and the hero gets its points back."""
    hero = make_hero(agility=2)
    engine = build([hero], [], scheduler, messages, callbacks)
    assert engine.move_unit(1, 0)
    assert engine.move_points == 1
    assert engine.move_unit(0, 1)
    assert hero.position == (1, 1)
    assert engine.move_points == 2
    assert engine.state.turns_taken == 1
    assert engine.phase == TurnPhase.PARTY_TURN
    assert messages[-3:] == [
        "Enemy turn begins.",
        "Enemy turn completed.",
        "Now it's Hero's turn.",
    ]


def test_status_effects_tick_on_both_sides_of_enemy_turn(make_hero, scheduler, messages, callbacks):
    hero = make_hero(agility=1, hp=10)
    apply_effect(hero, BurnEffect(damage_per_tick=1, remaining_duration=5))
    engine = build([hero], [], scheduler, messages, callbacks)
    engine.move_unit(1, 0)
    assert hero.hp == 8
    assert hero.status_effects[EffectKind.BURN].remaining_duration == 3


def test_move_rejections(make_hero, make_enemy, scheduler, messages, callbacks):
    hero = make_hero(agility=3)
    enemy = make_enemy(x=1, y=0)
    engine = build([hero], [enemy], scheduler, messages, callbacks)
    assert not engine.move_unit(-1, 0)
    assert not engine.move_unit(1, 0)
    assert engine.move_points == 3
    assert hero.position == (0, 0)


def test_cannot_walk_into_wall(make_hero, scheduler, messages, callbacks):
    hero = make_hero(agility=3)
    engine = build([hero], [], scheduler, messages, callbacks, rows=2, cols=3)
    assert not engine.move_unit(0, 1)
    assert engine.move_points == 3


def test_attack_mode_blocks_movement(make_hero, scheduler, messages, callbacks):
    hero = make_hero(agility=2)
    engine = build([hero], [], scheduler, messages, callbacks)
    assert engine.enter_attack_mode()
    assert engine.awaiting_attack_direction
    assert engine.phase == TurnPhase.AWAITING_ATTACK_DIRECTION
    assert not engine.move_unit(1, 0)
    assert engine.cancel_attack_mode()
    assert engine.move_unit(1, 0)


def test_attack_pauses_before_next_turn(make_hero, scheduler, messages, callbacks):
    first = make_hero(name="First", symbol="1", agility=2)
    second = make_hero(name="Second", symbol="2", agility=4)
    engine = build([first, second], [], scheduler, messages, callbacks)
    outcome = engine.attack_in_direction(0, -1)
    assert outcome.kind == AttackOutcomeKind.MISS
    assert engine.busy
    assert engine.current_unit is first
    assert not engine.move_unit(1, 0)
    assert engine.attack_in_direction(1, 0) is None

    scheduler.advance(0.3)
    assert not engine.busy
    assert engine.current_unit is second
    assert engine.move_points == 4


def test_defeated_enemy_leaves_the_battle(make_hero, make_enemy, scheduler, messages, callbacks):
    hero = make_hero(attack=5)
    enemy = make_enemy(x=1, y=0, hp=5)
    engine = build([hero], [enemy], scheduler, messages, callbacks)
    outcome = engine.attack_in_direction(1, 0)
    assert outcome.defeated
    assert engine.enemies == []
    assert engine.battlefield.is_empty(1, 0)


def test_wall_damage_is_logged(make_hero, scheduler, messages, callbacks):
    hero = make_hero(attack=3)
    engine = build([hero], [], scheduler, messages, callbacks, rows=2, cols=3, wall_hp=10)
    engine.attack_in_direction(0, 1)
    assert engine.wall_hp == 7
    assert "Hero attacks the wall for 3 damage! (Wall HP: 7)" in messages
    assert not engine.transitioning_level


def test_party_wipe_is_game_over(make_hero, make_enemy, scheduler, messages, callbacks):
    hero = make_hero(hp=1, agility=1)
    enemy = make_enemy(x=1, y=0, attack=5)
    engine = build([hero], [enemy], scheduler, messages, callbacks)
    engine.attack_in_direction(0, -1)
    scheduler.settle()
    assert engine.party == []
    assert engine.phase == TurnPhase.GAME_OVER
    assert callbacks["game_over"] == 1
    assert "All heroes have been defeated! Game Over." in messages
    assert not engine.move_unit(1, 0)


def test_turn_index_stays_valid_when_heroes_fall(make_hero, make_enemy, scheduler, messages, callbacks):
    first = make_hero(name="First", symbol="1", agility=1, hp=50)
    second = make_hero(name="Second", symbol="2", agility=1, hp=1)
    enemy = make_enemy(x=1, y=1, attack=2, agility=0)
    engine = build([first, second], [enemy], scheduler, messages, callbacks)
    assert engine.move_unit(0, 1)
    assert engine.current_unit is second
    engine.attack_in_direction(0, -1)
    scheduler.settle()
    assert second.hp <= 0
    assert first.hp == 48
    assert len(engine.party) == 1 and engine.party[0] is first
    assert engine.state.current_unit_index == 0
    assert engine.current_unit is first
    assert engine.move_points == 1


def test_enemies_out_of_bounds_are_relocated(make_hero, make_enemy, scheduler, messages, callbacks):
    hero = make_hero()
    stray = make_enemy(x=9, y=9)
    squatter = make_enemy(name="Squatter", symbol="S", x=0, y=0)
    engine = build([hero], [stray, squatter], scheduler, messages, callbacks)
    assert stray.position == (4, 3)
    assert squatter.position == (1, 0)
    assert engine.battlefield.get(1, 0) == "S"


def test_enemy_generator_receives_grid_and_turns(make_enemy, make_hero, scheduler, messages, callbacks):
    seen = []

    def generator(rows, cols, turns_taken):
        seen.append((rows, cols, turns_taken))
        return [make_enemy(x=cols - 1, y=1)]

    engine = build([make_hero()], generator, scheduler, messages, callbacks, rows=4, cols=6, turns_taken=3)
    assert seen == [(4, 6, 3)]
    assert len(engine.enemies) == 1


def test_pickup_is_collected(make_hero, scheduler, messages, callbacks):
    hero = make_hero(agility=2, hp=10)
    vittle = Pickup(kind=PickupKind.VITTLE, x=1, y=0, amount=5)
    engine = build([hero], [], scheduler, messages, callbacks, pickups=[vittle])
    assert engine.battlefield.get(1, 0) == PickupKind.VITTLE.symbol
    assert engine.move_unit(1, 0)
    assert hero.hp == 15
    assert engine.pickups == []
    assert "Hero picks up a vittle for 5 HP! (New HP: 15)" in messages


def test_enemies_walk_and_strike(make_hero, make_enemy, scheduler, messages, callbacks):
    hero = make_hero(agility=1, hp=20)
    enemy = make_enemy(x=4, y=0, attack=2, agility=2)
    engine = build([hero], [enemy], scheduler, messages, callbacks)
    engine.move_unit(1, 0)
    assert enemy.position == (2, 0)
    assert "Enemy attacks Hero for 2 damage! (Hero HP: 18)" in messages
    assert hero.hp == 18


def test_snapshot_reflects_state(make_hero, scheduler, messages, callbacks):
    hero = make_hero(symbol="K", agility=2)
    engine = build([hero], [], scheduler, messages, callbacks, wall_hp=12)
    engine.enter_attack_mode()
    snapshot = engine.snapshot()
    assert snapshot.grid[0][0] == "K"
    assert snapshot.active_position == (0, 0)
    assert snapshot.awaiting_attack_direction
    assert snapshot.wall_hp == 12
    assert snapshot.move_points == 2


def test_empty_sink_and_settings_are_kept(make_hero, scheduler, messages, callbacks):
    settings = EngineSettings(pacing_delay=0.0, collapse_delay=0.0)
    engine = build(
        [make_hero(attack=20, range=5)], [], scheduler, messages, callbacks, settings=settings
    )
    assert not messages
    assert engine.log is messages
    assert engine.scheduler is scheduler
    assert engine.settings is settings
    engine.attack_in_direction(0, 1)
    assert "The Wall Collapses!" in messages
