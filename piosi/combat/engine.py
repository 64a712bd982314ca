"""
Battle engine module for the combat core.

The BattleEngine owns one level: the battlefield grid, the party, the
enemies, the wall and the turn state. It advances strictly in response to
player calls (move, attack, attack-mode selection); everything timed, the
pacing pause after an attack and the delay before the level-complete
signal, goes through the engine's Scheduler.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, Field

from piosi.core.constants import (
    COLLAPSE_DELAY,
    EMPTY_CELL,
    PACING_DELAY,
    AttackOutcomeKind,
    TurnPhase,
    UnitKind,
)
from piosi.core.logging import LogSink, default_sink, log_debug
from piosi.core.scheduler import ManualScheduler, Scheduler, TaskHandle
from piosi.effects import apply_status_effects
from piosi.units.pickup import Pickup, collect
from piosi.units.unit import Unit

from .battlefield import Battlefield
from .enemy_ai import attack_adjacent, move_enemy
from .resolver import AttackOutcome, resolve_line_attack

# Builds the enemies of a level from (rows, cols, turns_taken).
EnemyGenerator = Callable[[int, int, int], list[Unit]]


class EngineSettings(BaseModel):
    """Timing knobs of a battle engine."""

    pacing_delay: float = Field(
        PACING_DELAY,
        ge=0,
        description="Pause between resolving an attack and advancing the turn.",
    )
    collapse_delay: float = Field(
        COLLAPSE_DELAY,
        ge=0,
        description="Delay between the wall collapse and the level-complete signal.",
    )


class TurnState(BaseModel):
    """Whose turn it is and what they may still do."""

    current_unit_index: int = Field(
        0,
        ge=0,
        description="Index of the active hero in the living party.",
    )
    move_points_remaining: int = Field(
        0,
        ge=0,
        description="Moves left to the active hero this turn.",
    )
    awaiting_attack_direction: bool = Field(
        False,
        description="True once the active hero chose to attack.",
    )
    transitioning_level: bool = Field(
        False,
        description="True from the wall collapse on; freezes the engine.",
    )
    phase: TurnPhase = Field(
        TurnPhase.PARTY_TURN,
        description="Current state of the turn machine.",
    )
    turns_taken: int = Field(
        0,
        ge=0,
        description="Completed party rounds, used by escalating enemy generators.",
    )


class BattleSnapshot(BaseModel):
    """Read-only view of an engine, consumed by renderers."""

    grid: tuple[tuple[str, ...], ...]
    current_unit_index: int
    active_position: tuple[int, int] | None
    awaiting_attack_direction: bool
    phase: TurnPhase
    move_points: int
    wall_hp: int


class BattleEngine:
    """
    Turn scheduler for one level.

    Attributes:
        party (list[Unit]):
            The living heroes, in turn order.
        enemies (list[Unit]):
            The living enemies (and static wall units).
        pickups (list[Pickup]):
            Collectibles still on the grid.
        rows (int):
            Grid height.
        cols (int):
            Grid width.
        wall_hp (int):
            Remaining HP of the destructible wall row.
        state (TurnState):
            The turn state.
        battlefield (Battlefield):
            The occupancy grid.

    """

    def __init__(
        self,
        party: Sequence[Unit],
        enemies: Sequence[Unit] | EnemyGenerator,
        rows: int,
        cols: int,
        wall_hp: int,
        log: LogSink | None = None,
        on_level_complete: Callable[[], Any] | None = None,
        on_game_over: Callable[[], Any] | None = None,
        scheduler: Scheduler | None = None,
        settings: EngineSettings | None = None,
        pickups: Iterable[Pickup] = (),
        turns_taken: int = 0,
    ) -> None:
        self.party: list[Unit] = [hero for hero in party if hero.hp > 0]
        self.rows = rows
        self.cols = cols
        self.wall_hp = wall_hp
        self.log: LogSink = log if log is not None else default_sink
        self.on_level_complete = on_level_complete
        self.on_game_over = on_game_over
        self.scheduler: Scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.settings = settings if settings is not None else EngineSettings()

        if callable(enemies):
            self.enemies: list[Unit] = list(enemies(rows, cols, turns_taken))
        else:
            self.enemies = list(enemies)
        self.pickups: list[Pickup] = []

        self.state = TurnState(
            move_points_remaining=self.party[0].agility if self.party else 0,
            phase=TurnPhase.PARTY_TURN if self.party else TurnPhase.GAME_OVER,
            turns_taken=turns_taken,
        )
        self._pause: TaskHandle | None = None
        self._collapse: TaskHandle | None = None

        self.battlefield = self._build_battlefield(pickups)

    # ============================================================================
    # SETUP
    # ============================================================================

    def _build_battlefield(self, pickups: Iterable[Pickup]) -> Battlefield:
        """Place the heroes on the top row, the wall on the bottom row, then the rest."""
        field = Battlefield(self.rows, self.cols)
        field.build_wall_row()
        for index, hero in enumerate(self.party):
            hero.x = index % self.cols
            hero.y = index // self.cols
            field.place(hero)
        placed: list[Unit] = []
        for enemy in self.enemies:
            cell = self._free_cell_near(field, enemy.x, enemy.y)
            if cell is None:
                log_warning(
                    f"No room left for {enemy.name}, dropping it",
                    {"enemy": enemy.name, "x": enemy.x, "y": enemy.y},
                )
                continue
            if cell != (enemy.x, enemy.y):
                log_warning(
                    f"{enemy.name} cannot stand at ({enemy.x}, {enemy.y}), moved to {cell}",
                    {"enemy": enemy.name, "rows": self.rows, "cols": self.cols},
                )
                enemy.x, enemy.y = cell
            field.place(enemy)
            placed.append(enemy)
        self.enemies = placed
        for pickup in pickups:
            if not field.is_empty(pickup.x, pickup.y):
                log_warning(
                    f"Cell ({pickup.x}, {pickup.y}) is taken, dropping {pickup.kind.display_name}",
                    {"pickup": pickup.kind.display_name},
                )
                continue
            assert pickup.symbol is not None
            field.set(pickup.x, pickup.y, pickup.symbol)
            self.pickups.append(pickup)
        return field

    @staticmethod
    def _free_cell_near(field: Battlefield, x: int, y: int) -> tuple[int, int] | None:
        """Closest empty cell to (x, y), clamped into the grid, row-major on ties."""
        x = min(max(x, 0), field.cols - 1)
        y = min(max(y, 0), field.rows - 1)
        if field.is_empty(x, y):
            return x, y
        candidates = [
            (abs(cx - x) + abs(cy - y), cy, cx)
            for cy in range(field.rows)
            for cx in range(field.cols)
            if field.is_empty(cx, cy)
        ]
        if not candidates:
            return None
        _, cy, cx = min(candidates)
        return cx, cy

    # ============================================================================
    # STATE QUERIES
    # ============================================================================

    @property
    def current_unit(self) -> Unit | None:
        if not self.party or self.state.current_unit_index >= len(self.party):
            return None
        return self.party[self.state.current_unit_index]

    @property
    def phase(self) -> TurnPhase:
        return self.state.phase

    @property
    def move_points(self) -> int:
        return self.state.move_points_remaining

    @property
    def awaiting_attack_direction(self) -> bool:
        return self.state.awaiting_attack_direction

    @property
    def transitioning_level(self) -> bool:
        return self.state.transitioning_level

    @property
    def is_over(self) -> bool:
        return self.state.phase in (TurnPhase.GAME_OVER, TurnPhase.TRANSITIONING)

    @property
    def busy(self) -> bool:
        """True while the pacing pause after an attack is running."""
        return self._pause is not None and self._pause.active

    def snapshot(self) -> BattleSnapshot:
        unit = self.current_unit
        return BattleSnapshot(
            grid=self.battlefield.snapshot(),
            current_unit_index=self.state.current_unit_index,
            active_position=unit.position if unit else None,
            awaiting_attack_direction=self.state.awaiting_attack_direction,
            phase=self.state.phase,
            move_points=self.state.move_points_remaining,
            wall_hp=self.wall_hp,
        )

    def _can_act(self) -> bool:
        if self.state.transitioning_level or self.state.phase == TurnPhase.GAME_OVER:
            return False
        if self.busy:
            log_debug("Action ignored: the previous action is still resolving.")
            return False
        return self.current_unit is not None

    # ============================================================================
    # PLAYER ENTRY POINTS
    # ============================================================================

    def move_unit(self, dx: int, dy: int) -> bool:
        """
        Move the active hero one cell, spending a move point.

        Args:
            dx (int): Horizontal step.
            dy (int): Vertical step.

        Returns:
            bool:
                True if the hero moved; False for any rejected move.

        """
        if not self._can_act() or self.state.awaiting_attack_direction:
            return False
        if self.state.move_points_remaining <= 0:
            return False
        unit = self.current_unit
        assert unit is not None
        new_x, new_y = unit.x + dx, unit.y + dy
        if not self.battlefield.in_bounds(new_x, new_y):
            log_debug(f"{unit.name} cannot leave the battlefield.")
            return False
        pickup = self._pickup_at(new_x, new_y)
        if pickup is None and self.battlefield.get(new_x, new_y) != EMPTY_CELL:
            log_debug(f"{unit.name} cannot move into an occupied cell.")
            return False
        self.battlefield.move(unit, new_x, new_y)
        if pickup is not None:
            self.pickups = [p for p in self.pickups if p is not pickup]
            collect(pickup, unit, self.log)
        self.state.move_points_remaining -= 1
        if self.state.move_points_remaining == 0:
            self.next_turn()
        return True

    def enter_attack_mode(self) -> bool:
        """Switch the active hero into attack-direction selection."""
        if not self._can_act():
            return False
        self.state.awaiting_attack_direction = True
        self.state.phase = TurnPhase.AWAITING_ATTACK_DIRECTION
        return True

    def cancel_attack_mode(self) -> bool:
        """Leave attack-direction selection without attacking."""
        if not self._can_act() or not self.state.awaiting_attack_direction:
            return False
        self.state.awaiting_attack_direction = False
        self.state.phase = TurnPhase.PARTY_TURN
        return True

    def attack_in_direction(
        self,
        dx: int,
        dy: int,
        unit: Unit | None = None,
    ) -> AttackOutcome | None:
        """
        Attack along (dx, dy) with the given unit, the active hero by default.

        Unless the attack brings the wall down, the turn advances once the
        pacing delay has elapsed.

        Returns:
            AttackOutcome | None:
                The outcome, or None if the engine refused the attack.

        """
        if not self._can_act():
            return None
        unit = unit or self.current_unit
        if unit is None:
            return None
        log_debug(f"{unit.name} attacked in direction ({dx}, {dy}).")
        outcome = resolve_line_attack(unit, dx, dy, self.battlefield, self.enemies, self.log)

        if outcome.kind == AttackOutcomeKind.HIT_ENEMY and outcome.defeated:
            self.enemies = [e for e in self.enemies if e is not outcome.target]
        elif outcome.kind == AttackOutcomeKind.HIT_WALL:
            self.wall_hp -= outcome.damage
            self.log(
                f"{unit.name} attacks the wall for {outcome.damage} damage! "
                f"(Wall HP: {self.wall_hp})"
            )

        self.state.awaiting_attack_direction = False
        self.state.phase = TurnPhase.PARTY_TURN
        if outcome.kind == AttackOutcomeKind.HIT_WALL and self.wall_hp <= 0:
            self._handle_wall_collapse()
            return outcome
        self._pause = self.scheduler.call_later(self.settings.pacing_delay, self._end_pause)
        return outcome

    # ============================================================================
    # TURN FLOW
    # ============================================================================

    def _end_pause(self) -> None:
        self._pause = None
        self.next_turn()

    def next_turn(self) -> None:
        """
        Hand the turn to the next hero.

        Status effects tick first. Wrapping past the last hero runs the enemy
        turn followed by a second status tick.
        """
        if self.state.transitioning_level or self.state.phase == TurnPhase.GAME_OVER:
            return
        finished = self.current_unit
        self._tick_status_effects()
        if not self.party:
            self._game_over()
            return
        self.state.awaiting_attack_direction = False
        self.state.current_unit_index = self._index_after(finished)
        if self.state.current_unit_index >= len(self.party):
            self.state.current_unit_index = 0
            self.state.turns_taken += 1
            self.log("Enemy turn begins.")
            self.state.phase = TurnPhase.ENEMY_TURN
            self.enemy_turn()
            self._tick_status_effects()
            if not self.party:
                self._game_over()
                return
            if self.state.current_unit_index >= len(self.party):
                self.state.current_unit_index = 0
        self.state.phase = TurnPhase.PARTY_TURN
        hero = self.party[self.state.current_unit_index]
        self.state.move_points_remaining = hero.agility
        self.log(f"Now it's {hero.name}'s turn.")

    def _index_after(self, finished: Unit | None) -> int:
        """Index of the hero playing after `finished`, even if the tick removed it."""
        for index, hero in enumerate(self.party):
            if hero is finished:
                return index + 1
        # The finished hero fell, its successor slid into its slot.
        return self.state.current_unit_index

    def enemy_turn(self) -> None:
        """Every enemy walks up to its agility toward the party, then strikes."""
        if self.state.transitioning_level:
            return
        for enemy in list(self.enemies):
            if enemy.is_dead() or enemy.kind == UnitKind.WALL:
                continue
            for _ in range(enemy.agility):
                move_enemy(enemy, self.party, self.battlefield)
            for hero in attack_adjacent(enemy, self.party, self.battlefield, self.log):
                self._remove_hero(hero)
        self.log("Enemy turn completed.")

    def _remove_hero(self, hero: Unit) -> None:
        self.party = [h for h in self.party if h is not hero]
        if self.state.current_unit_index >= len(self.party):
            self.state.current_unit_index = 0

    def _tick_status_effects(self) -> None:
        self.party, self.enemies = apply_status_effects(
            self.party, self.enemies, self.battlefield, self.log
        )

    def _game_over(self) -> None:
        self.state.phase = TurnPhase.GAME_OVER
        self.state.move_points_remaining = 0
        self.log("All heroes have been defeated! Game Over.")
        if self.on_game_over is not None:
            self.on_game_over()

    def _handle_wall_collapse(self) -> None:
        self.log("The Wall Collapses!")
        self.state.transitioning_level = True
        self.state.phase = TurnPhase.TRANSITIONING
        self._collapse = self.scheduler.call_later(
            self.settings.collapse_delay, self._complete_level
        )

    def _complete_level(self) -> None:
        self._collapse = None
        if self.on_level_complete is not None:
            self.on_level_complete()

    def _pickup_at(self, x: int, y: int) -> Pickup | None:
        for pickup in self.pickups:
            if pickup.x == x and pickup.y == y:
                return pickup
        return None
