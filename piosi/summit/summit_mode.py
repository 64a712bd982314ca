"""
Summit Mode: an autonomous battle royale.

Every roster hero is dropped at a random cell of a large square map, each
one on its own team. A repeating task plays one round at a time: every hero
attacks the nearest enemy within range or steps toward it. A defeated hero
is healed and joins the team of the hero that beat it, until a single team
owns everyone.
"""

import random
from collections.abc import Callable, Sequence
from typing import Any

from piosi.core.constants import SUMMIT_DEFAULT_HP, SUMMIT_MAP_SIZE, SUMMIT_ROUND_INTERVAL
from piosi.core.logging import LogSink, default_sink
from piosi.core.scheduler import ManualScheduler, Scheduler, TaskHandle
from piosi.core.utils import sign
from piosi.units.roster import load_roster
from piosi.units.unit import Unit


class SummitMode:
    """
    Battle royale simulator.

    Attributes:
        units (list[Unit]):
            Every hero in the simulation, in roster order.
        round (int):
            Number of the next round to play.
        running (bool):
            True while the round timer is active.

    """

    def __init__(
        self,
        roster: Sequence[Unit] | None = None,
        log: LogSink | None = None,
        on_game_over: Callable[[], Any] | None = None,
        on_victory: Callable[[], Any] | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
        map_size: int = SUMMIT_MAP_SIZE,
        round_interval: float = SUMMIT_ROUND_INTERVAL,
        default_hp: int = SUMMIT_DEFAULT_HP,
    ) -> None:
        if map_size < 1:
            raise ValueError(f"map_size must be positive, got {map_size}")
        self.map_size = map_size
        self.round_interval = round_interval
        self.log: LogSink = log if log is not None else default_sink
        self.on_game_over = on_game_over
        self.on_victory = on_victory
        self.scheduler: Scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.rng = rng if rng is not None else random.Random()
        self.round = 1
        self._timer: TaskHandle | None = None

        source = load_roster() if roster is None else roster
        self.units: list[Unit] = []
        for index, hero in enumerate(source):
            unit = hero.model_copy(deep=True)
            unit.x = self.rng.randrange(map_size)
            unit.y = self.rng.randrange(map_size)
            if unit.hp <= 0:
                unit.hp = default_hp
            if "max_hp" not in hero.model_fields_set or not unit.max_hp:
                unit.max_hp = default_hp
            unit.team = index
            unit.defeated_by = None
            self.units.append(unit)

    @property
    def running(self) -> bool:
        return self._timer is not None and self._timer.active

    def alive(self) -> list[Unit]:
        return [unit for unit in self.units if unit.is_alive()]

    def teams(self) -> set[int]:
        return {unit.team for unit in self.alive() if unit.team is not None}

    def start(self) -> TaskHandle:
        """Announce the simulation and start the round timer."""
        self.log("Starting Summit Mode battle royale simulation...")
        self.print_status()
        self._timer = self.scheduler.call_every(self.round_interval, self.simulation_round)
        return self._timer

    def stop(self) -> None:
        """Cancel the round timer. Safe to call at any time."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def simulation_round(self) -> None:
        """Play one round: every living hero acts once, in roster order."""
        self.log(f"--- Round {self.round} ---")
        any_action = False
        for unit in self.alive():
            if unit.is_dead():
                continue
            enemies = [other for other in self.units if other.team != unit.team and other.is_alive()]
            if not enemies:
                self.log(f"Victory: Team {unit.team} now controls all heroes!")
                self.stop()
                if self.on_victory is not None:
                    self.on_victory()
                return
            target, distance = self._nearest(unit, enemies)
            if distance <= (unit.range or 1):
                self._attack(unit, target)
            else:
                self._step_toward(unit, target)
            any_action = True
        self.round += 1
        self.print_status()
        if not any_action:
            self.log("No actions possible. Ending simulation.")
            self.stop()
            if self.on_game_over is not None:
                self.on_game_over()

    def _nearest(self, unit: Unit, enemies: Sequence[Unit]) -> tuple[Unit, int]:
        target = enemies[0]
        best = unit.distance_to(target)
        for enemy in enemies[1:]:
            distance = unit.distance_to(enemy)
            if distance < best:
                target, best = enemy, distance
        return target, best

    def _attack(self, unit: Unit, target: Unit) -> None:
        self.log(
            f"{unit.name} (Team {unit.team}) attacks {target.name} (Team {target.team}) "
            f"for {unit.attack} damage."
        )
        target.take_damage(unit.attack)
        if target.is_dead():
            self.log(f"{target.name} is defeated by {unit.name} and joins Team {unit.team}. HP restored.")
            target.team = unit.team
            target.restore()
            target.defeated_by = unit.name

    def _step_toward(self, unit: Unit, target: Unit) -> None:
        dx = target.x - unit.x
        dy = target.y - unit.y
        if abs(dx) >= abs(dy):
            unit.x += sign(dx)
        else:
            unit.y += sign(dy)
        self.log(f"{unit.name} moves to ({unit.x}, {unit.y}).")

    def print_status(self) -> None:
        for unit in self.units:
            self.log(f"{unit.name} (Team {unit.team}) at ({unit.x}, {unit.y}) with HP: {unit.hp}/{unit.max_hp}")
