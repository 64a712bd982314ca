"""
Game session: chains battle engines across a sequence of levels.

A session owns the party between levels. When a wall falls it either
respawns the level (endless levels) or waits for the player to choose the
hero to mode up, then builds the engine of the next level.
"""

from collections.abc import Callable, Sequence
from typing import Any

from piosi.combat.engine import BattleEngine, EngineSettings
from piosi.core.logging import LogSink, default_sink, log_info
from piosi.core.scheduler import ManualScheduler, Scheduler
from piosi.generation.seed_generator import SUITE_SIZE, generate_suite
from piosi.progression.modeup import mode_up
from piosi.units.unit import Unit

from .catalog import LevelConfig, levels_from, resolve_enemies


class GameSession:
    """
    A run through a list of levels with one party.

    Attributes:
        party (list[Unit]):
            The heroes still alive.
        levels (list[LevelConfig]):
            The levels of the run, in order.
        level_index (int):
            Index of the level being played.
        engine (BattleEngine | None):
            Engine of the current level, None before start().
        awaiting_mode_up (bool):
            True between a cleared level and the player's mode-up choice.
        finished (bool):
            True once the last level is cleared or the party is wiped out.

    """

    def __init__(
        self,
        party: Sequence[Unit],
        levels: Sequence[LevelConfig],
        log: LogSink | None = None,
        scheduler: Scheduler | None = None,
        settings: EngineSettings | None = None,
        on_finished: Callable[[bool], Any] | None = None,
    ) -> None:
        self.party = list(party)
        self.levels = list(levels)
        self.log: LogSink = log if log is not None else default_sink
        self.scheduler: Scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.settings = settings
        self.on_finished = on_finished
        self.level_index = 0
        self.engine: BattleEngine | None = None
        self.awaiting_mode_up = False
        self.finished = False
        self.victory = False

    @classmethod
    def from_seed(cls, party: Sequence[Unit], base_seed: int, count: int = SUITE_SIZE, **kwargs: Any) -> "GameSession":
        levels = [LevelConfig.from_generated(g) for g in generate_suite(base_seed, count)]
        return cls(party, levels, **kwargs)

    @classmethod
    def from_catalog(cls, party: Sequence[Unit], start_level: int = 1, **kwargs: Any) -> "GameSession":
        return cls(party, levels_from(start_level), **kwargs)

    @property
    def current_level(self) -> LevelConfig | None:
        if self.level_index >= len(self.levels):
            return None
        return self.levels[self.level_index]

    def start(self) -> BattleEngine | None:
        """Build the engine of the current level."""
        config = self.current_level
        if config is None:
            self._finish(victory=True)
            return None
        self.log(config.title)
        self.engine = self._build_engine(config, config.wall_hp, resolve_enemies(config), 0)
        return self.engine

    def _build_engine(
        self,
        config: LevelConfig,
        wall_hp: int,
        enemies: list[Unit],
        turns_taken: int,
    ) -> BattleEngine:
        return BattleEngine(
            self.party,
            enemies,
            config.rows,
            config.cols,
            wall_hp,
            log=self.log,
            on_level_complete=self._on_level_complete,
            on_game_over=self._on_game_over,
            scheduler=self.scheduler,
            settings=self.settings,
            pickups=[pickup.model_copy() for pickup in config.pickups],
            turns_taken=turns_taken,
        )

    def _on_level_complete(self) -> None:
        config = self.current_level
        assert config is not None and self.engine is not None
        self.party = list(self.engine.party)
        if config.on_wall_collapse is not None:
            turns_taken = self.engine.state.turns_taken
            enemies, wall_hp = config.on_wall_collapse(turns_taken)
            self.log(f"New enemies have spawned and the wall HP has been reset to {wall_hp}!")
            self.engine = self._build_engine(config, wall_hp, enemies, turns_taken)
            return
        log_info(f"Cleared {config.title}", {"level": config.level})
        self.awaiting_mode_up = True

    def mode_up(self, hero: Unit) -> BattleEngine | None:
        """Mode up with `hero`, then move on to the next level."""
        config = self.current_level
        if not self.awaiting_mode_up or config is None:
            return None
        mode_up(hero, config.level, self.party, self.log)
        self.awaiting_mode_up = False
        self.level_index += 1
        return self.start()

    def _on_game_over(self) -> None:
        self._finish(victory=False)

    def _finish(self, victory: bool) -> None:
        self.finished = True
        self.victory = victory
        if self.on_finished is not None:
            self.on_finished(victory)
