"""
Hero roster module for the combat core.

Loads the hero table shipped with the package (or any JSON file with the
same shape) and turns each record into a hero Unit. Sparse special stats
are resolved once here, into the closed StatKind mapping; flags that are not
stats (jokes, tarot decks, ...) are ignored by the combat core.
"""

import json
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from piosi.core.constants import StatKind, UnitKind
from piosi.core.logging import log_error

from .unit import Unit

DEFAULT_ROSTER_PATH = Path(__file__).resolve().parent.parent / "data" / "heroes.json"

_STAT_KEYS = {kind.value: kind for kind in StatKind}


class HeroRecord(BaseModel):
    """One row of the hero table, as stored on disk."""

    model_config = ConfigDict(extra="allow")

    name: str
    symbol: str
    attack: int = Field(ge=0)
    range: int = Field(ge=0)
    agility: int = Field(ge=0)
    hp: int = Field(gt=0)

    def special_stats(self) -> dict[StatKind, int]:
        """Extra fields that name a StatKind, as integers (flags count as 1)."""
        stats: dict[StatKind, int] = {}
        for key, value in (self.model_extra or {}).items():
            kind = _STAT_KEYS.get(key)
            if kind is None:
                continue
            if isinstance(value, bool):
                stats[kind] = int(value)
            elif isinstance(value, int):
                stats[kind] = value
        return stats

    def to_unit(self) -> Unit:
        return Unit(
            name=self.name,
            symbol=self.symbol,
            kind=UnitKind.HERO,
            attack=self.attack,
            range=self.range,
            agility=self.agility,
            hp=self.hp,
            stats=self.special_stats(),
        )


def hero_from_dict(data: dict[str, Any]) -> Unit | None:
    """
    Build a hero Unit from a raw record.

    Args:
        data (dict[str, Any]):
            The hero record.

    Returns:
        Unit | None:
            The hero, or None if the record is malformed.

    """
    try:
        return HeroRecord(**data).to_unit()
    except ValidationError as e:
        log_error(
            f"Invalid hero record '{data.get('name', '?')}'",
            {"error": str(e).splitlines()[0], "context": "roster_loading"},
        )
        return None


def load_roster(file_path: Path | None = None) -> list[Unit]:
    """
    Loads the hero roster from a JSON file.

    Args:
        file_path (Path | None):
            The roster file, defaults to the bundled hero table.

    Returns:
        list[Unit]: The heroes in file order, empty if the file is unusable.

    """
    file_path = file_path or DEFAULT_ROSTER_PATH
    try:
        with open(file_path, encoding="utf-8") as f:
            records = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        log_error(
            f"Failed to load roster from {file_path}: {e}",
            {"file_path": str(file_path), "context": "roster_loading"},
        )
        return []
    if not isinstance(records, list):
        log_error(
            f"Roster data in {file_path} is not a list.",
            {"file_path": str(file_path), "context": "roster_loading"},
        )
        return []
    heroes = [hero_from_dict(record) for record in records]
    return [hero for hero in heroes if hero is not None]


def select_heroes(roster: list[Unit], names: list[str]) -> list[Unit]:
    """
    Pick heroes by name, keeping the order of `names`.

    Unknown names are reported and skipped. Each selected hero is a deep
    copy, so the roster itself is never mutated by a battle.
    """
    by_name = {hero.name.lower(): hero for hero in roster}
    party: list[Unit] = []
    for name in names:
        hero = by_name.get(name.lower())
        if hero is None:
            log_warning(f"Unknown hero '{name}'", {"name": name, "context": "party_selection"})
            continue
        party.append(hero.model_copy(deep=True))
    return party
