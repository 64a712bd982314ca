"""
Shared fixtures for the PIOSI test suite.
"""

import pytest

from piosi.core.constants import UnitKind
from piosi.units.unit import Unit


class MessageLog(list):
    """Log sink that keeps every message, usable wherever a LogSink is expected."""

    def __call__(self, message: str) -> None:
        self.append(message)

    def contains(self, fragment: str) -> bool:
        return any(fragment in message for message in self)


@pytest.fixture
def messages():
    return MessageLog()


def _hero(name="Hero", symbol="H", x=0, y=0, attack=1, range=1, agility=1, hp=10, **stats):
    return Unit(
        name=name,
        symbol=symbol,
        kind=UnitKind.HERO,
        x=x,
        y=y,
        attack=attack,
        range=range,
        agility=agility,
        hp=hp,
        stats=stats,
    )


def _enemy(name="Enemy", symbol="E", x=0, y=0, attack=1, range=1, agility=1, hp=10):
    return Unit(
        name=name,
        symbol=symbol,
        kind=UnitKind.ENEMY,
        x=x,
        y=y,
        attack=attack,
        range=range,
        agility=agility,
        hp=hp,
    )


@pytest.fixture
def make_hero():
    return _hero


@pytest.fixture
def make_enemy():
    return _enemy
