"""
Base effect module for the combat core.

Defines the base class for recurring status effects and the contract every
effect kind follows when the status effect engine ticks it.
"""

from typing import Any

from pydantic import BaseModel, Field

from piosi.core.constants import EffectKind
from piosi.core.logging import LogSink


class StatusEffect(BaseModel):
    """
    Base class for every recurring effect carried by a unit.

    Effects are plain data: the owning unit stores them in its
    `status_effects` mapping, keyed by kind, and the status effect engine
    calls `tick` once per tick boundary.
    """

    kind: EffectKind = Field(
        description="The kind of the effect, also its key in the owner's mapping.",
    )
    remaining_duration: int = Field(
        description="Number of ticks left before the effect expires.",
    )

    @property
    def expired(self) -> bool:
        """True once the effect has no ticks left."""
        return self.remaining_duration <= 0

    @property
    def display_name(self) -> str:
        return self.kind.display_name

    @property
    def colored_name(self) -> str:
        """Returns the effect name with color formatting applied."""
        return f"[{self.kind.color}]{self.display_name}[/]"

    def tick(self, unit: Any, log: LogSink) -> int:
        """
        Apply one tick of the effect to its owner.

        Args:
            unit (Unit):
                The unit carrying the effect.
            log (LogSink):
                Sink for the narration of the tick.

        Returns:
            int:
                The damage dealt on this tick.

        """
        raise NotImplementedError("Subclasses must implement tick.")

    def expiry_message(self, unit: Any) -> str | None:
        """Message logged when the effect is removed, None for a silent removal."""
        return None
