"""
Terminal driver for PIOSI.

Reads keyboard commands through prompt_toolkit and forwards them to the
battle engine entry points. Timed behavior is driven by a ManualScheduler
that sleeps real time, so the pacing pause and the wall collapse delay are
felt by the player without any thread.
"""

from prompt_toolkit import ANSI, PromptSession

from piosi.combat.engine import BattleEngine
from piosi.core.scheduler import ManualScheduler
from piosi.core.utils import ccapture, cprint, crule
from piosi.levels.session import GameSession
from piosi.summit.summit_mode import SummitMode
from piosi.units.unit import Unit

from .render import party_table, render_grid, render_status

# one session keeps history, created on first prompt
_session: PromptSession | None = None

DIRECTIONS: dict[str, tuple[int, int]] = {
    "w": (0, -1),
    "s": (0, 1),
    "a": (-1, 0),
    "d": (1, 0),
}

HELP = "w/a/s/d: move or aim   f: attack mode   c: cancel   e: end turn   q: quit"


def prompt(message: str) -> str:
    global _session
    if _session is None:
        _session = PromptSession(erase_when_done=True)
    return _session.prompt(ANSI(message))


def parse_command(answer: str) -> tuple[str, tuple[int, int] | None]:
    """
    Map a line of input to a command and an optional direction.

    Returns:
        tuple[str, tuple[int, int] | None]:
            One of "direction", "attack", "cancel", "end", "quit" or
            "unknown", with the direction for "direction".

    """
    key = answer.strip().lower()[:1]
    if key in DIRECTIONS:
        return "direction", DIRECTIONS[key]
    return {
        "f": "attack",
        "c": "cancel",
        "e": "end",
        "q": "quit",
    }.get(key, "unknown"), None


def dispatch(engine: BattleEngine, answer: str) -> bool:
    """
    Forward one command to the engine.

    Returns:
        bool:
            False when the player asked to quit.

    """
    command, direction = parse_command(answer)
    if command == "quit":
        return False
    if command == "direction" and direction is not None:
        if engine.awaiting_attack_direction:
            engine.attack_in_direction(*direction)
        else:
            engine.move_unit(*direction)
    elif command == "attack":
        engine.enter_attack_mode()
    elif command == "cancel":
        engine.cancel_attack_mode()
    elif command == "end":
        if not engine.is_over and not engine.busy:
            engine.next_turn()
    return True


class PlayerInterface:
    """Prompt-driven front end of a GameSession."""

    def __init__(self, game: GameSession, scheduler: ManualScheduler) -> None:
        self.game = game
        self.scheduler = scheduler

    def show(self, engine: BattleEngine) -> None:
        snapshot = engine.snapshot()
        cprint(render_grid(snapshot, engine.party))
        cprint(render_status(snapshot))
        cprint(party_table(engine.party, engine.current_unit))

    def choose_mode_up(self) -> Unit | None:
        party = self.game.party
        message = "\n" + ccapture(party_table(party)) + "\nMode up with # > "
        while True:
            answer = prompt(message).strip()
            if answer.lower() == "q":
                return None
            if answer.isdigit() and 1 <= int(answer) <= len(party):
                return party[int(answer) - 1]

    def run(self) -> None:
        engine = self.game.start()
        while engine is not None and not self.game.finished:
            self.show(engine)
            answer = prompt(ccapture(f"[dim]{HELP}[/]") + "\n> ")
            if not dispatch(engine, answer):
                crule("Run abandoned", style="bold red")
                return
            self.scheduler.settle()
            if self.game.awaiting_mode_up:
                crule("Level cleared", style="bold green")
                hero = self.choose_mode_up()
                if hero is None:
                    return
                engine = self.game.mode_up(hero)
            else:
                engine = self.game.engine
        if self.game.victory:
            crule("Victory", style="bold green")
        else:
            crule("Defeat", style="bold red")


def run_summit(summit: SummitMode, scheduler: ManualScheduler, max_rounds: int = 1000) -> None:
    """Run a Summit Mode simulation until it stops on its own or hits max_rounds."""
    crule("Summit Mode", style="bold green")
    summit.start()
    while summit.running and summit.round <= max_rounds:
        scheduler.advance(summit.round_interval)
    summit.stop()
