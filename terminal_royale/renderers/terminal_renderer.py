import sys
from typing import Optional, Sequence, TextIO

from ..core.renderer import Renderer, RendererConfig
from ..core.data import TOWER_ORDER, Card, TowerId, get_card_stats
from ..core.engine.battle_state import BattleSnapshot, SideSnapshot


class TerminalRenderer(Renderer):
    """Line-oriented ANSI renderer for a plain terminal."""

    def __init__(self, config: Optional[RendererConfig] = None, stream: Optional[TextIO] = None):
        super().__init__(config)
        self.stream = stream or sys.stdout

        self.colors = {
            "player": "\033[96m",   # cyan
            "opponent": "\033[91m", # red
            "elixir": "\033[95m",   # magenta
            "notice": "\033[93m",   # yellow
            "banner": "\033[1;97m", # bold white
            "reset": "\033[0m",
        }

        self.tower_short_names = {
            TowerId.GUARD_TOWER_1: "GT1",
            TowerId.GUARD_TOWER_2: "GT2",
            TowerId.KING_TOWER: "King",
        }

    def _write(self, text: str = "") -> None:
        self.stream.write(text + "\n")
        self.stream.flush()

    def _paint(self, text: str, color: str) -> str:
        if not self.config.use_color:
            return text
        return f"{self.colors[color]}{text}{self.colors['reset']}"

    def initialize(self) -> None:
        self.clear()
        self._write(self._paint(self.config.title, "banner"))
        self._write("=" * min(self.config.width, 40))

    def cleanup(self) -> None:
        if self.config.use_color:
            self.stream.write(self.colors["reset"])
        self.stream.flush()

    def clear(self) -> None:
        if self.config.clear_screen and self.config.use_color:
            # Clear screen and move the cursor home
            self.stream.write("\033[2J\033[H")
            self.stream.flush()

    def show_message(self, text: str) -> None:
        self._write(text)

    def show_notice(self, text: str) -> None:
        self._write(self._paint(text, "notice"))

    def show_prompt(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def _format_towers(self, side: SideSnapshot) -> str:
        parts = []
        for tower_id, hp in zip(TOWER_ORDER, side.tower_hp):
            parts.append(f"{self.tower_short_names[tower_id]} {hp}")
        return " | ".join(parts)

    def show_status(self, snapshot: BattleSnapshot) -> None:
        self._write()
        self._write(self._paint(f"Your Towers: {self._format_towers(snapshot.player)}", "player"))
        self._write(self._paint(f"Opponent Towers: {self._format_towers(snapshot.opponent)}", "opponent"))
        self._write(self._paint(
            f"Your Elixir: {snapshot.player.elixir:.1f} | Opponent Elixir: {snapshot.opponent.elixir:.1f}"
            f" | Time: {snapshot.elapsed:.0f}s",
            "elixir",
        ))

    def show_deck(self, deck: Sequence[Card]) -> None:
        self._write()
        self._write("Your deck:")
        for index, card in enumerate(deck, start=1):
            props = get_card_stats(card.name).get_display_properties()
            self._write(
                f"{index}. {card.name} (Level {card.level}, Elixir: {props['elixir']}, "
                f"Damage: {props['damage']}, HP: {props['hp']})"
            )

    def show_replay(self, entries: Sequence[str]) -> None:
        self._write()
        self._write("Match replay:")
        for index, entry in enumerate(entries, start=1):
            self._write(f"{index}. {entry}")

    def show_banner(self, text: str) -> None:
        self._write()
        self._write(self._paint(text, "banner"))
