"""
UI management for the battle screen.

The UIManager is the only subscriber that talks to the renderer during a
battle. It turns battle events into status lines, notices, prompts and the
end-of-battle banner, so the engine never prints anything itself.
"""

from typing import TYPE_CHECKING

from ...core.data import BattleOutcome, Side
from ...core.events.events import (
    BattleEnded,
    BattleNotice,
    BattleStarted,
    CardPlayed,
    ElixirRegenerated,
    EventType,
    GameEvent,
    OpponentSelected,
    OpponentSkipped,
)

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager
    from ...core.renderer import Renderer


END_BANNERS = {
    BattleOutcome.PLAYER_WIN: "Congratulations! You destroyed the opponent's King Tower!",
    BattleOutcome.OPPONENT_WIN: "You lost! Your King Tower was destroyed.",
    BattleOutcome.SURRENDER: "You surrendered!",
    BattleOutcome.DRAW: "Match ended! Draw.",
}


class UIManager:
    """Drives the renderer from battle events."""

    def __init__(
        self,
        renderer: "Renderer",
        event_manager: "EventManager",
        surrender_token: str = "0",
        refresh_on_regen: bool = True,
    ):
        self.renderer = renderer
        self.event_manager = event_manager
        self.surrender_token = surrender_token
        self.refresh_on_regen = refresh_on_regen
        self.deck_size = 0
        self.notices: list[str] = []

        subscriptions = {
            EventType.BATTLE_STARTED: self._handle_battle_started,
            EventType.CARD_PLAYED: self._handle_card_played,
            EventType.ELIXIR_REGENERATED: self._handle_elixir_regenerated,
            EventType.OPPONENT_SKIPPED: self._handle_opponent_skipped,
            EventType.BATTLE_NOTICE: self._handle_battle_notice,
            EventType.BATTLE_ENDED: self._handle_battle_ended,
            EventType.OPPONENT_SELECTED: self._handle_opponent_selected,
        }
        for event_type, handler in subscriptions.items():
            self.event_manager.subscribe(
                event_type,
                handler,
                subscriber_name=f"UIManager.{event_type.name.lower()}",
            )

    def prompt_text(self) -> str:
        return (
            f"Select a card to attack (enter number from 1 to {self.deck_size}, "
            f"or {self.surrender_token} to surrender): "
        )

    def set_deck_size(self, deck_size: int) -> None:
        self.deck_size = deck_size

    def _handle_battle_started(self, event: GameEvent) -> None:
        assert isinstance(event, BattleStarted), f"Expected BattleStarted, got {type(event)}"
        self.notices.clear()
        self.renderer.show_banner(f"{event.player_name} vs {event.opponent_name}")
        self.renderer.show_status(event.snapshot)
        self.renderer.show_prompt(self.prompt_text())

    def _handle_card_played(self, event: GameEvent) -> None:
        assert isinstance(event, CardPlayed), f"Expected CardPlayed, got {type(event)}"
        self.renderer.show_status(event.snapshot)
        if event.side == Side.PLAYER:
            self.renderer.show_message(
                f"You used {event.card_name} (Level {event.card_level}) dealing {event.damage} damage "
                f"to {event.target_description}!"
            )
        else:
            self.renderer.show_message(
                f"Opponent {event.actor_name} used a card dealing {event.damage} damage "
                f"to {event.target_description}!"
            )
        if event.card_crit:
            self.renderer.show_message("Critical hit!")
        if event.tower_crit:
            self.renderer.show_message("Tower critical!")

    def _handle_elixir_regenerated(self, event: GameEvent) -> None:
        assert isinstance(event, ElixirRegenerated), f"Expected ElixirRegenerated, got {type(event)}"
        self.deck_size = event.deck_size
        if not self.refresh_on_regen:
            return
        self.renderer.show_status(event.snapshot)
        self.renderer.show_prompt(self.prompt_text())

    def _handle_opponent_skipped(self, event: GameEvent) -> None:
        assert isinstance(event, OpponentSkipped), f"Expected OpponentSkipped, got {type(event)}"
        self.renderer.show_message(event.reason)

    def _handle_battle_notice(self, event: GameEvent) -> None:
        assert isinstance(event, BattleNotice), f"Expected BattleNotice, got {type(event)}"
        self.notices.append(event.message)
        self.renderer.show_notice(event.message)

    def _handle_battle_ended(self, event: GameEvent) -> None:
        assert isinstance(event, BattleEnded), f"Expected BattleEnded, got {type(event)}"
        self.renderer.show_status(event.snapshot)
        self.renderer.show_banner(END_BANNERS[event.outcome])

    def _handle_opponent_selected(self, event: GameEvent) -> None:
        assert isinstance(event, OpponentSelected), f"Expected OpponentSelected, got {type(event)}"
        self.renderer.show_message(f"Opponent: {event.opponent_name} (Trophies: {event.rating})")
