from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from .data import Card
from .engine.battle_state import BattleSnapshot


@dataclass
class RendererConfig:
    width: int = 80
    title: str = "Terminal Royale"
    use_color: bool = True
    clear_screen: bool = True


class Renderer(ABC):

    def __init__(self, config: Optional[RendererConfig] = None):
        self.config = config or RendererConfig()
        self._running = False

    @abstractmethod
    def initialize(self) -> None:
        pass

    @abstractmethod
    def cleanup(self) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def show_message(self, text: str) -> None:
        pass

    def show_notice(self, text: str) -> None:
        self.show_message(text)

    @abstractmethod
    def show_prompt(self, text: str) -> None:
        pass

    @abstractmethod
    def show_status(self, snapshot: BattleSnapshot) -> None:
        pass

    @abstractmethod
    def show_deck(self, deck: Sequence[Card]) -> None:
        pass

    @abstractmethod
    def show_replay(self, entries: Sequence[str]) -> None:
        pass

    @abstractmethod
    def show_banner(self, text: str) -> None:
        pass

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True
        self.initialize()

    def stop(self) -> None:
        self._running = False
        self.cleanup()
