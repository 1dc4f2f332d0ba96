"""Combat state for a single battle.

This module defines the mutable record of both sides' towers and elixir
pools. The battle engine is its only owner: nothing outside the engine loop
reads or writes a ``BattleState`` directly, display code works from the
immutable ``BattleSnapshot`` instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import BattleConfig
from ..data import Side, TowerId, TOWER_ORDER, TOWER_NAMES


NO_TOWERS_LEFT = "no towers left"


@dataclass
class Tower:
    """A defensive tower. Invariant: 0 <= hp_current <= hp_max."""

    tower_id: TowerId
    hp_current: int
    hp_max: int
    attack: int = 0
    defense: int = 0
    crit_chance: float = 0.0

    @property
    def name(self) -> str:
        return TOWER_NAMES[self.tower_id]

    @property
    def is_standing(self) -> bool:
        return self.hp_current > 0

    def take_damage(self, amount: int) -> int:
        """Absorb damage, clamped at zero. Returns the remaining hit points."""
        self.hp_current = max(0, self.hp_current - max(0, amount))
        return self.hp_current

    def describe(self) -> str:
        return f"{self.name} (HP now {self.hp_current})"


@dataclass
class SideState:
    """Towers and elixir pool of one side."""

    towers: list[Tower]
    elixir: float = 10.0
    max_elixir: float = 10.0

    @classmethod
    def from_config(cls, config: BattleConfig) -> SideState:
        towers = []
        for tower_id in TOWER_ORDER:
            if tower_id == TowerId.KING_TOWER:
                towers.append(Tower(
                    tower_id, config.king_tower_hp, config.king_tower_hp,
                    config.king_tower_attack, config.tower_defense, config.king_tower_crit_chance,
                ))
            else:
                towers.append(Tower(
                    tower_id, config.guard_tower_hp, config.guard_tower_hp,
                    config.guard_tower_attack, config.tower_defense, config.guard_tower_crit_chance,
                ))
        return cls(towers=towers, elixir=config.starting_elixir, max_elixir=config.max_elixir)

    def tower(self, tower_id: TowerId) -> Tower:
        for tower in self.towers:
            if tower.tower_id == tower_id:
                return tower
        raise KeyError(tower_id)

    def first_standing_tower(self) -> Tower | None:
        """First tower in fixed order that still has hit points."""
        for tower in self.towers:
            if tower.is_standing:
                return tower
        return None

    def apply_damage(self, amount: int) -> str:
        """Apply damage to the first standing tower.

        The whole amount lands on that tower; overflow does not carry over to
        the next one. With every tower already destroyed nothing changes and
        the ``NO_TOWERS_LEFT`` descriptor is returned.
        """
        target = self.first_standing_tower()
        if target is None:
            return NO_TOWERS_LEFT
        target.take_damage(amount)
        return target.describe()

    def is_king_tower_down(self) -> bool:
        return self.tower(TowerId.KING_TOWER).hp_current <= 0

    def regenerate(self, amount: float = 1.0) -> float:
        self.elixir = min(self.elixir + amount, self.max_elixir)
        return self.elixir

    def spend(self, cost: float) -> bool:
        """Deduct elixir only when the pool covers the whole cost."""
        if self.elixir < cost:
            return False
        self.elixir -= cost
        return True


@dataclass(frozen=True)
class SideSnapshot:
    tower_hp: tuple[int, ...]
    elixir: float

    @property
    def king_hp(self) -> int:
        return self.tower_hp[-1]


@dataclass(frozen=True)
class BattleSnapshot:
    """Immutable view of a BattleState for events and display."""

    player: SideSnapshot
    opponent: SideSnapshot
    elapsed: float


@dataclass
class BattleState:
    """State of both sides plus the monotonic start time."""

    player: SideState
    opponent: SideState
    started_at: float
    regen_amount: float = 1.0
    _sides: dict[Side, SideState] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._sides = {Side.PLAYER: self.player, Side.OPPONENT: self.opponent}

    @classmethod
    def new(cls, config: BattleConfig, started_at: float) -> BattleState:
        return cls(
            player=SideState.from_config(config),
            opponent=SideState.from_config(config),
            started_at=started_at,
            regen_amount=config.regen_amount,
        )

    def side(self, side: Side) -> SideState:
        return self._sides[side]

    def apply_damage(self, side: Side, amount: int) -> str:
        return self.side(side).apply_damage(amount)

    def is_king_tower_down(self, side: Side) -> bool:
        return self.side(side).is_king_tower_down()

    def regenerate(self, side: Side) -> float:
        return self.side(side).regenerate(self.regen_amount)

    def spend(self, side: Side, cost: float) -> bool:
        return self.side(side).spend(cost)

    def elapsed(self, now: float) -> float:
        return max(0.0, now - self.started_at)

    def snapshot(self, now: float) -> BattleSnapshot:
        return BattleSnapshot(
            player=SideSnapshot(tuple(t.hp_current for t in self.player.towers), self.player.elixir),
            opponent=SideSnapshot(tuple(t.hp_current for t in self.opponent.towers), self.opponent.elixir),
            elapsed=self.elapsed(now),
        )
