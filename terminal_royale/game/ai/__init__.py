"""Opponent decision making."""

from .opponent_policy import OpponentPolicy, RandomCardPolicy, PolicyDecision, MIN_PLAY_ELIXIR

__all__ = ["OpponentPolicy", "RandomCardPolicy", "PolicyDecision", "MIN_PLAY_ELIXIR"]
