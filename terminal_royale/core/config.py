"""
Configuration loader for battle tuning.

This module handles loading and parsing of the YAML configuration file
that holds tower stats, timer periods and session settings.
"""
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml


DEFAULT_CONFIG_PATH = "assets/config/battle.yaml"


@dataclass(frozen=True)
class BattleConfig:
    """Tunable numbers for a battle and the session around it."""
    # Towers
    guard_tower_hp: int = 1000
    king_tower_hp: int = 2000
    guard_tower_attack: int = 90
    king_tower_attack: int = 110
    tower_defense: int = 0
    guard_tower_crit_chance: float = 0.05
    king_tower_crit_chance: float = 0.10

    # Elixir
    max_elixir: float = 10.0
    starting_elixir: float = 10.0
    regen_amount: float = 1.0

    # Timing (seconds)
    regen_interval: float = 1.0
    opponent_interval: float = 5.0
    time_limit: float = 180.0

    # Rules
    opponent_play_cost: int = 3
    surrender_token: str = "0"
    seed: Optional[int] = None

    # Session
    api_base_url: str = "https://api.clashroyale.com"
    api_timeout: float = 10.0
    fixture_path: str = "assets/data/player.json"


def _resolve_path(config_path: str) -> Path:
    """Resolve relative paths against the project root."""
    if os.path.isabs(config_path):
        return Path(config_path)
    project_root = Path(__file__).parent.parent.parent
    return project_root / config_path


def load_battle_config(config_path: Optional[str] = None) -> BattleConfig:
    """
    Load battle configuration from a YAML file.

    Missing or malformed files fall back to the built-in defaults so a
    broken config never prevents a battle from starting.

    Args:
        config_path: Path to the YAML file, relative to the project root
            unless absolute

    Returns:
        BattleConfig: The loaded (or default) configuration
    """
    config_file = _resolve_path(config_path or DEFAULT_CONFIG_PATH)

    if not config_file.exists():
        print(f"Warning: Battle config file not found: {config_file}")
        return BattleConfig()

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        print(f"Error loading battle config: {e}")
        return BattleConfig()

    if not isinstance(raw, dict):
        print(f"Warning: Battle config must be a mapping, got {type(raw).__name__}")
        return BattleConfig()

    return parse_battle_config(raw)


def parse_battle_config(raw: dict[str, Any]) -> BattleConfig:
    """Build a BattleConfig from a mapping, ignoring unknown keys."""
    # Sections are allowed for readability: towers:, elixir:, timing: ...
    flat: dict[str, Any] = {}
    for key, value in raw.items():
        if isinstance(value, dict):
            flat.update(value)
        else:
            flat[key] = value

    known = {f.name: f for f in fields(BattleConfig)}
    overrides: dict[str, Any] = {}
    defaults = BattleConfig()

    for key, value in flat.items():
        if key not in known:
            print(f"Warning: Unknown battle config key '{key}'")
            continue
        default = getattr(defaults, key)
        if value is None or default is None:
            overrides[key] = value
            continue
        try:
            overrides[key] = type(default)(value)
        except (TypeError, ValueError):
            print(f"Warning: Invalid value for '{key}': {value!r}")

    config = replace(defaults, **overrides)
    if config.starting_elixir > config.max_elixir:
        config = replace(config, starting_elixir=config.max_elixir)
    return config
