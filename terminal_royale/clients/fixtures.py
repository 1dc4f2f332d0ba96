"""Offline player fixtures.

Test mode reads mock players from a JSON file shaped like the players
endpoint response and never touches the network.
"""

import json
import os
from pathlib import Path
from typing import Optional, Sequence

from ..core.data import PlayerProfile, normalise_tag


class FixtureLoadError(Exception):
    """The fixture file is missing, unreadable or malformed."""


def _resolve_path(path: str) -> Path:
    if os.path.isabs(path):
        return Path(path)
    project_root = Path(__file__).parent.parent.parent
    candidate = project_root / path
    return candidate if candidate.exists() else Path(path)


def load_mock_players(path: str) -> list[PlayerProfile]:
    """Load mock players from a JSON array.

    Raises:
        FixtureLoadError: The file cannot be read or does not hold a list of
            player objects
    """
    fixture_file = _resolve_path(path)
    try:
        with open(fixture_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise FixtureLoadError(f"Unable to read {fixture_file}: {e}") from e
    except json.JSONDecodeError as e:
        raise FixtureLoadError(f"Unable to parse {fixture_file}: {e}") from e

    if not isinstance(data, list):
        raise FixtureLoadError(f"{fixture_file} must contain a JSON array of players")

    players = []
    for index, entry in enumerate(data):
        try:
            players.append(PlayerProfile.from_dict(entry))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise FixtureLoadError(f"Invalid player at index {index} in {fixture_file}: {e}") from e
    return players


def find_mock_player(players: Sequence[PlayerProfile], tag: str) -> Optional[PlayerProfile]:
    """Find a player by tag, accepting tags with or without the leading '#'."""
    wanted = normalise_tag(tag)
    for player in players:
        if normalise_tag(player.tag) == wanted:
            return player
    return None
