"""Data sources for players and opponents: the remote API and offline fixtures."""

from .clash_client import (
    ClashApiClient,
    ClashApiError,
    NotFoundError,
    UnauthorizedError,
    NetworkError,
    encode_tag,
)
from .fixtures import FixtureLoadError, load_mock_players, find_mock_player

__all__ = [
    "ClashApiClient",
    "ClashApiError",
    "NotFoundError",
    "UnauthorizedError",
    "NetworkError",
    "encode_tag",
    "FixtureLoadError",
    "load_mock_players",
    "find_mock_player",
]
