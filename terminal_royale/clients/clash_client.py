"""Client for the Clash Royale public API.

Only the read endpoints needed to find opponents are covered. Every call
either returns populated records or raises a ``ClashApiError`` subclass; the
session turns those failures into the default opponent.
"""

import time
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import quote

import httpx

from ..core.data import (
    ClanMember,
    CurrentWar,
    PlayerProfile,
    PlayerRanking,
    Tournament,
    normalise_tag,
)


RequestHook = Callable[[str, str, int, float], None]
T = TypeVar("T")


class ClashApiError(Exception):
    """Base error for failed API calls."""

    def __init__(self, message: str, status_code: int = 0, reason: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.message = message

    def __str__(self) -> str:
        if self.status_code:
            return f"[{self.status_code}] {self.reason}: {self.message}"
        return self.message


class NotFoundError(ClashApiError):
    """The requested player, clan, tournament or location does not exist."""


class UnauthorizedError(ClashApiError):
    """The API token is missing, invalid or not allowed from this IP."""


class NetworkError(ClashApiError):
    """The request never produced an HTTP response."""


def encode_tag(tag: str) -> str:
    """Normalise a tag and percent-encode it for use in a URL path."""
    return quote(normalise_tag(tag), safe="")


class ClashApiClient:
    """Synchronous client for api.clashroyale.com."""

    BASE_URL = "https://api.clashroyale.com"

    def __init__(
        self,
        token: str,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
        on_request: Optional[RequestHook] = None,
    ):
        """Initialize client with a bearer token.

        Args:
            token: API token from developer.clashroyale.com
            base_url: Override for the API host
            timeout: Per-request timeout in seconds
            transport: Custom httpx transport (tests use MockTransport)
            on_request: Called with (method, path, status, elapsed) after every request
        """
        if not token:
            raise ValueError("API token cannot be empty")

        self.on_request = on_request
        self.client = httpx.Client(
            base_url=base_url or self.BASE_URL,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
                "User-Agent": "terminal-royale",
            },
            timeout=timeout,
            transport=transport,
        )

    def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        start = time.monotonic()
        try:
            response = self.client.get(path, params=params)
        except httpx.TransportError as e:
            self._report("GET", path, 0, start)
            raise NetworkError(f"Request to {path} failed: {e}") from e

        self._report("GET", path, response.status_code, start)

        if response.status_code >= 400:
            raise self._error_from_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise ClashApiError(f"Invalid JSON from {path}", response.status_code, "invalidJson") from e

    def _report(self, method: str, path: str, status: int, start: float) -> None:
        if self.on_request is not None:
            self.on_request(method, path, status, time.monotonic() - start)

    @staticmethod
    def _error_from_response(response: httpx.Response) -> ClashApiError:
        reason = ""
        message = response.text.strip()
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            reason = str(body.get("reason", ""))
            message = str(body.get("message", message))

        status = response.status_code
        if status == 404:
            return NotFoundError(message or "Not found", status, reason or "notFound")
        if status in (401, 403):
            return UnauthorizedError(message or "Access denied", status, reason or "accessDenied")
        return ClashApiError(message or "Unexpected status", status, reason)

    def _fetch(
        self,
        path: str,
        parse: Callable[[Any], T],
        params: Optional[dict[str, Any]] = None,
    ) -> T:
        """GET ``path`` and build records from the payload.

        Raises:
            ClashApiError: The payload does not have the expected shape
        """
        data = self._get(path, params)
        try:
            return parse(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ClashApiError(f"Unexpected payload from {path}: {e!r}", 200, "invalidPayload") from e

    @staticmethod
    def _items(parse: Callable[[Any], T]) -> Callable[[Any], list[T]]:
        return lambda data: [parse(item) for item in data.get("items", [])]

    def fetch_player(self, tag: str) -> PlayerProfile:
        """Get information about a single player by tag."""
        return self._fetch(f"/v1/players/{encode_tag(tag)}", PlayerProfile.from_dict)

    def fetch_clan_members(self, clan_tag: str) -> list[ClanMember]:
        """List members of a clan."""
        return self._fetch(f"/v1/clans/{encode_tag(clan_tag)}/members", self._items(ClanMember.from_dict))

    def fetch_current_war(self, clan_tag: str) -> CurrentWar:
        """Retrieve information about the clan's current river race."""
        return self._fetch(f"/v1/clans/{encode_tag(clan_tag)}/currentriverrace", CurrentWar.from_dict)

    def get_tournament(self, tag: str) -> Tournament:
        """Get information about a single tournament by tag."""
        return self._fetch(f"/v1/tournaments/{encode_tag(tag)}", Tournament.from_dict)

    def search_tournaments(self, name: str, limit: int = 10) -> list[Tournament]:
        """Search all tournaments by name."""
        return self._fetch(
            "/v1/tournaments", self._items(Tournament.from_dict), params={"name": name, "limit": limit}
        )

    def search_tournament(self, name_or_tag: str) -> Tournament:
        """Find a tournament by tag first, then by name.

        Raises:
            NotFoundError: Neither lookup found a tournament
        """
        try:
            return self.get_tournament(name_or_tag)
        except NotFoundError:
            pass

        results = self.search_tournaments(name_or_tag.lstrip("#"))
        if not results:
            raise NotFoundError(f"No tournament matches '{name_or_tag}'", 404, "notFound")

        first = results[0]
        if not first.members_list and first.tag:
            # Search results omit members; fetch the full tournament
            return self.get_tournament(first.tag)
        return first

    def fetch_location_player_rankings(self, location_id: str = "global", limit: int = 10) -> list[PlayerRanking]:
        """Get player rankings for a specific location."""
        params = {"limit": limit} if limit > 0 else None
        return self._fetch(
            f"/v1/locations/{quote(location_id, safe='')}/rankings/players",
            self._items(PlayerRanking.from_dict),
            params=params,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
