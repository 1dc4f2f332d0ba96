"""
Unit tests for the Clash Royale API client.

Requests are served by ``httpx.MockTransport`` handlers, so paths, headers
and error mapping are checked without touching the network.
"""

import httpx
import pytest

from terminal_royale.clients.clash_client import (
    ClashApiClient,
    ClashApiError,
    NetworkError,
    NotFoundError,
    UnauthorizedError,
    encode_tag,
)
from terminal_royale.core.data import Card


PLAYER_PAYLOAD = {
    "tag": "#ABC123",
    "name": "Alice",
    "expLevel": 13,
    "trophies": 5000,
    "currentDeck": [{"name": "Knight", "level": 14}],
    "clan": {"tag": "#CLAN1"},
}


def make_client(handler, **kwargs):
    return ClashApiClient("secret-token", transport=httpx.MockTransport(handler), **kwargs)


class TestEncodeTag:

    def test_hash_is_percent_encoded(self):
        assert encode_tag("abc123") == "%23ABC123"
        assert encode_tag("#abc123") == "%23ABC123"


class TestClashApiClient:

    def test_empty_token_is_rejected(self):
        with pytest.raises(ValueError):
            ClashApiClient("")

    def test_fetch_player(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.raw_path.decode()
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json=PLAYER_PAYLOAD)

        with make_client(handler) as client:
            player = client.fetch_player("abc123")

        assert seen["path"] == "/v1/players/%23ABC123"
        assert seen["auth"] == "Bearer secret-token"
        assert player.name == "Alice"
        assert player.current_deck == (Card("Knight", 14),)
        assert player.clan_tag == "#CLAN1"

    def test_fetch_clan_members(self):
        def handler(request):
            assert request.url.raw_path.decode() == "/v1/clans/%23CLAN1/members"
            return httpx.Response(200, json={"items": [{"tag": "#M", "name": "Ann", "trophies": 3000}]})

        members = make_client(handler).fetch_clan_members("#CLAN1")

        assert [(m.name, m.trophies) for m in members] == [("Ann", 3000)]

    def test_fetch_current_war(self):
        def handler(request):
            assert request.url.raw_path.decode() == "/v1/clans/%23CLAN1/currentriverrace"
            return httpx.Response(200, json={"state": "full", "clan": {"participants": [{"name": "Wes"}]}})

        war = make_client(handler).fetch_current_war("CLAN1")

        assert war.state == "full"
        assert war.participants[0].name == "Wes"

    def test_location_rankings(self):
        def handler(request):
            assert request.url.path == "/v1/locations/global/rankings/players"
            assert request.url.params["limit"] == "10"
            return httpx.Response(200, json={"items": [{"tag": "#R", "name": "Top", "trophies": 9000, "rank": 1}]})

        rankings = make_client(handler).fetch_location_player_rankings()

        assert rankings[0].rank == 1

    def test_search_tournament_by_tag(self):
        def handler(request):
            assert request.url.raw_path.decode() == "/v1/tournaments/%23T1"
            return httpx.Response(200, json={"tag": "#T1", "name": "Cup", "membersList": [{"name": "Mia"}]})

        tournament = make_client(handler).search_tournament("#T1")

        assert tournament.members_list[0].name == "Mia"

    def test_search_tournament_falls_back_to_name_search(self):
        requests = []

        def handler(request):
            requests.append(request.url.path)
            if request.url.path == "/v1/tournaments/#CUP":
                return httpx.Response(404, json={"reason": "notFound", "message": "no such tag"})
            if request.url.path == "/v1/tournaments":
                assert request.url.params["name"] == "Cup"
                return httpx.Response(200, json={"items": [{"tag": "#T9", "name": "Cup"}]})
            return httpx.Response(200, json={"tag": "#T9", "name": "Cup", "membersList": [{"name": "Max"}]})

        tournament = make_client(handler).search_tournament("Cup")

        assert tournament.tag == "#T9"
        assert tournament.members_list[0].name == "Max"
        assert requests == ["/v1/tournaments/#CUP", "/v1/tournaments", "/v1/tournaments/#T9"]

    def test_search_tournament_with_no_results(self):
        def handler(request):
            if request.url.path == "/v1/tournaments":
                return httpx.Response(200, json={"items": []})
            return httpx.Response(404, json={"reason": "notFound"})

        with pytest.raises(NotFoundError):
            make_client(handler).search_tournament("Nothing")

    @pytest.mark.parametrize("status, error_type", [
        (404, NotFoundError),
        (401, UnauthorizedError),
        (403, UnauthorizedError),
        (503, ClashApiError),
    ])
    def test_error_statuses(self, status, error_type):
        def handler(request):
            return httpx.Response(status, json={"reason": "someReason", "message": "went wrong"})

        with pytest.raises(error_type) as excinfo:
            make_client(handler).fetch_player("#ABC")

        assert excinfo.value.status_code == status
        assert excinfo.value.reason == "someReason"
        assert str(excinfo.value) == f"[{status}] someReason: went wrong"

    def test_transport_failure_is_a_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError):
            make_client(handler).fetch_player("#ABC")

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>")

        with pytest.raises(ClashApiError) as excinfo:
            make_client(handler).fetch_player("#ABC")

        assert excinfo.value.reason == "invalidJson"

    def test_request_hook(self):
        calls = []

        def handler(request):
            return httpx.Response(200, json=PLAYER_PAYLOAD)

        make_client(handler, on_request=lambda *args: calls.append(args)).fetch_player("#ABC123")

        method, path, status, elapsed = calls[0]
        assert (method, path, status) == ("GET", "/v1/players/%23ABC123", 200)
        assert elapsed >= 0

    @pytest.mark.parametrize("payload", [
        {"items": [{"tag": "#X", "trophies": 5}]},
        {"items": ["#X"]},
        [{"name": "Ann"}],
    ])
    def test_unexpected_payload_shape(self, payload):
        def handler(request):
            return httpx.Response(200, json=payload)

        with pytest.raises(ClashApiError) as excinfo:
            make_client(handler).fetch_clan_members("#CLAN1")

        assert excinfo.value.reason == "invalidPayload"
        assert "/v1/clans/%23CLAN1/members" in str(excinfo.value)

    def test_player_without_name(self):
        def handler(request):
            return httpx.Response(200, json={"tag": "#ABC123", "trophies": 10})

        with pytest.raises(ClashApiError, match="Unexpected payload"):
            make_client(handler).fetch_player("#ABC123")
