"""Integration tests for the Steam client with mocked HTTP responses."""

from typing import Any

import httpx
import pytest
import respx
from steam_client import (
    GameNotFoundError,
    PartialGameData,
    RateLimitError,
    SearchOptions,
    SteamClient,
    SteamClientConfig,
)

APP_LIST_URL = "https://api.steampowered.com/IStoreService/GetAppList/v1/"
APP_DETAILS_URL = "https://store.steampowered.com/api/appdetails"
REVIEWS_URL = "https://store.steampowered.com/appreviews/1091500"

APP_LIST_RESPONSE = {
    "response": {
        "apps": [
            {"appid": 1091500, "name": "Cyberpunk 2077"},
            {"appid": 570, "name": "Dota 2"},
            {"appid": 271590, "name": "Grand Theft Auto V"},
            {"appid": 1145360, "name": "Hades"},
        ]
    }
}

REVIEWS_RESPONSE = {
    "success": 1,
    "query_summary": {
        "review_score": 8,
        "review_score_desc": "Very Positive",
        "total_positive": 450,
        "total_negative": 50,
        "total_reviews": 500,
    },
}


def details_by_app_id(
    request: httpx.Request, store_payload: Any, **overrides: Any
) -> httpx.Response:
    """Answer /appdetails for whichever app id was requested."""
    app_id = request.url.params["appids"]
    return httpx.Response(200, json=store_payload(app_id, **overrides))


def mock_app_list() -> respx.Route:
    return respx.get(APP_LIST_URL).mock(return_value=httpx.Response(200, json=APP_LIST_RESPONSE))


def mock_details(store_payload: Any, **overrides: Any) -> respx.Route:
    return respx.get(APP_DETAILS_URL).mock(
        side_effect=lambda request: details_by_app_id(request, store_payload, **overrides)
    )


class TestSearchGame:
    """Tests for single-game search."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_exact_match(self, config: SteamClientConfig, store_payload: Any) -> None:
        """Test that an exact normalized match scores 1.0."""
        mock_app_list()
        mock_details(store_payload)

        async with SteamClient(config) as steam:
            result = await steam.search_game("CYBERPUNK 2077")

        assert result is not None
        assert result.app_id == "1091500"
        assert result.match_score == 1.0

    @respx.mock
    @pytest.mark.asyncio
    async def test_fuzzy_match(self, config: SteamClientConfig, store_payload: Any) -> None:
        """Test fuzzy matching for a misspelled title."""
        mock_app_list()
        mock_details(store_payload)

        async with SteamClient(config) as steam:
            result = await steam.search_game("Cyberpnk 2077")

        assert result is not None
        assert result.app_id == "1091500"
        assert result.match_score is not None
        assert 0.7 <= result.match_score < 1.0

    @respx.mock
    @pytest.mark.asyncio
    async def test_no_match(self, config: SteamClientConfig, store_payload: Any) -> None:
        """Test that an unrelated title finds nothing."""
        mock_app_list()
        details_route = mock_details(store_payload)

        async with SteamClient(config) as steam:
            result = await steam.search_game("Zzzzqqqq Xxxxwwww")

        assert result is None
        assert details_route.call_count == 0

    @respx.mock
    @pytest.mark.asyncio
    async def test_adult_game_filtered(self, config: SteamClientConfig, store_payload: Any) -> None:
        """Test that adult games are filtered unless requested."""
        mock_app_list()
        mock_details(store_payload, required_age=18)

        async with SteamClient(config) as steam:
            filtered = await steam.search_game("Hades")
            included = await steam.search_game("Hades", SearchOptions(include_adult=True))

        assert filtered is None
        assert included is not None
        assert included.app_id == "1145360"

    @respx.mock
    @pytest.mark.asyncio
    async def test_adult_probe_fails_open(self, config: SteamClientConfig) -> None:
        """Test that a failed details probe keeps the match."""
        mock_app_list()
        respx.get(APP_DETAILS_URL).mock(return_value=httpx.Response(500))

        async with SteamClient(config) as steam:
            result = await steam.search_game("Dota 2")

        assert result is not None
        assert result.app_id == "570"

    @respx.mock
    @pytest.mark.asyncio
    async def test_adult_probe_fails_open_on_malformed_details(
        self, config: SteamClientConfig
    ) -> None:
        """Test that a malformed details entry keeps the match."""
        mock_app_list()
        respx.get(APP_DETAILS_URL).mock(
            return_value=httpx.Response(200, json={"570": "unexpected"})
        )

        async with SteamClient(config) as steam:
            result = await steam.search_game("Dota 2")

        assert result is not None
        assert result.app_id == "570"

    @respx.mock
    @pytest.mark.asyncio
    async def test_app_list_fetched_once(
        self, config: SteamClientConfig, store_payload: Any
    ) -> None:
        """Test that the app list is cached between searches."""
        app_list_route = mock_app_list()
        mock_details(store_payload)

        async with SteamClient(config) as steam:
            await steam.search_game("Dota 2")
            await steam.search_game("Hades")

        assert app_list_route.call_count == 1

    @respx.mock
    @pytest.mark.asyncio
    async def test_bypass_cache(self, config: SteamClientConfig, store_payload: Any) -> None:
        """Test that bypass_cache refetches details for the adult probe."""
        mock_app_list()
        details_route = mock_details(store_payload)

        async with SteamClient(config) as steam:
            await steam.search_game("Dota 2")
            await steam.search_game("Dota 2")
            await steam.search_game("Dota 2", SearchOptions(bypass_cache=True))

        assert details_route.call_count == 2

    @respx.mock
    @pytest.mark.asyncio
    async def test_rate_limit_propagates(self, store_payload: Any) -> None:
        """Test that a blocked app list fetch raises RateLimitError."""
        mock_app_list()
        mock_details(store_payload)
        config = SteamClientConfig(api_key="test_api_key_123", rate_limit_capacity=1)

        async with SteamClient(config) as steam:
            await steam.get_game_details("570")
            with pytest.raises(RateLimitError):
                await steam.search_game("Dota 2")


class TestSearchGames:
    """Tests for multi-game search."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_best_first(self, config: SteamClientConfig) -> None:
        """Test that results are ordered best first."""
        mock_app_list()

        async with SteamClient(config) as steam:
            results = await steam.search_games("grand theft auto", limit=3)

        assert results
        assert results[0].app_id == "271590"
        scores = [r.match_score for r in results]
        assert scores == sorted(scores, reverse=True)

    @respx.mock
    @pytest.mark.asyncio
    async def test_blank_title(self, config: SteamClientConfig) -> None:
        """Test that a blank title returns nothing without a request."""
        app_list_route = mock_app_list()

        async with SteamClient(config) as steam:
            results = await steam.search_games("   ")

        assert results == []
        assert app_list_route.call_count == 0


class TestGameDetails:
    """Tests for details caching."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_details_cached(self, config: SteamClientConfig, store_payload: Any) -> None:
        """Test that details are fetched once."""
        route = mock_details(store_payload)

        async with SteamClient(config) as steam:
            first = await steam.get_game_details("1091500")
            second = await steam.get_game_details("1091500")

        assert first == second
        assert route.call_count == 1

    @respx.mock
    @pytest.mark.asyncio
    async def test_lru_eviction(self, store_payload: Any) -> None:
        """Test that a full details cache evicts the least recently used entry."""
        route = mock_details(store_payload)
        config = SteamClientConfig(api_key="test_api_key_123", cache_size=1)

        async with SteamClient(config) as steam:
            await steam.get_game_details("100")
            await steam.get_game_details("200")
            await steam.get_game_details("100")

        assert route.call_count == 3
        assert [call.request.url.params["appids"] for call in route.calls] == [
            "100",
            "200",
            "100",
        ]

    @respx.mock
    @pytest.mark.asyncio
    async def test_not_found(self, config: SteamClientConfig) -> None:
        """Test that missing apps raise GameNotFoundError."""
        respx.get(APP_DETAILS_URL).mock(
            return_value=httpx.Response(200, json={"42": {"success": False}})
        )

        async with SteamClient(config) as steam:
            with pytest.raises(GameNotFoundError):
                await steam.get_game_details("42")

    @respx.mock
    @pytest.mark.asyncio
    async def test_extract_screenshots(self, config: SteamClientConfig, store_payload: Any) -> None:
        """Test screenshot extraction through the client."""
        mock_details(store_payload)

        async with SteamClient(config) as steam:
            details = await steam.get_game_details("1091500")

        assert len(steam.extract_screenshots(details)) == 3
        assert len(steam.extract_screenshots(details, limit=10)) == 5


class TestEnrichMetadata:
    """Tests for metadata enrichment."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_enrich_with_steam_id(
        self, config: SteamClientConfig, store_payload: Any
    ) -> None:
        """Test enrichment when the Steam ID is already known."""
        app_list_route = mock_app_list()
        mock_details(store_payload)
        respx.get(REVIEWS_URL).mock(return_value=httpx.Response(200, json=REVIEWS_RESPONSE))

        async with SteamClient(config) as steam:
            enriched = await steam.enrich_metadata(
                PartialGameData(title="Cyberpunk 2077", steam_id="1091500")
            )

        assert app_list_route.call_count == 0
        assert enriched.steam_id == "1091500"
        assert enriched.price == "$29.99"
        assert enriched.categories[:2] == ["Action", "RPG"]
        assert enriched.rating is not None
        assert enriched.rating.metacritic == 86
        assert enriched.rating.steam is not None
        assert enriched.rating.steam.percent == 90
        assert enriched.is_adult is False

    @respx.mock
    @pytest.mark.asyncio
    async def test_enrich_by_title(self, config: SteamClientConfig, store_payload: Any) -> None:
        """Test enrichment resolving the title first."""
        mock_app_list()
        mock_details(store_payload)
        respx.get(REVIEWS_URL).mock(return_value=httpx.Response(200, json=REVIEWS_RESPONSE))

        async with SteamClient(config) as steam:
            enriched = await steam.enrich_metadata(
                PartialGameData(title="Cyberpunk 2077 (FitGirl Repack)")
            )

        assert enriched.steam_id == "1091500"
        assert len(enriched.screenshots) == 3

    @respx.mock
    @pytest.mark.asyncio
    async def test_enrich_adult_game(self, config: SteamClientConfig, store_payload: Any) -> None:
        """Test that adult games are enriched and flagged."""
        mock_app_list()
        mock_details(store_payload, content_descriptors={"ids": [3], "notes": None})
        respx.get(REVIEWS_URL).mock(return_value=httpx.Response(200, json=REVIEWS_RESPONSE))

        async with SteamClient(config) as steam:
            enriched = await steam.enrich_metadata(PartialGameData(title="Cyberpunk 2077"))

        assert enriched.steam_id == "1091500"
        assert enriched.is_adult is True

    @respx.mock
    @pytest.mark.asyncio
    async def test_enrich_not_found(self, config: SteamClientConfig) -> None:
        """Test that an unmatched title raises GameNotFoundError."""
        mock_app_list()

        async with SteamClient(config) as steam:
            with pytest.raises(GameNotFoundError, match="Zzzzqqqq"):
                await steam.enrich_metadata(PartialGameData(title="Zzzzqqqq Xxxxwwww"))


class TestCacheManagement:
    """Tests for cache statistics and clearing."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_cache_stats(self, config: SteamClientConfig, store_payload: Any) -> None:
        """Test combined cache statistics."""
        mock_app_list()
        mock_details(store_payload)

        async with SteamClient(config) as steam:
            empty = steam.get_cache_stats()
            await steam.search_game("Dota 2")
            await steam.get_game_details("570")
            stats = steam.get_cache_stats()

        assert empty.app_list_size == 0
        assert empty.details_cache_size == 0
        assert empty.hit_rate == 0.0
        assert stats.app_list_size == 1
        assert stats.details_cache_size == 1
        assert 0.0 < stats.hit_rate <= 1.0

    @respx.mock
    @pytest.mark.asyncio
    async def test_clear_cache(self, config: SteamClientConfig, store_payload: Any) -> None:
        """Test that clearing forces fresh fetches."""
        app_list_route = mock_app_list()
        details_route = mock_details(store_payload)

        async with SteamClient(config) as steam:
            await steam.search_game("Dota 2")
            steam.clear_cache()
            stats = steam.get_cache_stats()
            await steam.search_game("Dota 2")

        assert stats.app_list_size == 0
        assert stats.details_cache_size == 0
        assert app_list_route.call_count == 2
        assert details_route.call_count == 2
