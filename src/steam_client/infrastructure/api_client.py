"""
HTTP client for the Steam Web and Store APIs.

Every request is gated by a token bucket: when the bucket is empty the
call fails fast with RateLimitError instead of reaching the network.
HTTP and transport failures are mapped onto the client's error types;
nothing is retried.
"""

import math
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from steam_client.config import SteamClientConfig
from steam_client.contracts import ReviewStats, SteamGameDetails
from steam_client.errors import (
    GameNotFoundError,
    InvalidApiKeyError,
    RateLimitError,
    SteamApiError,
)
from steam_client.infrastructure.token_bucket import RateLimiterConfig, TokenBucket
from steam_client.logger import get_logger

APP_LIST_PAGE_SIZE = 50_000
DEFAULT_RETRY_AFTER_SECONDS = 60


class ApiClient:
    """
    Rate-limited HTTP client for Steam.

    Example:
        >>> async with ApiClient(config) as api:
        ...     apps = await api.fetch_catalog()
        ...     details = await api.fetch_game_details("1091500")
    """

    def __init__(
        self,
        config: SteamClientConfig,
        *,
        rate_limiter: TokenBucket | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            config: Client configuration (API key, URLs, timeout, rate limit)
            rate_limiter: Custom token bucket (built from config if None)
        """
        self._config = config
        self._rate_limiter = rate_limiter or TokenBucket(
            RateLimiterConfig(
                capacity=config.rate_limit_capacity,
                refill_window_ms=config.rate_limit_window_ms,
            )
        )
        self._logger = get_logger(__name__, component="api_client")
        self._client: httpx.AsyncClient | None = None

    @property
    def rate_limiter(self) -> TokenBucket:
        return self._rate_limiter

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout_seconds),
                follow_redirects=True,
                headers={
                    "User-Agent": self._config.user_agent,
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # Rate limiting

    def try_consume_rate_token(self) -> bool:
        """Take a token from the bucket (True if a request may be made)."""
        return self._rate_limiter.try_consume()

    def retry_after(self) -> int:
        """Epoch milliseconds at which the next request will be allowed."""
        return self._rate_limiter.retry_after()

    def _check_rate_limit(self, endpoint: str) -> None:
        if not self.try_consume_rate_token():
            retry_after = self.retry_after()
            self._logger.warning(
                "Rate limit exceeded",
                endpoint=endpoint,
                retry_after=retry_after,
            )
            raise RateLimitError(retry_after, endpoint=endpoint)

    # Steam endpoints

    async def fetch_catalog(self) -> list[dict[str, Any]]:
        """
        Fetch the complete Steam app list (games only).

        Follows IStoreService pagination; every page consumes a token.

        Returns:
            list[dict]: Rows with ``appid`` and ``name``

        Raises:
            RateLimitError: If rate limit exceeded before any page
            InvalidApiKeyError: If the API key is rejected
            SteamApiError: If a request fails
        """
        url = f"{self._config.api_url}/IStoreService/GetAppList/v1/"
        context = "Failed to fetch Steam app list"
        apps: list[dict[str, Any]] = []
        last_appid: int | None = None

        while True:
            params: dict[str, Any] = {
                "key": self._config.api_key.get_secret_value(),
                "include_games": "true",
                "include_dlc": "false",
                "include_software": "false",
                "include_videos": "false",
                "include_hardware": "false",
                "max_results": APP_LIST_PAGE_SIZE,
            }
            if last_appid is not None:
                params["last_appid"] = last_appid

            payload = await self._get_json(url, params=params, context=context)
            page = payload.get("response", {}) if isinstance(payload, dict) else None
            if not isinstance(page, dict):
                raise SteamApiError(f"{context}: unexpected response shape", 0, endpoint=url)

            try:
                apps.extend(
                    {"appid": app["appid"], "name": app.get("name", "")}
                    for app in page.get("apps", [])
                )
            except (KeyError, TypeError, AttributeError) as e:
                raise SteamApiError(
                    f"{context}: malformed app entry",
                    0,
                    endpoint=url,
                    original_error=e,
                ) from e

            self._logger.debug("Fetched app list page", total_so_far=len(apps))

            if not page.get("have_more_results", False):
                break
            last_appid = page.get("last_appid")
            if last_appid is None:
                break

        self._logger.info("Catalog fetch complete", total_apps=len(apps))
        return apps

    async def fetch_game_details(
        self,
        app_id: str,
        *,
        country_code: str = "US",
        language: str = "english",
    ) -> SteamGameDetails:
        """
        Fetch detailed game information from the Steam Store API.

        Args:
            app_id: Steam application ID
            country_code: Country for pricing
            language: Language for descriptions

        Returns:
            SteamGameDetails: Validated game details

        Raises:
            GameNotFoundError: If Steam has no such app
            RateLimitError: If rate limit exceeded
            SteamApiError: If the request fails or the payload is invalid
        """
        url = f"{self._config.store_url}/appdetails"
        context = f"Failed to fetch game details for app ID: {app_id}"

        payload = await self._get_json(
            url,
            params={
                "appids": app_id,
                "cc": country_code,
                "l": language,
                "key": self._config.api_key.get_secret_value(),
            },
            context=context,
            not_found=f"App ID: {app_id}",
        )

        # Steam returns {app_id: {success: bool, data: {...}}}
        app_data = payload.get(str(app_id)) if isinstance(payload, dict) else None
        if app_data is not None and not isinstance(app_data, dict):
            raise SteamApiError(
                f"{context}: unexpected response shape", 0, response_data=payload, endpoint=url
            )
        if not app_data or not app_data.get("success", False):
            self._logger.warning("API returned success=false", app_id=app_id)
            raise GameNotFoundError(f"App ID: {app_id}", endpoint=url)

        data = app_data.get("data") or {}
        if not isinstance(data, dict):
            raise SteamApiError(
                f"{context}: unexpected response shape", 0, response_data=app_data, endpoint=url
            )

        try:
            details = SteamGameDetails.from_store_payload(app_id, data)
        except PydanticValidationError as e:
            raise SteamApiError(
                f"{context}: response validation failed: {e}",
                0,
                response_data=app_data,
                endpoint=url,
                original_error=e,
            ) from e

        self._logger.info("Fetched game details", app_id=app_id, game_name=details.name)
        return details

    async def fetch_review_stats(self, app_id: str) -> ReviewStats:
        """
        Fetch the review summary for a game.

        Raises:
            RateLimitError: If rate limit exceeded
            SteamApiError: If the request fails or Steam reports failure
        """
        url = f"{self._config.store_page_url}/appreviews/{app_id}"
        context = f"Failed to fetch review stats for app ID: {app_id}"

        payload = await self._get_json(
            url,
            params={
                "json": 1,
                "language": "all",
                "purchase_type": "all",
                "num_per_page": 0,
            },
            context=context,
            not_found=f"App ID: {app_id}",
        )

        if not isinstance(payload, dict) or payload.get("success") != 1:
            raise SteamApiError(f"{context}: success=0", 0, response_data=payload, endpoint=url)

        try:
            return ReviewStats.model_validate(payload.get("query_summary") or {})
        except PydanticValidationError as e:
            raise SteamApiError(
                f"{context}: response validation failed: {e}",
                0,
                response_data=payload,
                endpoint=url,
                original_error=e,
            ) from e

    async def search_store(self, term: str, limit: int = 25) -> list[dict[str, Any]]:
        """
        Search games with the Steam Store search API.

        Args:
            term: Search term
            limit: Maximum number of results

        Returns:
            list[dict]: Rows with ``appid`` and ``name``, in Steam's order
        """
        if not term or not term.strip():
            return []

        url = f"{self._config.store_url}/storesearch/"
        payload = await self._get_json(
            url,
            params={"term": term.strip(), "l": "english", "cc": "US"},
            context=f"Failed to search Steam store for term: {term}",
        )

        items = payload.get("items", []) if isinstance(payload, dict) else []
        return [{"appid": item["id"], "name": item.get("name", "")} for item in items[:limit]]

    # Transport

    async def _get_json(
        self,
        url: str,
        *,
        params: dict[str, Any],
        context: str,
        not_found: str | None = None,
    ) -> Any:
        """
        Make a rate-limited GET request and decode the JSON body.

        Raises:
            RateLimitError: If no token is available or Steam answers 429
            InvalidApiKeyError: On 401/403
            GameNotFoundError: On 404
            SteamApiError: On any other failure
        """
        self._check_rate_limit(url)
        self._logger.debug("Making request", url=url)

        try:
            response = await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            self._logger.error("Request failed", url=url, error=str(e))
            raise SteamApiError(
                f"{context}: {e}",
                0,
                endpoint=url,
                original_error=e,
            ) from e

        self._raise_for_status(response, url=url, context=context, not_found=not_found)

        try:
            return response.json()
        except ValueError as e:
            raise SteamApiError(
                f"{context}: invalid JSON response",
                response.status_code,
                response_data=response.text,
                endpoint=url,
                original_error=e,
            ) from e

    def _raise_for_status(
        self,
        response: httpx.Response,
        *,
        url: str,
        context: str,
        not_found: str | None,
    ) -> None:
        status = response.status_code
        if status < 400:
            return

        self._logger.warning("API error response", url=url, status_code=status)

        if status in (401, 403):
            raise InvalidApiKeyError(endpoint=url, status_code=status)

        if status == 404:
            raise GameNotFoundError(not_found or url, endpoint=url, status_code=status)

        if status == 429:
            raise RateLimitError(
                self._upstream_retry_after(response),
                endpoint=url,
                status_code=status,
            )

        raise SteamApiError(
            f"{context}: HTTP {status}",
            status,
            response_data=_response_data(response),
            endpoint=url,
        )

    def _upstream_retry_after(self, response: httpx.Response) -> int:
        """Convert a Retry-After header (seconds) into an epoch ms timestamp."""
        header = response.headers.get("Retry-After", "")
        seconds = int(header) if header.strip().isdigit() else DEFAULT_RETRY_AFTER_SECONDS
        return math.floor(self._rate_limiter.clock()) + seconds * 1000


def _response_data(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
