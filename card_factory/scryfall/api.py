"""Scryfall REST API adapter: fuzzy card lookup and art-version listing.

Scryfall asks clients to wait 50-100 ms between requests. Paginated art
listings wait at least MIN_PAGE_DELAY_MS between pages.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Tuple

import httpx

from card_factory.models import (
    ArtVersionRecord,
    CardLookupResult,
    InvalidQuery,
    TransientError,
)
from card_factory.scryfall.mapping import (
    is_error_object,
    is_not_found_error,
    next_page_url,
    parse_art_page,
    parse_card,
    parse_not_found,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://api.scryfall.com"
USER_AGENT = "CardFactory/0.3"
MIN_PAGE_DELAY_MS = 100
DEFAULT_MAX_PAGES = 20


class ScryfallApiAdapter:
    """Card source backed by the Scryfall REST API.

    The adapter owns one long-lived ``httpx.AsyncClient`` unless a client is
    passed in, in which case the caller keeps ownership of it. Calls hold no
    other state, so one adapter can serve concurrent lookups.
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        user_agent: str = USER_AGENT,
        timeout_s: float = 10.0,
        page_delay_ms: int = MIN_PAGE_DELAY_MS,
        max_pages: int = DEFAULT_MAX_PAGES,
        image_size: str = "normal",
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "application/json",
        }
        self._timeout = timeout_s
        self._page_delay = max(page_delay_ms, MIN_PAGE_DELAY_MS) / 1000.0
        self._max_pages = max(max_pages, 1)
        self._image_size = image_size
        self._client = client
        self._owns_client = client is None

    @property
    def name(self) -> str:
        return "scryfall-api"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._headers,
            )
            self._owns_client = True
        return self._client

    async def _throttle(self) -> None:
        await asyncio.sleep(self._page_delay)

    async def _get(self, url: str, params: Optional[dict] = None) -> Tuple[int, Any]:
        """GET ``url`` and decode the body as JSON.

        Raises httpx.HTTPError on transport failures and ValueError on an
        undecodable body. HTTP error statuses are returned, not raised, so
        callers can inspect Scryfall's error envelope.
        """
        client = self._get_client()
        resp = await client.get(
            url, params=params, headers=self._headers, timeout=self._timeout
        )
        if resp.status_code == 429:
            logger.warning("Scryfall rate limit hit on %s", resp.request.url)
        try:
            return resp.status_code, resp.json()
        except ValueError:
            # Error pages from proxies are often HTML
            if resp.status_code >= 400:
                return resp.status_code, None
            raise

    async def lookup_card(self, query: str) -> CardLookupResult:
        """Resolve a free-text name to the best matching card.

        Returns a CardRecord, NotFound, TransientError or InvalidQuery.
        Failures are never retried here.
        """
        if not query or not query.strip():
            return InvalidQuery(query=query)

        try:
            status, data = await self._get(
                f"{self._base_url}/cards/named", params={"fuzzy": query}
            )
        except httpx.TimeoutException:
            logger.warning("Scryfall lookup for %r timed out", query)
            return TransientError(query=query, message="request timed out")
        except httpx.HTTPError as exc:
            logger.warning("Scryfall lookup for %r failed: %s", query, exc)
            return TransientError(query=query, message=f"request failed: {exc}")
        except ValueError as exc:
            logger.warning("Scryfall lookup for %r returned invalid JSON: %s", query, exc)
            return TransientError(query=query, message="invalid JSON in response")

        if is_not_found_error(data, status):
            result = parse_not_found(data, query)
            logger.info("Scryfall: no card matches %r (%s)", query, result.details)
            return result
        if status >= 400:
            logger.warning("Scryfall lookup for %r returned HTTP %d", query, status)
            return TransientError(query=query, message=f"HTTP {status}")
        if not isinstance(data, dict) or is_error_object(data):
            logger.warning("Scryfall lookup for %r returned an unexpected body", query)
            return TransientError(query=query, message="unexpected response body")

        card = parse_card(data, self._image_size)
        if not card.name:
            return TransientError(query=query, message="card object without a name")
        logger.debug("Scryfall: %r -> %r", query, card.name)
        return card

    async def lookup_art_versions(self, canonical_name: str) -> List[ArtVersionRecord]:
        """List every unique art of a card, following pagination.

        ``canonical_name`` is matched exactly, so pass the name returned by
        lookup_card rather than the user's query. A failed page ends the
        listing and the versions gathered so far are returned.
        """
        if not canonical_name or not canonical_name.strip():
            return []

        versions: List[ArtVersionRecord] = []
        url: Optional[str] = f"{self._base_url}/cards/search"
        params: Optional[dict] = {"q": f'!"{canonical_name}" unique:art'}
        pages = 0

        while url is not None:
            if pages >= self._max_pages:
                logger.warning(
                    "Scryfall: stopped art listing for %r after %d pages",
                    canonical_name, pages,
                )
                break
            if pages > 0:
                await self._throttle()

            try:
                status, data = await self._get(url, params=params)
            except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
                # next_page comes from the provider and may not parse
                logger.warning(
                    "Scryfall: art page %d for %r failed: %s", pages + 1, canonical_name, exc
                )
                break
            pages += 1

            if status >= 400 or not isinstance(data, dict) or is_error_object(data):
                # Scryfall answers a search with zero hits with a 404 envelope
                logger.info(
                    "Scryfall: art page %d for %r returned HTTP %d",
                    pages, canonical_name, status,
                )
                break

            versions.extend(parse_art_page(data, self._image_size))
            # next_page is a full URL; it is requested as-is
            url = next_page_url(data)
            params = None

        logger.info("Scryfall: %r -> %d art versions", canonical_name, len(versions))
        return versions

    async def close(self) -> None:
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
