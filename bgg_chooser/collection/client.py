"""
Async client for the BGG XML API 2 collection endpoint.

BGG answers a collection request with 202 while it prepares the export, so
the client polls with exponential backoff until it gets a terminal answer.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Tuple
from urllib.parse import quote

import aiohttp

from ..config import (
    COLLECTION_ENDPOINT,
    DEFAULT_MAX_AGE,
    EXCLUDED_SUBTYPE,
    INITIAL_BACKOFF,
    MAX_POLL_ATTEMPTS,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from ..error_handling import InvalidUsername, NetworkFailure, TransientServerBusy, UnexpectedStatus
from ..models import CollectionFetchResult
from .cache import CollectionCache
from .parser import parse_collection

logger = logging.getLogger(__name__)


class BGGCollectionClient:
    """Fetches, parses and caches user collections."""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        cache: Optional[CollectionCache] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        initial_backoff: float = INITIAL_BACKOFF,
        max_attempts: Optional[int] = MAX_POLL_ATTEMPTS,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """
        Initialize the collection client.

        Args:
            session: Shared aiohttp session; one is created (and owned) when omitted
            cache: Result cache, shared between clients if passed in
            sleep: Coroutine used to wait between polls
            initial_backoff: First wait after a 202, in seconds
            max_attempts: Maximum number of requests per fetch, None for no limit
            timeout: Total timeout of a single request, in seconds
        """
        self._session = session
        self._owns_session = False
        self.cache = cache if cache is not None else CollectionCache()
        self._sleep = sleep
        self.initial_backoff = initial_backoff
        self.max_attempts = max_attempts
        self.timeout = timeout

    async def __aenter__(self) -> "BGGCollectionClient":
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _ensure_session(self):
        if self._session is None:
            self._session = aiohttp.ClientSession(headers={"User-Agent": USER_AGENT})
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
        if self._owns_session:
            self._session = None
            self._owns_session = False

    @staticmethod
    def collection_url(username: str) -> str:
        return (
            f"{COLLECTION_ENDPOINT}?username={quote(username, safe='')}"
            f"&excludesubtype={EXCLUDED_SUBTYPE}&stats=1"
        )

    async def fetch_collection(self, username: str, max_age: float = DEFAULT_MAX_AGE) -> CollectionFetchResult:
        """
        Get a user's collection, from cache when fresh enough.

        Args:
            username: BGG username, used verbatim as the cache key
            max_age: Maximum age in seconds of a cached result; 0 forces a fetch

        Returns:
            The parsed collection

        Raises:
            InvalidUsername, NetworkFailure, MalformedResponse, UnexpectedStatus,
            TransientServerBusy (only when max_attempts is set)
        """
        if not username:
            raise InvalidUsername(username, "Username must not be empty")

        cached = self.cache.fresh(username, max_age)
        if cached is not None:
            logger.info(f"Using cached collection for '{username}' ({len(cached.items)} items)")
            return cached

        seen_generation = self.cache.generation(username)
        async with self.cache.lock(username):
            # Another caller may have fetched this user while we waited for the lock
            entry = self.cache.get(username)
            if entry is not None and entry.generation > seen_generation:
                logger.debug(f"Reusing collection for '{username}' fetched by a concurrent request")
                return entry.result

            result = await self._poll(username)
            self.cache.put(username, result)
            return result

    async def _poll(self, username: str) -> CollectionFetchResult:
        url = self.collection_url(username)
        backoff = self.initial_backoff
        attempt = 0
        while True:
            attempt += 1
            logger.info(f"Requesting collection for '{username}' (attempt {attempt})")
            status, body = await self._get(url, username)

            if status == 200:
                result = parse_collection(body, username)
                logger.info(f"Fetched {len(result.items)} items for '{username}' after {attempt} request(s)")
                return result
            if status != 202:
                logger.warning(f"Collection request for '{username}' failed with status {status}")
                raise UnexpectedStatus(username, status)
            if self.max_attempts is not None and attempt >= self.max_attempts:
                raise TransientServerBusy(username, attempt)

            logger.info(f"Collection for '{username}' is being prepared, retrying in {backoff:.1f} seconds...")
            await self._sleep(backoff)
            backoff *= 2

    async def _get(self, url: str, username: str) -> Tuple[int, bytes]:
        session = self._ensure_session()
        try:
            async with session.get(url, timeout=aiohttp.ClientTimeout(total=self.timeout)) as response:
                body = await response.read() if response.status == 200 else b""
                return response.status, body
        except asyncio.TimeoutError as e:
            raise NetworkFailure(username, f"Timed out fetching collection for '{username}'") from e
        except aiohttp.ClientError as e:
            raise NetworkFailure(username, f"Network error fetching collection for '{username}': {type(e).__name__}") from e
