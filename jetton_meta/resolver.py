"""Resolve jetton content variants into a single set of display fields."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from .errors import DecodeError, RemoteError
from .meta.cache import ContentCache, default_cache
from .providers.offchain import fetch_offchain_content
from .types import (
    CONTENT_OFFCHAIN,
    CONTENT_ONCHAIN,
    CONTENT_SEMICHAIN,
    ContentOffchain,
    ContentOnchain,
    ContentSemichain,
    ContentVariant,
    OffchainContent,
    ResolvedContent,
)

LOGGER = logging.getLogger(__name__)

CONTENT_TTL = 60 * 60.0

Fetcher = Callable[[str], Awaitable[OffchainContent]]


class ContentResolver:
    """Turn a content variant into :class:`ResolvedContent`.

    Off-chain documents are looked up in ``cache`` first and fetched with
    ``fetch`` on a miss; successful fetches are cached for ``ttl`` seconds.
    Fetch failures never propagate: the affected fields are left empty and
    the result is marked ``partial``.
    """

    def __init__(
        self,
        cache: Optional[ContentCache] = None,
        fetch: Fetcher = fetch_offchain_content,
        *,
        ttl: float = CONTENT_TTL,
    ) -> None:
        self.cache = cache if cache is not None else default_cache()
        self._fetch = fetch
        self.ttl = ttl

    async def resolve(self, content: ContentVariant) -> ResolvedContent:
        if isinstance(content, ContentOnchain):
            return ResolvedContent(
                content_type=CONTENT_ONCHAIN,
                name=content.get_attribute("name"),
                symbol=content.get_attribute("symbol"),
                description=content.get_attribute("description"),
                image=content.get_attribute("image"),
                decimals_raw=content.get_attribute("decimals"),
                resolution="resolved",
            )

        if isinstance(content, ContentSemichain):
            offchain = await self._cached_offchain_content(content.uri)
            # decimals always come from the chain for this layout
            decimals_raw = content.get_attribute("decimals")
            if offchain is None:
                return ResolvedContent(
                    content_type=CONTENT_SEMICHAIN, decimals_raw=decimals_raw, resolution="partial"
                )
            return ResolvedContent(
                content_type=CONTENT_SEMICHAIN,
                name=offchain.name,
                symbol=offchain.symbol,
                description=offchain.description,
                image=offchain.image,
                decimals_raw=decimals_raw,
                resolution="resolved",
            )

        if isinstance(content, ContentOffchain):
            offchain = await self._cached_offchain_content(content.uri)
            if offchain is None:
                return ResolvedContent(content_type=CONTENT_OFFCHAIN, resolution="partial")
            return ResolvedContent(
                content_type=CONTENT_OFFCHAIN,
                name=offchain.name,
                symbol=offchain.symbol,
                description=offchain.description,
                image=offchain.image,
                decimals_raw="" if offchain.decimals is None else str(offchain.decimals),
                resolution="resolved",
            )

        LOGGER.error("Unknown jetton content type: %r", content)
        return ResolvedContent(resolution="unrecognized")

    async def _cached_offchain_content(self, uri: str) -> Optional[OffchainContent]:
        cached = self.cache.get(uri)
        if cached is not None:
            LOGGER.debug("Off-chain content cache hit for %s", uri)
            return cached
        try:
            result = await self._fetch(uri)
        except (RemoteError, DecodeError) as exc:
            LOGGER.warning("Off-chain content fetch failed: %s", exc)
            return None
        self.cache.set(uri, result, ttl=self.ttl)
        LOGGER.debug("Cached off-chain content for %s", uri)
        return result
