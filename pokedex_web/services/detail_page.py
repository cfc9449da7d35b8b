import logging
from functools import partial
from typing import Type

from pokedex_web.cache import PageCache, Scheduler
from pokedex_web.clients.pokeapi_client import PokeAPIClient
from pokedex_web.formatting import normalize_slug
from pokedex_web.models import PageProps

logger = logging.getLogger(__name__)

class DetailPageService:
    """
    Serves a cached detail page keyed by its normalized slug.

    Subclasses set ``CACHE_KIND`` and ``PROPS_TYPE`` and implement
    ``fetch_detail``, which must turn every failure into error props.
    """

    CACHE_KIND: str
    PROPS_TYPE: Type[PageProps]

    def __init__(self, poke_client: PokeAPIClient, page_cache: PageCache):
        self._poke_client = poke_client
        self._page_cache = page_cache

    async def fetch_detail(self, slug: str) -> PageProps:
        raise NotImplementedError

    async def get_page(self, slug: str, schedule: Scheduler | None = None):
        """Returns cached props for the page, generating them on first request."""
        normalized_slug = normalize_slug(slug)
        return await self._page_cache.get_or_generate(
            self.CACHE_KIND,
            normalized_slug,
            partial(self.fetch_detail, normalized_slug),
            self.PROPS_TYPE,
            schedule,
        )

    async def pregenerate(self, slugs: list[str]):
        """Builds the given pages ahead of the first request."""
        for slug in slugs:
            normalized_slug = normalize_slug(slug)
            props = await self._page_cache.regenerate(
                self.CACHE_KIND, normalized_slug, partial(self.fetch_detail, normalized_slug)
            )
            if props.error:
                logger.warning(
                    f"Pre-generated {self.CACHE_KIND} page '{normalized_slug}' with error: {props.error}"
                )
