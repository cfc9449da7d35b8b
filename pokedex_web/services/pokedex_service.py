import asyncio
import logging

from pokedex_web.clients.pokeapi_client import PokeAPIClient
from pokedex_web.config import PAGE_SIZE
from pokedex_web.models import CollectionPage, PokemonListItem

logger = logging.getLogger(__name__)

class PokedexService:
    def __init__(self, poke_client: PokeAPIClient):
        self._poke_client = poke_client

    async def fetch_page(self, page_index: int) -> CollectionPage:
        """
        Fetches one page of the collection and enriches every entry with its sprite.

        The per-entry detail requests run concurrently. Results keep the collection
        order, and any failing detail request fails the whole page.
        """
        offset = page_index * PAGE_SIZE
        pokedex = await self._poke_client.get_pokemon_list(limit=PAGE_SIZE, offset=offset)

        details = await asyncio.gather(
            *(self._poke_client.get_resource(entry.url) for entry in pokedex.results)
        )
        logger.info(f"Fetched {len(details)} Pokemon for page {page_index}")

        items = [
            PokemonListItem(
                name=entry.name,
                url=entry.url,
                sprite=detail["sprites"].get("front_default"),
            )
            for entry, detail in zip(pokedex.results, details)
        ]
        return CollectionPage(
            count=pokedex.count,
            items=items,
            page_index=page_index,
            page_size=PAGE_SIZE,
        )
