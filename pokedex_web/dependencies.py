from pokedex_web.cache import PageCache
from pokedex_web.clients import PokeAPIClient
from pokedex_web.services import MoveService, PokedexService, PokemonService
from fastapi import Depends

_poke_client = None
_page_cache = None

def get_poke_client() -> PokeAPIClient:
    global _poke_client
    if _poke_client is None:
        _poke_client = PokeAPIClient()
    return _poke_client

def get_page_cache() -> PageCache:
    global _page_cache
    if _page_cache is None:
        _page_cache = PageCache()
    return _page_cache

def get_pokedex_service(
    poke_client: PokeAPIClient = Depends(get_poke_client),
) -> PokedexService:
    return PokedexService(poke_client=poke_client)

def get_pokemon_service(
    poke_client: PokeAPIClient = Depends(get_poke_client),
    page_cache: PageCache = Depends(get_page_cache),
) -> PokemonService:
    return PokemonService(poke_client=poke_client, page_cache=page_cache)

def get_move_service(
    poke_client: PokeAPIClient = Depends(get_poke_client),
    page_cache: PageCache = Depends(get_page_cache),
) -> MoveService:
    return MoveService(poke_client=poke_client, page_cache=page_cache)

async def close_clients():
    """Release the shared clients (called on app shutdown)."""
    global _poke_client, _page_cache
    if _poke_client is not None:
        await _poke_client.close()
        _poke_client = None
    if _page_cache is not None:
        await _page_cache.close()
        _page_cache = None
