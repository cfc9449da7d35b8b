import httpx
import logging
from fastapi import HTTPException

from pokedex_web.config import get_request_timeout
from pokedex_web.models import Move, Pokemon, PokemonList, PokemonSpecies

logger = logging.getLogger(__name__)

# Define a custom exception for client errors (network failures map to 503)
class APIClientError(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=f"External API Error: {detail}")

class UpstreamStatusError(APIClientError):
    """PokeAPI answered with a non-success status. Keeps the upstream status and reason."""

    def __init__(self, upstream_status: int, reason: str, url: str):
        self.upstream_status = upstream_status
        self.reason = reason
        # Upstream 404 stays a 404, anything else means PokeAPI is unavailable to us
        status_code = 404 if upstream_status == 404 else 503
        super().__init__(
            status_code=status_code,
            detail=f"PokeAPI returned {upstream_status} {reason} for {url}",
        )

class PokeAPIClient:
    BASE_URL = "https://pokeapi.co/api/v2"

    def __init__(self, timeout: float | None = None):
        if timeout is None:
            timeout = get_request_timeout()
        self.client = httpx.AsyncClient(base_url=self.BASE_URL, timeout=timeout)

    async def _get_json(self, url: str, params: dict | None = None) -> dict:
        """Internal method performing a GET with error mapping. Absolute URLs bypass BASE_URL."""
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()  # Raises for 4xx/5xx status codes
            return response.json()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(f"PokeAPI returned {status_code} for {url}")
            raise UpstreamStatusError(status_code, e.response.reason_phrase, url)
        except httpx.RequestError as e:
            # Handle network failures/timeouts
            logger.error(f"PokeAPI network error for {url}: {str(e)}")
            raise APIClientError(status_code=503, detail=f"PokeAPI network error: {str(e)}")

    async def get_pokemon_list(self, limit: int, offset: int) -> PokemonList:
        """Fetches one page of the Pokemon collection."""
        data = await self._get_json("/pokemon", params={"limit": limit, "offset": offset})
        return PokemonList.model_validate(data)

    async def get_resource(self, url: str) -> dict:
        """Fetches a raw record from an absolute PokeAPI URL, as linked from list results."""
        return await self._get_json(url)

    async def get_pokemon(self, slug: str) -> Pokemon:
        data = await self._get_json(f"/pokemon/{slug}")
        return Pokemon.model_validate(data)

    async def get_pokemon_species(self, name: str) -> PokemonSpecies:
        data = await self._get_json(f"/pokemon-species/{name}")
        return PokemonSpecies.model_validate(data)

    async def get_move(self, slug: str) -> Move:
        data = await self._get_json(f"/move/{slug}")
        return Move.model_validate(data)

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
