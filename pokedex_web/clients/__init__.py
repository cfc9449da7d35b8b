"""Client modules for external API communication."""
from .pokeapi_client import PokeAPIClient, APIClientError, UpstreamStatusError

__all__ = [
    'PokeAPIClient',
    'APIClientError',
    'UpstreamStatusError',
]
