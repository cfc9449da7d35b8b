"""Page data-assembly services."""
from .move_service import MoveService, build_move_view
from .pokedex_service import PokedexService
from .pokemon_service import PokemonService, build_pokemon_view

__all__ = [
    'MoveService',
    'PokedexService',
    'PokemonService',
    'build_move_view',
    'build_pokemon_view',
]
