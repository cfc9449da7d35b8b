import logging

from pokedex_web.clients.pokeapi_client import UpstreamStatusError
from pokedex_web.config import MOVE_DISPLAY_LIMIT, REVALIDATE_ERROR, REVALIDATE_SUCCESS
from pokedex_web.formatting import format_name, normalize_slug
from pokedex_web.models import (
    Pokemon,
    PokemonDetailView,
    PokemonPageProps,
    PokemonSpecies,
    ResourceLink,
    StatView,
)
from pokedex_web.services.derivation import select_description, type_tag
from pokedex_web.services.detail_page import DetailPageService

logger = logging.getLogger(__name__)

def build_pokemon_view(pokemon: Pokemon, species: PokemonSpecies | None) -> PokemonDetailView:
    """Derives the display model. Species fields are left empty when species is missing."""
    types = sorted(pokemon.types, key=lambda type_slot: type_slot.slot)
    view = PokemonDetailView(
        name=pokemon.name,
        display_name=format_name(pokemon.name),
        sprite=pokemon.sprites.front_default,
        types=[type_tag(type_slot.type) for type_slot in types],
        stats=[
            StatView(name=s.stat.name, display_name=format_name(s.stat.name), base_stat=s.base_stat)
            for s in pokemon.stats
        ],
        moves=[
            ResourceLink(name=m.move.name, display_name=format_name(m.move.name))
            for m in pokemon.moves[:MOVE_DISPLAY_LIMIT]
        ],
    )
    if species is None:
        return view

    evolves_from = None
    if species.evolves_from_species is not None:
        evolves_from = ResourceLink(
            name=species.evolves_from_species.name,
            display_name=format_name(species.evolves_from_species.name),
        )
    return view.model_copy(update={
        "description": select_description(species.flavor_text_entries),
        "is_legendary": species.is_legendary,
        "is_mythical": species.is_mythical,
        "evolves_from": evolves_from,
    })

class PokemonService(DetailPageService):
    CACHE_KIND = "pokemon"
    PROPS_TYPE = PokemonPageProps

    async def fetch_detail(self, slug: str) -> PokemonPageProps:
        """
        Fetches a Pokemon and its species. Never raises: failures become error props.

        A failed species fetch keeps the Pokemon so the page can still show it.
        """
        try:
            normalized_slug = normalize_slug(slug)

            try:
                pokemon = await self._poke_client.get_pokemon(normalized_slug)
            except UpstreamStatusError as e:
                return PokemonPageProps(
                    error=f"Failed to fetch Pokémon data: {e.upstream_status} {e.reason}",
                    upstream_status=e.upstream_status,
                    revalidate=REVALIDATE_ERROR,
                )

            try:
                species = await self._poke_client.get_pokemon_species(pokemon.species.name)
            except UpstreamStatusError as e:
                return PokemonPageProps(
                    pokemon=pokemon,
                    error=f"Failed to fetch species data: {e.upstream_status} {e.reason}",
                    revalidate=REVALIDATE_ERROR,
                )

            return PokemonPageProps(pokemon=pokemon, species=species, revalidate=REVALIDATE_SUCCESS)

        except Exception as e:
            logger.exception(f"Error fetching Pokemon data for '{slug}'")
            return PokemonPageProps(
                error=f"An error occurred while fetching the data: {str(e)}",
                revalidate=REVALIDATE_ERROR,
            )
