import math
from pydantic import BaseModel, Field

from pokedex_web.config import PAGE_SIZE

# --- Raw PokeAPI records (Internal Contract) ---
# Only the fields the pages read are declared; everything else in the payload is ignored.

class NamedResource(BaseModel):
    name: str
    url: str | None = None

class FlavorTextEntry(BaseModel):
    flavor_text: str
    language: NamedResource

class PokemonTypeSlot(BaseModel):
    slot: int
    type: NamedResource

class PokemonStat(BaseModel):
    base_stat: int
    stat: NamedResource

class PokemonMove(BaseModel):
    move: NamedResource

class PokemonSprites(BaseModel):
    front_default: str | None = None

class Pokemon(BaseModel):
    name: str
    sprites: PokemonSprites = PokemonSprites()
    types: list[PokemonTypeSlot] = []
    stats: list[PokemonStat] = []
    moves: list[PokemonMove] = []
    species: NamedResource

class PokemonSpecies(BaseModel):
    name: str
    flavor_text_entries: list[FlavorTextEntry] = []
    is_legendary: bool = False
    is_mythical: bool = False
    evolves_from_species: NamedResource | None = None

class Move(BaseModel):
    name: str
    power: int | None = None
    accuracy: int | None = None
    pp: int | None = None
    type: NamedResource
    damage_class: NamedResource
    flavor_text_entries: list[FlavorTextEntry] = []

class PokemonList(BaseModel):
    count: int
    results: list[NamedResource]

# --- Page props: the cacheable output of a detail page's data-assembly step ---

class PageProps(BaseModel):
    error: str | None = None
    # Seconds the props stay fresh before a request triggers regeneration
    revalidate: int
    # Upstream HTTP status when the primary resource could not be fetched
    upstream_status: int | None = None
    # Seconds left before the served props go stale, set by the page cache and never stored
    fresh_for: int | None = Field(default=None, exclude=True)

class PokemonPageProps(PageProps):
    pokemon: Pokemon | None = None
    species: PokemonSpecies | None = None

class MovePageProps(PageProps):
    move: Move | None = None

# --- View models consumed by the templates (Public Contract) ---

class PokemonListItem(BaseModel):
    name: str
    url: str
    sprite: str | None = None

class CollectionPage(BaseModel):
    count: int
    items: list[PokemonListItem]
    page_index: int = 0
    page_size: int = PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return math.ceil(self.count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0

    @property
    def has_next(self) -> bool:
        return self.page_index < self.total_pages - 1

class TypeTag(BaseModel):
    name: str
    display_name: str
    color: str

class StatView(BaseModel):
    name: str
    display_name: str
    base_stat: int

class ResourceLink(BaseModel):
    name: str
    display_name: str

class PokemonDetailView(BaseModel):
    name: str
    display_name: str
    sprite: str | None
    types: list[TypeTag]
    stats: list[StatView]
    moves: list[ResourceLink]
    # Species-derived fields stay None when the species fetch failed
    description: str | None = None
    is_legendary: bool = False
    is_mythical: bool = False
    evolves_from: ResourceLink | None = None

class MoveDetailView(BaseModel):
    name: str
    display_name: str
    type: TypeTag
    damage_class: str
    description: str
    power: str
    accuracy: str
    pp: str
