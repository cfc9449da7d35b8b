from pokedex_web.config import DESCRIPTION_LOCALE, DESCRIPTION_PLACEHOLDER
from pokedex_web.formatting import format_flavor_text, format_name
from pokedex_web.models import FlavorTextEntry, NamedResource, TypeTag

TYPE_COLORS = {
    "normal": "#9ca3af",
    "fire": "#ef4444",
    "water": "#3b82f6",
    "electric": "#facc15",
    "grass": "#22c55e",
    "ice": "#bfdbfe",
    "fighting": "#b91c1c",
    "poison": "#a855f7",
    "ground": "#a16207",
    "flying": "#a5b4fc",
    "psychic": "#ec4899",
    "bug": "#16a34a",
    "rock": "#854d0e",
    "ghost": "#7e22ce",
    "dragon": "#4338ca",
    "dark": "#1f2937",
    "steel": "#6b7280",
    "fairy": "#f9a8d4",
}
DEFAULT_TYPE_COLOR = "#6b7280"


def select_description(entries: list[FlavorTextEntry]) -> str:
    """Returns the first flavor text in the display locale, formatted, or the placeholder."""
    flavor_text = next(
        (entry.flavor_text for entry in entries if entry.language.name == DESCRIPTION_LOCALE),
        None,
    )
    if not flavor_text:
        return DESCRIPTION_PLACEHOLDER
    return format_flavor_text(flavor_text)


def type_tag(type_ref: NamedResource) -> TypeTag:
    return TypeTag(
        name=type_ref.name,
        display_name=format_name(type_ref.name),
        color=TYPE_COLORS.get(type_ref.name, DEFAULT_TYPE_COLOR),
    )
