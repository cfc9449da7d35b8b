import logging

from pokedex_web.clients.pokeapi_client import UpstreamStatusError
from pokedex_web.config import REVALIDATE_ERROR, REVALIDATE_SUCCESS
from pokedex_web.formatting import format_name, normalize_slug
from pokedex_web.models import Move, MoveDetailView, MovePageProps
from pokedex_web.services.derivation import select_description, type_tag
from pokedex_web.services.detail_page import DetailPageService

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

def _display_number(value: int | None, suffix: str = "") -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value}{suffix}"

def build_move_view(move: Move) -> MoveDetailView:
    return MoveDetailView(
        name=move.name,
        display_name=format_name(move.name),
        type=type_tag(move.type),
        damage_class=format_name(move.damage_class.name),
        description=select_description(move.flavor_text_entries),
        power=_display_number(move.power),
        accuracy=_display_number(move.accuracy, "%"),
        pp=_display_number(move.pp),
    )

class MoveService(DetailPageService):
    CACHE_KIND = "move"
    PROPS_TYPE = MovePageProps

    async def fetch_detail(self, slug: str) -> MovePageProps:
        """Fetches a move. Never raises: failures become error props."""
        try:
            normalized_slug = normalize_slug(slug)
            move = await self._poke_client.get_move(normalized_slug)
            return MovePageProps(move=move, revalidate=REVALIDATE_SUCCESS)

        except UpstreamStatusError as e:
            return MovePageProps(
                error=f"Failed to fetch move data: {e.upstream_status} {e.reason}",
                upstream_status=e.upstream_status,
                revalidate=REVALIDATE_ERROR,
            )
        except Exception as e:
            logger.exception(f"Error fetching move data for '{slug}'")
            return MovePageProps(
                error=f"An error occurred while fetching the move data: {str(e)}",
                revalidate=REVALIDATE_ERROR,
            )
