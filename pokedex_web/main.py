import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from pathlib import Path

from fastapi import BackgroundTasks, Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from pokedex_web.clients.pokeapi_client import APIClientError
from pokedex_web.config import COMMON_MOVES, POPULAR_POKEMON, get_log_level, pregenerate_pages
from pokedex_web.dependencies import (
    close_clients,
    get_move_service,
    get_page_cache,
    get_pokedex_service,
    get_poke_client,
    get_pokemon_service,
)
from pokedex_web.formatting import format_name
from pokedex_web.models import PageProps
from pokedex_web.services import (
    MoveService,
    PokedexService,
    PokemonService,
    build_move_view,
    build_pokemon_view,
)

logging.basicConfig(level=get_log_level())
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.filters["format_name"] = format_name


async def _pregenerate(app: FastAPI):
    """
    Generates the allow-listed detail pages into the page cache.

    Runs as a fire-and-forget task, so failures are logged here; pages that
    did not make it are generated on their first request instead.
    """
    # Resolve through overrides so tests can swap the clients
    poke_client = app.dependency_overrides.get(get_poke_client, get_poke_client)()
    page_cache = app.dependency_overrides.get(get_page_cache, get_page_cache)()
    try:
        await PokemonService(poke_client, page_cache).pregenerate(POPULAR_POKEMON)
        await MoveService(poke_client, page_cache).pregenerate(COMMON_MOVES)
    except Exception:
        logger.exception("Page pre-generation failed")
        return
    logger.info(f"Pre-generated {len(POPULAR_POKEMON)} Pokemon and {len(COMMON_MOVES)} move pages")


@asynccontextmanager
async def lifespan(app: FastAPI):
    task = None
    if pregenerate_pages():
        task = asyncio.create_task(_pregenerate(app))
    yield
    if task is not None:
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
    await close_clients()


app = FastAPI(
    title="Pokédex",
    description="Server-rendered Pokédex pages backed by PokeAPI.",
    lifespan=lifespan,
)


def _detail_status(props: PageProps, primary) -> int:
    if primary is not None:
        return 200
    if props.upstream_status == 404:
        return 404
    return 502


def _with_cache_headers(response: HTMLResponse, props: PageProps) -> HTMLResponse:
    # A shared cache may keep the page only for what is left of its window
    max_age = props.revalidate if props.fresh_for is None else props.fresh_for
    response.headers["Cache-Control"] = f"s-maxage={max_age}, stale-while-revalidate"
    return response


@app.exception_handler(APIClientError)
async def api_client_error_handler(request: Request, exc: APIClientError):
    # The list page has no per-item guard, so any client error ends up here
    return templates.TemplateResponse(
        request, "error.html", {"error": exc.detail}, status_code=exc.status_code
    )


# Page 1: Paginated Pokedex
@app.get("/", response_class=HTMLResponse, summary="Paginated list of Pokemon with sprites")
async def pokedex_page(
    request: Request,
    page: int = Query(0, ge=0, description="Zero-based page index"),
    service: PokedexService = Depends(get_pokedex_service),
):
    collection = await service.fetch_page(page)
    return templates.TemplateResponse(request, "index.html", {"page": collection})


# Page 2: Pokemon detail
@app.get("/pokemon/{slug}", response_class=HTMLResponse, summary="Pokemon detail page")
async def pokemon_page(
    request: Request,
    slug: str,
    background_tasks: BackgroundTasks,
    service: PokemonService = Depends(get_pokemon_service),
):
    """Renders a Pokemon with its species data. Unknown slugs are generated on first request."""
    props = await service.get_page(slug, schedule=background_tasks.add_task)
    pokemon = build_pokemon_view(props.pokemon, props.species) if props.pokemon else None
    response = templates.TemplateResponse(
        request,
        "pokemon.html",
        {"pokemon": pokemon, "error": props.error},
        status_code=_detail_status(props, pokemon),
    )
    return _with_cache_headers(response, props)


# Page 3: Move detail
@app.get("/moves/{slug}", response_class=HTMLResponse, summary="Move detail page")
async def move_page(
    request: Request,
    slug: str,
    background_tasks: BackgroundTasks,
    service: MoveService = Depends(get_move_service),
):
    props = await service.get_page(slug, schedule=background_tasks.add_task)
    move = build_move_view(props.move) if props.move else None
    response = templates.TemplateResponse(
        request,
        "move.html",
        {"move": move, "error": props.error},
        status_code=_detail_status(props, move),
    )
    return _with_cache_headers(response, props)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
