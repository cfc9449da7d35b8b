import logging
import pytest
from unittest.mock import AsyncMock, MagicMock
from pokedex_web.clients.pokeapi_client import UpstreamStatusError
from pokedex_web.models import Move, MovePageProps
from pokedex_web.services.derivation import TYPE_COLORS
from pokedex_web.services.move_service import MoveService, build_move_view

MOCK_WATER_GUN = Move.model_validate({
    "name": "water-gun",
    "power": 40,
    "accuracy": 100,
    "pp": 25,
    "type": {"name": "water"},
    "damage_class": {"name": "special"},
    "flavor_text_entries": [
        {"flavor_text": "Squirts water to\nattack.", "language": {"name": "en"}},
    ],
})

@pytest.fixture
def poke_client():
    client = AsyncMock()
    client.get_move.return_value = MOCK_WATER_GUN
    return client

@pytest.fixture
def page_cache():
    cache = AsyncMock()
    cache.regenerate.return_value = MovePageProps(move=MOCK_WATER_GUN, revalidate=86400)
    return cache

@pytest.fixture
def move_service(poke_client, page_cache):
    return MoveService(poke_client=poke_client, page_cache=page_cache)


@pytest.mark.asyncio
async def test_fetch_detail_success(move_service, poke_client):
    result = await move_service.fetch_detail("Water Gun")

    poke_client.get_move.assert_called_once_with("water-gun")
    assert isinstance(result, MovePageProps)
    assert result.move == MOCK_WATER_GUN
    assert result.error is None
    assert result.revalidate == 86400

@pytest.mark.asyncio
async def test_not_found_returns_error_without_raising(move_service, poke_client):
    poke_client.get_move.side_effect = UpstreamStatusError(404, "Not Found", "/move/splashy")

    result = await move_service.fetch_detail("splashy")

    assert result.move is None
    assert result.error == "Failed to fetch move data: 404 Not Found"
    assert result.upstream_status == 404
    assert result.revalidate == 300

@pytest.mark.asyncio
async def test_unexpected_exception_becomes_generic_error(move_service, poke_client):
    poke_client.get_move.side_effect = KeyError("type")

    result = await move_service.fetch_detail("tackle")

    assert result.move is None
    assert result.error.startswith("An error occurred while fetching the move data:")
    assert result.revalidate == 300

# --- CACHED PAGE TESTS ---

@pytest.mark.asyncio
async def test_get_page_reads_the_cache_under_the_normalized_slug(move_service, page_cache, poke_client):
    schedule = MagicMock()

    await move_service.get_page("Water Gun", schedule=schedule)

    page_cache.get_or_generate.assert_awaited_once()
    kind, slug, generate, props_type, passed_schedule = page_cache.get_or_generate.call_args.args
    assert (kind, slug, props_type, passed_schedule) == ("move", "water-gun", MovePageProps, schedule)

    # The generator fetches the same slug the page is cached under
    await generate()
    poke_client.get_move.assert_called_once_with("water-gun")

@pytest.mark.asyncio
async def test_pregenerate_regenerates_each_page(move_service, page_cache):
    await move_service.pregenerate(["Tackle", "thunderbolt"])

    slugs = [call.args[:2] for call in page_cache.regenerate.await_args_list]
    assert slugs == [("move", "tackle"), ("move", "thunderbolt")]

@pytest.mark.asyncio
async def test_pregenerate_logs_pages_generated_with_errors(move_service, page_cache, caplog):
    page_cache.regenerate.return_value = MovePageProps(error="Failed to fetch move data: 404 Not Found", revalidate=300)

    with caplog.at_level(logging.WARNING):
        await move_service.pregenerate(["splashy"])

    assert "Pre-generated move page 'splashy' with error" in caplog.text

# --- VIEW MODEL DERIVATION TESTS ---

def test_view_formats_numbers_and_scales_accuracy():
    view = build_move_view(MOCK_WATER_GUN)

    assert view.display_name == "Water Gun"
    assert view.power == "40"
    assert view.accuracy == "100%"
    assert view.pp == "25"
    assert view.damage_class == "Special"
    assert view.description == "Squirts water to attack."

def test_view_tags_type_color():
    view = build_move_view(MOCK_WATER_GUN)

    assert view.type.display_name == "Water"
    assert view.type.color == TYPE_COLORS["water"]

@pytest.mark.parametrize("field", ["power", "accuracy", "pp"])
def test_missing_numbers_render_as_not_available(field):
    move = MOCK_WATER_GUN.model_copy(update={field: None})

    view = build_move_view(move)

    assert getattr(view, field) == "N/A"

def test_view_uses_placeholder_without_english_description():
    move = MOCK_WATER_GUN.model_copy(update={"flavor_text_entries": []})

    view = build_move_view(move)

    assert view.description == "No description available."
