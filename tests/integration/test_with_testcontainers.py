import os
import pytest
from fastapi.testclient import TestClient
from testcontainers.redis import RedisContainer
from pokedex_web.main import app
from pokedex_web.cache import PageCache
from pokedex_web.config import CACHE_RETENTION
from pokedex_web.dependencies import get_page_cache, get_poke_client
from pokedex_web.clients.pokeapi_client import PokeAPIClient
import redis.asyncio as redis

pytestmark = pytest.mark.skipif(
    not os.path.exists("/var/run/docker.sock") and not os.getenv("DOCKER_HOST"),
    reason="Docker is required for the Redis container",
)


@pytest.fixture(scope="module")
def redis_container():
    """Start a real Redis container for integration tests."""
    with RedisContainer("redis:7-alpine") as container:
        yield container


@pytest.fixture(scope="module")
def redis_url(redis_container):
    """Get Redis connection URL from the container."""
    host = redis_container.get_container_host_ip()
    port = redis_container.get_exposed_port(6379)
    return f"redis://{host}:{port}"


@pytest.fixture
def test_client(redis_url, monkeypatch):
    """TestClient with real Redis from Testcontainers."""
    monkeypatch.setenv("PREGENERATE_PAGES", "0")
    page_cache = PageCache(redis_url=redis_url)
    poke_client = PokeAPIClient()

    app.dependency_overrides[get_poke_client] = lambda: poke_client
    app.dependency_overrides[get_page_cache] = lambda: page_cache

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


def test_integration_page_caching_with_real_redis(httpx_mock, test_client):
    """Test that a generated page is served from real Redis on the next request."""
    httpx_mock.add_response(
        url="https://pokeapi.co/api/v2/move/ember",
        json={
            "name": "ember",
            "power": 40,
            "accuracy": 100,
            "pp": 25,
            "type": {"name": "fire"},
            "damage_class": {"name": "special"},
            "flavor_text_entries": [
                {"flavor_text": "An attack that may\ninflict a burn.", "language": {"name": "en"}}
            ]
        },
        status_code=200
    )

    response1 = test_client.get("/moves/ember")
    assert response1.status_code == 200
    assert "An attack that may inflict a burn." in response1.text

    # Subsequent requests should use cache (httpx_mock has no second response)
    for _ in range(3):
        response = test_client.get("/moves/ember")
        assert response.status_code == 200
        assert response.text == response1.text

    assert len(httpx_mock.get_requests()) == 1


def test_error_pages_are_cached_with_retention_ttl(httpx_mock, test_client, redis_url):
    """Error pages are stored too, and kept past their short revalidation window."""
    httpx_mock.add_response(url="https://pokeapi.co/api/v2/pokemon/missingno", status_code=404)

    response = test_client.get("/pokemon/missingno")
    assert response.status_code == 404

    async def read_ttl():
        client = redis.from_url(redis_url, decode_responses=True)
        try:
            return await client.ttl("page:pokemon:missingno")
        finally:
            await client.aclose()

    ttl = test_client.portal.call(read_ttl)
    assert 300 < ttl <= CACHE_RETENTION
