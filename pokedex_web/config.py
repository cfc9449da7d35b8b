import os
from typing import Optional

# PokeAPI pagination
PAGE_SIZE = 50
# Only the first moves are linked on a Pokemon page to bound render cost
MOVE_DISPLAY_LIMIT = 20

DESCRIPTION_LOCALE = "en"
DESCRIPTION_PLACEHOLDER = "No description available."

# Revalidation windows (seconds)
REVALIDATE_SUCCESS = 86400  # 24 hours
REVALIDATE_ERROR = 300  # 5 minutes
# Stale pages stay in Redis this long so they can be served while regenerating
CACHE_RETENTION = 604800  # 7 days

# Pages generated at startup, everything else is generated on first request
POPULAR_POKEMON = [
    "pikachu", "charizard", "bulbasaur", "squirtle",
    "eevee", "mewtwo", "gengar", "snorlax",
    "lucario", "greninja", "garchomp", "rayquaza",
]
COMMON_MOVES = ["tackle", "ember", "water-gun", "vine-whip", "thunderbolt"]


def get_redis_url() -> str:
    return os.getenv("REDIS_URL", "redis://localhost:6379")


def get_request_timeout() -> Optional[float]:
    """Upstream timeout in seconds. Unset means requests never time out."""
    value = os.getenv("POKEAPI_TIMEOUT")
    if not value:
        return None
    return float(value)


def pregenerate_pages() -> bool:
    return os.getenv("PREGENERATE_PAGES", "1").lower() not in ("0", "false", "no")


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
