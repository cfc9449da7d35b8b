"""Server-rendered Pokédex pages backed by PokeAPI."""
