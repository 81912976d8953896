"""Service modules holding the business logic."""
from .pokemon_service import PokemonService

__all__ = [
    'PokemonService',
]
