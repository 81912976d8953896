"""Client modules for external API communication."""
from .pokeapi_client import PokeAPIClient, PokeAPIError, NotFoundError, TransportError

__all__ = [
    'PokeAPIClient',
    'PokeAPIError',
    'NotFoundError',
    'TransportError',
]
