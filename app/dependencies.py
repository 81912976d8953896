from app.clients import PokeAPIClient
from app.services import PokemonService
from fastapi import Depends

_poke_client = None

def get_poke_client() -> PokeAPIClient:
    global _poke_client
    if _poke_client is None:
        _poke_client = PokeAPIClient()
    return _poke_client

def get_pokemon_service(
    poke_client: PokeAPIClient = Depends(get_poke_client),
) -> PokemonService:
    return PokemonService(poke_client=poke_client)

async def close_poke_client():
    """Closes the shared client if one was created (called on app shutdown)."""
    global _poke_client
    if _poke_client is not None:
        await _poke_client.close()
        _poke_client = None
