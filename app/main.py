import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends
from app.services.pokemon_service import PokemonService
from app.dependencies import get_pokemon_service, close_poke_client
from app.models import PokemonDetailsResponse
from app.presentation import build_details_response

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_poke_client()

app = FastAPI(
    title="Pokedex Details API",
    description="Aggregates PokeAPI data into a display-ready Pokemon details view.",
    lifespan=lifespan,
)

@app.get(
    "/pokemon/{name}",
    response_model=PokemonDetailsResponse,
    summary="Returns the details view of a Pokemon",
)
async def get_pokemon_details(
    name: str,
    service: PokemonService = Depends(get_pokemon_service),
):
    """Stats, description, attributes, type weaknesses and evolution chain for a Pokemon name or id."""
    # NotFoundError (404) and TransportError (503) are HTTPExceptions raised by the PokeAPIClient,
    # so a failed core fetch becomes an error response rather than a partially populated view
    details = await service.get_details(name)
    return build_details_response(details)
