import os
import httpx
from typing import Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError
from app.models import EvolutionChainRecord, PokemonRecord, SpeciesRecord, TypeRecord
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Base exception for everything the client can raise
class PokeAPIError(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

# Upstream resource does not exist (mapped to a 404)
class NotFoundError(PokeAPIError):
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)

# Any other request/parsing failure (mapped to a 503 Service Unavailable)
class TransportError(PokeAPIError):
    def __init__(self, detail: str):
        super().__init__(status_code=503, detail=f"External API Error: {detail}")

class PokeAPIClient:
    BASE_URL = "https://pokeapi.co/api/v2"
    TIMEOUT = 5.0

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        # Use environment variables if not provided
        if base_url is None:
            base_url = os.getenv("POKEAPI_BASE_URL", self.BASE_URL)
        if timeout is None:
            timeout = float(os.getenv("POKEAPI_TIMEOUT", self.TIMEOUT))
        self.client = httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def _fetch_json(self, url: str) -> dict:
        """Internal method to fetch a raw payload with error handling."""
        logger.info(f"Fetching PokeAPI resource: {url}")

        try:
            response = await self.client.get(url)
            response.raise_for_status()  # Raises for 4xx/5xx status codes
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise NotFoundError(detail=f"Resource '{url}' not found.")
            logger.error(f"PokeAPI error for {url}: status {e.response.status_code}")
            raise TransportError(detail=f"PokeAPI failed with status {e.response.status_code}")
        except httpx.RequestError as e:
            # Handle network failures/timeouts
            logger.error(f"PokeAPI network error for {url}: {str(e)}")
            raise TransportError(detail=f"PokeAPI network error: {str(e)}")

        try:
            return response.json()
        except ValueError:
            logger.error(f"PokeAPI returned a non-JSON body for {url}")
            raise TransportError(detail="PokeAPI returned an unexpected response format.")

    async def _fetch_model(self, url: str, model: Type[ModelT]) -> ModelT:
        data = await self._fetch_json(url)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"PokeAPI payload for {url} does not match {model.__name__}: {e.error_count()} errors")
            raise TransportError(detail=f"PokeAPI returned an invalid {model.__name__} payload.")

    async def get_pokemon(self, identifier: str) -> PokemonRecord:
        """Fetches the core record for a Pokemon name or id (case-insensitive)."""
        normalized = str(identifier).strip().lower()
        if not normalized:
            raise NotFoundError(detail="Pokemon '' not found.")

        try:
            return await self._fetch_model(f"/pokemon/{normalized}", PokemonRecord)
        except NotFoundError:
            raise NotFoundError(detail=f"Pokemon '{identifier}' not found.")

    async def get_species(self, pokemon_id: int) -> SpeciesRecord:
        """Fetches species metadata, keyed by the numeric id of the Pokemon record."""
        return await self._fetch_model(f"/pokemon-species/{pokemon_id}", SpeciesRecord)

    async def get_type(self, reference: str) -> TypeRecord:
        """Fetches a type's damage relations by name or by its resource URL."""
        url = reference if reference.startswith(("http://", "https://")) else f"/type/{reference.lower()}"
        return await self._fetch_model(url, TypeRecord)

    async def get_evolution_chain(self, url: str) -> EvolutionChainRecord:
        return await self._fetch_model(url, EvolutionChainRecord)

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
