import asyncio
import logging
from app.clients.pokeapi_client import PokeAPIClient, PokeAPIError
from app.models import (
    EvolutionEntry,
    EvolutionNode,
    PokemonDetails,
    Resource,
    TypeSlot,
)
from app.services.evolution import flatten_chain, species_id_from_url

logger = logging.getLogger(__name__)

class PokemonService:
    def __init__(self, poke_client: PokeAPIClient):
        self._poke_client = poke_client

    async def get_details(self, name: str) -> PokemonDetails:
        """
        Runs the detail aggregation pipeline for one Pokemon.

        The core record and species are essential: their errors (NotFoundError,
        TransportError) propagate to the caller. Weaknesses and the evolution
        chain are enrichments and degrade to empty values instead of failing.
        """
        record = await self._poke_client.get_pokemon(name)
        # Species is keyed by id, not by name, to avoid form/name mismatches
        species = await self._poke_client.get_species(record.id)

        weaknesses, evolution = await asyncio.gather(
            self.resolve_weaknesses(record.types),
            self.resolve_evolution(species.evolution_chain),
        )

        logger.info(
            f"Built details for {record.name}: {len(weaknesses)} weaknesses, "
            f"{len(evolution)} evolution entries"
        )
        return PokemonDetails(
            record=record,
            species=species,
            weaknesses=weaknesses,
            evolution=evolution,
        )

    # --- Weakness Resolver ---

    async def resolve_weaknesses(self, type_slots: list[TypeSlot]) -> list[str]:
        """Union of every type's 'double damage from' list, in slot order, duplicates collapsed."""
        results = await asyncio.gather(
            *(self._fetch_double_damage_from(slot) for slot in type_slots)
        )

        # dict keeps first-seen order, so the display order doesn't depend on which fetch finished first
        weaknesses = {}
        for names in results:
            weaknesses.update(dict.fromkeys(names))
        return list(weaknesses)

    async def _fetch_double_damage_from(self, slot: TypeSlot) -> list[str]:
        try:
            type_record = await self._poke_client.get_type(slot.type.url)
        except PokeAPIError as e:
            logger.warning(f"Could not fetch damage relations for type '{slot.name}': {e.detail}")
            return []
        return [weak_type.name for weak_type in type_record.damage_relations.double_damage_from]

    # --- Evolution Resolver ---

    async def resolve_evolution(self, chain_ref: Resource | None) -> list[EvolutionEntry]:
        """
        Fetches and flattens the evolution chain, then enriches every species with
        its id and image. A result of length <= 1 means there is nothing to show.
        """
        if chain_ref is None:
            return []

        try:
            chain_record = await self._poke_client.get_evolution_chain(chain_ref.url)
        except PokeAPIError as e:
            logger.warning(f"Could not fetch evolution chain {chain_ref.url}: {e.detail}")
            return []

        nodes = flatten_chain(chain_record.chain)
        return list(await asyncio.gather(*(self._enrich_node(node) for node in nodes)))

    async def _enrich_node(self, node: EvolutionNode) -> EvolutionEntry:
        try:
            record = await self._poke_client.get_pokemon(species_id_from_url(node.url))
        except (PokeAPIError, ValueError) as e:
            logger.warning(f"Could not fetch evolution entry '{node.name}': {e}")
            return EvolutionEntry(name=node.name, id=None, image=None)
        return EvolutionEntry(name=record.name, id=record.id, image=record.display_image)
