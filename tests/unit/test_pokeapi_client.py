import pytest
import httpx
from app.clients.pokeapi_client import PokeAPIClient, NotFoundError, TransportError
from app.models import EvolutionChainRecord, PokemonRecord, SpeciesRecord, TypeRecord


MOCK_BULBASAUR = {
    "id": 1,
    "name": "bulbasaur",
    "height": 7,
    "weight": 69,
    "types": [
        {"slot": 1, "type": {"name": "grass", "url": "https://pokeapi.co/api/v2/type/12/"}},
        {"slot": 2, "type": {"name": "poison", "url": "https://pokeapi.co/api/v2/type/4/"}},
    ],
    "abilities": [
        {"ability": {"name": "overgrow", "url": "https://pokeapi.co/api/v2/ability/65/"}, "is_hidden": False, "slot": 1},
        {"ability": {"name": "chlorophyll", "url": "https://pokeapi.co/api/v2/ability/34/"}, "is_hidden": True, "slot": 3},
    ],
    "stats": [
        {"base_stat": 45, "effort": 0, "stat": {"name": "hp", "url": "https://pokeapi.co/api/v2/stat/1/"}},
        {"base_stat": 65, "effort": 1, "stat": {"name": "special-attack", "url": "https://pokeapi.co/api/v2/stat/4/"}},
    ],
    "sprites": {
        "front_default": "https://sprites.example/1.png",
        "other": {"official-artwork": {"front_default": "https://artwork.example/1.png"}},
    },
}

MOCK_BULBASAUR_SPECIES = {
    "id": 1,
    "name": "bulbasaur",
    "gender_rate": 1,
    "flavor_text_entries": [
        {
            "flavor_text": "A strange seed was\nplanted on its\fback at birth.",
            "language": {"name": "en", "url": "https://pokeapi.co/api/v2/language/9/"},
            "version": {"name": "red", "url": "https://pokeapi.co/api/v2/version/1/"},
        },
    ],
    "genera": [
        {"genus": "Seed Pokémon", "language": {"name": "en", "url": "https://pokeapi.co/api/v2/language/9/"}},
    ],
    "evolution_chain": {"url": "https://pokeapi.co/api/v2/evolution-chain/1/"},
}

MOCK_FIRE_TYPE = {
    "id": 10,
    "name": "fire",
    "damage_relations": {
        "double_damage_from": [
            {"name": "ground", "url": "https://pokeapi.co/api/v2/type/5/"},
            {"name": "rock", "url": "https://pokeapi.co/api/v2/type/6/"},
            {"name": "water", "url": "https://pokeapi.co/api/v2/type/11/"},
        ],
        "half_damage_from": [],
    },
}

MOCK_EEVEE_CHAIN = {
    "id": 67,
    "chain": {
        "species": {"name": "eevee", "url": "https://pokeapi.co/api/v2/pokemon-species/133/"},
        "evolves_to": [
            {"species": {"name": "vaporeon", "url": "https://pokeapi.co/api/v2/pokemon-species/134/"}, "evolves_to": []},
            {"species": {"name": "jolteon", "url": "https://pokeapi.co/api/v2/pokemon-species/135/"}, "evolves_to": []},
        ],
    },
}

@pytest.fixture
def poke_client():
    """Provides a PokeAPIClient pointing at the public PokeAPI base URL."""
    return PokeAPIClient(base_url="https://pokeapi.co/api/v2", timeout=5.0)

@pytest.mark.asyncio
async def test_successful_pokemon_fetch_is_validated(httpx_mock, poke_client):
    """Verifies the identifier is normalised and the payload is decoded into a PokemonRecord."""
    # ARRANGE: Mock the external API call (note the lowercase, trimmed name)
    httpx_mock.add_response(
        url="https://pokeapi.co/api/v2/pokemon/bulbasaur",
        json=MOCK_BULBASAUR,
        status_code=200
    )

    # ACT
    result = await poke_client.get_pokemon("  Bulbasaur ")

    # ASSERT
    assert isinstance(result, PokemonRecord)
    assert result.id == 1
    assert [slot.name for slot in result.types] == ["grass", "poison"]
    assert result.abilities[1].is_hidden is True
    assert result.stats[1].stat.name == "special-attack"
    assert result.display_image == "https://artwork.example/1.png"

@pytest.mark.asyncio
async def test_display_image_falls_back_to_front_sprite(httpx_mock, poke_client):
    payload = {**MOCK_BULBASAUR, "sprites": {"front_default": "https://sprites.example/1.png", "other": {}}}
    httpx_mock.add_response(url="https://pokeapi.co/api/v2/pokemon/1", json=payload)

    result = await poke_client.get_pokemon("1")

    assert result.display_image == "https://sprites.example/1.png"

@pytest.mark.asyncio
async def test_pokemon_not_found_raises_not_found(httpx_mock, poke_client):
    """Test that a 404 from PokeAPI is mapped to NotFoundError (HTTP 404)."""
    httpx_mock.add_response(
        url="https://pokeapi.co/api/v2/pokemon/missingno",
        status_code=404
    )

    with pytest.raises(NotFoundError) as excinfo:
        await poke_client.get_pokemon("missingno")

    assert excinfo.value.status_code == 404
    assert "missingno" in excinfo.value.detail

@pytest.mark.asyncio
async def test_blank_identifier_raises_not_found_without_request(poke_client):
    with pytest.raises(NotFoundError):
        await poke_client.get_pokemon("   ")

@pytest.mark.asyncio
async def test_pokeapi_internal_error_raises_transport_error(httpx_mock, poke_client):
    """Test that a 500 from PokeAPI is mapped to TransportError (HTTP 503)."""
    httpx_mock.add_response(
        url="https://pokeapi.co/api/v2/pokemon/bulbasaur",
        status_code=500
    )

    with pytest.raises(TransportError) as excinfo:
        await poke_client.get_pokemon("bulbasaur")

    assert excinfo.value.status_code == 503
    assert "status 500" in excinfo.value.detail

@pytest.mark.asyncio
async def test_network_error_raises_transport_error(httpx_mock, poke_client):
    """Tests that a network failure (timeout, DNS error) is mapped to TransportError."""
    httpx_mock.add_exception(
        httpx.ConnectError("Connection refused."),
        url="https://pokeapi.co/api/v2/pokemon-species/1"
    )

    with pytest.raises(TransportError) as excinfo:
        await poke_client.get_species(1)

    assert excinfo.value.status_code == 503
    assert "network error" in excinfo.value.detail.lower()

@pytest.mark.asyncio
async def test_schema_mismatch_raises_transport_error(httpx_mock, poke_client):
    """A payload missing required fields must not leak through as a half-built record."""
    payload = {key: value for key, value in MOCK_BULBASAUR.items() if key != "types"}
    httpx_mock.add_response(url="https://pokeapi.co/api/v2/pokemon/bulbasaur", json=payload)

    with pytest.raises(TransportError) as excinfo:
        await poke_client.get_pokemon("bulbasaur")

    assert "PokemonRecord" in excinfo.value.detail

@pytest.mark.asyncio
async def test_non_json_body_raises_transport_error(httpx_mock, poke_client):
    httpx_mock.add_response(url="https://pokeapi.co/api/v2/pokemon/bulbasaur", text="<html>oops</html>")

    with pytest.raises(TransportError):
        await poke_client.get_pokemon("bulbasaur")

@pytest.mark.asyncio
async def test_species_fetch_is_keyed_by_id(httpx_mock, poke_client):
    httpx_mock.add_response(
        url="https://pokeapi.co/api/v2/pokemon-species/1",
        json=MOCK_BULBASAUR_SPECIES
    )

    result = await poke_client.get_species(1)

    assert isinstance(result, SpeciesRecord)
    assert result.gender_rate == 1
    assert result.flavor_text_entries[0].version.name == "red"
    assert result.genera[0].genus == "Seed Pokémon"
    assert result.evolution_chain.url == "https://pokeapi.co/api/v2/evolution-chain/1/"

@pytest.mark.asyncio
async def test_species_without_evolution_chain(httpx_mock, poke_client):
    payload = {**MOCK_BULBASAUR_SPECIES, "evolution_chain": None}
    httpx_mock.add_response(url="https://pokeapi.co/api/v2/pokemon-species/1", json=payload)

    result = await poke_client.get_species(1)

    assert result.evolution_chain is None

@pytest.mark.asyncio
async def test_type_fetch_by_resource_url(httpx_mock, poke_client):
    httpx_mock.add_response(url="https://pokeapi.co/api/v2/type/10/", json=MOCK_FIRE_TYPE)

    result = await poke_client.get_type("https://pokeapi.co/api/v2/type/10/")

    assert isinstance(result, TypeRecord)
    assert [t.name for t in result.damage_relations.double_damage_from] == ["ground", "rock", "water"]

@pytest.mark.asyncio
async def test_type_fetch_by_name(httpx_mock, poke_client):
    httpx_mock.add_response(url="https://pokeapi.co/api/v2/type/fire", json=MOCK_FIRE_TYPE)

    result = await poke_client.get_type("Fire")

    assert result.name == "fire"

@pytest.mark.asyncio
async def test_evolution_chain_is_decoded_recursively(httpx_mock, poke_client):
    httpx_mock.add_response(url="https://pokeapi.co/api/v2/evolution-chain/67/", json=MOCK_EEVEE_CHAIN)

    result = await poke_client.get_evolution_chain("https://pokeapi.co/api/v2/evolution-chain/67/")

    assert isinstance(result, EvolutionChainRecord)
    assert result.chain.species.name == "eevee"
    assert [link.species.name for link in result.chain.evolves_to] == ["vaporeon", "jolteon"]
    assert result.chain.evolves_to[0].evolves_to == []
