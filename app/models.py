from pydantic import BaseModel, ConfigDict, Field


# --- Raw PokeAPI payloads (Internal Contract, validated at the fetch boundary) ---

class Resource(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str

class NamedResource(Resource):
    name: str

class TypeSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    slot: int
    type: NamedResource

    @property
    def name(self) -> str:
        return self.type.name

class AbilitySlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    ability: NamedResource
    is_hidden: bool = False

class StatSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    stat: NamedResource
    base_stat: int = Field(ge=0, le=255)

class Artwork(BaseModel):
    model_config = ConfigDict(frozen=True)

    front_default: str | None = None

class OtherSprites(BaseModel):
    # PokeAPI uses a hyphenated key, so keep the alias for parsing
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    official_artwork: Artwork | None = Field(default=None, alias="official-artwork")

class Sprites(BaseModel):
    model_config = ConfigDict(frozen=True)

    front_default: str | None = None
    other: OtherSprites | None = None

class PokemonRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    name: str
    height: int
    weight: int
    types: list[TypeSlot] = Field(min_length=1, max_length=2)
    abilities: list[AbilitySlot] = []
    stats: list[StatSlot] = []
    sprites: Sprites = Sprites()

    @property
    def display_image(self) -> str | None:
        """Official artwork when available, otherwise the default front sprite."""
        other = self.sprites.other
        if other and other.official_artwork and other.official_artwork.front_default:
            return other.official_artwork.front_default
        return self.sprites.front_default

class FlavorTextEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    flavor_text: str
    language: NamedResource
    version: NamedResource

class Genus(BaseModel):
    model_config = ConfigDict(frozen=True)

    genus: str
    language: NamedResource

class SpeciesRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    gender_rate: int
    flavor_text_entries: list[FlavorTextEntry] = []
    genera: list[Genus] = []
    evolution_chain: Resource | None = None

class DamageRelations(BaseModel):
    model_config = ConfigDict(frozen=True)

    double_damage_from: list[NamedResource] = []

class TypeRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    damage_relations: DamageRelations

class ChainLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    species: NamedResource
    evolves_to: list["ChainLink"] = []

class EvolutionChainRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    chain: ChainLink


# --- Aggregated view model (what the service hands to the presentation layer) ---

class EvolutionNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    url: str

class EvolutionEntry(BaseModel):
    name: str
    id: int | None = None
    image: str | None = None

class PokemonDetails(BaseModel):
    record: PokemonRecord
    species: SpeciesRecord
    weaknesses: list[str] = []
    evolution: list[EvolutionEntry] = []


# --- Public API response (formatted for display) ---

class TypeBadge(BaseModel):
    name: str
    label: str
    color: str

class StatBar(BaseModel):
    name: str
    label: str
    value: int
    percentage: float

class EvolutionCard(BaseModel):
    name: str
    label: str
    id: int | None
    number: str
    image: str | None
    is_current: bool

class PokemonDetailsResponse(BaseModel):
    id: int
    name: str
    number: str
    image: str | None
    theme_color: str
    description: str
    height: str
    weight: str
    gender: str
    category: str
    abilities: list[str]
    types: list[TypeBadge]
    weaknesses: list[TypeBadge]
    stats: list[StatBar]
    evolution: list[EvolutionCard]
    has_evolution_chain: bool
