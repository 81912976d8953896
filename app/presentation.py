from app.formatting import (
    capitalize,
    convert_height,
    convert_weight,
    format_ability,
    format_number,
    format_stat_name,
    gender_display,
    select_category,
    select_description,
    stat_percentage,
)
from app.models import (
    EvolutionCard,
    PokemonDetails,
    PokemonDetailsResponse,
    StatBar,
    TypeBadge,
)

DEFAULT_TYPE_COLOR = "#A8A77A"

# Display colour for each Pokemon type
TYPE_COLORS = {
    "normal": "#A8A77A",
    "fire": "#EE8130",
    "water": "#6390F0",
    "electric": "#F7D02C",
    "grass": "#7AC74C",
    "ice": "#96D9D6",
    "fighting": "#C22E28",
    "poison": "#A33EA1",
    "ground": "#E2BF65",
    "flying": "#A98FF3",
    "psychic": "#F95587",
    "bug": "#A6B91A",
    "rock": "#B6A136",
    "ghost": "#735797",
    "dragon": "#6F35FC",
    "dark": "#705746",
    "steel": "#B7B7CE",
    "fairy": "#D685AD",
}


def type_color(type_name: str) -> str:
    return TYPE_COLORS.get(type_name, DEFAULT_TYPE_COLOR)


def _type_badge(type_name: str) -> TypeBadge:
    return TypeBadge(name=type_name, label=capitalize(type_name), color=type_color(type_name))


def build_details_response(details: PokemonDetails) -> PokemonDetailsResponse:
    """Maps the aggregated view model to the public, display-ready response model."""
    record, species = details.record, details.species
    primary_type = record.types[0].name if record.types else "normal"

    return PokemonDetailsResponse(
        id=record.id,
        name=capitalize(record.name),
        number=format_number(record.id),
        image=record.display_image,
        theme_color=type_color(primary_type),
        description=select_description(species.flavor_text_entries),
        height=convert_height(record.height),
        weight=convert_weight(record.weight),
        gender=gender_display(species.gender_rate),
        category=select_category(species.genera),
        abilities=[format_ability(slot.ability.name, slot.is_hidden) for slot in record.abilities],
        types=[_type_badge(slot.name) for slot in record.types],
        weaknesses=[_type_badge(name) for name in details.weaknesses],
        stats=[
            StatBar(
                name=slot.stat.name,
                label=format_stat_name(slot.stat.name),
                value=slot.base_stat,
                percentage=stat_percentage(slot.base_stat),
            )
            for slot in record.stats
        ],
        evolution=[
            EvolutionCard(
                name=entry.name,
                label=capitalize(entry.name),
                id=entry.id,
                number=format_number(entry.id) if entry.id else "",
                image=entry.image,
                is_current=entry.name == record.name,
            )
            for entry in details.evolution
        ],
        has_evolution_chain=len(details.evolution) > 1,
    )
