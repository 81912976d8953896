import math
from app.models import FlavorTextEntry, Genus

INCHES_PER_DECIMETER = 3.937
POUNDS_PER_HECTOGRAM = 0.220462
MAX_BASE_STAT = 255


def format_number(pokemon_id: int) -> str:
    """7 -> '#0007'"""
    return f"#{pokemon_id:04d}"


def convert_height(decimeters: int) -> str:
    """Decimeters to feet and inches, e.g. 7 -> 2'04\"."""
    total_inches = decimeters * INCHES_PER_DECIMETER
    feet = math.floor(total_inches / 12)
    # Round half up; the builtin round() would round half to even
    inches = math.floor(total_inches % 12 + 0.5)
    return f"{feet}'{inches:02d}\""


def convert_weight(hectograms: int) -> str:
    pounds = hectograms * POUNDS_PER_HECTOGRAM
    return f"{pounds:.1f} lbs"


def select_description(entries: list[FlavorTextEntry]) -> str:
    """
    Picks the English flavor text of the "newest" game version, approximated by
    the version name that sorts last alphabetically. On equal version names the
    first entry wins. Form feeds and newlines are replaced with spaces.
    """
    english_entries = [entry for entry in entries if entry.language.name == "en"]
    if not english_entries:
        return ""

    # max() returns the first maximal element, which keeps ties stable
    latest = max(english_entries, key=lambda entry: entry.version.name)
    return latest.flavor_text.replace("\f", " ").replace("\n", " ")


def select_category(genera: list[Genus]) -> str:
    return next((genus.genus for genus in genera if genus.language.name == "en"), "")


def gender_display(gender_rate: int) -> str:
    if gender_rate == -1:
        return "Genderless"
    if gender_rate == 0:
        return "♂"
    if gender_rate == 8:
        return "♀"
    return "♂ ♀"


def capitalize(name: str) -> str:
    # Only the first letter, unlike str.capitalize() which lowercases the rest
    return name[:1].upper() + name[1:]


def format_ability(name: str, is_hidden: bool) -> str:
    label = capitalize(name)
    return f"{label} (Hidden)" if is_hidden else label


def format_stat_name(name: str) -> str:
    """special-attack -> 'Special attack'"""
    return capitalize(name.replace("-", " ", 1))


def stat_percentage(value: int) -> float:
    return value / MAX_BASE_STAT * 100
