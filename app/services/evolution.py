from app.models import ChainLink, EvolutionNode


def flatten_chain(link: ChainLink) -> list[EvolutionNode]:
    """
    Flattens an evolution tree in pre-order: the species itself first, then each
    `evolves_to` subtree in the order PokeAPI returned them. Branching chains
    (e.g. Eevee) produce several siblings after their parent.
    """
    nodes = [EvolutionNode(name=link.species.name, url=link.species.url)]
    for child in link.evolves_to:
        nodes.extend(flatten_chain(child))
    return nodes


def species_id_from_url(url: str) -> str:
    """Returns the last non-empty path segment of a resource URL (its id)."""
    segments = [segment for segment in url.split("/") if segment]
    if not segments:
        raise ValueError(f"No id segment in resource url '{url}'")
    return segments[-1]
