"""Lineage validation for loaded family data."""

import re

import networkx as nx

from mookuauhau.core.entity_store.store import EntityStore
from mookuauhau.models.person import LifeEvent, Person

MIN_PARENT_AGE = 12

_YEAR_PATTERN = re.compile(r"^\s*(\d{4})")


def _leading_year(event: LifeEvent | None) -> int | None:
    if event is None or not event.date:
        return None
    match = _YEAR_PATTERN.match(event.date)
    return int(match.group(1)) if match else None


def birth_year(person: Person) -> int | None:
    """Leading four-digit year of the birth date, if there is one."""
    return _leading_year(person.birth)


def death_year(person: Person) -> int | None:
    """Leading four-digit year of the death date, if there is one."""
    return _leading_year(person.death)


def build_lineage_graph(store: EntityStore) -> nx.DiGraph:
    """Directed graph with one parent -> child edge per relationship."""
    G = nx.DiGraph()
    for person in store.iter_people():
        G.add_node(person.id, person_name=person.display_name)
        for child_id in person.children:
            G.add_edge(person.id, child_id)
    return G


def validate_lineage(store: EntityStore) -> list[str]:
    """
    Validate the family data for:
    - Cycles in parent-child relationships (a person as their own ancestor)
    - Impossible ages (child born before parent, parent younger than 12)
    - Death recorded before birth

    Dates are free-form, so only dates starting with a four-digit year are
    compared.

    Returns a list of warning messages.
    """
    warnings: list[str] = []
    G = build_lineage_graph(store)

    try:
        cycle = nx.find_cycle(G, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    for parent_id, child_id in G.edges():
        parent = store.get_person(parent_id)
        child = store.get_person(child_id)
        parent_year = birth_year(parent)
        child_year = birth_year(child)
        if parent_year is None or child_year is None:
            continue

        if child_year < parent_year:
            warnings.append(
                f"Impossible: {child.display_name or child.id} born before parent "
                f"{parent.display_name or parent.id}"
            )
        elif child_year - parent_year < MIN_PARENT_AGE:
            warnings.append(
                f"Suspicious: {parent.display_name or parent.id} was less than "
                f"{MIN_PARENT_AGE} years old when {child.display_name or child.id} was born"
            )

    for person in store.iter_people():
        born = birth_year(person)
        died = death_year(person)
        if born is not None and died is not None and died < born:
            warnings.append(f"Impossible: {person.display_name or person.id} died before being born")

    return warnings
