"""Snapshot validation for family graph data."""

from collections.abc import Sequence

import networkx as nx

from models import Person, RelationshipEdge, RelationshipType
from parsing import parse_iso_date


def parent_child_pairs(edges: Sequence[RelationshipEdge]) -> list[tuple[str, str]]:
    """(parent, child) pairs from both parent and child edges."""
    pairs = []
    for e in edges:
        if e.type == RelationshipType.PARENT:
            pairs.append((e.source_id, e.target_id))
        elif e.type == RelationshipType.CHILD:
            pairs.append((e.target_id, e.source_id))
    return pairs


def validate_snapshot(people: Sequence[Person], edges: Sequence[RelationshipEdge]) -> list[str]:
    """
    Validate a people/relationship snapshot for:
    - Edges referencing people who are not in the snapshot
    - Cycles in parent-child relationships
    - Impossible ages (child born before parent)
    - Implausibly young parents (< 12 years)
    - Unparseable birth dates

    Nothing here is fatal: the engine skips dangling edges and treats bad
    dates as unknown. Returns a list of warning messages.
    """
    warnings: list[str] = []
    people_by_id = {p.id: p for p in people}

    for e in edges:
        missing = [pid for pid in (e.source_id, e.target_id) if pid not in people_by_id]
        if missing:
            warnings.append(f"Relationship {e.id} references unknown people: {missing}")

    for p in people:
        if p.birth_date and parse_iso_date(p.birth_date) is None:
            warnings.append(f"Unparseable birth date for {p.full_name}: {p.birth_date!r}")

    pairs = parent_child_pairs(edges)
    parent_graph = nx.DiGraph(pairs)
    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    for parent_id, child_id in dict.fromkeys(pairs):
        parent = people_by_id.get(parent_id)
        child = people_by_id.get(child_id)
        if parent is None or child is None:
            continue
        parent_birth = parse_iso_date(parent.birth_date)
        child_birth = parse_iso_date(child.birth_date)
        if parent_birth is None or child_birth is None:
            continue
        if child_birth < parent_birth:
            warnings.append(f"Impossible: {child.full_name} born before parent {parent.full_name}")
        elif child_birth.year - parent_birth.year < 12:
            warnings.append(
                f"Suspicious: {parent.full_name} was less than 12 years old "
                f"when {child.full_name} was born"
            )

    return warnings
