"""
Genetic match between two people, based on Sewall Wright's coefficient of
relationship (r).

Simplified per-edge coefficients:
    Parent / Child            -> 50%   (r = 0.5)
    Full Sibling              -> 50%   (r = 0.5)
    Grandparent / Grandchild  -> 25%   (r = 0.25)
    Aunt / Uncle / Half-Sib   -> 25%   (r = 0.25)
    First Cousin              -> 12.5% (r = 0.125)
    Spouse                    -> 0%

The coefficient of a path is the product of its edge coefficients, so any
chain through a spouse edge is 0 and in-laws never count as blood relatives.
"""

from collections.abc import Iterable, Mapping, Sequence
import math

import networkx as nx

from graph import build_relationship_graph, direct_relation, find_path, parent_ids
from labels import (
    Locale,
    apply_gender,
    chain_label,
    disambiguate,
    format_label,
    localize,
)
from models import (
    NOT_RELATED,
    Gender,
    GeneticMatchResult,
    Person,
    RelationshipEdge,
    RelationshipType,
    coefficient,
    invert,
)


def _people_by_id(people: Mapping[str, Person] | Iterable[Person] | None) -> dict[str, Person]:
    if people is None:
        return {}
    if isinstance(people, Mapping):
        return dict(people)
    return {p.id: p for p in people}


def _father_of(G: nx.MultiDiGraph, person_id: str, people: Mapping[str, Person]) -> Person | None:
    for pid in parent_ids(G, person_id):
        parent = people.get(pid)
        if parent is not None and parent.gender == Gender.MALE:
            return parent
    return None


def to_percentage(r: float) -> float:
    """Coefficient -> percentage with one decimal, rounding halves up."""
    return math.floor(r * 1000 + 0.5) / 10


def match(
    source_id: str,
    target_id: str,
    edges: Sequence[RelationshipEdge],
    target_gender: Gender | None = None,
    locale: Locale | str = Locale.EN,
    people: Mapping[str, Person] | Iterable[Person] | None = None,
) -> GeneticMatchResult:
    """
    Calculate the genetic match between two people.

    Args:
        source_id: The viewer
        target_id: The relative being described
        edges: Relationship snapshot; never mutated
        target_gender: Gender used to gender the label; looked up in `people`
            when omitted
        locale: Label locale
        people: People used for side/elder disambiguation along the path

    Returns:
        Percentage, "what they are to me" label and the id path. Unrelated
        pairs give 0%, "Not Related" and an empty path.
    """
    if source_id == target_id:
        return GeneticMatchResult(percentage=100.0, relationship="Self", path=(source_id,))

    G = build_relationship_graph(edges)
    found = find_path(G, source_id, target_id)
    if found is None:
        return NOT_RELATED
    path, edge_types = found

    r = 1.0
    for t in edge_types:
        r *= coefficient(t)

    # Edges read "previous is <type> of next"; invert to "next is <type> of previous"
    chain = [invert(t) for t in edge_types]
    for i, rel_type in enumerate(chain):
        if len(chain) == 1 or rel_type == RelationshipType.AUNT_UNCLE:
            # Keeps maternal/paternal aunt and uncle specializations
            chain[i] = direct_relation(G, path[i], path[i + 1])

    by_id = _people_by_id(people)
    if target_gender is None and target_id in by_id:
        target_gender = by_id[target_id].gender

    label = chain_label(chain)
    label, birth_order = disambiguate(
        label,
        chain,
        path,
        by_id,
        source_father=_father_of(G, source_id, by_id) if len(chain) == 1 else None,
        target_gender=target_gender,
    )
    label = apply_gender(label, target_gender)
    relationship = localize(label, target_gender, locale, english=format_label(label, len(chain)))

    return GeneticMatchResult(
        percentage=to_percentage(r),
        relationship=relationship,
        path=tuple(path),
        birth_order=birth_order,
    )


def blood_relatives(
    person_id: str, all_ids: Iterable[str], edges: Sequence[RelationshipEdge]
) -> set[str]:
    """
    Find every person who shares blood with `person_id` (always included).

    Runs `match` against each candidate; anyone with r > 0 is blood. Spouse
    edges zero out the coefficient, so in-laws are excluded. O(V * (V + E)).
    """
    blood = {person_id}
    for member_id in all_ids:
        if member_id == person_id:
            continue
        if match(person_id, member_id, edges).percentage > 0:
            blood.add(member_id)
    return blood


def shared_condition_relatives(
    person_id: str,
    condition_id: str,
    edges: Sequence[RelationshipEdge],
    conditions_by_person: Mapping[str, Sequence[str]],
) -> list[tuple[str, GeneticMatchResult]]:
    """
    Return the other carriers of a condition who are blood relatives of
    `person_id`, closest relation first.
    """
    results = []
    for member_id, conditions in conditions_by_person.items():
        if member_id == person_id or condition_id not in conditions:
            continue
        result = match(person_id, member_id, edges)
        if result.percentage > 0:
            results.append((member_id, result))

    return sorted(results, key=lambda item: item[1].percentage, reverse=True)
