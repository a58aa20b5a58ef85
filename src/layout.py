"""Generation-banded pedigree layout with orthogonal connector geometry."""

from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import logging

import networkx as nx

from graph import build_relationship_graph, neighbors
from models import (
    AUNT_UNCLE_TYPES,
    Gender,
    Person,
    RelationshipEdge,
    RelationshipType,
    Segment,
    Sibship,
    TreeLayout,
    TreeLayoutConnection,
    TreeLayoutNode,
    invert,
)

logger = logging.getLogger(__name__)

PATERNAL = "paternal"
NEUTRAL = "neutral"
MATERNAL = "maternal"

# Stepping onto one of these relatives moves a generation up / down
UP_RELATIONS = frozenset({RelationshipType.PARENT, RelationshipType.GRANDPARENT}) | AUNT_UNCLE_TYPES
DOWN_RELATIONS = frozenset(
    {RelationshipType.CHILD, RelationshipType.GRANDCHILD, RelationshipType.NIECE_NEPHEW}
)


@dataclass(frozen=True)
class LayoutConfig:
    """Canvas geometry, in layout units."""

    min_width: float = 1300
    min_height: float = 560
    column_width: float = 280
    side_margin: float = 420
    top_margin: float = 90
    bottom_margin: float = 120
    level_gap: float = 180
    wide_gap: float = 200
    compact_gap: float = 150
    compact_threshold: int = 4  # rows with more members use compact_gap
    node_height: float = 80


DEFAULT_CONFIG = LayoutConfig()


def generation_delta(relation: RelationshipType) -> int:
    """Generation change when stepping onto a relative who is `relation` to the current person."""
    if relation in UP_RELATIONS:
        return 1
    if relation in DOWN_RELATIONS:
        return -1
    return 0


def assign_generations(
    G: nx.MultiDiGraph, people: Sequence[Person], root_id: str
) -> dict[str, int]:
    """
    BFS from the root assigning integer generations (root = 0, ancestors > 0).

    People unreachable from the root each get their own generation below the
    lowest one discovered, in input order, so nobody is dropped.
    """
    known = {p.id for p in people}
    generation = {root_id: 0}
    queue = deque([root_id])

    while queue:
        current = queue.popleft()
        for neighbor_id, rel_type in neighbors(G, current):
            if neighbor_id not in known or neighbor_id in generation:
                continue
            # rel_type reads "current is <type> of neighbor"
            generation[neighbor_id] = generation[current] + generation_delta(invert(rel_type))
            queue.append(neighbor_id)

    next_gen = min(generation.values()) - 1
    for person in people:
        if person.id not in generation:
            generation[person.id] = next_gen
            next_gen -= 1

    return generation


def parents_by_child(
    edges: Iterable[RelationshipEdge], known: set[str]
) -> dict[str, dict[str, None]]:
    """
    Map child id -> ordered set of parent ids, from parent and child edges.

    Full siblings share parents, so parent sets are merged across sibling
    edges until nothing changes.
    """
    edges = list(edges)
    parents: dict[str, dict[str, None]] = {}

    def add(parent_id: str, child_id: str) -> None:
        if parent_id in known and child_id in known:
            parents.setdefault(child_id, {})[parent_id] = None

    for edge in edges:
        if edge.type == RelationshipType.PARENT:
            add(edge.source_id, edge.target_id)
        elif edge.type == RelationshipType.CHILD:
            add(edge.target_id, edge.source_id)

    siblings = [
        (e.source_id, e.target_id)
        for e in edges
        if e.type == RelationshipType.SIBLING and e.source_id in known and e.target_id in known
    ]
    changed = True
    while changed:
        changed = False
        for a, b in siblings:
            union = {**parents.get(a, {}), **parents.get(b, {})}
            for child_id in (a, b):
                if len(union) > len(parents.get(child_id, {})):
                    merged = dict(parents.get(child_id, {}))
                    merged.update(union)
                    parents[child_id] = merged
                    changed = True

    return parents


def _closure(seeds: Iterable[str], links: dict[str, dict[str, None]]) -> set[str]:
    result = set()
    queue = deque(seeds)
    while queue:
        current = queue.popleft()
        if current in result:
            continue
        result.add(current)
        queue.extend(links.get(current, {}))
    return result


def lineage_sides(
    root_id: str,
    people_by_id: dict[str, Person],
    parents: dict[str, dict[str, None]],
    spouses: dict[str, list[str]],
) -> tuple[dict[str, str], str | None, str | None]:
    """
    Classify people as paternal, maternal or neutral relative to the root.

    Returns:
        (side by person id, mother id, father id); sides are empty unless the
        root has two distinct parents
    """
    root_parents = [people_by_id[pid] for pid in parents.get(root_id, {})]
    mother = next((p for p in root_parents if p.gender == Gender.FEMALE), None)
    father = next((p for p in root_parents if p.gender == Gender.MALE), None)
    rest = [p for p in root_parents if p is not mother and p is not father]
    if mother is None and rest:
        mother = rest.pop(0)
    if father is None and rest:
        father = rest.pop(0)
    if mother is None or father is None:
        return {}, None, None

    children: dict[str, dict[str, None]] = {}
    for child_id, parent_ids in parents.items():
        for parent_id in parent_ids:
            children.setdefault(parent_id, {})[child_id] = None

    maternal_ancestors = _closure([mother.id], parents)
    paternal_ancestors = _closure([father.id], parents)
    maternal_seeds = set(maternal_ancestors)
    paternal_seeds = set(paternal_ancestors)
    for person_id, parent_ids in parents.items():
        on_mother_side = any(pid in maternal_ancestors for pid in parent_ids)
        on_father_side = any(pid in paternal_ancestors for pid in parent_ids)
        if on_mother_side and not on_father_side:
            maternal_seeds.add(person_id)
        if on_father_side and not on_mother_side:
            paternal_seeds.add(person_id)

    maternal_family = _closure(maternal_seeds, children)
    paternal_family = _closure(paternal_seeds, children)

    sides: dict[str, str] = {}
    for person_id in people_by_id:
        if person_id in maternal_family and person_id not in paternal_family:
            sides[person_id] = MATERNAL
        elif person_id in paternal_family and person_id not in maternal_family:
            sides[person_id] = PATERNAL
        else:
            sides[person_id] = NEUTRAL
    sides[mother.id] = MATERNAL
    sides[father.id] = PATERNAL

    # Married-in relatives sit with their spouse's side
    married_in = {}
    for person_id, side in sides.items():
        if side != NEUTRAL or person_id == root_id:
            continue
        spouse_sides = {sides[s] for s in spouses.get(person_id, []) if s in sides} - {NEUTRAL}
        if len(spouse_sides) == 1:
            married_in[person_id] = spouse_sides.pop()
    sides.update(married_in)

    return sides, mother.id, father.id


def _row_key(person: Person, sides: dict[str, str], mother_id: str | None, father_id: str | None):
    side = sides.get(person.id, NEUTRAL)
    if side == PATERNAL:
        # The father closes the paternal block, next to the middle
        return (0, 1 if person.id == father_id else 0, person.full_name, person.id)
    if side == MATERNAL:
        return (2, 0 if person.id == mother_id else 1, person.full_name, person.id)
    return (1, 0, person.full_name, person.id)


def layout(
    people: Sequence[Person],
    edges: Sequence[RelationshipEdge],
    root_id: str,
    config: LayoutConfig | None = None,
) -> TreeLayout:
    """
    Lay out a family graph as a generation-banded pedigree chart.

    - Each generation is one row; ancestors above, descendants below.
    - Within a row people are grouped paternal | neutral | maternal and sorted
      by full name, then centered on the canvas midpoint.
    - Parent/child links are also grouped into sibships so the renderer can
      draw one shared bar per set of children instead of one line per pair.

    Args:
        people: Everyone to place; each appears exactly once in the output
        edges: Relationship snapshot; edges to unknown people are ignored
        root_id: Person placed at generation 0
        config: Canvas geometry (defaults to DEFAULT_CONFIG)

    Returns:
        Nodes, deduplicated connections, sibships and canvas size
    """
    config = config or DEFAULT_CONFIG
    if not people:
        return TreeLayout((), (), (), config.min_width, config.min_height)

    people_by_id = {p.id: p for p in people}
    if root_id not in people_by_id:
        raise ValueError(f"Person ID {root_id} not found in people")

    G = build_relationship_graph(edges)
    generation = assign_generations(G, people, root_id)
    known = set(people_by_id)
    parents = parents_by_child(edges, known)

    spouses: dict[str, list[str]] = {}
    for edge in edges:
        if edge.type == RelationshipType.SPOUSE and edge.source_id in known and edge.target_id in known:
            spouses.setdefault(edge.source_id, []).append(edge.target_id)
            spouses.setdefault(edge.target_id, []).append(edge.source_id)

    sides, mother_id, father_id = lineage_sides(root_id, people_by_id, parents, spouses)

    # Rows top to bottom: highest generation first
    rows: dict[int, list[Person]] = {}
    for person in people:
        rows.setdefault(generation[person.id], []).append(person)
    ordered_gens = sorted(rows, reverse=True)

    widest = max(len(members) for members in rows.values())
    width = max(config.min_width, widest * config.column_width + config.side_margin)
    height = max(config.min_height, len(ordered_gens) * config.level_gap + config.bottom_margin)
    center_x = width / 2

    positions: dict[str, tuple[float, float]] = {}
    for row, gen in enumerate(ordered_gens):
        members = sorted(rows[gen], key=lambda p: _row_key(p, sides, mother_id, father_id))
        gap = config.compact_gap if len(members) > config.compact_threshold else config.wide_gap
        start_x = center_x - (len(members) - 1) * gap / 2
        y = config.top_margin + row * config.level_gap
        for i, person in enumerate(members):
            positions[person.id] = (start_x + i * gap, y)

    nodes = tuple(
        TreeLayoutNode(
            person=p,
            generation=generation[p.id],
            x=positions[p.id][0],
            y=positions[p.id][1],
        )
        for p in people
    )

    return TreeLayout(
        nodes=nodes,
        connections=tuple(build_connections(edges, parents, known)),
        sibships=tuple(build_sibships(parents)),
        width=width,
        height=height,
    )


def build_connections(
    edges: Iterable[RelationshipEdge],
    parents: dict[str, dict[str, None]],
    known: set[str],
) -> list[TreeLayoutConnection]:
    """One connection per unique spouse pair and per unique parent -> child pair."""
    seen: set[tuple] = set()
    connections: list[TreeLayoutConnection] = []

    def add(key: tuple, from_id: str, to_id: str, rel_type: RelationshipType) -> None:
        if key in seen:
            return
        seen.add(key)
        connections.append(TreeLayoutConnection(from_id, to_id, rel_type))

    for edge in edges:
        if edge.source_id not in known or edge.target_id not in known:
            logger.debug("Skipping relationship %s with unknown endpoint", edge.id)
            continue
        if edge.type == RelationshipType.SPOUSE:
            a, b = sorted((edge.source_id, edge.target_id))
            add((RelationshipType.SPOUSE, a, b), a, b, RelationshipType.SPOUSE)
        elif edge.type == RelationshipType.PARENT:
            key = (RelationshipType.PARENT, edge.source_id, edge.target_id)
            add(key, edge.source_id, edge.target_id, RelationshipType.PARENT)
        elif edge.type == RelationshipType.CHILD:
            key = (RelationshipType.PARENT, edge.target_id, edge.source_id)
            add(key, edge.target_id, edge.source_id, RelationshipType.PARENT)

    # Parents inferred through sibling edges
    for child_id, parent_ids in parents.items():
        for parent_id in parent_ids:
            add((RelationshipType.PARENT, parent_id, child_id), parent_id, child_id, RelationshipType.PARENT)

    return connections


def build_sibships(parents: dict[str, dict[str, None]]) -> list[Sibship]:
    """Group children by their (sorted) parent set."""
    grouped: dict[tuple[str, ...], list[str]] = {}
    for child_id, parent_ids in parents.items():
        if not parent_ids:
            continue
        grouped.setdefault(tuple(sorted(parent_ids)), []).append(child_id)
    return [Sibship(parents=key, children=tuple(children)) for key, children in grouped.items()]


# ============================================================================
# Connector geometry
# ============================================================================


def _add(segments: list[Segment], x1: float, y1: float, x2: float, y2: float) -> None:
    if (x1, y1) != (x2, y2):
        segments.append(Segment(x1, y1, x2, y2))


def elbow(x1: float, y1: float, x2: float, y2: float) -> list[Segment]:
    """Route (x1, y1) -> (x2, y2) as vertical, horizontal, vertical segments."""
    segments: list[Segment] = []
    if y1 == y2 or x1 == x2:
        _add(segments, x1, y1, x2, y2)
        return segments
    mid_y = (y1 + y2) / 2
    _add(segments, x1, y1, x1, mid_y)
    _add(segments, x1, mid_y, x2, mid_y)
    _add(segments, x2, mid_y, x2, y2)
    return segments


def sibship_segments(
    tree: TreeLayout, sibship: Sibship, config: LayoutConfig | None = None
) -> list[Segment]:
    """
    Decompose a sibship connector into axis-aligned segments.

    Parents drop to a shared parent bar, a trunk runs from the middle of that
    bar down to the children's bar, and each child hangs from the children's
    bar. Every segment is horizontal or vertical by construction.
    """
    half = (config or DEFAULT_CONFIG).node_height / 2
    by_id = {n.person.id: n for n in tree.nodes}
    parent_nodes = [by_id[pid] for pid in sibship.parents if pid in by_id]
    child_nodes = [by_id[cid] for cid in sibship.children if cid in by_id]
    if not parent_nodes or not child_nodes:
        return []

    segments: list[Segment] = []
    parent_xs = [p.x for p in parent_nodes]
    parent_bar_y = max(p.y for p in parent_nodes) + half
    for p in parent_nodes:
        _add(segments, p.x, p.y + half, p.x, parent_bar_y)
    _add(segments, min(parent_xs), parent_bar_y, max(parent_xs), parent_bar_y)

    trunk_x = (min(parent_xs) + max(parent_xs)) / 2
    child_bar_y = (parent_bar_y + min(c.y for c in child_nodes) - half) / 2
    _add(segments, trunk_x, parent_bar_y, trunk_x, child_bar_y)

    bar_xs = [c.x for c in child_nodes] + [trunk_x]
    _add(segments, min(bar_xs), child_bar_y, max(bar_xs), child_bar_y)
    for c in child_nodes:
        _add(segments, c.x, child_bar_y, c.x, c.y - half)

    return segments


def connection_segments(
    tree: TreeLayout, connection: TreeLayoutConnection, config: LayoutConfig | None = None
) -> list[Segment]:
    """Orthogonal route for a single spouse or parent connection."""
    half = (config or DEFAULT_CONFIG).node_height / 2
    a = tree.node(connection.from_id)
    b = tree.node(connection.to_id)
    if a is None or b is None:
        return []
    if connection.type == RelationshipType.SPOUSE:
        return elbow(a.x, a.y, b.x, b.y)
    return elbow(a.x, a.y + half, b.x, b.y - half)
