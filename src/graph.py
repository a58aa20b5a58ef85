"""NetworkX relationship graph building and path finding."""

from collections import deque
from collections.abc import Iterable, Iterator

import networkx as nx

from models import RelationshipEdge, RelationshipType, invert


def build_relationship_graph(edges: Iterable[RelationshipEdge]) -> nx.MultiDiGraph:
    """
    Build a bidirectional relationship graph from a flat list of directed edges.

    Every edge (u, v, t) is stored as u -> v keyed by t and v -> u keyed by the
    inverse of t, so that the edge key always reads "tail is <key> of head".
    Keys make re-inserting an identical (source, target, type) triple a no-op.
    Both directions remember the edge as it was declared, since inverting a
    specialized type (e.g. paternal_uncle -> niece_nephew) is lossy.

    Args:
        edges: Relationship edges; the graph never mutates them

    Returns:
        A MultiDiGraph keyed by person id, neighbor order following edge order
    """
    G = nx.MultiDiGraph()

    for edge in edges:
        declared = {"edge_id": edge.id, "declared_source": edge.source_id, "declared_type": edge.type}
        for u, v, key in (
            (edge.source_id, edge.target_id, edge.type),
            (edge.target_id, edge.source_id, invert(edge.type)),
        ):
            # First declaration wins
            if not G.has_edge(u, v, key):
                G.add_edge(u, v, key=key, **declared)

    return G


def neighbors(G: nx.MultiDiGraph, person_id: str) -> Iterator[tuple[str, RelationshipType]]:
    """Yield (neighbor_id, type) pairs where type reads "person is <type> of neighbor"."""
    if person_id not in G:
        return
    for neighbor_id, keyed in G[person_id].items():
        for rel_type in keyed:
            yield neighbor_id, rel_type


def find_path(
    G: nx.MultiDiGraph, source_id: str, target_id: str
) -> tuple[list[str], list[RelationshipType]] | None:
    """
    Breadth-first search for the shortest edge chain from source to target.

    The search stops the first time the target shows up in a neighbor list, so
    ties between equally short chains go to the earliest inserted edges.

    Returns:
        (path of ids, parallel list of edge types) or None when unreachable.
        Edge types are in "previous person is <type> of next person" orientation.
    """
    if source_id == target_id:
        return [source_id], []

    visited = {source_id}
    queue = deque([(source_id, [source_id], [])])

    while queue:
        current, path, types = queue.popleft()
        for neighbor_id, rel_type in neighbors(G, current):
            if neighbor_id == target_id:
                return path + [target_id], types + [rel_type]
            if neighbor_id not in visited:
                visited.add(neighbor_id)
                queue.append((neighbor_id, path + [neighbor_id], types + [rel_type]))

    return None


def parent_ids(G: nx.MultiDiGraph, person_id: str) -> list[str]:
    """Return ids of the person's parents, in edge order."""
    # The person is the CHILD of each parent
    return [n for n, t in neighbors(G, person_id) if t == RelationshipType.CHILD]


def direct_relation(G: nx.MultiDiGraph, person_id: str, relative_id: str) -> RelationshipType | None:
    """
    What `relative_id` is to `person_id` according to a single declared edge,
    keeping aunt/uncle specializations. None when they are not adjacent.
    """
    if not G.has_edge(person_id, relative_id):
        return None
    rel_type, data = next(iter(G[person_id][relative_id].items()))
    if data["declared_source"] == relative_id:
        return data["declared_type"]
    return invert(rel_type)
