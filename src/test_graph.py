"""Tests for relationship graph building and path finding."""

from graph import build_relationship_graph, direct_relation, find_path, neighbors, parent_ids
from models import RelationshipEdge, RelationshipType

P = RelationshipType.PARENT


def test_inverse_edge_inserted():
    G = build_relationship_graph([RelationshipEdge("r1", "mom", "kid", P)])

    assert list(neighbors(G, "mom")) == [("kid", RelationshipType.PARENT)]
    assert list(neighbors(G, "kid")) == [("mom", RelationshipType.CHILD)]


def test_duplicate_edges_are_idempotent():
    edge = RelationshipEdge("r1", "mom", "kid", P)
    again = RelationshipEdge("r2", "mom", "kid", P)
    mirrored = RelationshipEdge("r3", "kid", "mom", RelationshipType.CHILD)

    G = build_relationship_graph([edge, again, mirrored])

    assert G.number_of_edges() == 2
    assert list(neighbors(G, "kid")) == [("mom", RelationshipType.CHILD)]


def test_unknown_person_has_no_neighbors():
    G = build_relationship_graph([])
    assert list(neighbors(G, "nobody")) == []


def test_find_path_prefers_fewest_edges():
    edges = [
        RelationshipEdge("r1", "a", "b", RelationshipType.SIBLING),
        RelationshipEdge("r2", "b", "c", RelationshipType.SIBLING),
        RelationshipEdge("r3", "c", "d", RelationshipType.SIBLING),
        RelationshipEdge("r4", "a", "d", RelationshipType.COUSIN),
    ]
    path, types = find_path(build_relationship_graph(edges), "a", "d")

    assert path == ["a", "d"]
    assert types == [RelationshipType.COUSIN]


def test_find_path_ties_follow_insertion_order():
    edges = [
        RelationshipEdge("r1", "x", "left", RelationshipType.SIBLING),
        RelationshipEdge("r2", "x", "right", RelationshipType.SIBLING),
        RelationshipEdge("r3", "right", "goal", RelationshipType.SIBLING),
        RelationshipEdge("r4", "left", "goal", RelationshipType.SIBLING),
    ]
    path, _ = find_path(build_relationship_graph(edges), "x", "goal")

    assert path == ["x", "left", "goal"]


def test_find_path_disconnected():
    edges = [
        RelationshipEdge("r1", "a", "b", P),
        RelationshipEdge("r2", "c", "d", P),
    ]
    assert find_path(build_relationship_graph(edges), "a", "d") is None


def test_path_types_read_previous_is_type_of_next():
    edges = [
        RelationshipEdge("r1", "gran", "mom", P),
        RelationshipEdge("r2", "mom", "kid", P),
    ]
    path, types = find_path(build_relationship_graph(edges), "kid", "gran")

    assert path == ["kid", "mom", "gran"]
    assert types == [RelationshipType.CHILD, RelationshipType.CHILD]


def test_parent_ids():
    edges = [
        RelationshipEdge("r1", "mom", "kid", P),
        RelationshipEdge("r2", "kid", "dad", RelationshipType.CHILD),
        RelationshipEdge("r3", "kid", "sis", RelationshipType.SIBLING),
    ]
    assert parent_ids(build_relationship_graph(edges), "kid") == ["mom", "dad"]


def test_direct_relation_keeps_specialization():
    G = build_relationship_graph(
        [RelationshipEdge("r1", "uncle", "kid", RelationshipType.PATERNAL_UNCLE)]
    )

    assert direct_relation(G, "kid", "uncle") == RelationshipType.PATERNAL_UNCLE
    assert direct_relation(G, "uncle", "kid") == RelationshipType.NIECE_NEPHEW
    assert direct_relation(G, "kid", "stranger") is None
