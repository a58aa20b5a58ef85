"""Tests for the generation-banded pedigree layout."""

import pytest

from layout import (
    DEFAULT_CONFIG,
    LayoutConfig,
    connection_segments,
    elbow,
    generation_delta,
    layout,
    parents_by_child,
    sibship_segments,
)
from models import Gender, Person, RelationshipEdge, RelationshipType, Sibship

P = RelationshipType.PARENT


def _xs(tree, *ids):
    return [tree.node(pid).x for pid in ids]


def test_generations(pedigree):
    people, edges = pedigree
    tree = layout(people, edges, "ego")

    generations = {n.person.id: n.generation for n in tree.nodes}
    assert generations == {
        "pgf": 2,
        "pgm": 2,
        "mgf": 2,
        "mgm": 2,
        "dad": 1,
        "mom": 1,
        "aunt": 1,
        "jh": 1,
        "ego": 0,
        "cousin": 0,
    }


def test_same_generation_same_row(pedigree):
    people, edges = pedigree
    tree = layout(people, edges, "ego")

    rows = {}
    for node in tree.nodes:
        rows.setdefault(node.generation, set()).add(node.y)
    assert all(len(ys) == 1 for ys in rows.values())
    # Ancestors above
    assert tree.node("mgm").y < tree.node("mom").y < tree.node("ego").y
    assert tree.node("ego").y == DEFAULT_CONFIG.top_margin + 2 * DEFAULT_CONFIG.level_gap


def test_every_person_appears_once(pedigree):
    people, edges = pedigree
    tree = layout(people, edges, "ego")

    ids = [n.person.id for n in tree.nodes]
    assert sorted(ids) == sorted(p.id for p in people)


def test_canvas_size(pedigree):
    people, edges = pedigree
    tree = layout(people, edges, "ego")

    # Widest row has four members; three rows
    assert tree.width == 1540
    assert tree.height == 660


def test_maternal_aunt_sits_right_of_center_near_mother(pedigree):
    people, edges = pedigree
    tree = layout(people, edges, "ego")

    mom, aunt = tree.node("mom"), tree.node("aunt")
    assert aunt.x > tree.width / 2
    assert abs(mom.x - aunt.x) <= DEFAULT_CONFIG.wide_gap
    assert tree.node("dad").x < mom.x


def test_row_order_paternal_then_maternal(pedigree):
    people, edges = pedigree
    tree = layout(people, edges, "ego")

    # Married-in spouse follows the maternal aunt
    assert _xs(tree, "dad", "mom", "aunt", "jh") == [470, 670, 870, 1070]
    assert _xs(tree, "ego", "cousin") == [670, 870]


def test_row_of_three_centered(pedigree):
    people, edges = pedigree
    people = [p for p in people if p.id not in ("jh", "cousin")]
    edges = [e for e in edges if e.source_id not in ("jh", "cousin") and e.target_id not in ("jh", "cousin")]

    tree = layout(people, edges, "ego")

    # Grandparent row is still four wide
    assert tree.width == 1540
    assert _xs(tree, "dad", "mom", "aunt") == [570, 770, 970]


def test_compact_gap_for_wide_rows():
    people = [Person("p", "Parent", "Z", Gender.FEMALE)] + [
        Person(f"c{i}", f"Child{i}", "Z") for i in range(5)
    ]
    edges = [RelationshipEdge(f"r{i}", "p", f"c{i}", P) for i in range(5)]

    tree = layout(people, edges, "p")

    xs = _xs(tree, "c0", "c1", "c2", "c3", "c4")
    assert [b - a for a, b in zip(xs, xs[1:])] == [DEFAULT_CONFIG.compact_gap] * 4
    assert tree.width == 5 * 280 + 420
    assert tree.node("c2").x == tree.width / 2


def test_custom_config():
    people = [Person("a", "A", "Z"), Person("b", "B", "Z")]
    edges = [RelationshipEdge("r1", "a", "b", RelationshipType.SIBLING)]
    config = LayoutConfig(min_width=600, column_width=100, side_margin=100, wide_gap=100)

    tree = layout(people, edges, "a", config=config)

    assert tree.width == 600
    assert _xs(tree, "a", "b") == [250, 350]


def test_sibships(pedigree):
    people, edges = pedigree
    tree = layout(people, edges, "ego")

    by_parents = {s.parents: s.children for s in tree.sibships}
    assert by_parents == {
        ("pgf", "pgm"): ("dad",),
        ("mgf", "mgm"): ("mom", "aunt"),
        ("dad", "mom"): ("ego",),
        ("aunt", "jh"): ("cousin",),
    }


def test_connections_deduplicated(pedigree):
    people, edges = pedigree
    extra = [
        RelationshipEdge("dup1", "mom", "dad", RelationshipType.SPOUSE),
        RelationshipEdge("dup2", "ego", "mom", RelationshipType.CHILD),
    ]
    tree = layout(people, edges + extra, "ego")

    spouse = [c for c in tree.connections if c.type == RelationshipType.SPOUSE]
    parent = [c for c in tree.connections if c.type == RelationshipType.PARENT]
    assert len(spouse) == 2
    assert len(parent) == 10
    assert len(set(tree.connections)) == len(tree.connections)


def test_duplicate_edges_do_not_change_layout(pedigree):
    people, edges = pedigree
    doubled = edges + [RelationshipEdge("dup", "mom", "ego", P)]
    assert layout(people, doubled, "ego") == layout(people, edges, "ego")


def test_layout_is_deterministic(pedigree):
    people, edges = pedigree
    assert layout(people, edges, "ego") == layout(people, edges, "ego")


def test_dangling_edges_are_ignored(pedigree):
    people, edges = pedigree
    dangling = edges + [RelationshipEdge("ghost", "nobody", "ego", P)]

    assert layout(people, dangling, "ego") == layout(people, edges, "ego")


def test_disconnected_people_still_placed(pedigree):
    people, edges = pedigree
    people = people + [Person("loner1", "Lone", "One"), Person("loner2", "Lone", "Two")]

    tree = layout(people, edges, "ego")

    assert tree.node("loner1").generation == -1
    assert tree.node("loner2").generation == -2
    assert tree.node("loner1").y != tree.node("loner2").y


def test_unknown_root_raises(pedigree):
    people, edges = pedigree
    with pytest.raises(ValueError, match="not found"):
        layout(people, edges, "nobody")


def test_empty_input():
    tree = layout([], [], "anyone")

    assert tree.nodes == ()
    assert tree.connections == ()
    assert tree.width == DEFAULT_CONFIG.min_width
    assert tree.height == DEFAULT_CONFIG.min_height


def test_single_person():
    tree = layout([Person("solo", "Solo", "Person")], [], "solo")

    assert tree.node("solo").x == tree.width / 2
    assert tree.node("solo").generation == 0


@pytest.mark.parametrize(
    "relation, delta",
    [
        (RelationshipType.PARENT, 1),
        (RelationshipType.GRANDPARENT, 1),
        (RelationshipType.PATERNAL_UNCLE, 1),
        (RelationshipType.CHILD, -1),
        (RelationshipType.NIECE_NEPHEW, -1),
        (RelationshipType.SIBLING, 0),
        (RelationshipType.SPOUSE, 0),
        (RelationshipType.COUSIN, 0),
    ],
)
def test_generation_delta(relation, delta):
    assert generation_delta(relation) == delta


def test_siblings_share_parents():
    edges = [
        RelationshipEdge("r1", "mom", "a", P),
        RelationshipEdge("r2", "dad", "b", P),
        RelationshipEdge("r3", "a", "b", RelationshipType.SIBLING),
    ]
    parents = parents_by_child(edges, {"mom", "dad", "a", "b"})

    assert set(parents["a"]) == {"mom", "dad"}
    assert set(parents["b"]) == {"mom", "dad"}


def test_sibship_segments_are_axis_aligned(pedigree):
    people, edges = pedigree
    tree = layout(people, edges, "ego")

    for sibship in tree.sibships:
        segments = sibship_segments(tree, sibship)
        assert segments
        assert all(s.is_axis_aligned for s in segments)
    for connection in tree.connections:
        assert all(s.is_axis_aligned for s in connection_segments(tree, connection))


def test_sibship_segments_skip_missing_people(pedigree):
    people, edges = pedigree
    tree = layout(people, edges, "ego")

    assert sibship_segments(tree, Sibship(parents=("nobody",), children=("ego",))) == []


def test_elbow():
    segments = elbow(0, 0, 100, 200)

    assert len(segments) == 3
    assert all(s.is_axis_aligned for s in segments)
    assert (segments[0].x1, segments[0].y1) == (0, 0)
    assert (segments[-1].x2, segments[-1].y2) == (100, 200)
    assert len(elbow(0, 0, 0, 200)) == 1
