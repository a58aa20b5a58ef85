"""Tests for relationship tables and data classes."""

import pytest

from models import (
    COEFFICIENTS,
    INVERSES,
    Person,
    RelationshipEdge,
    RelationshipType,
    Segment,
    check_relationship_tables,
    invert,
)


def test_every_type_has_coefficient_and_inverse():
    assert set(COEFFICIENTS) == set(RelationshipType)
    assert set(INVERSES) == set(RelationshipType)
    check_relationship_tables()


def test_spouse_coefficient_is_zero():
    assert COEFFICIENTS[RelationshipType.SPOUSE] == 0


def test_coefficients_within_unit_interval():
    assert all(0.0 <= c <= 1.0 for c in COEFFICIENTS.values())


@pytest.mark.parametrize(
    "rel_type, expected",
    [
        (RelationshipType.PARENT, RelationshipType.CHILD),
        (RelationshipType.CHILD, RelationshipType.PARENT),
        (RelationshipType.GRANDPARENT, RelationshipType.GRANDCHILD),
        (RelationshipType.PATERNAL_UNCLE, RelationshipType.NIECE_NEPHEW),
        (RelationshipType.NIECE_NEPHEW, RelationshipType.AUNT_UNCLE),
        (RelationshipType.SIBLING, RelationshipType.SIBLING),
        (RelationshipType.SPOUSE, RelationshipType.SPOUSE),
        (RelationshipType.COUSIN, RelationshipType.COUSIN),
    ],
)
def test_inverse(rel_type, expected):
    assert invert(rel_type) == expected


def test_inverse_maps_into_enum():
    assert all(isinstance(invert(t), RelationshipType) for t in RelationshipType)


class TestRelationshipEdge:
    def test_self_edge_rejected(self):
        with pytest.raises(ValueError):
            RelationshipEdge("r1", "a", "a", RelationshipType.SIBLING)

    def test_plain_string_type_accepted(self):
        edge = RelationshipEdge("r1", "a", "b", "parent")
        assert edge.type is RelationshipType.PARENT

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            RelationshipEdge("r1", "a", "b", "godparent")


def test_full_name():
    assert Person("p1", "Ada", "Lovelace").full_name == "Ada Lovelace"
    assert Person("p2", "Cher", "").full_name == "Cher"


def test_segment_axis_alignment():
    assert Segment(0, 0, 0, 10).is_axis_aligned
    assert Segment(0, 5, 10, 5).is_axis_aligned
    assert not Segment(0, 0, 10, 10).is_axis_aligned
