"""Data classes and relationship tables for family graph entities."""

from dataclasses import dataclass, field
from enum import Enum


class Gender(str, Enum):
    FEMALE = "female"
    MALE = "male"


class RelationshipType(str, Enum):
    """An edge (source, target, type) reads "source is <type> of target"."""

    PARENT = "parent"
    CHILD = "child"
    SIBLING = "sibling"
    HALF_SIBLING = "half_sibling"
    SPOUSE = "spouse"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"
    AUNT_UNCLE = "aunt_uncle"
    MATERNAL_AUNT = "maternal_aunt"
    PATERNAL_AUNT = "paternal_aunt"
    MATERNAL_UNCLE = "maternal_uncle"
    PATERNAL_UNCLE = "paternal_uncle"
    NIECE_NEPHEW = "niece_nephew"
    COUSIN = "cousin"


AUNT_UNCLE_TYPES = frozenset(
    {
        RelationshipType.AUNT_UNCLE,
        RelationshipType.MATERNAL_AUNT,
        RelationshipType.PATERNAL_AUNT,
        RelationshipType.MATERNAL_UNCLE,
        RelationshipType.PATERNAL_UNCLE,
    }
)

# Coefficient of relationship (r) contributed by a single edge
COEFFICIENTS: dict[RelationshipType, float] = {
    RelationshipType.PARENT: 0.5,
    RelationshipType.CHILD: 0.5,
    RelationshipType.SIBLING: 0.5,
    RelationshipType.HALF_SIBLING: 0.25,
    RelationshipType.SPOUSE: 0.0,
    RelationshipType.GRANDPARENT: 0.25,
    RelationshipType.GRANDCHILD: 0.25,
    RelationshipType.AUNT_UNCLE: 0.25,
    RelationshipType.MATERNAL_AUNT: 0.25,
    RelationshipType.PATERNAL_AUNT: 0.25,
    RelationshipType.MATERNAL_UNCLE: 0.25,
    RelationshipType.PATERNAL_UNCLE: 0.25,
    RelationshipType.NIECE_NEPHEW: 0.25,
    RelationshipType.COUSIN: 0.125,
}

INVERSES: dict[RelationshipType, RelationshipType] = {
    RelationshipType.PARENT: RelationshipType.CHILD,
    RelationshipType.CHILD: RelationshipType.PARENT,
    RelationshipType.SIBLING: RelationshipType.SIBLING,
    RelationshipType.HALF_SIBLING: RelationshipType.HALF_SIBLING,
    RelationshipType.SPOUSE: RelationshipType.SPOUSE,
    RelationshipType.GRANDPARENT: RelationshipType.GRANDCHILD,
    RelationshipType.GRANDCHILD: RelationshipType.GRANDPARENT,
    RelationshipType.AUNT_UNCLE: RelationshipType.NIECE_NEPHEW,
    RelationshipType.MATERNAL_AUNT: RelationshipType.NIECE_NEPHEW,
    RelationshipType.PATERNAL_AUNT: RelationshipType.NIECE_NEPHEW,
    RelationshipType.MATERNAL_UNCLE: RelationshipType.NIECE_NEPHEW,
    RelationshipType.PATERNAL_UNCLE: RelationshipType.NIECE_NEPHEW,
    RelationshipType.NIECE_NEPHEW: RelationshipType.AUNT_UNCLE,
    RelationshipType.COUSIN: RelationshipType.COUSIN,
}


def check_relationship_tables() -> None:
    """Raise if any relationship type lacks a coefficient or an inverse."""
    missing_coefficients = [t.value for t in RelationshipType if t not in COEFFICIENTS]
    missing_inverses = [t.value for t in RelationshipType if t not in INVERSES]
    if missing_coefficients or missing_inverses:
        raise RuntimeError(
            f"Incomplete relationship tables: coefficients missing {missing_coefficients}, "
            f"inverses missing {missing_inverses}"
        )
    for t, c in COEFFICIENTS.items():
        if not 0.0 <= c <= 1.0:
            raise RuntimeError(f"Coefficient for {t.value} out of range: {c}")


check_relationship_tables()


def invert(rel_type: RelationshipType) -> RelationshipType:
    return INVERSES[rel_type]


def coefficient(rel_type: RelationshipType) -> float:
    return COEFFICIENTS[rel_type]


class BirthOrder(str, Enum):
    ELDER = "elder"
    YOUNGER = "younger"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Person:
    id: str
    first_name: str
    last_name: str
    gender: Gender | None = None
    birth_date: str | None = None  # ISO format YYYY-MM-DD or None
    display_name: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class RelationshipEdge:
    id: str
    source_id: str
    target_id: str
    type: RelationshipType

    def __post_init__(self):
        if self.source_id == self.target_id:
            raise ValueError(f"Relationship {self.id} targets its own source {self.source_id}")
        # Accept plain strings such as "parent"
        object.__setattr__(self, "type", RelationshipType(self.type))


@dataclass(frozen=True)
class GeneticMatchResult:
    percentage: float
    relationship: str
    path: tuple[str, ...] = ()
    birth_order: BirthOrder | None = None


NOT_RELATED = GeneticMatchResult(percentage=0.0, relationship="Not Related", path=())


@dataclass(frozen=True)
class TreeLayoutNode:
    person: Person
    generation: int
    x: float
    y: float


@dataclass(frozen=True)
class TreeLayoutConnection:
    from_id: str
    to_id: str
    type: RelationshipType  # SPOUSE or PARENT


@dataclass(frozen=True)
class Sibship:
    parents: tuple[str, ...]
    children: tuple[str, ...]


@dataclass(frozen=True)
class Segment:
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def is_axis_aligned(self) -> bool:
        return self.x1 == self.x2 or self.y1 == self.y2


@dataclass(frozen=True)
class TreeLayout:
    nodes: tuple[TreeLayoutNode, ...]
    connections: tuple[TreeLayoutConnection, ...]
    sibships: tuple[Sibship, ...]
    width: float
    height: float

    def node(self, person_id: str) -> TreeLayoutNode | None:
        for n in self.nodes:
            if n.person.id == person_id:
                return n
        return None


@dataclass(frozen=True)
class GenerationFact:
    index: int
    member_count: int
    oldest: Person | None
    youngest: Person | None


@dataclass(frozen=True)
class GenerationAnalytics:
    total_generations: int
    generations: tuple[GenerationFact, ...] = field(default_factory=tuple)
