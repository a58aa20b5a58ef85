"""
Relationship labels: chain inference, disambiguation, gendering and locale.

Labels are computed from the viewer's perspective ("what they are to me").
A chain is the tuple of inverted edge types along a path, e.g. a first cousin
is reached through (PARENT, SIBLING, CHILD): my parent's sibling's child.
"""

import logging
from collections.abc import Mapping, Sequence
from enum import Enum

from models import AUNT_UNCLE_TYPES, BirthOrder, Gender, Person, RelationshipType
from parsing import parse_iso_date

logger = logging.getLogger(__name__)

R = RelationshipType


class LabelKind(str, Enum):
    """Every label the engine can produce; the value is the English wording."""

    SELF = "Self"
    NOT_RELATED = "Not Related"
    EXTENDED_FAMILY = "Extended Family"
    # Direct
    PARENT = "Parent"
    MOTHER = "Mother"
    FATHER = "Father"
    CHILD = "Child"
    DAUGHTER = "Daughter"
    SON = "Son"
    SIBLING = "Sibling"
    SISTER = "Sister"
    BROTHER = "Brother"
    HALF_SIBLING = "Half-Sibling"
    HALF_SISTER = "Half-Sister"
    HALF_BROTHER = "Half-Brother"
    SPOUSE = "Spouse"
    WIFE = "Wife"
    HUSBAND = "Husband"
    # Ascending
    GRANDPARENT = "Grandparent"
    GRANDMOTHER = "Grandmother"
    GRANDFATHER = "Grandfather"
    MATERNAL_GRANDPARENT = "Maternal Grandparent"
    MATERNAL_GRANDMOTHER = "Maternal Grandmother"
    MATERNAL_GRANDFATHER = "Maternal Grandfather"
    PATERNAL_GRANDPARENT = "Paternal Grandparent"
    PATERNAL_GRANDMOTHER = "Paternal Grandmother"
    PATERNAL_GRANDFATHER = "Paternal Grandfather"
    GREAT_GRANDPARENT = "Great-Grandparent"
    GREAT_GRANDMOTHER = "Great-Grandmother"
    GREAT_GRANDFATHER = "Great-Grandfather"
    # Descending
    GRANDCHILD = "Grandchild"
    GRANDDAUGHTER = "Granddaughter"
    GRANDSON = "Grandson"
    GREAT_GRANDCHILD = "Great-Grandchild"
    GREAT_GRANDDAUGHTER = "Great-Granddaughter"
    GREAT_GRANDSON = "Great-Grandson"
    # Collateral
    AUNT_UNCLE = "Aunt/Uncle"
    AUNT = "Aunt"
    UNCLE = "Uncle"
    MATERNAL_AUNT_UNCLE = "Maternal Aunt/Uncle"
    PATERNAL_AUNT_UNCLE = "Paternal Aunt/Uncle"
    MATERNAL_AUNT = "Maternal Aunt"
    MATERNAL_UNCLE = "Maternal Uncle"
    PATERNAL_AUNT = "Paternal Aunt"
    PATERNAL_UNCLE = "Paternal Uncle"
    PATERNAL_UNCLE_ELDER = "Paternal Uncle (elder)"
    PATERNAL_UNCLE_YOUNGER = "Paternal Uncle (younger)"
    GREAT_AUNT_UNCLE = "Great Aunt/Uncle"
    GREAT_AUNT = "Great Aunt"
    GREAT_UNCLE = "Great Uncle"
    HALF_AUNT_UNCLE = "Half-Aunt/Uncle"
    HALF_AUNT = "Half-Aunt"
    HALF_UNCLE = "Half-Uncle"
    NIECE_NEPHEW = "Niece/Nephew"
    NIECE = "Niece"
    NEPHEW = "Nephew"
    FIRST_COUSIN = "First Cousin"
    FIRST_COUSIN_ONCE_REMOVED = "First Cousin Once Removed"
    # In-laws (coefficient is always 0 through the spouse edge)
    AUNT_UNCLES_SPOUSE = "Aunt/Uncle's Spouse"
    MATERNAL_AUNTS_SPOUSE = "Maternal Aunt's Spouse"
    MATERNAL_UNCLES_SPOUSE = "Maternal Uncle's Spouse"
    PATERNAL_AUNTS_SPOUSE = "Paternal Aunt's Spouse"
    PATERNAL_UNCLES_SPOUSE = "Paternal Uncle's Spouse"
    STEP_PARENT = "Step-Parent"
    STEPMOTHER = "Stepmother"
    STEPFATHER = "Stepfather"
    PARENT_IN_LAW = "Parent-in-Law"
    MOTHER_IN_LAW = "Mother-in-Law"
    FATHER_IN_LAW = "Father-in-Law"
    CHILD_IN_LAW = "Child-in-Law"
    DAUGHTER_IN_LAW = "Daughter-in-Law"
    SON_IN_LAW = "Son-in-Law"
    SIBLING_IN_LAW = "Sibling-in-Law"
    SISTER_IN_LAW = "Sister-in-Law"
    BROTHER_IN_LAW = "Brother-in-Law"


class Locale(str, Enum):
    EN = "en"
    PUNJABI = "punjabi"


# Single-hop labels, keyed by "what they are to me"
DIRECT_LABELS: dict[RelationshipType, LabelKind] = {
    R.PARENT: LabelKind.PARENT,
    R.CHILD: LabelKind.CHILD,
    R.SIBLING: LabelKind.SIBLING,
    R.HALF_SIBLING: LabelKind.HALF_SIBLING,
    R.SPOUSE: LabelKind.SPOUSE,
    R.GRANDPARENT: LabelKind.GRANDPARENT,
    R.GRANDCHILD: LabelKind.GRANDCHILD,
    R.AUNT_UNCLE: LabelKind.AUNT_UNCLE,
    R.MATERNAL_AUNT: LabelKind.MATERNAL_AUNT,
    R.PATERNAL_AUNT: LabelKind.PATERNAL_AUNT,
    R.MATERNAL_UNCLE: LabelKind.MATERNAL_UNCLE,
    R.PATERNAL_UNCLE: LabelKind.PATERNAL_UNCLE,
    R.NIECE_NEPHEW: LabelKind.NIECE_NEPHEW,
    R.COUSIN: LabelKind.FIRST_COUSIN,
}

# Multi-hop chains; aunt/uncle specializations are looked up as AUNT_UNCLE
CHAIN_LABELS: dict[tuple[RelationshipType, ...], LabelKind] = {
    (R.PARENT, R.PARENT): LabelKind.GRANDPARENT,
    (R.PARENT, R.PARENT, R.PARENT): LabelKind.GREAT_GRANDPARENT,
    (R.CHILD, R.CHILD): LabelKind.GRANDCHILD,
    (R.CHILD, R.CHILD, R.CHILD): LabelKind.GREAT_GRANDCHILD,
    (R.PARENT, R.SIBLING): LabelKind.AUNT_UNCLE,
    (R.SIBLING, R.CHILD): LabelKind.NIECE_NEPHEW,
    (R.PARENT, R.SIBLING, R.CHILD): LabelKind.FIRST_COUSIN,
    (R.PARENT, R.PARENT, R.SIBLING): LabelKind.GREAT_AUNT_UNCLE,
    (R.PARENT, R.PARENT, R.SIBLING, R.CHILD): LabelKind.FIRST_COUSIN_ONCE_REMOVED,
    (R.PARENT, R.PARENT, R.CHILD): LabelKind.HALF_AUNT_UNCLE,
    (R.PARENT, R.SIBLING, R.SPOUSE): LabelKind.AUNT_UNCLES_SPOUSE,
    (R.AUNT_UNCLE, R.SPOUSE): LabelKind.AUNT_UNCLES_SPOUSE,
    (R.PARENT, R.SPOUSE): LabelKind.STEP_PARENT,
    (R.SPOUSE, R.PARENT): LabelKind.PARENT_IN_LAW,
    (R.CHILD, R.SPOUSE): LabelKind.CHILD_IN_LAW,
    (R.SIBLING, R.SPOUSE): LabelKind.SIBLING_IN_LAW,
    (R.SPOUSE, R.SIBLING): LabelKind.SIBLING_IN_LAW,
}

# label -> (female form, male form)
GENDERED_LABELS: dict[LabelKind, tuple[LabelKind, LabelKind]] = {
    LabelKind.PARENT: (LabelKind.MOTHER, LabelKind.FATHER),
    LabelKind.CHILD: (LabelKind.DAUGHTER, LabelKind.SON),
    LabelKind.SIBLING: (LabelKind.SISTER, LabelKind.BROTHER),
    LabelKind.HALF_SIBLING: (LabelKind.HALF_SISTER, LabelKind.HALF_BROTHER),
    LabelKind.SPOUSE: (LabelKind.WIFE, LabelKind.HUSBAND),
    LabelKind.GRANDPARENT: (LabelKind.GRANDMOTHER, LabelKind.GRANDFATHER),
    LabelKind.MATERNAL_GRANDPARENT: (
        LabelKind.MATERNAL_GRANDMOTHER,
        LabelKind.MATERNAL_GRANDFATHER,
    ),
    LabelKind.PATERNAL_GRANDPARENT: (
        LabelKind.PATERNAL_GRANDMOTHER,
        LabelKind.PATERNAL_GRANDFATHER,
    ),
    LabelKind.GREAT_GRANDPARENT: (LabelKind.GREAT_GRANDMOTHER, LabelKind.GREAT_GRANDFATHER),
    LabelKind.GRANDCHILD: (LabelKind.GRANDDAUGHTER, LabelKind.GRANDSON),
    LabelKind.GREAT_GRANDCHILD: (LabelKind.GREAT_GRANDDAUGHTER, LabelKind.GREAT_GRANDSON),
    LabelKind.AUNT_UNCLE: (LabelKind.AUNT, LabelKind.UNCLE),
    LabelKind.MATERNAL_AUNT_UNCLE: (LabelKind.MATERNAL_AUNT, LabelKind.MATERNAL_UNCLE),
    LabelKind.PATERNAL_AUNT_UNCLE: (LabelKind.PATERNAL_AUNT, LabelKind.PATERNAL_UNCLE),
    LabelKind.GREAT_AUNT_UNCLE: (LabelKind.GREAT_AUNT, LabelKind.GREAT_UNCLE),
    LabelKind.HALF_AUNT_UNCLE: (LabelKind.HALF_AUNT, LabelKind.HALF_UNCLE),
    LabelKind.NIECE_NEPHEW: (LabelKind.NIECE, LabelKind.NEPHEW),
    LabelKind.STEP_PARENT: (LabelKind.STEPMOTHER, LabelKind.STEPFATHER),
    LabelKind.PARENT_IN_LAW: (LabelKind.MOTHER_IN_LAW, LabelKind.FATHER_IN_LAW),
    LabelKind.CHILD_IN_LAW: (LabelKind.DAUGHTER_IN_LAW, LabelKind.SON_IN_LAW),
    LabelKind.SIBLING_IN_LAW: (LabelKind.SISTER_IN_LAW, LabelKind.BROTHER_IN_LAW),
}

# Punjabi terms in English script, with "ji" for elders
PUNJABI_LABELS: dict[LabelKind, str] = {
    LabelKind.MOTHER: "Maa ji",
    LabelKind.FATHER: "Pita ji",
    LabelKind.SISTER: "Bhen",
    LabelKind.BROTHER: "Bhra",
    LabelKind.DAUGHTER: "Dhee",
    LabelKind.SON: "Putt",
    LabelKind.GRANDMOTHER: "Nani ji",
    LabelKind.GRANDFATHER: "Dada ji",
    LabelKind.MATERNAL_GRANDMOTHER: "Nani ji",
    LabelKind.MATERNAL_GRANDFATHER: "Nana ji",
    LabelKind.PATERNAL_GRANDMOTHER: "Dadi ji",
    LabelKind.PATERNAL_GRANDFATHER: "Dada ji",
    LabelKind.MATERNAL_AUNT: "Masi ji",
    LabelKind.PATERNAL_AUNT: "Bua ji",
    LabelKind.MATERNAL_UNCLE: "Mamaji",
    LabelKind.PATERNAL_UNCLE: "Chacha ji / Tayaji",
    LabelKind.PATERNAL_UNCLE_ELDER: "Tayaji",
    LabelKind.PATERNAL_UNCLE_YOUNGER: "Chacha ji",
    LabelKind.AUNT: "Masi ji / Bua ji",
    LabelKind.UNCLE: "Mamaji / Chacha ji",
    LabelKind.GREAT_AUNT: "Masi ji / Bua ji",
    LabelKind.GREAT_UNCLE: "Mamaji / Chacha ji",
    LabelKind.HALF_AUNT: "Masi ji / Bua ji",
    LabelKind.HALF_UNCLE: "Mamaji / Chacha ji",
    LabelKind.MATERNAL_AUNTS_SPOUSE: "Masar ji",
    LabelKind.MATERNAL_UNCLES_SPOUSE: "Mami ji",
    LabelKind.PATERNAL_AUNTS_SPOUSE: "Phupha ji",
    LabelKind.PATERNAL_UNCLES_SPOUSE: "Chachi ji",
}

# Locales whose terms depend on the relative's gender
LOCALE_LABELS: dict[Locale, dict[LabelKind, str]] = {
    Locale.EN: {},
    Locale.PUNJABI: PUNJABI_LABELS,
}
GENDER_REQUIRED_LOCALES = frozenset({Locale.PUNJABI})


def normalize_chain(chain: Sequence[RelationshipType]) -> tuple[RelationshipType, ...]:
    return tuple(R.AUNT_UNCLE if t in AUNT_UNCLE_TYPES else t for t in chain)


def chain_label(chain: Sequence[RelationshipType]) -> LabelKind:
    """Map a viewer-perspective chain to a label kind (EXTENDED_FAMILY if unmatched)."""
    if len(chain) == 1:
        return DIRECT_LABELS[chain[0]]
    return CHAIN_LABELS.get(normalize_chain(chain), LabelKind.EXTENDED_FAMILY)


def _side(gender: Gender | None) -> str | None:
    if gender == Gender.FEMALE:
        return "maternal"
    if gender == Gender.MALE:
        return "paternal"
    return None


def _side_of_type(rel_type: RelationshipType) -> str | None:
    if rel_type in (R.MATERNAL_AUNT, R.MATERNAL_UNCLE):
        return "maternal"
    if rel_type in (R.PATERNAL_AUNT, R.PATERNAL_UNCLE):
        return "paternal"
    return None


def _aunt_or_uncle_of_type(rel_type: RelationshipType) -> Gender | None:
    if rel_type in (R.MATERNAL_AUNT, R.PATERNAL_AUNT):
        return Gender.FEMALE
    if rel_type in (R.MATERNAL_UNCLE, R.PATERNAL_UNCLE):
        return Gender.MALE
    return None


_SIDED_AUNT_UNCLE = {
    ("maternal", None): LabelKind.MATERNAL_AUNT_UNCLE,
    ("maternal", Gender.FEMALE): LabelKind.MATERNAL_AUNT,
    ("maternal", Gender.MALE): LabelKind.MATERNAL_UNCLE,
    ("paternal", None): LabelKind.PATERNAL_AUNT_UNCLE,
    ("paternal", Gender.FEMALE): LabelKind.PATERNAL_AUNT,
    ("paternal", Gender.MALE): LabelKind.PATERNAL_UNCLE,
}

_SIDED_AUNT_UNCLE_SPOUSE = {
    ("maternal", Gender.FEMALE): LabelKind.MATERNAL_AUNTS_SPOUSE,
    ("maternal", Gender.MALE): LabelKind.MATERNAL_UNCLES_SPOUSE,
    ("paternal", Gender.FEMALE): LabelKind.PATERNAL_AUNTS_SPOUSE,
    ("paternal", Gender.MALE): LabelKind.PATERNAL_UNCLES_SPOUSE,
}


def compare_birth_order(person: Person | None, sibling: Person | None) -> BirthOrder:
    """Return whether `person` is the elder or younger of the two, or UNKNOWN."""
    if person is None or sibling is None:
        return BirthOrder.UNKNOWN
    mine = parse_iso_date(person.birth_date)
    theirs = parse_iso_date(sibling.birth_date)
    if mine is None or theirs is None or mine == theirs:
        return BirthOrder.UNKNOWN
    return BirthOrder.ELDER if mine < theirs else BirthOrder.YOUNGER


def disambiguate(
    label: LabelKind,
    chain: Sequence[RelationshipType],
    path: Sequence[str],
    people: Mapping[str, Person],
    source_father: Person | None = None,
    target_gender: Gender | None = None,
) -> tuple[LabelKind, BirthOrder | None]:
    """
    Resolve maternal/paternal side, aunt vs uncle and elder/younger.

    Only the people along `path` are consulted: the middle person decides the
    side (a mother's relatives are maternal) and the endpoint decides aunt vs
    uncle. Paternal uncles are further ordered against the father by birth
    date; when either date is unknown the plain label is kept and the order
    is reported as UNKNOWN instead of guessed.

    Args:
        label: Label from `chain_label`
        chain: Viewer-perspective types along the path
        path: Person ids from viewer to relative
        people: Person lookup by id
        source_father: The viewer's father, used for direct paternal uncle edges
        target_gender: Fallback gender for the relative at the end of the path

    Returns:
        (resolved label, birth order for paternal uncles else None)
    """

    def gender_at(index: int) -> Gender | None:
        person = people.get(path[index])
        if person is not None and person.gender is not None:
            return person.gender
        return target_gender if index in (-1, len(path) - 1) else None

    if label == LabelKind.GRANDPARENT and len(chain) == 2:
        side = _side(gender_at(1))
        if side == "maternal":
            return LabelKind.MATERNAL_GRANDPARENT, None
        if side == "paternal":
            return LabelKind.PATERNAL_GRANDPARENT, None
        return label, None

    if label == LabelKind.AUNT_UNCLE and len(chain) == 2:
        side = _side(gender_at(1))
        if side is None:
            return label, None
        label = _SIDED_AUNT_UNCLE[(side, gender_at(2))]
        parent = people.get(path[1])
    elif len(chain) == 1 and chain[0] == R.PATERNAL_UNCLE:
        parent = source_father
    else:
        parent = None

    if label == LabelKind.PATERNAL_UNCLE:
        order = compare_birth_order(people.get(path[-1]), parent)
        if order == BirthOrder.ELDER:
            return LabelKind.PATERNAL_UNCLE_ELDER, order
        if order == BirthOrder.YOUNGER:
            return LabelKind.PATERNAL_UNCLE_YOUNGER, order
        return label, order

    if label == LabelKind.AUNT_UNCLES_SPOUSE:
        if chain[0] in AUNT_UNCLE_TYPES:
            # Direct aunt/uncle edge followed by the spouse edge
            side = _side_of_type(chain[0])
            aunt_or_uncle = _aunt_or_uncle_of_type(chain[0]) or gender_at(1)
        else:
            side = _side(gender_at(1))
            aunt_or_uncle = gender_at(2)
        return _SIDED_AUNT_UNCLE_SPOUSE.get((side, aunt_or_uncle), label), None

    return label, None


def apply_gender(label: LabelKind, gender: Gender | None) -> LabelKind:
    """Swap an ungendered label for its female or male form when gender is known."""
    if gender is None or label not in GENDERED_LABELS:
        return label
    female, male = GENDERED_LABELS[label]
    return female if gender == Gender.FEMALE else male


def localize(
    label: LabelKind,
    gender: Gender | None,
    locale: Locale | str = Locale.EN,
    english: str | None = None,
) -> str:
    """
    Return the display string for a label in the requested locale.

    Locales in GENDER_REQUIRED_LOCALES never guess: with unknown gender the
    English label (`english`, defaulting to the label's own wording) is
    returned unchanged.
    """
    if english is None:
        english = label.value
    try:
        locale = Locale(locale)
    except ValueError:
        logger.debug("Unknown locale %r, using English labels", locale)
        return english

    if locale in GENDER_REQUIRED_LOCALES and gender is None:
        return english
    return LOCALE_LABELS[locale].get(label, english)


def format_label(label: LabelKind, chain_length: int) -> str:
    """English wording of a label, expanding the extended-family degree."""
    if label == LabelKind.EXTENDED_FAMILY:
        return f"{label.value} ({chain_length}°)"
    return label.value


SIDE_PREFIXES = ("Maternal ", "Paternal ")


def short_label(text: str) -> str:
    """Drop a leading "Maternal "/"Paternal " for compact display; other text is returned as is."""
    for prefix in SIDE_PREFIXES:
        if text.startswith(prefix):
            return text[len(prefix):]
    return text
