"""Shared fixtures for family graph tests."""

import pytest

from models import Gender, Person, RelationshipEdge, RelationshipType


def _person(pid, first, last, gender, birth_date=None):
    return Person(id=pid, first_name=first, last_name=last, gender=gender, birth_date=birth_date)


@pytest.fixture
def pedigree() -> tuple[list[Person], list[RelationshipEdge]]:
    """
    Two paternal grandparents -> dad; two maternal grandparents -> mom and her
    sister (aunt); dad and mom married with one child (ego). The aunt is
    married to an in-law and has a daughter (cousin).
    """
    people = [
        _person("pgf", "Paternal", "Grandpa", Gender.MALE, "1930-02-01"),
        _person("pgm", "Paternal", "Grandma", Gender.FEMALE, "1932-04-11"),
        _person("mgf", "Maternal", "Grandpa", Gender.MALE, "1935-06-21"),
        _person("mgm", "Maternal", "Grandma", Gender.FEMALE, "1936-08-30"),
        _person("dad", "Dad", "Smith", Gender.MALE, "1960-05-01"),
        _person("mom", "Mom", "Smith", Gender.FEMALE, "1962-03-03"),
        _person("aunt", "Aunt", "Jones", Gender.FEMALE, "1965-07-07"),
        _person("jh", "AuntSpouse", "Jones", Gender.MALE),
        _person("ego", "Child", "Smith", Gender.MALE, "1990-01-01"),
        _person("cousin", "Cousin", "Jones", Gender.FEMALE, "not a date"),
    ]
    P = RelationshipType.PARENT
    edges = [
        RelationshipEdge("r1", "pgf", "dad", P),
        RelationshipEdge("r2", "pgm", "dad", P),
        RelationshipEdge("r3", "mgf", "mom", P),
        RelationshipEdge("r4", "mgm", "mom", P),
        RelationshipEdge("r5", "mgf", "aunt", P),
        RelationshipEdge("r6", "mgm", "aunt", P),
        RelationshipEdge("r7", "dad", "mom", RelationshipType.SPOUSE),
        RelationshipEdge("r8", "mom", "ego", P),
        RelationshipEdge("r9", "dad", "ego", P),
        RelationshipEdge("r10", "mom", "aunt", RelationshipType.SIBLING),
        RelationshipEdge("r11", "aunt", "jh", RelationshipType.SPOUSE),
        RelationshipEdge("r12", "aunt", "cousin", P),
        RelationshipEdge("r13", "jh", "cousin", P),
    ]
    return people, edges


GEDCOM_TEXT = """\
0 HEAD
1 SOUR TEST
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME John /Smith/
1 SEX M
1 BIRT
2 DATE 25 NOV 1954
1 FAMS @F1@
0 @I2@ INDI
1 NAME Mary /Jones/
1 SEX F
1 FAMS @F1@
0 @I3@ INDI
1 NAME Ann /Smith/
1 SEX F
1 BIRT
2 DATE ABT 1980
1 FAMC @F1@
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 CHIL @I3@
0 TRLR
"""


@pytest.fixture
def gedcom_file(tmp_path):
    """A married couple and their daughter as a GEDCOM file."""
    path = tmp_path / "family.ged"
    path.write_text(GEDCOM_TEXT, encoding="utf-8")
    return path
