"""GEDCOM and JSON snapshot loading, plus birth date handling."""

from datetime import date
import json
import logging
from pathlib import Path
import re
from typing import Any

from ged4py import GedcomReader

from models import Gender, Person, RelationshipEdge, RelationshipType

logger = logging.getLogger(__name__)


MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "MAR": 3,
    "MARCH": 3,
    "APR": 4,
    "APRIL": 4,
    "MAY": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUL": 7,
    "JULY": 7,
    "AUG": 8,
    "AUGUST": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "DEC": 12,
    "DECEMBER": 12,
}

QUALIFIER_RE = re.compile(
    r"^(ABOUT|ABT\.?|BEFORE|BEF\.?|AFTER|AFT\.?|ESTIMATED|EST\.?|CALCULATED|CAL\.?|CIRCA|CA\.?|AROUND):?\s*",
    flags=re.IGNORECASE,
)

# (regex, order of the captured groups); "M" is a month name, "m" a month number
DATE_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ].*)?$"), "ymd"),  # 1839-08-29
    (re.compile(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$"), "dMy"),  # 25 NOV 1954
    (re.compile(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$"), "Mdy"),  # April 17, 1850
    (re.compile(r"^([A-Za-z]+)\.?,?\s*(\d{4})$"), "My"),  # NOV 1954
    (re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$"), "mdy"),  # 01/27/1920
    (re.compile(r"^(\d{4})$"), "y"),  # 1698
]


def parse_date_string(date_str: str | None) -> str | None:
    """
    Normalize a free-form birth date into ISO format (YYYY-MM-DD).
    Returns None if the date cannot be parsed; a missing day or month becomes 01.

    Handles formats like "25 NOV 1954", "ABT 1905", "JAN 1905", "(01-27-1920)",
    "April 17, 1850", "1839-08-29" and "1746-00-00".
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?")
    s = QUALIFIER_RE.sub("", s).strip()
    if not s:
        return None

    for pattern, order in DATE_PATTERNS:
        match = pattern.match(s)
        if not match:
            continue
        parts = dict(zip(order, match.groups()))
        year = int(parts["y"])
        if "M" in parts:
            month = MONTH_MAP.get(parts["M"].upper().rstrip("."))
        else:
            month = int(parts.get("m", 1))
        day = int(parts.get("d", 1))
        # 00 month/day means "unknown"
        month = month or (1 if "m" in parts else None)
        day = day or 1
        if month is None:
            continue
        try:
            return date(year, month, day).isoformat()
        except ValueError:
            return None

    return None


def parse_iso_date(value: str | None) -> date | None:
    """Parse an ISO date (or datetime) string; None when missing or unparseable."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def parse_gender(value: str | None) -> Gender | None:
    if not value:
        return None
    value = value.strip().lower()
    if value in ("f", "female"):
        return Gender.FEMALE
    if value in ("m", "male"):
        return Gender.MALE
    return None


# ============================================================================
# GEDCOM
# ============================================================================


def xref_to_id(xref_id: str) -> str:
    """Turn a GEDCOM xref like '@I_347421849@' into a stable person id."""
    person_id = xref_id.strip("@")
    if not person_id:
        raise ValueError(f"Empty GEDCOM xref: {xref_id!r}")
    return person_id


def extract_name_parts(indi) -> tuple[str, str]:
    """Extract given name and surname from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return ("Unknown", "")

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_rec.value, tuple):
        given, surname, _ = name_rec.value
        return (given or "Unknown", surname or "")

    givn = name_rec.sub_tag("GIVN")
    surn = name_rec.sub_tag("SURN")
    if givn or surn:
        return (givn.value if givn else "Unknown", surn.value if surn else "")

    # "Given /Surname/"
    given, _, rest = str(name_rec.value).partition("/")
    return (given.strip() or "Unknown", rest.replace("/", "").strip())


def extract_birth_date(indi) -> str | None:
    event = indi.sub_tag("BIRT")
    if event is None:
        return None
    date_rec = event.sub_tag("DATE")
    # ged4py may return DateValue objects
    if date_rec is None or not date_rec.value:
        return None
    return parse_date_string(str(date_rec.value))


def load_gedcom(filepath: Path) -> tuple[list[Person], list[RelationshipEdge]]:
    """
    Read people and relationship edges from a GEDCOM file.

    FAM records become a spouse edge (husband -> wife) and parent edges
    (each parent -> each child). Non-standard tags are ignored.
    """
    people: list[Person] = []
    edges: list[RelationshipEdge] = []

    with GedcomReader(str(filepath)) as reader:
        for rec in reader.records0("INDI"):
            if rec.xref_id is None:
                continue
            given, surname = extract_name_parts(rec)
            sex = rec.sub_tag("SEX")
            people.append(
                Person(
                    id=xref_to_id(rec.xref_id),
                    first_name=given,
                    last_name=surname,
                    gender=parse_gender(sex.value if sex else None),
                    birth_date=extract_birth_date(rec),
                )
            )

        for rec in reader.records0("FAM"):
            if rec.xref_id is None:
                continue
            fam_id = xref_to_id(rec.xref_id)
            husb = rec.sub_tag("HUSB")
            wife = rec.sub_tag("WIFE")
            parents = [xref_to_id(p.xref_id) for p in (husb, wife) if p and p.xref_id]
            children = [xref_to_id(c.xref_id) for c in rec.sub_tags("CHIL") if c.xref_id]

            if len(parents) == 2:
                edges.append(
                    RelationshipEdge(f"{fam_id}-spouse", parents[0], parents[1], RelationshipType.SPOUSE)
                )
            for child_id in children:
                for parent_id in parents:
                    edges.append(
                        RelationshipEdge(
                            f"{fam_id}-{parent_id}-{child_id}",
                            parent_id,
                            child_id,
                            RelationshipType.PARENT,
                        )
                    )

    logger.info("Loaded %d people and %d relationships from %s", len(people), len(edges), filepath)
    return people, edges


# ============================================================================
# JSON snapshot
# ============================================================================


def snapshot_from_dict(data: dict[str, Any]) -> tuple[list[Person], list[RelationshipEdge]]:
    """
    Build people and edges from a snapshot mapping:

        {"people": [{"id", "first_name", "last_name", "gender", "birth_date",
                     "display_name"}, ...],
         "relationships": [{"id", "source_id", "target_id", "type"}, ...]}
    """
    people = [
        Person(
            id=str(p["id"]),
            first_name=p.get("first_name") or "",
            last_name=p.get("last_name") or "",
            gender=parse_gender(p.get("gender")),
            birth_date=p.get("birth_date"),
            display_name=p.get("display_name"),
        )
        for p in data.get("people", [])
    ]
    edges = [
        RelationshipEdge(
            id=str(r.get("id", i)),
            source_id=str(r["source_id"]),
            target_id=str(r["target_id"]),
            type=RelationshipType(r["type"]),
        )
        for i, r in enumerate(data.get("relationships", []))
    ]
    return people, edges


def load_snapshot(filepath: Path) -> tuple[list[Person], list[RelationshipEdge]]:
    """Read a JSON snapshot file (see `snapshot_from_dict`)."""
    with open(filepath, encoding="utf-8") as f:
        data = json.load(f)
    people, edges = snapshot_from_dict(data)
    logger.info("Loaded %d people and %d relationships from %s", len(people), len(edges), filepath)
    return people, edges
