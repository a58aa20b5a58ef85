"""Per-generation statistics over a laid-out family tree."""

from collections.abc import Iterable

from models import GenerationAnalytics, GenerationFact, TreeLayoutNode
from parsing import parse_iso_date


def generation_analytics(nodes: Iterable[TreeLayoutNode]) -> GenerationAnalytics:
    """
    Group nodes by row (y coordinate) and report member counts plus the oldest
    and youngest member of each row.

    Rows are numbered from 1, top row first. Members without a parseable birth
    date are counted but never picked as oldest or youngest.
    """
    by_row: dict[float, list] = {}
    for node in nodes:
        by_row.setdefault(node.y, []).append(node.person)

    generations = []
    for index, y in enumerate(sorted(by_row), start=1):
        members = by_row[y]
        dated = [(parse_iso_date(p.birth_date), p) for p in members]
        # Stable sort keeps input order between members born the same day
        dated = sorted(((d, p) for d, p in dated if d is not None), key=lambda entry: entry[0])
        generations.append(
            GenerationFact(
                index=index,
                member_count=len(members),
                oldest=dated[0][1] if dated else None,
                youngest=dated[-1][1] if dated else None,
            )
        )

    return GenerationAnalytics(total_generations=len(generations), generations=tuple(generations))
