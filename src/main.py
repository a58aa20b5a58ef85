"""
1) Load a family snapshot (GEDCOM or JSON) into people and relationship edges.
2) Validate it for dangling edges, cycles, impossible ages and bad dates.
3) Optionally compute the genetic match between the root and a target.
4) Lay the family out as a pedigree chart rooted at a person.
5) Report per-generation analytics.
6) Optionally render the chart (matplotlib image and/or Graphviz).
"""

import argparse
import logging
from pathlib import Path

from analytics import generation_analytics
from kinship import match
from labels import Locale
from layout import layout
from parsing import load_gedcom, load_snapshot
from plotting import draw_chart, write_dot
from validation import validate_snapshot


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Family relationship graph engine")
    parser.add_argument("input", type=Path, help="GEDCOM (.ged) or JSON snapshot file")
    parser.add_argument("--root", required=True, help="Person id at the center of the chart")
    parser.add_argument("--target", help="Person id to compute a genetic match against")
    parser.add_argument(
        "--locale",
        default=Locale.EN.value,
        choices=[loc.value for loc in Locale],
        help="Relationship label locale",
    )
    parser.add_argument("--output", type=Path, help="Chart image path (png/svg/pdf)")
    parser.add_argument("--dot", type=Path, help="Graphviz output path (.dot or png/svg/pdf)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print(f"Loading family snapshot: {args.input}")
    if args.input.suffix.lower() == ".ged":
        people, edges = load_gedcom(args.input)
    else:
        people, edges = load_snapshot(args.input)
    print(f"  Found {len(people)} people and {len(edges)} relationships")

    print("Validating snapshot...")
    warnings = validate_snapshot(people, edges)
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:10]:  # Show first 10 warnings
            print(f"    - {w}")
        if len(warnings) > 10:
            print(f"    ... and {len(warnings) - 10} more")
    else:
        print("  No validation issues found")

    if args.target:
        result = match(args.root, args.target, edges, locale=args.locale, people=people)
        print(f"Match {args.root} -> {args.target}: {result.relationship} ({result.percentage}%)")
        if result.path:
            print(f"  Path: {' -> '.join(result.path)}")

    print(f"Laying out tree rooted at {args.root}...")
    tree = layout(people, edges, args.root)
    print(f"  {len(tree.nodes)} nodes, {len(tree.sibships)} sibships, canvas {tree.width:.0f}x{tree.height:.0f}")

    stats = generation_analytics(tree.nodes)
    print(f"Generations: {stats.total_generations}")
    for fact in stats.generations:
        oldest = fact.oldest.full_name if fact.oldest else "-"
        youngest = fact.youngest.full_name if fact.youngest else "-"
        print(f"  {fact.index}: {fact.member_count} members, oldest {oldest}, youngest {youngest}")

    if args.output or args.dot:
        matches = {p.id: match(args.root, p.id, edges, people=people) for p in people}
        if args.output:
            print(f"Drawing chart to: {args.output}")
            draw_chart(tree, args.output, matches=matches)
        if args.dot:
            print(f"Writing Graphviz chart to: {args.dot}")
            write_dot(tree, args.dot, matches=matches)

    print("Done!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
