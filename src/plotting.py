"""Rendering of computed pedigree layouts (matplotlib drawing and Graphviz DOT export)."""

from collections.abc import Mapping
import logging
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.patches import FancyBboxPatch
import pydot

from labels import short_label
from layout import DEFAULT_CONFIG, connection_segments, sibship_segments
from models import (
    Gender,
    GeneticMatchResult,
    Person,
    RelationshipType,
    Sibship,
    TreeLayout,
)

logger = logging.getLogger(__name__)

NODE_WIDTH = 150
LINE_COLOR = "#5f4932"


def match_color(percentage: float) -> str:
    """Match-ring color for a relationship percentage."""
    if percentage >= 50:
        return "#d4a574"
    if percentage >= 25:
        return "#c49a6c"
    if percentage >= 12.5:
        return "#a0845c"
    if percentage > 0:
        return "#7a6a50"
    return "#3a3a3a"


def gender_color(person: Person) -> str:
    if person.gender == Gender.MALE:
        return "lightblue"
    if person.gender == Gender.FEMALE:
        return "lightpink"
    return "lightgray"


def node_label(person: Person, result: GeneticMatchResult | None = None) -> str:
    """Box text: name, optional display name, birth year and match."""
    lines = [person.first_name, person.last_name]
    if person.display_name:
        lines.append(f'"{person.display_name}"')
    lines.append(f"b. {person.birth_date[:4]}" if person.birth_date else "Year unknown")
    if result is not None and result.path:
        lines.append(f"{short_label(result.relationship)} {result.percentage}%")
    return "\n".join(line for line in lines if line)


def _fill(person: Person, matches: Mapping[str, GeneticMatchResult]) -> str:
    if person.id in matches:
        return match_color(matches[person.id].percentage)
    return gender_color(person)


def family_point(tree: TreeLayout, sibship: Sibship) -> tuple[float, float] | None:
    """Junction below the parents where the shared drop bar starts."""
    parents = [n for n in (tree.node(pid) for pid in sibship.parents) if n is not None]
    children = [n for n in (tree.node(cid) for cid in sibship.children) if n is not None]
    if not parents or not children:
        return None
    xs = [p.x for p in parents]
    return ((min(xs) + max(xs)) / 2, (max(p.y for p in parents) + min(c.y for c in children)) / 2)


# ============================================================================
# matplotlib
# ============================================================================


def draw_chart(
    tree: TreeLayout,
    output_path: Path | None = None,
    matches: Mapping[str, GeneticMatchResult] | None = None,
    title: str | None = None,
):
    """
    Draw the pedigree chart using only orthogonal connector segments.

    Spouse lines are drawn dashed; parent/child links are drawn once per
    sibship as a shared bar. Nodes are colored by match percentage when
    `matches` is given, otherwise by gender.

    Args:
        tree: Output of `layout.layout`
        output_path: Path to save the image (PNG/SVG/PDF). If None, returns the figure.
        matches: Optional match results keyed by person id
        title: Optional chart title
    """
    matches = matches or {}
    fig, ax = plt.subplots(figsize=(max(tree.width / 100, 8), max(tree.height / 100, 6)))
    half_h = DEFAULT_CONFIG.node_height / 2

    for connection in tree.connections:
        if connection.type != RelationshipType.SPOUSE:
            continue
        for s in connection_segments(tree, connection):
            ax.plot([s.x1, s.x2], [s.y1, s.y2], color=LINE_COLOR, linestyle="--", linewidth=1.2)

    for sibship in tree.sibships:
        for s in sibship_segments(tree, sibship):
            ax.plot([s.x1, s.x2], [s.y1, s.y2], color=LINE_COLOR, linewidth=1.5)

    for node in tree.nodes:
        ax.add_patch(
            FancyBboxPatch(
                (node.x - NODE_WIDTH / 2, node.y - half_h),
                NODE_WIDTH,
                2 * half_h,
                boxstyle="round,pad=2,rounding_size=10",
                facecolor=_fill(node.person, matches),
                edgecolor=LINE_COLOR,
            )
        )
        result = matches.get(node.person.id)
        ax.text(node.x, node.y, node_label(node.person, result), ha="center", va="center", fontsize=7)

    ax.set_xlim(0, tree.width)
    ax.set_ylim(tree.height, 0)  # ancestors at top
    ax.set_aspect("equal")
    ax.axis("off")
    if title:
        ax.set_title(title)
    fig.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
        plt.close(fig)
        logger.info("Chart saved to %s", output_path)
        return None
    return fig


# ============================================================================
# Graphviz
# ============================================================================


def build_dot(
    tree: TreeLayout, matches: Mapping[str, GeneticMatchResult] | None = None
) -> pydot.Dot:
    """
    Build a Graphviz graph with node positions pinned to the computed layout.

    Each sibship gets a small family point node: parents connect to it and it
    connects to every child, with orthogonal splines. Render with `neato -n`
    so the pinned positions are kept.
    """
    matches = matches or {}
    P = pydot.Dot(graph_type="digraph")
    P.set("splines", "ortho")

    # Graphviz y grows upward
    def pos(x: float, y: float) -> str:
        return f"{x:.1f},{tree.height - y:.1f}!"

    for node in tree.nodes:
        P.add_node(
            pydot.Node(
                str(node.person.id),
                label=node_label(node.person, matches.get(node.person.id)),
                shape="box",
                style="rounded,filled",
                fillcolor=_fill(node.person, matches),
                fontsize="10",
                pos=pos(node.x, node.y),
            )
        )

    for i, sibship in enumerate(tree.sibships):
        point = family_point(tree, sibship)
        if point is None:
            continue
        fam_id = f"FAM_{i}"
        P.add_node(pydot.Node(fam_id, shape="point", width="0.1", height="0.1", label="", pos=pos(*point)))
        for parent_id in sibship.parents:
            P.add_edge(pydot.Edge(str(parent_id), fam_id, dir="none", color="darkgray"))
        for child_id in sibship.children:
            P.add_edge(pydot.Edge(fam_id, str(child_id), color="darkgray"))

    for connection in tree.connections:
        if connection.type == RelationshipType.SPOUSE:
            P.add_edge(
                pydot.Edge(
                    str(connection.from_id),
                    str(connection.to_id),
                    dir="none",
                    style="dashed",
                    color="darkgray",
                )
            )

    return P


def write_dot(
    tree: TreeLayout,
    output_path: Path,
    matches: Mapping[str, GeneticMatchResult] | None = None,
) -> None:
    """Write the chart as DOT source (.dot/.gv) or render it with Graphviz (png/svg/pdf)."""
    P = build_dot(tree, matches)
    ext = output_path.suffix.lower().lstrip(".")
    if ext in ("dot", "gv"):
        P.write(str(output_path), format="raw")
    else:
        if ext not in ("png", "svg", "pdf"):
            ext = "png"
        P.write(str(output_path), prog=["neato", "-n"], format=ext)
    logger.info("Graph saved to %s", output_path)
