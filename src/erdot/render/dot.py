"""Render a resolved document as DOT source using graphviz."""

from typing import Dict, Mapping, NamedTuple
import graphviz
from erdot.config.logging import get_logger
from erdot.ir.document import Cardinality
from erdot.options.resolver import ResolvedDocument, ResolvedEntity, ResolvedRelationship
from .html_labels import entity_label

logger = get_logger(__name__)


class ArrowDecoration(NamedTuple):
    """How one end of a relationship edge is drawn."""

    shape: str  # DOT arrowType
    label: str  # head/tail label text


# Crow's foot notation: tee = one, odot = zero, crow = many.
CARDINALITY_ARROWS: Dict[Cardinality, ArrowDecoration] = {
    Cardinality.ZERO_OR_ONE: ArrowDecoration("teeodot", Cardinality.ZERO_OR_ONE.notation),
    Cardinality.EXACTLY_ONE: ArrowDecoration("teetee", Cardinality.EXACTLY_ONE.notation),
    Cardinality.ZERO_OR_MANY: ArrowDecoration("crowodot", Cardinality.ZERO_OR_MANY.notation),
    Cardinality.ONE_OR_MANY: ArrowDecoration("crowtee", Cardinality.ONE_OR_MANY.notation),
}


class EntityGraph(graphviz.Graph):
    """Undirected graph whose edge endpoints are always whole node names.

    graphviz reads ``a:b`` in an edge as node ``a`` port ``b``; entity names may
    contain ``:`` so endpoints are quoted exactly like node names.
    """

    # Private graphviz hook (present in 0.20 and 0.21, pinned in pyproject.toml);
    # test_colon_in_name_is_not_a_port fails if a release changes it.
    _quote_edge = staticmethod(graphviz.Graph._quote)


def node_id(name: str) -> str:
    """DOT identifier for an entity (backslashes escaped; quoting left to graphviz)."""
    return graphviz.escape(name)


def graph_attributes(title: Mapping[str, str]) -> Dict[str, str]:
    attrs = {
        "rankdir": title["direction"],
        "fontname": graphviz.escape(title["font"]),
        "fontsize": graphviz.escape(title["size"]),
        "fontcolor": graphviz.escape(title["color"]),
    }
    if title["label"]:
        attrs["label"] = graphviz.escape(title["label"])
        attrs["labelloc"] = "t"
    return attrs


def add_entity(graph: EntityGraph, resolved: ResolvedEntity) -> None:
    graph.node(node_id(resolved.entity.name), label=entity_label(resolved))


def add_relationship(graph: EntityGraph, resolved: ResolvedRelationship) -> None:
    """
    Add one undirected edge with both ends decorated by cardinality.

    The left cardinality decorates the tail (left entity), the right one the
    head (right entity); ``dir=both`` makes DOT draw both decorations.
    """
    rel = resolved.relationship
    options = resolved.options
    tail = CARDINALITY_ARROWS[rel.left_cardinality]
    head = CARDINALITY_ARROWS[rel.right_cardinality]

    attrs = {
        "dir": "both",
        "arrowtail": tail.shape,
        "arrowhead": head.shape,
        "taillabel": graphviz.escape(tail.label),
        "headlabel": graphviz.escape(head.label),
        "color": graphviz.escape(options["color"]),
        "fontcolor": graphviz.escape(options["color"]),
        "fontname": graphviz.escape(options["font"]),
        "fontsize": graphviz.escape(options["size"]),
    }
    label = graphviz.escape(options["label"]) if options["label"] else None
    graph.edge(node_id(rel.left), node_id(rel.right), label=label, **attrs)


def render_dot(resolved: ResolvedDocument) -> str:
    """
    Render a resolved document to DOT source.

    Graph-level attributes come first, then one node per entity and one edge
    per relationship, both in declaration order. Output is byte-identical for
    identical input.

    Args:
        resolved: Document with resolved options

    Returns:
        DOT source text
    """
    graph = EntityGraph(
        graph_attr=graph_attributes(resolved.title),
        node_attr={"shape": "plaintext"},
    )

    for entity in resolved.entities:
        add_entity(graph, entity)

    for rel in resolved.relationships:
        add_relationship(graph, rel)

    logger.debug(
        f"Rendered {len(resolved.entities)} nodes and "
        f"{len(resolved.relationships)} edges"
    )
    return graph.source
