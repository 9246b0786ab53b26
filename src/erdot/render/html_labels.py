"""HTML-like table labels for entity nodes."""

import html
from typing import List, Mapping
from erdot.options.resolver import ResolvedAttribute, ResolvedEntity

EMPHASIS_TAGS = {"underline": "U", "bold": "B", "italic": "I"}


def html_text(text: str) -> str:
    """Escape text for use inside an HTML-like label."""
    return html.escape(text, quote=True)


def _attrs(pairs: Mapping[str, str]) -> str:
    """Render HTML attributes in the given order, skipping empty values."""
    return "".join(
        f' {name}="{html_text(value)}"' for name, value in pairs.items() if value
    )


def _font(text: str, face: str, size: str, color: str) -> str:
    return f"<FONT{_attrs({'FACE': face, 'POINT-SIZE': size, 'COLOR': color})}>{text}</FONT>"


def _wrap(text: str, style: str) -> str:
    tag = EMPHASIS_TAGS[style]
    return f"<{tag}>{text}</{tag}>"


def header_row(resolved: ResolvedEntity) -> str:
    header = resolved.header
    name = _font(
        f"<B>{html_text(resolved.entity.name)}</B>",
        header["font"],
        header["size"],
        header["color"],
    )
    return f"<TR><TD{_attrs({'BGCOLOR': header['bgcolor']})}>{name}</TD></TR>"


def attribute_row(resolved: ResolvedAttribute, entity_options: Mapping[str, str]) -> str:
    """
    One table row for an attribute.

    Key attributes are wrapped in the entity's ``keystyle`` tag and foreign keys
    in its ``fkstyle`` tag; a type label (or ``label`` option) follows the name
    in brackets.
    """
    attr = resolved.attribute
    options = resolved.options

    text = html_text(attr.name)
    if attr.is_key:
        text = _wrap(text, entity_options["keystyle"])
    if attr.is_foreign_key:
        text = _wrap(text, entity_options["fkstyle"])

    type_label = attr.type_label or options["label"]
    if type_label:
        text = f"{text} [{html_text(type_label)}]"

    cell = _font(text, options["font"], options["size"], options["color"])
    return f"<TR><TD{_attrs({'ALIGN': 'LEFT', 'BGCOLOR': options['bgcolor']})}>{cell}</TD></TR>"


def entity_label(resolved: ResolvedEntity) -> str:
    """
    Build the HTML-like label for an entity node.

    Returns:
        Label string wrapped in ``<...>`` so DOT treats it as HTML
    """
    options = resolved.options
    table_attrs = {
        "BORDER": options["border"],
        "CELLBORDER": options["cellborder"],
        "CELLSPACING": options["cellspacing"],
        "CELLPADDING": options["cellpadding"],
        "BGCOLOR": options["bgcolor"],
    }
    rows: List[str] = [header_row(resolved)]
    rows.extend(attribute_row(a, options) for a in resolved.attributes)
    return f"<<TABLE{_attrs(table_attrs)}>{''.join(rows)}</TABLE>>"
