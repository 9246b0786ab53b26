"""Tests for the markup parser."""

import pytest
from erdot.errors import ParseError
from erdot.ir.document import Cardinality
from erdot.markup.parser import parse

EXAMPLE = "[Person]\n*id\nname\n\n[Car]\n*id\nowner\n\nPerson 1--* Car"


def test_example_document():
    """Two entities with ordered attributes and one relationship."""
    doc = parse(EXAMPLE)
    assert doc.entity_names() == ("Person", "Car")

    person = doc.entity("Person")
    assert person.attribute_names() == ("id", "name")
    assert person.attributes[0].is_key
    assert not person.attributes[1].is_key

    assert len(doc.relationships) == 1
    rel = doc.relationships[0]
    assert (rel.left, rel.right) == ("Person", "Car")
    assert rel.left_cardinality == Cardinality.EXACTLY_ONE
    assert rel.right_cardinality == Cardinality.ZERO_OR_MANY


def test_attribute_markers_and_type():
    """'*' marks a key, '+' a foreign key, ': type' sets the type label."""
    doc = parse("[Car]\n*+owner_id: int\n+maker")
    owner, maker = doc.entity("Car").attributes
    assert owner.is_key and owner.is_foreign_key
    assert owner.type_label == "int"
    assert maker.is_foreign_key and not maker.is_key
    assert maker.type_label is None


def test_quoted_identifiers():
    """Entity, attribute and relationship names may be quoted."""
    doc = parse('["Order Line"]\n"unit price"\n\n[Order]\nOrder 1--+ "Order Line"')
    assert doc.entity_names() == ("Order Line", "Order")
    assert doc.entity("Order Line").attribute_names() == ("unit price",)
    assert doc.relationships[0].right == "Order Line"


def test_options_on_every_construct():
    """Option suffixes on entities, attributes and relationships."""
    text = (
        '[Person] {bgcolor: "#ececfc", size: "20"}\n'
        "name {label: varchar}\n"
        "[Car]\n"
        'Person 1--? Car {label: "drives"}\n'
    )
    doc = parse(text)
    assert doc.entity("Person").options == {"bgcolor": "#ececfc", "size": "20"}
    assert doc.entity("Person").attributes[0].options == {"label": "varchar"}
    assert doc.relationships[0].options == {"label": "drives"}


def test_options_trailing_comma_and_multiline():
    """A trailing comma is allowed and options may span lines."""
    doc = parse('[A] {\n  size: 12,\n  font: Courier,\n}\nid')
    entity = doc.entity("A")
    assert entity.options == {"size": "12", "font": "Courier"}
    assert entity.attribute_names() == ("id",)


def test_duplicate_option_key_last_wins():
    """Within one option list the later key wins."""
    doc = parse("[A] {size: 10, size: 12}")
    assert doc.entity("A").options == {"size": "12"}


def test_directives():
    """Directives before the first statement fill the global options."""
    text = (
        'title {label: "Schema", direction: LR}\n'
        'header {size: "18"}\n'
        "entity {bgcolor: white}\n"
        "relationship {color: blue}\n"
        "title {size: 40}\n"
        "\n"
        "[A]\n"
    )
    doc = parse(text)
    opts = doc.global_options
    assert opts.title == {"label": "Schema", "direction": "LR", "size": "40"}
    assert opts.header == {"size": "18"}
    assert opts.entity == {"bgcolor": "white"}
    assert opts.relationship == {"color": "blue"}


def test_empty_document():
    """Empty and comment-only inputs parse to an empty document."""
    assert parse("").entities == ()
    assert parse("# nothing here\n\n").relationships == ()


def test_attribute_before_entity():
    """An attribute line without an enclosing entity fails at that line."""
    with pytest.raises(ParseError) as exc_info:
        parse("\n\n*id\n[Person]")
    err = exc_info.value
    assert (err.position.line, err.position.column) == (3, 1)
    assert "attribute 'id'" in err.found


def test_duplicate_entity():
    """Redeclaring an entity is rejected at the duplicate."""
    with pytest.raises(ParseError) as exc_info:
        parse("[Person]\nid\n[Car]\n[Person]")
    err = exc_info.value
    assert err.position.line == 4
    assert "Person" in err.found


def test_entity_names_are_case_sensitive():
    """'person' and 'Person' are distinct entities."""
    doc = parse("[Person]\n[person]")
    assert doc.entity_names() == ("Person", "person")


@pytest.mark.parametrize("symbol", ["%", "0", "x", "12"])
def test_unsupported_left_cardinality(symbol):
    """Any cardinality outside ? 1 * + is a parse error naming it."""
    with pytest.raises(ParseError) as exc_info:
        parse(f"[A]\n[B]\nA {symbol}--* B")
    err = exc_info.value
    assert err.found == repr(symbol)
    assert (err.position.line, err.position.column) == (3, 3)
    assert "left cardinality" in err.expected


def test_unsupported_right_cardinality():
    """The right-hand cardinality is validated independently."""
    with pytest.raises(ParseError) as exc_info:
        parse("[A]\n[B]\nA 1--% B")
    assert exc_info.value.found == "'%'"
    assert "right cardinality" in exc_info.value.expected


def test_missing_colon_in_options():
    """Option keys must be followed by ':'."""
    with pytest.raises(ParseError) as exc_info:
        parse("[A] {size 12}")
    assert "':' after option key 'size'" in exc_info.value.expected


def test_trailing_tokens_on_line():
    """Anything after a complete statement on the same line is rejected."""
    with pytest.raises(ParseError) as exc_info:
        parse("[A] extra")
    assert exc_info.value.expected == "end of line"
