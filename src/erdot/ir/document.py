"""Document model: the parsed form of one ER markup input."""

from enum import Enum
from types import MappingProxyType
from typing import Annotated, Dict, Mapping, Optional, Tuple
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer


def frozen_options(value: Mapping[str, str]) -> Mapping[str, str]:
    """Read-only view over a private copy of ``value``."""
    return MappingProxyType(dict(value))


def _no_options() -> Mapping[str, str]:
    return frozen_options({})


def _options_as_dict(value: Mapping[str, str]) -> Dict[str, str]:
    return dict(value)


# Option mappings are read-only once a model holds them; they still dump as
# plain JSON objects.
OptionSet = Annotated[
    Mapping[str, str],
    AfterValidator(frozen_options),
    PlainSerializer(_options_as_dict, return_type=Dict[str, str]),
]


class SourcePosition(BaseModel):
    """1-based line/column of a construct in the markup."""

    model_config = ConfigDict(frozen=True)

    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class Cardinality(str, Enum):
    """How many instances take part on one side of a relationship."""

    ZERO_OR_ONE = "?"
    EXACTLY_ONE = "1"
    ZERO_OR_MANY = "*"
    ONE_OR_MANY = "+"

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["Cardinality"]:
        """Return the cardinality written as ``symbol``, or None if it is not one."""
        for card in cls:
            if card.value == symbol:
                return card
        return None

    @property
    def notation(self) -> str:
        return _NOTATION[self]


_NOTATION = {
    Cardinality.ZERO_OR_ONE: "{0,1}",
    Cardinality.EXACTLY_ONE: "1",
    Cardinality.ZERO_OR_MANY: "0..N",
    Cardinality.ONE_OR_MANY: "1..N",
}


class Attribute(BaseModel):
    """A field of an entity; one row of the rendered table."""

    model_config = ConfigDict(frozen=True)

    name: str
    type_label: Optional[str] = None
    is_key: bool = False
    is_foreign_key: bool = False
    options: OptionSet = Field(default_factory=_no_options)
    position: SourcePosition = Field(default_factory=SourcePosition)


class Entity(BaseModel):
    """A named table-like structure with ordered attributes."""

    model_config = ConfigDict(frozen=True)

    name: str
    attributes: Tuple[Attribute, ...] = ()
    options: OptionSet = Field(default_factory=_no_options)
    position: SourcePosition = Field(default_factory=SourcePosition)

    def attribute_names(self) -> Tuple[str, ...]:
        return tuple(a.name for a in self.attributes)


class Relationship(BaseModel):
    """A connection between two entities with a cardinality on each side."""

    model_config = ConfigDict(frozen=True)

    left: str
    right: str
    left_cardinality: Cardinality
    right_cardinality: Cardinality
    options: OptionSet = Field(default_factory=_no_options)
    position: SourcePosition = Field(default_factory=SourcePosition)


class GlobalOptions(BaseModel):
    """Options declared by the ``title``/``header``/``entity``/``relationship`` directives."""

    model_config = ConfigDict(frozen=True)

    title: OptionSet = Field(default_factory=_no_options)
    header: OptionSet = Field(default_factory=_no_options)
    entity: OptionSet = Field(default_factory=_no_options)
    relationship: OptionSet = Field(default_factory=_no_options)

    def merged_with(self, other: Optional["GlobalOptions"]) -> "GlobalOptions":
        """
        Overlay ``other`` on top of these options.

        Keys present in ``other`` win; everything else is kept.

        Args:
            other: Options with higher precedence (may be None)

        Returns:
            New GlobalOptions instance
        """
        if other is None:
            return self
        return GlobalOptions(
            title={**self.title, **other.title},
            header={**self.header, **other.header},
            entity={**self.entity, **other.entity},
            relationship={**self.relationship, **other.relationship},
        )


class Document(BaseModel):
    """Complete parsed markup document."""

    model_config = ConfigDict(frozen=True)

    global_options: GlobalOptions = Field(default_factory=GlobalOptions)
    entities: Tuple[Entity, ...] = ()
    relationships: Tuple[Relationship, ...] = ()

    def entity_names(self) -> Tuple[str, ...]:
        return tuple(e.name for e in self.entities)

    def entity(self, name: str) -> Optional[Entity]:
        """Look up a declared entity by name (case-sensitive)."""
        for e in self.entities:
            if e.name == name:
                return e
        return None
