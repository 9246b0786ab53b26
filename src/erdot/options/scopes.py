"""Recognised option keys per scope, with their defaults."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple


class OptionScope(str, Enum):
    TITLE = "title"
    HEADER = "header"
    ENTITY = "entity"
    ATTRIBUTE = "attribute"
    RELATIONSHIP = "relationship"


@dataclass(frozen=True)
class OptionSpec:
    """A recognised option key, its default and (optionally) its allowed values."""

    key: str
    default: str
    choices: Optional[FrozenSet[str]] = None

    def accepts(self, value: str) -> bool:
        return self.choices is None or value in self.choices


EMPHASIS = frozenset({"underline", "bold", "italic"})
DIRECTIONS = frozenset({"TB", "LR", "BT", "RL"})
DEFAULT_FONT = "Helvetica"

OPTION_SPECS: Dict[OptionScope, Tuple[OptionSpec, ...]] = {
    OptionScope.TITLE: (
        OptionSpec("label", ""),
        OptionSpec("size", "30"),
        OptionSpec("font", DEFAULT_FONT),
        OptionSpec("color", "#000000"),
        OptionSpec("direction", "TB", DIRECTIONS),
    ),
    OptionScope.HEADER: (
        OptionSpec("size", "16"),
        OptionSpec("font", DEFAULT_FONT),
        OptionSpec("color", "#000000"),
        OptionSpec("bgcolor", ""),
    ),
    OptionScope.ENTITY: (
        OptionSpec("bgcolor", "#d0e0d0"),
        OptionSpec("border", "0"),
        OptionSpec("cellborder", "1"),
        OptionSpec("cellpadding", "4"),
        OptionSpec("cellspacing", "0"),
        OptionSpec("size", "14"),
        OptionSpec("font", DEFAULT_FONT),
        OptionSpec("color", "#000000"),
        OptionSpec("keystyle", "underline", EMPHASIS),
        OptionSpec("fkstyle", "italic", EMPHASIS),
    ),
    # size/font/color default to the enclosing entity's resolved values
    OptionScope.ATTRIBUTE: (
        OptionSpec("label", ""),
        OptionSpec("size", "14"),
        OptionSpec("font", DEFAULT_FONT),
        OptionSpec("color", "#000000"),
        OptionSpec("bgcolor", ""),
    ),
    OptionScope.RELATIONSHIP: (
        OptionSpec("label", ""),
        OptionSpec("size", "14"),
        OptionSpec("font", DEFAULT_FONT),
        OptionSpec("color", "#000000"),
    ),
}

# Attribute keys whose effective default comes from the enclosing entity.
INHERITED_ATTRIBUTE_KEYS = ("size", "font", "color")


def spec_for(scope: OptionScope, key: str) -> Optional[OptionSpec]:
    """Return the spec of ``key`` in ``scope``, or None if the key is not recognised."""
    for spec in OPTION_SPECS[scope]:
        if spec.key == key:
            return spec
    return None


def recognised_keys(scope: OptionScope) -> Tuple[str, ...]:
    return tuple(spec.key for spec in OPTION_SPECS[scope])


def defaults(scope: OptionScope) -> Dict[str, str]:
    return {spec.key: spec.default for spec in OPTION_SPECS[scope]}
