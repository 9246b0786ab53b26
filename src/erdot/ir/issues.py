"""Non-fatal issues collected alongside a successful translation."""

from dataclasses import dataclass, field
from typing import Optional
from .document import SourcePosition


@dataclass(frozen=True)
class TranslationWarning:
    """Warning recorded during translation; never aborts it."""

    code: str  # e.g., "UNKNOWN_OPTION", "UNRESOLVED_REFERENCE"
    location: str  # e.g., "entity Person" or "attribute Person.id"
    message: str
    position: Optional[SourcePosition] = field(default=None, compare=False)

    def __str__(self) -> str:
        if self.position is not None:
            return f"{self.position}: {self.message}"
        return self.message


@dataclass(frozen=True)
class OptionWarning(TranslationWarning):
    key: str = ""
    scope: str = ""


@dataclass(frozen=True)
class UnknownOptionWarning(OptionWarning):
    """An option key that its scope does not recognise; it is not applied."""


@dataclass(frozen=True)
class InvalidOptionValueWarning(OptionWarning):
    """A recognised key with a value outside its allowed choices; it is not applied."""

    value: str = ""


@dataclass(frozen=True)
class UnresolvedReferenceWarning(TranslationWarning):
    """A relationship endpoint naming no entity, tolerated by policy."""

    name: str = ""
