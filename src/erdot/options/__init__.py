"""Option scopes, defaults and resolution."""

from .scopes import OPTION_SPECS, OptionScope, OptionSpec
from .resolver import ResolvedDocument, resolve_document, resolve_scope
from .overrides import parse_override_args

__all__ = [
    "OPTION_SPECS",
    "OptionScope",
    "OptionSpec",
    "ResolvedDocument",
    "resolve_document",
    "resolve_scope",
    "parse_override_args",
]
