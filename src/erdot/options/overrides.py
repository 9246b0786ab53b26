"""Global option overrides given as ``directive.key=value`` strings."""

from typing import Dict, Iterable
from erdot.config.settings import DIRECTIVES
from erdot.ir.document import GlobalOptions


def parse_override(text: str):
    """
    Split one override into (directive, key, value).

    Example: "title.direction=LR" -> ("title", "direction", "LR")

    Raises:
        ValueError: If the text is not ``directive.key=value`` or the directive is unknown
    """
    target, sep, value = text.partition("=")
    directive, dot, key = target.strip().partition(".")
    if not sep or not dot or not key:
        raise ValueError(f"expected directive.key=value, got {text!r}")
    if directive not in DIRECTIVES:
        raise ValueError(
            f"unknown directive {directive!r} in {text!r}; "
            f"expected one of {', '.join(DIRECTIVES)}"
        )
    return directive, key.strip(), value.strip()


def parse_override_args(values: Iterable[str]) -> GlobalOptions:
    """Build GlobalOptions from override strings; later values win."""
    options: Dict[str, Dict[str, str]] = {name: {} for name in DIRECTIVES}
    for text in values:
        directive, key, value = parse_override(text)
        options[directive][key] = value
    return GlobalOptions(**options)
