"""Main pipeline for markup → DOT translation."""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union
from erdot.config.logging import get_logger
from erdot.config.settings import Settings
from erdot.errors import ErdotError
from erdot.ir.document import Document, GlobalOptions
from erdot.ir.issues import TranslationWarning
from erdot.ir.validators import ReferencePolicy, check_references
from erdot.markup.parser import parse
from erdot.options.resolver import resolve_document
from erdot.render.dot import render_dot

logger = get_logger(__name__)


@dataclass(frozen=True)
class TranslationSuccess:
    """DOT output plus the parsed document and any warnings."""

    dot: str
    document: Document
    warnings: Tuple[TranslationWarning, ...] = ()

    ok = True


@dataclass(frozen=True)
class TranslationFailure:
    """The error that stopped the translation; no output is produced."""

    error: ErdotError

    ok = False

    @property
    def kind(self) -> str:
        return self.error.kind


TranslationResult = Union[TranslationSuccess, TranslationFailure]


def translate(
    text: str,
    overrides: Optional[GlobalOptions] = None,
    settings: Optional[Settings] = None,
    unresolved_references: Optional[ReferencePolicy] = None,
) -> TranslationResult:
    """
    Translate markup into DOT.

    Args:
        text: Markup source
        overrides: Global options that win over the document's directives
        settings: Settings supplying the reference policy and extra overrides
        unresolved_references: Policy for undeclared relationship endpoints;
            defaults to the settings value, or "error"

    Returns:
        TranslationSuccess with the DOT text, or TranslationFailure with the error
    """
    policy = unresolved_references or (
        settings.unresolved_references if settings else "error"
    )
    # Lowest precedence first; each layer is validated on its own.
    layers: List[GlobalOptions] = []
    if settings and settings.global_options:
        layers.append(GlobalOptions(**settings.global_options))
    if overrides is not None:
        layers.append(overrides)

    try:
        document = parse(text)
        reference_warnings = check_references(document, policy)
    except ErdotError as e:
        logger.info(f"Translation failed ({e.kind}): {e}")
        return TranslationFailure(error=e)

    resolved = resolve_document(document, layers)
    dot = render_dot(resolved)
    warnings = tuple(reference_warnings) + resolved.warnings

    logger.info(
        f"Translated {len(document.entities)} entities and "
        f"{len(document.relationships)} relationships "
        f"({len(warnings)} warning(s))"
    )
    return TranslationSuccess(dot=dot, document=document, warnings=warnings)
