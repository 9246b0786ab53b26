"""Option resolution: defaults, global directives and local options merged per element."""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union
from erdot.config.logging import get_logger
from erdot.ir.document import (
    Attribute,
    Document,
    Entity,
    GlobalOptions,
    Relationship,
    frozen_options,
)
from erdot.ir.issues import (
    InvalidOptionValueWarning,
    OptionWarning,
    TranslationWarning,
    UnknownOptionWarning,
)
from .scopes import (
    INHERITED_ATTRIBUTE_KEYS,
    OptionScope,
    defaults,
    recognised_keys,
    spec_for,
)

logger = get_logger(__name__)

ResolvedValues = Dict[str, str]


def filter_options(
    scope: OptionScope, options: Mapping[str, str], location: str
) -> Tuple[ResolvedValues, List[OptionWarning]]:
    """
    Split options into the ones that apply to ``scope`` and warnings for the rest.

    Args:
        scope: Scope the options were written for
        options: Raw key/value pairs from the markup or an override
        location: Where the options came from, for warnings

    Returns:
        (applicable options, warnings for unknown keys or invalid values)
    """
    applied: ResolvedValues = {}
    warnings: List[OptionWarning] = []
    for key, value in options.items():
        spec = spec_for(scope, key)
        if spec is None:
            warnings.append(
                UnknownOptionWarning(
                    code="UNKNOWN_OPTION",
                    location=location,
                    message=(
                        f"{location}: unknown {scope.value} option {key!r} ignored "
                        f"(recognised: {', '.join(recognised_keys(scope))})"
                    ),
                    key=key,
                    scope=scope.value,
                )
            )
        elif not spec.accepts(value):
            warnings.append(
                InvalidOptionValueWarning(
                    code="INVALID_OPTION_VALUE",
                    location=location,
                    message=(
                        f"{location}: invalid value {value!r} for {scope.value} option "
                        f"{key!r} ignored (allowed: {', '.join(sorted(spec.choices))})"
                    ),
                    key=key,
                    scope=scope.value,
                    value=value,
                )
            )
        else:
            applied[key] = value
    return applied, warnings


def resolve_scope(
    scope: OptionScope,
    local: Optional[Mapping[str, str]] = None,
    global_: Optional[Mapping[str, str]] = None,
    location: Optional[str] = None,
) -> Tuple[ResolvedValues, List[OptionWarning]]:
    """
    Resolve every recognised key of ``scope``.

    Precedence is local > global > built-in default. Keys that the scope does
    not recognise, and values outside a key's allowed choices, are reported as
    warnings and never applied.

    Args:
        scope: Option scope
        local: Options written on the element itself
        global_: Options from the enclosing/global layer
        location: Description of the element, for warnings

    Returns:
        (mapping of every recognised key to its effective value, warnings)
    """
    location = location or scope.value
    values = defaults(scope)
    warnings: List[OptionWarning] = []
    for layer in (global_ or {}, local or {}):
        applied, layer_warnings = filter_options(scope, layer, location)
        values.update(applied)
        warnings.extend(layer_warnings)
    return values, warnings


@dataclass(frozen=True)
class ResolvedAttribute:
    attribute: Attribute
    options: Mapping[str, str]


@dataclass(frozen=True)
class ResolvedEntity:
    entity: Entity
    options: Mapping[str, str]
    header: Mapping[str, str]
    attributes: Tuple[ResolvedAttribute, ...] = ()


@dataclass(frozen=True)
class ResolvedRelationship:
    relationship: Relationship
    options: Mapping[str, str]


@dataclass(frozen=True)
class ResolvedDocument:
    """Document with fully resolved options for every element; input to the renderer."""

    title: Mapping[str, str]
    entities: Tuple[ResolvedEntity, ...] = ()
    relationships: Tuple[ResolvedRelationship, ...] = ()
    warnings: Tuple[TranslationWarning, ...] = ()


GlobalLayers = Union[GlobalOptions, Sequence[GlobalOptions], None]

DIRECTIVE_SCOPES = (
    OptionScope.TITLE,
    OptionScope.HEADER,
    OptionScope.ENTITY,
    OptionScope.RELATIONSHIP,
)


def filter_global_options(
    options: GlobalOptions, source: str
) -> Tuple[GlobalOptions, List[OptionWarning]]:
    """
    Drop unknown keys and invalid values from one layer of global options.

    Args:
        options: One global layer (document directives or an override)
        source: Name of the layer used in warning locations, e.g. "directive"

    Returns:
        (GlobalOptions holding only applicable values, warnings)
    """
    cleaned = {}
    warnings: List[OptionWarning] = []
    for scope in DIRECTIVE_SCOPES:
        applied, w = filter_options(
            scope, getattr(options, scope.value), f"{scope.value} {source}"
        )
        cleaned[scope.value] = applied
        warnings.extend(w)
    return GlobalOptions(**cleaned), warnings


def _override_layers(overrides: GlobalLayers) -> Tuple[GlobalOptions, ...]:
    if overrides is None:
        return ()
    if isinstance(overrides, GlobalOptions):
        return (overrides,)
    return tuple(overrides)


def _split_entity_options(
    entity: Entity, location: str
) -> Tuple[ResolvedValues, ResolvedValues, List[OptionWarning]]:
    """An entity's own options feed both its table and its header row."""
    entity_part: ResolvedValues = {}
    header_part: ResolvedValues = {}
    unknown: ResolvedValues = {}
    for key, value in entity.options.items():
        in_entity = spec_for(OptionScope.ENTITY, key) is not None
        in_header = spec_for(OptionScope.HEADER, key) is not None
        if in_entity:
            entity_part[key] = value
        if in_header:
            header_part[key] = value
        if not in_entity and not in_header:
            unknown[key] = value
    _, warnings = filter_options(OptionScope.ENTITY, unknown, location)
    return entity_part, header_part, warnings


def resolve_entity(
    entity: Entity, globals_: GlobalOptions
) -> Tuple[ResolvedEntity, List[OptionWarning]]:
    """
    Resolve an entity, its header row and each of its attributes.

    ``globals_`` is expected to hold only applicable keys (see
    filter_global_options); warnings are reported for the entity's and its
    attributes' own options.
    """
    location = f"entity {entity.name}"
    entity_local, header_local, warnings = _split_entity_options(entity, location)

    options, w = resolve_scope(OptionScope.ENTITY, entity_local, globals_.entity, location)
    warnings.extend(w)
    header, w = resolve_scope(OptionScope.HEADER, header_local, globals_.header, location)
    warnings.extend(w)

    inherited = {key: options[key] for key in INHERITED_ATTRIBUTE_KEYS}
    attributes = []
    for attr in entity.attributes:
        attr_options, w = resolve_scope(
            OptionScope.ATTRIBUTE,
            attr.options,
            inherited,
            f"attribute {entity.name}.{attr.name}",
        )
        warnings.extend(w)
        attributes.append(
            ResolvedAttribute(attribute=attr, options=frozen_options(attr_options))
        )

    resolved = ResolvedEntity(
        entity=entity,
        options=frozen_options(options),
        header=frozen_options(header),
        attributes=tuple(attributes),
    )
    return resolved, warnings


def resolve_relationship(
    rel: Relationship, globals_: GlobalOptions
) -> Tuple[ResolvedRelationship, List[OptionWarning]]:
    location = f"relationship {rel.left} -- {rel.right}"
    options, warnings = resolve_scope(
        OptionScope.RELATIONSHIP, rel.options, globals_.relationship, location
    )
    return ResolvedRelationship(relationship=rel, options=frozen_options(options)), warnings


def resolve_document(
    document: Document, overrides: GlobalLayers = None
) -> ResolvedDocument:
    """
    Resolve options for every element of a document.

    The global layer is built from the document's directives followed by each
    override layer, lowest precedence first. Every layer is filtered on its own
    before merging, so an unknown key or invalid value in a higher layer leaves
    the lower layer's value in effect. This function performs no I/O and does
    not raise for a parsed document.

    Args:
        document: Parsed document
        overrides: One GlobalOptions, or a sequence of them in increasing
            precedence (e.g., settings then CLI)

    Returns:
        ResolvedDocument carrying all option warnings
    """
    warnings: List[TranslationWarning] = []

    # Directive options are checked once per layer here, not once per element.
    globals_, w = filter_global_options(document.global_options, "directive")
    warnings.extend(w)
    for layer in _override_layers(overrides):
        cleaned, w = filter_global_options(layer, "override")
        globals_ = globals_.merged_with(cleaned)
        warnings.extend(w)

    title, _ = resolve_scope(OptionScope.TITLE, None, globals_.title, "title directive")

    entities = []
    for entity in document.entities:
        resolved, w = resolve_entity(entity, globals_)
        entities.append(resolved)
        warnings.extend(w)

    relationships = []
    for rel in document.relationships:
        resolved_rel, w = resolve_relationship(rel, globals_)
        relationships.append(resolved_rel)
        warnings.extend(w)

    if warnings:
        logger.info(f"Option resolution produced {len(warnings)} warning(s)")

    return ResolvedDocument(
        title=frozen_options(title),
        entities=tuple(entities),
        relationships=tuple(relationships),
        warnings=tuple(warnings),
    )
