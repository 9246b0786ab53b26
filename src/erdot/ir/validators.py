"""Validators for parsed documents."""

from typing import List, Literal
from erdot.config.logging import get_logger
from erdot.errors import UnresolvedEntityReference
from .document import Document
from .issues import UnresolvedReferenceWarning

logger = get_logger(__name__)

ReferencePolicy = Literal["error", "warning", "ignore"]


def find_unresolved_references(document: Document) -> List[UnresolvedEntityReference]:
    """
    Find relationship endpoints that name no declared entity.

    Each undeclared name is reported once, at its first use, in declaration
    order of the relationships.

    Args:
        document: Parsed document

    Returns:
        List of UnresolvedEntityReference (empty if every endpoint resolves)
    """
    declared = set(document.entity_names())
    seen = set()
    missing: List[UnresolvedEntityReference] = []

    for rel in document.relationships:
        for name in (rel.left, rel.right):
            if name in declared or name in seen:
                continue
            seen.add(name)
            missing.append(UnresolvedEntityReference(name, rel.position))

    return missing


def check_references(
    document: Document, policy: ReferencePolicy = "error"
) -> List[UnresolvedReferenceWarning]:
    """
    Apply the unresolved-reference policy to a document.

    Args:
        document: Parsed document
        policy: "error" raises, "warning" returns warnings, "ignore" returns nothing

    Returns:
        Warnings for undeclared endpoints when policy is "warning"

    Raises:
        UnresolvedEntityReference: For the first undeclared endpoint when policy is "error"
    """
    missing = find_unresolved_references(document)
    if not missing:
        return []

    if policy == "error":
        raise missing[0]

    if policy == "ignore":
        logger.debug(f"Ignoring {len(missing)} unresolved entity reference(s)")
        return []

    logger.info(f"Found {len(missing)} unresolved entity reference(s)")
    return [
        UnresolvedReferenceWarning(
            code="UNRESOLVED_REFERENCE",
            location=f"entity reference {ref.name}",
            message=ref.message,
            position=ref.position,
            name=ref.name,
        )
        for ref in missing
    ]
