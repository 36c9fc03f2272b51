"""Structural validation of declared navigation.

Validation is fail-fast: a single depth-first, left-to-right traversal
raises on the first violation. Category links may point forward, so the
declared document ids are collected up front and each link is checked
when its category is visited.
"""

import logging
from dataclasses import dataclass

from docnav.core.errors import (
    DanglingLinkError,
    DuplicateIdentifierError,
    EmptyCategoryError,
    MissingLabelError,
)
from docnav.core.nodes import Category, DocumentRef, NavigationSpec
from docnav.core.types import BROKEN_LINK_POLICIES, BrokenLinkPolicy, DocId, Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrokenLink:
    """Category link that points at an undeclared document id."""

    label: str
    link: DocId
    position: Position


def validate(
    spec: NavigationSpec,
    *,
    on_broken_links: BrokenLinkPolicy = "throw",
) -> list[BrokenLink]:
    """Check structural invariants of a navigation spec.

    Args:
        spec: Declared navigation
        on_broken_links: "throw" raises on the first dangling category link,
            "warn" logs each one, "ignore" accepts them silently

    Returns:
        Broken links tolerated under the "warn" or "ignore" policy

    Raises:
        MissingLabelError: If a category has an empty label
        EmptyCategoryError: If a category has no items
        DuplicateIdentifierError: If a document id is declared twice
        DanglingLinkError: If a category links to an unknown document id
            and the policy is "throw"
        ValueError: If the policy is unknown
    """
    if on_broken_links not in BROKEN_LINK_POLICIES:
        raise ValueError(f"Unknown broken link policy: {on_broken_links}")

    declared = {node.doc_id for _, node in spec.walk() if isinstance(node, DocumentRef)}
    seen: dict[DocId, Position] = {}
    broken: list[BrokenLink] = []

    for position, node in spec.walk():
        if isinstance(node, DocumentRef):
            first = seen.get(node.doc_id)
            if first is not None:
                raise DuplicateIdentifierError(node.doc_id, position, first)
            seen[node.doc_id] = position
            continue

        _check_category(node, position)
        if node.link is None or node.link in declared:
            continue
        if on_broken_links == "throw":
            raise DanglingLinkError(node.label, node.link, position)
        if on_broken_links == "warn":
            logger.warning(
                f"Category '{node.label}' links to unknown document id '{node.link}', "
                "dropping link",
            )
        broken.append(BrokenLink(label=node.label, link=node.link, position=position))

    logger.debug(f"Validated {len(seen)} documents")
    return broken


def _check_category(category: Category, position: Position) -> None:
    if not category.label.strip():
        raise MissingLabelError(position)
    if not category.items:
        raise EmptyCategoryError(category.label, position)
