"""Resolved navigation and lookup indices.

Resolution is the only way from a declared ``NavigationSpec`` to a
``ResolvedNavigation``. The resolved tree and its indices are immutable
and safe to share between concurrent readers.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import NotRequired, TypedDict

from docnav.core.errors import UnknownIdentifierError
from docnav.core.nodes import Category, DocumentRef, NavigationSpec, Node
from docnav.core.titles import TitleResolver
from docnav.core.types import BrokenLinkPolicy, DocId, Position
from docnav.core.validator import validate

logger = logging.getLogger(__name__)

_RESOLVE_TOKEN = object()


class NodeDict(TypedDict):
    """Dictionary representation of a navigation node."""

    type: str
    label: str | None
    id: NotRequired[str]
    link: NotRequired[str]
    collapsed: NotRequired[bool]
    collapsible: NotRequired[bool]
    items: NotRequired[list["NodeDict"]]


@dataclass(frozen=True)
class SiblingNav:
    """Previous and next documents at the same nesting level."""

    prev: DocumentRef | None
    next: DocumentRef | None


@dataclass(frozen=True)
class BreadcrumbItem:
    """Breadcrumb navigation item."""

    label: str
    link: DocId | None = None

    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for JSON serialization."""
        return {"label": self.label, "link": self.link}


@dataclass(frozen=True)
class IndexEntry:
    """Derived lookup data for one document."""

    ref: DocumentRef
    depth: int
    ancestors: tuple[Category, ...]
    siblings: SiblingNav
    position: Position


class ResolvedNavigation:
    """Validated navigation tree with per-document indices.

    Stores the ordered tree as declared plus a flat index keyed by
    document id. All queries are O(1) except ``breadcrumbs`` which is
    O(d) in the document depth.

    Instances are built by ``resolve()`` only, so every one has passed
    validation.
    """

    __slots__ = ("_index", "_items")

    def __init__(
        self,
        items: tuple[Node, ...],
        index: Mapping[DocId, IndexEntry],
        *,
        _token: object = None,
    ) -> None:
        if _token is not _RESOLVE_TOKEN:
            raise TypeError("ResolvedNavigation is created by resolve()")
        self._items = items
        self._index = MappingProxyType(dict(index))

    def render_order(self) -> tuple[Node, ...]:
        """Get the full ordered tree for sidebar rendering."""
        return self._items

    def ancestor_path(self, doc_id: str) -> tuple[str, ...]:
        """Get ancestor category labels from the root to the parent.

        Args:
            doc_id: Document id

        Returns:
            Labels, empty for root-level documents

        Raises:
            UnknownIdentifierError: If the document is not in the navigation
        """
        return tuple(category.label for category in self._entry(doc_id).ancestors)

    def sibling_nav(self, doc_id: str) -> SiblingNav:
        """Get previous and next sibling documents.

        Raises:
            UnknownIdentifierError: If the document is not in the navigation
        """
        return self._entry(doc_id).siblings

    def depth(self, doc_id: str) -> int:
        """Get nesting depth, 0 for root-level documents.

        Raises:
            UnknownIdentifierError: If the document is not in the navigation
        """
        return self._entry(doc_id).depth

    def position(self, doc_id: str) -> Position:
        """Get the declared position of a document."""
        return self._entry(doc_id).position

    def get(self, doc_id: str) -> DocumentRef:
        """Get the resolved document reference.

        Raises:
            UnknownIdentifierError: If the document is not in the navigation
        """
        return self._entry(doc_id).ref

    def breadcrumbs(self, doc_id: str) -> list[BreadcrumbItem]:
        """Build breadcrumbs for a document.

        The document itself is not included. Categories with a landing
        page carry its id as the breadcrumb link.

        Raises:
            UnknownIdentifierError: If the document is not in the navigation
        """
        return [
            BreadcrumbItem(label=category.label, link=category.link)
            for category in self._entry(doc_id).ancestors
        ]

    def doc_ids(self) -> list[DocId]:
        """Get all document ids in declaration order."""
        return [ref.doc_id for ref in flatten(self._items)]

    def to_dict(self) -> list[NodeDict]:
        """Convert to list of dictionaries for JSON serialization."""
        return [_node_to_dict(node) for node in self._items]

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[DocumentRef]:
        return flatten(self._items)

    def _entry(self, doc_id: str) -> IndexEntry:
        entry = self._index.get(DocId(doc_id))
        if entry is None:
            raise UnknownIdentifierError(doc_id)
        return entry


def resolve(
    spec: NavigationSpec,
    *,
    on_broken_links: BrokenLinkPolicy = "throw",
    title_resolver: TitleResolver | None = None,
) -> ResolvedNavigation:
    """Validate a navigation spec and build its indices.

    Args:
        spec: Declared navigation
        on_broken_links: Policy for category links to unknown documents
        title_resolver: Optional source of labels for documents declared
            without one

    Returns:
        ResolvedNavigation

    Raises:
        ValidationError: If the spec violates a structural invariant
    """
    broken = validate(spec, on_broken_links=on_broken_links)
    dropped = {link.position for link in broken}

    index: dict[DocId, IndexEntry] = {}
    items = _resolve_items(spec.items, (), (), index, dropped, title_resolver)

    logger.info(f"Resolved navigation with {len(index)} documents")
    return ResolvedNavigation(items, index, _token=_RESOLVE_TOKEN)


def flatten(nodes: Sequence[Node]) -> Iterator[DocumentRef]:
    """Yield documents depth-first in declaration order."""
    for node in nodes:
        if isinstance(node, DocumentRef):
            yield node
        else:
            yield from flatten(node.items)


def _resolve_items(
    nodes: tuple[Node, ...],
    parent: Position,
    ancestors: tuple[Category, ...],
    index: dict[DocId, IndexEntry],
    dropped: set[Position],
    title_resolver: TitleResolver | None,
) -> tuple[Node, ...]:
    """Resolve one sibling list and index its documents."""
    resolved: list[Node] = []
    for i, node in enumerate(nodes):
        position = (*parent, i)
        if isinstance(node, DocumentRef):
            resolved.append(_resolve_doc(node, title_resolver))
            continue

        category = node
        if position in dropped:
            category = replace(category, link=None)
        children = _resolve_items(
            category.items,
            position,
            (*ancestors, category),
            index,
            dropped,
            title_resolver,
        )
        resolved.append(replace(category, items=children))

    _index_siblings(tuple(resolved), parent, ancestors, index)
    return tuple(resolved)


def _index_siblings(
    nodes: tuple[Node, ...],
    parent: Position,
    ancestors: tuple[Category, ...],
    index: dict[DocId, IndexEntry],
) -> None:
    docs = [(i, node) for i, node in enumerate(nodes) if isinstance(node, DocumentRef)]
    for n, (i, ref) in enumerate(docs):
        prev = docs[n - 1][1] if n > 0 else None
        next_ = docs[n + 1][1] if n + 1 < len(docs) else None
        index[ref.doc_id] = IndexEntry(
            ref=ref,
            depth=len(parent),
            ancestors=ancestors,
            siblings=SiblingNav(prev=prev, next=next_),
            position=(*parent, i),
        )


def _resolve_doc(ref: DocumentRef, title_resolver: TitleResolver | None) -> DocumentRef:
    if ref.label is not None or title_resolver is None:
        return ref
    label = title_resolver.resolve_title(ref.doc_id)
    if label is None:
        return ref
    return replace(ref, label=label)


def _node_to_dict(node: Node) -> NodeDict:
    if isinstance(node, DocumentRef):
        return {"type": "doc", "id": node.doc_id, "label": node.label}

    result: NodeDict = {"type": "category", "label": node.label}
    if node.link is not None:
        result["link"] = node.link
    if node.collapsed is not None:
        result["collapsed"] = node.collapsed
    if node.collapsible is not None:
        result["collapsible"] = node.collapsible
    result["items"] = [_node_to_dict(child) for child in node.items]
    return result
