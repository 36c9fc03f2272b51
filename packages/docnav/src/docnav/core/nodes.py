"""Navigation tree nodes and declarative input parsing.

A sidebar is declared as nested literal data, the same shape Docusaurus
uses for ``sidebars``:

    [
        "index",
        {"type": "doc", "id": "getting-started", "label": "Start here"},
        {
            "type": "category",
            "label": "Backend",
            "link": "backend/overview",
            "collapsed": True,
            "items": ["backend/overview", "backend/setup"],
        },
    ]

Parsing only checks the shape of the data. Structural invariants (unique
ids, non-empty categories, labels, links) are checked by the validator.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from docnav.core.errors import InvalidNodeError
from docnav.core.types import DocId, Position


@dataclass(frozen=True)
class DocumentRef:
    """Leaf node referencing one content document."""

    doc_id: DocId
    label: str | None = None


@dataclass(frozen=True)
class Category:
    """Named grouping of ordered child nodes."""

    label: str
    items: tuple["Node", ...]
    link: DocId | None = None
    collapsed: bool | None = None
    collapsible: bool | None = None


Node = DocumentRef | Category


@dataclass(frozen=True)
class NavigationSpec:
    """Unvalidated navigation tree as declared.

    Only ``resolve()`` turns a spec into a queryable navigation.
    """

    items: tuple[Node, ...]

    @classmethod
    def from_data(cls, data: object) -> "NavigationSpec":
        """Parse declarative sidebar data.

        Args:
            data: List of item declarations

        Returns:
            NavigationSpec preserving declaration order

        Raises:
            InvalidNodeError: If the data has an unsupported shape
        """
        return cls(items=_parse_items(data, ()))

    def walk(self) -> Iterator[tuple[Position, Node]]:
        """Yield every node with its position, depth-first, left to right."""
        yield from _walk(self.items, ())


def _walk(items: Sequence[Node], parent: Position) -> Iterator[tuple[Position, Node]]:
    for i, node in enumerate(items):
        position = (*parent, i)
        yield position, node
        if isinstance(node, Category):
            yield from _walk(node.items, position)


def _parse_items(data: object, parent: Position) -> tuple[Node, ...]:
    if not isinstance(data, list | tuple):
        raise InvalidNodeError("items must be a list", parent)
    return tuple(_parse_node(item, (*parent, i)) for i, item in enumerate(data))


def _parse_node(data: object, position: Position) -> Node:
    if isinstance(data, str):
        return DocumentRef(doc_id=_parse_doc_id(data, position))

    if not isinstance(data, dict):
        raise InvalidNodeError(
            f"item must be a string or a mapping, got {type(data).__name__}",
            position,
        )

    node_type = data.get("type")
    if node_type is None:
        node_type = "category" if "items" in data else "doc"

    if node_type == "doc":
        return _parse_doc(data, position)
    if node_type == "category":
        return _parse_category(data, position)
    raise InvalidNodeError(f"unsupported item type '{node_type}'", position)


def _parse_doc(data: dict, position: Position) -> DocumentRef:
    doc_id = _parse_doc_id(data.get("id"), position)

    label = data.get("label")
    if label is not None and not isinstance(label, str):
        raise InvalidNodeError("doc label must be a string", position)

    return DocumentRef(doc_id=doc_id, label=label)


def _parse_category(data: dict, position: Position) -> Category:
    # Empty or missing labels are reported by the validator
    label = data.get("label", "")
    if not isinstance(label, str):
        raise InvalidNodeError("category label must be a string", position)

    items = _parse_items(data.get("items", []), position)

    link = _parse_link(data.get("link"), position)

    collapsed = data.get("collapsed")
    if collapsed is not None and not isinstance(collapsed, bool):
        raise InvalidNodeError("category collapsed must be a boolean", position)

    collapsible = data.get("collapsible")
    if collapsible is not None and not isinstance(collapsible, bool):
        raise InvalidNodeError("category collapsible must be a boolean", position)

    return Category(
        label=label,
        items=items,
        link=link,
        collapsed=collapsed,
        collapsible=collapsible,
    )


def _parse_link(data: object, position: Position) -> DocId | None:
    if data is None:
        return None
    if isinstance(data, str):
        return _parse_doc_id(data, position)
    if isinstance(data, dict):
        link_type = data.get("type", "doc")
        if link_type != "doc":
            raise InvalidNodeError(f"unsupported category link type '{link_type}'", position)
        return _parse_doc_id(data.get("id"), position)
    raise InvalidNodeError("category link must be a string or a mapping", position)


def _parse_doc_id(data: object, position: Position) -> DocId:
    if not isinstance(data, str) or not data.strip():
        raise InvalidNodeError("document id must be a non-empty string", position)
    return DocId(data)
