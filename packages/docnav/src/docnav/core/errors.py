"""Navigation error taxonomy.

All errors are raised while building navigation and are fatal to the
build; no partial tree is ever returned. Structural errors carry the
offending node's position in declaration order.
"""

from docnav.core.types import Position, format_position


class NavigationError(Exception):
    """Base class for navigation errors."""

    sidebar: str | None = None

    def with_sidebar(self, sidebar: str) -> "NavigationError":
        """Attach the name of the sidebar the error was raised for."""
        self.sidebar = sidebar
        return self

    def __str__(self) -> str:
        message = Exception.__str__(self)
        if self.sidebar is not None:
            return f"Sidebar '{self.sidebar}': {message}"
        return message


class InvalidNodeError(NavigationError):
    """Declarative input has an unsupported shape."""

    def __init__(self, message: str, position: Position) -> None:
        self.position = position
        super().__init__(f"{message} (at position {format_position(position)})")


class ValidationError(NavigationError):
    """Base class for structural invariant violations."""

    def __init__(self, message: str, position: Position) -> None:
        self.position = position
        super().__init__(f"{message} (at position {format_position(position)})")


class DuplicateIdentifierError(ValidationError):
    """Same document id declared more than once."""

    def __init__(self, doc_id: str, position: Position, first_position: Position) -> None:
        self.doc_id = doc_id
        self.first_position = first_position
        super().__init__(
            f"Duplicate document id '{doc_id}', "
            f"first declared at position {format_position(first_position)}",
            position,
        )


class EmptyCategoryError(ValidationError):
    """Category declared without items."""

    def __init__(self, label: str, position: Position) -> None:
        self.label = label
        super().__init__(f"Category '{label}' has no items", position)


class DanglingLinkError(ValidationError):
    """Category link targets a document id absent from the tree."""

    def __init__(self, label: str, link: str, position: Position) -> None:
        self.label = label
        self.link = link
        super().__init__(
            f"Category '{label}' links to unknown document id '{link}'",
            position,
        )


class MissingLabelError(ValidationError):
    """Category declared without a label."""

    def __init__(self, position: Position) -> None:
        super().__init__("Category has no label", position)


class UnknownIdentifierError(NavigationError, KeyError):
    """Query for a document id that is not part of the navigation."""

    def __init__(self, doc_id: str) -> None:
        self.doc_id = doc_id
        super().__init__(f"Unknown document id '{doc_id}'")
