"""Core type definitions."""

from typing import Literal, NewType

# Document identifier as declared in sidebars (e.g., "backend/services/core")
# Distinct from labels to catch type mismatches
DocId = NewType("DocId", str)

# Zero-based child indices from the root to a node, in declaration order
Position = tuple[int, ...]

BrokenLinkPolicy = Literal["throw", "warn", "ignore"]
BROKEN_LINK_POLICIES: tuple[BrokenLinkPolicy, ...] = ("throw", "warn", "ignore")


def format_position(position: Position) -> str:
    """Render a position as dotted indices (e.g., "2.0.1")."""
    return ".".join(str(i) for i in position) or "root"
