"""Default labels for documents declared without one.

Labels come from the document source, in order of preference: the
``sidebar_label`` or ``title`` front matter key, the first H1 heading,
and finally a title derived from the file name.
"""

import logging
import re
from pathlib import Path
from typing import Any, Protocol

import mistune
import yaml

from docnav.core.types import DocId

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"
LABEL_KEYS = ("sidebar_label", "title")


class TitleResolver(Protocol):
    """Resolves a display label for a document id."""

    def resolve_title(self, doc_id: DocId) -> str | None: ...


class MarkdownTitleResolver:
    """Resolve labels from markdown sources under a docs directory.

    A document id maps to ``<id>.md``, ``<id>.mdx`` or ``<id>/index.md``
    relative to the source directory. Files outside the source directory
    are never read.
    """

    SUFFIXES = (".md", ".mdx")

    def __init__(self, source_dir: Path) -> None:
        self._source_dir = source_dir

    def find_source(self, doc_id: DocId) -> Path | None:
        """Find the markdown file for a document id.

        Args:
            doc_id: Document id (e.g., "backend/getting-started")

        Returns:
            Path to the source file or None if not found
        """
        root = self._source_dir.resolve()
        base = self._source_dir / doc_id
        candidates = [base.with_name(base.name + suffix) for suffix in self.SUFFIXES]
        candidates.append(base / "index.md")
        for candidate in candidates:
            if not candidate.is_file():
                continue
            if not candidate.resolve().is_relative_to(root):
                logger.warning(f"Document '{doc_id}' resolves outside {self._source_dir}")
                return None
            return candidate
        return None

    def resolve_title(self, doc_id: DocId) -> str | None:
        """Resolve label from front matter, H1 heading or file name.

        Returns:
            Title or None if the document has no source file

        Raises:
            ValueError: If the front matter is not valid YAML
        """
        source = self.find_source(doc_id)
        if source is None:
            logger.debug(f"No source file for document '{doc_id}'")
            return None

        try:
            meta, body = split_front_matter(source.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid front matter in {source}: {e}") from e

        for key in LABEL_KEYS:
            value = meta.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()

        title = extract_title(body)
        if title is not None:
            return title

        stem = source.parent.name if source.name == "index.md" else source.stem
        return title_from_filename(stem)


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a leading ``---`` delimited YAML block from markdown.

    Returns:
        Tuple of (metadata, body). Metadata is empty when the text has no
        front matter or the block is not a mapping.

    Raises:
        yaml.YAMLError: If the block is not valid YAML
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != FRONT_MATTER_DELIMITER:
        return {}, text

    for index, line in enumerate(lines[1:], start=1):
        if line.rstrip() == FRONT_MATTER_DELIMITER:
            meta = yaml.safe_load("".join(lines[1:index]))
            body = "".join(lines[index + 1 :])
            return (meta if isinstance(meta, dict) else {}), body

    return {}, text


def extract_title(markdown: str) -> str | None:
    """Extract the text of the first level 1 heading.

    ATX (``# Title #``) and setext (``Title`` over ``===``) headings both
    count. Headings inside code blocks do not.
    """
    parse = mistune.create_markdown(renderer=None)
    for token in parse(markdown):
        if token["type"] == "heading" and token["attrs"]["level"] == 1:
            title = _plain_text(token.get("children", [])).strip()
            return title or None
    return None


def _plain_text(tokens: list[dict[str, Any]]) -> str:
    parts = []
    for token in tokens:
        if "children" in token:
            parts.append(_plain_text(token["children"]))
        elif "raw" in token:
            parts.append(token["raw"])
        elif token["type"] == "softbreak":
            parts.append(" ")
    return "".join(parts)


def title_from_filename(stem: str) -> str:
    """Derive a title from a file stem (e.g., "setup-guide" -> "Setup Guide")."""
    words = re.split(r"[-_\s]+", stem)
    return " ".join(word.capitalize() for word in words if word)
