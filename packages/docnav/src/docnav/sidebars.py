"""Named sidebars loaded from JSON or TOML files.

A sidebars file maps sidebar names to item lists:

    {
        "docsSidebar": ["index", {"type": "category", "label": "Guides", "items": [...]}],
        "apiSidebar": ["api/overview"]
    }

Each sidebar is resolved independently.
"""

import json
import logging
import tomllib
from collections.abc import Iterator, Mapping
from pathlib import Path

from docnav.core.errors import NavigationError
from docnav.core.navigation import ResolvedNavigation, resolve
from docnav.core.nodes import NavigationSpec
from docnav.core.titles import TitleResolver
from docnav.core.types import BrokenLinkPolicy, DocId

logger = logging.getLogger(__name__)


class Sidebars(Mapping[str, ResolvedNavigation]):
    """Resolved sidebars keyed by name, in declaration order."""

    def __init__(self, sidebars: dict[str, ResolvedNavigation]) -> None:
        self._sidebars = dict(sidebars)

    @classmethod
    def from_data(
        cls,
        data: object,
        *,
        on_broken_links: BrokenLinkPolicy = "throw",
        title_resolver: TitleResolver | None = None,
    ) -> "Sidebars":
        """Resolve sidebars from declarative data.

        Args:
            data: Mapping of sidebar name to item list
            on_broken_links: Policy for category links to unknown documents
            title_resolver: Optional source of labels for unlabeled documents

        Returns:
            Sidebars instance

        Raises:
            ValueError: If data is not a mapping of names
            NavigationError: If any sidebar is invalid, tagged with its name
        """
        if not isinstance(data, dict):
            raise ValueError("Sidebars must be a dictionary")

        sidebars: dict[str, ResolvedNavigation] = {}
        for name, items in data.items():
            if not isinstance(name, str):
                raise ValueError("Sidebar names must be strings")
            try:
                spec = NavigationSpec.from_data(items)
                sidebars[name] = resolve(
                    spec,
                    on_broken_links=on_broken_links,
                    title_resolver=title_resolver,
                )
            except NavigationError as e:
                e.with_sidebar(name)
                raise
            logger.debug(f"Loaded sidebar '{name}' with {len(sidebars[name])} documents")

        return cls(sidebars)

    def find(self, doc_id: str) -> str | None:
        """Get the name of the first sidebar containing a document.

        Args:
            doc_id: Document id

        Returns:
            Sidebar name or None if no sidebar contains the document
        """
        for name, navigation in self._sidebars.items():
            if DocId(doc_id) in navigation:
                return name
        return None

    def __getitem__(self, name: str) -> ResolvedNavigation:
        return self._sidebars[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sidebars)

    def __len__(self) -> int:
        return len(self._sidebars)


def load_sidebars(
    path: Path,
    *,
    on_broken_links: BrokenLinkPolicy = "throw",
    title_resolver: TitleResolver | None = None,
) -> Sidebars:
    """Load and resolve sidebars from a file.

    Args:
        path: Path to a ``.json`` or ``.toml`` sidebars file
        on_broken_links: Policy for category links to unknown documents
        title_resolver: Optional source of labels for unlabeled documents

    Returns:
        Sidebars instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file format is unsupported or malformed
        NavigationError: If any sidebar is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Sidebars file not found: {path}")

    logger.info(f"Loading sidebars from {path}")
    if path.suffix == ".json":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    elif path.suffix == ".toml":
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e
    else:
        raise ValueError(f"Unsupported sidebars file format: {path.suffix}")

    return Sidebars.from_data(
        data,
        on_broken_links=on_broken_links,
        title_resolver=title_resolver,
    )
