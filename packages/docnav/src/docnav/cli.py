"""CLI interface for Docnav.

Command-line tool for checking and inspecting documentation sidebars.
"""

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn, cast

import click

from docnav.config import Config
from docnav.core.errors import NavigationError
from docnav.core.nodes import Category, DocumentRef, Node
from docnav.core.titles import MarkdownTitleResolver
from docnav.core.types import BROKEN_LINK_POLICIES, BrokenLinkPolicy, format_position
from docnav.sidebars import Sidebars, load_sidebars

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover docnav.toml)",
)

sidebars_option = click.option(
    "--sidebars",
    "sidebars_file",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Sidebars file, .json or .toml (overrides config)",
)


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
def cli(verbose: bool) -> None:
    """Docnav - navigation for documentation sites."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@config_option
@sidebars_option
@click.option(
    "--on-broken-links",
    type=click.Choice(BROKEN_LINK_POLICIES),
    default=None,
    help="Policy for category links to unknown documents (overrides config)",
)
def check(
    config_path: Path | None,
    sidebars_file: Path | None,
    on_broken_links: str | None,
) -> None:
    """Validate sidebars and print a summary."""
    config = _load_config(config_path).with_overrides(
        sidebars_file=sidebars_file,
        on_broken_links=cast(BrokenLinkPolicy | None, on_broken_links),
    )
    sidebars = _load_or_exit(config)

    click.echo(f"Site: {config.site.title}")
    for name, navigation in sidebars.items():
        categories = _count_categories(navigation.render_order())
        click.echo(f"Sidebar '{name}': {len(navigation)} documents, {categories} categories")
    click.echo(click.style("\nNavigation is valid.", fg="green", bold=True))


@cli.command()
@config_option
@sidebars_option
@click.option(
    "--sidebar",
    "sidebar_name",
    default=None,
    help="Sidebar to print (default: all)",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the resolved tree as JSON",
)
def tree(
    config_path: Path | None,
    sidebars_file: Path | None,
    sidebar_name: str | None,
    as_json: bool,
) -> None:
    """Print the resolved navigation tree."""
    config = _load_config(config_path).with_overrides(sidebars_file=sidebars_file)
    sidebars = _load_or_exit(config)

    if sidebar_name is not None:
        if sidebar_name not in sidebars:
            _fail(f"Unknown sidebar '{sidebar_name}'")
        selected = {sidebar_name: sidebars[sidebar_name]}
    else:
        selected = dict(sidebars)

    if as_json:
        data = {name: navigation.to_dict() for name, navigation in selected.items()}
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    for name, navigation in selected.items():
        click.echo(click.style(name, bold=True))
        _print_nodes(navigation.render_order(), indent=1)


@cli.command()
@click.argument("doc_id")
@config_option
@sidebars_option
def show(
    doc_id: str,
    config_path: Path | None,
    sidebars_file: Path | None,
) -> None:
    """Show breadcrumb and previous/next links for a document."""
    config = _load_config(config_path).with_overrides(sidebars_file=sidebars_file)
    sidebars = _load_or_exit(config)

    name = sidebars.find(doc_id)
    if name is None:
        _fail(f"Unknown document id '{doc_id}'")
    navigation = sidebars[name]

    ref = navigation.get(doc_id)
    siblings = navigation.sibling_nav(doc_id)
    breadcrumb = " > ".join(navigation.ancestor_path(doc_id)) or "(root)"

    click.echo(f"Document: {ref.doc_id}")
    if ref.label:
        click.echo(f"Label: {ref.label}")
    click.echo(f"Sidebar: {name}")
    click.echo(f"Position: {format_position(navigation.position(doc_id))}")
    click.echo(f"Depth: {navigation.depth(doc_id)}")
    click.echo(f"Breadcrumb: {breadcrumb}")
    click.echo(f"Previous: {siblings.prev.doc_id if siblings.prev else '-'}")
    click.echo(f"Next: {siblings.next.doc_id if siblings.next else '-'}")


def _load_config(config_path: Path | None) -> Config:
    """Load configuration or exit with an error message."""
    try:
        return Config.load(config_path)
    except ValueError as e:
        _fail(str(e))


def _load_or_exit(config: Config) -> Sidebars:
    """Load sidebars for a config or exit with an error message.

    Args:
        config: Application config

    Returns:
        Resolved sidebars

    Raises:
        SystemExit: If sidebars can't be loaded or are invalid
    """
    title_resolver = None
    if config.docs.source_dir.is_dir():
        title_resolver = MarkdownTitleResolver(config.docs.source_dir)

    try:
        return load_sidebars(
            config.navigation.sidebars_file,
            on_broken_links=config.navigation.on_broken_links,
            title_resolver=title_resolver,
        )
    except (FileNotFoundError, ValueError, NavigationError) as e:
        _fail(str(e))


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _print_nodes(nodes: tuple[Node, ...], indent: int) -> None:
    prefix = "  " * indent
    for node in nodes:
        if isinstance(node, DocumentRef):
            label = f" ({node.label})" if node.label else ""
            click.echo(f"{prefix}- {node.doc_id}{label}")
            continue
        link = f" -> {node.link}" if node.link else ""
        click.echo(f"{prefix}+ {node.label}{link}")
        _print_nodes(node.items, indent + 1)


def _count_categories(nodes: tuple[Node, ...]) -> int:
    count = 0
    for node in nodes:
        if isinstance(node, Category):
            count += 1 + _count_categories(node.items)
    return count


if __name__ == "__main__":
    cli()
