"""Tests for CLI commands."""

import json
import logging
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner
from docnav.cli import cli


class TestCheckCommand:
    """Tests for the check command."""

    def test__valid_sidebars__prints_summary(self, project_dir: Path) -> None:
        """Summarize each sidebar of a valid project."""
        runner = CliRunner()
        result = runner.invoke(cli, ["check", "-c", str(project_dir / "docnav.toml")])

        assert result.exit_code == 0
        assert "Site: Base Library Documentation" in result.output
        assert "Sidebar 'docsSidebar': 11 documents, 4 categories" in result.output
        assert "Sidebar 'apiSidebar': 1 documents, 0 categories" in result.output
        assert "Navigation is valid." in result.output

    def test__duplicate_id__fails(self, project_dir: Path) -> None:
        """Exit with an error naming the sidebar and duplicate."""
        sidebars = project_dir / "bad.json"
        sidebars.write_text(json.dumps({"docs": ["a", "a"]}))

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["check", "-c", str(project_dir / "docnav.toml"), "--sidebars", str(sidebars)],
        )

        assert result.exit_code == 1
        assert "Error: Sidebar 'docs': Duplicate document id 'a'" in result.output

    def test__dangling_link__fails_by_default(self, project_dir: Path) -> None:
        sidebars = project_dir / "bad.json"
        sidebars.write_text(
            json.dumps({"docs": [{"label": "A", "link": "missing", "items": ["a"]}]}),
        )

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["check", "-c", str(project_dir / "docnav.toml"), "--sidebars", str(sidebars)],
        )

        assert result.exit_code == 1
        assert "links to unknown document id 'missing'" in result.output

    def test__dangling_link__passes_with_warn_policy(self, project_dir: Path) -> None:
        sidebars = project_dir / "bad.json"
        sidebars.write_text(
            json.dumps({"docs": [{"label": "A", "link": "missing", "items": ["a"]}]}),
        )

        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "check",
                "-c",
                str(project_dir / "docnav.toml"),
                "--sidebars",
                str(sidebars),
                "--on-broken-links",
                "warn",
            ],
        )

        assert result.exit_code == 0
        assert "Navigation is valid." in result.output

    def test__missing_sidebars_file__fails(self, tmp_path: Path) -> None:
        config_file = tmp_path / "docnav.toml"
        config_file.write_text("")

        runner = CliRunner()
        result = runner.invoke(cli, ["check", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Sidebars file not found" in result.output

    def test__invalid_config__fails(self, tmp_path: Path) -> None:
        config_file = tmp_path / "docnav.toml"
        config_file.write_text('[navigation]\non_broken_links = "explode"')

        runner = CliRunner()
        result = runner.invoke(cli, ["check", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "navigation.on_broken_links must be one of" in result.output


class TestTreeCommand:
    """Tests for the tree command."""

    def test__prints_outline(self, project_dir: Path) -> None:
        """Print categories and documents with resolved labels."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["tree", "-c", str(project_dir / "docnav.toml"), "--sidebar", "docsSidebar"],
        )

        assert result.exit_code == 0
        assert "  - index (Welcome)" in result.output
        assert "  - getting-started (Getting Started)" in result.output
        assert "  + Backend" in result.output
        assert "    - backend/getting-started (Backend Quickstart)" in result.output
        assert "    + Services -> backend/services/core" in result.output
        assert "apiSidebar" not in result.output

    def test__json_output(self, project_dir: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["tree", "-c", str(project_dir / "docnav.toml"), "--json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert list(data) == ["docsSidebar", "apiSidebar"]
        assert data["apiSidebar"] == [{"type": "doc", "id": "api/overview", "label": None}]
        assert data["docsSidebar"][0] == {"type": "doc", "id": "index", "label": "Welcome"}

    def test__unknown_sidebar__fails(self, project_dir: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["tree", "-c", str(project_dir / "docnav.toml"), "--sidebar", "nope"],
        )

        assert result.exit_code == 1
        assert "Unknown sidebar 'nope'" in result.output


class TestShowCommand:
    """Tests for the show command."""

    def test__nested_document(self, project_dir: Path) -> None:
        """Show breadcrumb and siblings of a nested document."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["show", "backend/services/article", "-c", str(project_dir / "docnav.toml")],
        )

        assert result.exit_code == 0
        assert "Sidebar: docsSidebar" in result.output
        assert "Position: 2.2.1" in result.output
        assert "Depth: 2" in result.output
        assert "Breadcrumb: Backend > Services" in result.output
        assert "Previous: backend/services/core" in result.output
        assert "Next: backend/services/prompt-studio" in result.output

    def test__root_document(self, project_dir: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["show", "index", "-c", str(project_dir / "docnav.toml")])

        assert result.exit_code == 0
        assert "Label: Welcome" in result.output
        assert "Breadcrumb: (root)" in result.output
        assert "Previous: -" in result.output
        assert "Next: getting-started" in result.output

    def test__unknown_document__fails(self, project_dir: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["show", "nope", "-c", str(project_dir / "docnav.toml")])

        assert result.exit_code == 1
        assert "Unknown document id 'nope'" in result.output

    def test__verbose_flag__enables_debug_logging(self, project_dir: Path) -> None:
        runner = CliRunner()
        with patch("docnav.cli.logging.basicConfig") as basic_config:
            result = runner.invoke(
                cli,
                ["-v", "show", "index", "-c", str(project_dir / "docnav.toml")],
            )

        assert result.exit_code == 0
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG
