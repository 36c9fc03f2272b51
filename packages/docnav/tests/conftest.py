"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
from docnav.core.navigation import ResolvedNavigation, resolve
from docnav.core.nodes import NavigationSpec


@pytest.fixture
def sidebar_data() -> list:
    """Sidebar declaration shaped like a real documentation site."""
    return [
        "index",
        "getting-started",
        {
            "type": "category",
            "label": "Backend",
            "items": [
                "backend/getting-started",
                {
                    "type": "category",
                    "label": "Architecture",
                    "items": [
                        "backend/architecture/overview",
                        "backend/architecture/services",
                        "backend/architecture/workflow",
                    ],
                },
                {
                    "type": "category",
                    "label": "Services",
                    "link": "backend/services/core",
                    "items": [
                        "backend/services/core",
                        "backend/services/article",
                        "backend/services/prompt-studio",
                    ],
                },
            ],
        },
        {
            "type": "category",
            "label": "Frontend",
            "collapsed": False,
            "items": [
                "frontend/getting-started",
                {"type": "doc", "id": "frontend/development/setup", "label": "Dev Setup"},
            ],
        },
    ]


@pytest.fixture
def navigation(sidebar_data: list) -> ResolvedNavigation:
    """Resolved navigation for sidebar_data."""
    return resolve(NavigationSpec.from_data(sidebar_data))


@pytest.fixture
def project_dir(tmp_path: Path, sidebar_data: list) -> Path:
    """Create a project with docnav.toml, sidebars.json and docs sources."""
    (tmp_path / "docnav.toml").write_text("""
[site]
title = "Base Library Documentation"
url = "https://docs.example.com"

[navigation]
sidebars_file = "sidebars.json"
""")
    (tmp_path / "sidebars.json").write_text(
        json.dumps({"docsSidebar": sidebar_data, "apiSidebar": ["api/overview"]}),
    )

    docs = tmp_path / "docs"
    (docs / "backend").mkdir(parents=True)
    (docs / "index.md").write_text("# Welcome\n\nHello.")
    (docs / "getting-started.md").write_text("No heading here.")
    (docs / "backend" / "getting-started.md").write_text("# Backend Quickstart\n")

    return tmp_path
