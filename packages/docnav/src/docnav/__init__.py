"""Docnav - navigation model for static documentation sites."""

from docnav.core.errors import (
    DanglingLinkError,
    DuplicateIdentifierError,
    EmptyCategoryError,
    InvalidNodeError,
    MissingLabelError,
    NavigationError,
    UnknownIdentifierError,
    ValidationError,
)
from docnav.core.navigation import ResolvedNavigation, SiblingNav, resolve
from docnav.core.nodes import Category, DocumentRef, NavigationSpec
from docnav.core.validator import validate
from docnav.sidebars import Sidebars, load_sidebars

__all__ = [
    "Category",
    "DanglingLinkError",
    "DocumentRef",
    "DuplicateIdentifierError",
    "EmptyCategoryError",
    "InvalidNodeError",
    "MissingLabelError",
    "NavigationError",
    "NavigationSpec",
    "ResolvedNavigation",
    "SiblingNav",
    "Sidebars",
    "UnknownIdentifierError",
    "ValidationError",
    "load_sidebars",
    "resolve",
    "validate",
]
