"""
Shared components: syntax tree, locations, diagnostics.

Rust Pattern: Shared foundational types and utilities
"""

from .source_location import SourceLocation
from .errors import Error, ErrorReporter, InlineModError, InlineModImplementationError
from .nodes import AttrStyle, Attribute, Item, ItemMod, SourceFile, AnyItem
from .ast_visitor import MutVisitor
from .printer import render, render_item

__all__ = [
    "SourceLocation",
    "Error",
    "ErrorReporter",
    "InlineModError",
    "InlineModImplementationError",
    "AttrStyle",
    "Attribute",
    "Item",
    "ItemMod",
    "SourceFile",
    "AnyItem",
    "MutVisitor",
    "render",
    "render_item",
]
