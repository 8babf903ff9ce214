"""
Syntax Tree Nodes

Item-level Rust syntax tree: just enough structure to find module items and
their attributes. Everything else is carried verbatim as source text.

Rust Pattern: syn::File / syn::ItemMod / syn::Attribute
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .source_location import SourceLocation


class AttrStyle(Enum):
    """Outer (`#[..]`, `///`) or inner (`#![..]`, `//!`) attribute"""
    OUTER = "outer"
    INNER = "inner"


@dataclass
class Attribute:
    """
    One attribute or doc comment.

    `text` is the exact source text and is what gets printed. `name` is the
    attribute path (`path`, `cfg`, `doc`, `rustfmt::skip`). `value` is the
    decoded literal for name-value attributes such as `#[path = "a.rs"]`,
    or the comment text for doc comments; None for every other form.
    """
    style: AttrStyle
    text: str
    name: str
    value: Optional[str] = None
    location: Optional[SourceLocation] = None
    is_sugared_doc: bool = False

    @property
    def is_outer(self) -> bool:
        return self.style is AttrStyle.OUTER

    @property
    def is_inner(self) -> bool:
        return self.style is AttrStyle.INNER


@dataclass
class Item:
    """Any item other than a module, kept verbatim"""
    text: str
    attrs: List[Attribute] = field(default_factory=list)
    location: Optional[SourceLocation] = None
    # Continuation lines of multi-line literals must never be re-indented
    has_multiline_literal: bool = False


@dataclass
class ItemMod:
    """
    Module item: `mod name;` (forward declaration) or `mod name { ... }`.

    `attrs` are declaration-site (outer) attributes, `inner_attrs` the
    body-level attributes printed inside the braces.
    """
    name: str
    attrs: List[Attribute] = field(default_factory=list)
    inner_attrs: List[Attribute] = field(default_factory=list)
    content: Optional[List["AnyItem"]] = None
    vis: str = ""
    is_unsafe: bool = False
    location: Optional[SourceLocation] = None
    # Identifier as written, e.g. `r#type` for a module named `type`
    ident: str = ""

    def __post_init__(self):
        if not self.ident:
            self.ident = self.name

    @property
    def is_inline(self) -> bool:
        return self.content is not None

    def __str__(self) -> str:
        vis = f"{self.vis} " if self.vis else ""
        body = " { ... }" if self.is_inline else ";"
        return f"{vis}mod {self.ident}{body}"


AnyItem = Union[Item, ItemMod]


@dataclass
class SourceFile:
    """
    Parsed source file.

    Rust Pattern: syn::File
    """
    attrs: List[Attribute] = field(default_factory=list)
    items: List[AnyItem] = field(default_factory=list)
    path: Optional[str] = None

    def modules(self) -> List[ItemMod]:
        """Top-level module items, in document order"""
        return [item for item in self.items if isinstance(item, ItemMod)]
