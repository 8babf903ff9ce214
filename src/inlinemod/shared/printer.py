"""
Source printer: turns a (possibly flattened) syntax tree back into Rust text.
"""

from typing import List

from .nodes import Attribute, Item, ItemMod, SourceFile, AnyItem
from ..utils.config import INDENT


def render(file: SourceFile) -> str:
    """Render a whole file. Returns "" for an empty file."""
    out: List[str] = []
    for attr in file.attrs:
        out.append(_render_attr(attr, 0))
    for item in file.items:
        _render_item(item, 0, out)
    return "\n".join(out) + "\n" if out else ""


def render_item(item: AnyItem) -> str:
    out: List[str] = []
    _render_item(item, 0, out)
    return "\n".join(out)


def _render_item(item: AnyItem, depth: int, out: List[str]) -> None:
    for attr in item.attrs:
        out.append(_render_attr(attr, depth))
    if isinstance(item, ItemMod):
        _render_mod(item, depth, out)
    else:
        out.append(_indent(item.text, depth, all_lines=not item.has_multiline_literal))


def _render_mod(item: ItemMod, depth: int, out: List[str]) -> None:
    prefix = INDENT * depth
    head = ""
    if item.vis:
        head += item.vis + " "
    if item.is_unsafe:
        head += "unsafe "
    head += f"mod {item.ident}"

    if item.content is None:
        out.append(f"{prefix}{head};")
        return
    if not item.content and not item.inner_attrs:
        out.append(f"{prefix}{head} {{}}")
        return

    out.append(f"{prefix}{head} {{")
    for attr in item.inner_attrs:
        out.append(_render_attr(attr, depth + 1))
    for child in item.content:
        _render_item(child, depth + 1, out)
    out.append(f"{prefix}}}")


def _render_attr(attr: Attribute, depth: int) -> str:
    # Block doc comments are free text; other attributes may hold string literals
    return _indent(attr.text, depth, all_lines=attr.is_sugared_doc)


def _indent(text: str, depth: int, all_lines: bool) -> str:
    if depth == 0:
        return text
    prefix = INDENT * depth
    lines = text.split("\n")
    if all_lines:
        return "\n".join(prefix + line if line.strip() else line for line in lines)
    return "\n".join([prefix + lines[0]] + lines[1:])
