"""
Source-path annotations for inlined modules.

When path annotation is on, every inlined module gets one extra outer
attribute recording the file its body came from:

    #[inlinemod_source = b"src/first/mod.rs"]
    mod first { ... }

The payload is a byte-string literal of the OS-level path bytes, so any
path (including ones that are not valid UTF-8) reads back byte-for-byte.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ...frontend.transformers.literals import LiteralError, LiteralParser
from ...shared.nodes import Attribute, AttrStyle, ItemMod
from ...utils.config import PROVENANCE_ATTRIBUTE

RE_SOURCE_ATTR = re.compile(
    r"^#\s*\[\s*" + re.escape(PROVENANCE_ATTRIBUTE) + r"\s*=\s*(?P<literal>[\s\S]*?)\s*\]$"
)


@dataclass(frozen=True)
class SourceAnnotation:
    """Recorded origin of an inlined module, plus the attributes around the marker"""
    path: Path
    before: Tuple[Attribute, ...]
    after: Tuple[Attribute, ...]

    @property
    def user_attrs(self) -> List[Attribute]:
        """The attributes with the marker removed"""
        return list(self.before) + list(self.after)


def source_attribute(path: Path) -> Attribute:
    literal = LiteralParser.quote_bytes(os.fsencode(path))
    return Attribute(
        style=AttrStyle.OUTER,
        text=f"#[{PROVENANCE_ATTRIBUTE} = {literal}]",
        name=PROVENANCE_ATTRIBUTE,
    )


def annotate_source(item: ItemMod, path: Path) -> None:
    """Prepend the marker to the module's declaration-site attributes."""
    item.attrs.insert(0, source_attribute(path))


def decode_source_attribute(attr: Attribute) -> Optional[Path]:
    """Path recorded in `attr`, or None if it is not a well-formed marker."""
    if attr.name != PROVENANCE_ATTRIBUTE or not attr.is_outer:
        return None
    match = RE_SOURCE_ATTR.match(attr.text.strip())
    if match is None:
        return None
    try:
        data = LiteralParser.parse_bytes(match.group("literal"))
    except LiteralError:
        return None
    if data is None:
        return None
    return Path(os.fsdecode(data))


def source_path(attrs: Sequence[Attribute]) -> Optional[SourceAnnotation]:
    """
    Find the first source-path marker in `attrs`.

    Returns None when the list has no (well-formed) marker.
    """
    for index, attr in enumerate(attrs):
        path = decode_source_attribute(attr)
        if path is not None:
            return SourceAnnotation(path=path, before=tuple(attrs[:index]), after=tuple(attrs[index + 1:]))
    return None


def strip_source_path(attrs: Sequence[Attribute]) -> List[Attribute]:
    """`attrs` without any source-path markers"""
    return [attr for attr in attrs if decode_source_attribute(attr) is None]
