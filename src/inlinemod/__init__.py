"""
inlinemod: flatten a Rust crate's `mod name;` declarations into one syntax tree.

    from inlinemod import inline

    result = inline("src/lib.rs", track_errors=True)
    print(result.render())
"""

from .compiler.driver import InlinerBuilder, InliningResult, inline, parse_and_inline_modules
from .analysis.module_system import (
    ErrorKind,
    FileResolver,
    FsResolver,
    InlineError,
    LoadError,
    MemoryResolver,
    ModContext,
    ModSegment,
    SourceAnnotation,
    source_path,
    strip_source_path,
)
from .frontend.parser import ParseError
from .shared.nodes import Attribute, AttrStyle, Item, ItemMod, SourceFile
from .shared.printer import render
from .utils.config import PROVENANCE_ATTRIBUTE

__version__ = "0.1.0"

__all__ = [
    "inline",
    "parse_and_inline_modules",
    "InlinerBuilder",
    "InliningResult",
    "InlineError",
    "ErrorKind",
    "LoadError",
    "ParseError",
    "FileResolver",
    "FsResolver",
    "MemoryResolver",
    "ModContext",
    "ModSegment",
    "SourceAnnotation",
    "source_path",
    "strip_source_path",
    "PROVENANCE_ATTRIBUTE",
    "Attribute",
    "AttrStyle",
    "Item",
    "ItemMod",
    "SourceFile",
    "render",
]
