"""
Parser

Rust Pattern: syn::parse_file
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

from lark import Lark
from lark.exceptions import UnexpectedInput, VisitError, ParseError as LarkParseError

from ..shared.errors import InlineModError
from ..shared.nodes import SourceFile
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_PARSER_CACHE_FILE
from ..utils.io_utils import read_source_file
from .comments import mask_nested_comments
from .transformers.base import SyntaxTransformer, ItemStructureError

logger = logging.getLogger("inlinemod.frontend.parser")

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"
BYTE_ORDER_MARK = "\ufeff"


class ParseError(InlineModError):
    """Parse error with source location"""
    def __init__(self, message: str, source_file: str, location: Optional[SourceLocation] = None):
        self.source_file = source_file
        super().__init__(f"{message} in {source_file}", location)
        self.message = message


class Parser:
    """
    Parser (syn naming: syn::parse_file).

    - Takes source text, returns a SourceFile
    - Preserves source locations
    - Converts every failure into ParseError
    - Uses a Lark LALR parser with native grammar caching
    """

    def __init__(self, cache_file: Optional[str] = DEFAULT_PARSER_CACHE_FILE):
        self.parser = Lark.open(
            str(GRAMMAR_PATH),
            start='start',
            parser='lalr',              # Required for caching
            cache=cache_file or False,
            propagate_positions=True,
            maybe_placeholders=False,
        )
        self.transformer = SyntaxTransformer()
        logger.debug(f"Grammar loaded from {GRAMMAR_PATH} (cache: {cache_file or 'disabled'})")

    def parse(self, source: str, source_file: str = "lib.rs") -> SourceFile:
        """Parse source text into a SourceFile."""
        if source.startswith(BYTE_ORDER_MARK):
            source = source[len(BYTE_ORDER_MARK):]
        try:
            tree = self.parser.parse(mask_nested_comments(source))
        except UnexpectedInput as e:
            # UnexpectedEOF carries line -1
            line = e.line if getattr(e, "line", -1) > 0 else source.count("\n") + 1
            column = e.column if getattr(e, "column", -1) > 0 else 1
            location = SourceLocation(file=source_file, line=line, column=column)
            raise ParseError(f"Parse error: {_first_line(e)}", source_file, location) from e
        except LarkParseError as e:
            raise ParseError(f"Parse error: {e}", source_file) from e

        self.transformer.source = source
        self.transformer.current_file = source_file
        try:
            return self.transformer.transform(tree)
        except VisitError as e:
            orig = e.orig_exc
            if isinstance(orig, ItemStructureError):
                location = SourceLocation(file=source_file, line=orig.line, column=orig.column)
                raise ParseError(orig.message, source_file, location) from orig
            if isinstance(orig, RecursionError):
                raise ParseError("Parse error: token trees nested too deeply", source_file) from orig
            raise
        except RecursionError as e:
            # The tree transform recurses once per nesting level
            raise ParseError("Parse error: token trees nested too deeply", source_file) from e
        finally:
            self.transformer.source = ""

    def parse_file(self, path: Union[Path, str]) -> SourceFile:
        """Read and parse a file (I/O errors propagate as OSError)."""
        return self.parse(read_source_file(path), str(path))


def _first_line(error: Any) -> str:
    text = str(error).strip()
    return text.split("\n", 1)[0] if text else type(error).__name__


@lru_cache(maxsize=1)
def default_parser() -> Parser:
    """Shared parser instance (grammar loading is the expensive part)."""
    return Parser()


def parse_source(source: str, source_file: str = "lib.rs") -> SourceFile:
    return default_parser().parse(source, source_file)


def parse_file(path: Union[Path, str]) -> SourceFile:
    return default_parser().parse_file(path)
