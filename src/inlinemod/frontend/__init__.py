"""Frontend: Rust source text to syntax tree."""

from .parser import Parser, ParseError, default_parser, parse_source, parse_file

__all__ = ["Parser", "ParseError", "default_parser", "parse_source", "parse_file"]
