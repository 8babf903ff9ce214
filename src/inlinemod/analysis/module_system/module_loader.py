"""
Module Loader

Content resolvers: turn a candidate location into a parsed SourceFile.

The inliner only needs two operations, so anything with `path_exists` and
`resolve` can stand in for the file system (tests use in-memory maps).
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Union

from typing_extensions import Protocol, TypeAlias

from .module_info import ErrorKind, LoadError
from ...frontend.parser import Parser, ParseError, default_parser
from ...shared.nodes import SourceFile
from ...utils.io_utils import read_source_file, path_key

logger = logging.getLogger(__name__)

PathLike: TypeAlias = Union[Path, str]

# Called once per attempted load with the raw text, or None if it could not be read
OnLoad: TypeAlias = Callable[[Path, Optional[str]], None]


class FileResolver(Protocol):
    """Anything that can check for and load module source files."""

    def path_exists(self, path: Path) -> bool:
        """Check if `path` exists in the backing store."""
        ...

    def resolve(self, path: Path) -> SourceFile:
        """
        Load and parse `path`.

        Raises:
            LoadError: kind UNREADABLE if it cannot be read, MALFORMED if it
                does not parse
        """
        ...


class _ParsingResolver:
    """Shared read-notify-parse sequence for the concrete resolvers"""

    def __init__(self, on_load: Optional[OnLoad] = None, parser: Optional[Parser] = None):
        self.on_load = on_load
        self._parser = parser
        # Text of every file handed to the parser, keyed like SourceLocation.file
        self.sources: Dict[str, str] = {}

    @property
    def parser(self) -> Parser:
        if self._parser is None:
            self._parser = default_parser()
        return self._parser

    def _notify(self, path: Path, contents: Optional[str]) -> None:
        if self.on_load is not None:
            self.on_load(path, contents)

    def _parse(self, path: Path, source: str) -> SourceFile:
        self.sources[str(path)] = source
        try:
            return self.parser.parse(source, str(path))
        except ParseError as e:
            raise LoadError(path, ErrorKind.MALFORMED, e.message, cause=e, location=e.location) from e


class FsResolver(_ParsingResolver):
    """Resolver backed by the real file system (UTF-8 source files)."""

    def path_exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def resolve(self, path: Path) -> SourceFile:
        path = Path(path)
        try:
            source = read_source_file(path)
        except (OSError, UnicodeDecodeError) as e:
            self._notify(path, None)
            raise LoadError(path, ErrorKind.UNREADABLE, f"could not read {path}: {e}", cause=e) from e
        logger.debug(f"FsResolver: read {path} ({len(source)} chars)")
        # The callback sees the text whether or not it parses
        self._notify(path, source)
        return self._parse(path, source)


class MemoryResolver(_ParsingResolver):
    """
    Resolver backed by a dict of path -> source text.

    Paths are compared lexically, so `./src/a.rs` and `src/a.rs` are the same
    file. Used by tests and by tools that already hold sources in memory.
    """

    def __init__(
        self,
        files: Optional[Mapping[PathLike, str]] = None,
        on_load: Optional[OnLoad] = None,
        parser: Optional[Parser] = None,
    ):
        super().__init__(on_load=on_load, parser=parser)
        self._files: Dict[str, str] = {}
        for path, contents in (files or {}).items():
            self.register(path, contents)

    def register(self, path: PathLike, contents: str) -> "MemoryResolver":
        self._files[path_key(path)] = contents
        return self

    def path_exists(self, path: Path) -> bool:
        return path_key(path) in self._files

    def resolve(self, path: Path) -> SourceFile:
        path = Path(path)
        try:
            source = self._files[path_key(path)]
        except KeyError as e:
            self._notify(path, None)
            raise LoadError(path, ErrorKind.UNREADABLE, f"{path} is not registered", cause=e) from e
        self._notify(path, source)
        return self._parse(path, source)
