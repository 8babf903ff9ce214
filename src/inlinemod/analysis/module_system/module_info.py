"""
Module System Types

Pure data structures shared by the path resolver, the resolvers and the
inliner: module path segments, failure kinds and failure records.

Rust Pattern: syn-inline-mod ModSegment / InlineError
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from ...shared.errors import Error, InlineModError
from ...shared.nodes import ItemMod
from ...shared.source_location import SourceLocation
from ...utils.config import (
    PATH_ATTRIBUTE,
    ERROR_CODE_FILE_NOT_FOUND,
    ERROR_CODE_MALFORMED,
    ERROR_CODE_CYCLIC,
)


@dataclass(frozen=True)
class ModSegment:
    """
    One step of the module path being resolved.

    Either a module name (`mod foo;` -> "foo") or an explicit path taken from
    a `#[path = "..."]` attribute, which may span several components.
    """
    value: str
    is_path: bool = False

    @classmethod
    def ident(cls, name: str) -> "ModSegment":
        return cls(name, is_path=False)

    @classmethod
    def path(cls, path: str) -> "ModSegment":
        return cls(path, is_path=True)

    @classmethod
    def from_item(cls, item: ItemMod) -> "ModSegment":
        """The first `#[path = "..."]` attribute wins; otherwise the module name."""
        for attr in item.attrs:
            if attr.is_outer and attr.name == PATH_ATTRIBUTE and attr.value is not None:
                return cls.path(attr.value)
        return cls.ident(item.name)

    @property
    def is_ident(self) -> bool:
        return not self.is_path

    def to_path(self) -> Path:
        return Path(self.value)

    def __str__(self) -> str:
        return f'#[path = "{self.value}"]' if self.is_path else self.value


class ErrorKind(Enum):
    """Why a module body could not be inlined"""
    UNREADABLE = "unreadable"   # missing, inaccessible or not valid UTF-8
    MALFORMED = "malformed"     # read, but does not parse
    CYCLIC = "cyclic"           # file is already being expanded higher up

    @property
    def code(self) -> str:
        return _ERROR_CODES[self]


_ERROR_CODES = {
    ErrorKind.UNREADABLE: ERROR_CODE_FILE_NOT_FOUND,
    ErrorKind.MALFORMED: ERROR_CODE_MALFORMED,
    ErrorKind.CYCLIC: ERROR_CODE_CYCLIC,
}


class LoadError(InlineModError):
    """
    Raised by a resolver when a location cannot be turned into a SourceFile.

    `cause` is the underlying OSError, ParseError or KeyError, when there is one.
    """
    def __init__(
        self,
        path: Path,
        kind: ErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
        location: Optional[SourceLocation] = None,
    ):
        super().__init__(message, location)
        self.path = Path(path)
        self.kind = kind
        self.cause = cause


@dataclass(frozen=True)
class InlineError:
    """
    A module declaration that was left unexpanded.

    Created once per failed declaration and never mutated.
    """
    src_path: Path            # file containing the `mod` item
    module_name: str          # name of the module that failed
    location: Optional[SourceLocation]  # span of the `mod` item
    path: Path                # candidate file that was tried
    kind: ErrorKind
    message: str = ""

    @property
    def line_column(self) -> Tuple[int, int]:
        if self.location is None:
            return (0, 0)
        return self.location.line_column

    @classmethod
    def from_load_error(cls, src_path: Path, item: ItemMod, error: LoadError) -> "InlineError":
        return cls(
            src_path=Path(src_path),
            module_name=item.name,
            location=item.location,
            path=error.path,
            kind=error.kind,
            message=error.message,
        )

    def to_diagnostic(self) -> Error:
        """Diagnostic for ErrorReporter"""
        if self.kind is ErrorKind.UNREADABLE:
            return Error(
                message=f"file not found for module `{self.module_name}`",
                location=self.location,
                code=self.kind.code,
                label=f"tried {self.path}",
                help=f"create `{self.path}` or add a `#[path]` attribute",
                note=self.message or None,
            )
        if self.kind is ErrorKind.MALFORMED:
            return Error(
                message=f"could not parse module `{self.module_name}`",
                location=self.location,
                code=self.kind.code,
                label=f"loaded from {self.path}",
                note=self.message or None,
            )
        return Error(
            message=f"module `{self.module_name}` includes itself",
            location=self.location,
            code=self.kind.code,
            label=f"{self.path} is already being inlined",
            note=self.message or None,
        )

    def __str__(self) -> str:
        line, column = self.line_column
        return (
            f"{self.src_path}:{line}:{column}: module `{self.module_name}` "
            f"not inlined from {self.path} ({self.kind.value})"
        )
