"""
Inliner Driver

Rust Pattern: rustc_driver::driver
Entry points that configure a ModuleInliner, run it from a crate root and
hand back the flattened tree with any per-module failures.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from ..analysis.module_system import (
    FileResolver,
    FsResolver,
    InlineError,
    ModuleInliner,
    OnLoad,
)
from ..shared.errors import ErrorReporter
from ..shared.nodes import SourceFile
from ..shared.printer import render

logger = logging.getLogger(__name__)


@dataclass
class InliningResult:
    """Inlined tree plus the modules that could not be expanded"""
    file: SourceFile
    errors: List[InlineError] = field(default_factory=list)
    # Text of every file that was read, keyed like SourceLocation.file
    sources: Dict[str, str] = field(default_factory=dict, repr=False)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def render(self) -> str:
        return render(self.file)

    def reporter(self) -> ErrorReporter:
        reporter = ErrorReporter(self.sources)
        for error in self.errors:
            reporter.add(error.to_diagnostic())
        return reporter

    def format_errors(self, color: Optional[bool] = None) -> str:
        """Rustc-style report of every failure; "" when there are none."""
        if not self.errors:
            return ""
        return self.reporter().format_all_errors(color=color)

    def __iter__(self) -> Iterator:
        # Allows `file, errors = inline(...)`
        return iter((self.file, self.errors))


def inline(
    path: Union[Path, str],
    *,
    root: bool = True,
    track_errors: bool = False,
    annotate_paths: bool = False,
    on_load: Optional[OnLoad] = None,
    resolver: Optional[FileResolver] = None,
) -> InliningResult:
    """
    Load `path` and recursively inline every `mod name;` it declares.

    Args:
        path: the file to start from
        root: treat `path` as a crate root (lib.rs, main.rs, ...)
        track_errors: collect per-module failures in the result
        annotate_paths: mark every inlined module with the file it came from
        on_load: called with (path, text) for every load attempt; text is
            None when the file could not be read
        resolver: where files come from; defaults to the file system

    Raises:
        LoadError: if `path` itself cannot be read or parsed
        ValueError: if both `on_load` and `resolver` are given
    """
    path = Path(path)

    if resolver is None:
        resolver = FsResolver(on_load=on_load)
    elif on_load is not None:
        raise ValueError("on_load cannot be combined with a custom resolver; pass it to the resolver instead")

    errors: List[InlineError] = []
    inliner = ModuleInliner(
        path,
        root=root,
        resolver=resolver,
        error_log=errors if track_errors else None,
        annotate_paths=annotate_paths,
    )
    file = inliner.visit()
    logger.debug(f"inlined {path}: {len(errors)} module(s) failed")
    # Resolvers without a `sources` map still work; diagnostics just lose their snippets
    sources = dict(getattr(resolver, "sources", {}))
    return InliningResult(file=file, errors=errors, sources=sources)


def parse_and_inline_modules(path: Union[Path, str]) -> SourceFile:
    """
    Inline a crate root with default settings and return the tree.

    Submodules that cannot be loaded are left as `mod name;` declarations.
    """
    return inline(path).file


class InlinerBuilder:
    """
    Fluent configuration for `inline`.

    Usage:
        result = (
            InlinerBuilder()
            .error_tracking(True)
            .annotate_paths(True)
            .parse_and_inline_modules("src/lib.rs")
        )
    """

    def __init__(self):
        self._root = True
        self._track_errors = False
        self._annotate_paths = False

    def root(self, root: bool) -> "InlinerBuilder":
        """Whether the starting file is a crate root. Defaults to True."""
        self._root = root
        return self

    def error_tracking(self, track: bool) -> "InlinerBuilder":
        self._track_errors = track
        return self

    def annotate_paths(self, annotate: bool) -> "InlinerBuilder":
        self._annotate_paths = annotate
        return self

    def parse_and_inline_modules(self, path: Union[Path, str]) -> InliningResult:
        return self._run(path)

    def inline_with_callback(self, path: Union[Path, str], on_load: OnLoad) -> InliningResult:
        return self._run(path, on_load=on_load)

    def inline_with_resolver(self, path: Union[Path, str], resolver: FileResolver) -> InliningResult:
        return self._run(path, resolver=resolver)

    def _run(
        self,
        path: Union[Path, str],
        on_load: Optional[OnLoad] = None,
        resolver: Optional[FileResolver] = None,
    ) -> InliningResult:
        return inline(
            path,
            root=self._root,
            track_errors=self._track_errors,
            annotate_paths=self._annotate_paths,
            on_load=on_load,
            resolver=resolver,
        )
