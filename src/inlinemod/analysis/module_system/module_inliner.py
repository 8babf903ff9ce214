"""
Module Inliner

Recursive walk that replaces every `mod name;` with the parsed, recursively
inlined body of the file it refers to.

Rust Pattern: rustc_expand module loading (expand `mod foo;` in place)

- Inline bodies (`mod a { ... }`) are walked without touching the resolver
- Forward declarations are resolved against the current ModContext
- A failure leaves the declaration as-is and is recorded, never raised
- Loads happen in document order, depth-first
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .module_info import ErrorKind, InlineError, LoadError, ModSegment
from .module_loader import FileResolver
from .path_resolver import ModContext
from .provenance import annotate_source
from ...shared.ast_visitor import MutVisitor
from ...shared.nodes import ItemMod, SourceFile
from ...utils.io_utils import path_key

logger = logging.getLogger(__name__)


class ModuleInliner(MutVisitor):
    """
    Inlines the modules of one file.

    A fresh ModuleInliner is created for every file that gets loaded; they all
    share the same resolver and error log.
    """

    def __init__(
        self,
        path: Union[Path, str],
        root: bool,
        resolver: FileResolver,
        error_log: Optional[List[InlineError]] = None,
        annotate_paths: bool = False,
        expanding: Tuple[str, ...] = (),
    ):
        """
        Args:
            path: the file this inliner loads and walks
            root: whether `path` is a crate root (see is_root_like)
            resolver: shared by every nested inliner
            error_log: where failures are appended; None drops them
            annotate_paths: add a source-path marker to each inlined module
            expanding: files currently being expanded above this one
        """
        self.path = Path(path)
        self.root = root
        self.resolver = resolver
        self.error_log = error_log
        self.annotate_paths = annotate_paths
        self.mod_context = ModContext()
        self._expanding = expanding + (path_key(self.path),)

    def visit(self) -> SourceFile:
        """
        Load this inliner's file and inline everything it declares.

        Raises:
            LoadError: if this file itself cannot be read or parsed
        """
        syntax = self.resolver.resolve(self.path)
        self.visit_file(syntax)
        return syntax

    def visit_item_mod(self, node: ItemMod) -> None:
        with self.mod_context.entered(ModSegment.from_item(node)):
            if node.content is not None:
                # Nested declarations still resolve through this one
                super().visit_item_mod(node)
            else:
                self._expand(node)

    def _expand(self, node: ItemMod) -> None:
        candidates = self.mod_context.relative_to(self.path, self.root)
        chosen = self._first_existing(candidates)
        logger.debug(f"{self.path}: mod {node.name} -> {chosen} (candidates: {', '.join(map(str, candidates))})")

        if path_key(chosen) in self._expanding:
            self._record(node, LoadError(
                chosen,
                ErrorKind.CYCLIC,
                f"{chosen} is already being inlined: {' -> '.join(self._expanding)}",
            ))
            return

        inliner = ModuleInliner(
            chosen,
            root=False,
            resolver=self.resolver,
            error_log=self.error_log,
            annotate_paths=self.annotate_paths,
            expanding=self._expanding,
        )
        try:
            syntax = inliner.visit()
        except LoadError as e:
            self._record(node, e)
            return

        if self.annotate_paths:
            annotate_source(node, chosen)
        node.inner_attrs.extend(syntax.attrs)
        node.content = syntax.items

    def _first_existing(self, candidates: List[Path]) -> Path:
        """First candidate that exists; the last one if none do, so the load fails loudly"""
        for candidate in candidates:
            if self.resolver.path_exists(candidate):
                return candidate
        return candidates[-1]

    def _record(self, node: ItemMod, error: LoadError) -> None:
        logger.warning(f"{self.path}: module '{node.name}' not inlined: {error.message}")
        if self.error_log is not None:
            self.error_log.append(InlineError.from_load_error(self.path, node, error))
