"""
Module Path Resolution

Pure path resolution for Rust `mod` items: which files may hold the body of
a module declared as `mod name;`.

Rust Pattern: rustc_expand::module::mod_file_path

- mod name; in src/lib.rs      -> src/name.rs, src/name/mod.rs
- mod name; in src/a/mod.rs    -> src/a/name.rs, src/a/name/mod.rs
- mod name; in src/a.rs        -> src/a/name.rs, src/a/name/mod.rs
- #[path = "x.rs"] mod name;   -> exactly one candidate, no extension added

Nothing here touches the file system.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from .module_info import ModSegment
from ...shared.errors import InlineModImplementationError
from ...utils.config import MOD_FILE_NAME, MODULE_FILE_EXTENSION

PathLike = Union[Path, str]


# =============================================================================
# Path vocabulary
# =============================================================================

def is_mod_file(path: PathLike) -> bool:
    """True for 2015-style `mod.rs` files."""
    return Path(path).name == MOD_FILE_NAME


def marks_implicit_root(path: PathLike) -> bool:
    """
    True when the file's own directory is the base for the modules it declares.

    Only `mod.rs` does this by name; crate roots (`lib.rs`, `main.rs`, or any
    file handed to rustc) are root-like because the caller says so.
    """
    return is_mod_file(path)


def is_root_like(path: PathLike, root: bool) -> bool:
    return root or marks_implicit_root(path)


# =============================================================================
# Resolution context
# =============================================================================

class ModContext:
    """
    The stack of `mod` segments between the current file and the declaration
    being expanded.

    Needed because a declaration nested in inline modules resolves relative
    to all of them: `mod a { mod b; }` in lib.rs looks for a/b.rs.
    """

    def __init__(self, segments: Optional[Iterable[ModSegment]] = None):
        self._segments: List[ModSegment] = list(segments or [])

    def push(self, segment: ModSegment) -> None:
        self._segments.append(segment)

    def pop(self) -> Optional[ModSegment]:
        return self._segments.pop() if self._segments else None

    @contextmanager
    def entered(self, segment: ModSegment) -> Iterator[None]:
        """
        Push `segment` for the duration of the block (exception-safe).

        Usage:
            with context.entered(ModSegment.from_item(item)):
                ...  # candidates computed here include `item`
        """
        self.push(segment)
        try:
            yield
        finally:
            self.pop()

    @property
    def segments(self) -> List[ModSegment]:
        return list(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[ModSegment]:
        return iter(list(self._segments))

    def __repr__(self) -> str:
        return f"ModContext({self._segments!r})"

    def relative_to(self, base: PathLike, root: bool) -> List[Path]:
        """
        Candidate files for the innermost segment, in the order they should be
        tried. Never empty.

        Args:
            base: file containing the outermost declaration on the stack
            root: whether `base` was handed to rustc directly

        Raises:
            InlineModImplementationError: if the context is empty
        """
        base = Path(base)
        parent = base.parent
        if not is_root_like(base, root):
            # src/a.rs declares its children under src/a/
            parent = parent / base.stem
        return [parent / end for end in self._to_paths()]

    def _to_paths(self) -> List[Path]:
        if not self._segments:
            raise InlineModImplementationError(
                "candidate paths requested for an empty module context"
            )
        buf = Path()
        for segment in self._segments:
            buf = buf / segment.to_path()

        # An explicit path has exactly one interpretation
        if not self.is_last_ident():
            return [buf]

        # name.rs is tried before name/mod.rs
        return [buf.with_suffix(MODULE_FILE_EXTENSION), buf / MOD_FILE_NAME]

    def is_last_ident(self) -> bool:
        return bool(self._segments) and self._segments[-1].is_ident
