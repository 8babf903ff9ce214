"""Module system: path resolution, content resolvers, inlining."""

from .module_info import ModSegment, ErrorKind, LoadError, InlineError
from .path_resolver import ModContext, is_mod_file, marks_implicit_root, is_root_like
from .module_loader import FileResolver, FsResolver, MemoryResolver, OnLoad
from .module_inliner import ModuleInliner
from .provenance import (
    SourceAnnotation,
    annotate_source,
    source_attribute,
    source_path,
    strip_source_path,
)

__all__ = [
    'ModSegment',
    'ErrorKind',
    'LoadError',
    'InlineError',
    'ModContext',
    'is_mod_file',
    'marks_implicit_root',
    'is_root_like',
    'FileResolver',
    'FsResolver',
    'MemoryResolver',
    'OnLoad',
    'ModuleInliner',
    'SourceAnnotation',
    'annotate_source',
    'source_attribute',
    'source_path',
    'strip_source_path',
]
