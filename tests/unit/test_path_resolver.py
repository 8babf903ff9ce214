"""
Tests for candidate path computation: ModContext, ModSegment and the path
vocabulary helpers. Pure, no resolver involved.
"""

from pathlib import Path

import pytest

from inlinemod.analysis.module_system import (
    ModContext,
    ModSegment,
    is_mod_file,
    is_root_like,
    marks_implicit_root,
)
from inlinemod.shared.errors import InlineModImplementationError
from inlinemod.shared.nodes import Attribute, AttrStyle, ItemMod


def _threads_local() -> ModContext:
    return ModContext([ModSegment.ident("threads"), ModSegment.ident("local")])


class TestRelativeTo:
    """Candidate files for nested module contexts"""

    def test_relative_to_lib(self):
        assert _threads_local().relative_to(Path("/src/lib.rs"), True) == [
            Path("/src/threads/local.rs"),
            Path("/src/threads/local/mod.rs"),
        ]

    def test_relative_to_mod(self):
        assert _threads_local().relative_to(Path("/src/runner/mod.rs"), False) == [
            Path("/src/runner/threads/local.rs"),
            Path("/src/runner/threads/local/mod.rs"),
        ]

    def test_relative_to_2018_mod(self):
        """Non-root files not named mod.rs keep their stem as a directory"""
        assert _threads_local().relative_to(Path("/src/runner.rs"), False) == [
            Path("/src/runner/threads/local.rs"),
            Path("/src/runner/threads/local/mod.rs"),
        ]

    def test_relative_to_non_standard_root(self):
        """A root file's own stem is not part of the directory"""
        assert _threads_local().relative_to(Path("/src/runner.rs"), True) == [
            Path("/src/threads/local.rs"),
            Path("/src/threads/local/mod.rs"),
        ]

    def test_relative_to_paths(self):
        ctx = ModContext([ModSegment.path("threads"), ModSegment.path("tls.rs")])
        assert ctx.relative_to(Path("/src/lib.rs"), True) == [Path("/src/threads/tls.rs")]

    def test_relative_to_path_around_ident(self):
        ctx = ModContext([ModSegment.path("threads"), ModSegment.ident("tls")])
        assert ctx.relative_to(Path("/src/lib.rs"), True) == [
            Path("/src/threads/tls.rs"),
            Path("/src/threads/tls/mod.rs"),
        ]

    def test_ident_around_path(self):
        ctx = ModContext([ModSegment.ident("outer"), ModSegment.path("inner/file.rs")])
        assert ctx.relative_to(Path("/src/lib.rs"), True) == [Path("/src/outer/inner/file.rs")]

    def test_explicit_path_gets_no_extension(self):
        ctx = ModContext([ModSegment.path("generated")])
        assert ctx.relative_to(Path("/src/lib.rs"), True) == [Path("/src/generated")]

    def test_single_ident(self):
        ctx = ModContext([ModSegment.ident("a")])
        assert ctx.relative_to("/crate/src/lib.rs", True) == [
            Path("/crate/src/a.rs"),
            Path("/crate/src/a/mod.rs"),
        ]

    def test_mod_rs_is_root_like_even_when_not_root(self):
        ctx = ModContext([ModSegment.ident("b")])
        assert ctx.relative_to("/crate/src/a/mod.rs", False) == [
            Path("/crate/src/a/b.rs"),
            Path("/crate/src/a/b/mod.rs"),
        ]

    def test_empty_context_is_an_implementation_error(self):
        with pytest.raises(InlineModImplementationError):
            ModContext().relative_to(Path("/src/lib.rs"), True)


class TestCandidateShape:
    """Properties that hold for every context"""

    @pytest.mark.parametrize("segments", [
        [ModSegment.ident("a")],
        [ModSegment.ident("a"), ModSegment.ident("b")],
        [ModSegment.path("x"), ModSegment.ident("b")],
        [ModSegment.ident("a"), ModSegment.path("y.rs"), ModSegment.ident("c")],
    ])
    @pytest.mark.parametrize("base,root", [
        ("/src/lib.rs", True),
        ("/src/a.rs", False),
        ("/src/a/mod.rs", False),
    ])
    def test_ident_last_gives_two_candidates(self, segments, base, root):
        candidates = ModContext(segments).relative_to(base, root)
        assert len(candidates) == 2
        assert candidates[0].suffix == ".rs"
        assert candidates[1].name == "mod.rs"
        assert candidates[0].with_suffix("") == candidates[1].parent

    @pytest.mark.parametrize("segments", [
        [ModSegment.path("x.rs")],
        [ModSegment.ident("a"), ModSegment.path("y.rs")],
        [ModSegment.path("p"), ModSegment.path("q/r.rs")],
    ])
    def test_path_last_gives_one_candidate(self, segments):
        assert len(ModContext(segments).relative_to("/src/lib.rs", True)) == 1

    def test_relative_to_does_not_change_the_context(self):
        ctx = _threads_local()
        ctx.relative_to("/src/lib.rs", True)
        assert ctx.segments == [ModSegment.ident("threads"), ModSegment.ident("local")]


class TestModContext:
    def test_push_pop_balance(self):
        ctx = ModContext()
        ctx.push(ModSegment.ident("a"))
        ctx.push(ModSegment.ident("b"))
        assert len(ctx) == 2
        assert ctx.pop() == ModSegment.ident("b")
        assert ctx.pop() == ModSegment.ident("a")
        assert ctx.pop() is None

    def test_entered_pops_on_exception(self):
        ctx = ModContext()
        with pytest.raises(RuntimeError):
            with ctx.entered(ModSegment.ident("a")):
                assert len(ctx) == 1
                raise RuntimeError("boom")
        assert len(ctx) == 0

    def test_is_last_ident(self):
        ctx = ModContext()
        assert not ctx.is_last_ident()
        ctx.push(ModSegment.path("x.rs"))
        assert not ctx.is_last_ident()
        ctx.push(ModSegment.ident("y"))
        assert ctx.is_last_ident()


class TestModSegment:
    def _path_attr(self, value: str) -> Attribute:
        return Attribute(style=AttrStyle.OUTER, text=f'#[path = "{value}"]', name="path", value=value)

    def test_from_item_uses_name(self):
        assert ModSegment.from_item(ItemMod(name="foo")) == ModSegment.ident("foo")

    def test_from_item_first_path_attribute_wins(self):
        item = ItemMod(name="foo", attrs=[self._path_attr("a.rs"), self._path_attr("b.rs")])
        assert ModSegment.from_item(item) == ModSegment.path("a.rs")

    def test_from_item_ignores_other_path_forms(self):
        other = Attribute(style=AttrStyle.OUTER, text="#[path(x)]", name="path")
        assert ModSegment.from_item(ItemMod(name="foo", attrs=[other])) == ModSegment.ident("foo")

    def test_from_item_ignores_inner_path_attribute(self):
        inner = Attribute(style=AttrStyle.INNER, text='#![path = "x.rs"]', name="path", value="x.rs")
        assert ModSegment.from_item(ItemMod(name="foo", attrs=[inner])) == ModSegment.ident("foo")


class TestPathVocabulary:
    @pytest.mark.parametrize("path,expected", [
        ("src/mod.rs", True),
        ("mod.rs", True),
        ("src/lib.rs", False),
        ("src/model.rs", False),
        ("src/mod.rs/other.rs", False),
    ])
    def test_is_mod_file(self, path, expected):
        assert is_mod_file(path) is expected
        assert marks_implicit_root(path) is expected

    def test_is_root_like(self):
        assert is_root_like("src/lib.rs", True)
        assert is_root_like("src/a/mod.rs", False)
        assert not is_root_like("src/lib.rs", False)
        assert not is_root_like("src/a.rs", False)
