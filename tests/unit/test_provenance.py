"""
Tests for source-path markers on inlined modules.
"""

import os
from pathlib import Path

import pytest

from inlinemod import PROVENANCE_ATTRIBUTE, inline, source_path, strip_source_path
from inlinemod.analysis.module_system import annotate_source, source_attribute
from inlinemod.shared.nodes import Attribute, AttrStyle, ItemMod

LIB = "/crate/src/lib.rs"


def _attr(text: str, name: str) -> Attribute:
    return Attribute(style=AttrStyle.OUTER, text=text, name=name)


class TestMarker:
    def test_marker_text(self):
        attr = source_attribute(Path("src/a.rs"))
        assert attr.text == '#[inlinemod_source = b"src/a.rs"]'
        assert attr.name == PROVENANCE_ATTRIBUTE
        assert attr.is_outer

    def test_lookup_splits_surrounding_attributes(self):
        doc = _attr("/// docs", "doc")
        cfg = _attr("#[cfg(test)]", "cfg")
        attrs = [doc, source_attribute(Path("x/y.rs")), cfg]
        found = source_path(attrs)
        assert found.path == Path("x/y.rs")
        assert found.before == (doc,)
        assert found.after == (cfg,)
        assert found.user_attrs == [doc, cfg]

    def test_lookup_without_marker(self):
        assert source_path([_attr("#[cfg(test)]", "cfg")]) is None
        assert source_path([]) is None

    def test_string_literal_is_not_a_marker(self):
        fake = _attr('#[inlinemod_source = "x.rs"]', PROVENANCE_ATTRIBUTE)
        assert source_path([fake]) is None
        assert strip_source_path([fake]) == [fake]

    def test_strip(self):
        cfg = _attr("#[cfg(test)]", "cfg")
        assert strip_source_path([source_attribute(Path("a.rs")), cfg]) == [cfg]

    def test_annotate_prepends(self):
        cfg = _attr("#[cfg(test)]", "cfg")
        item = ItemMod(name="a", attrs=[cfg])
        annotate_source(item, Path("a.rs"))
        assert item.attrs[0].name == PROVENANCE_ATTRIBUTE
        assert item.attrs[1] is cfg


class TestAnnotatedInlining:
    def _crate(self, memory_crate):
        return memory_crate({
            LIB: "#[cfg(test)]\nmod a;\nmod gone;",
            "/crate/src/a.rs": "mod b;",
            "/crate/src/a/b.rs": "fn b() {}",
        })

    def test_every_inlined_module_is_marked(self, memory_crate):
        result = inline(LIB, resolver=self._crate(memory_crate), annotate_paths=True)
        a, gone = result.file.items
        assert source_path(a.attrs).path == Path("/crate/src/a.rs")
        assert [attr.text for attr in source_path(a.attrs).after] == ["#[cfg(test)]"]
        assert source_path(a.content[0].attrs).path == Path("/crate/src/a/b.rs")
        assert source_path(gone.attrs) is None

    def test_not_marked_by_default(self, memory_crate):
        a = inline(LIB, resolver=self._crate(memory_crate)).file.items[0]
        assert source_path(a.attrs) is None

    def test_marker_survives_rendering(self, parser, memory_crate):
        text = inline(LIB, resolver=self._crate(memory_crate), annotate_paths=True).render()
        assert '#[inlinemod_source = b"/crate/src/a.rs"]\n#[cfg(test)]\nmod a {' in text
        reparsed = parser.parse(text)
        a = reparsed.items[0]
        assert source_path(a.attrs).path == Path("/crate/src/a.rs")
        assert [attr.text for attr in strip_source_path(a.attrs)] == ["#[cfg(test)]"]

    @pytest.mark.skipif(os.name == "nt", reason="arbitrary path bytes are a POSIX feature")
    def test_non_utf8_path_round_trips(self, parser, memory_crate):
        root = os.fsdecode(b"/crate/\xff\xfe dir/lib.rs")
        child = os.fsdecode(b"/crate/\xff\xfe dir/a.rs")
        resolver = memory_crate({root: "mod a;", child: "fn a() {}"})
        text = inline(root, resolver=resolver, annotate_paths=True).render()
        assert text.isascii()
        assert '\\xff\\xfe dir/a.rs"]' in text
        found = source_path(parser.parse(text).items[0].attrs)
        assert os.fsencode(found.path) == b"/crate/\xff\xfe dir/a.rs"
