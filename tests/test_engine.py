"""Tests for the heuristic line-scanning engine."""

import re

import pytest

from code_outline.models import ElementKind, Visibility
from code_outline.parsers import HeuristicParser, LanguageProfile, ParserRegistry, rule
from code_outline.parsers.profile import (
    MAX_LOOKAHEAD,
    METHOD_BY_RECEIVER,
    capitalized_is_public,
    underscore_is_private,
)

TOY = LanguageProfile(
    name="toy",
    extensions=(".toy",),
    rules=(
        rule(ElementKind.MODULE, r"^module\s+(?P<name>\w+)", keywords=("module",)),
        rule(
            ElementKind.TYPE,
            r"^(?:public\s+|private\s+)?(?P<keyword>class)\s+(?P<name>\w+)(?:\s+extends\s+(?P<parent>\w+))?",
            keywords=("class",),
        ),
        rule(ElementKind.FUNCTION, r"(?:^|\s)(?P<keyword>fn)\s+(?P<name>\w+)"),
    ),
    declaration_markers=("fn",),
    visibility_keywords=(("public", Visibility.PUBLIC), ("private", Visibility.PRIVATE)),
)

REGISTRY = ParserRegistry.with_builtins()


def _parse(profile, source):
    return HeuristicParser(profile).parse(source, "sample").elements


def _outline(extension, source):
    return REGISTRY.dispatch(extension).parse(source, f"sample{extension}").elements


class TestRuleConstruction:
    def test_pattern_requires_name_group(self):
        with pytest.raises(ValueError):
            rule(ElementKind.FUNCTION, r"^fn\s+(\w+)")

    def test_lookahead_is_capped(self):
        r = rule(ElementKind.TYPE, r"(?P<name>\w+)\s*=", confirm="class", lookahead=50)
        assert r.lookahead == MAX_LOOKAHEAD

    def test_keywords_gate_the_rule(self):
        r = rule(ElementKind.TYPE, r"class\s+(?P<name>\w+)", keywords=("class",))
        assert r.gated
        assert r.applies_to("public class Foo")
        assert not r.applies_to("classify(x)")

    def test_ungated_rule_always_applies(self):
        r = rule(ElementKind.FUNCTION, r"(?P<name>\w+)\(")
        assert not r.gated
        assert r.applies_to("anything")


class TestVisibilityRules:
    def test_capitalized_is_public(self):
        assert capitalized_is_public("Exported") is Visibility.PUBLIC
        assert capitalized_is_public("local") is Visibility.PRIVATE

    def test_underscore_is_private(self):
        assert underscore_is_private("_hidden") is Visibility.PRIVATE
        assert underscore_is_private("visible") is Visibility.PUBLIC
        assert underscore_is_private("__init__") is Visibility.PUBLIC


class TestToyProfile:
    def test_declarations_in_order(self):
        source = '''\
module shapes

// A shape.
public class Circle extends Shape
  fn area
'''
        elements = _parse(TOY, source)
        assert [(e.kind, e.name) for e in elements] == [
            (ElementKind.MODULE, "shapes"),
            (ElementKind.TYPE, "Circle"),
            (ElementKind.METHOD, "area"),
        ]
        circle = elements[1]
        assert circle.parent == "Shape"
        assert circle.visibility is Visibility.PUBLIC
        assert circle.documentation == "A shape."
        assert circle.source_line == 4
        assert circle.keyword == "class"

    def test_unindented_callable_is_function(self):
        elements = _parse(TOY, "fn main\n")
        assert elements[0].kind is ElementKind.FUNCTION

    def test_control_line_with_marker_is_kept(self):
        elements = _parse(TOY, "if ready fn go\n")
        assert [e.name for e in elements] == ["go"]

    def test_control_line_without_marker_is_rejected(self):
        assert _parse(TOY, "if ready go()\n") == []

    def test_keyword_rule_keeps_control_word_names(self):
        elements = _parse(TOY, "fn new\nfn delete\n")
        assert [e.name for e in elements] == ["new", "delete"]

    def test_statement_keyword_name_is_dropped(self):
        bare = LanguageProfile(
            name="bare",
            extensions=(".bare",),
            rules=(rule(ElementKind.FUNCTION, r"^\w+\s+(?P<name>\w+)\s*\("),),
        )
        assert _parse(bare, "x while (ready) {\n") == []
        assert [e.name for e in _parse(bare, "Self new(size) {\n")] == ["new"]

    def test_gated_rule_without_name_drops_line(self):
        # "class" claims the line, so the fn rule is never tried.
        assert _parse(TOY, "class = fn helper\n") == []

    def test_comments_and_blank_lines_ignored(self):
        assert _parse(TOY, "// fn hidden\n\n   \n") == []

    def test_default_visibility(self):
        elements = _parse(TOY, "fn run\n")
        assert elements[0].visibility is Visibility.UNSPECIFIED

    def test_empty_content(self):
        result = HeuristicParser(TOY).parse("", "empty.toy")
        assert result.elements == []
        assert result.language == "toy"
        assert result.file_path == "empty.toy"


class TestLookahead:
    PROFILE = LanguageProfile(
        name="block",
        extensions=(".blk",),
        rules=(
            rule(
                ElementKind.TYPE,
                r"^(?P<name>\w+)\s*=",
                confirm=r"^\s*(?P<keyword>record|class)\b",
                lookahead=3,
            ),
        ),
    )

    def test_confirm_on_same_line(self):
        elements = _parse(self.PROFILE, "Point = record\n")
        assert elements[0].name == "Point"
        assert elements[0].keyword == "record"

    def test_confirm_on_next_code_line(self):
        elements = _parse(self.PROFILE, "Point =\n  // comment\n  class\n")
        assert elements[0].keyword == "class"

    def test_outside_window_not_confirmed(self):
        assert _parse(self.PROFILE, "Point =\n\n\n\n  record\n") == []

    def test_non_matching_tail_rejected(self):
        assert _parse(self.PROFILE, "count = 5\n") == []


class TestMethodDetection:
    def test_receiver_profile_ignores_indentation(self):
        profile = LanguageProfile(
            name="recv",
            extensions=(".rcv",),
            rules=(rule(ElementKind.FUNCTION, r"^fn\s+(?:(?P<receiver>\w+)\.)?(?P<name>\w+)"),),
            method_detection=METHOD_BY_RECEIVER,
        )
        elements = _parse(profile, "    fn helper\nfn Point.move\n")
        assert [(e.name, e.kind) for e in elements] == [
            ("helper", ElementKind.FUNCTION),
            ("move", ElementKind.METHOD),
        ]


class TestAttributes:
    def test_attribute_prefix_stripped(self):
        profile = LanguageProfile(
            name="attr",
            extensions=(".att",),
            rules=(rule(ElementKind.FUNCTION, r"^fn\s+(?P<name>\w+)"),),
            attribute_pattern=re.compile(r"@\w+"),
        )
        parser = HeuristicParser(profile)
        assert parser.strip_attributes("@inline @pure fn fast") == "fn fast"
        assert [e.name for e in _parse(profile, "@inline fn fast\n")] == ["fast"]

    def test_attribute_only_line_declares_nothing(self):
        elements = _outline(".java", "@Override\n")
        assert elements == []


class TestBuiltinBehaviour:
    def test_control_flow_line_is_not_a_declaration(self):
        assert _outline(".java", "if (x) {\n}\n") == []

    def test_documented_function(self):
        source = '''\
// Adds two numbers
public int add(int a, int b) { return a + b; }
'''
        elements = _outline(".java", source)
        assert len(elements) == 1
        add = elements[0]
        assert add.kind is ElementKind.FUNCTION
        assert add.name == "add"
        assert add.visibility is Visibility.PUBLIC
        assert add.documentation == "Adds two numbers"
        assert add.source_line == 2

    def test_plain_class(self):
        elements = _outline(".java", "class Widget {\n}\n")
        assert len(elements) == 1
        widget = elements[0]
        assert widget.kind is ElementKind.TYPE
        assert widget.name == "Widget"
        assert widget.parent == ""
        assert widget.documentation == ""
        assert widget.visibility is Visibility.UNSPECIFIED

    def test_multi_line_signature_reports_first_line(self):
        source = '''\
public static int compute(
        int a,
        int b) {
    return a + b;
}
'''
        elements = _outline(".java", source)
        assert [(e.name, e.source_line) for e in elements] == [("compute", 1)]

    def test_go_visibility_from_capitalization(self):
        source = '''\
func Exported() {}
func unexported() {}
func (s *Server) Start() error {
'''
        elements = _outline(".go", source)
        assert [(e.name, e.kind, e.visibility) for e in elements] == [
            ("Exported", ElementKind.FUNCTION, Visibility.PUBLIC),
            ("unexported", ElementKind.FUNCTION, Visibility.PRIVATE),
            ("Start", ElementKind.METHOD, Visibility.PUBLIC),
        ]

    def test_rust_visibility_modifiers(self):
        source = '''\
pub fn open() {}
pub(crate) fn shared() {}
fn hidden() {}
'''
        elements = _outline(".rs", source)
        assert [e.visibility for e in elements] == [
            Visibility.PUBLIC,
            Visibility.INTERNAL,
            Visibility.PRIVATE,
        ]

    def test_pascal_lookahead_counts_blank_lines(self):
        near = "type\n  TShape =\n\n    class(TObject)\n  end;\n"
        far = "type\n  TShape =\n" + "\n" * 10 + "    class(TObject)\n  end;\n"
        assert [e.name for e in _outline(".pas", near)] == ["TShape"]
        assert _outline(".pas", far) == []

    def test_doc_comment_above_attributes(self):
        source = '''\
/// A document.
#[derive(Debug)]
pub struct Document {
'''
        elements = _outline(".rs", source)
        assert elements[0].documentation == "A document."

    def test_parse_is_deterministic(self):
        source = "package main\n\nfunc main() {\n}\n"
        parser = REGISTRY.dispatch(".go")
        assert parser.parse(source, "a.go") == parser.parse(source, "a.go")
