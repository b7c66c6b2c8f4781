"""Tests for language profiles defined in configuration."""

import pytest

from code_outline.errors import ConfigError
from code_outline.models import ElementKind
from code_outline.parsers import HeuristicParser, ParserRegistry, profile_from_config, profiles_from_config
from code_outline.parsers.custom import name_group_pattern


def _toy_entry(**overrides):
    entry = {
        "name": "toy",
        "extensions": ["toy"],
        "module": r"^module\s+(\w+)",
        "type": r"^class\s+(?P<name>\w+)(?:\s*<\s*(?P<parent>\w+))?",
        "function": r"^fn\s+(\w+)",
        "doc_marker": "--",
    }
    entry.update(overrides)
    return entry


class TestNameGroupPattern:
    def test_first_unnamed_group_becomes_name(self):
        assert name_group_pattern(r"^fn\s+(\w+)\((.*)\)") == r"^fn\s+(?P<name>\w+)\((.*)\)"

    def test_existing_name_group_kept(self):
        pattern = r"^class\s+(?P<name>\w+)"
        assert name_group_pattern(pattern) == pattern

    def test_non_capturing_and_escaped_groups_skipped(self):
        pattern = r"^(?:pub\s+)?\(fn\)\s+(\w+)"
        assert name_group_pattern(pattern) == r"^(?:pub\s+)?\(fn\)\s+(?P<name>\w+)"

    def test_parenthesis_in_character_class_skipped(self):
        pattern = r"^[(]\s*(\w+)"
        assert name_group_pattern(pattern) == r"^[(]\s*(?P<name>\w+)"

    def test_first_named_group_used_when_no_unnamed(self):
        assert name_group_pattern(r"^def\s+(?P<ident>\w+)") == r"^def\s+(?P<name>\w+)"

    def test_pattern_without_group_rejected(self):
        with pytest.raises(ConfigError):
            name_group_pattern(r"^fn\s+\w+")

    def test_invalid_pattern_rejected(self):
        with pytest.raises(ConfigError):
            name_group_pattern(r"^fn\s+(\w+")


class TestProfileFromConfig:
    def test_builds_profile(self):
        profile = profile_from_config(_toy_entry())
        assert profile.name == "toy"
        assert profile.extensions == (".toy",)
        assert [r.kind for r in profile.rules] == [
            ElementKind.MODULE,
            ElementKind.TYPE,
            ElementKind.FUNCTION,
        ]
        assert profile.comment_markers == ("--",)

    def test_parses_like_builtin_profile(self):
        source = '''\
module shapes

-- A circle.
class Circle < Shape
  fn area
fn main
'''
        parser = HeuristicParser(profile_from_config(_toy_entry()))
        elements = parser.parse(source, "shapes.toy").elements
        assert [(e.kind, e.name) for e in elements] == [
            (ElementKind.MODULE, "shapes"),
            (ElementKind.TYPE, "Circle"),
            (ElementKind.METHOD, "area"),
            (ElementKind.FUNCTION, "main"),
        ]
        circle = elements[1]
        assert circle.parent == "Shape"
        assert circle.documentation == "A circle."

    def test_explicit_method_pattern(self):
        entry = _toy_entry(method=r"^method\s+(\w+)")
        parser = HeuristicParser(profile_from_config(entry))
        elements = parser.parse("method draw\n", "x.toy").elements
        assert [(e.kind, e.name) for e in elements] == [(ElementKind.METHOD, "draw")]

    def test_docs_after_declaration(self):
        entry = _toy_entry(doc_marker="#", doc_placement="after")
        source = '''\
fn greet
# Says hello.
  print "hi"
'''
        parser = HeuristicParser(profile_from_config(entry))
        elements = parser.parse(source, "x.toy").elements
        assert elements[0].documentation == "Says hello."

    def test_registered_profile_overrides_extension(self):
        profile = profile_from_config(_toy_entry(name="fast-rust", extensions=[".rs"]))
        registry = ParserRegistry.with_builtins([profile])
        assert registry.dispatch(".rs").language == "fast-rust"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": ""},
            {"extensions": []},
            {"extensions": [1, 2]},
            {"module": None, "type": None, "function": None},
            {"function": r"^fn\s+\w+"},
            {"function": r"^fn\s+(\w+"},
            {"function": 42},
            {"doc_marker": ""},
            {"doc_placement": "inline"},
            {"method_detection": "magic"},
        ],
    )
    def test_invalid_entries_rejected(self, overrides):
        with pytest.raises(ConfigError):
            profile_from_config(_toy_entry(**overrides))

    def test_entry_must_be_mapping(self):
        with pytest.raises(ConfigError):
            profile_from_config(["toy"])


class TestProfilesFromConfig:
    def test_builds_every_entry(self):
        config = {"languages": [_toy_entry(), _toy_entry(name="other", extensions=[".oth"])]}
        assert [p.name for p in profiles_from_config(config)] == ["toy", "other"]

    def test_missing_or_empty_languages(self):
        assert profiles_from_config({}) == []
        assert profiles_from_config({"languages": None}) == []

    def test_languages_must_be_list(self):
        with pytest.raises(ConfigError):
            profiles_from_config({"languages": {"name": "toy"}})
