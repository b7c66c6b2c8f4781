"""
Built-in language profiles.

Every language is plain data handed to the shared engine: extensions,
comment markers, control-flow words and an ordered rule table. Module rules
come first, then types, then callables, then constants and the rest.

Patterns run against the trimmed line with leading attributes removed, so
they anchor on `^` rather than on indentation. Method detection looks at
the raw line instead. A gated rule claims every line its gate accepts, so
gates for words that also occur inside expressions (`class`, `struct`,
`interface`, `module`) are anchored the same way as the rule itself.
"""

from __future__ import annotations

import re

from code_outline.models import ElementKind, Visibility
from code_outline.parsers.profile import (
    COMMON_CONTROL_KEYWORDS,
    DOC_AFTER,
    METHOD_BY_RECEIVER,
    LanguageProfile,
    capitalized_is_public,
    rule,
    underscore_is_private,
)

MODULE = ElementKind.MODULE
TYPE = ElementKind.TYPE
FUNCTION = ElementKind.FUNCTION
CONSTANT = ElementKind.CONSTANT
MATCH = ElementKind.MATCH

PUBLIC = Visibility.PUBLIC
PRIVATE = Visibility.PRIVATE
PROTECTED = Visibility.PROTECTED
INTERNAL = Visibility.INTERNAL

IDENT = r"[A-Za-z_]\w*"
JS_IDENT = r"[A-Za-z_$][\w$]*"
UPPER_IDENT = r"[A-Z][A-Z0-9_]*"

C_COMMENTS = ("//", "/*", "*")
C_DOC = ("///", "//", "/*", "*/", "*")

AT_ANNOTATION = re.compile(r"@[\w.:]+(?:\([^)]*\))?")
BRACKET_ATTRIBUTE = re.compile(r"\[[^\]]*\]")
HASH_ATTRIBUTE = re.compile(r"#!?\[[^\]]*\]")

ACCESS_MODIFIERS = (
    ("public", PUBLIC),
    ("private", PRIVATE),
    ("protected", PROTECTED),
    ("internal", INTERNAL),
)

# Return-type tokens, an optional `Owner::` or `Owner.` qualifier, then the
# name and its parameter list. Lines ending in `;` are calls or prototypes.
TYPED_CALLABLE = (
    r"^(?:[\w:<>,\[\]*&~.?]+\s+|[\w:<>,\[\]~.]+\s*[*&]+\s*)+"
    r"(?:(?P<receiver>[A-Za-z_][\w.:]*(?:<[^>]*>)?)(?:::|\.))?"
    r"(?P<name>~?[A-Za-z_]\w*)\s*(?:<[^>]*>)?\s*\((?!.*;\s*$)"
)
# Same, but expression-bodied members (`=> expr;`) are declarations too.
TYPED_CALLABLE_ARROW = TYPED_CALLABLE.replace(r"\((?!.*;\s*$)", r"\((?=.*=>|(?!.*;\s*$))")


C = LanguageProfile(
    name="c",
    extensions=(".c", ".h"),
    comment_markers=C_COMMENTS,
    doc_markers=C_DOC,
    rules=(
        # Ungated: `struct point *make_point(...)` must reach the callable rule.
        rule(
            TYPE,
            rf"^(?:typedef\s+)?(?P<keyword>struct|union|enum)\s+(?P<name>{IDENT})\s*(?:\{{.*)?$",
        ),
        rule(FUNCTION, TYPED_CALLABLE),
        rule(CONSTANT, rf"^#\s*define\s+(?P<name>{UPPER_IDENT})(?![\w(])", keywords=("define",)),
    ),
    visibility_keywords=(("static", PRIVATE), ("extern", PUBLIC)),
    default_visibility=PUBLIC,
)

CPP = LanguageProfile(
    name="cpp",
    extensions=(".cpp", ".cc", ".cxx", ".c++", ".hpp", ".hh", ".hxx", ".h++", ".ipp", ".tpp"),
    comment_markers=C_COMMENTS,
    doc_markers=C_DOC,
    rules=(
        rule(MODULE, r"^(?:inline\s+)?namespace\s+(?P<name>[\w:]+)", keywords=("namespace",)),
        rule(
            TYPE,
            r"^(?:template\s*<.*>\s*)?(?:export\s+)?"
            r"(?P<keyword>enum\s+class|enum\s+struct|class|struct|union|enum)\s+"
            rf"(?:[A-Z_][A-Z0-9_]*\s+)?(?P<name>{IDENT})(?:\s+final)?\s*"
            r"(?::\s*(?:(?:public|private|protected|virtual)\s+)*(?P<parent>[\w:]+(?:<[^>]*>)?)[^;{]*)?"
            r"\s*(?:\{.*)?$",
        ),
        rule(
            FUNCTION,
            r"^(?P<receiver>[A-Za-z_]\w*(?:<[^>]*>)?)::(?P<name>~?[A-Za-z_]\w*)\s*\((?!.*;\s*$)",
        ),
        rule(FUNCTION, TYPED_CALLABLE),
        rule(
            CONSTANT,
            rf"^(?:static\s+)?(?:inline\s+)?(?:constexpr|const)\s+[\w:<>]+\s+(?P<name>{UPPER_IDENT})\s*[={{]",
            keywords=("constexpr", "const"),
        ),
        rule(CONSTANT, rf"^#\s*define\s+(?P<name>{UPPER_IDENT})(?![\w(])", keywords=("define",)),
    ),
    control_keywords=COMMON_CONTROL_KEYWORDS | {"static_assert", "co_return", "co_await"},
)

_CS_MODS = r"(?:(?:public|private|protected|internal|static|sealed|abstract|partial|readonly|unsafe|new|file|ref)\s+)*"

CSHARP = LanguageProfile(
    name="csharp",
    extensions=(".cs",),
    comment_markers=C_COMMENTS,
    doc_markers=C_DOC,
    rules=(
        rule(MODULE, r"^namespace\s+(?P<name>[\w.]+)", keywords=("namespace",)),
        rule(
            TYPE,
            rf"^{_CS_MODS}"
            r"(?P<keyword>record\s+struct|record\s+class|record|class|interface|struct|enum)\s+"
            rf"(?P<name>{IDENT})(?:<[^>]*>)?(?:\s*\([^)]*\))?"
            r"(?:\s*:\s*(?P<parent>[\w.]+(?:<[^>]*>)?))?",
            # Anchored so `where T : class` constraints do not claim the line.
            when=rf"^{_CS_MODS}(?:(?:class|interface|struct|enum)\s|record\s+(?:struct\s+|class\s+)?[A-Z])",
        ),
        rule(FUNCTION, TYPED_CALLABLE_ARROW),
        rule(
            CONSTANT,
            r"^(?:(?:public|private|protected|internal|static|new)\s+)*const\s+[\w<>\[\],.?]+\s+"
            rf"(?P<name>{IDENT})\s*=",
            keywords=("const",),
        ),
    ),
    control_keywords=COMMON_CONTROL_KEYWORDS | {"lock", "fixed", "checked", "unchecked", "nameof", "when"},
    attribute_pattern=BRACKET_ATTRIBUTE,
    visibility_keywords=(
        ("public", PUBLIC),
        ("protected", PROTECTED),
        ("internal", INTERNAL),
        ("private", PRIVATE),
    ),
)

JAVA = LanguageProfile(
    name="java",
    extensions=(".java",),
    comment_markers=C_COMMENTS,
    doc_markers=C_DOC,
    rules=(
        rule(MODULE, r"^package\s+(?P<name>[\w.]+)\s*;", keywords=("package",)),
        rule(
            TYPE,
            r"^(?:(?:public|private|protected|static|final|abstract|sealed|non-sealed|strictfp)\s+)*"
            rf"(?P<keyword>class|interface|enum|record|@interface)\s+(?P<name>{IDENT})"
            r"(?:<[^>]*>)?(?:\s*\([^)]*\))?"
            r"(?:\s+(?:extends|implements)\s+(?P<parent>[\w.]+))?",
            when=r"(?<![\w@.])(?:class|interface|enum)\b|@interface\b|\brecord\s+[A-Z]",
        ),
        rule(FUNCTION, TYPED_CALLABLE),
        rule(
            CONSTANT,
            r"^(?:(?:public|private|protected)\s+)?(?:static\s+final|final\s+static)\s+"
            rf"[\w<>\[\],.?]+\s+(?P<name>{UPPER_IDENT})\s*=",
            keywords=("final",),
        ),
    ),
    # `default` also opens interface default methods.
    control_keywords=(COMMON_CONTROL_KEYWORDS - {"default"}) | {"synchronized", "super", "this"},
    attribute_pattern=AT_ANNOTATION,
    visibility_keywords=ACCESS_MODIFIERS[:3],
)

_KT_MODS = r"(?:(?:public|private|protected|internal|open|abstract|sealed|data|enum|annotation|inner|value|inline|final|expect|actual|fun|companion)\s+)*"

KOTLIN = LanguageProfile(
    name="kotlin",
    extensions=(".kt", ".kts"),
    comment_markers=C_COMMENTS,
    doc_markers=C_DOC,
    rules=(
        rule(MODULE, r"^package\s+(?P<name>[\w.]+)", keywords=("package",)),
        rule(
            TYPE,
            rf"^{_KT_MODS}(?P<keyword>class|interface|object)\s+(?P<name>{IDENT})(?:<[^>]*>)?"
            r"(?:\s*(?:(?:private|protected|internal|public)\s+)?(?:constructor\s*)?\([^)]*\))?"
            r"(?:\s*:\s*(?P<parent>[\w.]+))?",
            # Anchored so `Foo::class` and `object : Listener` expressions fall through.
            when=rf"^{_KT_MODS}(?:class|interface|object)\s",
        ),
        rule(
            FUNCTION,
            r"^(?:(?:public|private|protected|internal|open|override|abstract|final|suspend|inline|operator|infix|tailrec|external|actual|expect)\s+)*"
            r"(?P<keyword>fun)\s+(?:<[^>]*>\s*)?"
            rf"(?:(?P<receiver>[\w.]+(?:<[^>]*>)?\??)\.)?(?P<name>{IDENT})\s*\(",
            keywords=("fun",),
        ),
        rule(
            CONSTANT,
            rf"^(?:(?:private|internal|public)\s+)?const\s+val\s+(?P<name>{IDENT})",
            keywords=("const",),
        ),
    ),
    control_keywords=COMMON_CONTROL_KEYWORDS | {"when", "is", "in"},
    attribute_pattern=AT_ANNOTATION,
    visibility_keywords=ACCESS_MODIFIERS,
    default_visibility=PUBLIC,
)

_SCALA_MODS = r"(?:(?:private|protected|final|sealed|abstract|implicit|case|lazy|override|package)(?:\[\w+\])?\s+)*"

SCALA = LanguageProfile(
    name="scala",
    extensions=(".scala", ".sc"),
    comment_markers=C_COMMENTS,
    doc_markers=C_DOC,
    rules=(
        rule(MODULE, r"^package\s+(?P<name>[\w.]+)", when=r"^package\s+(?!object\b)"),
        rule(
            TYPE,
            rf"^{_SCALA_MODS}(?P<keyword>class|trait|object|enum)\s+(?P<name>{IDENT})(?:\[[^\]]*\])?"
            r"(?:\s*\([^)]*\))?(?:\s+extends\s+(?P<parent>[\w.]+))?",
            when=rf"^{_SCALA_MODS}(?:class|trait|object|enum)\s",
        ),
        rule(
            FUNCTION,
            r"^(?:(?:private|protected|final|override|implicit|inline|abstract)(?:\[\w+\])?\s+)*"
            rf"(?P<keyword>def)\s+(?P<name>{IDENT}|[^\s(\[:]+)",
            keywords=("def",),
        ),
        rule(MATCH, rf"(?P<name>{IDENT}(?:\.{IDENT})*)\s+match\s*\{{", keywords=("match",)),
    ),
    declaration_markers=("class", "object", "trait"),
    attribute_pattern=AT_ANNOTATION,
    visibility_keywords=ACCESS_MODIFIERS[1:3],
    default_visibility=PUBLIC,
)

_JS_TYPE_PREFIX = r"^(?:export\s+)?(?:default\s+)?(?:declare\s+)?(?:abstract\s+)?"
_JS_TYPE = (
    _JS_TYPE_PREFIX
    + rf"(?P<keyword>class)\s+(?P<name>{JS_IDENT})(?:<[^>]*>)?"
    r"(?:\s+(?:extends|implements)\s+(?P<parent>[\w.$]+))?"
)
_JS_ARROW = (
    rf"^(?:export\s+)?(?:const|let|var)\s+(?P<name>{JS_IDENT})\s*(?::[^=]+)?=\s*(?:async\s+)?"
    rf"(?:function\b|\([^)]*\)\s*(?::\s*[^=]+)?=>|{JS_IDENT}\s*=>)"
)
_JS_FUNCTION = (
    r"(?:^|[\s=(,:])(?:export\s+)?(?:default\s+)?(?:async\s+)?"
    rf"(?P<keyword>function)\s*\*?\s*(?P<name>{JS_IDENT})\s*(?:<[^>]*>)?\s*\("
)
_JS_METHOD = (
    r"^(?:(?:public|private|protected|static|async|abstract|override|readonly|declare|get|set)\s+)*"
    rf"\*?(?P<name>#?{JS_IDENT})\s*(?:<[^>]*>)?\s*\(.*\)\s*(?::\s*[^={{]+?)?\s*\{{\s*\}}?\s*$"
)
_JS_CONSTANT = rf"^(?:export\s+)?const\s+(?P<name>{UPPER_IDENT})\s*(?::[^=]+)?="

# `new` and `delete` are common method names; as operators they never open a
# line shaped like a method.
JS_CONTROL_KEYWORDS = COMMON_CONTROL_KEYWORDS - {"new", "delete"}


def _hash_is_private(name: str) -> Visibility:
    return PRIVATE if name.startswith("#") else Visibility.UNSPECIFIED


JAVASCRIPT = LanguageProfile(
    name="javascript",
    extensions=(".js", ".jsx", ".mjs", ".cjs"),
    comment_markers=C_COMMENTS,
    doc_markers=C_DOC,
    rules=(
        rule(TYPE, _JS_TYPE, when=_JS_TYPE_PREFIX + r"class\s"),
        rule(FUNCTION, _JS_ARROW),
        rule(FUNCTION, _JS_FUNCTION, keywords=("function",)),
        rule(FUNCTION, _JS_METHOD),
        rule(CONSTANT, _JS_CONSTANT, keywords=("const",)),
    ),
    control_keywords=JS_CONTROL_KEYWORDS,
    declaration_markers=("function",),
    visibility_keywords=(("export", PUBLIC),),
    visibility_rule=_hash_is_private,
)

TYPESCRIPT = LanguageProfile(
    name="typescript",
    extensions=(".ts", ".tsx", ".mts", ".cts"),
    comment_markers=C_COMMENTS,
    doc_markers=C_DOC,
    rules=(
        rule(
            MODULE,
            r"^(?:export\s+)?(?:declare\s+)?(?P<keyword>namespace|module)\s+(?P<name>[\w.$]+)",
            when=r"^(?:export\s+)?(?:declare\s+)?(?:namespace|module)\s",
        ),
        rule(
            TYPE,
            _JS_TYPE_PREFIX
            + r"(?:const\s+)?"
            + rf"(?P<keyword>class|interface|enum)\s+(?P<name>{JS_IDENT})(?:<[^>]*>)?"
            r"(?:\s+(?:extends|implements)\s+(?P<parent>[\w.$]+))?",
            when=_JS_TYPE_PREFIX + r"(?:const\s+)?(?:class|interface|enum)\s",
        ),
        rule(
            TYPE,
            rf"^(?:export\s+)?(?:declare\s+)?(?P<keyword>type)\s+(?P<name>{JS_IDENT})",
            when=r"^(?:export\s+)?(?:declare\s+)?type\s+[A-Za-z_$]",
        ),
        rule(FUNCTION, _JS_ARROW),
        rule(FUNCTION, _JS_FUNCTION, keywords=("function",)),
        rule(FUNCTION, _JS_METHOD),
        rule(CONSTANT, _JS_CONSTANT, keywords=("const",)),
    ),
    control_keywords=JS_CONTROL_KEYWORDS,
    declaration_markers=("function",),
    attribute_pattern=AT_ANNOTATION,
    visibility_keywords=(
        ("private", PRIVATE),
        ("protected", PROTECTED),
        ("public", PUBLIC),
        ("export", PUBLIC),
    ),
    visibility_rule=_hash_is_private,
)

GO = LanguageProfile(
    name="go",
    extensions=(".go",),
    comment_markers=C_COMMENTS,
    doc_markers=C_DOC,
    rules=(
        rule(MODULE, rf"^package\s+(?P<name>{IDENT})", keywords=("package",)),
        rule(
            TYPE,
            rf"^type\s+(?P<name>{IDENT})(?:\[[^\]]*\])?\s+(?:=\s*)?"
            r"(?P<keyword>struct|interface|func|map|chan|\*?[\w.\[\]]+)",
            when=r"^type\s",
        ),
        # Members of a `type ( ... )` group. Anchored so `interface{}` and
        # `chan struct{}` parameters leave `func` lines to the callable rule,
        # and `Data interface{}` fields are not types.
        rule(
            TYPE,
            rf"^(?P<name>{IDENT})\s+(?P<keyword>struct|interface)\s*\{{(?!\s*\}})",
            when=r"^\w+\s+(?:struct|interface)\s*\{(?!\s*\})",
        ),
        rule(
            FUNCTION,
            r"^(?P<keyword>func)\s+"
            r"(?:\(\s*(?:\w+\s+)?\*?(?P<receiver>\w+)(?:\[[^\]]*\])?\s*\)\s*)?"
            rf"(?P<name>{IDENT})\s*(?:\[[^\]]*\])?\(",
            keywords=("func",),
        ),
        rule(
            CONSTANT,
            rf"^const\s+(?P<name>{IDENT})\b(?:\s+[\w.\[\]*]+)?\s*=",
            keywords=("const",),
        ),
    ),
    control_keywords=COMMON_CONTROL_KEYWORDS | {"go", "defer", "select", "range", "fallthrough"},
    visibility_rule=capitalized_is_public,
    method_detection=METHOD_BY_RECEIVER,
)

_RUST_VIS = r"(?:pub(?:\([^)]*\))?\s+)?"

RUST = LanguageProfile(
    name="rust",
    extensions=(".rs",),
    comment_markers=C_COMMENTS,
    doc_markers=("///", "//!", "//", "/*", "*/", "*"),
    rules=(
        rule(MODULE, rf"^{_RUST_VIS}(?P<keyword>mod)\s+(?P<name>{IDENT})", keywords=("mod",)),
        rule(
            TYPE,
            rf"^{_RUST_VIS}(?:unsafe\s+)?(?P<keyword>struct|enum|trait|union|type)\s+(?P<name>{IDENT})"
            r"(?:<[^>]*>)?(?:\s*:\s*(?:\?)?(?P<parent>[\w:]+))?",
            # Anchored so functions named `union` or `type` reach the fn rule.
            when=rf"^{_RUST_VIS}(?:unsafe\s+)?(?:struct|enum|trait|union|type)\s",
        ),
        rule(
            FUNCTION,
            rf'^{_RUST_VIS}(?:(?:const|async|unsafe|default|extern(?:\s+"[^"]*")?)\s+)*'
            rf"(?P<keyword>fn)\s+(?P<name>{IDENT})",
            keywords=("fn",),
        ),
        rule(
            CONSTANT,
            rf"^{_RUST_VIS}(?P<keyword>const|static)\s+(?:mut\s+)?(?P<name>{IDENT})\s*:",
            keywords=("const", "static"),
        ),
        rule(MATCH, r"\b(?P<keyword>match)\s+(?P<name>[&*]?[\w.]+(?:\(\))?)\s*\{", keywords=("match",)),
    ),
    # `default fn` is a specialised impl item.
    control_keywords=(COMMON_CONTROL_KEYWORDS - {"default"}) | {"loop", "impl", "where"},
    attribute_pattern=HASH_ATTRIBUTE,
    visibility_keywords=(
        ("pub(crate)", INTERNAL),
        ("pub(super)", INTERNAL),
        ("pub(in", INTERNAL),
        ("pub", PUBLIC),
    ),
    default_visibility=PRIVATE,
)

_SWIFT_MODS = r"(?:(?:public|private|fileprivate|internal|open|final|indirect|static|class|override|mutating|nonmutating|convenience|required|nonisolated|dynamic)\s+)*"

SWIFT = LanguageProfile(
    name="swift",
    extensions=(".swift",),
    comment_markers=C_COMMENTS,
    doc_markers=C_DOC,
    rules=(
        rule(
            TYPE,
            rf"^{_SWIFT_MODS}(?P<keyword>class|struct|enum|protocol|actor|extension)\s+"
            rf"(?P<name>{IDENT}(?:\.{IDENT})*)(?:<[^>]*>)?(?:\s*:\s*(?P<parent>[\w.]+))?",
            when=rf"^{_SWIFT_MODS}(?:class|struct|enum|protocol|actor|extension)\s+(?!func\b|var\b|let\b)[A-Za-z_]",
        ),
        rule(
            FUNCTION,
            rf"^{_SWIFT_MODS}(?P<keyword>func)\s+(?P<name>{IDENT}|[^\s(<]+)",
            keywords=("func",),
        ),
        rule(FUNCTION, rf"^{_SWIFT_MODS}(?P<name>init|deinit)\b\??\s*[(<{{]", keywords=("init", "deinit")),
    ),
    control_keywords=COMMON_CONTROL_KEYWORDS | {"guard", "defer", "repeat", "let", "var"},
    attribute_pattern=re.compile(r"@\w+(?:\([^)]*\))?"),
    visibility_keywords=(
        ("open", PUBLIC),
        ("public", PUBLIC),
        ("fileprivate", PRIVATE),
        ("private", PRIVATE),
        ("internal", INTERNAL),
    ),
    default_visibility=INTERNAL,
)

DART = LanguageProfile(
    name="dart",
    extensions=(".dart",),
    comment_markers=C_COMMENTS,
    doc_markers=C_DOC,
    rules=(
        rule(MODULE, r"^library\s+(?P<name>[\w.]+)", when=r"^library\s"),
        rule(
            TYPE,
            r"^(?:(?:abstract|base|final|interface|sealed)\s+)*"
            rf"(?P<keyword>class|mixin|enum|extension)\s+(?P<name>{IDENT})(?:<[^>]*>)?"
            r"(?:\s+(?:extends|on|with|implements)\s+(?P<parent>[\w.]+))?",
            when=r"^(?:(?:abstract|base|final|interface|sealed)\s+)*(?:class|mixin|enum|extension)\b",
        ),
        rule(
            FUNCTION,
            rf"^(?:static\s+)?(?:[\w<>?,]+\s+)?(?P<keyword>get|set)\s+(?P<name>{IDENT})",
            when=r"\b(?:get|set)\s+[A-Za-z_]\w*\s*(?:=>|\{|\()",
        ),
        rule(
            FUNCTION,
            rf"^(?:const\s+|factory\s+)?(?P<receiver>[A-Z]\w*)\.(?P<name>{IDENT})\s*\((?!.*\)\s*;\s*$)",
        ),
        rule(FUNCTION, TYPED_CALLABLE_ARROW),
        rule(
            CONSTANT,
            rf"^(?:static\s+)?const\s+(?:[\w<>?]+\s+)?(?P<name>{IDENT})\s*=",
            keywords=("const",),
        ),
    ),
    control_keywords=COMMON_CONTROL_KEYWORDS | {"super", "this", "rethrow"},
    attribute_pattern=AT_ANNOTATION,
    visibility_rule=underscore_is_private,
)

PHP = LanguageProfile(
    name="php",
    extensions=(".php", ".phtml"),
    comment_markers=C_COMMENTS,
    doc_markers=C_DOC,
    rules=(
        rule(MODULE, r"^namespace\s+(?P<name>[\w\\]+)", keywords=("namespace",)),
        rule(
            TYPE,
            r"^(?:(?:abstract|final|readonly)\s+)*"
            rf"(?P<keyword>class|interface|trait|enum)\s+(?P<name>{IDENT})"
            r"(?:\s*:\s*\w+)?(?:\s+(?:extends|implements)\s+(?P<parent>[\w\\]+))?",
            when=r"^(?:(?:abstract|final|readonly)\s+)*(?:class|interface|trait|enum)\s",
        ),
        rule(
            FUNCTION,
            r"^(?:(?:public|private|protected|static|abstract|final)\s+)*"
            rf"(?P<keyword>function)\s+&?(?P<name>{IDENT})\s*\(",
            keywords=("function",),
        ),
        rule(
            CONSTANT,
            rf"^(?:(?:public|private|protected|final)\s+)*const\s+(?:\w+\s+)?(?P<name>{IDENT})\s*=",
            keywords=("const",),
        ),
        rule(CONSTANT, r"""^define\s*\(\s*['"](?P<name>\w+)['"]""", keywords=("define",)),
    ),
    control_keywords=COMMON_CONTROL_KEYWORDS | {
        "elseif", "echo", "print", "require", "require_once", "include", "include_once",
        "unset", "isset", "empty", "list", "match", "fn",
    },
    declaration_markers=("function",),
    attribute_pattern=HASH_ATTRIBUTE,
    visibility_keywords=ACCESS_MODIFIERS[:3],
    default_visibility=PUBLIC,
)

RUBY_CONTROL = frozenset({
    "if", "unless", "else", "elsif", "while", "until", "for", "case", "when",
    "begin", "rescue", "ensure", "return", "yield", "raise", "loop", "do",
    "break", "next", "redo", "retry", "then", "in",
})

RUBY = LanguageProfile(
    name="ruby",
    extensions=(".rb", ".rake", ".gemspec"),
    comment_markers=("#",),
    doc_markers=("#",),
    rules=(
        rule(MODULE, r"^(?P<keyword>module)\s+(?P<name>[A-Z][\w:]*)", keywords=("module",)),
        rule(
            TYPE,
            r"^(?P<keyword>class)\s+(?P<name>[A-Z][\w:]*)(?:\s*<\s*(?P<parent>[\w:]+))?",
            when=r"^class\s",
        ),
        rule(
            FUNCTION,
            r"^(?:(?:private|protected|public|module_function)\s+)?(?P<keyword>def)\s+"
            r"(?:(?P<receiver>self|[A-Z]\w*)\.)?"
            r"(?P<name>[A-Za-z_]\w*[?!=]?|\[\]=?|[+\-*/%<>=!~^&|]+)",
            keywords=("def",),
        ),
        rule(CONSTANT, rf"^(?P<name>{UPPER_IDENT})\s*=(?!=)"),
    ),
    control_keywords=RUBY_CONTROL,
    visibility_keywords=ACCESS_MODIFIERS[:3],
    default_visibility=PUBLIC,
)

CRYSTAL = LanguageProfile(
    name="crystal",
    extensions=(".cr",),
    comment_markers=("#",),
    doc_markers=("#",),
    rules=(
        rule(
            MODULE,
            r"^(?:private\s+)?(?P<keyword>module|lib)\s+(?P<name>[A-Z][\w:]*)",
            when=r"^(?:private\s+)?(?:module|lib)\s",
        ),
        rule(
            TYPE,
            r"^(?:(?:private|abstract)\s+)*(?P<keyword>class|struct|enum|annotation)\s+"
            r"(?P<name>[A-Z][\w:]*)(?:\([^)]*\))?(?:\s*<\s*(?P<parent>[\w:]+))?",
            when=r"^(?:(?:private|abstract)\s+)*(?:class|struct|enum|annotation)\s",
        ),
        rule(
            FUNCTION,
            r"^(?:(?:private|protected|abstract)\s+)*(?P<keyword>def|macro)\s+"
            r"(?:(?P<receiver>self)\.)?(?P<name>[A-Za-z_]\w*[?!=]?|[+\-*/%<>=!~^&|\[\]]+)",
            keywords=("def", "macro"),
        ),
        rule(CONSTANT, rf"^(?P<name>{UPPER_IDENT})\s*=(?!=)"),
    ),
    control_keywords=RUBY_CONTROL,
    attribute_pattern=re.compile(r"@\[[^\]]*\]"),
    visibility_keywords=ACCESS_MODIFIERS[1:3],
    default_visibility=PUBLIC,
)

LUA = LanguageProfile(
    name="lua",
    extensions=(".lua",),
    comment_markers=("--",),
    doc_markers=("---", "--", "[[", "]]"),
    rules=(
        rule(MODULE, r"""^module\s*\(?\s*["'](?P<name>[\w.]+)""", when=r"^module\b"),
        rule(
            TYPE,
            r"^(?:local\s+)?(?P<name>[A-Z]\w*)\s*=\s*"
            r"(?:\{\s*\}|setmetatable\s*\(\s*\{\s*\}\s*,\s*(?P<parent>[A-Za-z_][\w.]*))",
        ),
        rule(
            FUNCTION,
            r"^(?:local\s+)?(?P<keyword>function)\s+(?:(?P<receiver>[A-Za-z_][\w.]*)[.:])?"
            r"(?P<name>[A-Za-z_]\w*)\s*\(",
            when=r"^(?:local\s+)?function\s",
        ),
        rule(
            FUNCTION,
            r"^(?:local\s+)?(?:(?P<receiver>[A-Za-z_][\w.]*)[.:])?(?P<name>[A-Za-z_]\w*)\s*=\s*"
            r"(?P<keyword>function)\s*\(",
        ),
    ),
    control_keywords=COMMON_CONTROL_KEYWORDS | {"then", "elseif", "end", "repeat", "until", "not"},
    visibility_keywords=(("local", PRIVATE),),
    default_visibility=PUBLIC,
    method_detection=METHOD_BY_RECEIVER,
)

_D_MODS = r"(?:(?:public|private|protected|package|export|abstract|final|static|shared|immutable|const|extern\([^)]*\))\s+)*"

D = LanguageProfile(
    name="d",
    extensions=(".d", ".di"),
    comment_markers=("//", "/*", "*", "/+", "+"),
    doc_markers=("///", "//", "/*", "*/", "*", "/++", "/+", "+/", "+"),
    rules=(
        rule(MODULE, r"^module\s+(?P<name>[\w.]+)\s*;", keywords=("module",)),
        rule(
            TYPE,
            rf"^{_D_MODS}(?P<keyword>class|struct|interface|union|enum|mixin\s+template|template)\s+"
            rf"(?P<name>{IDENT})\b(?!\s*=)(?:\s*\([^)]*\))?(?:\s*:\s*(?P<parent>[\w.]+))?",
            # `enum NAME = value;` is a manifest constant, not a type.
            when=rf"^{_D_MODS}(?:class|struct|interface|union|template|mixin\s+template)\b"
            rf"|^{_D_MODS}enum\b(?![^{{(:]*=)",
        ),
        rule(FUNCTION, r"^(?P<name>~?this)\s*\((?!.*;\s*$)", when=r"^~?this\s*\("),
        rule(FUNCTION, TYPED_CALLABLE),
        rule(
            CONSTANT,
            rf"^{_D_MODS}(?P<keyword>enum|immutable)\s+(?:[\w\[\]!.]+\s+)?(?P<name>{IDENT})\s*=",
            keywords=("enum", "immutable"),
        ),
    ),
    control_keywords=(COMMON_CONTROL_KEYWORDS - {"delete", "new"}) | {"scope", "version", "debug"},
    attribute_pattern=re.compile(r"@\w+(?:\([^)]*\))?"),
    visibility_keywords=(
        ("public", PUBLIC),
        ("export", PUBLIC),
        ("private", PRIVATE),
        ("protected", PROTECTED),
        ("package", INTERNAL),
    ),
    default_visibility=PUBLIC,
)

ZIG = LanguageProfile(
    name="zig",
    extensions=(".zig",),
    comment_markers=("//",),
    doc_markers=("///", "//!", "//"),
    rules=(
        rule(
            TYPE,
            rf"^(?:pub\s+)?const\s+(?P<name>{IDENT})\s*=\s*(?:extern\s+|packed\s+)?"
            r"(?P<keyword>struct|enum|union|opaque|error)\b",
            when=r"=\s*(?:extern\s+|packed\s+)?(?:struct|enum|union|opaque|error)\b",
        ),
        rule(
            FUNCTION,
            rf"^(?:pub\s+)?(?:(?:export|extern|inline|noinline)\s+)*(?P<keyword>fn)\s+(?P<name>{IDENT})\s*\(",
            keywords=("fn",),
        ),
        rule(
            CONSTANT,
            rf"^(?:pub\s+)?(?P<keyword>const)\s+(?P<name>{IDENT})\s*(?::[^=]+)?=(?!\s*@import)",
            keywords=("const",),
            top_level=True,
        ),
    ),
    control_keywords=COMMON_CONTROL_KEYWORDS | {"orelse", "errdefer", "defer", "comptime", "test"},
    visibility_keywords=(("pub", PUBLIC),),
    default_visibility=PRIVATE,
)

PASCAL = LanguageProfile(
    name="pascal",
    extensions=(".pas", ".pp", ".dpr", ".lpr", ".dpk"),
    comment_markers=("//", "{", "(*"),
    doc_markers=("//", "{", "}", "(*", "*)"),
    rules=(
        rule(
            MODULE,
            r"^(?P<keyword>program|unit|library|package)\s+(?P<name>[\w.]+)\s*;",
            when=r"^(?:program|unit|library|package)\s",
            flags=re.IGNORECASE,
        ),
        rule(
            TYPE,
            rf"^(?:type\s+)?(?P<name>{IDENT})(?:<[^>]*>)?\s*=(?!=)",
            confirm=r"^\s*(?:(?:packed|sealed|abstract|bitpacked)\s+)*"
            r"(?P<keyword>class|record|object|interface|dispinterface)\b(?!\s+of\b)"
            r"(?:\s*(?:sealed\s+|abstract\s+)?\(\s*(?P<parent>[\w.]+))?",
            lookahead=10,
            flags=re.IGNORECASE,
        ),
        rule(
            FUNCTION,
            r"^(?:class\s+)?(?P<keyword>function|procedure|constructor|destructor|operator)\s+"
            rf"(?:(?P<receiver>{IDENT}(?:<[^>]*>)?)\.)?(?P<name>{IDENT})",
            keywords=("function", "procedure", "constructor", "destructor", "operator"),
            flags=re.IGNORECASE,
        ),
    ),
    control_keywords=frozenset({
        "if", "then", "else", "for", "to", "downto", "do", "while", "repeat",
        "until", "case", "of", "with", "begin", "end", "try", "except",
        "finally", "raise", "exit", "goto", "inherited", "uses", "var",
    }),
    flags=re.IGNORECASE,
)

PYTHON = LanguageProfile(
    name="python",
    extensions=(".py", ".pyw", ".pyi"),
    comment_markers=("#",),
    doc_markers=('"""', "'''"),
    rules=(
        rule(
            TYPE,
            rf"^(?P<keyword>class)\s+(?P<name>{IDENT})\s*(?:\[[^\]]*\])?\s*(?:\(\s*(?P<parent>[\w.]+)(?=\s*[,)\[]))?",
            keywords=("class",),
        ),
        rule(FUNCTION, rf"^(?:async\s+)?(?P<keyword>def)\s+(?P<name>{IDENT})\s*[(\[]", keywords=("def",)),
        rule(CONSTANT, rf"^(?P<name>{UPPER_IDENT})\s*(?::[^=]+)?=(?!=)", top_level=True),
    ),
    control_keywords=frozenset({
        "if", "elif", "else", "for", "while", "try", "except", "finally", "with",
        "return", "raise", "yield", "lambda", "assert", "del", "pass", "import",
        "from", "global", "nonlocal", "match", "case", "await",
    }),
    attribute_pattern=re.compile(r"@[\w.]+(?:\(.*\))?"),
    visibility_rule=underscore_is_private,
    doc_placement=DOC_AFTER,
)

BUILTIN_PROFILES: tuple[LanguageProfile, ...] = (
    C,
    CPP,
    CSHARP,
    JAVA,
    KOTLIN,
    SCALA,
    JAVASCRIPT,
    TYPESCRIPT,
    GO,
    RUST,
    SWIFT,
    DART,
    PHP,
    RUBY,
    CRYSTAL,
    LUA,
    D,
    ZIG,
    PASCAL,
    PYTHON,
)
