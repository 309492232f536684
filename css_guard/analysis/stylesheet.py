"""
Tree model produced by the structural parser.

A Stylesheet owns its top-level rule blocks, statements and comments.
Every RuleBlock, Declaration and Selector belongs to exactly one parent.
The tree is built once per file and treated as read-only by the rules.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import PurePath

from ..models import Span, Violation
from .bem import BemResult, parse_bem
from .tokens import Token

IMPORTANT_PATTERN = re.compile(r"!\s*important\s*$", re.IGNORECASE)
CLASS_PATTERN = re.compile(r"\.(-?[^\W\d][\w-]*)")
ID_PATTERN = re.compile(r"#(-?[^\W\d][\w-]*)")
COMPOUND_HEAD_PATTERN = re.compile(r"(?:^|[\s>+~])([a-zA-Z][a-zA-Z0-9]*)")
STRING_PATTERN = re.compile(r"\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*'")
PAREN_PATTERN = re.compile(r"\([^()]*\)")

HTML_TAGS = frozenset(
    """
    a abbr address article aside audio b blockquote body br button canvas
    caption cite code col dd details dialog div dl dt em fieldset figcaption
    figure footer form h1 h2 h3 h4 h5 h6 header hr html i iframe img input
    label legend li main nav ol optgroup option p picture pre progress q
    section select small source span strong sub summary sup table tbody td
    textarea tfoot th thead time tr u ul video
    """.split()
)

LANGUAGE_BY_SUFFIX = {
    ".css": "css",
    ".scss": "scss",
    ".less": "scss",
    ".html": "html",
    ".htm": "html",
}


def detect_language(path: str | PurePath) -> str:
    """Detect the source language from a file name (defaults to css)."""
    suffix = PurePath(path).suffix.lower()
    return LANGUAGE_BY_SUFFIX.get(suffix, "css")


@dataclass(frozen=True)
class SelectorParts:
    """Names referenced by one selector."""

    class_names: tuple[str, ...]
    id_names: tuple[str, ...]
    html_tags: tuple[str, ...]


@lru_cache(maxsize=4096)
def analyze_selector(raw: str) -> SelectorParts:
    """Extract class names, ids and bare HTML tags from a selector.

    String literals and parenthesized arguments are ignored, so
    ``[href="#top"]`` and ``:not(div)`` do not count.
    """
    text = STRING_PATTERN.sub('""', raw)
    previous = None
    while previous != text:
        previous = text
        text = PAREN_PATTERN.sub("()", text)
    text = re.sub(r"\[[^\]]*\]", "[]", text)

    class_names = tuple(CLASS_PATTERN.findall(text))
    id_names = tuple(ID_PATTERN.findall(text))
    html_tags = tuple(
        tag for tag in COMPOUND_HEAD_PATTERN.findall(text) if tag.lower() in HTML_TAGS
    )
    return SelectorParts(class_names, id_names, html_tags)


@dataclass(frozen=True)
class Comment:
    """A block or line comment."""

    text: str
    span: Span

    @property
    def is_line_comment(self) -> bool:
        return self.text.startswith("//")

    @property
    def body(self) -> str:
        """Comment text without its delimiters."""
        if self.is_line_comment:
            return self.text[2:].strip()
        return self.text[2:-2].strip()

    @property
    def is_todo(self) -> bool:
        return "TODO" in self.body


@dataclass(eq=False)
class Selector:
    """One selector of a comma-separated selector group."""

    raw: str
    span: Span
    block: "RuleBlock | None" = field(default=None, repr=False)

    @property
    def parts(self) -> SelectorParts:
        return analyze_selector(self.raw)

    @property
    def is_id_selector(self) -> bool:
        return bool(self.parts.id_names)

    @property
    def contains_html_tag(self) -> bool:
        return bool(self.parts.html_tags)

    @property
    def bem(self) -> dict[str, BemResult]:
        """BEM classification of every class name in this selector."""
        return {name: parse_bem(name) for name in self.parts.class_names}


@dataclass(eq=False)
class Declaration:
    """A property/value pair inside a rule block."""

    property: str
    value: str
    span: Span
    name_span: Span
    value_span: Span | None = None
    comment: Comment | None = None
    leading_comment: Comment | None = None
    strings: list[Token] = field(default_factory=list)
    value_tokens: list[Token] = field(default_factory=list)
    has_semicolon: bool = False
    block: "RuleBlock | None" = field(default=None, repr=False)

    @property
    def has_important(self) -> bool:
        return bool(IMPORTANT_PATTERN.search(self.value))

    @property
    def value_without_important(self) -> str:
        return IMPORTANT_PATTERN.sub("", self.value).rstrip()

    @property
    def is_variable(self) -> bool:
        """Whether this declares an SCSS variable or custom property."""
        return self.property.startswith(("$", "--"))


@dataclass(eq=False)
class AtStatement:
    """An at-rule without a block, such as ``@import`` or ``@include``."""

    keyword: str
    prelude: str
    span: Span
    block: "RuleBlock | None" = field(default=None, repr=False)


@dataclass(eq=False)
class RuleBlock:
    """A selector group (or block at-rule) with its body."""

    span: Span
    header_span: Span
    open_brace: Span
    selectors: list[Selector] = field(default_factory=list)
    declarations: list[Declaration] = field(default_factory=list)
    children: list["RuleBlock"] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    at_statements: list[AtStatement] = field(default_factory=list)
    leading_comment: Comment | None = None
    close_brace: Span | None = None
    depth: int = 0
    at_keyword: str | None = None
    prelude: str = ""
    parent: "RuleBlock | None" = field(default=None, repr=False)

    @property
    def is_at_rule(self) -> bool:
        return self.at_keyword is not None

    @property
    def closed(self) -> bool:
        return self.close_brace is not None

    @property
    def selector_parent(self) -> "RuleBlock | None":
        """Nearest enclosing block that has selectors."""
        node = self.parent
        while node is not None and node.is_at_rule:
            node = node.parent
        return node

    def walk(self) -> Iterator["RuleBlock"]:
        """Yield this block and every descendant block, depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def resolved_selectors(self) -> list[str]:
        """Selectors with SCSS ``&`` parent references expanded."""
        if self.is_at_rule:
            parent = self.selector_parent
            return parent.resolved_selectors() if parent else []

        parent = self.selector_parent
        if parent is None:
            return [s.raw for s in self.selectors]

        resolved: list[str] = []
        for parent_selector in parent.resolved_selectors() or [""]:
            for selector in self.selectors:
                if "&" in selector.raw:
                    resolved.append(selector.raw.replace("&", parent_selector))
                else:
                    resolved.append(f"{parent_selector} {selector.raw}".strip())
        return resolved


def effective_class_names(selector: Selector) -> list[str]:
    """Class names introduced by a selector once ``&`` is resolved.

    Names that already appear in the parent's resolved selectors are left
    out, so each class name is attributed to the block that defines it.
    The parent's text is lowercased before expansion; case problems in a
    parent name belong to the parent.
    """
    block = selector.block
    parent = block.selector_parent if block is not None else None
    if parent is None or "&" not in selector.raw:
        return list(selector.parts.class_names)

    parent_selectors = [s.lower() for s in parent.resolved_selectors()]
    inherited: set[str] = set()
    for parent_selector in parent_selectors:
        inherited.update(analyze_selector(parent_selector).class_names)

    names: list[str] = []
    for parent_selector in parent_selectors or [""]:
        expanded = selector.raw.replace("&", parent_selector)
        for name in analyze_selector(expanded).class_names:
            if name not in inherited and name not in names:
                names.append(name)
    return names


@dataclass(eq=False)
class Stylesheet:
    """Root of the tree for one input file."""

    file_path: str
    language: str
    span: Span
    source: str = field(default="", repr=False)
    blocks: list[RuleBlock] = field(default_factory=list)
    declarations: list[Declaration] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    at_statements: list[AtStatement] = field(default_factory=list)
    parse_violations: list[Violation] = field(default_factory=list)

    def walk_blocks(self) -> Iterator[RuleBlock]:
        for block in self.blocks:
            yield from block.walk()

    def walk_selectors(self) -> Iterator[Selector]:
        for block in self.walk_blocks():
            yield from block.selectors

    def walk_declarations(self) -> Iterator[Declaration]:
        yield from self.declarations
        for block in self.walk_blocks():
            yield from block.declarations

    def walk_comments(self) -> Iterator[Comment]:
        """Yield every comment, including ones attached to declarations."""
        seen: set[int] = set()
        collected: list[Comment] = list(self.comments)
        for block in self.walk_blocks():
            collected.extend(block.comments)
            if block.leading_comment is not None:
                collected.append(block.leading_comment)
        for declaration in self.walk_declarations():
            for comment in (declaration.leading_comment, declaration.comment):
                if comment is not None:
                    collected.append(comment)
        for comment in sorted(collected, key=lambda c: c.span.start):
            if comment.span.start not in seen:
                seen.add(comment.span.start)
                yield comment
