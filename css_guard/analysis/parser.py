"""
Structural parser assembling tokens into a Stylesheet tree.

The parser never raises on bad input. Anomalies are recorded as parse
violations on the Stylesheet and parsing continues, so rules can still
run on the partial tree:

- PARSE.MALFORMED_INPUT for unterminated strings or comments, properties
  without a colon, and selectors that never open a block
- PARSE.MISSING_SEMICOLON for a declaration closed by ``}`` without ``;``
- PARSE.UNBALANCED_BRACES for a stray ``}`` or for blocks still open at
  end of input (reported once, at the outermost unclosed brace)
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..models import Severity, Span, Violation
from .html import mask_html
from .stylesheet import (
    AtStatement,
    Comment,
    Declaration,
    RuleBlock,
    Selector,
    Stylesheet,
    detect_language,
)
from .tokenizer import Tokenizer
from .tokens import LineIndex, Token, TokenKind

logger = logging.getLogger(__name__)

PARSE_MALFORMED_INPUT = "PARSE.MALFORMED_INPUT"
PARSE_UNBALANCED_BRACES = "PARSE.UNBALANCED_BRACES"
PARSE_MISSING_SEMICOLON = "PARSE.MISSING_SEMICOLON"

PARSE_RULE_SEVERITIES: dict[str, Severity] = {
    PARSE_MALFORMED_INPUT: Severity.ERROR,
    PARSE_UNBALANCED_BRACES: Severity.ERROR,
    PARSE_MISSING_SEMICOLON: Severity.WARNING,
}


@dataclass
class _PendingDeclaration:
    name: Token
    colon: Token | None = None
    tokens: list[Token] = field(default_factory=list)


@dataclass
class _PendingAtRule:
    keyword: Token
    tokens: list[Token] = field(default_factory=list)


def split_selector_group(token: Token) -> list[Selector]:
    """Split a selector group on top-level commas.

    Commas inside parentheses, brackets and strings are not split points,
    so ``:not(a, b)`` stays one selector.
    """
    text = token.text
    selectors: list[Selector] = []
    depth = 0
    quote: str | None = None
    start = 0

    def add(begin: int, end: int) -> None:
        raw = text[begin:end]
        stripped = raw.strip()
        if not stripped:
            return
        rel_start = begin + (len(raw) - len(raw.lstrip()))
        rel_end = rel_start + len(stripped)
        selectors.append(Selector(stripped, token.sub_span(rel_start, rel_end)))

    index = 0
    while index < len(text):
        char = text[index]
        if quote:
            if char == "\\":
                index += 1
            elif char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth = max(0, depth - 1)
        elif char == "," and depth == 0:
            add(start, index)
            start = index + 1
        index += 1
    add(start, len(text))
    return selectors


class StructuralParser:
    """Builds a Stylesheet from a token stream.

    Example usage:
        tokenizer = Tokenizer(source)
        parser = StructuralParser(tokenizer, source, "main.scss", "scss")
        stylesheet = parser.parse()
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        source: str,
        file_path: str = "<string>",
        language: str = "css",
        line_index: LineIndex | None = None,
    ):
        self.tokens = tokens
        self.source = source
        self.file_path = file_path
        self.language = language
        self.line_index = line_index or LineIndex(source)

        self._stack: list[RuleBlock] = []
        self._selector: Token | None = None
        self._at_rule: _PendingAtRule | None = None
        self._declaration: _PendingDeclaration | None = None
        self._pending_comments: list[Comment] = []
        self._last_declaration: Declaration | None = None
        self._stylesheet: Stylesheet | None = None

    def parse(self) -> Stylesheet:
        """Consume the token stream and return the (possibly partial) tree."""
        self._stylesheet = Stylesheet(
            file_path=self.file_path,
            language=self.language,
            span=self.line_index.span(0, len(self.source)),
            source=self.source,
        )

        handlers = {
            TokenKind.COMMENT: self._on_comment,
            TokenKind.SELECTOR_TEXT: self._on_selector,
            TokenKind.BRACE_OPEN: self._on_brace_open,
            TokenKind.BRACE_CLOSE: self._on_brace_close,
            TokenKind.SEMICOLON: self._on_semicolon,
            TokenKind.PROPERTY_NAME: self._on_property,
            TokenKind.COLON: self._on_colon,
            TokenKind.VALUE_TEXT: self._on_value,
            TokenKind.STRING_LITERAL: self._on_value,
            TokenKind.AT_RULE_KEYWORD: self._on_at_keyword,
            TokenKind.MALFORMED: self._on_malformed,
            TokenKind.EOF: self._on_eof,
        }
        for token in self.tokens:
            handlers[token.kind](token)

        logger.debug(
            f"Parsed {self.file_path}: {len(self._stylesheet.blocks)} top-level blocks, "
            f"{len(self._stylesheet.parse_violations)} parse violations"
        )
        return self._stylesheet

    # Token handlers

    def _on_comment(self, token: Token) -> None:
        comment = Comment(token.text, token.span)

        if self._declaration is not None and self._declaration.colon is not None:
            self._declaration.tokens.append(token)
            return

        last = self._last_declaration
        if (
            last is not None
            and last.comment is None
            and comment.span.line == last.span.end_line
        ):
            last.comment = comment
            return

        self._container_comments().append(comment)
        self._pending_comments.append(comment)

    def _on_selector(self, token: Token) -> None:
        if self._selector is not None:
            self._report(
                PARSE_MALFORMED_INPUT,
                "selector is not followed by a block",
                self._selector.span,
            )
        self._selector = token
        self._last_declaration = None

    def _on_at_keyword(self, token: Token) -> None:
        self._at_rule = _PendingAtRule(token)
        self._last_declaration = None

    def _on_property(self, token: Token) -> None:
        self._declaration = _PendingDeclaration(token)

    def _on_colon(self, token: Token) -> None:
        if self._declaration is not None:
            self._declaration.colon = token

    def _on_value(self, token: Token) -> None:
        if self._declaration is not None:
            self._declaration.tokens.append(token)
        elif self._at_rule is not None:
            self._at_rule.tokens.append(token)

    def _on_brace_open(self, token: Token) -> None:
        at_keyword = None
        prelude = ""
        selectors: list[Selector] = []

        if self._selector is not None:
            header = self._selector.span
            selectors = split_selector_group(self._selector)
        elif self._at_rule is not None:
            header = self._at_rule_header(self._at_rule)
            at_keyword = self._at_rule.keyword.text
            prelude = self._at_rule_prelude(self._at_rule)
        else:
            header = token.span
            self._report(PARSE_MALFORMED_INPUT, "block has no selector", token.span)

        parent = self._stack[-1] if self._stack else None
        depth = sum(1 for block in self._stack if not block.is_at_rule)

        block = RuleBlock(
            span=self.line_index.span(header.start, token.span.end),
            header_span=header,
            open_brace=token.span,
            selectors=selectors,
            leading_comment=self._leading_comment(header),
            depth=depth,
            at_keyword=at_keyword,
            prelude=prelude,
            parent=parent,
        )
        for selector in selectors:
            selector.block = block

        if parent is not None:
            parent.children.append(block)
        else:
            self._stylesheet.blocks.append(block)

        self._stack.append(block)
        self._selector = None
        self._at_rule = None
        self._pending_comments = []
        self._last_declaration = None

    def _on_brace_close(self, token: Token) -> None:
        if self._declaration is not None:
            declaration = self._finish_declaration(has_semicolon=False)
            if declaration is not None:
                end = declaration.span.end
                self._report(
                    PARSE_MISSING_SEMICOLON,
                    f"missing semicolon after '{declaration.property}' declaration",
                    self.line_index.span(end, end),
                    hints=["end every declaration with ';', including the last one"],
                )

        if self._at_rule is not None:
            statement = self._finish_at_statement(self._at_rule)
            end = statement.span.end
            self._report(
                PARSE_MISSING_SEMICOLON,
                f"missing semicolon after '{statement.keyword}' statement",
                self.line_index.span(end, end),
            )
            self._at_rule = None

        if self._selector is not None:
            self._report(
                PARSE_MALFORMED_INPUT,
                "selector is not followed by a block",
                self._selector.span,
            )
            self._selector = None

        if self._stack:
            block = self._stack.pop()
            block.close_brace = token.span
            block.span = self.line_index.span(block.span.start, token.span.end)
        else:
            self._report(
                PARSE_UNBALANCED_BRACES,
                "unexpected '}' without a matching '{'",
                token.span,
            )

        self._pending_comments = []
        self._last_declaration = None

    def _on_semicolon(self, token: Token) -> None:
        if self._declaration is not None:
            self._finish_declaration(has_semicolon=True, semicolon=token)
        elif self._at_rule is not None:
            self._finish_at_statement(self._at_rule, semicolon=token)
            self._at_rule = None
        elif self._selector is not None:
            self._report(
                PARSE_MALFORMED_INPUT,
                "declaration outside of a rule block",
                self._selector.span,
            )
            self._selector = None

    def _on_malformed(self, token: Token) -> None:
        if token.text.startswith(("'", '"')):
            message = "unterminated string literal; rest of file skipped"
        elif token.text.startswith("/*"):
            message = "unterminated comment; rest of file skipped"
        else:
            message = "malformed input; rest of file skipped"

        start = token.span.start
        self._report(
            PARSE_MALFORMED_INPUT,
            message,
            self.line_index.span(start, min(token.span.end, start + 1)),
        )
        self._declaration = None
        self._selector = None
        self._at_rule = None

    def _on_eof(self, token: Token) -> None:
        if self._declaration is not None:
            declaration = self._finish_declaration(has_semicolon=False)
            if declaration is not None and not self._stack:
                end = declaration.span.end
                self._report(
                    PARSE_MISSING_SEMICOLON,
                    f"missing semicolon after '{declaration.property}' declaration",
                    self.line_index.span(end, end),
                )

        if self._at_rule is not None:
            statement = self._finish_at_statement(self._at_rule)
            if not self._stack:
                end = statement.span.end
                self._report(
                    PARSE_MISSING_SEMICOLON,
                    f"missing semicolon after '{statement.keyword}' statement",
                    self.line_index.span(end, end),
                )
            self._at_rule = None

        if self._selector is not None:
            self._report(
                PARSE_MALFORMED_INPUT,
                "selector is not followed by a block",
                self._selector.span,
            )
            self._selector = None

        if self._stack:
            outermost = self._stack[0]
            count = len(self._stack)
            self._report(
                PARSE_UNBALANCED_BRACES,
                f"{count} unclosed block{'s' if count != 1 else ''} at end of input",
                outermost.open_brace,
                hints=["add the missing '}'"],
            )
            for block in self._stack:
                block.span = self.line_index.span(block.span.start, token.span.end)
            self._stack = []

    # Helpers

    def _container_comments(self) -> list[Comment]:
        if self._stack:
            return self._stack[-1].comments
        return self._stylesheet.comments

    def _leading_comment(self, header: Span) -> Comment | None:
        for comment in reversed(self._pending_comments):
            if comment.span.end <= header.start and comment.span.end_line >= header.line - 1:
                return comment
        return None

    def _finish_declaration(
        self, has_semicolon: bool, semicolon: Token | None = None
    ) -> Declaration | None:
        pending = self._declaration
        self._declaration = None
        if pending is None:
            return None

        name = pending.name
        if pending.colon is None:
            self._report(
                PARSE_MALFORMED_INPUT,
                f"expected ':' after property '{name.text}'",
                name.span,
            )
            return None

        value_tokens = [t for t in pending.tokens if t.kind != TokenKind.COMMENT]
        comments = [
            Comment(t.text, t.span) for t in pending.tokens if t.kind == TokenKind.COMMENT
        ]

        if value_tokens:
            value_start = value_tokens[0].span.start
            value_end = value_tokens[-1].span.end
            value = self.source[value_start:value_end]
            value_span: Span | None = self.line_index.span(value_start, value_end)
            end = value_end
        else:
            value = ""
            value_span = None
            end = pending.colon.span.end

        if semicolon is not None:
            end = semicolon.span.end

        declaration = Declaration(
            property=name.text,
            value=value,
            span=self.line_index.span(name.span.start, end),
            name_span=name.span,
            value_span=value_span,
            comment=comments[0] if comments else None,
            leading_comment=self._leading_comment(name.span),
            strings=[t for t in value_tokens if t.kind == TokenKind.STRING_LITERAL],
            value_tokens=value_tokens,
            has_semicolon=has_semicolon,
        )

        if self._stack:
            block = self._stack[-1]
            declaration.block = block
            block.declarations.append(declaration)
            block.comments.extend(comments[1:])
        else:
            self._stylesheet.declarations.append(declaration)
            self._stylesheet.comments.extend(comments[1:])

        self._pending_comments = []
        self._last_declaration = declaration
        return declaration

    def _at_rule_header(self, pending: _PendingAtRule) -> Span:
        start = pending.keyword.span.start
        end = pending.tokens[-1].span.end if pending.tokens else pending.keyword.span.end
        return self.line_index.span(start, end)

    def _at_rule_prelude(self, pending: _PendingAtRule) -> str:
        if not pending.tokens:
            return ""
        return self.source[pending.tokens[0].span.start : pending.tokens[-1].span.end]

    def _finish_at_statement(
        self, pending: _PendingAtRule, semicolon: Token | None = None
    ) -> AtStatement:
        header = self._at_rule_header(pending)
        end = semicolon.span.end if semicolon is not None else header.end
        statement = AtStatement(
            keyword=pending.keyword.text,
            prelude=self._at_rule_prelude(pending),
            span=self.line_index.span(header.start, end),
        )
        if self._stack:
            statement.block = self._stack[-1]
            self._stack[-1].at_statements.append(statement)
        else:
            self._stylesheet.at_statements.append(statement)
        self._last_declaration = None
        return statement

    def _report(
        self,
        rule_id: str,
        message: str,
        span: Span,
        hints: list[str] | None = None,
    ) -> None:
        self._stylesheet.parse_violations.append(
            Violation(
                rule_id=rule_id,
                severity=PARSE_RULE_SEVERITIES[rule_id],
                message=message,
                span=span,
                file_path=self.file_path,
                remediation_hints=tuple(hints or ()),
            )
        )


def parse_stylesheet(
    source: str, file_path: str = "<string>", language: str | None = None
) -> Stylesheet:
    """Tokenize and parse one source text.

    Args:
        source: Decoded source text
        file_path: Label used in violations
        language: css, scss or html (detected from file_path when omitted)

    Returns:
        Parsed Stylesheet with any parse violations attached
    """
    language = language or detect_language(file_path)
    text = mask_html(source) if language == "html" else source
    tokenizer = Tokenizer(text)
    parser = StructuralParser(
        tokenizer, text, file_path, language, line_index=tokenizer.line_index
    )
    return parser.parse()
