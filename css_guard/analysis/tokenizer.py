"""
Tokenizer for CSS and SCSS source text.

The tokenizer is context-sensitive rather than grammar-complete: it only
needs to tell selectors from declarations, split declarations into
property, colon and value, and keep comments and string literals intact.
A segment inside a block is a nested selector when its first top-level
terminator is ``{``, so colons in ``&:hover {`` or ``a:not(.b) {`` never
start a declaration.

Unterminated strings and comments do not raise. They produce a single
MALFORMED token covering the rest of the input, followed by EOF, so the
valid prefix can still be checked.
"""

from collections.abc import Generator, Iterator

from .tokens import LineIndex, Token, TokenKind

TERMINATORS = "{;}"


class Tokenizer:
    """Converts source text into a restartable lazy stream of tokens.

    Example usage:
        tokenizer = Tokenizer(".menu { color: red; }")
        for token in tokenizer:
            print(token.kind, token.text)
    """

    def __init__(self, source: str):
        """Initialize the tokenizer.

        Args:
            source: Decoded source text
        """
        self.source = source
        self.line_index = LineIndex(source)

    def __iter__(self) -> Iterator[Token]:
        return self._scan()

    def tokenize(self) -> list[Token]:
        """Tokenize the whole source eagerly."""
        return list(self)

    def _token(self, kind: TokenKind, start: int, end: int) -> Token:
        return Token(kind, self.source[start:end], self.line_index.span(start, end))

    def _scan(self) -> Generator[Token, None, None]:
        src = self.source
        n = len(src)
        i = 0
        depth = 0

        while i < n:
            ch = src[i]

            if ch.isspace():
                i += 1
                continue

            if src.startswith("/*", i):
                close = src.find("*/", i + 2)
                if close == -1:
                    yield self._token(TokenKind.MALFORMED, i, n)
                    break
                yield self._token(TokenKind.COMMENT, i, close + 2)
                i = close + 2
                continue

            if src.startswith("//", i):
                newline = src.find("\n", i)
                stop = n if newline == -1 else newline
                yield self._token(TokenKind.COMMENT, i, stop)
                i = stop
                continue

            if ch == "{":
                yield self._token(TokenKind.BRACE_OPEN, i, i + 1)
                depth += 1
                i += 1
                continue

            if ch == "}":
                yield self._token(TokenKind.BRACE_CLOSE, i, i + 1)
                depth = max(0, depth - 1)
                i += 1
                continue

            if ch == ";":
                yield self._token(TokenKind.SEMICOLON, i, i + 1)
                i += 1
                continue

            if ch == "@":
                j = i + 1
                while j < n and (src[j].isalnum() or src[j] in "-_"):
                    j += 1
                yield self._token(TokenKind.AT_RULE_KEYWORD, i, j)
                end, _, _, broken = self._find_terminator(j)
                stopped = yield from self._scan_value(j, n if broken else end)
                if stopped:
                    break
                i = end
                continue

            end, terminator, colon, broken = self._find_terminator(i)
            is_selector = terminator == "{" or (depth == 0 and ch != "$")

            if is_selector:
                if broken:
                    yield self._token(TokenKind.MALFORMED, i, n)
                    break
                text = src[i:end].rstrip()
                yield self._token(TokenKind.SELECTOR_TEXT, i, i + len(text))
                i = end
                continue

            if colon is None:
                if broken:
                    yield self._token(TokenKind.MALFORMED, i, n)
                    break
                text = src[i:end].rstrip()
                yield self._token(TokenKind.PROPERTY_NAME, i, i + len(text))
                i = end
                continue

            name = src[i:colon].rstrip()
            yield self._token(TokenKind.PROPERTY_NAME, i, i + len(name))
            yield self._token(TokenKind.COLON, colon, colon + 1)
            stopped = yield from self._scan_value(colon + 1, n if broken else end)
            if stopped:
                break
            i = end

        yield self._token(TokenKind.EOF, n, n)

    def _find_terminator(self, start: int) -> tuple[int, str | None, int | None, bool]:
        """Find the end of the segment beginning at ``start``.

        Args:
            start: Offset where the segment begins

        Returns:
            Tuple of (end offset, terminator char or None at end of input,
            offset of the first top-level colon or None, whether an
            unterminated string or comment was hit).
        """
        src = self.source
        n = len(src)
        paren = 0
        colon = None
        j = start

        while j < n:
            c = src[j]
            if c in "\"'":
                close = self._string_end(j)
                if close is None:
                    return j, None, colon, True
                j = close
                continue
            if src.startswith("/*", j):
                close = src.find("*/", j + 2)
                if close == -1:
                    return j, None, colon, True
                j = close + 2
                continue
            if paren == 0 and src.startswith("//", j):
                newline = src.find("\n", j)
                j = n if newline == -1 else newline
                continue
            if src.startswith("#{", j):
                close = src.find("}", j + 2)
                j = j + 2 if close == -1 else close + 1
                continue

            if c in "([":
                paren += 1
            elif c in ")]":
                paren = max(0, paren - 1)
            elif paren == 0 and c in TERMINATORS:
                return j, c, colon, False
            elif c == ":" and paren == 0 and colon is None:
                colon = j
            j += 1

        return n, None, colon, False

    def _string_end(self, start: int) -> int | None:
        """Get the offset just past the string starting at ``start``.

        Returns None for a string left open at a newline or end of input.
        """
        src = self.source
        quote = src[start]
        j = start + 1
        while j < len(src):
            c = src[j]
            if c == "\\":
                j += 2
                continue
            if c == quote:
                return j + 1
            if c == "\n":
                return None
            j += 1
        return None

    def _scan_value(self, start: int, end: int) -> Generator[Token, None, bool]:
        """Split a value or at-rule prelude into text, string and comment tokens.

        Returns:
            True if an unterminated string or comment ended the scan.
        """
        src = self.source
        i = start
        paren = 0
        run_start: int | None = None
        run_end = start

        while i < end:
            ch = src[i]
            is_string = ch in "\"'"
            is_block_comment = src.startswith("/*", i)
            is_line_comment = paren == 0 and src.startswith("//", i)

            if is_string or is_block_comment or is_line_comment:
                if run_start is not None:
                    yield self._token(TokenKind.VALUE_TEXT, run_start, run_end)
                    run_start = None

                if is_string:
                    close = self._string_end(i)
                    if close is None:
                        yield self._token(TokenKind.MALFORMED, i, len(src))
                        return True
                    yield self._token(TokenKind.STRING_LITERAL, i, close)
                    i = close
                elif is_block_comment:
                    close = src.find("*/", i + 2)
                    if close == -1:
                        yield self._token(TokenKind.MALFORMED, i, len(src))
                        return True
                    yield self._token(TokenKind.COMMENT, i, close + 2)
                    i = close + 2
                else:
                    newline = src.find("\n", i, end)
                    stop = end if newline == -1 else newline
                    yield self._token(TokenKind.COMMENT, i, stop)
                    i = stop
                continue

            if ch.isspace():
                i += 1
                continue

            if run_start is None:
                run_start = i

            if src.startswith("#{", i):
                close = src.find("}", i + 2)
                i = i + 2 if close == -1 else min(close + 1, end)
                run_end = i
                continue

            if ch in "([":
                paren += 1
            elif ch in ")]":
                paren = max(0, paren - 1)
            i += 1
            run_end = i

        if run_start is not None:
            yield self._token(TokenKind.VALUE_TEXT, run_start, run_end)
        return False
