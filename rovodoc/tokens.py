"""A small lexer for Rust-like code fragments found in doc comments."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .errors import ParseError

_OPEN = {"(": ")", "[": "]", "{": "}"}
_CLOSE = {v: k for k, v in _OPEN.items()}
_MULTI_PUNCT = ("::", "->", "=>", "==", "!=", "<=", ">=", "&&", "||", "..")


class TokenKind(enum.Enum):
    IDENT = "ident"
    LIFETIME = "lifetime"
    NUMBER = "number"
    STRING = "string"
    CHAR = "char"
    PUNCT = "punct"
    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    offset: int


def _read_string(source: str, start: int, quote_at: int, raw_hashes: int | None) -> int:
    """Return the index just past the closing quote of a string literal."""
    i = quote_at + 1
    if raw_hashes is not None:
        terminator = '"' + "#" * raw_hashes
        end = source.find(terminator, i)
        if end < 0:
            raise ParseError(f"unterminated string literal at offset {start}", start)
        return end + len(terminator)
    while i < len(source):
        ch = source[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i + 1
        i += 1
    raise ParseError(f"unterminated string literal at offset {start}", start)


def tokenize(source: str) -> list[Token]:
    """Split ``source`` into tokens; comments and whitespace are dropped."""
    tokens: list[Token] = []
    i = 0
    n = len(source)
    while i < n:
        ch = source[i]
        if ch.isspace():
            i += 1
            continue
        if source.startswith("//", i):
            end = source.find("\n", i)
            i = n if end < 0 else end + 1
            continue
        if source.startswith("/*", i):
            end = source.find("*/", i + 2)
            if end < 0:
                raise ParseError(f"unterminated block comment at offset {i}", i)
            i = end + 2
            continue
        start = i
        if ch == "r" and i + 1 < n and source[i + 1] in '"#':
            j = i + 1
            while j < n and source[j] == "#":
                j += 1
            if j < n and source[j] == '"':
                i = _read_string(source, start, j, j - i - 1)
                tokens.append(Token(TokenKind.STRING, source[start:i], start))
                continue
        if ch == "b" and i + 1 < n and source[i + 1] == '"':
            i = _read_string(source, start, i + 1, None)
            tokens.append(Token(TokenKind.STRING, source[start:i], start))
            continue
        if ch.isalpha() or ch == "_":
            while i < n and (source[i].isalnum() or source[i] == "_"):
                i += 1
            tokens.append(Token(TokenKind.IDENT, source[start:i], start))
            continue
        if ch.isdigit():
            while i < n and (source[i].isalnum() or source[i] == "_"):
                i += 1
            if i + 1 < n and source[i] == "." and source[i + 1].isdigit():
                i += 1
                while i < n and (source[i].isalnum() or source[i] == "_"):
                    i += 1
            tokens.append(Token(TokenKind.NUMBER, source[start:i], start))
            continue
        if ch == '"':
            i = _read_string(source, start, i, None)
            tokens.append(Token(TokenKind.STRING, source[start:i], start))
            continue
        if ch == "'":
            if i + 2 < n and source[i + 1] == "\\":
                end = source.find("'", i + 2)
                if end < 0:
                    raise ParseError(f"unterminated character literal at offset {start}", start)
                i = end + 1
                tokens.append(Token(TokenKind.CHAR, source[start:i], start))
                continue
            if i + 2 < n and source[i + 2] == "'":
                i += 3
                tokens.append(Token(TokenKind.CHAR, source[start:i], start))
                continue
            i += 1
            while i < n and (source[i].isalnum() or source[i] == "_"):
                i += 1
            tokens.append(Token(TokenKind.LIFETIME, source[start:i], start))
            continue
        if ch in _OPEN:
            tokens.append(Token(TokenKind.OPEN, ch, start))
            i += 1
            continue
        if ch in _CLOSE:
            tokens.append(Token(TokenKind.CLOSE, ch, start))
            i += 1
            continue
        multi = next((p for p in _MULTI_PUNCT if source.startswith(p, i)), None)
        text = multi or ch
        tokens.append(Token(TokenKind.PUNCT, text, start))
        i += len(text)
    return tokens


def validate_expression(source: str) -> list[Token]:
    """Check that ``source`` looks like a single well-formed expression.

    Returns its tokens; raises ParseError describing the first problem found.
    """
    tokens = tokenize(source)
    if not tokens:
        raise ParseError("expected an expression, found end of input")
    stack: list[Token] = []
    for token in tokens:
        if token.kind is TokenKind.OPEN:
            stack.append(token)
        elif token.kind is TokenKind.CLOSE:
            if not stack or stack[-1].text != _CLOSE[token.text]:
                raise ParseError(f"unexpected closing delimiter `{token.text}`", token.offset)
            stack.pop()
        elif token.kind is TokenKind.PUNCT and token.text == ";" and not stack:
            raise ParseError("unexpected `;` in expression", token.offset)
    if stack:
        raise ParseError("unexpected end of input, unclosed delimiter", stack[-1].offset)
    first, last = tokens[0], tokens[-1]
    if first.kind is TokenKind.PUNCT and first.text in {",", ":", "=", ".", "=>", "->"}:
        raise ParseError(f"expected an expression, found `{first.text}`", first.offset)
    if last.kind is TokenKind.PUNCT and last.text != "?":
        raise ParseError("unexpected end of input, expected an operand", last.offset)
    return tokens


def extract_state_type(source: str) -> str | None:
    """Return the type inside the first ``State<...>`` in ``source``, if any."""
    state_pos = source.find("State")
    if state_pos < 0:
        return None
    after_state = source[state_pos:]
    open_bracket = after_state.find("<")
    if open_bracket < 0:
        return None
    after_open = after_state[open_bracket + 1:]
    depth = 1
    close_pos = 0
    for index, ch in enumerate(after_open):
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth == 0:
                close_pos = index
                break
    if close_pos == 0:
        return None
    inner = " ".join(after_open[:close_pos].split())
    return inner or None


def extract_doc_text(attr: str) -> str:
    """Return the text between the first and last double quote of ``attr``."""
    start = attr.find('"')
    end = attr.rfind('"')
    if start >= 0 and start < end:
        return attr[start + 1:end]
    return ""