"""Parsers for the individual entries of a handler's documentation."""

from __future__ import annotations

from typing import Any

from .errors import ParseError
from .model import ExampleInfo, ResponseInfo
from .tokens import Token, TokenKind, tokenize, validate_expression

_PAIRS = {")": "(", "]": "[", "}": "{"}

_EXAMPLE_NOTE = (
    "note: examples: 'User::default()', "
    "'User { id: 1, name: \"Alice\".into() }', 'vec![1, 2, 3]'"
)


def _balanced_tokens(source: str) -> list[Token]:
    """Tokenize ``source`` and check that its delimiters are balanced."""
    tokens = tokenize(source)
    stack: list[str] = []
    for token in tokens:
        if token.kind is TokenKind.OPEN:
            stack.append(token.text)
        elif token.kind is TokenKind.CLOSE:
            if not stack or stack[-1] != _PAIRS[token.text]:
                raise ParseError(f"unexpected closing delimiter `{token.text}`", token.offset)
            stack.pop()
    if stack:
        raise ParseError("unclosed delimiter")
    return tokens


def _parse_simple_annotation(
    text: str, span: Any, name: str, placeholder: str, example: str
) -> str:
    """Return the value of an ``@name <value>`` annotation."""
    parts = text.split(" ", 1)
    if len(parts) < 2:
        raise ParseError(
            f"Invalid @{name} annotation format\n"
            f"help: expected '@{name} {placeholder}'\n"
            f"note: example '@{name} {example}'",
            span,
        )
    value = parts[1].strip()
    if not value:
        raise ParseError(
            f"Empty {placeholder} in @{name} annotation\n"
            f"help: provide a {placeholder} after @{name}",
            span,
        )
    return value


def validate_status_code(status_code: int, span: Any = None) -> None:
    """Raise ParseError unless ``status_code`` is a valid HTTP status code."""
    if not 100 <= status_code <= 599:
        raise ParseError(
            f"Status code {status_code} is out of valid range\n"
            "help: HTTP status codes must be between 100-599\n"
            "note: common codes: 200 (OK), 201 (Created), 400 (Bad Request), "
            "404 (Not Found), 500 (Internal Error)",
            span,
        )


def parse_response_from_parts(
    response_type: str, status_code: int, description: str, span: Any = None
) -> ResponseInfo:
    """Build a response entry from its status code, type and description."""
    validate_status_code(status_code, span)

    if not description.strip():
        raise ParseError(
            "Missing description for response\n"
            "help: add a description after the response type\n"
            "note: format is '<status>: <type> - <description>'",
            span,
        )

    try:
        _balanced_tokens(response_type)
    except ParseError:
        raise ParseError(
            f"Invalid response type '{response_type}'\n"
            "help: response type must be valid Rust syntax\n"
            "note: common types: Json<T>, (), (StatusCode, Json<T>)",
            span,
        ) from None

    return ResponseInfo(
        status_code=status_code,
        response_type=response_type,
        description=description,
    )


def parse_example_from_parts(
    status_code: int, example_code: str, span: Any = None
) -> ExampleInfo:
    """Build an example entry from its status code and expression."""
    validate_status_code(status_code, span)

    if not example_code.strip():
        raise ParseError(
            "Empty example expression\n"
            "help: provide a valid Rust expression\n"
            "note: format is '<status>: <rust_expression>'",
            span,
        )

    unescaped = example_code.replace('\\"', '"')

    try:
        _balanced_tokens(unescaped)
    except ParseError:
        raise ParseError(
            f"Invalid example expression '{example_code}'\n"
            "help: expression must be valid Rust syntax\n"
            f"{_EXAMPLE_NOTE}",
            span,
        ) from None

    try:
        validate_expression(unescaped)
    except ParseError as exc:
        raise ParseError(
            f"Invalid example expression '{example_code}'\n"
            "help: expression must be valid Rust syntax\n"
            f"note: parse error: {exc}\n"
            f"{_EXAMPLE_NOTE}",
            span,
        ) from None

    return ExampleInfo(status_code=status_code, example_code=unescaped, span=span)


def parse_tag(text: str, span: Any = None) -> str:
    """Parse an ``@tag <tag_name>`` line."""
    return _parse_simple_annotation(text, span, "tag", "<tag_name>", "users")


def parse_security(text: str, span: Any = None) -> str:
    """Parse an ``@security <scheme_name>`` line."""
    return _parse_simple_annotation(text, span, "security", "<scheme_name>", "bearer_auth")


def parse_id(text: str, span: Any = None) -> str:
    """Parse an ``@id <operation_id>`` line."""
    operation_id = _parse_simple_annotation(text, span, "id", "<operation_id>", "getUserById")
    if not all(ch.isalnum() or ch == "_" for ch in operation_id):
        raise ParseError(
            f"Invalid operation ID '{operation_id}'\n"
            "help: operation IDs must contain only alphanumeric characters and underscores\n"
            "note: valid examples: 'getUserById', 'create_user', 'deleteItem123'",
            span,
        )
    return operation_id