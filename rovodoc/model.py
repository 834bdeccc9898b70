"""Data collected from a documented handler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .tokens import TokenKind, tokenize


@dataclass
class ResponseInfo:
    status_code: int
    response_type: str
    description: str


@dataclass
class ExampleInfo:
    status_code: int
    example_code: str
    span: Any = None


@dataclass
class DocInfo:
    title: str | None = None
    description: str | None = None
    responses: list[ResponseInfo] = field(default_factory=list)
    examples: list[ExampleInfo] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    deprecated: bool = False
    security_requirements: list[str] = field(default_factory=list)
    operation_id: str | None = None
    hidden: bool = False


@dataclass
class DocLine:
    text: str
    span: Any = None


@dataclass
class FuncItem:
    name: str
    source: str
    state_type: str | None = None

    def __str__(self) -> str:
        return self.source

    def with_renamed(self, new_name: str) -> str:
        """Return the function source renamed to ``new_name`` and made public."""
        top_level = []
        depth = 0
        for token in tokenize(self.source):
            if token.kind is TokenKind.OPEN:
                depth += 1
            elif token.kind is TokenKind.CLOSE:
                depth -= 1
            elif depth == 0:
                top_level.append(token)

        edits: list[tuple[int, int, str]] = []
        added_pub = False
        for index, token in enumerate(top_level):
            if token.kind is not TokenKind.IDENT or token.text not in ("async", "fn"):
                continue
            if not added_pub:
                previous = top_level[index - 1] if index > 0 else None
                has_pub = (
                    previous is not None
                    and previous.kind is TokenKind.IDENT
                    and previous.text == "pub"
                )
                if not has_pub:
                    edits.append((token.offset, token.offset, "pub "))
                added_pub = True
            if token.text == "fn":
                if index + 1 < len(top_level) and top_level[index + 1].kind is TokenKind.IDENT:
                    old = top_level[index + 1]
                    edits.append((old.offset, old.offset + len(old.text), new_name))
                break

        result = self.source
        for start, end, text in sorted(edits, reverse=True):
            result = result[:start] + text + result[end:]
        return result