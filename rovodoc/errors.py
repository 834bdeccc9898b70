"""Error type raised while reading handler documentation."""

from __future__ import annotations

from typing import Any


class ParseError(Exception):
    """A documentation parse failure, optionally tied to a source location."""

    def __init__(self, message: str, span: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.span = span

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ParseError(message={self.message!r}, span={self.span!r})"