"""Read a documented handler: its name, attributes and doc comment sections."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from . import annotations
from .errors import ParseError
from .model import DocInfo, DocLine, FuncItem
from .similarity import find_closest_annotation
from .tokens import Token, TokenKind, extract_doc_text, extract_state_type, tokenize

_DOC_COMMENT = re.compile(r"^[ \t]*///(?!/)(.*)$", re.MULTILINE)
_FENCES = ("```", "```rust", "```rs")
_SECTIONS = {"Responses": "responses", "Examples": "examples", "Metadata": "metadata"}


def _line_of(source: str, offset: int) -> int:
    """Return the 1-based line number of ``offset`` in ``source``."""
    return source.count("\n", 0, offset) + 1


def _matching_close(tokens: list[Token], open_index: int) -> int | None:
    """Return the index of the token closing the group opened at ``open_index``."""
    depth = 0
    for index in range(open_index, len(tokens)):
        kind = tokens[index].kind
        if kind is TokenKind.OPEN:
            depth += 1
        elif kind is TokenKind.CLOSE:
            depth -= 1
            if depth == 0:
                return index
    return None


def parse_rovo_function(source: str) -> tuple[FuncItem, DocInfo]:
    """Parse a handler's source into its function item and documentation."""
    tokens = tokenize(source)
    attribute_docs: list[tuple[int, DocLine]] = []
    deprecated = False
    name: str | None = None
    fn_offset = len(source)

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.kind is TokenKind.PUNCT and token.text == "#":
            following = tokens[i + 1] if i + 1 < len(tokens) else None
            if following is not None and following.kind is TokenKind.OPEN:
                close = _matching_close(tokens, i + 1)
                end = tokens[close].offset if close is not None else len(source)
                content = source[following.offset + 1:end].strip()
                if content.startswith("doc"):
                    attribute_docs.append(
                        (
                            token.offset,
                            DocLine(
                                text=extract_doc_text(content),
                                span=_line_of(source, token.offset),
                            ),
                        )
                    )
                elif content.startswith("deprecated"):
                    deprecated = True
                i = close + 1 if close is not None else len(tokens)
                continue
            i += 1
        elif token.kind is TokenKind.IDENT and token.text == "fn":
            following = tokens[i + 1] if i + 1 < len(tokens) else None
            if following is not None and following.kind is TokenKind.IDENT:
                name = following.text
                fn_offset = token.offset
            break
        else:
            i += 1

    if name is None:
        raise ParseError("Could not find function name")

    comment_docs = [
        (match.start(), DocLine(text=match.group(1), span=_line_of(source, match.start())))
        for match in _DOC_COMMENT.finditer(source)
        if match.start() < fn_offset
    ]
    doc_lines = [line for _, line in sorted(comment_docs + attribute_docs, key=lambda item: item[0])]

    doc_info = parse_doc_comments(doc_lines)
    doc_info.deprecated = deprecated

    func_item = FuncItem(name=name, source=source, state_type=extract_state_type(source))
    return func_item, doc_info


@dataclass
class _PendingResponse:
    status: int
    response_type: str
    description: str
    span: Any


@dataclass
class _PendingExample:
    status: int
    code: str
    span: Any
    depth: int = 0
    code_block: bool = False


def _bracket_depth(text: str, depth: int = 0) -> int:
    for ch in text:
        if ch in "{[(":
            depth += 1
        elif ch in "}])":
            depth = max(depth - 1, 0)
    return depth


def _status_prefix(trimmed: str) -> tuple[str, int] | None:
    """Return the text before the first colon and its position if it is all digits."""
    colon = trimmed.find(":")
    if colon < 0:
        return None
    before = trimmed[:colon]
    if all(ch in "0123456789" for ch in before):
        return before, colon
    return None


def _parse_status(text: str, span: Any) -> int:
    if not text or int(text) > 0xFFFF:
        raise ParseError(f"Invalid status code '{text}'", span)
    return int(text)


def _section_name(trimmed: str) -> str:
    while trimmed.startswith("# "):
        trimmed = trimmed[2:]
    return trimmed.strip()


def _unknown_annotation(trimmed: str, span: Any) -> ParseError:
    annotation = trimmed.split()[0] if trimmed.split() else trimmed
    annotation_name = annotation[1:] if annotation.startswith("@") else annotation
    suggestion = find_closest_annotation(annotation_name)
    help_line = f"help: did you mean '@{suggestion}'?\n" if suggestion else ""
    return ParseError(
        f"Unknown annotation '{annotation}'\n"
        f"{help_line}"
        "note: valid annotations are @tag, @security, @id, @hidden",
        span,
    )


def parse_doc_comments(lines: list[DocLine]) -> DocInfo:
    """Interpret doc comment lines: title, description and the known sections."""
    doc_info = DocInfo()
    description_lines: list[str] = []
    in_description = False
    title_set = False
    section: str | None = None
    pending_response: _PendingResponse | None = None
    pending_example: _PendingExample | None = None

    def flush_response() -> None:
        nonlocal pending_response
        if pending_response is not None:
            p = pending_response
            pending_response = None
            doc_info.responses.append(
                annotations.parse_response_from_parts(
                    p.response_type, p.status, p.description, p.span
                )
            )

    def flush_example(code: str | None = None) -> None:
        nonlocal pending_example
        if pending_example is not None:
            p = pending_example
            pending_example = None
            doc_info.examples.append(
                annotations.parse_example_from_parts(
                    p.status, p.code if code is None else code, p.span
                )
            )

    for doc_line in lines:
        trimmed = doc_line.text.strip()
        span = doc_line.span

        if trimmed == "@rovo-ignore":
            break

        if trimmed.startswith("# "):
            flush_response()
            flush_example()
            section = _SECTIONS.get(_section_name(trimmed))
            continue

        if not trimmed:
            if section is None and in_description:
                description_lines.append("")
            continue

        if section == "responses":
            prefix = _status_prefix(trimmed)
            if prefix is not None:
                before, colon = prefix
                flush_response()
                status = _parse_status(before, span)
                after = trimmed[colon + 1:].strip()
                dash = after.find(" - ")
                if dash < 0:
                    raise ParseError(
                        "Invalid response format. Expected: <status>: <type> - <description>",
                        span,
                    )
                pending_response = _PendingResponse(
                    status, after[:dash].strip(), after[dash + 3:].strip(), span
                )
            elif pending_response is not None:
                pending_response.description += " " + trimmed

        elif section == "examples":
            if pending_example is not None:
                p = pending_example
                if p.code_block:
                    if trimmed == "```" and p.code:
                        flush_example()
                    elif not p.code and trimmed in _FENCES:
                        pass
                    else:
                        p.code = f"{p.code}\n{trimmed}" if p.code else trimmed
                elif not p.code and trimmed in _FENCES:
                    p.code_block = True
                else:
                    p.code = f"{p.code}\n{trimmed}" if p.code else trimmed
                    p.depth = _bracket_depth(trimmed, p.depth)
                    if p.depth == 0 and p.code.strip():
                        flush_example()
            else:
                prefix = _status_prefix(trimmed)
                if prefix is not None:
                    before, colon = prefix
                    status = _parse_status(before, span)
                    code = trimmed[colon + 1:].strip()
                    if code in _FENCES:
                        pending_example = _PendingExample(status, "", span, code_block=True)
                    elif not code:
                        pending_example = _PendingExample(status, "", span)
                    else:
                        depth = _bracket_depth(code)
                        if depth == 0:
                            doc_info.examples.append(
                                annotations.parse_example_from_parts(status, code, span)
                            )
                        else:
                            pending_example = _PendingExample(status, code, span, depth)

        elif section == "metadata":
            if trimmed.startswith("@tag"):
                doc_info.tags.append(annotations.parse_tag(trimmed, span))
            elif trimmed.startswith("@security"):
                doc_info.security_requirements.append(annotations.parse_security(trimmed, span))
            elif trimmed.startswith("@id"):
                doc_info.operation_id = annotations.parse_id(trimmed, span)
            elif trimmed == "@hidden":
                doc_info.hidden = True
            elif trimmed.startswith("@"):
                raise _unknown_annotation(trimmed, span)

        elif title_set:
            in_description = True
            description_lines.append(trimmed)
        else:
            doc_info.title = trimmed
            title_set = True

    flush_response()
    flush_example()

    if description_lines:
        doc_info.description = "\n".join(description_lines).strip()

    if doc_info.examples and doc_info.responses:
        codes = {response.status_code for response in doc_info.responses}
        available = ", ".join(str(response.status_code) for response in doc_info.responses)
        for example in doc_info.examples:
            if example.status_code not in codes:
                raise ParseError(
                    f"Example status code {example.status_code} is not defined in responses. "
                    f"Available status codes: {available}",
                    example.span,
                )

    return doc_info