"""Turn a documented handler's source into an API operation description."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .model import DocInfo, FuncItem
from .parser import parse_rovo_function

ROUTE_METHODS = ("GET", "POST", "PATCH", "DELETE", "PUT")
DEFAULT_STATE_TYPE = "()"


@dataclass(frozen=True)
class DocumentedHandler:
    """A handler together with the documentation read from its doc comments."""

    func_item: FuncItem
    doc_info: DocInfo

    @property
    def name(self) -> str:
        return self.func_item.name

    @property
    def impl_name(self) -> str:
        """Name under which the original function body is kept."""
        return f"__{self.name}_impl"

    @property
    def const_name(self) -> str:
        return self.name.upper()

    @property
    def state_type(self) -> str:
        return self.func_item.state_type or DEFAULT_STATE_TYPE

    @property
    def hidden(self) -> bool:
        return self.doc_info.hidden

    @property
    def operation_id(self) -> str:
        return self.doc_info.operation_id or self.name

    @property
    def implementation(self) -> str:
        """The handler source, renamed to ``impl_name`` and made public."""
        return self.func_item.with_renamed(self.impl_name)

    def operation(self) -> dict[str, Any]:
        """Return the operation object described by the handler's documentation."""
        info = self.doc_info
        op: dict[str, Any] = {
            "operationId": self.operation_id,
            "summary": info.title or "",
            "description": info.description or "",
        }
        if info.tags:
            op["tags"] = list(info.tags)
        if info.deprecated:
            op["deprecated"] = True
        if info.security_requirements:
            op["security"] = [{scheme: []} for scheme in info.security_requirements]

        examples = {}
        for example in info.examples:
            examples.setdefault(example.status_code, example.example_code)

        responses: dict[str, Any] = {}
        for response in info.responses:
            entry: dict[str, Any] = {
                "description": response.description,
                "x-response-type": response.response_type,
            }
            if response.status_code in examples:
                entry["x-example-code"] = examples[response.status_code]
            responses[str(response.status_code)] = entry
        op["responses"] = responses
        return op

    def into_route(self, method: str) -> dict[str, DocumentedHandler]:
        """Return a one-entry method table routing ``method`` to this handler."""
        normalized = method.upper()
        if normalized not in ROUTE_METHODS:
            raise ValueError(
                f"unsupported method {method!r}; expected one of {', '.join(ROUTE_METHODS)}"
            )
        return {normalized: self}


def rovo(source: str) -> DocumentedHandler:
    """Read a handler's source and its doc comments into a DocumentedHandler.

    Raises ParseError when the documentation is malformed.
    """
    func_item, doc_info = parse_rovo_function(source)
    return DocumentedHandler(func_item=func_item, doc_info=doc_info)