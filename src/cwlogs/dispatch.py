"""Request dispatch: operation lookup, validation, backend call, envelope."""

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .errors import BackendError, UnknownOperation
from .operations import Operation, get_operation
from .schema import check_arguments

_FAILURE_CONTEXT = {
    "describe_log_groups": "list log groups",
    "describe_log_streams": "list log streams",
    "get_log_events": "get log events",
}


@dataclass
class ResponseEnvelope:
    """Successful dispatch result: a single text content item."""

    content: list[dict[str, str]] = field(default_factory=list)

    @classmethod
    def from_records(cls, records: list[Any]) -> "ResponseEnvelope":
        text = json.dumps(records, indent=2, default=str)
        return cls(content=[{"type": "text", "text": text}])

    @property
    def text(self) -> str:
        return self.content[0]["text"]

    def to_dict(self) -> dict[str, Any]:
        return {"content": [dict(item) for item in self.content]}


def build_request(operation: Operation, args: Optional[Mapping[str, Any]]):
    """Validate an argument bag and produce the operation's structured request."""
    values = check_arguments(operation.arguments, args)
    return operation.request_type.from_arguments(values)


class Dispatcher:
    """Stateless translator from operation calls to backend calls.

    Holds only the backend handle, so a single instance can serve
    concurrent calls.
    """

    def __init__(self, backend):
        self.backend = backend

    def dispatch(self, operation_name: str, args: Optional[Mapping[str, Any]] = None) -> ResponseEnvelope:
        operation = get_operation(operation_name)
        if operation is None:
            raise UnknownOperation(operation_name)

        request = build_request(operation, args)
        call = getattr(self.backend, request.backend_method)
        try:
            result = call(**request.to_params())
        except Exception as e:
            # Any failure of the remote call is a backend error, whatever its type
            message = getattr(e, "message", None) or str(e)
            context = _FAILURE_CONTEXT.get(request.backend_method, operation.name)
            raise BackendError(
                f"Failed to {context}: {message}",
                backend_message=message,
                backend_code=getattr(e, "code", None),
            ) from e

        records = (result or {}).get(request.result_key) or []
        return ResponseEnvelope.from_records(list(records))
