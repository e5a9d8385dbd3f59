"""Error kinds raised by the dispatcher."""

from enum import Enum
from typing import Any, Iterable, Optional


class ErrorKind(str, Enum):
    UNKNOWN_OPERATION = "UnknownOperation"
    INVALID_ARGUMENTS = "InvalidArguments"
    BACKEND_ERROR = "BackendError"


class DispatchError(Exception):
    """Base class for every failed dispatch.

    Carries the error envelope that the transport presents to its caller.
    """

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_envelope(self) -> dict[str, Any]:
        return {"code": self.kind.value, "message": self.message}


class UnknownOperation(DispatchError):
    kind = ErrorKind.UNKNOWN_OPERATION

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArguments(DispatchError):
    kind = ErrorKind.INVALID_ARGUMENTS

    def __init__(self, message: str, fields: Iterable[str] = ()):
        super().__init__(message)
        self.fields = list(fields)


class BackendError(DispatchError):
    kind = ErrorKind.BACKEND_ERROR

    def __init__(self, message: str, backend_message: str, backend_code: Optional[str] = None):
        super().__init__(message)
        self.backend_message = backend_message
        self.backend_code = backend_code
