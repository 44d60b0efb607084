from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ErrorCode(IntEnum):
    """Failure kinds the bridge distinguishes between."""

    STREAM_BIND_FAILURE = 1
    STREAM_READ_FAILURE = 2
    STREAM_WRITE_FAILURE = 3
    EMPTY_FRAME = 10
    TRUNCATED_FRAME = 11
    INVALID_REQUEST = 20
    UNRECOGNIZED_COMMAND = 21
    BACKEND_FAILURE = 30


class ExtAuthError(Exception):
    """Structured bridge exception carrying a failure code + message."""

    code: ErrorCode = ErrorCode.INVALID_REQUEST

    def __init__(self, message: str = "", code: Optional[ErrorCode] = None) -> None:
        if code is not None:
            self.code = code
        self.message = message
        super().__init__(f"{self.code.name} ({int(self.code)}): {message}")


class StreamBindFailure(ExtAuthError):
    code = ErrorCode.STREAM_BIND_FAILURE


class StreamReadFailure(ExtAuthError):
    code = ErrorCode.STREAM_READ_FAILURE


class StreamWriteFailure(ExtAuthError):
    code = ErrorCode.STREAM_WRITE_FAILURE


class EmptyFrame(ExtAuthError):
    code = ErrorCode.EMPTY_FRAME


class TruncatedFrame(ExtAuthError):
    """Payload ended before the declared length was read."""

    code = ErrorCode.TRUNCATED_FRAME

    def __init__(self, expected: int, partial: bytes) -> None:
        self.expected = expected
        self.partial = partial
        super().__init__(f"expected {expected} bytes, got {len(partial)}")


class InvalidRequest(ExtAuthError):
    code = ErrorCode.INVALID_REQUEST


class UnrecognizedCommand(ExtAuthError):
    code = ErrorCode.UNRECOGNIZED_COMMAND


class BackendFailure(ExtAuthError):
    code = ErrorCode.BACKEND_FAILURE


__all__ = [
    "ErrorCode",
    "ExtAuthError",
    "StreamBindFailure",
    "StreamReadFailure",
    "StreamWriteFailure",
    "EmptyFrame",
    "TruncatedFrame",
    "InvalidRequest",
    "UnrecognizedCommand",
    "BackendFailure",
]
