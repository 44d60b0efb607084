"""
Protocol package for the ejabberd external authentication bridge: wire constants,
framing helpers, request parsing, command names and the failure taxonomy.
"""

from .commands import COMMAND_OPERATIONS, Command, normalize_command, takes_password
from .constants import ENCODING, FIELD_DELIMITER, MAX_PAYLOAD_SIZE
from .errors import (
    BackendFailure,
    EmptyFrame,
    ErrorCode,
    ExtAuthError,
    InvalidRequest,
    StreamBindFailure,
    StreamReadFailure,
    StreamWriteFailure,
    TruncatedFrame,
    UnrecognizedCommand,
)
from .framing import decode_frame, decode_response, encode_frame, encode_response, read_exact, write_response
from .request import AuthRequest, parse_request

__all__ = [
    "Command",
    "COMMAND_OPERATIONS",
    "normalize_command",
    "takes_password",
    "ENCODING",
    "FIELD_DELIMITER",
    "MAX_PAYLOAD_SIZE",
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
    "read_exact",
    "decode_frame",
    "encode_frame",
    "encode_response",
    "decode_response",
    "write_response",
    "AuthRequest",
    "parse_request",
]
