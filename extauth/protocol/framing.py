from __future__ import annotations

import struct
from typing import BinaryIO

from .constants import (
    LENGTH_PREFIX_FMT,
    LENGTH_PREFIX_SIZE,
    MAX_PAYLOAD_SIZE,
    RESPONSE_FMT,
    RESPONSE_LENGTH,
    RESULT_FAILURE,
    RESULT_SUCCESS,
)
from .errors import EmptyFrame, InvalidRequest, StreamReadFailure, StreamWriteFailure, TruncatedFrame


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """
    Read up to `size` bytes, looping over short reads.
    Returns fewer bytes only when the stream reaches EOF.
    """
    buf = b""
    while len(buf) < size:
        chunk = stream.read(size - len(buf))
        if not chunk:
            break
        buf += chunk
    return buf


def decode_frame(stream: BinaryIO) -> bytes:
    """Read a single length-prefixed frame from the stream and return its payload."""
    try:
        header = read_exact(stream, LENGTH_PREFIX_SIZE)
    except (OSError, ValueError) as exc:
        raise StreamReadFailure(f"Length prefix read failed: {exc}") from exc
    if len(header) < LENGTH_PREFIX_SIZE:
        raise StreamReadFailure("Input stream closed")

    (length,) = struct.unpack(LENGTH_PREFIX_FMT, header)
    if length == 0:
        raise EmptyFrame("Zero-length frame")

    try:
        payload = read_exact(stream, length)
    except (OSError, ValueError) as exc:
        raise StreamReadFailure(f"Payload read failed: {exc}") from exc
    if len(payload) != length:
        raise TruncatedFrame(length, payload)
    return payload


def encode_frame(payload: bytes) -> bytes:
    """Encode a request payload the way ejabberd sends it (2-byte length + payload)."""
    if len(payload) > MAX_PAYLOAD_SIZE:
        raise InvalidRequest(f"Payload of {len(payload)} bytes does not fit a frame")
    return struct.pack(LENGTH_PREFIX_FMT, len(payload)) + payload


def encode_response(result: bool) -> bytes:
    """Encode a boolean answer: always 4 bytes, length 2 then 1 or 0."""
    return struct.pack(RESPONSE_FMT, RESPONSE_LENGTH, RESULT_SUCCESS if result else RESULT_FAILURE)


def decode_response(data: bytes) -> bool:
    """Decode a 4-byte response frame back into its boolean."""
    if len(data) != LENGTH_PREFIX_SIZE + RESPONSE_LENGTH:
        raise InvalidRequest(f"Response frame must be 4 bytes, got {len(data)}")
    length, result = struct.unpack(RESPONSE_FMT, data)
    if length != RESPONSE_LENGTH or result not in (RESULT_SUCCESS, RESULT_FAILURE):
        raise InvalidRequest(f"Malformed response frame {data.hex()}")
    return result == RESULT_SUCCESS


def write_response(stream: BinaryIO, result: bool) -> bytes:
    """Write and flush one response frame; returns the bytes written."""
    data = encode_response(result)
    try:
        stream.write(data)
        stream.flush()
    except (OSError, ValueError) as exc:
        raise StreamWriteFailure(f"Response write failed: {exc}") from exc
    return data


__all__ = [
    "read_exact",
    "decode_frame",
    "encode_frame",
    "encode_response",
    "decode_response",
    "write_response",
]
