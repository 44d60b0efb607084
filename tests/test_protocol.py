import io

import pytest

from extauth.protocol import (
    AuthRequest,
    EmptyFrame,
    ErrorCode,
    InvalidRequest,
    StreamReadFailure,
    StreamWriteFailure,
    TruncatedFrame,
    decode_frame,
    decode_response,
    encode_frame,
    encode_response,
    parse_request,
    read_exact,
    write_response,
)


class TrickleStream(io.RawIOBase):
    """Hands out at most one byte per read, like a slow pipe."""

    def __init__(self, data: bytes) -> None:
        self._data = io.BytesIO(data)

    def readable(self) -> bool:
        return True

    def read(self, size=-1):
        return self._data.read(1 if size != 0 else 0)


class BrokenStream(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def read(self, size=-1):
        raise OSError("bad file descriptor")

    def write(self, data):
        raise BrokenPipeError("peer went away")


def test_encode_response_is_four_bytes():
    assert encode_response(True) == b"\x00\x02\x00\x01"
    assert encode_response(False) == b"\x00\x02\x00\x00"
    assert decode_response(encode_response(True)) is True
    assert decode_response(encode_response(False)) is False


def test_decode_response_rejects_malformed_frames():
    with pytest.raises(InvalidRequest):
        decode_response(b"\x00\x02\x00")
    with pytest.raises(InvalidRequest):
        decode_response(b"\x00\x03\x00\x01")


def test_decode_frame_reads_payload():
    stream = io.BytesIO(encode_frame(b"auth:bob:ex.com:pw") + b"leftover")
    assert decode_frame(stream) == b"auth:bob:ex.com:pw"
    assert stream.read() == b"leftover"


def test_decode_frame_loops_over_short_reads():
    stream = TrickleStream(b"\x00\x08isuser:x")
    assert read_exact(TrickleStream(b"abc"), 5) == b"abc"
    assert decode_frame(stream) == b"isuser:x"


def test_decode_frame_eof_is_read_failure():
    with pytest.raises(StreamReadFailure) as excinfo:
        decode_frame(io.BytesIO(b""))
    with pytest.raises(StreamReadFailure):
        decode_frame(io.BytesIO(b"\x00"))


def test_decode_frame_stream_error_is_read_failure():
    with pytest.raises(StreamReadFailure):
        decode_frame(BrokenStream())


def test_decode_frame_zero_length():
    stream = io.BytesIO(b"\x00\x00" + encode_frame(b"isuser:x"))
    with pytest.raises(EmptyFrame) as excinfo:
        decode_frame(stream)
    assert decode_frame(stream) == b"isuser:x"


def test_decode_frame_truncated_payload():
    with pytest.raises(TruncatedFrame) as excinfo:
        decode_frame(io.BytesIO(b"\x00\x0cauth:bob"))
    assert excinfo.value.expected == 12
    assert excinfo.value.partial == b"auth:bob"
    assert excinfo.value.code is ErrorCode.TRUNCATED_FRAME


def test_encode_frame_rejects_oversized_payload():
    assert encode_frame(b"x" * 0xFFFF)[:2] == b"\xff\xff"
    with pytest.raises(InvalidRequest):
        encode_frame(b"x" * 0x10000)


def test_write_response_flushes():
    out = io.BytesIO()
    assert write_response(out, True) == b"\x00\x02\x00\x01"
    assert out.getvalue() == b"\x00\x02\x00\x01"


def test_write_response_failure():
    with pytest.raises(StreamWriteFailure) as excinfo:
        write_response(BrokenStream(), False)


def test_parse_request_full():
    assert parse_request(b"auth:bob:ex.com:pw") == AuthRequest("auth", "bob", "ex.com", "pw")


def test_parse_request_missing_fields_default_to_empty():
    request = parse_request(b"isuser:x")
    assert request == AuthRequest(command="isuser", username="x", servername="", password="")


def test_parse_request_keeps_empty_segments_and_drops_extras():
    assert parse_request(b"auth::ex.com:pw:extra:more") == AuthRequest("auth", "", "ex.com", "pw")


@pytest.mark.parametrize("payload", [b"", b":bob:ex.com:pw", b":"])
def test_parse_request_invalid(payload):
    with pytest.raises(InvalidRequest):
        parse_request(payload)


def test_redacted_request_hides_password():
    assert "pw" not in parse_request(b"auth:bob:ex.com:pw").redacted()


def test_parse_request_passes_non_utf8_bytes_through():
    request = parse_request(b"isuser:j\xf6rg:ex.com")
    assert request.command == "isuser"
    assert request.username.encode("utf-8", errors="surrogateescape") == b"j\xf6rg"
    assert request.servername == "ex.com"
