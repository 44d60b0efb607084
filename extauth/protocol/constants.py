"""Wire-level constants for the ejabberd extauth protocol."""

ENCODING = "utf-8"
FIELD_DELIMITER = ":"
LENGTH_PREFIX_FMT = ">H"  # 2-byte unsigned big-endian
LENGTH_PREFIX_SIZE = 2
MAX_PAYLOAD_SIZE = 0xFFFF
RESPONSE_FMT = ">HH"  # length (always 2) + result
RESPONSE_LENGTH = 2
RESULT_SUCCESS = 1
RESULT_FAILURE = 0

__all__ = [
    "ENCODING",
    "FIELD_DELIMITER",
    "LENGTH_PREFIX_FMT",
    "LENGTH_PREFIX_SIZE",
    "MAX_PAYLOAD_SIZE",
    "RESPONSE_FMT",
    "RESPONSE_LENGTH",
    "RESULT_SUCCESS",
    "RESULT_FAILURE",
]
