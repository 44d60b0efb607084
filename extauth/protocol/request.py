from __future__ import annotations

from dataclasses import dataclass

from .constants import ENCODING, FIELD_DELIMITER
from .errors import InvalidRequest

FIELD_COUNT = 4


@dataclass(frozen=True)
class AuthRequest:
    """One decoded ejabberd request: command:username:servername:password."""

    command: str
    username: str = ""
    servername: str = ""
    password: str = ""

    def redacted(self) -> str:
        """Log-safe rendering that never includes the password."""
        return FIELD_DELIMITER.join((self.command, self.username, self.servername))


def parse_request(payload: bytes) -> AuthRequest:
    """
    Split a frame payload into its positional fields.
    Missing fields become "" and anything past the fourth field is dropped.
    """
    if not payload:
        raise InvalidRequest("Empty payload")
    # Undecodable bytes survive as lone surrogates so the backend sees them unchanged.
    text = payload.decode(ENCODING, errors="surrogateescape")

    parts = text.split(FIELD_DELIMITER)[:FIELD_COUNT]
    parts += [""] * (FIELD_COUNT - len(parts))
    if not parts[0]:
        raise InvalidRequest("Missing command field")
    return AuthRequest(*parts)


__all__ = ["AuthRequest", "FIELD_COUNT", "parse_request"]
