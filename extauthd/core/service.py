from __future__ import annotations

import logging
import sys
from enum import StrEnum
from typing import Any, BinaryIO, Optional, TYPE_CHECKING

from extauth.protocol.errors import (
    EmptyFrame,
    InvalidRequest,
    StreamBindFailure,
    StreamReadFailure,
    StreamWriteFailure,
    TruncatedFrame,
)
from extauth.protocol.framing import decode_frame, write_response
from extauth.protocol.request import AuthRequest, parse_request

from .router import build_router

if TYPE_CHECKING:
    from extauthd.backends.base import AuthBackend

logger = logging.getLogger(__name__)


class ServiceState(StrEnum):
    UNINITIALIZED = "uninitialized"
    STREAMS_BOUND = "streams_bound"
    AWAITING_FRAME = "awaiting_frame"
    CYCLING = "cycling"
    SHUTDOWN = "shutdown"


class AuthenticationService:
    """
    Long-lived extauth process loop: read a frame from stdin, route it to the
    backend, write the boolean answer to stdout, repeat until stdin closes.
    """

    def __init__(
        self,
        backend: "AuthBackend",
        log: Optional[logging.Logger] = None,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
        respond_to_empty_frame: bool = False,
    ) -> None:
        self.backend = backend
        self.logger = log or logger
        self.router = build_router(backend)
        self.respond_to_empty_frame = respond_to_empty_frame
        self._stdin_source = stdin
        self._stdout_source = stdout
        self.stdin: Optional[BinaryIO] = None
        self.stdout: Optional[BinaryIO] = None
        self.state = ServiceState.UNINITIALIZED
        self.may_run = False
        self.request: Optional[AuthRequest] = None

    def run(self) -> bool:
        """
        Serve requests until the input stream fails.
        Returns False when the streams could not be bound and the loop never started.
        """
        if self.stdin is None:
            try:
                self._bind_streams()
            except StreamBindFailure as exc:
                self.logger.critical("%s, not starting", exc.message, exc_info=exc.__cause__)
                return False

        self.may_run = True
        while self.may_run:
            self._clear()
            self.state = ServiceState.AWAITING_FRAME
            self._cycle()
        return True

    def _bind_streams(self) -> None:
        self.logger.debug("Binding resource streams...")
        stdin = self._stdin_source if self._stdin_source is not None else _open_std_stream(sys.stdin, "rb", "STDIN")
        stdout = self._stdout_source if self._stdout_source is not None else _open_std_stream(sys.stdout, "wb", "STDOUT")
        self.stdin, self.stdout = stdin, stdout
        self.state = ServiceState.STREAMS_BOUND
        self.logger.debug("Resource streams STDIN and STDOUT bound successfully")

    def _cycle(self) -> None:
        try:
            payload = decode_frame(self.stdin)
        except StreamReadFailure as exc:
            self.logger.error("Unable to read from stdin, shutting down: %s", exc.message)
            self.may_run = False
            self.state = ServiceState.SHUTDOWN
            return
        except EmptyFrame:
            self.logger.debug("Zero-length frame received")
            if self.respond_to_empty_frame:
                self._respond(False)
            return
        except TruncatedFrame as exc:
            self.logger.error("Truncated frame: %s", exc.message)
            self._respond(False)
            return

        self.state = ServiceState.CYCLING
        self.logger.debug("Input detected, read %s bytes", len(payload))
        try:
            self.request = parse_request(payload)
        except InvalidRequest as exc:
            self.logger.warning("Invalid request: %s", exc.message)
            result = False
        else:
            self.logger.debug("Routing request %s", self.request.redacted())
            result = self.router.route(self.request)
        self._respond(result)
        self._clear()

    def _respond(self, result: bool) -> None:
        answer = int(bool(result))
        try:
            write_response(self.stdout, result)
        except StreamWriteFailure as exc:
            self.logger.error("Failed to write output [%s] to stdout: %s", answer, exc.message)
        else:
            self.logger.debug("Successfully wrote output [%s] to stdout", answer)

    def _clear(self) -> None:
        self.request = None


def _open_std_stream(stream: Any, mode: str, name: str) -> BinaryIO:
    try:
        return open(stream.fileno(), mode, closefd=False)
    except (AttributeError, OSError, ValueError) as exc:
        raise StreamBindFailure(f"Failed to bind {name}") from exc
