from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Dict, TYPE_CHECKING

from extauth.protocol.commands import COMMAND_OPERATIONS, Command, normalize_command, takes_password
from extauth.protocol.errors import BackendFailure, UnrecognizedCommand
from extauth.protocol.request import AuthRequest

if TYPE_CHECKING:
    from extauthd.backends.base import AuthBackend

logger = logging.getLogger(__name__)

Handler = Callable[[AuthRequest], bool]


class CommandRouter:
    """Maps extauth commands to exactly one backend operation each."""

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def register(self, command: Command | str, handler: Handler) -> None:
        self._handlers[normalize_command(command)] = handler

    def register_backend(self, backend: "AuthBackend") -> None:
        for command in Command:
            self.register(command, _backend_handler(backend, command))

    def dispatch(self, request: AuthRequest) -> bool:
        """Invoke the handler for `request`, raising on unknown commands or backend errors."""
        handler = self._handlers.get(request.command)
        if handler is None:
            raise UnrecognizedCommand(f"Unknown command {request.command!r}")
        try:
            return bool(handler(request))
        except Exception as exc:
            raise BackendFailure(f"{request.command} for {request.username}@{request.servername} failed: {exc}") from exc

    def route(self, request: AuthRequest) -> bool:
        """Like dispatch, but every failure becomes a False answer."""
        try:
            return self.dispatch(request)
        except UnrecognizedCommand as exc:
            logger.warning("Unrecognized command: %s", exc.message)
        except BackendFailure as exc:
            logger.error("Backend failure: %s", exc.message, exc_info=exc.__cause__)
        return False


def _backend_handler(backend: "AuthBackend", command: Command) -> Handler:
    operation = getattr(backend, COMMAND_OPERATIONS[command.value])
    if takes_password(command):
        return lambda request: operation(request.username, request.servername, request.password)
    return lambda request: operation(request.username, request.servername)


def build_router(backend: "AuthBackend") -> CommandRouter:
    router = CommandRouter()
    router.register_backend(backend)
    return router
