from __future__ import annotations

import logging
from typing import Any, Dict

from .base import AuthBackend

logger = logging.getLogger(__name__)


class StaticBackend(AuthBackend):
    """Answers every operation with the same fixed result."""

    def __init__(self, answer: bool = False) -> None:
        self.answer = answer

    def _reply(self, operation: str, username: str, servername: str) -> bool:
        logger.debug("Static %s for %s@%s -> %s", operation, username, servername, self.answer)
        return self.answer

    def authenticate(self, username: str, servername: str, password: str) -> bool:
        return self._reply("authenticate", username, servername)

    def user_exists(self, username: str, servername: str) -> bool:
        return self._reply("user_exists", username, servername)

    def set_password(self, username: str, servername: str, password: str) -> bool:
        return self._reply("set_password", username, servername)

    def register(self, username: str, servername: str, password: str) -> bool:
        return self._reply("register", username, servername)

    def remove_user(self, username: str, servername: str) -> bool:
        return self._reply("remove_user", username, servername)

    def remove_user_with_password(self, username: str, servername: str, password: str) -> bool:
        return self._reply("remove_user_with_password", username, servername)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "StaticBackend":
        return cls(answer=bool(config.get("static_answer", False)))
