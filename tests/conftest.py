from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pytest

from extauthd.backends import AuthBackend


class RecordingBackend(AuthBackend):
    """Backend double that records calls and answers from a lookup table."""

    def __init__(self, answers: Dict[str, Any] | None = None) -> None:
        self.answers = answers or {}
        self.calls: List[Tuple[str, Tuple[str, ...]]] = []

    def _answer(self, operation: str, *args: str) -> bool:
        self.calls.append((operation, args))
        answer = self.answers.get(operation, False)
        if isinstance(answer, Exception):
            raise answer
        if callable(answer):
            return answer(*args)
        return answer

    def authenticate(self, username: str, servername: str, password: str) -> bool:
        return self._answer("authenticate", username, servername, password)

    def user_exists(self, username: str, servername: str) -> bool:
        return self._answer("user_exists", username, servername)

    def set_password(self, username: str, servername: str, password: str) -> bool:
        return self._answer("set_password", username, servername, password)

    def register(self, username: str, servername: str, password: str) -> bool:
        return self._answer("register", username, servername, password)

    def remove_user(self, username: str, servername: str) -> bool:
        return self._answer("remove_user", username, servername)

    def remove_user_with_password(self, username: str, servername: str, password: str) -> bool:
        return self._answer("remove_user_with_password", username, servername, password)


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()
