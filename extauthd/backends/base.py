from __future__ import annotations

from abc import ABC, abstractmethod


class AuthBackend(ABC):
    """
    Capability set the bridge delegates to. Each operation answers yes/no;
    raising is allowed and is reported to ejabberd as a failure.
    """

    @abstractmethod
    def authenticate(self, username: str, servername: str, password: str) -> bool:
        ...

    @abstractmethod
    def user_exists(self, username: str, servername: str) -> bool:
        ...

    @abstractmethod
    def set_password(self, username: str, servername: str, password: str) -> bool:
        ...

    @abstractmethod
    def register(self, username: str, servername: str, password: str) -> bool:
        ...

    @abstractmethod
    def remove_user(self, username: str, servername: str) -> bool:
        ...

    @abstractmethod
    def remove_user_with_password(self, username: str, servername: str, password: str) -> bool:
        ...
