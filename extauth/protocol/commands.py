from __future__ import annotations

from enum import StrEnum
from typing import Dict, FrozenSet, Union


class Command(StrEnum):
    """Command names ejabberd sends in the first payload field."""

    AUTH = "auth"
    ISUSER = "isuser"
    SETPASS = "setpass"
    TRYREGISTER = "tryregister"
    REMOVEUSER = "removeuser"
    REMOVEUSER3 = "removeuser3"


# Backend operation invoked for each command.
COMMAND_OPERATIONS: Dict[str, str] = {
    Command.AUTH.value: "authenticate",
    Command.ISUSER.value: "user_exists",
    Command.SETPASS.value: "set_password",
    Command.TRYREGISTER.value: "register",
    Command.REMOVEUSER.value: "remove_user",
    Command.REMOVEUSER3.value: "remove_user_with_password",
}

# Commands whose backend operation also receives the password field.
PASSWORD_COMMANDS: FrozenSet[str] = frozenset(
    {
        Command.AUTH.value,
        Command.SETPASS.value,
        Command.TRYREGISTER.value,
        Command.REMOVEUSER3.value,
    }
)


def normalize_command(command: Union[str, Command]) -> str:
    """Convert enum/string into canonical command text."""
    return command.value if isinstance(command, Command) else str(command)


def takes_password(command: Union[str, Command]) -> bool:
    return normalize_command(command) in PASSWORD_COMMANDS


__all__ = [
    "Command",
    "COMMAND_OPERATIONS",
    "PASSWORD_COMMANDS",
    "normalize_command",
    "takes_password",
]
