from __future__ import annotations

import argparse
import importlib
import logging
import sys
from typing import Any, Dict, Optional, Sequence

from extauthd.backends.base import AuthBackend
from extauthd.config import ConfigError, SERVER_CONFIG, load_config
from extauthd.core import AuthenticationService

logger = logging.getLogger(__name__)


def load_backend(path: str, config: Optional[Dict[str, Any]] = None) -> AuthBackend:
    """
    Resolve a `module:attribute` path into a backend instance.
    Factories exposing `from_config` get the loaded config, other callables are
    called without arguments, and ready-made instances are used as-is.
    """
    module_name, _, attr_path = path.partition(":")
    if not module_name or not attr_path:
        raise ConfigError(f"Backend path must look like 'module:attribute', got {path!r}")
    try:
        target: Any = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            target = getattr(target, attr)
    except (ImportError, AttributeError) as exc:
        raise ConfigError(f"Cannot import backend {path!r}: {exc}") from exc

    if not isinstance(target, AuthBackend):
        factory = getattr(target, "from_config", None)
        if factory is not None:
            target = factory(config or SERVER_CONFIG)
        elif callable(target):
            target = target()
    if not isinstance(target, AuthBackend):
        raise ConfigError(f"{path!r} did not produce an AuthBackend")
    return target


def configure_logging(config: Dict[str, Any]) -> None:
    # stdout carries the protocol, so logs go to stderr or a file.
    if config["log_file"]:
        logging.basicConfig(level=config["log_level"], filename=config["log_file"])
    else:
        logging.basicConfig(level=config["log_level"], stream=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="extauthd", description="ejabberd external authentication bridge")
    parser.add_argument("--env-file", default=".env", help="dotenv file with EXTAUTH_* settings")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.env_file)
        configure_logging(config)
        backend = load_backend(config["backend"], config)
    except ConfigError as exc:
        logging.basicConfig(stream=sys.stderr)
        logger.critical("Configuration error: %s", exc)
        return 1

    logger.info("Starting extauth bridge with backend %s", type(backend).__name__)
    service = AuthenticationService(backend, respond_to_empty_frame=config["respond_to_empty_frame"])
    if not service.run():
        return 1
    logger.info("Input closed, extauth bridge stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
