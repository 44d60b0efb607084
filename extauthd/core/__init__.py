from .router import CommandRouter, build_router
from .service import AuthenticationService, ServiceState

__all__ = ["AuthenticationService", "CommandRouter", "ServiceState", "build_router"]
