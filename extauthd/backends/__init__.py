from .base import AuthBackend
from .static import StaticBackend

__all__ = ["AuthBackend", "StaticBackend"]
