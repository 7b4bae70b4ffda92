"""Environment-based configuration."""

from .settings import RequestHelperSettings
from .loader import load_from_env

__all__ = [
    "RequestHelperSettings",
    "load_from_env",
]
