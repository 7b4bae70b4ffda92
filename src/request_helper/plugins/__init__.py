"""Request interceptors."""

from .plugin import Plugin, PluginPriority
from .pipeline import PluginPipeline
from .auth_plugin import AuthPlugin

__all__ = [
    "Plugin",
    "PluginPriority",
    "PluginPipeline",
    "AuthPlugin",
]
