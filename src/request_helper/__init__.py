"""request-helper - HTTP verb shortcuts, per-request context and cancellation."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.client import HTTPClient
from .core.config import ClientConfig, RetryOptions
from .core.cancellation import CancellationController, CancellationSignal
from .core.context import RequestContext, build_context, reset_request_counter
from .core.driver import RequestsDriver, Response
from .core.events import StatsEventEmitter
from .core.stats import StatsHub
from .core.env_config import load_from_env
from .core.logging import LoggingConfig, configure_logging
from .core.exceptions import (
    RequestHelperError,
    NetworkError,
    TimeoutError,
    ConnectionError,
    HTTPError,
    ServerError,
    TooManyRequestsError,
    NotFoundError,
    ParseError,
    AbortError,
)
from .plugins import Plugin, PluginPriority, AuthPlugin

# Users configure output via logging.getLogger('request_helper') or LoggingConfig
logging.getLogger('request_helper').addHandler(logging.NullHandler())

try:
    __version__ = version("request-helper")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Core
    "HTTPClient",
    "RequestsDriver",
    "Response",
    "RequestContext",
    "build_context",
    "reset_request_counter",
    "CancellationController",
    "CancellationSignal",
    "StatsEventEmitter",
    "StatsHub",

    # Config
    "ClientConfig",
    "RetryOptions",
    "LoggingConfig",
    "configure_logging",
    "load_from_env",

    # Exceptions
    "RequestHelperError",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "HTTPError",
    "ServerError",
    "TooManyRequestsError",
    "NotFoundError",
    "ParseError",
    "AbortError",

    # Plugins
    "Plugin",
    "PluginPriority",
    "AuthPlugin",

    # Version
    "__version__",
]
