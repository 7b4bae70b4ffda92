"""Core модули request-helper."""

from .config import ClientConfig, RetryOptions
from .exceptions import (
    RequestHelperError,
    TemporaryError,
    FatalError,
    NetworkError,
    TimeoutError,
    ConnectionError,
    HTTPError,
    ServerError,
    TooManyRequestsError,
    BadRequestError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ParseError,
    ConfigurationError,
    AbortError,
    classify_requests_exception,
    error_for_status,
)
from .cancellation import CancellationController, CancellationSignal
from .context import (
    RequestContext,
    RequestMeta,
    RequestIdGenerator,
    build_context,
    get_default_id_generator,
    reset_request_counter,
)
from .events import StatsEventEmitter
from .stats import StatsHub
from .signals import merge_user_signal
from .verbs import HttpVerbs
from .typed import TypedRequests, with_accept, with_type
from .driver import RequestsDriver, Response, build_url, parse_response_data
from .client import HTTPClient

__all__ = [
    # Config
    "ClientConfig",
    "RetryOptions",
    # Client
    "HTTPClient",
    "HttpVerbs",
    "TypedRequests",
    "with_accept",
    "with_type",
    "RequestsDriver",
    "Response",
    "build_url",
    "parse_response_data",
    # Context & cancellation
    "RequestContext",
    "RequestMeta",
    "RequestIdGenerator",
    "build_context",
    "get_default_id_generator",
    "reset_request_counter",
    "CancellationController",
    "CancellationSignal",
    "merge_user_signal",
    "StatsEventEmitter",
    "StatsHub",
    # Exceptions
    "RequestHelperError",
    "TemporaryError",
    "FatalError",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "HTTPError",
    "ServerError",
    "TooManyRequestsError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ParseError",
    "ConfigurationError",
    "AbortError",
    "classify_requests_exception",
    "error_for_status",
]
