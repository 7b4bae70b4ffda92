"""
Verbose per-request diagnostics.

Records go to the ``request_helper.verbose`` logger only when verbose mode is
on for the request (``verbose=True`` option or client config). Configure
logging (``ClientConfig.logging`` or ``configure_logging``) to see them.
"""

import logging
from typing import Any, Union

from ..utils.sanitizer import mask_sensitive_data

logger = logging.getLogger("request_helper.verbose")


def is_verbose(target: Any) -> bool:
    """
    Decide whether verbose output is enabled for ``target``.

    Accepts a bool, a request descriptor dict, or anything with a ``req``
    dict or a ``verbose`` attribute (RequestContext).
    """
    if isinstance(target, bool):
        return target
    if isinstance(target, dict):
        return bool(target.get('verbose'))
    req = getattr(target, 'req', None)
    if isinstance(req, dict) and req.get('verbose'):
        return True
    return bool(getattr(target, 'verbose', False))


def verbose_log(target: Union[bool, Any], category: str, message: str,
                level: int = logging.INFO, **details: Any) -> None:
    """
    Log one diagnostic line if verbose mode is on for ``target``.

    Example:
        >>> verbose_log(ctx, 'REQUEST', 'Combined user abort signal with internal signal',
        ...             request_id=ctx.request_id)
    """
    if not is_verbose(target) or not logger.isEnabledFor(level):
        return

    extra = mask_sensitive_data(details)
    extra['category'] = category
    logger.log(level, f"{category}: {message}", extra=extra)


class VerboseLogger:
    """Category-bound helper used by request lifecycle code."""

    def __init__(self, category: str):
        self.category = category.upper()

    def log(self, target: Any, operation: str, message: str, **details: Any) -> None:
        verbose_log(target, self.category, f"{operation}: {message}", **details)

    def warn(self, target: Any, operation: str, message: str, **details: Any) -> None:
        verbose_log(target, self.category, f"{operation}: {message}", level=logging.WARNING, **details)

    def error(self, target: Any, operation: str, message: str, **details: Any) -> None:
        verbose_log(target, self.category, f"{operation}: {message}", level=logging.ERROR, **details)


request_logger = VerboseLogger('REQUEST')
response_logger = VerboseLogger('RESPONSE')
error_logger = VerboseLogger('ERROR')
plugin_logger = VerboseLogger('PLUGIN')
stats_logger = VerboseLogger('STATS')
