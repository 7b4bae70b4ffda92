"""
Build ClientConfig from environment variables and .env files.
"""

from typing import Any, Optional

from ..config import ClientConfig
from ..logging.config import LoggingConfig
from .settings import RequestHelperSettings


def load_from_env(env_file: Optional[str] = '.env', **overrides: Any) -> ClientConfig:
    """
    Load ClientConfig from the environment.

    Priority (highest to lowest):
    1. **overrides - explicit ClientConfig.create() parameters
    2. Environment variables (REQUEST_HELPER_*)
    3. .env file
    4. Defaults

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(env_file="staging.env", timeout=5)
    """
    settings = RequestHelperSettings(_env_file=env_file)

    logging_config = None
    if settings.log_enabled:
        logging_config = LoggingConfig.create(
            level=settings.log_level,
            format=settings.log_format,
            enable_file=settings.log_file_path is not None,
            file_path=settings.log_file_path,
        )

    params: dict = {
        'base_url': settings.base_url or None,
        'timeout': settings.timeout,
        'verbose': settings.verbose,
        'stats_enabled': settings.stats_enabled,
        'response_type': settings.response_type,
        'retry': settings.retry,
        'retry_delay': settings.retry_delay,
        'backoff_type': settings.backoff_type,
        'retry_status_codes': settings.retry_status_codes,
        'logging': logging_config,
    }
    params.update(overrides)

    return ClientConfig.create(**params)
