# src/request_helper/core/client.py
from typing import Any, Dict, Iterable, Optional
import warnings

from ..plugins.plugin import Plugin
from ..plugins.pipeline import PluginPipeline
from .config import ClientConfig
from .context import RequestContext, RequestIdGenerator, build_context
from .driver import RequestsDriver, Response
from .events import REQUEST_FAIL, REQUEST_START, REQUEST_SUCCESS, StatsEventEmitter
from .exceptions import AbortError, RequestHelperError
from .logging import LoggingConfig, RequestLogger
from .logging.filters import clear_request_id, set_request_id
from .signals import merge_user_signal
from .stats import StatsHub
from .typed import TypedRequests
from .verbose import error_logger, request_logger
from .verbs import HttpVerbs


class HTTPClient(HttpVerbs, TypedRequests):
    """
    HTTP клиент: verb методы поверх одного generic ``request``.

    Features:
        - Дефолты запроса из immutable ClientConfig
        - RequestContext с уникальным id на каждый запрос
        - Отмена через CancellationController (опция ``signal``)
        - Плагины before_request / after_response / on_error
        - События request:start / success / fail / abort и их сводка в client.stats()
        - Контекстный менеджер для освобождения сессии

    Example:
        >>> with HTTPClient(base_url="https://api.example.com") as client:
        ...     users = client.get_json("/users").data
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        driver: Optional[RequestsDriver] = None,
        plugins: Optional[Iterable[Plugin]] = None,
        events: Optional[StatsEventEmitter] = None,
        id_generator: Optional[RequestIdGenerator] = None,
        **kwargs: Any
    ):
        """
        Initialize client.

        Args:
            base_url: Base URL (shortcut for config.base_url)
            config: ClientConfig instance
            driver: Transport (default: RequestsDriver with its own session)
            plugins: Plugins to install
            events: Event emitter (default: new StatsEventEmitter)
            id_generator: Request id source (default: process-wide counter)
            **kwargs: ClientConfig.create() parameters when config is not given
        """
        if config is None:
            config = ClientConfig.create(base_url=base_url, **kwargs)
        elif base_url is not None or kwargs:
            warnings.warn(
                "base_url and config keyword arguments are ignored when config is passed",
                UserWarning,
                stacklevel=2
            )

        object.__setattr__(self, '_config', config)
        object.__setattr__(self, '_driver', driver or RequestsDriver())
        object.__setattr__(self, '_pipeline', PluginPipeline(plugins))
        object.__setattr__(self, '_events', events or StatsEventEmitter(
            enabled=config.stats_enabled, verbose=config.verbose
        ))
        object.__setattr__(self, '_id_generator', id_generator)
        object.__setattr__(self, '_stats', StatsHub(verbose=config.verbose).attach(self._events))
        object.__setattr__(self, '_logger', self._create_logger(config))

        object.__setattr__(self, '_initialized', True)

        request_logger.log(
            config.verbose, 'CONFIG', 'Client configured',
            driver=type(self._driver).__name__,
            plugins=len(self._pipeline),
            stats_enabled=self._events.is_enabled(),
        )

    def __setattr__(self, name, value):
        """Запретить изменение после init (immutability)."""
        if hasattr(self, '_initialized'):
            raise RuntimeError(
                f"Cannot modify '{name}' - HTTPClient is immutable. "
                f"Use update_config() or create a new instance."
            )
        object.__setattr__(self, name, value)

    @staticmethod
    def _create_logger(config: ClientConfig) -> Optional[RequestLogger]:
        logging_config = config.logging
        if logging_config is None and config.verbose:
            # verbose without explicit logging: send diagnostics to the console
            logging_config = LoggingConfig.create(level="DEBUG")
        if logging_config is None:
            return None
        return RequestLogger(config=logging_config, name="request_helper")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """Закрыть логгер и сессию драйвера."""
        if self._logger is not None:
            self._logger.close()
        self._driver.close()

    # ==================== Конфигурация ====================

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> Optional[str]:
        return self._config.base_url

    @property
    def events(self) -> StatsEventEmitter:
        return self._events

    @property
    def plugins(self):
        return self._pipeline.get_all()

    def stats(self) -> StatsHub:
        """
        Метрики по событиям этого клиента.

        Example:
            >>> client.stats().counters()['success']
            >>> client.stats().reset()
        """
        return self._stats

    def update_config(self, **changes: Any) -> ClientConfig:
        """
        Заменить конфиг новым с изменёнными полями.

        Example:
            >>> client.update_config(timeout=60, headers={"X-Team": "core"})
        """
        new_config = self._config.with_updates(**changes)
        object.__setattr__(self, '_config', new_config)

        if 'stats_enabled' in changes:
            if new_config.stats_enabled:
                self._events.enable()
            else:
                self._events.disable()
        self._events.verbose = new_config.verbose
        self._stats.verbose = new_config.verbose

        request_logger.log(
            new_config.verbose, 'CONFIG', 'Client configuration updated',
            new_config_keys=sorted(changes),
        )
        return new_config

    # ==================== Плагины ====================

    def use(self, plugin: Plugin) -> 'HTTPClient':
        """Добавить плагин. Возвращает self для цепочек."""
        self._pipeline.add(plugin)
        return self

    def remove_plugin(self, plugin: Plugin) -> None:
        self._pipeline.remove(plugin)

    # ==================== Запрос ====================

    def build_request(self, method: str, url: str, body: Any = None, **options: Any) -> Dict[str, Any]:
        """Собрать дескриптор запроса: дефолты конфига + опции вызова."""
        request = dict(options)
        request['method'] = method.upper()
        request['url'] = url
        request['body'] = body
        return self._config.merge(request)

    def request(self, method: str, url: str, body: Any = None, **options: Any) -> Response:
        """
        Generic request: every verb shortcut ends up here.

        Args:
            method: HTTP метод
            url: Endpoint или полный URL
            body: Тело запроса
            **options: headers, query, signal, timeout, verbose, response_type,
                parse_response, ignore_response_error, retry, retry_delay,
                backoff_type, retry_status_codes, ...

        Returns:
            Response

        Raises:
            AbortError: Запрос отменён через signal
            HTTPError / NetworkError / ParseError: см. exceptions
        """
        ctx = build_context(self.build_request(method, url, body, **options), self._id_generator)
        set_request_id(ctx.request_id)
        self._events.emit(REQUEST_START, {
            'id': ctx.request_id,
            'method': ctx.method,
            'url': ctx.url,
        })
        if self._logger:
            self._logger.debug("Request started", method=ctx.method, url=ctx.url)

        # request:start precedes any request:abort for the same id
        detach = merge_user_signal(ctx, ctx.req.get('signal'), self._events)

        try:
            response = self._pipeline.run_before_request(ctx)
            if response is None:
                response = self._driver.send(ctx)
            ctx.res = response
            ctx.res = self._pipeline.run_after_response(ctx, ctx.res)
        except Exception as error:
            self._handle_error(ctx, error)
            raise
        else:
            duration_ms = ctx.elapsed_ms()
            self._events.emit(REQUEST_SUCCESS, {
                'id': ctx.request_id,
                'status': getattr(ctx.res, 'status', 200),
                'duration_ms': duration_ms,
            })
            request_logger.log(
                ctx, 'COMPLETE', f"Completed in {duration_ms}ms",
                status=getattr(ctx.res, 'status', None),
                attempt=ctx.attempt,
                request_id=ctx.request_id,
            )
            if self._logger:
                self._logger.info(
                    "Request completed",
                    method=ctx.method,
                    url=ctx.url,
                    status=getattr(ctx.res, 'status', None),
                    duration_ms=duration_ms,
                )
            return ctx.res
        finally:
            if detach is not None:
                detach()
            clear_request_id()

    def _handle_error(self, ctx: RequestContext, error: Exception) -> None:
        ctx.error = error
        if isinstance(error, RequestHelperError) and error.request_id is None:
            error.request_id = ctx.request_id

        error_logger.error(
            ctx, 'CAUGHT', f"Caught {type(error).__name__}: {error}",
            status=getattr(error, 'status_code', None),
            retryable=getattr(error, 'retryable', False),
        )

        self._pipeline.run_on_error(ctx, error)

        # aborts are reported through request:abort by the signal listener
        if not isinstance(error, AbortError):
            self._events.emit(REQUEST_FAIL, {
                'id': ctx.request_id,
                'error': type(error).__name__,
                'status': getattr(error, 'status_code', None),
                'duration_ms': ctx.elapsed_ms(),
            })

        if self._logger:
            self._logger.error(
                "Request failed",
                method=ctx.method,
                url=ctx.url,
                error=str(error),
                error_type=type(error).__name__,
                duration_ms=ctx.elapsed_ms(),
            )
