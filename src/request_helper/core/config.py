"""
Конфигурация клиента request-helper.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
Параметры retry только переносятся на запрос: их потребляет внешний
retry engine.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .logging import LoggingConfig


RESPONSE_TYPES = frozenset({'auto', 'json', 'text', 'bytes', 'ndjson', 'xml', 'html'})

BACKOFF_TYPES = frozenset({
    'linear', 'exponential', 'exponentialCapped', 'fibonacci',
    'custom', 'jitter', 'exponentialJitter',
})

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# RETRY OPTIONS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class RetryOptions:
    """
    Опции повторов, передаваемые внешнему retry engine.

    Args:
        retry: Количество повторов (не включая первую попытку)
        retry_delay: Базовая задержка (сек)
        backoff_type: Имя стратегии backoff
        retry_status_codes: Статус коды, которые считаются временными

    Examples:
        >>> RetryOptions(retry=3, retry_delay=0.5, backoff_type='exponential')
    """
    retry: int = 0
    retry_delay: float = 1.0
    backoff_type: Optional[str] = None
    retry_status_codes: FrozenSet[int] = field(
        default_factory=lambda: frozenset({408, 429, 500, 502, 503, 504})
    )

    def __post_init__(self):
        """Валидация."""
        if self.retry < 0:
            raise ValueError("retry must be non-negative")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must be non-negative")
        if self.backoff_type is not None and self.backoff_type not in BACKOFF_TYPES:
            raise ValueError(
                f"Unknown backoff_type: {self.backoff_type}. "
                f"Available: {', '.join(sorted(BACKOFF_TYPES))}"
            )
        if not isinstance(self.retry_status_codes, frozenset):
            object.__setattr__(self, 'retry_status_codes', frozenset(self.retry_status_codes))

    def as_options(self) -> Dict[str, Any]:
        """Вернуть как опции запроса."""
        options: Dict[str, Any] = {
            'retry': self.retry,
            'retry_delay': self.retry_delay,
            'retry_status_codes': set(self.retry_status_codes),
        }
        if self.backoff_type is not None:
            options['backoff_type'] = self.backoff_type
        return options

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _freeze_dict(d: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    """Convert dict to immutable MappingProxyType."""
    if d is None:
        return MappingProxyType({})
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class ClientConfig:
    """
    Главная конфигурация HTTPClient.

    Значения отсюда служат дефолтами для каждого запроса; опции,
    переданные в конкретный вызов, имеют приоритет.

    Args:
        base_url: Базовый URL (опционально)
        headers: Дефолтные заголовки
        timeout: Таймаут запроса (сек), None = без ограничения
        verbose: Включить verbose диагностику для всех запросов
        stats_enabled: Отправлять события в StatsEventEmitter
        response_type: Как разбирать тело ответа по умолчанию
        retry: Опции для внешнего retry engine
        logging: Конфигурация логирования (None = без логирования)

    Examples:
        >>> config = ClientConfig(base_url="https://api.example.com")
        >>> config = ClientConfig.create(timeout=10, retry=3)
    """
    base_url: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    timeout: Optional[float] = 30.0
    verbose: bool = False
    stats_enabled: bool = True
    response_type: str = 'auto'
    retry: RetryOptions = field(default_factory=RetryOptions)
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Normalize base_url, freeze headers and validate."""
        if not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, 'headers', _freeze_dict(self.headers))

        if self.base_url:
            normalized = self.base_url.rstrip('/')
            if normalized != self.base_url:
                object.__setattr__(self, 'base_url', normalized)

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.response_type not in RESPONSE_TYPES:
            raise ValueError(
                f"Unknown response_type: {self.response_type}. "
                f"Available: {', '.join(sorted(RESPONSE_TYPES))}"
            )

    @classmethod
    def create(
        cls,
        base_url: Optional[str] = None,
        timeout: Optional[float] = 30.0,
        headers: Optional[Dict[str, str]] = None,
        verbose: bool = False,
        stats_enabled: bool = True,
        response_type: str = 'auto',
        retry: int = 0,
        retry_delay: float = 1.0,
        backoff_type: Optional[str] = None,
        retry_status_codes: Optional[FrozenSet[int]] = None,
        logging: Optional['LoggingConfig'] = None,
    ) -> 'ClientConfig':
        """
        Удобный конструктор конфигурации с плоскими параметрами.

        Examples:
            >>> config = ClientConfig.create(timeout=5, retry=2, backoff_type='linear')
        """
        retry_kwargs: Dict[str, Any] = {
            'retry': retry,
            'retry_delay': retry_delay,
            'backoff_type': backoff_type,
        }
        if retry_status_codes is not None:
            retry_kwargs['retry_status_codes'] = frozenset(retry_status_codes)

        return cls(
            base_url=base_url,
            headers=headers or {},
            timeout=timeout,
            verbose=verbose,
            stats_enabled=stats_enabled,
            response_type=response_type,
            retry=RetryOptions(**retry_kwargs),
            logging=logging,
        )

    def defaults(self) -> Dict[str, Any]:
        """Дефолтные опции запроса, производные от конфига."""
        options: Dict[str, Any] = {
            'headers': dict(self.headers),
            'timeout': self.timeout,
            'verbose': self.verbose,
            'response_type': self.response_type,
        }
        if self.base_url:
            options['base_url'] = self.base_url
        options.update(self.retry.as_options())
        return options

    def merge(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """
        Слить опции запроса с конфигом.

        Опции запроса побеждают; заголовки объединяются, а не заменяются.

        Example:
            >>> config = ClientConfig(headers={"Accept": "application/json"})
            >>> config.merge({"url": "/users", "headers": {"X-Trace": "1"}})["headers"]
            {'Accept': 'application/json', 'X-Trace': '1'}
        """
        merged = self.defaults()
        for key, value in request.items():
            if key == 'headers' and value:
                headers = dict(merged.get('headers') or {})
                headers.update(value)
                merged['headers'] = headers
            elif key == 'headers':
                continue
            else:
                merged[key] = value
        return merged

    def with_updates(self, **changes: Any) -> 'ClientConfig':
        """
        Создать новый конфиг с изменёнными полями.

        Флаги retry (retry, retry_delay, backoff_type, retry_status_codes)
        можно передавать плоско.

        Example:
            >>> new_config = config.with_updates(timeout=60, retry=2)
        """
        retry_fields = {'retry', 'retry_delay', 'backoff_type', 'retry_status_codes'}
        retry_changes = {k: changes.pop(k) for k in list(changes) if k in retry_fields}

        if 'retry' in retry_changes and isinstance(retry_changes['retry'], RetryOptions):
            changes['retry'] = retry_changes.pop('retry')
        if retry_changes:
            base_retry = changes.get('retry', self.retry)
            changes['retry'] = replace(base_retry, **retry_changes)

        if 'headers' in changes:
            changes['headers'] = _freeze_dict(changes['headers'])

        return replace(self, **changes)
