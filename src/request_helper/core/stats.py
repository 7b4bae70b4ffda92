"""Aggregation of request lifecycle events into counters, timings and errors."""

import threading
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from .events import (
    REQUEST_ABORT,
    REQUEST_FAIL,
    REQUEST_RETRY,
    REQUEST_START,
    REQUEST_SUCCESS,
    StatsEventEmitter,
)
from .verbose import stats_logger


class StatsHub:
    """
    Сборщик метрик по событиям StatsEventEmitter.

    Отслеживает:
    - Счётчики: total / success / fail / aborted / retried / inflight
    - Время выполнения (count, avg, min, max) по успешным и неудачным запросам
    - Ошибки по типу исключения и по статус коду
    - Количество запросов по HTTP методам

    Потокобезопасен; ``reset()`` начинает новое окно с нуля
    (запросы в полёте остаются в полёте).

    Example:
        >>> client = HTTPClient(base_url="https://api.example.com")
        >>> client.get("/users")
        >>> client.stats().counters()
        {'total': 1, 'success': 1, 'fail': 0, 'aborted': 0, 'retried': 0, 'inflight': 0}
        >>> client.stats().reset()
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._lock = threading.Lock()
        self._inflight: Set[str] = set()
        self._reset_state()

    def _reset_state(self) -> None:
        self._since = time.time()
        self._total = 0
        self._retried: Set[str] = set()
        self._success = 0
        self._fail = 0
        self._aborted = 0
        self._retries = 0

        self._durations_count = 0
        self._durations_total = 0.0
        self._durations_min: Optional[float] = None
        self._durations_max: Optional[float] = None

        self._errors_by_type: Dict[str, int] = {}
        self._errors_by_status: Dict[int, int] = {}
        self._methods: Dict[str, int] = {}

    # ==================== Подписка ====================

    def attach(self, events: StatsEventEmitter) -> 'StatsHub':
        """Подписаться на все события emitter'а. Возвращает self."""
        events.on(REQUEST_START, self._on_start)
        events.on(REQUEST_SUCCESS, self._on_success)
        events.on(REQUEST_FAIL, self._on_fail)
        events.on(REQUEST_ABORT, self._on_abort)
        events.on(REQUEST_RETRY, self._on_retry)
        return self

    def detach(self, events: StatsEventEmitter) -> None:
        events.off(REQUEST_START, self._on_start)
        events.off(REQUEST_SUCCESS, self._on_success)
        events.off(REQUEST_FAIL, self._on_fail)
        events.off(REQUEST_ABORT, self._on_abort)
        events.off(REQUEST_RETRY, self._on_retry)

    # ==================== Обработчики событий ====================

    def _on_start(self, data: Dict[str, Any]) -> None:
        request_id = data.get('id')
        method = str(data.get('method') or 'GET').upper()
        with self._lock:
            self._inflight.add(request_id)
            self._total += 1
            self._methods[method] = self._methods.get(method, 0) + 1

    def _on_success(self, data: Dict[str, Any]) -> None:
        with self._lock:
            self._inflight.discard(data.get('id'))
            self._success += 1
            self._record_duration(data.get('duration_ms'))

    def _on_fail(self, data: Dict[str, Any]) -> None:
        error_type = data.get('error') or 'Error'
        status = data.get('status')
        with self._lock:
            self._inflight.discard(data.get('id'))
            self._fail += 1
            self._record_duration(data.get('duration_ms'))
            self._errors_by_type[error_type] = self._errors_by_type.get(error_type, 0) + 1
            if status is not None:
                self._errors_by_status[status] = self._errors_by_status.get(status, 0) + 1

    def _on_abort(self, data: Dict[str, Any]) -> None:
        with self._lock:
            self._inflight.discard(data.get('id'))
            self._aborted += 1
            self._errors_by_type['aborted'] = self._errors_by_type.get('aborted', 0) + 1

    def _on_retry(self, data: Dict[str, Any]) -> None:
        with self._lock:
            self._retries += 1
            self._retried.add(data.get('id'))

    def _record_duration(self, duration_ms: Any) -> None:
        # caller holds the lock
        if not isinstance(duration_ms, (int, float)) or isinstance(duration_ms, bool):
            return
        self._durations_count += 1
        self._durations_total += duration_ms
        if self._durations_min is None or duration_ms < self._durations_min:
            self._durations_min = duration_ms
        if self._durations_max is None or duration_ms > self._durations_max:
            self._durations_max = duration_ms

    # ==================== Запросы метрик ====================

    def counters(self) -> Dict[str, int]:
        with self._lock:
            return {
                'total': self._total,
                'success': self._success,
                'fail': self._fail,
                'aborted': self._aborted,
                'retried': len(self._retried),
                'inflight': len(self._inflight),
            }

    def time(self) -> Dict[str, Optional[float]]:
        """Длительности в миллисекундах; avg/min/max = None, пока нет данных."""
        with self._lock:
            count = self._durations_count
            return {
                'count': count,
                'avg_ms': self._durations_total / count if count else None,
                'min_ms': self._durations_min,
                'max_ms': self._durations_max,
            }

    def errors(self) -> Dict[str, Any]:
        with self._lock:
            return {
                'total': self._fail + self._aborted,
                'by_type': dict(self._errors_by_type),
                'by_status': dict(self._errors_by_status),
            }

    def snapshot(self) -> Dict[str, Any]:
        """
        Все метрики одним словарём.

        Returns:
            {'since', 'counters', 'time', 'errors', 'methods', 'retries'}
        """
        with self._lock:
            since = datetime.fromtimestamp(self._since, tz=timezone.utc).isoformat()
            methods = dict(self._methods)
            retries = self._retries

        result = {
            'since': since,
            'counters': self.counters(),
            'time': self.time(),
            'errors': self.errors(),
            'methods': methods,
            'retries': retries,
        }
        stats_logger.log(self.verbose, 'SNAPSHOT', 'Stats snapshot taken',
                         total=result['counters']['total'])
        return result

    def reset(self) -> None:
        """Обнулить метрики. Запросы в полёте продолжают считаться in-flight."""
        with self._lock:
            self._reset_state()
        stats_logger.log(self.verbose, 'RESET', 'Stats reset', scope='all')
