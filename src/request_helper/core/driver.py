"""
Transport driver built on requests.Session.

The driver sends exactly one HTTP exchange per call. It knows nothing about
retries: retry options ride along on the request descriptor untouched.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlparse

import requests

from .context import RequestContext
from .exceptions import (
    AbortError,
    ParseError,
    classify_requests_exception,
    error_for_status,
)
from .verbose import request_logger, response_logger

BODY_METHODS = frozenset({'POST', 'PUT', 'PATCH'})

# Options handed straight to requests.Session.request
PASSTHROUGH_OPTIONS = ('auth', 'cookies', 'proxies', 'verify', 'cert', 'allow_redirects')


@dataclass
class Response:
    """Parsed HTTP response.

    Attributes:
        status: HTTP status code
        headers: Response headers (case preserved as received)
        data: Parsed body, shaped by response_type
        url: Final URL after redirects
        request_id: Id of the context that produced this response
        raw: Underlying requests.Response (None for synthetic responses)
    """

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    data: Any = None
    url: str = ''
    request_id: Optional[str] = None
    raw: Optional[requests.Response] = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 400


def build_url(url: str, base_url: Optional[str] = None) -> str:
    """
    Join ``url`` onto ``base_url`` unless it is already absolute.

    Examples:
        >>> build_url('/users', 'https://api.example.com/')
        'https://api.example.com/users'
        >>> build_url('https://other.example.com/x', 'https://api.example.com')
        'https://other.example.com/x'
    """
    if not base_url or urlparse(url).scheme in ('http', 'https'):
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


def parse_response_data(raw: requests.Response, response_type: str = 'auto',
                        parse_response: Optional[Callable[[str, requests.Response], Any]] = None) -> Any:
    """
    Decode a response body.

    Args:
        raw: requests response
        response_type: auto, json, text, xml, html, bytes or ndjson
        parse_response: Custom parser ``(text, raw) -> data``; wins over response_type

    Raises:
        ParseError: Body does not match the requested response_type
    """
    if parse_response is not None:
        return parse_response(raw.text, raw)

    if response_type == 'bytes':
        return raw.content
    if response_type in ('text', 'xml', 'html'):
        return raw.text

    if not raw.content:
        return None if response_type in ('json', 'ndjson') else ''

    if response_type == 'json':
        try:
            return raw.json()
        except ValueError as e:
            raise ParseError(f"Invalid JSON body: {e}", url=raw.url, response_type='json') from e

    if response_type == 'ndjson':
        try:
            return [json.loads(line) for line in raw.text.splitlines() if line.strip()]
        except ValueError as e:
            raise ParseError(f"Invalid NDJSON body: {e}", url=raw.url, response_type='ndjson') from e

    # auto: JSON if the server says so, text otherwise
    if 'json' in raw.headers.get('Content-Type', '').lower():
        try:
            return raw.json()
        except ValueError:
            return raw.text
    return raw.text


class RequestsDriver:
    """
    Sends a RequestContext's descriptor over a requests.Session.

    Cancellation is checked before dispatch and again once the response
    arrives; an aborted context raises AbortError and the response is closed.

    Example:
        >>> driver = RequestsDriver()
        >>> ctx = build_context({'method': 'GET', 'url': 'https://httpbin.org/get'})
        >>> driver.send(ctx).status
        200
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session or requests.Session()
        self._owns_session = session is None

    @property
    def session(self) -> requests.Session:
        return self._session

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def build_kwargs(self, ctx: RequestContext) -> Dict[str, Any]:
        """Translate the descriptor into requests.Session.request kwargs."""
        req = ctx.req
        method = ctx.method
        headers = dict(req.get('headers') or {})

        kwargs: Dict[str, Any] = {
            'method': method,
            'url': build_url(req.get('url', ''), req.get('base_url')),
            'headers': headers,
            'timeout': req.get('timeout'),
        }

        if req.get('query'):
            kwargs['params'] = req['query']

        body = req.get('body')
        files = req.get('files')
        if files is not None:
            kwargs['files'] = files
            if body is not None:
                kwargs['data'] = body
        elif body is not None and method in BODY_METHODS:
            if isinstance(body, (str, bytes, bytearray)):
                kwargs['data'] = body
            else:
                kwargs['data'] = json.dumps(body)
                if not any(name.lower() == 'content-type' for name in headers):
                    headers['Content-Type'] = 'application/json'

        for option in PASSTHROUGH_OPTIONS:
            if option in req:
                kwargs[option] = req[option]

        return kwargs

    def send(self, ctx: RequestContext) -> Response:
        """
        Perform one HTTP exchange for ``ctx``.

        Raises:
            AbortError: Context was aborted before or during the exchange
            HTTPError: Status >= 400 (unless ``ignore_response_error``)
            NetworkError: Transport failure (timeout, connection)
            ParseError: Body could not be decoded
        """
        ctx.signal.raise_if_aborted(ctx.request_id)

        kwargs = self.build_kwargs(ctx)
        url = kwargs['url']

        request_logger.log(
            ctx, 'START', f"Starting {kwargs['method']} {url}",
            method=kwargs['method'],
            header_count=len(kwargs['headers']),
            body='present' if 'data' in kwargs or 'files' in kwargs else 'none',
            timeout=kwargs['timeout'] if kwargs['timeout'] is not None else 'default',
            retry=ctx.req.get('retry', 0),
        )

        try:
            raw = self._session.request(**kwargs)
        except requests.exceptions.RequestException as e:
            if ctx.signal.aborted:
                raise AbortError(reason=ctx.signal.reason, request_id=ctx.request_id) from e
            raise classify_requests_exception(e, url) from e

        if ctx.signal.aborted:
            raw.close()
            raise AbortError(reason=ctx.signal.reason, request_id=ctx.request_id)

        response_type = ctx.req.get('response_type') or 'auto'
        response_logger.log(
            ctx, 'RECEIVED', 'Received response',
            status=raw.status_code,
            response_type=response_type,
            size=len(raw.content),
        )

        if raw.status_code >= 400 and not ctx.req.get('ignore_response_error'):
            error_response = Response(
                status=raw.status_code,
                headers=dict(raw.headers),
                data=raw.text,
                url=raw.url or url,
                request_id=ctx.request_id,
                raw=raw,
            )
            raise error_for_status(
                raw.status_code, url,
                response=error_response,
                retry_after=raw.headers.get('Retry-After'),
            )

        data = None
        if ctx.method != 'HEAD':
            data = parse_response_data(raw, response_type, ctx.req.get('parse_response'))

        return Response(
            status=raw.status_code,
            headers=dict(raw.headers),
            data=data,
            url=raw.url or url,
            request_id=ctx.request_id,
            raw=raw,
        )

