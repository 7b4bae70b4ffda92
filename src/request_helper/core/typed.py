"""Typed request helpers: set Accept / Content-Type and the response type."""

import json
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlencode


def _find_header(headers: Mapping[str, Any], name: str) -> Optional[str]:
    """Return the key under which ``name`` is set, ignoring case."""
    lowered = name.lower()
    for key in headers:
        if key.lower() == lowered:
            return key
    return None


def _with_header(options: Dict[str, Any], name: str, value: str, response_type: str) -> Dict[str, Any]:
    headers = dict(options.get('headers') or {})
    if _find_header(headers, name) is None:
        headers[name] = value
    result = dict(options)
    result['headers'] = headers
    if result.get('response_type') is None:
        result['response_type'] = response_type
    return result


def with_accept(options: Dict[str, Any], accept: str, response_type: str) -> Dict[str, Any]:
    """
    Return options with an Accept header and a default response_type.

    A caller-set Accept header (any letter case) and response_type always win.

    Example:
        >>> with_accept({'headers': {'accept': 'text/csv'}}, 'application/json', 'json')
        {'headers': {'accept': 'text/csv'}, 'response_type': 'json'}
    """
    return _with_header(options, 'Accept', accept, response_type)


def with_type(options: Dict[str, Any], content_type: str, response_type: str) -> Dict[str, Any]:
    """Return options with a Content-Type header and a default response_type."""
    return _with_header(options, 'Content-Type', content_type, response_type)


class TypedRequests:
    """
    Mixin with content-typed shortcuts built on the verb methods.

    Requires ``get``/``post``/``put``/``patch`` (see HttpVerbs).
    """

    # -------- GET: response content --------

    def get_text(self, url: str, **options: Any) -> Any:
        return self.get(url, **with_accept(options, 'text/plain', 'text'))

    def get_json(self, url: str, **options: Any) -> Any:
        """
        GET with ``Accept: application/json``; response data is decoded JSON.

        Example:
            >>> client.get_json('/users/1').data['name']
        """
        return self.get(url, **with_accept(options, 'application/json', 'json'))

    def get_xml(self, url: str, **options: Any) -> Any:
        return self.get(url, **with_accept(options, 'application/xml, text/xml, application/soap+xml', 'xml'))

    def get_html(self, url: str, **options: Any) -> Any:
        return self.get(url, **with_accept(options, 'text/html', 'html'))

    def get_bytes(self, url: str, **options: Any) -> Any:
        return self.get(url, **with_accept(options, 'application/octet-stream', 'bytes'))

    def get_ndjson(self, url: str, **options: Any) -> Any:
        """GET newline-delimited JSON; data is a list of decoded lines."""
        return self.get(url, **with_accept(options, 'application/x-ndjson', 'ndjson'))

    # -------- POST/PUT/PATCH: request content --------

    def post_json(self, url: str, data: Any, **options: Any) -> Any:
        return self.post(url, json.dumps(data), **with_type(options, 'application/json', 'json'))

    def put_json(self, url: str, data: Any, **options: Any) -> Any:
        return self.put(url, json.dumps(data), **with_type(options, 'application/json', 'json'))

    def patch_json(self, url: str, data: Any, **options: Any) -> Any:
        return self.patch(url, json.dumps(data), **with_type(options, 'application/json', 'json'))

    def post_text(self, url: str, text: Any, **options: Any) -> Any:
        return self.post(url, str(text), **with_type(options, 'text/plain', 'text'))

    def post_form(self, url: str, data: Union[Mapping[str, Any], str], **options: Any) -> Any:
        """POST ``application/x-www-form-urlencoded``; mappings are url-encoded."""
        body = data if isinstance(data, str) else urlencode(data, doseq=True)
        return self.post(url, body, **with_type(options, 'application/x-www-form-urlencoded', 'auto'))

    def post_multipart(self, url: str, files: Dict[str, Any], data: Optional[Dict[str, Any]] = None,
                       **options: Any) -> Any:
        """
        POST multipart/form-data.

        Content-Type is left unset so requests can add the boundary.
        """
        safe_options = dict(options)
        headers = dict(safe_options.get('headers') or {})
        content_type_key = _find_header(headers, 'Content-Type')
        if content_type_key is not None:
            del headers[content_type_key]
        safe_options['headers'] = headers
        if safe_options.get('response_type') is None:
            safe_options['response_type'] = 'json'
        safe_options['files'] = files
        return self.post(url, data, **safe_options)

    def post_soap(self, url: str, xml: str, **options: Any) -> Any:
        """POST a SOAP envelope; SOAP 1.2 is kept if the caller asked for it."""
        headers = options.get('headers') or {}
        content_type_key = _find_header(headers, 'Content-Type')
        current = headers[content_type_key] if content_type_key is not None else ''
        is_soap12 = 'application/soap+xml' in str(current)
        content_type = 'application/soap+xml' if is_soap12 else 'text/xml'
        return self.post(url, xml, **with_type(options, content_type, 'xml'))
