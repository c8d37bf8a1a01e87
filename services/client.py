"""HTTP client for the portal server.

Pages are rendered by the server as Inertia page objects: a JSON document
with ``component``, ``props``, ``url`` and ``version``. The client asks for
that JSON directly (``X-Inertia`` header) and, when the server reports an
asset version mismatch (HTTP 409), falls back to the full HTML page and
reads the page object embedded in the root element's ``data-page``
attribute.

Form submissions follow the same protocol: the server redirects back to a
page whose props carry ``errors`` (per-field messages) and ``flash``.
"""
import json
import logging
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Any, Dict, Optional
from urllib.parse import unquote, urlencode

import requests
from requests.exceptions import RequestException, Timeout

from config import Settings, settings as default_settings
from services.errors import PortalError, ValidationFailed

logger = logging.getLogger(__name__)


@dataclass
class SubmitResult:
    success: bool
    errors: Dict[str, str] = field(default_factory=dict)
    message: Optional[str] = None
    props: Dict[str, Any] = field(default_factory=dict)

    def first_error(self, default: str = "Request failed") -> str:
        return next(iter(self.errors.values()), default)


class _DataPageParser(HTMLParser):
    """Find the first ``data-page`` attribute in a server-rendered page."""

    def __init__(self):
        super().__init__()
        self.page: Optional[str] = None

    def handle_starttag(self, tag, attrs):
        if self.page is not None:
            return
        for name, value in attrs:
            if name == 'data-page' and value:
                self.page = value
                return


def normalize_errors(raw: Any) -> Dict[str, str]:
    """Flatten server error bags into ``{field: first message}``."""
    if not raw or not isinstance(raw, dict):
        return {}
    errors: Dict[str, str] = {}
    for key, value in raw.items():
        if isinstance(value, list):
            value = value[0] if value else ''
        if isinstance(value, dict):
            # named error bag
            errors.update(normalize_errors(value))
            continue
        errors[str(key)] = str(value)
    return errors


class PortalClient:
    def __init__(self, config: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.config = config or default_settings
        self.base_url = self.config.api_base_url.rstrip('/')
        self.timeout = self.config.request_timeout
        self.session = session or requests.Session()
        self.version: Optional[str] = None
        if self.config.session_cookie:
            self.session.cookies.set(
                self.config.session_cookie_name, self.config.session_cookie)

    def url_for(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        url = f"{self.base_url}/{path.lstrip('/')}"
        query = {k: v for k, v in (params or {}).items() if v not in (None, '')}
        if query:
            url = f"{url}?{urlencode(query)}"
        return url

    def _xsrf_headers(self) -> Dict[str, str]:
        token = self.session.cookies.get('XSRF-TOKEN')
        return {'X-XSRF-TOKEN': unquote(token)} if token else {}

    def _inertia_headers(self) -> Dict[str, str]:
        headers = {
            'X-Inertia': 'true',
            'X-Requested-With': 'XMLHttpRequest',
            'Accept': 'text/html, application/xhtml+xml',
        }
        if self.version:
            headers['X-Inertia-Version'] = str(self.version)
        headers.update(self._xsrf_headers())
        return headers

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = path if path.startswith('http') else self.url_for(path)
        logger.info("%s %s", method, url)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except Timeout:
            logger.warning("Request to %s timed out", url)
            raise PortalError(f"The server did not respond in time ({method} {path})")
        except RequestException as e:
            logger.error("Request to %s failed: %s", url, e)
            raise PortalError(f"Could not reach the server: {e}")
        if resp.status_code >= 500:
            logger.error("Server error %s for %s %s", resp.status_code, method, url)
            raise PortalError(f"Server error ({resp.status_code})", status=resp.status_code)
        if resp.status_code in (401, 403, 419):
            raise PortalError("Your session has expired. Please sign in again.",
                              status=resp.status_code)
        if resp.status_code == 404:
            raise PortalError(f"Not found: {path}", status=404)
        return resp

    def _decode_page(self, resp: requests.Response) -> Dict[str, Any]:
        if resp.headers.get('X-Inertia'):
            page = resp.json()
        else:
            parser = _DataPageParser()
            parser.feed(resp.text)
            if parser.page is None:
                raise PortalError("The server response did not contain page data")
            page = json.loads(parser.page)
        if page.get('version') is not None:
            self.version = str(page['version'])
        return page

    def _reload_html(self, resp: requests.Response, fallback: str) -> requests.Response:
        """Asset version changed (409): request the full HTML page instead."""
        location = resp.headers.get('X-Inertia-Location') or fallback
        logger.info("Asset version changed, reloading %s", location)
        return self._request('GET', location, headers={'Accept': 'text/html'})

    def get_page(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Fetch a server-rendered page and return its props."""
        query = {k: v for k, v in (params or {}).items() if v not in (None, '')}
        resp = self._request('GET', path, params=query, headers=self._inertia_headers())
        if resp.status_code == 409:
            resp = self._reload_html(resp, self.url_for(path, query))
        return self._decode_page(resp).get('props', {})

    def submit(self, method: str, path: str, data: Optional[Dict[str, Any]] = None,
               files: Optional[Dict[str, Any]] = None) -> SubmitResult:
        """Send one form submission and interpret the page the server redirects to."""
        method = method.upper()
        headers = self._inertia_headers()
        if files:
            # multipart bodies only travel over POST; spoof the verb
            form = dict(data or {})
            if method != 'POST':
                form['_method'] = method
            resp = self._request('POST', path, data=form, files=files, headers=headers)
        else:
            resp = self._request(method, path, json=data or {}, headers=headers)

        if resp.status_code == 422:
            errors = normalize_errors(_safe_json(resp).get('errors'))
            logger.warning("%s %s rejected: %s", method, path, errors)
            return SubmitResult(success=False, errors=errors or {'error': 'Invalid data'})
        if resp.status_code == 409:
            # the redirect target was requested with a stale asset version; the
            # server reflashes errors/flash, so the full page still carries the outcome
            location = resp.headers.get('X-Inertia-Location')
            if not location:
                logger.warning("%s %s answered 409 without a location", method, path)
                return SubmitResult(success=False,
                                    errors={'error': "The page changed on the server. Reload and try again."})
            resp = self._reload_html(resp, location)

        page = self._decode_page(resp)
        props = page.get('props', {}) or {}
        errors = normalize_errors(props.get('errors'))
        flash = props.get('flash') or {}
        if errors:
            logger.warning("%s %s returned errors: %s", method, path, errors)
            return SubmitResult(success=False, errors=errors, props=props,
                                message=flash.get('error'))
        return SubmitResult(success=True, props=props,
                            message=flash.get('success') or flash.get('message'))

    def fetch_json(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None,
                   params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Ad-hoc JSON request (previews, verification, AI descriptions)."""
        headers = {'Accept': 'application/json', 'X-Requested-With': 'XMLHttpRequest'}
        headers.update(self._xsrf_headers())
        resp = self._request(method.upper(), path, json=payload, params=params, headers=headers)
        body = _safe_json(resp)
        if resp.status_code == 422:
            raise ValidationFailed(normalize_errors(body.get('errors')),
                                   body.get('message') or "The given data was invalid.")
        if resp.status_code >= 400:
            raise PortalError(body.get('message') or f"Request failed ({resp.status_code})",
                              status=resp.status_code)
        return body


def _safe_json(resp: requests.Response) -> Dict[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {'data': body}


_client: Optional[PortalClient] = None


def get_client() -> PortalClient:
    """Process-wide client; views share it through this accessor."""
    global _client
    if _client is None:
        _client = PortalClient()
    return _client


def set_client(client: Optional[PortalClient]):
    global _client
    _client = client
