"""
API Client
Thin requests wrapper for the bootcamp REST API.
"""

import logging
from typing import Any, Dict, Optional

import requests

from bootcamp.config import API_BASE_URL, REQUEST_TIMEOUT
from bootcamp.client.errors import NetworkError, ServerError, NotFound

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Talks to the API and unwraps the {'success', 'data' | 'error'} envelope.

    Transport failures raise NetworkError; error statuses raise ServerError
    (NotFound for 404).
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        admin_key: Optional[str] = None,
        github_id: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        if admin_key:
            self.session.headers['X-Admin-Key'] = admin_key
        if github_id:
            self.session.headers['X-Github-Id'] = github_id

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request('GET', path, params=params)

    def post(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        return self.request('POST', path, json=payload)

    def put(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        return self.request('PUT', path, json=payload)

    def delete(self, path: str) -> Any:
        return self.request('DELETE', path)

    def request(self, method: str, path: str, **kwargs) -> Any:
        """Send a request and return the envelope's data."""
        url = self.url(path)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout:
            raise NetworkError(f'{method} {url} timed out')
        except requests.exceptions.RequestException as e:
            raise NetworkError(f'{method} {url} failed: {e}')

        body = self._json(response)

        if response.status_code == 404:
            raise NotFound(body.get('error') or f'{method} {url}: not found')
        if response.status_code >= 400 or body.get('success') is False:
            message = body.get('error') or f'{method} {url} returned status {response.status_code}'
            raise ServerError(message, status=response.status_code)

        return body.get('data')

    @staticmethod
    def _json(response: requests.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {'data': body}
