"""HTTP client for the backend API.

The caller reads the token once (see :func:`web.cookies.read_access_token`)
and passes it in; nothing here looks at the incoming request.
"""

import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class BackendClient:
    def __init__(self, token=None, base_url=None, timeout=None):
        self.token = token
        self.base_url = (base_url or settings.API_URL).rstrip('/')
        self.timeout = timeout or settings.API_TIMEOUT
        self.session = requests.Session()

    def url(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method, path, *, params=None, data=None, json=None, files=None, headers=None, stream=False):
        """Send one request; raises ``requests.RequestException`` on network failure."""
        headers = dict(headers or {})
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        logger.debug('%s %s', method, self.url(path))
        return self.session.request(
            method,
            self.url(path),
            params=params,
            data=data,
            json=json,
            files=files,
            headers=headers,
            timeout=self.timeout,
            stream=stream,
        )

    def get_json(self, path, params=None):
        response = self.request('GET', path, params=params)
        try:
            response.raise_for_status()
            return response.json()
        finally:
            response.close()
