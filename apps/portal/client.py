"""Portal - REST API Client."""
import logging
from typing import Any, Dict, List, Optional

import requests

from .session import SessionState
from .settings import PortalSettings

logger = logging.getLogger('apps.portal')

HYDRA_MEMBER = 'hydra:member'


class ApiError(Exception):
    """Transport failure (``status`` is None) or non-2xx response."""

    def __init__(self, message: str, status: Optional[int] = None, payload: Any = None):
        self.message = message
        self.status = status
        self.payload = payload
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.status}] {self.message}" if self.status else self.message


def unwrap_collection(data: Any) -> List[Any]:
    """Items of a plain JSON array or of a Hydra ``hydra:member`` envelope."""
    if data is None:
        return []
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get(HYDRA_MEMBER), list):
        return data[HYDRA_MEMBER]
    raise ApiError('Unexpected collection shape', payload=data)


class ApiClient:

    def __init__(self, settings: Optional[PortalSettings] = None, session_state: Optional[SessionState] = None,
                 http: Optional[requests.Session] = None):
        self.settings = settings or PortalSettings.from_env()
        self.session_state = session_state or SessionState()
        self.http = http or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.settings.base_url}/{path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        headers = {'Accept': 'application/json'}
        token = self.session_state.current().token
        if token:
            headers['Authorization'] = f'Bearer {token}'
        return headers

    def request(self, method: str, path: str, params: Optional[Dict] = None, json: Any = None,
                files: Optional[Dict] = None) -> Any:
        try:
            response = self.http.request(method, self._url(path), params=params, json=json, files=files,
                                         headers=self._headers(), timeout=self.settings.timeout)
        except requests.RequestException as e:
            raise ApiError(f'{method} {path} failed: {e}') from e

        if not response.ok:
            try:
                payload = response.json()
            except ValueError:
                payload = response.text
            message = payload.get('message') if isinstance(payload, dict) else None
            raise ApiError(message or f'{method} {path} returned {response.status_code}', response.status_code, payload)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f'{method} {path} returned invalid JSON', response.status_code, response.text) from e

    def get(self, path: str, params: Optional[Dict] = None) -> Any:
        return self.request('GET', path, params=params)

    def get_collection(self, path: str, params: Optional[Dict] = None) -> List[Any]:
        return unwrap_collection(self.get(path, params=params))

    def post(self, path: str, json: Any = None) -> Any:
        return self.request('POST', path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request('PATCH', path, json=json)

    def upload(self, path: str, file_path: str) -> Any:
        """Multipart ``imageFile`` upload of a local file."""
        try:
            handle = open(file_path, 'rb')
        except OSError as e:
            raise ApiError(f'Cannot read {file_path}: {e}') from e
        with handle:
            return self.request('POST', path, files={'imageFile': handle})
