"""Portal - Client Settings."""
from dataclasses import dataclass

import environ

env = environ.Env(
    PORTAL_API_URL=(str, 'http://localhost:8000'),
    PORTAL_TIMEOUT=(float, 10.0),
)


@dataclass(frozen=True)
class PortalSettings:
    base_url: str = 'http://localhost:8000'
    timeout: float = 10.0

    @classmethod
    def from_env(cls) -> 'PortalSettings':
        return cls(base_url=env('PORTAL_API_URL').rstrip('/'), timeout=env('PORTAL_TIMEOUT'))
