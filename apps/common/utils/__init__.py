"""Common Utils Package."""
from .middleware import (
    RequestLoggingMiddleware,
    SensitiveDataFilter,
    get_client_ip,
)

__all__ = [
    'RequestLoggingMiddleware',
    'SensitiveDataFilter',
    'get_client_ip',
]
