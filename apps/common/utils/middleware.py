"""Common Utils - Request Logging Middleware and Log Filters."""
import logging
import re
import time
from typing import Callable
from django.http import HttpRequest, HttpResponse

logger = logging.getLogger('apps.requests')


def get_client_ip(request: HttpRequest) -> str:
    x_forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded:
        return x_forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR', 'unknown')


class RequestLoggingMiddleware:
    """Log every API request with its status and duration."""
    SKIP_PATHS = ['/static/', '/media/', '/favicon.ico']

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        start_time = time.monotonic()
        response = self.get_response(request)
        if any(request.path.startswith(p) for p in self.SKIP_PATHS):
            return response

        user = getattr(request, 'user', None)
        authenticated = user is not None and user.is_authenticated
        log_data = {
            'method': request.method,
            'path': request.path,
            'status': response.status_code,
            'duration_ms': round((time.monotonic() - start_time) * 1000, 2),
            'user_id': str(user.pk) if authenticated else None,
            'role': getattr(user, 'role', None) if authenticated else None,
            'client_ip': get_client_ip(request),
        }
        if response.status_code >= 500:
            logger.error('Request failed', extra=log_data)
        elif response.status_code >= 400:
            logger.warning('Request rejected', extra=log_data)
        else:
            logger.info('Request completed', extra=log_data)
        return response


class SensitiveDataFilter(logging.Filter):
    """Mask credentials and tokens in log messages."""
    SENSITIVE_KEYS = ['password', 'token', 'access', 'refresh', 'secret', 'api_key']
    PATTERNS = [
        re.compile(r'(Bearer\s+)[\w\-\.]+', re.IGNORECASE),
    ] + [
        re.compile(rf"""(['"]?{key}['"]?\s*[:=]\s*['"]?)[^'"\s,&}}]+""", re.IGNORECASE)
        for key in SENSITIVE_KEYS
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            message = record.msg
            for pattern in self.PATTERNS:
                message = pattern.sub(r'\1***MASKED***', message)
            record.msg = message
        return True
