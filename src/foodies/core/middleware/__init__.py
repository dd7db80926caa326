"""Custom middleware components."""

from foodies.core.middleware.logging import LoggingMiddleware
from foodies.core.middleware.request_id import RequestIDMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
