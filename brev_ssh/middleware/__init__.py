"""brev_ssh middleware components."""

from brev_ssh.middleware.base import BrevMiddleware
from brev_ssh.middleware.errors import ErrorHandlingMiddleware
from brev_ssh.middleware.logging import LoggingMiddleware

__all__ = [
    "BrevMiddleware",
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
]
