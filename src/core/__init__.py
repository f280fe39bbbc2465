"""Shared kernel: Result types, DomainError and shared enums.

Settings (src.core.config) and the container (src.core.container) are
imported explicitly by the modules that need them, never re-exported here,
so importing the kernel never loads configuration.
"""

from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
]
