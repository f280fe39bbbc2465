"""Problem Details (RFC 7807) rendering for the HTTP API.

Handler failures go through ErrorResponseBuilder; framework exceptions
(HTTPException, request validation, anything unhandled) go through the
handlers installed by register_exception_handlers. Both produce the same
ProblemDetails body.
"""

from src.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)
from src.presentation.routers.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponseBuilder",
    "ProblemDetails",
    "register_exception_handlers",
]
