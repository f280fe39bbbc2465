"""Error response builder for RFC 7807 Problem Details.

This module builds Problem Details responses from the authentication
failures returned by the application handlers.

Status mapping:
    UserDeactivatedError -> 403
    every other AuthError -> 401

Exports:
    ErrorResponseBuilder: Utility class for building RFC 7807 responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.enums import ErrorCode
from src.domain.errors import AuthenticationFailedError, AuthError, UserDeactivatedError
from src.presentation.routers.api.v1.errors.problem_details import ProblemDetails

_TITLES: dict[ErrorCode, str] = {
    ErrorCode.AUTHENTICATION_FAILED: "Authentication Failed",
    ErrorCode.USER_DEACTIVATED: "Account Deactivated",
    ErrorCode.USER_NOT_FOUND: "User Not Found",
    ErrorCode.TOKEN_EXPIRED: "Token Expired",
    ErrorCode.TOKEN_INVALID: "Invalid Token",
    ErrorCode.TOKEN_THEFT_DETECTED: "Token Reuse Detected",
}


class ErrorResponseBuilder:
    """Build RFC 7807 Problem Details error responses.

    Example:
        >>> match result:
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_auth_error(
        ...             error, request, get_trace_id()
        ...         )
    """

    @staticmethod
    def from_auth_error(
        error: AuthError,
        request: Request,
        trace_id: str | None,
    ) -> JSONResponse:
        """Convert an AuthError to an RFC 7807 JSON response.

        The diagnostic cause of AuthenticationFailedError is never sent to
        the client.

        Args:
            error: Failure returned by a handler.
            request: FastAPI Request object (for instance URL).
            trace_id: Request trace ID for debugging.

        Returns:
            JSONResponse with ProblemDetails content.
        """
        status_code = ErrorResponseBuilder.get_status_code(error)

        detail = error.message
        if isinstance(error, AuthenticationFailedError):
            detail = "Authentication failed. Please try again."

        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{error.code.value}",
            title=_TITLES.get(error.code, "Authentication Error"),
            status=status_code,
            detail=detail,
            instance=str(request.url.path),
            errors=None,
            trace_id=trace_id,
        )

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
            headers=headers,
        )

    @staticmethod
    def get_status_code(error: AuthError) -> int:
        """Map an authentication failure to its HTTP status code.

        Example:
            >>> ErrorResponseBuilder.get_status_code(
            ...     UserDeactivatedError(code=ErrorCode.USER_DEACTIVATED, message="")
            ... )
            403
        """
        if isinstance(error, UserDeactivatedError):
            return status.HTTP_403_FORBIDDEN
        return status.HTTP_401_UNAUTHORIZED
