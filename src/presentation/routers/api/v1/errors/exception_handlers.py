"""Problem Details for errors raised outside the handlers.

Handler failures go through ErrorResponseBuilder. What remains is raised by
FastAPI itself or by dependencies: HTTPException (missing bearer token, bad
OAuth state), request validation, and anything unexpected such as the
database or the revocation store being unreachable.
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.container import get_logger
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

# status -> (title, error type slug)
_STATUS_TYPES: dict[int, tuple[str, str]] = {
    400: ("Bad Request", "bad_request"),
    401: ("Authentication Required", "authentication_required"),
    403: ("Access Denied", "access_denied"),
    404: ("Not Found", "not_found"),
    405: ("Method Not Allowed", "method_not_allowed"),
    422: ("Validation Failed", "validation_failed"),
    500: ("Internal Server Error", "internal_error"),
}


def _problem_response(
    request: Request,
    status_code: int,
    detail: str,
    *,
    errors: list[ErrorDetail] | None = None,
    headers: dict[str, str] | None = None,
    trace_id: str | None = None,
) -> JSONResponse:
    title, slug = _STATUS_TYPES.get(status_code, ("Error", "error"))
    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/{slug}",
        title=title,
        status=status_code,
        detail=detail,
        instance=request.url.path,
        errors=errors or None,
        trace_id=trace_id or get_trace_id(),
    )
    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """HTTPException -> Problem Details, keeping headers such as WWW-Authenticate."""
    assert isinstance(exc, HTTPException)
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _problem_response(
        request, exc.status_code, detail, headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Request validation errors, one ErrorDetail per offending field."""
    assert isinstance(exc, RequestValidationError)

    errors: list[ErrorDetail] = []
    for error in exc.errors():
        # ("body", "refresh_token") -> "refresh_token"
        path = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append(
            ErrorDetail(
                field=".".join(path) or "unknown",
                code=error.get("type", "validation_error"),
                message=error.get("msg", "Invalid value"),
            )
        )

    return _problem_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Request validation failed. See 'errors' for the offending fields.",
        errors=errors,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unexpected becomes a 500; the cause is logged, never returned."""
    trace_id = get_trace_id()
    get_logger().error(
        "unhandled_exception",
        error=exc,
        trace_id=trace_id,
        request_path=request.url.path,
        request_method=request.method,
    )
    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Quote the trace ID when reporting it.",
        trace_id=trace_id,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
