"""Problem Details body (RFC 7807) returned by every failing endpoint.

``type`` is ``{api_base_url}/errors/{slug}``: the slug is the ErrorCode value
for authentication failures and a kebab-case HTTP status name otherwise.
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """One rejected request field (validation failures only)."""

    field: str = Field(..., description="Dotted path of the rejected field")
    code: str = Field(..., description="Pydantic error type")
    message: str = Field(..., description="Why the value was rejected")


class ProblemDetails(BaseModel):
    """Error response body.

    ``trace_id`` echoes the X-Trace-Id header so a client report can be
    matched to server logs. ``errors`` is only present for 422 responses.

    Example:
        >>> ProblemDetails(
        ...     type="http://localhost:8000/errors/token_theft_detected",
        ...     title="Token Reuse Detected",
        ...     status=401,
        ...     detail="Refresh token reuse detected; all sessions have been revoked",
        ...     instance="/api/v1/tokens",
        ... )
    """

    type: str = Field(
        ...,
        description="Problem type URI",
        examples=["http://localhost:8000/errors/token_expired"],
    )
    title: str = Field(..., description="Summary of the problem type", examples=["Token Expired"])
    status: int = Field(..., description="HTTP status code", examples=[401])
    detail: str = Field(
        ...,
        description="Explanation of this occurrence, safe to show to clients",
        examples=["Refresh token is invalid, expired or revoked"],
    )
    instance: str = Field(..., description="Request path", examples=["/api/v1/tokens"])
    errors: list[ErrorDetail] | None = Field(
        None, description="Rejected fields (validation failures)"
    )
    trace_id: str | None = Field(None, description="Request trace id")
