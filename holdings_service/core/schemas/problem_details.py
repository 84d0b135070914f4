"""RFC 7807 Problem Details schema for error responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See: https://datatracker.ietf.org/doc/html/rfc7807

    Extension members from ``AppException.extra`` are carried as extra
    fields next to the standard ones.

    Example:
        return JSONResponse(
            status_code=400,
            content=ProblemDetails(
                type="invalid-cursor",
                title="Invalid Argument",
                status=400,
                detail="Cursor does not match this listing",
                instance="/api/v1/tokens",
            ).model_dump(exclude_none=True),
        )
    """

    type: str = Field(
        default="about:blank",
        min_length=1,
        max_length=200,
        description="URI reference identifying the problem type",
    )
    title: str = Field(
        min_length=1, max_length=200, description="Short, human-readable summary of the problem"
    )
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(
        default=None,
        max_length=2000,
        description="Human-readable explanation specific to this occurrence",
    )
    instance: str | None = Field(
        default=None,
        max_length=500,
        description="URI reference identifying the specific occurrence",
    )

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "type": "invalid-page-size",
                "title": "Invalid Argument",
                "status": 400,
                "detail": "page_size cannot exceed 250",
                "instance": "/api/v1/tokens",
                "page_size": 1000,
                "max_page_size": 250,
            }
        },
    )

    @classmethod
    def from_parts(
        cls,
        *,
        status: int,
        title: str,
        type: str,  # noqa: A002
        detail: str | None,
        instance: str | None,
        extra: dict[str, Any] | None = None,
    ) -> ProblemDetails:
        """Build problem details, folding extension members in."""
        return cls(
            type=type,
            title=title,
            status=status,
            detail=detail,
            instance=instance,
            **(extra or {}),
        )


__all__ = ["ProblemDetails"]
