"""Shared response schemas."""

from holdings_service.core.schemas.problem_details import ProblemDetails

__all__ = ["ProblemDetails"]
