"""Pagination settings for keyset-paginated listings.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_PAGE_SIZE=50, PAGINATION_MAX_PAGE_SIZE=250
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_page_size: Page size used when the caller does not send one.
        max_page_size: Largest page a caller may request.
    """

    default_page_size: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Default page size when page_size is not specified",
    )
    max_page_size: int = Field(
        default=250,
        ge=1,
        le=10000,
        description="Maximum allowed page size (hard limit)",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _default_within_max(self) -> PaginationSettings:
        if self.default_page_size > self.max_page_size:
            msg = "default_page_size cannot exceed max_page_size"
            raise ValueError(msg)
        return self
