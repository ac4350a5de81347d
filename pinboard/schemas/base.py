"""Base schemas for common patterns."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pinboard.utils.pagination import has_more

T = TypeVar("T")


class BaseSchema(BaseModel):
    """Base schema with common configuration.

    Fields are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode
        str_strip_whitespace=True,  # Strip whitespace from strings
        validate_assignment=True,  # Validate on attribute assignment
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PaginationParams(BaseModel):
    """Parameters for paginated requests."""

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
    limit: int = Field(default=20, ge=1, le=100, description="Items per page")


class PaginatedResponse(BaseSchema, Generic[T]):
    """Generic paginated response wrapper."""

    items: list[T]
    total: int = Field(description="Total number of items")
    page: int = Field(description="Current page number")
    page_size: int = Field(description="Items per page")
    has_more: bool = Field(description="Whether a further page exists")

    @classmethod
    def create(
        cls,
        items: list[T],
        total: int,
        page: int,
        page_size: int,
    ) -> "PaginatedResponse[T]":
        """Create a paginated response.

        Args:
            items: List of items for current page.
            total: Total number of items.
            page: Requested page number.
            page_size: Requested items per page.

        Returns:
            PaginatedResponse instance.
        """
        return cls(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            has_more=has_more(page, page_size, total),
        )


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope wrapping every payload."""

    success: bool = True
    data: T | None = None
    message: str | None = None


def ok(data: T | None = None, message: str | None = None) -> ApiResponse[T]:
    """Wrap a payload in the success envelope."""
    return ApiResponse(data=data, message=message)
