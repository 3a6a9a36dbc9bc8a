"""Pydantic schemas for paging configuration and list responses."""

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


class PaginationConfig(BaseModel):
    """Options recognised by a pagination controller."""

    items_per_page: int = Field(25, ge=1)
    items_per_page_options: list[int] = Field(default_factory=lambda: [10, 25, 50, 100])
    initial_page: int = Field(1, ge=1)
    enabled: bool = True

    @field_validator("items_per_page_options")
    @classmethod
    def _check_options(cls, options: list[int]) -> list[int]:
        if not options:
            raise ValueError("items_per_page_options must not be empty")
        if any(size < 1 for size in options):
            raise ValueError("page sizes must be positive")
        if any(a >= b for a, b in zip(options, options[1:])):
            raise ValueError("items_per_page_options must be strictly increasing")
        return options

    @model_validator(mode="after")
    def _check_default_size(self) -> "PaginationConfig":
        if self.items_per_page not in self.items_per_page_options:
            raise ValueError(
                f"items_per_page {self.items_per_page} is not one of {self.items_per_page_options}"
            )
        return self


class ListPageResponse(BaseModel):
    """Schema for one page of a paged collection."""

    items: list[dict[str, Any]]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
    start_index: int
    end_index: int
    page_window: list[int | str]
