"""Query-language-neutral descriptions of filters, ordering and results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from listpager.exceptions import ListPagerError

T = TypeVar("T")


class FilterOperator(str, Enum):
    """Comparison operators a query store must support."""

    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    MATCHES = "matches"
    MATCHES_IGNORE_CASE = "matches-ignore-case"
    IN_SET = "in-set"

    @classmethod
    def parse(cls, token: str) -> "FilterOperator":
        """Resolve an operator name, accepting the PostgREST spellings too."""
        token = token.strip().lower()
        if token in OPERATOR_ALIASES:
            return OPERATOR_ALIASES[token]
        return cls(token)


OPERATOR_ALIASES = {
    "like": FilterOperator.MATCHES,
    "ilike": FilterOperator.MATCHES_IGNORE_CASE,
    "in": FilterOperator.IN_SET,
}


class FilterSpec(BaseModel):
    """A single column constraint. Multiple filters are AND-combined."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(..., min_length=1, description="Column to constrain")
    operator: FilterOperator
    value: Any = None

    @field_validator("value")
    @classmethod
    def _freeze_members(cls, value: Any, info: ValidationInfo) -> Any:
        # in-set members are read again on every fetch.
        if info.data.get("operator") is FilterOperator.IN_SET and not isinstance(value, (str, bytes)):
            if hasattr(value, "__iter__"):
                return tuple(value)
        return value


class OrderSpec(BaseModel):
    """Sort order of a list query."""

    model_config = ConfigDict(frozen=True)

    field: str = Field("created_at", min_length=1)
    ascending: bool = False


@dataclass
class QueryResult(Generic[T]):
    """Rows of one page plus the exact size of the whole filtered set."""

    rows: list[T]
    exact_total_count: int


@dataclass
class FetchResult(Generic[T]):
    """Typed outcome of a fetch: exactly one of ``result`` and ``error`` is set."""

    result: QueryResult[T] | None = None
    error: ListPagerError | None = None
    elapsed_ms: float = field(default=0.0, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None
