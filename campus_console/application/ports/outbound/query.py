"""Collection names and filter predicates shared by read ports."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Collection(str, Enum):
    """Backend collections the console reads and writes.

    Member names are the logical collection names; values are the table
    names on the hosted backend.
    """

    IDENTITIES = "profiles"
    SELLER_APPLICATIONS = "seller_applications"
    SELLER_PROFILES = "seller_profiles"
    ACTIVITY_LOGS = "activity_logs"
    PLATFORM_SETTINGS = "platform_settings"
    PRODUCTS = "products"


class FilterOp(str, Enum):
    """Supported filter operators."""

    EQ = "eq"
    NEQ = "neq"
    GTE = "gte"
    LTE = "lte"
    IN = "in"
    ILIKE = "ilike"
    IS = "is"


@dataclass(frozen=True)
class Filter:
    """A single predicate on a column."""

    column: str
    op: FilterOp
    value: Any

    @classmethod
    def eq(cls, column: str, value: Any) -> "Filter":
        return cls(column, FilterOp.EQ, value)

    @classmethod
    def is_in(cls, column: str, values: list[Any]) -> "Filter":
        return cls(column, FilterOp.IN, list(values))

    @classmethod
    def gte(cls, column: str, value: Any) -> "Filter":
        return cls(column, FilterOp.GTE, value)

    @classmethod
    def ilike(cls, column: str, pattern: str) -> "Filter":
        return cls(column, FilterOp.ILIKE, pattern)


@dataclass(frozen=True)
class Order:
    """Sort order on a column."""

    column: str
    ascending: bool = True
