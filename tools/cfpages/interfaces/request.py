# cfpages/interfaces/request.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

MAX_RESULTS_PER_PAGE = 100

# keyword names ListRequest.from_kwargs consumes itself
RESERVED_CRITERIA = frozenset({"results_per_page", "order_direction", "order_by"})

class FilterOperator(Enum):
    EQUAL = ":"
    IN = " IN "
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="

class OrderDirection(Enum):
    ASC = "asc"
    DESC = "desc"

@dataclass(frozen=True)
class Filter:
    """A single ``q`` constraint on a v2 list endpoint."""
    name: str
    values: Tuple[str, ...]
    operator: FilterOperator = FilterOperator.IN

    def __post_init__(self):
        if not self.name:
            raise ValueError("Filter name must not be empty")
        if not self.values:
            raise ValueError(f"Filter '{self.name}' needs at least one value")
        if self.operator is not FilterOperator.IN and len(self.values) != 1:
            raise ValueError(
                f"Filter '{self.name}' with operator '{self.operator.value.strip()}' takes exactly one value"
            )

    @classmethod
    def of(cls, name: str, value: Any, operator: FilterOperator = FilterOperator.IN) -> "Filter":
        if isinstance(value, (list, tuple, set, frozenset)):
            values = tuple(_format_value(v) for v in value)
        else:
            values = (_format_value(value),)
        return cls(name=name, values=values, operator=operator)

    def to_query(self) -> str:
        return f"{self.name}{self.operator.value}{','.join(self.values)}"

@dataclass(frozen=True)
class ListRequest:
    """
    Fixed criteria for one list operation.

    The same request renders identical query parameters for every page;
    only ``page`` varies.
    """
    filters: Tuple[Filter, ...] = ()
    results_per_page: Optional[int] = None
    order_direction: Optional[OrderDirection] = None
    order_by: Optional[str] = None
    extra: Tuple[Tuple[str, str], ...] = field(default=())

    def __post_init__(self):
        if self.results_per_page is not None and (
            isinstance(self.results_per_page, bool) or not isinstance(self.results_per_page, int)
        ):
            raise ValueError(f"results_per_page must be an integer, got {self.results_per_page!r}")
        if self.order_direction is not None and not isinstance(self.order_direction, OrderDirection):
            raise ValueError(f"order_direction must be an OrderDirection, got {self.order_direction!r}")
        if self.results_per_page is not None and not 1 <= self.results_per_page <= MAX_RESULTS_PER_PAGE:
            raise ValueError(
                f"results_per_page must be between 1 and {MAX_RESULTS_PER_PAGE}, got {self.results_per_page}"
            )

    @classmethod
    def from_kwargs(cls, results_per_page: Optional[int] = None, order_direction: Optional[OrderDirection] = None,
                    order_by: Optional[str] = None, **criteria: Any) -> "ListRequest":
        """
        Build IN filters from keyword criteria.

        A trailing ``_id`` maps to the API's ``_guid`` field, so
        ``space_id="abc"`` becomes ``q=space_guid IN abc``. None values are
        skipped.
        """
        filters = [
            Filter.of(api_field_name(key), value)
            for key, value in criteria.items()
            if value is not None
        ]
        if isinstance(order_direction, str):
            order_direction = OrderDirection(order_direction)
        return cls(
            filters=tuple(filters),
            results_per_page=results_per_page,
            order_direction=order_direction,
            order_by=order_by,
        )

    def with_results_per_page(self, results_per_page: Optional[int]) -> "ListRequest":
        if self.results_per_page is not None or results_per_page is None:
            return self
        return ListRequest(
            filters=self.filters,
            results_per_page=results_per_page,
            order_direction=self.order_direction,
            order_by=self.order_by,
            extra=self.extra,
        )

    @property
    def filter_names(self) -> List[str]:
        return [f.name for f in self.filters]

    def to_params(self, page: int) -> List[Tuple[str, str]]:
        if page < 1:
            raise ValueError(f"page must be 1 or greater, got {page}")
        params: List[Tuple[str, str]] = [("q", f.to_query()) for f in self.filters]
        params.extend(self.extra)
        if self.order_by:
            params.append(("order-by", self.order_by))
        if self.order_direction:
            params.append(("order-direction", self.order_direction.value))
        params.append(("page", str(page)))
        if self.results_per_page is not None:
            params.append(("results-per-page", str(self.results_per_page)))
        return params


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def api_field_name(key: str) -> str:
    """Translate a keyword criterion into the v2 query field name."""
    if key.endswith("_id"):
        return key[:-3] + "_guid"
    return key


def build_filters(pairs: Sequence[str]) -> dict:
    """Parse ``key=value`` strings (values may be comma separated) into criteria."""
    criteria: dict = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key or not value:
            raise ValueError(f"Filter must look like key=value, got '{pair}'")
        key = key.strip()
        if key in RESERVED_CRITERIA:
            raise ValueError(f"'{key}' is a list option, not a filter")
        values = [v for v in value.split(",") if v]
        if not values:
            raise ValueError(f"Filter '{key}' has no values")
        criteria[key] = values if len(values) > 1 else values[0]
    return criteria
