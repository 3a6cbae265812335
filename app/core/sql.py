"""
Helpers that build parameterized SQL fragments.

Both builders return text with positional ``$n`` placeholders plus the list
of values to bind, so client input never ends up inside the SQL string.
"""

import math
from dataclasses import dataclass
from typing import Any, ClassVar, List, Mapping, NamedTuple, Optional, Union

from app.core.exceptions import ValidationError


class SetClause(NamedTuple):
    set_clause: str
    values: List[Any]


class WhereClause(NamedTuple):
    where_clause: str
    params: List[Any]


def build_set_clause(
    update: Mapping[str, Any],
    field_name_translation: Mapping[str, str],
) -> SetClause:
    """
    Build the column assignments for a partial UPDATE.

    Args:
        update: Fields to change, e.g. {"firstName": "Aliya", "age": 32}
        field_name_translation: Client field name -> column name,
            e.g. {"firstName": "first_name"}. Untranslated keys are used as-is.

    Returns:
        SetClause('"first_name"=$1, "age"=$2', ["Aliya", 32])

    The clause has no SET prefix. The caller binds its row identifier
    at position len(values) + 1.

    Raises:
        ValidationError: If update is empty
    """
    if not update:
        raise ValidationError("No data supplied")

    fragments = []
    values = []
    for position, (key, value) in enumerate(update.items(), start=1):
        column = field_name_translation.get(key, key)
        fragments.append(f'"{column}"=${position}')
        values.append(value)

    return SetClause(", ".join(fragments), values)


@dataclass(frozen=True)
class CompanyFilter:
    """Optional search criteria for companies, one slot per filter."""

    name: Optional[str] = None
    min_employees: Any = None
    max_employees: Any = None

    # Client-facing key for each slot
    KEYS: ClassVar[Mapping[str, str]] = {
        "name": "name",
        "minEmployees": "min_employees",
        "maxEmployees": "max_employees",
    }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CompanyFilter":
        """Pick the recognized keys out of a mapping; others are ignored."""
        return cls(**{attr: data[key] for key, attr in cls.KEYS.items() if key in data})

    def is_empty(self) -> bool:
        return self.name is None and self.min_employees is None and self.max_employees is None


def _coerce_number(value: Any, field: str) -> Union[int, float]:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")
    return int(number) if number.is_integer() else number


def build_filter_clause(filters: Union[CompanyFilter, Mapping[str, Any]]) -> WhereClause:
    """
    Build the WHERE predicate for a company search.

    Fragments are emitted in a fixed order (name, minEmployees, maxEmployees)
    so parameter positions do not depend on how the caller built its input.

        {"name": "c1", "maxEmployees": "100"}
        -> WhereClause("name ILIKE $1 AND num_employees <= $2", ["%c1%", 100])

    Raises:
        ValidationError: If no recognized filter is present, or an
            employee bound is not a number
    """
    if not isinstance(filters, CompanyFilter):
        filters = CompanyFilter.from_mapping(filters)

    if filters.is_empty():
        raise ValidationError("No recognized filter key: use name, minEmployees or maxEmployees")

    min_employees = None
    max_employees = None
    if filters.min_employees is not None:
        min_employees = _coerce_number(filters.min_employees, "minEmployees")
    if filters.max_employees is not None:
        max_employees = _coerce_number(filters.max_employees, "maxEmployees")

    fragments = []
    params = []
    if filters.name is not None:
        params.append(f"%{filters.name}%")
        fragments.append(f"name ILIKE ${len(params)}")
    if min_employees is not None:
        params.append(min_employees)
        fragments.append(f"num_employees >= ${len(params)}")
    if max_employees is not None:
        params.append(max_employees)
        fragments.append(f"num_employees <= ${len(params)}")

    return WhereClause(" AND ".join(fragments), params)
