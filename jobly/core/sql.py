"""
SQL fragment builders shared by the CRUD modules.
"""

from typing import Any, Dict, Mapping, Optional, Tuple

from jobly.core.exceptions import BadRequestError


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
) -> Tuple[str, Dict[str, Any]]:
    """
    Build the SET clause of a partial UPDATE.

    Args:
        data_to_update: Fields to change, keyed by their JSON names,
            e.g. {"firstName": "Aliya", "age": 32}
        js_to_sql: JSON name -> column name for names that differ,
            e.g. {"firstName": "first_name"}

    Returns:
        (set_cols, values), e.g.
        ('"first_name"=:p1, "age"=:p2', {"p1": "Aliya", "p2": 32})

    Raises:
        BadRequestError: If there is nothing to update
    """
    keys = list(data_to_update)
    if not keys:
        raise BadRequestError("No data")

    cols = []
    values = {}
    for idx, key in enumerate(keys, start=1):
        cols.append(f'"{js_to_sql.get(key, key)}"=:p{idx}')
        values[f"p{idx}"] = data_to_update[key]

    return ", ".join(cols), values


def parse_int_filter(filters: Mapping[str, Any], key: str) -> Optional[int]:
    """
    Read an integer filter value (query strings arrive as text).

    Raises:
        BadRequestError: If the value is present but not an integer
    """
    value = filters.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BadRequestError(f"{key} must be an integer")


def check_filter_keys(filters: Mapping[str, Any], allowed) -> None:
    """Reject filter names a query does not know about."""
    unknown = sorted(set(filters) - set(allowed))
    if unknown:
        raise BadRequestError(f"Invalid filter: {', '.join(unknown)}")
