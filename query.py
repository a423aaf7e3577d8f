"""
Translate list endpoint query parameters into a store query.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field
from pymongo import ASCENDING, DESCENDING


class QuerySpec(BaseModel):
    """
    Filter, sort and projection for one `Store.find` call.

    projection is None when every field should be returned; the identifier
    is always included by the store.
    """
    filter: Dict[str, str] = Field(default_factory=dict)
    sort: List[Tuple[str, int]] = Field(default_factory=list)
    projection: Optional[List[str]] = None


def parse_fields(raw: Optional[str]) -> Optional[List[str]]:
    if not raw:
        return None
    fields = [f.strip() for f in raw.split(",")]
    fields = [f for f in fields if f]
    return fields or None


def build_query(
    params: Mapping[str, str],
    filterable: Iterable[str],
    default_sort: Tuple[str, int],
) -> QuerySpec:
    """
    Build a QuerySpec from request parameters.

    Only names in `filterable` become equality filters; anything else is
    ignored. Sort and projection names are passed through unchecked.
    """
    query_filter = {name: params[name] for name in filterable if params.get(name)}

    sort_by = params.get("sortBy")
    if sort_by:
        direction = DESCENDING if params.get("sortOrder") == "desc" else ASCENDING
        sort = [(sort_by, direction)]
    else:
        sort = [default_sort]

    return QuerySpec(filter=query_filter, sort=sort, projection=parse_fields(params.get("fields")))
