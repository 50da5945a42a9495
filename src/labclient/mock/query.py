"""Pipeline query engine: conjunctive predicates plus a stable sort.

The engine runs over a collection the caller is already allowed to see, so
no query shape can surface pipelines outside the permission-filtered view.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

from ..errors import UnsupportedError
from ..models import PipelineOrderBy, PipelineQuery, PipelineSort, PipelineStatus
from ..utils.sha import parse_sha1
from ..utils.time import assume_utc
from .entities import Pipeline

Predicate = Callable[[Pipeline], bool]

DEFAULT_ORDER_BY = PipelineOrderBy.UPDATED_AT
DEFAULT_SORT = PipelineSort.DESC

_STATUS_RANK: Dict[PipelineStatus, int] = {status: rank for rank, status in enumerate(PipelineStatus)}

SORT_KEYS: Dict[PipelineOrderBy, Callable[[Pipeline], Any]] = {
    PipelineOrderBy.ID: lambda p: p.id,
    PipelineOrderBy.STATUS: lambda p: _STATUS_RANK[p.status],
    PipelineOrderBy.REF: lambda p: p.ref,
    PipelineOrderBy.USER_ID: lambda p: p.user.id,
    PipelineOrderBy.UPDATED_AT: lambda p: p.updated_at,
}


def build_predicates(query: PipelineQuery) -> List[Predicate]:
    """
    Translate a query into predicates; absent fields add no constraint.

    Naive updated_after / updated_before bounds are read as UTC.

    Raises:
        UnsupportedError: If the query filters by scope
        ValueError: If sha is not a valid SHA-1
    """
    predicates: List[Predicate] = []

    if query.sha is not None:
        sha = parse_sha1(query.sha)
        predicates.append(lambda p: p.sha == sha)

    if query.name is not None:
        name = query.name
        predicates.append(lambda p: p.user.name == name)

    if query.ref is not None:
        ref = query.ref
        predicates.append(lambda p: p.ref == ref)

    if query.scope is not None:
        raise UnsupportedError(f"Filtering pipelines by scope ({query.scope.value}) is not supported")

    if query.status is not None:
        status = query.status
        predicates.append(lambda p: p.status == status)

    if query.username is not None:
        username = query.username
        predicates.append(lambda p: p.user.username == username)

    if query.yaml_errors is not None:
        wanted = query.yaml_errors
        predicates.append(lambda p: p.has_yaml_errors == wanted)

    if query.updated_after is not None:
        after = assume_utc(query.updated_after)
        predicates.append(lambda p: p.updated_at >= after)

    if query.updated_before is not None:
        before = assume_utc(query.updated_before)
        predicates.append(lambda p: p.updated_at <= before)

    return predicates


def sort_pipelines(
    pipelines: Iterable[Pipeline],
    order_by: Optional[PipelineOrderBy] = None,
    sort: Optional[PipelineSort] = None,
) -> List[Pipeline]:
    """
    Stable sort by order_by (default updated_at), sort (default desc).

    Equal keys keep their input order in both directions.
    """
    key = SORT_KEYS.get(order_by or DEFAULT_ORDER_BY)
    if key is None:
        raise UnsupportedError(f"Ordering pipelines by {order_by} is not supported")
    descending = (sort or DEFAULT_SORT) == PipelineSort.DESC
    return sorted(pipelines, key=key, reverse=descending)


def search(pipelines: Iterable[Pipeline], query: PipelineQuery) -> List[Pipeline]:
    """Filter then sort, in a single pass over the visible collection."""
    predicates = build_predicates(query)
    matches = [p for p in pipelines if all(pred(p) for pred in predicates)]
    return sort_pipelines(matches, query.order_by, query.sort)
