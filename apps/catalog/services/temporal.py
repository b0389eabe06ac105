"""
In-memory validity filtering for time-scoped records.

The ORM equivalent is ``TimeScopedQuerySet.valid_at``; this version works on
records that are already loaded (lists of model instances or any objects with
``from_date`` / ``thru_date`` attributes).
"""

from typing import Iterable, List, Optional, TypeVar
from datetime import datetime

from django.utils import timezone

T = TypeVar('T')


def is_valid_at(record, moment: datetime, from_field='from_date', thru_field='thru_date') -> bool:
    """
    A record is valid when it has started (or has no start) and has not ended.
    Both bounds are inclusive.
    """
    from_date = getattr(record, from_field, None)
    if from_date is not None and from_date > moment:
        return False
    thru_date = getattr(record, thru_field, None)
    return thru_date is None or thru_date >= moment


def filter_by_date(
    records: Iterable[T],
    moment: Optional[datetime] = None,
    from_field: str = 'from_date',
    thru_field: str = 'thru_date',
) -> List[T]:
    """Return the records valid at ``moment`` (default: now), keeping input order."""
    if moment is None:
        moment = timezone.now()
    return [
        record for record in records
        if is_valid_at(record, moment, from_field, thru_field)
    ]
