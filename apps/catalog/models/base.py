from django.db import models
from django.db.models import Q
from django.utils import timezone


def current_window(moment, prefix=''):
    """
    Q object matching rows whose from/thru window contains ``moment``.

    Both bounds are inclusive and an empty ``thru_date`` means open-ended.
    ``prefix`` allows the same condition across a relation, e.g.
    ``current_window(now, 'memberships__')``.
    """
    return (
        Q(**{f'{prefix}from_date__lte': moment})
        & (Q(**{f'{prefix}thru_date__isnull': True}) | Q(**{f'{prefix}thru_date__gte': moment}))
    )


class TimeScopedQuerySet(models.QuerySet):
    """QuerySet for records that carry a from/thru validity window."""

    def valid_at(self, moment=None):
        if moment is None:
            moment = timezone.now()
        return self.filter(current_window(moment))

    def continuing_at(self, moment=None):
        """
        Rows valid at ``moment`` that do not end exactly at ``moment``.

        A record expired by a pass with ``thru_date = now`` is still valid at
        ``now`` (the bound is inclusive); later steps of the same pass use
        this to treat it as ended.
        """
        if moment is None:
            moment = timezone.now()
        return self.valid_at(moment).exclude(thru_date=moment)

    def open_ended(self, moment=None):
        """Rows that started strictly before ``moment`` and have no end date."""
        if moment is None:
            moment = timezone.now()
        return self.filter(from_date__lt=moment, thru_date__isnull=True)


class TimeScopedModel(models.Model):
    """
    Abstract base for time-scoped records.

    A record is valid at an instant when ``from_date <= instant`` and
    ``thru_date`` is empty or ``>= instant``.
    """
    from_date = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        verbose_name='Válido desde'
    )
    thru_date = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        verbose_name='Válido até'
    )

    objects = TimeScopedQuerySet.as_manager()

    class Meta:
        abstract = True

    def is_valid_at(self, moment=None):
        if moment is None:
            moment = timezone.now()
        if self.from_date is not None and self.from_date > moment:
            return False
        return self.thru_date is None or self.thru_date >= moment

    def expire(self, moment=None):
        """Soft-expire the record by closing its window at ``moment``."""
        self.thru_date = moment or timezone.now()
        self.save(update_fields=['thru_date'])
