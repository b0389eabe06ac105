from datetime import timedelta
from types import SimpleNamespace

import pytest

from apps.catalog.models import ProductAssociation
from apps.catalog.services.temporal import filter_by_date, is_valid_at
from apps.catalog.tests import factories


def record(from_date=None, thru_date=None, name=''):
    return SimpleNamespace(from_date=from_date, thru_date=thru_date, name=name)


def test_bounds_are_inclusive(now):
    assert is_valid_at(record(from_date=now), now)
    assert is_valid_at(record(from_date=now - timedelta(days=1), thru_date=now), now)


def test_not_started_or_ended_records_are_invalid(now):
    assert not is_valid_at(record(from_date=now + timedelta(seconds=1)), now)
    assert not is_valid_at(
        record(from_date=now - timedelta(days=2), thru_date=now - timedelta(seconds=1)),
        now,
    )


def test_missing_dates_mean_unbounded(now):
    assert is_valid_at(record(), now)
    assert is_valid_at(SimpleNamespace(), now)


def test_filter_by_date_keeps_order(now):
    records = [
        record(from_date=now - timedelta(days=3), name='a'),
        record(from_date=now + timedelta(days=1), name='future'),
        record(from_date=now - timedelta(days=2), name='b'),
        record(from_date=now - timedelta(days=9), thru_date=now - timedelta(days=5), name='past'),
        record(name='c'),
    ]

    assert [r.name for r in filter_by_date(records, now)] == ['a', 'b', 'c']


def test_filter_by_date_with_custom_fields(now):
    records = [
        SimpleNamespace(starts=now - timedelta(days=1), ends=None),
        SimpleNamespace(starts=now + timedelta(days=1), ends=None),
    ]

    assert filter_by_date(records, now, 'starts', 'ends') == records[:1]


@pytest.mark.django_db
def test_valid_at_matches_in_memory_filter(now):
    current = factories.VariantAssociationFactory.create()
    ends_now = factories.VariantAssociationFactory.create(thru_date=now)
    factories.VariantAssociationFactory.create(thru_date=now - timedelta(days=1))
    factories.VariantAssociationFactory.create(from_date=now + timedelta(days=1))

    valid = set(ProductAssociation.objects.valid_at(now))
    assert valid == {current, ends_now}
    assert valid == set(filter_by_date(ProductAssociation.objects.all(), now))


@pytest.mark.django_db
def test_continuing_at_excludes_records_ending_now(now):
    current = factories.VariantAssociationFactory.create()
    factories.VariantAssociationFactory.create(thru_date=now)

    assert list(ProductAssociation.objects.continuing_at(now)) == [current]


@pytest.mark.django_db
def test_expire_closes_the_window(now):
    association = factories.VariantAssociationFactory.create()

    association.expire(now)
    association.refresh_from_db()

    assert association.thru_date == now
    assert association.is_valid_at(now)
    assert not association.is_valid_at(now + timedelta(seconds=1))
