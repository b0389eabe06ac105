from datetime import timedelta

import pytest

from apps.catalog.models import CategoryMembership, Product, ProductAssociation
from apps.catalog.services import DiscontinuationService
from apps.catalog.services.discontinuation import get_variant_virtual_id
from apps.catalog.tests import factories

pytestmark = pytest.mark.django_db


@pytest.fixture
def service(config):
    return DiscontinuationService(config)


@pytest.fixture
def orphaned_family(yesterday):
    """A virtual whose only variant has been discontinued."""
    association = factories.VariantAssociationFactory.create(
        product_to__sales_discontinuation_date=yesterday,
    )
    return association


@pytest.fixture
def mixed_family(yesterday):
    """A virtual with one discontinued and one live variant."""
    discontinued = factories.VariantAssociationFactory.create(
        product_to__sales_discontinuation_date=yesterday,
    )
    live = factories.VariantAssociationFactory.create(product=discontinued.product)
    return discontinued, live


def test_get_variant_virtual_id(orphaned_family, now):
    assert get_variant_virtual_id(orphaned_family.product_to, now) == orphaned_family.product_id
    assert get_variant_virtual_id(factories.VariantProductFactory.create(), now) is None


def test_expire_discontinued_variant_associations(service, orphaned_family, mixed_family, now):
    discontinued, live = mixed_family

    assert service.expire_discontinued_variant_associations(now) == 2

    orphaned_family.refresh_from_db()
    discontinued.refresh_from_db()
    live.refresh_from_db()
    assert orphaned_family.thru_date == now
    assert discontinued.thru_date == now
    assert live.thru_date is None


def test_future_discontinuation_is_ignored(service, tomorrow, now):
    association = factories.VariantAssociationFactory.create(
        product_to__sales_discontinuation_date=tomorrow,
    )

    assert service.expire_discontinued_variant_associations(now) == 0
    association.refresh_from_db()
    assert association.thru_date is None


def test_disc_virtuals_with_disc_variants(service, orphaned_family, mixed_family, now):
    discontinued, live = mixed_family

    assert service.disc_virtuals_with_disc_variants(now) == (2, 1)

    orphan = Product.objects.get(pk=orphaned_family.product_id)
    still_live = Product.objects.get(pk=live.product_id)
    assert orphan.sales_discontinuation_date == now
    assert still_live.sales_discontinuation_date is None


def test_virtual_without_any_variant_is_discontinued(service, now):
    virtual = factories.VirtualProductFactory.create()

    assert service.discontinue_orphaned_virtuals(now) == 1
    virtual.refresh_from_db()
    assert virtual.is_discontinued(now)


def test_virtual_with_later_discontinuation_date_is_brought_forward(service, tomorrow, now):
    virtual = factories.VirtualProductFactory.create(sales_discontinuation_date=tomorrow)

    assert service.discontinue_orphaned_virtuals(now) == 1
    virtual.refresh_from_db()
    assert virtual.sales_discontinuation_date == now


def test_cascade_is_idempotent(service, orphaned_family, mixed_family, now):
    service.disc_virtuals_with_disc_variants(now)
    service.remove_category_memberships_of_discontinued(now)
    service.remove_duplicate_open_memberships(now)

    associations = list(ProductAssociation.objects.values_list('pk', 'thru_date'))
    products = list(Product.objects.values_list('pk', 'sales_discontinuation_date'))

    # same clock value and a later one
    for moment in (now, now + timedelta(hours=1)):
        assert service.disc_virtuals_with_disc_variants(moment) == (0, 0)
        assert service.remove_category_memberships_of_discontinued(moment) == 0
        assert service.remove_duplicate_open_memberships(moment) == 0

    assert list(ProductAssociation.objects.values_list('pk', 'thru_date')) == associations
    assert list(Product.objects.values_list('pk', 'sales_discontinuation_date')) == products


def test_remove_category_memberships_of_discontinued(service, yesterday, tomorrow, now):
    gone = factories.ProductFactory.create(sales_discontinuation_date=yesterday)
    pending = factories.ProductFactory.create(sales_discontinuation_date=tomorrow)
    active = factories.ProductFactory.create()
    for product in (gone, pending, active):
        factories.CategoryMembershipFactory.create(product=product)
    factories.CategoryMembershipFactory.create(
        product=gone, thru_date=yesterday, from_date=now - timedelta(days=60)
    )

    assert service.remove_category_memberships_of_discontinued(now) == 1

    assert not CategoryMembership.objects.filter(product=gone).exists()
    assert CategoryMembership.objects.filter(product=pending).count() == 1
    assert CategoryMembership.objects.filter(product=active).count() == 1


def test_cascade_ordering_removes_orphaned_virtual_from_categories(service, orphaned_family, now):
    membership = factories.CategoryMembershipFactory.create(product=orphaned_family.product)

    service.disc_virtuals_with_disc_variants(now)
    service.remove_category_memberships_of_discontinued(now)

    assert not CategoryMembership.objects.filter(pk=membership.pk).exists()


def test_remove_duplicate_open_memberships(service, now):
    product = factories.ProductFactory.create()
    category = factories.CategoryFactory.create()
    first = factories.CategoryMembershipFactory.create(
        product=product, category=category, from_date=now - timedelta(days=10)
    )
    factories.CategoryMembershipFactory.create(
        product=product, category=category, from_date=now - timedelta(days=5)
    )
    factories.CategoryMembershipFactory.create(
        product=product, category=category, from_date=now - timedelta(days=2)
    )
    closed = factories.CategoryMembershipFactory.create(
        product=product, category=category,
        from_date=now - timedelta(days=20), thru_date=now - timedelta(days=15),
    )
    future = factories.CategoryMembershipFactory.create(
        product=product, category=category, from_date=now + timedelta(days=1)
    )
    single = factories.CategoryMembershipFactory.create()

    assert service.remove_duplicate_open_memberships(now) == 1

    remaining = set(CategoryMembership.objects.values_list('pk', flat=True))
    assert remaining == {first.pk, closed.pk, future.pk, single.pk}
    assert CategoryMembership.objects.duplicate_open_pairs(now).count() == 0
