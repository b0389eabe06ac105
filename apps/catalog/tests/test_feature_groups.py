from datetime import timedelta

import pytest
from django.core.exceptions import ImproperlyConfigured

from apps.catalog.config import ReconciliationConfig
from apps.catalog.exceptions import CategoryCycleError, CategoryNotFound
from apps.catalog.models import FeatureGroup, FeatureGroupCategoryLink
from apps.catalog.services import FeatureGroupSyncService, build_feature_group_id
from apps.catalog.tests import factories


def test_build_feature_group_id():
    assert build_feature_group_id('tools', 'color') == 'tools_color'


def test_build_feature_group_id_truncates(caplog):
    group_id = build_feature_group_id('power-tools-and-accessories', 'color')

    assert group_id == 'power-tools-and-acce'
    assert 'truncated' in caplog.text


def test_build_feature_group_id_with_hash_suffix():
    first = build_feature_group_id('power-tools-and-accessories', 'color', hash_suffix=True)
    second = build_feature_group_id('power-tools-and-accessories', 'size', hash_suffix=True)

    assert len(first) == 20
    assert first.startswith('power-tools_')
    assert first != second


def test_build_feature_group_id_with_hash_suffix_respects_short_max_length():
    group_id = build_feature_group_id('abcdefgh', 'color', max_length=8, hash_suffix=True)

    assert len(group_id) == 8
    assert group_id.isalnum()


@pytest.mark.parametrize('max_length', [0, 61])
def test_group_id_max_length_must_fit_the_column(max_length):
    with pytest.raises(ImproperlyConfigured):
        ReconciliationConfig(group_id_max_length=max_length)


@pytest.fixture
def service(config):
    return FeatureGroupSyncService(config)


@pytest.fixture
def catalog():
    """
    tools
    └── hammers

    A hammer in ``hammers`` has a red color and a large size, a toolbox
    directly in ``tools`` is blue.
    """
    tools = factories.CategoryFactory.create(slug='tools')
    hammers = factories.CategoryFactory.create(slug='hammers')
    factories.CategoryRollupFactory.create(parent=tools, child=hammers)

    color = factories.FeatureTypeFactory.create(slug='color')
    size = factories.FeatureTypeFactory.create(slug='size')
    red = factories.FeatureFactory.create(feature_type=color, description='Red')
    blue = factories.FeatureFactory.create(feature_type=color, description='Blue')
    large = factories.FeatureFactory.create(feature_type=size, description='L')

    hammer = factories.ProductFactory.create()
    toolbox = factories.ProductFactory.create()
    factories.CategoryMembershipFactory.create(product=hammer, category=hammers)
    factories.CategoryMembershipFactory.create(product=toolbox, category=tools)
    red_application = factories.FeatureApplicationFactory.create(product=hammer, feature=red)
    size_application = factories.FeatureApplicationFactory.create(product=hammer, feature=large)
    factories.FeatureApplicationFactory.create(product=toolbox, feature=blue)

    return {
        'tools': tools,
        'hammers': hammers,
        'color': color,
        'red': red,
        'blue': blue,
        'large': large,
        'hammer': hammer,
        'red_application': red_application,
        'size_application': size_application,
    }


def group_features(group_id, moment):
    group = FeatureGroup.objects.get(group_id=group_id)
    return set(group.feature_links.valid_at(moment).values_list('feature__description', flat=True))


def group_categories(group_id, moment):
    group = FeatureGroup.objects.get(group_id=group_id)
    return set(group.category_links.valid_at(moment).values_list('category__slug', flat=True))


@pytest.mark.django_db
class TestAttachFeaturesToCategory:

    def test_groups_are_derived_bottom_up(self, service, catalog, now):
        service.attach_features_to_category('tools', now=now)

        assert set(FeatureGroup.objects.values_list('group_id', flat=True)) == {
            'hammers_color', 'hammers_size', 'tools_color',
        }
        assert group_features('hammers_color', now) == {'Red'}
        assert group_features('hammers_size', now) == {'L'}
        assert group_features('tools_color', now) == {'Blue'}

        # sub-category groups are propagated to the parent
        assert group_categories('hammers_color', now) == {'hammers', 'tools'}
        assert group_categories('hammers_size', now) == {'hammers', 'tools'}
        assert group_categories('tools_color', now) == {'tools'}

        group = FeatureGroup.objects.get(group_id='hammers_color')
        assert group.feature_type == catalog['color']
        assert group.source_category == catalog['hammers']
        assert group.description == 'Feature Group for type [color] features in category [hammers]'

    def test_accepts_category_instance(self, service, catalog, now):
        service.attach_features_to_category(catalog['hammers'], now=now)

        assert set(FeatureGroup.objects.values_list('group_id', flat=True)) == {
            'hammers_color', 'hammers_size',
        }

    def test_full_reconciliation(self, service, catalog, now):
        service.attach_features_to_category('tools', now=now)

        later = now + timedelta(hours=1)
        application = catalog['red_application']
        application.thru_date = now
        application.save()
        catalog['size_application'].expire(now)
        green = factories.FeatureFactory.create(feature_type=catalog['color'], description='Green')
        factories.FeatureApplicationFactory.create(
            product=catalog['hammer'], feature=green, from_date=now + timedelta(minutes=30)
        )

        service.attach_features_to_category('tools', now=later)

        assert group_features('hammers_color', later) == {'Green'}
        # no size features left, the group is kept but unlinked
        assert FeatureGroup.objects.filter(group_id='hammers_size').exists()
        assert group_features('hammers_size', later) == set()
        assert group_categories('hammers_size', later) == set()
        assert group_categories('hammers_color', later) == {'hammers', 'tools'}

    def test_existing_group_without_derivation_is_unlinked_when_stale(self, service, catalog, now):
        FeatureGroup.objects.create(group_id='hammers_size')

        service.attach_features_to_category('tools', now=now)

        group = FeatureGroup.objects.get(group_id='hammers_size')
        assert group.source_category == catalog['hammers']
        assert group.feature_type.slug == 'size'
        assert group_features('hammers_size', now) == {'L'}

        later = now + timedelta(hours=1)
        catalog['size_application'].expire(now)
        service.attach_features_to_category('tools', now=later)

        assert group_features('hammers_size', later) == set()
        assert group_categories('hammers_size', later) == set()

    def test_rerun_is_stable(self, service, catalog, now):
        service.attach_features_to_category('tools', now=now)
        links = FeatureGroupCategoryLink.objects.count()

        service.attach_features_to_category('tools', now=now + timedelta(hours=1))

        assert FeatureGroupCategoryLink.objects.count() == links
        assert group_features('hammers_color', now) == {'Red'}

    def test_removed_category_link_is_restored(self, service, catalog, now):
        service.attach_features_to_category('hammers', now=now)
        FeatureGroupCategoryLink.objects.filter(category=catalog['hammers']).delete()

        service.attach_features_to_category('hammers', now=now + timedelta(hours=1))

        assert group_categories('hammers_color', now + timedelta(hours=1)) == {'hammers'}

    def test_without_subcategories(self, service, catalog, now):
        service.attach_features_to_category('tools', do_subcategories=False, now=now)

        assert list(FeatureGroup.objects.values_list('group_id', flat=True)) == ['tools_color']

    def test_feature_type_filters(self, service, catalog, now):
        service.attach_features_to_category('tools', exclude_types=['size'], now=now)
        assert not FeatureGroup.objects.filter(group_id='hammers_size').exists()

    def test_include_types_from_config(self, catalog, now):
        service = FeatureGroupSyncService(ReconciliationConfig(feature_type_include=frozenset(['size'])))

        service.attach_features_to_category('tools', now=now)

        assert list(FeatureGroup.objects.values_list('group_id', flat=True)) == ['hammers_size']

    def test_expired_rollup_is_not_followed(self, service, catalog, now):
        hidden = factories.CategoryFactory.create(slug='hidden')
        factories.CategoryRollupFactory.create(
            parent=catalog['tools'], child=hidden, thru_date=now - timedelta(days=1)
        )
        factories.CategoryMembershipFactory.create(category=hidden, product=catalog['hammer'])

        service.attach_features_to_category('tools', now=now)

        assert not FeatureGroup.objects.filter(source_category=hidden).exists()

    def test_shared_subcategory_is_linked_to_every_parent(self, service, catalog, now):
        garden = factories.CategoryFactory.create(slug='garden')
        root = factories.CategoryFactory.create(slug='root')
        factories.CategoryRollupFactory.create(parent=garden, child=catalog['hammers'])
        factories.CategoryRollupFactory.create(parent=root, child=catalog['tools'])
        factories.CategoryRollupFactory.create(parent=root, child=garden)

        service.attach_features_to_category('root', now=now)

        assert group_categories('hammers_color', now) == {'hammers', 'tools', 'garden', 'root'}
        assert FeatureGroup.objects.filter(source_category=catalog['hammers']).count() == 2

    def test_cycle_is_reported(self, service, now):
        first = factories.CategoryFactory.create(slug='first')
        second = factories.CategoryFactory.create(slug='second')
        factories.CategoryRollupFactory.create(parent=first, child=second)
        factories.CategoryRollupFactory.create(parent=second, child=first)

        with pytest.raises(CategoryCycleError) as excinfo:
            service.attach_features_to_category('first', now=now)

        assert excinfo.value.path == ['first', 'second', 'first']

    def test_unknown_category(self, service):
        with pytest.raises(CategoryNotFound):
            service.attach_features_to_category('nope')
