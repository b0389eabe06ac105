from datetime import timedelta

import pytest
from django.urls import reverse

from apps.catalog.tests import factories

pytestmark = pytest.mark.django_db


def test_api_requires_login(client):
    response = client.get(reverse('feature-group-list'))

    assert response.status_code == 403


def test_feature_group_detail_shows_current_links(admin_client, now):
    link = factories.FeatureGroupFeatureLinkFactory.create(feature_group__group_id='tools_color')
    factories.FeatureGroupFeatureLinkFactory.create(
        feature_group=link.feature_group, thru_date=now - timedelta(days=1)
    )
    factories.FeatureGroupCategoryLinkFactory.create(
        feature_group=link.feature_group, category__slug='tools'
    )

    response = admin_client.get(reverse('feature-group-detail', args=['tools_color']))

    assert response.status_code == 200
    data = response.json()
    assert [f['feature']['id'] for f in data['features']] == [link.feature_id]
    assert [c['category_slug'] for c in data['categories']] == ['tools']


def test_feature_group_filter_by_category(admin_client):
    linked = factories.FeatureGroupCategoryLinkFactory.create(category__slug='tools')
    factories.FeatureGroupCategoryLinkFactory.create(category__slug='garden')

    response = admin_client.get(reverse('feature-group-list'), {'category': 'tools'})

    assert response.status_code == 200
    results = response.json()['results']
    assert [g['group_id'] for g in results] == [linked.feature_group.group_id]


def test_product_filter_discontinued(admin_client, yesterday):
    gone = factories.ProductFactory.create(sales_discontinuation_date=yesterday)
    factories.ProductFactory.create()

    response = admin_client.get(reverse('product-list'), {'discontinued': 'true'})

    assert [p['slug'] for p in response.json()['results']] == [gone.slug]
