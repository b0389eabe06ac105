from datetime import timedelta

import pytest
from django.utils import timezone

from apps.catalog.config import ReconciliationConfig


@pytest.fixture
def now():
    return timezone.now()


@pytest.fixture
def yesterday(now):
    return now - timedelta(days=1)


@pytest.fixture
def tomorrow(now):
    return now + timedelta(days=1)


@pytest.fixture
def config():
    return ReconciliationConfig(image_pattern='/images/${size}/${product_id}.jpg')
