"""
Catalog models for batch reconciliation of derived catalog structures.

Model Hierarchy:
- Product: virtual products and their variants, plus related records
  (contents, prices, identifications, attributes, keywords)
- ProductAssociation: time-scoped links between products (PRODUCT_VARIANT, ...)
- Category / CategoryRollup / CategoryMembership: category tree and members
- FeatureType / Feature / FeatureApplication: features applied to products
- FeatureGroup and its category and feature links: per-category facets
"""

from .base import TimeScopedModel, TimeScopedQuerySet, current_window
from .product import (
    Product,
    ProductContent,
    ProductPrice,
    GoodIdentification,
    ProductAttribute,
    ProductKeyword,
)
from .association import ProductAssociation
from .category import Category, CategoryRollup, CategoryMembership
from .feature import FeatureType, Feature, FeatureApplication
from .feature_group import FeatureGroup, FeatureGroupCategoryLink, FeatureGroupFeatureLink

__all__ = [
    'TimeScopedModel',
    'TimeScopedQuerySet',
    'current_window',
    'Product',
    'ProductContent',
    'ProductPrice',
    'GoodIdentification',
    'ProductAttribute',
    'ProductKeyword',
    'ProductAssociation',
    'Category',
    'CategoryRollup',
    'CategoryMembership',
    'FeatureType',
    'Feature',
    'FeatureApplication',
    'FeatureGroup',
    'FeatureGroupCategoryLink',
    'FeatureGroupFeatureLink',
]
