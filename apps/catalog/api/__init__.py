from .serializers import (
    FeatureTypeSerializer,
    FeatureSerializer,
    FeatureGroupListSerializer,
    FeatureGroupDetailSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
)

__all__ = [
    'FeatureTypeSerializer',
    'FeatureSerializer',
    'FeatureGroupListSerializer',
    'FeatureGroupDetailSerializer',
    'ProductListSerializer',
    'ProductDetailSerializer',
]
