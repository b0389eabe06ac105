from rest_framework import viewsets, filters
from django_filters.rest_framework import DjangoFilterBackend

from apps.catalog.models import FeatureGroup, Product
from .serializers import (
    FeatureGroupListSerializer,
    FeatureGroupDetailSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
)
from .filters import FeatureGroupFilter, ProductFilter


class FeatureGroupViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for derived feature groups.

    list: List feature groups, filterable by feature type and category
    retrieve: Get a group with its currently valid feature and category links
    """
    queryset = FeatureGroup.objects.select_related('feature_type', 'source_category')
    lookup_field = 'group_id'
    filterset_class = FeatureGroupFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['group_id', 'description']
    ordering_fields = ['group_id', 'created_at']
    ordering = ['group_id']

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return FeatureGroupDetailSerializer
        return FeatureGroupListSerializer


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for products.

    list: List products, filterable by type, category and discontinuation
    retrieve: Get a product with its current categories and variant links
    """
    queryset = Product.objects.all()
    lookup_field = 'slug'
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['internal_name', 'name', 'description']
    ordering_fields = ['internal_name', 'updated_at']
    ordering = ['internal_name']

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return ProductDetailSerializer
        return ProductListSerializer
