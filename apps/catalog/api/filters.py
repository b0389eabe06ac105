from django.utils import timezone
from django_filters import rest_framework as filters
from apps.catalog.models import FeatureGroup, Product
from apps.catalog.models.base import current_window


class FeatureGroupFilter(filters.FilterSet):
    """Filter for feature groups by feature type and linked category."""

    feature_type = filters.CharFilter(field_name='feature_type__slug')
    source_category = filters.CharFilter(field_name='source_category__slug')
    category = filters.CharFilter(method='filter_by_category')

    class Meta:
        model = FeatureGroup
        fields = ['feature_type', 'source_category', 'category']

    def filter_by_category(self, queryset, name, value):
        """
        Groups currently linked to a category.
        Example: ?category=camisetas
        """
        return queryset.filter(
            current_window(timezone.now(), 'category_links__'),
            category_links__category__slug=value,
        ).distinct()


class ProductFilter(filters.FilterSet):
    """Filter for products."""

    category = filters.CharFilter(method='filter_by_category')
    discontinued = filters.BooleanFilter(method='filter_discontinued')

    class Meta:
        model = Product
        fields = ['is_virtual', 'is_variant', 'category', 'discontinued']

    def filter_by_category(self, queryset, name, value):
        return queryset.filter(
            current_window(timezone.now(), 'category_memberships__'),
            category_memberships__category__slug=value,
        ).distinct()

    def filter_discontinued(self, queryset, name, value):
        if value is True:
            return queryset.discontinued()
        elif value is False:
            return queryset.not_discontinued()
        return queryset
