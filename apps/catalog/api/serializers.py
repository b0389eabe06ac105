from django.utils import timezone
from rest_framework import serializers
from apps.catalog.models import (
    Product,
    ProductAssociation,
    CategoryMembership,
    FeatureType,
    Feature,
    FeatureGroup,
    FeatureGroupCategoryLink,
    FeatureGroupFeatureLink,
)


# =============================================================================
# Feature Serializers
# =============================================================================

class FeatureTypeSerializer(serializers.ModelSerializer):

    class Meta:
        model = FeatureType
        fields = ['id', 'name', 'slug', 'display_order']


class FeatureSerializer(serializers.ModelSerializer):
    feature_type_slug = serializers.CharField(
        source='feature_type.slug', read_only=True
    )

    class Meta:
        model = Feature
        fields = ['id', 'feature_type', 'feature_type_slug', 'description', 'abbreviation']


# =============================================================================
# Feature Group Serializers
# =============================================================================

class FeatureGroupFeatureLinkSerializer(serializers.ModelSerializer):
    feature = FeatureSerializer(read_only=True)

    class Meta:
        model = FeatureGroupFeatureLink
        fields = ['id', 'feature', 'from_date', 'thru_date', 'sequence_num']


class FeatureGroupCategoryLinkSerializer(serializers.ModelSerializer):
    category_slug = serializers.CharField(source='category.slug', read_only=True)

    class Meta:
        model = FeatureGroupCategoryLink
        fields = ['id', 'category', 'category_slug', 'from_date', 'thru_date']


class FeatureGroupListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for feature group lists."""
    feature_type_slug = serializers.CharField(
        source='feature_type.slug', read_only=True, default=None
    )
    source_category_slug = serializers.CharField(
        source='source_category.slug', read_only=True, default=None
    )

    class Meta:
        model = FeatureGroup
        fields = [
            'id', 'group_id', 'description', 'feature_type_slug',
            'source_category_slug', 'created_at'
        ]


class FeatureGroupDetailSerializer(FeatureGroupListSerializer):
    """Feature group with its currently valid feature and category links."""
    features = serializers.SerializerMethodField()
    categories = serializers.SerializerMethodField()

    class Meta(FeatureGroupListSerializer.Meta):
        fields = FeatureGroupListSerializer.Meta.fields + ['features', 'categories']

    def get_features(self, obj):
        links = obj.feature_links.valid_at(timezone.now()).select_related('feature__feature_type')
        return FeatureGroupFeatureLinkSerializer(links, many=True).data

    def get_categories(self, obj):
        links = obj.category_links.valid_at(timezone.now()).select_related('category')
        return FeatureGroupCategoryLinkSerializer(links, many=True).data


# =============================================================================
# Product Serializers
# =============================================================================

class CategoryMembershipSerializer(serializers.ModelSerializer):
    category_slug = serializers.CharField(source='category.slug', read_only=True)

    class Meta:
        model = CategoryMembership
        fields = ['id', 'category', 'category_slug', 'from_date', 'thru_date', 'sequence_num']


class VariantAssociationSerializer(serializers.ModelSerializer):

    class Meta:
        model = ProductAssociation
        fields = ['id', 'product_to', 'association_type', 'from_date', 'thru_date', 'sequence_num']


class ProductListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for product lists."""

    class Meta:
        model = Product
        fields = [
            'id', 'slug', 'internal_name', 'name', 'is_virtual', 'is_variant',
            'sales_discontinuation_date', 'small_image_url', 'updated_at'
        ]


class ProductDetailSerializer(serializers.ModelSerializer):
    """Product with its current category memberships and variant links."""
    categories = serializers.SerializerMethodField()
    variants = serializers.SerializerMethodField()
    valid_variant_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'slug', 'internal_name', 'name', 'description', 'long_description',
            'is_virtual', 'is_variant', 'introduction_date', 'sales_discontinuation_date',
            'small_image_url', 'medium_image_url', 'large_image_url', 'detail_image_url',
            'valid_variant_count', 'categories', 'variants', 'created_at', 'updated_at'
        ]

    def get_categories(self, obj):
        memberships = obj.category_memberships.valid_at(timezone.now()).select_related('category')
        return CategoryMembershipSerializer(memberships, many=True).data

    def get_variants(self, obj):
        links = obj.associations.variant_links().valid_at(timezone.now())
        return VariantAssociationSerializer(links, many=True).data
