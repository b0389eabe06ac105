"""Factory classes for catalog tests."""

from datetime import timedelta
from decimal import Decimal

import factory
from django.utils import timezone

from apps.catalog.models import (
    Category,
    CategoryMembership,
    CategoryRollup,
    Feature,
    FeatureApplication,
    FeatureGroup,
    FeatureGroupCategoryLink,
    FeatureGroupFeatureLink,
    FeatureType,
    GoodIdentification,
    Product,
    ProductAssociation,
    ProductAttribute,
    ProductContent,
    ProductKeyword,
    ProductPrice,
)


def days_ago(days):
    return factory.LazyFunction(lambda: timezone.now() - timedelta(days=days))


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    internal_name = factory.Sequence(lambda n: f"Product {n}")
    name = factory.LazyAttribute(lambda o: o.internal_name)
    slug = factory.Sequence(lambda n: f"product-{n}")


class VirtualProductFactory(ProductFactory):
    is_virtual = True
    internal_name = factory.Sequence(lambda n: f"Virtual {n}")
    slug = factory.Sequence(lambda n: f"virtual-{n}")


class VariantProductFactory(ProductFactory):
    is_variant = True
    internal_name = factory.Sequence(lambda n: f"Variant {n}")
    slug = factory.Sequence(lambda n: f"variant-{n}")


class VariantAssociationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductAssociation

    product = factory.SubFactory(VirtualProductFactory)
    product_to = factory.SubFactory(VariantProductFactory)
    association_type = ProductAssociation.PRODUCT_VARIANT
    from_date = days_ago(30)


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    slug = factory.Sequence(lambda n: f"cat{n}")


class CategoryRollupFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CategoryRollup

    parent = factory.SubFactory(CategoryFactory)
    child = factory.SubFactory(CategoryFactory)
    from_date = days_ago(30)


class CategoryMembershipFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CategoryMembership

    product = factory.SubFactory(ProductFactory)
    category = factory.SubFactory(CategoryFactory)
    from_date = days_ago(30)


class FeatureTypeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = FeatureType

    name = factory.Sequence(lambda n: f"Type {n}")
    slug = factory.Sequence(lambda n: f"type{n}")


class FeatureFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Feature

    feature_type = factory.SubFactory(FeatureTypeFactory)
    description = factory.Sequence(lambda n: f"Feature {n}")


class FeatureApplicationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = FeatureApplication

    product = factory.SubFactory(ProductFactory)
    feature = factory.SubFactory(FeatureFactory)
    from_date = days_ago(30)


class FeatureGroupFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = FeatureGroup

    group_id = factory.Sequence(lambda n: f"group{n}")


class FeatureGroupCategoryLinkFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = FeatureGroupCategoryLink

    feature_group = factory.SubFactory(FeatureGroupFactory)
    category = factory.SubFactory(CategoryFactory)
    from_date = days_ago(30)


class FeatureGroupFeatureLinkFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = FeatureGroupFeatureLink

    feature_group = factory.SubFactory(FeatureGroupFactory)
    feature = factory.SubFactory(FeatureFactory)
    from_date = days_ago(30)


class ProductContentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductContent

    product = factory.SubFactory(ProductFactory)
    content_id = factory.Sequence(lambda n: f"content-{n}")
    content_type = 'PRODUCT_NAME'
    from_date = days_ago(30)


class ProductPriceFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductPrice

    product = factory.SubFactory(ProductFactory)
    price = Decimal('19.900')
    from_date = days_ago(30)


class GoodIdentificationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = GoodIdentification

    product = factory.SubFactory(ProductFactory)
    identification_type = 'EAN'
    id_value = factory.Sequence(lambda n: f"{7890000000000 + n}")


class ProductAttributeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductAttribute

    product = factory.SubFactory(ProductFactory)
    attr_name = factory.Sequence(lambda n: f"attr{n}")
    attr_value = 'value'


class ProductKeywordFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductKeyword

    product = factory.SubFactory(ProductFactory)
    keyword = factory.Sequence(lambda n: f"keyword{n}")
