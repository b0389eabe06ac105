from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.text import slugify
from simple_history.models import HistoricalRecords

from .base import TimeScopedModel


class ProductQuerySet(models.QuerySet):

    def variants(self):
        return self.filter(is_variant=True)

    def virtuals(self):
        return self.filter(is_virtual=True)

    def discontinued(self, moment=None):
        """Products whose sales discontinuation date has been reached."""
        if moment is None:
            moment = timezone.now()
        return self.filter(
            sales_discontinuation_date__isnull=False,
            sales_discontinuation_date__lte=moment,
        )

    def not_discontinued(self, moment=None):
        if moment is None:
            moment = timezone.now()
        return self.filter(
            Q(sales_discontinuation_date__isnull=True)
            | Q(sales_discontinuation_date__gt=moment)
        )


class Product(models.Model):
    """
    Catalog product.

    A virtual product stands for a family of purchasable variants (e.g. a shirt
    style) and is linked to its variants through ``PRODUCT_VARIANT``
    associations. A variant is a concretely orderable SKU.
    """
    internal_name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Nome interno'
    )
    name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        verbose_name='Slug'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    long_description = models.TextField(
        blank=True,
        verbose_name='Descrição longa'
    )
    is_virtual = models.BooleanField(
        default=False,
        verbose_name='Virtual'
    )
    is_variant = models.BooleanField(
        default=False,
        verbose_name='Variante'
    )
    introduction_date = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name='Data de introdução'
    )
    sales_discontinuation_date = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        verbose_name='Data de descontinuação de venda'
    )

    # Image URLs, maintained by the image name passes
    small_image_url = models.CharField(max_length=2000, null=True, blank=True)
    medium_image_url = models.CharField(max_length=2000, null=True, blank=True)
    large_image_url = models.CharField(max_length=2000, null=True, blank=True)
    detail_image_url = models.CharField(max_length=2000, null=True, blank=True)

    categories = models.ManyToManyField(
        'catalog.Category',
        through='catalog.CategoryMembership',
        blank=True,
        related_name='products',
        verbose_name='Categorias'
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    # History tracking
    history = HistoricalRecords()

    objects = ProductQuerySet.as_manager()

    class Meta:
        ordering = ['internal_name', 'pk']
        verbose_name = 'Produto'
        verbose_name_plural = 'Produtos'

    def __str__(self):
        return self.internal_name or self.name or self.slug

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.internal_name or self.name)
        super().save(*args, **kwargs)

    def is_discontinued(self, moment=None):
        if self.sales_discontinuation_date is None:
            return False
        return self.sales_discontinuation_date <= (moment or timezone.now())

    @property
    def variant_count(self):
        from .association import ProductAssociation
        return self.associations.filter(
            association_type=ProductAssociation.PRODUCT_VARIANT
        ).count()

    @property
    def valid_variant_count(self):
        from .association import ProductAssociation
        return self.associations.filter(
            association_type=ProductAssociation.PRODUCT_VARIANT
        ).valid_at().count()


class ProductContent(TimeScopedModel):
    """Link between a product and a piece of content (copy, image, document)."""
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='contents',
        verbose_name='Produto'
    )
    content_id = models.CharField(
        max_length=100,
        verbose_name='Conteúdo'
    )
    content_type = models.CharField(
        max_length=60,
        verbose_name='Tipo de conteúdo'
    )
    sequence_num = models.IntegerField(null=True, blank=True)

    class Meta:
        unique_together = ['product', 'content_id', 'content_type', 'from_date']
        verbose_name = 'Conteúdo do Produto'
        verbose_name_plural = 'Conteúdos dos Produtos'

    def __str__(self):
        return f"{self.product} - {self.content_type}: {self.content_id}"


class ProductPrice(TimeScopedModel):
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='prices',
        verbose_name='Produto'
    )
    price_type = models.CharField(
        max_length=60,
        default='DEFAULT_PRICE',
        verbose_name='Tipo de preço'
    )
    currency = models.CharField(
        max_length=3,
        default='BRL',
        verbose_name='Moeda'
    )
    price = models.DecimalField(
        max_digits=18,
        decimal_places=3,
        verbose_name='Preço'
    )

    class Meta:
        unique_together = ['product', 'price_type', 'currency', 'from_date']
        verbose_name = 'Preço do Produto'
        verbose_name_plural = 'Preços dos Produtos'

    def __str__(self):
        return f"{self.product} - {self.price_type}: {self.price} {self.currency}"


class GoodIdentification(models.Model):
    """External identifiers of a product (EAN, UPC, supplier codes...)."""
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='good_identifications',
        verbose_name='Produto'
    )
    identification_type = models.CharField(
        max_length=60,
        verbose_name='Tipo de identificação'
    )
    id_value = models.CharField(
        max_length=255,
        verbose_name='Valor'
    )

    class Meta:
        unique_together = ['product', 'identification_type']
        verbose_name = 'Identificação do Produto'
        verbose_name_plural = 'Identificações dos Produtos'

    def __str__(self):
        return f"{self.identification_type}: {self.id_value}"


class ProductAttribute(models.Model):
    """Free-form name/value attributes of a product."""
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='attributes',
        verbose_name='Produto'
    )
    attr_name = models.CharField(
        max_length=60,
        verbose_name='Atributo'
    )
    attr_value = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Valor'
    )

    class Meta:
        unique_together = ['product', 'attr_name']
        verbose_name = 'Atributo do Produto'
        verbose_name_plural = 'Atributos dos Produtos'

    def __str__(self):
        return f"{self.attr_name}={self.attr_value}"


class ProductKeyword(models.Model):
    """Search keywords indexed for a product."""
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='keywords',
        verbose_name='Produto'
    )
    keyword = models.CharField(
        max_length=60,
        verbose_name='Palavra-chave'
    )
    relevancy_weight = models.IntegerField(default=1)

    class Meta:
        unique_together = ['product', 'keyword']
        verbose_name = 'Palavra-chave'
        verbose_name_plural = 'Palavras-chave'

    def __str__(self):
        return self.keyword
