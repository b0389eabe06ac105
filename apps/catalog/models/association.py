from django.db import models
from django.db.models import Count, Q

from .base import TimeScopedModel, TimeScopedQuerySet, current_window


class ProductAssociationQuerySet(TimeScopedQuerySet):

    def variant_links(self):
        return self.filter(association_type=ProductAssociation.PRODUCT_VARIANT)

    def single_variant_virtual_ids(self, moment, only_valid=False):
        """
        Ids of non-discontinued virtual products whose variant associations
        point at exactly one distinct variant.

        With ``only_valid`` only associations valid at ``moment`` take part in
        the count; otherwise the date windows are ignored.
        """
        queryset = self.variant_links().filter(
            Q(product__sales_discontinuation_date__isnull=True)
            | Q(product__sales_discontinuation_date__gt=moment)
        )
        if only_valid:
            queryset = queryset.filter(current_window(moment))
        return list(
            queryset.order_by()
            .values('product_id')
            .annotate(variant_count=Count('product_to_id', distinct=True))
            .filter(variant_count=1)
            .values_list('product_id', flat=True)
        )


class ProductAssociation(TimeScopedModel):
    """
    Directed association between two products.

    ``PRODUCT_VARIANT`` associations link a virtual product (``product``) to
    one of its variants (``product_to``).
    """
    PRODUCT_VARIANT = 'PRODUCT_VARIANT'

    ASSOCIATION_TYPE_CHOICES = [
        (PRODUCT_VARIANT, 'Variante'),
        ('PRODUCT_COMPLEMENT', 'Complemento'),
        ('PRODUCT_ACCESSORY', 'Acessório'),
        ('PRODUCT_UPGRADE', 'Upgrade'),
        ('PRODUCT_OBSOLESCENCE', 'Substituto'),
    ]

    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='associations',
        verbose_name='Produto'
    )
    product_to = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='reverse_associations',
        verbose_name='Produto associado'
    )
    association_type = models.CharField(
        max_length=30,
        choices=ASSOCIATION_TYPE_CHOICES,
        default=PRODUCT_VARIANT,
        verbose_name='Tipo de associação'
    )
    sequence_num = models.IntegerField(null=True, blank=True)
    quantity = models.DecimalField(
        max_digits=18,
        decimal_places=6,
        null=True,
        blank=True,
        verbose_name='Quantidade'
    )

    objects = ProductAssociationQuerySet.as_manager()

    class Meta:
        ordering = ['product', 'sequence_num', 'from_date']
        unique_together = ['product', 'product_to', 'association_type', 'from_date']
        verbose_name = 'Associação de Produto'
        verbose_name_plural = 'Associações de Produtos'

    def __str__(self):
        return f"{self.product_id} -[{self.association_type}]-> {self.product_to_id}"
