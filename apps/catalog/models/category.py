from django.db import models
from django.db.models import Count
from django.utils import timezone
from django.utils.text import slugify

from .base import TimeScopedModel, TimeScopedQuerySet


class Category(models.Model):
    """
    Product categories.

    The hierarchy lives in ``CategoryRollup`` rows so that a category can be
    rolled up into more than one parent and the edges can be time-scoped.
    The ``slug`` is the category identifier used in derived feature group ids.
    """
    name = models.CharField(
        max_length=200,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=200,
        unique=True,
        verbose_name='Slug'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['display_order', 'name']
        verbose_name = 'Categoria'
        verbose_name_plural = 'Categorias'

    def __str__(self):
        return self.name

    def get_children(self, moment=None):
        """Direct child categories through currently valid rollups."""
        return Category.objects.filter(
            parent_rollups__in=CategoryRollup.objects.filter(parent=self).valid_at(moment)
        ).distinct()

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
            # Ensure unique slug
            base_slug = self.slug
            counter = 1
            while Category.objects.filter(slug=self.slug).exclude(pk=self.pk).exists():
                self.slug = f"{base_slug}-{counter}"
                counter += 1
        super().save(*args, **kwargs)


class CategoryRollup(TimeScopedModel):
    """Parent/child edge between two categories."""
    parent = models.ForeignKey(
        Category,
        on_delete=models.CASCADE,
        related_name='child_rollups',
        verbose_name='Categoria Pai'
    )
    child = models.ForeignKey(
        Category,
        on_delete=models.CASCADE,
        related_name='parent_rollups',
        verbose_name='Categoria Filha'
    )
    sequence_num = models.IntegerField(null=True, blank=True)

    class Meta:
        ordering = ['parent', 'sequence_num']
        unique_together = ['parent', 'child', 'from_date']
        verbose_name = 'Hierarquia de Categoria'
        verbose_name_plural = 'Hierarquias de Categorias'

    def __str__(self):
        return f"{self.parent} > {self.child}"


class CategoryMembershipQuerySet(TimeScopedQuerySet):

    def duplicate_open_pairs(self, moment=None):
        """
        (product_id, category_id, count) rows for pairs holding more than one
        open-ended membership at ``moment``.
        """
        if moment is None:
            moment = timezone.now()
        return (
            self.open_ended(moment)
            .order_by()
            .values('product_id', 'category_id')
            .annotate(membership_count=Count('product_id'))
            .filter(membership_count__gt=1)
        )


class CategoryMembership(TimeScopedModel):
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='category_memberships',
        verbose_name='Produto'
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.CASCADE,
        related_name='memberships',
        verbose_name='Categoria'
    )
    sequence_num = models.IntegerField(null=True, blank=True)
    comments = models.CharField(max_length=255, blank=True)

    objects = CategoryMembershipQuerySet.as_manager()

    class Meta:
        ordering = ['category', 'sequence_num', 'from_date']
        unique_together = ['product', 'category', 'from_date']
        verbose_name = 'Membro da Categoria'
        verbose_name_plural = 'Membros da Categoria'

    def __str__(self):
        return f"{self.category} - {self.product}"
