from django.db import models

from apps.catalog.config import GROUP_ID_FIELD_LENGTH

from .base import TimeScopedModel


class FeatureGroup(models.Model):
    """
    Named bucket of features of one type, attached to categories to drive
    faceted search.

    Groups derived by the feature group synchronizer carry the category and
    feature type they were derived from, and an id built from both
    (``<category slug>_<feature type slug>``).
    """
    group_id = models.CharField(
        max_length=GROUP_ID_FIELD_LENGTH,
        unique=True,
        verbose_name='Identificador'
    )
    description = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Descrição'
    )
    feature_type = models.ForeignKey(
        'catalog.FeatureType',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='feature_groups',
        verbose_name='Tipo de Característica'
    )
    source_category = models.ForeignKey(
        'catalog.Category',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='derived_feature_groups',
        verbose_name='Categoria de origem'
    )

    features = models.ManyToManyField(
        'catalog.Feature',
        through='FeatureGroupFeatureLink',
        related_name='feature_groups',
        verbose_name='Características'
    )
    categories = models.ManyToManyField(
        'catalog.Category',
        through='FeatureGroupCategoryLink',
        related_name='feature_groups',
        verbose_name='Categorias'
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )

    class Meta:
        ordering = ['group_id']
        verbose_name = 'Grupo de Características'
        verbose_name_plural = 'Grupos de Características'

    def __str__(self):
        return self.group_id

    @property
    def feature_count(self):
        return self.feature_links.valid_at().count()

    @property
    def category_count(self):
        return self.category_links.valid_at().count()


class FeatureGroupCategoryLink(TimeScopedModel):
    """Attaches a feature group to a category."""
    feature_group = models.ForeignKey(
        FeatureGroup,
        on_delete=models.CASCADE,
        related_name='category_links',
        verbose_name='Grupo'
    )
    category = models.ForeignKey(
        'catalog.Category',
        on_delete=models.CASCADE,
        related_name='feature_group_links',
        verbose_name='Categoria'
    )

    class Meta:
        ordering = ['category', 'feature_group']
        unique_together = ['feature_group', 'category', 'from_date']
        verbose_name = 'Grupo da Categoria'
        verbose_name_plural = 'Grupos das Categorias'

    def __str__(self):
        return f"{self.category} - {self.feature_group}"


class FeatureGroupFeatureLink(TimeScopedModel):
    """Places a feature in a feature group."""
    feature_group = models.ForeignKey(
        FeatureGroup,
        on_delete=models.CASCADE,
        related_name='feature_links',
        verbose_name='Grupo'
    )
    feature = models.ForeignKey(
        'catalog.Feature',
        on_delete=models.CASCADE,
        related_name='feature_group_links',
        verbose_name='Característica'
    )
    sequence_num = models.IntegerField(null=True, blank=True)

    class Meta:
        ordering = ['sequence_num']
        unique_together = ['feature_group', 'feature', 'from_date']
        verbose_name = 'Membro do Grupo'
        verbose_name_plural = 'Membros do Grupo'

    def __str__(self):
        return f"{self.feature_group} - {self.feature}"
