from django.db import models

from .base import TimeScopedModel


class FeatureType(models.Model):
    """
    Classification of product features.
    Examples: Color, Size, Material, etc.
    """
    name = models.CharField(
        max_length=100,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=100,
        unique=True,
        verbose_name='Slug'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )

    class Meta:
        ordering = ['display_order', 'name']
        verbose_name = 'Tipo de Característica'
        verbose_name_plural = 'Tipos de Características'

    def __str__(self):
        return self.name


class Feature(models.Model):
    """
    A concrete feature value of one type.

    Examples:
        - FeatureType "Cor" -> Features: "Azul", "Branco"
        - FeatureType "Tamanho" -> Features: "P", "M", "G"
    """
    feature_type = models.ForeignKey(
        FeatureType,
        on_delete=models.CASCADE,
        related_name='features',
        verbose_name='Tipo de Característica'
    )
    description = models.CharField(
        max_length=255,
        verbose_name='Descrição'
    )
    abbreviation = models.CharField(
        max_length=20,
        blank=True,
        verbose_name='Abreviação'
    )

    class Meta:
        ordering = ['feature_type', 'description']
        unique_together = ['feature_type', 'description']
        verbose_name = 'Característica'
        verbose_name_plural = 'Características'

    def __str__(self):
        return f"{self.feature_type.name}: {self.description}"


class FeatureApplication(TimeScopedModel):
    """Application of a feature to a product over a period of time."""
    STANDARD = 'STANDARD_FEATURE'
    SELECTABLE = 'SELECTABLE_FEATURE'
    DISTINGUISHING = 'DISTINGUISHING_FEAT'

    APPLICATION_TYPE_CHOICES = [
        (STANDARD, 'Padrão'),
        (SELECTABLE, 'Selecionável'),
        (DISTINGUISHING, 'Distintiva'),
    ]

    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='feature_applications',
        verbose_name='Produto'
    )
    feature = models.ForeignKey(
        Feature,
        on_delete=models.CASCADE,
        related_name='applications',
        verbose_name='Característica'
    )
    application_type = models.CharField(
        max_length=20,
        choices=APPLICATION_TYPE_CHOICES,
        default=STANDARD,
        verbose_name='Tipo de aplicação'
    )
    sequence_num = models.IntegerField(null=True, blank=True)

    class Meta:
        ordering = ['product', 'sequence_num']
        unique_together = ['product', 'feature', 'from_date']
        verbose_name = 'Característica do Produto'
        verbose_name_plural = 'Características dos Produtos'

    def __str__(self):
        return f"{self.product} - {self.feature}"
