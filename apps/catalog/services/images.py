"""Batch passes over product image URLs."""

import logging
from string import Template
from typing import Optional

from apps.catalog.config import ReconciliationConfig
from apps.catalog.models import Product, ProductAssociation

logger = logging.getLogger(__name__)

IMAGE_FIELDS = ['small_image_url', 'medium_image_url', 'large_image_url', 'detail_image_url']


def expand_image_pattern(pattern, size, product_id):
    """Fill ``${size}`` and ``${product_id}`` in an image URL pattern."""
    return Template(pattern).safe_substitute(size=size, product_id=product_id)


class ProductImageService:

    def __init__(self, config: Optional[ReconciliationConfig] = None):
        self.config = config or ReconciliationConfig.from_settings()

    def set_all_product_image_names(self, pattern: Optional[str] = None) -> int:
        """
        Reset the image URLs of every product from ``pattern``, e.g.
        ``/images/products/${size}/${product_id}.jpg``.

        Virtual products point their small and medium images at their first
        valid variant and have no large or detail image.
        """
        pattern = pattern or self.config.image_pattern
        if not pattern:
            raise ValueError("No image pattern given and none configured")

        num_so_far = 0
        for product in Product.objects.order_by('pk').iterator():
            if product.is_virtual:
                association = (
                    ProductAssociation.objects.variant_links()
                    .filter(product=product)
                    .valid_at()
                    .order_by('sequence_num', 'from_date', 'pk')
                    .first()
                )
                if association:
                    variant_id = association.product_to_id
                    product.small_image_url = expand_image_pattern(pattern, 'small', variant_id)
                    product.medium_image_url = expand_image_pattern(pattern, 'medium', variant_id)
                else:
                    product.small_image_url = None
                    product.medium_image_url = None
                product.large_image_url = None
                product.detail_image_url = None
            else:
                product.small_image_url = expand_image_pattern(pattern, 'small', product.pk)
                product.medium_image_url = expand_image_pattern(pattern, 'medium', product.pk)
                product.large_image_url = expand_image_pattern(pattern, 'large', product.pk)
                product.detail_image_url = expand_image_pattern(pattern, 'detail', product.pk)

            product.save(update_fields=IMAGE_FIELDS + ['updated_at'])
            num_so_far += 1
            if num_so_far % self.config.progress_interval == 0:
                logger.info("Image URLs set for %s products.", num_so_far)

        logger.info("Completed - Image URLs set for %s products.", num_so_far)
        return num_so_far

    def clear_all_virtual_product_image_names(self) -> int:
        num_so_far = 0
        for product in Product.objects.virtuals().order_by('pk').iterator():
            for field_name in IMAGE_FIELDS:
                setattr(product, field_name, None)
            product.save(update_fields=IMAGE_FIELDS + ['updated_at'])
            num_so_far += 1
            if num_so_far % self.config.progress_interval == 0:
                logger.info("Image URLs cleared for %s products.", num_so_far)

        logger.info("Completed - Image URLs cleared for %s products.", num_so_far)
        return num_so_far
