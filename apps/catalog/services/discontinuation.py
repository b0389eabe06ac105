"""
Discontinuation cascade.

Four batch passes that keep variant associations and category memberships in
line with products' sales discontinuation dates:

1. expire the variant associations of discontinued variants
2. discontinue virtual products left without valid variants
3. remove discontinued products from their categories
4. remove duplicate open-ended category memberships

Pass 1 must have run (and committed) before pass 2 in the same invocation, as
``disc_virtuals_with_disc_variants`` does.
"""

import logging
from typing import Optional
from datetime import datetime

from django.utils import timezone

from apps.catalog.config import ReconciliationConfig
from apps.catalog.models import CategoryMembership, Product, ProductAssociation

logger = logging.getLogger(__name__)


def get_variant_virtual_id(variant: Product, moment: Optional[datetime] = None):
    """Id of the virtual product owning ``variant`` through a valid association."""
    association = (
        ProductAssociation.objects.variant_links()
        .filter(product_to=variant)
        .valid_at(moment)
        .order_by('from_date', 'pk')
        .first()
    )
    return association.product_id if association else None


class DiscontinuationService:

    def __init__(self, config: Optional[ReconciliationConfig] = None):
        self.config = config or ReconciliationConfig.from_settings()

    def _log_progress(self, count, message):
        if count % self.config.progress_interval == 0:
            logger.info(message, count)

    def disc_virtuals_with_disc_variants(self, now: Optional[datetime] = None):
        """
        First expire the variant associations of all discontinued variants,
        then discontinue all virtuals whose variant associations are all
        expired.
        """
        now = now or timezone.now()
        expired = self.expire_discontinued_variant_associations(now)
        discontinued = self.discontinue_orphaned_virtuals(now)
        return expired, discontinued

    def expire_discontinued_variant_associations(self, now: Optional[datetime] = None) -> int:
        now = now or timezone.now()
        num_so_far = 0

        variants = Product.objects.variants().discontinued(now).order_by('pk')
        for variant in variants.iterator():
            virtual_id = get_variant_virtual_id(variant, now)
            if virtual_id is None or not Product.objects.filter(pk=virtual_id).exists():
                continue

            associations = list(
                ProductAssociation.objects.variant_links()
                .filter(product_id=virtual_id, product_to=variant)
                .continuing_at(now)
            )
            if not associations:
                continue

            for association in associations:
                association.expire(now)

            num_so_far += 1
            self._log_progress(
                num_so_far,
                "Expired variant associations for %s sales discontinued variant products.",
            )

        logger.info(
            "Completed - Expired variant associations for %s sales discontinued variant products.",
            num_so_far,
        )
        return num_so_far

    def discontinue_orphaned_virtuals(self, now: Optional[datetime] = None) -> int:
        """Discontinue non-discontinued virtuals that have no valid variant association."""
        now = now or timezone.now()
        num_so_far = 0

        virtuals = Product.objects.virtuals().not_discontinued(now).order_by('pk')
        for product in virtuals.iterator():
            has_valid_variants = (
                ProductAssociation.objects.variant_links()
                .filter(product=product)
                .continuing_at(now)
                .exists()
            )
            if has_valid_variants:
                continue

            product.sales_discontinuation_date = now
            product.save(update_fields=['sales_discontinuation_date', 'updated_at'])

            num_so_far += 1
            self._log_progress(
                num_so_far,
                "Sales discontinued %s virtual products that have no valid variants.",
            )

        logger.info(
            "Completed - Sales discontinued %s virtual products that have no valid variants.",
            num_so_far,
        )
        return num_so_far

    def remove_category_memberships_of_discontinued(self, now: Optional[datetime] = None) -> int:
        """Delete all category memberships of sales discontinued products."""
        now = now or timezone.now()
        num_so_far = 0

        for product in Product.objects.discontinued(now).order_by('pk').iterator():
            memberships = list(CategoryMembership.objects.filter(product=product))
            if not memberships:
                continue

            # one by one rather than a bulk delete so each removal is its own write
            for membership in memberships:
                membership.delete()

            num_so_far += 1
            self._log_progress(
                num_so_far,
                "Removed category members for %s sales discontinued products.",
            )

        logger.info(
            "Completed - Removed category members for %s sales discontinued products.",
            num_so_far,
        )
        return num_so_far

    def remove_duplicate_open_memberships(self, now: Optional[datetime] = None) -> int:
        """
        Keep a single open-ended membership for every (product, category)
        pair that has several.
        """
        now = now or timezone.now()
        num_so_far = 0

        pairs = list(CategoryMembership.objects.duplicate_open_pairs(now))
        for pair in pairs:
            memberships = list(
                CategoryMembership.objects.filter(
                    product_id=pair['product_id'],
                    category_id=pair['category_id'],
                ).open_ended(now).order_by('pk')
            )
            if len(memberships) <= 1:
                continue

            # remove all except the first
            for membership in memberships[1:]:
                membership.delete()

            num_so_far += 1
            self._log_progress(
                num_so_far,
                "Removed category members for %s products with duplicate category members.",
            )

        logger.info(
            "Completed - Removed category members for %s products with duplicate category members.",
            num_so_far,
        )
        return num_so_far
