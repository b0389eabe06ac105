"""
Virtual-variant merge engine.

Collapses a virtual product that has a single variant into one stand-alone
product: the variant keeps its id, takes over every field it does not set
itself from the virtual, and receives copies of the virtual's related records.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
from datetime import datetime

from django.utils import timezone

from apps.catalog.config import ReconciliationConfig
from apps.catalog.exceptions import (
    AmbiguousMerge,
    MergeDryRun,
    NoValidVariant,
    ProductNotFound,
    ReconciliationError,
)
from apps.catalog.models import (
    CategoryMembership,
    FeatureApplication,
    GoodIdentification,
    Product,
    ProductAssociation,
    ProductAttribute,
    ProductContent,
    ProductKeyword,
    ProductPrice,
)
from .records import copy_record, has_date_window, natural_key
from .temporal import filter_by_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelatedRecordType:
    """A model holding records that key off a product through ``product_field``."""
    model: type
    product_field: str = 'product'

    @property
    def label(self):
        return f"{self.model.__name__}.{self.product_field}"

    @property
    def has_from_date(self):
        return has_date_window(self.model)

    def records_of(self, product):
        return self.model._default_manager.filter(**{self.product_field: product})


CATEGORY_MEMBERSHIPS = RelatedRecordType(CategoryMembership)

# Relation types copied from the virtual onto the surviving variant, in order
RELATED_RECORD_TYPES = (
    RelatedRecordType(FeatureApplication),
    RelatedRecordType(ProductContent),
    RelatedRecordType(ProductPrice),
    RelatedRecordType(GoodIdentification),
    RelatedRecordType(ProductAttribute),
    RelatedRecordType(ProductAssociation, 'product'),
    RelatedRecordType(ProductAssociation, 'product_to'),
)


def duplicate_related(
    product: Product,
    related_type: RelatedRecordType,
    target_product_id,
    now: datetime,
    remove_old: bool = False,
    test: bool = False,
    exclude_pks: Iterable = (),
) -> int:
    """
    Copy the currently valid ``related_type`` records of ``product`` onto the
    product ``target_product_id``.

    Time-scoped records are skipped when the target already has a valid
    record with the same key apart from ``from_date``; otherwise the copy
    starts at ``now``. A copy whose full key already exists is never created.
    With ``remove_old`` every record of the type is deleted from ``product``
    afterwards, whatever its dates. Returns the number of records created.
    """
    model = related_type.model
    product_attname = model._meta.get_field(related_type.product_field).attname
    exclude_pks = set(exclude_pks)
    created = 0

    related = [
        record for record in related_type.records_of(product)
        if record.pk not in exclude_pks
    ]
    for record in filter_by_date(related, now):
        new_record = copy_record(record, **{product_attname: target_product_id})

        if related_type.has_from_date:
            # from_date is part of the key, drop it so differently dated records match
            lookup = natural_key(new_record, exclude=('from_date',))
            existing = filter_by_date(model._default_manager.filter(**lookup), now)
            if existing:
                if test:
                    logger.info(
                        "Found %s existing values for related %s, not copying, lookup is: %s",
                        len(existing), related_type.label, lookup,
                    )
                continue
            new_record.from_date = now

        if model._default_manager.filter(**natural_key(new_record)).exists():
            continue

        if test:
            logger.info("Test mode, would create %s: %s", related_type.label, new_record)
        else:
            new_record.save(force_insert=True)
        created += 1

    if remove_old:
        if test:
            logger.info(
                "Test mode, would remove related %s of product %s",
                related_type.label, product.pk,
            )
        else:
            related_type.records_of(product).delete()

    return created


def merged_field_values(virtual: Product, variant: Product) -> dict:
    """
    Field values of the merged product: the virtual's values, overridden by
    every value the variant actually has (not null, not empty).
    """
    values = {}
    for field in Product._meta.concrete_fields:
        if field.primary_key:
            continue
        value = getattr(variant, field.attname)
        if value is None or value == '':
            value = getattr(virtual, field.attname)
        values[field.attname] = value
    values['is_variant'] = False
    return values


class VirtualVariantMergeService:

    def __init__(self, config: Optional[ReconciliationConfig] = None):
        self.config = config or ReconciliationConfig.from_settings()

    def make_standalone_from_single_variant_virtuals(
        self, now: Optional[datetime] = None
    ) -> Tuple[int, int]:
        """
        Merge every virtual with a single variant into that variant.

        Virtuals with only one variant at all lose the virtual record; virtuals
        with one valid variant among expired ones keep their record and family,
        and just hand their data to the valid variant.
        """
        now = now or timezone.now()
        logger.info("Starting make_standalone_from_single_variant_virtuals")

        single_ids = ProductAssociation.objects.single_variant_virtual_ids(now)
        logger.info(
            "Found %s virtual products with one variant to turn into a stand alone product.",
            len(single_ids),
        )
        num_with_one_only = self._merge_candidates(single_ids, now, remove_old=True)

        single_valid_ids = ProductAssociation.objects.single_variant_virtual_ids(
            now, only_valid=True
        )
        logger.info(
            "Found %s virtual products with one VALID variant to pull the variant "
            "from to make a stand alone product.",
            len(single_valid_ids),
        )
        num_with_one_valid = self._merge_candidates(single_valid_ids, now, remove_old=False)

        logger.info(
            "Found virtual products with one valid variant: %s, with one variant only: %s",
            num_with_one_valid, num_with_one_only,
        )
        return num_with_one_only, num_with_one_valid

    def _merge_candidates(self, product_ids, now, remove_old):
        merged = 0
        for product_id in product_ids:
            # verify the aggregate, state may have moved on since it ran
            valid_count = (
                ProductAssociation.objects.variant_links()
                .filter(product_id=product_id)
                .valid_at(now)
                .count()
            )
            if valid_count != 1:
                logger.info(
                    "Virtual product with ID %s should have 1 assoc, has %s",
                    product_id, valid_count,
                )
                continue

            try:
                self.merge(product_id, remove_old=remove_old, now=now)
            except ReconciliationError as e:
                logger.info("Skipping virtual product %s: %s", product_id, e)
                continue

            merged += 1
            if merged % 100 == 0:
                logger.info(
                    "Made %s virtual products with one variant stand-alone products.",
                    merged,
                )
        return merged

    def merge(
        self,
        virtual_product_id,
        remove_old: bool = False,
        test: bool = False,
        now: Optional[datetime] = None,
    ) -> Product:
        """
        Merge a virtual product with its single valid variant.

        Returns the merged product (unsaved in test mode, where ``MergeDryRun``
        is raised instead of returning).
        """
        now = now or timezone.now()

        try:
            virtual = Product.objects.get(pk=virtual_product_id)
        except Product.DoesNotExist:
            raise ProductNotFound(virtual_product_id)
        logger.info(
            "Processing virtual product with one variant with ID: %s and name: %s",
            virtual.pk, virtual.internal_name,
        )

        associations = list(
            ProductAssociation.objects.variant_links()
            .filter(product=virtual)
            .valid_at(now)
            .order_by('from_date', 'pk')
        )
        if len(associations) > 1:
            raise AmbiguousMerge(virtual.pk, len(associations))
        if not associations:
            raise NoValidVariant(virtual.pk)

        association = associations[0]
        if remove_old:
            # remove the association first so it is not copied over
            if test:
                logger.info("Test mode, would remove: %s", association)
            else:
                association.delete()
        else:
            # expire rather than remove so the virtual is not picked up again
            if test:
                logger.info("Test mode, would expire: %s", association)
            else:
                association.expire(now)

        try:
            variant = Product.objects.get(pk=association.product_to_id)
        except Product.DoesNotExist:
            raise ProductNotFound(association.product_to_id)
        logger.info(
            "--variant has ID: %s and name: %s", variant.pk, variant.internal_name
        )

        merged = Product(pk=variant.pk, **merged_field_values(virtual, variant))
        if test:
            logger.info("Test mode, would store: %s", merged)
        else:
            merged.save(force_update=True)

        # always pull the virtual out of its categories
        duplicate_related(
            virtual, CATEGORY_MEMBERSHIPS, variant.pk, now,
            remove_old=True, test=test,
        )
        for related_type in RELATED_RECORD_TYPES:
            exclude_pks = ()
            if related_type.model is ProductAssociation:
                # the merged association is expired at ``now`` but still in its window
                exclude_pks = (association.pk,)
            duplicate_related(
                virtual, related_type, variant.pk, now,
                remove_old=remove_old, test=test, exclude_pks=exclude_pks,
            )

        if remove_old:
            if test:
                logger.info("Test mode, would remove keywords and product: %s", virtual)
            else:
                ProductKeyword.objects.filter(product=virtual).delete()
                virtual.delete()

        if test:
            raise MergeDryRun(virtual.pk, variant.pk)
        return merged
