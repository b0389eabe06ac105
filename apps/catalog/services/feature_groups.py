"""
Feature group synchronizer.

Walks a category tree bottom-up and keeps, per category and feature type, a
feature group holding the features currently applied to the category's
products. Feature groups of sub-categories are linked up to every ancestor.
"""

import hashlib
import logging
from collections import defaultdict
from typing import Dict, Iterable, Optional, Set
from datetime import datetime

from django.utils import timezone

from apps.catalog.config import ReconciliationConfig
from apps.catalog.exceptions import CategoryCycleError, CategoryNotFound
from apps.catalog.models import (
    Category,
    CategoryMembership,
    CategoryRollup,
    FeatureApplication,
    FeatureGroup,
    FeatureGroupCategoryLink,
    FeatureGroupFeatureLink,
    FeatureType,
)

logger = logging.getLogger(__name__)


def build_feature_group_id(category_slug, feature_type_slug, max_length=20, hash_suffix=False):
    """
    Derive the feature group id ``<category>_<feature type>``.

    Ids longer than ``max_length`` are truncated, so two long category/type
    pairs can end up sharing a group. With ``hash_suffix`` the tail of a
    truncated id is replaced by a short digest of the full id instead.
    """
    group_id = f"{category_slug}_{feature_type_slug}"
    if len(group_id) <= max_length:
        return group_id

    logger.warning(
        "Feature group id %r is longer than %s characters and will be truncated; "
        "different feature types of the category may share a group.",
        group_id, max_length,
    )
    if hash_suffix:
        digest = hashlib.sha1(group_id.encode('utf-8')).hexdigest()[:8]
        prefix_length = max_length - len(digest) - 1
        if prefix_length <= 0:
            return digest[:max_length]
        return group_id[:prefix_length] + '_' + digest
    return group_id[:max_length]


class FeatureGroupSyncService:

    def __init__(self, config: Optional[ReconciliationConfig] = None):
        self.config = config or ReconciliationConfig.from_settings()

    def attach_features_to_category(
        self,
        category,
        include_types: Optional[Iterable[str]] = None,
        exclude_types: Optional[Iterable[str]] = None,
        do_subcategories: bool = True,
        now: Optional[datetime] = None,
    ):
        """
        Reconcile the feature groups of ``category`` (a ``Category`` or its
        slug) and, with ``do_subcategories``, of all its descendants first.

        ``include_types`` / ``exclude_types`` are feature type slugs and
        default to the configured sets. A non-empty include set is a
        whitelist; the exclude set is always subtracted.
        """
        if not isinstance(category, Category):
            try:
                category = Category.objects.get(slug=category)
            except Category.DoesNotExist:
                raise CategoryNotFound(category)

        if include_types is None:
            include_types = self.config.feature_type_include
        if exclude_types is None:
            exclude_types = self.config.feature_type_exclude

        self._sync_category(
            category,
            include_types=frozenset(include_types or ()),
            exclude_types=frozenset(exclude_types or ()),
            do_subcategories=do_subcategories,
            now=now or timezone.now(),
            path=[],
            completed=set(),
        )

    def _sync_category(self, category, include_types, exclude_types, do_subcategories,
                       now, path, completed):
        if category.pk in path:
            slugs = dict(Category.objects.filter(pk__in=path).values_list('pk', 'slug'))
            raise CategoryCycleError([slugs[pk] for pk in path] + [category.slug])
        if category.pk in completed:
            return

        path.append(category.pk)
        sub_rollups = list(
            CategoryRollup.objects.filter(parent=category)
            .valid_at(now)
            .select_related('child')
            .order_by('sequence_num', 'pk')
        )

        # sub-categories first so all of their feature groups are in place
        if do_subcategories:
            for rollup in sub_rollups:
                self._sync_category(
                    rollup.child, include_types, exclude_types, True, now, path, completed
                )

        features_by_type = self.collect_features(category, include_types, exclude_types, now)
        synced_group_ids = set()
        for feature_type_slug, feature_ids in features_by_type.items():
            group = self._sync_feature_group(category, feature_type_slug, feature_ids, now)
            synced_group_ids.add(group.pk)

        self._unlink_stale_groups(category, set(features_by_type), synced_group_ids)

        for rollup in sub_rollups:
            self._link_child_groups(category, rollup.child, now)

        path.pop()
        completed.add(category.pk)
        logger.debug("Feature groups reconciled for category %s", category.slug)

    def collect_features(self, category, include_types, exclude_types, now) -> Dict[str, Set[int]]:
        """Map feature type slug -> ids of features on the category's current products."""
        product_ids = (
            CategoryMembership.objects.filter(category=category)
            .valid_at(now)
            .values('product_id')
        )
        applications = (
            FeatureApplication.objects.filter(product_id__in=product_ids)
            .valid_at(now)
            .values_list('feature_id', 'feature__feature_type__slug')
        )

        features_by_type = defaultdict(set)
        for feature_id, feature_type_slug in applications.iterator():
            if include_types and feature_type_slug not in include_types:
                continue
            if feature_type_slug in exclude_types:
                continue
            features_by_type[feature_type_slug].add(feature_id)
        return dict(features_by_type)

    def _sync_feature_group(self, category, feature_type_slug, feature_ids, now):
        group_id = build_feature_group_id(
            category.slug,
            feature_type_slug,
            max_length=self.config.group_id_max_length,
            hash_suffix=self.config.group_id_hash_suffix,
        )

        feature_type = FeatureType.objects.filter(slug=feature_type_slug).first()
        group = FeatureGroup.objects.filter(group_id=group_id).first()
        if group is None:
            group = FeatureGroup.objects.create(
                group_id=group_id,
                description=(
                    f"Feature Group for type [{feature_type_slug}] features "
                    f"in category [{category.slug}]"
                ),
                feature_type=feature_type,
                source_category=category,
            )
            FeatureGroupCategoryLink.objects.create(
                feature_group=group, category=category, from_date=now
            )
        else:
            # groups created by hand or imported carry no derivation yet
            update_fields = []
            if group.source_category_id is None:
                group.source_category = category
                update_fields.append('source_category')
            if group.feature_type_id is None and feature_type is not None:
                group.feature_type = feature_type
                update_fields.append('feature_type')
            if update_fields:
                group.save(update_fields=update_fields)

            if not group.category_links.filter(category=category).valid_at(now).exists():
                # the link may have been removed from outside, put it back
                FeatureGroupCategoryLink.objects.create(
                    feature_group=group, category=category, from_date=now
                )

        current_links = group.feature_links.valid_at(now)
        linked_ids = set(current_links.values_list('feature_id', flat=True))
        for feature_id in sorted(feature_ids - linked_ids):
            FeatureGroupFeatureLink.objects.create(
                feature_group=group, feature_id=feature_id, from_date=now
            )

        current_links.exclude(feature_id__in=feature_ids).delete()
        return group

    def _unlink_stale_groups(self, category, feature_type_slugs, synced_group_ids):
        """
        Strip the links of groups derived from ``category`` whose feature type
        has no features this run. The groups themselves are kept.

        Groups synced in this run are never stale, even when a truncated id
        made them shared with another feature type.
        """
        stale_groups = (
            FeatureGroup.objects.filter(source_category=category)
            .exclude(feature_type__slug__in=feature_type_slugs)
            .exclude(pk__in=synced_group_ids)
        )
        for group in stale_groups:
            logger.info(
                "Unlinking feature group %s, no features of its type left in category %s",
                group.group_id, category.slug,
            )
            FeatureGroupFeatureLink.objects.filter(feature_group=group).delete()
            FeatureGroupCategoryLink.objects.filter(feature_group=group).delete()

    def _link_child_groups(self, category, child, now):
        """Link every group currently linked to ``child`` to ``category`` as well."""
        child_links = FeatureGroupCategoryLink.objects.filter(category=child).valid_at(now)
        for link in child_links.iterator():
            already_linked = (
                FeatureGroupCategoryLink.objects.filter(
                    category=category, feature_group_id=link.feature_group_id
                )
                .valid_at(now)
                .exists()
            )
            if not already_linked:
                FeatureGroupCategoryLink.objects.create(
                    feature_group_id=link.feature_group_id,
                    category=category,
                    from_date=now,
                )
