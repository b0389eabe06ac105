"""
Invocation boundary for the catalog batch services.

Each service takes a context of plain key/value parameters and returns a
``ServiceResult``. Recoverable reconciliation errors and store failures are
turned into error results here; nothing below this layer catches them.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from django.db import DatabaseError
from django.utils import translation
from django.utils.translation import gettext as _

from apps.catalog.config import ReconciliationConfig
from apps.catalog.exceptions import MergeDryRun, ReconciliationError
from .discontinuation import DiscontinuationService
from .feature_groups import FeatureGroupSyncService
from .images import ProductImageService
from .merge import VirtualVariantMergeService

logger = logging.getLogger(__name__)

SUCCESS = 'success'
ERROR = 'error'


@dataclass(frozen=True)
class ServiceResult:
    status: str
    message: str = ''
    is_test_run: bool = False
    data: Optional[Dict[str, Any]] = None

    @property
    def is_success(self):
        return self.status == SUCCESS

    @classmethod
    def success(cls, message='', **data):
        return cls(SUCCESS, message, data=data or None)

    @classmethod
    def error(cls, message, is_test_run=False):
        return cls(ERROR, message, is_test_run=is_test_run)


def as_bool(value, default=False):
    """Interpret context flags given as booleans or Y/N style strings."""
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().upper() in ('Y', 'YES', 'TRUE', '1')


def _disc_virtuals_with_disc_variants(context, config):
    expired, discontinued = DiscontinuationService(config).disc_virtuals_with_disc_variants()
    return ServiceResult.success(
        _("Expired variants of %(expired)s products, discontinued %(discontinued)s virtual products.")
        % {'expired': expired, 'discontinued': discontinued},
        expired=expired,
        discontinued=discontinued,
    )


def _remove_category_members_of_disc_products(context, config):
    count = DiscontinuationService(config).remove_category_memberships_of_discontinued()
    return ServiceResult.success(
        _("Removed category members for %(count)s sales discontinued products.") % {'count': count},
        count=count,
    )


def _remove_duplicate_open_ended_category_members(context, config):
    count = DiscontinuationService(config).remove_duplicate_open_memberships()
    return ServiceResult.success(
        _("Removed duplicate category members for %(count)s products.") % {'count': count},
        count=count,
    )


def _make_standalone_from_single_variant_virtuals(context, config):
    one_only, one_valid = (
        VirtualVariantMergeService(config).make_standalone_from_single_variant_virtuals()
    )
    return ServiceResult.success(
        _("Merged %(one_only)s virtuals with one variant and %(one_valid)s virtuals with one valid variant.")
        % {'one_only': one_only, 'one_valid': one_valid},
        one_only=one_only,
        one_valid=one_valid,
    )


def _merge_virtual_with_single_variant(context, config):
    product_id = context.get('productId')
    if not product_id:
        return ServiceResult.error(_("The productId parameter is required."))

    merged = VirtualVariantMergeService(config).merge(
        product_id,
        remove_old=as_bool(context.get('removeOld')),
        test=as_bool(context.get('test')),
    )
    return ServiceResult.success(
        _("Virtual product %(virtual)s merged into product %(product)s.")
        % {'virtual': product_id, 'product': merged.pk},
        product_id=merged.pk,
    )


def _attach_product_features_to_category(context, config):
    category = context.get('productCategoryId')
    if not category:
        return ServiceResult.error(_("The productCategoryId parameter is required."))

    # default to true
    do_subcategories = context.get('doSubCategories') != 'N'
    FeatureGroupSyncService(config).attach_features_to_category(
        category, do_subcategories=do_subcategories
    )
    return ServiceResult.success(
        _("Feature groups attached to category %(category)s.") % {'category': category}
    )


def _set_all_product_image_names(context, config):
    count = ProductImageService(config).set_all_product_image_names(context.get('pattern'))
    return ServiceResult.success(
        _("Image URLs set for %(count)s products.") % {'count': count}, count=count
    )


def _clear_all_virtual_product_image_names(context, config):
    count = ProductImageService(config).clear_all_virtual_product_image_names()
    return ServiceResult.success(
        _("Image URLs cleared for %(count)s products.") % {'count': count}, count=count
    )


SERVICES: Dict[str, Callable] = {
    'disc_virtuals_with_disc_variants': _disc_virtuals_with_disc_variants,
    'remove_category_members_of_disc_products': _remove_category_members_of_disc_products,
    'remove_duplicate_open_ended_category_members': _remove_duplicate_open_ended_category_members,
    'make_standalone_from_single_variant_virtuals': _make_standalone_from_single_variant_virtuals,
    'merge_virtual_with_single_variant': _merge_virtual_with_single_variant,
    'attach_product_features_to_category': _attach_product_features_to_category,
    'set_all_product_image_names': _set_all_product_image_names,
    'clear_all_virtual_product_image_names': _clear_all_virtual_product_image_names,
}


def run_service(
    name: str,
    context: Optional[Mapping[str, Any]] = None,
    config: Optional[ReconciliationConfig] = None,
) -> ServiceResult:
    """Run the named service and report its outcome as a ``ServiceResult``."""
    context = dict(context or {})
    try:
        service = SERVICES[name]
    except KeyError:
        raise ValueError(f"Unknown catalog service: {name}")

    config = config or ReconciliationConfig.from_settings()
    with translation.override(context.get('locale')):
        try:
            return service(context, config)
        except MergeDryRun as e:
            logger.info(str(e))
            return ServiceResult.error(
                _("Test mode - virtual product %(virtual)s would have been merged into %(product)s.")
                % {'virtual': e.product_id, 'product': e.variant_id},
                is_test_run=True,
            )
        except ReconciliationError as e:
            logger.info("Service %s did not complete: %s", name, e)
            return ServiceResult.error(str(e))
        except (DatabaseError, ValueError) as e:
            message = _("Entity error running %(service)s: %(error)s") % {
                'service': name, 'error': e,
            }
            logger.exception(message)
            return ServiceResult.error(message)
