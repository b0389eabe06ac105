"""
Errors raised by the catalog reconciliation services.

Subclasses of ``ReconciliationError`` describe a problem with a single unit of
work (one merge, one candidate) and are reported without stopping a batch.
Store failures surface as Django's ``DatabaseError`` and abort the pass.
"""

from django.utils.translation import gettext as _


class ReconciliationError(Exception):
    """Base class for recoverable reconciliation errors."""


class ProductNotFound(ReconciliationError):

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(_("Product %(product_id)s not found") % {'product_id': product_id})


class AmbiguousMerge(ReconciliationError):
    """More than one valid variant association where exactly one is required."""

    def __init__(self, product_id, count):
        self.product_id = product_id
        self.count = count
        super().__init__(
            _("Found %(count)s valid variants for virtual product %(product_id)s, expected one")
            % {'count': count, 'product_id': product_id}
        )


class NoValidVariant(ReconciliationError):

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(
            _("Did not find any valid variants for virtual product %(product_id)s")
            % {'product_id': product_id}
        )


class MergeDryRun(ReconciliationError):
    """Raised at the end of a test-mode merge that would have succeeded."""

    def __init__(self, product_id, variant_id):
        self.product_id = product_id
        self.variant_id = variant_id
        super().__init__(
            _("Test mode: virtual product %(product_id)s would have been merged into %(variant_id)s")
            % {'product_id': product_id, 'variant_id': variant_id}
        )


class CategoryNotFound(ReconciliationError):

    def __init__(self, category_id):
        self.category_id = category_id
        super().__init__(_("Category %(category_id)s not found") % {'category_id': category_id})


class CategoryCycleError(ReconciliationError):
    """The category rollup graph loops back onto a category being processed."""

    def __init__(self, path):
        self.path = list(path)
        super().__init__(
            _("Category rollup cycle: %(path)s") % {'path': " > ".join(self.path)}
        )
