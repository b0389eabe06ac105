"""
Management command to run a catalog reconciliation service.

Usage:
    python manage.py reconcile_catalog disc_virtuals_with_disc_variants
    python manage.py reconcile_catalog merge_virtual_with_single_variant --product=42 --dry-run
    python manage.py reconcile_catalog attach_product_features_to_category --category=tools
    python manage.py reconcile_catalog set_all_product_image_names --pattern='/img/${size}/${product_id}.jpg'
"""

from django.core.management.base import BaseCommand, CommandError

from apps.catalog.services.runner import SERVICES, run_service

# Services that honour --dry-run, all others write as they go
DRY_RUN_SERVICES = {'merge_virtual_with_single_variant'}


class Command(BaseCommand):
    """Run one of the catalog batch services."""

    help = 'Run a catalog reconciliation service (discontinuation, merge, feature groups, images)'

    def add_arguments(self, parser):
        parser.add_argument(
            'service',
            choices=sorted(SERVICES),
            help='Name of the service to run',
        )
        parser.add_argument(
            '--product',
            dest='product_id',
            help='Virtual product id for merge_virtual_with_single_variant',
        )
        parser.add_argument(
            '--category',
            dest='category_id',
            help='Category slug for attach_product_features_to_category',
        )
        parser.add_argument(
            '--no-subcategories',
            action='store_true',
            help='Only reconcile the given category, not its sub-categories',
        )
        parser.add_argument(
            '--remove-old',
            action='store_true',
            help='Remove the virtual product and its related records after merging',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Log what a merge would do without writing anything',
        )
        parser.add_argument(
            '--pattern',
            help='Image URL pattern, ${size} and ${product_id} are substituted',
        )
        parser.add_argument(
            '--locale',
            help='Locale of the result message, e.g. en or pt-br',
        )

    def handle(self, *args, **options):
        service = options['service']
        context = {
            'productId': options['product_id'],
            'productCategoryId': options['category_id'],
            'doSubCategories': 'N' if options['no_subcategories'] else 'Y',
            'removeOld': options['remove_old'],
            'test': options['dry_run'],
            'pattern': options['pattern'],
            'locale': options['locale'],
        }

        if options['dry_run']:
            if service not in DRY_RUN_SERVICES:
                raise CommandError(f'--dry-run is not supported by {service}')
            self.stdout.write(self.style.WARNING('Running in dry-run mode - nothing will be stored'))

        result = run_service(service, context)

        if result.is_test_run:
            self.stdout.write(self.style.WARNING(result.message))
            return
        if not result.is_success:
            raise CommandError(result.message)

        self.stdout.write(self.style.SUCCESS(result.message))
