from django.contrib import admin, messages
from django.db import DatabaseError
from django.utils.html import format_html
from import_export import resources, fields
from import_export.admin import ImportExportModelAdmin
from import_export.widgets import ForeignKeyWidget
from adminsortable2.admin import SortableAdminMixin
from simple_history.admin import SimpleHistoryAdmin

from .exceptions import ReconciliationError
from .models import (
    Product,
    ProductAssociation,
    ProductContent,
    ProductPrice,
    GoodIdentification,
    ProductAttribute,
    ProductKeyword,
    Category,
    CategoryRollup,
    CategoryMembership,
    FeatureType,
    Feature,
    FeatureApplication,
    FeatureGroup,
    FeatureGroupCategoryLink,
    FeatureGroupFeatureLink,
)
from .services import (
    DiscontinuationService,
    FeatureGroupSyncService,
    VirtualVariantMergeService,
)


# =============================================================================
# Import/Export Resources
# =============================================================================

class ProductResource(resources.ModelResource):
    """Resource for importing/exporting products."""

    class Meta:
        model = Product
        import_id_fields = ['slug']
        fields = (
            'slug', 'internal_name', 'name', 'description', 'is_virtual',
            'is_variant', 'introduction_date', 'sales_discontinuation_date',
        )
        export_order = fields


class FeatureGroupResource(resources.ModelResource):
    """Resource for exporting derived feature groups."""

    feature_type_slug = fields.Field(
        column_name='feature_type',
        attribute='feature_type',
        widget=ForeignKeyWidget(FeatureType, 'slug')
    )
    source_category_slug = fields.Field(
        column_name='source_category',
        attribute='source_category',
        widget=ForeignKeyWidget(Category, 'slug')
    )

    class Meta:
        model = FeatureGroup
        import_id_fields = ['group_id']
        fields = ('group_id', 'description', 'feature_type_slug', 'source_category_slug')


# =============================================================================
# Inlines
# =============================================================================

class VariantAssociationInline(admin.TabularInline):
    model = ProductAssociation
    fk_name = 'product'
    extra = 0
    fields = ['product_to', 'association_type', 'from_date', 'thru_date', 'sequence_num']
    raw_id_fields = ['product_to']


class CategoryMembershipInline(admin.TabularInline):
    model = CategoryMembership
    extra = 0
    fields = ['category', 'from_date', 'thru_date', 'sequence_num']
    autocomplete_fields = ['category']


class FeatureApplicationInline(admin.TabularInline):
    model = FeatureApplication
    extra = 0
    fields = ['feature', 'application_type', 'from_date', 'thru_date', 'sequence_num']
    autocomplete_fields = ['feature']


class CategoryRollupInline(admin.TabularInline):
    model = CategoryRollup
    fk_name = 'parent'
    extra = 0
    fields = ['child', 'from_date', 'thru_date', 'sequence_num']
    autocomplete_fields = ['child']


class FeatureInline(admin.TabularInline):
    model = Feature
    extra = 1
    fields = ['description', 'abbreviation']


class FeatureGroupFeatureLinkInline(admin.TabularInline):
    model = FeatureGroupFeatureLink
    extra = 0
    fields = ['feature', 'from_date', 'thru_date', 'sequence_num']
    autocomplete_fields = ['feature']


class FeatureGroupCategoryLinkInline(admin.TabularInline):
    model = FeatureGroupCategoryLink
    extra = 0
    fields = ['category', 'from_date', 'thru_date']
    autocomplete_fields = ['category']


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Product)
class ProductAdmin(ImportExportModelAdmin, SimpleHistoryAdmin):
    resource_class = ProductResource
    list_display = [
        'internal_name', 'slug', 'is_virtual', 'is_variant',
        'valid_variant_count', 'discontinued_status', 'updated_at'
    ]
    list_filter = ['is_virtual', 'is_variant', 'sales_discontinuation_date']
    search_fields = ['internal_name', 'name', 'slug']
    prepopulated_fields = {'slug': ('internal_name',)}
    readonly_fields = ['variant_count', 'valid_variant_count', 'created_at', 'updated_at']
    inlines = [VariantAssociationInline, CategoryMembershipInline, FeatureApplicationInline]
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('internal_name', 'name', 'slug', 'description', 'long_description')
        }),
        ('Tipo', {
            'fields': ('is_virtual', 'is_variant', 'variant_count', 'valid_variant_count')
        }),
        ('Datas', {
            'fields': ('introduction_date', 'sales_discontinuation_date')
        }),
        ('Imagens', {
            'fields': ('small_image_url', 'medium_image_url', 'large_image_url', 'detail_image_url'),
            'classes': ('collapse',)
        }),
        ('Informações', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['merge_single_variant_virtuals', 'run_discontinuation_cascade']

    def discontinued_status(self, obj):
        if obj.is_discontinued():
            return format_html('<span style="color: red;">Descontinuado</span>')
        if obj.sales_discontinuation_date:
            return format_html('<span style="color: orange;">Agendado</span>')
        return format_html('<span style="color: green;">Ativo</span>')
    discontinued_status.short_description = 'Venda'

    @admin.action(description='Mesclar virtuais selecionados com sua única variante')
    def merge_single_variant_virtuals(self, request, queryset):
        service = VirtualVariantMergeService()
        merged = 0
        for product in queryset.virtuals():
            try:
                service.merge(product.pk)
            except ReconciliationError as e:
                self.message_user(request, str(e), level=messages.WARNING)
                continue
            merged += 1
        self.message_user(request, f'{merged} produtos virtuais mesclados.')

    @admin.action(description='Executar cascata de descontinuação')
    def run_discontinuation_cascade(self, request, queryset):
        service = DiscontinuationService()
        try:
            expired, discontinued = service.disc_virtuals_with_disc_variants()
            removed = service.remove_category_memberships_of_discontinued()
            duplicates = service.remove_duplicate_open_memberships()
        except DatabaseError as e:
            self.message_user(request, f'Erro na cascata: {e}', level=messages.ERROR)
            return
        self.message_user(
            request,
            f'{expired} variantes expiradas, {discontinued} virtuais descontinuados, '
            f'{removed} produtos removidos das categorias, {duplicates} duplicatas removidas.'
        )


@admin.register(Category)
class CategoryAdmin(SortableAdminMixin, admin.ModelAdmin):
    list_display = ['name', 'slug', 'is_active', 'feature_group_count', 'display_order']
    list_filter = ['is_active']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
    inlines = [CategoryRollupInline]

    actions = ['attach_features']

    def feature_group_count(self, obj):
        return obj.feature_group_links.valid_at().count()
    feature_group_count.short_description = 'Grupos'

    @admin.action(description='Sincronizar grupos de características')
    def attach_features(self, request, queryset):
        service = FeatureGroupSyncService()
        for category in queryset:
            try:
                service.attach_features_to_category(category)
            except ReconciliationError as e:
                self.message_user(request, str(e), level=messages.ERROR)
                return
        self.message_user(request, 'Grupos de características sincronizados.')


@admin.register(FeatureType)
class FeatureTypeAdmin(SortableAdminMixin, admin.ModelAdmin):
    list_display = ['name', 'slug', 'feature_count', 'display_order']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
    inlines = [FeatureInline]

    def feature_count(self, obj):
        return obj.features.count()
    feature_count.short_description = 'Características'


@admin.register(Feature)
class FeatureAdmin(admin.ModelAdmin):
    list_display = ['description', 'abbreviation', 'feature_type']
    list_filter = ['feature_type']
    search_fields = ['description', 'abbreviation', 'feature_type__name']
    autocomplete_fields = ['feature_type']


@admin.register(FeatureGroup)
class FeatureGroupAdmin(ImportExportModelAdmin):
    resource_class = FeatureGroupResource
    list_display = [
        'group_id', 'feature_type', 'source_category',
        'feature_count', 'category_count', 'created_at'
    ]
    list_filter = ['feature_type']
    search_fields = ['group_id', 'description']
    readonly_fields = ['created_at']
    inlines = [FeatureGroupFeatureLinkInline, FeatureGroupCategoryLinkInline]


@admin.register(ProductAssociation)
class ProductAssociationAdmin(admin.ModelAdmin):
    list_display = ['product', 'product_to', 'association_type', 'from_date', 'thru_date']
    list_filter = ['association_type']
    search_fields = ['product__internal_name', 'product_to__internal_name']
    raw_id_fields = ['product', 'product_to']
    date_hierarchy = 'from_date'


@admin.register(CategoryMembership)
class CategoryMembershipAdmin(admin.ModelAdmin):
    list_display = ['product', 'category', 'from_date', 'thru_date']
    list_filter = ['category']
    search_fields = ['product__internal_name', 'category__name']
    raw_id_fields = ['product']


@admin.register(ProductContent, ProductPrice, GoodIdentification, ProductAttribute, ProductKeyword)
class ProductRelatedAdmin(admin.ModelAdmin):
    raw_id_fields = ['product']
    search_fields = ['product__internal_name']


# =============================================================================
# Admin Site Configuration
# =============================================================================

admin.site.site_header = 'Catálogo Admin'
admin.site.site_title = 'Catálogo'
admin.site.index_title = 'Painel de Administração'
