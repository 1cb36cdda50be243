from django.contrib import admin
from django.utils.html import format_html
from import_export import resources, fields
from import_export.admin import ImportExportModelAdmin
from import_export.widgets import ForeignKeyWidget
from adminsortable2.admin import SortableAdminBase, SortableInlineAdminMixin
from simple_history.admin import SimpleHistoryAdmin

from apps.catalog.choices import ClassificationStatus
from apps.catalog.services import availability
from .models import (
    Brand,
    Product,
    ProductDiscount,
    PreOrderProduct,
    Classification,
    ClassificationImage,
)


# =============================================================================
# Import/Export Resources
# =============================================================================

class ClassificationResource(resources.ModelResource):
    """Resource for importing/exporting classifications."""

    product_slug = fields.Field(
        column_name='product',
        attribute='product',
        widget=ForeignKeyWidget(Product, 'slug')
    )

    class Meta:
        model = Classification
        fields = (
            'id', 'product_slug', 'title', 'type', 'color', 'size', 'other',
            'price', 'quantity', 'status', 'event_quantity'
        )
        export_order = fields


# =============================================================================
# Inlines
# =============================================================================

class ClassificationImageInline(SortableInlineAdminMixin, admin.TabularInline):
    model = ClassificationImage
    extra = 1
    fields = ['image', 'is_active', 'display_order', 'image_preview']
    readonly_fields = ['image_preview']

    def image_preview(self, obj):
        if obj.image:
            return format_html(
                '<img src="{}" style="max-height: 50px; max-width: 100px;" />',
                obj.thumbnail.url if obj.thumbnail else obj.image.url
            )
        return '-'
    image_preview.short_description = 'Preview'


class ClassificationInline(admin.TabularInline):
    model = Classification
    extra = 0
    fields = ['title', 'color', 'size', 'other', 'price', 'quantity', 'status']
    readonly_fields = ['title']
    show_change_link = True


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'product_count', 'is_active', 'created_at']
    list_filter = ['is_active']
    list_editable = ['is_active']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}

    def product_count(self, obj):
        return obj.products.count()
    product_count.short_description = 'Produtos'


@admin.register(Product)
class ProductAdmin(SimpleHistoryAdmin):
    list_display = ['name', 'brand', 'slug', 'classification_count', 'status', 'created_at']
    list_filter = ['status', 'brand', 'created_at']
    search_fields = ['name', 'slug', 'description', 'brand__name']
    autocomplete_fields = ['brand']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['classification_count', 'created_at', 'updated_at']
    inlines = [ClassificationInline]

    fieldsets = (
        (None, {
            'fields': ('brand', 'name', 'slug', 'description', 'status')
        }),
        ('Informações', {
            'fields': ('classification_count', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(Classification)
class ClassificationAdmin(SortableAdminBase, ImportExportModelAdmin, SimpleHistoryAdmin):
    resource_class = ClassificationResource
    list_display = [
        'title', 'product', 'price', 'quantity', 'stock_status',
        'status', 'event_display', 'primary_image_preview'
    ]
    list_filter = ['status', 'type', 'product__brand', 'product']
    list_editable = ['price', 'quantity', 'status']
    search_fields = ['title', 'color', 'size', 'other', 'product__name']
    autocomplete_fields = ['product']
    raw_id_fields = ['product_discount', 'pre_order_product']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ClassificationImageInline]
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('product', 'title', 'type', 'status')
        }),
        ('Atributos', {
            'fields': ('color', 'size', 'other')
        }),
        ('Preço e estoque', {
            'fields': ('price', 'quantity')
        }),
        ('Eventos', {
            'fields': ('product_discount', 'pre_order_product', 'event_quantity')
        }),
        ('Informações', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['activate_classifications', 'hide_classifications', 'mark_out_of_stock']

    def stock_status(self, obj):
        stock = availability.effective_stock(obj.to_snapshot())
        if stock <= 0:
            return format_html('<span style="color: red;">Sem estoque</span>')
        return format_html('<span style="color: green;">{} em estoque</span>', stock)
    stock_status.short_description = 'Status Estoque'

    def event_display(self, obj):
        return availability.event_type(obj.to_snapshot())
    event_display.short_description = 'Evento'

    def primary_image_preview(self, obj):
        img = obj.primary_image
        if img:
            return format_html(
                '<img src="{}" style="max-height: 40px; max-width: 60px;" />',
                img.thumbnail.url if img.thumbnail else img.image.url
            )
        return '-'
    primary_image_preview.short_description = 'Imagem'

    @admin.action(description='Ativar variações selecionadas')
    def activate_classifications(self, request, queryset):
        count = queryset.update(status=ClassificationStatus.ACTIVE)
        self.message_user(request, f'{count} variações ativadas.')

    @admin.action(description='Ocultar variações selecionadas')
    def hide_classifications(self, request, queryset):
        count = queryset.update(status=ClassificationStatus.HIDDEN)
        self.message_user(request, f'{count} variações ocultadas.')

    @admin.action(description='Marcar como sem estoque')
    def mark_out_of_stock(self, request, queryset):
        count = queryset.update(quantity=0)
        self.message_user(request, f'{count} variações atualizadas.')


@admin.register(ProductDiscount)
class ProductDiscountAdmin(admin.ModelAdmin):
    list_display = ['product', 'discount_display', 'status', 'start_time', 'end_time']
    list_filter = ['status', 'start_time']
    list_editable = ['status']
    search_fields = ['product__name']
    autocomplete_fields = ['product']
    date_hierarchy = 'start_time'

    def discount_display(self, obj):
        return f'{obj.discount * 100:.0f}%'
    discount_display.short_description = 'Desconto'


@admin.register(PreOrderProduct)
class PreOrderProductAdmin(admin.ModelAdmin):
    list_display = ['product', 'status', 'start_time', 'end_time']
    list_filter = ['status', 'start_time']
    list_editable = ['status']
    search_fields = ['product__name']
    autocomplete_fields = ['product']
    date_hierarchy = 'start_time'


# =============================================================================
# Admin Site Configuration
# =============================================================================

admin.site.site_header = 'Storefront Admin'
admin.site.site_title = 'Storefront'
admin.site.index_title = 'Painel de Administração'
