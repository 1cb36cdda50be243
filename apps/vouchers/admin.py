from django.contrib import admin
from django.utils.html import format_html
from import_export import resources, fields
from import_export.admin import ImportExportModelAdmin
from import_export.widgets import ForeignKeyWidget
from simple_history.admin import SimpleHistoryAdmin

from apps.catalog.choices import DiscountType
from apps.catalog.models import Brand
from .models import Voucher


class VoucherResource(resources.ModelResource):
    """Resource for importing/exporting vouchers."""

    brand_slug = fields.Field(
        column_name='brand',
        attribute='brand',
        widget=ForeignKeyWidget(Brand, 'slug')
    )

    class Meta:
        model = Voucher
        import_id_fields = ['code']
        fields = (
            'code', 'name', 'scope', 'brand_slug', 'discount_type',
            'discount_value', 'max_discount', 'min_order_value', 'apply_type',
            'start_time', 'end_time', 'quantity', 'used_count', 'is_active'
        )
        export_order = fields


@admin.register(Voucher)
class VoucherAdmin(ImportExportModelAdmin, SimpleHistoryAdmin):
    resource_class = VoucherResource
    list_display = [
        'code', 'name', 'scope', 'brand', 'discount_display',
        'min_order_value', 'usage_display', 'start_time', 'end_time', 'is_active'
    ]
    list_filter = ['scope', 'discount_type', 'apply_type', 'is_active', 'brand']
    list_editable = ['is_active']
    search_fields = ['code', 'name', 'brand__name']
    autocomplete_fields = ['brand']
    filter_horizontal = ['applicable_classifications']
    readonly_fields = ['used_count', 'created_at', 'updated_at']
    date_hierarchy = 'start_time'

    fieldsets = (
        (None, {
            'fields': ('code', 'name', 'scope', 'brand', 'is_active')
        }),
        ('Desconto', {
            'fields': ('discount_type', 'discount_value', 'max_discount', 'min_order_value')
        }),
        ('Aplicação', {
            'fields': ('apply_type', 'applicable_classifications')
        }),
        ('Validade e uso', {
            'fields': ('start_time', 'end_time', 'quantity', 'used_count')
        }),
        ('Informações', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['activate_vouchers', 'deactivate_vouchers']

    def discount_display(self, obj):
        if obj.discount_type == DiscountType.PERCENTAGE:
            return f'{obj.discount_value * 100:.0f}%'
        return f'R$ {obj.discount_value:.2f}'
    discount_display.short_description = 'Desconto'

    def usage_display(self, obj):
        if obj.quantity is None:
            return f'{obj.used_count} / ∞'
        if obj.is_out_of_stock:
            return format_html(
                '<span style="color: red;">{} / {}</span>', obj.used_count, obj.quantity
            )
        return f'{obj.used_count} / {obj.quantity}'
    usage_display.short_description = 'Usos'

    @admin.action(description='Ativar cupons selecionados')
    def activate_vouchers(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'{count} cupons ativados.')

    @admin.action(description='Desativar cupons selecionados')
    def deactivate_vouchers(self, request, queryset):
        count = queryset.update(is_active=False)
        self.message_user(request, f'{count} cupons desativados.')
