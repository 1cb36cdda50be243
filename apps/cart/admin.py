from django.contrib import admin

from .models import CartItem


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ['user', 'classification', 'brand', 'quantity', 'updated_at']
    list_filter = ['classification__product__brand', 'updated_at']
    search_fields = ['user__username', 'classification__title', 'classification__product__name']
    autocomplete_fields = ['classification']
    raw_id_fields = ['user']
    readonly_fields = ['created_at', 'updated_at']
    list_select_related = ['user', 'classification__product__brand']

    def brand(self, obj):
        return obj.classification.product.brand
    brand.short_description = 'Marca'
