"""Django admin configuration for orders."""

from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('total',)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('ref_number', 'supplier', 'forwarder', 'status', 'order_date', 'estimated_delivery_date')
    list_filter = ('status', 'order_date')
    search_fields = ('ref_number', 'supplier__name', 'forwarder__name')
    list_select_related = ('supplier', 'forwarder')
    inlines = [OrderItemInline]
