from django.contrib import admin

from .models import Order, Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "price", "in_stock")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("order_no", "customer_name", "order_type", "quantity", "total_amount", "payment_status", "shipping_status", "created")
    list_filter = ("payment_status", "shipping_status", "order_type")
    search_fields = ("order_no", "customer_name", "customer_phone")
    readonly_fields = ("order_no", "unit_price", "shipping_fee", "total_amount", "toss_payment_key")
