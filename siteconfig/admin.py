from django.contrib import admin

from .models import SiteSettings


@admin.register(SiteSettings)
class SiteSettingsAdmin(admin.ModelAdmin):
    exclude = ("review_passcode", "bulk_purchase_passcode", "member_discount_code")
    list_display = ("seminar_date", "product_regular_price", "product_member_price", "sms_enabled", "updated")

    def has_add_permission(self, request):
        return not SiteSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
