from django.contrib import admin

from .models import SmsLog


@admin.register(SmsLog)
class SmsLogAdmin(admin.ModelAdmin):
    list_display = ("created", "event_type", "phone_number", "status", "error_message")
    list_filter = ("status", "event_type")
    search_fields = ("phone_number", "related_id")
