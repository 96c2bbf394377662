from django.contrib import admin

from .models import Application


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ("name", "phone", "email", "status", "created")
    list_filter = ("status", "uniform_size")
    search_fields = ("name", "phone", "email", "depositor_name")
    readonly_fields = ("status",)

    def has_delete_permission(self, request, obj=None):
        return False
