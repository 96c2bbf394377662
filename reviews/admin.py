from django.contrib import admin

from .models import Review


class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "author_name", "rating", "status", "filter_flagged", "created")
    list_filter = ("status", "filter_flagged")
    search_fields = ("review_body", "author_name")
    ordering = ("-created",)

admin.site.register(Review, ReviewAdmin)
