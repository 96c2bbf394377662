from django.urls import path

from .views import PublicSettingsView, SiteSettingsView

urlpatterns = [
    path('settings', SiteSettingsView.as_view()),
    path('settings/public', PublicSettingsView.as_view()),
]
