from django.urls import path

from .views import AuditLogListView, SmsLogListView, SummaryView

urlpatterns = [
    # api/admin/
    path('summary', SummaryView.as_view()),
    path('audit-logs', AuditLogListView.as_view()),
    path('sms-logs', SmsLogListView.as_view()),
]
