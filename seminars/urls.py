from django.urls import path

from .views import (
    ApplicationListCreateView,
    ApplicationLookupView,
    ApplicationStatusUpdateView,
    AttendeeVerifyView,
)

urlpatterns = [
    path('applications', ApplicationListCreateView.as_view()),
    path('applications/status', ApplicationLookupView.as_view()),
    path('applications/<int:pk>/status', ApplicationStatusUpdateView.as_view()),
    path('verify-seminar-attendee', AttendeeVerifyView.as_view()),
]
