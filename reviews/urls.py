from django.urls import path

from .views import ReviewAdminListView, ReviewListCreateView, ReviewPasscodeView, ReviewStatusUpdateView

urlpatterns = [
    # api/reviews
    path('reviews', ReviewListCreateView.as_view()),
    path('reviews/verify-passcode', ReviewPasscodeView.as_view()),
    path('reviews/all', ReviewAdminListView.as_view()),
    path('reviews/<int:review_id>/status', ReviewStatusUpdateView.as_view()),
]
