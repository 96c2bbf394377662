from django.urls import path
from .views import LoginView, LogoutView, MeView, PasswordChangeView

urlpatterns = [
    # api/auth/
    path('login', LoginView.as_view(), name='login'),
    path('logout', LogoutView.as_view(), name='logout'),
    path('me', MeView.as_view(), name='me'),
    path('change-password', PasswordChangeView.as_view(), name='change-password'),
]
