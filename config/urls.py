from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse


def health_check(request):
    return JsonResponse({
        'status': 200,
        'data': "OK!"
    })

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', health_check),
    path('api/auth/', include('accounts.urls')),
    path('api/', include('seminars.urls')),
    path('api/', include('reviews.urls')),
    path('api/', include('orders.urls')),
    path('api/', include('siteconfig.urls')),
    path('api/admin/', include('dashboard.urls')),
]
