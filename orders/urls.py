from django.urls import path

from .views import (
    BulkPasscodeView,
    MemberCodeView,
    OrderCheckoutView,
    OrderListCreateView,
    OrderPaymentOverrideView,
    OrderShippingView,
    PaymentConfirmView,
    PaymentWebhookView,
    ProductImageUploadUrlView,
    ProductListView,
    ProductUpdateView,
)

urlpatterns = [
    path('products', ProductListView.as_view()),
    path('products/<int:pk>', ProductUpdateView.as_view()),
    path('products/<int:pk>/image-upload-url', ProductImageUploadUrlView.as_view()),

    # 고정 경로를 주문번호 패턴보다 먼저 둔다
    path('orders', OrderListCreateView.as_view()),
    path('orders/verify-bulk-passcode', BulkPasscodeView.as_view()),
    path('orders/verify-member-code', MemberCodeView.as_view()),
    path('orders/<int:pk>/payment', OrderPaymentOverrideView.as_view()),
    path('orders/<int:pk>/shipping', OrderShippingView.as_view()),
    path('orders/<str:order_no>', OrderCheckoutView.as_view()),

    path('payments/confirm', PaymentConfirmView.as_view()),
    path('payments/webhook', PaymentWebhookView.as_view()),
]
