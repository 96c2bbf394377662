from rest_framework import serializers

from .models import Order, Product
from .pricing import BULK_MIN_QUANTITY


class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ["id", "name", "description", "price", "image_url", "in_stock"]


class ProductUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ["name", "description", "price", "image_url", "in_stock"]


class ImageUploadRequestSerializer(serializers.Serializer):
    filename = serializers.CharField(max_length=200)
    content_type = serializers.ChoiceField(
        choices=["image/jpeg", "image/png", "image/webp"],
        required=False,
        default="image/jpeg",
    )


class OrderCreateSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1, max_value=1000)
    order_type = serializers.ChoiceField(choices=Order.OrderType.choices, default=Order.OrderType.REGULAR)
    customer_name = serializers.CharField(max_length=40)
    customer_email = serializers.EmailField()
    customer_phone = serializers.RegexField(r"^[0-9\-\s]{9,20}$", max_length=20)
    shipping_address = serializers.CharField(max_length=255)

    def validate_product_id(self, value):
        product = Product.objects.filter(pk=value).first()
        if product is None:
            raise serializers.ValidationError("존재하지 않는 상품입니다.")
        if not product.in_stock:
            raise serializers.ValidationError("품절된 상품입니다.")
        self.context["product"] = product
        return value

    def validate(self, attrs):
        if attrs["order_type"] == Order.OrderType.BULK and attrs["quantity"] < BULK_MIN_QUANTITY:
            raise serializers.ValidationError(
                {"quantity": f"대량 구매는 {BULK_MIN_QUANTITY}개 이상부터 가능합니다."}
            )
        attrs["product"] = self.context["product"]
        return attrs


class OrderSerializer(serializers.ModelSerializer):
    """관리자용 전체 정보"""

    class Meta:
        model = Order
        fields = "__all__"


class OrderCheckoutSerializer(serializers.ModelSerializer):
    """주문번호로 조회하는 결제 화면용 (연락처/주소 제외)"""

    class Meta:
        model = Order
        fields = [
            "order_no",
            "product_name",
            "quantity",
            "unit_price",
            "shipping_fee",
            "total_amount",
            "order_type",
            "payment_status",
            "shipping_status",
            "created",
        ]


class PaymentOverrideSerializer(serializers.Serializer):
    payment_status = serializers.ChoiceField(choices=Order.PaymentStatus.choices)


class ShippingSerializer(serializers.Serializer):
    tracking_no = serializers.CharField(max_length=50)


class PaymentConfirmSerializer(serializers.Serializer):
    paymentKey = serializers.CharField(max_length=200)
    orderId = serializers.CharField(max_length=30)
    amount = serializers.IntegerField(min_value=0)
