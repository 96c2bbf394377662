import logging
import uuid

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from accounts.guards import IsAdminRole
from common.exceptions import (
    AmountMismatch,
    CapabilityRequired,
    PaymentAlreadyProcessed,
    PaymentProviderError,
)
from common.responses import success_response
from common.throttles import STRICT_THROTTLES, StrictWriteThrottleMixin
from dashboard.audit import record_audit
from notifications import events
from notifications.dispatch import notify_after_commit
from siteconfig import capabilities
from siteconfig.capabilities import Capability
from siteconfig.passcodes import PasscodeKind
from siteconfig.services import site_settings
from siteconfig.views import PasscodeVerifyView
from . import payments
from .models import Order, Product
from .pricing import quote
from .serializers import (
    ImageUploadRequestSerializer,
    OrderCheckoutSerializer,
    OrderCreateSerializer,
    OrderSerializer,
    PaymentConfirmSerializer,
    PaymentOverrideSerializer,
    ProductSerializer,
    ProductUpdateSerializer,
    ShippingSerializer,
)

logger = logging.getLogger(__name__)

# 주문 유형별로 필요한 capability
REQUIRED_CAPABILITY = {
    Order.OrderType.BULK.value: Capability.BULK_ACCESS,
    Order.OrderType.MEMBER.value: Capability.MEMBER_ACCESS,
}


# ---- 상품 ----

class ProductListView(APIView):

    def get(self, request):
        products = Product.objects.all()
        return success_response("ok", products=ProductSerializer(products, many=True).data)


class ProductUpdateView(APIView):
    permission_classes = [IsAdminRole]

    def patch(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        before = ProductSerializer(product).data

        serializer = ProductUpdateSerializer(product, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()

        after = ProductSerializer(product).data
        record_audit(request, "product.update", "product", product.pk, old=dict(before), new=dict(after))
        return success_response("상품 정보가 수정되었습니다.", product=after)


class ProductImageUploadUrlView(APIView):
    permission_classes = [IsAdminRole]

    def post(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        serializer = ImageUploadRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        file_extension = serializer.validated_data["filename"].rsplit(".", 1)[-1].lower()
        object_key = f"products/{product.pk}/{uuid.uuid4()}.{file_extension}"

        s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
            region_name=settings.AWS_REGION,
        )

        try:
            # 업로드용 PUT presigned URL (1시간)
            presigned_url = s3_client.generate_presigned_url(
                ClientMethod='put_object',
                Params={
                    'Bucket': settings.AWS_STORAGE_BUCKET_NAME,
                    'Key': object_key,
                    'ContentType': serializer.validated_data["content_type"],
                },
                ExpiresIn=3600,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Presigned URL generation failed: %s", e)
            raise APIException("업로드 URL을 생성할 수 없습니다.")

        s3_url = f"https://{settings.AWS_STORAGE_BUCKET_NAME}.s3.{settings.AWS_REGION}.amazonaws.com/{object_key}"
        return success_response("ok", presigned_url=presigned_url, s3_url=s3_url)


# ---- 구매 권한 ----

class BulkPasscodeView(PasscodeVerifyView):
    passcode_kind = PasscodeKind.BULK
    success_message = "대량 구매 권한이 확인되었습니다."


class MemberCodeView(PasscodeVerifyView):
    passcode_kind = PasscodeKind.MEMBER
    success_message = "회원가 구매 권한이 확인되었습니다."


# ---- 주문 ----

def _requested_order_type(data):
    order_type = data.get("order_type") if hasattr(data, "get") else None
    if not isinstance(order_type, str):
        # 문자열이 아니면 아래 serializer의 선택지 검사에서 400으로 거절된다
        return Order.OrderType.REGULAR.value
    return order_type or Order.OrderType.REGULAR.value


class OrderListCreateView(StrictWriteThrottleMixin, APIView):

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAdminRole()]
        return [AllowAny()]

    def get(self, request):
        orders = Order.objects.select_related("product")
        for field in ("payment_status", "shipping_status", "order_type"):
            value = request.query_params.get(field)
            if value:
                orders = orders.filter(**{field: value})
        return success_response("ok", orders=OrderSerializer(orders, many=True).data)

    def post(self, request):
        # 대량/회원가 주문은 입력 검증 전에 권한부터 확인 (행 생성 없음)
        required = REQUIRED_CAPABILITY.get(_requested_order_type(request.data))
        if required is not None:
            capabilities.require(request.session, required)

        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        product = data["product"]
        price = quote(data["order_type"], data["quantity"], site_settings.get(refresh=True))
        customer_type = Order.CustomerType.MEMBER if request.user.is_authenticated else Order.CustomerType.GUEST

        with transaction.atomic():
            # 권한 소비와 주문 생성은 같은 트랜잭션
            if required is not None and not capabilities.consume(request.session, required):
                raise CapabilityRequired()

            order = Order.objects.create(
                product=product,
                product_name=product.name,
                quantity=data["quantity"],
                unit_price=price.unit_price,
                shipping_fee=price.shipping_fee,
                total_amount=price.total_amount,
                customer_name=data["customer_name"],
                customer_email=data["customer_email"],
                customer_phone=data["customer_phone"],
                shipping_address=data["shipping_address"],
                customer_type=customer_type,
                order_type=data["order_type"],
            )
            notify_after_commit(events.order_created, order.pk)

        logger.info("Order %s created (%s, qty=%d)", order.order_no, order.order_type, order.quantity)
        return success_response(
            "주문이 접수되었습니다.",
            status_code=status.HTTP_201_CREATED,
            order=OrderCheckoutSerializer(order).data,
            payment={
                "client_key": settings.TOSS_CLIENT_KEY,
                "order_id": order.order_no,
                "order_name": f"{order.product_name} {order.quantity}개",
                "amount": order.total_amount,
            },
        )


class OrderCheckoutView(APIView):

    def get(self, request, order_no):
        order = get_object_or_404(Order, order_no=order_no)
        return success_response("ok", order=OrderCheckoutSerializer(order).data)


class OrderPaymentOverrideView(APIView):
    permission_classes = [IsAdminRole]

    def patch(self, request, pk):
        serializer = PaymentOverrideSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            order = get_object_or_404(Order.objects.select_for_update(), pk=pk)
            previous_status = order.payment_status

            order.override_payment(serializer.validated_data["payment_status"])
            order.save(update_fields=["payment_status", "paid_at", "updated"])

            record_audit(
                request, "order.payment", "order", order.pk,
                old={"payment_status": previous_status},
                new={"payment_status": order.payment_status},
            )
            if order.payment_status == Order.PaymentStatus.SUCCESS and previous_status != order.payment_status:
                notify_after_commit(events.order_paid, order.pk)

        return success_response("결제 상태가 변경되었습니다.", order=OrderSerializer(order).data)


class OrderShippingView(APIView):
    permission_classes = [IsAdminRole]

    def patch(self, request, pk):
        serializer = ShippingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            order = get_object_or_404(Order.objects.select_for_update(), pk=pk)
            previous_status = order.shipping_status

            order.ship(serializer.validated_data["tracking_no"])
            order.save(update_fields=["shipping_status", "tracking_no", "shipped_at", "updated"])

            record_audit(
                request, "order.shipping", "order", order.pk,
                old={"shipping_status": previous_status},
                new={"shipping_status": order.shipping_status, "tracking_no": order.tracking_no},
            )
            notify_after_commit(events.order_shipped, order.pk)

        return success_response("발송 처리되었습니다.", order=OrderSerializer(order).data)


# ---- 결제 ----

class PaymentConfirmView(APIView):
    throttle_classes = STRICT_THROTTLES
    throttle_scope = "strict"

    def post(self, request):
        serializer = PaymentConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment_key = serializer.validated_data["paymentKey"]
        order_no = serializer.validated_data["orderId"]
        amount = serializer.validated_data["amount"]

        with transaction.atomic():
            order = Order.objects.select_for_update().filter(order_no=order_no).first()
            if order is None:
                raise NotFound("주문을 찾을 수 없습니다.")
            if order.payment_status != Order.PaymentStatus.WAITING:
                raise PaymentAlreadyProcessed()
            if amount != order.total_amount:
                logger.warning(
                    "Payment amount mismatch for %s (expected %d, got %d)",
                    order.order_no, order.total_amount, amount,
                )
                raise AmountMismatch()

            try:
                payment = payments.toss_client.confirm_payment(payment_key, order.order_no, amount)
            except payments.TossPaymentsError as e:
                logger.error("Toss confirm failed for %s: %s (%s)", order.order_no, e, e.code)
                raise PaymentProviderError()

            new_status = payments.map_payment_status(payment.get("status"))
            if new_status is not None:
                order.record_payment_result(new_status, payment_key)
                order.save(update_fields=["payment_status", "toss_payment_key", "paid_at", "updated"])
                if new_status == Order.PaymentStatus.SUCCESS:
                    notify_after_commit(events.order_paid, order.pk)

        if order.payment_status == Order.PaymentStatus.SUCCESS:
            message = "결제가 완료되었습니다."
        elif order.payment_status == Order.PaymentStatus.FAILED:
            message = "결제가 실패했습니다."
        else:
            message = "결제 확인 중입니다."

        return success_response(message, order=OrderCheckoutSerializer(order).data)


class PaymentWebhookView(APIView):
    """
    Toss 결제 상태 변경 웹훅.
    본문은 신뢰하지 않고 paymentKey로 Toss에 다시 조회한 결과만 반영한다.
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        body = request.data if hasattr(request.data, "get") else {}
        data = body.get("data") if isinstance(body.get("data"), dict) else body

        payment_key = data.get("paymentKey")
        order_no = data.get("orderId")
        if not payment_key or not order_no:
            return success_response("ignored", processed=False)

        try:
            payment = payments.toss_client.get_payment(payment_key)
        except payments.TossPaymentsError as e:
            logger.error("Toss lookup failed for webhook %s: %s", order_no, e)
            raise PaymentProviderError()

        if payment.get("orderId") != order_no:
            logger.warning("Webhook order mismatch: %s != %s", payment.get("orderId"), order_no)
            return success_response("ignored", processed=False)

        with transaction.atomic():
            order = Order.objects.select_for_update().filter(order_no=order_no).first()
            if order is None:
                logger.warning("Order not found for webhook: %s", order_no)
                return success_response("ignored", processed=False)

            if order.payment_status != Order.PaymentStatus.WAITING:
                return success_response("already processed", processed=False)

            new_status = payments.map_payment_status(payment.get("status"))
            if new_status is None:
                return success_response("pending", processed=False)

            if new_status == Order.PaymentStatus.SUCCESS and payment.get("totalAmount") != order.total_amount:
                logger.warning("Webhook amount mismatch for %s", order.order_no)
                return success_response("ignored", processed=False)

            order.record_payment_result(new_status, payment_key)
            order.save(update_fields=["payment_status", "toss_payment_key", "paid_at", "updated"])
            if new_status == Order.PaymentStatus.SUCCESS:
                notify_after_commit(events.order_paid, order.pk)

        logger.info("Webhook applied to %s: %s", order.order_no, order.payment_status)
        return success_response("ok", processed=True, payment_status=order.payment_status)
