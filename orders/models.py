import secrets
import time

from django.db import models
from django.utils import timezone

from common.exceptions import InvalidTransition
from common.models import BaseModel
from common.transitions import check_transition


def generate_order_no() -> str:
    # TM + epoch(ms) + 3자리 난수
    return f"TM{int(time.time() * 1000)}{secrets.randbelow(1000):03d}"


class Product(BaseModel):
    id = models.AutoField(primary_key=True)
    name = models.CharField(max_length=100)
    description = models.TextField()
    price = models.PositiveIntegerField() # 표시용 정가
    image_url = models.URLField(max_length=500, blank=True, default="")
    in_stock = models.BooleanField(default=True)

    class Meta:
        db_table = "products"
        ordering = ["id"]

    def __str__(self):
        return self.name


class Order(BaseModel):

    class CustomerType(models.TextChoices):
        GUEST = "guest", "비회원"
        MEMBER = "member", "회원"

    class OrderType(models.TextChoices):
        REGULAR = "regular", "일반"
        MEMBER = "member", "회원가"
        BULK = "bulk", "대량 구매"

    class PaymentStatus(models.TextChoices):
        WAITING = "waiting", "결제 대기"
        SUCCESS = "success", "결제 완료"
        FAILED = "failed", "결제 실패"

    class ShippingStatus(models.TextChoices):
        PREPARING = "preparing", "배송 준비"
        SHIPPED = "shipped", "발송 완료"

    # 결제 승인 / 웹훅에 의한 이동
    PAYMENT_TRANSITIONS = {
        PaymentStatus.WAITING.value: frozenset({PaymentStatus.SUCCESS.value, PaymentStatus.FAILED.value}),
        PaymentStatus.SUCCESS.value: frozenset(),
        PaymentStatus.FAILED.value: frozenset(),
    }
    # 관리자 수동 보정은 어느 상태에서든 가능하지만 waiting으로 되돌릴 수는 없다
    ADMIN_PAYMENT_TARGETS = frozenset({PaymentStatus.SUCCESS.value, PaymentStatus.FAILED.value})

    SHIPPING_TRANSITIONS = {
        ShippingStatus.PREPARING.value: frozenset({ShippingStatus.SHIPPED.value}),
        ShippingStatus.SHIPPED.value: frozenset(),
    }

    order_no = models.CharField(max_length=30, unique=True, default=generate_order_no)
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="orders")
    product_name = models.CharField(max_length=100) # 주문 시점 상품명

    quantity = models.PositiveIntegerField()
    unit_price = models.PositiveIntegerField()
    shipping_fee = models.PositiveIntegerField()
    total_amount = models.PositiveIntegerField()

    customer_name = models.CharField(max_length=40)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=20)
    shipping_address = models.CharField(max_length=255)
    customer_type = models.CharField(max_length=10, choices=CustomerType.choices, default=CustomerType.GUEST)
    order_type = models.CharField(max_length=10, choices=OrderType.choices, default=OrderType.REGULAR)

    payment_status = models.CharField(max_length=10, choices=PaymentStatus.choices, default=PaymentStatus.WAITING)
    toss_payment_key = models.CharField(max_length=200, blank=True, default="")
    paid_at = models.DateTimeField(null=True, blank=True)

    shipping_status = models.CharField(max_length=10, choices=ShippingStatus.choices, default=ShippingStatus.PREPARING)
    tracking_no = models.CharField(max_length=50, blank=True, default="")
    shipped_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created"]
        indexes = [
            models.Index(fields=["payment_status"], name="orders_payment_status_idx"),
            models.Index(fields=["shipping_status"], name="orders_shipping_status_idx"),
        ]

    def __str__(self):
        return self.order_no

    def record_payment_result(self, payment_status: str, payment_key: str = "") -> None:
        """결제 승인 / 웹훅 결과 반영 (waiting에서만)"""
        check_transition(self.PAYMENT_TRANSITIONS, self.payment_status, payment_status)
        self.payment_status = payment_status
        if payment_key:
            self.toss_payment_key = payment_key
        if payment_status == self.PaymentStatus.SUCCESS:
            self.paid_at = timezone.now()

    def override_payment(self, payment_status: str) -> None:
        if payment_status not in self.ADMIN_PAYMENT_TARGETS:
            raise InvalidTransition("결제 상태를 결제 대기로 되돌릴 수 없습니다.")
        self.payment_status = payment_status
        if payment_status == self.PaymentStatus.SUCCESS and self.paid_at is None:
            self.paid_at = timezone.now()

    def ship(self, tracking_no: str) -> None:
        check_transition(self.SHIPPING_TRANSITIONS, self.shipping_status, self.ShippingStatus.SHIPPED.value)
        self.shipping_status = self.ShippingStatus.SHIPPED
        self.tracking_no = tracking_no
        self.shipped_at = timezone.now()
