import re

from django.db import models

from common.models import BaseModel
from common.transitions import check_transition


def normalize_phone(phone: str) -> str:
    return re.sub(r"[^0-9]", "", phone or "")


class ApplicationQuerySet(models.QuerySet):

    def active(self):
        # 반려되지 않은 신청 (좌석 계산용)
        return self.exclude(status=Application.Status.REJECTED)


class Application(BaseModel):

    class Status(models.TextChoices):
        WAITING = "waiting", "입금 대기"
        PAYMENT_CONFIRMED = "payment_confirmed", "입금 확인"
        CONFIRMED = "confirmed", "참가 확정"
        REJECTED = "rejected", "반려"

    class UniformSize(models.TextChoices):
        S = "S", "S"
        M = "M", "M"
        L = "L", "L"
        XL = "XL", "XL"
        XXL = "XXL", "XXL"

    class ClassPlan(models.TextChoices):
        PLAN = "plan", "진행 예정"
        NO = "no", "하지 않음"

    # 현재 상태 -> 이동 가능한 상태
    TRANSITIONS = {
        Status.WAITING.value: frozenset({
            Status.PAYMENT_CONFIRMED.value,
            Status.CONFIRMED.value,
            Status.REJECTED.value,
        }),
        Status.PAYMENT_CONFIRMED.value: frozenset({
            Status.CONFIRMED.value,
            Status.REJECTED.value,
        }),
        Status.CONFIRMED.value: frozenset(),
        Status.REJECTED.value: frozenset(),
    }

    name = models.CharField(max_length=40)
    birthdate = models.CharField(max_length=20)
    email = models.EmailField()
    phone = models.CharField(max_length=20)
    address = models.CharField(max_length=255)
    depositor_name = models.CharField(max_length=40)

    # 선택 사항
    uniform_size = models.CharField(max_length=4, choices=UniformSize.choices, blank=True, default="")
    class_plan = models.CharField(max_length=4, choices=ClassPlan.choices, blank=True, default="")
    class_type_infant = models.BooleanField(default=False)
    class_type_elementary = models.BooleanField(default=False)
    class_type_middle_high = models.BooleanField(default=False)
    class_type_adult = models.BooleanField(default=False)
    class_type_senior = models.BooleanField(default=False)
    class_type_rehab = models.BooleanField(default=False)

    privacy_agreement = models.BooleanField(default=False)
    admin_memo = models.TextField(blank=True, default="")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.WAITING)

    objects = ApplicationQuerySet.as_manager()

    class Meta:
        db_table = "applications"
        ordering = ["-created"]
        indexes = [
            models.Index(fields=["status"], name="applications_status_idx"),
            models.Index(fields=["email"], name="applications_email_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.get_status_display()})"

    def transition_to(self, status: str) -> None:
        check_transition(self.TRANSITIONS, self.status, status)
        self.status = status
