from django.contrib.auth.hashers import make_password
from django.db import models

from common.models import BaseModel

# 최초 부팅 시 사용되는 기본 passcode (DB에는 해시만 저장)
DEFAULT_PASSCODES = {
    "review_passcode": "1234",
    "bulk_purchase_passcode": "5678",
    "member_discount_code": "2024",
}

PASSCODE_FIELDS = tuple(DEFAULT_PASSCODES)


class SiteSettings(BaseModel):
    SINGLETON_PK = 1

    id = models.PositiveSmallIntegerField(primary_key=True, editable=False)

    # passcode (해시)
    review_passcode = models.CharField(max_length=128)
    bulk_purchase_passcode = models.CharField(max_length=128)
    member_discount_code = models.CharField(max_length=128)

    # 세미나 정보
    seminar_date = models.CharField(max_length=100, default='2025-11-08(토) 14:00~18:00')
    seminar_location = models.CharField(max_length=200, default='대구시 북구 침산남로 172, 3층 운동하는코끼리')
    seminar_contact = models.CharField(max_length=40, default='0507-1403-3006')
    seminar_capacity = models.PositiveIntegerField(default=20)
    seminar_deadline = models.CharField(max_length=20, default='2025-10-31')
    seminar_price = models.PositiveIntegerField(default=300000)

    # 가격 (원)
    product_regular_price = models.PositiveIntegerField(default=19500)
    product_member_price = models.PositiveIntegerField(default=17500)
    shipping_fee_per_unit = models.PositiveIntegerField(default=320)

    sms_enabled = models.BooleanField(default=True)

    class Meta:
        db_table = "site_settings"
        verbose_name = "사이트 설정"
        verbose_name_plural = "사이트 설정"

    def __str__(self):
        return "사이트 설정"

    def save(self, *args, **kwargs):
        # 항상 한 행만 유지
        self.pk = self.SINGLETON_PK
        if self._state.adding and type(self).objects.filter(pk=self.SINGLETON_PK).exists():
            raise ValueError("사이트 설정은 하나만 존재할 수 있습니다.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("사이트 설정은 삭제할 수 없습니다.")

    def set_passcode(self, field: str, raw_passcode: str) -> None:
        if field not in PASSCODE_FIELDS:
            raise ValueError(f"Unknown passcode field: {field}")
        setattr(self, field, make_password(raw_passcode))

    @classmethod
    def default_values(cls) -> dict:
        return {field: make_password(raw) for field, raw in DEFAULT_PASSCODES.items()}
