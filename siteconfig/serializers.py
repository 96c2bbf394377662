from rest_framework import serializers

from .models import PASSCODE_FIELDS, SiteSettings
from .passcodes import is_valid_format


class SiteSettingsSerializer(serializers.ModelSerializer):
    # 평문 passcode는 쓰기 전용, 응답에는 해시도 내보내지 않는다
    review_passcode = serializers.CharField(write_only=True, required=False)
    bulk_purchase_passcode = serializers.CharField(write_only=True, required=False)
    member_discount_code = serializers.CharField(write_only=True, required=False)

    class Meta:
        model = SiteSettings
        fields = [
            "review_passcode",
            "bulk_purchase_passcode",
            "member_discount_code",
            "seminar_date",
            "seminar_location",
            "seminar_contact",
            "seminar_capacity",
            "seminar_deadline",
            "seminar_price",
            "product_regular_price",
            "product_member_price",
            "shipping_fee_per_unit",
            "sms_enabled",
            "updated",
        ]
        read_only_fields = ["updated"]

    def validate(self, attrs):
        errors = {}
        for field in PASSCODE_FIELDS:
            if field in attrs and not is_valid_format(attrs[field]):
                errors[field] = "숫자 4자리로 입력해주세요."
        if errors:
            raise serializers.ValidationError(errors)
        return attrs

    def update(self, instance, validated_data):
        for field in PASSCODE_FIELDS:
            raw = validated_data.pop(field, None)
            if raw is not None:
                instance.set_passcode(field, raw)
        return super().update(instance, validated_data)


class PublicSiteSettingsSerializer(serializers.ModelSerializer):
    """비로그인 방문자에게 보여줄 세미나/가격 정보"""

    class Meta:
        model = SiteSettings
        fields = [
            "seminar_date",
            "seminar_location",
            "seminar_contact",
            "seminar_capacity",
            "seminar_deadline",
            "seminar_price",
            "product_regular_price",
            "product_member_price",
            "shipping_fee_per_unit",
        ]
