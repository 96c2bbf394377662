from rest_framework import serializers

from .models import Application


class ApplicationCreateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Application
        fields = [
            "name",
            "birthdate",
            "email",
            "phone",
            "address",
            "depositor_name",
            "uniform_size",
            "class_plan",
            "class_type_infant",
            "class_type_elementary",
            "class_type_middle_high",
            "class_type_adult",
            "class_type_senior",
            "class_type_rehab",
            "privacy_agreement",
        ]
        extra_kwargs = {
            "privacy_agreement": {"required": True},
        }

    def validate_privacy_agreement(self, value):
        if value is not True:
            raise serializers.ValidationError("개인정보 수집 및 이용에 동의해주세요.")
        return value


class ApplicationSerializer(serializers.ModelSerializer):
    status_label = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = Application
        fields = "__all__"


class ApplicationReceiptSerializer(serializers.ModelSerializer):
    """신청 직후 / 상태 조회 시 신청자에게 돌려주는 최소 정보"""
    status_label = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = Application
        fields = ["id", "name", "status", "status_label", "created"]


class ApplicationStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Application.Status.choices)
    admin_memo = serializers.CharField(required=False, allow_blank=True)


class ApplicationLookupSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=40)
    phone = serializers.CharField(max_length=20)


class AttendeeVerifySerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
