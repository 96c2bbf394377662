from rest_framework import serializers

from .models import Review


class ReviewCreateSerializer(serializers.Serializer):
    review_body = serializers.CharField(min_length=10, max_length=2000, trim_whitespace=False)
    author_name = serializers.CharField(max_length=40, required=False, allow_blank=True)
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False, default=5)

    def validate_review_body(self, value):
        if len(value.strip()) < 10:
            raise serializers.ValidationError("후기는 10자 이상 입력해주세요.")
        return value

    def validate_author_name(self, value):
        return value.strip() or "익명"


class ReviewSerializer(serializers.ModelSerializer):
    """공개 목록용"""

    class Meta:
        model = Review
        fields = ["id", "review_body", "author_name", "rating", "created"]


class ReviewAdminSerializer(serializers.ModelSerializer):
    status_label = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "review_body",
            "author_name",
            "rating",
            "status",
            "status_label",
            "filter_flagged",
            "filter_reason",
            "created",
            "updated",
        ]


class ReviewStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Review.Status.choices)
