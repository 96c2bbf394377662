import logging

from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from accounts.guards import IsAdminRole
from common.exceptions import CapabilityRequired
from common.responses import success_response
from common.throttles import StrictWriteThrottleMixin
from dashboard.audit import record_audit
from moderation.filters import evaluate
from siteconfig import capabilities
from siteconfig.capabilities import Capability
from siteconfig.passcodes import PasscodeKind
from siteconfig.views import PasscodeVerifyView
from .models import Review
from .serializers import (
    ReviewAdminSerializer,
    ReviewCreateSerializer,
    ReviewSerializer,
    ReviewStatusSerializer,
)

logger = logging.getLogger(__name__)


class ReviewPasscodeView(PasscodeVerifyView):
    passcode_kind = PasscodeKind.REVIEW
    success_message = "후기 작성 권한이 확인되었습니다."


class ReviewListCreateView(StrictWriteThrottleMixin, APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        reviews = Review.objects.filter(status=Review.Status.APPROVED)
        return success_response("ok", reviews=ReviewSerializer(reviews, many=True).data)

    def post(self, request):
        # 권한 확인은 입력 검증보다 먼저
        capabilities.require(request.session, Capability.REVIEW_ACCESS)

        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        body = serializer.validated_data["review_body"]

        result = evaluate(body)
        # 본문이 조금이라도 가려졌으면 공개하지 않는다
        review_status = Review.Status.HIDDEN_BY_FILTER if result.cleaned != body else Review.Status.PENDING

        with transaction.atomic():
            if not capabilities.consume(request.session, Capability.REVIEW_ACCESS):
                raise CapabilityRequired()

            review = Review.objects.create(
                review_body=result.cleaned,
                author_name=serializer.validated_data.get("author_name") or "익명",
                rating=serializer.validated_data["rating"],
                status=review_status,
                filter_flagged=result.flagged,
                filter_reason=result.reason or "",
            )

        if result.flagged:
            logger.info("Review %s flagged by content filter (%s)", review.pk, result.reason)

        return success_response(
            "후기가 등록되었습니다. 관리자 검토 후 게시됩니다.",
            status_code=status.HTTP_201_CREATED,
            review={"id": review.pk, "status": review.status},
        )


class ReviewAdminListView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        reviews = Review.objects.all()
        status_filter = request.query_params.get("status")
        if status_filter:
            reviews = reviews.filter(status=status_filter)
        return success_response("ok", reviews=ReviewAdminSerializer(reviews, many=True).data)


class ReviewStatusUpdateView(APIView):
    permission_classes = [IsAdminRole]

    def patch(self, request, review_id):
        serializer = ReviewStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            review = get_object_or_404(Review.objects.select_for_update(), id=review_id)
            previous_status = review.status
            review.status = serializer.validated_data["status"]
            review.save(update_fields=["status", "updated"])

            record_audit(
                request, "review.status", "review", review.pk,
                old={"status": previous_status},
                new={"status": review.status},
            )

        return success_response("후기 상태가 업데이트되었습니다.", review=ReviewAdminSerializer(review).data)
